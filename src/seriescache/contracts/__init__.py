"""Cache contracts: fail-fast enforcement of series invariants.

Contracts fail immediately and loudly when a caller misuses the schema or
when an operation does not leave the invariants it promises.

Key principle:
- Pydantic validates series options
- Contracts validate schema usage and engine correctness
- The error log records bad data
"""

from seriescache.contracts.failure import ContractViolation, MergeShapeMismatch, UnknownSeries
from seriescache.contracts.base import require
from seriescache.contracts.series import (
    assert_errors_bounded,
    assert_series_bounded,
    assert_series_ordered,
)

__all__ = [
    "ContractViolation",
    "MergeShapeMismatch",
    "UnknownSeries",
    "require",
    "assert_errors_bounded",
    "assert_series_bounded",
    "assert_series_ordered",
]
