"""Centralized failure types for contract violations.

Contracts fail fast, loud, and once. Schema mistakes (unknown series, merge
shape mismatches) and engine bugs (a series over its limit) all raise a
subclass of the same exception type, so callers can handle programmer
errors uniformly. Rejected values are NOT failures: they are recorded in
the container's error log.
"""

from typing import Iterable


class ContractViolation(RuntimeError):
    """Raised when a cache contract is violated.

    This indicates a programmer error, not bad data. Bad data is rejected
    and recorded; it never raises.

    Key distinction:
    - ValueError / ValidationError: bad series options (handled by Pydantic)
    - ContractViolation: schema misuse or engine bug (programmer error)
    - Rejected value: routine outcome, recorded in the error log
    """
    pass


class UnknownSeries(ContractViolation):
    """Raised when a series name was not declared in the schema."""

    def __init__(self, series, known: Iterable[str] = ()):
        self.series = series
        self.known = tuple(known)
        super().__init__(
            f"Invalid access attempt. Series {series!r} is not declared "
            f"(declared: {', '.join(self.known) or 'none'})."
        )


class MergeShapeMismatch(ContractViolation):
    """Raised when two containers cannot be merged series by series."""
    pass
