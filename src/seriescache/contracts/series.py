"""Series contracts.

Enforces the guarantees every admission must leave behind: a series never
exceeds its limit, it stays ordered by its sorter, and the error log never
holds more entries for a series than its error limit.
"""

from typing import Any, Callable, Sequence
from seriescache.contracts.base import require


def assert_series_bounded(name: str, values: Sequence, limit: int) -> None:
    """Series holds at most ``limit`` values."""
    require(
        len(values) <= limit,
        f"Series contract violated: '{name}' holds {len(values)} values, limit is {limit}"
    )


def assert_series_ordered(
    name: str,
    values: Sequence,
    sorter: Callable[[Any, Any], bool],
    compare_by: Callable[[Any], Any],
) -> None:
    """No value is strictly ordered before the value preceding it.

    A pair where the sorter holds both ways (or neither way) is a tie and
    is always accepted.
    """
    keys = [compare_by(v) for v in values]
    for position, (before, after) in enumerate(zip(keys, keys[1:])):
        require(
            not (sorter(after, before) and not sorter(before, after)),
            f"Series contract violated: '{name}' out of order at position {position + 1}"
        )


def assert_errors_bounded(name: str, rejected: Sequence, error_limit: int) -> None:
    """Error log holds at most ``error_limit`` entries for the series."""
    require(
        len(rejected) <= error_limit,
        f"Error log contract violated: '{name}' holds {len(rejected)} rejected values, "
        f"limit is {error_limit}"
    )
