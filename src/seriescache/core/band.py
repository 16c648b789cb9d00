"""Outlier band math.

The band is a fraction of the spread currently observed in a series:
a candidate is accepted iff its projection lies in

    [min - (max - min) * threshold, max + (max - min) * threshold]

so each series calibrates to its own scale. While no spread exists (empty
series, or a single distinct projected value) every candidate is accepted.
Projections only need subtraction, multiplication by a float and ordering,
so numbers, datetimes (timedelta spread) and decimals all work.
"""

from typing import Any, Callable, Iterable, Optional
from seriescache.schemas.param import identity


def min_max(values: Iterable[Any], compare_by: Callable[[Any], Any] = identity) -> tuple:
    """Values with the smallest and largest projection, ``(None, None)`` if empty."""
    values = tuple(values)
    if not values:
        return None, None
    return min(values, key=compare_by), max(values, key=compare_by)


def threshold_check(
    bounds: tuple,
    threshold: Optional[float],
    compare_by: Callable[[Any], Any] = identity,
) -> Callable[[Any], bool]:
    """Build the band predicate for the current extremes of a series.

    Parameters
    ----------
    bounds : tuple
        ``(min, max)`` raw values as returned by ``min_max``.
    threshold : float or None
        Fraction of the spread tolerated beyond each extreme. None disables the band.
    compare_by : callable
        Projection applied to the bounds and to candidates.

    Returns
    -------
    callable
        ``value -> bool``.

    Examples
    --------
    >>> within = threshold_check((1, 3), 0.5)
    >>> within(0), within(4), within(5)
    (True, True, False)
    """
    low, high = bounds
    if threshold is None or low is None or high is None:
        return _accept

    low, high = compare_by(low), compare_by(high)
    spread = high - low
    if not spread:
        return _accept

    lower = low - spread * threshold
    upper = high + spread * threshold

    def within(value: Any) -> bool:
        return lower <= compare_by(value) <= upper

    return within


def _accept(_value: Any) -> bool:
    return True
