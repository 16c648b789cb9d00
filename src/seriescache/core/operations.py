"""Derived operations over whole containers.

All functions are pure: they read one or two containers and return plain
values or a new Container. Work is independent per series.

- delta: (min, max) per series under the series ranking
- slice_heads: head value per non-empty series
- average: reducer applied to every series
- purge: re-validate admitted values (expiry of time-dependent validity)
- equal: compare the data of record, ignoring errors and meta
- merge: pairwise combination of two containers of the same shape
- map_series / flat_map / to_frame: collection-style views
"""

import logging
from typing import Any, Callable, Optional

import numpy as np
import pandas as pd

from seriescache.contracts import MergeShapeMismatch, require
from seriescache.core.container import Container
from seriescache.schemas.user import as_validator

__all__ = [
    'delta',
    'slice_heads',
    'average',
    'purge',
    'equal',
    'merge',
    'is_empty',
    'clear',
    'map_series',
    'flat_map',
    'to_frame',
]

logger = logging.getLogger(__name__)


def delta(container: Container, comparator: Optional[Callable[[Any, Any], bool]] = None) -> dict:
    """Extremes of every series.

    Values are ranked by ``comparator(compare_by(a), compare_by(b))``; with
    the default ``<`` this is (smallest, largest).

    Parameters
    ----------
    container : Container
    comparator : callable, optional
        Overrides the ranking of every series for this call.

    Returns
    -------
    dict
        ``{name: (min, max)}`` in declaration order; ``(None, None)`` for
        empty series.

    Examples
    --------
    >>> delta(Container.from_values(schema, {"integers": [1, 2, 5, 4, 3]}))
    {'integers': (1, 5)}
    """
    result = {}
    for name, values in container:
        if not values:
            result[name] = (None, None)
            continue
        rank = container.setting(name, "comparator", comparator)
        compare_by = container.setting(name, "compare_by")

        low = high = values[0]
        for value in values[1:]:
            key = compare_by(value)
            if rank(key, compare_by(low)):
                low = value
            if rank(compare_by(high), key):
                high = value
        result[name] = (low, high)
    return result


def slice_heads(container: Container) -> dict:
    """Head value of every non-empty series; empty series are omitted."""
    return {name: values[0] for name, values in container if values}


def _mean(values: tuple, compare_by: Callable[[Any], Any]) -> Optional[float]:
    if not values:
        return None
    return float(np.mean([compare_by(v) for v in values]))


def average(container: Container, averager: Optional[Callable[[tuple], Any]] = None) -> dict:
    """Apply ``averager`` to the full value sequence of every series.

    Without an averager, the arithmetic mean of the ``compare_by``
    projections is returned (None for empty series).
    """
    if averager is not None:
        return {name: averager(values) for name, values in container}
    return {
        name: _mean(values, container.setting(name, "compare_by"))
        for name, values in container
    }


def purge(container: Container, validator: Optional[Callable] = None) -> Container:
    """Re-check every admitted value and drop those no longer valid.

    Parameters
    ----------
    container : Container
    validator : callable, optional
        ``(series, value) -> bool`` or ``(value) -> bool``. Defaults to each
        series' own effective validator.

    Returns
    -------
    Container
        New container; errors and meta are unchanged. Purged values are
        not recorded as errors.
    """
    override = as_validator(validator) if validator is not None else None
    purged = container
    for name, values in container:
        check = container.setting(name, "validator", override)
        kept = tuple(v for v in values if check(name, v))
        if len(kept) != len(values):
            logger.debug("Purged %d value(s) from series '%s'", len(values) - len(kept), name)
            purged = purged.with_values(name, kept)
    return purged


def equal(left: Container, right: Container) -> bool:
    """True iff both containers hold the same data of record.

    Same declared series, and for every series the same values in the same
    order, compared with ``==`` (so element types with custom equality,
    e.g. timezone-aware datetimes, are honored). Errors and meta are ignored.
    """
    if set(left.names) != set(right.names):
        return False
    for name, values in left:
        other = right.values(name)
        if len(values) != len(other):
            return False
        if not all(a == b for a, b in zip(values, other)):
            return False
    return True


def merge(
    left: Container,
    right: Container,
    resolver: Callable[[str, Any, Any], Any],
) -> Container:
    """Combine two containers pairwise.

    For every series, ``resolver(name, l, r)`` is applied to values at the
    same position. When one side of a series is empty the other side is
    kept (the resolver is not called), so merging with
    ``left.empty_like()`` leaves the data unchanged. Values taken from
    ``right`` are cut to ``left``'s effective limit.

    Returns
    -------
    Container
        New container with ``left``'s errors and meta.

    Raises
    ------
    MergeShapeMismatch
        If the declared series differ, or a series is non-empty on both
        sides with different lengths.
    """
    require(
        set(left.names) == set(right.names),
        f"Merge contract violated: series {sorted(left.names)} vs {sorted(right.names)}",
        MergeShapeMismatch,
    )
    merged = left
    for name, values in left:
        other = right.values(name)
        if not other:
            continue
        if not values:
            merged = merged.with_values(name, other[:left.setting(name, "limit")])
            continue
        require(
            len(values) == len(other),
            f"Merge contract violated: series '{name}' has {len(values)} vs {len(other)} values",
            MergeShapeMismatch,
        )
        merged = merged.with_values(name, [resolver(name, a, b) for a, b in zip(values, other)])
    return merged


def is_empty(container: Container) -> bool:
    """True iff every series holds zero values."""
    return container.is_empty()


def clear(container: Container) -> Container:
    """Drop all values; policies, errors and meta are preserved."""
    return container.clear()


def map_series(container: Container, fun: Callable[[str, tuple], Any]) -> Container:
    """New container with ``fun(name, values)`` as the values of every series.

    Raises
    ------
    ContractViolation
        If a result exceeds the limit of its series.
    """
    mapped = container
    for name, values in container:
        mapped = mapped.with_values(name, fun(name, values))
    return mapped


def flat_map(container: Container) -> list[tuple[str, Any]]:
    """All ``(name, value)`` pairs, in declaration then series order."""
    return [(name, value) for name, values in container for value in values]


def to_frame(container: Container) -> pd.DataFrame:
    """Tabular view with columns ``series``, ``position`` and ``value``.

    Position 0 is the head of its series.
    """
    rows = [
        {"series": name, "position": position, "value": value}
        for name, values in container
        for position, value in enumerate(values)
    ]
    return pd.DataFrame(rows, columns=["series", "position", "value"])
