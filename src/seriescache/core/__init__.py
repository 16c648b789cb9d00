"""Core series cache engine.

- series: Series and ErrorLog value types
- container: immutable multi-series Container and its access surface
- band: outlier band math
- engine: admission (put)
- operations: delta, slice_heads, average, purge, equal, merge...
"""

from seriescache.core.series import ErrorLog, Series
from seriescache.core.container import Container
from seriescache.core.band import min_max, threshold_check
from seriescache.core.engine import Admission, Corrected, Outcome, assess, put
from seriescache.core.operations import (
    average,
    clear,
    delta,
    equal,
    flat_map,
    is_empty,
    map_series,
    merge,
    purge,
    slice_heads,
    to_frame,
)

__all__ = [
    "ErrorLog",
    "Series",
    "Container",
    "min_max",
    "threshold_check",
    "Admission",
    "Corrected",
    "Outcome",
    "assess",
    "put",
    "average",
    "clear",
    "delta",
    "equal",
    "flat_map",
    "is_empty",
    "map_series",
    "merge",
    "purge",
    "slice_heads",
    "to_frame",
]
