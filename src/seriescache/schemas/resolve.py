"""Schema resolution and merging logic.

This module provides the single entrypoint for schema resolution:
resolve_schema(). It merges EngineDefaults, global options, and per-series
options in the correct precedence order and returns a frozen Schema.

Precedence (highest to lowest):
1. Per-series options
2. Global options (applied to every series)
3. EngineDefaults
"""

import logging
from typing import Iterable, Mapping, Union
from seriescache.schemas.internal import Policy, Schema
from seriescache.schemas.param import (
    EngineDefaults,
    accept_all,
    identity,
    less_than,
    never_correct,
    stack_order,
)
from seriescache.schemas.user import SeriesOptions

logger = logging.getLogger(__name__)

# Names consulted in container metadata during policy lookup
RESERVED_NAMES = frozenset(Policy.model_fields) | {"state"}

OptionsLike = Union[None, dict, SeriesOptions]


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Deep merge multiple dictionaries.

    Later dictionaries override earlier ones. Nested dictionaries are
    merged recursively; other values are replaced.

    Parameters
    ----------
    base : dict
        Base dictionary (lowest priority)
    *overrides : dict
        Override dictionaries (higher priority, left to right)

    Returns
    -------
    dict
        Merged dictionary

    Examples
    --------
    >>> base = {"a": 1, "b": {"c": 2, "d": 3}}
    >>> override = {"b": {"d": 4, "e": 5}, "f": 6}
    >>> deep_merge(base, override)
    {'a': 1, 'b': {'c': 2, 'd': 4, 'e': 5}, 'f': 6}
    """
    result = base.copy()

    for override in overrides:
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            else:
                result[key] = value

    return result


def _as_options(options: OptionsLike) -> SeriesOptions:
    if options is None or (isinstance(options, dict) and not options):
        return SeriesOptions()
    if isinstance(options, SeriesOptions):
        return options
    return SeriesOptions.model_validate(options)


def _as_defaults(defaults: Union[None, dict, EngineDefaults]) -> EngineDefaults:
    if defaults is None:
        return EngineDefaults()
    if isinstance(defaults, EngineDefaults):
        return defaults
    return EngineDefaults.model_validate(defaults)


def resolve_policy(
    options: OptionsLike = None,
    defaults: Union[None, dict, EngineDefaults] = None,
    globals_: OptionsLike = None,
) -> Policy:
    """Compile the policy of a single series.

    Parameters
    ----------
    options : dict or SeriesOptions, optional
        Options of this series.
    defaults : dict or EngineDefaults, optional
        Engine-wide defaults. ``EngineDefaults()`` if omitted.
    globals_ : dict or SeriesOptions, optional
        Options shared by every series.

    Returns
    -------
    Policy
        Frozen, complete policy.

    Raises
    ------
    ValidationError
        If any option fails Pydantic validation
    """
    engine = _as_defaults(defaults)
    base = {
        "limit": engine.limit,
        "error_limit": engine.error_limit,
        "threshold": engine.threshold,
        "compare_by": identity,
        "sorter": stack_order,
        "comparator": less_than,
        "validator": accept_all,
        "corrector": never_correct,
    }
    merged = deep_merge(
        base,
        _as_options(globals_).to_policy_overrides(),
        _as_options(options).to_policy_overrides(),
    )
    return Policy.model_validate(merged)


def resolve_schema(
    series: Union[Mapping[str, OptionsLike], Iterable[tuple[str, OptionsLike]]],
    defaults: Union[None, dict, EngineDefaults] = None,
    globals_: OptionsLike = None,
) -> Schema:
    """Resolve the fixed series declaration of a container.

    This is the SINGLE ENTRYPOINT for schema construction. The result is
    immutable and is shared by every container built from it.

    Parameters
    ----------
    series : mapping or iterable of (name, options) pairs
        Declared series, in iteration order. Options may be a dict, a
        ``SeriesOptions`` or None for all-default series.
    defaults : dict or EngineDefaults, optional
        Engine-wide defaults.
    globals_ : dict or SeriesOptions, optional
        Options applied to every series below their own options.

    Returns
    -------
    Schema
        Frozen declaration of ``(name, Policy)`` pairs.

    Raises
    ------
    ValueError
        If a name is declared twice or collides with a reserved
        metadata key (``state`` or a policy field name).
    ValidationError
        If any option fails Pydantic validation

    Examples
    --------
    >>> schema = resolve_schema(
    ...     {"tomorrow": {"limit": 5, "errors": 1}, "week": {"limit": 2, "order": lambda a, b: a <= b}},
    ...     globals_={"validate": lambda value: value > 0},
    ... )
    >>> schema.names
    ('tomorrow', 'week')
    >>> schema.policy("week").limit
    2
    """
    pairs = list(series.items()) if isinstance(series, Mapping) else list(series)
    engine = _as_defaults(defaults)
    shared = _as_options(globals_)

    compiled = []
    seen = set()
    for name, options in pairs:
        if name in seen:
            raise ValueError(f"Series '{name}' is declared more than once")
        if name in RESERVED_NAMES:
            raise ValueError(f"Series name '{name}' is reserved for metadata overrides")
        seen.add(name)
        compiled.append((name, resolve_policy(options, engine, shared)))

    schema = Schema(series=tuple(compiled))
    logger.debug("Resolved schema with series: %s", ", ".join(schema.names))
    return schema
