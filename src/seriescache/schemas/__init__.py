"""Pydantic configuration schemas for seriescache.

This module provides strictly typed configuration models for the series
cache. All validation, coercion, and normalization of series options
happens at declaration time via Pydantic.

Exports
-------
resolve_schema : function
    Single entrypoint for schema resolution
resolve_policy : function
    Compile the policy of one series
Schema : class
    Fixed, ordered declaration of (name, Policy) pairs
Policy : class
    Compiled, frozen per-series policy
EngineDefaults : class
    Engine-wide defaults (complete)
SeriesOptions : class
    User-facing per-series options (forgiving, minimal)
"""

from seriescache.schemas.resolve import resolve_schema, resolve_policy
from seriescache.schemas.internal import Policy, Schema
from seriescache.schemas.param import EngineDefaults, LoggingConfig
from seriescache.schemas.user import SeriesOptions

__all__ = [
    'resolve_schema',
    'resolve_policy',
    'Policy',
    'Schema',
    'EngineDefaults',
    'LoggingConfig',
    'SeriesOptions',
]
