"""EngineDefaults: expert defaults for every declared series.

This module defines the defaults a series falls back to when neither its own
options nor the global options set a value. It replaces any process-wide
setting: defaults are passed once, at schema construction time.

It also holds the default behaviours (identity projection, stack order,
``<`` ranking, accept-all validation, no correction).
"""

from typing import Any, Literal, Optional
from pydantic import Field, field_validator
from seriescache.schemas.base import SeriesCacheBaseModel


# =============================================================================
# Default behaviours
# =============================================================================

def identity(value: Any) -> Any:
    """Default ``compare_by``: the value is its own comparable."""
    return value


def stack_order(_a: Any, _b: Any) -> bool:
    """Default sorter. Always true, so the newest value stays on top."""
    return True


def less_than(a: Any, b: Any) -> bool:
    """Default ranking for delta."""
    return a < b


def accept_all(_series: str, _value: Any) -> bool:
    """Default validator."""
    return True


def never_correct(_container: Any, _series: str, _value: Any) -> None:
    """Default corrector. Never rescues a rejected value."""
    return None


# =============================================================================
# Nested Configuration Models
# =============================================================================

class LoggingConfig(SeriesCacheBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper().strip()
        return v


# =============================================================================
# Main EngineDefaults
# =============================================================================

class EngineDefaults(SeriesCacheBaseModel):
    """Defaults applied to every series that does not override them.

    Usage
    -----
    This config is NOT read by the admission engine. It is the base layer
    in schema resolution:

        schema = resolve_schema({"price": {"limit": 10}}, defaults=EngineDefaults(error_limit=1))

    Runtime code only sees the compiled ``Policy`` of each series.
    """

    limit: int = Field(5, ge=0, description="Admitted values retained per series")
    error_limit: int = Field(5, ge=0, description="Rejected values retained per series")
    threshold: Optional[float] = Field(None, ge=0, description="Outlier band as a fraction of the spread")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
