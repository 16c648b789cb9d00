"""SeriesOptions: forgiving, user-facing per-series options.

This schema accepts series options in the naming families that hosts tend
to use (``order`` or ``sorter``, ``validate`` or ``validator``, ``errors``
or ``error_limit``...) and in several callable shapes:

- validators may be ``f(value)``, ``f(series, value)`` or any object with
  a ``valid(series, value)`` method
- correctors may be ``f(container, series, value)`` or any object with a
  ``correct(container, series, value)`` method

Everything is normalized here, at declaration time, so that the admission
engine only ever sees one calling convention.
"""

import inspect
from typing import Any, Callable, Optional
from pydantic import AliasChoices, Field, field_validator
from seriescache.schemas.base import SeriesCacheBaseModel


def takes_series(fun: Callable) -> bool:
    """True when ``fun`` is called as ``(series, value)`` rather than ``(value)``.

    Callables without a readable signature (builtins such as ``bool``) and
    callables that cannot take two positional arguments get the value only.
    """
    try:
        params = inspect.signature(fun).parameters.values()
    except (TypeError, ValueError):
        return False
    if any(p.kind is p.VAR_POSITIONAL for p in params):
        return True
    positional = [p for p in params if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)]
    required = sum(1 for p in positional if p.default is p.empty)
    if required:
        return required >= 2
    return len(positional) >= 2


def as_validator(candidate: Any) -> Callable[[str, Any], bool]:
    """Normalize a validator to the ``(series, value) -> bool`` convention."""
    valid = getattr(candidate, "valid", None)
    if callable(valid):
        return valid
    if not callable(candidate):
        raise ValueError(f"validator must be callable or expose valid(), got {candidate!r}")
    if not takes_series(candidate):
        def validate_value(_series, value, _fun=candidate):
            return _fun(value)
        return validate_value
    return candidate


def as_corrector(candidate: Any) -> Callable[[Any, str, Any], Any]:
    """Normalize a corrector to the ``(container, series, value)`` convention."""
    correct = getattr(candidate, "correct", None)
    if callable(correct):
        return correct
    if not callable(candidate):
        raise ValueError(f"corrector must be callable or expose correct(), got {candidate!r}")
    return candidate


class SeriesOptions(SeriesCacheBaseModel):
    """User-facing options for one series (or for all series, as globals).

    Every field is optional: unset fields fall through to the global options
    and then to ``EngineDefaults`` during resolution.

    Usage
    -----
        options = SeriesOptions(limit=3, errors=1, validate=lambda v: v > 0)
        schema = resolve_schema({"latency": options})
    """

    limit: Optional[int] = Field(None, ge=0)
    error_limit: Optional[int] = Field(
        None, ge=0, validation_alias=AliasChoices("error_limit", "errors")
    )
    threshold: Optional[float] = Field(None, ge=0)
    compare_by: Optional[Callable[[Any], Any]] = None
    sorter: Optional[Callable[[Any, Any], bool]] = Field(
        None, validation_alias=AliasChoices("sorter", "order")
    )
    comparator: Optional[Callable[[Any, Any], bool]] = Field(
        None, validation_alias=AliasChoices("comparator", "rank")
    )
    validator: Optional[Callable[[str, Any], bool]] = Field(
        None, validation_alias=AliasChoices("validator", "validate")
    )
    corrector: Optional[Callable[[Any, str, Any], Any]] = Field(
        None, validation_alias=AliasChoices("corrector", "correct")
    )

    @field_validator("validator", mode="before")
    @classmethod
    def normalize_validator(cls, v):
        """Accept one- or two-argument functions and validator objects."""
        if v is not None:
            return as_validator(v)
        return v

    @field_validator("corrector", mode="before")
    @classmethod
    def normalize_corrector(cls, v):
        """Accept functions and corrector objects."""
        if v is not None:
            return as_corrector(v)
        return v

    def to_policy_overrides(self) -> dict:
        """Return only the options that were actually set.

        Returns
        -------
        dict
            Flat dictionary keyed by ``Policy`` field names
        """
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        }
