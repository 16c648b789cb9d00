"""Immutable multi-series container.

A Container owns one value sequence per declared series, a shared ErrorLog
and an opaque metadata block. Every change produces a new Container; the
receiver is never modified, so a container can be handed to other code and
compared against later snapshots safely.

Policy lookup
-------------
Any policy field used at admission or purge time is resolved in this order
(first hit wins):

1. explicit per-call override
2. ``meta[series][field]``
3. ``meta[field]`` (global override)
4. ``meta["state"][series][field]``
5. ``meta["state"][field]``
6. the compiled ``Policy`` field
"""

from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from seriescache.contracts import UnknownSeries, assert_series_bounded
from seriescache.core.series import ErrorLog, Series
from seriescache.schemas import Policy, Schema
from seriescache.schemas.user import as_corrector, as_validator

__all__ = ['Container']

# Fields whose meta overrides are normalized like series options
_NORMALIZERS = {
    "validator": as_validator,
    "corrector": as_corrector,
}


class Container:
    """Fixed set of named, validated, bounded series.

    Parameters
    ----------
    schema : Schema
        Declared series and their policies. Fixed for the container's lifetime.
    meta : mapping, optional
        Side-state not subject to validation. May carry per-series or global
        policy overrides (see module docstring).

    Examples
    --------
    >>> schema = resolve_schema({"latency": {"limit": 3}})
    >>> c = Container(schema).write("latency", 12).write("latency", 15)
    >>> c.read("latency")
    15
    >>> c.values("latency")
    (15, 12)
    """

    __slots__ = ("_schema", "_values", "_errors", "_meta")

    def __init__(self, schema: Schema, meta: Optional[Mapping] = None):
        self._schema = schema
        self._values = {name: () for name in schema.names}
        self._errors = ErrorLog()
        self._meta = dict(meta or {})

    @classmethod
    def from_values(
        cls,
        schema: Schema,
        values: Mapping[str, Iterable[Any]],
        meta: Optional[Mapping] = None,
    ) -> "Container":
        """Seed a container with already-admitted values, bypassing admission.

        Values are taken as given (head first). Series not mentioned start
        empty.

        Raises
        ------
        UnknownSeries
            If ``values`` names an undeclared series.
        ContractViolation
            If a series is given more values than its limit.
        """
        container = cls(schema, meta)
        for name, series_values in values.items():
            container = container.with_values(name, series_values)
        return container

    def _derive(
        self,
        *,
        values: Optional[dict] = None,
        errors: Optional[ErrorLog] = None,
        meta: Optional[dict] = None,
    ) -> "Container":
        derived = object.__new__(type(self))
        derived._schema = self._schema
        derived._values = self._values if values is None else values
        derived._errors = self._errors if errors is None else errors
        derived._meta = self._meta if meta is None else meta
        return derived

    # =========================================================================
    # Read side
    # =========================================================================

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def names(self) -> tuple[str, ...]:
        return self._schema.names

    @property
    def errors(self) -> ErrorLog:
        return self._errors

    @property
    def meta(self) -> Mapping:
        return MappingProxyType(self._meta)

    @property
    def series(self) -> Mapping[str, Series]:
        """Read-only mapping of name to ``Series``, in declaration order."""
        return MappingProxyType({
            name: Series(policy, self._values[name])
            for name, policy in self._schema.series
        })

    def policy(self, name: str) -> Policy:
        return self._schema.policy(name)

    def values(self, name: str) -> tuple:
        """Admitted values of ``name``, head first.

        Raises
        ------
        UnknownSeries
            If ``name`` was not declared.
        """
        try:
            return self._values[name]
        except KeyError:
            raise UnknownSeries(name, self.names) from None

    def setting(self, name: str, field: str, override: Any = None) -> Any:
        """Effective value of a policy field for ``name``.

        See the module docstring for the resolution order. None, whether
        passed as override or stored in meta, means "not set" and falls
        through to the next scope. Validator and corrector overrides accept
        the same shapes as ``SeriesOptions``.

        Raises
        ------
        UnknownSeries
            If ``name`` was not declared.
        KeyError
            If ``field`` is not a policy field.
        """
        policy = self.policy(name)
        if field not in Policy.model_fields:
            raise KeyError(f"Unknown policy field '{field}'")
        normalize = _NORMALIZERS.get(field)
        if override is not None:
            return normalize(override) if normalize else override

        state = self._meta.get("state")
        scopes = (
            self._meta.get(name),
            self._meta,
            state.get(name) if isinstance(state, Mapping) else None,
            state,
        )
        for scope in scopes:
            if isinstance(scope, Mapping) and scope.get(field) is not None:
                value = scope[field]
                return normalize(value) if normalize else value
        return getattr(policy, field)

    def capacity(self, name: str, field: str = "limit", override: Optional[int] = None) -> int:
        """Effective ``limit`` or ``error_limit`` of ``name``.

        Unlike ``setting``, a per-call override can only lower the bound, so
        a single call never stores more than the container keeps afterwards.
        """
        limit = self.setting(name, field)
        return limit if override is None else min(override, limit)

    def read(self, name: str) -> Optional[Any]:
        """Head value of ``name``, or None when the series is empty."""
        values = self.values(name)
        return values[0] if values else None

    def is_empty(self) -> bool:
        """True iff no series holds a value. Errors and meta are not considered."""
        return not any(self._values.values())

    # =========================================================================
    # Write side (all return a new Container)
    # =========================================================================

    def write(self, name: str, value: Any, **overrides: Any) -> "Container":
        """Admit ``value`` into ``name``. Same as ``engine.put``."""
        from seriescache.core.engine import put

        return put(self, name, value, **overrides)

    def remove_head(self, name: str) -> tuple[Optional[Any], "Container"]:
        """Remove the head of ``name``.

        Returns
        -------
        tuple
            ``(head, container')``; ``(None, self)`` when the series is empty.

        Raises
        ------
        UnknownSeries
            If ``name`` was not declared.
        """
        values = self.values(name)
        if not values:
            return None, self
        return values[0], self.with_values(name, values[1:])

    def with_values(self, name: str, values: Iterable[Any], limit: Optional[int] = None) -> "Container":
        """Replace the values of ``name`` as given, bypassing admission.

        The bound checked is the effective limit of the series (meta
        overrides included). A ``limit`` argument can only lower it.

        Raises
        ------
        UnknownSeries
            If ``name`` was not declared.
        ContractViolation
            If more values than the limit are given.
        """
        limit = self.capacity(name, "limit", limit)
        values = tuple(values)
        assert_series_bounded(name, values, limit)
        updated = dict(self._values)
        updated[name] = values
        return self._derive(values=updated)

    def with_errors(self, errors: ErrorLog) -> "Container":
        return self._derive(errors=errors)

    def with_meta(self, **updates: Any) -> "Container":
        """New container whose meta is updated with ``updates``.

        A series holding more values than its new effective limit keeps
        only its head-most values, and its rejections are cut to the new
        effective error limit, newest kept.
        """
        meta = dict(self._meta)
        meta.update(updates)
        return self._derive(meta=meta)._fit_limits()

    def replace_meta(self, meta: Optional[Mapping]) -> "Container":
        """New container with ``meta`` as its whole metadata block.

        Series are truncated to their new effective limits, as in ``with_meta``.
        """
        return self._derive(meta=dict(meta or {}))._fit_limits()

    def _fit_limits(self) -> "Container":
        fitted = dict(self._values)
        errors = self._errors
        for name, values in self._values.items():
            limit = self.setting(name, "limit")
            if len(values) > limit:
                fitted[name] = values[:limit]
            errors = errors.fit(name, self.setting(name, "error_limit"))
        if errors is self._errors and all(
            fitted[name] is values for name, values in self._values.items()
        ):
            return self
        return self._derive(values=fitted, errors=errors)

    def clear(self) -> "Container":
        """Drop every value. Policies, errors and meta are kept."""
        return self._derive(values={name: () for name in self.names})

    def empty_like(self) -> "Container":
        """Same schema and meta, no values and no errors."""
        return type(self)(self._schema, self._meta)

    # =========================================================================
    # Collection protocol
    # =========================================================================

    def __iter__(self) -> Iterator[tuple[str, tuple]]:
        """Yield ``(name, values)`` pairs in declaration order."""
        for name in self.names:
            yield name, self._values[name]

    def __len__(self) -> int:
        return len(self._schema)

    def __contains__(self, name: object) -> bool:
        return name in self._schema

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Container):
            return NotImplemented
        return (
            self._schema == other._schema
            and self._values == other._values
            and self._errors == other._errors
            and self._meta == other._meta
        )

    __hash__ = None

    def __repr__(self) -> str:
        body = ", ".join(f"{name}={list(values)!r}" for name, values in self)
        return f"Container({body}, errors={len(self._errors)})"
