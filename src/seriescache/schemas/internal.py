"""Policy and Schema: authoritative runtime configuration.

These are the ONLY config objects the admission engine sees. They are fully
validated, frozen, and contain an explicit value for every field.

All fallback defaults are applied during resolution, never at admission time.
The only runtime override path is the container's metadata block, resolved
by ``Container.setting``.
"""

from typing import Any, Callable, Optional
from pydantic import ConfigDict, Field
from seriescache.contracts import UnknownSeries
from seriescache.schemas.base import SeriesCacheBaseModel


class Policy(SeriesCacheBaseModel):
    """Compiled policy governing one series.

    Fields
    ------
    limit : int
        Max admitted values retained.
    error_limit : int
        Max rejected values retained for this series.
    threshold : float or None
        Outlier band as a fraction of the current spread; None disables it.
    compare_by : callable
        ``value -> comparable`` projection used for ordering, ranking and band math.
    sorter : callable
        ``(a, b) -> bool``, true when projection ``a`` belongs before ``b``.
        It receives ``compare_by`` output, never raw values, so a sorter
        over a field the projection drops must project that field instead.
    comparator : callable
        ``(a, b) -> bool`` ranking used by delta (``<`` gives ascending min/max).
    validator : callable
        ``(series, value) -> bool`` admission gate.
    corrector : callable
        ``(container, series, value) -> Corrected or None`` rescue path.
    """

    limit: int = Field(ge=0)
    error_limit: int = Field(ge=0)
    threshold: Optional[float] = Field(ge=0)
    compare_by: Callable[[Any], Any]
    sorter: Callable[[Any, Any], bool]
    comparator: Callable[[Any, Any], bool]
    validator: Callable[[str, Any], bool]
    corrector: Callable[[Any, str, Any], Any]

    model_config = ConfigDict(
        extra='forbid',
        arbitrary_types_allowed=True,
        frozen=True,  # Immutable after construction
    )


class Schema(SeriesCacheBaseModel):
    """Fixed, ordered declaration of named series and their policies.

    Built once by ``resolve_schema`` and shared by every container created
    from it. The declaration order is the iteration order of containers.
    """

    series: tuple[tuple[str, Policy], ...]

    model_config = ConfigDict(
        extra='forbid',
        arbitrary_types_allowed=True,
        frozen=True,
    )

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.series)

    def policy(self, name: str) -> Policy:
        """Compiled policy of ``name``.

        Raises
        ------
        UnknownSeries
            If ``name`` was not declared.
        """
        for declared, policy in self.series:
            if declared == name:
                return policy
        raise UnknownSeries(name, self.names)

    def __contains__(self, name: object) -> bool:
        return any(declared == name for declared, _ in self.series)

    def __len__(self) -> int:
        return len(self.series)
