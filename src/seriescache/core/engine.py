"""Admission engine.

Decides, for one candidate value, whether it is admitted into its series,
rescued by the series' corrector, or rejected into the error log, and
produces the resulting Container.

Admission of a candidate ``v`` into series ``s``:

1. Resolve the effective policy fields of ``s`` (per-call overrides, then
   container meta, then the compiled policy).
2. ``v`` is admissible iff ``validator(s, v)`` holds and ``v`` lies within
   the outlier band of the current values.
3. If not, the corrector may return ``Corrected(substitute)``; the substitute
   goes through the same check. ``None`` means it cannot help.
4. Admitted values are prepended, the series is re-sorted with its sorter
   (ties keep the newest first) and truncated to the limit, so a full series
   evicts exactly its least favoured value.
5. Rejected values (the original, never the substitute) are prepended to the
   error log, which keeps at most ``error_limit`` entries for the series.

Rejection is a routine outcome: ``put`` never raises because of bad data.
"""

import logging
from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, NamedTuple

from seriescache.contracts import assert_errors_bounded, assert_series_ordered
from seriescache.core.band import min_max, threshold_check
from seriescache.core.container import Container
from seriescache.schemas import Policy

__all__ = ['Corrected', 'Outcome', 'Admission', 'assess', 'put', 'ordering']

logger = logging.getLogger(__name__)


class Corrected(NamedTuple):
    """Substitute value returned by a corrector."""
    value: Any


class Outcome(str, Enum):
    """What admission did with a candidate."""
    ADMITTED = "admitted"
    CORRECTED = "corrected"
    REJECTED = "rejected"


class Admission(NamedTuple):
    """Result of assessing a candidate.

    ``value`` is what gets stored: the candidate, its substitute, or (for a
    rejection) the original candidate that goes to the error log.
    """
    outcome: Outcome
    value: Any


def ordering(sorter: Callable[[Any, Any], bool], compare_by: Callable[[Any], Any]) -> Callable:
    """Three-way comparison derived from a ``before(a, b)`` predicate.

    Pairs for which the predicate holds both ways, or neither way, compare
    equal so that a stable sort keeps them in their current order.
    """
    def compare(a: Any, b: Any) -> int:
        key_a, key_b = compare_by(a), compare_by(b)
        before, after = sorter(key_a, key_b), sorter(key_b, key_a)
        if before and not after:
            return -1
        if after and not before:
            return 1
        return 0

    return compare


def _check_overrides(overrides: dict) -> None:
    unknown = set(overrides) - set(Policy.model_fields)
    if unknown:
        raise TypeError(f"Unknown policy override(s): {', '.join(sorted(unknown))}")


def assess(container: Container, name: str, value: Any, **overrides: Any) -> Admission:
    """Decide what admission would do with ``value`` without applying it.

    Raises
    ------
    UnknownSeries
        If ``name`` was not declared.
    """
    _check_overrides(overrides)
    threshold = container.setting(name, "threshold", overrides.get("threshold"))
    compare_by = container.setting(name, "compare_by", overrides.get("compare_by"))
    validator = container.setting(name, "validator", overrides.get("validator"))
    corrector = container.setting(name, "corrector", overrides.get("corrector"))

    within_band = threshold_check(
        min_max(container.values(name), compare_by), threshold, compare_by
    )

    def admissible(candidate: Any) -> bool:
        return bool(validator(name, candidate)) and within_band(candidate)

    if admissible(value):
        return Admission(Outcome.ADMITTED, value)

    correction = corrector(container, name, value)
    if correction is None:
        return Admission(Outcome.REJECTED, value)

    substitute = correction.value if isinstance(correction, Corrected) else correction
    if admissible(substitute):
        return Admission(Outcome.CORRECTED, substitute)

    logger.warning(
        "Corrector for series '%s' returned inadmissible substitute %r for %r; rejecting",
        name, substitute, value,
    )
    return Admission(Outcome.REJECTED, value)


def put(container: Container, name: str, value: Any, **overrides: Any) -> Container:
    """Admit ``value`` into series ``name``.

    Parameters
    ----------
    container : Container
        Current state. Not modified.
    name : str
        Declared series name.
    value : any
        Candidate value.
    **overrides
        Per-call policy overrides keyed by ``Policy`` field name
        (e.g. ``threshold=0.2``). They take precedence over container meta,
        except that ``limit`` and ``error_limit`` can only be lowered.

    Returns
    -------
    Container
        New container with the value admitted, or with the rejection recorded.

    Raises
    ------
    UnknownSeries
        If ``name`` was not declared.
    TypeError
        If an override does not name a policy field.
    """
    admission = assess(container, name, value, **overrides)

    if admission.outcome is Outcome.REJECTED:
        error_limit = container.capacity(name, "error_limit", overrides.get("error_limit"))
        errors = container.errors.record(name, admission.value, error_limit)
        assert_errors_bounded(name, errors.for_series(name), error_limit)
        logger.debug("Rejected %r for series '%s'", admission.value, name)
        return container.with_errors(errors)

    limit = container.capacity(name, "limit", overrides.get("limit"))
    sorter = container.setting(name, "sorter", overrides.get("sorter"))
    compare_by = container.setting(name, "compare_by", overrides.get("compare_by"))

    ordered = sorted(
        (admission.value,) + container.values(name),
        key=cmp_to_key(ordering(sorter, compare_by)),
    )
    values = tuple(ordered[:limit])
    assert_series_ordered(name, values, sorter, compare_by)

    if admission.outcome is Outcome.CORRECTED:
        logger.debug("Corrected %r to %r for series '%s'", value, admission.value, name)
    return container.with_values(name, values, limit)
