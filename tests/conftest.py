"""Root-level pytest fixtures for the seriescache test suite.

Provides shared schemas and containers. Tests should build schemas through
these fixtures (or ``resolve_schema``) instead of constructing ``Policy``
objects by hand.
"""

import logging
from datetime import date

import pytest

from seriescache.core import Container, Corrected
from seriescache.schemas import EngineDefaults, resolve_schema


# =============================================================================
# Validators / correctors shared by the schemas below
# =============================================================================

def good_integer(value):
    return isinstance(value, int) and not isinstance(value, bool)


def good_date(series, value):
    return series == "dates" and isinstance(value, date)


def correct_integer(_container, _series, value):
    if value == "42":
        return Corrected(42)
    return None


def date_before(d1, d2):
    return d1 < d2


def extract_number(value):
    return value["number"]


# =============================================================================
# Schema Fixtures
# =============================================================================

@pytest.fixture
def defaults():
    """Engine defaults (limit 5, error_limit 5, no threshold)."""
    return EngineDefaults()


@pytest.fixture
def sample_schema():
    """Three series with different validators and orderings.

    - series1: limit 3, positive values only, 1 error kept, stack order
    - series2: limit 2, negative values only, stack order
    - series3: limit 2, ascending order
    """
    return resolve_schema({
        "series1": {"limit": 3, "validate": lambda value: value > 0, "errors": 1},
        "series2": {"limit": 2, "validate": lambda _series, value: value < 0},
        "series3": {"limit": 2, "order": lambda a, b: a <= b},
    })


@pytest.fixture
def band_schema():
    """Series with outlier bands, rankings, projections and a corrector."""
    return resolve_schema({
        "integers": {
            "limit": 3,
            "validate": good_integer,
            "order": lambda a, b: a < b,
            "threshold": 0.5,
            "correct": correct_integer,
        },
        "dates": {
            "limit": 3,
            "validate": good_date,
            "order": date_before,
            "rank": date_before,
        },
        "maps": {"limit": 3, "compare_by": extract_number, "threshold": 0.5},
    })


@pytest.fixture
def stack_schema():
    """Single series 's' with limit 3 and no validation."""
    return resolve_schema({"s": {"limit": 3}})


# =============================================================================
# Container Fixtures
# =============================================================================

@pytest.fixture
def data(sample_schema):
    """Container seeded with series1=[65, 66, 67], series2=[], series3=[43, 42]."""
    return Container.from_values(sample_schema, {
        "series1": [65, 66, 67],
        "series3": [43, 42],
    })


@pytest.fixture
def make_container():
    """Factory fixture: build a seeded container from a series mapping.

    Examples
    --------
    >>> def test_head(make_container):
    ...     c = make_container({"s": {"limit": 2}}, s=[1])
    ...     assert c.read("s") == 1
    """
    def _make(series, meta=None, **values):
        return Container.from_values(resolve_schema(series), values, meta=meta)

    return _make


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test reconfigures them."""
    root = logging.getLogger()
    level = root.level
    yield root
    # pytest capture handlers subclass these; only plain ones come from setup_logging
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
