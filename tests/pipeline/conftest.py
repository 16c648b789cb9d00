import pytest

from seriescache.core import Container
from seriescache.pipeline import ContainerHolder
from seriescache.schemas import resolve_schema


@pytest.fixture
def counter_schema():
    """Series large enough to keep every value a test pushes."""
    return resolve_schema({
        "latency": {"limit": 1000, "validate": lambda v: v >= 0, "errors": 1000},
        "status": {"limit": 2},
    })


@pytest.fixture
def holder(counter_schema):
    return ContainerHolder(Container(counter_schema), name="TestHolder")
