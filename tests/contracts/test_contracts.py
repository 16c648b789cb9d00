"""Tests for cache contracts.

These tests verify that contracts fail fast with the right exception type
and leave valid states alone.
"""

import pytest

pytestmark = pytest.mark.unit

from seriescache.contracts import (
    ContractViolation,
    MergeShapeMismatch,
    UnknownSeries,
    assert_errors_bounded,
    assert_series_bounded,
    assert_series_ordered,
    require,
)


class TestRequire:
    """Single enforcement helper."""

    def test_require_passes(self):
        # Should not raise
        require(True, "never shown")

    def test_require_raises_contract_violation(self):
        with pytest.raises(ContractViolation, match="broken"):
            require(False, "broken")

    def test_require_custom_error(self):
        with pytest.raises(MergeShapeMismatch):
            require(False, "shape", MergeShapeMismatch)


class TestExceptionTaxonomy:
    """Schema errors share one base class."""

    def test_hierarchy(self):
        assert issubclass(ContractViolation, RuntimeError)
        assert issubclass(UnknownSeries, ContractViolation)
        assert issubclass(MergeShapeMismatch, ContractViolation)

    def test_unknown_series_message(self):
        error = UnknownSeries("series0", ["series1", "series2"])

        assert error.series == "series0"
        assert error.known == ("series1", "series2")
        assert "'series0'" in str(error)
        assert "series1, series2" in str(error)

    def test_unknown_series_without_declarations(self):
        assert "declared: none" in str(UnknownSeries("x"))


class TestSeriesBounded:
    """Series length never exceeds its limit."""

    def test_within_limit(self):
        assert_series_bounded("s", (1, 2), 2)

    def test_over_limit(self):
        with pytest.raises(ContractViolation, match="'s' holds 3 values, limit is 2"):
            assert_series_bounded("s", (1, 2, 3), 2)


class TestSeriesOrdered:
    """Series stay sorted by their sorter."""

    def test_ordered(self):
        assert_series_ordered("s", (1, 2, 3), lambda a, b: a < b, lambda v: v)

    def test_ties_are_accepted(self):
        assert_series_ordered("s", (1, 1, 2), lambda a, b: a < b, lambda v: v)
        assert_series_ordered("s", (1, 1, 2), lambda a, b: a <= b, lambda v: v)

    def test_stack_order_is_always_ordered(self):
        assert_series_ordered("s", (3, 1, 2), lambda a, b: True, lambda v: v)

    def test_out_of_order(self):
        with pytest.raises(ContractViolation, match="position 2"):
            assert_series_ordered("s", (1, 3, 2), lambda a, b: a < b, lambda v: v)

    def test_projection_is_used(self):
        values = ({"n": 1}, {"n": 2})
        assert_series_ordered("s", values, lambda a, b: a < b, lambda v: v["n"])


class TestErrorsBounded:
    """Error log keeps at most error_limit entries per series."""

    def test_within_limit(self):
        assert_errors_bounded("s", (1,), 1)

    def test_over_limit(self):
        with pytest.raises(ContractViolation, match="error_limit|limit is 1"):
            assert_errors_bounded("s", (1, 2), 1)
