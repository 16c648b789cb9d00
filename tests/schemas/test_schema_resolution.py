"""Tests for schema resolution: defaults < globals < series options."""

import pytest
from pydantic import ValidationError

from seriescache.contracts import UnknownSeries
from seriescache.schemas import EngineDefaults, Policy, SeriesOptions, resolve_policy, resolve_schema
from seriescache.schemas.param import accept_all, identity, less_than, never_correct, stack_order
from seriescache.schemas.resolve import deep_merge

pytestmark = pytest.mark.unit


class TestDefaults:
    """Unset options fall back to EngineDefaults and default behaviours."""

    def test_default_policy(self):
        policy = resolve_policy()

        assert policy.limit == 5
        assert policy.error_limit == 5
        assert policy.threshold is None
        assert policy.compare_by is identity
        assert policy.sorter is stack_order
        assert policy.comparator is less_than
        assert policy.validator is accept_all
        assert policy.corrector is never_correct

    def test_engine_defaults_apply_to_every_series(self):
        schema = resolve_schema({"a": {}, "b": {"limit": 2}}, defaults=EngineDefaults(limit=7, error_limit=1))

        assert schema.policy("a").limit == 7
        assert schema.policy("b").limit == 2
        assert schema.policy("b").error_limit == 1

    def test_defaults_from_dict(self):
        schema = resolve_schema({"a": None}, defaults={"threshold": 0.25})
        assert schema.policy("a").threshold == 0.25

    def test_negative_default_rejected(self):
        with pytest.raises(ValidationError):
            EngineDefaults(limit=-1)


class TestGlobals:
    """Global options sit between defaults and series options."""

    def test_globals_apply_to_all_series(self):
        schema = resolve_schema(
            {"tomorrow": {"limit": 5, "errors": 1}, "week": {"limit": 2}},
            globals_={"validate": lambda value: value > 0},
        )

        assert not schema.policy("tomorrow").validator("tomorrow", -1)
        assert schema.policy("week").validator("week", 1)

    def test_series_options_beat_globals(self):
        schema = resolve_schema({"a": {"limit": 1}, "b": {}}, globals_={"limit": 3})

        assert schema.policy("a").limit == 1
        assert schema.policy("b").limit == 3


class TestSchema:
    """Declaration order, lookup and naming rules."""

    def test_declaration_order(self):
        schema = resolve_schema([("z", {}), ("a", {}), ("m", {})])

        assert schema.names == ("z", "a", "m")
        assert len(schema) == 3
        assert "a" in schema and "b" not in schema

    def test_unknown_series(self):
        schema = resolve_schema({"a": {}})
        with pytest.raises(UnknownSeries):
            schema.policy("b")

    def test_duplicate_names(self):
        with pytest.raises(ValueError, match="more than once"):
            resolve_schema([("a", {}), ("a", {"limit": 2})])

    @pytest.mark.parametrize("name", ["state", "limit", "threshold", "validator"])
    def test_reserved_names(self, name):
        with pytest.raises(ValueError, match="reserved"):
            resolve_schema({name: {}})

    def test_policy_is_frozen(self):
        policy = resolve_schema({"a": {}}).policy("a")
        with pytest.raises(ValidationError):
            policy.limit = 10

    def test_schema_is_frozen(self):
        schema = resolve_schema({"a": {}})
        with pytest.raises(ValidationError):
            schema.series = ()

    def test_policy_rejects_missing_fields(self):
        with pytest.raises(ValidationError):
            Policy(limit=1)


class TestDeepMerge:
    """Dictionary merging used by resolution."""

    def test_nested_merge(self):
        base = {"a": 1, "b": {"c": 2, "d": 3}}
        override = {"b": {"d": 4, "e": 5}, "f": 6}

        assert deep_merge(base, override) == {"a": 1, "b": {"c": 2, "d": 4, "e": 5}, "f": 6}

    def test_later_overrides_win(self):
        assert deep_merge({"a": 1}, {"a": 2}, {"a": 3}) == {"a": 3}

    def test_base_is_not_modified(self):
        base = {"a": 1}
        deep_merge(base, {"a": 2})
        assert base == {"a": 1}

    def test_series_options_instance(self):
        policy = resolve_policy(SeriesOptions(limit=2), globals_=SeriesOptions(limit=4, error_limit=0))

        assert policy.limit == 2
        assert policy.error_limit == 0
