from enum import Enum

import pytest

from gamerule_defaults.core.override_diff import canonical_value, diff_overrides, values_equal


class CartBehaviour(Enum):
    VANILLA = 1
    EXPERIMENTAL = 2


@pytest.fixture
def baseline():
    return {
        "doMobSpawning": True,
        "randomTickSpeed": 3,
        "minecartMaxSpeed": 8.0,
        "cartBehaviour": CartBehaviour.VANILLA,
    }


def test_diff_of_baseline_with_itself_is_empty(baseline):
    assert diff_overrides(baseline, dict(baseline)) == {}


@pytest.mark.parametrize(
    "name, new_value, expected",
    [
        ("doMobSpawning", False, False),
        ("randomTickSpeed", 10, 10),
        ("minecartMaxSpeed", 2.5, 2.5),
        ("cartBehaviour", CartBehaviour.EXPERIMENTAL, "EXPERIMENTAL"),
    ],
)
def test_single_change_yields_exactly_that_override(baseline, name, new_value, expected):
    live = dict(baseline)
    live[name] = new_value
    assert diff_overrides(live, baseline) == {name: expected}


def test_reset_yields_empty_map(baseline):
    assert diff_overrides(None, baseline) == {}


def test_numeric_equality_across_int_and_float():
    assert diff_overrides({"minecartMaxSpeed": 8}, {"minecartMaxSpeed": 8.0}) == {}


def test_enum_compares_by_canonical_name():
    assert diff_overrides({"cartBehaviour": "VANILLA"}, {"cartBehaviour": CartBehaviour.VANILLA}) == {}


def test_boolean_never_equals_number():
    assert not values_equal(True, 1)
    assert diff_overrides({"rule": 1}, {"rule": True}) == {"rule": 1}


def test_rules_missing_from_baseline_are_skipped(baseline):
    live = dict(baseline, unknownRule=5)
    assert diff_overrides(live, baseline) == {}


def test_canonical_value_rejects_unsupported_types():
    with pytest.raises(ValueError, match="Unsupported"):
        canonical_value([1, 2])
