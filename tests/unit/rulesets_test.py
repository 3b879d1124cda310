from importlib.metadata import EntryPoint

import pytest

from difficulty_calculator import rulesets
from difficulty_calculator.errors import RulesetLoadError
from difficulty_calculator.errors import UnknownRulesetError
from difficulty_calculator.mods import Mod
from difficulty_calculator.rulesets import RulesetRegistry
from testing.rulesets import FakeLegacyRuleset
from testing.rulesets import FakeOsuRuleset
from testing.rulesets import FakeRuleset
from testing.rulesets import FakeTaikoRuleset


def _entry_point(name: str, value: str) -> EntryPoint:
    return EntryPoint(
        name=name,
        value=value,
        group=rulesets.RULESET_ENTRY_POINT_GROUP,
    )


def test_should_load_rulesets_from_entry_points():
    # act
    registry = rulesets.load_rulesets(
        [
            _entry_point("taiko", "testing.rulesets:FakeTaikoRuleset"),
            _entry_point("osu", "testing.rulesets:FakeOsuRuleset"),
        ]
    )

    # assert
    assert registry.ruleset_ids == [0, 1]
    assert isinstance(registry.get(0), FakeOsuRuleset)
    assert isinstance(registry.get(1), FakeTaikoRuleset)


def test_should_fail_to_load_entry_point_which_is_not_a_ruleset():
    with pytest.raises(RulesetLoadError):
        rulesets.load_rulesets([_entry_point("nine", "testing.rulesets:NotARuleset")])


def test_should_fail_to_load_ruleset_which_cannot_be_instantiated():
    with pytest.raises(RulesetLoadError) as exc_info:
        rulesets.load_rulesets([_entry_point("broken", "testing.rulesets:BrokenRuleset")])

    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_should_fail_to_load_ruleset_which_cannot_be_imported():
    with pytest.raises(RulesetLoadError) as exc_info:
        rulesets.load_rulesets([_entry_point("gone", "testing.does_not_exist:Ruleset")])

    assert isinstance(exc_info.value.__cause__, ImportError)


def test_should_reject_duplicate_ruleset_ids():
    with pytest.raises(RulesetLoadError):
        RulesetRegistry([FakeRuleset(ruleset_id=2), FakeRuleset(ruleset_id=2)])


def test_registry_should_iterate_in_ruleset_id_order():
    # arrange
    registry = RulesetRegistry(
        [FakeRuleset(ruleset_id=3), FakeRuleset(ruleset_id=0), FakeRuleset(ruleset_id=1)]
    )

    # act
    ruleset_ids = [ruleset.ruleset_id for ruleset in registry]

    # assert
    assert ruleset_ids == [0, 1, 3]
    assert len(registry) == 3
    assert 3 in registry
    assert 2 not in registry


def test_select_should_return_every_ruleset_without_allowlist():
    registry = RulesetRegistry([FakeRuleset(ruleset_id=0), FakeRuleset(ruleset_id=1)])

    assert registry.select(None) == list(registry)


def test_select_should_return_allowed_rulesets():
    # arrange
    osu = FakeRuleset(ruleset_id=0)
    mania = FakeRuleset(ruleset_id=3)
    registry = RulesetRegistry([osu, FakeRuleset(ruleset_id=1), mania])

    # act
    selected = registry.select([3, 0])

    # assert
    assert selected == [mania, osu]


def test_select_should_fail_for_unregistered_ruleset():
    registry = RulesetRegistry([FakeRuleset(ruleset_id=0)])

    with pytest.raises(UnknownRulesetError) as exc_info:
        registry.select([0, 5])

    assert exc_info.value.ruleset_id == 5


def test_create_mod_should_only_create_available_mods():
    ruleset = FakeLegacyRuleset()

    assert ruleset.create_mod("CL") == Mod("CL")
    assert FakeRuleset().create_mod("CL") is None


def test_convert_to_legacy_mods_should_use_legacy_bits():
    ruleset = FakeRuleset()

    assert ruleset.convert_to_legacy_mods([Mod("DT"), Mod("HR")]) == 64 | 16
