from unittest.mock import create_autospec

import pytest_mock

from difficulty_calculator import clients
from difficulty_calculator import lifecycle
from difficulty_calculator.adapters.database import Database
from difficulty_calculator.game_modes import GameMode
from difficulty_calculator.rulesets import RulesetRegistry
from testing.rulesets import FakeRuleset


async def test_should_start_and_shutdown(mocker: pytest_mock.MockerFixture):
    # arrange
    mocker.patch("difficulty_calculator.logger.configure_logging")
    database = create_autospec(Database, instance=True)
    mocker.patch(
        "difficulty_calculator.adapters.database.Database",
        return_value=database,
    )
    registry = RulesetRegistry([FakeRuleset(ruleset_id=GameMode.OSU)])
    load_rulesets = mocker.patch(
        "difficulty_calculator.rulesets.load_rulesets",
        return_value=registry,
    )

    # act
    await lifecycle.start()

    # assert
    load_rulesets.assert_called_once_with()
    database.connect.assert_awaited_once()
    assert clients.database is database
    assert clients.rulesets is registry

    # act
    await lifecycle.shutdown()

    # assert
    database.disconnect.assert_awaited_once()
    assert not hasattr(clients, "database")
    assert not hasattr(clients, "rulesets")


def test_should_create_processor_from_settings(mocker: pytest_mock.MockerFixture):
    # arrange
    mocker.patch.object(
        clients,
        "rulesets",
        RulesetRegistry(
            [
                FakeRuleset(ruleset_id=GameMode.OSU),
                FakeRuleset(ruleset_id=GameMode.TAIKO),
                FakeRuleset(ruleset_id=GameMode.MANIA),
            ]
        ),
        create=True,
    )
    mocker.patch.object(
        clients,
        "database",
        create_autospec(Database, instance=True),
        create=True,
    )
    mocker.patch.object(lifecycle.settings, "PROCESS_RULESET_IDS", [0, 1])
    mocker.patch.object(lifecycle.settings, "DRY_RUN", True)

    # act
    processor = lifecycle.create_processor()

    # assert
    assert processor.database is clients.database
    assert processor.dry_run is True
    assert [r.ruleset_id for r in processor.resolver.processable_rulesets] == [0, 1]
    assert processor.resolver.process_converts is True
