from typing import ClassVar

from akatsuki_pp_py import Beatmap as CalculatorBeatmap
from akatsuki_pp_py import Calculator

from difficulty_calculator import mods as legacy_mods
from difficulty_calculator.beatmaps import WorkingBeatmap
from difficulty_calculator.game_modes import GameMode
from difficulty_calculator.mods import Mod
from difficulty_calculator.rulesets import DifficultyAttributes
from difficulty_calculator.rulesets import DifficultyCalculator
from difficulty_calculator.rulesets import Ruleset

# (attribute id, name of the field on the calculator's difficulty attributes)
# the ids are stable, and must exist in `attributes.ATTRIBUTE_MAPPING`
OSU_ATTRIBUTES = [
    (1, "aim"),
    (3, "speed"),
    (5, "od"),
    (7, "ar"),
    (9, "max_combo"),
    (11, "stars"),
    (17, "flashlight"),
    (19, "slider_factor"),
    (21, "speed_note_count"),
]
TAIKO_ATTRIBUTES = [
    (9, "max_combo"),
    (11, "stars"),
    (13, "hit_window"),
]
CATCH_ATTRIBUTES = [
    (7, "ar"),
    (9, "max_combo"),
    (11, "stars"),
]
MANIA_ATTRIBUTES = [
    (9, "max_combo"),
    (11, "stars"),
    (13, "hit_window"),
]


class AkatsukiDifficultyCalculator(DifficultyCalculator):
    def __init__(self, ruleset: "AkatsukiRuleset", beatmap: WorkingBeatmap) -> None:
        self.ruleset = ruleset
        self.beatmap = beatmap

    def calculate_all_legacy_combinations(self) -> list[DifficultyAttributes]:
        calculator_beatmap = CalculatorBeatmap(
            bytes=self.beatmap["osu_file_contents"],
        )

        all_attributes: list[DifficultyAttributes] = []
        for combination in self.ruleset.legacy_mod_combinations():
            calculator = Calculator(
                # converts are handled by the calculator
                mode=self.ruleset.ruleset_id,
                mods=self.ruleset.convert_to_legacy_mods(combination),
            )
            performance = calculator.performance(calculator_beatmap)
            difficulty = performance.difficulty  # type: ignore

            attributes: list[tuple[int, float]] = []
            acronyms = {mod.acronym for mod in combination}
            for attribute_id, field_name in self.ruleset.database_attributes:
                required_mod = self.ruleset.mod_specific_attributes.get(attribute_id)
                if required_mod is not None and required_mod not in acronyms:
                    continue

                value = getattr(difficulty, field_name, None)
                if value is not None:
                    attributes.append((attribute_id, float(value)))

            all_attributes.append(
                {
                    "mods": combination,
                    "star_rating": difficulty.stars,  # type: ignore
                    "max_combo": difficulty.max_combo,  # type: ignore
                    "attributes": attributes,
                }
            )

        return all_attributes


class AkatsukiRuleset(Ruleset):
    """Ruleset backed by the akatsuki-pp-py difficulty calculator."""

    database_attributes: ClassVar[list[tuple[int, str]]]

    # attributes which are only stored for combinations including the given mod
    mod_specific_attributes: ClassVar[dict[int, str]] = {}

    # difficulty adjustment mods, grouped by mutual exclusivity
    difficulty_adjustment_mods: ClassVar[list[tuple[str, ...]]] = [
        ("DT", "HT"),
        ("EZ", "HR"),
    ]

    available_mods = frozenset(
        {"NF", "EZ", "HD", "HR", "SD", "DT", "HT", "NC", "FL", "PF", "CL"}
    )

    def create_difficulty_calculator(
        self,
        beatmap: WorkingBeatmap,
    ) -> AkatsukiDifficultyCalculator:
        return AkatsukiDifficultyCalculator(self, beatmap)

    def legacy_mod_combinations(self) -> list[tuple[Mod, ...]]:
        return legacy_mods.legacy_combinations(self.difficulty_adjustment_mods)


class OsuRuleset(AkatsukiRuleset):
    ruleset_id = GameMode.OSU
    short_name = "osu"
    database_attributes = OSU_ATTRIBUTES
    mod_specific_attributes = {17: "FL"}
    difficulty_adjustment_mods = [
        ("DT", "HT"),
        ("EZ", "HR"),
        ("FL",),
    ]
    available_mods = AkatsukiRuleset.available_mods | {"RX", "AP", "SO", "TD"}


class TaikoRuleset(AkatsukiRuleset):
    ruleset_id = GameMode.TAIKO
    short_name = "taiko"
    database_attributes = TAIKO_ATTRIBUTES
    available_mods = AkatsukiRuleset.available_mods | {"RX"}


class CatchRuleset(AkatsukiRuleset):
    ruleset_id = GameMode.CATCH
    short_name = "fruits"
    database_attributes = CATCH_ATTRIBUTES
    available_mods = AkatsukiRuleset.available_mods | {"RX"}


class ManiaRuleset(AkatsukiRuleset):
    ruleset_id = GameMode.MANIA
    short_name = "mania"
    database_attributes = MANIA_ATTRIBUTES
    available_mods = AkatsukiRuleset.available_mods | {
        "FI",
        "RD",
        "MR",
        "1K",
        "2K",
        "3K",
        "4K",
        "5K",
        "6K",
        "7K",
        "8K",
        "9K",
        "CO",
    }
