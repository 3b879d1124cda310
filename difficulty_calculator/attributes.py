from collections.abc import Iterable
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import TypedDict

from difficulty_calculator.errors import AttributeMappingError


class DifficultyColumn(str, Enum):
    """Attribute columns of the `beatmap_difficulty_data` table."""

    AIM = "diff_aim"
    SPEED = "diff_speed"
    OVERALL_DIFFICULTY = "od"
    APPROACH_RATE = "ar"
    MAX_COMBO = "max_combo"
    STRAIN = "diff_strain"
    GREAT_HIT_WINDOW = "hit300"
    SCORE_MULTIPLIER = "score_multiplier"
    FLASHLIGHT = "flashlight_rating"
    SLIDER_FACTOR = "slider_factor"
    SPEED_NOTE_COUNT = "speed_note_count"
    SPEED_DIFFICULT_STRAIN_COUNT = "speed_difficult_strain_count"
    AIM_DIFFICULT_STRAIN_COUNT = "aim_difficult_strain_count"
    OK_HIT_WINDOW = "hit100"
    MONO_STAMINA_FACTOR = "mono_stamina_factor"


ATTRIBUTE_MAPPING: Mapping[int, DifficultyColumn] = MappingProxyType(
    {
        1: DifficultyColumn.AIM,
        3: DifficultyColumn.SPEED,
        5: DifficultyColumn.OVERALL_DIFFICULTY,
        7: DifficultyColumn.APPROACH_RATE,
        9: DifficultyColumn.MAX_COMBO,
        11: DifficultyColumn.STRAIN,
        13: DifficultyColumn.GREAT_HIT_WINDOW,
        15: DifficultyColumn.SCORE_MULTIPLIER,
        17: DifficultyColumn.FLASHLIGHT,
        19: DifficultyColumn.SLIDER_FACTOR,
        21: DifficultyColumn.SPEED_NOTE_COUNT,
        23: DifficultyColumn.SPEED_DIFFICULT_STRAIN_COUNT,
        25: DifficultyColumn.AIM_DIFFICULT_STRAIN_COUNT,
        27: DifficultyColumn.OK_HIT_WINDOW,
        29: DifficultyColumn.MONO_STAMINA_FACTOR,
    }
)


class AttributeWrite(TypedDict):
    beatmap_id: int
    mode: int
    mods: int
    value: float


def get_column(attribute_id: int) -> DifficultyColumn:
    column = ATTRIBUTE_MAPPING.get(attribute_id)
    if column is None:
        # the ruleset is newer than our schema
        raise AttributeMappingError(attribute_id)

    return column


def group_attribute_writes(
    beatmap_id: int,
    mode: int,
    mods: int,
    attributes: Iterable[tuple[int, float]],
) -> dict[DifficultyColumn, list[AttributeWrite]]:
    """\
    Translate (attribute id, value) pairs into writes, grouped by column.

    Each group is written with a single statement, since the target
    column can't be parameterized.
    """
    grouped_writes: dict[DifficultyColumn, list[AttributeWrite]] = {}
    for attribute_id, value in attributes:
        column = get_column(attribute_id)
        grouped_writes.setdefault(column, []).append(
            {
                "beatmap_id": beatmap_id,
                "mode": mode,
                "mods": mods,
                "value": value,
            }
        )

    return grouped_writes
