from typing import TypedDict

from difficulty_calculator.mods import Mod


class WorkingBeatmap(TypedDict):
    beatmap_id: int
    mode: int
    hit_object_count: int
    ar: float
    od: float
    hp: float
    cs: float
    most_common_beat_length: float
    osu_file_contents: bytes


class PlayableBeatmap(TypedDict):
    beatmap: WorkingBeatmap
    ruleset_id: int
    mods: tuple[Mod, ...]


def get_playable_beatmap(
    beatmap: WorkingBeatmap,
    ruleset_id: int,
    mods: tuple[Mod, ...],
) -> PlayableBeatmap:
    # the ruleset's score simulator performs the actual conversion
    return {
        "beatmap": beatmap,
        "ruleset_id": ruleset_id,
        "mods": mods,
    }


def calculate_bpm(beat_length: float) -> float:
    bpm = 60000 / beat_length if beat_length > 0 else 0
    return round(bpm, 2)
