from dataclasses import dataclass
from typing import Iterable

from difficulty_calculator import game_modes
from difficulty_calculator import logger
from difficulty_calculator.beatmaps import WorkingBeatmap
from difficulty_calculator.rulesets import Ruleset
from difficulty_calculator.rulesets import RulesetRegistry


@dataclass(frozen=True)
class ProcessableBeatmap:
    beatmap: WorkingBeatmap
    ruleset: Ruleset
    ranked: bool

    @property
    def beatmap_id(self) -> int:
        return self.beatmap["beatmap_id"]

    @property
    def ruleset_id(self) -> int:
        return self.ruleset.ruleset_id


class ApplicabilityResolver:
    """Decides which rulesets a beatmap must be processed under."""

    def __init__(
        self,
        rulesets: RulesetRegistry,
        ruleset_ids: Iterable[int] | None = None,
        process_converts: bool = True,
    ) -> None:
        # unknown ruleset ids fail here, not once per beatmap
        self.processable_rulesets = rulesets.select(ruleset_ids)
        self.process_converts = process_converts

    def resolve(
        self,
        beatmap: WorkingBeatmap,
        ranked: bool,
    ) -> list[ProcessableBeatmap]:
        if self.process_converts and game_modes.is_convert_eligible(beatmap["mode"]):
            return [
                ProcessableBeatmap(beatmap, ruleset, ranked)
                for ruleset in self.processable_rulesets
            ]

        for ruleset in self.processable_rulesets:
            if ruleset.ruleset_id == beatmap["mode"]:
                return [ProcessableBeatmap(beatmap, ruleset, ranked)]

        logger.debug(
            "Skipping beatmap outside of the processable rulesets",
            beatmap_id=beatmap["beatmap_id"],
            mode=beatmap["mode"],
        )
        return []
