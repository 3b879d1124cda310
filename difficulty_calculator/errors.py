from enum import Enum


class ProcessingPhase(str, Enum):
    VALIDATING = "processing.validating"
    DISPATCHING = "processing.dispatching"
    DIFFICULTY = "processing.difficulty"
    LEGACY_SCORE = "processing.legacy_score"


class DifficultyCalculatorError(Exception):
    """Base class for all errors raised by the difficulty calculator."""


class RulesetLoadError(DifficultyCalculatorError):
    """A registered ruleset plugin could not be loaded or instantiated."""


class UnknownRulesetError(DifficultyCalculatorError):
    def __init__(self, ruleset_id: int) -> None:
        super().__init__(f"Ruleset {ruleset_id} is not registered")
        self.ruleset_id = ruleset_id


class BeatmapContentError(DifficultyCalculatorError):
    """A ranked beatmap has no playable content."""


class AttributeMappingError(DifficultyCalculatorError):
    def __init__(self, attribute_id: int) -> None:
        super().__init__(f"No database column is mapped to attribute {attribute_id}")
        self.attribute_id = attribute_id


class LegacyScoringUnsupportedError(DifficultyCalculatorError):
    def __init__(self, ruleset_id: int) -> None:
        super().__init__(f"Ruleset {ruleset_id} does not support legacy scoring")
        self.ruleset_id = ruleset_id


class BeatmapProcessingError(DifficultyCalculatorError):
    """Wraps any failure raised while processing a single beatmap."""

    def __init__(
        self,
        beatmap_id: int,
        phase: ProcessingPhase,
        cause: BaseException,
    ) -> None:
        super().__init__(f"{beatmap_id} failed with: {cause}")
        self.beatmap_id = beatmap_id
        self.phase = phase
        self.cause = cause
