from abc import ABC
from abc import abstractmethod
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from importlib.metadata import EntryPoint
from importlib.metadata import entry_points
from types import MappingProxyType
from typing import ClassVar
from typing import Sequence
from typing import TypedDict

from difficulty_calculator import logger
from difficulty_calculator import mods as legacy_mods
from difficulty_calculator.beatmaps import PlayableBeatmap
from difficulty_calculator.beatmaps import WorkingBeatmap
from difficulty_calculator.errors import RulesetLoadError
from difficulty_calculator.errors import UnknownRulesetError
from difficulty_calculator.mods import Mod

RULESET_ENTRY_POINT_GROUP = "difficulty_calculator.rulesets"


class DifficultyAttributes(TypedDict):
    mods: tuple[Mod, ...]
    star_rating: float
    max_combo: int
    # (attribute id, value) pairs, in the order the ruleset emits them
    attributes: list[tuple[int, float]]


class LegacyScoreAttributes(TypedDict):
    accuracy_score: int
    combo_score: int
    bonus_score_ratio: float
    bonus_score: int
    max_combo: int


class DifficultyCalculator(ABC):
    @abstractmethod
    def calculate_all_legacy_combinations(self) -> list[DifficultyAttributes]:
        ...


class LegacyScoreSimulator(ABC):
    @abstractmethod
    def simulate(
        self,
        beatmap: WorkingBeatmap,
        playable_beatmap: PlayableBeatmap,
    ) -> LegacyScoreAttributes:
        ...


class Ruleset(ABC):
    ruleset_id: ClassVar[int]
    short_name: ClassVar[str]

    # acronyms this ruleset knows how to create
    available_mods: ClassVar[frozenset[str]] = frozenset()

    @abstractmethod
    def create_difficulty_calculator(
        self,
        beatmap: WorkingBeatmap,
    ) -> DifficultyCalculator:
        ...

    def convert_to_legacy_mods(self, mods: Sequence[Mod]) -> int:
        return legacy_mods.to_legacy(mods)

    def create_mod(self, acronym: str) -> Mod | None:
        if acronym not in self.available_mods:
            return None

        return Mod(acronym)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} ({self.ruleset_id})>"


class LegacyRuleset(Ruleset):
    """A ruleset which can simulate score under the legacy (stable) scoring."""

    @abstractmethod
    def create_legacy_score_simulator(self) -> LegacyScoreSimulator:
        ...


class RulesetRegistry:
    """Read-only collection of ruleset instances, keyed by ruleset id."""

    def __init__(self, rulesets: Iterable[Ruleset]) -> None:
        by_id: dict[int, Ruleset] = {}
        for ruleset in rulesets:
            if ruleset.ruleset_id in by_id:
                raise RulesetLoadError(
                    f"Duplicate ruleset id {ruleset.ruleset_id} "
                    f"({by_id[ruleset.ruleset_id]!r} and {ruleset!r})"
                )
            by_id[ruleset.ruleset_id] = ruleset

        self._rulesets: Mapping[int, Ruleset] = MappingProxyType(
            dict(sorted(by_id.items()))
        )

    def __len__(self) -> int:
        return len(self._rulesets)

    def __iter__(self) -> Iterator[Ruleset]:
        return iter(self._rulesets.values())

    def __contains__(self, ruleset_id: object) -> bool:
        return ruleset_id in self._rulesets

    @property
    def ruleset_ids(self) -> list[int]:
        return list(self._rulesets)

    def get(self, ruleset_id: int) -> Ruleset:
        ruleset = self._rulesets.get(ruleset_id)
        if ruleset is None:
            raise UnknownRulesetError(ruleset_id)

        return ruleset

    def select(self, ruleset_ids: Iterable[int] | None = None) -> list[Ruleset]:
        if ruleset_ids is None:
            return list(self)

        return [self.get(ruleset_id) for ruleset_id in ruleset_ids]


def _load_ruleset(entry_point: EntryPoint) -> Ruleset:
    try:
        ruleset_class = entry_point.load()
    except Exception as exc:
        raise RulesetLoadError(f"Failed to load ruleset ({entry_point.value})") from exc

    if not (isinstance(ruleset_class, type) and issubclass(ruleset_class, Ruleset)):
        raise RulesetLoadError(
            f"Entry point {entry_point.name} ({entry_point.value}) is not a ruleset"
        )

    try:
        return ruleset_class()
    except Exception as exc:
        raise RulesetLoadError(
            f"Failed to instantiate ruleset ({entry_point.value})"
        ) from exc


def load_rulesets(
    ruleset_entry_points: Iterable[EntryPoint] | None = None,
) -> RulesetRegistry:
    if ruleset_entry_points is None:
        ruleset_entry_points = entry_points(group=RULESET_ENTRY_POINT_GROUP)

    rulesets = [_load_ruleset(entry_point) for entry_point in ruleset_entry_points]
    registry = RulesetRegistry(rulesets)

    logger.info(
        "Loaded rulesets",
        rulesets=[ruleset.short_name for ruleset in registry],
    )
    return registry
