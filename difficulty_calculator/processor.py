from collections.abc import Awaitable
from collections.abc import Callable
from enum import Enum
from functools import partial
from typing import Iterable

from databases.core import Connection

from difficulty_calculator import attributes as attribute_mapping
from difficulty_calculator import beatmaps as beatmap_content
from difficulty_calculator import logger
from difficulty_calculator import ranked_statuses
from difficulty_calculator.adapters.database import Database
from difficulty_calculator.applicability import ApplicabilityResolver
from difficulty_calculator.applicability import ProcessableBeatmap
from difficulty_calculator.beatmaps import WorkingBeatmap
from difficulty_calculator.errors import BeatmapContentError
from difficulty_calculator.errors import BeatmapProcessingError
from difficulty_calculator.errors import LegacyScoringUnsupportedError
from difficulty_calculator.errors import ProcessingPhase
from difficulty_calculator.mods import Mods
from difficulty_calculator.repositories import beatmaps
from difficulty_calculator.repositories import difficulty_data
from difficulty_calculator.repositories import scoring_attributes
from difficulty_calculator.rulesets import LegacyRuleset
from difficulty_calculator.rulesets import RulesetRegistry

CLASSIC_MOD_ACRONYM = "CL"

# a write which has been computed, but not yet issued to the primary
PendingWrite = Callable[[Connection], Awaitable[None]]


class ProcessingMode(str, Enum):
    # the legacy score phases require `LegacyRuleset`s; the built-in
    # akatsuki-pp-py rulesets only support `DIFFICULTY`
    ALL = "all"
    DIFFICULTY = "difficulty"
    SCORE_ATTRIBUTES = "score_attributes"


class DifficultyProcessor:
    """\
    Computes & persists difficulty data for one beatmap at a time.

    Each run reads the beatmap's ranked status from the read replica,
    computes everything for every applicable ruleset, then issues all
    writes to the primary within a single transaction.
    """

    def __init__(
        self,
        database: Database,
        rulesets: RulesetRegistry,
        ruleset_ids: Iterable[int] | None = None,
        process_converts: bool = True,
        dry_run: bool = False,
        skip_insert_attributes: bool = False,
        write_beatmap_metadata: bool = False,
        insert_beatmaps: bool = False,
    ) -> None:
        self.database = database
        self.resolver = ApplicabilityResolver(
            rulesets,
            ruleset_ids=ruleset_ids,
            process_converts=process_converts,
        )
        self.dry_run = dry_run
        self.skip_insert_attributes = skip_insert_attributes
        self.write_beatmap_metadata = write_beatmap_metadata
        self.insert_beatmaps = insert_beatmaps

    async def process(self, beatmap: WorkingBeatmap, mode: ProcessingMode) -> None:
        match mode:
            case ProcessingMode.ALL:
                await self.process_difficulty(beatmap)
                await self.process_legacy_attributes(beatmap)
            case ProcessingMode.DIFFICULTY:
                await self.process_difficulty(beatmap)
            case ProcessingMode.SCORE_ATTRIBUTES:
                await self.process_legacy_attributes(beatmap)
            case _:
                raise ValueError(f"Unsupported processing mode: {mode}")

    async def process_difficulty(self, beatmap: WorkingBeatmap) -> None:
        await self._run(
            beatmap,
            ProcessingPhase.DIFFICULTY,
            self._compute_difficulty_writes,
        )

    async def process_legacy_attributes(self, beatmap: WorkingBeatmap) -> None:
        await self._run(
            beatmap,
            ProcessingPhase.LEGACY_SCORE,
            self._compute_legacy_attribute_writes,
        )

    async def _run(
        self,
        beatmap: WorkingBeatmap,
        phase: ProcessingPhase,
        compute_writes: Callable[[ProcessableBeatmap], list[PendingWrite]],
    ) -> None:
        beatmap_id = beatmap["beatmap_id"]
        current_phase = ProcessingPhase.VALIDATING
        beatmap_id_token = logger.set_beatmap_id(beatmap_id)
        try:
            async with self.database.read_connection() as connection:
                ranked_status = await beatmaps.fetch_ranked_status(
                    connection,
                    beatmap_id,
                )

            ranked = ranked_statuses.is_ranked(ranked_status)
            if ranked and beatmap["hit_object_count"] == 0:
                raise BeatmapContentError(
                    f"Ranked beatmap {beatmap_id} has 0 hitobjects!"
                )

            current_phase = ProcessingPhase.DISPATCHING
            processable_beatmaps = self.resolver.resolve(beatmap, ranked)
            if not processable_beatmaps:
                return

            current_phase = phase
            pending_writes: list[PendingWrite] = []
            for processable_beatmap in processable_beatmaps:
                pending_writes.extend(compute_writes(processable_beatmap))

            if self.dry_run:
                logger.debug(
                    "Dry run; skipping writes",
                    phase=phase.value,
                    write_count=len(pending_writes),
                )
                return

            async with self.database.write_transaction() as connection:
                for pending_write in pending_writes:
                    await pending_write(connection)

            logger.debug(
                "Processed beatmap",
                phase=phase.value,
                rulesets=[pb.ruleset_id for pb in processable_beatmaps],
                write_count=len(pending_writes),
            )
        except Exception as exc:
            logger.error(
                "Failed to process beatmap",
                phase=current_phase.value,
                exc_info=exc,
            )
            raise BeatmapProcessingError(beatmap_id, current_phase, exc) from exc
        finally:
            logger.reset_beatmap_id(beatmap_id_token)

    def _compute_difficulty_writes(
        self,
        processable_beatmap: ProcessableBeatmap,
    ) -> list[PendingWrite]:
        beatmap = processable_beatmap.beatmap
        ruleset = processable_beatmap.ruleset

        calculator = ruleset.create_difficulty_calculator(beatmap)

        pending_writes: list[PendingWrite] = []
        for difficulty_attributes in calculator.calculate_all_legacy_combinations():
            legacy_mods = ruleset.convert_to_legacy_mods(difficulty_attributes["mods"])

            pending_writes.append(
                partial(
                    difficulty_data.upsert_star_rating,
                    beatmap_id=processable_beatmap.beatmap_id,
                    mode=processable_beatmap.ruleset_id,
                    mods=legacy_mods,
                    star_rating=difficulty_attributes["star_rating"],
                )
            )

            if not self.skip_insert_attributes:
                grouped_writes = attribute_mapping.group_attribute_writes(
                    beatmap_id=processable_beatmap.beatmap_id,
                    mode=processable_beatmap.ruleset_id,
                    mods=legacy_mods,
                    attributes=difficulty_attributes["attributes"],
                )
                for column, column_writes in grouped_writes.items():
                    pending_writes.append(
                        partial(
                            difficulty_data.upsert_attribute_values,
                            column=column,
                            writes=column_writes,
                        )
                    )

            # beatmap-level metadata only describes the map as it was uploaded
            if (
                self.write_beatmap_metadata
                and legacy_mods == Mods.NOMOD
                and processable_beatmap.ruleset_id == beatmap["mode"]
            ):
                write_beatmap = (
                    beatmaps.upsert_difficulty
                    if self.insert_beatmaps
                    else beatmaps.update_difficulty
                )
                pending_writes.append(
                    partial(
                        write_beatmap,
                        beatmap_id=processable_beatmap.beatmap_id,
                        star_rating=difficulty_attributes["star_rating"],
                        ar=beatmap["ar"],
                        od=beatmap["od"],
                        hp=beatmap["hp"],
                        cs=beatmap["cs"],
                        bpm=beatmap_content.calculate_bpm(
                            beatmap["most_common_beat_length"]
                        ),
                        max_combo=difficulty_attributes["max_combo"],
                    )
                )

        return pending_writes

    def _compute_legacy_attribute_writes(
        self,
        processable_beatmap: ProcessableBeatmap,
    ) -> list[PendingWrite]:
        beatmap = processable_beatmap.beatmap
        ruleset = processable_beatmap.ruleset

        if not isinstance(ruleset, LegacyRuleset):
            raise LegacyScoringUnsupportedError(ruleset.ruleset_id)

        classic_mod = ruleset.create_mod(CLASSIC_MOD_ACRONYM)
        mods = (classic_mod,) if classic_mod is not None else ()

        simulator = ruleset.create_legacy_score_simulator()
        score_attributes = simulator.simulate(
            beatmap,
            beatmap_content.get_playable_beatmap(beatmap, ruleset.ruleset_id, mods),
        )

        return [
            partial(
                scoring_attributes.upsert,
                beatmap_id=processable_beatmap.beatmap_id,
                mode=processable_beatmap.ruleset_id,
                legacy_accuracy_score=score_attributes["accuracy_score"],
                legacy_combo_score=score_attributes["combo_score"],
                legacy_bonus_score_ratio=score_attributes["bonus_score_ratio"],
                legacy_bonus_score=score_attributes["bonus_score"],
                max_combo=score_attributes["max_combo"],
            )
        ]
