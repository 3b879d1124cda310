from databases.core import Connection


async def upsert(
    connection: Connection,
    beatmap_id: int,
    mode: int,
    legacy_accuracy_score: int,
    legacy_combo_score: int,
    legacy_bonus_score_ratio: float,
    legacy_bonus_score: int,
    max_combo: int,
) -> None:
    await connection.execute(
        query="""\
            INSERT INTO beatmap_scoring_attributes (beatmap_id, mode,
                                                    legacy_accuracy_score,
                                                    legacy_combo_score,
                                                    legacy_bonus_score_ratio,
                                                    legacy_bonus_score,
                                                    max_combo)
            VALUES (:beatmap_id, :mode, :legacy_accuracy_score,
                    :legacy_combo_score, :legacy_bonus_score_ratio,
                    :legacy_bonus_score, :max_combo)
            ON CONFLICT (beatmap_id, mode) DO UPDATE
               SET legacy_accuracy_score = EXCLUDED.legacy_accuracy_score,
                   legacy_combo_score = EXCLUDED.legacy_combo_score,
                   legacy_bonus_score_ratio = EXCLUDED.legacy_bonus_score_ratio,
                   legacy_bonus_score = EXCLUDED.legacy_bonus_score,
                   max_combo = EXCLUDED.max_combo
        """,
        values={
            "beatmap_id": beatmap_id,
            "mode": mode,
            "legacy_accuracy_score": legacy_accuracy_score,
            "legacy_combo_score": legacy_combo_score,
            "legacy_bonus_score_ratio": legacy_bonus_score_ratio,
            "legacy_bonus_score": legacy_bonus_score,
            "max_combo": max_combo,
        },
    )
