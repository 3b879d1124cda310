from databases.core import Connection


async def fetch_ranked_status(connection: Connection, beatmap_id: int) -> int | None:
    ranked_status = await connection.fetch_val(
        query="""\
            SELECT ranked_status
              FROM beatmaps
             WHERE beatmap_id = :beatmap_id
        """,
        values={"beatmap_id": beatmap_id},
    )
    return ranked_status


async def update_difficulty(
    connection: Connection,
    beatmap_id: int,
    star_rating: float,
    ar: float,
    od: float,
    hp: float,
    cs: float,
    bpm: float,
    max_combo: int,
) -> None:
    await connection.execute(
        query="""\
            UPDATE beatmaps
               SET star_rating = :star_rating,
                   ar = :ar,
                   od = :od,
                   hp = :hp,
                   cs = :cs,
                   bpm = :bpm,
                   max_combo = :max_combo,
                   updated_at = NOW()
             WHERE beatmap_id = :beatmap_id
        """,
        values={
            "beatmap_id": beatmap_id,
            "star_rating": star_rating,
            "ar": ar,
            "od": od,
            "hp": hp,
            "cs": cs,
            "bpm": bpm,
            "max_combo": max_combo,
        },
    )


async def upsert_difficulty(
    connection: Connection,
    beatmap_id: int,
    star_rating: float,
    ar: float,
    od: float,
    hp: float,
    cs: float,
    bpm: float,
    max_combo: int,
) -> None:
    await connection.execute(
        query="""\
            INSERT INTO beatmaps (beatmap_id, star_rating, ar, od, hp, cs,
                                  bpm, max_combo)
            VALUES (:beatmap_id, :star_rating, :ar, :od, :hp, :cs,
                    :bpm, :max_combo)
            ON CONFLICT (beatmap_id) DO UPDATE
               SET star_rating = EXCLUDED.star_rating,
                   ar = EXCLUDED.ar,
                   od = EXCLUDED.od,
                   hp = EXCLUDED.hp,
                   cs = EXCLUDED.cs,
                   bpm = EXCLUDED.bpm,
                   max_combo = EXCLUDED.max_combo,
                   updated_at = NOW()
        """,
        values={
            "beatmap_id": beatmap_id,
            "star_rating": star_rating,
            "ar": ar,
            "od": od,
            "hp": hp,
            "cs": cs,
            "bpm": bpm,
            "max_combo": max_combo,
        },
    )
