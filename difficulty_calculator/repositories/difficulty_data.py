from databases.core import Connection

from difficulty_calculator.attributes import AttributeWrite
from difficulty_calculator.attributes import DifficultyColumn


def _create_attribute_upsert_query(column: DifficultyColumn) -> str:
    return f"""\
        INSERT INTO beatmap_difficulty_data (beatmap_id, mode, mods, {column.value})
        VALUES (:beatmap_id, :mode, :mods, :value)
        ON CONFLICT (beatmap_id, mode, mods) DO UPDATE
           SET {column.value} = EXCLUDED.{column.value}
    """


# one fixed statement per column; built from the enum, never from input
ATTRIBUTE_UPSERT_QUERIES: dict[DifficultyColumn, str] = {
    column: _create_attribute_upsert_query(column) for column in DifficultyColumn
}


async def upsert_star_rating(
    connection: Connection,
    beatmap_id: int,
    mode: int,
    mods: int,
    star_rating: float,
) -> None:
    await connection.execute(
        query="""\
            INSERT INTO beatmap_difficulty_data (beatmap_id, mode, mods, diff_unified)
            VALUES (:beatmap_id, :mode, :mods, :star_rating)
            ON CONFLICT (beatmap_id, mode, mods) DO UPDATE
               SET diff_unified = EXCLUDED.diff_unified
        """,
        values={
            "beatmap_id": beatmap_id,
            "mode": mode,
            "mods": mods,
            "star_rating": star_rating,
        },
    )


async def upsert_attribute_values(
    connection: Connection,
    column: DifficultyColumn,
    writes: list[AttributeWrite],
) -> None:
    await connection.execute_many(
        query=ATTRIBUTE_UPSERT_QUERIES[column],
        values=[dict(write) for write in writes],
    )
