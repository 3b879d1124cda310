from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from difficulty_calculator.attributes import AttributeWrite
from difficulty_calculator.attributes import DifficultyColumn


class FakeConnection:
    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"<FakeConnection ({self.name})>"


class FakeDatabase:
    """Stands in for `adapters.database.Database`, tracking connection usage."""

    def __init__(self) -> None:
        self.read = FakeConnection("read")
        self.write = FakeConnection("write")
        self.read_acquisitions = 0
        self.write_acquisitions = 0
        self.open_connections = 0

    @asynccontextmanager
    async def read_connection(self) -> AsyncIterator[Any]:
        self.read_acquisitions += 1
        self.open_connections += 1
        try:
            yield self.read
        finally:
            self.open_connections -= 1

    @asynccontextmanager
    async def write_transaction(self) -> AsyncIterator[Any]:
        self.write_acquisitions += 1
        self.open_connections += 1
        try:
            yield self.write
        finally:
            self.open_connections -= 1


class FakeStore:
    """In-memory rows, replacing the repository write functions."""

    def __init__(self) -> None:
        self.difficulty_data: dict[tuple[int, int, int], dict[str, float]] = {}
        self.scoring_attributes: dict[tuple[int, int], dict[str, float]] = {}
        self.beatmaps: dict[int, dict[str, float]] = {}
        self.statements: list[str] = []

    async def upsert_star_rating(
        self,
        connection: Any,
        beatmap_id: int,
        mode: int,
        mods: int,
        star_rating: float,
    ) -> None:
        self.statements.append("difficulty_data.diff_unified")
        row = self.difficulty_data.setdefault((beatmap_id, mode, mods), {})
        row["diff_unified"] = star_rating

    async def upsert_attribute_values(
        self,
        connection: Any,
        column: DifficultyColumn,
        writes: list[AttributeWrite],
    ) -> None:
        self.statements.append(f"difficulty_data.{column.value}")
        for write in writes:
            key = (write["beatmap_id"], write["mode"], write["mods"])
            self.difficulty_data.setdefault(key, {})[column.value] = write["value"]

    async def upsert_scoring_attributes(
        self,
        connection: Any,
        beatmap_id: int,
        mode: int,
        **values: float,
    ) -> None:
        self.statements.append("scoring_attributes")
        self.scoring_attributes[(beatmap_id, mode)] = dict(values)

    async def update_beatmap(self, connection: Any, beatmap_id: int, **values: float) -> None:
        self.statements.append("beatmaps.update")
        if beatmap_id in self.beatmaps:
            self.beatmaps[beatmap_id].update(values)

    async def upsert_beatmap(self, connection: Any, beatmap_id: int, **values: float) -> None:
        self.statements.append("beatmaps.upsert")
        self.beatmaps.setdefault(beatmap_id, {}).update(values)
