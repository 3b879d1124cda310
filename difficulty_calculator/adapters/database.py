import ssl
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from databases import Database as _Database
from databases.core import Connection


def _create_pool(
    dsn: str,
    min_pool_size: int,
    max_pool_size: int,
    ssl: bool | ssl.SSLContext,
) -> _Database:
    return _Database(
        url=dsn,
        min_size=min_pool_size,
        max_size=max_pool_size,
        ssl=ssl,
    )


def dsn(
    scheme: str,
    user: str,
    password: str,
    host: str,
    port: int,
    database: str,
) -> str:
    return f"{scheme}://{user}:{password}@{host}:{port}/{database}"


class Database:
    """Wrapper around the read replica & primary database pools."""

    def __init__(
        self,
        read_dsn: str,
        read_db_ssl: bool | ssl.SSLContext,
        write_dsn: str,
        write_db_ssl: bool | ssl.SSLContext,
        min_pool_size: int,
        max_pool_size: int,
    ) -> None:
        self.read_pool = _create_pool(
            read_dsn,
            min_pool_size,
            max_pool_size,
            read_db_ssl,
        )
        self.write_pool = _create_pool(
            write_dsn,
            min_pool_size,
            max_pool_size,
            write_db_ssl,
        )

    async def connect(self) -> None:
        await self.read_pool.connect()
        await self.write_pool.connect()

    async def disconnect(self) -> None:
        await self.read_pool.disconnect()
        await self.write_pool.disconnect()

    @asynccontextmanager
    async def read_connection(self) -> AsyncIterator[Connection]:
        async with self.read_pool.connection() as connection:
            yield connection

    @asynccontextmanager
    async def write_transaction(self) -> AsyncIterator[Connection]:
        # everything written through the connection is
        # committed together, or rolled back on failure
        async with self.write_pool.connection() as connection:
            async with connection.transaction():
                yield connection
