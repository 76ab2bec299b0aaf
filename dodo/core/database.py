"""Async database handle with an explicit open/close lifecycle."""

from __future__ import annotations

from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

# Import all models so metadata is populated
import dodo.models  # noqa: F401


class Database:
    """Owns the async engine and the session factory for one store.

    Construct it explicitly and pass it to the stores that need it; tests
    open a fresh in-memory instance each.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    async def open(self) -> None:
        """Create the engine and the three collections with their indices."""
        if self._engine is not None:
            return

        url = make_url(self.url)
        kwargs: dict[str, Any] = {"echo": self._echo}
        if url.get_backend_name() == "sqlite":
            if url.database in (None, "", ":memory:"):
                # One shared connection, otherwise every checkout sees an empty database
                kwargs["poolclass"] = StaticPool
        else:
            kwargs.update(pool_size=20, max_overflow=10)

        engine = create_async_engine(self.url, **kwargs)
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        self._engine = engine
        self._session_factory = sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    def session(self) -> AsyncSession:
        """Return a new session; use it as an async context manager."""
        if self._session_factory is None:
            raise RuntimeError("Database is not open")
        return self._session_factory()

    async def __aenter__(self) -> Database:
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
