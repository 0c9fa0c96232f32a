"""Async engines and sessions for the booking store.

Engines are created lazily and cached per database URL so tests can point
the application at a throwaway SQLite file and dispose it afterwards.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from service_booking.core.config import get_settings

_engines: dict[str, AsyncEngine] = {}
_sessionmakers: dict[str, async_sessionmaker[AsyncSession]] = {}


def _resolve_database_url(override: str | None = None) -> str:
    return override or get_settings().database_url


def _engine_options(url: str) -> dict[str, Any]:
    timeout = get_settings().database_pool_timeout
    if make_url(url).get_backend_name() == "sqlite":
        # busy timeout while another writer holds the database lock
        return {"connect_args": {"timeout": timeout}}
    return {"pool_timeout": timeout, "pool_pre_ping": True}


def get_sessionmaker(
    database_url: str | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Return the cached sessionmaker for ``database_url`` (settings by default)."""
    url = _resolve_database_url(database_url)
    if url not in _sessionmakers:
        engine = create_async_engine(url, **_engine_options(url))
        _engines[url] = engine
        _sessionmakers[url] = async_sessionmaker(
            engine, expire_on_commit=False, class_=AsyncSession
        )
    return _sessionmakers[url]


async def get_session() -> AsyncIterator[AsyncSession]:
    async with get_sessionmaker()() as session:
        yield session


async def dispose_engine(database_url: str | None = None) -> None:
    """Close pooled connections and forget the engine for ``database_url``."""
    url = _resolve_database_url(database_url)
    _sessionmakers.pop(url, None)
    engine = _engines.pop(url, None)
    if engine is not None:
        await engine.dispose()
