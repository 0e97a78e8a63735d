"""Storage for favorited articles backed by SQLite."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Protocol

import structlog
from sqlmodel import Session, select

from newsdesk.db import FavoriteArticleRecord, create_engine_for_path, init_db
from newsdesk.settings import Settings
from .live import LiveValue

logger = structlog.get_logger(__name__)


class FavoriteStore(Protocol):
    """High-level contract for persisting favorites."""

    def watch_all(self) -> AsyncIterator[list[FavoriteArticleRecord]]:
        ...

    async def list_all(self) -> list[FavoriteArticleRecord]:
        ...

    async def get(self, article_id: str) -> FavoriteArticleRecord | None:
        ...

    async def upsert(self, record: FavoriteArticleRecord) -> None:
        ...

    async def delete(self, record: FavoriteArticleRecord) -> None:
        ...

    async def delete_by_id(self, article_id: str) -> None:
        ...


class LocalFavoriteStore(FavoriteStore):
    """SQLite-backed favorites table with a live, ordered listing."""

    def __init__(self, settings: Settings, engine=None) -> None:
        self._settings = settings
        self._lock = asyncio.Lock()
        if engine is None:
            self._settings.ensure_directories()
            engine = create_engine_for_path(self._settings.db_path)
        self._engine = engine
        init_db(self._engine)
        self._revision: LiveValue[int] = LiveValue(0)

    async def watch_all(self) -> AsyncIterator[list[FavoriteArticleRecord]]:
        """Yield the ordered listing now and again after every write."""
        updates = self._revision.subscribe()
        try:
            async for _ in updates:
                yield await self.list_all()
        finally:
            await updates.aclose()

    async def list_all(self) -> list[FavoriteArticleRecord]:
        async with self._lock:
            return await asyncio.to_thread(self._list_sync)

    async def get(self, article_id: str) -> FavoriteArticleRecord | None:
        async with self._lock:
            return await asyncio.to_thread(self._get_sync, article_id)

    async def upsert(self, record: FavoriteArticleRecord) -> None:
        async with self._lock:
            await asyncio.to_thread(self._upsert_sync, record)
        logger.info("storage.favorite_saved", article_id=record.id)
        self._bump()

    async def delete(self, record: FavoriteArticleRecord) -> None:
        await self.delete_by_id(record.id)

    async def delete_by_id(self, article_id: str) -> None:
        async with self._lock:
            removed = await asyncio.to_thread(self._delete_sync, article_id)
        logger.info("storage.favorite_removed", article_id=article_id, removed=removed)
        self._bump()

    # Internal helpers -----------------------------------------------------

    def _bump(self) -> None:
        self._revision.set(self._revision.value + 1)

    def _list_sync(self) -> list[FavoriteArticleRecord]:
        with Session(self._engine, expire_on_commit=False) as session:
            statement = select(FavoriteArticleRecord).order_by(
                FavoriteArticleRecord.published_at.desc()
            )
            return list(session.exec(statement).all())

    def _get_sync(self, article_id: str) -> FavoriteArticleRecord | None:
        with Session(self._engine, expire_on_commit=False) as session:
            return session.get(FavoriteArticleRecord, article_id)

    def _upsert_sync(self, record: FavoriteArticleRecord) -> None:
        payload = record.model_dump()
        with Session(self._engine, expire_on_commit=False) as session:
            existing = session.get(FavoriteArticleRecord, record.id)
            if existing is None:
                existing = FavoriteArticleRecord(**payload)
            else:
                for key, value in payload.items():
                    setattr(existing, key, value)
            session.add(existing)
            session.commit()

    def _delete_sync(self, article_id: str) -> bool:
        with Session(self._engine) as session:
            record = session.get(FavoriteArticleRecord, article_id)
            if record is None:
                return False
            session.delete(record)
            session.commit()
        return True
