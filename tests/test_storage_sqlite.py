from pathlib import Path

import pytest

from newsdesk.db import FavoriteArticleRecord, SCHEMA_VERSION, schema_version
from newsdesk.services.storage import LocalFavoriteStore
from newsdesk.settings import Settings


def _record(article_id: str, published_at: str, title: str = "Title") -> FavoriteArticleRecord:
    return FavoriteArticleRecord(
        id=article_id,
        title=title,
        url=f"https://example.com/{article_id}",
        published_at=published_at,
        source_name="Example",
    )


@pytest.mark.asyncio
async def test_upsert_get_and_replace(tmp_path: Path) -> None:
    store = LocalFavoriteStore(Settings(data_dir=tmp_path))

    await store.upsert(_record("1", "2024-01-01T00:00:00Z", title="Original"))
    await store.upsert(_record("1", "2024-01-01T00:00:00Z", title="Replaced"))

    found = await store.get("1")
    assert found is not None
    assert found.title == "Replaced"
    assert len(await store.list_all()) == 1
    assert await store.get("missing") is None


@pytest.mark.asyncio
async def test_list_all_orders_by_published_desc(tmp_path: Path) -> None:
    store = LocalFavoriteStore(Settings(data_dir=tmp_path))
    await store.upsert(_record("old", "2023-05-01T08:00:00Z"))
    await store.upsert(_record("new", "2024-02-01T08:00:00Z"))
    await store.upsert(_record("mid", "2023-12-24T08:00:00Z"))

    ids = [record.id for record in await store.list_all()]
    assert ids == ["new", "mid", "old"]


@pytest.mark.asyncio
async def test_delete_by_id_and_entity_are_idempotent(tmp_path: Path) -> None:
    store = LocalFavoriteStore(Settings(data_dir=tmp_path))
    record = _record("1", "2024-01-01T00:00:00Z")
    await store.upsert(record)
    await store.upsert(_record("2", "2024-01-02T00:00:00Z"))

    await store.delete(record)
    await store.delete(record)
    await store.delete_by_id("2")
    await store.delete_by_id("never-stored")

    assert await store.list_all() == []


@pytest.mark.asyncio
async def test_watch_all_emits_on_subscribe_and_after_writes(tmp_path: Path) -> None:
    store = LocalFavoriteStore(Settings(data_dir=tmp_path))
    stream = store.watch_all()

    assert await anext(stream) == []

    await store.upsert(_record("1", "2024-01-01T00:00:00Z"))
    assert [record.id for record in await anext(stream)] == ["1"]

    await store.delete_by_id("1")
    assert await anext(stream) == []
    await stream.aclose()


@pytest.mark.asyncio
async def test_favorites_survive_a_new_store_instance(tmp_path: Path) -> None:
    settings = Settings(data_dir=tmp_path)
    await LocalFavoriteStore(settings).upsert(_record("1", "2024-01-01T00:00:00Z"))

    reopened = LocalFavoriteStore(settings)
    assert await reopened.get("1") is not None
    assert schema_version(reopened._engine) == SCHEMA_VERSION
