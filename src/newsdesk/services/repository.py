"""Repository that unifies the remote news source and local favorites."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Protocol

import httpx
import structlog

from newsdesk.mapper import article_to_record, record_to_article, wire_to_article
from newsdesk.models import Article, NewsResponse
from newsdesk.result import Result
from .remote import NewsApiError, NewsSource
from .storage import FavoriteStore
from .tracking import Tracker

logger = structlog.get_logger(__name__)

# InvalidURL is not an HTTPError; httpx raises it for over-long query params.
# ValueError covers invalid JSON bodies and pydantic validation failures.
REMOTE_ERRORS = (httpx.HTTPError, httpx.InvalidURL, NewsApiError, ValueError)


class NewsRepository(Protocol):
    """Domain-facing contract consumed by the screen controllers."""

    async def get_top_headlines(self, country: str | None = None, page: int = 1) -> Result[list[Article]]:
        ...

    async def get_headlines_by_category(self, category: str, page: int = 1) -> Result[list[Article]]:
        ...

    async def search_articles(self, query: str, page: int = 1) -> Result[list[Article]]:
        ...

    def observe_favorites(self) -> AsyncIterator[list[Article]]:
        ...

    async def add_favorite(self, article: Article) -> None:
        ...

    async def remove_favorite(self, article_id: str) -> None:
        ...

    async def is_favorite(self, article_id: str) -> bool:
        ...


class DefaultNewsRepository(NewsRepository):
    """Converts remote failures into ``Result`` values and reports them."""

    def __init__(
        self,
        source: NewsSource,
        store: FavoriteStore,
        tracker: Tracker,
        *,
        default_country: str = "us",
    ) -> None:
        self._source = source
        self._store = store
        self._tracker = tracker
        self._default_country = default_country

    async def get_top_headlines(self, country: str | None = None, page: int = 1) -> Result[list[Article]]:
        country = country or self._default_country
        return await self._fetch(
            lambda: self._source.top_headlines(country, page),
            message="Failed to load top headlines",
            attributes={"endpoint": "top-headlines", "country": country, "page": str(page)},
        )

    async def get_headlines_by_category(self, category: str, page: int = 1) -> Result[list[Article]]:
        return await self._fetch(
            lambda: self._source.headlines_by_category(category, page),
            message="Failed to load headlines by category",
            attributes={"endpoint": "headlines-by-category", "category": category, "page": str(page)},
        )

    async def search_articles(self, query: str, page: int = 1) -> Result[list[Article]]:
        return await self._fetch(
            lambda: self._source.search(query, page),
            message="Failed to search news",
            attributes={"endpoint": "search-news", "query": query, "page": str(page)},
        )

    async def observe_favorites(self) -> AsyncIterator[list[Article]]:
        listings = self._store.watch_all()
        try:
            async for records in listings:
                yield [record_to_article(record) for record in records]
        finally:
            await listings.aclose()

    async def add_favorite(self, article: Article) -> None:
        await self._store.upsert(article_to_record(article))

    async def remove_favorite(self, article_id: str) -> None:
        await self._store.delete_by_id(article_id)

    async def is_favorite(self, article_id: str) -> bool:
        return await self._store.get(article_id) is not None

    async def _fetch(
        self,
        call: Callable[[], Awaitable[NewsResponse]],
        *,
        message: str,
        attributes: dict[str, str],
    ) -> Result[list[Article]]:
        try:
            response = await call()
            articles = [wire_to_article(item) for item in response.articles]
        except REMOTE_ERRORS as exc:
            logger.warning("repository.remote_failed", error=str(exc), **attributes)
            self._tracker.track_network_error(message, exc, attributes)
            return Result.failure(exc)
        logger.debug("repository.remote_loaded", count=len(articles), **attributes)
        return Result.success(articles)
