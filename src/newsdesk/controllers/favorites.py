"""Favorites and article detail controllers."""

from __future__ import annotations

from collections.abc import AsyncIterator

import structlog

from newsdesk.models import Article
from newsdesk.services.live import LiveValue
from newsdesk.services.repository import NewsRepository
from newsdesk.services.tracking import NullSink, Tracker

logger = structlog.get_logger(__name__)


class FavoritesController:
    """Re-publishes the live favorites listing, newest first."""

    def __init__(self, repository: NewsRepository) -> None:
        self._repository = repository

    def favorites(self) -> AsyncIterator[list[Article]]:
        return self._repository.observe_favorites()

    async def remove_favorite(self, article: Article) -> None:
        await self._repository.remove_favorite(article.id)


class DetailController:
    """Favorite toggle for a single article.

    ``is_favorite`` only changes after the store call has completed.
    """

    def __init__(self, repository: NewsRepository, tracker: Tracker | None = None) -> None:
        self._repository = repository
        self._tracker = tracker or Tracker(NullSink())
        self.is_favorite: LiveValue[bool] = LiveValue(False)

    async def activate(self, article: Article | None) -> None:
        if article is None:
            logger.warning("detail.missing_article")
            return
        self._tracker.track_article_viewed(article.id, article.title, article.source_name)
        await self.check_favorite(article.id)

    async def check_favorite(self, article_id: str) -> None:
        self.is_favorite.set(await self._repository.is_favorite(article_id))

    async def toggle_favorite(self, article: Article) -> None:
        if self.is_favorite.value:
            self._tracker.track_article_unfavorited(article.id, article.title)
            await self._repository.remove_favorite(article.id)
            self.is_favorite.set(False)
        else:
            self._tracker.track_article_favorited(article.id, article.title)
            await self._repository.add_favorite(article)
            self.is_favorite.set(True)

    def share(self, article: Article, method: str = "unknown") -> None:
        self._tracker.track_article_shared(article.id, article.title, method)
