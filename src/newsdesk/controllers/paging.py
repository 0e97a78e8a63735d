"""Paginated screen controllers for headlines and categories."""

from __future__ import annotations

import structlog

from newsdesk.models import Article
from newsdesk.result import Result
from newsdesk.services.live import LiveValue
from newsdesk.services.repository import NewsRepository
from newsdesk.services.tracking import NullSink, Tracker
from .states import IDLE, LOADING, SUCCESS, Error, ScreenState

logger = structlog.get_logger(__name__)


class PagedController:
    """Cursor over one paginated query, published as live state + articles.

    Switching to a new key resets the cursor before the fetch starts. Pages
    for the same key are appended as-is, so overlapping pages from the API
    show up twice. A response that arrives after the key has changed (or the
    screen was refreshed) is dropped.
    """

    screen = "paged"
    key_name = "key"

    def __init__(self, repository: NewsRepository, tracker: Tracker | None = None) -> None:
        self._repository = repository
        self._tracker = tracker or Tracker(NullSink())
        self.state: LiveValue[ScreenState] = LiveValue(IDLE)
        self.articles: LiveValue[list[Article]] = LiveValue([])
        self._active_key: str | None = None
        self._page = 1
        self._generation = 0

    @property
    def active_key(self) -> str | None:
        return self._active_key

    @property
    def page(self) -> int:
        return self._page

    async def refresh(self) -> None:
        if self._active_key is None:
            return
        self._reset(self._active_key)
        await self._load(self._active_key)

    async def load_more(self) -> None:
        key = self._active_key
        if key is None:
            logger.debug("controller.load_more_skipped", screen=self.screen)
            return
        self._page += 1
        page = self._page
        generation = self._generation
        result = await self._fetch(key, page)
        if generation != self._generation:
            self._log_stale("load_more", key, page)
            return
        if result.is_failure:
            logger.error(
                "controller.load_more_failed",
                screen=self.screen,
                action="load_more",
                page=str(page),
                error=result.error_message(),
                **{self.key_name: key},
            )
            return
        self.articles.set(self.articles.value + result.value)

    async def _fetch(self, key: str, page: int) -> Result[list[Article]]:
        raise NotImplementedError

    def _state_for(self, batch: list[Article]) -> ScreenState:
        return SUCCESS

    def _reset(self, key: str | None) -> None:
        self._active_key = key
        self._page = 1
        self._generation += 1
        self.articles.set([])

    async def _load(self, key: str) -> None:
        if key != self._active_key:
            self._reset(key)
        page = self._page
        generation = self._generation
        self.state.set(LOADING)
        result = await self._fetch(key, page)
        if generation != self._generation:
            self._log_stale("load", key, page)
            return
        if result.is_failure:
            logger.error(
                "controller.load_failed",
                screen=self.screen,
                action="load",
                page=str(page),
                error=result.error_message(),
                **{self.key_name: key},
            )
            self.state.set(Error(result.error_message()))
            return
        batch = result.value
        self.articles.set(self.articles.value + batch)
        self.state.set(self._state_for(batch))

    def _log_stale(self, action: str, key: str, page: int) -> None:
        logger.info(
            "controller.stale_response_dropped",
            screen=self.screen,
            action=action,
            page=str(page),
            **{self.key_name: key},
        )


class HeadlinesController(PagedController):
    """Top headlines for a country."""

    screen = "home"
    key_name = "country"

    def __init__(
        self,
        repository: NewsRepository,
        tracker: Tracker | None = None,
        *,
        default_country: str = "us",
    ) -> None:
        super().__init__(repository, tracker)
        self._default_country = default_country

    async def load(self, country: str | None = None) -> None:
        """Fetch the current page for ``country``.

        Reloading the active country appends that page again without
        de-duplication; use ``refresh()`` to start over from page 1.
        """
        await self._load(country or self._default_country)

    async def _fetch(self, key: str, page: int) -> Result[list[Article]]:
        return await self._repository.get_top_headlines(key, page)


class CategoryController(PagedController):
    screen = "category"
    key_name = "category"

    async def load(self, category: str) -> None:
        if category != self._active_key:
            self._tracker.track_category_selected(category)
        await self._load(category)

    async def _fetch(self, key: str, page: int) -> Result[list[Article]]:
        return await self._repository.get_headlines_by_category(key, page)
