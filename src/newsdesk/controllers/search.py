"""Full-text search screen controller."""

from __future__ import annotations

import structlog

from newsdesk.models import Article
from newsdesk.result import Result
from newsdesk.utils import is_blank
from .paging import PagedController
from .states import EMPTY, IDLE, SUCCESS, ScreenState

logger = structlog.get_logger(__name__)


class SearchController(PagedController):
    """Paged search results; a blank query returns the screen to ``Idle``.

    Non-blank queries are used verbatim as the cursor key, so ``"mars"`` and
    ``" mars"`` are different searches.
    """

    screen = "search"
    key_name = "query"

    async def search(self, query: str) -> None:
        if is_blank(query):
            self._reset(None)
            self.state.set(IDLE)
            logger.debug("search.cleared")
            return
        self._tracker.track_search_performed(query)
        await self._load(query)

    async def _fetch(self, key: str, page: int) -> Result[list[Article]]:
        return await self._repository.search_articles(key, page)

    def _state_for(self, batch: list[Article]) -> ScreenState:
        return EMPTY if not batch else SUCCESS
