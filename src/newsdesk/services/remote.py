"""Remote source backed by the NewsAPI HTTP endpoints."""

from __future__ import annotations

from typing import Any, Protocol

import httpx
import structlog

from newsdesk.models import NewsResponse
from newsdesk.settings import Settings

logger = structlog.get_logger(__name__)

SORT_BY = "publishedAt"
LANGUAGE = "en"


class NewsApiError(RuntimeError):
    """Raised when NewsAPI answers with ``status="error"``."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class NewsSource(Protocol):
    """Paginated read-only news endpoints."""

    async def top_headlines(self, country: str, page: int) -> NewsResponse:
        ...

    async def headlines_by_category(self, category: str, page: int) -> NewsResponse:
        ...

    async def search(self, query: str, page: int) -> NewsResponse:
        ...


class NewsApiClient:
    """Fetches pages from ``top-headlines`` and ``everything``.

    Transport failures, non-2xx statuses and undecodable bodies propagate as
    ``httpx.HTTPError`` or ``ValueError``; API-level errors as ``NewsApiError``.
    """

    name = "newsapi"

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    async def top_headlines(self, country: str, page: int) -> NewsResponse:
        params = {"country": country, "pageSize": self._settings.page_size, "page": page}
        return await self._get("top-headlines", params)

    async def headlines_by_category(self, category: str, page: int) -> NewsResponse:
        params = {
            "category": category,
            "country": self._settings.country,
            "pageSize": self._settings.page_size,
            "page": page,
        }
        return await self._get("top-headlines", params)

    async def search(self, query: str, page: int) -> NewsResponse:
        params = {
            "q": query,
            "sortBy": SORT_BY,
            "pageSize": self._settings.page_size,
            "page": page,
            "language": LANGUAGE,
        }
        return await self._get("everything", params)

    async def _get(self, path: str, params: dict[str, Any]) -> NewsResponse:
        url = self._settings.api_base_url.rstrip("/") + "/" + path
        headers = {"X-Api-Key": self._settings.api_key or ""}
        logger.debug("remote.request", path=path, page=params.get("page"))
        response = await self._client.get(
            url, params=params, headers=headers, timeout=self._settings.timeout
        )
        payload = _error_payload(response)
        if payload is not None:
            raise NewsApiError(
                payload.get("message") or f"NewsAPI request failed ({response.status_code})",
                code=payload.get("code"),
            )
        response.raise_for_status()
        parsed = NewsResponse.model_validate(response.json())
        logger.debug("remote.response", path=path, count=len(parsed.articles), total=parsed.total_results)
        return parsed


def _error_payload(response: httpx.Response) -> dict[str, Any] | None:
    """Return the NewsAPI error body, if the response carries one."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get("status") == "error":
        return data
    return None
