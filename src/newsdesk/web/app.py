"""FastAPI JSON surface for newsdesk."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, HTTPException, Response, status

from newsdesk.models import Article
from newsdesk.result import Result
from newsdesk.services import (
    DefaultNewsRepository,
    LocalFavoriteStore,
    NewsApiClient,
    NewsRepository,
    Tracker,
)
from newsdesk.settings import Settings
from newsdesk.utils import article_id_for_url, is_blank


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[NewsRepository] = None,
) -> FastAPI:
    """Factory used by uvicorn; tests pass their own repository."""
    settings = settings or Settings.load()
    holder: dict[str, NewsRepository] = {}

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if repository is not None:
            holder["repository"] = repository
            yield
            return
        async with httpx.AsyncClient(timeout=settings.timeout) as client:
            holder["repository"] = DefaultNewsRepository(
                source=NewsApiClient(client=client, settings=settings),
                store=LocalFavoriteStore(settings),
                tracker=Tracker(user_id=settings.user_id),
                default_country=settings.country,
            )
            yield

    app = FastAPI(title="newsdesk", lifespan=lifespan)

    def repo() -> NewsRepository:
        return holder["repository"]

    @app.get("/headlines")
    async def headlines(country: Optional[str] = None, page: int = 1) -> list[Article]:
        return _unwrap(await repo().get_top_headlines(country, page))

    @app.get("/categories/{name}")
    async def category(name: str, page: int = 1) -> list[Article]:
        return _unwrap(await repo().get_headlines_by_category(name, page))

    @app.get("/search")
    async def search(q: str = "", page: int = 1) -> list[Article]:
        if is_blank(q):
            return []
        return _unwrap(await repo().search_articles(q, page))

    @app.get("/favorites")
    async def favorites() -> list[Article]:
        stream = repo().observe_favorites()
        try:
            return await anext(stream)
        finally:
            await stream.aclose()

    @app.get("/favorites/{article_id}")
    async def favorite_status(article_id: str) -> dict:
        return {"id": article_id, "favorite": await repo().is_favorite(article_id)}

    @app.post("/favorites", status_code=status.HTTP_201_CREATED)
    async def add_favorite(article: Article) -> Article:
        article = article.model_copy(update={"id": article_id_for_url(article.url)})
        await repo().add_favorite(article)
        return article

    @app.delete("/favorites/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def remove_favorite(article_id: str) -> Response:
        await repo().remove_favorite(article_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


def _unwrap(result: Result[list[Article]]) -> list[Article]:
    if result.is_failure:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.error_message())
    return result.value or []

