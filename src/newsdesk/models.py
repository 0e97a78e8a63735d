"""Core data models used throughout newsdesk."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Article(BaseModel):
    """Domain representation of a news item; identity is derived from its URL."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str | None = None
    url: str
    url_to_image: str | None = None
    published_at: str
    author: str | None = None
    content: str | None = None
    source_name: str | None = None


class WireSource(BaseModel):
    """Publisher block nested in every NewsAPI article."""

    id: str | None = None
    name: str | None = None


class WireArticle(BaseModel):
    """Article record as returned by the NewsAPI endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    source: WireSource = Field(default_factory=WireSource)
    author: str | None = None
    title: str
    description: str | None = None
    url: str
    url_to_image: str | None = Field(default=None, alias="urlToImage")
    published_at: str = Field(alias="publishedAt")
    content: str | None = None


class NewsResponse(BaseModel):
    """Envelope shared by ``top-headlines`` and ``everything``."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    total_results: int = Field(default=0, alias="totalResults")
    articles: list[WireArticle] = Field(default_factory=list)
