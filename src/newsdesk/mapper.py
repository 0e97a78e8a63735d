"""Conversions between wire, domain and persisted article shapes."""

from __future__ import annotations

from newsdesk.db import FavoriteArticleRecord
from newsdesk.models import Article, WireArticle
from newsdesk.utils import article_id_for_url


def wire_to_article(wire: WireArticle) -> Article:
    """Build the domain article; the publisher's source id is discarded."""
    return Article(
        id=article_id_for_url(wire.url),
        title=wire.title,
        description=wire.description,
        url=wire.url,
        url_to_image=wire.url_to_image,
        published_at=wire.published_at,
        author=wire.author,
        content=wire.content,
        source_name=wire.source.name,
    )


def article_to_record(article: Article) -> FavoriteArticleRecord:
    return FavoriteArticleRecord(
        id=article.id,
        title=article.title,
        description=article.description,
        url=article.url,
        url_to_image=article.url_to_image,
        published_at=article.published_at,
        author=article.author,
        content=article.content,
        source_name=article.source_name,
    )


def record_to_article(record: FavoriteArticleRecord) -> Article:
    return Article(
        id=record.id,
        title=record.title,
        description=record.description,
        url=record.url,
        url_to_image=record.url_to_image,
        published_at=record.published_at,
        author=record.author,
        content=record.content,
        source_name=record.source_name,
    )
