"""Service abstractions for newsdesk."""

from .live import LiveValue
from .remote import NewsApiClient, NewsApiError, NewsSource
from .repository import DefaultNewsRepository, NewsRepository
from .storage import FavoriteStore, LocalFavoriteStore
from .tracking import EventSink, NullSink, StructlogSink, Tracker

__all__ = [
    "LiveValue",
    "NewsApiClient",
    "NewsApiError",
    "NewsSource",
    "NewsRepository",
    "DefaultNewsRepository",
    "FavoriteStore",
    "LocalFavoriteStore",
    "EventSink",
    "NullSink",
    "StructlogSink",
    "Tracker",
]
