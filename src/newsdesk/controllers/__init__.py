"""Per-screen state controllers."""

from .favorites import DetailController, FavoritesController
from .paging import CategoryController, HeadlinesController, PagedController
from .search import SearchController
from .states import (
    EMPTY,
    IDLE,
    LOADING,
    SUCCESS,
    Empty,
    Error,
    Idle,
    Loading,
    ScreenState,
    Success,
    describe_state,
)

__all__ = [
    "PagedController",
    "HeadlinesController",
    "CategoryController",
    "SearchController",
    "FavoritesController",
    "DetailController",
    "ScreenState",
    "Idle",
    "Loading",
    "Success",
    "Empty",
    "Error",
    "IDLE",
    "LOADING",
    "SUCCESS",
    "EMPTY",
    "describe_state",
]
