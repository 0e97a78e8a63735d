"""Command-line interface for newsdesk."""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx
import structlog
import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from newsdesk.controllers import (
    CategoryController,
    DetailController,
    Empty,
    Error,
    HeadlinesController,
    Idle,
    PagedController,
    SearchController,
    describe_state,
)
from newsdesk.log import configure_logging
from newsdesk.models import Article
from newsdesk.services import (
    DefaultNewsRepository,
    LocalFavoriteStore,
    NewsApiClient,
    NewsSource,
    Tracker,
)
from newsdesk.settings import Settings, get_settings
from newsdesk.utils import format_published_at

console = Console()
app = typer.Typer(help="newsdesk – headlines, search and favorites from NewsAPI")
logger = structlog.get_logger(__name__)


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    configure_logging(get_settings().log_level)


def _build_tracker(settings: Settings) -> Tracker:
    return Tracker(user_id=settings.user_id)


def _build_source(client: httpx.AsyncClient, settings: Settings) -> NewsSource:
    return NewsApiClient(client=client, settings=settings)


def _build_repository(
    client: httpx.AsyncClient, settings: Settings, tracker: Tracker
) -> DefaultNewsRepository:
    return DefaultNewsRepository(
        source=_build_source(client, settings),
        store=LocalFavoriteStore(settings),
        tracker=tracker,
        default_country=settings.country,
    )


@app.command()
def config(
    json_output: bool = typer.Option(False, "--json", help="Output settings as JSON"),
) -> None:
    """Display the resolved settings."""
    settings = get_settings()
    if json_output:
        typer.echo(settings.model_dump_json(indent=2, exclude={"api_key"}))
        return
    table = Table(title="newsdesk Settings")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in settings.model_dump(exclude={"api_key"}).items():
        table.add_row(key, str(value))
    table.add_row("api_key", "set" if settings.api_key else "—")
    console.print(table)


@app.command()
def headlines(
    country: Optional[str] = typer.Option(None, help="Two-letter country code"),
    pages: int = typer.Option(1, min=1, help="Number of pages to load"),
    save: Optional[int] = typer.Option(None, help="Favorite the article at this index"),
) -> None:
    """Show top headlines."""

    async def runner() -> None:
        settings = get_settings()
        tracker = _build_tracker(settings)
        async with httpx.AsyncClient(timeout=settings.timeout) as client:
            repository = _build_repository(client, settings, tracker)
            controller = HeadlinesController(
                repository, tracker, default_country=settings.country
            )
            with tracker.screen("home", "Top Headlines", {"country": country or settings.country}):
                await controller.load(country)
                tracker.track_timing("home.first_page_loaded")
                await _page_through(controller, tracker, pages)
                await _render_and_save(controller, repository, tracker, save, title="Top Headlines")

    asyncio.run(runner())


@app.command()
def category(
    name: str = typer.Argument(..., help="business, entertainment, health, science, sports, technology"),
    pages: int = typer.Option(1, min=1, help="Number of pages to load"),
    save: Optional[int] = typer.Option(None, help="Favorite the article at this index"),
) -> None:
    """Show headlines for one category."""

    async def runner() -> None:
        settings = get_settings()
        tracker = _build_tracker(settings)
        async with httpx.AsyncClient(timeout=settings.timeout) as client:
            repository = _build_repository(client, settings, tracker)
            controller = CategoryController(repository, tracker)
            with tracker.screen("category", "Categories", {"category": name}):
                await controller.load(name)
                tracker.track_timing("category.first_page_loaded")
                await _page_through(controller, tracker, pages)
                await _render_and_save(controller, repository, tracker, save, title=f"Category: {name}")

    asyncio.run(runner())


@app.command()
def search(
    query: str = typer.Argument(..., help="Free-text query"),
    pages: int = typer.Option(1, min=1, help="Number of pages to load"),
    save: Optional[int] = typer.Option(None, help="Favorite the article at this index"),
) -> None:
    """Search all articles, newest first."""

    async def runner() -> None:
        settings = get_settings()
        tracker = _build_tracker(settings)
        async with httpx.AsyncClient(timeout=settings.timeout) as client:
            repository = _build_repository(client, settings, tracker)
            controller = SearchController(repository, tracker)
            with tracker.screen("search", "Search"):
                await controller.search(query)
                tracker.track_timing("search.first_page_loaded")
                await _page_through(controller, tracker, pages)
                await _render_and_save(controller, repository, tracker, save, title=f"Search: {query}")

    asyncio.run(runner())


@app.command()
def favorites() -> None:
    """List favorited articles, newest first."""

    async def runner() -> None:
        settings = get_settings()
        tracker = _build_tracker(settings)
        tracker.track_fragment_selected("favorites", fragment_id="nav_favorites")
        with tracker.screen("favorites", "Favorites"):
            async with httpx.AsyncClient(timeout=settings.timeout) as client:
                repository = _build_repository(client, settings, tracker)
                stream = repository.observe_favorites()
                try:
                    items = await anext(stream)
                finally:
                    await stream.aclose()
            if not items:
                console.print("[yellow]No favorites yet.")
                return
            _print_articles(items, title="Favorites")

    asyncio.run(runner())


@app.command()
def unfavorite(article_id: str = typer.Argument(..., help="Article id")) -> None:
    """Remove an article from favorites."""

    async def runner() -> None:
        settings = get_settings()
        tracker = _build_tracker(settings)
        store = LocalFavoriteStore(settings)
        with tracker.screen("favorites", "Favorites"):
            tracker.track_button_click("remove_favorite", {"article_id": article_id})
            existed = await store.get(article_id) is not None
            await store.delete_by_id(article_id)
        if existed:
            console.print(f"[green]Removed[/green]: {article_id}")
        else:
            console.print(f"[yellow]Not a favorite[/yellow]: {article_id}")

    asyncio.run(runner())


async def _page_through(controller: PagedController, tracker: Tracker, pages: int) -> None:
    for _ in range(pages - 1):
        if controller.active_key is None or isinstance(controller.state.value, Error):
            return
        tracker.track_button_click("load_more", {"screen": controller.screen})
        await controller.load_more()


async def _render_and_save(
    controller: PagedController,
    repository: DefaultNewsRepository,
    tracker: Tracker,
    save: Optional[int],
    *,
    title: str,
) -> None:
    state = controller.state.value
    if isinstance(state, Error):
        console.print(f"[red]Error[/red]: {state.message}")
        raise typer.Exit(code=1)
    if isinstance(state, Idle):
        console.print("[yellow]Enter a non-blank query.")
        return
    if isinstance(state, Empty):
        console.print(f"[yellow]{describe_state(state).capitalize()}.")
        return
    items = controller.articles.value
    _print_articles(items, title=title)
    if save is None:
        return
    if not 1 <= save <= len(items):
        console.print(f"[red]No article at index {save}.")
        raise typer.Exit(code=1)
    article = items[save - 1]
    tracker.track_item_tap("article", {"position": str(save), "article_id": article.id})
    tracker.track_navigation(controller.screen, "detail", {"article_id": article.id})
    detail = DetailController(repository, tracker)
    with tracker.screen("detail", "Article Detail", {"article_id": article.id}):
        await detail.activate(article)
        if detail.is_favorite.value:
            console.print(f"[yellow]Already a favorite[/yellow]: {article.title}")
            return
        tracker.track_button_click("favorite", {"article_id": article.id})
        await detail.toggle_favorite(article)
        console.print(f"[green]Saved[/green]: {article.title}")


def _print_articles(items: list[Article], *, title: str) -> None:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Title", overflow="fold")
    table.add_column("Source")
    table.add_column("Published")
    table.add_column("ID")
    for index, article in enumerate(items, start=1):
        table.add_row(
            str(index),
            article.title,
            article.source_name or "—",
            format_published_at(article.published_at),
            article.id,
        )
    console.print(table)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Port to bind"),
    reload: bool = typer.Option(False, help="Enable auto-reload"),
) -> None:
    """Launch the JSON API."""
    uvicorn.run(
        "newsdesk.web.app:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )
