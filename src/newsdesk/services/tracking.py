"""Fire-and-forget user-behaviour tracking.

The ``Tracker`` is injected into the repository and the screen controllers.
It flattens every call into ``(kind, name, attributes)`` and hands it to an
``EventSink``. Sinks are external collaborators: whatever they raise is logged
and dropped so that tracking never changes application behaviour.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Protocol

import structlog

logger = structlog.get_logger(__name__)

ACTION_CLICK = "click"
ACTION_TAP = "tap"
ACTION_CUSTOM = "custom"

ERROR_SOURCE_APP = "source"
ERROR_SOURCE_NETWORK = "network"


class EventSink(Protocol):
    """Receives flattened tracking calls."""

    def emit(self, kind: str, name: str, attributes: Mapping[str, str]) -> None:
        ...


class StructlogSink:
    """Writes every tracking call to the structlog stream."""

    def __init__(self) -> None:
        self._logger = structlog.get_logger("newsdesk.tracking.events")

    def emit(self, kind: str, name: str, attributes: Mapping[str, str]) -> None:
        self._logger.info(f"track.{kind}", name=name, **dict(attributes))


class NullSink:
    def emit(self, kind: str, name: str, attributes: Mapping[str, str]) -> None:
        return None


class Tracker:
    """Screen lifecycle, action, error and business-event tracking."""

    def __init__(self, sink: EventSink | None = None, *, user_id: str = "anonymous") -> None:
        self._sink = sink or StructlogSink()
        self._user_id = user_id

    @property
    def user_id(self) -> str:
        return self._user_id

    # Screens --------------------------------------------------------------

    def start_screen(
        self, view_key: str, screen_name: str, attributes: Mapping[str, str] | None = None
    ) -> None:
        payload = {**(attributes or {}), "screen_name": screen_name, "screen_type": "manual"}
        self._emit("view_start", view_key, payload)

    def stop_screen(self, view_key: str) -> None:
        self._emit("view_stop", view_key, {})

    @contextmanager
    def screen(
        self, view_key: str, screen_name: str, attributes: Mapping[str, str] | None = None
    ) -> Iterator[None]:
        """Bracket a block with start and stop notifications for one screen."""
        self.start_screen(view_key, screen_name, attributes)
        try:
            yield
        finally:
            self.stop_screen(view_key)

    # Actions and events ---------------------------------------------------

    def track_action(
        self, action_type: str, action_name: str, attributes: Mapping[str, str] | None = None
    ) -> None:
        payload = {**(attributes or {}), "action_type": action_type}
        self._emit("action", action_name, payload)

    def track_button_click(self, button_name: str, attributes: Mapping[str, str] | None = None) -> None:
        self.track_action(ACTION_CLICK, f"button_clicked_{button_name}", attributes)

    def track_item_tap(self, item_name: str, attributes: Mapping[str, str] | None = None) -> None:
        self.track_action(ACTION_TAP, f"item_tapped_{item_name}", attributes)

    def track_event(self, event_name: str, attributes: Mapping[str, str] | None = None) -> None:
        payload = {**(attributes or {}), "event_type": "business"}
        self.track_action(ACTION_CUSTOM, event_name, payload)

    def track_timing(self, timing_name: str) -> None:
        self._emit("timing", timing_name, {})

    # Errors ---------------------------------------------------------------

    def track_error(
        self,
        message: str,
        error: BaseException | None = None,
        source: str = ERROR_SOURCE_APP,
        attributes: Mapping[str, str] | None = None,
    ) -> None:
        payload = {**(attributes or {}), "error_source": source}
        if error is not None:
            payload["error_type"] = type(error).__name__
            payload["error_message"] = str(error)
        self._emit("error", message, payload)

    def track_network_error(
        self,
        message: str,
        error: BaseException | None = None,
        attributes: Mapping[str, str] | None = None,
    ) -> None:
        self.track_error(message, error, ERROR_SOURCE_NETWORK, attributes)

    # Business events ------------------------------------------------------

    def track_article_viewed(self, article_id: str, title: str, source: str | None = None) -> None:
        self.track_event(
            "article_viewed",
            {"article_id": article_id, "article_title": title, "article_source": source or "unknown"},
        )

    def track_article_favorited(self, article_id: str, title: str) -> None:
        self.track_event("article_favorited", {"article_id": article_id, "article_title": title})

    def track_article_unfavorited(self, article_id: str, title: str) -> None:
        self.track_event("article_unfavorited", {"article_id": article_id, "article_title": title})

    def track_article_shared(self, article_id: str, title: str, share_method: str = "unknown") -> None:
        self.track_event(
            "article_shared",
            {"article_id": article_id, "article_title": title, "share_method": share_method},
        )

    def track_search_performed(self, query: str) -> None:
        self.track_event("search_performed", {"search_query": query, "query_length": str(len(query))})

    def track_category_selected(self, category: str) -> None:
        self.track_event("category_selected", {"category": category})

    def track_fragment_selected(self, fragment_name: str, fragment_id: str | None = None) -> None:
        attributes = {"fragment_name": fragment_name}
        if fragment_id is not None:
            attributes["fragment_id"] = fragment_id
        self.track_event("fragment_selected", attributes)

    def track_navigation(
        self, from_screen: str, to_screen: str, attributes: Mapping[str, str] | None = None
    ) -> None:
        payload = {**(attributes or {}), "from_screen": from_screen, "to_screen": to_screen}
        self.track_action(ACTION_CUSTOM, "navigation", payload)

    def _emit(self, kind: str, name: str, attributes: Mapping[str, str]) -> None:
        payload = {key: str(value) for key, value in attributes.items()}
        payload["user_id"] = self._user_id
        try:
            self._sink.emit(kind, name, payload)
        except Exception as exc:  # noqa: BLE001 - the sink must never break callers
            logger.warning("tracking.sink_failed", kind=kind, name=name, error=str(exc))
