import pytest

from newsdesk.services.tracking import NullSink, StructlogSink, Tracker


class _RecordingSink:
    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, str]]] = []

    def emit(self, kind: str, name: str, attributes) -> None:
        self.events.append((kind, name, dict(attributes)))


def test_every_call_carries_user_id() -> None:
    sink = _RecordingSink()
    tracker = Tracker(sink, user_id="u-42")

    tracker.start_screen("home-1", "Home", {"tab": "top"})
    tracker.stop_screen("home-1")
    tracker.track_timing("first_page_rendered")

    assert [event[0] for event in sink.events] == ["view_start", "view_stop", "timing"]
    assert all(event[2]["user_id"] == "u-42" for event in sink.events)
    assert sink.events[0][2]["screen_name"] == "Home"
    assert sink.events[0][2]["tab"] == "top"


def test_business_events_are_custom_actions() -> None:
    sink = _RecordingSink()
    tracker = Tracker(sink)

    tracker.track_search_performed("solar")
    tracker.track_article_viewed("7", "Sun", None)
    tracker.track_navigation("home", "detail")

    search, viewed, navigation = sink.events
    assert search[:2] == ("action", "search_performed")
    assert search[2]["query_length"] == "5"
    assert search[2]["event_type"] == "business"
    assert search[2]["action_type"] == "custom"
    assert viewed[2]["article_source"] == "unknown"
    assert navigation[1] == "navigation"
    assert navigation[2]["to_screen"] == "detail"


def test_click_and_tap_names() -> None:
    sink = _RecordingSink()
    tracker = Tracker(sink)

    tracker.track_button_click("refresh")
    tracker.track_item_tap("article", {"position": "3"})
    tracker.track_fragment_selected("favorites", fragment_id="nav_favorites")

    assert sink.events[0][1] == "button_clicked_refresh"
    assert sink.events[0][2]["action_type"] == "click"
    assert sink.events[1][1] == "item_tapped_article"
    assert sink.events[1][2]["position"] == "3"
    assert sink.events[2][2]["fragment_id"] == "nav_favorites"


def test_errors_record_type_and_source() -> None:
    sink = _RecordingSink()
    tracker = Tracker(sink)

    tracker.track_network_error("Failed", TimeoutError("slow"), {"endpoint": "everything"})

    kind, name, attributes = sink.events[0]
    assert (kind, name) == ("error", "Failed")
    assert attributes["error_type"] == "TimeoutError"
    assert attributes["error_source"] == "network"
    assert attributes["endpoint"] == "everything"


def test_sink_failures_are_swallowed() -> None:
    class Broken:
        def emit(self, kind, name, attributes):
            raise OSError("agent unreachable")

    tracker = Tracker(Broken())
    tracker.track_category_selected("health")
    tracker.track_article_shared("1", "t", "email")


def test_default_sinks_accept_events() -> None:
    Tracker(NullSink()).track_event("noop")
    Tracker(StructlogSink(), user_id="u").track_article_favorited("1", "Title")
    Tracker().track_article_unfavorited("1", "Title")


def test_screen_block_stops_even_when_it_raises() -> None:
    sink = _RecordingSink()
    tracker = Tracker(sink)

    with pytest.raises(KeyError):
        with tracker.screen("detail", "Article Detail", {"article_id": "7"}):
            raise KeyError("7")

    assert [(event[0], event[1]) for event in sink.events] == [
        ("view_start", "detail"),
        ("view_stop", "detail"),
    ]
    assert sink.events[0][2]["article_id"] == "7"
