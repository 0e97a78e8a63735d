"""Utility helpers for article identity and display formatting."""

from __future__ import annotations

from datetime import datetime

PUBLISHED_INPUT_FORMATS = ("%Y-%m-%dT%H:%M:%SZ", "%Y-%m-%dT%H:%M:%S")
PUBLISHED_OUTPUT_FORMAT = "%b %d, %Y at %I:%M %p"


def article_id_for_url(url: str) -> str:
    """Return the stable article id for ``url``.

    The id is the 31-multiplier polynomial hash over the UTF-16 code units of
    the URL, wrapped to a signed 32-bit integer. It does not depend on
    ``PYTHONHASHSEED``; distinct URLs may collide.
    """
    encoded = url.encode("utf-16-be")
    value = 0
    for index in range(0, len(encoded), 2):
        unit = (encoded[index] << 8) | encoded[index + 1]
        value = (31 * value + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return str(value)


def format_published_at(value: str) -> str:
    """Render an API timestamp for display, or return it unchanged."""
    for fmt in PUBLISHED_INPUT_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return parsed.strftime(PUBLISHED_OUTPUT_FORMAT)
    return value


def is_blank(value: str | None) -> bool:
    """True for ``None``, the empty string and whitespace-only strings."""
    return not value or not value.strip()
