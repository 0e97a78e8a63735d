"""Screen states published by the controllers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Loading:
    pass


@dataclass(frozen=True, slots=True)
class Success:
    pass


@dataclass(frozen=True, slots=True)
class Empty:
    pass


@dataclass(frozen=True, slots=True)
class Error:
    message: str


ScreenState = Union[Idle, Loading, Success, Empty, Error]

IDLE = Idle()
LOADING = Loading()
SUCCESS = Success()
EMPTY = Empty()


def describe_state(state: ScreenState) -> str:
    """Short human-readable label for a state; rejects unknown variants."""
    if isinstance(state, Idle):
        return "idle"
    if isinstance(state, Loading):
        return "loading"
    if isinstance(state, Success):
        return "success"
    if isinstance(state, Empty):
        return "no results"
    if isinstance(state, Error):
        return f"error: {state.message}"
    raise TypeError(f"Unknown screen state: {state!r}")
