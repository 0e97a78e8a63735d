"""Success-or-failure wrapper returned by the repository instead of raising."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")

DEFAULT_ERROR_MESSAGE = "Unknown error"


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Carries either a value or the exception that prevented producing one."""

    value: T | None = None
    error: BaseException | None = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "Result[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def get_or_none(self) -> T | None:
        return self.value if self.is_success else None

    def get_or_raise(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def map(self, transform: Callable[[T], U]) -> "Result[U]":
        if self.error is not None:
            return Result.failure(self.error)
        return Result.success(transform(self.value))  # type: ignore[arg-type]

    def fold(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[BaseException], R],
    ) -> R:
        if self.error is not None:
            return on_failure(self.error)
        return on_success(self.value)  # type: ignore[arg-type]

    def error_message(self, default: str = DEFAULT_ERROR_MESSAGE) -> str:
        """Message of the carried error, or ``default`` when it has none."""
        if self.error is None:
            return ""
        return str(self.error) or default
