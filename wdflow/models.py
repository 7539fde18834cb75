"""Value types shared by sessions and elements."""

from __future__ import annotations

from dataclasses import dataclass


DEFAULT_SCRIPT_TIMEOUT = 60.0
DEFAULT_PAGE_LOAD_TIMEOUT = 60.0
DEFAULT_IMPLICIT_WAIT = 0.0


@dataclass(slots=True, frozen=True)
class ElementRect:
    """Position and size of an element, in CSS pixels."""

    x: float
    y: float
    width: float
    height: float

    def center(self) -> tuple[float, float]:
        """Return the centre point of the rectangle."""

        return self.x + self.width / 2, self.y + self.height / 2

    def icenter(self) -> tuple[int, int]:
        x, y = self.center()
        return int(x), int(y)


@dataclass(slots=True, frozen=True)
class WindowRect:
    """Position and size of the current top-level browsing context."""

    x: int
    y: int
    width: int
    height: int


@dataclass(slots=True, frozen=True)
class TimeoutConfiguration:
    """Session timeouts in seconds. ``None`` leaves a timeout untouched."""

    script: float | None = DEFAULT_SCRIPT_TIMEOUT
    page_load: float | None = DEFAULT_PAGE_LOAD_TIMEOUT
    implicit: float | None = DEFAULT_IMPLICIT_WAIT


__all__ = [
    "DEFAULT_IMPLICIT_WAIT",
    "DEFAULT_PAGE_LOAD_TIMEOUT",
    "DEFAULT_SCRIPT_TIMEOUT",
    "ElementRect",
    "TimeoutConfiguration",
    "WindowRect",
]
