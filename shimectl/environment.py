"""Screen geometry and the environment that mascots move around in."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Tuple

__all__ = ["Rect", "ActiveWindow", "Environment", "SUBTICK_COUNT"]

log = logging.getLogger(__name__)

SUBTICK_COUNT = 4
"""Number of simulation steps per 40 ms frame."""

_HIDDEN_EDGE = -50.0


@dataclass(frozen=True)
class Rect:
    """An integer rectangle whose right and bottom edges are inclusive."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def right(self) -> int:
        """Column of the last pixel inside the rectangle."""
        return self.x + self.width - 1

    def bottom(self) -> int:
        """Row of the last pixel inside the rectangle."""
        return self.y + self.height - 1


@dataclass(frozen=True)
class ActiveWindow:
    """The focused window as reported by the window observer."""

    uid: str = ""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    available: bool = False


class _Area(NamedTuple):
    top: float
    right: float
    bottom: float
    left: float
    dx: float = 0.0
    dy: float = 0.0

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def visible(self) -> bool:
        return self.width > 0 and self.height > 0


class _Border(NamedTuple):
    y: float
    start: float
    end: float


class _Cursor(NamedTuple):
    x: float
    y: float
    dx: float = 0.0
    dy: float = 0.0


_EMPTY_AREA = _Area(0.0, 0.0, 0.0, 0.0)
_EMPTY_BORDER = _Border(0.0, 0.0, 0.0)


@dataclass
class Environment:
    """Boundaries, cursor and active window seen by mascots on one screen."""

    screen: _Area = _EMPTY_AREA
    floor: _Border = _EMPTY_BORDER
    work_area: _Area = _EMPTY_AREA
    ceiling: _Border = _EMPTY_BORDER
    active_ie: _Area = _EMPTY_AREA
    cursor: _Cursor = field(default_factory=lambda: _Cursor(0.0, 0.0))
    subtick_count: int = 1
    scale: float = 1.0
    allows_breeding: bool = True

    def update(
        self,
        geometry: Optional[Rect],
        available: Optional[Rect],
        cursor: Tuple[int, int],
        current_window: ActiveWindow,
        previous_window: ActiveWindow,
        windowed: bool,
        user_scale: float,
    ) -> None:
        """Refresh the environment from the screen state of this frame.

        In windowed mode ``geometry`` is the sandbox window's geometry (or
        ``None`` if there is no sandbox), ``available`` is ignored and
        ``cursor`` is in global coordinates; the environment is then
        expressed relative to the sandbox.
        """
        if user_scale <= 0:
            raise ValueError(f"user scale must be positive, got {user_scale!r}")

        if windowed:
            if geometry is not None:
                cursor = (cursor[0] - geometry.x, cursor[1] - geometry.y)
                geometry = Rect(0, 0, geometry.width + 1, geometry.height + 1)
                available = geometry
            else:
                log.warning("sandbox window is not initialized")
                geometry = available = Rect()
                cursor = (0, 0)
        elif geometry is None or available is None:
            raise ValueError("screen geometry is required outside windowed mode")

        taskbar_height = max(available.bottom() - geometry.bottom(), 0)
        status_bar_height = max(geometry.top_edge() if False else geometry.y - available.y, 0)

        top = float(geometry.y)
        left = float(geometry.x)
        right = float(geometry.right())
        bottom = float(geometry.bottom())

        self.screen = _Area(top + status_bar_height, right, bottom, left)
        self.floor = _Border(bottom - taskbar_height, left, right)
        self.work_area = _Area(top, right, bottom - taskbar_height, left)
        self.ceiling = _Border(top, left, right)

        win = current_window
        if (
            not windowed
            and win.available
            and abs(win.x) > 1
            and abs(win.y) > 1
        ):
            dx = dy = 0.0
            prev = previous_window
            if prev.available and prev.uid == win.uid:
                dy = win.y - prev.y
                if dy == 0:
                    dy = win.height - prev.height
                dx = win.x - prev.x
                if dx == 0:
                    dx = win.width - prev.width
            self.active_ie = _Area(
                win.y, win.x + win.width, win.y + win.height, win.x, dx, dy
            )
        else:
            self.active_ie = _Area(_HIDDEN_EDGE, _HIDDEN_EDGE, _HIDDEN_EDGE, _HIDDEN_EDGE)

        x, y = int(cursor[0]), int(cursor[1])
        self.cursor = _Cursor(float(x), float(y), x - self.cursor.x, y - self.cursor.y)
        self.subtick_count = SUBTICK_COUNT
        self.scale = 1.0 / math.sqrt(user_scale)