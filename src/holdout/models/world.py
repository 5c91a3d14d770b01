"""World model — the building, its walls and its barricaded windows.

Static geometry: the wall list is derived once from the building
rectangle with a gap cut out for each window. Windows are the only
mutable part (plank count, repair progress, pop-in animation).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from holdout.util.constants import (
    APPROACH_OFFSET,
    BUILDING_H,
    BUILDING_W,
    BUILDING_X,
    BUILDING_Y,
    ENTRY_OFFSET,
    MAX_PLANKS,
    PATH_PADDING,
    WALL_THICKNESS,
    WINDOW_GAP,
)
from holdout.util.geometry import Rect


class Side(str, Enum):
    """Which wall of the building a window sits in."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    @property
    def is_horizontal(self) -> bool:
        return self in (Side.TOP, Side.BOTTOM)


@dataclass
class Window:
    """A gap in one of the walls, covered by up to MAX_PLANKS planks.

    Attributes:
        index: Position in Building.windows (used on the wire).
        rect: The gap itself.
        side: Wall the window belongs to.
        planks: Current plank count, always in [0, MAX_PLANKS].
        repair_progress: Progress toward the next plank, in [0, 1].
        pop: Pop-in animation phase for the latest plank, 1 = settled.
    """

    index: int
    rect: Rect
    side: Side
    planks: int = MAX_PLANKS
    repair_progress: float = 0.0
    pop: float = 1.0

    @property
    def center(self) -> tuple[float, float]:
        return self.rect.center

    @property
    def is_full(self) -> bool:
        return self.planks >= MAX_PLANKS

    @property
    def approach_point(self) -> tuple[float, float]:
        """Point just outside the wall face where zombies gather."""
        cx, cy = self.center
        if self.side is Side.TOP:
            return (cx, self.rect.y - APPROACH_OFFSET)
        if self.side is Side.BOTTOM:
            return (cx, self.rect.bottom + APPROACH_OFFSET)
        if self.side is Side.LEFT:
            return (self.rect.x - APPROACH_OFFSET, cy)
        return (self.rect.right + APPROACH_OFFSET, cy)

    @property
    def entry_point(self) -> tuple[float, float]:
        """Point just inside the wall face where a climbing zombie lands."""
        cx, cy = self.center
        if self.side is Side.TOP:
            return (cx, self.rect.bottom + ENTRY_OFFSET)
        if self.side is Side.BOTTOM:
            return (cx, self.rect.y - ENTRY_OFFSET)
        if self.side is Side.LEFT:
            return (self.rect.right + ENTRY_OFFSET, cy)
        return (self.rect.x - ENTRY_OFFSET, cy)


@dataclass
class Building:
    """The single building the players defend.

    Attributes:
        rect: Outer bounds of the building.
        wall_thickness: Wall depth.
        windows: Barricaded windows, one per wall side.
        walls: Solid wall segments (derived from rect and windows).
    """

    rect: Rect
    wall_thickness: float
    windows: list[Window] = field(default_factory=list)
    walls: list[Rect] = field(default_factory=list)

    @property
    def padded_box(self) -> Rect:
        """Building bounds grown by the routing padding."""
        return self.rect.expanded(PATH_PADDING)

    def window(self, index: int) -> Window | None:
        """Look up a window by index; None when out of range."""
        if 0 <= index < len(self.windows):
            return self.windows[index]
        return None

    @property
    def plank_counts(self) -> list[int]:
        return [w.planks for w in self.windows]


def build_walls(rect: Rect, thickness: float, windows: list[Window]) -> list[Rect]:
    """Solid wall rects for ``rect`` with one gap cut per window.

    Each window splits its wall side into two segments.
    """
    walls: list[Rect] = []
    for win in windows:
        if win.side.is_horizontal:
            walls.append(Rect(rect.x, win.rect.y, win.rect.x - rect.x, thickness))
            right_x = win.rect.right
            walls.append(Rect(right_x, win.rect.y, rect.right - right_x, thickness))
        else:
            walls.append(Rect(win.rect.x, rect.y, thickness, win.rect.y - rect.y))
            below_y = win.rect.bottom
            walls.append(Rect(win.rect.x, below_y, thickness, rect.bottom - below_y))
    return walls


def build_default_building() -> Building:
    """The standard building: one window per side, all fully barricaded."""
    rect = Rect(BUILDING_X, BUILDING_Y, BUILDING_W, BUILDING_H)
    t = WALL_THICKNESS
    cx, cy = rect.center
    windows = [
        Window(0, Rect(cx - WINDOW_GAP / 2, rect.y, WINDOW_GAP, t), Side.TOP),
        Window(1, Rect(rect.x + 100, rect.bottom - t, WINDOW_GAP, t), Side.BOTTOM),
        Window(2, Rect(rect.x, rect.bottom - WINDOW_GAP - 100, t, WINDOW_GAP), Side.LEFT),
        Window(3, Rect(rect.right - t, cy - WINDOW_GAP / 2, t, WINDOW_GAP), Side.RIGHT),
    ]
    return Building(
        rect=rect,
        wall_thickness=t,
        windows=windows,
        walls=build_walls(rect, t, windows),
    )
