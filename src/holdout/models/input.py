"""Per-frame player input snapshot.

Filled in by whatever front end drives the session; the simulation
only reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class InputState:
    """Keyboard and pointer state for one frame.

    Attributes:
        keys: Key identifiers currently held down.
        pressed: Keys that went down during this frame.
        pointer_x, pointer_y: Pointer position in screen space.
        fire: True if the pointer was clicked this frame.
    """

    keys: set[str] = field(default_factory=set)
    pressed: set[str] = field(default_factory=set)
    pointer_x: float = 0.0
    pointer_y: float = 0.0
    fire: bool = False

    def held(self, names: tuple[str, ...]) -> bool:
        return any(k in self.keys for k in names)

    def just_pressed(self, names: tuple[str, ...]) -> bool:
        return any(k in self.pressed for k in names)
