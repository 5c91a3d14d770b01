"""World constants — geometry, radii, key bindings.

Fixed layout values that never change at runtime. Tunable gameplay
numbers (speeds, timers, costs) live in GameConfig instead.
"""

# -- World ---------------------------------------------------------------

WORLD_W: float = 3200.0
WORLD_H: float = 2400.0
"""World size in pixels; larger than the viewport so the camera scrolls."""

# -- Building ------------------------------------------------------------

BUILDING_W: float = 600.0
BUILDING_H: float = 400.0
BUILDING_X: float = WORLD_W / 2 - BUILDING_W / 2
BUILDING_Y: float = WORLD_H / 2 - BUILDING_H / 2
WALL_THICKNESS: float = 24.0

WINDOW_GAP: float = 55.0
"""Length of a window opening along its wall face."""

MAX_PLANKS: int = 3

APPROACH_OFFSET: float = 30.0
"""Distance outside a wall face where zombies stop before a window."""

PATH_PADDING: float = 20.0
"""Padding around the building box used for detour routing."""

CORNER_CLEARANCE: float = 2.0
"""Extra diagonal push for detour corners so they sit strictly outside the padded box."""

# -- Entities ------------------------------------------------------------

PLAYER_RADIUS: float = 14.0
ZOMBIE_RADIUS: float = 14.0

ENTRY_OFFSET: float = ZOMBIE_RADIUS + 4.0
"""Distance inside a wall face where a zombie lands after climbing."""

ARRIVAL_TOLERANCE: float = 8.0
"""Waypoint arrival radius for zombies."""

PLAYER_START_X: float = WORLD_W / 2
PLAYER_START_Y: float = WORLD_H / 2 + 50

GUN_TIP_X: float = 18.0
GUN_TIP_Y: float = 9.5
"""Muzzle offset in the player's local (rotated) frame."""

WEAPON_SLOTS: int = 3
PISTOL_SLOT: int = 0

WINDOW_POP_RATE: float = 5.0
"""Pop-in animation speed for a freshly added plank (phase units per second)."""

DIAGONAL_SCALE: float = 0.7071

# -- Key bindings --------------------------------------------------------

KEYS_UP = ("w", "W", "ArrowUp")
KEYS_DOWN = ("s", "S", "ArrowDown")
KEYS_LEFT = ("a", "A", "ArrowLeft")
KEYS_RIGHT = ("d", "D", "ArrowRight")
KEYS_RELOAD = ("r", "R")
KEYS_REPAIR = ("e", "E")
WEAPON_KEYS: dict[str, int] = {"1": 0, "2": 1, "3": 2}

# -- Status messages -----------------------------------------------------

STATUS_CONNECTED = "Connected"
STATUS_DISCONNECTED = "Other player disconnected."
