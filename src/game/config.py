from dataclasses import dataclass

# --- Display (character grid) ---
SCREEN_WIDTH = 80           # cells
SCREEN_HEIGHT = 50          # cells
CELL_W = 10                 # px per cell in the pygame window
CELL_H = 12
FPS = 60                    # render/input rate of the host loop
TITLE = "Flappy Dragon"

# --- Simulation ---
FRAME_DURATION = 75.0       # ms accumulated before one simulation step
GRAVITY_STEP = 0.2          # velocity added per simulation step
MAX_VELOCITY = 2.0          # gravity never pushes velocity above this
FLAP_IMPULSE = -2.0         # added to velocity on each flap (0 is top of screen)

# --- Player ---
PLAYER_START_X = 5
PLAYER_START_Y = 25
PLAYER_GLYPH = "@"

# --- Obstacles ---
GAP_Y_MIN = 10              # inclusive
GAP_Y_MAX = 40              # exclusive
GAP_SIZE_START = 20         # gap height at score 0
GAP_SIZE_MIN = 2            # gap never shrinks below this
OBSTACLE_GLYPH = "|"

# --- Colors (RGB) ---
COLOR_BLACK = (0, 0, 0)
COLOR_WHITE = (255, 255, 255)
COLOR_NAVY = (0, 0, 128)
COLOR_YELLOW = (255, 255, 0)
COLOR_RED = (255, 0, 0)

SEED_DEFAULT = None         # None -> fresh random gaps every launch


# --- Per-game settings (what State is built from) ---

@dataclass(frozen=True)
class GameConfig:
    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT
    frame_duration: float = FRAME_DURATION
    gravity_step: float = GRAVITY_STEP
    max_velocity: float = MAX_VELOCITY
    flap_impulse: float = FLAP_IMPULSE
    start_x: int = PLAYER_START_X
    start_y: int = PLAYER_START_Y
    obstacles: bool = True      # False -> free-fall variant, nothing to dodge
