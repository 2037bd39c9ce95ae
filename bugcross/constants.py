"""
Grid geometry and tuning values for the crossing game.
No logic and no pygame here; everything else imports from this module.
"""

# --- Grid ---
ROWS = 6                # row 0 is water, rows 1-3 stone, rows 4-5 grass
COLS = 5
ROW_HEIGHT = 83         # pixels per row
COL_WIDTH = 101         # pixels per column

# --- Player ---
PLAYER_ROW = 5
PLAYER_COL = 2
MAX_LIVES = 3
WATER_BONUS = 100
WATER_ROW = 0

# Rows obstacles and collectibles may use (never home or water)
LANE_ROWS = (1, 2, 3)

# --- Obstacles ---
OBSTACLE_COUNT = 3
OBSTACLE_START_COL = -1             # just off the left edge
OBSTACLE_SPEED_RANGE = (1.5, 4.5)   # columns per second

# Footprint offsets: an obstacle must be a third of the way into a cell
HEAD_OFFSET = 2 / 3
TAIL_OFFSET = 1 / 3

# --- Collectibles ---
COLLECTIBLE_COUNT = 3
COLLECTIBLE_POINTS = (50, 100, 250)
COLLECTIBLE_WEIGHTS = (0.5, 0.3, 0.2)
COLLECTIBLE_HIDDEN_RANGE = (2.0, 6.0)   # seconds
COLLECTIBLE_VISIBLE_RANGE = (3.0, 6.0)  # seconds
PLACEMENT_ATTEMPTS = 10

# --- Sprite keys ---
AVATAR_SPRITES = (
    "char-boy",
    "char-cat-girl",
    "char-horn-girl",
    "char-pink-girl",
    "char-princess-girl",
)
COLLECTIBLE_SPRITES = {
    50: "gem-blue",
    100: "gem-green",
    250: "gem-orange",
}
OBSTACLE_SPRITE = "enemy-bug"

# --- Input vocabulary ---
MOVE_UP = "up"
MOVE_DOWN = "down"
MOVE_LEFT = "left"
MOVE_RIGHT = "right"
CYCLE_SPRITE = "cycle"
