"""
Game Constants
===============
Fixed tuning values for a session. Everything here is read-only at runtime.
"""

# =============================================================================
# ARENA
# =============================================================================

MAP_WIDTH = 40
MAP_HEIGHT = 20
WALL_DENSITY = 30  # One random wall per N cells of area

# =============================================================================
# ENTITY CAPS
# =============================================================================

NUM_ENEMIES = 10
MAX_PROJECTILES = 100

# =============================================================================
# PLAYER
# =============================================================================

PLAYER_HEALTH = 100
PLAYER_AMMO = 10
PLAYER_SPEED = 1.0
KILL_AMMO_REWARD = 2

# =============================================================================
# ENEMIES
# =============================================================================

ENEMY_HEALTH = 50
ENEMY_SPEED = 0.5
ENEMY_JITTER = 0.1
SHOOT_DELAY_MIN = 1.0
SHOOT_DELAY_STEPS = 200  # Delay granularity: 1/100 s over a 2 s window

# =============================================================================
# PROJECTILES
# =============================================================================

PROJECTILE_SPEED = 2.0
PROJECTILE_DAMAGE = 10

# =============================================================================
# TIMING
# =============================================================================

FRAME_DELAY = 0.05  # Seconds slept between frames

# =============================================================================
# GLYPHS
# =============================================================================

PLAYER_CHAR = '@'
ENEMY_CHAR = 'E'
WALL_CHAR = '#'
FLOOR_CHAR = '.'
ARROW_CHAR = '*'
ENEMY_ARROW_CHAR = '+'

# =============================================================================
# COLORS (ANSI 256)
# =============================================================================

COLOR_PLAYER = 46         # green
COLOR_ENEMY = 196         # red
COLOR_WALL = 51           # cyan
COLOR_FLOOR = 236         # near-black
COLOR_PROJECTILE = 226    # yellow
COLOR_ENEMY_PROJECTILE = 201  # magenta
COLOR_STATUS = 46
COLOR_WIN_MESSAGE = 46
