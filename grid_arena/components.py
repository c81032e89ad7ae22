"""
Component Definitions
======================
All components are plain dataclasses with no behavior.
"""

from dataclasses import dataclass


# =============================================================================
# PHYSICS COMPONENTS
# =============================================================================

@dataclass
class Position:
    """Arena position in cell units with sub-cell precision."""
    x: float = 0.0
    y: float = 0.0


@dataclass
class Speed:
    """Movement speed in cells per second."""
    value: float = 1.0


# =============================================================================
# RENDERING COMPONENTS
# =============================================================================

@dataclass
class Renderable:
    """Visual representation of an entity."""
    char: str = '?'
    color: int = 7  # ANSI 256 color
    layer: int = 0  # Higher layers render on top


# =============================================================================
# COMBAT COMPONENTS
# =============================================================================

@dataclass
class Health:
    """Entity health pool."""
    current: int = 100
    maximum: int = 100


@dataclass
class Ammo:
    """Shots the player can still fire."""
    count: int = 10


@dataclass
class ShootTimer:
    """Enemy fire cadence: seconds between shots, re-rolled after each shot."""
    last_shot_time: float = 0.0
    shoot_delay: float = 1.0


@dataclass
class Projectile:
    """Projectile flight data."""
    dx: float = 0.0
    dy: float = 0.0
    speed: float = 2.0
    is_enemy: bool = False


# =============================================================================
# TAG COMPONENTS (empty, used for queries)
# =============================================================================

@dataclass
class PlayerTag:
    """Marks the player entity."""
    pass


@dataclass
class EnemyTag:
    """Marks an enemy entity."""
    pass


@dataclass
class ProjectileTag:
    """Marks a projectile entity."""
    pass
