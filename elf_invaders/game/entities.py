"""
Entity Model
============

Plain data records for everything that lives on the playfield.

Every collidable entity carries a deletion flag. Collision passes only set
the flag; the owning collection is compacted once per frame after all
pairings have been evaluated, so iteration never sees a list shrinking
underneath it.
"""

from dataclasses import dataclass
from typing import List, Tuple, TypeVar

from .geometry import Box


@dataclass
class Entity:
    """Base shape shared by all playfield entities."""
    x: float
    y: float
    width: float
    height: float
    marked_for_deletion: bool = False

    @property
    def box(self) -> Box:
        return (self.x, self.y, self.width, self.height)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Player(Entity):
    """The player's ship. Exactly one per simulation, never deleted."""
    cooldown: int = 0


@dataclass
class Invader(Entity):
    """An elf in the formation. row/col only drive visual variation."""
    row: int = 0
    col: int = 0


@dataclass
class Projectile(Entity):
    """
    A gift (player) or snowball (invader).

    dy is the signed vertical velocity: negative travels up the screen.
    """
    dy: float = 0.0
    is_enemy: bool = False


@dataclass
class Particle(Entity):
    """Cosmetic explosion fragment. width doubles as the drawn diameter."""
    vx: float = 0.0
    vy: float = 0.0
    life: float = 1.0
    color: Tuple[int, int, int] = (255, 255, 255)


@dataclass
class Decoration:
    """A falling snowflake. Never collides and is never deleted."""
    x: float
    y: float
    size: float
    speed: float
    opacity: float


E = TypeVar('E', bound=Entity)


def compact(entities: List[E]) -> List[E]:
    """Drop entities flagged for deletion, preserving order."""
    return [e for e in entities if not e.marked_for_deletion]
