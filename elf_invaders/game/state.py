"""
Simulation state shared by the controllers and read by the renderer.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List

from .entities import Player, Invader, Projectile, Particle, Decoration


class GameState(Enum):
    """Round state machine."""
    MENU = auto()
    PLAYING = auto()
    GAME_OVER = auto()
    VICTORY = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GameState.GAME_OVER, GameState.VICTORY)


@dataclass
class SimulationState:
    """
    Everything the frame loop mutates.

    Owned by the Simulation; controllers receive it for the duration of a
    step and the renderer only reads it.
    """
    player: Player
    invaders: List[Invader] = field(default_factory=list)
    projectiles: List[Projectile] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    decorations: List[Decoration] = field(default_factory=list)

    # Formation moves as one unit: a single shared direction and speed
    direction: int = 1
    formation_speed: float = 0.0
    invaders_destroyed: int = 0

    score: int = 0
    lives: int = 0
    frame: int = 0
    game_state: GameState = GameState.MENU
