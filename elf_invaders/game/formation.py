"""
Formation Controller
====================

Moves the invader grid as a single unit.

Each frame the whole formation slides sideways by formation_speed in the
shared direction. When any invader touches a side wall the direction flips
for the next frame and every invader drops by a fixed distance in the same
frame. Speed only ever goes up: each destroyed invader adds a fixed delta,
so the last survivors are the fastest.
"""

from typing import List, Optional

import numpy as np

from ..config import Config
from .entities import Invader, Projectile
from .state import GameState, SimulationState


class FormationController:
    """Formation layout, movement, terminal checks and enemy fire."""

    def __init__(self, config: Config):
        self.config = config

    def build(self) -> List[Invader]:
        """Create a full grid, row by row."""
        cfg = self.config
        invaders = []
        for row in range(cfg.INVADER_ROWS):
            for col in range(cfg.INVADER_COLS):
                invaders.append(Invader(
                    x=cfg.INVADER_OFFSET_LEFT + col * (cfg.INVADER_WIDTH + cfg.INVADER_PADDING),
                    y=cfg.INVADER_OFFSET_TOP + row * (cfg.INVADER_HEIGHT + cfg.INVADER_PADDING),
                    width=cfg.INVADER_WIDTH,
                    height=cfg.INVADER_HEIGHT,
                    row=row,
                    col=col,
                ))
        return invaders

    def reset(self, state: SimulationState) -> None:
        """Fresh grid with base speed, moving right."""
        state.invaders = self.build()
        state.direction = 1
        state.formation_speed = self.config.FORMATION_BASE_SPEED
        state.invaders_destroyed = 0

    def advance(self, state: SimulationState) -> bool:
        """
        Slide the formation and bounce it off the walls.

        The horizontal move always uses the pre-flip direction.

        Returns:
            True if an edge was hit (and the formation dropped) this frame
        """
        dx = state.formation_speed * state.direction
        hit_edge = False
        for invader in state.invaders:
            invader.x += dx
            if invader.x <= 0 or invader.x + invader.width >= self.config.SCREEN_WIDTH:
                hit_edge = True

        if hit_edge:
            state.direction *= -1
            for invader in state.invaders:
                invader.y += self.config.INVADER_DROP_DISTANCE

        return hit_edge

    def check_terminal(self, state: SimulationState) -> Optional[GameState]:
        """
        Detect an overrun or a cleared formation.

        Returns:
            GAME_OVER, VICTORY, or None while the round continues
        """
        if state.invaders:
            lowest = max(invader.bottom for invader in state.invaders)
            if lowest >= state.player.y:
                return GameState.GAME_OVER
            return None
        return GameState.VICTORY

    def escalate(self, state: SimulationState) -> None:
        """Record one destroyed invader and speed the survivors up."""
        state.invaders_destroyed += 1
        state.formation_speed += self.config.FORMATION_SPEED_DELTA

    def fire_chance(self, state: SimulationState) -> float:
        """Per-frame chance that some invader throws a snowball."""
        cfg = self.config
        destroyed = cfg.INVADER_COUNT - len(state.invaders)
        chance = cfg.ENEMY_FIRE_BASE_CHANCE + cfg.ENEMY_FIRE_CHANCE_PER_KILL * destroyed
        return chance * cfg.ENEMY_FIRE_DAMPING

    def maybe_fire(self, state: SimulationState, rng: np.random.Generator) -> Optional[Projectile]:
        """Pick a random live invader and drop a snowball from its lower center."""
        if not state.invaders or rng.random() >= self.fire_chance(state):
            return None

        cfg = self.config
        shooter = state.invaders[int(rng.integers(len(state.invaders)))]
        return Projectile(
            x=shooter.x + shooter.width / 2 - cfg.ENEMY_PROJECTILE_WIDTH / 2,
            y=shooter.bottom,
            width=cfg.ENEMY_PROJECTILE_WIDTH,
            height=cfg.ENEMY_PROJECTILE_HEIGHT,
            dy=cfg.PROJECTILE_SPEED * cfg.ENEMY_PROJECTILE_SPEED_FACTOR,
            is_enemy=True,
        )
