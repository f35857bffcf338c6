"""
Simulation Driver
=================

Owns all mutable game state and advances it one fixed step per display
frame. Rendering, overlays and the commentary service sit outside and
learn about changes through callbacks.

State machine:
    MENU --start--> PLAYING --overrun / lives exhausted--> GAME_OVER
                            --formation cleared--------> VICTORY
    GAME_OVER / VICTORY --restart--> MENU

Step order while PLAYING:
    1. Player movement and fire
    2. Formation move, bounce and terminal checks (may end the step)
    3. Enemy fire
    4. Projectile movement
    5. Collisions, scoring and lives
    6. Particles and snow
    7. Frame counter
"""

from typing import Callable, Optional

import numpy as np

from ..config import Config
from ..utils.logger import get_logger, log_round_summary
from .collisions import CollisionResolver
from .formation import FormationController
from .input import InputIntents
from .particles import ParticleSystem, SnowField
from .player import PlayerController
from .projectiles import ProjectileSystem
from .state import GameState, SimulationState


logger = get_logger(__name__)


class Simulation:
    """
    The frame-stepped game core.

    Example:
        >>> sim = Simulation(Config(), seed=42)
        >>> sim.on_score_change = overlay.set_score
        >>> sim.start()
        >>> sim.step(tracker.snapshot())
    """

    def __init__(self, config: Optional[Config] = None, seed: Optional[int] = None):
        self.config = config or Config()
        if seed is None:
            seed = self.config.SEED
        self.rng = np.random.default_rng(seed)

        self.player_controller = PlayerController(self.config)
        self.formation = FormationController(self.config)
        self.projectile_system = ProjectileSystem(self.config)
        self.particle_system = ParticleSystem(self.config, self.rng)
        self.snow = SnowField(self.config, self.rng)
        self.resolver = CollisionResolver(self.config, self.formation, self.particle_system)

        self.state = SimulationState(
            player=self.player_controller.spawn(),
            lives=self.config.LIVES,
        )

        # Change notifications for the overlay and other observers
        self.on_state_change: Optional[Callable[[GameState], None]] = None
        self.on_score_change: Optional[Callable[[int], None]] = None
        self.on_lives_change: Optional[Callable[[int], None]] = None

        self.reset_round()

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def game_state(self) -> GameState:
        return self.state.game_state

    def seed(self, seed: int) -> None:
        """Reseed the shared generator used by enemy fire and effects."""
        self.rng = np.random.default_rng(seed)
        self.particle_system.rng = self.rng
        self.snow.rng = self.rng

    def reset_round(self) -> None:
        """Rebuild the playfield for a fresh round. Snow is kept."""
        state = self.state
        state.player = self.player_controller.spawn()
        self.formation.reset(state)
        state.projectiles = []
        state.particles = []
        state.frame = 0
        self.snow.seed(state.decorations)
        logger.debug(f"Round reset: {len(state.invaders)} invaders, speed={state.formation_speed}")

    def start(self) -> bool:
        """
        MENU -> PLAYING. Score and lives are reset for the new game.

        Returns:
            False if the simulation was not in the menu
        """
        if self.state.game_state != GameState.MENU:
            logger.debug(f"Ignoring start in state {self.state.game_state.name}")
            return False

        self._set_score(0)
        self._set_lives(self.config.LIVES)
        if not self.state.invaders:
            self.reset_round()
        self._set_state(GameState.PLAYING)
        logger.info("Round started")
        return True

    def restart(self) -> bool:
        """
        GAME_OVER / VICTORY -> MENU, with a rebuilt formation behind the menu.

        Returns:
            False if the round had not ended
        """
        if not self.state.game_state.is_terminal:
            logger.debug(f"Ignoring restart in state {self.state.game_state.name}")
            return False

        self.reset_round()
        self._set_state(GameState.MENU)
        return True

    # =========================================================================
    # FRAME STEP
    # =========================================================================

    def step(self, intents: InputIntents) -> None:
        """Advance one frame. Does nothing outside PLAYING."""
        state = self.state
        if state.game_state != GameState.PLAYING:
            return

        score_before = state.score
        lives_before = state.lives

        self.player_controller.update(state.player, intents, state.projectiles)

        self.formation.advance(state)
        outcome = self.formation.check_terminal(state)
        if outcome is not None:
            self._end_round(outcome)
            return

        shot = self.formation.maybe_fire(state, self.rng)
        if shot is not None:
            state.projectiles.append(shot)

        self.projectile_system.advance(state.projectiles)

        report = self.resolver.resolve(state)
        if state.score != score_before:
            self._emit(self.on_score_change, state.score)
        if state.lives != lives_before:
            self._emit(self.on_lives_change, state.lives)
        if report.outcome is not None:
            self._end_round(report.outcome)

        self.particle_system.update(state.particles)
        self.snow.update(state.decorations)

        state.frame += 1

    def info(self) -> dict:
        state = self.state
        return {
            'state': state.game_state.name,
            'score': state.score,
            'lives': state.lives,
            'invaders_remaining': len(state.invaders),
            'invaders_destroyed': state.invaders_destroyed,
            'formation_speed': state.formation_speed,
            'frame': state.frame,
        }

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _end_round(self, outcome: GameState) -> None:
        self._set_state(outcome)
        state = self.state
        log_round_summary(
            score=state.score,
            lives=state.lives,
            won=outcome == GameState.VICTORY,
            frames=state.frame,
            invaders_remaining=len(state.invaders),
        )

    def _set_state(self, new_state: GameState) -> None:
        if self.state.game_state == new_state:
            return
        logger.debug(f"State {self.state.game_state.name} -> {new_state.name}")
        self.state.game_state = new_state
        self._emit(self.on_state_change, new_state)

    def _set_score(self, score: int) -> None:
        if self.state.score != score:
            self.state.score = score
            self._emit(self.on_score_change, score)

    def _set_lives(self, lives: int) -> None:
        if self.state.lives != lives:
            self.state.lives = lives
            self._emit(self.on_lives_change, lives)

    @staticmethod
    def _emit(callback: Optional[Callable], value) -> None:
        if callback is not None:
            callback(value)
