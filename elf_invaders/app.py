"""
Elf Invaders Application
========================

Wires the pygame window to the simulation core:
    - Keyboard, mouse and touch events -> IntentTracker (movement/fire)
      and lifecycle commands
    - FrameLoop -> one simulation step + render per display frame
    - Simulation notifications -> overlay and round-end commentary

Controls:
    - LEFT/RIGHT or A/D: Move
    - SPACE: Shoot
    - ENTER: Start (menu) / Play again (after a round)
    - R: Play again (after a round)
    - ESC or Q: Quit
    - On-screen buttons (mouse or touch): Move / Shoot
    - START GAME / PLAY AGAIN card buttons: Start / Play again
"""

from typing import Optional

import pygame

from .config import Config
from .game import FrameLoop, GameState, IntentTracker, Simulation
from .services.commentary import CommentaryService, FALLBACK_NO_KEY
from .utils.logger import get_logger
from .visualizer import GameOverlay, Renderer, TouchControls
from .visualizer.controls import pointer_event


logger = get_logger(__name__)


START_KEYS = (pygame.K_RETURN, pygame.K_SPACE)
RESTART_KEYS = (pygame.K_RETURN, pygame.K_r)
QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)


class GameApp:
    """
    Main application: window, input, frame loop and collaborators.

    The simulation is stepped and the screen redrawn once per frame in
    every state; the simulation itself ignores steps outside PLAYING.
    """

    def __init__(self, config: Config, commentary: Optional[CommentaryService] = None):
        self.config = config

        pygame.init()
        self.screen = pygame.display.set_mode((config.SCREEN_WIDTH, config.SCREEN_HEIGHT))
        pygame.display.set_caption("Elf Invaders")

        self.tracker = IntentTracker()
        self.simulation = Simulation(config)
        self.renderer = Renderer(config)
        self.overlay = GameOverlay(config)
        self.controls = TouchControls(config) if config.TOUCH_CONTROLS_ENABLED else None

        if commentary is None and config.COMMENTARY_ENABLED:
            commentary = CommentaryService(config)
        self.commentary = commentary

        self.simulation.on_state_change = self._on_state_change
        self.simulation.on_score_change = self.overlay.set_score
        self.simulation.on_lives_change = self.overlay.set_lives

        self.loop = FrameLoop(self._frame, config.FPS)

    def _on_state_change(self, state: GameState) -> None:
        self.overlay.set_state(state)
        if state.is_terminal:
            self._request_commentary(state == GameState.VICTORY)

    def _request_commentary(self, won: bool) -> None:
        token = self.overlay.begin_commentary()
        score = self.simulation.state.score
        if self.commentary is None:
            self.overlay.set_commentary(FALLBACK_NO_KEY, token)
            return
        self.commentary.request_async(
            score, won,
            lambda text: self.overlay.set_commentary(text, token)
        )

    def _activate_card(self) -> None:
        """START GAME on the menu, PLAY AGAIN after a round."""
        state = self.simulation.game_state
        if state == GameState.MENU:
            self.simulation.start()
        elif state.is_terminal:
            self.simulation.restart()

    def _release_all(self) -> None:
        if self.controls is not None:
            self.controls.release_all(self.tracker)
        self.tracker.release_all()

    def handle_event(self, event: pygame.event.Event) -> None:
        """Apply one pygame event to the loop, the simulation and the intents."""
        state = self.simulation.game_state

        if event.type == pygame.QUIT:
            self.loop.cancel()

        elif event.type == pygame.WINDOWFOCUSLOST:
            self._release_all()
            return

        elif event.type == pygame.KEYDOWN:
            if event.key in QUIT_KEYS:
                self.loop.cancel()
            elif state == GameState.MENU and event.key in START_KEYS:
                self.simulation.start()
            elif state.is_terminal and event.key in RESTART_KEYS:
                self.simulation.restart()

        if self.controls is not None:
            playing = state == GameState.PLAYING
            if self.controls.handle_event(event, self.tracker, accept_press=playing):
                return

        if state != GameState.PLAYING:
            pointer = pointer_event(event, (self.config.SCREEN_WIDTH, self.config.SCREEN_HEIGHT))
            if pointer is not None and pointer[0] == 'down' and self.overlay.action_at(pointer[2]):
                self._activate_card()
                return

        self.tracker.handle_event(event)

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            self.handle_event(event)

    def _frame(self) -> None:
        self._handle_events()
        self.simulation.step(self.tracker.snapshot())
        self.renderer.render(self.screen, self.simulation.state)
        if self.controls is not None and self.simulation.game_state == GameState.PLAYING:
            self.controls.render(self.screen)
        self.overlay.render(self.screen)
        pygame.display.flip()

    def run(self, max_frames: Optional[int] = None) -> None:
        logger.info(f"Starting Elf Invaders ({self.config.SCREEN_WIDTH}x{self.config.SCREEN_HEIGHT} @ {self.config.FPS} FPS)")
        try:
            frames = self.loop.run(max_frames)
            logger.info(f"Exiting after {frames} frames")
        finally:
            pygame.quit()
