"""
Game Overlay
============

Text layer drawn on top of the playfield:
    - PLAYING: score (zero-padded) and hearts for lives
    - MENU: title card and controls
    - GAME_OVER / VICTORY: result, final score and Santa's comment

The overlay keeps its own copy of score, lives and state, fed by the
simulation's change notifications; it never reads the simulation.
"""

import textwrap
from typing import Dict, List, Optional, Tuple

import pygame

from ..config import Config
from ..game.state import GameState


LOADING_TEXT = "Checking the Naughty List..."

MENU_PANEL_HEIGHT = 340
RESULT_PANEL_HEIGHT = 400


class GameOverlay:
    """Score/lives HUD plus menu and result cards."""

    def __init__(self, config: Config):
        self.config = config
        self.width = config.SCREEN_WIDTH
        self.height = config.SCREEN_HEIGHT

        self.state = GameState.MENU
        self.score = 0
        self.lives = config.LIVES
        self.commentary: Optional[str] = None
        self._commentary_request = 0

        self._fonts: Dict[int, pygame.font.Font] = {}

        # Colors
        self.text_color = config.COLOR_TEXT
        self.text_dim = (148, 163, 184)
        self.score_label = (253, 224, 71)  # Yellow
        self.lives_label = (252, 165, 165)  # Red
        self.heart_color = (239, 68, 68)
        self.victory_color = (250, 204, 21)
        self.defeat_color = (239, 68, 68)
        self.title_green = (74, 222, 128)
        self.panel_color = (15, 23, 42, 210)
        self.button_start = (220, 38, 38)
        self.button_restart = (22, 163, 74)

    # =========================================================================
    # NOTIFICATIONS
    # =========================================================================

    def set_state(self, state: GameState) -> None:
        self.state = state

    def set_score(self, score: int) -> None:
        self.score = score

    def set_lives(self, lives: int) -> None:
        self.lives = lives

    def begin_commentary(self) -> int:
        """Show the loading text. Returns a token for set_commentary."""
        self._commentary_request += 1
        self.commentary = None
        return self._commentary_request

    def set_commentary(self, text: str, request_id: int) -> None:
        """Accept a comment unless a newer request has superseded it."""
        if request_id == self._commentary_request:
            self.commentary = text

    # =========================================================================
    # RENDERING
    # =========================================================================

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def render(self, screen: pygame.Surface) -> None:
        if self.state == GameState.PLAYING:
            self._draw_hud(screen)
        elif self.state == GameState.MENU:
            self._draw_menu(screen)
        else:
            self._draw_result(screen)

    def _blit_centered(self, screen: pygame.Surface, text: str, size: int,
                       color: Tuple[int, int, int], y: int) -> pygame.Rect:
        surf = self._font(size).render(text, True, color)
        rect = surf.get_rect(centerx=self.width // 2, top=y)
        screen.blit(surf, rect)
        return rect

    # =========================================================================
    # CARD BUTTON
    # =========================================================================

    def _panel_rect(self, height: int) -> pygame.Rect:
        rect = pygame.Rect(0, 0, min(560, self.width - 40), height)
        rect.center = (self.width // 2, self.height // 2)
        return rect

    def action_rect(self) -> Optional[pygame.Rect]:
        """START GAME / PLAY AGAIN button of the current card, None while playing."""
        if self.state == GameState.PLAYING:
            return None
        height = MENU_PANEL_HEIGHT if self.state == GameState.MENU else RESULT_PANEL_HEIGHT
        panel = self._panel_rect(height)
        button = pygame.Rect(0, 0, 240, 50)
        button.midbottom = (panel.centerx, panel.bottom - 24)
        return button

    def action_at(self, pos: Tuple[float, float]) -> bool:
        """True if pos lies on the current card's button."""
        rect = self.action_rect()
        return rect is not None and rect.collidepoint(int(pos[0]), int(pos[1]))

    def _draw_action_button(self, screen: pygame.Surface, label: str,
                            color: Tuple[int, int, int]) -> None:
        rect = self.action_rect()
        pygame.draw.rect(screen, color, rect, border_radius=25)
        pygame.draw.rect(screen, (255, 255, 255), rect, 2, border_radius=25)
        surf = self._font(34).render(label, True, self.text_color)
        screen.blit(surf, surf.get_rect(center=rect.center))

    def _draw_panel(self, screen: pygame.Surface, height: int) -> pygame.Rect:
        veil = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        veil.fill((0, 0, 0, 150))
        screen.blit(veil, (0, 0))

        rect = self._panel_rect(height)
        panel = pygame.Surface(rect.size, pygame.SRCALPHA)
        pygame.draw.rect(panel, self.panel_color, panel.get_rect(), border_radius=16)
        pygame.draw.rect(panel, (255, 255, 255, 40), panel.get_rect(), 1, border_radius=16)
        screen.blit(panel, rect)
        return rect

    def _draw_hud(self, screen: pygame.Surface) -> None:
        label_font = self._font(26)
        value_font = self._font(40)

        screen.blit(label_font.render("SCORE", True, self.score_label), (30, 16))
        screen.blit(value_font.render(f"{self.score:06d}", True, self.text_color), (30, 40))

        lives_label = label_font.render("LIVES", True, self.lives_label)
        screen.blit(lives_label, lives_label.get_rect(topright=(self.width - 30, 16)))
        for i in range(max(0, self.lives)):
            self._draw_heart(screen, self.width - 42 - i * 28, 54)

    def _draw_heart(self, screen: pygame.Surface, cx: int, cy: int) -> None:
        pygame.draw.circle(screen, self.heart_color, (cx - 5, cy - 3), 6)
        pygame.draw.circle(screen, self.heart_color, (cx + 5, cy - 3), 6)
        pygame.draw.polygon(screen, self.heart_color, [(cx - 11, cy - 1), (cx + 11, cy - 1), (cx, cy + 11)])

    def _draw_menu(self, screen: pygame.Surface) -> None:
        panel = self._draw_panel(screen, MENU_PANEL_HEIGHT)
        y = panel.top + 30
        y = self._blit_centered(screen, "ELF", 80, self.text_color, y).bottom
        y = self._blit_centered(screen, "INVADERS", 80, self.title_green, y).bottom + 15
        y = self._blit_centered(screen, '"The North Pole needs a hero!"', 30, (199, 210, 254), y).bottom + 30
        self._blit_centered(screen, "Arrow keys / A D to move, SPACE to shoot, ENTER to start", 22, self.text_dim, y)
        self._draw_action_button(screen, "START GAME", self.button_start)

    def _draw_result(self, screen: pygame.Surface) -> None:
        panel = self._draw_panel(screen, RESULT_PANEL_HEIGHT)
        won = self.state == GameState.VICTORY
        title = "CHRISTMAS SAVED!" if won else "GAME OVER"
        color = self.victory_color if won else self.defeat_color

        y = panel.top + 30
        y = self._blit_centered(screen, title, 64, color, y).bottom + 20
        y = self._blit_centered(screen, "FINAL SCORE", 22, self.text_dim, y).bottom + 4
        y = self._blit_centered(screen, f"{self.score:06d}", 56, self.text_color, y).bottom + 20
        y = self._blit_centered(screen, "FROM THE DESK OF SANTA", 20, (165, 180, 252), y).bottom + 8

        if self.commentary is None:
            y = self._blit_centered(screen, LOADING_TEXT, 26, (254, 240, 138), y).bottom
        else:
            for line in wrap_text(f'"{self.commentary}"', 52):
                y = self._blit_centered(screen, line, 26, (254, 249, 195), y).bottom + 2

        self._draw_action_button(screen, "PLAY AGAIN", self.button_restart)


def wrap_text(text: str, max_chars: int) -> List[str]:
    """Word wrap on character count; a single over-long word stays whole."""
    return textwrap.wrap(text, max_chars, break_long_words=False, break_on_hyphens=False)
