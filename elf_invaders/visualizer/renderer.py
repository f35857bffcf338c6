"""
Game Renderer
=============

Draws the playfield from a SimulationState every display frame:
    - Night-sky gradient with drifting snow
    - Santa (player), elves (invaders) with a shared bob
    - Gifts (player shots) and glowing snowballs (enemy shots)
    - Fading explosion particles

The renderer never writes to the state. It runs in every game state, so
the menu and end screens show whatever the playfield currently holds.
"""

import math
from typing import Optional, Tuple

import pygame

from ..config import Config
from ..game.entities import Invader, Player, Projectile, Particle
from ..game.state import SimulationState


Color = Tuple[int, int, int]

# Elf palette, alternated by row
ELF_MAIN = ((34, 197, 94), (21, 128, 61))
ELF_ACCENT = ((239, 68, 68), (185, 28, 28))
SKIN = (255, 237, 213)
EAR = (252, 165, 165)
SANTA_RED = (220, 38, 38)
SANTA_GLOW = (248, 113, 113)
FUR = (241, 245, 249)
EYE = (15, 23, 42)
GIFT_BOX = (96, 165, 250)
GIFT_RIBBON = (250, 204, 21)
SNOWBALL_GLOW = (34, 211, 238)
SNOWBALL_CORE = (255, 255, 255)
SNOWBALL_EDGE = (165, 243, 252)


def _lerp_color(a: Color, b: Color, t: float) -> Color:
    return tuple(int(a[i] + (b[i] - a[i]) * t) for i in range(3))


class Renderer:
    """Pygame renderer for the playfield."""

    def __init__(self, config: Config):
        self.config = config
        self.width = config.SCREEN_WIDTH
        self.height = config.SCREEN_HEIGHT
        self._background: Optional[pygame.Surface] = None

    def _create_background(self) -> pygame.Surface:
        """Pre-render the three-stop vertical gradient."""
        cfg = self.config
        surface = pygame.Surface((self.width, self.height))
        half = self.height / 2
        for y in range(self.height):
            if y < half:
                color = _lerp_color(cfg.COLOR_BACKGROUND_TOP, cfg.COLOR_BACKGROUND_MID, y / half)
            else:
                color = _lerp_color(cfg.COLOR_BACKGROUND_MID, cfg.COLOR_BACKGROUND_BOTTOM, (y - half) / half)
            pygame.draw.line(surface, color, (0, y), (self.width, y))
        return surface

    def render(self, screen: pygame.Surface, state: SimulationState) -> None:
        if self._background is None:
            self._background = self._create_background()
        screen.blit(self._background, (0, 0))

        self._draw_snow(screen, state)
        self._draw_santa(screen, state.player)

        bob = math.sin(state.frame * 0.15) * 4
        for invader in state.invaders:
            self._draw_elf(screen, invader, bob)

        for projectile in state.projectiles:
            if projectile.is_enemy:
                self._draw_snowball(screen, projectile)
            else:
                self._draw_gift(screen, projectile)

        for particle in state.particles:
            self._draw_particle(screen, particle)

    # =========================================================================
    # BACKGROUND
    # =========================================================================

    def _draw_snow(self, screen: pygame.Surface, state: SimulationState) -> None:
        layer = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        r, g, b = self.config.COLOR_SNOW
        for flake in state.decorations:
            drift = math.sin(state.frame * 0.05 + flake.y * 0.01) * 2
            alpha = int(255 * flake.opacity)
            pygame.draw.circle(layer, (r, g, b, alpha),
                               (int(flake.x + drift), int(flake.y)),
                               max(1, int(flake.size)))
        screen.blit(layer, (0, 0))

    # =========================================================================
    # SPRITES
    # =========================================================================

    def _draw_glow(self, screen: pygame.Surface, center: Tuple[float, float],
                   radius: float, color: Color, alpha: int = 60) -> None:
        size = int(radius * 2) + 2
        glow = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.circle(glow, (*color, alpha), (size // 2, size // 2), int(radius))
        screen.blit(glow, (int(center[0]) - size // 2, int(center[1]) - size // 2))

    def _draw_santa(self, screen: pygame.Surface, player: Player) -> None:
        w, h = player.width, player.height
        cx, cy = player.center
        self._draw_glow(screen, (cx, cy), w * 0.6, SANTA_GLOW, 50)

        # Body
        body = pygame.Rect(0, 0, int(w * 0.8), int(h * 0.4))
        body.center = (int(cx), int(cy + h * 0.4))
        pygame.draw.ellipse(screen, SANTA_RED, body)

        # Beard, then face on top of it
        pygame.draw.circle(screen, FUR, (int(cx), int(cy + h * 0.1)), int(w * 0.35))
        pygame.draw.circle(screen, SKIN, (int(cx), int(cy)), int(w * 0.25))

        # Hat with droopy tip and trim
        hat = [
            (cx - w * 0.3, cy - h * 0.1),
            (cx, cy - h * 0.5),
            (cx + w * 0.35, cy + h * 0.1),
            (cx + w * 0.28, cy - h * 0.1),
        ]
        pygame.draw.polygon(screen, SANTA_RED, hat)
        trim = pygame.Rect(int(cx - w * 0.32), int(cy - h * 0.15), int(w * 0.64), int(h * 0.12))
        pygame.draw.rect(screen, FUR, trim, border_radius=5)
        pygame.draw.circle(screen, FUR, (int(cx + w * 0.35), int(cy + h * 0.1)), max(1, int(w * 0.08)))

        # Eyes, mustache, nose
        for ex in (-0.1, 0.1):
            pygame.draw.circle(screen, EYE, (int(cx + w * ex), int(cy + h * 0.05)), max(1, int(w * 0.04)))
        mustache = pygame.Rect(int(cx - w * 0.15), int(cy + h * 0.1), int(w * 0.3), int(h * 0.08))
        pygame.draw.rect(screen, FUR, mustache, border_radius=5)
        pygame.draw.circle(screen, EAR, (int(cx), int(cy + h * 0.1)), max(1, int(w * 0.05)))

    def _draw_elf(self, screen: pygame.Surface, invader: Invader, bob: float) -> None:
        alt = invader.row % 2
        main, accent = ELF_MAIN[alt], ELF_ACCENT[alt]
        w, h = invader.width, invader.height
        cx = invader.x + w / 2
        cy = invader.y + h / 2 + bob
        self._draw_glow(screen, (cx, cy), w * 0.6, main, 40)

        # Pointed ears
        for side in (-1, 1):
            pygame.draw.polygon(screen, EAR, [
                (cx + side * w * 0.35, cy - h * 0.1),
                (cx + side * w * 0.55, cy - h * 0.25),
                (cx + side * w * 0.35, cy),
            ])

        pygame.draw.circle(screen, SKIN, (int(cx), int(cy)), int(w * 0.35))

        # Hat curling to the right, white trim and pom-pom
        pygame.draw.polygon(screen, main, [
            (cx - w * 0.38, cy - h * 0.2),
            (cx, cy - h * 0.75),
            (cx + w * 0.45, cy - h * 0.6),
            (cx + w * 0.38, cy - h * 0.2),
        ])
        trim = pygame.Rect(int(cx - w * 0.4), int(cy - h * 0.25), int(w * 0.8), max(1, int(h * 0.15)))
        pygame.draw.rect(screen, (255, 255, 255), trim, border_radius=4)
        pygame.draw.circle(screen, (255, 255, 255), (int(cx + w * 0.45), int(cy - h * 0.6)), max(1, int(w * 0.12)))

        for ex in (-0.12, 0.12):
            pygame.draw.circle(screen, EYE, (int(cx + w * ex), int(cy + h * 0.05)), max(1, int(w * 0.06)))

        # Collar with zigzag
        pygame.draw.polygon(screen, main, [
            (cx - w * 0.3, cy + h * 0.3),
            (cx + w * 0.3, cy + h * 0.3),
            (cx + w * 0.4, cy + h * 0.5),
            (cx - w * 0.4, cy + h * 0.5),
        ])
        pygame.draw.polygon(screen, accent, [
            (cx - w * 0.3, cy + h * 0.3),
            (cx, cy + h * 0.45),
            (cx + w * 0.3, cy + h * 0.3),
        ])

    def _draw_gift(self, screen: pygame.Surface, projectile: Projectile) -> None:
        rect = pygame.Rect(int(projectile.x), int(projectile.y),
                           int(projectile.width), int(projectile.height))
        self._draw_glow(screen, rect.center, projectile.height, GIFT_BOX, 50)
        pygame.draw.rect(screen, GIFT_BOX, rect, border_radius=1)
        pygame.draw.line(screen, GIFT_RIBBON, (rect.centerx, rect.top), (rect.centerx, rect.bottom - 1))
        pygame.draw.line(screen, GIFT_RIBBON, (rect.left, rect.top + 3), (rect.right - 1, rect.top + 3))

    def _draw_snowball(self, screen: pygame.Surface, projectile: Projectile) -> None:
        radius = projectile.width / 2
        cx = projectile.x + radius
        cy = projectile.y + radius
        self._draw_glow(screen, (cx, cy), radius * 2, SNOWBALL_GLOW, 70)
        pygame.draw.circle(screen, SNOWBALL_EDGE, (int(cx), int(cy)), int(radius))
        # Highlight offset toward the top-left for a bit of depth
        pygame.draw.circle(screen, SNOWBALL_CORE,
                           (int(cx - radius * 0.3), int(cy - radius * 0.3)),
                           max(1, int(radius * 0.5)))

    def _draw_particle(self, screen: pygame.Surface, particle: Particle) -> None:
        if particle.life <= 0:
            return
        radius = max(1, int(particle.width))
        alpha = int(255 * min(1.0, particle.life))
        size = radius * 4
        surf = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.circle(surf, (*particle.color, alpha // 3), (size // 2, size // 2), radius * 2)
        pygame.draw.circle(surf, (*particle.color, alpha), (size // 2, size // 2), radius)
        screen.blit(surf, (int(particle.x) - size // 2, int(particle.y) - size // 2))
