"""
Configuration file for Elf Invaders
===================================

All gameplay constants, balance knobs and display options are centralized here.
Modify these values to experiment with different feel and difficulty.

Usage:
    from elf_invaders.config import Config
    cfg = Config()
    print(cfg.PLAYER_SPEED)
"""

from dataclasses import dataclass
from typing import Tuple, Optional


@dataclass
class Config:
    """
    Central configuration for the entire project.

    Sections:
    1. Screen Settings - Canvas dimensions and frame rate
    2. Player - Ship size, speed and fire rate
    3. Invaders - Formation layout and movement
    4. Projectiles - Gifts (player) and snowballs (invaders)
    5. Effects - Particles and falling snow
    6. Scoring - Points and lives
    7. Colors - Palette used by the renderer
    8. On-Screen Controls - Mouse/touch buttons
    9. Commentary - Round-end text service
    10. System - Logging and seeding
    """

    # =========================================================================
    # SCREEN SETTINGS
    # =========================================================================

    # Logical canvas dimensions (the drawing surface is never resized)
    SCREEN_WIDTH: int = 800
    SCREEN_HEIGHT: int = 600

    # One simulation step per display refresh
    FPS: int = 60

    # =========================================================================
    # PLAYER SETTINGS
    # =========================================================================

    PLAYER_WIDTH: int = 48
    PLAYER_HEIGHT: int = 48
    PLAYER_SPEED: int = 5
    PLAYER_BOTTOM_MARGIN: int = 10  # Gap between ship and bottom edge

    # Frames between consecutive shots
    PLAYER_COOLDOWN: int = 20

    # Enemy shots must overlap this far inside the sprite to count as a hit
    PLAYER_HITBOX_INSET: int = 10

    # =========================================================================
    # INVADER SETTINGS
    # =========================================================================

    INVADER_ROWS: int = 4
    INVADER_COLS: int = 8
    INVADER_WIDTH: int = 32
    INVADER_HEIGHT: int = 32
    INVADER_PADDING: int = 20
    INVADER_OFFSET_LEFT: int = 50
    INVADER_OFFSET_TOP: int = 50

    # Whole formation drops this far on every edge bounce
    INVADER_DROP_DISTANCE: int = 20

    # Horizontal pixels per frame at round start
    FORMATION_BASE_SPEED: float = 1.0
    # Permanent speed-up applied for every invader destroyed
    FORMATION_SPEED_DELTA: float = 0.05

    # Enemy fire chance per frame:
    #   (BASE + PER_KILL * destroyed) * DAMPING
    ENEMY_FIRE_BASE_CHANCE: float = 0.01
    ENEMY_FIRE_CHANCE_PER_KILL: float = 0.001
    ENEMY_FIRE_DAMPING: float = 0.25  # Balance knob, lower = calmer elves

    # =========================================================================
    # PROJECTILE SETTINGS
    # =========================================================================

    PROJECTILE_WIDTH: int = 6
    PROJECTILE_HEIGHT: int = 12
    PROJECTILE_SPEED: float = 7.0

    # Snowballs are bigger and slower so they read well on screen
    ENEMY_PROJECTILE_WIDTH: int = 14
    ENEMY_PROJECTILE_HEIGHT: int = 14
    ENEMY_PROJECTILE_SPEED_FACTOR: float = 0.6

    # =========================================================================
    # EFFECTS SETTINGS
    # =========================================================================

    PARTICLE_BURST_SIZE: int = 15
    PARTICLE_MIN_SPEED: float = 1.0
    PARTICLE_MAX_SPEED: float = 4.0
    PARTICLE_MIN_SIZE: float = 2.0
    PARTICLE_MAX_SIZE: float = 6.0
    PARTICLE_DECAY: float = 0.03  # Life lost per frame
    PARTICLE_SHRINK: float = 0.95  # Size multiplier per frame

    # Falling snow, created once and kept for the whole session
    DECORATION_COUNT: int = 150
    DECORATION_MIN_SIZE: float = 1.0
    DECORATION_MAX_SIZE: float = 3.0
    DECORATION_MIN_SPEED: float = 0.5
    DECORATION_MAX_SPEED: float = 2.0
    DECORATION_MIN_OPACITY: float = 0.3
    DECORATION_MAX_OPACITY: float = 0.8

    # =========================================================================
    # SCORING
    # =========================================================================

    SCORE_PER_KILL: int = 100
    LIVES: int = 3

    # =========================================================================
    # COLORS
    # =========================================================================

    # Background gradient (top, middle, bottom)
    COLOR_BACKGROUND_TOP: Tuple[int, int, int] = (2, 6, 23)
    COLOR_BACKGROUND_MID: Tuple[int, int, int] = (30, 27, 75)
    COLOR_BACKGROUND_BOTTOM: Tuple[int, int, int] = (49, 46, 129)
    COLOR_SNOW: Tuple[int, int, int] = (226, 232, 240)

    # Particle bursts
    COLOR_HIT_SUCCESS: Tuple[int, int, int] = (74, 222, 128)  # Bright green
    COLOR_HIT_FAILURE: Tuple[int, int, int] = (248, 113, 113)  # Bright red

    COLOR_TEXT: Tuple[int, int, int] = (255, 255, 255)

    # =========================================================================
    # ON-SCREEN CONTROLS
    # =========================================================================

    # Left / right / fire buttons for mouse and touch play
    TOUCH_CONTROLS_ENABLED: bool = True
    TOUCH_BUTTON_SIZE: int = 64
    TOUCH_FIRE_SIZE: int = 80
    TOUCH_MARGIN: int = 16

    # =========================================================================
    # COMMENTARY SERVICE
    # =========================================================================

    COMMENTARY_ENABLED: bool = True
    COMMENTARY_MODEL: str = 'gemini-3-flash-preview'
    COMMENTARY_ENDPOINT: str = 'https://generativelanguage.googleapis.com/v1beta/models'
    COMMENTARY_TIMEOUT: float = 10.0  # Seconds
    # Environment variables checked in order for the API key
    COMMENTARY_KEY_VARS: Tuple[str, ...] = ('GEMINI_API_KEY', 'API_KEY')

    # =========================================================================
    # SYSTEM SETTINGS
    # =========================================================================

    LOG_DIR: str = 'logs'
    LOG_LEVEL: str = 'INFO'

    # Random seed for reproducibility (None for random)
    SEED: Optional[int] = None

    @property
    def PLAYER_START_X(self) -> float:
        """Horizontally centered spawn position."""
        return self.SCREEN_WIDTH / 2 - self.PLAYER_WIDTH / 2

    @property
    def PLAYER_Y(self) -> float:
        """Fixed vertical position of the player ship."""
        return self.SCREEN_HEIGHT - self.PLAYER_HEIGHT - self.PLAYER_BOTTOM_MARGIN

    @property
    def INVADER_COUNT(self) -> int:
        return self.INVADER_ROWS * self.INVADER_COLS

    def __post_init__(self):
        """Validation and derived calculations."""
        assert self.SCREEN_WIDTH > 0 and self.SCREEN_HEIGHT > 0, "Screen must have a positive size"
        assert self.FPS > 0, "FPS must be positive"
        assert self.PLAYER_WIDTH > 2 * self.PLAYER_HITBOX_INSET, "Hit-box inset exceeds player width"
        assert self.PLAYER_COOLDOWN >= 0, "Cooldown cannot be negative"
        assert self.INVADER_ROWS > 0 and self.INVADER_COLS > 0, "Formation needs at least one invader"
        grid_width = (self.INVADER_OFFSET_LEFT
                      + self.INVADER_COLS * (self.INVADER_WIDTH + self.INVADER_PADDING)
                      - self.INVADER_PADDING)
        assert grid_width < self.SCREEN_WIDTH, "Invader grid does not fit the screen"
        assert self.FORMATION_BASE_SPEED > 0, "Formation speed must be positive"
        assert self.FORMATION_SPEED_DELTA >= 0, "Speed delta cannot be negative"
        assert 0 < self.ENEMY_FIRE_DAMPING <= 1, "Fire damping must be in (0, 1]"
        assert 0 < self.PARTICLE_SHRINK <= 1, "Particle shrink must be in (0, 1]"
        assert self.PARTICLE_DECAY > 0, "Particle decay must be positive"
        assert self.SCORE_PER_KILL > 0, "Score per kill must be positive"
        assert self.LIVES >= 1, "Player needs at least one life"
        controls_width = 3 * self.TOUCH_MARGIN + 2 * self.TOUCH_BUTTON_SIZE + self.TOUCH_FIRE_SIZE
        assert controls_width <= self.SCREEN_WIDTH, "On-screen controls do not fit the screen"


# Global config instance for easy importing
config = Config()


if __name__ == "__main__":
    # Print configuration summary
    cfg = Config()
    print("=" * 60)
    print("Elf Invaders - Configuration Summary")
    print("=" * 60)
    print(f"\nScreen: {cfg.SCREEN_WIDTH}x{cfg.SCREEN_HEIGHT} @ {cfg.FPS} FPS")
    print(f"Formation: {cfg.INVADER_ROWS}x{cfg.INVADER_COLS} = {cfg.INVADER_COUNT}")
    print(f"   Base speed: {cfg.FORMATION_BASE_SPEED} (+{cfg.FORMATION_SPEED_DELTA} per kill)")
    print(f"   Fire damping: {cfg.ENEMY_FIRE_DAMPING}")
    print(f"\nPlayer: speed {cfg.PLAYER_SPEED}, cooldown {cfg.PLAYER_COOLDOWN} frames")
    print(f"Lives: {cfg.LIVES}, points per kill: {cfg.SCORE_PER_KILL}")
    print("=" * 60)
