"""
Player Controller
=================

Horizontal movement with clamping and cooldown-limited firing.
"""

from typing import List, Optional

from ..config import Config
from .entities import Player, Projectile
from .input import InputIntents


class PlayerController:
    """Applies movement and fire intents to the player ship."""

    def __init__(self, config: Config):
        self.config = config

    def spawn(self) -> Player:
        """Create a player centered at the bottom of the screen."""
        return Player(
            x=self.config.PLAYER_START_X,
            y=self.config.PLAYER_Y,
            width=self.config.PLAYER_WIDTH,
            height=self.config.PLAYER_HEIGHT,
            cooldown=0,
        )

    def move(self, player: Player, intents: InputIntents) -> None:
        if intents.move_left:
            player.x -= self.config.PLAYER_SPEED
        if intents.move_right:
            player.x += self.config.PLAYER_SPEED
        player.x = max(0, min(self.config.SCREEN_WIDTH - player.width, player.x))

    def fire(self, player: Player, intents: InputIntents) -> Optional[Projectile]:
        """
        Tick the cooldown and fire if allowed.

        Holding fire produces at most one shot per cooldown period.

        Returns:
            The new projectile, or None if no shot was fired
        """
        if player.cooldown > 0:
            player.cooldown -= 1
        if not intents.fire or player.cooldown > 0:
            return None

        cfg = self.config
        player.cooldown = cfg.PLAYER_COOLDOWN
        return Projectile(
            x=player.x + player.width / 2 - cfg.PROJECTILE_WIDTH / 2,
            y=player.y,
            width=cfg.PROJECTILE_WIDTH,
            height=cfg.PROJECTILE_HEIGHT,
            dy=-cfg.PROJECTILE_SPEED,
            is_enemy=False,
        )

    def update(self, player: Player, intents: InputIntents,
               projectiles: List[Projectile]) -> None:
        """Move, then fire into the shared projectile list."""
        self.move(player, intents)
        shot = self.fire(player, intents)
        if shot is not None:
            projectiles.append(shot)
