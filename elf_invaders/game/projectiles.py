"""
Projectile Subsystem
====================

Gifts and snowballs share one list; is_enemy decides which targets a
projectile is tested against. Projectiles only move vertically.
"""

from typing import List

from ..config import Config
from .entities import Projectile, compact


class ProjectileSystem:
    """Advances projectiles and flags the ones that left the playfield."""

    def __init__(self, config: Config):
        self.config = config

    def advance(self, projectiles: List[Projectile]) -> None:
        for projectile in projectiles:
            projectile.y += projectile.dy
            if projectile.y < 0 or projectile.y > self.config.SCREEN_HEIGHT:
                projectile.marked_for_deletion = True

    @staticmethod
    def player_shots(projectiles: List[Projectile]) -> List[Projectile]:
        return [p for p in projectiles if not p.is_enemy]

    @staticmethod
    def enemy_shots(projectiles: List[Projectile]) -> List[Projectile]:
        return [p for p in projectiles if p.is_enemy]

    @staticmethod
    def prune(projectiles: List[Projectile]) -> List[Projectile]:
        return compact(projectiles)
