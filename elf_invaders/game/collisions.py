"""
Collision & Scoring Resolver
============================

Pairs projectiles with their targets once per frame.

Order of a pass:
    1. Gifts against invaders (first overlapping invader in list order wins)
    2. Cleared-formation check: a cleared formation ends the round as a
       Victory and any snowball still in flight is ignored
    3. Snowballs against the player's narrowed hit-box
    4. Compaction of invaders and projectiles

Nothing is removed until step 4, so every live entity takes part in
exactly one check per frame even if it dies partway through.
"""

from dataclasses import dataclass
from typing import Optional

from ..config import Config
from .entities import compact
from .formation import FormationController
from .geometry import boxes_overlap, inset_box
from .particles import ParticleSystem
from .projectiles import ProjectileSystem
from .state import GameState, SimulationState


@dataclass
class CollisionReport:
    """What happened during one resolver pass."""
    kills: int = 0
    player_hits: int = 0
    outcome: Optional[GameState] = None


class CollisionResolver:
    """Applies hits, awards score, takes lives and detects round end."""

    def __init__(self, config: Config, formation: FormationController,
                 particles: ParticleSystem):
        self.config = config
        self.formation = formation
        self.particles = particles

    def resolve(self, state: SimulationState) -> CollisionReport:
        report = CollisionReport()

        self._resolve_player_shots(state, report)

        if not any(not inv.marked_for_deletion for inv in state.invaders):
            report.outcome = GameState.VICTORY
        else:
            self._resolve_enemy_shots(state, report)

        state.invaders = compact(state.invaders)
        state.projectiles = ProjectileSystem.prune(state.projectiles)
        return report

    def _resolve_player_shots(self, state: SimulationState, report: CollisionReport) -> None:
        cfg = self.config
        for shot in ProjectileSystem.player_shots(state.projectiles):
            if shot.marked_for_deletion:
                continue
            for invader in state.invaders:
                if invader.marked_for_deletion:
                    continue
                if boxes_overlap(shot.box, invader.box):
                    invader.marked_for_deletion = True
                    shot.marked_for_deletion = True
                    cx, cy = invader.center
                    state.particles.extend(self.particles.burst(cx, cy, cfg.COLOR_HIT_SUCCESS))
                    state.score += cfg.SCORE_PER_KILL
                    self.formation.escalate(state)
                    report.kills += 1
                    break

    def _resolve_enemy_shots(self, state: SimulationState, report: CollisionReport) -> None:
        cfg = self.config
        player = state.player
        hitbox = inset_box(player.box, cfg.PLAYER_HITBOX_INSET)
        for shot in ProjectileSystem.enemy_shots(state.projectiles):
            if shot.marked_for_deletion:
                continue
            if boxes_overlap(shot.box, hitbox):
                shot.marked_for_deletion = True
                cx, cy = player.center
                state.particles.extend(self.particles.burst(cx, cy, cfg.COLOR_HIT_FAILURE))
                state.lives -= 1
                report.player_hits += 1
                if state.lives <= 0:
                    # Round is over; later snowballs this frame cost nothing
                    report.outcome = GameState.GAME_OVER
                    return
