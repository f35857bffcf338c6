"""
Tests for the collision & scoring resolver.

These tests verify:
    - Kill credit, particles and speed escalation per hit
    - One kill per projectile, one projectile per kill
    - Narrowed player hit-box
    - Lives and round-end outcomes
    - Compaction after the pass
"""

import pytest

from elf_invaders.game.collisions import CollisionResolver
from elf_invaders.game.entities import Invader, Projectile
from elf_invaders.game.formation import FormationController
from elf_invaders.game.state import GameState


@pytest.fixture
def resolver(config, particles):
    return CollisionResolver(config, FormationController(config), particles)


def gift(x, y):
    return Projectile(x=x, y=y, width=6, height=12, dy=-7, is_enemy=False)


def snowball(x, y):
    return Projectile(x=x, y=y, width=14, height=14, dy=4.2, is_enemy=True)


def snowball_on_player(player):
    return snowball(player.x + player.width / 2 - 7, player.y + 10)


class TestPlayerShots:

    def test_kill_scenario(self, resolver, state, config):
        """Kill the invader at (50,50): +100, speed +delta, one burst at (66,66)."""
        target = state.invaders[0]
        assert (target.x, target.y) == (50, 50)
        base_speed = state.formation_speed
        state.projectiles.append(gift(63, 70))

        report = resolver.resolve(state)

        assert report.kills == 1
        assert state.score == config.SCORE_PER_KILL
        assert state.formation_speed == pytest.approx(base_speed + config.FORMATION_SPEED_DELTA)
        assert len(state.particles) == config.PARTICLE_BURST_SIZE
        assert all((p.x, p.y) == (66, 66) for p in state.particles)
        assert all(p.color == config.COLOR_HIT_SUCCESS for p in state.particles)
        assert target not in state.invaders
        assert state.projectiles == []
        assert len(state.invaders) == config.INVADER_COUNT - 1
        assert report.outcome is None

    def test_miss_changes_nothing(self, resolver, state, config):
        state.projectiles.append(gift(20, 300))
        report = resolver.resolve(state)
        assert report.kills == 0
        assert state.score == 0
        assert len(state.invaders) == config.INVADER_COUNT
        assert len(state.projectiles) == 1

    def test_touching_edge_is_a_hit(self, resolver, state):
        target = state.invaders[0]
        state.projectiles.append(gift(target.x + target.width, target.y))
        assert resolver.resolve(state).kills == 1

    def test_one_kill_per_projectile(self, resolver, state, config):
        """A projectile overlapping two invaders only kills the first in list order."""
        first = Invader(x=100, y=300, width=32, height=32)
        second = Invader(x=110, y=300, width=32, height=32)
        state.invaders = [first, second]
        state.projectiles.append(gift(115, 310))

        report = resolver.resolve(state)

        assert report.kills == 1
        assert state.invaders == [second]
        assert state.score == config.SCORE_PER_KILL

    def test_one_credit_per_invader(self, resolver, state, config):
        """Two projectiles on the same invader: one kill, the other flies on."""
        target = state.invaders[0]
        a = gift(target.x + 5, target.y + 5)
        b = gift(target.x + 15, target.y + 5)
        state.projectiles.extend([a, b])

        report = resolver.resolve(state)

        assert report.kills == 1
        assert state.score == config.SCORE_PER_KILL
        assert state.projectiles == [b]
        assert len(state.particles) == config.PARTICLE_BURST_SIZE

    def test_multiple_kills_in_one_frame(self, resolver, state, config):
        for inv in state.invaders[:3]:
            state.projectiles.append(gift(inv.x + 10, inv.y + 10))
        report = resolver.resolve(state)
        assert report.kills == 3
        assert state.score == 3 * config.SCORE_PER_KILL
        assert state.invaders_destroyed == 3
        assert state.formation_speed == pytest.approx(
            config.FORMATION_BASE_SPEED + 3 * config.FORMATION_SPEED_DELTA)

    def test_player_shot_ignores_player(self, resolver, state):
        player = state.player
        state.projectiles.append(gift(player.x + 20, player.y + 5))
        resolver.resolve(state)
        assert state.lives == 3

    def test_last_kill_is_victory(self, resolver, state):
        state.invaders = state.invaders[:1]
        target = state.invaders[0]
        state.projectiles.append(gift(target.x + 10, target.y + 10))
        report = resolver.resolve(state)
        assert report.outcome == GameState.VICTORY
        assert state.invaders == []


class TestEnemyShots:

    def test_hit_costs_a_life(self, resolver, state, config):
        player = state.player
        state.projectiles.append(snowball_on_player(player))

        report = resolver.resolve(state)

        assert report.player_hits == 1
        assert state.lives == config.LIVES - 1
        assert state.projectiles == []
        assert len(state.particles) == config.PARTICLE_BURST_SIZE
        assert all((p.x, p.y) == player.center for p in state.particles)
        assert all(p.color == config.COLOR_HIT_FAILURE for p in state.particles)
        assert report.outcome is None

    def test_grazing_outer_edge_misses(self, resolver, state, config):
        """The hit-box is inset, so clipping the sprite's outer edge is safe."""
        player = state.player
        shot = snowball(player.x - 14 + config.PLAYER_HITBOX_INSET - 1, player.y + 10)
        state.projectiles.append(shot)
        report = resolver.resolve(state)
        assert report.player_hits == 0
        assert state.lives == config.LIVES
        assert state.projectiles == [shot]

    def test_inside_inset_hits(self, resolver, state, config):
        player = state.player
        state.projectiles.append(snowball(player.x - 14 + config.PLAYER_HITBOX_INSET, player.y + 10))
        assert resolver.resolve(state).player_hits == 1

    def test_enemy_shot_ignores_invaders(self, resolver, state, config):
        target = state.invaders[0]
        state.projectiles.append(snowball(target.x + 5, target.y + 5))
        resolver.resolve(state)
        assert len(state.invaders) == config.INVADER_COUNT
        assert state.score == 0

    def test_last_life_is_game_over(self, resolver, state):
        state.lives = 1
        state.projectiles.append(snowball_on_player(state.player))
        report = resolver.resolve(state)
        assert state.lives == 0
        assert report.outcome == GameState.GAME_OVER

    def test_no_lives_lost_after_game_over(self, resolver, state):
        """Once the round is lost, later snowballs in the same pass do nothing."""
        state.lives = 1
        first = snowball_on_player(state.player)
        second = snowball_on_player(state.player)
        state.projectiles.extend([first, second])

        report = resolver.resolve(state)

        assert state.lives == 0
        assert report.player_hits == 1
        assert state.projectiles == [second]


class TestOutcomePrecedence:

    def test_cleared_formation_beats_pending_hit(self, resolver, state):
        """Clearing the formation wins even if a lethal snowball is also landing."""
        state.lives = 1
        state.invaders = state.invaders[:1]
        target = state.invaders[0]
        state.projectiles.append(snowball_on_player(state.player))
        state.projectiles.append(gift(target.x + 10, target.y + 10))

        report = resolver.resolve(state)

        assert report.outcome == GameState.VICTORY
        assert state.lives == 1
        assert report.player_hits == 0
