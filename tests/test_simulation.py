"""
Tests for the simulation driver.

These tests verify:
    - Lifecycle commands and the state machine
    - Callback delivery
    - Frame step ordering and round-end rules
    - Score / speed bookkeeping over long seeded runs
    - Reproducibility with a fixed seed
"""

import pytest

from elf_invaders.game.entities import Invader, Projectile
from elf_invaders.game.input import InputIntents
from elf_invaders.game.simulation import Simulation
from elf_invaders.game.state import GameState


IDLE = InputIntents()
FIRE = InputIntents(fire=True)


class Recorder:
    """Collects callback invocations in order."""

    def __init__(self, sim):
        self.events = []
        sim.on_state_change = lambda s: self.events.append(('state', s))
        sim.on_score_change = lambda v: self.events.append(('score', v))
        sim.on_lives_change = lambda v: self.events.append(('lives', v))

    def of(self, kind):
        return [value for k, value in self.events if k == kind]


def lethal_snowball(player):
    """A snowball that lands on the player's hit-box after one projectile move."""
    return Projectile(x=player.x + player.width / 2 - 7, y=player.y + 10 - 4.2,
                      width=14, height=14, dy=4.2, is_enemy=True)


def gift_for(invader):
    """A gift that overlaps the invader after one formation and projectile move."""
    return Projectile(x=invader.x + 10, y=invader.y + 10 + 7,
                      width=6, height=12, dy=-7, is_enemy=False)


class TestLifecycle:

    def test_starts_in_menu(self, sim, config):
        assert sim.game_state == GameState.MENU
        assert sim.state.score == 0
        assert sim.state.lives == config.LIVES
        assert len(sim.state.invaders) == config.INVADER_COUNT
        assert len(sim.state.decorations) == config.DECORATION_COUNT

    def test_step_in_menu_is_noop(self, sim):
        x0 = sim.state.invaders[0].x
        sim.step(FIRE)
        assert sim.state.frame == 0
        assert sim.state.invaders[0].x == x0
        assert sim.state.projectiles == []

    def test_start_enters_playing(self, sim):
        rec = Recorder(sim)
        assert sim.start() is True
        assert sim.game_state == GameState.PLAYING
        assert rec.of('state') == [GameState.PLAYING]

    def test_start_twice_is_ignored(self, sim):
        sim.start()
        rec = Recorder(sim)
        assert sim.start() is False
        assert sim.game_state == GameState.PLAYING
        assert rec.events == []

    def test_restart_outside_terminal_is_ignored(self, sim):
        assert sim.restart() is False
        sim.start()
        assert sim.restart() is False
        assert sim.game_state == GameState.PLAYING

    def test_restart_after_game_over(self, sim, config):
        sim.start()
        sim.state.lives = 1
        sim.state.projectiles.append(lethal_snowball(sim.state.player))
        sim.step(IDLE)
        assert sim.game_state == GameState.GAME_OVER

        decorations = sim.state.decorations
        flakes = list(decorations)
        rec = Recorder(sim)
        assert sim.restart() is True

        assert sim.game_state == GameState.MENU
        assert rec.of('state') == [GameState.MENU]
        assert len(sim.state.invaders) == config.INVADER_COUNT
        assert sim.state.formation_speed == config.FORMATION_BASE_SPEED
        assert sim.state.projectiles == []
        assert sim.state.particles == []
        assert sim.state.frame == 0
        assert sim.state.decorations is decorations
        assert all(a is b for a, b in zip(sim.state.decorations, flakes))

    def test_start_resets_score_and_lives(self, sim, config):
        sim.start()
        sim.state.score = 700
        sim.state.lives = 1
        sim.state.projectiles.append(lethal_snowball(sim.state.player))
        sim.step(IDLE)
        sim.restart()

        rec = Recorder(sim)
        sim.start()
        assert sim.state.score == 0
        assert sim.state.lives == config.LIVES
        assert rec.of('score') == [0]
        assert rec.of('lives') == [config.LIVES]
        assert rec.of('state') == [GameState.PLAYING]


class TestFrameStep:

    def test_first_step_moves_formation(self, sim):
        sim.start()
        sim.step(IDLE)
        assert sim.state.invaders[0].x == 51
        assert sim.state.invaders[0].y == 50
        assert sim.state.frame == 1

    def test_fire_adds_player_shot(self, sim):
        sim.start()
        sim.step(FIRE)
        shots = [p for p in sim.state.projectiles if not p.is_enemy]
        assert len(shots) == 1
        # Spawned this frame and already moved once
        assert shots[0].y == sim.state.player.y - 7

    def test_player_moves_with_intent(self, sim, config):
        sim.start()
        x0 = sim.state.player.x
        sim.step(InputIntents(move_left=True))
        assert sim.state.player.x == x0 - config.PLAYER_SPEED

    def test_overrun_ends_round_immediately(self, sim):
        """An invader reaching the player's row ends the step before anything else."""
        sim.start()
        rec = Recorder(sim)
        lowest = sim.state.invaders[-1]
        lowest.y = sim.state.player.y - lowest.height
        stray = Projectile(x=10, y=300, width=6, height=12, dy=-7)
        sim.state.projectiles.append(stray)

        sim.step(IDLE)

        assert sim.game_state == GameState.GAME_OVER
        assert rec.of('state') == [GameState.GAME_OVER]
        assert sim.state.frame == 0
        assert stray.y == 300

    def test_overrun_after_drop(self, sim, config):
        """The edge drop can push the formation onto the player's row."""
        sim.start()
        edge = sim.state.invaders[-1]
        dx = (config.SCREEN_WIDTH - edge.width - 0.5) - edge.x
        dy = (sim.state.player.y - config.INVADER_DROP_DISTANCE - edge.height) - edge.y
        for inv in sim.state.invaders:
            inv.x += dx
            inv.y += dy
        sim.step(IDLE)
        assert sim.game_state == GameState.GAME_OVER

    def test_snowball_costs_a_life(self, sim, config):
        sim.start()
        rec = Recorder(sim)
        sim.state.projectiles.append(lethal_snowball(sim.state.player))
        sim.step(IDLE)
        assert sim.state.lives == config.LIVES - 1
        assert rec.of('lives') == [config.LIVES - 1]
        assert sim.game_state == GameState.PLAYING

    def test_last_life_is_game_over(self, sim):
        sim.start()
        sim.state.lives = 1
        rec = Recorder(sim)
        sim.state.projectiles.append(lethal_snowball(sim.state.player))

        sim.step(IDLE)

        assert sim.state.lives == 0
        assert sim.game_state == GameState.GAME_OVER
        assert rec.of('lives') == [0]
        assert rec.of('state') == [GameState.GAME_OVER]

    def test_clearing_formation_is_victory(self, sim, config):
        sim.start()
        rec = Recorder(sim)
        survivor = sim.state.invaders[0]
        sim.state.invaders = [survivor]
        sim.state.projectiles.append(gift_for(survivor))

        sim.step(IDLE)

        assert sim.game_state == GameState.VICTORY
        assert sim.state.invaders == []
        assert sim.state.score == config.SCORE_PER_KILL
        assert rec.of('score') == [config.SCORE_PER_KILL]
        assert rec.of('state') == [GameState.VICTORY]

    def test_victory_beats_lethal_snowball(self, sim):
        sim.start()
        sim.state.lives = 1
        survivor = sim.state.invaders[0]
        sim.state.invaders = [survivor]
        sim.state.projectiles.append(lethal_snowball(sim.state.player))
        sim.state.projectiles.append(gift_for(survivor))

        sim.step(IDLE)

        assert sim.game_state == GameState.VICTORY
        assert sim.state.lives == 1

    def test_no_mutation_after_round_end(self, sim):
        sim.start()
        sim.state.lives = 1
        sim.state.projectiles.append(lethal_snowball(sim.state.player))
        sim.step(IDLE)
        frame = sim.state.frame
        positions = [(inv.x, inv.y) for inv in sim.state.invaders]

        for _ in range(10):
            sim.step(FIRE)

        assert sim.state.frame == frame
        assert [(inv.x, inv.y) for inv in sim.state.invaders] == positions
        assert sim.state.lives == 0

    def test_score_callback_only_on_change(self, sim):
        sim.start()
        rec = Recorder(sim)
        for _ in range(5):
            sim.step(IDLE)
        assert rec.of('score') == []


class TestLongRuns:

    @pytest.mark.slow
    def test_bookkeeping_holds_every_frame(self, config):
        """Score, speed and the invader count always agree with the kill count."""
        sim = Simulation(config, seed=3)
        sim.start()
        for frame in range(3000):
            if sim.game_state != GameState.PLAYING:
                break
            intents = InputIntents(
                move_left=(frame // 90) % 2 == 0,
                move_right=(frame // 90) % 2 == 1,
                fire=True,
            )
            sim.step(intents)
            st = sim.state
            assert st.score == st.invaders_destroyed * config.SCORE_PER_KILL
            assert st.formation_speed == pytest.approx(
                config.FORMATION_BASE_SPEED + st.invaders_destroyed * config.FORMATION_SPEED_DELTA)
            assert len(st.invaders) + st.invaders_destroyed == config.INVADER_COUNT
            assert 0 <= st.lives <= config.LIVES
            assert 0 <= st.player.x <= config.SCREEN_WIDTH - st.player.width
            assert not any(e.marked_for_deletion for e in st.invaders)
            assert not any(e.marked_for_deletion for e in st.projectiles)

        assert sim.state.invaders_destroyed > 0

    def test_same_seed_same_game(self, config):
        def play(seed):
            sim = Simulation(config, seed=seed)
            sim.start()
            for frame in range(400):
                sim.step(InputIntents(move_right=frame % 50 < 25, fire=True))
            return sim.info(), [(p.x, p.y, p.is_enemy) for p in sim.state.projectiles]

        assert play(11) == play(11)

    def test_reseed_repeats_fire_pattern(self, config):
        sim = Simulation(config, seed=1)
        sim.seed(99)
        draws_a = [sim.rng.random() for _ in range(5)]
        sim.seed(99)
        draws_b = [sim.rng.random() for _ in range(5)]
        assert draws_a == draws_b
        assert sim.particle_system.rng is sim.rng
        assert sim.snow.rng is sim.rng


class TestInfo:

    def test_info_keys(self, sim, config):
        info = sim.info()
        assert info == {
            'state': 'MENU',
            'score': 0,
            'lives': config.LIVES,
            'invaders_remaining': config.INVADER_COUNT,
            'invaders_destroyed': 0,
            'formation_speed': config.FORMATION_BASE_SPEED,
            'frame': 0,
        }

    def test_default_config(self):
        sim = Simulation()
        assert sim.game_state == GameState.MENU
