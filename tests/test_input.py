"""
Tests for keyboard-to-intent binding.
"""

import dataclasses

import pygame
import pytest

from elf_invaders.game.input import InputIntents, Intent, IntentTracker


def key(event_type, code):
    return pygame.event.Event(event_type, key=code)


@pytest.fixture
def tracker():
    return IntentTracker()


class TestIntentTracker:

    def test_initially_idle(self, tracker):
        assert tracker.snapshot() == InputIntents()

    def test_keydown_sets_intent(self, tracker):
        assert tracker.handle_event(key(pygame.KEYDOWN, pygame.K_LEFT)) is True
        assert tracker.is_active(Intent.MOVE_LEFT)
        assert tracker.snapshot() == InputIntents(move_left=True)

    def test_keyup_clears_intent(self, tracker):
        tracker.handle_event(key(pygame.KEYDOWN, pygame.K_SPACE))
        tracker.handle_event(key(pygame.KEYUP, pygame.K_SPACE))
        assert not tracker.is_active(Intent.FIRE)

    def test_alternate_bindings(self, tracker):
        tracker.handle_event(key(pygame.KEYDOWN, pygame.K_a))
        tracker.handle_event(key(pygame.KEYDOWN, pygame.K_d))
        tracker.handle_event(key(pygame.KEYDOWN, pygame.K_RETURN))
        assert tracker.snapshot() == InputIntents(move_left=True, move_right=True, fire=True)

    def test_unmapped_key_ignored(self, tracker):
        assert tracker.handle_event(key(pygame.KEYDOWN, pygame.K_z)) is False
        assert tracker.snapshot() == InputIntents()

    def test_non_key_event_ignored(self, tracker):
        event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0))
        assert tracker.handle_event(event) is False

    def test_release_all(self, tracker):
        tracker.press(Intent.MOVE_RIGHT)
        tracker.press(Intent.FIRE)
        tracker.release_all()
        assert tracker.snapshot() == InputIntents()

    def test_snapshot_is_frozen_copy(self, tracker):
        tracker.press(Intent.FIRE)
        snap = tracker.snapshot()
        tracker.release(Intent.FIRE)
        assert snap.fire is True
        with pytest.raises(dataclasses.FrozenInstanceError):
            snap.fire = False

    def test_custom_key_map(self):
        tracker = IntentTracker({pygame.K_j: Intent.MOVE_LEFT})
        assert tracker.handle_event(key(pygame.KEYDOWN, pygame.K_j)) is True
        assert tracker.handle_event(key(pygame.KEYDOWN, pygame.K_LEFT)) is False
        assert tracker.snapshot().move_left is True
