"""
Input Intents
=============

Event handlers write intent flags into an IntentTracker as keys go down
and up; the simulation never sees the tracker itself. At the start of each
step the driver takes an immutable InputIntents snapshot and passes that in.

Raw key codes stop here: the core only knows about the three intents.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional

import pygame


class Intent(Enum):
    """Logical player inputs."""
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    FIRE = auto()


@dataclass(frozen=True)
class InputIntents:
    """Per-step snapshot of the active intents."""
    move_left: bool = False
    move_right: bool = False
    fire: bool = False


DEFAULT_KEY_MAP: Dict[int, Intent] = {
    pygame.K_LEFT: Intent.MOVE_LEFT,
    pygame.K_a: Intent.MOVE_LEFT,
    pygame.K_RIGHT: Intent.MOVE_RIGHT,
    pygame.K_d: Intent.MOVE_RIGHT,
    pygame.K_SPACE: Intent.FIRE,
    pygame.K_RETURN: Intent.FIRE,
}


class IntentTracker:
    """
    Mutable intent flags, written by the input-binding layer.

    Keyboard events and on-screen buttons both end up in press()/release().
    """

    def __init__(self, key_map: Optional[Dict[int, Intent]] = None):
        self.key_map = dict(DEFAULT_KEY_MAP if key_map is None else key_map)
        self._active: Dict[Intent, bool] = {intent: False for intent in Intent}

    def press(self, intent: Intent) -> None:
        self._active[intent] = True

    def release(self, intent: Intent) -> None:
        self._active[intent] = False

    def release_all(self) -> None:
        """Drop every intent, e.g. when the window loses focus."""
        for intent in self._active:
            self._active[intent] = False

    def is_active(self, intent: Intent) -> bool:
        return self._active[intent]

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Update flags from a pygame key event.

        Returns:
            True if the event mapped to an intent
        """
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return False
        intent = self.key_map.get(event.key)
        if intent is None:
            return False
        if event.type == pygame.KEYDOWN:
            self.press(intent)
        else:
            self.release(intent)
        return True

    def snapshot(self) -> InputIntents:
        return InputIntents(
            move_left=self._active[Intent.MOVE_LEFT],
            move_right=self._active[Intent.MOVE_RIGHT],
            fire=self._active[Intent.FIRE],
        )
