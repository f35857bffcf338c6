"""
On-Screen Controls
==================

Mouse and touch buttons in the bottom corners: left, right and fire.

A pointer pressed on a button holds that button's intent. Lifting the
pointer or sliding it off the button releases it. The buttons write into
the same IntentTracker as the keyboard, so the simulation cannot tell the
two apart.

Each mouse and each finger is tracked separately, so one thumb can hold
left while another taps fire.
"""

from typing import Dict, Hashable, List, Optional, Tuple

import pygame

from ..config import Config
from ..game.input import Intent, IntentTracker


MOUSE_POINTER = 'mouse'

# (phase, pointer id, pixel position)
PointerEvent = Tuple[str, Hashable, Tuple[float, float]]


def pointer_event(event: pygame.event.Event, size: Tuple[int, int]) -> Optional[PointerEvent]:
    """
    Reduce a mouse or finger event to (phase, pointer_id, pos).

    phase is 'down', 'up' or 'move'. Finger coordinates arrive normalized
    to [0, 1] and are scaled to pixels. Mouse events that SDL synthesizes
    from touches are dropped so a tap is not seen twice. Returns None for
    anything else, including mouse buttons other than the left one.
    """
    if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION):
        if getattr(event, 'touch', False):
            return None
        if event.type == pygame.MOUSEMOTION:
            return 'move', MOUSE_POINTER, event.pos
        if event.button != 1:
            return None
        phase = 'down' if event.type == pygame.MOUSEBUTTONDOWN else 'up'
        return phase, MOUSE_POINTER, event.pos

    finger_phases = {
        pygame.FINGERDOWN: 'down',
        pygame.FINGERUP: 'up',
        pygame.FINGERMOTION: 'move',
    }
    phase = finger_phases.get(event.type)
    if phase is None:
        return None
    width, height = size
    return phase, ('finger', event.finger_id), (event.x * width, event.y * height)


class ControlButton:
    """A round on-screen button bound to one intent."""

    def __init__(self, intent: Intent, rect: pygame.Rect, color: Tuple[int, int, int]):
        self.intent = intent
        self.rect = rect
        self.color = color

    def contains_point(self, pos: Tuple[float, float]) -> bool:
        return self.rect.collidepoint(int(pos[0]), int(pos[1]))


class TouchControls:
    """
    Left/right/fire button strip.

    Example:
        >>> controls = TouchControls(config)
        >>> controls.handle_event(event, tracker)   # True if consumed
        >>> controls.render(screen)
    """

    def __init__(self, config: Config):
        self.config = config
        self.size = (config.SCREEN_WIDTH, config.SCREEN_HEIGHT)

        size = config.TOUCH_BUTTON_SIZE
        fire = config.TOUCH_FIRE_SIZE
        margin = config.TOUCH_MARGIN
        bottom = config.SCREEN_HEIGHT - margin

        self.buttons: List[ControlButton] = [
            ControlButton(Intent.MOVE_LEFT,
                          pygame.Rect(margin, bottom - size, size, size),
                          (255, 255, 255)),
            ControlButton(Intent.MOVE_RIGHT,
                          pygame.Rect(2 * margin + size, bottom - size, size, size),
                          (255, 255, 255)),
            ControlButton(Intent.FIRE,
                          pygame.Rect(config.SCREEN_WIDTH - margin - fire, bottom - fire, fire, fire),
                          (239, 68, 68)),
        ]

        # Pointer id -> intent it is holding down
        self._held: Dict[Hashable, Intent] = {}

    def button_at(self, pos: Tuple[float, float]) -> Optional[ControlButton]:
        for button in self.buttons:
            if button.contains_point(pos):
                return button
        return None

    def is_held(self, intent: Intent) -> bool:
        return intent in self._held.values()

    def handle_event(self, event: pygame.event.Event, tracker: IntentTracker,
                     accept_press: bool = True) -> bool:
        """
        Route a pointer event to the tracker.

        Args:
            event: Any pygame event
            tracker: Receives press/release for the buttons' intents
            accept_press: When False, new presses are ignored but held
                          pointers can still be lifted

        Returns:
            True if the event pressed or released a button
        """
        pointer = pointer_event(event, self.size)
        if pointer is None:
            return False
        phase, pointer_id, pos = pointer

        if phase == 'down':
            button = self.button_at(pos) if accept_press else None
            if button is None:
                return False
            self._lift(pointer_id, tracker)
            self._held[pointer_id] = button.intent
            tracker.press(button.intent)
            return True

        if phase == 'up':
            return self._lift(pointer_id, tracker)

        held = self._held.get(pointer_id)
        if held is None:
            return False
        button = self.button_at(pos)
        if button is None or button.intent != held:
            return self._lift(pointer_id, tracker)
        return False

    def release_all(self, tracker: IntentTracker) -> None:
        for intent in set(self._held.values()):
            tracker.release(intent)
        self._held.clear()

    def _lift(self, pointer_id: Hashable, tracker: IntentTracker) -> bool:
        intent = self._held.pop(pointer_id, None)
        if intent is None:
            return False
        # Another finger may still be on the same button
        if not self.is_held(intent):
            tracker.release(intent)
        return True

    # =========================================================================
    # RENDERING
    # =========================================================================

    def render(self, screen: pygame.Surface) -> None:
        layer = pygame.Surface(self.size, pygame.SRCALPHA)
        for button in self.buttons:
            alpha = 90 if self.is_held(button.intent) else 40
            center = button.rect.center
            radius = button.rect.width // 2
            pygame.draw.circle(layer, (*button.color, alpha), center, radius)
            pygame.draw.circle(layer, (255, 255, 255, 80), center, radius, 2)
            self._draw_icon(layer, button)
        screen.blit(layer, (0, 0))

    def _draw_icon(self, layer: pygame.Surface, button: ControlButton) -> None:
        cx, cy = button.rect.center
        r = button.rect.width * 0.25
        icon = (255, 255, 255, 200)
        if button.intent == Intent.MOVE_LEFT:
            pygame.draw.polygon(layer, icon, [(cx - r, cy), (cx + r * 0.7, cy - r), (cx + r * 0.7, cy + r)])
        elif button.intent == Intent.MOVE_RIGHT:
            pygame.draw.polygon(layer, icon, [(cx + r, cy), (cx - r * 0.7, cy - r), (cx - r * 0.7, cy + r)])
        else:
            # Gift box with ribbon
            box = pygame.Rect(0, 0, int(r * 1.6), int(r * 1.4))
            box.center = (cx, cy + int(r * 0.15))
            pygame.draw.rect(layer, (96, 165, 250, 220), box, border_radius=3)
            pygame.draw.line(layer, (250, 204, 21, 255), (box.centerx, box.top), (box.centerx, box.bottom - 1), 3)
            pygame.draw.line(layer, (250, 204, 21, 255), (box.left, box.top + 4), (box.right - 1, box.top + 4), 3)
