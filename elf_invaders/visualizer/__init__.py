"""
Visualization Module
====================

Pygame drawing for the playfield, the text overlay and the on-screen
controls. The renderer and overlay only read game state; the controls
also turn pointer events into intents.
"""

from .renderer import Renderer
from .overlay import GameOverlay
from .controls import TouchControls

__all__ = ['Renderer', 'GameOverlay', 'TouchControls']
