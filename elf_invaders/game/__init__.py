"""
Game Module
===========

The simulation core. Nothing here opens a window or draws; the visualizer
package renders whatever SimulationState currently holds.

Classes:
    Simulation - Frame-stepped driver owning all game state
    FrameLoop - Repeating per-frame task with start/cancel
    IntentTracker - Input flags written by event handlers
"""

from .entities import Entity, Player, Invader, Projectile, Particle, Decoration
from .geometry import boxes_overlap
from .input import Intent, InputIntents, IntentTracker
from .state import GameState, SimulationState
from .simulation import Simulation
from .frame_loop import FrameLoop


__all__ = [
    # Entities
    'Entity',
    'Player',
    'Invader',
    'Projectile',
    'Particle',
    'Decoration',
    'boxes_overlap',
    # Input
    'Intent',
    'InputIntents',
    'IntentTracker',
    # Driver
    'GameState',
    'SimulationState',
    'Simulation',
    'FrameLoop',
]
