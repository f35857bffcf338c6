"""
Elf Invaders
============

A festive Space Invaders variant built on pygame.

Packages:
    game       - Fixed-step simulation core (no display access)
    visualizer - Pygame renderer and text overlay
    services   - Round-end commentary client
    utils      - Logging
"""

__version__ = '1.0.0'
