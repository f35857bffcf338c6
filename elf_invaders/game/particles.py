"""
Particle System
===============

Purely cosmetic effects:
    - Explosion bursts on invader kills and player hits
    - Falling snow in the background

Neither ever takes part in collision. Bursts are sampled in one batch
from the simulation's numpy generator so seeded runs stay reproducible.
"""

import math
from typing import List, Tuple

import numpy as np

from ..config import Config
from .entities import Particle, Decoration


class ParticleSystem:
    """
    Spawns and ages explosion particles.

    Example:
        >>> particles = ParticleSystem(config, rng)
        >>> state.particles.extend(particles.burst(66, 66, (74, 222, 128)))
        >>> particles.update(state.particles)
    """

    def __init__(self, config: Config, rng: np.random.Generator):
        self.config = config
        self.rng = rng

    def burst(self, x: float, y: float, color: Tuple[int, int, int]) -> List[Particle]:
        """Create a fixed-size ring of particles flying out of (x, y)."""
        cfg = self.config
        count = cfg.PARTICLE_BURST_SIZE
        angles = self.rng.uniform(0.0, 2 * math.pi, size=count)
        speeds = self.rng.uniform(cfg.PARTICLE_MIN_SPEED, cfg.PARTICLE_MAX_SPEED, size=count)
        sizes = self.rng.uniform(cfg.PARTICLE_MIN_SIZE, cfg.PARTICLE_MAX_SIZE, size=count)
        vxs = np.cos(angles) * speeds
        vys = np.sin(angles) * speeds

        return [
            Particle(
                x=x,
                y=y,
                width=float(size),
                height=0.0,
                vx=float(vx),
                vy=float(vy),
                life=1.0,
                color=color,
            )
            for vx, vy, size in zip(vxs, vys, sizes)
        ]

    def update(self, particles: List[Particle]) -> None:
        """Integrate, decay and shrink; remove particles whose life ran out."""
        decay = self.config.PARTICLE_DECAY
        shrink = self.config.PARTICLE_SHRINK
        for p in particles:
            p.x += p.vx
            p.y += p.vy
            p.life -= decay
            p.width *= shrink
            if p.life <= 0:
                p.marked_for_deletion = True

        # In-place filtering: the state keeps the same list object
        write_idx = 0
        for read_idx in range(len(particles)):
            if not particles[read_idx].marked_for_deletion:
                if write_idx != read_idx:
                    particles[write_idx] = particles[read_idx]
                write_idx += 1
        del particles[write_idx:]


class SnowField:
    """Background snowflakes that wrap from the bottom edge to the top."""

    def __init__(self, config: Config, rng: np.random.Generator):
        self.config = config
        self.rng = rng

    def seed(self, decorations: List[Decoration]) -> None:
        """Populate the field once; later rounds keep the existing flakes."""
        if decorations:
            return
        cfg = self.config
        n = cfg.DECORATION_COUNT
        xs = self.rng.uniform(0, cfg.SCREEN_WIDTH, size=n)
        ys = self.rng.uniform(0, cfg.SCREEN_HEIGHT, size=n)
        sizes = self.rng.uniform(cfg.DECORATION_MIN_SIZE, cfg.DECORATION_MAX_SIZE, size=n)
        speeds = self.rng.uniform(cfg.DECORATION_MIN_SPEED, cfg.DECORATION_MAX_SPEED, size=n)
        opacities = self.rng.uniform(cfg.DECORATION_MIN_OPACITY, cfg.DECORATION_MAX_OPACITY, size=n)
        for x, y, size, speed, opacity in zip(xs, ys, sizes, speeds, opacities):
            decorations.append(Decoration(
                x=float(x), y=float(y), size=float(size),
                speed=float(speed), opacity=float(opacity),
            ))

    def update(self, decorations: List[Decoration]) -> None:
        height = self.config.SCREEN_HEIGHT
        for flake in decorations:
            flake.y += flake.speed
            if flake.y > height:
                flake.y = 0.0
                flake.x = float(self.rng.uniform(0, self.config.SCREEN_WIDTH))
