"""
Collision primitives.

All collision checks in the game are axis-aligned box tests. Boxes are
given as (x, y, width, height) with the origin at the top-left corner.
"""

from typing import Tuple


Box = Tuple[float, float, float, float]


def boxes_overlap(a: Box, b: Box) -> bool:
    """
    Return True if two axis-aligned boxes intersect.

    Edges that exactly touch count as overlapping, so a projectile grazing
    the side of an invader still registers.
    """
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return (
        ax <= bx + bw and
        ax + aw >= bx and
        ay <= by + bh and
        ay + ah >= by
    )


def inset_box(box: Box, dx: float, dy: float = 0.0) -> Box:
    """Shrink a box by dx on the left and right and dy on the top and bottom."""
    x, y, w, h = box
    return (x + dx, y + dy, w - 2 * dx, h - 2 * dy)
