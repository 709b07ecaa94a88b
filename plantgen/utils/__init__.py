"""
Utility modules for plant generation.
"""

from .geometry import (
    TAU,
    UP,
    rotation_from_euler,
    rotate,
    lerp,
    normalize,
    ring_alignment_offset,
    roll_indices,
)

__all__ = [
    "TAU",
    "UP",
    "rotation_from_euler",
    "rotate",
    "lerp",
    "normalize",
    "ring_alignment_offset",
    "roll_indices",
]
