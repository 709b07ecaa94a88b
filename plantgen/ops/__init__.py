"""
Geometry-emitting operations: branches, leaves and ring bridging.
"""

from .bridge import bridge_loops
from .leaf import Leaf, spawn_leaf, leaf_spawn_probability
from .branch import Branch, HALVING_DEPTH, expansion_levels, tip_depth

__all__ = [
    "bridge_loops",
    "Leaf",
    "spawn_leaf",
    "leaf_spawn_probability",
    "Branch",
    "HALVING_DEPTH",
    "expansion_levels",
    "tip_depth",
]
