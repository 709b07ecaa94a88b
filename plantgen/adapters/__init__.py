"""
Adapters to external libraries (trimesh, networkx).
"""

from .mesh_adapter import to_trimesh
from .networkx_adapter import skeleton_to_networkx, skeleton_depth_summary

__all__ = [
    "to_trimesh",
    "skeleton_to_networkx",
    "skeleton_depth_summary",
]
