"""
Core data structures for plant generation.
"""

from .errors import PlantGenerationError, InvariantViolation
from .rng import PlantRng
from .ring import Ring
from .mesh import (
    GeneratedMesh,
    compute_vertex_normals,
    finalize_mesh,
    MATERIAL_BARK,
    MATERIAL_LEAF,
)
from .accumulator import MeshAccumulator, BranchRecord

__all__ = [
    "PlantGenerationError",
    "InvariantViolation",
    "PlantRng",
    "Ring",
    "GeneratedMesh",
    "compute_vertex_normals",
    "finalize_mesh",
    "MATERIAL_BARK",
    "MATERIAL_LEAF",
    "MeshAccumulator",
    "BranchRecord",
]
