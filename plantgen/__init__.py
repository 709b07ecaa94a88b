"""
Plant Generation - procedural plant meshes from genomes.

A genome (see ``genomespec``) describes a plant's branching structure,
taper, bend and foliage. The generator grows the plant level by level and
returns a triangle mesh with normals, uv, vertex colors, a per-vertex sway
scalar for wind animation and a per-vertex material id (0 bark, 1 leaf).

Main Entry Points:
    - generate(): genome -> GeneratedMesh
    - generate_with_report(): genome -> (GeneratedMesh, OperationReport)

Example:
    >>> from plantgen import generate
    >>> from genomespec import get_preset
    >>>
    >>> mesh = generate(get_preset("shrub", seed=7))
    >>> mesh.vertex_count > 0
    True
"""

from .api import generate, generate_with_report
from .core import (
    GeneratedMesh,
    PlantGenerationError,
    InvariantViolation,
    MATERIAL_BARK,
    MATERIAL_LEAF,
)

__all__ = [
    # High-level API
    "generate",
    "generate_with_report",
    # Core types
    "GeneratedMesh",
    "PlantGenerationError",
    "InvariantViolation",
    "MATERIAL_BARK",
    "MATERIAL_LEAF",
]
