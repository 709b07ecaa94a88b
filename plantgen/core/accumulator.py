"""
Mesh accumulator: the mutable state of one generation run.

Every geometry-emitting operation (rings, leaves, bridges) appends to the
accumulator's parallel buffers. Exactly one accumulator exists per
generation call and it is never shared between calls.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import numpy as np
import logging

from .mesh import GeneratedMesh, finalize_mesh, MATERIAL_BARK
from .ring import Ring
from .rng import PlantRng
from plant_policies import ShadingPolicy

logger = logging.getLogger(__name__)


@dataclass
class BranchRecord:
    """Skeleton entry for one expanded branch."""
    branch_id: int
    parent_id: Optional[int]
    split: int
    start_radius: float
    end_radius: float
    radial_segments: int
    start_loop: List[int]
    end_loop: List[int] = field(default_factory=list)
    ring_radii: List[float] = field(default_factory=list)
    first_bridge: str = "equal"
    leaf_count: int = 0
    child_count: int = 0


class MeshAccumulator:
    """
    Growing output buffers plus the run's random source.

    Buffers are parallel lists: entry ``i`` of positions, uv, color, sway
    and material all describe vertex ``i``. ``indices`` is a flat list of
    triangle corners.

    Parameters
    ----------
    rng : PlantRng
        Random source owned by this run
    shading : ShadingPolicy, optional
        Vertex color and uv settings
    """

    def __init__(self, rng: PlantRng, shading: Optional[ShadingPolicy] = None):
        self.rng = rng
        self.shading = shading if shading is not None else ShadingPolicy()

        self.positions: List[List[float]] = []
        self.uv: List[List[float]] = []
        self.color: List[Sequence[float]] = []
        self.sway: List[float] = []
        self.material: List[int] = []
        self.indices: List[int] = []

        self.skeleton: List[BranchRecord] = []
        self.leaf_count = 0

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    def add_vertices(
        self,
        verts: np.ndarray,
        uv: np.ndarray,
        sway: Sequence[float],
        material: int,
        color: Sequence[float],
    ) -> List[int]:
        """
        Append a block of vertices with their attributes.

        Returns
        -------
        List[int]
            Indices of the new vertices, in input order
        """
        start = len(self.positions)
        count = len(verts)
        self.positions.extend(np.asarray(verts, dtype=float).tolist())
        self.uv.extend(np.asarray(uv, dtype=float).tolist())
        self.sway.extend(float(s) for s in sway)
        self.material.extend([material] * count)
        self.color.extend([tuple(color)] * count)
        return list(range(start, start + count))

    def add_ring(self, ring: Ring) -> List[int]:
        """
        Append a ring as bark vertices.

        ``u`` follows the vertex's angular position around the ring and
        ``v`` its path-length sway value.

        Returns
        -------
        List[int]
            Indices of the ring's vertices, in ring order
        """
        n = len(ring)
        u = np.arange(n) / n
        v = ring.sway * self.shading.uv_length_scale
        return self.add_vertices(
            ring.verts,
            np.column_stack([u, v]),
            ring.sway,
            MATERIAL_BARK,
            self.shading.bark_color,
        )

    def add_triangle(self, i0: int, i1: int, i2: int) -> None:
        self.indices.extend((i0, i1, i2))

    def add_triangles(self, triangles: Sequence[Tuple[int, int, int]]) -> None:
        for tri in triangles:
            self.indices.extend(tri)

    def record_branch(self, record: BranchRecord) -> BranchRecord:
        self.skeleton.append(record)
        return record

    def next_branch_id(self) -> int:
        return len(self.skeleton)

    def finalize(self, validate: bool = True) -> GeneratedMesh:
        """Run the mesh finalizer over the accumulated buffers."""
        logger.debug(
            f"Finalizing {self.vertex_count} vertices, "
            f"{len(self.indices) // 3} triangles"
        )
        return finalize_mesh(
            positions=self.positions,
            uv=self.uv,
            color=self.color,
            sway=self.sway,
            material=self.material,
            indices=self.indices,
            validate=validate,
        )
