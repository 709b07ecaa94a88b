"""
Generated mesh container and the mesh finalizer.

The finalizer turns the raw accumulated buffers into a renderable mesh by
computing per-vertex normals from face windings. Buffers stay as parallel
arrays (structure of arrays) so they can be uploaded as-is.
"""

from dataclasses import dataclass
from typing import Dict, Any, TYPE_CHECKING
import numpy as np
import logging

from .errors import InvariantViolation

if TYPE_CHECKING:
    import trimesh

logger = logging.getLogger(__name__)


MATERIAL_BARK = 0
MATERIAL_LEAF = 1


def compute_vertex_normals(positions: np.ndarray, indices: np.ndarray) -> np.ndarray:
    """
    Compute area-weighted per-vertex normals.

    Every triangle adds its unnormalized face normal
    ``cross(p1 - p0, p2 - p0)`` to each of its three vertices, so larger
    faces weigh more. Accumulated normals are then normalized.

    Vertices touched by no triangle, or only by degenerate ones, keep a
    zero normal.

    Parameters
    ----------
    positions : np.ndarray
        Vertex positions, shape (N, 3)
    indices : np.ndarray
        Flat triangle index list, length divisible by 3

    Returns
    -------
    np.ndarray
        Normals, shape (N, 3), float64
    """
    positions = np.asarray(positions, dtype=np.float64)
    normals = np.zeros_like(positions)
    if len(indices) == 0:
        return normals

    faces = np.asarray(indices, dtype=np.int64).reshape(-1, 3)
    p0 = positions[faces[:, 0]]
    p1 = positions[faces[:, 1]]
    p2 = positions[faces[:, 2]]
    face_normals = np.cross(p1 - p0, p2 - p0)

    for corner in range(3):
        np.add.at(normals, faces[:, corner], face_normals)

    lengths = np.linalg.norm(normals, axis=1)
    nonzero = lengths > 0.0
    normals[nonzero] /= lengths[nonzero, None]

    untouched = int(np.count_nonzero(~nonzero))
    if untouched:
        logger.debug(f"{untouched} vertices have a zero normal")

    return normals


@dataclass(frozen=True, eq=False)
class GeneratedMesh:
    """
    Finalized plant mesh.

    All per-vertex arrays share the same first dimension.

    Attributes
    ----------
    positions : np.ndarray
        float32, shape (N, 3)
    normals : np.ndarray
        float32, shape (N, 3); unit length where any non-degenerate
        triangle touches the vertex, zero otherwise
    uv : np.ndarray
        float32, shape (N, 2)
    color : np.ndarray
        float32 RGBA, shape (N, 4)
    sway : np.ndarray
        float32, shape (N,); accumulated path length for wind animation
    material : np.ndarray
        int32, shape (N,); 0 = bark, 1 = leaf
    indices : np.ndarray
        uint32 flat triangle list, shape (3 * T,)
    """
    positions: np.ndarray
    normals: np.ndarray
    uv: np.ndarray
    color: np.ndarray
    sway: np.ndarray
    material: np.ndarray
    indices: np.ndarray

    @property
    def vertex_count(self) -> int:
        return int(len(self.positions))

    @property
    def triangle_count(self) -> int:
        return int(len(self.indices) // 3)

    @property
    def faces(self) -> np.ndarray:
        """Triangle indices reshaped to (T, 3)."""
        return self.indices.reshape(-1, 3)

    @property
    def leaf_vertex_count(self) -> int:
        return int(np.count_nonzero(self.material == MATERIAL_LEAF))

    def validate(self) -> None:
        """
        Check buffer consistency.

        Raises
        ------
        InvariantViolation
            If per-vertex buffers differ in length, the index list is not
            a whole number of triangles, or an index is out of bounds.
        """
        n = len(self.positions)
        lengths = {
            "normals": len(self.normals),
            "uv": len(self.uv),
            "color": len(self.color),
            "sway": len(self.sway),
            "material": len(self.material),
        }
        mismatched = {k: v for k, v in lengths.items() if v != n}
        if mismatched:
            raise InvariantViolation(
                f"Per-vertex buffers disagree with {n} positions: {mismatched}"
            )
        if len(self.indices) % 3 != 0:
            raise InvariantViolation(
                f"Index count {len(self.indices)} is not a multiple of 3"
            )
        if len(self.indices) and int(self.indices.max()) >= n:
            raise InvariantViolation(
                f"Index {int(self.indices.max())} out of bounds for {n} vertices"
            )

    def to_trimesh(self) -> "trimesh.Trimesh":
        """Convert to a trimesh.Trimesh with buffers left in generation order."""
        from ..adapters.mesh_adapter import to_trimesh
        return to_trimesh(self)

    def to_dict(self) -> Dict[str, Any]:
        """Summary statistics (not the buffers themselves)."""
        bounds_min = self.positions.min(axis=0).tolist() if self.vertex_count else [0.0] * 3
        bounds_max = self.positions.max(axis=0).tolist() if self.vertex_count else [0.0] * 3
        return {
            "vertex_count": self.vertex_count,
            "triangle_count": self.triangle_count,
            "leaf_vertex_count": self.leaf_vertex_count,
            "bounds_min": bounds_min,
            "bounds_max": bounds_max,
            "max_sway": float(self.sway.max()) if self.vertex_count else 0.0,
        }


def finalize_mesh(
    positions,
    uv,
    color,
    sway,
    material,
    indices,
    validate: bool = True,
) -> GeneratedMesh:
    """
    Pack raw buffers into a GeneratedMesh, computing normals.

    Normals are computed in float64 from the float64 positions before
    packing, so precision loss from the float32 output does not leak
    into the normals.
    """
    positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    index_array = np.asarray(indices, dtype=np.int64)

    # Normal accumulation indexes positions, so topology is checked first.
    if len(index_array) % 3 != 0:
        raise InvariantViolation(f"Index count {len(index_array)} is not a multiple of 3")
    if len(index_array) and (index_array.min() < 0 or index_array.max() >= len(positions)):
        raise InvariantViolation(
            f"Index {int(index_array.max())} out of bounds for {len(positions)} vertices"
        )

    normals = compute_vertex_normals(positions, index_array)

    mesh = GeneratedMesh(
        positions=positions.astype(np.float32),
        normals=normals.astype(np.float32),
        uv=np.asarray(uv, dtype=np.float32).reshape(-1, 2),
        color=np.asarray(color, dtype=np.float32).reshape(-1, 4),
        sway=np.asarray(sway, dtype=np.float32),
        material=np.asarray(material, dtype=np.int32),
        indices=index_array.astype(np.uint32),
    )

    if validate:
        mesh.validate()

    return mesh
