"""
Leaf geometry emission.

A leaf is a diamond-shaped strip of four triangles lying in its local XZ
plane, growing along +Z with its face normal along +Y. Double-sided
leaves add a mirrored copy offset along -Y with reversed winding, so both
faces shade correctly without relying on back-face rendering.
"""

from dataclasses import dataclass
from typing import List, TYPE_CHECKING
import numpy as np
from scipy.spatial.transform import Rotation

from ..core.mesh import MATERIAL_LEAF
from ..utils.geometry import normalize
from plant_policies import LeafPolicy

if TYPE_CHECKING:
    from ..core.accumulator import MeshAccumulator


LEAF_OUTLINE = np.array([
    [0.0, 0.0, 0.0],
    [0.3, 0.0, 1.0],
    [-0.3, 0.0, 1.0],
    [0.3, 0.0, 2.0],
    [-0.3, 0.0, 2.0],
    [0.0, 0.0, 3.0],
])

LEAF_TRIANGLES = [(0, 2, 1), (1, 2, 3), (2, 4, 3), (3, 4, 5)]

LEAF_UV = np.column_stack([
    LEAF_OUTLINE[:, 0] / 0.6 + 0.5,
    LEAF_OUTLINE[:, 2] / 3.0,
])

_X = np.array([1.0, 0.0, 0.0])
_Z = np.array([0.0, 0.0, 1.0])


@dataclass
class Leaf:
    """
    One leaf, placed on a ring vertex.

    Attributes
    ----------
    position : np.ndarray
        Attachment point (the leaf's local origin)
    rotation : Rotation
        Local-to-world orientation
    sway : float
        Sway value shared by every vertex of the leaf
    size : float
        Width scale (local X and Y)
    length : float
        Length scale (local Z)
    """
    position: np.ndarray
    rotation: Rotation
    sway: float
    size: float
    length: float

    def local_vertices(self) -> np.ndarray:
        return LEAF_OUTLINE * np.array([self.size, self.size, self.length])

    def emit(self, acc: "MeshAccumulator", policy: LeafPolicy) -> List[int]:
        """
        Append the leaf's vertices and triangles to the accumulator.

        Returns
        -------
        List[int]
            Indices of every vertex emitted for this leaf
        """
        color = acc.shading.leaf_color
        local = self.local_vertices()
        n = len(local)

        front = acc.add_vertices(
            self.rotation.apply(local) + self.position,
            LEAF_UV,
            [self.sway] * n,
            MATERIAL_LEAF,
            color,
        )
        for a, b, c in LEAF_TRIANGLES:
            acc.add_triangle(front[a], front[b], front[c])

        if not policy.double_sided:
            return front

        back_local = local - np.array([0.0, policy.thickness, 0.0])
        back = acc.add_vertices(
            self.rotation.apply(back_local) + self.position,
            LEAF_UV,
            [self.sway] * n,
            MATERIAL_LEAF,
            color,
        )
        for a, b, c in LEAF_TRIANGLES:
            acc.add_triangle(back[a], back[c], back[b])

        return front + back


def leaf_spawn_probability(
    leaf_density: float,
    segments_per_branch: int,
    radial_segments: int,
    policy: LeafPolicy,
) -> float:
    """
    Per-vertex leaf probability.

    ``leaf_density`` is a leaf budget per branch, so it is spread over
    every ring vertex of the branch to stay resolution independent.
    """
    p = leaf_density * policy.density_scale / (segments_per_branch * radial_segments)
    return min(1.0, max(0.0, p))


def spawn_leaf(
    acc: "MeshAccumulator",
    vertex: np.ndarray,
    center: np.ndarray,
    radius: float,
    sway: float,
    axis: np.ndarray,
    leaf_size: float,
    leaf_length: float,
    leaf_offset: float,
    policy: LeafPolicy,
) -> Leaf:
    """
    Build a leaf on a ring vertex with a randomized orientation.

    The leaf points from the ring center towards the vertex, perturbed by
    a per-axis jitter of at most ``max(radius, min_jitter_radius) * leaf_offset``.
    Its face normal comes from a random "up" vector re-orthogonalized
    against that direction.

    Parameters
    ----------
    vertex : np.ndarray
        Ring vertex the leaf attaches to
    center : np.ndarray
        Ring center (the branch position at this segment)
    axis : np.ndarray
        Branch growth direction, used when the vertex sits on the center
    """
    rng = acc.rng
    r = max(radius, policy.min_jitter_radius) * leaf_offset
    jitter = np.array([rng.symmetric(r), rng.symmetric(r), rng.symmetric(r)])

    up = np.array([rng.angle(), 1.0, rng.angle()])

    forward = normalize(vertex + jitter - center, axis)
    right = normalize(np.cross(up, forward), _perpendicular(forward))
    up = np.cross(forward, right)

    rotation = Rotation.from_matrix(np.column_stack([right, up, forward]))

    return Leaf(
        position=np.asarray(vertex, dtype=float),
        rotation=rotation,
        sway=sway,
        size=leaf_size,
        length=leaf_length,
    )


def _perpendicular(v: np.ndarray) -> np.ndarray:
    basis = _X if abs(v[0]) < 0.9 else _Z
    p = np.cross(v, basis)
    return p / np.linalg.norm(p)
