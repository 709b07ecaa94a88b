"""
Adapter from GeneratedMesh to trimesh.
"""

from typing import TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    import trimesh
    from ..core.mesh import GeneratedMesh


def to_trimesh(mesh: "GeneratedMesh") -> "trimesh.Trimesh":
    """
    Convert a GeneratedMesh to a trimesh.Trimesh.

    ``process=False`` keeps vertex order and count untouched, so the
    sway and material channels (attached as vertex attributes) stay
    aligned with the vertices.

    Parameters
    ----------
    mesh : GeneratedMesh
        Finalized plant mesh

    Returns
    -------
    trimesh.Trimesh
        Mesh with vertex normals, RGBA vertex colors and ``sway`` /
        ``material`` vertex attributes
    """
    import trimesh

    colors = np.clip(np.round(mesh.color * 255.0), 0, 255).astype(np.uint8)

    tm = trimesh.Trimesh(
        vertices=mesh.positions.astype(np.float64),
        faces=mesh.faces.astype(np.int64),
        vertex_normals=mesh.normals.astype(np.float64),
        vertex_colors=colors,
        process=False,
        validate=False,
    )
    tm.vertex_attributes["sway"] = mesh.sway.copy()
    tm.vertex_attributes["material"] = mesh.material.copy()
    tm.vertex_attributes["uv"] = mesh.uv.copy()
    return tm
