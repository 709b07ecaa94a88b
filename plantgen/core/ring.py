"""
Ring: one cross-sectional slice of a branch.
"""

from dataclasses import dataclass
from typing import Sequence
import numpy as np

from ..utils.geometry import TAU, rotate


@dataclass
class Ring:
    """
    Closed loop of vertices on a circle, with one sway value per vertex.

    Attributes
    ----------
    verts : np.ndarray
        Vertex positions, shape (n, 3)
    sway : np.ndarray
        Sway scalar per vertex, shape (n,)
    """
    verts: np.ndarray
    sway: np.ndarray

    @classmethod
    def generate(cls, radius: float, segments: int, sway: float) -> "Ring":
        """
        Create a ring of ``segments`` vertices in the XZ plane around the origin.

        Vertex ``i`` sits at angle ``i / segments * 2pi``.
        """
        angles = np.arange(segments) * (TAU / segments)
        verts = np.column_stack([np.cos(angles), np.zeros(segments), np.sin(angles)]) * radius
        return cls(verts=verts, sway=np.full(segments, float(sway)))

    def __len__(self) -> int:
        return len(self.verts)

    def rotate(self, euler: Sequence[float]) -> None:
        self.verts = rotate(self.verts, euler)

    def translate(self, offset: np.ndarray) -> None:
        self.verts = self.verts + np.asarray(offset, dtype=float)
