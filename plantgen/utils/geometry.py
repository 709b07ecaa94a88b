"""
Canonical geometry utilities for plant generation.

Orientation is carried through the generator as an Euler vector
``(x, y, z)``: ``y`` is yaw about the up axis, ``x`` is the forward bend,
``z`` is the roll (twist). Applying it to a vector rotates by roll first,
then bend, then yaw, i.e. the intrinsic rotation ``Ry(y) * Rx(x) * Rz(z)``.
"""

from typing import List, Sequence
import numpy as np
from scipy.spatial.transform import Rotation

TAU = 2.0 * np.pi

UP = np.array([0.0, 1.0, 0.0])

EPSILON = 1e-12


def rotation_from_euler(euler: Sequence[float]) -> Rotation:
    """
    Build the yaw-pitch-roll rotation for an Euler vector.

    Parameters
    ----------
    euler : sequence of float
        ``(bend, yaw, roll)`` angles in radians, stored in x, y, z order

    Returns
    -------
    Rotation
        scipy rotation equal to ``Ry(yaw) * Rx(bend) * Rz(roll)``
    """
    return Rotation.from_euler("YXZ", [euler[1], euler[0], euler[2]])


def rotate(vectors: np.ndarray, euler: Sequence[float]) -> np.ndarray:
    """Rotate a vector (3,) or an array of vectors (N, 3) by an Euler vector."""
    return rotation_from_euler(euler).apply(vectors)


def lerp(a, b, t: float):
    """Linear interpolation: ``a`` at t=0, ``b`` at t=1."""
    return a + (b - a) * t


def normalize(v: np.ndarray, fallback: np.ndarray) -> np.ndarray:
    """Return ``v`` scaled to unit length, or ``fallback`` when ``v`` is (near) zero."""
    norm = np.linalg.norm(v)
    if norm < EPSILON:
        return fallback
    return v / norm


def ring_alignment_offset(yaw: float, ring_length: int) -> int:
    """
    Index offset that cancels a ring's yaw.

    A ring rotated by ``yaw`` has its vertex ``m`` at angle
    ``m * 2pi / n - yaw``; rolling its index list left by
    ``round(yaw / 2pi * n) mod n`` puts list position ``j`` back near
    angle ``j * 2pi / n`` so consecutive rings bridge without visible twist.
    """
    return int(round(float(yaw) / TAU * ring_length)) % ring_length


def roll_indices(indices: List[int], k: int) -> List[int]:
    """Rotate an index list left by ``k`` positions."""
    if not indices:
        return list(indices)
    k %= len(indices)
    return list(indices[k:]) + list(indices[:k])
