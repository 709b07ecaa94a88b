"""
Ring bridging: triangulating the gap between two consecutive rings.

Winding convention: looking at the bark from outside, every emitted
triangle is wound the same way as the quad strip, so face normals point
away from the branch axis.
"""

from typing import List, Sequence, Tuple

from ..core.errors import InvariantViolation

Triangle = Tuple[int, int, int]


def bridge_loops(earlier: Sequence[int], later: Sequence[int]) -> List[Triangle]:
    """
    Stitch two loops of vertex indices into triangles.

    Supported length relationships:

    - equal: one quad (two triangles) per loop position, indices taken
      modulo the loop length
    - one loop exactly twice the other: a three-triangle fan per vertex of
      the short loop, mapping short index ``i`` onto long index ``2 * i``

    Parameters
    ----------
    earlier : sequence of int
        Loop closer to the branch base (already emitted)
    later : sequence of int
        Loop just emitted

    Returns
    -------
    List[Triangle]
        Triangles as index triples

    Raises
    ------
    InvariantViolation
        For empty loops or any other length relationship
    """
    n_earlier = len(earlier)
    n_later = len(later)

    if n_earlier == 0 or n_later == 0:
        raise InvariantViolation("Cannot bridge an empty loop")

    if n_earlier == n_later:
        return _bridge_equal(earlier, later)

    if n_earlier == 2 * n_later:
        return _bridge_doubled(long_loop=earlier, short_loop=later)

    if n_later == 2 * n_earlier:
        # Same fan with the long loop on top: mirror the winding.
        return [
            (c, b, a)
            for a, b, c in _bridge_doubled(long_loop=later, short_loop=earlier)
        ]

    raise InvariantViolation(
        f"Unsupported loop lengths for bridging: {n_earlier} -> {n_later}"
    )


def _bridge_equal(earlier: Sequence[int], later: Sequence[int]) -> List[Triangle]:
    n = len(earlier)
    triangles = []
    for i in range(n):
        a0 = earlier[i]
        a1 = earlier[(i + 1) % n]
        b0 = later[i]
        b1 = later[(i + 1) % n]
        triangles.append((a0, b0, b1))
        triangles.append((a0, b1, a1))
    return triangles


def _bridge_doubled(long_loop: Sequence[int], short_loop: Sequence[int]) -> List[Triangle]:
    """Fan for a long loop below a short loop of half its length."""
    n_long = len(long_loop)
    n_short = len(short_loop)
    triangles = []
    for i in range(n_short):
        b = 2 * i
        l0 = long_loop[b]
        l1 = long_loop[b + 1]
        l2 = long_loop[(b + 2) % n_long]
        s0 = short_loop[i]
        s1 = short_loop[(i + 1) % n_short]
        triangles.append((l0, s0, l1))
        triangles.append((l1, s0, s1))
        triangles.append((l1, s1, l2))
    return triangles
