"""
Tests for MeshAccumulator buffer bookkeeping.
"""

import numpy as np
import pytest

from plantgen.core import MeshAccumulator, PlantRng, Ring, MATERIAL_BARK
from plant_policies import ShadingPolicy, BARK_COLOR


@pytest.fixture
def acc():
    return MeshAccumulator(PlantRng(0))


class TestAddRing:
    """Tests for ring appending."""

    def test_returns_consecutive_indices(self, acc):
        first = acc.add_ring(Ring.generate(1.0, 5, 0.0))
        second = acc.add_ring(Ring.generate(1.0, 5, 1.0))
        assert first == [0, 1, 2, 3, 4]
        assert second == [5, 6, 7, 8, 9]
        assert acc.vertex_count == 10

    def test_bark_attributes(self, acc):
        acc.add_ring(Ring.generate(1.0, 4, 2.5))
        assert acc.material == [MATERIAL_BARK] * 4
        assert acc.sway == [2.5] * 4
        assert all(tuple(c) == BARK_COLOR for c in acc.color)

    def test_uv_follows_angle_and_path_length(self):
        acc = MeshAccumulator(PlantRng(0), shading=ShadingPolicy(uv_length_scale=0.5))
        acc.add_ring(Ring.generate(1.0, 4, 2.0))
        uv = np.array(acc.uv)
        np.testing.assert_allclose(uv[:, 0], [0.0, 0.25, 0.5, 0.75])
        np.testing.assert_allclose(uv[:, 1], 1.0)

    def test_parallel_buffers_stay_aligned(self, acc):
        acc.add_ring(Ring.generate(1.0, 6, 0.0))
        acc.add_vertices(np.zeros((2, 3)), np.zeros((2, 2)), [0.0, 0.0], 1, (0, 1, 0, 1))
        lengths = {len(acc.positions), len(acc.uv), len(acc.color), len(acc.sway), len(acc.material)}
        assert lengths == {8}


class TestTrianglesAndFinalize:
    """Tests for triangle emission and finalization."""

    def test_add_triangles(self, acc):
        acc.add_ring(Ring.generate(1.0, 3, 0.0))
        acc.add_triangle(0, 1, 2)
        acc.add_triangles([(2, 1, 0)])
        assert acc.indices == [0, 1, 2, 2, 1, 0]

    def test_finalize(self, acc):
        ring = Ring.generate(1.0, 3, 0.0)
        acc.add_ring(ring)
        acc.add_triangle(0, 2, 1)
        mesh = acc.finalize()
        assert mesh.vertex_count == 3
        assert mesh.triangle_count == 1
        np.testing.assert_allclose(np.linalg.norm(mesh.normals, axis=1), 1.0, atol=1e-6)

    def test_next_branch_id(self, acc):
        assert acc.next_branch_id() == 0
