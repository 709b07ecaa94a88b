"""
End-to-end generation scenarios with hand-checked buffer counts.
"""

import numpy as np
import pytest

from genomespec import Genome
from plantgen import generate, generate_with_report, MATERIAL_BARK, MATERIAL_LEAF


def _single_branch(**overrides):
    params = dict(
        seed=1,
        max_splits=0,
        branches_per_split=(1, 1),
        starting_radius=1.0,
        radial_segments=6,
        branch_length=2.0,
        segments_per_branch=1,
        radius_sustain=0.8,
        leaf_start=999,
        leaf_density=0.0,
        branch_decay=0,
        branch_bend=0.0,
        branch_sway=0.0,
        branch_twist=0.0,
    )
    params.update(overrides)
    return Genome(**params)


class TestSingleBranchCone:
    """A genome with no splits grows one unsplit, tapered branch."""

    def test_counts(self):
        mesh = generate(_single_branch())
        assert mesh.vertex_count == 12
        assert len(mesh.indices) == 36

    def test_base_ring(self):
        mesh = generate(_single_branch())
        base = mesh.positions[:6]
        np.testing.assert_allclose(base[:, 1], 0.0, atol=1e-6)
        np.testing.assert_allclose(np.hypot(base[:, 0], base[:, 2]), 1.0, atol=1e-6)

    def test_tip_keeps_sustained_radius(self):
        mesh = generate(_single_branch())
        tip = mesh.positions[6:]
        np.testing.assert_allclose(tip[:, 1], 2.0, atol=1e-6)
        np.testing.assert_allclose(np.hypot(tip[:, 0], tip[:, 2]), 0.8, atol=1e-6)

    def test_no_degenerate_triangles(self):
        mesh = generate(_single_branch())
        p = mesh.positions.astype(np.float64)
        f = mesh.faces.astype(np.int64)
        areas = np.linalg.norm(np.cross(p[f[:, 1]] - p[f[:, 0]], p[f[:, 2]] - p[f[:, 0]]), axis=1)
        assert (areas > 1e-6).all()

    def test_bark_only(self):
        mesh = generate(_single_branch())
        assert set(mesh.material.tolist()) == {MATERIAL_BARK}
        np.testing.assert_allclose(mesh.sway[:6], 0.0)
        np.testing.assert_allclose(mesh.sway[6:], 2.0)

    def test_normals_point_outward_and_up(self):
        mesh = generate(_single_branch())
        np.testing.assert_allclose(np.linalg.norm(mesh.normals, axis=1), 1.0, atol=1e-5)
        base = mesh.positions[:6]
        radial = np.dot(mesh.normals[:6, [0, 2]].ravel(), base[:, [0, 2]].ravel())
        assert radial > 0
        assert (mesh.normals[6:, 1] > 0).all()


class TestSingleBranchWithLeaves:
    """Leaves on every tip vertex of the single branch."""

    def test_counts(self):
        mesh = generate(_single_branch(leaf_start=0, leaf_density=1000.0))
        assert mesh.vertex_count == 6 + 6 * 12 + 6
        assert len(mesh.indices) == 36 + 6 * 8 * 3

    def test_leaf_material(self):
        mesh = generate(_single_branch(leaf_start=0, leaf_density=1000.0))
        assert mesh.leaf_vertex_count == 72
        assert MATERIAL_LEAF in mesh.material

    def test_leaves_attach_at_tip_ring(self):
        mesh = generate(_single_branch(leaf_start=0, leaf_density=1000.0))
        leaf_positions = mesh.positions[mesh.material == MATERIAL_LEAF]
        # Leaf origins are the first vertex of each 6-vertex face block.
        origins = leaf_positions[::6]
        np.testing.assert_allclose(origins[::2], mesh.positions[-6:], atol=1e-6)

    def test_report_counts_leaves(self):
        _, report = generate_with_report(_single_branch(leaf_start=0, leaf_density=1000.0))
        assert report.metrics["leaf_count"] == 6
        assert report.metrics["leaves_by_depth"] == {"0": 6}


class TestTwoLevelSplitWithHalving:
    """Three levels of binary splits with radial halving at depth 2."""

    @pytest.fixture
    def genome(self):
        return Genome(
            seed=7,
            max_splits=3,
            branches_per_split=(2, 2),
            radial_segments=8,
            segments_per_branch=2,
            leaf_start=99,
            leaf_density=0.0,
        )

    def test_counts(self, genome):
        mesh = generate(genome)
        assert mesh.vertex_count == 8 + 16 + 2 * 16 + 4 * 8
        assert mesh.triangle_count == 32 + 64 + 4 * (12 + 8)

    def test_depth_summary(self, genome):
        _, report = generate_with_report(genome)
        depths = report.metrics["depths"]
        assert depths["0"]["branches"] == 1
        assert depths["1"]["branches"] == 2
        assert depths["2"]["branches"] == 4
        assert depths["0"]["radial_segments"] == [8]
        assert depths["1"]["radial_segments"] == [8]
        assert depths["2"]["radial_segments"] == [4]
        assert depths["2"]["max_end_radius"] == 0.0
        assert report.metrics["branch_count"] == 7

    def test_depth_two_uses_fan_bridge(self, genome):
        from plantgen.api import grow
        acc = grow(genome)
        depth2 = [r for r in acc.skeleton if r.split == 2]
        assert len(depth2) == 4
        assert all(r.first_bridge == "doubled" for r in depth2)
        assert all(len(r.start_loop) == 8 and len(r.end_loop) == 4 for r in depth2)
