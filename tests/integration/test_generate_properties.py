"""
Structural properties every generated mesh must satisfy.
"""

import numpy as np
import pytest

from genomespec import ConfigurationError, get_preset
from plant_policies import GenerationPolicy, LeafPolicy
from plantgen import generate, generate_with_report, InvariantViolation
from plantgen.api import grow
from plantgen.ops import tip_depth


SEEDS = [0, 17, 4242]


def _live_vertices(mesh):
    """Vertices touched by at least one non-degenerate triangle."""
    positions = mesh.positions.astype(np.float64)
    faces = mesh.faces.astype(np.int64)
    cross = np.cross(
        positions[faces[:, 1]] - positions[faces[:, 0]],
        positions[faces[:, 2]] - positions[faces[:, 0]],
    )
    live = np.linalg.norm(cross, axis=1) > 1e-9
    return np.unique(faces[live].ravel())


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("preset", ["sapling", "shrub"])
class TestMeshProperties:
    """Buffer consistency, normals and bounds across presets and seeds."""

    def test_buffers_consistent(self, preset, seed):
        mesh = generate(get_preset(preset, seed=seed))
        n = mesh.vertex_count
        assert mesh.normals.shape == (n, 3)
        assert mesh.uv.shape == (n, 2)
        assert mesh.color.shape == (n, 4)
        assert mesh.sway.shape == (n,)
        assert mesh.material.shape == (n,)
        assert len(mesh.indices) % 3 == 0
        assert int(mesh.indices.max()) < n

    def test_normals_unit_or_zero(self, preset, seed):
        mesh = generate(get_preset(preset, seed=seed))
        lengths = np.linalg.norm(mesh.normals.astype(np.float64), axis=1)
        live = _live_vertices(mesh)
        np.testing.assert_allclose(lengths[live], 1.0, atol=1e-5)
        assert np.all((np.abs(lengths - 1.0) < 1e-5) | (lengths == 0.0))

    def test_positions_finite_and_bounded(self, preset, seed):
        genome = get_preset(preset, seed=seed)
        mesh = generate(genome)
        assert np.isfinite(mesh.positions).all()
        reach = (
            genome.max_splits * genome.branch_length
            + genome.starting_radius
            + 3.0 * genome.effective_leaf_length
            + 1e-3
        )
        assert np.linalg.norm(mesh.positions, axis=1).max() <= reach

    def test_materials_and_sway(self, preset, seed):
        mesh = generate(get_preset(preset, seed=seed))
        assert set(mesh.material.tolist()) <= {0, 1}
        assert (mesh.sway >= 0).all()


class TestTapering:
    """Radius follows the sustain ratio per depth and closes at the tips."""

    @pytest.mark.parametrize("seed", SEEDS)
    def test_radius_per_depth(self, seed):
        genome = get_preset("sapling", seed=seed)
        acc = grow(genome)
        tip = tip_depth(genome)
        for record in acc.skeleton:
            expected = genome.starting_radius * genome.radius_sustain ** record.split
            assert record.start_radius == pytest.approx(expected)
            if record.split == tip:
                assert record.end_radius == 0.0
            else:
                assert record.end_radius == pytest.approx(expected * genome.radius_sustain)

    def test_rings_never_widen(self):
        acc = grow(get_preset("shrub", seed=3))
        for record in acc.skeleton:
            radii = [record.start_radius] + record.ring_radii
            assert all(b <= a + 1e-12 for a, b in zip(radii, radii[1:]))

    def test_deepest_split_is_tip(self):
        genome = get_preset("sapling", seed=8)
        acc = grow(genome)
        assert max(r.split for r in acc.skeleton) == tip_depth(genome)


class TestPolicies:
    """Generation policy knobs."""

    def test_single_sided_leaves_halve_leaf_vertices(self):
        genome = get_preset("shrub", seed=21)
        double = generate(genome)
        single = generate(genome, GenerationPolicy(leaf=LeafPolicy(double_sided=False)))
        assert single.leaf_vertex_count * 2 == double.leaf_vertex_count

    def test_density_scale_zero_disables_leaves(self):
        genome = get_preset("shrub", seed=21)
        mesh = generate(genome, GenerationPolicy(leaf=LeafPolicy(density_scale=0.0)))
        assert mesh.leaf_vertex_count == 0

    def test_report_structure(self):
        _, report = generate_with_report(get_preset("shrub", seed=2))
        assert report.success
        assert report.operation == "generate_plant"
        assert set(report.metrics) >= {
            "genome_hash", "seed", "mesh", "leaf_count", "branch_count", "depths",
        }
        assert report.metrics["seed"] == 2


class TestErrors:
    """Configuration and invariant failures."""

    def test_invalid_dict_rejected(self):
        with pytest.raises(ConfigurationError):
            generate({"radial_segments": 2})

    def test_non_genome_rejected(self):
        with pytest.raises(ConfigurationError):
            generate(42)

    def test_invariant_violation_propagates(self, monkeypatch):
        import plantgen.ops.branch as branch_module

        def broken_bridge(earlier, later):
            raise InvariantViolation("bridge failure")

        monkeypatch.setattr(branch_module, "bridge_loops", broken_bridge)
        with pytest.raises(InvariantViolation, match="bridge failure"):
            generate(get_preset("sapling", seed=1))
