"""
Tests for the plantgen command-line interface.
"""

import json

import pytest

from plantgen.cli import main, build_parser


class TestParser:
    """Tests for argument parsing."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "plantgen" in capsys.readouterr().out

    def test_generate_requires_source(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["generate"])

    def test_preset_and_genome_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["generate", "-p", "shrub", "-g", "x.json"])


class TestPresetsCommand:
    def test_lists_presets(self, capsys):
        assert main(["presets"]) == 0
        assert capsys.readouterr().out.split() == ["sapling", "shrub", "willow"]


class TestGenerateCommand:
    """Tests for `plantgen generate`."""

    def test_preset_with_seed(self, capsys):
        assert main(["generate", "--preset", "sapling", "--seed", "3"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["success"] is True
        assert report["metrics"]["seed"] == 3
        assert report["metrics"]["mesh"]["vertex_count"] > 0

    def test_single_sided_leaves(self, capsys):
        assert main(["generate", "-p", "shrub", "--seed", "1", "--single-sided-leaves"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["requested_policy"]["leaf"]["double_sided"] is False

    def test_policy_file(self, tmp_path, capsys):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({
            "leaf": {"density": 0.0},
            "shading": {"leaf_color": [0.1, 0.9, 0.1]},
        }))
        assert main(["generate", "-p", "shrub", "--seed", "2", "--policy", str(path)]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["requested_policy"]["leaf"]["density_scale"] == 0.0
        assert report["requested_policy"]["shading"]["leaf_color"] == [0.1, 0.9, 0.1, 1.0]
        assert report["metrics"]["leaf_count"] == 0

    def test_malformed_policy_file(self, tmp_path, capsys):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({"leaf": [1, 2]}))
        assert main(["generate", "-p", "shrub", "--policy", str(path)]) == 1
        assert "policy" in capsys.readouterr().err

    def test_genome_file(self, tmp_path, capsys):
        path = tmp_path / "genome.json"
        path.write_text(json.dumps({"seed": 4, "splits": 2, "radial_segments": 5}))
        assert main(["generate", "--genome", str(path)]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["metrics"]["depths"]["0"]["radial_segments"] == [5]

    def test_missing_file(self, tmp_path, capsys):
        assert main(["generate", "--genome", str(tmp_path / "missing.json")]) == 1
        assert "Error" in capsys.readouterr().err

    def test_invalid_genome(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"radial_segments": 2}))
        assert main(["generate", "--genome", str(path)]) == 1
        assert "radial_segments" in capsys.readouterr().err

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        assert main(["generate", "--genome", str(path)]) == 1


class TestValidateCommand:
    """Tests for `plantgen validate`."""

    def test_valid_file(self, tmp_path, capsys):
        path = tmp_path / "ok.json"
        path.write_text(json.dumps({"max_splits": 2}))
        assert main(["validate", "--genome", str(path)]) == 0
        assert capsys.readouterr().out.strip().endswith("OK")

    def test_reports_every_error(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"radial_segments": 2, "radius_sustain": 1.5}))
        assert main(["validate", "--genome", str(path)]) == 1
        out = capsys.readouterr().out
        assert "2 error(s)" in out
        assert "radial_segments" in out
        assert "radius_sustain" in out
