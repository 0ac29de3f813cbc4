"""
Tests for the command-line interface.
"""

from __future__ import annotations

import json

import pytest

from bendspline.cli import create_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_sample_arguments(self):
        """Curve commands take overrides."""
        args = create_parser().parse_args(
            ["sample", "curve.yml", "--finder", "natural", "-n", "5"]
        )
        assert args.command == "sample"
        assert args.finder == "natural"
        assert args.num_samples == 5

    def test_approx_arguments(self):
        """approx takes a maximum distance."""
        args = create_parser().parse_args(["approx", "curve.yml", "-d", "0.1"])
        assert args.max_dist == 0.1

    def test_version(self, capsys):
        """--version prints the version and exits."""
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert "0.1.0" in capsys.readouterr().out


class TestCommands:
    """Tests for CLI commands."""

    def test_no_command(self, capsys):
        """Without a command the help is printed."""
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_sample_stdout(self, clean_env, temp_curve_file, capsys):
        """sample prints one point per line."""
        assert main(["sample", str(temp_curve_file), "-n", "5"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 5
        assert lines[0].split() == ["0.000000", "0.000000"]
        assert lines[-1].split() == ["6.000000", "0.500000"]

    def test_sample_output_file(self, clean_env, temp_curve_file, tmp_path):
        """sample writes JSON with -o."""
        output = tmp_path / "samples.json"
        assert main(["sample", str(temp_curve_file), "-n", "3", "-o", str(output)]) == 0
        data = json.loads(output.read_text())
        assert len(data["samples"]) == 3
        assert data["samples"][1] == pytest.approx([3.0, 1.0])

    def test_approx_output_file(self, clean_env, temp_curve_file, tmp_path):
        """approx writes the lines and the domain."""
        output = tmp_path / "lines.json"
        code = main(
            ["approx", str(temp_curve_file), "--finder", "natural", "-d", "0.05", "-o", str(output)]
        )
        assert code == 0
        data = json.loads(output.read_text())
        assert data["segment_count"] == 4
        assert data["tend"] == 4.0
        assert data["lines"][0][:2] == [0.0, 0.0]
        assert data["lines"][-1][2:] == pytest.approx([6.0, 0.5])

    def test_config_file(self, clean_env, temp_curve_file, temp_config_file, tmp_path):
        """Settings come from the configuration file."""
        output = tmp_path / "lines.json"
        code = main(
            ["approx", str(temp_curve_file), "-f", str(temp_config_file), "-o", str(output)]
        )
        assert code == 0
        assert json.loads(output.read_text())["lines"]

    def test_missing_curve(self, clean_env, tmp_path):
        """A missing curve file is an error."""
        assert main(["sample", str(tmp_path / "missing.yml")]) == 1

    def test_unreadable_curve(self, clean_env, tmp_path):
        """A directory in place of the curve file is an error."""
        assert main(["sample", str(tmp_path)]) == 1

    @pytest.mark.parametrize("command", ["sample", "approx"])
    def test_unwritable_output(self, clean_env, temp_curve_file, tmp_path, command):
        """An output path in a missing directory is an error."""
        output = tmp_path / "missing" / "out.json"
        assert main([command, str(temp_curve_file), "-o", str(output)]) == 1
        assert not output.exists()

    def test_unknown_finder(self, clean_env, temp_curve_file):
        """An unknown finder is an error."""
        assert main(["sample", str(temp_curve_file), "--finder", "bezier"]) == 1

    def test_invalid_max_dist(self, clean_env, temp_curve_file):
        """A non-positive tolerance is an error."""
        assert main(["approx", str(temp_curve_file), "-d", "0"]) == 1

    def test_list_finders(self, capsys):
        """list-finders includes hermite and the registered finders."""
        assert main(["list-finders"]) == 0
        out = capsys.readouterr().out
        for name in ("hermite", "cardinal", "catmull_rom", "natural"):
            assert f"- {name}" in out

    def test_validate_valid(self, clean_env, temp_config_file, capsys):
        """validate accepts a valid file."""
        assert main(["validate", str(temp_config_file)]) == 0
        assert "natural" in capsys.readouterr().out

    def test_validate_invalid(self, clean_env, tmp_path, capsys):
        """validate rejects invalid values."""
        path = tmp_path / "bad.yml"
        path.write_text("approx:\n  max_dist: -1\n")
        assert main(["validate", str(path)]) == 1
        assert "max_dist" in capsys.readouterr().err

    def test_validate_malformed_section(self, clean_env, tmp_path, capsys):
        """A section given as a plain value is a configuration error."""
        path = tmp_path / "bad.yml"
        path.write_text("tangents: natural\n")
        assert main(["validate", str(path)]) == 1
        assert "tangents" in capsys.readouterr().err

    def test_validate_missing(self, tmp_path):
        """validate reports a missing file."""
        assert main(["validate", str(tmp_path / "missing.yml")]) == 1

    def test_info(self, capsys):
        """info lists the dependencies."""
        assert main(["info"]) == 0
        out = capsys.readouterr().out
        assert "numpy" in out
        assert "yaml" in out
