"""Tests for the techdebt command line."""

import json

import pytest
from typer.testing import CliRunner

from techdebt_tracker import __version__
from techdebt_tracker.cli import app


@pytest.fixture
def runner():
    return CliRunner()


class TestCli:
    def test_version(self, runner):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_json_to_file(self, runner, sample_project, tmp_path):
        out = tmp_path / "report.json"
        result = runner.invoke(app, [str(sample_project), "--format", "json", "--output", str(out)])
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert data["summary"]["function_count"] == 9
        assert data["top_offenders"][0]["function"] == "classify"

    def test_quiet_format(self, runner, sample_project, tmp_path):
        out = tmp_path / "offenders.txt"
        result = runner.invoke(
            app, [str(sample_project), "-f", "quiet", "--top", "1", "-o", str(out)]
        )
        assert result.exit_code == 0, result.output
        assert out.read_text().strip() == "complex_module.py::classify"

    def test_rich_default(self, runner, sample_project):
        result = runner.invoke(app, [str(sample_project)])
        assert result.exit_code == 0, result.output
        assert "Summary" in result.output

    def test_threshold_exceeded_exits_2(self, runner, sample_project):
        result = runner.invoke(app, [str(sample_project), "--max-complexity", "5", "-f", "text"])
        assert result.exit_code == 2
        assert "exceeds threshold (5)" in result.output

    def test_threshold_met_exits_0(self, runner, sample_project):
        result = runner.invoke(app, [str(sample_project), "--max-complexity", "11", "-f", "text"])
        assert result.exit_code == 0, result.output

    def test_risk_cutoff_flags(self, runner, sample_project, tmp_path):
        out = tmp_path / "r.json"
        result = runner.invoke(
            app,
            [str(sample_project), "--moderate", "1", "--high", "2", "-f", "json", "-o", str(out)],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text())["summary"]["risk"] == "high"

    def test_bad_cutoffs_exit_1(self, runner, sample_project):
        result = runner.invoke(app, [str(sample_project), "--moderate", "9", "--high", "3"])
        assert result.exit_code == 1

    def test_missing_path_exits_1(self, runner, tmp_path):
        result = runner.invoke(app, [str(tmp_path / "nope")])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unknown_format_exits_1(self, runner, sample_project):
        result = runner.invoke(app, [str(sample_project), "--format", "xml"])
        assert result.exit_code == 1

    def test_config_file(self, runner, sample_project, tmp_path):
        config = tmp_path / "techdebt.toml"
        config.write_text("max_complexity = 3\n")
        result = runner.invoke(app, [str(sample_project), "-f", "text", "--config", str(config)])
        assert result.exit_code == 2
