"""
Tests for the command-line interface.
"""

import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.delenv("SPROUT_CONFIG", raising=False)
    return CliRunner()


@pytest.fixture
def record_file(tmp_path):
    record = {
        "child_name": "Leo",
        "sex": "male",
        "birth_date": "2024-01-10",
        "birth_weight": {"value": 3.3, "unit": "kg"},
        "entries": [
            {"recorded_on": "2024-02-10", "weight": {"value": 4500, "unit": "g"}},
            {"recorded_on": "2024-03-10", "weight": {"value": 4700, "unit": "g"}},
        ],
    }
    path = tmp_path / "leo.json"
    path.write_text(json.dumps(record))
    return path


class TestLookupCommands:
    """Standards lookups."""

    def test_lookup_json(self, runner):
        from cli import cli

        result = runner.invoke(cli, ["lookup", "6", "--sex", "male", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["weight_kg"] == 7.9

    def test_lookup_table(self, runner):
        from cli import cli

        result = runner.invoke(cli, ["lookup", "6", "--sex", "female"])

        assert result.exit_code == 0
        assert "7.30 kg" in result.output

    def test_expected_json(self, runner):
        from cli import cli

        result = runner.invoke(cli, ["expected", "2", "--sex", "male", "--json"])

        assert json.loads(result.output) == {"weight": 1100, "height": 37, "head_circ": 20}

    def test_invalid_sex_is_rejected(self, runner):
        from cli import cli

        result = runner.invoke(cli, ["lookup", "6", "--sex", "other"])

        assert result.exit_code != 0

    def test_table(self, runner):
        from cli import cli

        result = runner.invoke(cli, ["table", "--sex", "male"])

        assert result.exit_code == 0
        assert "75.7" in result.output


class TestProgressCommands:
    """Progress scores."""

    def test_progress(self, runner):
        from cli import cli

        result = runner.invoke(
            cli, ["progress", "--birth", "3300", "--current", "4300", "--target-gain", "1200"]
        )

        assert result.exit_code == 0
        assert "83%" in result.output

    def test_progress_json_with_ceiling(self, runner):
        from cli import cli

        result = runner.invoke(cli, [
            "progress", "--birth", "3300", "--current", "4300",
            "--target-gain", "1200", "--ceiling", "4000", "--json",
        ])

        data = json.loads(result.output)
        assert data["percentage"] == 100
        assert data["target"] == 4000

    def test_standard_progress(self, runner):
        from cli import cli

        result = runner.invoke(cli, [
            "standard-progress", "600", "--unit", "mm",
            "--age", "6", "--sex", "male", "--metric", "height",
        ])

        assert result.exit_code == 0
        assert "89%" in result.output


class TestRecommend:
    """Recommendation command and settings."""

    def test_recommend_json(self, runner):
        from cli import cli

        result = runner.invoke(cli, ["recommend", "2", "--sex", "male", "--json"])

        data = json.loads(result.output)
        assert data["weight_gain_per_week"] == "218-294 grams"
        assert data["height_gain_per_month"] == "3.7-4.3 cm"

    def test_recommend_panel(self, runner):
        from cli import cli

        result = runner.invoke(cli, ["recommend", "2", "--sex", "male"])

        assert result.exit_code == 0
        assert "0-3 months" in result.output

    def test_config_file(self, runner, tmp_path):
        from cli import cli

        config = tmp_path / "sprout.yaml"
        config.write_text("band_basis: monthly\n")

        result = runner.invoke(
            cli, ["--config", str(config), "recommend", "2", "--sex", "male", "--json"]
        )

        data = json.loads(result.output)
        assert data["weight_gain"]["min"] == 935
        assert data["weight_gain"]["period"] == "month"

    def test_bad_config_file(self, runner, tmp_path):
        from cli import cli

        config = tmp_path / "sprout.yaml"
        config.write_text("- not\n- a mapping\n")

        result = runner.invoke(cli, ["--config", str(config), "info"])

        assert result.exit_code == 1
        assert "Could not load settings" in result.output

    def test_bad_log_level(self, runner, tmp_path):
        from cli import cli

        config = tmp_path / "sprout.yaml"
        config.write_text("log_level: LOUD\n")

        result = runner.invoke(cli, ["--config", str(config), "info"])

        assert result.exit_code == 1
        assert "Could not load settings" in result.output


class TestAssess:
    """Assessment command."""

    def test_assess_json(self, runner, record_file):
        from cli import cli

        result = runner.invoke(
            cli, ["assess", str(record_file), "--as-of", "2024-03-10", "--format", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["age_months"] == 2
        weight = next(m for m in data["metrics"] if m["metric"] == "weight")
        assert weight["gain"] == 200
        assert weight["minimum_gain"] == 218

    def test_assess_json_summary(self, runner, record_file):
        from cli import cli

        result = runner.invoke(cli, [
            "assess", str(record_file), "--as-of", "2024-03-10", "--format", "json", "--summary",
        ])

        assert result.exit_code == 0
        summary = json.loads(result.output)
        assert summary["child_name"] == "Leo"
        assert summary["all_sufficient"] is False
        assert summary["metrics"]["weight"] == {
            "gain": 200,
            "unit": "g",
            "minimum": 218,
            "sufficient": False,
            "status": "On Target",
        }
        assert set(summary["metrics"]) == {"weight", "height", "head_circ"}

    def test_assess_markdown_to_file(self, runner, record_file, tmp_path):
        from cli import cli

        out = tmp_path / "leo.md"
        result = runner.invoke(cli, [
            "assess", str(record_file), "--as-of", "2024-03-10",
            "--format", "markdown", "-o", str(out),
        ])

        assert result.exit_code == 0
        assert out.read_text().startswith("# Growth Report: Leo")

    def test_assess_table(self, runner, record_file):
        from cli import cli

        result = runner.invoke(cli, ["assess", str(record_file), "--as-of", "2024-03-10"])

        assert result.exit_code == 0
        assert "Growth Summary" in result.output

    def test_invalid_record(self, runner, tmp_path):
        from cli import cli

        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"sex": "male", "birth_weight": {"value": 50, "unit": "cm"}}))

        result = runner.invoke(cli, ["assess", str(path)])

        assert result.exit_code == 1
        assert "Invalid growth record" in result.output


class TestMisc:
    """Sleep and info."""

    def test_sleep(self, runner):
        from cli import cli

        result = runner.invoke(cli, ["sleep", "6"])

        assert result.exit_code == 0
        assert "12-16 hours" in result.output

    def test_info(self, runner):
        from cli import cli

        result = runner.invoke(cli, ["info"])

        assert result.exit_code == 0
        assert "Sprout" in result.output
