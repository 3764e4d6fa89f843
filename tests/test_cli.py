"""Tests for CLI interface."""

import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from workscore.cli import _get_score_color, app
from workscore.engine import ScoringEngine

runner = CliRunner()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def spot_file(temp_dir, sample_inputs) -> Path:
    path = temp_dir / "spot.json"
    path.write_text(sample_inputs.model_dump_json(indent=2), encoding="utf-8")
    return path


class TestScoreCommand:
    def test_renders_breakdown(self, spot_file, now):
        result = runner.invoke(app, ["score", str(spot_file), "--now", now.isoformat()])

        assert result.exit_code == 0
        assert "Blue Bottle" in result.stdout
        assert "Work Score" in result.stdout
        assert "Score Breakdown" in result.stdout
        assert "wifi" in result.stdout

    def test_json_output(self, spot_file, now, spot_id):
        result = runner.invoke(app, ["score", str(spot_file), "--now", now.isoformat(), "--json"])

        assert result.exit_code == 0
        report = json.loads(result.stdout)
        assert report["spot_id"] == spot_id
        assert report["breakdown"]["status"] == "scored"
        assert 0 <= report["breakdown"]["work_score"] <= 100
        assert len(report["forecast"]) == 6

    def test_list_of_spots(self, temp_dir, sample_inputs, now, spot_id):
        path = temp_dir / "spots.json"
        spots = [sample_inputs.model_dump(mode="json"), {"spot_id": "spot-empty"}]
        path.write_text(json.dumps(spots), encoding="utf-8")

        result = runner.invoke(app, ["score", str(path), "--now", now.isoformat(), "--json"])

        assert result.exit_code == 0
        reports = json.loads(result.stdout)
        assert [r["spot_id"] for r in reports] == [spot_id, "spot-empty"]
        assert reports[1]["breakdown"]["work_score"] is None

    def test_insufficient_data_message(self, temp_dir, now):
        path = temp_dir / "empty.json"
        path.write_text(json.dumps({"spot_id": "spot-empty"}), encoding="utf-8")

        result = runner.invoke(app, ["score", str(path), "--now", now.isoformat()])

        assert result.exit_code == 0
        assert "insufficient data" in result.stdout

    def test_missing_file(self, temp_dir):
        result = runner.invoke(app, ["score", str(temp_dir / "nope.json")])

        assert result.exit_code == 1
        assert "File not found" in result.stdout

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        result = runner.invoke(app, ["score", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.stdout

    def test_invalid_spot_data(self, temp_dir, now, spot_id):
        path = temp_dir / "bad.json"
        bad = {
            "spot_id": spot_id,
            "checkins": [{"spot_id": spot_id, "timestamp": now.isoformat(), "wifi_speed": 9}],
        }
        path.write_text(json.dumps(bad), encoding="utf-8")

        result = runner.invoke(app, ["score", str(path)])

        assert result.exit_code == 1
        assert "Invalid spot data" in result.stdout

    def test_mismatched_records(self, temp_dir, now):
        path = temp_dir / "mixed.json"
        mixed = {
            "spot_id": "spot-a",
            "checkins": [{"spot_id": "spot-b", "timestamp": now.isoformat(), "wifi_speed": 4}],
        }
        path.write_text(json.dumps(mixed), encoding="utf-8")

        result = runner.invoke(app, ["score", str(path)])

        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_naive_now_rejected(self, spot_file):
        result = runner.invoke(app, ["score", str(spot_file), "--now", "2026-03-10T15:00:00"])

        assert result.exit_code == 1
        assert "timezone" in result.stdout


class TestForecastCommand:
    def test_renders_forecast(self, spot_file, now):
        result = runner.invoke(
            app, ["forecast", str(spot_file), "--now", now.isoformat(), "--start-hour", "22"]
        )

        assert result.exit_code == 0
        assert "Crowd Forecast" in result.stdout
        assert "Now" in result.stdout
        assert "10PM" in result.stdout

    def test_no_history(self, temp_dir, now):
        path = temp_dir / "empty.json"
        path.write_text(json.dumps({"spot_id": "spot-empty"}), encoding="utf-8")

        result = runner.invoke(app, ["forecast", str(path), "--now", now.isoformat()])

        assert result.exit_code == 0
        assert "No busyness history" in result.stdout

    def test_start_hour_keeps_reference_time(self, spot_file, now):
        original = ScoringEngine.score_batch
        with patch.object(ScoringEngine, "score_batch", autospec=True, side_effect=original) as mock_batch:
            result = runner.invoke(
                app, ["forecast", str(spot_file), "--now", now.isoformat(), "--start-hour", "22"]
            )

        assert result.exit_code == 0
        _, _, reference = mock_batch.call_args.args
        assert reference == now
        assert mock_batch.call_args.kwargs["forecast_start_hour"] == 22

    def test_start_hour_out_of_range(self, spot_file):
        result = runner.invoke(app, ["forecast", str(spot_file), "--start-hour", "24"])
        assert result.exit_code != 0


def test_weights_command():
    result = runner.invoke(app, ["weights"])

    assert result.exit_code == 0
    assert "wifi" in result.stdout
    assert "0.22" in result.stdout
    assert "open_status" in result.stdout


@pytest.mark.parametrize(("score", "color"), [(90, "green"), (78, "green"), (70, "yellow"), (61.9, "red")])
def test_get_score_color(score, color):
    assert _get_score_color(score) == color
