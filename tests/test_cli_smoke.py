"""
Minimal smoke tests for the lift-progress CLI.

Tests basic functionality:
- App runs and shows help
- Sessions, trend and one-rm read an exported snapshot
- Goals are evaluated against a fixed reference date
- Recommendations are printed
- Missing or invalid input exits with status 1
"""

import io
import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from lift_progress.cli.main import app


runner = CliRunner()


def _workout(record_id: str, date: str, duration: float, weight: float, reps: int) -> dict:
    return {
        "id": record_id,
        "date": date,
        "duration_minutes": duration,
        "exercises": [
            {
                "exercise_id": "bench",
                "name": "Bench Press",
                "muscle_group": "chest",
                "sets": [
                    {"weight_kg": 40, "reps": 10, "set_type": "warmup"},
                    {"weight_kg": weight, "reps": reps},
                ],
            }
        ],
    }


@pytest.fixture
def snapshot_dir(monkeypatch):
    """Temporary snapshot with three weekly bench sessions and two goals."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir)
        # keep any real ~/.lift-progress/analytics.yaml out of the tests
        monkeypatch.setenv("HOME", tmpdir)

        workouts = [
            _workout("w1", "2024-01-01", 30, 100, 5),
            _workout("w2", "2024-01-08", 45, 105, 5),
            _workout("w3", "2024-01-15", 60, 110, 5),
        ]
        (path / "workouts.jsonl").write_text(
            "\n".join(json.dumps(w) for w in workouts) + "\n", encoding="utf-8"
        )
        (path / "goals.json").write_text(json.dumps([
            {
                "id": "bench-140",
                "goal_type": "strength",
                "created_at": "2024-01-01",
                "target_value": 140,
                "baseline_value": 100,
                "deadline": "2024-03-01",
                "exercise_id": "bench",
            },
            {
                "id": "weekly-volume",
                "goal_type": "volume",
                "created_at": "2024-01-01",
                "period": "week",
            },
        ]), encoding="utf-8")
        yield path


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        """Test that app runs and shows help."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "goals" in result.output
        assert "trend" in result.output

    def test_sessions_json(self, snapshot_dir):
        """Test sessions --json lists one summary per workout, warmups excluded."""
        result = runner.invoke(app, [
            "sessions", "--workouts-path", str(snapshot_dir / "workouts.jsonl"), "--json",
        ])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [s["record_id"] for s in data["sessions"]] == ["w1", "w2", "w3"]
        assert data["sessions"][0]["volume_kg"] == 500.0
        assert data["sessions"][0]["exercise_count"] == 1

    def test_sessions_table(self, snapshot_dir):
        """Test sessions renders a table."""
        result = runner.invoke(app, [
            "sessions", "-p", str(snapshot_dir / "workouts.jsonl"), "--limit", "2",
        ])

        assert result.exit_code == 0
        assert "2024-01-15" in result.output
        assert "2024-01-01" not in result.output

    def test_trend_duration(self, snapshot_dir):
        """Test trend of durations 30/45/60."""
        result = runner.invoke(app, [
            "trend", "-p", str(snapshot_dir / "workouts.jsonl"), "--json",
        ])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["metric"] == "duration_minutes"
        assert data["average"] == pytest.approx(45.0)
        assert data["minimum"] == {"date": "2024-01-01", "value": 30.0}
        assert data["maximum"] == {"date": "2024-01-15", "value": 60.0}
        assert data["trend"]["direction"] == "increasing"

    def test_trend_unknown_metric(self, snapshot_dir):
        """Test that an unknown metric is rejected."""
        result = runner.invoke(app, [
            "trend", "-p", str(snapshot_dir / "workouts.jsonl"), "--metric", "calories",
        ])
        assert result.exit_code == 1

    def test_one_rm(self, snapshot_dir):
        """Test one-rm history and personal record."""
        result = runner.invoke(app, [
            "one-rm", "-p", str(snapshot_dir / "workouts.jsonl"), "--exercise", "bench", "--json",
        ])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["history"]) == 3
        assert data["personal_record"]["date"] == "2024-01-15"
        assert data["personal_record"]["value"] == pytest.approx(110 * (1 + 5 / 30))
        assert data["trend"]["direction"] == "increasing"

    def test_one_rm_table(self, snapshot_dir):
        """Test one-rm renders without JSON."""
        result = runner.invoke(app, [
            "one-rm", "-p", str(snapshot_dir / "workouts.jsonl"), "-e", "bench",
        ])
        assert result.exit_code == 0

    def test_goals_json(self, snapshot_dir):
        """Test goals evaluates each goal at a fixed date."""
        result = runner.invoke(app, [
            "goals", "-p", str(snapshot_dir / "workouts.jsonl"), "--today", "2024-01-16", "--json",
        ])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["today"] == "2024-01-16"

        bench, volume = data["goals"]
        assert bench["goal_id"] == "bench-140"
        assert bench["days_remaining"] == 45
        assert bench["status"] in ("on-track", "ahead", "behind", "at-risk")
        # no target yet: 110×5 = 550 kg this week → 550 × 1.125 = 618.75 → 619
        assert volume["status"] == "not-started"
        assert volume["current_value"] == pytest.approx(550.0)
        assert volume["recommended_target"] == 619
        assert volume["period_start"] == "2024-01-15"
        assert data["summary"]["total"] == 2

    def test_goals_table(self, snapshot_dir):
        """Test goals renders a table and summary."""
        result = runner.invoke(app, [
            "goals", "-p", str(snapshot_dir / "workouts.jsonl"), "--today", "2024-01-16",
        ])
        assert result.exit_code == 0
        assert "bench" in result.output

    def test_goal_name_with_markup_does_not_break_rendering(self, snapshot_dir):
        """Test that a goal name containing a rich closing tag still renders."""
        (snapshot_dir / "goals.json").write_text(json.dumps([{
            "id": "g1",
            "goal_type": "strength",
            "created_at": "2024-01-01",
            "target_value": 300,
            "exercise_id": "bench",
            "name": "[/bold] bench",
        }]), encoding="utf-8")

        result = runner.invoke(app, [
            "goals", "-p", str(snapshot_dir / "workouts.jsonl"), "--today", "2024-01-16",
        ])
        assert result.exit_code == 0

    def test_goals_json_target_warnings(self, snapshot_dir):
        """Test that unrealistic targets are reported under warnings."""
        (snapshot_dir / "goals.json").write_text(json.dumps([
            {
                "id": "bench-300",
                "goal_type": "strength",
                "created_at": "2024-01-01",
                "target_value": 300,
                "deadline": "2024-03-01",
                "exercise_id": "bench",
            },
            {
                "id": "daily",
                "goal_type": "frequency",
                "created_at": "2024-01-01",
                "target_value": 3,
                "period": "week",
            },
        ]), encoding="utf-8")

        result = runner.invoke(app, [
            "goals", "-p", str(snapshot_dir / "workouts.jsonl"), "--today", "2024-01-16", "--json",
        ])

        assert result.exit_code == 0
        warnings = json.loads(result.output)["warnings"]
        assert list(warnings) == ["bench-300"]
        assert "ambitious" in warnings["bench-300"][0]

    def test_malformed_exercises_exit_1(self, snapshot_dir):
        """Test that a non-list exercises field is a reported error, not a crash."""
        (snapshot_dir / "workouts.jsonl").write_text(
            json.dumps({"id": "w1", "date": "2024-01-01", "exercises": "bench"}) + "\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["sessions", "-p", str(snapshot_dir / "workouts.jsonl")])

        assert result.exit_code == 1
        assert "exercises" in result.output

    def test_null_exercises_is_an_empty_session(self, snapshot_dir):
        """Test that null exercises load as a session with no volume."""
        (snapshot_dir / "workouts.jsonl").write_text(
            json.dumps({"id": "w1", "date": "2024-01-01", "duration_minutes": 20, "exercises": None}) + "\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["sessions", "-p", str(snapshot_dir / "workouts.jsonl"), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["sessions"][0]["volume_kg"] == 0

    def test_goals_invalid_configuration(self, snapshot_dir):
        """Test that a goal whose target equals its baseline exits with 1."""
        (snapshot_dir / "goals.json").write_text(json.dumps([{
            "id": "flat",
            "goal_type": "strength",
            "created_at": "2024-01-01",
            "target_value": 100,
            "baseline_value": 100,
            "exercise_id": "bench",
        }]), encoding="utf-8")

        result = runner.invoke(app, [
            "goals", "-p", str(snapshot_dir / "workouts.jsonl"), "--today", "2024-01-16",
        ])
        assert result.exit_code == 1
        assert "Invalid goal configuration" in result.output

    def test_goals_bad_today(self, snapshot_dir):
        """Test that a malformed --today is a usage error."""
        result = runner.invoke(app, [
            "goals", "-p", str(snapshot_dir / "workouts.jsonl"), "--today", "16/01/2024",
        ])
        assert result.exit_code != 0

    def test_recommend(self):
        """Test recommend prints the rounded uplift."""
        result = runner.invoke(app, ["recommend", "strength", "100", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["recommended_target"] == 108

    def test_recommend_text(self):
        """Test recommend human-readable output."""
        result = runner.invoke(app, ["recommend", "volume", "1000"])
        assert result.exit_code == 0
        assert "1125" in result.output

    def test_recommend_unknown_goal_type(self):
        """Test that an unknown goal type exits with 1."""
        result = runner.invoke(app, ["recommend", "streak", "10"])
        assert result.exit_code == 1

    def test_missing_workouts_file(self, snapshot_dir):
        """Test that a missing snapshot exits with 1."""
        result = runner.invoke(app, [
            "sessions", "-p", str(snapshot_dir / "missing.jsonl"),
        ])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestGoalTableView:
    """Goal table rendering, on a console wide enough not to wrap cells."""

    def _render(self, goal, progress) -> str:
        from rich.console import Console

        from lift_progress.cli.views import format_goal_table

        console = Console(file=io.StringIO(), width=200, color_system=None)
        console.print(format_goal_table([goal], [progress]))
        return console.file.getvalue()

    def _goal_and_progress(self, name: str):
        from lift_progress.core.goals import compute_goal_progress
        from lift_progress.core.models import Goal

        goal = Goal(
            id="g1",
            goal_type="strength",
            created_at="2024-01-01",
            target_value=120.0,
            exercise_id="bench",
            name=name,
        )
        return goal, compute_goal_progress(goal, 90.0, "2024-01-16")

    def test_type_column_uses_display_name(self):
        output = self._render(*self._goal_and_progress("Bench 120"))
        assert "Strength (1RM)" in output

    def test_markup_in_goal_name_is_shown_as_text(self):
        output = self._render(*self._goal_and_progress("[/bold] bench [red]x"))
        assert "[/bold] bench [red]x" in output
