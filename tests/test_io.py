"""
Tests for document parsing and the read-only snapshot store.
"""

import json

import pytest

from lift_progress.core.models import GoalProgress, RequiredPace, SeriesPoint
from lift_progress.io.serializers import (
    ValidationError,
    dict_to_goal,
    dict_to_workout_record,
    goal_progress_to_dict,
    json_line_to_workout,
    series_point_to_dict,
    validate_date,
)
from lift_progress.io.snapshot_store import SnapshotStore


def _workout_doc(record_id: str, date: str, duration: float = 45, **extra) -> dict:
    doc = {
        "id": record_id,
        "date": date,
        "duration_minutes": duration,
        "exercises": [
            {
                "exercise_id": "bench",
                "name": "Bench Press",
                "muscle_group": "chest",
                "secondary_muscles": ["triceps"],
                "sets": [
                    {"weight_kg": 60, "reps": 10, "set_type": "warmup"},
                    {"weight_kg": 100, "reps": 5},
                ],
            }
        ],
    }
    doc.update(extra)
    return doc


class TestValidateDate:
    def test_plain_date(self):
        assert validate_date("2024-02-29") == "2024-02-29"

    def test_timestamp_is_cut_to_date(self):
        assert validate_date("2024-03-01T18:30:00Z") == "2024-03-01"

    @pytest.mark.parametrize("bad", ["2024-13-01", "2023-02-29", "01/03/2024", "", None])
    def test_invalid(self, bad):
        with pytest.raises(ValidationError):
            validate_date(bad)


class TestWorkoutParsing:
    def test_full_document(self):
        record = dict_to_workout_record(_workout_doc("w1", "2024-01-02"))

        assert record.id == "w1"
        assert record.duration_minutes == 45.0
        bench = record.find_exercise("bench")
        assert bench is not None
        assert bench.name == "Bench Press"
        assert bench.secondary_muscles == ("triceps",)
        assert [s.set_type for s in bench.sets] == ["warmup", "normal"]
        assert bench.targets_muscle("triceps")

    def test_missing_id(self):
        doc = _workout_doc("w1", "2024-01-02")
        del doc["id"]
        with pytest.raises(ValidationError, match="id"):
            dict_to_workout_record(doc)

    def test_negative_weight(self):
        doc = _workout_doc("w1", "2024-01-02")
        doc["exercises"][0]["sets"][1]["weight_kg"] = -5
        with pytest.raises(ValidationError):
            dict_to_workout_record(doc)

    def test_zero_reps(self):
        doc = _workout_doc("w1", "2024-01-02")
        doc["exercises"][0]["sets"][1]["reps"] = 0
        with pytest.raises(ValidationError):
            dict_to_workout_record(doc)

    def test_fractional_reps_rejected(self):
        doc = _workout_doc("w1", "2024-01-02")
        doc["exercises"][0]["sets"][1]["reps"] = 2.9
        with pytest.raises(ValidationError, match="whole number"):
            dict_to_workout_record(doc)

    def test_whole_float_reps_accepted(self):
        doc = _workout_doc("w1", "2024-01-02")
        doc["exercises"][0]["sets"][1]["reps"] = 5.0
        record = dict_to_workout_record(doc)
        assert record.exercises[0].sets[1].reps == 5

    def test_null_sets_and_exercises_are_empty(self):
        record = json_line_to_workout(
            '{"id": "w1", "date": "2024-03-01", "exercises": [{"exercise_id": "bench", "sets": null}]}'
        )
        assert record.exercises[0].sets == ()

        record = json_line_to_workout('{"id": "w2", "date": "2024-03-01", "exercises": null}')
        assert record.exercises == ()

    def test_non_list_sets_rejected(self):
        doc = _workout_doc("w1", "2024-01-02")
        doc["exercises"][0]["sets"] = {"weight_kg": 100, "reps": 5}
        with pytest.raises(ValidationError, match="sets must be a list"):
            dict_to_workout_record(doc)

    def test_unknown_set_type(self):
        doc = _workout_doc("w1", "2024-01-02")
        doc["exercises"][0]["sets"][1]["set_type"] = "cluster"
        with pytest.raises(ValidationError):
            dict_to_workout_record(doc)

    def test_invalid_json_line(self):
        with pytest.raises(ValidationError, match="Invalid JSON"):
            json_line_to_workout("{not json")

    def test_non_object_line(self):
        with pytest.raises(ValidationError):
            json_line_to_workout("[1, 2, 3]")


class TestGoalParsing:
    def test_strength_goal(self):
        goal = dict_to_goal({
            "id": "g1",
            "goal_type": "strength",
            "created_at": "2024-01-01T09:00:00Z",
            "target_value": 120,
            "deadline": "2024-03-01",
            "baseline_value": 100,
            "exercise_id": "bench",
            "milestones_reached": [25],
        })

        assert goal.created_at == "2024-01-01"
        assert goal.target_value == 120.0
        assert goal.milestones_reached == (25,)
        assert goal.volume_scope == "total"

    def test_goal_without_target_or_deadline(self):
        goal = dict_to_goal({
            "id": "g2",
            "goal_type": "frequency",
            "created_at": "2024-01-01",
            "period": "week",
        })

        assert goal.target_value is None
        assert goal.deadline is None

    def test_null_milestones_are_empty(self):
        goal = dict_to_goal({
            "id": "g3",
            "goal_type": "strength",
            "created_at": "2024-01-01",
            "exercise_id": "bench",
            "milestones_reached": None,
        })
        assert goal.milestones_reached == ()

    def test_non_list_milestones_rejected(self):
        with pytest.raises(ValidationError, match="milestones_reached"):
            dict_to_goal({
                "id": "g3",
                "goal_type": "strength",
                "created_at": "2024-01-01",
                "exercise_id": "bench",
                "milestones_reached": 25,
            })

    def test_unknown_goal_type(self):
        with pytest.raises(ValidationError, match="goal_type"):
            dict_to_goal({"id": "g", "goal_type": "streak", "created_at": "2024-01-01"})

    def test_model_rule_becomes_validation_error(self):
        with pytest.raises(ValidationError):
            dict_to_goal({"id": "g", "goal_type": "volume", "created_at": "2024-01-01"})


class TestResultDicts:
    def test_series_point(self):
        assert series_point_to_dict(SeriesPoint("2024-01-01", 5.0)) == {"date": "2024-01-01", "value": 5.0}
        assert series_point_to_dict(None) is None

    def test_goal_progress_is_json_serializable(self):
        progress = GoalProgress(
            goal_id="g1",
            goal_type="strength",
            current_value=110.0,
            target_value=120.0,
            baseline_value=100.0,
            progress_percent=50.0,
            status="on-track",
            days_remaining=30,
            expected_percent=50.0,
            new_milestones=(25, 50),
            next_milestone=75,
            required_pace=RequiredPace(per_day=0.5, per_week=3.5, total=10.0),
        )
        data = json.loads(json.dumps(goal_progress_to_dict(progress)))

        assert data["status"] == "on-track"
        assert data["new_milestones"] == [25, 50]
        assert data["required_pace"] == {"per_day": 0.5, "per_week": 3.5, "total": 10.0}
        assert data["predicted_completion"] is None


class TestSnapshotStore:
    def test_default_goals_path_is_sibling(self, tmp_path):
        store = SnapshotStore(tmp_path / "workouts.jsonl")
        assert store.goals_path == tmp_path / "goals.json"

    def test_load_workouts_sorted_and_stable(self, tmp_path):
        path = tmp_path / "workouts.jsonl"
        lines = [
            json.dumps(_workout_doc("late", "2024-01-09")),
            "",
            json.dumps(_workout_doc("a", "2024-01-02")),
            json.dumps(_workout_doc("b", "2024-01-02")),
        ]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")

        records = SnapshotStore(path).load_workouts()

        assert [r.id for r in records] == ["a", "b", "late"]

    def test_missing_workouts_file(self, tmp_path):
        store = SnapshotStore(tmp_path / "workouts.jsonl")

        assert not store.exists()
        with pytest.raises(FileNotFoundError):
            store.load_workouts()

    def test_bad_line_names_line_number(self, tmp_path):
        path = tmp_path / "workouts.jsonl"
        path.write_text(json.dumps(_workout_doc("a", "2024-01-02")) + "\n{broken\n", encoding="utf-8")

        with pytest.raises(ValidationError, match=":2:"):
            SnapshotStore(path).load_workouts()

    def test_goals_missing_file_is_empty(self, tmp_path):
        assert SnapshotStore(tmp_path / "workouts.jsonl").load_goals() == []

    def test_goals_loaded(self, tmp_path):
        (tmp_path / "goals.json").write_text(json.dumps([
            {"id": "g1", "goal_type": "strength", "created_at": "2024-01-01",
             "target_value": 120, "exercise_id": "bench"},
            {"id": "g2", "goal_type": "volume", "created_at": "2024-01-01",
             "target_value": 10000, "period": "week"},
        ]), encoding="utf-8")

        goals = SnapshotStore(tmp_path / "workouts.jsonl").load_goals()

        assert [g.id for g in goals] == ["g1", "g2"]

    def test_goals_must_be_array(self, tmp_path):
        (tmp_path / "goals.json").write_text('{"id": "g1"}', encoding="utf-8")

        with pytest.raises(ValidationError, match="array"):
            SnapshotStore(tmp_path / "workouts.jsonl").load_goals()

    def test_invalid_goal_names_index(self, tmp_path):
        (tmp_path / "goals.json").write_text(json.dumps([
            {"id": "g1", "goal_type": "strength", "created_at": "2024-01-01", "exercise_id": "bench"},
            {"id": "g2", "goal_type": "strength", "created_at": "not-a-date", "exercise_id": "bench"},
        ]), encoding="utf-8")

        with pytest.raises(ValidationError, match=r"\[1\]"):
            SnapshotStore(tmp_path / "workouts.jsonl").load_goals()
