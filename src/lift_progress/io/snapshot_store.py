"""
Read-only access to an exported snapshot of the document store.

Workouts are stored one JSON object per line (workouts.jsonl); goals sit in
a sibling goals.json array. The engine only ever reads a snapshot; writing
and querying records belongs to the document store itself.
"""

import json
import logging
import os
from pathlib import Path

from ..core.models import Goal, WorkoutRecord
from .serializers import ValidationError, dict_to_goal, json_line_to_workout

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    Loads workouts and goals from a snapshot directory.

    The workouts file contains one JSON object per line; blank lines are
    skipped. A separate goals.json next to it holds the goal documents.
    """

    def __init__(self, workouts_path: str | Path, goals_path: str | Path | None = None):
        """
        Initialize the snapshot store.

        Args:
            workouts_path: Path to the JSONL workouts file
            goals_path: Path to goals.json (defaults to a sibling of workouts_path)
        """
        self.workouts_path = Path(workouts_path)
        self.goals_path = (
            Path(goals_path) if goals_path is not None
            else self.workouts_path.parent / "goals.json"
        )

    def exists(self) -> bool:
        """Check if the workouts file exists."""
        return self.workouts_path.exists()

    def load_workouts(self) -> list[WorkoutRecord]:
        """
        Load all workouts, stably sorted by date.

        Records sharing a date keep their file order.

        Returns:
            Chronologically ordered WorkoutRecords

        Raises:
            FileNotFoundError: If the workouts file doesn't exist
            ValidationError: If any line is invalid (message names the line)
        """
        if not self.workouts_path.exists():
            raise FileNotFoundError(f"Workouts file not found: {self.workouts_path}")

        records: list[WorkoutRecord] = []
        with open(self.workouts_path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append(json_line_to_workout(line))
                except ValidationError as e:
                    raise ValidationError(f"{self.workouts_path}:{line_num}: {e}") from e

        records.sort(key=lambda r: r.date)
        logger.debug("loaded %d workouts from %s", len(records), self.workouts_path)
        return records

    def load_goals(self) -> list[Goal]:
        """
        Load goal documents.

        Returns:
            List of Goals; empty if goals.json doesn't exist

        Raises:
            ValidationError: If the file is not a JSON array of valid goals
        """
        if not self.goals_path.exists():
            logger.debug("no goals file at %s", self.goals_path)
            return []

        try:
            with open(self.goals_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"{self.goals_path}: invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise ValidationError(f"{self.goals_path}: expected a JSON array of goals")

        goals: list[Goal] = []
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                raise ValidationError(f"{self.goals_path}[{i}]: expected a JSON object")
            try:
                goals.append(dict_to_goal(item))
            except ValidationError as e:
                raise ValidationError(f"{self.goals_path}[{i}]: {e}") from e
        return goals


def get_default_snapshot_dir() -> Path:
    """
    Get default snapshot directory.

    Returns:
        Path to ~/.lift-progress
    """
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / ".lift-progress"


def get_default_workouts_path() -> Path:
    """Default workouts file: ~/.lift-progress/workouts.jsonl"""
    return get_default_snapshot_dir() / "workouts.jsonl"
