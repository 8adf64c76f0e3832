"""Sprint and task snapshot management for Sprint Metrics.

A ``Snapshot`` is the validated, read-only input of every report: one
DataFrame of sprints and one of tasks. Invariants are checked once, when the
snapshot is built, so the engine can rely on them afterwards.
"""

import dataclasses
import logging
import os.path
import zipfile

import pandas as pd

from .exceptions import ReferentialError, SnapshotError
from .models import Sprint, Task, TaskStatus
from .utils import get_extension

logger = logging.getLogger(__name__)

SPRINT_COLUMNS = ["sprint_id", "name", "start_date", "end_date", "goal"]
TASK_COLUMNS = [
    "task_id",
    "title",
    "type",
    "status",
    "story_points",
    "assignee",
    "sprint_id",
]

REQUIRED_SPRINT_COLUMNS = ["sprint_id", "name", "start_date", "end_date"]
REQUIRED_TASK_COLUMNS = ["title", "type", "status", "sprint_id"]


def _check_columns(frame, required, kind):
    missing = [c for c in required if c not in frame.columns]
    if missing:
        raise SnapshotError(
            f"{kind} data is missing required column(s): {', '.join(missing)}"
        )


def _to_optional_text(value):
    if value is None or pd.isna(value):
        return None
    return str(value)


def _check_present(frame, column, kind):
    missing = frame[frame[column].isna()]
    if len(missing.index) > 0:
        raise SnapshotError(
            f"{kind} data has {len(missing.index)} row(s) without a {column}"
        )


def _check_unique(ids, kind):
    duplicated = ids[ids.duplicated()].unique().tolist()
    if duplicated:
        raise SnapshotError(
            f"Duplicate {kind} identifier(s): {', '.join(map(str, duplicated))}"
        )


def _prepare_sprints(sprints):
    _check_columns(sprints, REQUIRED_SPRINT_COLUMNS, "Sprint")
    frame = sprints.copy()
    if "goal" not in frame.columns:
        frame["goal"] = None

    try:
        frame["sprint_id"] = pd.to_numeric(frame["sprint_id"]).astype("int64")
    except (ValueError, TypeError) as e:
        raise SnapshotError("Sprint identifiers must be integers") from e

    _check_unique(frame["sprint_id"], "sprint")

    for column in ("start_date", "end_date"):
        try:
            frame[column] = pd.to_datetime(frame[column])
        except (ValueError, TypeError) as e:
            raise SnapshotError(f"Could not parse sprint {column} values") from e

    invalid = frame[~(frame["start_date"] < frame["end_date"])]
    if len(invalid.index) > 0:
        raise SnapshotError(
            "Sprint start date must be before its end date: "
            f"{', '.join(map(str, invalid['sprint_id']))}"
        )

    _check_present(frame, "name", "Sprint")
    frame["name"] = frame["name"].astype(str)
    frame["goal"] = frame["goal"].map(_to_optional_text).astype("object")

    return frame[SPRINT_COLUMNS].reset_index(drop=True)


def _prepare_tasks(tasks, sprint_ids):
    _check_columns(tasks, REQUIRED_TASK_COLUMNS, "Task")
    frame = tasks.copy()

    # Identifiers are assigned on creation when the source does not carry them
    if "task_id" not in frame.columns:
        frame["task_id"] = range(1, len(frame.index) + 1)
    if "story_points" not in frame.columns:
        frame["story_points"] = None
    if "assignee" not in frame.columns:
        frame["assignee"] = None

    try:
        frame["task_id"] = pd.to_numeric(frame["task_id"]).astype("int64")
    except (ValueError, TypeError) as e:
        raise SnapshotError("Task identifiers must be integers") from e

    _check_unique(frame["task_id"], "task")

    _check_present(frame, "title", "Task")
    frame["title"] = frame["title"].astype(str)
    frame["type"] = frame["type"].map(_to_optional_text).astype("object")
    frame["assignee"] = frame["assignee"].map(_to_optional_text).astype("object")
    frame["status"] = frame["status"].map(lambda s: TaskStatus.parse(s).value)

    try:
        frame["story_points"] = pd.to_numeric(frame["story_points"]).astype("Int64")
    except (ValueError, TypeError) as e:
        raise SnapshotError("Story points must be whole numbers") from e

    negative = frame[frame["story_points"].fillna(0) < 0]
    if len(negative.index) > 0:
        raise SnapshotError(
            "Story points must not be negative for task(s): "
            f"{', '.join(map(str, negative['task_id']))}"
        )

    sprint_refs = pd.to_numeric(frame["sprint_id"], errors="coerce")
    dangling = frame[sprint_refs.isna() | ~sprint_refs.isin(sprint_ids)]
    if len(dangling.index) > 0:
        raise ReferentialError(
            "Task(s) reference a sprint that does not exist: "
            + ", ".join(
                f"{task_id} -> {sprint_id}"
                for task_id, sprint_id in zip(
                    dangling["task_id"], dangling["sprint_id"]
                )
            )
        )
    frame["sprint_id"] = sprint_refs.astype("int64")

    return frame[TASK_COLUMNS].reset_index(drop=True)


class Snapshot:
    """A validated, read-only set of sprints and tasks.

    The ``sprints`` and ``tasks`` properties return copies, so a report can
    never modify the data another report reads.
    """

    def __init__(self, sprints, tasks):
        self._sprints = _prepare_sprints(sprints)
        self._tasks = _prepare_tasks(tasks, set(self._sprints["sprint_id"]))

        logger.debug(
            "Loaded snapshot with %d sprint(s) and %d task(s)",
            len(self._sprints.index),
            len(self._tasks.index),
        )

    @classmethod
    def from_records(cls, sprints, tasks):
        """Build a snapshot from ``Sprint`` and ``Task`` records."""
        sprint_frame = pd.DataFrame(
            [dataclasses.asdict(s) for s in sprints], columns=SPRINT_COLUMNS
        )
        task_frame = pd.DataFrame(
            [dataclasses.asdict(t) for t in tasks], columns=TASK_COLUMNS
        )
        return cls(sprint_frame, task_frame)

    @property
    def sprints(self):
        """DataFrame of sprints with columns `SPRINT_COLUMNS`."""
        return self._sprints.copy()

    @property
    def tasks(self):
        """DataFrame of tasks with columns `TASK_COLUMNS`."""
        return self._tasks.copy()

    def iter_sprints(self):
        """Yield each sprint as a ``Sprint`` record."""
        for row in self._sprints.itertuples(index=False):
            yield Sprint(
                sprint_id=int(row.sprint_id),
                name=row.name,
                start_date=row.start_date.date(),
                end_date=row.end_date.date(),
                goal=_to_optional_text(row.goal),
            )

    def iter_tasks(self):
        """Yield each task as a ``Task`` record, in snapshot order."""
        for row in self._tasks.itertuples(index=False):
            yield Task(
                task_id=int(row.task_id),
                title=row.title,
                type=_to_optional_text(row.type),
                status=TaskStatus(row.status),
                story_points=(
                    None if pd.isna(row.story_points) else int(row.story_points)
                ),
                assignee=_to_optional_text(row.assignee),
                sprint_id=int(row.sprint_id),
            )

    def __repr__(self):
        return (
            f"<Snapshot sprints={len(self._sprints.index)} "
            f"tasks={len(self._tasks.index)}>"
        )


def _read_json(filename):
    return pd.read_json(filename, orient="records", convert_dates=False)


def _read_csv(filename):
    return pd.read_csv(filename, na_values=["NULL"])


def read_table(filename):
    """Read a CSV, JSON or Excel file into a DataFrame, chosen by extension."""
    extension = get_extension(filename)

    if not os.path.exists(filename):
        raise SnapshotError(f"Data file `{filename}` not found")

    if extension == ".json":
        reader = _read_json
    elif extension == ".xlsx":
        reader = pd.read_excel
    elif extension in (".csv", ".txt", ""):
        reader = _read_csv
    else:
        raise SnapshotError(
            f"Unsupported data file format `{extension}` for {filename}"
        )

    logger.info("Reading %s", filename)
    try:
        return reader(filename)
    except (ValueError, OSError, zipfile.BadZipFile) as e:
        raise SnapshotError(f"Could not read data file `{filename}`: {e}") from e


def load_snapshot(sprints_file, tasks_file):
    """Load and validate a snapshot from a sprints file and a tasks file."""
    return Snapshot(read_table(sprints_file), read_table(tasks_file))
