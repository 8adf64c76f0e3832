"""Tests for loading and validating snapshots."""

import datetime
import json

import pandas as pd
import pytest

from .exceptions import ReferentialError, SnapshotError
from .models import Sprint, Task, TaskStatus
from .snapshot import SPRINT_COLUMNS, TASK_COLUMNS, Snapshot, load_snapshot, read_table
from .test_data import SEED_SPRINTS, SEED_SPRINTS_CSV, SEED_TASKS, SEED_TASKS_CSV


@pytest.fixture(name="sprint_frame")
def sprint_frame_fixture():
    return pd.DataFrame(
        {
            "sprint_id": [1, 2],
            "name": ["One", "Two"],
            "start_date": ["2024-01-01", "2024-01-15"],
            "end_date": ["2024-01-14", "2024-01-28"],
        }
    )


@pytest.fixture(name="task_frame")
def task_frame_fixture():
    return pd.DataFrame(
        {
            "title": ["A", "B"],
            "type": ["Story", "Bug"],
            "status": ["Done", "to do"],
            "story_points": [3, None],
            "assignee": ["Ann", None],
            "sprint_id": [1, 2],
        }
    )


def test_seed_snapshot(seed_snapshot):
    assert list(seed_snapshot.sprints.columns) == SPRINT_COLUMNS
    assert list(seed_snapshot.tasks.columns) == TASK_COLUMNS
    assert len(seed_snapshot.sprints.index) == 3
    assert len(seed_snapshot.tasks.index) == 11
    assert repr(seed_snapshot) == "<Snapshot sprints=3 tasks=11>"


def test_records_round_trip(seed_snapshot):
    assert list(seed_snapshot.iter_sprints()) == SEED_SPRINTS
    assert list(seed_snapshot.iter_tasks()) == SEED_TASKS


def test_frames_are_copies(seed_snapshot):
    tasks = seed_snapshot.tasks
    tasks["status"] = "Done"
    tasks.drop(tasks.index, inplace=True)

    assert len(seed_snapshot.tasks.index) == 11
    assert seed_snapshot.tasks["status"][5] == "In Progress"


def test_assigns_task_ids(sprint_frame, task_frame):
    snapshot = Snapshot(sprint_frame, task_frame)

    assert list(snapshot.tasks["task_id"]) == [1, 2]


def test_normalizes_status_and_optional_fields(sprint_frame, task_frame):
    snapshot = Snapshot(sprint_frame, task_frame)
    tasks = list(snapshot.iter_tasks())

    assert tasks[1].status == TaskStatus.TODO
    assert tasks[1].story_points is None
    assert tasks[1].assignee is None
    assert list(snapshot.iter_sprints())[0].goal is None


def test_optional_task_columns(sprint_frame):
    tasks = pd.DataFrame(
        [{"title": "A", "type": "Story", "status": "Done", "sprint_id": 1}]
    )

    snapshot = Snapshot(sprint_frame, tasks)
    task = next(snapshot.iter_tasks())

    assert task.story_points is None
    assert task.assignee is None


def test_dangling_sprint_reference(sprint_frame, task_frame):
    task_frame.loc[1, "sprint_id"] = 9

    with pytest.raises(ReferentialError):
        Snapshot(sprint_frame, task_frame)


def test_missing_sprint_reference(sprint_frame, task_frame):
    task_frame["sprint_id"] = [1, None]

    with pytest.raises(ReferentialError):
        Snapshot(sprint_frame, task_frame)


def test_referential_error_is_a_snapshot_error():
    assert issubclass(ReferentialError, SnapshotError)


def test_duplicate_sprint_ids(sprint_frame, task_frame):
    sprint_frame["sprint_id"] = [1, 1]

    with pytest.raises(SnapshotError, match="Duplicate sprint"):
        Snapshot(sprint_frame, task_frame)


def test_duplicate_task_ids(sprint_frame, task_frame):
    task_frame["task_id"] = [4, 4]

    with pytest.raises(SnapshotError, match="Duplicate task"):
        Snapshot(sprint_frame, task_frame)


@pytest.mark.parametrize("end_date", ["2024-01-01", "2023-12-31"])
def test_sprint_must_end_after_start(sprint_frame, task_frame, end_date):
    sprint_frame.loc[0, "end_date"] = end_date

    with pytest.raises(SnapshotError, match="start date"):
        Snapshot(sprint_frame, task_frame)


def test_negative_story_points(sprint_frame, task_frame):
    task_frame["story_points"] = [3, -1]

    with pytest.raises(SnapshotError, match="negative"):
        Snapshot(sprint_frame, task_frame)


def test_unknown_status(sprint_frame, task_frame):
    task_frame.loc[0, "status"] = "Blocked"

    with pytest.raises(SnapshotError, match="Unknown task status"):
        Snapshot(sprint_frame, task_frame)


def test_missing_columns(sprint_frame, task_frame):
    with pytest.raises(SnapshotError, match="missing required"):
        Snapshot(sprint_frame.drop(columns=["end_date"]), task_frame)


def test_status_parse():
    assert TaskStatus.parse("InProgress") == TaskStatus.IN_PROGRESS
    assert TaskStatus.parse(" done ") == TaskStatus.DONE
    assert TaskStatus.parse(TaskStatus.TODO) == TaskStatus.TODO


def test_from_records_validates():
    sprints = [Sprint(1, "One", datetime.date(2024, 1, 1), datetime.date(2024, 1, 14))]
    tasks = [Task(1, "A", "Story", TaskStatus.DONE, 3, "Ann", 2)]

    with pytest.raises(ReferentialError):
        Snapshot.from_records(sprints, tasks)


def test_load_csv(tmp_path):
    sprints_file = tmp_path / "sprints.csv"
    tasks_file = tmp_path / "tasks.csv"
    sprints_file.write_text(SEED_SPRINTS_CSV)
    tasks_file.write_text(SEED_TASKS_CSV)

    snapshot = load_snapshot(str(sprints_file), str(tasks_file))

    assert list(snapshot.iter_sprints()) == SEED_SPRINTS
    assert list(snapshot.iter_tasks()) == SEED_TASKS


def test_load_json(tmp_path):
    sprints_file = tmp_path / "sprints.json"
    tasks_file = tmp_path / "tasks.json"
    sprints_file.write_text(
        json.dumps(
            [
                {
                    "sprint_id": 1,
                    "name": "One",
                    "start_date": "2024-01-01",
                    "end_date": "2024-01-14",
                },
            ]
        )
    )
    tasks_file.write_text(
        json.dumps(
            [
                {
                    "task_id": 7,
                    "title": "A",
                    "type": " bug",
                    "status": "Done",
                    "story_points": None,
                    "assignee": None,
                    "sprint_id": 1,
                },
                {
                    "task_id": 8,
                    "title": "B",
                    "type": "Story",
                    "status": "Done",
                    "story_points": 5,
                    "assignee": "Ann",
                    "sprint_id": 1,
                },
            ]
        )
    )

    snapshot = load_snapshot(str(sprints_file), str(tasks_file))

    assert list(snapshot.iter_tasks()) == [
        Task(7, "A", " bug", TaskStatus.DONE, None, None, 1),
        Task(8, "B", "Story", TaskStatus.DONE, 5, "Ann", 1),
    ]


def test_read_table_missing_file(tmp_path):
    with pytest.raises(SnapshotError, match="not found"):
        read_table(str(tmp_path / "nope.csv"))


def test_read_table_unsupported_format(tmp_path):
    filename = tmp_path / "data.parquet"
    filename.write_text("")

    with pytest.raises(SnapshotError, match="Unsupported"):
        read_table(str(filename))


@pytest.mark.parametrize(
    "name, content",
    [
        ("sprints.xlsx", "sprint_id,name\n1,One\n"),
        ("sprints.json", "[{not json"),
        ("sprints.csv", 'sprint_id,name\n1,"unterminated\n'),
    ],
)
def test_read_table_unreadable_file(tmp_path, name, content):
    filename = tmp_path / name
    filename.write_text(content)

    with pytest.raises(SnapshotError, match="Could not read"):
        read_table(str(filename))


def test_read_table_rejects_legacy_excel(tmp_path):
    filename = tmp_path / "sprints.xls"
    filename.write_text("not an Excel workbook")

    with pytest.raises(SnapshotError, match="Unsupported"):
        read_table(str(filename))


def test_missing_task_title(sprint_frame, task_frame):
    task_frame["title"] = ["A", None]

    with pytest.raises(SnapshotError, match="without a title"):
        Snapshot(sprint_frame, task_frame)


def test_missing_sprint_name(sprint_frame, task_frame):
    sprint_frame["name"] = [None, "Two"]

    with pytest.raises(SnapshotError, match="without a name"):
        Snapshot(sprint_frame, task_frame)
