"""Test configuration and fixtures for Sprint Metrics."""

import datetime

import pytest

from .config.loader import _create_default_options
from .models import Sprint, Task, TaskStatus
from .snapshot import Snapshot
from .test_data import SEED_SPRINTS, SEED_TASKS


@pytest.fixture(name="base_settings")
def minimal_settings():
    """Default settings: no output files configured."""
    return _create_default_options()["settings"]


@pytest.fixture(name="seed_snapshot")
def seed_snapshot_fixture():
    """Snapshot of the three sprint seed project."""
    return Snapshot.from_records(SEED_SPRINTS, SEED_TASKS)


@pytest.fixture(name="seed_tasks")
def seed_tasks_fixture(seed_snapshot):
    """Tasks frame of the seed project."""
    return seed_snapshot.tasks


@pytest.fixture(name="seed_sprints")
def seed_sprints_fixture(seed_snapshot):
    """Sprints frame of the seed project."""
    return seed_snapshot.sprints


@pytest.fixture(name="make_snapshot")
def make_snapshot_fixture():
    """Factory building a snapshot from compact task tuples.

    Each task is ``(title, type, status, points, assignee, sprint_id)``.
    Sprints are named and dated from `sprint_names`, one week apart, in
    order.
    """

    def make(tasks, sprint_names=("Sprint Alpha", "Sprint Beta", "Sprint Gamma")):
        start = datetime.date(2024, 1, 1)
        sprints = [
            Sprint(
                i + 1,
                name,
                start + datetime.timedelta(days=14 * i),
                start + datetime.timedelta(days=14 * i + 13),
            )
            for i, name in enumerate(sprint_names)
        ]
        records = [
            Task(
                i + 1, title, type_, TaskStatus.parse(status), points, assignee, sprint
            )
            for i, (title, type_, status, points, assignee, sprint) in enumerate(tasks)
        ]
        return Snapshot.from_records(sprints, records)

    return make
