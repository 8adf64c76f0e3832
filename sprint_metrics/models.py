"""Record types for sprints, tasks and the rows derived from them.

Sprints and tasks are immutable once loaded. The derived types are produced
by the engine and never stored.
"""

import datetime
import enum
from dataclasses import dataclass
from typing import Optional

from .exceptions import SnapshotError

# Canonical task categories
TYPE_STORY = "STORY"
TYPE_BUG = "BUG"
TYPE_OTHER = "OTHER"

# Group key used for Done tasks without an assignee in the workload report
NO_ASSIGNEE = "no assignee"

# Reasons used by the urgent issues audit
REASON_UNASSIGNED = "Unassigned"
REASON_CRITICAL_BUG = "Critical Bug"


class TaskStatus(str, enum.Enum):
    """Workflow status of a task. Values are the labels used in data files."""

    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"

    @classmethod
    def parse(cls, value):
        """Resolve a status label regardless of casing and whitespace.

        ``"In Progress"``, ``"in progress"`` and ``"InProgress"`` all resolve
        to ``TaskStatus.IN_PROGRESS``.
        """
        if isinstance(value, cls):
            return value

        compact = "".join(str(value).split()).lower()
        for status in cls:
            if "".join(status.value.split()).lower() == compact:
                return status

        raise SnapshotError(
            f"Unknown task status `{value}`. "
            f"Expected one of: {', '.join(s.value for s in cls)}"
        )


@dataclass(frozen=True)
class Sprint:
    """A time-boxed iteration."""

    sprint_id: int
    name: str
    start_date: datetime.date
    end_date: datetime.date
    goal: Optional[str] = None


@dataclass(frozen=True)
class Task:
    """A work item as recorded, with its raw (possibly dirty) type label."""

    task_id: int
    title: str
    type: Optional[str]
    status: TaskStatus
    story_points: Optional[int]
    assignee: Optional[str]
    sprint_id: int


@dataclass(frozen=True)
class NormalizedTask(Task):
    """A task with its canonical type and story points coalesced to zero."""

    clean_type: str = TYPE_OTHER
    clean_points: int = 0


@dataclass(frozen=True)
class SprintMetric:
    """Velocity of a single sprint, keyed for chronological ordering."""

    sprint_name: str
    start_date: datetime.date
    velocity: int


@dataclass(frozen=True)
class TrendRow:
    """A sprint's velocity compared with the sprint before it.

    ``previous_velocity`` and ``velocity_change`` are ``None`` for the first
    sprint, which has no earlier period to compare with.
    """

    sprint_name: str
    current_velocity: int
    previous_velocity: Optional[int] = None
    velocity_change: Optional[int] = None
