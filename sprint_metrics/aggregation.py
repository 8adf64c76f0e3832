"""Grouped aggregations over normalized tasks.

Velocity and workload only look at Done tasks. Grouping happens over the
tasks that survive the filter, so a sprint without any Done task has no
velocity row at all (it is not reported as zero).
"""

import logging

import pandas as pd

from .exceptions import ArithmeticPreconditionError, ReferentialError
from .models import NO_ASSIGNEE, TYPE_BUG, TYPE_STORY, TaskStatus
from .normalize import normalize_tasks

logger = logging.getLogger(__name__)

SPRINT_VELOCITY_COLUMNS = ["sprint_id", "sprint_name", "start_date", "velocity"]
VELOCITY_COLUMNS = ["sprint_name", "total_points_delivered"]
BUG_RATIO_COLUMNS = ["sprint_name", "bug_count", "story_count", "bug_percentage"]
WORKLOAD_COLUMNS = ["assignee", "tasks_completed", "total_points_completed"]


def done_tasks(normalized):
    """Filter a tasks frame down to tasks with status Done."""
    return normalized[normalized["status"] == TaskStatus.DONE.value]


def _join_sprints(tasks, sprints):
    return tasks.merge(
        sprints[["sprint_id", "name", "start_date"]].rename(
            columns={"name": "sprint_name"}
        ),
        on="sprint_id",
        how="inner",
    )


def _chronological(frame):
    return frame.sort_values(["start_date", "sprint_id"], kind="mergesort")


def sprint_velocity(tasks, sprints):
    """Story points delivered per sprint, ordered by sprint start date.

    Returns a DataFrame with columns `SPRINT_VELOCITY_COLUMNS`.
    """
    joined = _join_sprints(done_tasks(normalize_tasks(tasks)), sprints)

    if len(joined.index) == 0:
        logger.debug("No completed tasks found; velocity is empty")
        return pd.DataFrame([], columns=SPRINT_VELOCITY_COLUMNS)

    velocity = (
        joined.groupby("sprint_id", sort=False)
        .agg(
            sprint_name=("sprint_name", "first"),
            start_date=("start_date", "first"),
            velocity=("clean_points", "sum"),
        )
        .reset_index()
    )

    return _chronological(velocity)[SPRINT_VELOCITY_COLUMNS].reset_index(drop=True)


def velocity_by_sprint(tasks, sprints):
    """Sprint velocity report: `sprint_name`, `total_points_delivered`."""
    return (
        sprint_velocity(tasks, sprints)
        .rename(columns={"velocity": "total_points_delivered"})[VELOCITY_COLUMNS]
        .reset_index(drop=True)
    )


def bug_percentage(bug_count, total_count):
    """Percentage of bugs in a group of `total_count` tasks, as a float."""
    if total_count <= 0:
        raise ArithmeticPreconditionError(
            "Cannot calculate a bug percentage for a group with no tasks"
        )
    return float(bug_count) / total_count * 100


def _with_category_flags(normalized):
    return normalized.assign(
        is_bug=normalized["clean_type"].str.contains(TYPE_BUG, regex=False),
        is_story=normalized["clean_type"].str.contains(TYPE_STORY, regex=False),
    )


def _count_categories(grouped):
    return grouped.agg(
        bug_count=("is_bug", "sum"),
        story_count=("is_story", "sum"),
        total_count=("task_id", "count"),
    )


def bug_ratio_by_sprint(tasks, sprints):
    """Bugs versus stories per sprint, over tasks of any status.

    Returns a DataFrame with columns `BUG_RATIO_COLUMNS`, one row per sprint
    that has at least one task, ordered by sprint start date.
    """
    joined = _join_sprints(_with_category_flags(normalize_tasks(tasks)), sprints)

    if len(joined.index) == 0:
        return pd.DataFrame([], columns=BUG_RATIO_COLUMNS)

    counts = _count_categories(
        joined.groupby(["sprint_id", "sprint_name", "start_date"], sort=False)
    ).reset_index()

    counts["bug_count"] = counts["bug_count"].astype("int64")
    counts["story_count"] = counts["story_count"].astype("int64")
    counts["bug_percentage"] = [
        bug_percentage(bugs, total)
        for bugs, total in zip(counts["bug_count"], counts["total_count"])
    ]

    return _chronological(counts)[BUG_RATIO_COLUMNS].reset_index(drop=True)


def bug_ratio_for_sprint(tasks, sprints, sprint_id):
    """Bug ratio row (as a dict) for a single sprint.

    Raises ``ArithmeticPreconditionError`` if the sprint has no tasks, and
    ``ReferentialError`` if the sprint does not exist.
    """
    sprint = sprints[sprints["sprint_id"] == sprint_id]
    if len(sprint.index) == 0:
        raise ReferentialError(f"Sprint {sprint_id} does not exist")

    group = _with_category_flags(
        normalize_tasks(tasks[tasks["sprint_id"] == sprint_id])
    )

    bug_count = int(group["is_bug"].sum())
    return {
        "sprint_name": sprint["name"].iloc[0],
        "bug_count": bug_count,
        "story_count": int(group["is_story"].sum()),
        "bug_percentage": bug_percentage(bug_count, len(group.index)),
    }


def workload_by_assignee(tasks):
    """Completed work per assignee, most story points first.

    Done tasks without an assignee are grouped under `NO_ASSIGNEE`. Ties keep
    the order in which assignees first appear in the tasks.
    """
    done = done_tasks(normalize_tasks(tasks)).copy()

    if len(done.index) == 0:
        return pd.DataFrame([], columns=WORKLOAD_COLUMNS)

    done["assignee"] = done["assignee"].fillna(NO_ASSIGNEE)
    workload = (
        done.groupby("assignee", sort=False)
        .agg(
            tasks_completed=("task_id", "count"),
            total_points_completed=("clean_points", "sum"),
        )
        .reset_index()
    )

    workload = workload.sort_values(
        "total_points_completed", ascending=False, kind="mergesort"
    )
    return workload[WORKLOAD_COLUMNS].reset_index(drop=True)
