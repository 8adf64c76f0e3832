"""Normalization of raw task fields.

Raw task data carries inconsistent type labels (``" Bug"``, ``"BUG"``,
``"story "``) and missing story points. The functions here map labels to
the canonical categories and coalesce missing points to zero.
"""

import logging

import pandas as pd

from .models import TYPE_BUG, TYPE_OTHER, TYPE_STORY, NormalizedTask

logger = logging.getLogger(__name__)

CLEANED_TASK_COLUMNS = ["title", "clean_type", "clean_points", "status"]


def clean_type(raw_type):
    """Map a raw type label to ``STORY``, ``BUG`` or ``OTHER``.

    The label is trimmed and upper-cased, then matched by substring. A label
    containing both ``BUG`` and ``STORY`` counts as a bug. Missing and
    unrecognised labels map to ``OTHER``.
    """
    if raw_type is None or pd.isna(raw_type):
        return TYPE_OTHER

    label = str(raw_type).strip().upper()
    if TYPE_BUG in label:
        return TYPE_BUG
    if TYPE_STORY in label:
        return TYPE_STORY
    return TYPE_OTHER


def clean_points(story_points):
    """Return story points as an int, or 0 when they are absent."""
    if story_points is None or pd.isna(story_points):
        return 0
    return int(story_points)


def normalize_task(task):
    """Build a ``NormalizedTask`` from a ``Task``.

    Only the raw fields are read, so normalizing an already normalized task
    returns an equal value.
    """
    return NormalizedTask(
        task_id=task.task_id,
        title=task.title,
        type=task.type,
        status=task.status,
        story_points=task.story_points,
        assignee=task.assignee,
        sprint_id=task.sprint_id,
        clean_type=clean_type(task.type),
        clean_points=clean_points(task.story_points),
    )


def normalize_tasks(tasks):
    """Return a copy of a tasks frame with `clean_type` and `clean_points`."""
    normalized = tasks.copy()
    normalized["clean_type"] = normalized["type"].map(clean_type).astype("object")
    normalized["clean_points"] = normalized["story_points"].fillna(0).astype("int64")

    other_count = int((normalized["clean_type"] == TYPE_OTHER).sum())
    if other_count:
        logger.debug(
            "%d task(s) have an unrecognised type and were classified as %s",
            other_count,
            TYPE_OTHER,
        )

    return normalized


def cleaned_task_listing(tasks):
    """One row per task with its cleaned type and points."""
    normalized = normalize_tasks(tasks)
    return normalized[CLEANED_TASK_COLUMNS].reset_index(drop=True)
