"""Urgent issues audit.

Lists the tasks that need attention: unassigned tasks and bugs that are not
yet done. The two lists are concatenated as they are, so a task that is both
unassigned and an open bug is listed once for each reason.
"""

import logging

import pandas as pd

from .models import REASON_CRITICAL_BUG, REASON_UNASSIGNED, TYPE_BUG, TaskStatus
from .normalize import normalize_tasks

logger = logging.getLogger(__name__)

URGENT_ISSUES_COLUMNS = ["task_name", "issue_reason"]


def _tag(tasks, reason):
    return pd.DataFrame(
        {
            "task_name": tasks["title"].to_numpy(),
            "issue_reason": reason,
        },
        columns=URGENT_ISSUES_COLUMNS,
    )


def unassigned_tasks(normalized):
    """Tasks without an assignee."""
    return normalized[normalized["assignee"].isna()]


def open_bugs(normalized):
    """Bugs whose status is anything other than Done."""
    return normalized[
        normalized["clean_type"].str.contains(TYPE_BUG, regex=False)
        & (normalized["status"] != TaskStatus.DONE.value)
    ]


def urgent_issues(tasks):
    """Unassigned tasks followed by open bugs, without de-duplication."""
    normalized = normalize_tasks(tasks)

    unassigned = unassigned_tasks(normalized)
    bugs = open_bugs(normalized)
    logger.debug(
        "Found %d unassigned task(s) and %d open bug(s)",
        len(unassigned.index),
        len(bugs.index),
    )

    return pd.concat(
        [_tag(unassigned, REASON_UNASSIGNED), _tag(bugs, REASON_CRITICAL_BUG)],
        ignore_index=True,
    )
