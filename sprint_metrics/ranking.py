"""Competition ranking of scored entries.

Entries are ranked by score, highest first. Equal scores share a rank and
the following rank skips by the size of the tie, so scores ``[10, 10, 8]``
rank as ``[1, 1, 3]``.
"""

import logging

import pandas as pd

from .aggregation import done_tasks

logger = logging.getLogger(__name__)

RANK_COLUMNS = ["key", "score", "rank"]
DEVELOPER_RANKING_COLUMNS = ["assignee", "total_points", "performance_rank"]


def _as_series(scores):
    if isinstance(scores, pd.Series):
        return scores

    pairs = list(scores.items()) if isinstance(scores, dict) else list(scores)
    return pd.to_numeric(
        pd.Series(
            [score for _, score in pairs],
            index=[key for key, _ in pairs],
            dtype="object",
        )
    )


def competition_rank(scores):
    """Rank scores highest first using standard competition ranking.

    `scores` is a Series indexed by key, a dict, or an iterable of
    ``(key, score)`` pairs. Entries without a score are dropped before
    ranking. Returns a DataFrame with columns `RANK_COLUMNS`, ordered by
    rank; tied entries keep their input order.
    """
    scores = _as_series(scores)
    present = scores.dropna()

    if len(present) < len(scores):
        logger.debug(
            "Not ranking %d entries without a score: %s",
            len(scores) - len(present),
            ", ".join(map(str, scores.index[scores.isna()])),
        )

    if len(present) == 0:
        return pd.DataFrame([], columns=RANK_COLUMNS)

    ordered = present.sort_values(ascending=False, kind="mergesort")
    ranked = ordered.rename("score").rename_axis("key").reset_index()
    ranked["rank"] = (
        ordered.rank(method="min", ascending=False).astype("int64").to_numpy()
    )

    return ranked[RANK_COLUMNS]


def developer_ranking(tasks):
    """Rank assignees by the story points of their Done tasks.

    Points are summed as recorded: missing points are skipped rather than
    counted as zero, and an assignee whose Done tasks all lack points has no
    total and is left out of the ranking. Done tasks without an assignee are
    ignored.
    """
    done = done_tasks(tasks)
    assigned = done[done["assignee"].notna()]

    totals = assigned.groupby("assignee", sort=False)["story_points"].sum(min_count=1)

    return (
        competition_rank(totals)
        .rename(
            columns={
                "key": "assignee",
                "score": "total_points",
                "rank": "performance_rank",
            }
        )[DEVELOPER_RANKING_COLUMNS]
        .reset_index(drop=True)
    )
