"""Sprint-over-sprint velocity trend.

Sprints are put in chronological order by start date and each one is
compared with the sprint immediately before it. The earliest sprint has no
predecessor, so its previous velocity and change are absent rather than 0.
"""

import logging

import pandas as pd

from .models import SprintMetric, TrendRow

logger = logging.getLogger(__name__)

TREND_COLUMNS = [
    "sprint_name",
    "current_velocity",
    "previous_velocity",
    "velocity_change",
]


def sprint_metrics_from_velocity(velocity):
    """Convert a `sprint_velocity` frame into ``SprintMetric`` records."""
    return [
        SprintMetric(
            sprint_name=row.sprint_name,
            start_date=pd.Timestamp(row.start_date).date(),
            velocity=int(row.velocity),
        )
        for row in velocity.itertuples(index=False)
    ]


def velocity_trend(metrics):
    """Compare each sprint's velocity with the previous sprint's.

    `metrics` is any iterable of ``SprintMetric``; it is sorted by start date
    before the comparison. Returns a list of ``TrendRow``.
    """
    rows = []
    previous = None

    for metric in sorted(metrics, key=lambda m: m.start_date):
        if previous is None:
            rows.append(
                TrendRow(
                    sprint_name=metric.sprint_name,
                    current_velocity=metric.velocity,
                )
            )
        else:
            rows.append(
                TrendRow(
                    sprint_name=metric.sprint_name,
                    current_velocity=metric.velocity,
                    previous_velocity=previous.velocity,
                    velocity_change=metric.velocity - previous.velocity,
                )
            )
        previous = metric

    return rows


def velocity_trend_frame(rows):
    """Build the velocity trend report from ``TrendRow`` records.

    Absent values are kept as ``<NA>`` in nullable integer columns.
    """
    frame = pd.DataFrame(
        [
            (r.sprint_name, r.current_velocity, r.previous_velocity, r.velocity_change)
            for r in rows
        ],
        columns=TREND_COLUMNS,
    )

    for column in TREND_COLUMNS[1:]:
        frame[column] = frame[column].astype("Int64")

    return frame
