"""Common constants used across Sprint Metrics modules."""

from typing import Final, List

# Data filename keys; each accepts a single file name or a list
DATA_FILENAME_KEYS: Final[List[str]] = [
    "cleaned_tasks_data",
    "velocity_data",
    "bug_ratio_data",
    "workload_data",
    "velocity_trend_data",
    "urgent_issues_data",
    "developer_ranking_data",
]

# Chart filename keys
CHART_FILENAME_KEYS: Final[List[str]] = [
    "velocity_chart",
    "bug_ratio_chart",
    "velocity_trend_chart",
]

# Chart title keys
CHART_TITLE_KEYS: Final[List[str]] = [f"{key}_title" for key in CHART_FILENAME_KEYS]

# Environment variables consulted when the config has no `Data` section
SPRINTS_FILE_ENV: Final[str] = "SPRINT_METRICS_SPRINTS"
TASKS_FILE_ENV: Final[str] = "SPRINT_METRICS_TASKS"
