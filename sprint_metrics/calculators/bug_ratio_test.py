"""Tests for the bug ratio calculator."""

import pandas as pd
import pytest

from ..utils import extend_dict
from .bug_ratio import BugRatioCalculator


def test_bug_ratio(seed_snapshot, base_settings):
    calculator = BugRatioCalculator(seed_snapshot, base_settings, {})

    data = calculator.run()

    assert list(data.columns) == [
        "sprint_name",
        "bug_count",
        "story_count",
        "bug_percentage",
    ]
    assert data.to_dict("records")[:2] == [
        {
            "sprint_name": "Sprint Alpha",
            "bug_count": 2,
            "story_count": 2,
            "bug_percentage": 50.0,
        },
        {
            "sprint_name": "Sprint Beta ",
            "bug_count": 1,
            "story_count": 3,
            "bug_percentage": 25.0,
        },
    ]
    assert data["bug_percentage"][2] == pytest.approx(100 / 3)


def test_write(seed_snapshot, base_settings, tmp_path):
    data_file = str(tmp_path / "bugs.csv")
    chart_file = str(tmp_path / "bugs.png")
    settings = extend_dict(
        base_settings,
        {
            "bug_ratio_data": [data_file],
            "bug_ratio_chart": chart_file,
            "bug_ratio_chart_title": "Bugs vs stories",
        },
    )
    results = {}

    calculator = BugRatioCalculator(seed_snapshot, settings, results)
    results[BugRatioCalculator] = calculator.run()
    calculator.write()

    df = pd.read_csv(data_file)
    assert list(df["bug_count"]) == [2, 1, 1]
    assert (tmp_path / "bugs.png").exists()
