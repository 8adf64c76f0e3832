"""Tests for chart styling utilities."""

import matplotlib.pyplot as plt

from .chart_styling_utils import apply_sprint_axis_styling, save_chart_with_styling


def test_apply_sprint_axis_styling():
    fig, ax = plt.subplots()
    ax.bar([0, 1], [13, 8])

    apply_sprint_axis_styling(ax, ["Sprint Alpha", "Sprint Beta "])

    assert ax.get_xlabel() == "Sprint"
    assert ax.get_ylabel() == "Story points"
    assert list(ax.get_xticks()) == [0, 1]
    assert [t.get_text() for t in ax.get_xticklabels()] == [
        "Sprint Alpha",
        "Sprint Beta",
    ]
    plt.close(fig)


def test_save_chart_with_styling(tmp_path):
    fig, ax = plt.subplots()
    ax.plot([0, 1], [1, 2])
    output_file = tmp_path / "chart.png"

    save_chart_with_styling(fig, str(output_file), "test")

    assert output_file.exists()
    assert not plt.fignum_exists(fig.number)
