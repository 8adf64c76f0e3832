"""Bug ratio calculator for Sprint Metrics."""

import logging

import matplotlib.pyplot as plt

from ..aggregation import bug_ratio_by_sprint
from ..chart_styling_utils import apply_sprint_axis_styling, save_chart_with_styling
from .base_calculator import BaseCalculator

logger = logging.getLogger(__name__)


class BugRatioCalculator(BaseCalculator):
    """Calculate the number of bugs and stories in each sprint, regardless of
    status, and the percentage of the sprint's tasks that are bugs.

    Tasks whose type is neither a bug nor a story count towards the total
    but not towards either category. Data is written to the files in
    `bug_ratio_data` and a stacked bar chart to `bug_ratio_chart`, with title
    `bug_ratio_chart_title`.
    """

    report_name = "bug ratio"
    data_setting = "bug_ratio_data"

    def run(self):
        return bug_ratio_by_sprint(self.snapshot.tasks, self.snapshot.sprints)

    def write_charts(self, data):
        output_file = self.settings.get("bug_ratio_chart")
        if not output_file:
            logger.debug("No output file specified for bug ratio chart")
            return

        if self.check_chart_data_empty(data, "bug ratio"):
            return

        fig, ax = plt.subplots()

        if self.settings.get("bug_ratio_chart_title"):
            ax.set_title(self.settings["bug_ratio_chart_title"])

        positions = list(range(len(data.index)))
        ax.bar(positions, data["story_count"], label="Stories")
        ax.bar(positions, data["bug_count"], bottom=data["story_count"], label="Bugs")

        for x, total, percentage in zip(
            positions, data["story_count"] + data["bug_count"], data["bug_percentage"]
        ):
            ax.annotate(
                f"{percentage:.0f}% bugs",
                xy=(x, total),
                xytext=(0, 3),
                textcoords="offset points",
                ha="center",
                va="bottom",
                fontsize="x-small",
            )

        ax.legend(loc="center left", bbox_to_anchor=(1, 0.5))
        apply_sprint_axis_styling(ax, data["sprint_name"], ylabel="Number of items")
        save_chart_with_styling(fig, output_file, "bug ratio")
