"""Sprint velocity calculator for Sprint Metrics."""

import logging

import matplotlib.pyplot as plt

from ..aggregation import velocity_by_sprint
from ..chart_styling_utils import apply_sprint_axis_styling, save_chart_with_styling
from .base_calculator import BaseCalculator

logger = logging.getLogger(__name__)


class VelocityCalculator(BaseCalculator):
    """Calculate the story points delivered (Done tasks, missing points
    counted as 0) in each sprint.

    Sprints without any Done task have no row. Data is written to the files
    in `velocity_data` and a bar chart to `velocity_chart`, with title
    `velocity_chart_title`.
    """

    report_name = "velocity"
    data_setting = "velocity_data"

    def run(self):
        return velocity_by_sprint(self.snapshot.tasks, self.snapshot.sprints)

    def write_charts(self, data):
        output_file = self.settings.get("velocity_chart")
        if not output_file:
            logger.debug("No output file specified for velocity chart")
            return

        if self.check_chart_data_empty(data, "velocity"):
            return

        fig, ax = plt.subplots()

        if self.settings.get("velocity_chart_title"):
            ax.set_title(self.settings["velocity_chart_title"])

        positions = list(range(len(data.index)))
        ax.bar(positions, data["total_points_delivered"])

        for x, y in zip(positions, data["total_points_delivered"]):
            ax.annotate(
                f"{y:.0f}",
                xy=(x, y),
                xytext=(0, 3),
                textcoords="offset points",
                ha="center",
                va="bottom",
                fontsize="x-small",
            )

        apply_sprint_axis_styling(ax, data["sprint_name"])
        save_chart_with_styling(fig, output_file, "velocity")
