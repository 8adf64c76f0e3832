"""Velocity trend calculator for Sprint Metrics."""

import logging

import matplotlib.pyplot as plt
import pandas as pd
from scipy import stats

from ..aggregation import sprint_velocity
from ..chart_styling_utils import apply_sprint_axis_styling, save_chart_with_styling
from ..trend import sprint_metrics_from_velocity, velocity_trend, velocity_trend_frame
from .base_calculator import BaseCalculator

logger = logging.getLogger(__name__)


class VelocityTrendCalculator(BaseCalculator):
    """Compare each sprint's velocity with the sprint before it, in order of
    sprint start date.

    The first sprint has no previous velocity or change. Data is written to
    the files in `velocity_trend_data` and a line chart, with a fitted trend
    line, to `velocity_trend_chart` with title `velocity_trend_chart_title`.
    """

    report_name = "velocity trend"
    data_setting = "velocity_trend_data"

    def run(self):
        velocity = sprint_velocity(self.snapshot.tasks, self.snapshot.sprints)
        metrics = sprint_metrics_from_velocity(velocity)

        logger.debug("Calculating velocity trend over %d sprint(s)", len(metrics))

        return velocity_trend_frame(velocity_trend(metrics))

    def write_charts(self, data):
        output_file = self.settings.get("velocity_trend_chart")
        if not output_file:
            logger.debug("No output file specified for velocity trend chart")
            return

        if self.check_chart_data_empty(data, "velocity trend"):
            return

        chart_data = data.copy()
        chart_data["position"] = range(len(chart_data.index))
        chart_data["current_velocity"] = chart_data["current_velocity"].astype("int64")

        fig, ax = plt.subplots()

        if self.settings.get("velocity_trend_chart_title"):
            ax.set_title(self.settings["velocity_trend_chart_title"])

        ax.plot(chart_data["position"], chart_data["current_velocity"], marker="o")

        for x, y, change in zip(
            chart_data["position"],
            chart_data["current_velocity"],
            chart_data["velocity_change"],
        ):
            label = f"{y:.0f}"
            if not pd.isna(change):
                label = f"{label} ({change:+.0f})"
            ax.annotate(
                label,
                xy=(x, y),
                xytext=(0, 5),
                textcoords="offset points",
                ha="center",
                va="bottom",
                fontsize="x-small",
            )

        # A trend line needs at least two sprints
        if len(chart_data.index) > 1:
            slope, intercept, _, _, _ = stats.linregress(
                chart_data["position"], chart_data["current_velocity"]
            )
            chart_data["fitted"] = slope * chart_data["position"] + intercept
            ax.plot(chart_data["position"], chart_data["fitted"], "--", linewidth=2)

        _, top = ax.get_ylim()
        ax.set_ylim(0, top + 1)

        apply_sprint_axis_styling(ax, chart_data["sprint_name"])
        save_chart_with_styling(fig, output_file, "velocity trend")
