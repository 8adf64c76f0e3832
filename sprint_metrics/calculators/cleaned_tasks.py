"""Cleaned task listing calculator for Sprint Metrics."""

import logging

from ..normalize import cleaned_task_listing
from .base_calculator import BaseCalculator

logger = logging.getLogger(__name__)


class CleanedTasksCalculator(BaseCalculator):
    """List every task with its canonical type (`STORY`, `BUG` or `OTHER`),
    story points coalesced to 0, and status.

    Written to the files listed in `cleaned_tasks_data`.
    """

    report_name = "cleaned tasks"
    data_setting = "cleaned_tasks_data"

    def run(self):
        return cleaned_task_listing(self.snapshot.tasks)
