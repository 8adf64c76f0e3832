"""Urgent issues audit calculator for Sprint Metrics."""

import logging

from ..audit import urgent_issues
from .base_calculator import BaseCalculator

logger = logging.getLogger(__name__)


class UrgentIssuesCalculator(BaseCalculator):
    """List tasks that need immediate attention: unassigned tasks, then bugs
    that are not done. A task matching both is listed twice.

    Written to the files listed in `urgent_issues_data`.
    """

    report_name = "urgent issues"
    data_setting = "urgent_issues_data"

    def run(self):
        data = urgent_issues(self.snapshot.tasks)
        if len(data.index) > 0:
            logger.info("%d urgent issue(s) need attention", len(data.index))
        return data
