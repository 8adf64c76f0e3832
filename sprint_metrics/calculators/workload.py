"""Workload calculator for Sprint Metrics."""

import logging

from ..aggregation import workload_by_assignee
from .base_calculator import BaseCalculator

logger = logging.getLogger(__name__)


class WorkloadCalculator(BaseCalculator):
    """Count Done tasks and their story points per assignee, ordered by
    points delivered, highest first. Done tasks nobody is assigned to are
    grouped together.

    Written to the files listed in `workload_data`.
    """

    report_name = "workload"
    data_setting = "workload_data"

    def run(self):
        return workload_by_assignee(self.snapshot.tasks)
