"""Developer ranking calculator for Sprint Metrics."""

import logging

from ..ranking import developer_ranking
from .base_calculator import BaseCalculator

logger = logging.getLogger(__name__)


class DeveloperRankingCalculator(BaseCalculator):
    """Rank assignees by the story points of their Done tasks, using
    competition ranking (tied developers share a rank and the next rank is
    skipped).

    Points are summed as recorded, without counting missing points as zero;
    an assignee with no recorded points on any Done task is not ranked.

    Written to the files listed in `developer_ranking_data`.
    """

    report_name = "developer ranking"
    data_setting = "developer_ranking_data"

    def run(self):
        return developer_ranking(self.snapshot.tasks)
