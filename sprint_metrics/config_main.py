import logging

from .calculators.bug_ratio import BugRatioCalculator
from .calculators.cleaned_tasks import CleanedTasksCalculator
from .calculators.developer_ranking import DeveloperRankingCalculator
from .calculators.urgent_issues import UrgentIssuesCalculator
from .calculators.velocity import VelocityCalculator
from .calculators.velocity_trend import VelocityTrendCalculator
from .calculators.workload import WorkloadCalculator

CALCULATORS = (
    CleanedTasksCalculator,
    VelocityCalculator,
    BugRatioCalculator,
    WorkloadCalculator,
    VelocityTrendCalculator,
    UrgentIssuesCalculator,
    DeveloperRankingCalculator,
)

logger = logging.getLogger(__name__)
