"""Re-export individual model modules for easy imports."""

from .member import MemberIn, GoalIn, MetricIn
from .dashboard import MetricStat, GoalEntry, DashboardSummary

__all__ = [
    "MemberIn",
    "GoalIn",
    "MetricIn",
    "MetricStat",
    "GoalEntry",
    "DashboardSummary",
]
