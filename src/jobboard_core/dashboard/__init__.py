"""Role-specific dashboard assembly."""

from jobboard_core.dashboard.aggregator import DashboardAggregator, newest_first, synthesize_account
from jobboard_core.dashboard.completeness import profile_completion

__all__ = ["DashboardAggregator", "newest_first", "profile_completion", "synthesize_account"]
