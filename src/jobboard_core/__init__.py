"""Identity-role resolution and cross-schema dashboard reconciliation for the job board."""

from jobboard_core.cancellation import CancelToken
from jobboard_core.config import CoreSettings
from jobboard_core.models import CanonicalRole, DashboardBundle, Principal, RawRecord
from jobboard_core.normalize import normalize
from jobboard_core.roles import resolve_role
from jobboard_core.service import DashboardService, build_dashboard

__version__ = "0.1.0"

__all__ = [
    "CancelToken",
    "CanonicalRole",
    "CoreSettings",
    "DashboardBundle",
    "DashboardService",
    "Principal",
    "RawRecord",
    "build_dashboard",
    "normalize",
    "resolve_role",
]
