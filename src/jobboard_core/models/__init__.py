"""Data models: raw records, canonical entities, and dashboard aggregates."""

from jobboard_core.models.dashboard import (
    DashboardBundle,
    FetchResult,
    FilterSpec,
    OrderSpec,
    Principal,
    QueryCandidate,
    SourceFailure,
)
from jobboard_core.models.entities import (
    Account,
    AddressFields,
    Application,
    CanonicalRole,
    EntityKind,
    FavoriteEntry,
    JobPosting,
    JobSeekerProfile,
    Meeting,
    RecruiterProfile,
)
from jobboard_core.models.raw import RawRecord

__all__ = [
    "Account",
    "AddressFields",
    "Application",
    "CanonicalRole",
    "DashboardBundle",
    "EntityKind",
    "FavoriteEntry",
    "FetchResult",
    "FilterSpec",
    "JobPosting",
    "JobSeekerProfile",
    "Meeting",
    "OrderSpec",
    "Principal",
    "QueryCandidate",
    "RawRecord",
    "RecruiterProfile",
    "SourceFailure",
]
