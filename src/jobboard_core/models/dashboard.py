"""Session principal, query candidates, and the aggregated dashboard bundle."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from jobboard_core.errors import ErrorInfo, ErrorKind
from jobboard_core.models.entities import (
    Account,
    Application,
    CanonicalRole,
    FavoriteEntry,
    JobPosting,
    Meeting,
)

EntitySet = Literal["postings", "applications", "meetings", "favorites"]

ENTITY_SETS: tuple[str, ...] = ("postings", "applications", "meetings", "favorites")


class Principal(BaseModel):
    """Authenticated account identity supplied by the session provider."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class FilterSpec(BaseModel):
    """One store filter: field op value. Values "$principal" and "$now" are placeholders."""

    field: str
    op: str = "=="
    value: Any = None


class OrderSpec(BaseModel):
    field: str
    direction: Literal["asc", "desc"] = "asc"


class QueryCandidate(BaseModel):
    """One (collection, filters) pair tried in a fallback chain."""

    collection: str
    filters: list[FilterSpec] = Field(default_factory=list)
    order: Optional[OrderSpec] = None
    limit: Optional[int] = None


class FetchResult(BaseModel):
    """Successful fallback query: normalized items and the collection that produced them."""

    entity_set: str
    items: list[Any] = Field(default_factory=list)
    source: str
    attempted: list[str] = Field(default_factory=list)
    dropped: int = Field(default=0, description="Malformed records skipped")


class SourceFailure(BaseModel):
    """
    Every candidate of one entity set failed or came back empty.
    answered lists candidates that responded successfully with no usable rows.
    """

    entity_set: str
    attempted: list[str] = Field(default_factory=list)
    last_error: Optional[ErrorInfo] = None
    errors: list[ErrorInfo] = Field(default_factory=list)
    answered: list[str] = Field(default_factory=list)

    @property
    def exhausted(self) -> bool:
        """True when no candidate answered; the set could not be loaded at all."""
        return not self.answered and self.last_error is not None

    @property
    def failed(self) -> bool:
        """True when any candidate raised; an empty set is only legitimate when none did."""
        return bool(self.errors)

    @property
    def cancelled(self) -> bool:
        return self.last_error is not None and self.last_error.kind is ErrorKind.CANCELLED


class DashboardBundle(BaseModel):
    """Everything a role-specific dashboard renders. Every list is present, possibly empty."""

    account: Account
    role: CanonicalRole
    postings: list[JobPosting] = Field(default_factory=list)
    applications: list[Application] = Field(default_factory=list)
    meetings: list[Meeting] = Field(default_factory=list)
    favorites: list[FavoriteEntry] = Field(default_factory=list)
    partial_failures: list[SourceFailure] = Field(default_factory=list)
    sources: dict[str, str] = Field(default_factory=dict)
    profile_completion: int = 0

    def failure_for(self, entity_set: str) -> Optional[SourceFailure]:
        for failure in self.partial_failures:
            if failure.entity_set == entity_set:
                return failure
        return None

