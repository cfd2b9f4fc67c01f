"""Canonical entities produced by RecordNormalizer."""

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from jobboard_core.models.raw import RawRecord


class CanonicalRole(str, Enum):
    """Exactly one per account; resolution always terminates in one of these."""

    JOB_SEEKER = "jobseeker"
    RECRUITER = "recruiter"


class EntityKind(str, Enum):
    """Record kinds RecordNormalizer understands."""

    ACCOUNT = "account"
    JOB = "job"
    APPLICATION = "application"
    MEETING = "meeting"
    FAVORITE = "favorite"


class CanonicalEntity(BaseModel):
    """
    Base for canonical value types.
    Field names are snake_case; the canonical raw form (to_record) uses camelCase keys.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    # Keys excluded from to_record() in addition to extra/source_collection
    _record_exclude: ClassVar[frozenset[str]] = frozenset()

    extra: dict[str, Any] = Field(default_factory=dict, description="Unrecognized source keys")
    source_collection: Optional[str] = Field(
        default=None,
        description="Provenance tag: collection that produced this entity (diagnostic only)",
    )

    def to_record(self) -> RawRecord:
        """Canonical raw form; normalizing it again yields an equal entity."""
        data: dict[str, Any] = dict(self.extra)
        skip = {"extra", "source_collection"} | self._record_exclude
        for name, info in type(self).model_fields.items():
            if name in skip:
                continue
            data[info.alias or name] = _record_value(getattr(self, name))
        return RawRecord(data=data)


def _record_value(value: Any) -> Any:
    if isinstance(value, CanonicalEntity):
        return value.to_record().data
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_record_value(v) for v in value]
    if isinstance(value, dict):
        return {k: _record_value(v) for k, v in value.items()}
    return value


class AddressFields(CanonicalEntity):
    """Postal address lifted from flat account fields into a nested structure."""

    street: Optional[str] = None
    house_number: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    def is_empty(self) -> bool:
        return not any([self.street, self.house_number, self.postal_code, self.city, self.country])


class JobSeekerProfile(CanonicalEntity):
    _record_exclude: ClassVar[frozenset[str]] = frozenset({"kind"})

    kind: Literal["jobseeker"] = "jobseeker"
    skills: list[str] = Field(default_factory=list)
    availability: str = ""
    cv: Optional[str] = None
    detailed_cv: Optional[dict[str, Any]] = Field(default=None, alias="detailedCV")
    experience: list[Any] = Field(default_factory=list)
    education: list[Any] = Field(default_factory=list)
    linkedin: Optional[str] = None
    portfolio: Optional[str] = None
    cover_letter: Optional[str] = None
    is_available_for_work: bool = True


class RecruiterProfile(CanonicalEntity):
    _record_exclude: ClassVar[frozenset[str]] = frozenset({"kind"})

    kind: Literal["recruiter"] = "recruiter"
    company_name: str = ""
    company: str = ""
    company_website: Optional[str] = None
    company_description: Optional[str] = None
    company_logo: Optional[str] = None
    position: Optional[str] = None
    kvk_number: Optional[str] = None
    industry: Optional[str] = None


RoleProfile = Union[JobSeekerProfile, RecruiterProfile]


class Account(CanonicalEntity):
    """Canonical account. profile's variant always matches role."""

    id: str
    email: str = ""
    role: CanonicalRole
    display_name: str = ""
    phone_number: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: Optional[datetime] = None
    profile: RoleProfile = Field(..., discriminator="kind")
    address: AddressFields = Field(default_factory=AddressFields)

    @model_validator(mode="after")
    def _profile_matches_role(self) -> "Account":
        if self.profile.kind != self.role.value:
            raise ValueError(f"profile kind {self.profile.kind!r} does not match role {self.role.value!r}")
        return self

    @property
    def is_recruiter(self) -> bool:
        return self.role is CanonicalRole.RECRUITER


class JobPosting(CanonicalEntity):
    id: str
    title: str = ""
    company: str = ""
    location: str = ""
    description: str = ""
    salary: Optional[str] = None
    status: str = "active"
    is_full_time: Optional[bool] = None
    is_remote: Optional[bool] = None
    requirements: Optional[str] = None
    recruiter_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Application(CanonicalEntity):
    id: str
    job_id: str = ""
    job_title: str = ""
    applicant_id: str = ""
    applicant_name: str = ""
    recruiter_id: Optional[str] = None
    company_name: str = ""
    status: str = "pending"
    applied_at: Optional[datetime] = None
    motivation_letter: str = ""
    cv_url: Optional[str] = None
    cv_file_size: Optional[float] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    location: Optional[str] = None
    notes: str = ""


class Meeting(CanonicalEntity):
    id: str
    title: str = ""
    candidate_id: Optional[str] = None
    candidate_name: str = ""
    recruiter_id: Optional[str] = None
    job_id: Optional[str] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    duration_minutes: Optional[float] = None
    location_type: str = "online"  # online | onsite
    location: Optional[str] = None
    meeting_link: Optional[str] = None
    status: str = "scheduled"
    notes: str = ""


class FavoriteEntry(CanonicalEntity):
    """
    Favorite pointing at a job or a candidate account.
    job/candidate hold the embedded snapshot until enrichment replaces them.
    """

    id: str
    owner_id: str = ""
    target_id: str = ""
    target_kind: Literal["job", "candidate"] = "job"
    created_at: Optional[datetime] = None
    job: Optional[JobPosting] = None
    candidate: Optional[Account] = None


CanonicalEntityType = Union[Account, JobPosting, Application, Meeting, FavoriteEntry]
