"""Field tables per entity kind: canonical key, aliases, coercion, default."""

from typing import Any, Callable, Optional, Sequence

from jobboard_core.mapping import aliases as a
from jobboard_core.mapping.fields import FieldMapper, FieldSpec

from .parsers import (
    normalize_application_status,
    normalize_favorite_kind,
    normalize_location_type,
    normalize_meeting_status,
    normalize_status,
    parse_timestamp,
    to_bool,
    to_mapping,
    to_number,
    to_record_list,
    to_string_list,
    to_text,
)


def _spec(
    attr: str,
    names: Sequence[str],
    coerce: Optional[Callable[[Any], Any]] = to_text,
    default: Any = None,
    default_factory: Optional[Callable[[], Any]] = None,
) -> FieldSpec:
    """First name is the canonical key, the rest are aliases in lookup order."""
    return FieldSpec(
        attr=attr,
        key=names[0],
        aliases=tuple(names[1:]),
        coerce=coerce,
        default=default,
        default_factory=default_factory,
    )


ID_SPEC = _spec("id", ("id", *a.ID_ALIASES))

ACCOUNT_FIELDS = FieldMapper(
    (
        ID_SPEC,
        _spec("email", ("email", *a.EMAIL_ALIASES), default=""),
        _spec("display_name", ("displayName", *a.DISPLAY_NAME_ALIASES), default=""),
        _spec("phone_number", ("phoneNumber", *a.PHONE_ALIASES)),
        _spec("photo_url", ("photoUrl", *a.PHOTO_ALIASES)),
        _spec("created_at", ("createdAt", *a.CREATED_AT_ALIASES), parse_timestamp),
    )
)

# Role keys are read by RoleResolver, never carried into extra
ACCOUNT_ROLE_KEYS = (a.USER_TYPE_KEY, a.ROLE_KEY)

JOB_SEEKER_PROFILE_FIELDS = FieldMapper(
    (
        _spec("skills", a.SKILLS_ALIASES, to_string_list, default_factory=list),
        _spec("availability", a.AVAILABILITY_ALIASES, default=""),
        _spec("cv", a.CV_ALIASES),
        _spec("detailed_cv", a.DETAILED_CV_ALIASES, to_mapping),
        _spec("experience", a.EXPERIENCE_ALIASES, to_record_list, default_factory=list),
        _spec("education", a.EDUCATION_ALIASES, to_record_list, default_factory=list),
        _spec("linkedin", a.LINKEDIN_ALIASES),
        _spec("portfolio", a.PORTFOLIO_ALIASES),
        _spec("cover_letter", a.COVER_LETTER_ALIASES),
        _spec("is_available_for_work", a.AVAILABLE_FOR_WORK_ALIASES, to_bool, default=True),
    )
)

RECRUITER_PROFILE_FIELDS = FieldMapper(
    (
        _spec("company_name", a.COMPANY_NAME_ALIASES, default=""),
        _spec("company", a.COMPANY_ALIASES, default=""),
        _spec("company_website", a.COMPANY_WEBSITE_ALIASES),
        _spec("company_description", a.COMPANY_DESCRIPTION_ALIASES),
        _spec("company_logo", a.COMPANY_LOGO_ALIASES),
        _spec("position", a.POSITION_ALIASES),
        _spec("kvk_number", a.KVK_ALIASES),
        _spec("industry", a.INDUSTRY_ALIASES),
    )
)

ADDRESS_FIELDS = FieldMapper(
    (
        _spec("street", a.STREET_ALIASES),
        _spec("house_number", a.HOUSE_NUMBER_ALIASES),
        _spec("postal_code", a.POSTAL_CODE_ALIASES),
        _spec("city", a.CITY_ALIASES),
        _spec("country", a.COUNTRY_ALIASES),
    )
)

JOB_FIELDS = FieldMapper(
    (
        ID_SPEC,
        _spec("title", ("title", *a.TITLE_ALIASES), default=""),
        _spec("company", ("company", *a.JOB_COMPANY_ALIASES), default=""),
        _spec("location", ("location", *a.LOCATION_ALIASES), default=""),
        _spec("description", ("description", *a.DESCRIPTION_ALIASES), default=""),
        _spec("salary", ("salary", *a.SALARY_ALIASES)),
        _spec("status", ("status", *a.STATUS_ALIASES), normalize_status, default="active"),
        _spec("is_full_time", ("isFullTime", *a.FULL_TIME_ALIASES), to_bool),
        _spec("is_remote", ("isRemote", *a.REMOTE_ALIASES), to_bool),
        _spec("requirements", ("requirements", *a.REQUIREMENTS_ALIASES)),
        _spec("recruiter_id", ("recruiterId", *a.RECRUITER_ID_ALIASES)),
        _spec("created_at", ("createdAt", *a.CREATED_AT_ALIASES, "datePosted"), parse_timestamp),
        _spec("updated_at", ("updatedAt", *a.UPDATED_AT_ALIASES), parse_timestamp),
    )
)

APPLICATION_FIELDS = FieldMapper(
    (
        ID_SPEC,
        _spec("job_id", ("jobId", *a.JOB_ID_ALIASES), default=""),
        _spec("job_title", ("jobTitle", *a.JOB_TITLE_ALIASES), default=""),
        _spec("applicant_id", ("applicantId", *a.APPLICANT_ID_ALIASES), default=""),
        _spec("applicant_name", ("applicantName", *a.APPLICANT_NAME_ALIASES), default=""),
        _spec("recruiter_id", ("recruiterId",)),
        _spec("company_name", ("companyName", *a.APPLICATION_COMPANY_ALIASES), default=""),
        _spec("status", ("status",), normalize_application_status, default="pending"),
        _spec("applied_at", ("appliedAt", "applicationDate", *a.APPLIED_AT_ALIASES), parse_timestamp),
        _spec("motivation_letter", ("motivationLetter", *a.MOTIVATION_ALIASES), default=""),
        _spec("cv_url", ("cvUrl", *a.CV_URL_ALIASES)),
        _spec("cv_file_size", ("cvFileSize", *a.CV_FILE_SIZE_ALIASES), to_number),
        _spec("email", ("email", *a.EMAIL_ALIASES)),
        _spec("phone_number", ("phoneNumber", "phone", "telefoon")),
        _spec("location", ("location", "locatie")),
        _spec("notes", ("notes", "notities", "additionalNotes"), default=""),
    )
)

MEETING_FIELDS = FieldMapper(
    (
        ID_SPEC,
        _spec("title", ("title", *a.MEETING_TITLE_ALIASES), default=""),
        _spec("candidate_id", ("candidateId", *a.CANDIDATE_ID_ALIASES)),
        _spec("candidate_name", ("candidateName", *a.CANDIDATE_NAME_ALIASES), default=""),
        _spec("recruiter_id", ("recruiterId", "organizerId")),
        _spec("job_id", ("jobId", "vacatureId")),
        _spec("starts_at", ("startsAt", *a.STARTS_AT_ALIASES), parse_timestamp),
        _spec("ends_at", ("endsAt", *a.ENDS_AT_ALIASES), parse_timestamp),
        _spec("duration_minutes", ("durationMinutes", *a.DURATION_ALIASES), to_number),
        _spec("location_type", ("locationType", *a.LOCATION_TYPE_ALIASES), normalize_location_type, default="online"),
        _spec("location", ("location", "locatie", "adres")),
        _spec("meeting_link", ("meetingLink", *a.MEETING_LINK_ALIASES)),
        _spec("status", ("status",), normalize_meeting_status, default="scheduled"),
        _spec("notes", ("notes", *a.NOTES_ALIASES), default=""),
    )
)

FAVORITE_FIELDS = FieldMapper(
    (
        ID_SPEC,
        _spec("owner_id", ("ownerId", *a.OWNER_ID_ALIASES), default=""),
        _spec("created_at", ("createdAt", *a.CREATED_AT_ALIASES), parse_timestamp),
        _spec("target_id", ("targetId", *a.FAVORITE_GENERIC_TARGET_KEYS)),
        _spec("target_kind", ("targetKind", *a.FAVORITE_KIND_KEYS), normalize_favorite_kind),
        _spec("job_target", a.FAVORITE_JOB_TARGET_KEYS),
        _spec("candidate_target", a.FAVORITE_CANDIDATE_TARGET_KEYS),
        _spec("job", (a.FAVORITE_JOB_SNAPSHOT_KEY,), to_mapping),
        _spec("candidate", (a.FAVORITE_CANDIDATE_SNAPSHOT_KEY,), to_mapping),
    )
)
