"""Raw record -> canonical entity conversion for every supported kind."""

from typing import Any, Callable, Mapping, Optional

from jobboard_core.errors import MalformedRecordError
from jobboard_core.mapping import aliases as a
from jobboard_core.mapping.fields import FieldMapper, resolve
from jobboard_core.models.entities import (
    Account,
    AddressFields,
    Application,
    CanonicalEntity,
    CanonicalRole,
    EntityKind,
    FavoriteEntry,
    JobPosting,
    JobSeekerProfile,
    Meeting,
    RecruiterProfile,
)
from jobboard_core.models.raw import RawRecord
from jobboard_core.roles import RoleResolver

from .tables import (
    ACCOUNT_FIELDS,
    ACCOUNT_ROLE_KEYS,
    ADDRESS_FIELDS,
    APPLICATION_FIELDS,
    FAVORITE_FIELDS,
    JOB_FIELDS,
    JOB_SEEKER_PROFILE_FIELDS,
    MEETING_FIELDS,
    RECRUITER_PROFILE_FIELDS,
)


def _nested_extra(
    record: RawRecord,
    prefix: str,
    mappers: tuple[FieldMapper, ...],
    ignore: tuple[str, ...] = (),
) -> dict[str, Any]:
    """Keys of the nested mapping record[prefix] that none of the tables read."""
    nested = record.get(prefix)
    if not isinstance(nested, Mapping):
        return {}
    known = {
        name.split(".", 1)[1]
        for mapper in mappers
        for spec in mapper.specs
        for name in spec.names()
        if name.startswith(prefix + ".")
    }
    known.update(ignore)
    return {k: v for k, v in nested.items() if k.split(".", 1)[0] not in known}


def _require_id(kind: EntityKind, values: dict[str, Any]) -> str:
    entity_id = values.get("id")
    if not entity_id or not str(entity_id).strip():
        raise MalformedRecordError(kind.value, "no extractable id")
    return str(entity_id).strip()


class RecordNormalizer:
    """
    Converts raw store records into canonical entities.
    Missing fields take kind-specific defaults; unknown keys land in extra.
    Only a record with no usable id (or favorite target) raises MalformedRecordError.
    """

    def __init__(self, role_resolver: Optional[RoleResolver] = None):
        self.role_resolver = role_resolver or RoleResolver()
        self._dispatch: dict[EntityKind, Callable[..., CanonicalEntity]] = {
            EntityKind.ACCOUNT: self.normalize_account,
            EntityKind.JOB: self.normalize_job,
            EntityKind.APPLICATION: self.normalize_application,
            EntityKind.MEETING: self.normalize_meeting,
            EntityKind.FAVORITE: self.normalize_favorite,
        }

    def normalize(
        self,
        kind: "EntityKind | str",
        record: "RawRecord | Mapping[str, Any]",
        source: Optional[str] = None,
    ) -> CanonicalEntity:
        """Dispatch on kind; source becomes the provenance tag."""
        handler = self._dispatch[EntityKind(kind)]
        return handler(RawRecord.of(record), source=source)

    def normalize_account(
        self,
        record: "RawRecord | Mapping[str, Any]",
        source: Optional[str] = None,
        *,
        role: Optional[CanonicalRole] = None,
        session_hint: Optional[str] = None,
    ) -> Account:
        raw = RawRecord.of(record)
        values = ACCOUNT_FIELDS.apply(raw)
        account_id = _require_id(EntityKind.ACCOUNT, values)
        resolved = role or self.role_resolver.resolve(raw, session_hint)

        if not values["display_name"]:
            first = resolve(raw, "firstName", ("voornaam",))
            last = resolve(raw, "lastName", ("achternaam",))
            if first or last:
                values["display_name"] = " ".join(str(p).strip() for p in (first, last) if p)

        if resolved is CanonicalRole.RECRUITER:
            profile_mapper: FieldMapper = RECRUITER_PROFILE_FIELDS
            profile = self._recruiter_profile(raw)
        else:
            profile_mapper = JOB_SEEKER_PROFILE_FIELDS
            profile = self._job_seeker_profile(raw)

        address = AddressFields(
            **ADDRESS_FIELDS.apply(raw),
            extra=_nested_extra(raw, "address", (ADDRESS_FIELDS,)),
        )

        consumed = (
            ACCOUNT_FIELDS.consumed_keys()
            | profile_mapper.consumed_keys()
            | ADDRESS_FIELDS.consumed_keys()
            | set(ACCOUNT_ROLE_KEYS)
        )
        extra = {k: v for k, v in raw.data.items() if k not in consumed}

        return Account(
            id=account_id,
            email=values["email"],
            role=resolved,
            display_name=values["display_name"],
            phone_number=values["phone_number"],
            photo_url=values["photo_url"],
            created_at=values["created_at"],
            profile=profile,
            address=address,
            extra=extra,
            source_collection=source,
        )

    def _job_seeker_profile(self, raw: RawRecord) -> JobSeekerProfile:
        values = JOB_SEEKER_PROFILE_FIELDS.apply(raw)
        # A structured CV stored under "cv" moves to detailed_cv
        cv_raw = resolve(raw, a.CV_ALIASES[0], a.CV_ALIASES[1:])
        if isinstance(cv_raw, Mapping) and values["detailed_cv"] is None:
            values["detailed_cv"] = dict(cv_raw)
        return JobSeekerProfile(
            **values,
            extra=_nested_extra(raw, "profile", (JOB_SEEKER_PROFILE_FIELDS, ACCOUNT_FIELDS), ignore=("userType",)),
        )

    def _recruiter_profile(self, raw: RawRecord) -> RecruiterProfile:
        values = RECRUITER_PROFILE_FIELDS.apply(raw)
        if values["company_name"] and not values["company"]:
            values["company"] = values["company_name"]
        elif values["company"] and not values["company_name"]:
            values["company_name"] = values["company"]
        return RecruiterProfile(
            **values,
            extra=_nested_extra(raw, "profile", (RECRUITER_PROFILE_FIELDS, ACCOUNT_FIELDS), ignore=("userType",)),
        )

    def normalize_job(self, record: "RawRecord | Mapping[str, Any]", source: Optional[str] = None) -> JobPosting:
        raw = RawRecord.of(record)
        values = JOB_FIELDS.apply(raw)
        values["id"] = _require_id(EntityKind.JOB, values)
        return JobPosting(**values, extra=JOB_FIELDS.extra(raw), source_collection=source)

    def normalize_application(
        self, record: "RawRecord | Mapping[str, Any]", source: Optional[str] = None
    ) -> Application:
        raw = RawRecord.of(record)
        values = APPLICATION_FIELDS.apply(raw)
        values["id"] = _require_id(EntityKind.APPLICATION, values)
        return Application(**values, extra=APPLICATION_FIELDS.extra(raw), source_collection=source)

    def normalize_meeting(self, record: "RawRecord | Mapping[str, Any]", source: Optional[str] = None) -> Meeting:
        raw = RawRecord.of(record)
        values = MEETING_FIELDS.apply(raw)
        values["id"] = _require_id(EntityKind.MEETING, values)
        return Meeting(**values, extra=MEETING_FIELDS.extra(raw), source_collection=source)

    def normalize_favorite(
        self, record: "RawRecord | Mapping[str, Any]", source: Optional[str] = None
    ) -> FavoriteEntry:
        """
        Target routing: explicit targetKind/type wins, then a job key, then a
        candidate key, then a generic target id (taken as a job), then the
        embedded snapshot's id.
        """
        raw = RawRecord.of(record)
        values = FAVORITE_FIELDS.apply(raw)
        favorite_id = _require_id(EntityKind.FAVORITE, values)

        kind = values["target_kind"]
        job_snapshot: Optional[dict[str, Any]] = values["job"]
        candidate_snapshot: Optional[dict[str, Any]] = values["candidate"]
        target_id = values["target_id"]

        if kind == "job":
            target_id = target_id or values["job_target"]
        elif kind == "candidate":
            target_id = target_id or values["candidate_target"]
        elif values["job_target"]:
            kind, target_id = "job", values["job_target"]
        elif values["candidate_target"]:
            kind, target_id = "candidate", values["candidate_target"]
        elif target_id:
            kind = "job"
        elif job_snapshot and resolve(job_snapshot, "id", a.ID_ALIASES):
            kind, target_id = "job", str(resolve(job_snapshot, "id", a.ID_ALIASES))
        elif candidate_snapshot and resolve(candidate_snapshot, "id", a.ID_ALIASES):
            kind, target_id = "candidate", str(resolve(candidate_snapshot, "id", a.ID_ALIASES))

        if not kind or not target_id:
            raise MalformedRecordError(EntityKind.FAVORITE.value, f"favorite {favorite_id} has no target")

        job = None
        if job_snapshot:
            job = self.normalize_job({"id": target_id, **job_snapshot}, source=source)
        candidate = None
        if candidate_snapshot:
            candidate = self.normalize_account({"id": target_id, **candidate_snapshot}, source=source)

        return FavoriteEntry(
            id=favorite_id,
            owner_id=values["owner_id"],
            target_id=str(target_id),
            target_kind=kind,
            created_at=values["created_at"],
            job=job,
            candidate=candidate,
            extra=FAVORITE_FIELDS.extra(raw),
            source_collection=source,
        )


_default_normalizer = RecordNormalizer()


def normalize(
    kind: "EntityKind | str",
    record: "RawRecord | Mapping[str, Any]",
    source: Optional[str] = None,
) -> CanonicalEntity:
    """Normalize with the default RoleResolver."""
    return _default_normalizer.normalize(kind, record, source)
