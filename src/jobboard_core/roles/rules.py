"""Role rules: ordered (predicate, role) pairs. The order is the precedence."""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from jobboard_core.mapping import aliases
from jobboard_core.models.entities import CanonicalRole
from jobboard_core.models.raw import RawRecord

_JOB_SEEKER_SYNONYMS = frozenset({"werkzoekende", "jobseeker", "job_seeker", "job-seeker"})
_RECRUITER_SYNONYMS = frozenset({"recruiter"})

# Guard against pathological nesting when scanning for structural markers
_MAX_SCAN_DEPTH = 8


@dataclass(frozen=True)
class RoleContext:
    """Inputs a rule may inspect: the raw account record and the caller's session hint."""

    record: RawRecord
    hint: Optional[str] = None


RolePredicate = Callable[[RoleContext], bool]


@dataclass(frozen=True)
class RoleRule:
    name: str
    predicate: RolePredicate
    role: CanonicalRole


def normalize_role_value(value: Any) -> Optional[CanonicalRole]:
    """Map a stored/hinted role string to a CanonicalRole; None when unrecognized."""
    if not isinstance(value, str):
        return None
    key = value.strip().casefold()
    if key in _JOB_SEEKER_SYNONYMS:
        return CanonicalRole.JOB_SEEKER
    if key in _RECRUITER_SYNONYMS:
        return CanonicalRole.RECRUITER
    return None


def _field_is(path: str, role: CanonicalRole) -> RolePredicate:
    def predicate(ctx: RoleContext) -> bool:
        return normalize_role_value(ctx.record.get_path(path)) is role

    predicate.__name__ = f"{path}_is_{role.value}"
    return predicate


def _hint_is(role: CanonicalRole) -> RolePredicate:
    def predicate(ctx: RoleContext) -> bool:
        return normalize_role_value(ctx.hint) is role

    predicate.__name__ = f"hint_is_{role.value}"
    return predicate


def _non_empty(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) > 0
    return True


def has_job_seeker_markers(ctx: RoleContext) -> bool:
    """
    CV structure present, or a non-empty work history / skills / education array,
    at the top level, under profile, or under detailedCV.
    """
    scopes: list[Mapping[str, Any]] = [ctx.record.data]
    for nested_key in ("profile", "detailedCV"):
        nested = ctx.record.get(nested_key)
        if isinstance(nested, Mapping):
            scopes.append(nested)
    profile = ctx.record.get("profile")
    if isinstance(profile, Mapping) and isinstance(profile.get("detailedCV"), Mapping):
        scopes.append(profile["detailedCV"])

    for scope in scopes:
        if any(_non_empty(scope.get(k)) for k in aliases.JOB_SEEKER_CV_KEYS):
            return True
        for key in aliases.JOB_SEEKER_ARRAY_KEYS:
            value = scope.get(key)
            if isinstance(value, (list, tuple)) and len(value) > 0:
                return True
    return False


def _contains_key(value: Any, keys: frozenset[str], depth: int = 0) -> bool:
    if depth > _MAX_SCAN_DEPTH:
        return False
    if isinstance(value, Mapping):
        for key, child in value.items():
            if key in keys and _non_empty(child):
                return True
            if _contains_key(child, keys, depth + 1):
                return True
    elif isinstance(value, (list, tuple)):
        return any(_contains_key(item, keys, depth + 1) for item in value)
    return False


def has_recruiter_markers(ctx: RoleContext) -> bool:
    """Company name, chamber-of-commerce number, or company description at any nesting level."""
    return _contains_key(ctx.record.data, frozenset(aliases.RECRUITER_MARKER_KEYS))


ROLE_RULES: tuple[RoleRule, ...] = (
    RoleRule("user_type", _field_is(aliases.USER_TYPE_KEY, CanonicalRole.JOB_SEEKER), CanonicalRole.JOB_SEEKER),
    RoleRule("user_type", _field_is(aliases.USER_TYPE_KEY, CanonicalRole.RECRUITER), CanonicalRole.RECRUITER),
    RoleRule("role", _field_is(aliases.ROLE_KEY, CanonicalRole.JOB_SEEKER), CanonicalRole.JOB_SEEKER),
    RoleRule("role", _field_is(aliases.ROLE_KEY, CanonicalRole.RECRUITER), CanonicalRole.RECRUITER),
    RoleRule(
        "profile_user_type",
        _field_is(aliases.PROFILE_USER_TYPE_KEY, CanonicalRole.JOB_SEEKER),
        CanonicalRole.JOB_SEEKER,
    ),
    RoleRule(
        "profile_user_type",
        _field_is(aliases.PROFILE_USER_TYPE_KEY, CanonicalRole.RECRUITER),
        CanonicalRole.RECRUITER,
    ),
    RoleRule("session_hint", _hint_is(CanonicalRole.JOB_SEEKER), CanonicalRole.JOB_SEEKER),
    RoleRule("session_hint", _hint_is(CanonicalRole.RECRUITER), CanonicalRole.RECRUITER),
    RoleRule("job_seeker_markers", has_job_seeker_markers, CanonicalRole.JOB_SEEKER),
    RoleRule("recruiter_markers", has_recruiter_markers, CanonicalRole.RECRUITER),
)
