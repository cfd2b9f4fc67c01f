"""Default fallback chains per role and entity set."""

from jobboard_core.models.dashboard import FilterSpec, OrderSpec, QueryCandidate
from jobboard_core.models.entities import CanonicalRole, EntityKind

PRINCIPAL = "$principal"
NOW = "$now"

# Entity set -> kind its rows normalize to
ENTITY_SET_KINDS: dict[str, EntityKind] = {
    "postings": EntityKind.JOB,
    "applications": EntityKind.APPLICATION,
    "meetings": EntityKind.MEETING,
    "favorites": EntityKind.FAVORITE,
}

ACCOUNT_COLLECTIONS: tuple[str, ...] = ("users", "accounts", "profiles")
JOB_COLLECTIONS: tuple[str, ...] = ("jobs", "postings", "vacatures")


def _owned_by(collection: str, field: str, **kwargs) -> QueryCandidate:
    return QueryCandidate(collection=collection, filters=[FilterSpec(field=field, value=PRINCIPAL)], **kwargs)


RECRUITER_CHAINS: dict[str, list[QueryCandidate]] = {
    "postings": [
        _owned_by("jobs", "recruiterId", limit=50),
        _owned_by("jobs", "userId", limit=50),
        _owned_by("postings", "recruiterId", limit=50),
    ],
    "applications": [
        _owned_by("sollicitaties", "recruiterId", order=OrderSpec(field="applicationDate", direction="desc")),
        _owned_by("applications", "recruiterId"),
        _owned_by("submissions", "recruiterId"),
    ],
    "meetings": [
        QueryCandidate(
            collection="meetings",
            filters=[
                FilterSpec(field="recruiterId", value=PRINCIPAL),
                FilterSpec(field="dateTime", op=">=", value=NOW),
            ],
            order=OrderSpec(field="dateTime", direction="asc"),
        ),
        _owned_by("calendar-events", "organizerId"),
    ],
    "favorites": [
        _owned_by("favorites", "userId"),
        _owned_by("favoriteCandidates", "recruiterId"),
    ],
}

JOB_SEEKER_CHAINS: dict[str, list[QueryCandidate]] = {
    "postings": [
        QueryCandidate(
            collection="jobs",
            filters=[FilterSpec(field="status", value="active")],
            order=OrderSpec(field="createdAt", direction="desc"),
            limit=20,
        ),
        QueryCandidate(collection="postings", filters=[FilterSpec(field="status", value="active")], limit=20),
    ],
    "applications": [
        _owned_by("applications", "userId"),
        _owned_by("sollicitaties", "userId"),
        _owned_by("submissions", "applicantId"),
    ],
    "meetings": [
        _owned_by("meetings", "candidateId"),
        _owned_by("calendar-events", "attendeeId"),
    ],
    "favorites": [
        _owned_by("favorites", "userId"),
        _owned_by("favoriteJobs", "userId"),
    ],
}


def default_chains(role: CanonicalRole) -> dict[str, list[QueryCandidate]]:
    """Fresh copies of the built-in chains for one role."""
    chains = RECRUITER_CHAINS if role is CanonicalRole.RECRUITER else JOB_SEEKER_CHAINS
    return {name: [c.model_copy(deep=True) for c in chain] for name, chain in chains.items()}
