"""Pytest fixtures for jobboard-core tests."""

from datetime import datetime, timezone
from typing import Any

import pytest

from jobboard_core.models.dashboard import Principal
from jobboard_core.store import MemoryStore

FIXED_NOW = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed instant, for $now placeholders."""
    return lambda: FIXED_NOW


@pytest.fixture
def job_seeker_record() -> dict[str, Any]:
    """Legacy flat job seeker record with Dutch keys."""
    return {
        "uid": "js-1",
        "email": "anna@example.nl",
        "voornaam": "Anna",
        "achternaam": "de Vries",
        "telefoon": "0612345678",
        "werkervaring": [{"functie": "Developer", "bedrijf": "Acme"}],
        "vaardigheden": "Python, SQL",
        "straat": "Kerkstraat",
        "huisnummer": "12",
        "postcode": "1011AB",
        "plaats": "Amsterdam",
        "favoriteColor": "green",
    }


@pytest.fixture
def recruiter_record() -> dict[str, Any]:
    """Recruiter record with nested profile and flat company name."""
    return {
        "id": "rec-1",
        "email": "hr@bouwbedrijf.nl",
        "displayName": "Mark Jansen",
        "userType": "Recruiter",
        "companyName": "Bouwbedrijf BV",
        "profile": {"position": "HR manager", "kvkNumber": "12345678", "linkedinPage": "acme"},
        "city": "Utrecht",
        "postalCode": "3511AA",
    }


@pytest.fixture
def recruiter_principal() -> Principal:
    return Principal(id="rec-1", email="hr@bouwbedrijf.nl")


@pytest.fixture
def job_seeker_principal() -> Principal:
    return Principal(id="js-1", email="anna@example.nl")


@pytest.fixture
def recruiter_collections(recruiter_record: dict[str, Any], job_seeker_record: dict[str, Any]) -> dict[str, Any]:
    """Collections seen by the recruiter dashboard, spread across legacy and current names."""
    return {
        "users": [
            recruiter_record,
            {**job_seeker_record, "id": "js-1"},
            {"id": "rec-2", "userType": "recruiter", "companyName": "Other BV"},
        ],
        "jobs": [
            {"id": "job-1", "title": "Backend developer", "recruiterId": "rec-1", "createdAt": "2024-04-01T10:00:00Z"},
            {"id": "job-2", "titel": "Data engineer", "recruiterId": "rec-1", "createdAt": "2024-04-20T10:00:00Z"},
            {"id": "job-3", "title": "Someone else's job", "recruiterId": "rec-9"},
        ],
        "sollicitaties": [
            {
                "id": "app-1",
                "jobId": "job-1",
                "applicantId": "js-1",
                "recruiterId": "rec-1",
                "status": "in behandeling",
                "applicationDate": "2024-04-10T12:00:00Z",
            },
        ],
        "meetings": [
            {
                "id": "m-1",
                "title": "Intro call",
                "recruiterId": "rec-1",
                "candidateId": "js-1",
                "dateTime": "2024-05-02T10:00:00Z",
            },
            {
                "id": "m-old",
                "title": "Past call",
                "recruiterId": "rec-1",
                "dateTime": "2024-03-01T10:00:00Z",
            },
        ],
        "favorites": [
            {"id": "fav-1", "userId": "rec-1", "candidateId": "js-1"},
            {"id": "fav-2", "userId": "rec-1", "candidateId": "rec-2"},
            {"id": "fav-3", "userId": "rec-1", "candidateId": "ghost"},
        ],
    }


@pytest.fixture
def recruiter_store(recruiter_collections: dict[str, Any]) -> MemoryStore:
    return MemoryStore(recruiter_collections)


@pytest.fixture
def job_seeker_store(job_seeker_record: dict[str, Any]) -> MemoryStore:
    """Job seeker data living in the older collection names only."""
    return MemoryStore(
        {
            "users": [{**job_seeker_record, "id": "js-1"}],
            "jobs": [
                {"id": "job-1", "title": "Backend developer", "status": "active", "createdAt": "2024-04-01T10:00:00Z"},
                {"id": "job-2", "title": "Closed role", "status": "closed"},
            ],
            "sollicitaties": [{"id": "app-1", "userId": "js-1", "jobId": "job-1", "status": "nieuw"}],
            "calendar-events": [{"id": "ev-1", "attendeeId": "js-1", "onderwerp": "Gesprek", "start": 1714644000}],
            "favorites": [
                {"id": "fav-1", "userId": "js-1", "jobId": "job-1"},
                {"id": "fav-2", "userId": "js-1", "jobId": "job-deleted"},
            ],
        }
    )
