"""Unit tests for raw records, canonical entities and dashboard models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from jobboard_core.errors import ErrorInfo, ErrorKind
from jobboard_core.models import (
    Account,
    CanonicalRole,
    DashboardBundle,
    JobPosting,
    JobSeekerProfile,
    RawRecord,
    RecruiterProfile,
    SourceFailure,
)


def _make_account(**kwargs) -> Account:
    defaults = {
        "id": "u1",
        "role": CanonicalRole.JOB_SEEKER,
        "profile": JobSeekerProfile(),
    }
    defaults.update(kwargs)
    return Account(**defaults)


class TestRawRecord:
    """Tests for RawRecord."""

    def test_of_wraps_mapping(self) -> None:
        """of() wraps a plain dict."""
        assert RawRecord.of({"a": 1}).get("a") == 1

    def test_of_none_is_empty(self) -> None:
        """of(None) is an empty record."""
        assert RawRecord.of(None).keys() == []

    def test_of_passes_record_through(self) -> None:
        """of() returns the same RawRecord instance."""
        record = RawRecord(data={"a": 1})
        assert RawRecord.of(record) is record

    def test_get_path(self) -> None:
        """Dotted lookup walks nested mappings."""
        record = RawRecord(data={"profile": {"detailedCV": {"opleiding": ["HBO"]}}})
        assert record.get_path("profile.detailedCV.opleiding") == ["HBO"]
        assert record.get_path("profile.missing") is None

    def test_has(self) -> None:
        """has() treats None values as absent."""
        record = RawRecord(data={"a": None, "b": 0})
        assert record.has("a") is False
        assert record.has("b") is True


class TestCanonicalEntities:
    """Tests for canonical entity invariants."""

    def test_profile_must_match_role(self) -> None:
        """A recruiter profile on a job seeker account is rejected."""
        with pytest.raises(ValidationError, match="does not match role"):
            _make_account(profile=RecruiterProfile())

    def test_accounts_are_frozen(self) -> None:
        """Canonical values cannot be mutated in place."""
        account = _make_account()
        with pytest.raises(ValidationError):
            account.email = "x@y.nl"

    def test_model_copy_produces_new_value(self) -> None:
        """Updates go through model_copy."""
        account = _make_account()
        updated = account.model_copy(update={"email": "x@y.nl"})
        assert updated.email == "x@y.nl"
        assert account.email == ""

    def test_is_recruiter(self) -> None:
        """is_recruiter reflects the role."""
        account = _make_account(role=CanonicalRole.RECRUITER, profile=RecruiterProfile(company_name="Acme"))
        assert account.is_recruiter is True

    def test_to_record_uses_camel_case_and_extra(self) -> None:
        """to_record emits canonical camelCase keys plus the extra bag."""
        job = JobPosting(
            id="j1",
            title="Chef",
            is_full_time=True,
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            extra={"legacyField": 1},
            source_collection="vacatures",
        )
        data = job.to_record().data
        assert data["isFullTime"] is True
        assert data["createdAt"] == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert data["legacyField"] == 1
        assert "sourceCollection" not in data
        assert "extra" not in data

    def test_to_record_nests_profile_without_kind(self) -> None:
        """Profile is emitted as a nested mapping without the variant tag."""
        account = _make_account(profile=JobSeekerProfile(skills=["SQL"], detailed_cv={"opleiding": []}))
        profile = account.to_record().data["profile"]
        assert profile["skills"] == ["SQL"]
        assert profile["detailedCV"] == {"opleiding": []}
        assert "kind" not in profile
        assert account.to_record().data["role"] == "jobseeker"


class TestDashboardModels:
    """Tests for SourceFailure and DashboardBundle."""

    def test_bundle_lists_default_empty(self) -> None:
        """Every list field defaults to an empty list."""
        bundle = DashboardBundle(account=_make_account(), role=CanonicalRole.JOB_SEEKER)
        assert bundle.postings == []
        assert bundle.applications == []
        assert bundle.meetings == []
        assert bundle.favorites == []
        assert bundle.partial_failures == []
        assert bundle.sources == {}

    def test_failure_for(self) -> None:
        """failure_for finds the failure tagged with an entity set."""
        failure = SourceFailure(entity_set="meetings", attempted=["meetings"])
        bundle = DashboardBundle(
            account=_make_account(),
            role=CanonicalRole.JOB_SEEKER,
            partial_failures=[failure],
        )
        assert bundle.failure_for("meetings") is failure
        assert bundle.failure_for("postings") is None

    def test_exhausted_requires_error_and_no_answer(self) -> None:
        """exhausted is true only when nothing answered and an error was seen."""
        error = ErrorInfo(kind=ErrorKind.UNAVAILABLE, message="down")
        assert SourceFailure(entity_set="x", last_error=error).exhausted is True
        assert SourceFailure(entity_set="x", last_error=error, answered=["b"]).exhausted is False
        assert SourceFailure(entity_set="x", answered=["b"]).exhausted is False

    def test_cancelled(self) -> None:
        """cancelled reflects a CANCELLED last error."""
        error = ErrorInfo(kind=ErrorKind.CANCELLED)
        assert SourceFailure(entity_set="x", last_error=error).cancelled is True
