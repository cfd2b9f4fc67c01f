"""Unit tests for RoleResolver and the ordered role rules."""

import pytest

from jobboard_core.models.entities import CanonicalRole
from jobboard_core.models.raw import RawRecord
from jobboard_core.roles import (
    ROLE_RULES,
    RoleContext,
    RoleResolver,
    RoleRule,
    first_match,
    normalize_role_value,
    resolve_role,
)
from jobboard_core.roles.resolver import DEFAULT_RULE

JOB_SEEKER = CanonicalRole.JOB_SEEKER
RECRUITER = CanonicalRole.RECRUITER


class TestNormalizeRoleValue:
    """Tests for role synonym normalization."""

    @pytest.mark.parametrize("value", ["werkzoekende", "jobseeker", "job_seeker", "job-seeker", " JobSeeker ", "WERKZOEKENDE"])
    def test_job_seeker_synonyms(self, value: str) -> None:
        """Trimmed, case-folded job seeker synonyms map to JOB_SEEKER."""
        assert normalize_role_value(value) is JOB_SEEKER

    @pytest.mark.parametrize("value", ["recruiter", "Recruiter", " RECRUITER "])
    def test_recruiter_synonyms(self, value: str) -> None:
        """Recruiter in any case maps to RECRUITER."""
        assert normalize_role_value(value) is RECRUITER

    @pytest.mark.parametrize("value", ["admin", "", None, 1, ["recruiter"]])
    def test_unrecognized_values(self, value) -> None:
        """Unknown or non-string values do not match."""
        assert normalize_role_value(value) is None


class TestRulePrecedence:
    """Each step of the precedence chain, pinned by removing the step above it."""

    def test_user_type_beats_role(self) -> None:
        """userType decides before role."""
        decision = RoleResolver().explain({"userType": "werkzoekende", "role": "recruiter"})
        assert decision.role is JOB_SEEKER
        assert decision.rule == "user_type"

    def test_role_when_user_type_unrecognized(self) -> None:
        """Unrecognized userType falls through to role."""
        decision = RoleResolver().explain({"userType": "admin", "role": "recruiter", "profile": {"userType": "jobseeker"}})
        assert decision.role is RECRUITER
        assert decision.rule == "role"

    def test_profile_user_type_beats_hint(self) -> None:
        """profile.userType decides before the session hint."""
        decision = RoleResolver().explain({"profile": {"userType": "recruiter"}}, "jobseeker")
        assert decision.role is RECRUITER
        assert decision.rule == "profile_user_type"

    def test_hint_beats_structural_markers(self) -> None:
        """Session hint decides before job seeker markers."""
        decision = RoleResolver().explain({"werkervaring": [{"functie": "Dev"}]}, "recruiter")
        assert decision.role is RECRUITER
        assert decision.rule == "session_hint"

    def test_job_seeker_markers_beat_recruiter_markers(self) -> None:
        """A CV structure wins over a company name."""
        decision = RoleResolver().explain({"cv": "https://cdn/cv.pdf", "companyName": "Acme"})
        assert decision.role is JOB_SEEKER
        assert decision.rule == "job_seeker_markers"

    def test_recruiter_markers_at_any_depth(self) -> None:
        """kvkNumber nested deep in the record marks a recruiter."""
        decision = RoleResolver().explain({"settings": {"billing": {"kvkNumber": "12345678"}}})
        assert decision.role is RECRUITER
        assert decision.rule == "recruiter_markers"

    def test_default_when_no_signal(self) -> None:
        """No signal at all -> JOB_SEEKER by the default rule."""
        decision = RoleResolver().explain({"email": "a@b.nl"})
        assert decision.role is JOB_SEEKER
        assert decision.rule == DEFAULT_RULE

    def test_rule_table_order(self) -> None:
        """Rule names appear in precedence order."""
        names = [r.name for r in ROLE_RULES]
        assert names == [
            "user_type",
            "user_type",
            "role",
            "role",
            "profile_user_type",
            "profile_user_type",
            "session_hint",
            "session_hint",
            "job_seeker_markers",
            "recruiter_markers",
        ]


class TestStructuralMarkers:
    """Tests for the job seeker and recruiter structural markers."""

    @pytest.mark.parametrize(
        "record",
        [
            {"detailedCV": {"opleiding": "HBO"}},
            {"cvUrl": "https://cdn/cv.pdf"},
            {"skills": ["python"]},
            {"profile": {"experience": [{"role": "dev"}]}},
            {"detailedCV": {"werkervaring": [{"functie": "dev"}]}},
            {"profile": {"detailedCV": {"education": [{"school": "UvA"}]}}},
        ],
    )
    def test_job_seeker_markers(self, record: dict) -> None:
        """CV structures and non-empty history arrays mark a job seeker."""
        assert RoleResolver().explain(record).rule == "job_seeker_markers"

    def test_empty_arrays_are_not_markers(self) -> None:
        """Empty work history does not count."""
        assert RoleResolver().explain({"werkervaring": [], "skills": []}).rule == DEFAULT_RULE

    def test_empty_company_name_is_not_a_marker(self) -> None:
        """A blank companyName does not make a recruiter."""
        assert RoleResolver().explain({"companyName": ""}).rule == DEFAULT_RULE

    @pytest.mark.parametrize("key", ["companyName", "kvkNumber", "kvk", "kvkNummer", "companyDescription"])
    def test_recruiter_marker_keys(self, key: str) -> None:
        """Each recruiter marker key counts with a non-empty value."""
        assert resolve_role({"profile": {key: "x"}}) is RECRUITER


class TestResolveRole:
    """Totality, determinism and scenarios."""

    def test_total_on_none(self) -> None:
        """resolve_role(None, None) still returns a role."""
        assert resolve_role(None, None) is JOB_SEEKER

    def test_deterministic(self, recruiter_record: dict) -> None:
        """Same input gives the same role every time."""
        results = {resolve_role(recruiter_record, "jobseeker") for _ in range(5)}
        assert results == {RECRUITER}

    @pytest.mark.parametrize(
        ("record", "expected"),
        [
            ({"role": "jobseeker"}, JOB_SEEKER),
            ({"userType": "Recruiter"}, RECRUITER),
            ({"werkervaring": [{"functie": "Kok"}]}, JOB_SEEKER),
            ({}, JOB_SEEKER),
        ],
    )
    def test_scenarios(self, record: dict, expected: CanonicalRole) -> None:
        """Typical stored shapes resolve as expected."""
        assert resolve_role(record) is expected

    def test_hint_only(self) -> None:
        """A hint alone decides for an empty record."""
        assert resolve_role({}, "Recruiter") is RECRUITER

    def test_configurable_default(self) -> None:
        """The default role is a constructor argument."""
        assert RoleResolver(default=RECRUITER).resolve({}) is RECRUITER

    def test_fixture_records(self, job_seeker_record: dict, recruiter_record: dict) -> None:
        """Fixture records resolve to their roles."""
        assert resolve_role(job_seeker_record) is JOB_SEEKER
        assert resolve_role(recruiter_record) is RECRUITER


class TestFirstMatch:
    """Tests for the generic first-match evaluator."""

    def test_custom_rules(self) -> None:
        """first_match works over any rule table."""
        rules = (
            RoleRule("never", lambda ctx: False, RECRUITER),
            RoleRule("always", lambda ctx: True, RECRUITER),
        )
        decision = first_match(rules, RoleContext(record=RawRecord()), JOB_SEEKER)
        assert decision.role is RECRUITER
        assert decision.rule == "always"

    def test_empty_rules_use_default(self) -> None:
        """No rules -> default."""
        decision = first_match((), RoleContext(record=RawRecord()), RECRUITER)
        assert decision.rule == DEFAULT_RULE
