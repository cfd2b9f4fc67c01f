"""Tests for DashboardService and StaticSession."""

import pytest

from jobboard_core import build_dashboard
from jobboard_core.config import CoreSettings
from jobboard_core.cancellation import CancelToken
from jobboard_core.errors import ErrorKind, NoActivePrincipal, StoreError
from jobboard_core.models import CanonicalRole, JobSeekerProfile, Principal, RecruiterProfile
from jobboard_core.service import DashboardService
from jobboard_core.session import StaticSession
from jobboard_core.store import MemoryStore


class TestStaticSession:
    """Tests for StaticSession."""

    @pytest.mark.asyncio
    async def test_records_take_precedence(self, recruiter_store: MemoryStore) -> None:
        """An explicit record is returned without touching the store."""
        session = StaticSession(Principal(id="rec-1"), {"rec-1": {"userType": "jobseeker"}}, store=recruiter_store)
        record = await session.get_account_record("rec-1")
        assert record.get("userType") == "jobseeker"
        assert record.get("id") == "rec-1"
        assert recruiter_store.calls == []

    @pytest.mark.asyncio
    async def test_falls_through_account_collections(self) -> None:
        """The first account collection holding the id answers."""
        store = MemoryStore({"accounts": [{"id": "u1", "email": "a@b.nl"}]})
        session = StaticSession(Principal(id="u1"), store=store, account_collections=("users", "accounts"))
        record = await session.get_account_record("u1")
        assert record.get("email") == "a@b.nl"
        assert store.calls == [("get", "users"), ("get", "accounts")]

    @pytest.mark.asyncio
    async def test_missing_record(self) -> None:
        """No records and no store gives None."""
        assert await StaticSession(Principal(id="u1")).get_account_record("u1") is None

    @pytest.mark.asyncio
    async def test_failing_collection_is_skipped(self) -> None:
        """A collection that refuses access does not stop the lookup in later ones."""
        store = MemoryStore({"accounts": [{"id": "u1", "email": "a@b.nl"}]})
        store.fail("users", ErrorKind.PERMISSION_DENIED)
        session = StaticSession(Principal(id="u1"), store=store, account_collections=("users", "accounts", "profiles"))
        record = await session.get_account_record("u1")
        assert record.get("email") == "a@b.nl"

    @pytest.mark.asyncio
    async def test_all_collections_failing_raises(self) -> None:
        """When no collection holds the record and one failed, the error surfaces."""
        store = MemoryStore()
        store.fail("users", ErrorKind.UNAVAILABLE)
        session = StaticSession(Principal(id="u1"), store=store, account_collections=("users", "accounts"))
        with pytest.raises(StoreError) as exc_info:
            await session.get_account_record("u1")
        assert exc_info.value.kind is ErrorKind.UNAVAILABLE


class TestDashboardService:
    """Tests for DashboardService."""

    @pytest.mark.asyncio
    async def test_load_recruiter_dashboard(
        self, recruiter_store: MemoryStore, recruiter_principal: Principal, fixed_clock
    ) -> None:
        """The stored record decides the role and feeds the account."""
        session = StaticSession(recruiter_principal, store=recruiter_store)
        bundle = await DashboardService(recruiter_store, session, clock=fixed_clock).load_dashboard()
        assert bundle.role is CanonicalRole.RECRUITER
        assert isinstance(bundle.account.profile, RecruiterProfile)
        assert bundle.account.profile.company_name == "Bouwbedrijf BV"
        assert bundle.profile_completion == 67
        assert [p.id for p in bundle.postings] == ["job-2", "job-1"]
        assert [f.id for f in bundle.favorites] == ["fav-1"]

    @pytest.mark.asyncio
    async def test_stored_role_beats_hint(
        self, recruiter_store: MemoryStore, recruiter_principal: Principal, fixed_clock
    ) -> None:
        """A stored userType wins over the session hint."""
        session = StaticSession(recruiter_principal, store=recruiter_store)
        bundle = await DashboardService(recruiter_store, session, clock=fixed_clock).load_dashboard(hint="jobseeker")
        assert bundle.role is CanonicalRole.RECRUITER

    @pytest.mark.asyncio
    async def test_missing_record_uses_hint(self, recruiter_store: MemoryStore) -> None:
        """Without a stored account the hint picks the role of a synthesized account."""
        session = StaticSession(Principal(id="new-user", email="new@x.nl"), store=recruiter_store)
        bundle = await DashboardService(recruiter_store, session).load_dashboard(hint="Recruiter")
        assert bundle.role is CanonicalRole.RECRUITER
        assert bundle.account.id == "new-user"
        assert bundle.account.email == "new@x.nl"

    @pytest.mark.asyncio
    async def test_missing_record_uses_settings_default(self) -> None:
        """Without record or hint, the configured default role applies."""
        store = MemoryStore()
        session = StaticSession(Principal(id="u1"), store=store)
        settings = CoreSettings(default_role="recruiter")
        bundle = await DashboardService(store, session, settings).load_dashboard()
        assert bundle.role is CanonicalRole.RECRUITER

    @pytest.mark.asyncio
    async def test_job_seeker_record(self, job_seeker_store: MemoryStore, job_seeker_principal: Principal) -> None:
        """Legacy Dutch keys resolve to a job seeker with its profile normalized."""
        session = StaticSession(job_seeker_principal, store=job_seeker_store)
        bundle = await DashboardService(job_seeker_store, session).load_dashboard()
        assert bundle.role is CanonicalRole.JOB_SEEKER
        assert isinstance(bundle.account.profile, JobSeekerProfile)
        assert bundle.account.profile.skills == ["Python", "SQL"]
        assert [a.id for a in bundle.applications] == ["app-1"]

    @pytest.mark.asyncio
    async def test_account_lookup_denied_still_builds(
        self, recruiter_store: MemoryStore, recruiter_principal: Principal, fixed_clock
    ) -> None:
        """A refused account lookup yields a bundle for the synthesized account."""
        recruiter_store.fail("users", ErrorKind.PERMISSION_DENIED)
        session = StaticSession(recruiter_principal, store=recruiter_store)
        bundle = await DashboardService(recruiter_store, session, clock=fixed_clock).load_dashboard(hint="recruiter")
        assert bundle.role is CanonicalRole.RECRUITER
        assert bundle.account.id == "rec-1"
        assert bundle.account.email == "hr@bouwbedrijf.nl"
        assert [p.id for p in bundle.postings] == ["job-2", "job-1"]

    @pytest.mark.asyncio
    async def test_account_lookup_timeout_still_builds(self, recruiter_principal: Principal) -> None:
        """A store slower than store_timeout_seconds on the account lookup falls back to the default role."""
        store = MemoryStore({"users": [{"id": "rec-1", "userType": "recruiter"}]}, latency=0.2)
        session = StaticSession(recruiter_principal, store=store)
        settings = CoreSettings(store_timeout_seconds=0.01)
        bundle = await DashboardService(store, session, settings).load_dashboard()
        assert bundle.role is CanonicalRole.JOB_SEEKER
        assert bundle.account.id == "rec-1"

    @pytest.mark.asyncio
    async def test_cancelled_during_account_lookup(self, recruiter_collections: dict, recruiter_principal: Principal) -> None:
        """Cancellation while the account is fetched gives an empty bundle with every set cancelled."""
        store = MemoryStore(recruiter_collections, latency=0.5)
        session = StaticSession(recruiter_principal, store=store)
        token = CancelToken(timeout=0.02)
        bundle = await DashboardService(store, session).load_dashboard(hint="recruiter", token=token)
        assert bundle.role is CanonicalRole.RECRUITER
        assert bundle.postings == [] and bundle.favorites == []
        assert len(bundle.partial_failures) == 4
        assert all(f.cancelled for f in bundle.partial_failures)
        assert store.calls == [("get", "users")]

    @pytest.mark.asyncio
    async def test_no_principal(self) -> None:
        """Nobody signed in raises NoActivePrincipal."""
        with pytest.raises(NoActivePrincipal):
            await DashboardService(MemoryStore(), StaticSession()).load_dashboard()

    @pytest.mark.asyncio
    async def test_no_session(self) -> None:
        """A service built without a session cannot load for the principal."""
        with pytest.raises(NoActivePrincipal):
            await DashboardService(MemoryStore()).load_dashboard()

    def test_resolve_role(self, recruiter_record: dict) -> None:
        """resolve_role delegates to the configured resolver."""
        service = DashboardService(MemoryStore(), settings=CoreSettings(default_role="recruiter"))
        assert service.resolve_role(recruiter_record) is CanonicalRole.RECRUITER
        assert service.resolve_role({"id": "x"}) is CanonicalRole.RECRUITER
        assert service.resolve_role(None, "jobseeker") is CanonicalRole.JOB_SEEKER


class TestBuildDashboardFunction:
    """Module-level build_dashboard."""

    @pytest.mark.asyncio
    async def test_builds_for_role(self, recruiter_store: MemoryStore, recruiter_principal: Principal) -> None:
        """The function form builds the requested role's bundle."""
        bundle = await build_dashboard(recruiter_store, recruiter_principal, CanonicalRole.RECRUITER)
        assert bundle.role is CanonicalRole.RECRUITER
        assert bundle.sources["postings"] == "jobs"
