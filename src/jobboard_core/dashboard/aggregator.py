"""Concurrent dashboard assembly with per-entity-set failure isolation."""

import asyncio
import logging
from typing import Optional, Sequence

from jobboard_core.cancellation import CancelToken
from jobboard_core.config import CoreSettings
from jobboard_core.errors import ErrorKind, MalformedRecordError, OperationCancelled, StoreError
from jobboard_core.models.dashboard import (
    ENTITY_SETS,
    DashboardBundle,
    FetchResult,
    Principal,
    QueryCandidate,
    SourceFailure,
)
from jobboard_core.models.entities import (
    Account,
    CanonicalRole,
    FavoriteEntry,
    JobPosting,
    JobSeekerProfile,
    RecruiterProfile,
)
from jobboard_core.models.raw import RawRecord
from jobboard_core.normalize import RecordNormalizer
from jobboard_core.sources.candidates import ENTITY_SET_KINDS
from jobboard_core.sources.fallback import Clock, SourceFallbackQuery, cancelled_failure, utc_now
from jobboard_core.store.base import DocumentStore

from .completeness import profile_completion

logger = logging.getLogger(__name__)


def synthesize_account(principal: Principal, role: CanonicalRole) -> Account:
    """Minimal account for a principal whose stored record is missing."""
    profile = RecruiterProfile() if role is CanonicalRole.RECRUITER else JobSeekerProfile()
    return Account(
        id=principal.id,
        email=principal.email or "",
        role=role,
        display_name=principal.display_name or "",
        profile=profile,
    )


def newest_first(postings: Sequence[JobPosting]) -> list[JobPosting]:
    """Sort by created_at descending; postings without a timestamp go last."""
    dated = [p for p in postings if p.created_at is not None]
    undated = [p for p in postings if p.created_at is None]
    dated.sort(key=lambda p: p.created_at, reverse=True)
    return dated + undated


class DashboardAggregator:
    """
    Runs the postings, applications, meetings and favorites fallback queries concurrently.
    Always returns a DashboardBundle; a failed entity set shows up in partial_failures.
    """

    def __init__(
        self,
        store: DocumentStore,
        settings: Optional[CoreSettings] = None,
        normalizer: Optional[RecordNormalizer] = None,
        *,
        clock: Clock = utc_now,
    ):
        self.store = store
        self.settings = settings or CoreSettings()
        self.normalizer = normalizer or RecordNormalizer()
        self.query = SourceFallbackQuery(
            store,
            self.normalizer,
            clock=clock,
            timeout=self.settings.store_timeout_seconds,
        )

    async def build(
        self,
        principal: Principal,
        role: CanonicalRole,
        token: Optional[CancelToken] = None,
        account: Optional[Account] = None,
    ) -> DashboardBundle:
        account = account or synthesize_account(principal, role)
        chains = self.settings.chains_for(role)

        if token is not None and token.cancelled:
            return self.cancelled_bundle(account, role)

        results = await asyncio.gather(
            *(self._fetch_set(name, chains.get(name, []), principal, token) for name in ENTITY_SETS)
        )

        if token is not None and token.cancelled:
            logger.info("Dashboard for %s cancelled; discarding partial results", principal.id)
            return self.cancelled_bundle(account, role)

        bundle: dict = {name: [] for name in ENTITY_SETS}
        failures: list[SourceFailure] = []
        sources: dict[str, str] = {}
        for name, result in zip(ENTITY_SETS, results):
            if isinstance(result, FetchResult):
                bundle[name] = result.items
                sources[name] = result.source
            elif result.failed:
                logger.warning(
                    "%s incomplete: %s of %s candidates failed (%s)",
                    name,
                    len(result.errors),
                    len(result.attempted),
                    ", ".join(result.attempted),
                )
                failures.append(result)
            else:
                logger.debug("%s: no data in %s", name, ", ".join(result.answered))

        return DashboardBundle(
            account=account,
            role=role,
            postings=newest_first(bundle["postings"]),
            applications=bundle["applications"],
            meetings=bundle["meetings"],
            favorites=bundle["favorites"],
            partial_failures=failures,
            sources=sources,
            profile_completion=profile_completion(account),
        )

    def cancelled_bundle(self, account: Account, role: CanonicalRole) -> DashboardBundle:
        """Empty bundle with every entity set reported as cancelled."""
        return DashboardBundle(
            account=account,
            role=role,
            partial_failures=[cancelled_failure(name) for name in ENTITY_SETS],
            profile_completion=profile_completion(account),
        )

    async def _fetch_set(
        self,
        entity_set: str,
        candidates: Sequence[QueryCandidate],
        principal: Principal,
        token: Optional[CancelToken],
    ) -> "FetchResult | SourceFailure":
        result = await self.query.fetch(entity_set, candidates, ENTITY_SET_KINDS[entity_set], principal.id, token)
        if entity_set != "favorites" or not isinstance(result, FetchResult):
            return result
        try:
            favorites = await self.enrich_favorites(result.items, token)
        except OperationCancelled:
            return cancelled_failure(entity_set, result.attempted)
        return result.model_copy(update={"items": favorites})

    async def enrich_favorites(
        self,
        favorites: Sequence[FavoriteEntry],
        token: Optional[CancelToken] = None,
    ) -> list[FavoriteEntry]:
        """
        Resolve each favorite's target under a concurrency cap.
        Missing targets and candidate targets that are recruiters are excluded;
        a lookup that fails for another reason keeps the favorite with its snapshot.
        """
        semaphore = asyncio.Semaphore(self.settings.enrichment_concurrency)

        async def _bounded(fav: FavoriteEntry) -> Optional[FavoriteEntry]:
            async with semaphore:
                return await self._enrich_one(fav, token)

        enriched = await asyncio.gather(*(_bounded(f) for f in favorites))
        return [f for f in enriched if f is not None]

    async def _lookup(
        self,
        collections: Sequence[str],
        target_id: str,
        token: Optional[CancelToken],
    ) -> tuple[Optional[RawRecord], Optional[str], Optional[StoreError]]:
        """First hit across collections, with the last error that was not NOT_FOUND."""
        error: Optional[StoreError] = None
        for collection in collections:
            try:
                record = await self.query.call(self.store.get(collection, target_id), token)
            except StoreError as e:
                if e.kind is not ErrorKind.NOT_FOUND:
                    error = e
                continue
            if record is not None:
                return record, collection, None
        return None, None, error

    async def _enrich_one(self, fav: FavoriteEntry, token: Optional[CancelToken]) -> Optional[FavoriteEntry]:
        if fav.target_kind == "candidate":
            collections = self.settings.account_collections
        else:
            collections = self.settings.job_collections
        record, collection, error = await self._lookup(collections, fav.target_id, token)

        if record is None:
            if error is None:
                logger.info("Dropping favorite %s: %s %s no longer exists", fav.id, fav.target_kind, fav.target_id)
                return None
            logger.warning(
                "Favorite %s target lookup failed (%s); keeping snapshot", fav.id, error.kind.value
            )
            return fav

        try:
            if fav.target_kind == "candidate":
                candidate = self.normalizer.normalize_account(record, source=collection)
                if candidate.is_recruiter:
                    logger.info("Dropping favorite %s: target %s is a recruiter", fav.id, fav.target_id)
                    return None
                return fav.model_copy(update={"candidate": candidate})
            job = self.normalizer.normalize_job(record, source=collection)
            return fav.model_copy(update={"job": job})
        except MalformedRecordError as e:
            logger.warning("Favorite %s target in %s is malformed (%s); keeping snapshot", fav.id, collection, e)
            return fav
