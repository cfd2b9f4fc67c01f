"""Ordered multi-collection query with per-candidate fallback."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional, Sequence, TypeVar

from jobboard_core.cancellation import CancelToken
from jobboard_core.errors import ErrorInfo, ErrorKind, MalformedRecordError, OperationCancelled, StoreError
from jobboard_core.models.dashboard import FetchResult, FilterSpec, QueryCandidate, SourceFailure
from jobboard_core.models.entities import CanonicalEntity, EntityKind
from jobboard_core.normalize import RecordNormalizer
from jobboard_core.sources.candidates import NOW, PRINCIPAL
from jobboard_core.store.base import DocumentStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def resolve_placeholders(filters: Sequence[FilterSpec], principal_id: Optional[str], now: datetime) -> list[FilterSpec]:
    """Substitute "$principal" and "$now" in filter values (including inside lists)."""

    def _value(v: Any) -> Any:
        if v == PRINCIPAL:
            return principal_id
        if v == NOW:
            return now
        if isinstance(v, list):
            return [_value(x) for x in v]
        return v

    return [f.model_copy(update={"value": _value(f.value)}) for f in filters]


def cancelled_failure(entity_set: str, attempted: Sequence[str] = (), answered: Sequence[str] = ()) -> SourceFailure:
    info = ErrorInfo(kind=ErrorKind.CANCELLED, message="request cancelled by caller")
    return SourceFailure(
        entity_set=entity_set,
        attempted=list(attempted),
        last_error=info,
        errors=[info],
        answered=list(answered),
    )


class SourceFallbackQuery:
    """
    Tries candidates strictly in order, one store query each.
    Stops at the first candidate yielding at least one well-formed entity.
    Store errors and empty answers move on to the next candidate; nothing is retried.
    """

    def __init__(
        self,
        store: DocumentStore,
        normalizer: Optional[RecordNormalizer] = None,
        *,
        clock: Clock = utc_now,
        timeout: Optional[float] = 10.0,
    ):
        self.store = store
        self.normalizer = normalizer or RecordNormalizer()
        self.clock = clock
        self.timeout = timeout

    async def call(self, awaitable: Awaitable[T], token: Optional[CancelToken] = None) -> T:
        """
        Run one store call bounded by the store timeout and the caller's token.
        Timeout -> StoreError(UNAVAILABLE); token fired -> OperationCancelled.
        """
        bounded = asyncio.wait_for(awaitable, self.timeout) if self.timeout else awaitable
        try:
            if token is not None:
                return await token.guard(bounded)
            return await bounded
        except asyncio.TimeoutError as e:
            raise StoreError(ErrorKind.UNAVAILABLE, f"store call timed out after {self.timeout}s") from e

    async def fetch(
        self,
        entity_set: str,
        candidates: Sequence[QueryCandidate],
        kind: "EntityKind | str",
        principal_id: Optional[str] = None,
        token: Optional[CancelToken] = None,
    ) -> "FetchResult | SourceFailure":
        attempted: list[str] = []
        answered: list[str] = []
        errors: list[ErrorInfo] = []

        for candidate in candidates:
            if token is not None and token.cancelled:
                return cancelled_failure(entity_set, attempted, answered)
            attempted.append(candidate.collection)
            filters = resolve_placeholders(candidate.filters, principal_id, self.clock())
            try:
                rows = await self.call(
                    self.store.query(candidate.collection, filters, candidate.order, candidate.limit),
                    token,
                )
            except OperationCancelled:
                logger.info("%s: cancelled while querying %s", entity_set, candidate.collection)
                return cancelled_failure(entity_set, attempted, answered)
            except StoreError as e:
                logger.warning("%s: %s failed (%s): %s", entity_set, candidate.collection, e.kind.value, e.message)
                errors.append(e.to_info(candidate.collection))
                continue

            items, dropped = self._normalize_rows(rows, kind, candidate.collection)
            if items:
                logger.debug("%s satisfied by %s (%s items)", entity_set, candidate.collection, len(items))
                return FetchResult(
                    entity_set=entity_set,
                    items=items,
                    source=candidate.collection,
                    attempted=attempted,
                    dropped=dropped,
                )
            answered.append(candidate.collection)

        return SourceFailure(
            entity_set=entity_set,
            attempted=attempted,
            last_error=errors[-1] if errors else None,
            errors=errors,
            answered=answered,
        )

    def _normalize_rows(self, rows: Sequence[Any], kind: "EntityKind | str", collection: str) -> tuple[list[CanonicalEntity], int]:
        items: list[CanonicalEntity] = []
        dropped = 0
        for row in rows:
            try:
                items.append(self.normalizer.normalize(kind, row, source=collection))
            except MalformedRecordError as e:
                dropped += 1
                logger.warning("Skipping malformed record in %s: %s", collection, e)
        return items, dropped
