"""Session provider interface and a static implementation for tests and the CLI."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from jobboard_core.errors import ErrorKind, StoreError
from jobboard_core.models.dashboard import Principal
from jobboard_core.models.raw import RawRecord
from jobboard_core.store.base import DocumentStore

logger = logging.getLogger(__name__)


class SessionProvider(ABC):
    """Supplies the authenticated principal and its stored account record."""

    @abstractmethod
    def current_principal(self) -> Optional[Principal]:
        """The signed-in principal, or None when nobody is signed in."""
        pass

    @abstractmethod
    async def get_account_record(self, principal_id: str) -> Optional[RawRecord]:
        """The principal's raw account record, or None when it does not exist."""
        pass


class StaticSession(SessionProvider):
    """
    Fixed principal. The account record comes from the given records mapping,
    or from the store's account collections when a store is supplied.
    """

    def __init__(
        self,
        principal: Optional[Principal] = None,
        records: Optional[Mapping[str, Mapping[str, Any]]] = None,
        *,
        store: Optional[DocumentStore] = None,
        account_collections: tuple[str, ...] = ("users",),
    ):
        self._principal = principal
        self._records = dict(records or {})
        self._store = store
        self._account_collections = account_collections

    def current_principal(self) -> Optional[Principal]:
        return self._principal

    async def get_account_record(self, principal_id: str) -> Optional[RawRecord]:
        """
        First account collection holding the id. A failing collection is skipped;
        when none holds the record and one failed, the last error is raised.
        """
        if principal_id in self._records:
            return RawRecord.of({"id": principal_id, **self._records[principal_id]})
        if self._store is None:
            return None
        error: Optional[StoreError] = None
        for collection in self._account_collections:
            try:
                record = await self._store.get(collection, principal_id)
            except StoreError as e:
                if e.kind is not ErrorKind.NOT_FOUND:
                    logger.warning("Account lookup in %s failed (%s): %s", collection, e.kind.value, e.message)
                    error = e
                continue
            if record is not None:
                return record
        if error is not None:
            raise error
        return None
