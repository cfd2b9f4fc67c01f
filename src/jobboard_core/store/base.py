"""Abstract base class for document store clients."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from jobboard_core.models.dashboard import FilterSpec, OrderSpec
from jobboard_core.models.raw import RawRecord


class DocumentStore(ABC):
    """
    Standard interface for the schemaless document store.
    Implementations raise StoreError with kind PERMISSION_DENIED, NOT_FOUND or UNAVAILABLE.
    """

    store_id: str = ""

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Sequence[FilterSpec] = (),
        order: Optional[OrderSpec] = None,
        limit: Optional[int] = None,
    ) -> list[RawRecord]:
        """
        Run a filtered query against one collection; filters are AND-ed.
        A collection that does not exist may answer empty or raise NOT_FOUND.
        """
        pass

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[RawRecord]:
        """
        Fetch one document by id. Returns None when the document does not exist.
        """
        pass

    async def aclose(self) -> None:
        """Release any underlying connection. Default: nothing to release."""
        return None
