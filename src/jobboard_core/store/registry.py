"""Store lookup by name, and construction from CoreSettings."""

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Type

from jobboard_core.store.base import DocumentStore
from jobboard_core.store.memory_store import MemoryStore
from jobboard_core.store.rest_store import RestDocumentStore

if TYPE_CHECKING:
    from jobboard_core.config import CoreSettings


class StoreRegistry:
    """Maps the `store` setting to a DocumentStore class."""

    _stores: dict[str, Type[DocumentStore]] = {
        MemoryStore.store_id: MemoryStore,
        RestDocumentStore.store_id: RestDocumentStore,
    }

    @classmethod
    def _lookup(cls, store_id: str) -> Type[DocumentStore]:
        store_cls = cls._stores.get(store_id.strip().lower())
        if store_cls is None:
            raise ValueError(f"Unknown store: {store_id}. Available: {cls.available_stores()}")
        return store_cls

    @classmethod
    def get(cls, store_id: str, **kwargs) -> DocumentStore:
        """Instantiate a store by name; kwargs go to its __init__."""
        return cls._lookup(store_id)(**kwargs)

    @classmethod
    def from_settings(cls, settings: "CoreSettings", fixtures: Optional[Path] = None) -> DocumentStore:
        """
        Build the store named by settings.store.
        The memory store is seeded from a JSON fixtures file when one is given;
        remote stores need settings.store_url and get its timeout and token.
        """
        store_cls = cls._lookup(settings.store)
        if issubclass(store_cls, MemoryStore):
            return store_cls.from_json(fixtures) if fixtures is not None else store_cls()
        if not settings.store_url:
            raise ValueError(f"Store '{settings.store}' needs store_url (or JOBBOARD_STORE_URL)")
        return store_cls(
            base_url=settings.store_url,
            timeout=settings.store_timeout_seconds,
            token=settings.store_token,
        )

    @classmethod
    def available_stores(cls) -> list[str]:
        return sorted(cls._stores)
