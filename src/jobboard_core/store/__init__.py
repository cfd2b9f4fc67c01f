"""Document store clients."""

from jobboard_core.store.base import DocumentStore
from jobboard_core.store.memory_store import MemoryStore
from jobboard_core.store.registry import StoreRegistry
from jobboard_core.store.rest_store import RestDocumentStore

__all__ = [
    "DocumentStore",
    "MemoryStore",
    "RestDocumentStore",
    "StoreRegistry",
]
