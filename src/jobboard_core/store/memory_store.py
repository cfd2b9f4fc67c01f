"""Dict-backed document store for tests and JSON fixture files."""

import asyncio
import json
import logging
import operator
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from jobboard_core.errors import ErrorKind, StoreError
from jobboard_core.models.dashboard import FilterSpec, OrderSpec
from jobboard_core.models.raw import RawRecord
from jobboard_core.normalize.parsers import parse_timestamp
from jobboard_core.store.base import DocumentStore

logger = logging.getLogger(__name__)

_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def _comparable(stored: Any, wanted: Any) -> tuple[Any, Any]:
    """Bring a stored value to the filter value's type where the store would (timestamps)."""
    if isinstance(wanted, (datetime, date)):
        return parse_timestamp(stored), parse_timestamp(wanted)
    return stored, wanted


def _matches(record: RawRecord, spec: FilterSpec) -> bool:
    stored = record.get_path(spec.field)
    if spec.op == "in":
        return isinstance(spec.value, (list, tuple, set)) and stored in spec.value
    if spec.op == "array-contains":
        return isinstance(stored, list) and spec.value in stored
    compare = _COMPARATORS.get(spec.op)
    if compare is None:
        raise ValueError(f"Unsupported filter op: {spec.op}")
    if stored is None:
        return spec.op == "!=" and spec.value is not None
    left, right = _comparable(stored, spec.value)
    if left is None or right is None:
        return False
    try:
        return bool(compare(left, right))
    except TypeError:
        return False


def _sort_key(value: Any) -> tuple:
    """Missing values last; timestamps compare as instants; mixed types grouped by type."""
    if value is None:
        return (1, "", 0)
    ts = parse_timestamp(value) if isinstance(value, (datetime, date, Mapping)) else None
    if ts is not None:
        return (0, "datetime", ts.timestamp())
    if isinstance(value, bool):
        return (0, "bool", int(value))
    if isinstance(value, (int, float)):
        return (0, "number", value)
    return (0, "str", str(value))


class MemoryStore(DocumentStore):
    """
    In-memory collections of documents keyed by id.
    Missing collections answer empty, as a schemaless store does.
    fail() injects a StoreError for every call against one collection.
    """

    store_id = "memory"

    def __init__(
        self,
        collections: Optional[Mapping[str, Any]] = None,
        *,
        latency: float = 0.0,
    ):
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._failures: dict[str, StoreError] = {}
        self.latency = latency
        self.calls: list[tuple[str, str]] = []
        for name, docs in (collections or {}).items():
            self.add_collection(name, docs)

    def add_collection(self, name: str, docs: "Iterable[Mapping[str, Any]] | Mapping[str, Mapping[str, Any]]") -> None:
        """
        Accepts a list of documents carrying "id" (or "uid"),
        or a mapping of document id -> document body.
        """
        target = self._collections.setdefault(name, {})
        if isinstance(docs, Mapping):
            for doc_id, body in docs.items():
                target[str(doc_id)] = {"id": str(doc_id), **dict(body)}
            return
        for i, body in enumerate(docs):
            doc_id = body.get("id") or body.get("uid") or f"{name}-{i}"
            target[str(doc_id)] = {"id": str(doc_id), **dict(body)}

    def put(self, collection: str, doc_id: str, body: Mapping[str, Any]) -> None:
        self._collections.setdefault(collection, {})[doc_id] = {"id": doc_id, **dict(body)}

    def fail(self, collection: str, kind: ErrorKind, message: str = "") -> None:
        self._failures[collection] = StoreError(kind, message or f"{collection}: {kind.value}")

    def clear_failure(self, collection: str) -> None:
        self._failures.pop(collection, None)

    async def _enter(self, call: str, collection: str) -> None:
        self.calls.append((call, collection))
        if self.latency:
            await asyncio.sleep(self.latency)
        failure = self._failures.get(collection)
        if failure is not None:
            raise failure

    async def query(
        self,
        collection: str,
        filters: Sequence[FilterSpec] = (),
        order: Optional[OrderSpec] = None,
        limit: Optional[int] = None,
    ) -> list[RawRecord]:
        await self._enter("query", collection)
        docs = [RawRecord.of(body) for body in self._collections.get(collection, {}).values()]
        rows = [r for r in docs if all(_matches(r, f) for f in filters)]
        if order is not None:
            present = [r for r in rows if r.get_path(order.field) is not None]
            missing = [r for r in rows if r.get_path(order.field) is None]
            present.sort(key=lambda r: _sort_key(r.get_path(order.field)), reverse=order.direction == "desc")
            rows = present + missing
        if limit is not None:
            rows = rows[:limit]
        logger.debug("memory query %s -> %s rows", collection, len(rows))
        return rows

    async def get(self, collection: str, doc_id: str) -> Optional[RawRecord]:
        await self._enter("get", collection)
        body = self._collections.get(collection, {}).get(doc_id)
        return RawRecord.of(body) if body is not None else None

    @classmethod
    def from_json(cls, path: str | Path) -> "MemoryStore":
        """
        Load fixtures: {"collections": {name: [docs] | {id: doc}}, "failures": {name: kind}}.
        A file without a "collections" key is taken as the collections mapping itself.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        collections = data.get("collections", data) if isinstance(data, dict) else {}
        store = cls({k: v for k, v in collections.items() if k not in ("failures", "session")})
        for name, kind in (data.get("failures") or {}).items():
            store.fail(name, ErrorKind(kind))
        return store
