"""JSON document API client over httpx."""

import logging
from typing import Any, Optional, Sequence
from urllib.parse import quote

import httpx

from jobboard_core.errors import ErrorKind, StoreError
from jobboard_core.models.dashboard import FilterSpec, OrderSpec
from jobboard_core.models.raw import RawRecord
from jobboard_core.store.base import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _error_for_status(status_code: int, collection: str, body: str) -> Optional[StoreError]:
    if status_code in (401, 403):
        return StoreError(ErrorKind.PERMISSION_DENIED, f"{collection}: HTTP {status_code}")
    if status_code == 404:
        return StoreError(ErrorKind.NOT_FOUND, f"{collection}: HTTP 404")
    if status_code >= 400:
        return StoreError(ErrorKind.UNAVAILABLE, f"{collection}: HTTP {status_code} {body[:200]}")
    return None


def _documents(payload: Any) -> list[dict[str, Any]]:
    """Accepts a bare list or {"documents": [...]}; each entry may wrap its body in "data"."""
    docs = payload.get("documents", []) if isinstance(payload, dict) else payload
    out: list[dict[str, Any]] = []
    for doc in docs or []:
        if not isinstance(doc, dict):
            continue
        if isinstance(doc.get("data"), dict):
            out.append({"id": doc.get("id"), **doc["data"]})
        else:
            out.append(doc)
    return out


class RestDocumentStore(DocumentStore):
    """
    Client for a JSON document API:
      POST {base}/collections/{name}:query  body {"filters", "orderBy", "limit"}
      GET  {base}/collections/{name}/{id}
    401/403 -> PERMISSION_DENIED, 404 -> NOT_FOUND (None for get),
    other errors, timeouts and transport failures -> UNAVAILABLE.
    """

    store_id = "rest"

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        token: Optional[str] = None,
    ):
        """
        Args:
            base_url: API root, e.g. https://store.example.com/v1
            client: Optional httpx client (tests pass one with MockTransport)
            timeout: Per-request timeout in seconds
            token: Bearer token sent with every request
        """
        self.base_url = base_url.rstrip("/")
        self._headers = {"Accept": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _url(self, collection: str, suffix: str = "") -> str:
        return f"{self.base_url}/collections/{quote(collection, safe='')}{suffix}"

    async def _send(self, collection: str, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, url, headers=self._headers, **kwargs)
        except httpx.TimeoutException as e:
            raise StoreError(ErrorKind.UNAVAILABLE, f"{collection}: timeout ({e})") from e
        except httpx.RequestError as e:
            raise StoreError(ErrorKind.UNAVAILABLE, f"{collection}: {e}") from e

    async def query(
        self,
        collection: str,
        filters: Sequence[FilterSpec] = (),
        order: Optional[OrderSpec] = None,
        limit: Optional[int] = None,
    ) -> list[RawRecord]:
        body: dict[str, Any] = {"filters": [f.model_dump(mode="json") for f in filters]}
        if order is not None:
            body["orderBy"] = order.model_dump(mode="json")
        if limit is not None:
            body["limit"] = limit
        resp = await self._send(collection, "POST", self._url(collection, ":query"), json=body)
        error = _error_for_status(resp.status_code, collection, resp.text)
        if error is not None:
            raise error
        try:
            payload = resp.json()
        except ValueError as e:
            raise StoreError(ErrorKind.UNAVAILABLE, f"{collection}: invalid JSON response") from e
        rows = [RawRecord.of(doc) for doc in _documents(payload)]
        logger.debug("rest query %s -> %s rows", collection, len(rows))
        return rows

    async def get(self, collection: str, doc_id: str) -> Optional[RawRecord]:
        resp = await self._send(collection, "GET", self._url(collection, "/" + quote(doc_id, safe="")))
        if resp.status_code == 404:
            return None
        error = _error_for_status(resp.status_code, collection, resp.text)
        if error is not None:
            raise error
        try:
            payload = resp.json()
        except ValueError as e:
            raise StoreError(ErrorKind.UNAVAILABLE, f"{collection}: invalid JSON response") from e
        if not isinstance(payload, dict):
            return None
        if isinstance(payload.get("data"), dict):
            payload = {"id": payload.get("id", doc_id), **payload["data"]}
        return RawRecord.of({"id": doc_id, **payload})

    async def aclose(self) -> None:
        await self._client.aclose()
