"""Error taxonomy shared by the store boundary, normalization, and aggregation."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ErrorKind(str, Enum):
    """Failure categories surfaced by this layer."""

    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"
    MALFORMED_RECORD = "malformed_record"
    CANCELLED = "cancelled"


class ErrorInfo(BaseModel):
    """Serializable kind + message pair recorded in SourceFailure."""

    kind: ErrorKind
    message: str = ""
    collection: Optional[str] = None


class StoreError(Exception):
    """
    Raised by document store clients.
    kind is one of PERMISSION_DENIED, NOT_FOUND, UNAVAILABLE.
    """

    def __init__(self, kind: ErrorKind, message: str = ""):
        super().__init__(message or kind.value)
        self.kind = kind
        self.message = message

    def to_info(self, collection: Optional[str] = None) -> ErrorInfo:
        return ErrorInfo(kind=self.kind, message=self.message, collection=collection)


class MalformedRecordError(ValueError):
    """A raw record cannot be turned into its declared entity kind (e.g. no id)."""

    def __init__(self, kind: str, message: str):
        super().__init__(f"{kind}: {message}")
        self.kind = kind


class OperationCancelled(Exception):
    """The caller withdrew the request through its CancelToken."""


class NoActivePrincipal(RuntimeError):
    """The session provider has no authenticated principal."""
