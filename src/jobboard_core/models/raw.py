"""Raw record representation as returned by the document store."""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field


class RawRecord(BaseModel):
    """
    Schemaless record from a document store collection.
    The only type that crosses the store boundary; every read goes through get().
    """

    data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def of(cls, value: "RawRecord | Mapping[str, Any] | None") -> "RawRecord":
        """Wrap a plain mapping (or pass a RawRecord through)."""
        if isinstance(value, RawRecord):
            return value
        return cls(data=dict(value or {}))

    def get(self, key: str) -> Optional[Any]:
        """Value stored under key, or None when absent."""
        return self.data.get(key)

    def get_path(self, path: str) -> Optional[Any]:
        """
        Dotted-path lookup ("profile.companyName").
        A literal key containing the dot wins over traversal.
        """
        if path in self.data:
            return self.data[path]
        current: Any = self.data
        for part in path.split("."):
            if not isinstance(current, Mapping):
                return None
            current = current.get(part)
            if current is None:
                return None
        return current

    def has(self, key: str) -> bool:
        return self.get_path(key) is not None

    def keys(self) -> list[str]:
        return list(self.data.keys())
