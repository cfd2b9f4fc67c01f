"""Canonical field resolution over schemaless records."""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from jobboard_core.models.raw import RawRecord

Coercion = Callable[[Any], Any]


def resolve(
    record: "RawRecord | Mapping[str, Any] | None",
    canonical_name: str,
    aliases: Sequence[str] = (),
) -> Optional[Any]:
    """
    Return the first present value among canonical_name then aliases, in order.
    Keys holding None count as absent. Dotted names walk nested mappings. Never raises.
    """
    if record is None:
        return None
    raw = RawRecord.of(record)
    for key in (canonical_name, *aliases):
        value = raw.get_path(key)
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class FieldSpec:
    """
    One canonical field: attribute name on the entity, canonical raw key,
    ordered alternate source keys, optional coercion and default.
    """

    attr: str
    key: str
    aliases: tuple[str, ...] = ()
    coerce: Optional[Coercion] = None
    default: Any = None
    default_factory: Optional[Callable[[], Any]] = None

    def names(self) -> tuple[str, ...]:
        return (self.key, *self.aliases)

    def empty(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


@dataclass
class FieldMapper:
    """Declarative alias table for one entity kind."""

    specs: tuple[FieldSpec, ...]
    _by_attr: dict[str, FieldSpec] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_attr = {s.attr: s for s in self.specs}

    def spec(self, attr: str) -> FieldSpec:
        return self._by_attr[attr]

    def resolve(self, record: RawRecord, attr: str) -> Any:
        """Resolve and coerce one field; falls back to the field default."""
        spec = self._by_attr[attr]
        value = resolve(record, spec.key, spec.aliases)
        if value is not None and spec.coerce is not None:
            value = spec.coerce(value)
        return spec.empty() if value is None else value

    def apply(self, record: RawRecord, attrs: Optional[Iterable[str]] = None) -> dict[str, Any]:
        """Resolve every field (or the given subset) into {attr: value}."""
        wanted = attrs if attrs is not None else self._by_attr.keys()
        return {attr: self.resolve(record, attr) for attr in wanted}

    def consumed_keys(self) -> set[str]:
        """Top-level record keys this table reads; everything else is extra."""
        keys: set[str] = set()
        for spec in self.specs:
            for name in spec.names():
                keys.add(name.split(".", 1)[0])
        return keys

    def extra(self, record: RawRecord, also_consumed: Iterable[str] = ()) -> dict[str, Any]:
        consumed = self.consumed_keys() | set(also_consumed)
        return {k: v for k, v in record.data.items() if k not in consumed}
