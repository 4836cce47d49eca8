from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from ..core.enums import SortDirection

Record = Dict[str, Any]


@dataclass(frozen=True)
class Eq:
    """Equality clause: ``column = value``."""

    column: str
    value: Any


@dataclass(frozen=True)
class Order:
    column: str
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def desc(cls, column: str) -> "Order":
        return cls(column=column, direction=SortDirection.DESC)


@dataclass(frozen=True)
class Relation:
    """A joined, read-only view of a related collection.

    The related row is nested under ``name`` in every returned record
    (``None`` when the foreign key is null).
    """

    name: str
    collection: str
    foreign_key: str
    fields: Tuple[str, ...] = field(default_factory=tuple)


class CollectionClient(Protocol):
    """Interface of the remote data service over named collections.

    Every method raises ``RemoteError`` on failure.
    """

    def query(
        self,
        collection: str,
        *,
        filters: Sequence[Eq] = (),
        order: Optional[Order] = None,
        relations: Sequence[Relation] = (),
    ) -> List[Record]:
        raise NotImplementedError

    def insert(self, collection: str, rows: Sequence[Mapping[str, Any]]) -> List[Record]:
        raise NotImplementedError

    def update(self, collection: str, record_id: Any, patch: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def delete(self, collection: str, record_id: Any) -> None:
        raise NotImplementedError
