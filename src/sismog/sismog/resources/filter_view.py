from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Sequence

from ..remote.client import Record


def resolve_field(record: Mapping[str, Any], path: str) -> Any:
    """Read ``path`` from ``record``; dotted paths walk joined relations.

    Returns ``None`` when any step is missing.
    """
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
        if value is None:
            return None
    return value


def filter_records(records: Iterable[Record], search: str, fields: Sequence[str]) -> List[Record]:
    """Case-insensitive substring match of ``search`` over ``fields`` (OR).

    Relative order is preserved; an empty search returns every record.
    """
    items = list(records)
    if not search:
        return items

    needle = search.lower()
    out: List[Record] = []
    for record in items:
        for field in fields:
            value = resolve_field(record, field)
            if value is not None and needle in str(value).lower():
                out.append(record)
                break
    return out
