from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Profile:
    """Console user profile. ``email`` is immutable and used as the lookup key."""

    profile_id: Optional[int]
    name: str
    email: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Profile":
        pid = record.get("id")
        return cls(
            profile_id=int(pid) if pid is not None else None,
            name=record.get("name") or "",
            email=record.get("email") or "",
        )
