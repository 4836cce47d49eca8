"""Whitelist of collections the console may read and write.

Column names are interpolated into SQL, so only names listed here are accepted.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

from ..core import constants


@dataclass(frozen=True)
class CollectionSchema:
    table: str
    columns: Tuple[str, ...]
    bool_columns: FrozenSet[str] = frozenset()
    read_only: FrozenSet[str] = frozenset({"id", "created_at"})

    @property
    def writable(self) -> FrozenSet[str]:
        return frozenset(self.columns) - self.read_only


COLLECTIONS: Dict[str, CollectionSchema] = {
    constants.COMPANIES: CollectionSchema(
        table="companies",
        columns=("id", "name", "tax_regime", "active", "created_at"),
        bool_columns=frozenset({"active"}),
    ),
    constants.EMPLOYEES: CollectionSchema(
        table="employees",
        columns=("id", "company_id", "name", "title", "contract_type", "phone", "email", "created_at"),
    ),
    constants.PENALTIES: CollectionSchema(
        table="penalties",
        columns=(
            "id",
            "employee_id",
            "company_id",
            "penalty_date",
            "penalty_type",
            "reason",
            "amount",
            "file_url",
            "responsible",
            "created_at",
        ),
    ),
    constants.PROFILES: CollectionSchema(
        table="profiles",
        columns=("id", "email", "name", "permission", "category", "active", "created_at"),
        bool_columns=frozenset({"active"}),
    ),
}
