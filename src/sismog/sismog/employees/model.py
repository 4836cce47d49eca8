from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Employee:
    employee_id: int
    name: str
    company_id: Optional[int]
    company_name: Optional[str]
    title: Optional[str] = None
    contract_type: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Employee":
        company = record.get("company") or {}
        return cls(
            employee_id=int(record["id"]),
            name=record.get("name") or "",
            company_id=record.get("company_id"),
            company_name=company.get("name"),
            title=record.get("title"),
            contract_type=record.get("contract_type"),
            phone=record.get("phone"),
            email=record.get("email"),
        )
