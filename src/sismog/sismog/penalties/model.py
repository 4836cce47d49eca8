from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class PenaltyEmployee:
    name: str
    title: Optional[str] = None


@dataclass(frozen=True)
class PenaltyCompany:
    name: str


@dataclass(frozen=True)
class Penalty:
    """A penalty as shown on the registry page.

    ``employee`` and ``company`` are joined read-only views, never written
    through this path.
    """

    penalty_id: int
    penalty_date: Optional[date]
    penalty_type: str
    reason: Optional[str]
    amount: Optional[float]
    file_url: Optional[str]
    responsible: Optional[str]
    employee: Optional[PenaltyEmployee]
    company: Optional[PenaltyCompany]

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Penalty":
        emp = record.get("employee")
        comp = record.get("company")
        amount = record.get("amount")
        return cls(
            penalty_id=int(record["id"]),
            penalty_date=record.get("penalty_date"),
            penalty_type=record.get("penalty_type") or "",
            reason=record.get("reason"),
            amount=float(amount) if amount is not None else None,
            file_url=record.get("file_url"),
            responsible=record.get("responsible"),
            employee=PenaltyEmployee(name=emp.get("name") or "", title=emp.get("title")) if emp else None,
            company=PenaltyCompany(name=comp.get("name") or "") if comp else None,
        )

    @property
    def amount_display(self) -> str:
        if self.amount is None:
            return "-"
        # R$ 1.234,56
        text = f"{self.amount:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
        return f"R$ {text}"
