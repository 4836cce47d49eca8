from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.enums import TaxRegime


@dataclass(frozen=True)
class Company:
    """Entidade de domínio: an empresa of the group (read model for the list page)."""

    company_id: int
    name: str
    tax_regime: TaxRegime
    active: bool = True
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Company":
        try:
            regime = TaxRegime(record.get("tax_regime"))
        except ValueError:
            regime = TaxRegime.SIMPLES_NACIONAL
        return cls(
            company_id=int(record["id"]),
            name=record.get("name") or "",
            tax_regime=regime,
            active=bool(record.get("active", True)),
            created_at=record.get("created_at"),
        )
