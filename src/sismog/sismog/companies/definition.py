from __future__ import annotations

from typing import Any, Mapping

from ..common.validators import require_choice, require_non_empty
from ..core.constants import COMPANIES, DEFAULT_TAX_REGIME
from ..core.enums import TaxRegime
from ..remote.client import Order, Record
from ..resources.definition import ResourceDefinition
from .model import Company


class CompanyDefinition(ResourceDefinition):
    collection = COMPANIES
    label = "Empresa"

    order = Order.desc("created_at")
    search_fields = ("name",)
    mutable_fields = ("name", "tax_regime", "active")

    saved_message = "Empresa salva com sucesso!"
    deleted_message = "Empresa removida com sucesso!"

    def default_draft(self) -> Record:
        return {"name": "", "tax_regime": DEFAULT_TAX_REGIME, "active": True}

    def validate(self, draft: Mapping[str, Any]) -> None:
        require_non_empty(draft.get("name"), "Nome da empresa")
        require_choice(draft.get("tax_regime"), "Regime tributário", [r.value for r in TaxRegime])

    def build_insert(self, draft: Mapping[str, Any]) -> Record:
        return self._normalise(super().build_insert(draft))

    def build_patch(self, draft: Mapping[str, Any]) -> Record:
        return self._normalise(super().build_patch(draft))

    @staticmethod
    def _normalise(row: Record) -> Record:
        row["name"] = str(row.get("name") or "").strip()
        return row

    def present(self, record: Mapping[str, Any]) -> Company:
        return Company.from_record(record)
