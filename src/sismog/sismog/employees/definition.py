from __future__ import annotations

from typing import Any, Mapping

from ..common.validators import require_non_empty, validate_email
from ..core.constants import COMPANIES, EMPLOYEES
from ..core.exceptions import ValidationError
from ..remote.client import Order, Record, Relation
from ..resources.definition import ResourceDefinition
from .model import Employee


class EmployeeDefinition(ResourceDefinition):
    collection = EMPLOYEES
    label = "Funcionário"

    order = Order.desc("created_at")
    relations = (Relation(name="company", collection=COMPANIES, foreign_key="company_id", fields=("name",)),)
    search_fields = ("name", "company.name", "title")
    mutable_fields = ("company_id", "name", "title", "contract_type", "phone", "email")

    saved_message = "Dados do funcionário salvos."
    deleted_message = "Funcionário removido com sucesso!"

    def default_draft(self) -> Record:
        return {
            "company_id": None,
            "name": "",
            "title": "",
            "contract_type": "",
            "phone": "",
            "email": "",
        }

    def validate(self, draft: Mapping[str, Any]) -> None:
        require_non_empty(draft.get("name"), "Nome")
        if not draft.get("company_id"):
            raise ValidationError("Selecione a empresa")
        if draft.get("email"):
            validate_email(draft["email"])

    def build_insert(self, draft: Mapping[str, Any]) -> Record:
        return self._blank_to_none(super().build_insert(draft))

    def build_patch(self, draft: Mapping[str, Any]) -> Record:
        return self._blank_to_none(super().build_patch(draft))

    @staticmethod
    def _blank_to_none(row: Record) -> Record:
        return {k: (None if isinstance(v, str) and not v.strip() else v) for k, v in row.items()}

    def present(self, record: Mapping[str, Any]) -> Employee:
        return Employee.from_record(record)
