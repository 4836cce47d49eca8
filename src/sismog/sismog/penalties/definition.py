from __future__ import annotations

from typing import Any, Mapping

from ..core.constants import COMPANIES, EMPLOYEES, PENALTIES
from ..core.exceptions import AuthorizationError
from ..remote.client import CollectionClient, Order, Relation
from ..resources.definition import ResourceDefinition
from .model import Penalty


class PenaltyDefinition(ResourceDefinition):
    """Read-only registry of penalties joined with employee and company."""

    collection = PENALTIES
    label = "Penalidade"

    order = Order.desc("penalty_date")
    relations = (
        Relation(name="employee", collection=EMPLOYEES, foreign_key="employee_id", fields=("name", "title")),
        Relation(name="company", collection=COMPANIES, foreign_key="company_id", fields=("name",)),
    )
    search_fields = ("employee.name", "company.name", "penalty_type")

    def persist(self, client: CollectionClient, draft: Mapping[str, Any]) -> None:
        raise AuthorizationError("Penalidades são somente leitura nesta tela")

    def present(self, record: Mapping[str, Any]) -> Penalty:
        return Penalty.from_record(record)
