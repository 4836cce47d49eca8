from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from flask import Flask, current_app

from ..common.web import feedback_channel
from ..container import Container
from ..core.constants import COMPANIES
from ..core.exceptions import RemoteError
from ..remote.client import Eq, Order
from ..resources.views import CrudTemplates, register_crud_routes


def _parse_id(value: Optional[str]) -> Optional[int]:
    value = (value or "").strip()
    return int(value) if value.isdigit() else None


def parse_employee_form(form: Mapping[str, str]) -> Dict[str, Any]:
    return {
        "company_id": _parse_id(form.get("company_id")),
        "name": (form.get("name") or "").strip(),
        "title": (form.get("title") or "").strip(),
        "contract_type": (form.get("contract_type") or "").strip(),
        "phone": (form.get("phone") or "").strip(),
        "email": (form.get("email") or "").strip(),
    }


def register(app: Flask, container: Container) -> None:
    def company_options() -> Dict[str, List[dict]]:
        try:
            companies = container.client.query(COMPANIES, filters=(Eq("active", True),), order=Order("name"))
        except RemoteError as exc:
            current_app.logger.warning("could not load companies for employee form: %s", exc)
            companies = []
        return {"companies": companies}

    register_crud_routes(
        app,
        controller_factory=lambda definition: container.controller(definition, feedback_channel()),
        definition=container.employees,
        endpoint="employees",
        url_prefix="/employees",
        templates=CrudTemplates(list="employees/list.html", form="employees/form.html"),
        parse_form=parse_employee_form,
        form_context=company_options,
    )
