from __future__ import annotations

from typing import Any, Dict, Mapping

from flask import Flask

from ..common.validators import parse_bool
from ..common.web import feedback_channel
from ..container import Container
from ..core.enums import TaxRegime
from ..resources.views import CrudTemplates, register_crud_routes


def parse_company_form(form: Mapping[str, str]) -> Dict[str, Any]:
    return {
        "name": (form.get("name") or "").strip(),
        "tax_regime": form.get("tax_regime") or "",
        "active": parse_bool(form.get("active")),
    }


def register(app: Flask, container: Container) -> None:
    register_crud_routes(
        app,
        controller_factory=lambda definition: container.controller(definition, feedback_channel()),
        definition=container.companies,
        endpoint="companies",
        url_prefix="/companies",
        templates=CrudTemplates(list="companies/list.html", form="companies/form.html"),
        parse_form=parse_company_form,
        form_context=lambda: {"tax_regimes": [r.value for r in TaxRegime]},
    )
