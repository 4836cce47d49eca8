from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from flask import Flask, current_app, redirect, render_template, request, url_for

from ..common.web import feedback_channel, login_required
from ..resources.controller import ResourceController
from ..resources.definition import ResourceDefinition

FormParser = Callable[[Mapping[str, str]], Dict[str, Any]]


@dataclass(frozen=True)
class CrudTemplates:
    list: str
    form: str
    confirm_delete: str = "confirm_delete.html"


def register_crud_routes(
    app: Flask,
    *,
    controller_factory: Callable[[ResourceDefinition], ResourceController],
    definition: ResourceDefinition,
    endpoint: str,
    url_prefix: str,
    templates: CrudTemplates,
    parse_form: FormParser,
    form_context: Optional[Callable[[], Dict[str, Any]]] = None,
) -> None:
    """List/search, create/edit and two-step delete pages for one resource.

    Endpoints: ``<endpoint>``, ``<endpoint>_new``, ``<endpoint>_edit``,
    ``<endpoint>_save``, ``<endpoint>_delete``.
    """

    def _controller() -> ResourceController:
        return controller_factory(definition)

    def _render_form(ctl: ResourceController):
        extra = form_context() if form_context else {}
        return render_template(templates.form, ctl=ctl, form=ctl.form, active_page=endpoint, **extra)

    def _fetch_failed(ctl: ResourceController):
        ctl.feedback.error(definition.error_title, ctl.store.error or "")
        return redirect(url_for(endpoint))

    def _not_found(ctl: ResourceController):
        ctl.feedback.error(definition.error_title, f"{definition.label} não encontrado(a).")
        return redirect(url_for(endpoint))

    @app.route(url_prefix, endpoint=endpoint)
    @login_required
    def index():
        ctl = _controller()
        ctl.mount()
        ctl.set_search(request.args.get("q", "").strip())
        return render_template(templates.list, ctl=ctl, rows=ctl.rows(), search=ctl.search, active_page=endpoint)

    @app.route(f"{url_prefix}/new", endpoint=f"{endpoint}_new")
    @login_required
    def new():
        ctl = _controller()
        ctl.open_create()
        return _render_form(ctl)

    @app.route(f"{url_prefix}/<int:record_id>/edit", endpoint=f"{endpoint}_edit")
    @login_required
    def edit(record_id: int):
        ctl = _controller()
        if not ctl.mount():
            return _fetch_failed(ctl)
        if not ctl.open_edit(record_id):
            return _not_found(ctl)
        return _render_form(ctl)

    @app.route(f"{url_prefix}/save", methods=["POST"], endpoint=f"{endpoint}_save")
    @login_required
    def save():
        ctl = _controller()
        record_id = (request.form.get("id") or "").strip()
        try:
            posted = parse_form(request.form)
            if record_id:
                if not ctl.mount():
                    # Keep what the user typed; nothing is sent until the list loads.
                    ctl.form.open({"id": record_id, **posted})
                    ctl.form.fail(definition.error_title, ctl.store.error or "")
                    return _render_form(ctl)
                if not ctl.open_edit(record_id):
                    return _not_found(ctl)
            else:
                ctl.open_create()

            for field, value in posted.items():
                ctl.form.update(field, value)

            if ctl.form.submit():
                return redirect(url_for(endpoint))
        except Exception:
            current_app.logger.exception("unexpected error saving %s", definition.collection)
            ctl.feedback.error(definition.error_title, f"Erro inesperado ao salvar {definition.label.lower()}.")
        return _render_form(ctl)

    @app.route(f"{url_prefix}/<int:record_id>/delete", methods=["GET", "POST"], endpoint=f"{endpoint}_delete")
    @login_required
    def delete(record_id: int):
        ctl = _controller()
        if not ctl.mount():
            return _fetch_failed(ctl)
        if not ctl.request_delete(record_id):
            return _not_found(ctl)

        if request.method == "GET":
            return render_template(
                templates.confirm_delete,
                ctl=ctl,
                target=definition.present(ctl.deletion.target),
                label=definition.label,
                confirm_url=url_for(f"{endpoint}_delete", record_id=record_id),
                cancel_url=url_for(endpoint),
                active_page=endpoint,
            )

        try:
            ctl.deletion.confirm()
        except Exception:
            current_app.logger.exception("unexpected error deleting %s id=%s", definition.collection, record_id)
            ctl.feedback.error(definition.error_title, f"Erro inesperado ao excluir {definition.label.lower()}.")
        return redirect(url_for(endpoint))
