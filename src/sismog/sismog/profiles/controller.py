from __future__ import annotations

from flask import Flask, current_app, redirect, render_template, request, session, url_for

from ..common.web import feedback_channel, login_required
from ..container import Container
from ..resources.controller import ResourceController


def register(app: Flask, container: Container) -> None:
    def _open_settings() -> ResourceController:
        ctl = container.profile_controller(session["email"], feedback_channel())
        if not ctl.mount():
            # Never fall back to the default draft: saving it would overwrite the real name.
            return ctl
        records = ctl.store.records
        ctl.form.open(records[0] if records else None)
        return ctl

    def _render(ctl: ResourceController):
        return render_template(
            "profiles/settings.html",
            ctl=ctl,
            form=ctl.form,
            min_password_length=container.min_password_length,
            active_page="settings",
        )

    @app.route("/settings", methods=["GET", "POST"], endpoint="settings")
    @login_required
    def settings():
        ctl = _open_settings()
        if request.method == "GET":
            return _render(ctl)

        if not ctl.form.is_open:
            ctl.feedback.error("Erro ao Salvar", ctl.store.error or "")
            return _render(ctl)

        ctl.form.update("name", (request.form.get("name") or "").strip())
        ctl.form.update("new_password", request.form.get("new_password") or "")
        ctl.form.update("confirm_password", request.form.get("confirm_password") or "")
        try:
            if ctl.form.submit():
                return redirect(url_for("settings"))
        except Exception:
            current_app.logger.exception("unexpected error saving profile of %s", session.get("email"))
            ctl.feedback.error("Erro ao Salvar", "Erro inesperado ao salvar seus dados.")
        return _render(ctl)
