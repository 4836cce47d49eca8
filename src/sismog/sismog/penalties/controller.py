from __future__ import annotations

from flask import Flask, render_template, request

from ..common.web import feedback_channel, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/penalties", endpoint="penalties")
    @login_required
    def penalties():
        ctl = container.controller(container.penalties, feedback_channel())
        ctl.mount()
        ctl.set_search(request.args.get("q", "").strip())
        return render_template(
            "penalties/list.html",
            ctl=ctl,
            rows=ctl.rows(),
            search=ctl.search,
            active_page="penalties",
        )
