from __future__ import annotations

from functools import wraps

from flask import redirect, session, url_for

from ..resources.feedback import FeedbackChannel


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "email" not in session:
            FeedbackChannel(session).error("Acesso restrito", "Faça login para continuar.")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def feedback_channel() -> FeedbackChannel:
    """The user's single feedback slot, stored in the Flask session."""
    return FeedbackChannel(session)
