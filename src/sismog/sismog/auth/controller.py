from __future__ import annotations

from flask import Flask, current_app, redirect, render_template, request, session, url_for

from ..common.web import feedback_channel
from ..container import Container
from ..core.exceptions import AuthenticationError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if "email" in session:
            return redirect(url_for("companies"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            try:
                user = container.identity.sign_in(email, password)
                session.clear()
                session["email"] = user.email
                return redirect(url_for("companies"))
            except AuthenticationError as e:
                feedback_channel().error("Erro!", str(e))
            except Exception:
                current_app.logger.exception("unexpected error during sign-in")
                feedback_channel().error("Erro!", "Erro de sistema ao entrar.")

        return render_template("auth/login.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        return redirect(url_for("login"))

    @app.route("/reset-password", methods=["GET", "POST"], endpoint="reset_password")
    def reset_password():
        if request.method == "POST":
            email = (request.form.get("email") or "").strip().lower()
            try:
                token = container.identity.request_credential_reset(email)
                if token and current_app.config.get("LOG_RESET_LINKS"):
                    link = url_for("reset_password_confirm", token=token, email=email, _external=True)
                    current_app.logger.info("password reset link for %s: %s", email, link)
                feedback_channel().success(
                    "Verifique seu e-mail",
                    "Se o e-mail estiver cadastrado, enviaremos as instruções de recuperação.",
                )
                return redirect(url_for("login"))
            except ValidationError as e:
                feedback_channel().error("Erro!", str(e))
            except Exception:
                current_app.logger.exception("unexpected error requesting password reset")
                feedback_channel().error("Erro!", "Erro de sistema ao solicitar recuperação de senha.")

        return render_template("auth/reset_password.html")

    @app.route("/reset-password/<token>", methods=["GET", "POST"], endpoint="reset_password_confirm")
    def reset_password_confirm(token: str):
        email = (request.values.get("email") or "").strip().lower()
        if request.method == "POST":
            new_password = request.form.get("new_password") or ""
            try:
                if new_password != (request.form.get("confirm_password") or ""):
                    raise ValidationError("As senhas não conferem.")
                container.identity.complete_credential_reset(email, token, new_password)
                feedback_channel().success("Senha alterada", "Entre com a nova senha.")
                return redirect(url_for("login"))
            except (AuthenticationError, ValidationError) as e:
                feedback_channel().error("Erro!", str(e))
            except Exception:
                current_app.logger.exception("unexpected error completing password reset")
                feedback_channel().error("Erro!", "Erro de sistema ao redefinir a senha.")

        return render_template("auth/reset_password_confirm.html", token=token, email=email)

    @app.route("/feedback/dismiss", methods=["POST"], endpoint="dismiss_feedback")
    def dismiss_feedback():
        feedback_channel().dismiss()
        next_url = request.form.get("next") or ""
        # Only same-site paths.
        if not next_url.startswith("/") or next_url.startswith("//"):
            next_url = url_for("login")
        return redirect(next_url)
