from __future__ import annotations

import logging

import pytest

from src.sismog.sismog.companies.definition import CompanyDefinition
from src.sismog.sismog.container import Container
from src.sismog.sismog.core.exceptions import RemoteError
from src.sismog.sismog.employees.definition import EmployeeDefinition
from src.sismog.sismog.main import create_app
from src.sismog.sismog.penalties.definition import PenaltyDefinition

EMAIL = "admin@sismog.local"


@pytest.fixture
def app(monkeypatch, collections, identity):
    monkeypatch.setenv("APP_ENV", "testing")
    container = Container(
        client=collections,
        identity=identity,
        companies=CompanyDefinition(),
        employees=EmployeeDefinition(),
        penalties=PenaltyDefinition(),
    )
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def signed_in(client):
    with client.session_transaction() as sess:
        sess["email"] = EMAIL
    return client


def _text(resp) -> str:
    return resp.get_data(as_text=True)


def test_pages_require_sign_in(client):
    resp = client.get("/companies")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/")

    page = _text(client.get("/"))
    assert "Faça login para continuar." in page


def test_login_flow(client, identity):
    resp = client.post("/", data={"email": EMAIL, "password": "errada"})
    assert resp.status_code == 200
    assert "E-mail ou senha inválidos" in _text(resp)

    resp = client.post("/", data={"email": EMAIL, "password": "admin123"})
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/companies")
    with client.session_transaction() as sess:
        assert sess["email"] == EMAIL

    client.get("/logout")
    with client.session_transaction() as sess:
        assert "email" not in sess


def test_reset_password_request(client, identity):
    resp = client.post("/reset-password", data={"email": "ninguem@sismog.local"}, follow_redirects=True)
    assert "Se o e-mail estiver cadastrado" in _text(resp)
    assert identity.reset_requests == ["ninguem@sismog.local"]


def test_company_list_and_search(signed_in):
    page = _text(signed_in.get("/companies"))
    assert page.index("Gama Segurança") < page.index("Serviços Beta ME") < page.index("Vigilância Alfa Ltda")

    page = _text(signed_in.get("/companies?q=beta"))
    assert "Serviços Beta ME" in page
    assert "Gama Segurança" not in page


def test_list_shows_stale_warning_on_fetch_failure(signed_in, collections):
    collections.fail_on("query", RemoteError("serviço indisponível"))
    page = _text(signed_in.get("/companies"))
    assert "Não foi possível atualizar a lista: serviço indisponível" in page


def test_create_company(signed_in, collections):
    resp = signed_in.post(
        "/companies/save",
        data={"name": "Delta Vigilância", "tax_regime": "Lucro Real", "active": "1"},
    )
    assert resp.status_code == 302

    assert collections.calls_of("insert") == [
        ("insert", "companies", [{"name": "Delta Vigilância", "tax_regime": "Lucro Real", "active": True}])
    ]
    page = _text(signed_in.get("/companies"))
    assert "Empresa salva com sucesso!" in page
    assert page.index("Delta Vigilância") < page.index("Gama Segurança")


def test_create_company_with_empty_name_keeps_form(signed_in, collections):
    resp = signed_in.post("/companies/save", data={"name": "  ", "tax_regime": "Lucro Real"})

    assert resp.status_code == 200
    assert "Nome da empresa é obrigatório" in _text(resp)
    assert collections.calls_of("insert") == []


def test_edit_company(signed_in, collections):
    page = _text(signed_in.get("/companies/2/edit"))
    assert "Editar Empresa" in page
    assert 'value="Serviços Beta ME"' in page

    resp = signed_in.post("/companies/save", data={"id": "2", "name": "Beta Serviços", "tax_regime": "Lucro Presumido"})
    assert resp.status_code == 302
    assert collections.calls_of("update") == [
        ("update", "companies", 2, {"name": "Beta Serviços", "tax_regime": "Lucro Presumido", "active": False})
    ]


def test_edit_unknown_company_redirects_with_error(signed_in):
    resp = signed_in.get("/companies/999/edit", follow_redirects=True)
    assert "Empresa não encontrado(a)." in _text(resp)


def test_delete_company_two_steps(signed_in, collections):
    page = _text(signed_in.get("/companies/3/delete"))
    assert "Tem certeza que deseja excluir <strong>Gama Segurança</strong>?" in page
    assert collections.calls_of("delete") == []

    resp = signed_in.post("/companies/3/delete", follow_redirects=True)
    assert collections.calls_of("delete") == [("delete", "companies", 3)]
    page = _text(resp)
    assert "Empresa removida com sucesso!" in page
    assert "Gama Segurança" not in page


def test_delete_failure_reports_remote_message(signed_in, collections):
    collections.fail_on("delete", RemoteError("Não foi possível excluir: o registro possui vínculos."))
    resp = signed_in.post("/companies/1/delete", follow_redirects=True)
    page = _text(resp)
    assert "possui vínculos" in page
    assert "Vigilância Alfa Ltda" in page


def test_employee_form_lists_active_companies(signed_in):
    page = _text(signed_in.get("/employees/new"))
    assert "Vigilância Alfa Ltda" in page
    assert "Gama Segurança" not in page


def test_penalties_page(signed_in):
    page = _text(signed_in.get("/penalties?q=beta"))
    assert "Maria Souza" in page
    assert "R$ 150,00" in page
    assert "02/04/2024" in page
    assert "João da Silva" not in page


def test_settings_password_mismatch(signed_in, identity):
    resp = signed_in.post(
        "/settings",
        data={"name": "Administrador", "new_password": "segredo1", "confirm_password": "segredo2"},
    )
    assert resp.status_code == 200
    assert "As senhas não conferem." in _text(resp)
    assert identity.updated == []


def test_settings_save(signed_in, collections, identity):
    resp = signed_in.post(
        "/settings",
        data={"name": "Admin", "new_password": "novasenha", "confirm_password": "novasenha"},
        follow_redirects=True,
    )
    assert "Seus dados foram atualizados." in _text(resp)
    assert collections.tables["profiles"][0]["name"] == "Admin"
    assert identity.updated == [(EMAIL, "novasenha")]


def test_dismiss_feedback_only_follows_local_paths(signed_in):
    signed_in.post("/companies/save", data={"name": "", "tax_regime": "Lucro Real"})
    with signed_in.session_transaction() as sess:
        assert "feedback" in sess

    resp = signed_in.post("/feedback/dismiss", data={"next": "//evil.example/"})
    assert resp.headers["Location"].endswith("/")
    assert "evil" not in resp.headers["Location"]
    with signed_in.session_transaction() as sess:
        assert "feedback" not in sess

    resp = signed_in.post("/feedback/dismiss", data={"next": "/companies?q=beta"})
    assert resp.headers["Location"].endswith("/companies?q=beta")


def test_settings_unavailable_profile_is_never_overwritten(signed_in, collections, identity):
    collections.fail_on("query", RemoteError("serviço indisponível"))

    page = _text(signed_in.get("/settings"))
    assert "Não foi possível carregar seus dados: serviço indisponível" in page
    assert 'value="admin"' not in page
    assert "disabled>Salvar" in page

    resp = signed_in.post(
        "/settings",
        data={"name": "admin", "new_password": "novasenha", "confirm_password": "novasenha"},
    )
    assert resp.status_code == 200
    assert "serviço indisponível" in _text(resp)
    assert collections.calls_of("update") == []
    assert collections.calls_of("insert") == []
    assert identity.updated == []

    collections.recover("query")
    page = _text(signed_in.get("/settings"))
    assert 'value="Administrador"' in page
    assert collections.tables["profiles"][0]["name"] == "Administrador"


def test_save_edit_while_list_unavailable_keeps_posted_values(signed_in, collections):
    collections.fail_on("query", RemoteError("serviço indisponível"))

    resp = signed_in.post(
        "/companies/save",
        data={"id": "2", "name": "Beta Serviços", "tax_regime": "Lucro Presumido", "active": "1"},
    )

    assert resp.status_code == 200
    page = _text(resp)
    assert 'name="id" value="2"' in page
    assert 'value="Beta Serviços"' in page
    assert "não encontrado" not in page
    assert collections.calls_of("update") == []
    with signed_in.session_transaction() as sess:
        assert sess["feedback"]["message"] == "serviço indisponível"


def test_edit_and_delete_while_list_unavailable_report_remote_error(signed_in, collections):
    collections.fail_on("query", RemoteError("serviço indisponível"))

    for url in ("/companies/2/edit", "/companies/2/delete"):
        resp = signed_in.get(url)
        assert resp.status_code == 302
        with signed_in.session_transaction() as sess:
            assert sess["feedback"]["message"] == "serviço indisponível"
    assert collections.calls_of("delete") == []


def test_password_reset_link_sets_new_password(app, client, identity, caplog):
    caplog.set_level(logging.INFO, logger=app.logger.name)

    client.post("/reset-password", data={"email": " Admin@Sismog.Local "})
    token = identity.reset_tokens[EMAIL]
    assert f"/reset-password/{token}" in caplog.text

    page = _text(client.get(f"/reset-password/{token}?email={EMAIL}"))
    assert f'value="{EMAIL}"' in page

    resp = client.post(
        f"/reset-password/{token}",
        data={"email": EMAIL, "new_password": "novasenha", "confirm_password": "outra"},
    )
    assert "As senhas não conferem." in _text(resp)
    assert identity.updated == []

    resp = client.post(
        f"/reset-password/{token}",
        data={"email": EMAIL, "new_password": "novasenha", "confirm_password": "novasenha"},
    )
    assert resp.status_code == 302
    assert identity.updated == [(EMAIL, "novasenha")]

    resp = client.post(
        f"/reset-password/{token}",
        data={"email": EMAIL, "new_password": "outrasenha", "confirm_password": "outrasenha"},
    )
    assert "Link de recuperação inválido ou expirado" in _text(resp)
    assert identity.updated == [(EMAIL, "novasenha")]
