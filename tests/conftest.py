from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

import pytest

from src.sismog.sismog.companies.definition import CompanyDefinition
from src.sismog.sismog.core.enums import SortDirection
from src.sismog.sismog.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from src.sismog.sismog.employees.definition import EmployeeDefinition
from src.sismog.sismog.identity.service import SessionUser
from src.sismog.sismog.penalties.definition import PenaltyDefinition
from src.sismog.sismog.resources.controller import ResourceController
from src.sismog.sismog.resources.feedback import FeedbackChannel


class InMemoryCollections:
    """Collection client over plain dicts; records every call in ``calls``."""

    def __init__(self, tables: Optional[Dict[str, List[dict]]] = None):
        self.tables: Dict[str, List[dict]] = {k: [dict(r) for r in v] for k, v in (tables or {}).items()}
        self.calls: List[tuple] = []
        self.failures: Dict[str, Exception] = {}
        self._clock = datetime(2024, 1, 1, 8, 0, 0)

    def fail_on(self, method: str, exc: Exception) -> None:
        self.failures[method] = exc

    def recover(self, method: str) -> None:
        self.failures.pop(method, None)

    def calls_of(self, method: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == method]

    def _check(self, method: str) -> None:
        if method in self.failures:
            raise self.failures[method]

    def _rows(self, collection: str) -> List[dict]:
        return self.tables.setdefault(collection, [])

    def query(self, collection, *, filters=(), order=None, relations=()):
        self.calls.append(("query", collection, tuple(filters)))
        self._check("query")
        rows = [dict(r) for r in self._rows(collection) if all(r.get(f.column) == f.value for f in filters)]
        if order is not None:
            rows.sort(key=lambda r: r[order.column], reverse=order.direction == SortDirection.DESC)
        for row in rows:
            for rel in relations:
                fk = row.get(rel.foreign_key)
                target = next((r for r in self._rows(rel.collection) if r["id"] == fk), None)
                row[rel.name] = (
                    {"id": target["id"], **{f: target.get(f) for f in rel.fields}} if target else None
                )
        return rows

    def insert(self, collection, rows):
        self.calls.append(("insert", collection, [dict(r) for r in rows]))
        self._check("insert")
        table = self._rows(collection)
        created = []
        for row in rows:
            self._clock += timedelta(minutes=1)
            new_id = max((r["id"] for r in table), default=0) + 1
            record = {"id": new_id, "created_at": self._clock, **row}
            table.append(record)
            created.append(dict(record))
        return created

    def update(self, collection, record_id, patch):
        self.calls.append(("update", collection, record_id, dict(patch)))
        self._check("update")
        for row in self._rows(collection):
            if row["id"] == record_id:
                row.update(patch)
                return
        raise NotFoundError("Registro não encontrado.")

    def delete(self, collection, record_id):
        self.calls.append(("delete", collection, record_id))
        self._check("delete")
        table = self._rows(collection)
        for i, row in enumerate(table):
            if row["id"] == record_id:
                del table[i]
                return
        raise NotFoundError("Registro não encontrado.")


class FakeIdentity:
    def __init__(self, accounts: Optional[Dict[str, str]] = None):
        self.accounts = dict(accounts or {})
        self.updated: List[tuple] = []
        self.reset_requests: List[str] = []
        self.reset_tokens: Dict[str, str] = {}
        self.error: Optional[Exception] = None

    def sign_in(self, email: str, secret: str) -> SessionUser:
        if self.accounts.get(email) != secret:
            raise AuthenticationError("E-mail ou senha inválidos")
        return SessionUser(email=email)

    def update_credential(self, email: str, new_secret: str) -> None:
        if self.error is not None:
            raise self.error
        self.updated.append((email, new_secret))
        self.accounts[email] = new_secret

    def request_credential_reset(self, email: str) -> Optional[str]:
        self.reset_requests.append(email)
        if email not in self.accounts:
            return None
        self.reset_tokens[email] = f"token-{len(self.reset_requests)}"
        return self.reset_tokens[email]

    def complete_credential_reset(self, email: str, token: str, new_secret: str) -> None:
        if len(new_secret) < 6:
            raise ValidationError("A senha deve ter pelo menos 6 caracteres")
        if not token or self.reset_tokens.get(email) != token:
            raise AuthenticationError("Link de recuperação inválido ou expirado")
        del self.reset_tokens[email]
        self.update_credential(email, new_secret)


def _seed() -> Dict[str, List[dict]]:
    return {
        "companies": [
            {"id": 1, "name": "Vigilância Alfa Ltda", "tax_regime": "Lucro Presumido", "active": True,
             "created_at": datetime(2023, 5, 1)},
            {"id": 2, "name": "Serviços Beta ME", "tax_regime": "Simples Nacional", "active": True,
             "created_at": datetime(2023, 6, 1)},
            {"id": 3, "name": "Gama Segurança", "tax_regime": "Lucro Real", "active": False,
             "created_at": datetime(2023, 7, 1)},
        ],
        "employees": [
            {"id": 10, "company_id": 1, "name": "João da Silva", "title": "Vigilante", "contract_type": "CLT",
             "phone": None, "email": None, "created_at": datetime(2023, 8, 1)},
            {"id": 11, "company_id": 2, "name": "Maria Souza", "title": "Porteira", "contract_type": "CLT",
             "phone": "11999990000", "email": "maria@beta.com.br", "created_at": datetime(2023, 9, 1)},
        ],
        "penalties": [
            {"id": 100, "employee_id": 10, "company_id": 1, "penalty_date": date(2024, 3, 12),
             "penalty_type": "Advertência", "reason": "Atraso recorrente", "amount": None,
             "file_url": None, "responsible": "Carlos", "created_at": datetime(2024, 3, 12)},
            {"id": 101, "employee_id": 11, "company_id": 2, "penalty_date": date(2024, 4, 2),
             "penalty_type": "Suspensão", "reason": "Abandono de posto", "amount": 150.0,
             "file_url": "https://files.example/101.pdf", "responsible": "Ana", "created_at": datetime(2024, 4, 2)},
            {"id": 102, "employee_id": None, "company_id": None, "penalty_date": date(2024, 1, 5),
             "penalty_type": "Multa", "reason": None, "amount": 80.5,
             "file_url": None, "responsible": None, "created_at": datetime(2024, 1, 5)},
        ],
        "profiles": [
            {"id": 7, "email": "admin@sismog.local", "name": "Administrador", "permission": 1,
             "category": "Gestão", "active": True, "created_at": datetime(2023, 1, 1)},
        ],
    }


@pytest.fixture
def collections() -> InMemoryCollections:
    return InMemoryCollections(_seed())


@pytest.fixture
def make_collections():
    return InMemoryCollections


@pytest.fixture
def identity() -> FakeIdentity:
    return FakeIdentity({"admin@sismog.local": "admin123"})


@pytest.fixture
def feedback() -> FeedbackChannel:
    return FeedbackChannel()


@pytest.fixture
def companies(collections, feedback) -> ResourceController:
    return ResourceController(CompanyDefinition(), collections, feedback)


@pytest.fixture
def employees(collections, feedback) -> ResourceController:
    return ResourceController(EmployeeDefinition(), collections, feedback)


@pytest.fixture
def penalties(collections, feedback) -> ResourceController:
    return ResourceController(PenaltyDefinition(), collections, feedback)
