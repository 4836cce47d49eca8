from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Credential
from .repository import CredentialRepository


class MySQLCredentialRepository(CredentialRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Credential]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT email, password_hash, reset_token_hash, reset_requested_at
                FROM credentials
                WHERE email=%s
                """,
                (email,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Credential(
                email=row["email"],
                password_hash=row["password_hash"],
                reset_token_hash=row.get("reset_token_hash"),
                reset_requested_at=row.get("reset_requested_at"),
            )

    def set_password_hash(self, email: str, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE credentials SET password_hash=%s, reset_token_hash=NULL WHERE email=%s",
                (password_hash, email),
            )
            return cur.rowcount > 0

    def set_reset_token(self, email: str, token_hash: str, requested_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE credentials SET reset_token_hash=%s, reset_requested_at=%s WHERE email=%s",
                (token_hash, requested_at, email),
            )
            return cur.rowcount > 0
