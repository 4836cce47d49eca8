from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import Credential


class CredentialRepository(Protocol):
    """Storage of password credentials used by ``IdentityService``."""

    def get_by_email(self, email: str) -> Optional[Credential]:
        raise NotImplementedError

    def set_password_hash(self, email: str, password_hash: str) -> bool:
        raise NotImplementedError

    def set_reset_token(self, email: str, token_hash: str, requested_at: datetime) -> bool:
        raise NotImplementedError
