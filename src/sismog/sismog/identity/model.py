from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Credential:
    """Password credential of a console user, keyed by e-mail.

    Obs.: kept out of the profiles collection; only the identity service touches it.
    """

    email: str
    password_hash: str
    reset_token_hash: Optional[str] = None
    reset_requested_at: Optional[datetime] = None
