from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, RESET_TOKEN_TTL_MINUTES
from ..core.exceptions import AuthenticationError, RemoteError
from .repository import CredentialRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after sign-in."""

    email: str


class IdentityService:
    """Identity collaborator: sign-in, credential update and password reset."""

    def __init__(
        self,
        credentials: CredentialRepository,
        *,
        min_password_length: int = MIN_PASSWORD_LENGTH,
        clock: Callable[[], datetime] = datetime.now,
        reset_token_ttl: timedelta = timedelta(minutes=RESET_TOKEN_TTL_MINUTES),
    ):
        self._credentials = credentials
        self._min_password_length = min_password_length
        self._clock = clock
        self._reset_token_ttl = reset_token_ttl

    def sign_in(self, email: str, secret: str) -> SessionUser:
        email = (email or "").strip().lower()
        cred = self._credentials.get_by_email(email) if email else None
        if not cred:
            raise AuthenticationError("E-mail ou senha inválidos")

        try:
            ok = check_password_hash(cred.password_hash, secret or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("E-mail ou senha inválidos")
        return SessionUser(email=cred.email)

    def update_credential(self, email: str, new_secret: str) -> None:
        require_min_length(new_secret, "A senha", self._min_password_length)
        if not self._credentials.set_password_hash(email, generate_password_hash(new_secret)):
            raise RemoteError("Não foi possível atualizar a senha deste usuário.")
        logger.info("credential updated for %s", email)

    def request_credential_reset(self, email: str) -> Optional[str]:
        """Issue a one-time reset token for ``email``.

        Returns the token (to be delivered out of band) or ``None`` when the
        e-mail is unknown; callers show the same message either way.
        """
        email = require_non_empty(email, "E-mail").lower()
        token = secrets.token_urlsafe(32)
        if not self._credentials.set_reset_token(email, generate_password_hash(token), self._clock()):
            logger.info("password reset requested for unknown e-mail")
            return None
        logger.info("password reset token issued for %s", email)
        return token

    def complete_credential_reset(self, email: str, token: str, new_secret: str) -> None:
        """Set a new password using a token issued by ``request_credential_reset``.

        The token is single-use: storing the new hash clears it.
        """
        require_min_length(new_secret, "A senha", self._min_password_length)

        email = (email or "").strip().lower()
        cred = self._credentials.get_by_email(email) if email else None
        if not cred or not cred.reset_token_hash or not token:
            raise AuthenticationError("Link de recuperação inválido ou expirado")
        if cred.reset_requested_at is None or self._clock() - cred.reset_requested_at > self._reset_token_ttl:
            raise AuthenticationError("Link de recuperação inválido ou expirado")

        try:
            ok = check_password_hash(cred.reset_token_hash, token)
        except ValueError:
            ok = False
        if not ok:
            raise AuthenticationError("Link de recuperação inválido ou expirado")

        self.update_credential(cred.email, new_secret)
