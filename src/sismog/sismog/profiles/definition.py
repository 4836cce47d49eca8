from __future__ import annotations

import logging
from typing import Any, Mapping

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import (
    DEFAULT_PROFILE_CATEGORY,
    DEFAULT_PROFILE_PERMISSION,
    MIN_PASSWORD_LENGTH,
    PROFILES,
)
from ..core.exceptions import DomainError, PartialSuccessError, ValidationError
from ..identity.service import IdentityService
from ..remote.client import CollectionClient, Eq, Record
from ..resources.definition import ResourceDefinition
from .model import Profile

logger = logging.getLogger(__name__)

PASSWORD_FIELDS = ("new_password", "confirm_password")


def password_change_requested(draft: Mapping[str, Any]) -> bool:
    """Both password fields empty means no credential change."""
    return any(draft.get(f) for f in PASSWORD_FIELDS)


class ProfileDefinition(ResourceDefinition):
    """Account settings of the signed-in user.

    Saving updates the profile row looked up by e-mail (inserting one if it
    is missing), then changes the password through the identity service when
    requested. A password failure after the row was saved is reported as a
    partial success; the row change is not rolled back.
    """

    collection = PROFILES
    label = "Perfil"
    mutable_fields = ("name",)

    saved_message = "Seus dados foram atualizados."
    error_title = "Erro ao Salvar"

    def __init__(self, identity: IdentityService, email: str, *, min_password_length: int = MIN_PASSWORD_LENGTH):
        self._identity = identity
        self.email = email
        self.min_password_length = min_password_length
        self.filters = (Eq("email", email),)

    def default_draft(self) -> Record:
        # No profile row yet: suggest the local part of the e-mail as name.
        return {
            "id": None,
            "name": self.email.split("@")[0],
            "email": self.email,
            "new_password": "",
            "confirm_password": "",
        }

    def draft_from(self, record: Mapping[str, Any]) -> Record:
        draft = dict(record)
        for f in PASSWORD_FIELDS:
            draft.setdefault(f, "")
        return draft

    def validate(self, draft: Mapping[str, Any]) -> None:
        require_non_empty(draft.get("name"), "Nome de exibição")
        if not password_change_requested(draft):
            return
        new = draft.get("new_password") or ""
        if new != (draft.get("confirm_password") or ""):
            raise ValidationError("As senhas não conferem.")
        require_min_length(new, "A senha", self.min_password_length)

    def build_recovery_row(self, draft: Mapping[str, Any]) -> Record:
        return {
            "email": self.email,
            "name": str(draft.get("name")).strip(),
            "permission": DEFAULT_PROFILE_PERMISSION,
            "category": DEFAULT_PROFILE_CATEGORY,
            "active": True,
        }

    def persist(self, client: CollectionClient, draft: Mapping[str, Any]) -> None:
        existing = client.query(self.collection, filters=self.filters)
        if existing:
            client.update(self.collection, existing[0]["id"], {"name": str(draft.get("name")).strip()})
        else:
            logger.warning("profile row missing for %s, recreating it", self.email)
            client.insert(self.collection, [self.build_recovery_row(draft)])

        if not password_change_requested(draft):
            return
        try:
            self._identity.update_credential(self.email, draft["new_password"])
        except DomainError as exc:
            raise PartialSuccessError(
                f"Seu nome foi salvo, mas a senha não foi alterada: {exc}"
            ) from exc

    def present(self, record: Mapping[str, Any]) -> Profile:
        return Profile.from_record(record)
