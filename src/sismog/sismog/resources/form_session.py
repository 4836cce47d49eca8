from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..core.enums import FormMode
from ..core.exceptions import DomainError, PartialSuccessError, ValidationError
from ..remote.client import CollectionClient, Record
from .definition import ResourceDefinition
from .feedback import FeedbackChannel
from .store import ResourceStore

logger = logging.getLogger(__name__)


class FormSession:
    """Create/edit modal lifecycle for one record of a resource.

    ``submit()`` runs strictly in order: validate, persist, refresh, feedback.
    Any failure leaves the session open with its draft intact.
    """

    def __init__(
        self,
        definition: ResourceDefinition,
        client: CollectionClient,
        store: ResourceStore,
        feedback: FeedbackChannel,
    ):
        self._definition = definition
        self._client = client
        self._store = store
        self._feedback = feedback

        self.is_open = False
        self.mode: Optional[FormMode] = None
        self.draft: Record = {}
        self.saving = False
        self.last_error: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.mode == FormMode.EDITING

    def open(self, existing: Optional[Mapping[str, Any]] = None) -> None:
        if self.is_open:
            logger.debug("discarding unsaved %s draft", self._definition.collection)
        if existing is not None:
            self.draft = self._definition.draft_from(existing)
            self.mode = FormMode.EDITING
        else:
            self.draft = self._definition.default_draft()
            self.mode = FormMode.CREATING
        self.is_open = True
        self.last_error = None

    def update(self, field: str, value: Any) -> None:
        if not self.is_open:
            raise RuntimeError("no open form session")
        self.draft[field] = value

    def close(self) -> None:
        self.is_open = False
        self.mode = None
        self.draft = {}
        self.last_error = None

    def submit(self) -> bool:
        if not self.is_open:
            raise RuntimeError("no open form session")
        if self.saving:
            return False

        try:
            self._definition.validate(self.draft)
        except ValidationError as exc:
            self.fail(self._definition.invalid_title, str(exc))
            return False

        self.saving = True
        try:
            self._definition.persist(self._client, dict(self.draft))
        except PartialSuccessError as exc:
            # The record itself committed; show the new state.
            self._store.refresh()
            self.fail("Salvo parcialmente", str(exc))
            return False
        except DomainError as exc:
            logger.warning("saving %s failed: %s", self._definition.collection, exc)
            self.fail(self._definition.error_title, str(exc))
            return False
        finally:
            self.saving = False

        self.close()
        self._store.refresh()
        self._feedback.success(self._definition.saved_title, self._definition.saved_message)
        return True

    def fail(self, title: str, message: str) -> None:
        """Report an error on the open form without closing it."""
        self.last_error = message
        self._feedback.error(title, message)
