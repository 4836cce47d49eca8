from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..core.exceptions import DomainError
from ..remote.client import CollectionClient, Record
from .definition import ResourceDefinition
from .feedback import FeedbackChannel
from .store import ResourceStore

logger = logging.getLogger(__name__)


class DeletionConfirmation:
    """Two-step guard before an irreversible delete.

    States: idle (``target is None``) and pending(target). Both ``cancel``
    and ``confirm`` return to idle, whatever the outcome of the delete call.
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
        self.target: Optional[Record] = None

    @property
    def is_open(self) -> bool:
        return self.target is not None

    def request_delete(self, record: Mapping[str, Any]) -> None:
        if record.get("id") is None:
            raise ValueError("only persisted records can be deleted")
        self.target = dict(record)

    def cancel(self) -> None:
        self.target = None

    def confirm(self) -> bool:
        if self.target is None:
            return False

        record_id = self.target["id"]
        try:
            self._client.delete(self._definition.collection, record_id)
        except DomainError as exc:
            logger.warning("delete %s id=%s failed: %s", self._definition.collection, record_id, exc)
            self._feedback.error(self._definition.error_title, str(exc))
            return False
        finally:
            self.target = None

        self._store.refresh()
        self._feedback.success(self._definition.saved_title, self._definition.deleted_message)
        return True
