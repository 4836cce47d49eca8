from __future__ import annotations

from typing import Any, List, Optional

from ..remote.client import CollectionClient, Record
from .definition import ResourceDefinition
from .deletion import DeletionConfirmation
from .feedback import FeedbackChannel
from .filter_view import filter_records
from .form_session import FormSession
from .store import ResourceStore


class ResourceController:
    """One page worth of CRUD state for a collection.

    Composes the store, the search filter, the form session and the deletion
    guard, all reporting through the shared feedback channel.
    """

    def __init__(self, definition: ResourceDefinition, client: CollectionClient, feedback: FeedbackChannel):
        self.definition = definition
        self.feedback = feedback
        self.store = ResourceStore(
            client,
            definition.collection,
            filters=definition.filters,
            order=definition.order,
            relations=definition.relations,
        )
        self.form = FormSession(definition, client, self.store, feedback)
        self.deletion = DeletionConfirmation(definition, client, self.store, feedback)
        self.search = ""

    def mount(self) -> bool:
        return self.store.refresh()

    def set_search(self, text: Optional[str]) -> None:
        self.search = text or ""

    @property
    def visible(self) -> List[Record]:
        return filter_records(self.store.records, self.search, self.definition.search_fields)

    def rows(self) -> List[Any]:
        return [self.definition.present(r) for r in self.visible]

    def find(self, record_id: Any) -> Optional[Record]:
        return self.store.get(record_id)

    def open_create(self) -> None:
        self.form.open()

    def open_edit(self, record_id: Any) -> bool:
        record = self.find(record_id)
        if record is None:
            return False
        self.form.open(record)
        return True

    def request_delete(self, record_id: Any) -> bool:
        record = self.find(record_id)
        if record is None:
            return False
        self.deletion.request_delete(record)
        return True
