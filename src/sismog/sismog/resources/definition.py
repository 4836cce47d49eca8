from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from ..remote.client import CollectionClient, Eq, Order, Record, Relation


class ResourceDefinition:
    """Everything a page supplies to the generic resource controller.

    Subclasses set the class attributes and override ``validate``; the
    insert/update split in ``persist`` works for any collection whose
    mutable fields are listed in ``mutable_fields``.
    """

    collection: str = ""
    label: str = "Registro"

    filters: Tuple[Eq, ...] = ()
    order: Optional[Order] = None
    relations: Tuple[Relation, ...] = ()
    search_fields: Tuple[str, ...] = ()

    mutable_fields: Tuple[str, ...] = ()
    creation_defaults: Mapping[str, Any] = {}

    saved_title = "Sucesso!"
    saved_message = "Registro salvo com sucesso!"
    deleted_message = "Registro removido com sucesso!"
    error_title = "Erro!"
    invalid_title = "Dados inválidos"

    def default_draft(self) -> Record:
        return {}

    def draft_from(self, record: Mapping[str, Any]) -> Record:
        return dict(record)

    def validate(self, draft: Mapping[str, Any]) -> None:
        """Raise ``ValidationError`` before any remote call."""

    def build_insert(self, draft: Mapping[str, Any]) -> Record:
        row: Dict[str, Any] = dict(self.creation_defaults)
        row.update({f: draft.get(f) for f in self.mutable_fields})
        return row

    def build_patch(self, draft: Mapping[str, Any]) -> Record:
        # Never carries id, created_at or joined relations.
        return {f: draft.get(f) for f in self.mutable_fields}

    def persist(self, client: CollectionClient, draft: Mapping[str, Any]) -> None:
        record_id = draft.get("id")
        if record_id is not None:
            client.update(self.collection, record_id, self.build_patch(draft))
        else:
            client.insert(self.collection, [self.build_insert(draft)])

    def present(self, record: Mapping[str, Any]) -> Any:
        """Display mapping used by the list templates."""
        return record
