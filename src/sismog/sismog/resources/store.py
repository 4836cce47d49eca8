from __future__ import annotations

import logging
import threading
from typing import Any, List, Optional, Sequence, Tuple

from ..core.exceptions import RemoteError
from ..remote.client import CollectionClient, Eq, Order, Record, Relation

logger = logging.getLogger(__name__)


class ResourceStore:
    """In-memory list of one collection for the lifetime of a page.

    The store is the only writer of its list: other components read
    ``records`` or ask for a ``refresh()``.
    """

    def __init__(
        self,
        client: CollectionClient,
        collection: str,
        *,
        filters: Sequence[Eq] = (),
        order: Optional[Order] = None,
        relations: Sequence[Relation] = (),
    ):
        self._client = client
        self.collection = collection
        self._filters = tuple(filters)
        self._order = order
        self._relations = tuple(relations)

        self._records: List[Record] = []
        self._lock = threading.Lock()
        self._in_flight = 0
        self.loading = True
        self.error: Optional[str] = None

    @property
    def records(self) -> Tuple[Record, ...]:
        with self._lock:
            return tuple(self._records)

    def refresh(self) -> bool:
        """Reload the list; on failure keep the previous list and record the error.

        ``loading`` stays set until every overlapping call has returned.
        """
        with self._lock:
            self._in_flight += 1
            self.loading = True
        try:
            rows = self._client.query(
                self.collection,
                filters=self._filters,
                order=self._order,
                relations=self._relations,
            )
        except RemoteError as exc:
            logger.warning("refresh of %s failed: %s", self.collection, exc)
            with self._lock:
                self.error = str(exc)
            return False
        finally:
            with self._lock:
                self._in_flight -= 1
                self.loading = self._in_flight > 0

        persisted = [dict(r) for r in rows if r.get("id") is not None]
        if len(persisted) != len(rows):
            logger.warning("%s: dropped %d row(s) without id", self.collection, len(rows) - len(persisted))
        with self._lock:
            self._records = persisted
            self.error = None
        return True

    def get(self, record_id: Any) -> Optional[Record]:
        # Ids arrive from URLs as str or int.
        key = str(record_id)
        for record in self.records:
            if str(record["id"]) == key:
                return dict(record)
        return None
