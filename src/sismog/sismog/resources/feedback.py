from __future__ import annotations

from dataclasses import dataclass
from typing import Any, MutableMapping, Optional

from ..core.constants import FEEDBACK_SESSION_KEY
from ..core.enums import FeedbackKind


@dataclass(frozen=True)
class Feedback:
    kind: FeedbackKind
    title: str
    message: str

    @property
    def is_error(self) -> bool:
        return self.kind == FeedbackKind.ERROR


class FeedbackChannel:
    """Single-slot success/error notification.

    The slot lives in ``storage`` under one key, so passing ``flask.session``
    shares one channel across every page of a user session. Last write wins;
    nothing is queued.
    """

    def __init__(self, storage: Optional[MutableMapping[str, Any]] = None, *, key: str = FEEDBACK_SESSION_KEY):
        self._storage = storage if storage is not None else {}
        self._key = key

    def show(self, kind: FeedbackKind, title: str, message: str) -> None:
        self._storage[self._key] = {"kind": FeedbackKind(kind).value, "title": title, "message": message}

    def success(self, title: str, message: str) -> None:
        self.show(FeedbackKind.SUCCESS, title, message)

    def error(self, title: str, message: str) -> None:
        self.show(FeedbackKind.ERROR, title, message)

    def dismiss(self) -> None:
        self._storage.pop(self._key, None)

    @property
    def is_open(self) -> bool:
        return self._key in self._storage

    @property
    def current(self) -> Optional[Feedback]:
        raw = self._storage.get(self._key)
        if not raw:
            return None
        return Feedback(kind=FeedbackKind(raw["kind"]), title=raw["title"], message=raw["message"])
