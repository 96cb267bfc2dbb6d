"""
Document Store for devenvls

Keeps per-document state for every document the editor has sent us:
- the full text (replaced wholesale on every change)
- the cursor position of the last completion request
- the scope path computed on the last change

Each map is guarded by its own lock. There is no transaction across maps,
so a reader can observe new text together with a scope from an earlier
change. Completion tolerates that.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class CursorPosition:
    """Zero-based line and character offset within the line."""

    line: int = 0
    character: int = 0


ORIGIN = CursorPosition(0, 0)


class DocumentStore:
    """
    Process-wide state for open documents, passed explicitly to whoever
    needs it (the completion engine and the LSP handlers).

    Usage:
        store = DocumentStore()
        store.put(uri, text)
        store.set_scope(uri, ["services"])
        store.get_scope(uri)  # -> ["services"]
        store.get_scope("file:///never-opened")  # -> []
    """

    def __init__(self) -> None:
        self._texts: dict[str, str] = {}
        self._cursors: dict[str, CursorPosition] = {}
        self._scopes: dict[str, tuple[str, ...]] = {}

        self._texts_lock = threading.Lock()
        self._cursors_lock = threading.Lock()
        self._scopes_lock = threading.Lock()

    def put(self, uri: str, text: str) -> None:
        """Replace the stored text. Does not touch the cached scope."""
        with self._texts_lock:
            self._texts[uri] = text

    def get(self, uri: str) -> str:
        """Current text, or "" if the document was never opened."""
        with self._texts_lock:
            return self._texts.get(uri, "")

    def set_scope(self, uri: str, path: Sequence[str]) -> None:
        with self._scopes_lock:
            self._scopes[uri] = tuple(path)

    def get_scope(self, uri: str) -> list[str]:
        with self._scopes_lock:
            return list(self._scopes.get(uri, ()))

    def set_cursor(self, uri: str, position: CursorPosition) -> None:
        with self._cursors_lock:
            self._cursors[uri] = position

    def get_cursor(self, uri: str) -> CursorPosition:
        with self._cursors_lock:
            return self._cursors.get(uri, ORIGIN)

    def evict(self, uri: str) -> None:
        """Forget everything about `uri`."""
        with self._texts_lock:
            self._texts.pop(uri, None)
        with self._cursors_lock:
            self._cursors.pop(uri, None)
        with self._scopes_lock:
            self._scopes.pop(uri, None)

    def __contains__(self, uri: object) -> bool:
        with self._texts_lock:
            return uri in self._texts

    def __len__(self) -> int:
        with self._texts_lock:
            return len(self._texts)
