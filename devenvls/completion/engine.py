"""
Completion Engine

Ties the document store, the Nix parser, the scope resolver and the option
index together. It knows nothing about LSP message types; the completion
capability adapts it to the protocol.

Change event:
    1. read the cursor cached by the last completion request (origin if none)
    2. store the new text
    3. re-parse the whole document
    4. resolve the scope at the cached cursor and cache it

Completion request:
    1. read the stored text
    2. take the current line up to the (clamped) cursor
    3. split it into dotted path and partial word
    4. cache the cursor for the next change event
    5. read the cached scope
    6. query the option index with scope + dotted path
"""

from __future__ import annotations

import logging

from devenvls.completion.types import CompletionCandidate
from devenvls.config import Settings
from devenvls.context.nix_parser import NixParser
from devenvls.context.path_parser import line_prefix, parse_completion_context
from devenvls.context.scope_resolver import resolve_scope, to_point
from devenvls.options.schema import OptionSchemaIndex
from devenvls.workspace.document_store import CursorPosition, DocumentStore

logger = logging.getLogger(__name__)


class CompletionEngine:
    def __init__(
        self,
        store: DocumentStore,
        index: OptionSchemaIndex,
        parser: NixParser | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.store = store
        self.index = index
        self.parser = parser or NixParser()
        self.settings = settings or Settings()

    def _compute_scope(self, text: str, position: CursorPosition) -> list[str]:
        tree = self.parser.parse(text)
        return resolve_scope(tree.root_node, to_point(text, position), text)

    def on_change(self, uri: str, text: str) -> list[str]:
        """Store `text` for `uri` and refresh its cached scope."""
        position = self.store.get_cursor(uri)
        self.store.put(uri, text)

        scope = self._compute_scope(text, position)
        self.store.set_scope(uri, scope)

        logger.debug("Scope for %s at %s: %s", uri, position, scope)
        return scope

    def on_close(self, uri: str) -> None:
        if self.settings.evict_on_close:
            self.store.evict(uri)
            logger.debug("Evicted %s", uri)

    def complete(self, uri: str, position: CursorPosition) -> list[CompletionCandidate]:
        """Candidates for the cursor at `position` in `uri`."""
        text = self.store.get(uri)
        prefix = line_prefix(text, position.line, position.character)
        context = parse_completion_context(prefix)

        self.store.set_cursor(uri, position)

        if self.settings.resolve_scope_on_completion:
            scope = self._compute_scope(text, position)
            self.store.set_scope(uri, scope)
        else:
            scope = self.store.get_scope(uri)

        search_path = [*scope, *context.dotted_path]
        logger.debug(
            "Line until cursor: %r, path: %s, partial key: %r",
            prefix,
            search_path,
            context.partial_word,
        )

        candidates = self.index.query(search_path, context.partial_word)
        logger.debug("Found %d completion candidates", len(candidates))
        return candidates
