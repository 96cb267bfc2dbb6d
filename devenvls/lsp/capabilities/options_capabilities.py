"""
Option-related LSP capabilities.

Provides completion of devenv option names, e.g. in devenv.nix:

    services.postgres.en|   ->  enable  "Enable Postgres"
"""

from __future__ import annotations

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
)

from devenvls.lsp.capabilities.capabilities import CompletionCapability
from devenvls.workspace.document_store import CursorPosition


def _full_text(server, params: DidChangeTextDocumentParams) -> str:
    """
    The document's full text after the change.

    With full sync the last change carries the whole document. Otherwise
    fall back to pygls' workspace copy, which has already applied the edits.
    """
    for change in reversed(params.content_changes):
        if getattr(change, "range", None) is None:
            return change.text

    document = server.workspace.get_text_document(params.text_document.uri)
    return document.source


class OptionsCompletionCapability(CompletionCapability):
    """Provides completion for devenv option names."""

    @property
    def name(self) -> str:
        return "options_completion"

    @property
    def description(self) -> str:
        return "Autocomplete devenv option names from the option schema"

    def register(self) -> None:
        text_sync = self.server.text_sync_manager
        if text_sync is None:
            return

        text_sync.add_on_change_hook(self._on_document_changed)
        text_sync.add_on_close_hook(self._on_document_closed)

    async def _on_document_changed(self, params: DidChangeTextDocumentParams) -> None:
        text = _full_text(self.server, params)
        self.server.completion_engine.on_change(params.text_document.uri, text)

    async def _on_document_closed(self, params: DidCloseTextDocumentParams) -> None:
        self.server.completion_engine.on_close(params.text_document.uri)

    async def can_handle(self, params: CompletionParams) -> bool:
        return True

    async def complete(self, params: CompletionParams) -> CompletionList:
        """Provide option name completions."""
        position = CursorPosition(
            line=params.position.line, character=params.position.character
        )
        candidates = self.server.completion_engine.complete(
            params.text_document.uri, position
        )

        items = [
            CompletionItem(
                label=candidate.label,
                kind=CompletionItemKind.Property,
                detail=candidate.detail or "",
            )
            for candidate in candidates
        ]

        return CompletionList(is_incomplete=False, items=items)
