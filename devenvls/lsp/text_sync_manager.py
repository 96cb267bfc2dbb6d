"""
Text Synchronization Manager

Registers the LSP text sync notifications and fans them out to hooks, so
capabilities can react to document lifecycle events without owning the
handlers themselves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable

from lsprotocol.types import (
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DidSaveTextDocumentParams,
    LogMessageParams,
    MessageType,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_SAVE,
)

if TYPE_CHECKING:
    from devenvls.lsp.devenv_language_server import DevenvLanguageServer


# Type aliases for hook signatures
OnOpenHook = Callable[[DidOpenTextDocumentParams], Awaitable[None]]
OnChangeHook = Callable[[DidChangeTextDocumentParams], Awaitable[None]]
OnSaveHook = Callable[[DidSaveTextDocumentParams], Awaitable[None]]
OnCloseHook = Callable[[DidCloseTextDocumentParams], Awaitable[None]]

OPEN = "open"
CHANGE = "change"
SAVE = "save"
CLOSE = "close"


class TextSyncManager:
    """
    Manages text document synchronization and hook broadcasting.

    Hooks run in registration order. A failing hook is reported to the
    client as an error log message and does not stop the others.

    Usage:
        text_sync = TextSyncManager(server)
        text_sync.register_handlers()
        server.text_sync_manager = text_sync

        # The options completion capability keeps scopes current:
        text_sync.add_on_change_hook(self._on_document_changed)
    """

    def __init__(self, server: DevenvLanguageServer) -> None:
        self.server = server
        self._hooks: dict[str, list[Callable[[Any], Awaitable[None]]]] = {
            OPEN: [],
            CHANGE: [],
            SAVE: [],
            CLOSE: [],
        }

    def add_on_open_hook(self, hook: OnOpenHook) -> None:
        self._hooks[OPEN].append(hook)

    def add_on_change_hook(self, hook: OnChangeHook) -> None:
        """
        Register a hook for document change events.

        Runs on every keystroke with the full new text available, so the
        hook should not do more than a reparse of the one document.
        """
        self._hooks[CHANGE].append(hook)

    def add_on_save_hook(self, hook: OnSaveHook) -> None:
        self._hooks[SAVE].append(hook)

    def add_on_close_hook(self, hook: OnCloseHook) -> None:
        self._hooks[CLOSE].append(hook)

    def hooks(self, event: str) -> list[Callable[[Any], Awaitable[None]]]:
        return list(self._hooks[event])

    async def broadcast(self, event: str, params) -> None:
        """Call every hook registered for `event` with `params`."""
        for hook in self._hooks[event]:
            try:
                await hook(params)
            except Exception as e:
                self.server.window_log_message(
                    LogMessageParams(
                        type=MessageType.Error,
                        message=f"Error in on_{event} hook "
                                f"{getattr(hook, '__name__', repr(hook))}: "
                                f"{type(e).__name__}: {e}"
                    )
                )

    def _log(self, message: str) -> None:
        self.server.window_log_message(
            LogMessageParams(type=MessageType.Info, message=message)
        )

    def register_handlers(self) -> None:
        """
        Register textDocument/didOpen, didChange, didSave and didClose.

        Call once, before capabilities register their hooks.
        """

        @self.server.feature(TEXT_DOCUMENT_DID_OPEN)
        async def did_open(
            ls: DevenvLanguageServer,
            params: DidOpenTextDocumentParams,
        ) -> None:
            # Text arrives through didChange; opening only gets logged.
            self._log(f"Document opened: {params.text_document.uri}")
            await self.broadcast(OPEN, params)

        @self.server.feature(TEXT_DOCUMENT_DID_CHANGE)
        async def did_change(
            ls: DevenvLanguageServer,
            params: DidChangeTextDocumentParams,
        ) -> None:
            await self.broadcast(CHANGE, params)
            self._log(f"Document changed: {params.text_document.uri}")

        @self.server.feature(TEXT_DOCUMENT_DID_SAVE)
        async def did_save(
            ls: DevenvLanguageServer,
            params: DidSaveTextDocumentParams,
        ) -> None:
            self._log(f"Document saved: {params.text_document.uri}")
            await self.broadcast(SAVE, params)

        @self.server.feature(TEXT_DOCUMENT_DID_CLOSE)
        async def did_close(
            ls: DevenvLanguageServer,
            params: DidCloseTextDocumentParams,
        ) -> None:
            self._log(f"Document closed: {params.text_document.uri}")
            await self.broadcast(CLOSE, params)
