"""
LSP Capabilities Manager

Completion in devenvls is served by capabilities registered with a manager.
Today there is one, OptionsCompletionCapability, which answers option names
from the schema. The manager merges what every willing capability returns
and keeps one failing capability from breaking completion.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from lsprotocol.types import (
    CompletionList,
    CompletionParams,
    LogMessageParams,
    MessageType,
)


if TYPE_CHECKING:
    from devenvls.lsp.devenv_language_server import DevenvLanguageServer


class Capability(ABC):
    """
    A feature provider bound to the server.

    Subclasses reach the document store and completion engine through
    `self.server`, and wire their text sync hooks in `register()`.
    """

    def __init__(self, server: DevenvLanguageServer) -> None:
        self.server = server

    def register(self) -> None:
        """Add text sync hooks; runs once, after the TextSyncManager exists."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Key used in CapabilityManager.capabilities and in error logs."""

    @property
    @abstractmethod
    def description(self) -> str: ...

    @abstractmethod
    async def can_handle(self, params) -> bool: ...


class CompletionCapability(Capability):
    """Offers CompletionItems for a textDocument/completion request."""

    @abstractmethod
    async def can_handle(self, params: CompletionParams) -> bool:
        """False to sit out this request (e.g. a document it does not serve)."""

    @abstractmethod
    async def complete(self, params: CompletionParams) -> CompletionList:
        """Items for the cursor; the manager concatenates them in order."""


class CapabilityManager:
    """
    Owns the server's capabilities, keyed by name. Without an explicit
    mapping it installs the options completion capability.

    Usage:
        manager = CapabilityManager(server)
        manager.register_all()
    """

    def __init__(
        self,
        server: DevenvLanguageServer,
        capabilities: dict[str, Capability] | None = None,
    ):
        self.server = server

        # Default capabilities
        if capabilities is None:
            from devenvls.lsp.capabilities.options_capabilities import (
                OptionsCompletionCapability,
            )

            capabilities = {
                "options_completion": OptionsCompletionCapability(server),
            }

        self.capabilities = capabilities
        self._registered = False

    def register_all(self) -> None:
        """Let each capability add its hooks; repeated calls do nothing."""
        if self._registered:
            return

        for capability in self.capabilities.values():
            capability.register()

        self._registered = True

    def get_capability(self, name: str) -> Capability | None:
        return self.capabilities.get(name)

    def get_capabilities_by_type(self, capability_type: type) -> list[Capability]:
        return [
            cap
            for cap in self.capabilities.values()
            if isinstance(cap, capability_type)
        ]

    async def handle_completion(self, params: CompletionParams) -> CompletionList:
        """
        Concatenate the items of every completion capability willing to
        answer. A capability that raises is logged and contributes nothing.
        """
        all_items = []

        for capability in self.get_capabilities_by_type(CompletionCapability):
            try:
                if await capability.can_handle(params):
                    result = await capability.complete(params)  # pyright: ignore
                    all_items.extend(result.items)
            except Exception as e:
                self.server.window_log_message(
                    LogMessageParams(
                        type=MessageType.Error,
                        message=f"Completion error in {capability.name}: {e}"
                    )
                )

        return CompletionList(is_incomplete=False, items=all_items)
