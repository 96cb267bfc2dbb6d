from __future__ import annotations

from pathlib import Path

from lsprotocol.types import TextDocumentSyncKind
from pygls.lsp.server import LanguageServer

from devenvls.completion.engine import CompletionEngine
from devenvls.config import Settings
from devenvls.lsp.capabilities.capabilities import CapabilityManager
from devenvls.lsp.text_sync_manager import TextSyncManager
from devenvls.options.schema import OptionSchemaIndex
from devenvls.workspace.document_store import DocumentStore


class DevenvLanguageServer(LanguageServer):
    """
    Custom Language Server with devenv-specific attributes.

    Attributes:
        settings: Effective server settings
        document_store: Text, cursor and scope of every open document
        option_index: The devenv option schema
        completion_engine: Resolves completions against the two above
    """

    def __init__(
        self,
        name: str,
        version: str,
        settings: Settings | None = None,
        option_index: OptionSchemaIndex | None = None,
    ):
        super().__init__(
            name, version, text_document_sync_kind=TextDocumentSyncKind.Full
        )

        self.settings = settings or Settings()
        self.document_store = DocumentStore()
        self.option_index = option_index or OptionSchemaIndex()
        self.completion_engine = CompletionEngine(
            self.document_store, self.option_index, settings=self.settings
        )

        self.capability_manager: CapabilityManager | None = None
        self.text_sync_manager: TextSyncManager | None = None

    def apply_settings(self, settings: Settings) -> None:
        self.settings = settings
        self.completion_engine.settings = settings

    def load_options(self, file_path: Path) -> OptionSchemaIndex:
        """
        Replace the option index with the schema at `file_path`.

        Raises:
            OptionSchemaError: the file could not be loaded.
        """
        index = OptionSchemaIndex.from_file(file_path)
        self.option_index = index
        self.completion_engine.index = index
        return index
