from __future__ import annotations

from typing import Any

from lsprotocol.types import (
    INITIALIZE,
    INITIALIZED,
    TEXT_DOCUMENT_COMPLETION,
    WORKSPACE_DID_CHANGE_CONFIGURATION,
    WORKSPACE_DID_CHANGE_WATCHED_FILES,
    WORKSPACE_DID_CHANGE_WORKSPACE_FOLDERS,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DidChangeConfigurationParams,
    DidChangeWatchedFilesParams,
    DidChangeWorkspaceFoldersParams,
    InitializedParams,
    InitializeParams,
    LogMessageParams,
    MessageType,
)

from devenvls import __version__
from devenvls.config import Settings
from devenvls.lsp.capabilities.capabilities import CapabilityManager
from devenvls.lsp.devenv_language_server import DevenvLanguageServer
from devenvls.lsp.text_sync_manager import TextSyncManager
from devenvls.options.schema import OptionSchemaError, OptionSchemaIndex


def _log(ls: DevenvLanguageServer, message: str, type: MessageType = MessageType.Info):
    ls.window_log_message(LogMessageParams(type=type, message=message))


def apply_initialization_options(
    ls: DevenvLanguageServer,
    initialization_options: Any,
    load_schema: bool = True,
) -> None:
    """
    Merge the client's initializationOptions into the settings and, unless
    a schema was preloaded, load the configured option schema.

    A missing or broken schema is reported to the client; the server keeps
    running with an empty index.
    """
    if isinstance(initialization_options, dict):
        ls.apply_settings(ls.settings.merge(initialization_options))

    if not load_schema:
        return

    options_file = ls.settings.options_file
    if options_file is None:
        _log(
            ls,
            "No option schema configured (set DEVENVLS_OPTIONS); "
            "completion is disabled",
            MessageType.Warning,
        )
        return

    try:
        index = ls.load_options(options_file)
    except OptionSchemaError as e:
        _log(ls, str(e), MessageType.Error)
        return

    _log(ls, f"Loaded {len(index)} top-level options from {options_file}")


def create_server(
    option_index: OptionSchemaIndex | None = None,
    settings: Settings | None = None,
) -> DevenvLanguageServer:
    """
    Creates and returns a configured Language Server instance.

    The LanguageServer class from pygls handles:
    - JSON-RPC communication with clients (editors)
    - Request/response lifecycle
    - Notifications and event handling

    Args:
        option_index: Preloaded option schema. When omitted the schema named
            by `settings.options_file` is loaded during `initialize`.
        settings: Server settings, environment defaults if omitted.
    """
    server = DevenvLanguageServer(
        "devenvls",
        __version__,
        settings=settings or Settings.from_env(),
        option_index=option_index,
    )
    preloaded = option_index is not None

    # Text sync first so capabilities can register hooks on it.
    server.text_sync_manager = TextSyncManager(server)
    server.text_sync_manager.register_handlers()

    server.capability_manager = CapabilityManager(server)
    server.capability_manager.register_all()

    @server.feature(INITIALIZE)
    async def initialize(ls: DevenvLanguageServer, params: InitializeParams):
        apply_initialization_options(
            ls, params.initialization_options, load_schema=not preloaded
        )

    @server.feature(INITIALIZED)
    async def initialized(ls: DevenvLanguageServer, params: InitializedParams):
        _log(ls, "devenvls is now initialized!")

    @server.feature(
        TEXT_DOCUMENT_COMPLETION,
        CompletionOptions(trigger_characters=["."], resolve_provider=False),
    )
    async def completion(ls: DevenvLanguageServer, params: CompletionParams):
        if ls.capability_manager:
            return await ls.capability_manager.handle_completion(params)
        return CompletionList(is_incomplete=False, items=[])

    @server.feature(WORKSPACE_DID_CHANGE_WORKSPACE_FOLDERS)
    async def did_change_workspace_folders(
        ls: DevenvLanguageServer, params: DidChangeWorkspaceFoldersParams
    ):
        _log(ls, "workspace folders changed!")

    @server.feature(WORKSPACE_DID_CHANGE_CONFIGURATION)
    async def did_change_configuration(
        ls: DevenvLanguageServer, params: DidChangeConfigurationParams
    ):
        _log(ls, "configuration changed!")

    @server.feature(WORKSPACE_DID_CHANGE_WATCHED_FILES)
    async def did_change_watched_files(
        ls: DevenvLanguageServer, params: DidChangeWatchedFilesParams
    ):
        _log(ls, "watched files have changed!")

    return server
