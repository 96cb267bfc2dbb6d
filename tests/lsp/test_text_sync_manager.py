from unittest.mock import Mock

import pytest
from lsprotocol.types import (
    DidCloseTextDocumentParams,
    DidSaveTextDocumentParams,
    LogMessageParams,
    MessageType,
    TextDocumentIdentifier,
)

from devenvls.lsp.text_sync_manager import CHANGE, CLOSE, SAVE, TextSyncManager


@pytest.fixture
def server():
    """Create a mock server for testing."""
    server = Mock()
    server.window_log_message = Mock()
    return server


@pytest.fixture
def text_sync(server):
    return TextSyncManager(server)


def test_hook_registration(text_sync):
    async def on_close(params):
        pass

    text_sync.add_on_close_hook(on_close)

    assert text_sync.hooks(CLOSE) == [on_close]
    assert text_sync.hooks(CHANGE) == []


@pytest.mark.asyncio
async def test_hook_receives_params(text_sync):
    received = []

    async def on_close(params: DidCloseTextDocumentParams):
        received.append(params.text_document.uri)

    text_sync.add_on_close_hook(on_close)

    await text_sync.broadcast(
        CLOSE,
        DidCloseTextDocumentParams(
            text_document=TextDocumentIdentifier(uri="file:///project/devenv.nix")
        ),
    )

    assert received == ["file:///project/devenv.nix"]


@pytest.mark.asyncio
async def test_hooks_run_in_registration_order(text_sync):
    execution_order = []

    async def hook1(params):
        execution_order.append(1)

    async def hook2(params):
        execution_order.append(2)

    text_sync.add_on_save_hook(hook1)
    text_sync.add_on_save_hook(hook2)

    await text_sync.broadcast(
        SAVE,
        DidSaveTextDocumentParams(text_document=TextDocumentIdentifier(uri="file:///a.nix")),
    )

    assert execution_order == [1, 2]


@pytest.mark.asyncio
async def test_hook_error_isolation(text_sync, server):
    """A failing hook is logged and the next hook still runs."""
    second_called = False

    async def failing_hook(params):
        raise ValueError("boom")

    async def successful_hook(params):
        nonlocal second_called
        second_called = True

    text_sync.add_on_save_hook(failing_hook)
    text_sync.add_on_save_hook(successful_hook)

    await text_sync.broadcast(
        SAVE,
        DidSaveTextDocumentParams(text_document=TextDocumentIdentifier(uri="file:///a.nix")),
    )

    assert second_called
    logged = server.window_log_message.call_args[0][0]
    assert isinstance(logged, LogMessageParams)
    assert logged.type == MessageType.Error
    assert "failing_hook" in logged.message
    assert "ValueError: boom" in logged.message
