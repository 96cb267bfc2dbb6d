"""
Tests for the devenv Language Server setup.

These tests verify that the server can be created, has the expected features
registered, and applies client initialization options.
"""
import json
from unittest.mock import Mock

import pytest
from lsprotocol.types import (
    INITIALIZE,
    INITIALIZED,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_SAVE,
    WORKSPACE_DID_CHANGE_CONFIGURATION,
    WORKSPACE_DID_CHANGE_WATCHED_FILES,
    WORKSPACE_DID_CHANGE_WORKSPACE_FOLDERS,
    MessageType,
)

from devenvls.config import Settings
from devenvls.lsp.devenv_language_server import DevenvLanguageServer
from devenvls.lsp.server import apply_initialization_options, create_server
from devenvls.options.schema import OptionSchemaIndex


@pytest.fixture
def server(option_index):
    server = create_server(option_index=option_index, settings=Settings())
    server.window_log_message = Mock()
    return server


def test_server_creation(server):
    assert isinstance(server, DevenvLanguageServer)
    assert server.name == "devenvls"
    assert server.version == "0.1.0"


@pytest.mark.parametrize(
    "feature",
    [
        INITIALIZE,
        INITIALIZED,
        TEXT_DOCUMENT_COMPLETION,
        TEXT_DOCUMENT_DID_OPEN,
        TEXT_DOCUMENT_DID_CHANGE,
        TEXT_DOCUMENT_DID_SAVE,
        TEXT_DOCUMENT_DID_CLOSE,
        WORKSPACE_DID_CHANGE_WORKSPACE_FOLDERS,
        WORKSPACE_DID_CHANGE_CONFIGURATION,
        WORKSPACE_DID_CHANGE_WATCHED_FILES,
    ],
)
def test_feature_registered(server, feature):
    assert feature in server.protocol.fm._features


def test_completion_triggers_on_dot(server):
    options = server.protocol.fm.feature_options[TEXT_DOCUMENT_COMPLETION]
    assert options.trigger_characters == ["."]
    assert options.resolve_provider is False


def test_state_is_wired_together(server, option_index):
    assert server.option_index is option_index
    assert server.completion_engine.index is option_index
    assert server.completion_engine.store is server.document_store
    assert server.capability_manager.get_capability("options_completion") is not None


def test_servers_do_not_share_state(option_index):
    first = create_server(option_index=option_index, settings=Settings())
    second = create_server(option_index=option_index, settings=Settings())

    first.document_store.put("file:///a.nix", "{ }")

    assert "file:///a.nix" not in second.document_store


class TestInitializationOptions:
    def test_loads_schema_from_options_file(self, tmp_path, devenv_options):
        options_file = tmp_path / "options.json"
        options_file.write_text(json.dumps(devenv_options))
        server = create_server(settings=Settings())
        server.window_log_message = Mock()

        apply_initialization_options(server, {"optionsFile": str(options_file)})

        assert server.settings.options_file == options_file
        assert server.option_index.top_level_keys() == list(devenv_options)
        assert server.completion_engine.index is server.option_index
        assert server.window_log_message.call_args[0][0].type == MessageType.Info

    def test_missing_schema_warns(self):
        server = create_server(settings=Settings())
        server.window_log_message = Mock()

        apply_initialization_options(server, None)

        assert len(server.option_index) == 0
        assert server.window_log_message.call_args[0][0].type == MessageType.Warning

    def test_broken_schema_is_reported(self, tmp_path):
        options_file = tmp_path / "options.json"
        options_file.write_text("{broken")
        server = create_server(settings=Settings(options_file=options_file))
        server.window_log_message = Mock()

        apply_initialization_options(server, {})

        assert len(server.option_index) == 0
        assert server.window_log_message.call_args[0][0].type == MessageType.Error

    def test_preloaded_schema_is_kept(self, server, option_index, tmp_path):
        apply_initialization_options(
            server,
            {"optionsFile": str(tmp_path / "other.json"), "evictOnClose": True},
            load_schema=False,
        )

        assert server.option_index is option_index
        assert server.settings.evict_on_close is True
        assert server.completion_engine.settings.evict_on_close is True
        assert not server.window_log_message.called

    def test_empty_index_by_default(self):
        server = create_server(settings=Settings())
        assert isinstance(server.option_index, OptionSchemaIndex)
        assert len(server.option_index) == 0
