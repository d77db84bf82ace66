"""
Bridge bootstrap tests.

Covers wiring, status reporting, capability domain gating and the in-editor
lifecycle (with a mocked ``unreal`` module).
"""

import json
import sys
import threading
from unittest.mock import MagicMock, patch

import pytest

from mcp_unreal.bridge import build_bridge, start_in_editor, stop_in_editor
from mcp_unreal.core.config import BridgeConfig
from mcp_unreal.core.errors import HostError
from mcp_unreal.domains import ALL_DOMAINS, register_all_domains
from mcp_unreal.host.interfaces import EditorHost
from mcp_unreal.host.sandbox import SandboxEditorHost
from mcp_unreal.host.unreal_host import UnrealDataTables, UnrealEditorHost
from mcp_unreal.models.protocol import CommandRequest
from mcp_unreal.registry import CommandRegistry


class TestBuildBridge:
    """Test bridge construction."""

    def test_registry_frozen_after_build(self, bridge):
        """Registration is closed once the bridge is built."""
        assert bridge.registry.frozen
        assert bridge.domains == list(ALL_DOMAINS)

    def test_status(self, bridge):
        """Status describes the bridge and its host."""
        status = bridge.status()

        assert status["name"] == "MCPUnreal"
        assert status["host"] == "sandbox"
        assert status["engine_version"] == "5.4.0-sandbox"
        assert status["listen"] == "127.0.0.1:8090"
        assert status["command_count"] == len(bridge.registry)
        assert status["pending_tickets"] == 0
        assert status["host_thread_running"] is True

    def test_enabled_domains(self, make_bridge):
        """Only enabled domains (plus system) are registered."""
        bridge = make_bridge(enabled_domains=["asset", "level"])

        assert bridge.domains == ["system", "asset", "level"]
        assert "actor.list" not in bridge.registry

    def test_system_cannot_be_disabled(self, make_bridge):
        """The system domain is always present."""
        bridge = make_bridge(disabled_domains=["system"])
        assert "system.ping" in bridge.registry

    def test_timeout_from_config(self, make_bridge):
        """The execution bridge uses the configured timeout."""
        bridge = make_bridge(command_timeout=1.5)
        assert bridge.execution.timeout == 1.5

    def test_default_host_is_sandbox(self):
        """build_bridge falls back to a sandbox host."""
        bridge = build_bridge(BridgeConfig())
        assert isinstance(bridge.host, SandboxEditorHost)


class TestDomainGating:
    """Test that missing providers remove their domains."""

    def test_bare_host_only_has_system(self):
        """A host without providers only offers system commands."""
        registry = CommandRegistry()
        registered = register_all_domains(registry, EditorHost(kind="bare"))

        assert registered == ["system"]
        assert registry.domains() == ["system"]

    def test_partial_host(self, sandbox_host):
        """Domains appear exactly for the providers a host offers."""
        host = EditorHost(kind="partial", world=sandbox_host.world)
        registry = CommandRegistry()

        assert register_all_domains(registry, host) == ["system", "actor", "level"]

    def test_unreal_host_domains(self):
        """The editor host offers no mesh, PCG, GAS or Niagara provider."""
        host = UnrealEditorHost(MagicMock())
        registered = register_all_domains(CommandRegistry(), host)

        assert registered == [
            "system",
            "editor",
            "asset",
            "actor",
            "component",
            "level",
            "blueprint",
            "material",
            "data",
        ]

    def test_unsupported_blueprint_graph_edit(self):
        """Graph editing reports a handler error on the editor host."""
        host = UnrealEditorHost(MagicMock())
        bridge = build_bridge(BridgeConfig(), host)
        bridge.host_thread.start()
        try:
            outcome = bridge.dispatcher.handle_request(
                CommandRequest(
                    command="blueprint.add_node",
                    arguments={"blueprint_path": "/Game/BP", "node_class": "K2Node_CallFunction"},
                    id=1,
                )
            )
        finally:
            bridge.stop()

        assert outcome.kind == "HandlerError"
        assert "not supported" in outcome.error.message


class TestUnrealDataTables:
    """Test the DataTable adapter's JSON round trip with a mocked unreal module."""

    @pytest.fixture
    def unreal(self):
        module = MagicMock()
        module.DataTable = type("DataTable", (), {})

        class Items(module.DataTable):
            def get_name(self):
                return "DT_Items"

            def get_path_name(self):
                return "/Game/Data/DT_Items.DT_Items"

        module.table = Items()
        module.load_asset.return_value = module.table
        lib = module.DataTableFunctionLibrary
        lib.export_data_table_to_json_string.return_value = json.dumps(
            [{"Name": "Sword", "Price": 120}, {"Name": "Potion", "Price": 15}]
        )
        lib.get_data_table_column_names.return_value = ["Price"]
        lib.fill_data_table_from_json_string.return_value = True
        return module

    def _written(self, unreal):
        table, doc = unreal.DataTableFunctionLibrary.fill_data_table_from_json_string.call_args.args
        assert table is unreal.table
        return json.loads(doc)

    def test_add_row_rewrites_table(self, unreal):
        """New rows are appended to the exported rows; unknown columns are not written."""
        result = UnrealDataTables(unreal).add_row("/Game/Data/DT_Items", "Bow", {"Price": 5, "Color": "red"})

        assert self._written(unreal) == [
            {"Name": "Sword", "Price": 120},
            {"Name": "Potion", "Price": 15},
            {"Name": "Bow", "Price": 5},
        ]
        assert result["replaced"] is False
        assert result["ignored_fields"] == ["Color"]

    def test_update_row_merges(self, unreal):
        """Updates merge into the existing row."""
        UnrealDataTables(unreal).update_row("/Game/Data/DT_Items", "Potion", {"Price": 20})

        assert self._written(unreal)[1] == {"Name": "Potion", "Price": 20}

    def test_delete_missing_row_does_not_write(self, unreal):
        """Nothing is written when there is nothing to delete."""
        result = UnrealDataTables(unreal).delete_row("/Game/Data/DT_Items", "Axe")

        assert result["deleted"] is False
        unreal.DataTableFunctionLibrary.fill_data_table_from_json_string.assert_not_called()

    def test_failed_write_is_a_host_error(self, unreal):
        """A rejected JSON import surfaces as HostError."""
        unreal.DataTableFunctionLibrary.fill_data_table_from_json_string.return_value = False

        with pytest.raises(HostError, match="Failed to write rows"):
            UnrealDataTables(unreal).delete_row("/Game/Data/DT_Items", "Sword")


class TestInEditorLifecycle:
    """Test start_in_editor / stop_in_editor with a mocked unreal module."""

    @pytest.fixture
    def fake_unreal(self):
        module = MagicMock()
        with patch.dict(sys.modules, {"unreal": module}), patch(
            "mcp_unreal.bridge.configure_logging"
        ), patch("mcp_unreal.bridge.BridgeServer") as server_cls:
            module.server_cls = server_cls
            try:
                yield module
            finally:
                stop_in_editor()

    def test_start_binds_game_thread(self, fake_unreal):
        """The calling thread becomes the host thread and a tick pumps it."""
        bridge = start_in_editor(BridgeConfig())

        assert bridge.host_thread.is_host_thread()
        assert bridge.host_thread.running
        fake_unreal.register_slate_post_tick_callback.assert_called_once()
        fake_unreal.server_cls.return_value.start.assert_called_once()

        tick = fake_unreal.register_slate_post_tick_callback.call_args.args[0]
        tick(0.016)

    def test_tick_runs_queued_commands(self, fake_unreal):
        """Commands posted from request threads run when the editor ticks."""
        bridge = start_in_editor(BridgeConfig())
        tick = fake_unreal.register_slate_post_tick_callback.call_args.args[0]
        fake_unreal.SystemLibrary.execute_console_command.return_value = None

        results = []
        worker = threading.Thread(
            target=lambda: results.append(
                bridge.dispatcher.handle_request(
                    CommandRequest(command="editor.console_command", arguments={"command": "stat fps"}, id=1)
                )
            )
        )
        worker.start()
        while worker.is_alive():
            tick(0.016)
            worker.join(0.01)

        assert results[0].payload == {"command": "stat fps", "executed": True}
        fake_unreal.SystemLibrary.execute_console_command.assert_called_once()

    def test_start_twice_returns_same_bridge(self, fake_unreal):
        """A second start is a no-op."""
        first = start_in_editor(BridgeConfig())
        assert start_in_editor(BridgeConfig()) is first

    def test_stop_unregisters_tick(self, fake_unreal):
        """Stopping removes the tick callback and releases the host thread."""
        bridge = start_in_editor(BridgeConfig())
        stop_in_editor()

        fake_unreal.unregister_slate_post_tick_callback.assert_called_once()
        assert not bridge.host_thread.running

    def test_failed_server_start_cleans_up(self, fake_unreal):
        """A port conflict unregisters the tick and re-raises."""
        fake_unreal.server_cls.return_value.start.side_effect = RuntimeError("port in use")

        with pytest.raises(RuntimeError):
            start_in_editor(BridgeConfig())

        fake_unreal.unregister_slate_post_tick_callback.assert_called_once()
