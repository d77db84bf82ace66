"""Tests for the MCP front-end server and its bridge tools."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from mcp_unreal.core.errors import MalformedPayload
from mcp_unreal.remote_client import BridgeCallError, BridgeUnavailable
from mcp_unreal.server import ClientDetectionMiddleware, create_server, default_bridge_url
from mcp_unreal.state import ServerState
from mcp_unreal.tools import bridge as bridge_tools


@pytest.fixture
def client():
    mock = MagicMock()
    mock.base_url = "http://127.0.0.1:8090"
    return mock


@pytest.fixture
def state(client):
    return ServerState(client)


class TestServerState:
    """Tests for ServerState."""

    def test_get_client_without_client(self):
        """A missing client is reported clearly."""
        with pytest.raises(RuntimeError, match="not initialized"):
            ServerState().get_client()

    def test_bridge_url(self, state):
        """The bridge URL comes from the client."""
        assert state.bridge_url == "http://127.0.0.1:8090"
        assert ServerState().bridge_url is None

    def test_close(self, state, client):
        """Closing the state closes the client."""
        state.close()
        client.close.assert_called_once()


class TestRunCommand:
    """Tests for run_command."""

    def test_success(self, state, client):
        """Results are wrapped with success=True."""
        client.call.return_value = {"pong": True}

        result = bridge_tools.run_command(state, "system.ping")

        assert result == {"success": True, "command": "system.ping", "result": {"pong": True}}
        client.call.assert_called_once_with("system.ping", {})

    def test_command_error(self, state, client):
        """Bridge errors keep their kind."""
        client.call.side_effect = BridgeCallError("UnknownCommand", "Unknown command: 'x'", {"command": "x"})

        result = bridge_tools.run_command(state, "x", {"a": 1})

        assert result == {
            "success": False,
            "error": {"kind": "UnknownCommand", "message": "Unknown command: 'x'", "detail": {"command": "x"}},
        }

    def test_bridge_unavailable(self, state, client):
        """An unreachable bridge is reported as BridgeUnavailable."""
        client.call.side_effect = BridgeUnavailable("Cannot reach bridge")

        result = bridge_tools.run_command(state, "system.ping")

        assert result["success"] is False
        assert result["error"]["kind"] == "BridgeUnavailable"

    def test_malformed_response(self, state, client):
        """A garbled answer is reported as MalformedPayload."""
        client.call.side_effect = MalformedPayload("Response is not valid JSON")

        result = bridge_tools.run_command(state, "system.ping")

        assert result["error"] == {"kind": "MalformedPayload", "message": "Response is not valid JSON"}


class TestStatusAndListing:
    """Tests for get_status and list_commands."""

    def test_status(self, state, client):
        """Status is passed through with the bridge URL."""
        client.status.return_value = {"name": "MCPUnreal"}

        result = bridge_tools.get_status(state)

        assert result == {
            "success": True,
            "bridge_url": "http://127.0.0.1:8090",
            "status": {"name": "MCPUnreal"},
        }

    def test_status_unavailable(self, state, client):
        """Unreachable bridges produce a failure, not an exception."""
        client.status.side_effect = BridgeUnavailable("down")

        result = bridge_tools.get_status(state)

        assert result["success"] is False
        assert result["bridge_url"] == "http://127.0.0.1:8090"

    def test_list_commands(self, state, client):
        """Commands are listed with a count."""
        client.list_commands.return_value = [{"name": "gas.grant_ability"}]

        result = bridge_tools.list_commands(state, "gas")

        assert result == {"success": True, "commands": [{"name": "gas.grant_ability"}], "count": 1}
        client.list_commands.assert_called_once_with("gas")


class TestServer:
    """Tests for server construction."""

    def test_default_bridge_url(self):
        """The bridge URL defaults to the local listener."""
        assert default_bridge_url({}) == "http://127.0.0.1:8090"
        assert default_bridge_url({"MCP_UNREAL_BRIDGE_URL": "http://host:1"}) == "http://host:1"

    @pytest.mark.asyncio
    async def test_tools_registered(self, state):
        """The three bridge tools are registered."""
        mcp = create_server(state)
        tools = await mcp.get_tools()

        assert set(tools) == {"bridge_status", "bridge_list_commands", "bridge_run_command"}


class TestClientDetectionMiddleware:
    """Tests for the initialize middleware."""

    @pytest.mark.asyncio
    async def test_records_client_and_pings_bridge(self, state, client):
        """The client name is recorded and the bridge is probed once."""
        context = MagicMock()
        context.message.params.clientInfo.name = "test-client"
        call_next = AsyncMock(return_value="initialized")
        client.ping.return_value = False

        result = await ClientDetectionMiddleware(state).on_initialize(context, call_next)

        assert result == "initialized"
        assert state.client_name == "test-client"
        call_next.assert_awaited_once_with(context)
        client.ping.assert_called_once()

    @pytest.mark.asyncio
    async def test_unknown_client(self):
        """Missing client info is recorded as unknown."""
        state = ServerState()
        context = MagicMock()
        context.message.params.clientInfo = None

        await ClientDetectionMiddleware(state).on_initialize(context, AsyncMock())

        assert state.client_name == "unknown"
