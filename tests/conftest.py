"""
Shared pytest fixtures for MCP-Unreal tests.

This module provides fixtures for:
- A running host thread and execution bridge
- A fully wired bridge over the sandbox editor host
- Helpers to send request documents through the dispatcher
"""

import json
from typing import Any, Callable, Optional

import pytest

from mcp_unreal import codec
from mcp_unreal.bridge import Bridge, build_bridge
from mcp_unreal.core.config import BridgeConfig
from mcp_unreal.editor.execution_bridge import ExecutionBridge
from mcp_unreal.editor.host_thread import HostThread
from mcp_unreal.host.sandbox import SandboxEditorHost
from mcp_unreal.models.protocol import ResponseDocument
from mcp_unreal.registry import CommandRegistry


def request_bytes(command: str, arguments: Optional[dict[str, Any]] = None, id: Any = 1) -> bytes:
    """Encode a request document the way a client would."""
    return json.dumps({"command": command, "arguments": arguments or {}, "id": id}).encode("utf-8")


@pytest.fixture
def registry() -> CommandRegistry:
    """An empty, unfrozen registry."""
    return CommandRegistry()


@pytest.fixture
def host_thread():
    """A HostThread running on its own daemon thread."""
    thread = HostThread(name="test-host")
    thread.start()
    yield thread
    thread.stop()


@pytest.fixture
def execution(host_thread) -> ExecutionBridge:
    """An ExecutionBridge with a short default timeout."""
    return ExecutionBridge(host_thread, timeout=2.0)


@pytest.fixture
def sandbox_host() -> SandboxEditorHost:
    """A freshly seeded sandbox host."""
    return SandboxEditorHost()


@pytest.fixture
def make_bridge():
    """Factory for bridges over a sandbox host; host threads are stopped afterwards."""
    created: list[Bridge] = []

    def _make(**config_values: Any) -> Bridge:
        bridge = build_bridge(BridgeConfig(**config_values), SandboxEditorHost())
        bridge.host_thread.start()
        created.append(bridge)
        return bridge

    yield _make

    for bridge in created:
        bridge.stop()


@pytest.fixture
def bridge(make_bridge) -> Bridge:
    """A bridge with every capability domain enabled."""
    return make_bridge()


@pytest.fixture
def call(bridge) -> Callable[..., ResponseDocument]:
    """Send one command through the bridge's dispatcher and decode the response."""

    def _call(command: str, /, **arguments: Any) -> ResponseDocument:
        raw = bridge.dispatcher.handle(request_bytes(command, arguments, id="test"))
        return codec.decode_response(raw)

    return _call
