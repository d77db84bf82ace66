"""
MCP-Unreal Server

FastMCP-based MCP server that forwards tool calls to the command bridge
running inside the Unreal Editor.
"""

import asyncio
import logging
import os
import signal
import sys
from typing import Optional

import mcp.types as mt
from fastmcp import FastMCP
from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext

from .core.config import BridgeConfig
from .core.constants import CLIENT_TIMEOUT_MARGIN, DEFAULT_HOST, DEFAULT_PORT, ENV_BRIDGE_URL
from .core.logging import configure_logging
from .remote_client import BridgeClient
from .state import ServerState
from .tools import register_all_tools

logger = logging.getLogger(__name__)

INSTRUCTIONS = """
MCP-Unreal connects to the MCPUnreal command bridge running inside Unreal Editor.

Available tools:
- bridge_status: Check that the bridge is reachable and see enabled capability domains
- bridge_list_commands: List editor commands (asset, actor, component, level, blueprint,
  material, data, mesh, pcg, gas, niagara, editor, system) with their parameters
- bridge_run_command: Run one editor command with JSON arguments

Commands that change the editor run one at a time on the editor's game thread.
A command that takes longer than the bridge timeout returns a Timeout error; it
may still complete in the editor afterwards.
"""

_state: Optional[ServerState] = None


class ClientDetectionMiddleware(Middleware):
    """Log the connecting MCP client and check that the bridge answers."""

    def __init__(self, state: ServerState):
        self._state = state

    async def on_initialize(
        self,
        context: MiddlewareContext[mt.InitializeRequest],
        call_next: CallNext[mt.InitializeRequest, mt.InitializeResult | None],
    ) -> mt.InitializeResult | None:
        client_info = context.message.params.clientInfo
        self._state.client_name = client_info.name if client_info else "unknown"
        logger.info(f"MCP-Unreal server initialized - client: {self._state.client_name}")

        result = await call_next(context)

        client = self._state.client
        if client is not None:
            if await asyncio.to_thread(client.ping):
                logger.info(f"Bridge reachable at {client.base_url}")
            else:
                logger.warning(
                    f"Bridge not reachable at {client.base_url}; "
                    "tools will report BridgeUnavailable until the editor plugin is running"
                )

        return result


def create_server(state: ServerState) -> FastMCP:
    """
    Create the FastMCP server with all tools registered.

    Args:
        state: Server state holding the bridge client

    Returns:
        FastMCP instance
    """
    mcp = FastMCP(
        name="mcp-unreal",
        middleware=[ClientDetectionMiddleware(state)],
        instructions=INSTRUCTIONS,
    )
    register_all_tools(mcp, state)
    return mcp


def default_bridge_url(environ: Optional[dict] = None) -> str:
    """Bridge URL from MCP_UNREAL_BRIDGE_URL, falling back to the default listener."""
    env = os.environ if environ is None else environ
    return env.get(ENV_BRIDGE_URL) or f"http://{DEFAULT_HOST}:{DEFAULT_PORT}"


def _cleanup_on_shutdown() -> None:
    """Close the bridge client when the server shuts down."""
    logger.info("Server shutdown requested, cleaning up...")
    if _state is not None:
        try:
            _state.close()
        except Exception as e:
            logger.error(f"Error during cleanup: {e}")
    logger.info("Cleanup completed")


def _signal_handler(signum: int, frame) -> None:
    """Handle termination signals (SIGTERM, SIGINT)."""
    sig_name = signal.Signals(signum).name
    logger.info(f"Received signal {sig_name} ({signum})")
    _cleanup_on_shutdown()
    sys.exit(0)


def main():
    """Main entry point for the MCP server."""
    global _state

    config = BridgeConfig.load()
    configure_logging(config.log_level, config.log_file)

    if sys.platform != "win32":
        signal.signal(signal.SIGTERM, _signal_handler)
        signal.signal(signal.SIGINT, _signal_handler)
    else:
        # Windows: SIGTERM is not supported
        signal.signal(signal.SIGINT, _signal_handler)
        if hasattr(signal, "SIGBREAK"):
            signal.signal(signal.SIGBREAK, _signal_handler)

    url = default_bridge_url()
    _state = ServerState(BridgeClient(url, timeout=config.command_timeout + CLIENT_TIMEOUT_MARGIN))
    mcp = create_server(_state)

    logger.info(f"Starting MCP-Unreal server (bridge at {url})...")
    try:
        mcp.run()
    finally:
        _cleanup_on_shutdown()


if __name__ == "__main__":
    main()
