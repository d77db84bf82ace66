"""MCP Tools package for the MCP-Unreal server.

- bridge: status, command discovery and command execution against the
  editor bridge
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from ..state import ServerState


def register_all_tools(mcp: "FastMCP", state: "ServerState") -> None:
    """Register all MCP tools with the server.

    Args:
        mcp: The FastMCP server instance
        state: The server state holding the bridge client
    """
    from . import bridge

    bridge.register_tools(mcp, state)
