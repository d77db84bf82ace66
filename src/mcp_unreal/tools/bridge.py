"""Bridge tools: expose the editor command bridge to MCP clients.

The tool bodies live in plain functions taking the ServerState so they can
be called without an MCP session.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Annotated, Any, Optional

from pydantic import Field

from ..core.errors import MalformedPayload
from ..remote_client import BridgeCallError, BridgeUnavailable

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from ..state import ServerState

logger = logging.getLogger(__name__)


def _failure(kind: str, message: str, detail: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    error: dict[str, Any] = {"kind": kind, "message": message}
    if detail is not None:
        error["detail"] = detail
    return {"success": False, "error": error}


def get_status(state: "ServerState") -> dict[str, Any]:
    """Fetch bridge status; reports reachability instead of raising."""
    client = state.get_client()
    try:
        status = client.status()
    except (BridgeUnavailable, MalformedPayload) as e:
        return {**_failure("BridgeUnavailable", str(e)), "bridge_url": client.base_url}
    return {"success": True, "bridge_url": client.base_url, "status": status}


def list_commands(state: "ServerState", domain: Optional[str] = None) -> dict[str, Any]:
    """List bridge commands, optionally for one capability domain."""
    client = state.get_client()
    try:
        commands = client.list_commands(domain)
    except (BridgeUnavailable, MalformedPayload) as e:
        return _failure("BridgeUnavailable", str(e))
    return {"success": True, "commands": commands, "count": len(commands)}


def run_command(
    state: "ServerState",
    command: str,
    arguments: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Run one bridge command and wrap its result in the tool-result shape."""
    client = state.get_client()
    try:
        result = client.call(command, arguments or {})
    except BridgeCallError as e:
        logger.info(f"Bridge command {command} failed: {e}")
        return {"success": False, "error": e.to_dict()}
    except MalformedPayload as e:
        return _failure(e.kind, e.message, e.detail)
    except BridgeUnavailable as e:
        return _failure("BridgeUnavailable", str(e))
    return {"success": True, "command": command, "result": result}


def register_tools(mcp: "FastMCP", state: "ServerState") -> None:
    """Register bridge tools."""

    @mcp.tool(name="bridge_status")
    async def bridge_status() -> dict[str, Any]:
        """
        Get the status of the Unreal Editor command bridge.

        Returns:
            Dictionary containing:
            - success: Whether the bridge answered
            - bridge_url: URL the server talks to
            - status: name, version, host kind, project, capabilities
              (enabled domains), command_count, pending_tickets
        """
        return await asyncio.to_thread(get_status, state)

    @mcp.tool(name="bridge_list_commands")
    async def bridge_list_commands(
        domain: Annotated[
            Optional[str],
            Field(
                default=None,
                description="Capability domain to list (asset, actor, component, level, blueprint, material, data, mesh, pcg, gas, niagara, editor, system)",
            ),
        ],
    ) -> dict[str, Any]:
        """
        List commands offered by the editor bridge with their parameter schemas.

        Returns:
            Dictionary containing:
            - success: Whether the bridge answered
            - commands: List of {name, domain, affinity, description, params}
            - count: Number of commands
        """
        return await asyncio.to_thread(list_commands, state, domain)

    @mcp.tool(name="bridge_run_command")
    async def bridge_run_command(
        command: Annotated[str, Field(description="Command name, e.g. 'asset.list' or 'actor.spawn'")],
        arguments: Annotated[
            Optional[dict[str, Any]],
            Field(default=None, description="Command arguments as a JSON object"),
        ],
    ) -> dict[str, Any]:
        """
        Run a command in the Unreal Editor through the bridge.

        Use bridge_list_commands to discover command names and parameters.

        Returns:
            Dictionary containing:
            - success: Whether the command succeeded
            - result: Command result (on success)
            - error: {kind, message, detail} where kind is one of
              MalformedPayload, UnknownCommand, InvalidArgument,
              HandlerError, Timeout or BridgeUnavailable
        """
        return await asyncio.to_thread(run_command, state, command, arguments)
