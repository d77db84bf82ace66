"""System commands: liveness, status and command discovery.

These never touch the editor object graph, so they run on the caller thread
and keep answering even while the host thread is busy.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from ..core.constants import PLUGIN_NAME, PLUGIN_VERSION
from ..models.descriptors import ThreadAffinity, param

if TYPE_CHECKING:
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

DOMAIN = "system"
PROVIDER = None


def register_commands(
    registry: "CommandRegistry",
    host: "EditorHost",
    status: Optional[Callable[[], dict[str, Any]]] = None,
) -> None:
    """Register system commands.

    Args:
        registry: Registry to populate
        host: Editor host (only its identity is reported)
        status: Callable producing the full bridge status; a minimal
            registry-derived status is used when omitted
    """

    def _basic_status() -> dict[str, Any]:
        return {
            "name": PLUGIN_NAME,
            "version": PLUGIN_VERSION,
            "host": host.kind,
            "project": host.project_name,
            "capabilities": registry.domains(),
            "command_count": len(registry),
        }

    @registry.command("system.ping", domain=DOMAIN, affinity=ThreadAffinity.CALLER_THREAD)
    def ping(args: dict[str, Any]) -> dict[str, Any]:
        """Check that the bridge is alive."""
        return {"pong": True, "version": PLUGIN_VERSION}

    @registry.command("system.status", domain=DOMAIN, affinity=ThreadAffinity.CALLER_THREAD)
    def get_status(args: dict[str, Any]) -> dict[str, Any]:
        """Report bridge status and enabled capability domains."""
        return status() if status is not None else _basic_status()

    @registry.command(
        "system.list_commands",
        domain=DOMAIN,
        params=[param("domain", required=False, description="Only list commands of this domain")],
        affinity=ThreadAffinity.CALLER_THREAD,
    )
    def list_commands(args: dict[str, Any]) -> dict[str, Any]:
        """List registered commands with their parameter schemas."""
        commands = [d.describe() for d in registry.descriptors(args["domain"])]
        return {"commands": commands, "count": len(commands)}
