"""Editor utility commands."""

import logging
from typing import TYPE_CHECKING, Any

from ..models.descriptors import ParamType, ThreadAffinity, param
from ._helpers import listing, require_non_empty, require_range

if TYPE_CHECKING:
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

DOMAIN = "editor"
PROVIDER = "editor"

MAX_LOG_LINES = 5000


def register_commands(registry: "CommandRegistry", host: "EditorHost") -> None:
    """Register editor utility commands."""
    editor = host.editor

    @registry.command(
        "editor.console_command",
        domain=DOMAIN,
        params=[param("command", description="Console command, e.g. 'stat fps'")],
    )
    def console_command(args: dict[str, Any]) -> dict[str, Any]:
        """Execute an editor console command."""
        command = require_non_empty("command", args["command"])
        logger.info(f"Console command: {command}")
        return editor.console_command(command)

    @registry.command(
        "editor.output_log",
        domain=DOMAIN,
        params=[
            param("lines", ParamType.INTEGER, default=100),
            param("filter", required=False, description="Case-insensitive substring"),
        ],
        affinity=ThreadAffinity.CALLER_THREAD,
    )
    def output_log(args: dict[str, Any]) -> dict[str, Any]:
        """Return the most recent output log lines."""
        lines = require_range("lines", args["lines"], 1, MAX_LOG_LINES)
        return listing("lines", editor.output_log(lines, args["filter"]))

    @registry.command("editor.info", domain=DOMAIN, affinity=ThreadAffinity.CALLER_THREAD)
    def info(args: dict[str, Any]) -> dict[str, Any]:
        """Report project and engine information."""
        return editor.info()
