"""Level commands."""

import logging
from typing import TYPE_CHECKING, Any

from ..models.descriptors import param
from ._helpers import listing, require_asset_path

if TYPE_CHECKING:
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

DOMAIN = "level"
PROVIDER = "world"


def register_commands(registry: "CommandRegistry", host: "EditorHost") -> None:
    """Register level commands."""
    world = host.world

    @registry.command("level.current", domain=DOMAIN)
    def current_level(args: dict[str, Any]) -> dict[str, Any]:
        """Describe the level open in the editor."""
        return world.current_level()

    @registry.command("level.list", domain=DOMAIN)
    def list_levels(args: dict[str, Any]) -> dict[str, Any]:
        """List level (World) assets in the project."""
        return listing("levels", world.list_levels())

    @registry.command("level.load", domain=DOMAIN, params=[param("level_path")])
    def load_level(args: dict[str, Any]) -> dict[str, Any]:
        """Open a level in the editor."""
        level = world.load_level(require_asset_path("level_path", args["level_path"]))
        logger.info(f"Loaded level {level.get('path')}")
        return level

    @registry.command("level.save", domain=DOMAIN)
    def save_level(args: dict[str, Any]) -> dict[str, Any]:
        """Save the current level."""
        return world.save_level()

    @registry.command("level.new", domain=DOMAIN, params=[param("level_path")])
    def new_level(args: dict[str, Any]) -> dict[str, Any]:
        """Create an empty level and open it."""
        return world.new_level(require_asset_path("level_path", args["level_path"]))
