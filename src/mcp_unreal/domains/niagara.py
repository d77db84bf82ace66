"""Niagara VFX commands."""

import logging
from typing import TYPE_CHECKING, Any

from ..models.base import Vector3
from ..models.descriptors import ParamType, param
from ._helpers import require_asset_path, require_non_empty

if TYPE_CHECKING:
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

DOMAIN = "niagara"
PROVIDER = "niagara"


def register_commands(registry: "CommandRegistry", host: "EditorHost") -> None:
    """Register Niagara commands."""
    niagara = host.niagara

    @registry.command(
        "niagara.spawn_system",
        domain=DOMAIN,
        params=[
            param("system_path"),
            param("location", ParamType.OBJECT, required=False, model=Vector3),
            param("label", required=False),
        ],
    )
    def spawn_system(args: dict[str, Any]) -> dict[str, Any]:
        """Spawn a Niagara system actor in the current level."""
        return niagara.spawn_system(
            require_asset_path("system_path", args["system_path"]),
            args["location"] or Vector3.zero(),
            args["label"],
        )

    @registry.command("niagara.activate", domain=DOMAIN, params=[param("actor")])
    def activate(args: dict[str, Any]) -> dict[str, Any]:
        """Activate the Niagara component on an actor."""
        return niagara.activate(args["actor"])

    @registry.command("niagara.deactivate", domain=DOMAIN, params=[param("actor")])
    def deactivate(args: dict[str, Any]) -> dict[str, Any]:
        """Deactivate the Niagara component on an actor."""
        return niagara.deactivate(args["actor"])

    @registry.command(
        "niagara.set_parameter",
        domain=DOMAIN,
        params=[
            param("actor"),
            param("parameter", description="User parameter, with or without the 'User.' prefix"),
            param("value", ParamType.ANY),
        ],
    )
    def set_parameter(args: dict[str, Any]) -> dict[str, Any]:
        """Set a user parameter on a Niagara component."""
        return niagara.set_parameter(
            args["actor"], require_non_empty("parameter", args["parameter"]), args["value"]
        )

    @registry.command("niagara.get_system_info", domain=DOMAIN, params=[param("system_path")])
    def get_system_info(args: dict[str, Any]) -> dict[str, Any]:
        """Describe a Niagara system asset."""
        return niagara.get_system_info(require_asset_path("system_path", args["system_path"]))
