"""Component commands: an actor's component hierarchy and component properties.

Components are addressed by object name (``StaticMeshComponent0``) or class
name, case-insensitively. Property names are the editor's Python names,
e.g. ``visible`` or ``static_mesh``.
"""

import logging
from typing import TYPE_CHECKING, Any

from ..models.descriptors import ParamType, param
from ._helpers import require_non_empty

if TYPE_CHECKING:
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

DOMAIN = "component"
PROVIDER = "components"


def register_commands(registry: "CommandRegistry", host: "EditorHost") -> None:
    """Register component commands."""
    components = host.components

    @registry.command(
        "component.list",
        domain=DOMAIN,
        params=[
            param("actor", description="Actor label, name or path"),
            param("include_transforms", ParamType.BOOLEAN, default=False),
        ],
    )
    def list_components(args: dict[str, Any]) -> dict[str, Any]:
        """Show an actor's scene component tree and its other components."""
        return components.list_components(
            require_non_empty("actor", args["actor"]), args["include_transforms"]
        )

    @registry.command(
        "component.get_property",
        domain=DOMAIN,
        params=[param("actor"), param("component"), param("property")],
    )
    def get_property(args: dict[str, Any]) -> dict[str, Any]:
        """Read one property of a component."""
        return components.get_property(
            require_non_empty("actor", args["actor"]),
            require_non_empty("component", args["component"]),
            require_non_empty("property", args["property"]),
        )

    @registry.command(
        "component.set_property",
        domain=DOMAIN,
        params=[
            param("actor"),
            param("component"),
            param("property"),
            param("value", ParamType.ANY),
        ],
    )
    def set_property(args: dict[str, Any]) -> dict[str, Any]:
        """Set one property of a component; the value must match the property's type."""
        result = components.set_property(
            require_non_empty("actor", args["actor"]),
            require_non_empty("component", args["component"]),
            require_non_empty("property", args["property"]),
            args["value"],
        )
        logger.info(f"Set {result['component']}.{result['property']} on {result['actor']}")
        return result
