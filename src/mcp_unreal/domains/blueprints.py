"""Blueprint commands: inspection, graph editing and compilation."""

import logging
from typing import TYPE_CHECKING, Any

from ..models.descriptors import ParamType, param
from ._helpers import (
    listing,
    require_asset_path,
    require_folder_path,
    require_name,
    require_non_empty,
)

if TYPE_CHECKING:
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

DOMAIN = "blueprint"
PROVIDER = "blueprints"

# Pin categories accepted for member variables
VARIABLE_TYPES = (
    "bool",
    "byte",
    "int",
    "int64",
    "float",
    "double",
    "string",
    "name",
    "text",
    "vector",
    "rotator",
    "transform",
    "object",
    "class",
)


def register_commands(registry: "CommandRegistry", host: "EditorHost") -> None:
    """Register blueprint commands."""
    blueprints = host.blueprints

    @registry.command("blueprint.list", domain=DOMAIN)
    def list_blueprints(args: dict[str, Any]) -> dict[str, Any]:
        """List Blueprint assets with their parent classes."""
        return listing("blueprints", blueprints.list_blueprints())

    @registry.command("blueprint.inspect", domain=DOMAIN, params=[param("blueprint_path")])
    def inspect(args: dict[str, Any]) -> dict[str, Any]:
        """Describe a Blueprint: variables, functions, graphs and compile status."""
        return blueprints.inspect(require_asset_path("blueprint_path", args["blueprint_path"]))

    @registry.command(
        "blueprint.create",
        domain=DOMAIN,
        params=[
            param("package_path", description="Folder to create the Blueprint in"),
            param("name"),
            param("parent_class", default="Actor"),
        ],
    )
    def create(args: dict[str, Any]) -> dict[str, Any]:
        """Create a Blueprint class asset."""
        package_path = require_folder_path("package_path", args["package_path"])
        name = require_name("name", args["name"])
        parent_class = require_non_empty("parent_class", args["parent_class"])
        created = blueprints.create(package_path, name, parent_class)
        logger.info(f"Created blueprint {package_path}/{name} ({parent_class})")
        return created

    @registry.command(
        "blueprint.add_variable",
        domain=DOMAIN,
        params=[
            param("blueprint_path"),
            param("name"),
            param("var_type", choices=VARIABLE_TYPES),
            param("default_value", ParamType.ANY, required=False),
        ],
    )
    def add_variable(args: dict[str, Any]) -> dict[str, Any]:
        """Add a member variable."""
        return blueprints.add_variable(
            require_asset_path("blueprint_path", args["blueprint_path"]),
            require_name("name", args["name"]),
            args["var_type"],
            args["default_value"],
        )

    @registry.command(
        "blueprint.add_function",
        domain=DOMAIN,
        params=[param("blueprint_path"), param("name")],
    )
    def add_function(args: dict[str, Any]) -> dict[str, Any]:
        """Add an empty function graph."""
        return blueprints.add_function(
            require_asset_path("blueprint_path", args["blueprint_path"]),
            require_name("name", args["name"]),
        )

    @registry.command(
        "blueprint.add_node",
        domain=DOMAIN,
        params=[
            param("blueprint_path"),
            param("graph", default="EventGraph"),
            param("node_class", description="K2 node class, e.g. K2Node_CallFunction"),
            param("pos_x", ParamType.INTEGER, default=0),
            param("pos_y", ParamType.INTEGER, default=0),
        ],
    )
    def add_node(args: dict[str, Any]) -> dict[str, Any]:
        """Place a node in a Blueprint graph."""
        return blueprints.add_node(
            require_asset_path("blueprint_path", args["blueprint_path"]),
            args["graph"],
            require_non_empty("node_class", args["node_class"]),
            args["pos_x"],
            args["pos_y"],
        )

    @registry.command(
        "blueprint.connect_pins",
        domain=DOMAIN,
        params=[
            param("blueprint_path"),
            param("graph"),
            param("source_node"),
            param("source_pin"),
            param("target_node"),
            param("target_pin"),
        ],
    )
    def connect_pins(args: dict[str, Any]) -> dict[str, Any]:
        """Link an output pin to an input pin."""
        return blueprints.connect_pins(
            require_asset_path("blueprint_path", args["blueprint_path"]),
            args["graph"],
            args["source_node"],
            args["source_pin"],
            args["target_node"],
            args["target_pin"],
        )

    @registry.command("blueprint.compile", domain=DOMAIN, params=[param("blueprint_path")])
    def compile_blueprint(args: dict[str, Any]) -> dict[str, Any]:
        """Compile a Blueprint and report errors and warnings."""
        result = blueprints.compile(require_asset_path("blueprint_path", args["blueprint_path"]))
        if result.get("errors"):
            logger.warning(f"Blueprint {args['blueprint_path']} compiled with errors: {result['errors']}")
        return result
