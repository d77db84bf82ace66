"""Procedural Content Generation commands.

Graph editing works on PCGGraph assets; execute/cleanup work on the PCG
component of an actor placed in the level.
"""

import logging
from typing import TYPE_CHECKING, Any

from ..models.descriptors import ParamType, param
from ._helpers import require_asset_path, require_non_empty

if TYPE_CHECKING:
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

DOMAIN = "pcg"
PROVIDER = "pcg"


def register_commands(registry: "CommandRegistry", host: "EditorHost") -> None:
    """Register PCG commands."""
    pcg = host.pcg

    def _graph_path(args: dict[str, Any]) -> str:
        return require_asset_path("graph_path", args["graph_path"])

    @registry.command("pcg.get_graph_info", domain=DOMAIN, params=[param("graph_path")])
    def get_graph_info(args: dict[str, Any]) -> dict[str, Any]:
        """Describe a PCG graph's nodes and edges."""
        return pcg.get_graph_info(_graph_path(args))

    @registry.command(
        "pcg.add_node",
        domain=DOMAIN,
        params=[
            param("graph_path"),
            param("node_type", description="Settings type, e.g. SurfaceSampler"),
            param("label", required=False),
        ],
    )
    def add_node(args: dict[str, Any]) -> dict[str, Any]:
        """Add a node to a PCG graph."""
        return pcg.add_node(
            _graph_path(args), require_non_empty("node_type", args["node_type"]), args["label"]
        )

    @registry.command(
        "pcg.connect_nodes",
        domain=DOMAIN,
        params=[
            param("graph_path"),
            param("source_node"),
            param("target_node"),
            param("source_pin", default="Out"),
            param("target_pin", default="In"),
        ],
    )
    def connect_nodes(args: dict[str, Any]) -> dict[str, Any]:
        """Connect two PCG nodes."""
        return pcg.connect_nodes(
            _graph_path(args),
            args["source_node"],
            args["source_pin"],
            args["target_node"],
            args["target_pin"],
        )

    @registry.command(
        "pcg.remove_node",
        domain=DOMAIN,
        params=[param("graph_path"), param("node", description="Node id or label")],
    )
    def remove_node(args: dict[str, Any]) -> dict[str, Any]:
        """Remove a node and its edges."""
        pcg.remove_node(_graph_path(args), args["node"])
        return {"removed": args["node"]}

    @registry.command(
        "pcg.set_parameter",
        domain=DOMAIN,
        params=[
            param("graph_path"),
            param("node"),
            param("parameter"),
            param("value", ParamType.ANY),
        ],
    )
    def set_parameter(args: dict[str, Any]) -> dict[str, Any]:
        """Set a node settings parameter."""
        return pcg.set_parameter(
            _graph_path(args),
            args["node"],
            require_non_empty("parameter", args["parameter"]),
            args["value"],
        )

    @registry.command("pcg.execute", domain=DOMAIN, params=[param("actor")])
    def execute(args: dict[str, Any]) -> dict[str, Any]:
        """Generate the PCG component on an actor."""
        result = pcg.execute(args["actor"])
        logger.info(f"PCG generated on {args['actor']}")
        return result

    @registry.command("pcg.cleanup", domain=DOMAIN, params=[param("actor")])
    def cleanup(args: dict[str, Any]) -> dict[str, Any]:
        """Remove generated PCG content from an actor."""
        return pcg.cleanup(args["actor"])
