"""Actor commands for the currently loaded level.

Actors are addressed by label, name or full object path.
"""

import logging
from typing import TYPE_CHECKING, Any

from ..core.errors import InvalidArgument
from ..models.base import Rotator, Vector3
from ..models.descriptors import ParamType, param
from ._helpers import listing, require_non_empty

if TYPE_CHECKING:
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

DOMAIN = "actor"
PROVIDER = "world"


def register_commands(registry: "CommandRegistry", host: "EditorHost") -> None:
    """Register actor commands."""
    world = host.world

    @registry.command(
        "actor.list",
        domain=DOMAIN,
        params=[
            param("class_filter", required=False, description="Class name substring"),
            param("name_filter", required=False, description="Label or name substring"),
        ],
    )
    def list_actors(args: dict[str, Any]) -> dict[str, Any]:
        """List actors in the current level."""
        return listing("actors", world.list_actors(args["class_filter"], args["name_filter"]))

    @registry.command(
        "actor.spawn",
        domain=DOMAIN,
        params=[
            param("class_name", description="Actor class, e.g. StaticMeshActor or BP_Hero_C"),
            param("label", required=False, description="Outliner label"),
            param("location", ParamType.OBJECT, required=False, model=Vector3),
            param("rotation", ParamType.OBJECT, required=False, model=Rotator),
        ],
    )
    def spawn_actor(args: dict[str, Any]) -> dict[str, Any]:
        """Spawn an actor in the current level."""
        class_name = require_non_empty("class_name", args["class_name"])
        actor = world.spawn_actor(
            class_name,
            args["label"],
            args["location"] or Vector3.zero(),
            args["rotation"] or Rotator.zero(),
        )
        logger.info(f"Spawned {class_name} as {actor.get('label')}")
        return actor

    @registry.command("actor.delete", domain=DOMAIN, params=[param("actor")])
    def delete_actor(args: dict[str, Any]) -> dict[str, Any]:
        """Destroy an actor."""
        world.delete_actor(args["actor"])
        return {"deleted": args["actor"]}

    @registry.command(
        "actor.set_transform",
        domain=DOMAIN,
        params=[
            param("actor"),
            param("location", ParamType.OBJECT, required=False, model=Vector3),
            param("rotation", ParamType.OBJECT, required=False, model=Rotator),
            param("scale", ParamType.OBJECT, required=False, model=Vector3),
        ],
    )
    def set_transform(args: dict[str, Any]) -> dict[str, Any]:
        """Move, rotate or scale an actor; omitted parts are left unchanged."""
        if args["location"] is None and args["rotation"] is None and args["scale"] is None:
            raise InvalidArgument("location", "at least one of location, rotation or scale is required")
        return world.set_actor_transform(
            args["actor"], args["location"], args["rotation"], args["scale"]
        )
