"""Gameplay Ability System commands.

All commands address an actor that owns an AbilitySystemComponent. Ability
and effect classes may be given as asset paths or short class names.
"""

import logging
from typing import TYPE_CHECKING, Any

from ..models.descriptors import ParamType, param
from ._helpers import listing, require_non_empty, require_range

if TYPE_CHECKING:
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

DOMAIN = "gas"
PROVIDER = "abilities"


def register_commands(registry: "CommandRegistry", host: "EditorHost") -> None:
    """Register gameplay ability commands."""
    abilities = host.abilities

    @registry.command(
        "gas.grant_ability",
        domain=DOMAIN,
        params=[
            param("actor"),
            param("ability_class"),
            param("level", ParamType.INTEGER, default=1),
        ],
    )
    def grant_ability(args: dict[str, Any]) -> dict[str, Any]:
        """Grant an ability to an actor."""
        return abilities.grant_ability(
            args["actor"],
            require_non_empty("ability_class", args["ability_class"]),
            require_range("level", args["level"], 1),
        )

    @registry.command(
        "gas.revoke_ability",
        domain=DOMAIN,
        params=[param("actor"), param("ability_class")],
    )
    def revoke_ability(args: dict[str, Any]) -> dict[str, Any]:
        """Revoke every granted spec of an ability class."""
        revoked = abilities.revoke_ability(
            args["actor"], require_non_empty("ability_class", args["ability_class"])
        )
        return {"actor": args["actor"], "revoked_count": revoked}

    @registry.command("gas.list_abilities", domain=DOMAIN, params=[param("actor")])
    def list_abilities(args: dict[str, Any]) -> dict[str, Any]:
        """List the abilities granted to an actor."""
        return {"actor": args["actor"], **listing("abilities", abilities.list_abilities(args["actor"]))}

    @registry.command(
        "gas.apply_effect",
        domain=DOMAIN,
        params=[
            param("actor"),
            param("effect_class"),
            param("level", ParamType.INTEGER, default=1),
        ],
    )
    def apply_effect(args: dict[str, Any]) -> dict[str, Any]:
        """Apply a gameplay effect to an actor."""
        return abilities.apply_effect(
            args["actor"],
            require_non_empty("effect_class", args["effect_class"]),
            require_range("level", args["level"], 1),
        )

    @registry.command("gas.get_attributes", domain=DOMAIN, params=[param("actor")])
    def get_attributes(args: dict[str, Any]) -> dict[str, Any]:
        """Read base and current attribute values."""
        return {"actor": args["actor"], "attributes": abilities.get_attributes(args["actor"])}

    @registry.command(
        "gas.set_attribute",
        domain=DOMAIN,
        params=[
            param("actor"),
            param("attribute"),
            param("value", ParamType.NUMBER),
        ],
    )
    def set_attribute(args: dict[str, Any]) -> dict[str, Any]:
        """Set an attribute's base value."""
        return abilities.set_attribute(
            args["actor"], require_non_empty("attribute", args["attribute"]), args["value"]
        )
