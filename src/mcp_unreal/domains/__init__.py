"""
Capability domains.

Each module exposes ``DOMAIN`` (its tag), ``PROVIDER`` (the EditorHost
attribute it needs, or None) and ``register_commands(registry, host)``.
A domain is registered only when the host offers its provider and the
configuration enables it; otherwise its commands simply do not exist.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from . import (
    actors,
    assets,
    blueprints,
    components,
    data_tables,
    editor,
    gas,
    levels,
    materials,
    mesh,
    niagara,
    pcg,
    system,
)

if TYPE_CHECKING:
    from ..core.config import BridgeConfig
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

# Registration order; system is always registered
DOMAIN_MODULES = (
    system,
    editor,
    assets,
    actors,
    components,
    levels,
    blueprints,
    materials,
    data_tables,
    mesh,
    pcg,
    gas,
    niagara,
)

ALL_DOMAINS = tuple(module.DOMAIN for module in DOMAIN_MODULES)


def register_all_domains(
    registry: "CommandRegistry",
    host: "EditorHost",
    config: Optional["BridgeConfig"] = None,
    status: Optional[Callable[[], dict[str, Any]]] = None,
) -> list[str]:
    """
    Register every available capability domain.

    Args:
        registry: Registry to populate (must not be frozen)
        host: Editor host providing the capability providers
        config: Bridge configuration; all domains are enabled when omitted
        status: Status callable passed to the system domain

    Returns:
        Tags of the registered domains, in registration order
    """
    registered = []

    for module in DOMAIN_MODULES:
        if module is system:
            system.register_commands(registry, host, status)
            registered.append(module.DOMAIN)
            continue

        if config is not None and not config.domain_enabled(module.DOMAIN):
            logger.info(f"Capability domain '{module.DOMAIN}' disabled by configuration")
            continue

        if getattr(host, module.PROVIDER, None) is None:
            logger.info(
                f"Capability domain '{module.DOMAIN}' unavailable: "
                f"{host.kind} host has no {module.PROVIDER} provider"
            )
            continue

        module.register_commands(registry, host)
        registered.append(module.DOMAIN)

    logger.info(f"Registered capability domains: {', '.join(registered)}")
    return registered


__all__ = ["ALL_DOMAINS", "DOMAIN_MODULES", "register_all_domains"]
