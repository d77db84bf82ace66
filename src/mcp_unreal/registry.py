"""
Command registry.

Maps command names to their descriptor and handler. Capability domain
modules populate the registry once at startup; the bootstrap then freezes
it, after which it is read-only and safe to share between request threads
without locking.
"""

import copy
import logging
import math
import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from pydantic import ValidationError

from .core.errors import DuplicateCommand, InvalidArgument, RegistryFrozen, UnknownCommand
from .models.descriptors import CommandDescriptor, ParamSpec, ThreadAffinity

logger = logging.getLogger(__name__)

# Handlers receive the validated argument mapping and return a JSON-able
# payload (or a ready CommandResult).
CommandHandler = Callable[[dict[str, Any]], Any]


@dataclass(frozen=True)
class RegisteredCommand:
    """A descriptor paired with the handler that implements it."""

    descriptor: CommandDescriptor
    handler: CommandHandler

    @property
    def name(self) -> str:
        return self.descriptor.name


def _json_type_name(value: Any) -> str:
    """Name a decoded JSON value's type the way clients see it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number" if math.isfinite(value) else "non-finite number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


class CommandRegistry:
    """Name -> (descriptor, handler) table shared by the whole bridge."""

    def __init__(self) -> None:
        self._commands: dict[str, RegisteredCommand] = {}
        self._frozen = False
        # Only guards registration; lookups after freeze() are lock-free
        self._lock = threading.Lock()

    # =========================================================================
    # Registration (startup only)
    # =========================================================================

    def register(self, descriptor: CommandDescriptor, handler: CommandHandler) -> RegisteredCommand:
        """
        Register a command.

        Args:
            descriptor: Command descriptor
            handler: Callable invoked with the validated arguments

        Returns:
            The registered entry

        Raises:
            DuplicateCommand: If the name is already taken (registry unchanged)
            RegistryFrozen: If called after freeze()
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozen(
                    f"Cannot register '{descriptor.name}': registry is frozen"
                )
            if descriptor.name in self._commands:
                raise DuplicateCommand(descriptor.name)
            entry = RegisteredCommand(descriptor=descriptor, handler=handler)
            self._commands[descriptor.name] = entry

        logger.debug(
            f"Registered command {descriptor.name} "
            f"(domain={descriptor.domain}, affinity={descriptor.affinity.value})"
        )
        return entry

    def command(
        self,
        name: str,
        *,
        domain: str,
        params: Iterable[ParamSpec] = (),
        affinity: ThreadAffinity = ThreadAffinity.HOST_THREAD,
        description: str = "",
    ) -> Callable[[CommandHandler], CommandHandler]:
        """Decorator form of :meth:`register` used by domain modules."""

        def decorator(handler: CommandHandler) -> CommandHandler:
            descriptor = CommandDescriptor(
                name=name,
                domain=domain,
                params=tuple(params),
                affinity=affinity,
                description=description or (handler.__doc__ or "").strip().split("\n")[0],
            )
            self.register(descriptor, handler)
            return handler

        return decorator

    def freeze(self) -> None:
        """Stop accepting registrations."""
        with self._lock:
            self._frozen = True
        logger.info(f"Command registry frozen with {len(self._commands)} commands")

    @property
    def frozen(self) -> bool:
        return self._frozen

    # =========================================================================
    # Lookup and validation (request time)
    # =========================================================================

    def lookup(self, name: str) -> RegisteredCommand:
        """
        Look up a command by name.

        Raises:
            UnknownCommand: If no command has that name
        """
        entry = self._commands.get(name)
        if entry is None:
            raise UnknownCommand(name)
        return entry

    def validate(self, descriptor: CommandDescriptor, arguments: dict[str, Any]) -> dict[str, Any]:
        """
        Check arguments against a descriptor's schema.

        An explicit ``null`` counts as an omitted argument. Omitted optional
        parameters receive their default. Arguments the schema does not
        declare are dropped.

        Args:
            descriptor: Schema to validate against
            arguments: Decoded argument mapping

        Returns:
            The validated argument mapping passed to the handler

        Raises:
            InvalidArgument: On the first missing or mistyped parameter
        """
        validated: dict[str, Any] = {}

        for spec in descriptor.params:
            value = arguments.get(spec.name)

            if value is None:
                if spec.required:
                    raise InvalidArgument(spec.name, "required argument is missing")
                validated[spec.name] = copy.deepcopy(spec.default)
                continue

            if spec.model is not None:
                try:
                    value = spec.model.model_validate(value)
                except ValidationError as e:
                    first = e.errors()[0]
                    raise InvalidArgument(
                        spec.name, f"not a valid {spec.model.__name__}: {first['msg']}"
                    ) from e
            elif not spec.type.matches(value):
                raise InvalidArgument(
                    spec.name,
                    f"expected {spec.type.value}, got {_json_type_name(value)}",
                )

            if spec.choices is not None and value not in spec.choices:
                allowed = ", ".join(str(c) for c in spec.choices)
                raise InvalidArgument(spec.name, f"must be one of: {allowed}")

            validated[spec.name] = value

        declared = {spec.name for spec in descriptor.params}
        extras = sorted(set(arguments) - declared)
        if extras:
            logger.debug(f"Ignoring undeclared arguments for {descriptor.name}: {extras}")

        return validated

    # =========================================================================
    # Introspection
    # =========================================================================

    def descriptors(self, domain: Optional[str] = None) -> list[CommandDescriptor]:
        """All descriptors (optionally for one domain), sorted by name."""
        return [
            entry.descriptor
            for name, entry in sorted(self._commands.items())
            if domain is None or entry.descriptor.domain == domain
        ]

    def domains(self) -> list[str]:
        """Sorted list of capability domains with at least one command."""
        return sorted({entry.descriptor.domain for entry in self._commands.values()})

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)
