"""
Error taxonomy for the command bridge.

Every failure that can reach a client is a ``BridgeError`` subclass carrying
a wire ``kind``. Errors are converted into a failure ``CommandResult`` at the
point they are detected and travel back through the dispatcher like any
other result.
"""

from typing import TYPE_CHECKING, Any, Optional

from .constants import (
    KIND_HANDLER_ERROR,
    KIND_INVALID_ARGUMENT,
    KIND_MALFORMED_PAYLOAD,
    KIND_TIMEOUT,
    KIND_UNKNOWN_COMMAND,
)

if TYPE_CHECKING:
    from ..models.protocol import CommandResult


class BridgeError(Exception):
    """Base class for failures that are reported to the client."""

    kind: str = KIND_HANDLER_ERROR

    def __init__(self, message: str, detail: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_result(self) -> "CommandResult":
        """Convert this error into a failure result."""
        from ..models.protocol import CommandResult

        return CommandResult.failure(self.kind, self.message, self.detail)


class MalformedPayload(BridgeError):
    """The request bytes are not a well-formed request document."""

    kind = KIND_MALFORMED_PAYLOAD

    def __init__(
        self,
        message: str,
        detail: Optional[dict[str, Any]] = None,
        correlation_id: Any = None,
    ):
        super().__init__(message, detail)
        # Recovered from the document when possible so the error can echo it
        self.correlation_id = correlation_id


class UnknownCommand(BridgeError):
    """No command with the requested name is registered."""

    kind = KIND_UNKNOWN_COMMAND

    def __init__(self, name: str):
        super().__init__(f"Unknown command: '{name}'", {"command": name})
        self.name = name


class InvalidArgument(BridgeError):
    """An argument is missing or does not match the command schema."""

    kind = KIND_INVALID_ARGUMENT

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid argument '{field}': {reason}", {"field": field, "reason": reason})
        self.field = field
        self.reason = reason


class HandlerError(BridgeError):
    """A command handler (or the editor subsystem behind it) failed."""

    kind = KIND_HANDLER_ERROR


class HostError(HandlerError):
    """Raised by host providers for editor-side failures (asset not found, etc.)."""


class ExecutionTimeout(BridgeError):
    """The host thread did not complete a ticket within the configured timeout."""

    kind = KIND_TIMEOUT


class DuplicateCommand(Exception):
    """A command with the same name is already registered."""

    def __init__(self, name: str):
        super().__init__(f"Command already registered: '{name}'")
        self.name = name


class RegistryFrozen(RuntimeError):
    """The registry no longer accepts registrations."""


class EncodeError(Exception):
    """A result payload cannot be represented on the wire."""


class ConfigError(ValueError):
    """Invalid bridge configuration."""
