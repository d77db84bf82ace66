"""
MCP-Unreal Core Module

Shared constants, error taxonomy, configuration and logging setup.
"""

from .config import BridgeConfig
from .constants import (
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ERROR_KINDS,
    KIND_HANDLER_ERROR,
    KIND_INVALID_ARGUMENT,
    KIND_MALFORMED_PAYLOAD,
    KIND_TIMEOUT,
    KIND_UNKNOWN_COMMAND,
    PLUGIN_NAME,
    PLUGIN_VERSION,
)
from .errors import (
    BridgeError,
    ConfigError,
    DuplicateCommand,
    EncodeError,
    ExecutionTimeout,
    HandlerError,
    HostError,
    InvalidArgument,
    MalformedPayload,
    RegistryFrozen,
    UnknownCommand,
)
from .logging import configure_logging

__all__ = [
    # Config
    "BridgeConfig",
    "configure_logging",
    # Constants
    "DEFAULT_COMMAND_TIMEOUT",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "ERROR_KINDS",
    "KIND_HANDLER_ERROR",
    "KIND_INVALID_ARGUMENT",
    "KIND_MALFORMED_PAYLOAD",
    "KIND_TIMEOUT",
    "KIND_UNKNOWN_COMMAND",
    "PLUGIN_NAME",
    "PLUGIN_VERSION",
    # Errors
    "BridgeError",
    "ConfigError",
    "DuplicateCommand",
    "EncodeError",
    "ExecutionTimeout",
    "HandlerError",
    "HostError",
    "InvalidArgument",
    "MalformedPayload",
    "RegistryFrozen",
    "UnknownCommand",
]
