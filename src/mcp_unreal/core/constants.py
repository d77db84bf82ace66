"""
Shared constants for MCP-Unreal.

These values are shared by the in-editor bridge, the HTTP client and the
MCP front-end server, so all three agree on ports, paths and error kinds.
"""

PLUGIN_NAME = "MCPUnreal"
PLUGIN_VERSION = "0.2.0"

# HTTP listener defaults (the editor plugin binds to localhost only)
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8090

# Seconds a caller waits for a host-thread ticket before giving up
DEFAULT_COMMAND_TIMEOUT = 30.0

# Seconds the HTTP client waits on top of the command timeout
CLIENT_TIMEOUT_MARGIN = 5.0

# HTTP routes
ROUTE_COMMAND = "/api/command"
ROUTE_STATUS = "/api/status"
ROUTE_COMMANDS = "/api/commands"

# Environment variable names
ENV_HOST = "MCP_UNREAL_HOST"
ENV_PORT = "MCP_UNREAL_PORT"
ENV_TIMEOUT = "MCP_UNREAL_TIMEOUT"
ENV_DISABLED_DOMAINS = "MCP_UNREAL_DISABLED_DOMAINS"
ENV_ENABLED_DOMAINS = "MCP_UNREAL_ENABLED_DOMAINS"
ENV_LOG_LEVEL = "MCP_UNREAL_LOG_LEVEL"
ENV_LOG_FILE = "MCP_UNREAL_LOG_FILE"
ENV_CONFIG_FILE = "MCP_UNREAL_CONFIG"
ENV_BRIDGE_URL = "MCP_UNREAL_BRIDGE_URL"

# Error kinds surfaced on the wire
KIND_MALFORMED_PAYLOAD = "MalformedPayload"
KIND_UNKNOWN_COMMAND = "UnknownCommand"
KIND_INVALID_ARGUMENT = "InvalidArgument"
KIND_HANDLER_ERROR = "HandlerError"
KIND_TIMEOUT = "Timeout"

ERROR_KINDS = (
    KIND_MALFORMED_PAYLOAD,
    KIND_UNKNOWN_COMMAND,
    KIND_INVALID_ARGUMENT,
    KIND_HANDLER_ERROR,
    KIND_TIMEOUT,
)

# Log format shared by the bridge and the MCP server
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
