"""
MCP-Unreal

Command dispatch bridge between automation clients and a running Unreal
Editor: requests arrive over HTTP, are validated against a command registry
and executed on the editor's single mutation thread.
"""

from .core.constants import PLUGIN_VERSION as __version__
from .bridge import Bridge, build_bridge, start_in_editor, stop_in_editor
from .dispatcher import Dispatcher
from .registry import CommandRegistry
from .remote_client import BridgeCallError, BridgeClient, BridgeUnavailable

__all__ = [
    "__version__",
    "Bridge",
    "BridgeCallError",
    "BridgeClient",
    "BridgeUnavailable",
    "CommandRegistry",
    "Dispatcher",
    "build_bridge",
    "start_in_editor",
    "stop_in_editor",
]
