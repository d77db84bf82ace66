"""HTTP transport for the command bridge."""

from .http_server import BridgeServer, create_app

__all__ = ["BridgeServer", "create_app"]
