"""Global state management for the MCP-Unreal MCP server."""

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .remote_client import BridgeClient

logger = logging.getLogger(__name__)


class ServerState:
    """Centralized state for the MCP server.

    Holds the BridgeClient used by every tool to reach the editor bridge.
    """

    def __init__(self, client: Optional["BridgeClient"] = None) -> None:
        self._client = client
        self.client_name: Optional[str] = None

    @property
    def client(self) -> Optional["BridgeClient"]:
        """Get the BridgeClient instance (may be None)."""
        return self._client

    @client.setter
    def client(self, value: Optional["BridgeClient"]) -> None:
        """Set the BridgeClient instance."""
        self._client = value

    @property
    def bridge_url(self) -> Optional[str]:
        return self._client.base_url if self._client is not None else None

    def get_client(self) -> "BridgeClient":
        """Get the BridgeClient.

        Raises:
            RuntimeError: If no bridge client has been configured
        """
        if self._client is None:
            raise RuntimeError(
                "Bridge client not initialized. "
                "Set MCP_UNREAL_BRIDGE_URL or start the server with a bridge URL."
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("Bridge client closed")
