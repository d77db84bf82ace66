"""
HTTP client for a running MCP-Unreal bridge.

Used by the MCP front-end server and by scripts that drive the editor from
outside. Every call sends one request document and returns the decoded
response document.

Example:
    client = BridgeClient("http://127.0.0.1:8090")
    assets = client.call("asset.list", {"path": "/Game/Meshes"})
"""

import logging
import uuid
from typing import Any, Optional

import requests

from . import codec
from .core.constants import (
    CLIENT_TIMEOUT_MARGIN,
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ROUTE_COMMAND,
    ROUTE_COMMANDS,
    ROUTE_STATUS,
)
from .core.errors import MalformedPayload
from .models.protocol import CorrelationId, ResponseDocument

logger = logging.getLogger(__name__)


class BridgeUnavailable(ConnectionError):
    """The bridge could not be reached (editor not running, wrong port, ...)."""


class BridgeCallError(Exception):
    """The bridge answered a command with an error document."""

    def __init__(self, kind: str, message: str, detail: Optional[dict[str, Any]] = None):
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.detail is not None:
            error["detail"] = self.detail
        return error


class BridgeClient:
    """
    Synchronous client for the bridge's HTTP API.

    Correlation ids are generated with uuid4 unless the caller supplies one,
    and every response is checked to echo the id that was sent.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_COMMAND_TIMEOUT + CLIENT_TIMEOUT_MARGIN,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize BridgeClient.

        Args:
            base_url: Bridge URL, e.g. http://127.0.0.1:8090 (wins over host/port)
            host: Bridge host when base_url is not given
            port: Bridge port when base_url is not given
            timeout: HTTP timeout in seconds; should exceed the bridge's
                command timeout so Timeout results are still delivered
            session: requests session to use (one is created when omitted)
        """
        self.base_url = (base_url or f"http://{host}:{port}").rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "BridgeClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # =========================================================================
    # Commands
    # =========================================================================

    def call_raw(
        self,
        command: str,
        arguments: Optional[dict[str, Any]] = None,
        request_id: Optional[CorrelationId] = None,
    ) -> ResponseDocument:
        """
        Send one command and return the decoded response document.

        Args:
            command: Command name, e.g. asset.list
            arguments: Command arguments
            request_id: Correlation id (uuid4 hex when omitted)

        Returns:
            Response document (success or error)

        Raises:
            BridgeUnavailable: If the bridge cannot be reached
            MalformedPayload: If the bridge's answer is not a response document
                or echoes a different id
        """
        correlation_id = request_id if request_id is not None else uuid.uuid4().hex
        body = codec.encode_request(command, arguments, correlation_id)

        logger.debug(f"-> {command} (id={correlation_id!r})")
        raw = self._post(ROUTE_COMMAND, body)
        response = codec.decode_response(raw)

        if response.id != correlation_id:
            raise MalformedPayload(
                f"Response id {response.id!r} does not match request id {correlation_id!r}",
                correlation_id=response.id,
            )
        return response

    def call(
        self,
        command: str,
        arguments: Optional[dict[str, Any]] = None,
        request_id: Optional[CorrelationId] = None,
    ) -> Any:
        """
        Send one command and return its result payload.

        Raises:
            BridgeCallError: If the bridge answered with an error document
            BridgeUnavailable: If the bridge cannot be reached
        """
        response = self.call_raw(command, arguments, request_id)
        if response.error is not None:
            raise BridgeCallError(response.error.kind, response.error.message, response.error.detail)
        return response.result

    # =========================================================================
    # Status
    # =========================================================================

    def status(self) -> dict[str, Any]:
        """Fetch the bridge status document."""
        return self._get_json(ROUTE_STATUS)

    def list_commands(self, domain: Optional[str] = None) -> list[dict[str, Any]]:
        """Fetch registered command descriptors."""
        params = {"domain": domain} if domain else None
        return self._get_json(ROUTE_COMMANDS, params=params).get("commands", [])

    def ping(self) -> bool:
        """Check that the bridge is reachable and answering commands."""
        try:
            result = self.call("system.ping")
        except (BridgeUnavailable, BridgeCallError, MalformedPayload) as e:
            logger.debug(f"Bridge ping failed: {e}")
            return False
        return bool(result and result.get("pong"))

    # =========================================================================
    # HTTP
    # =========================================================================

    def _post(self, route: str, body: bytes) -> bytes:
        try:
            response = self._session.post(
                f"{self.base_url}{route}",
                data=body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise BridgeUnavailable(f"Bridge at {self.base_url} returned {e}") from e
        except requests.exceptions.RequestException as e:
            raise BridgeUnavailable(f"Cannot reach bridge at {self.base_url}: {e}") from e
        return response.content

    def _get_json(self, route: str, params: Optional[dict[str, str]] = None) -> dict[str, Any]:
        try:
            response = self._session.get(
                f"{self.base_url}{route}", params=params, timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            raise BridgeUnavailable(f"Bridge at {self.base_url} returned {e}") from e
        except requests.exceptions.RequestException as e:
            raise BridgeUnavailable(f"Cannot reach bridge at {self.base_url}: {e}") from e
        except ValueError as e:
            raise MalformedPayload(f"Bridge returned invalid JSON from {route}: {e}") from e
