"""
Dispatcher - owns the lifecycle of one request.

    bytes -> decode -> lookup -> validate -> ExecutionBridge.submit -> encode -> bytes

Every failure is turned into a failure result at the step that detects it,
so a decodable request always receives a response document carrying its id.
The dispatcher keeps no state between calls and may be invoked from many
request threads at once.
"""

import logging
import time
from typing import Optional

from . import codec
from .core.errors import (
    EncodeError,
    HandlerError,
    InvalidArgument,
    MalformedPayload,
    UnknownCommand,
)
from .editor.execution_bridge import ExecutionBridge
from .models.protocol import CommandRequest, CommandResult, CorrelationId
from .registry import CommandRegistry

logger = logging.getLogger(__name__)


class Dispatcher:
    """Routes decoded requests through the registry and execution bridge."""

    def __init__(self, registry: CommandRegistry, bridge: ExecutionBridge):
        """
        Initialize Dispatcher.

        Args:
            registry: Command registry (frozen before requests arrive)
            bridge: Execution bridge used to run commands
        """
        self._registry = registry
        self._bridge = bridge

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def bridge(self) -> ExecutionBridge:
        return self._bridge

    def handle(self, raw: bytes) -> bytes:
        """
        Handle one raw request document and return the raw response document.

        Args:
            raw: Request body bytes

        Returns:
            Response body bytes (never raises for request-level failures)
        """
        started = time.perf_counter()

        try:
            request = codec.decode(raw)
        except MalformedPayload as e:
            logger.info(f"Rejected malformed request: {e.message}")
            return self._encode(e.to_result(), e.correlation_id)

        result = self.handle_request(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        if result.ok:
            logger.debug(f"{request.command} (id={request.id!r}) ok in {elapsed_ms:.1f}ms")
        else:
            logger.info(
                f"{request.command} (id={request.id!r}) failed with {result.error.kind} "
                f"in {elapsed_ms:.1f}ms: {result.error.message}"
            )

        return self._encode(result, request.id)

    def handle_request(self, request: CommandRequest) -> CommandResult:
        """
        Run an already-decoded request (in-process callers).

        Args:
            request: Decoded request

        Returns:
            Success or failure result
        """
        try:
            command = self._registry.lookup(request.command)
            arguments = self._registry.validate(command.descriptor, request.arguments)
        except (UnknownCommand, InvalidArgument) as e:
            return e.to_result()

        try:
            return self._bridge.submit(request, command, arguments)
        except Exception as e:
            logger.error(f"Execution bridge failed for {request.command}: {e}", exc_info=True)
            return HandlerError(
                f"Internal error while executing '{request.command}': {e}",
                {"exception": type(e).__name__},
            ).to_result()

    def _encode(self, result: CommandResult, correlation_id: Optional[CorrelationId]) -> bytes:
        try:
            return codec.encode(result, correlation_id)
        except EncodeError as e:
            logger.warning(f"Could not encode result for id={correlation_id!r}: {e}")
            return codec.encode(HandlerError(str(e)).to_result(), correlation_id)
