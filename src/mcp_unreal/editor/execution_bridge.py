"""
ExecutionBridge - runs validated commands on the right thread.

Commands marked CALLER_THREAD run synchronously in the request thread.
Commands marked HOST_THREAD are wrapped in an ExecutionTicket, posted to the
HostThread queue, and the request thread blocks until the ticket completes
or the timeout expires. This is the only place in the bridge that hands work
across threads.
"""

import itertools
import logging
import threading
from typing import TYPE_CHECKING, Any, Optional

from ..core.constants import DEFAULT_COMMAND_TIMEOUT
from ..core.errors import ExecutionTimeout, HandlerError
from ..models.protocol import CommandRequest, CommandResult
from .host_thread import HostThread
from .types import ExecutionTicket, invoke_handler

if TYPE_CHECKING:
    from ..registry import RegisteredCommand

logger = logging.getLogger(__name__)


class ExecutionBridge:
    """
    Marshals commands onto the host mutation thread and results back.

    Tickets are numbered and posted under one lock, so the host thread sees
    them in exactly the order the bridge accepted them.
    """

    def __init__(self, host_thread: HostThread, timeout: float = DEFAULT_COMMAND_TIMEOUT):
        """
        Initialize ExecutionBridge.

        Args:
            host_thread: Queue consumer that owns editor mutation
            timeout: Default seconds to wait for a host-thread ticket
        """
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._host = host_thread
        self._timeout = timeout
        self._counter = itertools.count()
        self._submit_lock = threading.Lock()
        self._in_flight = 0
        self._in_flight_lock = threading.Lock()

    @property
    def host_thread(self) -> HostThread:
        return self._host

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def pending_count(self) -> int:
        """Number of callers currently waiting on a host-thread ticket."""
        return self._in_flight

    def submit(
        self,
        request: CommandRequest,
        command: "RegisteredCommand",
        arguments: dict[str, Any],
        timeout: Optional[float] = None,
    ) -> CommandResult:
        """
        Execute a validated command and return its result.

        Args:
            request: The originating request (kept on the ticket for logging)
            command: Registered command to run
            arguments: Arguments already validated against the schema
            timeout: Override for the default wait, in seconds

        Returns:
            The handler's result, a HandlerError failure, or a Timeout failure
        """
        descriptor = command.descriptor

        # Already on the host thread: queueing would wait on ourselves
        if not descriptor.requires_host_thread or self._host.is_host_thread():
            return invoke_handler(command, arguments)

        if not self._host.accepting:
            return HandlerError(
                "Host thread is not running", {"command": descriptor.name}
            ).to_result()

        wait_for = self._timeout if timeout is None else timeout

        with self._submit_lock:
            ticket = ExecutionTicket(
                index=next(self._counter),
                request=request,
                command=command,
                arguments=arguments,
            )
            self._host.post(ticket)

        logger.debug(f"Queued ticket #{ticket.index} ({descriptor.name}, id={request.id!r})")
        self._track(1)
        try:
            if ticket.wait(wait_for):
                return ticket.result

            state_at_expiry = ticket.abandon()
            if state_at_expiry is not None:
                logger.warning(
                    f"Ticket #{ticket.index} ({descriptor.name}) timed out after {wait_for:.1f}s "
                    f"while {state_at_expiry.value}"
                )
                return ExecutionTimeout(
                    f"Command '{descriptor.name}' did not complete within {wait_for:g}s",
                    {"command": descriptor.name, "timeout": wait_for},
                ).to_result()

            # Completed between the wait expiring and abandon()
            return ticket.result
        finally:
            self._track(-1)

    def _track(self, delta: int) -> None:
        with self._in_flight_lock:
            self._in_flight += delta
