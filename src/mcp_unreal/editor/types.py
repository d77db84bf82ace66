"""
Type definitions for the execution bridge.

An ExecutionTicket is the bridge's handle for one command scheduled onto the
host mutation thread. The ticket moves PENDING -> RUNNING -> COMPLETED, or to
ABANDONED when the waiting caller times out. Completion and abandonment are
decided under the ticket's lock, so a result is either delivered to its
caller or discarded, never both.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from ..core.errors import BridgeError, HandlerError
from ..models.protocol import CommandRequest, CommandResult

if TYPE_CHECKING:
    from ..registry import RegisteredCommand

logger = logging.getLogger(__name__)

_local = threading.local()


class TicketState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


def invoke_handler(command: "RegisteredCommand", arguments: dict[str, Any]) -> CommandResult:
    """
    Run a command handler and turn whatever happens into a CommandResult.

    - A returned CommandResult passes through unchanged.
    - Any other return value becomes the success payload (None -> {}).
    - A raised BridgeError keeps its own kind.
    - Any other exception becomes a HandlerError failure.

    Args:
        command: Registered command to run
        arguments: Validated arguments

    Returns:
        The command's result; this function never raises Exception
    """
    name = command.descriptor.name
    try:
        value = command.handler(arguments)
    except BridgeError as e:
        logger.info(f"Command {name} failed: {e.message}")
        return e.to_result()
    except Exception as e:
        logger.warning(f"Command {name} raised {type(e).__name__}: {e}")
        logger.debug("Handler traceback", exc_info=True)
        return HandlerError(
            str(e) or type(e).__name__, {"exception": type(e).__name__}
        ).to_result()

    if isinstance(value, CommandResult):
        return value
    return CommandResult.success({} if value is None else value)


def current_ticket() -> Optional["ExecutionTicket"]:
    """The ticket whose handler is running on this thread, if any."""
    return getattr(_local, "ticket", None)


@dataclass(eq=False)
class ExecutionTicket:
    """A command scheduled to run on the host mutation thread."""

    index: int
    request: CommandRequest
    command: "RegisteredCommand"
    arguments: dict[str, Any]
    state: TicketState = TicketState.PENDING
    result: Optional[CommandResult] = None
    submitted_at: float = field(default_factory=time.monotonic)
    _done: threading.Event = field(default_factory=threading.Event, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def name(self) -> str:
        return self.command.descriptor.name

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: Optional[float]) -> bool:
        """Block until completion; returns False on timeout."""
        return self._done.wait(timeout)

    def begin(self) -> bool:
        """Mark the ticket running; False if the caller already gave up."""
        with self._lock:
            if self.state is TicketState.ABANDONED:
                return False
            self.state = TicketState.RUNNING
            return True

    def complete(self, result: CommandResult) -> bool:
        """Deliver the result; False (result discarded) if abandoned."""
        with self._lock:
            if self.state is TicketState.ABANDONED:
                return False
            self.result = result
            self.state = TicketState.COMPLETED
            self._done.set()
            return True

    def abandon(self) -> Optional[TicketState]:
        """Give up on the ticket.

        Returns:
            The state the ticket was in when abandoned, or None if it
            completed first
        """
        with self._lock:
            if self.state is TicketState.COMPLETED:
                return None
            previous = self.state
            self.state = TicketState.ABANDONED
            return previous

    def execute(self) -> None:
        """Run the handler on the current (host) thread and deliver the result."""
        if not self.begin():
            logger.info(f"Skipping abandoned ticket #{self.index} ({self.name})")
            return

        _local.ticket = self
        try:
            result = invoke_handler(self.command, self.arguments)
        finally:
            _local.ticket = None

        if not self.complete(result):
            elapsed = time.monotonic() - self.submitted_at
            logger.info(
                f"Discarding late result of ticket #{self.index} ({self.name}) "
                f"after {elapsed:.2f}s"
            )
