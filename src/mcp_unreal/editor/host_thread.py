"""
HostThread - the single context allowed to mutate the editor object graph.

Tickets are posted by any number of request threads and drained, strictly
in posting order, by exactly one consumer. Two drive modes exist:

- ``start()``: a dedicated daemon thread drains the queue (standalone and
  sandbox mode).
- ``bind_current_thread()`` + ``pump()``: an existing thread (the editor's
  game thread, ticked from a Slate post-tick callback) becomes the host
  thread and drains whatever is queued on each tick.
"""

import logging
import queue
import threading
from typing import Optional

from .types import ExecutionTicket

logger = logging.getLogger(__name__)


class HostThread:
    """Single-consumer FIFO executor for host-thread tickets."""

    JOIN_TIMEOUT = 5.0

    def __init__(self, name: str = "mcp-unreal-host"):
        """
        Initialize HostThread.

        Args:
            name: Thread name used in start() mode
        """
        self.name = name
        self._queue: "queue.SimpleQueue[Optional[ExecutionTicket]]" = queue.SimpleQueue()
        self._thread: Optional[threading.Thread] = None
        self._thread_id: Optional[int] = None
        self._bound = threading.Event()
        self._closed = False

    # =========================================================================
    # Producer side
    # =========================================================================

    def post(self, ticket: ExecutionTicket) -> None:
        """Append a ticket to the queue (any thread)."""
        self._queue.put(ticket)

    @property
    def pending(self) -> int:
        """Approximate number of queued tickets."""
        return self._queue.qsize()

    @property
    def accepting(self) -> bool:
        """False once stop() has been called."""
        return not self._closed

    # =========================================================================
    # Consumer side
    # =========================================================================

    def is_host_thread(self) -> bool:
        """Check whether the calling thread is the host thread."""
        return self._thread_id is not None and self._thread_id == threading.get_ident()

    def bind_current_thread(self) -> None:
        """Make the calling thread the host thread (pump mode)."""
        if self._thread is not None:
            raise RuntimeError("HostThread is already running its own thread")
        self._thread_id = threading.get_ident()
        self._closed = False
        self._bound.set()
        logger.info(f"Host thread bound to {threading.current_thread().name}")

    def pump(self, max_tickets: Optional[int] = None) -> int:
        """
        Drain queued tickets on the calling (host) thread.

        Args:
            max_tickets: Upper bound on tickets executed in this call

        Returns:
            Number of tickets executed
        """
        if not self.is_host_thread():
            raise RuntimeError("pump() must be called from the host thread")

        executed = 0
        while max_tickets is None or executed < max_tickets:
            try:
                ticket = self._queue.get_nowait()
            except queue.Empty:
                break
            if ticket is None:
                continue
            self._execute(ticket)
            executed += 1
        return executed

    def start(self) -> None:
        """Run the consumer on a dedicated daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        if self._thread_id is not None:
            raise RuntimeError("HostThread is bound to another thread")

        self._closed = False
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        self._bound.wait()
        logger.info(f"Host thread {self.name} started")

    def stop(self) -> None:
        """Stop the consumer; queued tickets are left to time out."""
        self._closed = True
        if self._thread is not None:
            self._queue.put(None)
            self._thread.join(self.JOIN_TIMEOUT)
            if self._thread.is_alive():
                logger.warning(f"Host thread {self.name} did not stop in time")
            self._thread = None
        self._thread_id = None
        self._bound.clear()
        logger.info("Host thread stopped")

    @property
    def running(self) -> bool:
        """True while a consumer (thread or pump binding) is attached."""
        return self._thread_id is not None and not self._closed

    def _run(self) -> None:
        self._thread_id = threading.get_ident()
        self._bound.set()
        while True:
            ticket = self._queue.get()
            if ticket is None:
                break
            self._execute(ticket)

    def _execute(self, ticket: ExecutionTicket) -> None:
        try:
            ticket.execute()
        except Exception as e:
            # execute() already contains handler failures; this guards the loop
            logger.error(f"Host thread failed on ticket #{ticket.index}: {e}", exc_info=True)
