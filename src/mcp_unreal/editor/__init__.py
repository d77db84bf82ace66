"""
Editor-side execution machinery.

- HostThread: single consumer that owns editor mutation
- ExecutionBridge: hands commands to the host thread and waits for results
- ExecutionTicket: one scheduled command
"""

from .execution_bridge import ExecutionBridge
from .host_thread import HostThread
from .types import ExecutionTicket, TicketState, current_ticket, invoke_handler

__all__ = [
    "ExecutionBridge",
    "ExecutionTicket",
    "HostThread",
    "TicketState",
    "current_ticket",
    "invoke_handler",
]
