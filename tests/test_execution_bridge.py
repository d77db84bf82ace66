"""
Execution bridge and host thread tests.

Covers thread affinity, FIFO ordering of host-thread tickets, timeouts with
late results discarded, and containment of handler exceptions.
"""

import logging
import threading
import time

import pytest

from mcp_unreal.core.errors import HostError
from mcp_unreal.editor.execution_bridge import ExecutionBridge
from mcp_unreal.editor.host_thread import HostThread
from mcp_unreal.editor.types import ExecutionTicket, TicketState, current_ticket
from mcp_unreal.models.descriptors import CommandDescriptor, ThreadAffinity
from mcp_unreal.models.protocol import CommandRequest, CommandResult
from mcp_unreal.registry import RegisteredCommand


def _command(handler, name="test.run", affinity=ThreadAffinity.HOST_THREAD):
    descriptor = CommandDescriptor(name=name, domain="test", affinity=affinity)
    return RegisteredCommand(descriptor=descriptor, handler=handler)


def _request(name="test.run", id=1):
    return CommandRequest(command=name, arguments={}, id=id)


class TestAffinity:
    """Test where handlers run."""

    def test_host_thread_command_runs_on_host_thread(self, execution, host_thread):
        """HOST_THREAD handlers run on the host thread, not the caller."""
        seen = {}

        def handler(args):
            seen["thread"] = threading.current_thread().name
            seen["is_host"] = host_thread.is_host_thread()
            return {"ok": True}

        result = execution.submit(_request(), _command(handler), {})

        assert result.ok
        assert result.payload == {"ok": True}
        assert seen["thread"] == "test-host"
        assert seen["is_host"]

    def test_caller_thread_command_runs_inline(self, execution):
        """CALLER_THREAD handlers run synchronously on the calling thread."""
        caller = threading.current_thread().name
        seen = {}

        def handler(args):
            seen["thread"] = threading.current_thread().name
            return None

        command = _command(handler, affinity=ThreadAffinity.CALLER_THREAD)
        result = execution.submit(_request(), command, {})

        assert result.ok
        assert result.payload == {}
        assert seen["thread"] == caller

    def test_stopped_host_thread_reports_handler_error(self):
        """Host-thread commands fail cleanly once the host thread is stopped."""
        host = HostThread(name="stopped")
        host.start()
        host.stop()
        execution = ExecutionBridge(host, timeout=0.5)

        result = execution.submit(_request(), _command(lambda args: {}), {})

        assert not result.ok
        assert result.kind == "HandlerError"
        assert "not running" in result.error.message


class TestOrdering:
    """Test FIFO execution of host-thread tickets."""

    def test_tickets_run_in_submission_order(self, execution):
        """Concurrent submissions execute in the order their tickets were numbered."""
        executed: list[int] = []
        release = threading.Event()

        def blocker(args):
            release.wait(2.0)
            return {}

        def record(args):
            executed.append(current_ticket().index)
            return {}

        blocker_thread = threading.Thread(
            target=execution.submit, args=(_request(), _command(blocker), {})
        )
        blocker_thread.start()
        # Let the blocker occupy the host thread
        time.sleep(0.05)

        workers = [
            threading.Thread(target=execution.submit, args=(_request(id=i), _command(record), {}))
            for i in range(8)
        ]
        for worker in workers:
            worker.start()
        time.sleep(0.1)
        release.set()

        for worker in workers:
            worker.join(5.0)
        blocker_thread.join(5.0)

        assert len(executed) == 8
        assert executed == sorted(executed)

    def test_current_ticket_is_none_outside_handlers(self):
        """No ticket is bound to a thread that is not running one."""
        assert current_ticket() is None


class TestTimeout:
    """Test ticket timeouts."""

    def test_timeout_returns_timeout_failure(self, execution):
        """A handler slower than the timeout yields a Timeout failure."""
        release = threading.Event()

        def slow(args):
            release.wait(2.0)
            return {"late": True}

        started = time.monotonic()
        result = execution.submit(_request(), _command(slow), {}, timeout=0.1)
        elapsed = time.monotonic() - started
        release.set()

        assert not result.ok
        assert result.kind == "Timeout"
        assert result.error.detail == {"command": "test.run", "timeout": 0.1}
        assert elapsed < 1.5

    def test_late_result_is_discarded(self):
        """Completing an abandoned ticket does not deliver the result."""
        ticket = ExecutionTicket(
            index=0, request=_request(), command=_command(lambda args: {}), arguments={}
        )
        assert ticket.begin()
        assert ticket.abandon() is TicketState.RUNNING

        assert not ticket.complete(CommandResult.success({"late": True}))
        assert ticket.state is TicketState.ABANDONED
        assert ticket.result is None
        assert not ticket.done

    def test_abandoned_pending_ticket_is_skipped(self):
        """A ticket abandoned before it starts never runs its handler."""
        calls = []
        ticket = ExecutionTicket(
            index=0,
            request=_request(),
            command=_command(lambda args: calls.append(1)),
            arguments={},
        )
        assert ticket.abandon() is TicketState.PENDING
        ticket.execute()

        assert calls == []
        assert ticket.state is TicketState.ABANDONED

    def test_completed_ticket_cannot_be_abandoned(self):
        """abandon() loses the race against completion."""
        ticket = ExecutionTicket(
            index=0, request=_request(), command=_command(lambda args: {"v": 1}), arguments={}
        )
        ticket.execute()

        assert ticket.state is TicketState.COMPLETED
        assert ticket.abandon() is None
        assert ticket.result.payload == {"v": 1}

    def test_host_thread_continues_after_timeout(self, execution):
        """A timed-out ticket does not block later commands."""
        release = threading.Event()

        def slow(args):
            release.wait(1.0)
            return {}

        timed_out = execution.submit(_request(), _command(slow), {}, timeout=0.05)
        release.set()
        result = execution.submit(_request(id=2), _command(lambda args: {"next": True}), {})

        assert timed_out.kind == "Timeout"
        assert result.payload == {"next": True}
        assert execution.pending_count == 0

    def test_timeout_log_reports_state_at_expiry(self, execution, caplog):
        """The warning names the state the ticket was in, not 'abandoned'."""
        release = threading.Event()
        started = threading.Event()

        def slow(args):
            started.set()
            release.wait(2.0)
            return {}

        with caplog.at_level(logging.WARNING, logger="mcp_unreal.editor.execution_bridge"):
            result = execution.submit(_request(), _command(slow), {}, timeout=0.2)
        release.set()

        assert started.is_set()
        assert result.kind == "Timeout"
        messages = [
            r.getMessage() for r in caplog.records if r.name == "mcp_unreal.editor.execution_bridge"
        ]
        assert any("while running" in m for m in messages)
        assert not any("abandoned" in m for m in messages)


class TestErrorContainment:
    """Test that handler failures become results."""

    def test_exception_becomes_handler_error(self, execution):
        """Arbitrary exceptions are reported as HandlerError."""

        def broken(args):
            raise KeyError("boom")

        result = execution.submit(_request(), _command(broken), {})

        assert not result.ok
        assert result.kind == "HandlerError"
        assert result.error.detail == {"exception": "KeyError"}

    def test_bridge_error_keeps_its_message(self, execution):
        """Host errors pass through with their own message."""

        def missing(args):
            raise HostError("Asset not found: '/Game/Nope'")

        result = execution.submit(_request(), _command(missing), {})

        assert result.kind == "HandlerError"
        assert result.error.message == "Asset not found: '/Game/Nope'"

    def test_host_thread_survives_failures(self, execution):
        """The host thread keeps serving after a handler raises."""

        def broken(args):
            raise RuntimeError("first")

        execution.submit(_request(), _command(broken), {})
        result = execution.submit(_request(id=2), _command(lambda args: {"alive": True}), {})

        assert result.payload == {"alive": True}


class TestPumpMode:
    """Test driving the host thread from an existing thread."""

    def test_pump_drains_queue_in_order(self):
        """pump() runs queued tickets on the bound thread."""
        host = HostThread(name="pumped")
        host.bind_current_thread()
        executed = []

        tickets = [
            ExecutionTicket(
                index=i,
                request=_request(id=i),
                command=_command(lambda args, i=i: executed.append(i)),
                arguments={},
            )
            for i in range(3)
        ]
        for ticket in tickets:
            host.post(ticket)

        assert host.pump() == 3
        assert executed == [0, 1, 2]
        assert all(t.state is TicketState.COMPLETED for t in tickets)
        host.stop()

    def test_pump_rejects_other_threads(self):
        """Only the bound thread may pump."""
        host = HostThread(name="pumped")
        errors = []

        def bind_elsewhere():
            host.bind_current_thread()

        binder = threading.Thread(target=bind_elsewhere)
        binder.start()
        binder.join()

        try:
            host.pump()
        except RuntimeError as e:
            errors.append(e)
        host.stop()

        assert len(errors) == 1

    def test_submit_from_pump_loop(self):
        """A request thread blocks until the bound thread pumps its ticket."""
        host = HostThread(name="pumped")
        host.bind_current_thread()
        execution = ExecutionBridge(host, timeout=2.0)
        results = []

        worker = threading.Thread(
            target=lambda: results.append(
                execution.submit(_request(), _command(lambda args: {"pumped": True}), {})
            )
        )
        worker.start()

        deadline = time.monotonic() + 2.0
        while not results and time.monotonic() < deadline:
            host.pump()
            time.sleep(0.01)
        worker.join(2.0)
        host.stop()

        assert results[0].payload == {"pumped": True}

    def test_handler_on_host_thread_runs_inline(self):
        """Submitting from the host thread itself does not deadlock."""
        host = HostThread(name="pumped")
        host.bind_current_thread()
        execution = ExecutionBridge(host, timeout=0.5)

        result = execution.submit(_request(), _command(lambda args: {"inline": True}), {})
        host.stop()

        assert result.payload == {"inline": True}

    def test_invalid_timeout_rejected(self, host_thread):
        """The default timeout must be positive."""
        with pytest.raises(ValueError):
            ExecutionBridge(host_thread, timeout=0)
