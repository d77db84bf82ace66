"""
Dispatcher tests.

Drives raw request bytes through decode, lookup, validation, execution and
encoding with a small hand-built registry.
"""

import json

import pytest

from conftest import request_bytes
from mcp_unreal.core.errors import HostError
from mcp_unreal.dispatcher import Dispatcher
from mcp_unreal.models.descriptors import ParamType, ThreadAffinity, param
from mcp_unreal.models.protocol import CommandRequest


@pytest.fixture
def calls():
    return []


@pytest.fixture
def dispatcher(registry, execution, calls):
    @registry.command("test.echo", domain="test", params=[param("text"), param("times", ParamType.INTEGER, default=1)])
    def echo(args):
        """Echo text."""
        calls.append(args)
        return {"text": args["text"] * args["times"]}

    @registry.command("test.fail", domain="test")
    def fail(args):
        """Always fail."""
        raise HostError("nothing to see", {"reason": "test"})

    @registry.command("test.nan", domain="test", affinity=ThreadAffinity.CALLER_THREAD)
    def nan(args):
        """Return a value JSON cannot carry."""
        return {"value": float("nan")}

    @registry.command("test.none", domain="test", affinity=ThreadAffinity.CALLER_THREAD)
    def none(args):
        """Return nothing."""

    registry.freeze()
    return Dispatcher(registry, execution)


def _handle(dispatcher, raw):
    return json.loads(dispatcher.handle(raw))


class TestDispatch:
    """Test the request pipeline."""

    def test_success(self, dispatcher):
        """A valid request returns its result with the echoed id."""
        response = _handle(dispatcher, request_bytes("test.echo", {"text": "ab", "times": 2}, id="r1"))
        assert response == {"id": "r1", "result": {"text": "abab"}}

    def test_numeric_id_echoed(self, dispatcher):
        """Numeric ids come back unchanged."""
        response = _handle(dispatcher, request_bytes("test.echo", {"text": "x"}, id=42))
        assert response["id"] == 42

    def test_unknown_command(self, dispatcher):
        """An unregistered name yields UnknownCommand."""
        response = _handle(dispatcher, request_bytes("test.missing", {}, id=7))

        assert response["id"] == 7
        assert response["error"]["kind"] == "UnknownCommand"
        assert response["error"]["detail"] == {"command": "test.missing"}

    def test_missing_argument_does_not_invoke_handler(self, dispatcher, calls):
        """Validation failures stop before the handler runs."""
        response = _handle(dispatcher, request_bytes("test.echo", {}, id=3))

        assert response["error"]["kind"] == "InvalidArgument"
        assert response["error"]["detail"]["field"] == "text"
        assert calls == []

    def test_wrong_type(self, dispatcher, calls):
        """A mistyped argument is rejected."""
        response = _handle(dispatcher, request_bytes("test.echo", {"text": "x", "times": "2"}))

        assert response["error"]["kind"] == "InvalidArgument"
        assert response["error"]["detail"] == {
            "field": "times",
            "reason": "expected integer, got string",
        }
        assert calls == []

    def test_handler_error(self, dispatcher):
        """Host failures keep their message and detail."""
        response = _handle(dispatcher, request_bytes("test.fail", id="f"))

        assert response == {
            "id": "f",
            "error": {"kind": "HandlerError", "message": "nothing to see", "detail": {"reason": "test"}},
        }

    def test_malformed_payload_echoes_recovered_id(self, dispatcher):
        """Malformed documents echo the id when it can be recovered."""
        response = _handle(dispatcher, b'{"id": 9, "arguments": {}}')

        assert response["id"] == 9
        assert response["error"]["kind"] == "MalformedPayload"

    def test_malformed_payload_without_id(self, dispatcher):
        """Undecodable bytes get a null id."""
        response = _handle(dispatcher, b"not json")

        assert response["id"] is None
        assert response["error"]["kind"] == "MalformedPayload"

    def test_unencodable_result_becomes_handler_error(self, dispatcher):
        """A payload JSON cannot carry is reported instead of crashing."""
        response = _handle(dispatcher, request_bytes("test.nan", id="n"))

        assert response["id"] == "n"
        assert response["error"]["kind"] == "HandlerError"

    def test_none_result_is_empty_object(self, dispatcher):
        """Handlers returning nothing produce an empty result object."""
        response = _handle(dispatcher, request_bytes("test.none", id=1))
        assert response == {"id": 1, "result": {}}

    def test_handle_request_in_process(self, dispatcher):
        """Decoded requests can be dispatched without encoding."""
        result = dispatcher.handle_request(CommandRequest(command="test.echo", arguments={"text": "y"}, id=1))

        assert result.ok
        assert result.payload == {"text": "y"}


class TestNumericArguments:
    """Test that only finite, non-boolean numbers reach the editor."""

    def _actor_count(self, bridge):
        response = _handle(bridge.dispatcher, request_bytes("actor.list", id="count"))
        return response["result"]["count"]

    def test_nan_argument_is_rejected_before_the_editor_changes(self, bridge):
        """A NaN component is malformed and spawns nothing."""
        before = self._actor_count(bridge)
        raw = (
            b'{"command": "actor.spawn", "id": 7, '
            b'"arguments": {"class_name": "StaticMeshActor", "location": {"x": NaN}}}'
        )

        response = _handle(bridge.dispatcher, raw)

        assert response["error"]["kind"] == "MalformedPayload"
        assert self._actor_count(bridge) == before

    def test_overflowing_argument_is_rejected(self, bridge):
        """1e999 is not turned into infinity."""
        raw = (
            b'{"command": "actor.spawn", "id": 8, '
            b'"arguments": {"class_name": "StaticMeshActor", "location": [1e999, 0, 0]}}'
        )

        response = _handle(bridge.dispatcher, raw)

        assert response["id"] is None
        assert response["error"]["kind"] == "MalformedPayload"

    def test_bool_and_string_components_are_rejected(self, bridge):
        """true and "5" are not vector components."""
        before = self._actor_count(bridge)
        response = _handle(
            bridge.dispatcher,
            request_bytes(
                "actor.spawn",
                {"class_name": "StaticMeshActor", "location": {"x": True, "y": "5", "z": 0}},
                id=9,
            ),
        )

        assert response["error"]["kind"] == "InvalidArgument"
        assert response["error"]["detail"]["field"] == "location"
        assert self._actor_count(bridge) == before

    def test_listing_still_works_after_rejections(self, bridge):
        """Rejected requests leave every later command answerable."""
        _handle(bridge.dispatcher, b'{"command": "actor.spawn", "id": 1, "arguments": {"location": [NaN, 0, 0]}}')
        response = _handle(bridge.dispatcher, request_bytes("actor.list", id=2))

        assert response["id"] == 2
        assert "result" in response
