"""
Serialization codec tests.

Covers request decoding (including every MalformedPayload case), response
encoding for each result kind, and the client-side helpers.
"""

import json
import math

import pytest

from conftest import request_bytes
from mcp_unreal import codec
from mcp_unreal.core.errors import EncodeError, MalformedPayload
from mcp_unreal.models.protocol import CommandResult


class TestDecode:
    """Test decoding request documents."""

    def test_valid_request(self):
        """A complete request decodes into its three parts."""
        request = codec.decode(request_bytes("asset.list", {"path": "/Game"}, id="abc"))

        assert request.command == "asset.list"
        assert request.arguments == {"path": "/Game"}
        assert request.id == "abc"

    def test_numeric_ids_preserved(self):
        """Integer and float ids are kept with their type."""
        assert codec.decode(request_bytes("system.ping", id=7)).id == 7
        assert codec.decode(request_bytes("system.ping", id=2.5)).id == 2.5

    def test_unknown_fields_ignored(self):
        """Extra top-level fields do not make a request malformed."""
        raw = json.dumps(
            {"command": "system.ping", "arguments": {}, "id": 1, "trace": "x"}
        ).encode()
        assert codec.decode(raw).command == "system.ping"

    def test_empty_body(self):
        """An empty body is malformed."""
        with pytest.raises(MalformedPayload, match="empty"):
            codec.decode(b"")

    def test_invalid_json_reports_position(self):
        """Syntax errors carry the line and column."""
        with pytest.raises(MalformedPayload) as exc_info:
            codec.decode(b'{"command": ')

        assert exc_info.value.detail["line"] == 1
        assert "column" in exc_info.value.detail

    def test_not_utf8(self):
        """Bytes that are not UTF-8 are malformed."""
        with pytest.raises(MalformedPayload, match="UTF-8"):
            codec.decode(b'{"id": "\xff"}')

    def test_not_an_object(self):
        """Arrays and scalars are not request documents."""
        for raw in (b"[]", b"42", b'"text"', b"null"):
            with pytest.raises(MalformedPayload, match="JSON object"):
                codec.decode(raw)

    def test_missing_id(self):
        """A request without an id cannot be correlated."""
        with pytest.raises(MalformedPayload, match="id") as exc_info:
            codec.decode(b'{"command": "system.ping", "arguments": {}}')

        assert exc_info.value.correlation_id is None

    def test_invalid_id_types(self):
        """Booleans, nulls, objects and arrays are not valid ids."""
        for bad in ("true", "null", "{}", "[1]"):
            raw = f'{{"command": "system.ping", "arguments": {{}}, "id": {bad}}}'.encode()
            with pytest.raises(MalformedPayload, match="id"):
                codec.decode(raw)

    def test_missing_command_keeps_id(self):
        """Once the id is known it is attached to the error."""
        with pytest.raises(MalformedPayload, match="command") as exc_info:
            codec.decode(b'{"arguments": {}, "id": "req-1"}')

        assert exc_info.value.correlation_id == "req-1"

    def test_blank_command(self):
        """A whitespace-only command name is malformed."""
        with pytest.raises(MalformedPayload, match="command"):
            codec.decode(request_bytes("   "))

    def test_missing_arguments(self):
        """arguments is required, even when a command takes none."""
        with pytest.raises(MalformedPayload, match="arguments") as exc_info:
            codec.decode(b'{"command": "system.ping", "id": 3}')

        assert exc_info.value.correlation_id == 3

    def test_arguments_must_be_object(self):
        """A list of arguments is malformed."""
        with pytest.raises(MalformedPayload, match="arguments"):
            codec.decode(b'{"command": "system.ping", "arguments": [1], "id": 3}')

    def test_non_json_constants_rejected(self):
        """NaN and Infinity are not JSON numbers."""
        for token in ("NaN", "Infinity", "-Infinity"):
            raw = f'{{"command": "actor.spawn", "arguments": {{"x": {token}}}, "id": 1}}'.encode()
            with pytest.raises(MalformedPayload, match=token):
                codec.decode(raw)

    def test_overflowing_number_rejected(self):
        """A literal too large for a float does not become infinity."""
        raw = b'{"command": "actor.spawn", "arguments": {"x": 1e999}, "id": 1}'
        with pytest.raises(MalformedPayload, match="out of range"):
            codec.decode(raw)

    def test_finite_floats_decoded(self):
        """Ordinary fractional and exponent literals still decode."""
        raw = b'{"command": "actor.spawn", "arguments": {"x": 1.5, "y": -2e3}, "id": 1}'
        assert codec.decode(raw).arguments == {"x": 1.5, "y": -2000.0}


class TestEncode:
    """Test encoding response documents."""

    def test_success(self):
        """Success documents carry id and result only."""
        raw = codec.encode(CommandResult.success({"count": 2}), "abc")
        assert json.loads(raw) == {"id": "abc", "result": {"count": 2}}

    def test_failure_with_detail(self):
        """Failure documents carry kind, message and detail."""
        result = CommandResult.failure("InvalidArgument", "bad", {"field": "path"})
        doc = json.loads(codec.encode(result, 9))

        assert doc == {
            "id": 9,
            "error": {"kind": "InvalidArgument", "message": "bad", "detail": {"field": "path"}},
        }

    def test_failure_without_detail_omits_key(self):
        """detail is omitted rather than null."""
        doc = json.loads(codec.encode(CommandResult.failure("Timeout", "slow"), 1))
        assert "detail" not in doc["error"]

    def test_null_id_for_unrecoverable_requests(self):
        """A None correlation id is encoded as null."""
        doc = json.loads(codec.encode(CommandResult.failure("MalformedPayload", "x"), None))
        assert doc["id"] is None

    def test_pydantic_payloads_are_serialized(self):
        """Models in the payload are converted to plain JSON."""
        from mcp_unreal.models.base import Vector3

        raw = codec.encode(CommandResult.success({"location": Vector3(x=1, y=2, z=3)}), 1)
        assert json.loads(raw)["result"]["location"] == {"x": 1.0, "y": 2.0, "z": 3.0}

    def test_non_ascii_kept(self):
        """Text is emitted as UTF-8, not escaped."""
        raw = codec.encode(CommandResult.success({"label": "Héros"}), 1)
        assert "Héros".encode("utf-8") in raw

    def test_nan_is_an_encode_error(self):
        """NaN cannot be represented in JSON."""
        with pytest.raises(EncodeError):
            codec.encode(CommandResult.success({"value": math.nan}), 1)

    def test_unserializable_payload(self):
        """Arbitrary objects cannot be encoded."""
        with pytest.raises(EncodeError):
            codec.encode(CommandResult.success({"value": object()}), 1)


class TestClientHelpers:
    """Test the client-side request encoder and response decoder."""

    def test_request_round_trip(self):
        """encode_request produces a document decode accepts."""
        raw = codec.encode_request("actor.spawn", {"class_name": "PointLight"}, "r1")
        request = codec.decode(raw)

        assert request.command == "actor.spawn"
        assert request.arguments == {"class_name": "PointLight"}
        assert request.id == "r1"

    def test_response_round_trip_per_kind(self):
        """Every result kind survives encode then decode_response."""
        results = [
            CommandResult.success({"ok": True}),
            CommandResult.failure("MalformedPayload", "m"),
            CommandResult.failure("UnknownCommand", "u", {"command": "x"}),
            CommandResult.failure("InvalidArgument", "i", {"field": "f", "reason": "r"}),
            CommandResult.failure("HandlerError", "h"),
            CommandResult.failure("Timeout", "t", {"timeout": 1.0}),
        ]
        for result in results:
            response = codec.decode_response(codec.encode(result, "id-1"))
            assert response.id == "id-1"
            assert response.to_result() == result

    def test_response_needs_exactly_one_variant(self):
        """A document with both result and error is rejected."""
        with pytest.raises(MalformedPayload, match="exactly one"):
            codec.decode_response(b'{"id": 1, "result": {}, "error": {"kind": "x", "message": "y"}}')
        with pytest.raises(MalformedPayload, match="exactly one"):
            codec.decode_response(b'{"id": 1}')

    def test_response_needs_id(self):
        """A response without id is rejected."""
        with pytest.raises(MalformedPayload, match="id"):
            codec.decode_response(b'{"result": {}}')
