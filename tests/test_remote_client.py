"""Tests for mcp_unreal.remote_client module."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from mcp_unreal.core.errors import MalformedPayload
from mcp_unreal.remote_client import BridgeCallError, BridgeClient, BridgeUnavailable


def _http_response(content=b"", json_value=None, status_error=None):
    response = MagicMock()
    response.content = content
    response.json.return_value = json_value
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


def _echoing_session(body_for_request):
    """A mock session whose POST answers with body_for_request(request_doc)."""
    session = MagicMock()

    def post(url, data, headers, timeout):
        request = json.loads(data)
        return _http_response(json.dumps(body_for_request(request)).encode("utf-8"))

    session.post.side_effect = post
    return session


class TestBridgeClientInit:
    """Tests for BridgeClient initialization."""

    def test_default_url(self):
        """Host and port build the base URL."""
        client = BridgeClient(session=MagicMock())
        assert client.base_url == "http://127.0.0.1:8090"

    def test_base_url_wins(self):
        """An explicit base URL is used as is, minus trailing slashes."""
        client = BridgeClient("http://editor:9000/", session=MagicMock())
        assert client.base_url == "http://editor:9000"

    def test_default_timeout_exceeds_command_timeout(self):
        """The HTTP timeout leaves room for the bridge's own Timeout result."""
        client = BridgeClient(session=MagicMock())
        assert client.timeout == 35.0

    def test_context_manager_closes_session(self):
        """Leaving the context closes the session."""
        session = MagicMock()
        with BridgeClient(session=session):
            pass
        session.close.assert_called_once()


class TestBridgeClientCall:
    """Tests for call and call_raw."""

    def test_call_returns_result(self):
        """A success document yields its result."""
        session = _echoing_session(lambda req: {"id": req["id"], "result": {"pong": True}})
        client = BridgeClient(session=session)

        assert client.call("system.ping") == {"pong": True}

    def test_request_document(self):
        """The POST carries command, arguments and id as JSON."""
        session = _echoing_session(lambda req: {"id": req["id"], "result": {}})
        client = BridgeClient(session=session, timeout=3.0)

        client.call("asset.list", {"path": "/Game"}, request_id="abc")

        args, kwargs = session.post.call_args
        assert args[0] == "http://127.0.0.1:8090/api/command"
        assert json.loads(kwargs["data"]) == {
            "command": "asset.list",
            "arguments": {"path": "/Game"},
            "id": "abc",
        }
        assert kwargs["headers"] == {"Content-Type": "application/json"}
        assert kwargs["timeout"] == 3.0

    def test_generated_ids_are_unique(self):
        """Each call gets a fresh correlation id."""
        seen = []

        def answer(req):
            seen.append(req["id"])
            return {"id": req["id"], "result": {}}

        client = BridgeClient(session=_echoing_session(answer))
        client.call("system.ping")
        client.call("system.ping")

        assert len(set(seen)) == 2

    def test_error_document_raises(self):
        """An error document raises BridgeCallError with kind and detail."""
        session = _echoing_session(
            lambda req: {
                "id": req["id"],
                "error": {"kind": "InvalidArgument", "message": "bad", "detail": {"field": "path"}},
            }
        )
        client = BridgeClient(session=session)

        with pytest.raises(BridgeCallError) as exc_info:
            client.call("asset.list", {"path": 3})

        assert exc_info.value.kind == "InvalidArgument"
        assert exc_info.value.to_dict() == {
            "kind": "InvalidArgument",
            "message": "bad",
            "detail": {"field": "path"},
        }

    def test_call_raw_returns_error_document(self):
        """call_raw hands back error documents without raising."""
        session = _echoing_session(
            lambda req: {"id": req["id"], "error": {"kind": "Timeout", "message": "slow"}}
        )
        response = BridgeClient(session=session).call_raw("level.save")

        assert not response.ok
        assert response.error.kind == "Timeout"

    def test_mismatched_id(self):
        """A response for another request is rejected."""
        session = _echoing_session(lambda req: {"id": "someone-else", "result": {}})
        client = BridgeClient(session=session)

        with pytest.raises(MalformedPayload, match="does not match"):
            client.call("system.ping")

    def test_connection_error(self):
        """Connection failures raise BridgeUnavailable."""
        session = MagicMock()
        session.post.side_effect = requests.exceptions.ConnectionError("refused")
        client = BridgeClient(session=session)

        with pytest.raises(BridgeUnavailable, match="Cannot reach bridge"):
            client.call("system.ping")

    def test_http_error(self):
        """Non-2xx answers raise BridgeUnavailable."""
        session = MagicMock()
        session.post.return_value = _http_response(
            status_error=requests.exceptions.HTTPError("404 Not Found")
        )
        client = BridgeClient(session=session)

        with pytest.raises(BridgeUnavailable, match="404"):
            client.call("system.ping")


class TestBridgeClientPing:
    """Tests for ping."""

    def test_ping_true(self):
        """A pong means the bridge is up."""
        session = _echoing_session(lambda req: {"id": req["id"], "result": {"pong": True}})
        assert BridgeClient(session=session).ping() is True

    def test_ping_false_when_unreachable(self):
        """Unreachable bridges answer False instead of raising."""
        session = MagicMock()
        session.post.side_effect = requests.exceptions.Timeout("timed out")
        assert BridgeClient(session=session).ping() is False


class TestBridgeClientIntrospection:
    """Tests for status and list_commands."""

    def test_status(self):
        """Status is fetched with GET."""
        session = MagicMock()
        session.get.return_value = _http_response(json_value={"name": "MCPUnreal"})
        client = BridgeClient(session=session)

        assert client.status() == {"name": "MCPUnreal"}
        assert session.get.call_args.args[0] == "http://127.0.0.1:8090/api/status"

    def test_list_commands_with_domain(self):
        """The domain filter is sent as a query parameter."""
        session = MagicMock()
        session.get.return_value = _http_response(json_value={"commands": [{"name": "asset.list"}]})
        client = BridgeClient(session=session)

        assert client.list_commands("asset") == [{"name": "asset.list"}]
        assert session.get.call_args.kwargs["params"] == {"domain": "asset"}

    def test_invalid_json(self):
        """Non-JSON answers raise MalformedPayload."""
        session = MagicMock()
        response = _http_response()
        response.json.side_effect = ValueError("Expecting value")
        session.get.return_value = response

        with pytest.raises(MalformedPayload):
            BridgeClient(session=session).status()
