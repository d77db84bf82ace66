"""
Serialization codec for the command protocol.

Converts between wire bytes (UTF-8 JSON documents) and the protocol models.
Pure functions only: no logging, no I/O.
"""

import json
import math
from typing import Any, Optional

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .core.errors import EncodeError, MalformedPayload
from .models.protocol import (
    CommandRequest,
    CommandResult,
    CorrelationId,
    ErrorInfo,
    ResponseDocument,
)


def _is_valid_id(value: Any) -> bool:
    """A correlation id is a string or a finite number (never a bool)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return True
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    return False


def _reject_constant(token: str) -> Any:
    raise MalformedPayload(f"Invalid JSON: {token} is not a JSON number")


def _parse_finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise MalformedPayload(f"Invalid JSON: number {literal} is out of range")
    return value


def _load_object(raw: bytes, what: str) -> dict[str, Any]:
    """Parse bytes into a JSON object or raise MalformedPayload."""
    if not raw:
        raise MalformedPayload(f"{what} body is empty")

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedPayload(
            f"{what} body is not valid UTF-8", {"position": e.start}
        ) from e

    try:
        doc = json.loads(
            text, parse_constant=_reject_constant, parse_float=_parse_finite_float
        )
    except json.JSONDecodeError as e:
        raise MalformedPayload(
            f"Invalid JSON in {what.lower()} body: {e.msg}",
            {"line": e.lineno, "column": e.colno},
        ) from e

    if not isinstance(doc, dict):
        raise MalformedPayload(f"{what} document must be a JSON object")
    return doc


def decode(raw: bytes) -> CommandRequest:
    """
    Decode a request document.

    Unknown top-level fields are ignored so newer clients can add fields.

    Args:
        raw: Request body bytes

    Returns:
        The decoded CommandRequest

    Raises:
        MalformedPayload: If the document is not a valid request. When the
            document carried a usable ``id`` it is attached to the error as
            ``correlation_id``.
    """
    doc = _load_object(raw, "Request")

    if "id" not in doc:
        raise MalformedPayload("Missing required field: id")
    correlation_id = doc["id"]
    if not _is_valid_id(correlation_id):
        raise MalformedPayload("Field 'id' must be a string or a finite number")

    command = doc.get("command")
    if command is None:
        raise MalformedPayload("Missing required field: command", correlation_id=correlation_id)
    if not isinstance(command, str) or not command.strip():
        raise MalformedPayload(
            "Field 'command' must be a non-empty string", correlation_id=correlation_id
        )

    if "arguments" not in doc:
        raise MalformedPayload("Missing required field: arguments", correlation_id=correlation_id)
    arguments = doc["arguments"]
    if not isinstance(arguments, dict):
        raise MalformedPayload(
            "Field 'arguments' must be a JSON object", correlation_id=correlation_id
        )

    return CommandRequest(command=command, arguments=arguments, id=correlation_id)


def encode(result: CommandResult, correlation_id: Optional[CorrelationId]) -> bytes:
    """
    Encode a result as a response document.

    Args:
        result: Success or failure result
        correlation_id: Id echoed verbatim (None only when the request id
            could not be recovered)

    Returns:
        UTF-8 JSON bytes

    Raises:
        EncodeError: If the payload contains values JSON cannot represent
    """
    doc: dict[str, Any] = {"id": correlation_id}
    try:
        if result.ok:
            doc["result"] = to_jsonable_python(result.payload)
        else:
            error: dict[str, Any] = {
                "kind": result.error.kind,
                "message": result.error.message,
            }
            if result.error.detail is not None:
                error["detail"] = to_jsonable_python(result.error.detail)
            doc["error"] = error
        return json.dumps(doc, ensure_ascii=False, allow_nan=False).encode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EncodeError(f"Result is not JSON serializable: {e}") from e


def encode_request(
    command: str,
    arguments: Optional[dict[str, Any]],
    correlation_id: CorrelationId,
) -> bytes:
    """Encode a request document (client side)."""
    doc = {"command": command, "arguments": arguments or {}, "id": correlation_id}
    try:
        return json.dumps(to_jsonable_python(doc), ensure_ascii=False, allow_nan=False).encode(
            "utf-8"
        )
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EncodeError(f"Arguments are not JSON serializable: {e}") from e


def decode_response(raw: bytes) -> ResponseDocument:
    """
    Decode a response document (client side).

    Raises:
        MalformedPayload: If the document is not an object with an ``id`` and
            exactly one of ``result`` / ``error``
    """
    doc = _load_object(raw, "Response")

    if "id" not in doc:
        raise MalformedPayload("Response is missing field: id")

    has_result = "result" in doc
    has_error = "error" in doc
    if has_result == has_error:
        raise MalformedPayload(
            "Response must contain exactly one of 'result' or 'error'",
            correlation_id=doc["id"],
        )

    try:
        if has_error:
            return ResponseDocument(id=doc["id"], error=ErrorInfo.model_validate(doc["error"]))
        return ResponseDocument(id=doc["id"], result=doc["result"])
    except ValidationError as e:
        raise MalformedPayload(f"Invalid response document: {e}", correlation_id=doc["id"]) from e
