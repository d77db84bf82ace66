"""
Request, result and response document models.

Wire format:
    request:  {"command": str, "arguments": {...}, "id": str | number}
    success:  {"id": <echoed>, "result": {...}}
    failure:  {"id": <echoed>, "error": {"kind": str, "message": str, "detail"?: {...}}}
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, model_validator

CorrelationId = Union[str, int, float]


class CommandRequest(BaseModel):
    """A decoded inbound request, owned by the dispatcher for one call."""

    command: str = Field(..., min_length=1)
    arguments: dict[str, Any] = Field(default_factory=dict)
    id: CorrelationId

    model_config = {"frozen": True}


class ErrorInfo(BaseModel):
    """Failure half of a result."""

    kind: str
    message: str
    detail: Optional[dict[str, Any]] = None

    model_config = {"frozen": True}


class CommandResult(BaseModel):
    """Outcome of a command: exactly one of ``payload`` or ``error``.

    Build instances with :meth:`success` and :meth:`failure`; a success
    payload may legitimately be ``None``, so the discriminant is ``ok``.
    """

    ok: bool
    payload: Any = None
    error: Optional[ErrorInfo] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _exactly_one(self) -> CommandResult:
        if self.ok and self.error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not self.ok and self.error is None:
            raise ValueError("A failed result must carry an error")
        if not self.ok and self.payload is not None:
            raise ValueError("A failed result cannot carry a payload")
        return self

    @classmethod
    def success(cls, payload: Any = None) -> CommandResult:
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(
        cls,
        kind: str,
        message: str,
        detail: Optional[dict[str, Any]] = None,
    ) -> CommandResult:
        return cls(ok=False, error=ErrorInfo(kind=kind, message=message, detail=detail))

    @property
    def kind(self) -> Optional[str]:
        """Error kind, or None for a success."""
        return self.error.kind if self.error is not None else None


class ResponseDocument(BaseModel):
    """A decoded response document as seen by a client."""

    id: Optional[CorrelationId] = None
    result: Any = None
    error: Optional[ErrorInfo] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_result(self) -> CommandResult:
        if self.error is not None:
            return CommandResult(ok=False, error=self.error)
        return CommandResult.success(self.result)
