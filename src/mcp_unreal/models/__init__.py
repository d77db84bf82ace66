"""
MCP-Unreal data models.

Pydantic v2 models for the command protocol (requests, results, response
documents), command descriptors, and the editor value types commands accept.
"""

# Value types
from .base import (
    AssetReference,
    LinearColor,
    Rotator,
    Transform,
    Vector3,
)

# Descriptors
from .descriptors import (
    CommandDescriptor,
    ParamSpec,
    ParamType,
    ThreadAffinity,
    param,
)

# Protocol
from .protocol import (
    CommandRequest,
    CommandResult,
    CorrelationId,
    ErrorInfo,
    ResponseDocument,
)

__all__ = [
    # Value types
    "AssetReference",
    "LinearColor",
    "Rotator",
    "Transform",
    "Vector3",
    # Descriptors
    "CommandDescriptor",
    "ParamSpec",
    "ParamType",
    "ThreadAffinity",
    "param",
    # Protocol
    "CommandRequest",
    "CommandResult",
    "CorrelationId",
    "ErrorInfo",
    "ResponseDocument",
]
