"""
Command descriptors: the schema half of the command registry.

A descriptor names a command, lists its parameters in order, tags it with
its capability domain and states which thread it must run on. Descriptors
are created once at startup and never change afterwards.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Optional, Type

from pydantic import BaseModel, Field, field_validator, model_validator


class ThreadAffinity(str, Enum):
    """Where a command handler is allowed to run."""

    # must-run-on-host-mutation-thread
    HOST_THREAD = "host_thread"
    # may-run-on-caller-thread
    CALLER_THREAD = "caller_thread"


class ParamType(str, Enum):
    """JSON value types accepted by command parameters."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    ANY = "any"

    def matches(self, value: Any) -> bool:
        """Check whether a decoded JSON value has this type.

        Booleans are never integers or numbers here, even though Python's
        ``bool`` subclasses ``int``. Integers are valid numbers; NaN and
        infinities are not.
        """
        if self is ParamType.ANY:
            return True
        if self is ParamType.STRING:
            return isinstance(value, str)
        if self is ParamType.BOOLEAN:
            return isinstance(value, bool)
        if self is ParamType.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        if self is ParamType.NUMBER:
            if isinstance(value, float):
                return math.isfinite(value)
            return isinstance(value, int) and not isinstance(value, bool)
        if self is ParamType.OBJECT:
            return isinstance(value, dict)
        if self is ParamType.ARRAY:
            return isinstance(value, list)
        return False


class ParamSpec(BaseModel):
    """One named, typed parameter of a command."""

    name: str = Field(..., min_length=1)
    type: ParamType = ParamType.STRING
    required: bool = True
    default: Any = None
    choices: Optional[tuple[Any, ...]] = None
    description: str = ""
    # Structured value type (e.g. Vector3); validated with model_validate
    model: Optional[Type[BaseModel]] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_default(self) -> ParamSpec:
        if self.required and self.default is not None:
            raise ValueError(f"Required parameter '{self.name}' cannot have a default")
        return self

    def describe(self) -> dict[str, Any]:
        """JSON-friendly description for command listings."""
        info: dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "required": self.required,
        }
        if self.default is not None:
            info["default"] = self.default
        if self.choices is not None:
            info["choices"] = list(self.choices)
        if self.model is not None:
            info["model"] = self.model.__name__
        if self.description:
            info["description"] = self.description
        return info


def param(
    name: str,
    type: ParamType = ParamType.STRING,
    *,
    required: Optional[bool] = None,
    default: Any = None,
    choices: Optional[tuple[Any, ...]] = None,
    description: str = "",
    model: Optional[Type[BaseModel]] = None,
) -> ParamSpec:
    """Shorthand for ParamSpec; a parameter with a default is optional."""
    if required is None:
        required = default is None
    return ParamSpec(
        name=name,
        type=type,
        required=required,
        default=default,
        choices=choices,
        description=description,
        model=model,
    )


class CommandDescriptor(BaseModel):
    """Immutable description of a registered command."""

    name: str = Field(..., min_length=1, description="Unique command name, e.g. asset.list")
    domain: str = Field(..., min_length=1, description="Capability domain tag")
    params: tuple[ParamSpec, ...] = ()
    affinity: ThreadAffinity = ThreadAffinity.HOST_THREAD
    description: str = ""

    model_config = {"frozen": True}

    @field_validator("params")
    @classmethod
    def _unique_params(cls, v: tuple[ParamSpec, ...]) -> tuple[ParamSpec, ...]:
        names = [p.name for p in v]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"Duplicate parameter names: {sorted(duplicates)}")
        return v

    @property
    def requires_host_thread(self) -> bool:
        return self.affinity is ThreadAffinity.HOST_THREAD

    def describe(self) -> dict[str, Any]:
        """JSON-friendly description for command listings."""
        return {
            "name": self.name,
            "domain": self.domain,
            "affinity": self.affinity.value,
            "description": self.description,
            "params": [p.describe() for p in self.params],
        }
