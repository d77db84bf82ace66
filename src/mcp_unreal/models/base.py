"""
Editor value types as Pydantic models.

These mirror Unreal Engine's core math and color types. Commands accept them
as plain JSON (``{"x": 1, "y": 2, "z": 3}`` or ``[1, 2, 3]``) and host
providers convert them to and from ``unreal`` values.
"""

from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

# A finite JSON number; booleans and numeric strings are rejected
Component = Annotated[float, Field(strict=True, allow_inf_nan=False)]


def _from_sequence(value: Any, names: tuple[str, ...]) -> Any:
    """Map a JSON array onto named fields; leave other values untouched."""
    if isinstance(value, (list, tuple)):
        if len(value) != len(names):
            raise ValueError(f"expected {len(names)} components, got {len(value)}")
        return dict(zip(names, value))
    return value


class Vector3(BaseModel):
    """3D Vector (mirrors unreal.Vector).

    UE5 Coordinate System:
    - X: Forward/Back direction
    - Y: Left/Right direction
    - Z: Up/Down direction
    """

    x: Component = 0.0
    y: Component = 0.0
    z: Component = 0.0

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _accept_array(cls, value: Any) -> Any:
        return _from_sequence(value, ("x", "y", "z"))

    @classmethod
    def from_ue(cls, ue_vector: Any) -> Vector3:
        """Create from unreal.Vector."""
        return cls(
            x=float(ue_vector.x),
            y=float(ue_vector.y),
            z=float(ue_vector.z),
        )

    @classmethod
    def zero(cls) -> Vector3:
        """Return a zero vector."""
        return cls(x=0.0, y=0.0, z=0.0)

    @classmethod
    def one(cls) -> Vector3:
        """Return a unit vector (1, 1, 1)."""
        return cls(x=1.0, y=1.0, z=1.0)


class Rotator(BaseModel):
    """Euler rotation (mirrors unreal.Rotator).

    Angles in degrees:
    - pitch: Rotation around Y axis (up/down tilt)
    - yaw: Rotation around Z axis (left/right turn)
    - roll: Rotation around X axis (banking)
    """

    pitch: Component = 0.0
    yaw: Component = 0.0
    roll: Component = 0.0

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _accept_array(cls, value: Any) -> Any:
        return _from_sequence(value, ("pitch", "yaw", "roll"))

    @classmethod
    def from_ue(cls, ue_rotator: Any) -> Rotator:
        """Create from unreal.Rotator."""
        return cls(
            pitch=float(ue_rotator.pitch),
            yaw=float(ue_rotator.yaw),
            roll=float(ue_rotator.roll),
        )

    @classmethod
    def zero(cls) -> Rotator:
        """Return a zero rotation."""
        return cls(pitch=0.0, yaw=0.0, roll=0.0)


class Transform(BaseModel):
    """Location, rotation and scale of an actor."""

    location: Vector3 = Field(default_factory=Vector3.zero)
    rotation: Rotator = Field(default_factory=Rotator.zero)
    scale: Vector3 = Field(default_factory=Vector3.one)

    model_config = {"frozen": True}


class LinearColor(BaseModel):
    """Linear RGBA Color (mirrors unreal.LinearColor, 0.0-1.0 floats)."""

    r: Component = 1.0
    g: Component = 1.0
    b: Component = 1.0
    a: Component = 1.0

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _accept_array(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)) and len(value) == 3:
            value = [*value, 1.0]
        return _from_sequence(value, ("r", "g", "b", "a"))


class AssetReference(BaseModel):
    """Reference to a content asset by object path."""

    path: str = Field(..., description="Asset path e.g. /Game/Meshes/SM_Cube")
    asset_class: Optional[str] = Field(
        None, description="Asset class name e.g. StaticMesh"
    )

    model_config = {"frozen": True}

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate that the path starts with /."""
        if not v.startswith("/"):
            raise ValueError("Asset path must start with /")
        return v

    @property
    def package_name(self) -> str:
        """Package part of the object path (``/Game/A/B.B`` -> ``/Game/A/B``)."""
        return self.path.split(".", 1)[0]

    @property
    def asset_name(self) -> str:
        """Short asset name (``/Game/A/B.B`` -> ``B``)."""
        if "." in self.path:
            return self.path.rsplit(".", 1)[1]
        return self.path.rsplit("/", 1)[-1]
