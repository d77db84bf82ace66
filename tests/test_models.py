"""Tests for value and protocol models."""

import pytest
from pydantic import ValidationError

from mcp_unreal.models.base import AssetReference, LinearColor, Rotator, Transform, Vector3
from mcp_unreal.models.protocol import CommandResult


class TestValueTypes:
    """Tests for editor value types."""

    def test_vector_from_array_and_object(self):
        """Vectors accept [x, y, z] and {x, y, z}."""
        assert Vector3.model_validate([1, 2, 3]) == Vector3(x=1, y=2, z=3)
        assert Vector3.model_validate({"z": 5}) == Vector3(z=5)

    def test_vector_wrong_length(self):
        """Arrays must have exactly three components."""
        with pytest.raises(ValidationError):
            Vector3.model_validate([1, 2])

    def test_components_are_strict_numbers(self):
        """Booleans and numeric strings are not components; integers are."""
        with pytest.raises(ValidationError):
            Vector3.model_validate({"x": True})
        with pytest.raises(ValidationError):
            Rotator.model_validate({"yaw": "90"})
        with pytest.raises(ValidationError):
            LinearColor.model_validate([1, 0, True])

        assert Vector3.model_validate({"x": 2}).x == 2.0

    def test_components_are_finite(self):
        """NaN and infinities are rejected."""
        with pytest.raises(ValidationError):
            Vector3.model_validate([float("nan"), 0, 0])
        with pytest.raises(ValidationError):
            Rotator(pitch=float("inf"))

    def test_rotator_order(self):
        """Rotator arrays are pitch, yaw, roll."""
        assert Rotator.model_validate([10, 20, 30]) == Rotator(pitch=10, yaw=20, roll=30)

    def test_color_alpha_default(self):
        """Three-component colors are opaque."""
        assert LinearColor.model_validate([0.5, 0.5, 0.5]).a == 1.0

    def test_transform_defaults(self):
        """Transforms default to identity."""
        transform = Transform()
        assert transform.location == Vector3.zero()
        assert transform.scale == Vector3.one()

    def test_asset_reference(self):
        """Package and asset names are derived from the path."""
        ref = AssetReference(path="/Game/Meshes/SM_Cube.SM_Cube")
        assert ref.package_name == "/Game/Meshes/SM_Cube"
        assert ref.asset_name == "SM_Cube"

        assert AssetReference(path="/Game/Meshes/SM_Cube").asset_name == "SM_Cube"

    def test_asset_reference_requires_root(self):
        """Asset paths start with '/'."""
        with pytest.raises(ValidationError):
            AssetReference(path="Game/Meshes")


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self):
        """Successes carry a payload and no error."""
        result = CommandResult.success({"a": 1})
        assert result.ok
        assert result.kind is None

    def test_failure(self):
        """Failures carry an error and no payload."""
        result = CommandResult.failure("Timeout", "slow", {"timeout": 1.0})
        assert not result.ok
        assert result.kind == "Timeout"
        assert result.error.detail == {"timeout": 1.0}

    def test_exactly_one_variant(self):
        """A result cannot be both, or neither."""
        with pytest.raises(ValidationError):
            CommandResult(ok=False)
        with pytest.raises(ValidationError):
            CommandResult(ok=True, error={"kind": "HandlerError", "message": "x"})
        with pytest.raises(ValidationError):
            CommandResult(ok=False, payload=1, error={"kind": "HandlerError", "message": "x"})

    def test_frozen(self):
        """Results are immutable."""
        result = CommandResult.success(1)
        with pytest.raises(ValidationError):
            result.ok = False
