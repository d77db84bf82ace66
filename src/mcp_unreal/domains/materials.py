"""Material commands."""

import logging
from typing import TYPE_CHECKING, Any

from ..core.errors import InvalidArgument
from ..models.descriptors import ParamType, param
from ._helpers import require_asset_path, require_folder_path, require_name, require_non_empty

if TYPE_CHECKING:
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

DOMAIN = "material"
PROVIDER = "materials"


def _check_parameter_value(value: Any) -> Any:
    """Scalars are numbers, vectors are 3- or 4-number arrays or {r,g,b,a}, textures are paths."""
    if isinstance(value, bool):
        raise InvalidArgument("value", "booleans are not material parameter values")
    if isinstance(value, (int, float, str, dict)):
        return value
    if isinstance(value, list) and len(value) in (3, 4):
        if all(isinstance(c, (int, float)) and not isinstance(c, bool) for c in value):
            return value
    raise InvalidArgument(
        "value", "expected a number, a texture path or a color as [r, g, b] / [r, g, b, a]"
    )


def register_commands(registry: "CommandRegistry", host: "EditorHost") -> None:
    """Register material commands."""
    materials = host.materials

    @registry.command(
        "material.create",
        domain=DOMAIN,
        params=[param("package_path"), param("material_name")],
    )
    def create_material(args: dict[str, Any]) -> dict[str, Any]:
        """Create a Material asset."""
        return materials.create_material(
            require_folder_path("package_path", args["package_path"]),
            require_name("material_name", args["material_name"]),
        )

    @registry.command(
        "material.set_parameter",
        domain=DOMAIN,
        params=[
            param("material_path"),
            param("parameter"),
            param("value", ParamType.ANY),
        ],
    )
    def set_parameter(args: dict[str, Any]) -> dict[str, Any]:
        """Set a scalar, vector or texture parameter."""
        return materials.set_parameter(
            require_asset_path("material_path", args["material_path"]),
            require_non_empty("parameter", args["parameter"]),
            _check_parameter_value(args["value"]),
        )

    @registry.command("material.get_parameters", domain=DOMAIN, params=[param("material_path")])
    def get_parameters(args: dict[str, Any]) -> dict[str, Any]:
        """List a material's parameters and their values."""
        return materials.get_parameters(require_asset_path("material_path", args["material_path"]))
