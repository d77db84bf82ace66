"""Procedural mesh commands."""

import logging
from typing import TYPE_CHECKING, Any, Optional

from pydantic import ValidationError

from ..core.errors import InvalidArgument
from ..models.base import Vector3
from ..models.descriptors import ParamType, param
from ._helpers import require_range

if TYPE_CHECKING:
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

DOMAIN = "mesh"
PROVIDER = "mesh"


def _vectors(field: str, values: Optional[list[Any]]) -> Optional[list[Vector3]]:
    if values is None:
        return None
    try:
        return [Vector3.model_validate(v) for v in values]
    except ValidationError as e:
        raise InvalidArgument(field, f"expected a list of vectors: {e.errors()[0]['msg']}") from e


def _uvs(values: Optional[list[Any]], vertex_count: int) -> Optional[list[list[float]]]:
    if values is None:
        return None
    if len(values) != vertex_count:
        raise InvalidArgument("uvs", f"expected {vertex_count} entries, got {len(values)}")
    uvs = []
    for uv in values:
        if (
            not isinstance(uv, list)
            or len(uv) != 2
            or not all(isinstance(c, (int, float)) and not isinstance(c, bool) for c in uv)
        ):
            raise InvalidArgument("uvs", "each UV must be a [u, v] pair of numbers")
        uvs.append([float(uv[0]), float(uv[1])])
    return uvs


def register_commands(registry: "CommandRegistry", host: "EditorHost") -> None:
    """Register procedural mesh commands."""
    mesh = host.mesh

    @registry.command(
        "mesh.create_section",
        domain=DOMAIN,
        params=[
            param("actor", description="Actor with a ProceduralMeshComponent"),
            param("section_index", ParamType.INTEGER, default=0),
            param("vertices", ParamType.ARRAY, description="List of [x, y, z]"),
            param("triangles", ParamType.ARRAY, description="Vertex indices, three per triangle"),
            param("normals", ParamType.ARRAY, required=False),
            param("uvs", ParamType.ARRAY, required=False),
        ],
    )
    def create_section(args: dict[str, Any]) -> dict[str, Any]:
        """Create or replace a mesh section."""
        section_index = require_range("section_index", args["section_index"], 0)
        vertices = _vectors("vertices", args["vertices"])
        if not vertices:
            raise InvalidArgument("vertices", "at least one vertex is required")

        triangles = args["triangles"]
        if not triangles or len(triangles) % 3 != 0:
            raise InvalidArgument("triangles", "length must be a non-zero multiple of 3")
        for index in triangles:
            if not isinstance(index, int) or isinstance(index, bool):
                raise InvalidArgument("triangles", "indices must be integers")
            if not 0 <= index < len(vertices):
                raise InvalidArgument("triangles", f"index {index} is out of range")

        normals = _vectors("normals", args["normals"])
        if normals is not None and len(normals) != len(vertices):
            raise InvalidArgument("normals", f"expected {len(vertices)} entries, got {len(normals)}")

        return mesh.create_section(
            args["actor"],
            section_index,
            vertices,
            triangles,
            normals,
            _uvs(args["uvs"], len(vertices)),
        )

    @registry.command(
        "mesh.clear",
        domain=DOMAIN,
        params=[
            param("actor"),
            param("section_index", ParamType.INTEGER, required=False,
                  description="Section to clear; all sections when omitted"),
        ],
    )
    def clear(args: dict[str, Any]) -> dict[str, Any]:
        """Clear one or all mesh sections."""
        return mesh.clear(args["actor"], args["section_index"])
