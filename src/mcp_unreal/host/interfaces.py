"""
Host provider interfaces.

The bridge never reimplements editor machinery. Each capability domain
talks to one opaque provider that owns the real work (asset registry,
blueprint compiler, PCG, gameplay abilities, Niagara, data tables, ...).
Providers raise HostError (or any exception) on editor-side failures; the
execution bridge reports those as HandlerError.

Actors are addressed by label, name or full object path.
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from ..models.base import Rotator, Vector3


class AssetProvider(Protocol):
    """Asset registry access."""

    def list_assets(
        self, path: str, class_name: Optional[str], recursive: bool, limit: int
    ) -> list[dict[str, Any]]: ...

    def get_asset(self, asset_path: str) -> dict[str, Any]: ...

    def search_assets(
        self,
        class_filter: Optional[str],
        path_filter: Optional[str],
        name_filter: Optional[str],
        recursive: bool,
    ) -> list[dict[str, Any]]: ...

    def get_dependencies(self, asset_path: str) -> list[str]: ...

    def get_referencers(self, asset_path: str) -> list[str]: ...

    def delete_asset(self, asset_path: str) -> None: ...


class WorldProvider(Protocol):
    """Actors in the editor world and level management."""

    def list_actors(
        self, class_filter: Optional[str], name_filter: Optional[str]
    ) -> list[dict[str, Any]]: ...

    def spawn_actor(
        self,
        class_name: str,
        label: Optional[str],
        location: Vector3,
        rotation: Rotator,
    ) -> dict[str, Any]: ...

    def delete_actor(self, actor: str) -> None: ...

    def set_actor_transform(
        self,
        actor: str,
        location: Optional[Vector3],
        rotation: Optional[Rotator],
        scale: Optional[Vector3],
    ) -> dict[str, Any]: ...

    def current_level(self) -> dict[str, Any]: ...

    def list_levels(self) -> list[dict[str, Any]]: ...

    def load_level(self, level_path: str) -> dict[str, Any]: ...

    def save_level(self) -> dict[str, Any]: ...

    def new_level(self, level_path: str) -> dict[str, Any]: ...


class BlueprintProvider(Protocol):
    """Blueprint graph editing and compilation."""

    def list_blueprints(self) -> list[dict[str, Any]]: ...

    def inspect(self, blueprint_path: str) -> dict[str, Any]: ...

    def create(self, package_path: str, name: str, parent_class: str) -> dict[str, Any]: ...

    def add_variable(
        self, blueprint_path: str, name: str, var_type: str, default_value: Any
    ) -> dict[str, Any]: ...

    def add_function(self, blueprint_path: str, name: str) -> dict[str, Any]: ...

    def add_node(
        self, blueprint_path: str, graph: str, node_class: str, pos_x: int, pos_y: int
    ) -> dict[str, Any]: ...

    def connect_pins(
        self,
        blueprint_path: str,
        graph: str,
        source_node: str,
        source_pin: str,
        target_node: str,
        target_pin: str,
    ) -> dict[str, Any]: ...

    def compile(self, blueprint_path: str) -> dict[str, Any]: ...


class MaterialProvider(Protocol):
    """Material creation and parameters."""

    def create_material(self, package_path: str, material_name: str) -> dict[str, Any]: ...

    def set_parameter(self, material_path: str, parameter: str, value: Any) -> dict[str, Any]: ...

    def get_parameters(self, material_path: str) -> dict[str, Any]: ...


class MeshProvider(Protocol):
    """Procedural mesh sections on actors."""

    def create_section(
        self,
        actor: str,
        section_index: int,
        vertices: list[Vector3],
        triangles: list[int],
        normals: Optional[list[Vector3]],
        uvs: Optional[list[list[float]]],
    ) -> dict[str, Any]: ...

    def clear(self, actor: str, section_index: Optional[int]) -> dict[str, Any]: ...


class PCGProvider(Protocol):
    """Procedural Content Generation graphs and components."""

    def get_graph_info(self, graph_path: str) -> dict[str, Any]: ...

    def add_node(self, graph_path: str, node_type: str, label: Optional[str]) -> dict[str, Any]: ...

    def connect_nodes(
        self,
        graph_path: str,
        source_node: str,
        source_pin: str,
        target_node: str,
        target_pin: str,
    ) -> dict[str, Any]: ...

    def remove_node(self, graph_path: str, node: str) -> None: ...

    def set_parameter(
        self, graph_path: str, node: str, parameter: str, value: Any
    ) -> dict[str, Any]: ...

    def execute(self, actor: str) -> dict[str, Any]: ...

    def cleanup(self, actor: str) -> dict[str, Any]: ...


class AbilityProvider(Protocol):
    """Gameplay Ability System components on actors."""

    def grant_ability(self, actor: str, ability_class: str, level: int) -> dict[str, Any]: ...

    def revoke_ability(self, actor: str, ability_class: str) -> int: ...

    def list_abilities(self, actor: str) -> list[dict[str, Any]]: ...

    def apply_effect(self, actor: str, effect_class: str, level: int) -> dict[str, Any]: ...

    def get_attributes(self, actor: str) -> dict[str, dict[str, float]]: ...

    def set_attribute(self, actor: str, attribute: str, value: float) -> dict[str, Any]: ...


class NiagaraProvider(Protocol):
    """Niagara VFX systems and components."""

    def spawn_system(
        self, system_path: str, location: Vector3, label: Optional[str]
    ) -> dict[str, Any]: ...

    def activate(self, actor: str) -> dict[str, Any]: ...

    def deactivate(self, actor: str) -> dict[str, Any]: ...

    def set_parameter(self, actor: str, parameter: str, value: Any) -> dict[str, Any]: ...

    def get_system_info(self, system_path: str) -> dict[str, Any]: ...


class ComponentProvider(Protocol):
    """Actor component hierarchies and component properties."""

    def list_components(self, actor: str, include_transforms: bool) -> dict[str, Any]: ...

    def get_property(self, actor: str, component: str, property: str) -> dict[str, Any]: ...

    def set_property(
        self, actor: str, component: str, property: str, value: Any
    ) -> dict[str, Any]: ...


class DataTableProvider(Protocol):
    """DataTable assets and their rows."""

    def list_tables(self, path: str) -> list[dict[str, Any]]: ...

    def get_table(self, table_path: str) -> dict[str, Any]: ...

    def add_row(self, table_path: str, row_name: str, data: dict[str, Any]) -> dict[str, Any]: ...

    def update_row(
        self, table_path: str, row_name: str, data: dict[str, Any]
    ) -> dict[str, Any]: ...

    def delete_row(self, table_path: str, row_name: str) -> dict[str, Any]: ...

    def import_csv(self, table_path: str, source_path: str) -> dict[str, Any]: ...


class EditorProvider(Protocol):
    """Editor-wide utilities."""

    def info(self) -> dict[str, Any]: ...

    def console_command(self, command: str) -> dict[str, Any]: ...

    def output_log(self, lines: int, filter: Optional[str]) -> list[str]: ...


@dataclass
class EditorHost:
    """
    The set of capability providers offered by one editor session.

    A provider left as None means the host lacks that subsystem; the
    matching capability domain is then not registered at all.
    """

    kind: str
    project_name: str = ""
    engine_version: str = ""
    editor: Optional[EditorProvider] = None
    assets: Optional[AssetProvider] = None
    world: Optional[WorldProvider] = None
    blueprints: Optional[BlueprintProvider] = None
    materials: Optional[MaterialProvider] = None
    mesh: Optional[MeshProvider] = None
    pcg: Optional[PCGProvider] = None
    abilities: Optional[AbilityProvider] = None
    niagara: Optional[NiagaraProvider] = None
    components: Optional[ComponentProvider] = None
    data_tables: Optional[DataTableProvider] = None
