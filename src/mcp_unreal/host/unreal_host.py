"""
EditorHost backed by the ``unreal`` Python module.

Only importable inside the Unreal Editor's embedded interpreter. Providers
call editor subsystems directly, so every mutating call must happen on the
game thread; the bridge guarantees that by pumping the host queue from a
Slate post-tick callback.

The stock Python API exposes no procedural mesh, PCG, Gameplay Ability or
Niagara editing, so those providers are left as None and their domains are
not registered.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..core.errors import HostError
from ..models.base import AssetReference, LinearColor, Rotator, Vector3
from .interfaces import EditorHost

logger = logging.getLogger(__name__)


def _object_path(path: str) -> str:
    """Normalize ``/Game/A/B`` to ``/Game/A/B.B``."""
    ref = AssetReference(path=path)
    return f"{ref.package_name}.{ref.asset_name}"


class _UnrealProvider:
    def __init__(self, unreal: Any):
        self._ue = unreal

    def _subsystem(self, name: str) -> Any:
        subsystem = self._ue.get_editor_subsystem(getattr(self._ue, name))
        if not subsystem:
            raise HostError(f"Failed to get {name}")
        return subsystem

    def _load_asset(self, path: str) -> Any:
        asset = self._ue.load_asset(_object_path(path))
        if asset is None:
            raise HostError(f"Asset not found: '{path}'")
        return asset

    def _all_actors(self) -> list[Any]:
        return list(self._subsystem("EditorActorSubsystem").get_all_level_actors())

    def _find_actor(self, reference: str) -> Any:
        for actor in self._all_actors():
            if reference in (actor.get_actor_label(), actor.get_name(), actor.get_path_name()):
                return actor
        raise HostError(f"Actor not found: '{reference}'")

    def _asset_info(self, data: Any) -> dict[str, Any]:
        package = str(data.package_name)
        name = str(data.asset_name)
        return {
            "name": name,
            "path": f"{package}.{name}",
            "package": package,
            "class": str(data.asset_class_path.asset_name),
        }

    def _vector(self, v: Vector3) -> Any:
        return self._ue.Vector(v.x, v.y, v.z)

    def _rotator(self, r: Rotator) -> Any:
        return self._ue.Rotator(roll=r.roll, pitch=r.pitch, yaw=r.yaw)


class UnrealAssets(_UnrealProvider):
    """AssetProvider over the asset registry."""

    def _registry(self) -> Any:
        return self._ue.AssetRegistryHelpers.get_asset_registry()

    def list_assets(self, path, class_name, recursive, limit):
        found = self._registry().get_assets_by_path(path, recursive=recursive) or []
        results = []
        for data in found:
            info = self._asset_info(data)
            if class_name and info["class"] != class_name:
                continue
            results.append(info)
            if len(results) >= limit:
                break
        return results

    def get_asset(self, asset_path):
        data = self._ue.EditorAssetLibrary.find_asset_data(_object_path(asset_path))
        if data is None or not data.is_valid():
            raise HostError(f"Asset not found: '{asset_path}'")
        info = self._asset_info(data)
        info["dependencies"] = self.get_dependencies(asset_path)
        info["referencers"] = self.get_referencers(asset_path)
        return info

    def search_assets(self, class_filter, path_filter, name_filter, recursive):
        ar_filter = self._ue.ARFilter(
            package_paths=[path_filter] if path_filter else [],
            recursive_paths=recursive,
        )
        results = []
        for data in self._registry().get_assets(ar_filter) or []:
            info = self._asset_info(data)
            if class_filter and info["class"].lower() != class_filter.lower():
                continue
            if name_filter and name_filter.lower() not in info["name"].lower():
                continue
            results.append(info)
        return results

    def get_dependencies(self, asset_path):
        package = AssetReference(path=asset_path).package_name
        options = self._ue.AssetRegistryDependencyOptions()
        return sorted(str(p) for p in self._registry().get_dependencies(package, options) or [])

    def get_referencers(self, asset_path):
        package = AssetReference(path=asset_path).package_name
        options = self._ue.AssetRegistryDependencyOptions()
        return sorted(str(p) for p in self._registry().get_referencers(package, options) or [])

    def delete_asset(self, asset_path):
        path = _object_path(asset_path)
        if not self._ue.EditorAssetLibrary.does_asset_exist(path):
            raise HostError(f"Asset not found: '{asset_path}'")
        if not self._ue.EditorAssetLibrary.delete_asset(path):
            raise HostError(f"Failed to delete asset '{asset_path}'")


class UnrealWorld(_UnrealProvider):
    """WorldProvider over EditorActorSubsystem and LevelEditorSubsystem."""

    def _actor_info(self, actor: Any) -> dict[str, Any]:
        loc = actor.get_actor_location()
        rot = actor.get_actor_rotation()
        scale = actor.get_actor_scale3d()
        return {
            "name": actor.get_name(),
            "label": actor.get_actor_label(),
            "class": actor.get_class().get_name(),
            "path": actor.get_path_name(),
            "location": {"x": loc.x, "y": loc.y, "z": loc.z},
            "rotation": {"pitch": rot.pitch, "yaw": rot.yaw, "roll": rot.roll},
            "scale": {"x": scale.x, "y": scale.y, "z": scale.z},
        }

    def _resolve_class(self, class_name: str) -> Any:
        if class_name.startswith("/"):
            cls = self._ue.EditorAssetLibrary.load_blueprint_class(class_name)
        else:
            cls = getattr(self._ue, class_name, None)
        if cls is None:
            raise HostError(f"Actor class not found: '{class_name}'")
        return cls

    def _world(self) -> Any:
        world = self._subsystem("UnrealEditorSubsystem").get_editor_world()
        if not world:
            raise HostError("No level is loaded")
        return world

    def list_actors(self, class_filter, name_filter):
        results = []
        for actor in self._all_actors():
            info = self._actor_info(actor)
            if class_filter and class_filter.lower() not in info["class"].lower():
                continue
            if name_filter:
                needle = name_filter.lower()
                if needle not in info["label"].lower() and needle not in info["name"].lower():
                    continue
            results.append(info)
        return results

    def spawn_actor(self, class_name, label, location, rotation):
        actor = self._subsystem("EditorActorSubsystem").spawn_actor_from_class(
            self._resolve_class(class_name), self._vector(location), self._rotator(rotation)
        )
        if actor is None:
            raise HostError(f"Failed to spawn actor of class '{class_name}'")
        if label:
            actor.set_actor_label(label)
        return self._actor_info(actor)

    def delete_actor(self, actor):
        found = self._find_actor(actor)
        if not self._subsystem("EditorActorSubsystem").destroy_actor(found):
            raise HostError(f"Failed to destroy actor '{actor}'")

    def set_actor_transform(self, actor, location, rotation, scale):
        found = self._find_actor(actor)
        if location is not None:
            found.set_actor_location(self._vector(location), False, False)
        if rotation is not None:
            found.set_actor_rotation(self._rotator(rotation), False)
        if scale is not None:
            found.set_actor_scale3d(self._vector(scale))
        return self._actor_info(found)

    def _level_info(self, world: Any) -> dict[str, Any]:
        path = world.get_path_name()
        return {
            "name": world.get_name(),
            "path": path,
            "actor_count": len(self._all_actors()),
            "current": True,
        }

    def current_level(self):
        return self._level_info(self._world())

    def list_levels(self):
        registry = self._ue.AssetRegistryHelpers.get_asset_registry()
        ar_filter = self._ue.ARFilter(
            package_paths=["/Game"],
            class_paths=[self._ue.TopLevelAssetPath("/Script/Engine", "World")],
            recursive_paths=True,
        )
        current = self._world().get_path_name()
        levels = []
        for data in registry.get_assets(ar_filter) or []:
            package = str(data.package_name)
            name = str(data.asset_name)
            path = f"{package}.{name}"
            levels.append({"name": name, "path": path, "current": path == current})
        return levels

    def load_level(self, level_path):
        if not self._subsystem("LevelEditorSubsystem").load_level(level_path):
            raise HostError(f"Level not found or failed to load: '{level_path}'")
        return self.current_level()

    def save_level(self):
        if not self._subsystem("LevelEditorSubsystem").save_current_level():
            raise HostError("Failed to save the current level")
        return {"level": self._world().get_path_name(), "saved": True}

    def new_level(self, level_path):
        if self._ue.EditorAssetLibrary.does_asset_exist(_object_path(level_path)):
            raise HostError(f"Asset already exists: '{level_path}'")
        if not self._subsystem("LevelEditorSubsystem").new_level(level_path):
            raise HostError(f"Failed to create level '{level_path}'")
        return self.current_level()


class UnrealBlueprints(_UnrealProvider):
    """BlueprintProvider over BlueprintEditorLibrary.

    Node placement and pin wiring have no Python API; those calls raise
    HostError.
    """

    def _blueprint(self, blueprint_path: str) -> Any:
        bp = self._load_asset(blueprint_path)
        if not isinstance(bp, self._ue.Blueprint):
            raise HostError(f"Asset '{blueprint_path}' is not a Blueprint")
        return bp

    def list_blueprints(self):
        registry = self._ue.AssetRegistryHelpers.get_asset_registry()
        ar_filter = self._ue.ARFilter(
            package_paths=["/Game"],
            class_paths=[self._ue.TopLevelAssetPath("/Script/Engine", "Blueprint")],
            recursive_paths=True,
        )
        results = []
        for data in registry.get_assets(ar_filter) or []:
            info = self._asset_info(data)
            info["parent_class"] = str(data.get_tag_value("ParentClass") or "")
            results.append(info)
        return results

    def inspect(self, blueprint_path):
        bp = self._blueprint(blueprint_path)
        generated = self._ue.BlueprintEditorLibrary.generated_class(bp)
        parent = self._ue.BlueprintEditorLibrary.get_blueprint_parent_class(bp)
        return {
            "name": bp.get_name(),
            "path": bp.get_path_name(),
            "parent_class": parent.get_name() if parent else None,
            "generated_class": generated.get_name() if generated else None,
            "status": str(bp.get_editor_property("status")),
        }

    def create(self, package_path, name, parent_class):
        parent = getattr(self._ue, parent_class, None)
        if parent is None:
            raise HostError(f"Parent class not found: '{parent_class}'")
        factory = self._ue.BlueprintFactory()
        factory.set_editor_property("parent_class", parent)
        tools = self._ue.AssetToolsHelpers.get_asset_tools()
        bp = tools.create_asset(name, package_path, self._ue.Blueprint, factory)
        if bp is None:
            raise HostError(f"Failed to create blueprint '{package_path}/{name}'")
        return {"name": name, "path": bp.get_path_name(), "parent_class": parent_class}

    def add_variable(self, blueprint_path, name, var_type, default_value):
        bp = self._blueprint(blueprint_path)
        pin_type = self._ue.BlueprintEditorLibrary.get_basic_type_by_name(var_type)
        if not self._ue.BlueprintEditorLibrary.add_member_variable(bp, name, pin_type):
            raise HostError(f"Failed to add variable '{name}' to {bp.get_name()}")
        return {
            "blueprint": bp.get_path_name(),
            "variable": {"name": name, "type": var_type, "default": default_value},
        }

    def add_function(self, blueprint_path, name):
        bp = self._blueprint(blueprint_path)
        graph = self._ue.BlueprintEditorLibrary.add_function_graph(bp, name)
        if graph is None:
            raise HostError(f"Failed to add function '{name}' to {bp.get_name()}")
        return {"blueprint": bp.get_path_name(), "function": name, "graph": graph.get_name()}

    def add_node(self, blueprint_path, graph, node_class, pos_x, pos_y):
        raise HostError("Placing Blueprint nodes is not supported by the editor Python API")

    def connect_pins(self, blueprint_path, graph, source_node, source_pin, target_node, target_pin):
        raise HostError("Connecting Blueprint pins is not supported by the editor Python API")

    def compile(self, blueprint_path):
        bp = self._blueprint(blueprint_path)
        self._ue.BlueprintEditorLibrary.compile_blueprint(bp)
        status = str(bp.get_editor_property("status"))
        errors = [f"Blueprint status {status}"] if "ERROR" in status.upper() else []
        return {"blueprint": bp.get_path_name(), "status": status, "errors": errors, "warnings": []}


class UnrealMaterials(_UnrealProvider):
    """MaterialProvider over MaterialEditingLibrary."""

    def create_material(self, package_path, material_name):
        tools = self._ue.AssetToolsHelpers.get_asset_tools()
        material = tools.create_asset(
            material_name, package_path, self._ue.Material, self._ue.MaterialFactoryNew()
        )
        if material is None:
            raise HostError(f"Failed to create material '{package_path}/{material_name}'")
        return {"name": material_name, "path": material.get_path_name(), "class": "Material"}

    def set_parameter(self, material_path, parameter, value):
        instance = self._load_asset(material_path)
        if not isinstance(instance, self._ue.MaterialInstanceConstant):
            raise HostError("Parameters can only be set on material instances")
        lib = self._ue.MaterialEditingLibrary
        if isinstance(value, (int, float)):
            lib.set_material_instance_scalar_parameter_value(instance, parameter, float(value))
            entry = {"type": "scalar", "value": float(value)}
        elif isinstance(value, str):
            texture = self._load_asset(value)
            lib.set_material_instance_texture_parameter_value(instance, parameter, texture)
            entry = {"type": "texture", "value": value}
        else:
            color = LinearColor.model_validate(value)
            lib.set_material_instance_vector_parameter_value(
                instance, parameter, self._ue.LinearColor(color.r, color.g, color.b, color.a)
            )
            entry = {"type": "vector", "value": color.model_dump()}
        lib.update_material_instance(instance)
        return {"material": instance.get_path_name(), "parameter": parameter, **entry}

    def get_parameters(self, material_path):
        material = self._load_asset(material_path)
        lib = self._ue.MaterialEditingLibrary
        params: dict[str, Any] = {}
        for name in lib.get_scalar_parameter_names(material):
            params[str(name)] = {
                "type": "scalar",
                "value": lib.get_material_default_scalar_parameter_value(material, name),
            }
        for name in lib.get_vector_parameter_names(material):
            c = lib.get_material_default_vector_parameter_value(material, name)
            params[str(name)] = {"type": "vector", "value": {"r": c.r, "g": c.g, "b": c.b, "a": c.a}}
        for name in lib.get_texture_parameter_names(material):
            texture = lib.get_material_default_texture_parameter_value(material, name)
            params[str(name)] = {
                "type": "texture",
                "value": texture.get_path_name() if texture else None,
            }
        return {"material": material.get_path_name(), "parameters": params}


class UnrealComponents(_UnrealProvider):
    """ComponentProvider over actor components and editor properties."""

    def _component(self, actor: str, component: str) -> tuple[Any, Any]:
        found = self._find_actor(actor)
        needle = component.lower()
        components = list(found.get_components_by_class(self._ue.ActorComponent))
        for comp in components:
            if needle in (comp.get_name().lower(), comp.get_class().get_name().lower()):
                return found, comp
        available = ", ".join(comp.get_name() for comp in components)
        raise HostError(
            f"Component '{component}' not found on actor '{found.get_actor_label()}' (available: {available})"
        )

    def _to_json(self, value: Any) -> Any:
        if value is None or isinstance(value, (bool, int, float, str)):
            return value
        if isinstance(value, self._ue.Vector):
            return {"x": value.x, "y": value.y, "z": value.z}
        if isinstance(value, self._ue.Rotator):
            return {"pitch": value.pitch, "yaw": value.yaw, "roll": value.roll}
        if isinstance(value, self._ue.Object):
            return value.get_path_name()
        if isinstance(value, (list, tuple, self._ue.Array)):
            return [self._to_json(item) for item in value]
        return str(value)

    def _to_unreal(self, previous: Any, value: Any) -> Any:
        if isinstance(previous, self._ue.Vector):
            return self._vector(Vector3.model_validate(value))
        if isinstance(previous, self._ue.Rotator):
            return self._rotator(Rotator.model_validate(value))
        if isinstance(value, str) and value.startswith("/"):
            if previous is None or isinstance(previous, self._ue.Object):
                return self._load_asset(value)
        return value

    def _transform(self, comp: Any) -> dict[str, Any]:
        loc = comp.get_editor_property("relative_location")
        rot = comp.get_editor_property("relative_rotation")
        scale = comp.get_editor_property("relative_scale3d")
        return {
            "location": {"x": loc.x, "y": loc.y, "z": loc.z},
            "rotation": {"pitch": rot.pitch, "yaw": rot.yaw, "roll": rot.roll},
            "scale": {"x": scale.x, "y": scale.y, "z": scale.z},
        }

    def _scene_node(self, comp: Any, include_transforms: bool) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "name": comp.get_name(),
            "class": comp.get_class().get_name(),
            "visible": comp.is_visible(),
        }
        if isinstance(comp, self._ue.StaticMeshComponent):
            mesh = comp.get_editor_property("static_mesh")
            if mesh:
                entry["mesh"] = mesh.get_path_name()
        if isinstance(comp, self._ue.InstancedStaticMeshComponent):
            entry["instance_count"] = comp.get_instance_count()
        if include_transforms:
            entry["transform"] = self._transform(comp)
        entry["children"] = [
            self._scene_node(child, include_transforms)
            for child in comp.get_children_components(False)
        ]
        return entry

    def list_components(self, actor, include_transforms):
        found = self._find_actor(actor)
        components = list(found.get_components_by_class(self._ue.ActorComponent))
        root = found.get_editor_property("root_component")
        return {
            "actor": found.get_actor_label(),
            "class": found.get_class().get_name(),
            "path": found.get_path_name(),
            "components": [self._scene_node(root, include_transforms)] if root else [],
            "non_scene_components": [
                {"name": comp.get_name(), "class": comp.get_class().get_name(), "is_active": comp.is_active()}
                for comp in components
                if not isinstance(comp, self._ue.SceneComponent)
            ],
            "total_components": len(components),
        }

    def _read(self, comp: Any, property: str) -> Any:
        try:
            return comp.get_editor_property(property)
        except Exception as e:
            raise HostError(f"Property '{property}' not found on {comp.get_name()}: {e}") from e

    def get_property(self, actor, component, property):
        found, comp = self._component(actor, component)
        return {
            "actor": found.get_actor_label(),
            "component": comp.get_name(),
            "property": property,
            "value": self._to_json(self._read(comp, property)),
        }

    def set_property(self, actor, component, property, value):
        found, comp = self._component(actor, component)
        previous = self._read(comp, property)
        with self._ue.ScopedEditorTransaction(f"Set {comp.get_name()}.{property}"):
            comp.modify()
            comp.set_editor_property(property, self._to_unreal(previous, value))
        return {
            "actor": found.get_actor_label(),
            "component": comp.get_name(),
            "property": property,
            "value": self._to_json(comp.get_editor_property(property)),
            "previous": self._to_json(previous),
        }


class UnrealDataTables(_UnrealProvider):
    """DataTableProvider over DataTableFunctionLibrary.

    Rows are read and written through the table's JSON export, so every row
    edit rewrites the whole table.
    """

    def _table(self, table_path: str) -> Any:
        table = self._load_asset(table_path)
        if not isinstance(table, self._ue.DataTable):
            raise HostError(f"Asset '{table_path}' is not a DataTable")
        return table

    def _rows(self, table: Any) -> dict[str, dict[str, Any]]:
        text = self._ue.DataTableFunctionLibrary.export_data_table_to_json_string(table)
        rows = {}
        for entry in json.loads(text or "[]"):
            rows[str(entry.pop("Name"))] = entry
        return rows

    def _write(self, table: Any, rows: dict[str, dict[str, Any]]) -> None:
        doc = json.dumps([{"Name": name, **row} for name, row in rows.items()])
        if not self._ue.DataTableFunctionLibrary.fill_data_table_from_json_string(table, doc):
            raise HostError(f"Failed to write rows to {table.get_name()}")

    def _split(self, table: Any, data: dict[str, Any]) -> tuple[dict[str, Any], list[str]]:
        columns = {str(c) for c in self._ue.DataTableFunctionLibrary.get_data_table_column_names(table)}
        known = {k: v for k, v in data.items() if k in columns}
        return known, sorted(k for k in data if k not in columns)

    def _summary(self, table: Any) -> dict[str, Any]:
        lib = self._ue.DataTableFunctionLibrary
        struct = lib.get_data_table_row_struct(table)
        path = table.get_path_name()
        return {
            "name": table.get_name(),
            "path": path,
            "package": path.split(".", 1)[0],
            "class": "DataTable",
            "row_struct": struct.get_name() if struct else None,
            "row_count": len(lib.get_data_table_row_names(table)),
        }

    def list_tables(self, path):
        registry = self._ue.AssetRegistryHelpers.get_asset_registry()
        ar_filter = self._ue.ARFilter(
            package_paths=[path],
            class_paths=[self._ue.TopLevelAssetPath("/Script/Engine", "DataTable")],
            recursive_paths=True,
        )
        return [
            self._summary(self._table(self._asset_info(data)["path"]))
            for data in registry.get_assets(ar_filter) or []
        ]

    def get_table(self, table_path):
        table = self._table(table_path)
        return {
            **self._summary(table),
            "rows": [{"row_name": name, "data": row} for name, row in self._rows(table).items()],
        }

    def add_row(self, table_path, row_name, data):
        table = self._table(table_path)
        rows = self._rows(table)
        known, ignored = self._split(table, data)
        replaced = row_name in rows
        rows[row_name] = known
        self._write(table, rows)
        rows = self._rows(table)
        return {
            "table": table.get_path_name(),
            "row_name": row_name,
            "row": rows.get(row_name, known),
            "replaced": replaced,
            "ignored_fields": ignored,
            "row_count": len(rows),
        }

    def update_row(self, table_path, row_name, data):
        table = self._table(table_path)
        rows = self._rows(table)
        if row_name not in rows:
            raise HostError(f"Row '{row_name}' not found in {table.get_name()}")
        known, ignored = self._split(table, data)
        rows[row_name].update(known)
        self._write(table, rows)
        return {
            "table": table.get_path_name(),
            "row_name": row_name,
            "row": rows[row_name],
            "ignored_fields": ignored,
            "row_count": len(rows),
        }

    def delete_row(self, table_path, row_name):
        table = self._table(table_path)
        rows = self._rows(table)
        deleted = rows.pop(row_name, None) is not None
        if deleted:
            self._write(table, rows)
        return {
            "table": table.get_path_name(),
            "row_name": row_name,
            "deleted": deleted,
            "row_count": len(rows),
        }

    def import_csv(self, table_path, source_path):
        table = self._table(table_path)
        try:
            with open(source_path, "r", encoding="utf-8-sig", newline="") as f:
                header = next(csv.reader(f), [])
        except OSError as e:
            raise HostError(f"Cannot read CSV file {source_path}: {e}") from e
        if not self._ue.DataTableFunctionLibrary.fill_data_table_from_csv_file(table, source_path):
            raise HostError(f"Failed to import {source_path} into {table.get_name()}")
        columns = {str(c) for c in self._ue.DataTableFunctionLibrary.get_data_table_column_names(table)}
        row_count = len(self._ue.DataTableFunctionLibrary.get_data_table_row_names(table))
        return {
            "table": table.get_path_name(),
            "source_path": source_path,
            "imported": row_count,
            "ignored_fields": sorted(name.strip() for name in header[1:] if name.strip() not in columns),
            "row_count": row_count,
        }


class UnrealEditorUtilities(_UnrealProvider):
    """EditorProvider: engine info, console commands and the project log file."""

    def info(self):
        return {
            "project": self._ue.Paths.get_base_filename(self._ue.Paths.get_project_file_path()),
            "engine_version": self._ue.SystemLibrary.get_engine_version(),
            "host": "unreal",
        }

    def console_command(self, command):
        world = self._subsystem("UnrealEditorSubsystem").get_editor_world()
        self._ue.SystemLibrary.execute_console_command(world, command)
        return {"command": command, "executed": True}

    def output_log(self, lines, filter):
        log_dir = Path(self._ue.Paths.convert_relative_path_to_full(self._ue.Paths.project_log_dir()))
        project = self._ue.Paths.get_base_filename(self._ue.Paths.get_project_file_path())
        log_file = log_dir / f"{project}.log"
        try:
            with open(log_file, "r", encoding="utf-8", errors="replace") as f:
                entries = [line.rstrip("\n") for line in f]
        except OSError as e:
            raise HostError(f"Cannot read output log {log_file}: {e}") from e
        if filter:
            needle = filter.lower()
            entries = [e for e in entries if needle in e.lower()]
        return entries[-lines:]


class UnrealEditorHost(EditorHost):
    """EditorHost for the running Unreal Editor."""

    def __init__(self, unreal_module: Optional[Any] = None):
        """
        Initialize UnrealEditorHost.

        Args:
            unreal_module: The ``unreal`` module (imported when omitted)
        """
        if unreal_module is None:
            import unreal as unreal_module

        editor = UnrealEditorUtilities(unreal_module)
        info = editor.info()
        super().__init__(
            kind="unreal",
            project_name=info["project"],
            engine_version=info["engine_version"],
            editor=editor,
            assets=UnrealAssets(unreal_module),
            world=UnrealWorld(unreal_module),
            blueprints=UnrealBlueprints(unreal_module),
            materials=UnrealMaterials(unreal_module),
            components=UnrealComponents(unreal_module),
            data_tables=UnrealDataTables(unreal_module),
        )
        logger.info(f"Unreal host ready: {self.project_name} ({self.engine_version})")
