"""
In-memory editor host.

SandboxEditorHost implements every provider interface over a small object
graph (assets, levels with actors, blueprint graphs, material parameters,
PCG graphs, ability-system components, Niagara components, procedural
mesh sections, component properties and data tables). It backs the
standalone ``mcp-unreal-bridge`` command and the test suite.

The object graph is not locked. Mutating commands run on the host thread,
which serializes them; only the output log is read from caller threads and
it has its own lock.
"""

import csv
import logging
import math
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from ..core.errors import HostError
from ..models.base import AssetReference, LinearColor, Rotator, Vector3
from .interfaces import EditorHost

logger = logging.getLogger(__name__)

SANDBOX_ENGINE_VERSION = "5.4.0-sandbox"

# Components attached to actors of these classes when spawned
COMPONENTS_BY_CLASS: dict[str, tuple[str, ...]] = {
    "ProceduralMeshActor": ("ProceduralMesh",),
    "PCGVolume": ("PCG",),
    "NiagaraActor": ("Niagara",),
    "BP_Hero_C": ("AbilitySystem",),
}

# Default attribute set for ability-system components
DEFAULT_ATTRIBUTES = {"Health": 100.0, "MaxHealth": 100.0, "Mana": 50.0}

# Root scene component per actor class; other classes get a DefaultSceneRoot
ROOT_COMPONENTS: dict[str, tuple[str, str]] = {
    "StaticMeshActor": ("StaticMeshComponent0", "StaticMeshComponent"),
    "DirectionalLight": ("LightComponent0", "DirectionalLightComponent"),
    "PlayerStart": ("CollisionCapsule", "CapsuleComponent"),
    "BP_Hero_C": ("CollisionCylinder", "CapsuleComponent"),
}

# Component object backing each component kind: name, class, is a scene component
COMPONENT_OBJECTS: dict[str, tuple[str, str, bool]] = {
    "ProceduralMesh": ("ProceduralMesh", "ProceduralMeshComponent", True),
    "PCG": ("PCG", "PCGComponent", False),
    "Niagara": ("NiagaraComponent0", "NiagaraComponent", True),
    "AbilitySystem": ("AbilitySystem", "AbilitySystemComponent", False),
}

# Editable properties per component class, on top of the scene/actor defaults
COMPONENT_PROPERTIES: dict[str, dict[str, Any]] = {
    "StaticMeshComponent": {"static_mesh": None, "cast_shadow": True},
    "DirectionalLightComponent": {"intensity": 10.0, "cast_shadows": True},
    "CapsuleComponent": {"capsule_half_height": 88.0, "capsule_radius": 34.0},
    "ProceduralMeshComponent": {"use_async_cooking": False},
    "NiagaraComponent": {"auto_activate": True},
    "PCGComponent": {"seed": 42},
    "AbilitySystemComponent": {"replication_mode": "Mixed"},
}
_SCENE_PROPERTIES = {"visible": True, "hidden_in_game": False, "mobility": "Movable"}
_ACTOR_COMPONENT_PROPERTIES = {"active": True}

# DataTable column types and the value a new row starts with
COLUMN_DEFAULTS: dict[str, Any] = {"string": "", "integer": 0, "number": 0.0, "boolean": False}

# Pins every sandbox blueprint node exposes
_EVENT_PINS = {"inputs": (), "outputs": ("then",)}
_NODE_PINS = {"inputs": ("execute",), "outputs": ("then",)}

# Pins every sandbox PCG node exposes
_PCG_FIXED_NODES = ("Input", "Output")


@dataclass
class SandboxAsset:
    """One content asset, keyed by package name."""

    package: str
    asset_class: str
    dependencies: set[str] = field(default_factory=set)
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.package.rsplit("/", 1)[-1]

    @property
    def path(self) -> str:
        return f"{self.package}.{self.name}"

    def info(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "package": self.package,
            "class": self.asset_class,
        }


@dataclass
class SandboxComponent:
    """One component object on an actor; scene components form a tree under the root."""

    name: str
    component_class: str
    scene: bool
    parent: Optional[str] = None
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass
class SandboxActor:
    """One actor placed in a level."""

    name: str
    label: str
    actor_class: str
    level: str
    location: Vector3 = field(default_factory=Vector3.zero)
    rotation: Rotator = field(default_factory=Rotator.zero)
    scale: Vector3 = field(default_factory=Vector3.one)
    components: dict[str, dict[str, Any]] = field(default_factory=dict)
    hierarchy: dict[str, SandboxComponent] = field(default_factory=dict)

    @property
    def path(self) -> str:
        level_name = self.level.rsplit("/", 1)[-1]
        return f"{self.level}.{level_name}:PersistentLevel.{self.name}"

    def matches(self, reference: str) -> bool:
        return reference in (self.name, self.label, self.path)

    def info(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "class": self.actor_class,
            "path": self.path,
            "location": self.location.model_dump(),
            "rotation": self.rotation.model_dump(),
            "scale": self.scale.model_dump(),
            "components": sorted(self.components),
        }


class SandboxState:
    """The shared object graph behind all sandbox providers."""

    LOG_CAPACITY = 2000

    def __init__(self, project_name: str = "SandboxProject"):
        self.project_name = project_name
        self.assets: dict[str, SandboxAsset] = {}
        self.levels: dict[str, dict[str, SandboxActor]] = {}
        self.current_level: Optional[str] = None
        self.dirty_levels: set[str] = set()
        self._counters: dict[str, int] = {}
        self._log: deque[str] = deque(maxlen=self.LOG_CAPACITY)
        self._log_lock = threading.Lock()

    # =========================================================================
    # Output log
    # =========================================================================

    def write_log(self, message: str, category: str = "LogMCPUnreal") -> None:
        with self._log_lock:
            self._log.append(f"{category}: {message}")

    def read_log(self, lines: int, contains: Optional[str] = None) -> list[str]:
        with self._log_lock:
            entries = list(self._log)
        if contains:
            needle = contains.lower()
            entries = [e for e in entries if needle in e.lower()]
        return entries[-lines:] if lines > 0 else []

    # =========================================================================
    # Assets
    # =========================================================================

    def next_name(self, prefix: str) -> str:
        index = self._counters.get(prefix, 0)
        self._counters[prefix] = index + 1
        return f"{prefix}_{index}"

    @staticmethod
    def package_of(path: str) -> str:
        if not path or not path.startswith("/"):
            raise HostError(f"Asset path must start with '/': '{path}'")
        return AssetReference(path=path).package_name.rstrip("/")

    def add_asset(
        self,
        package: str,
        asset_class: str,
        dependencies: Iterable[str] = (),
        **data: Any,
    ) -> SandboxAsset:
        package = self.package_of(package)
        if package in self.assets:
            raise HostError(f"Asset already exists: '{package}'")
        asset = SandboxAsset(package, asset_class, set(dependencies), dict(data))
        self.assets[package] = asset
        return asset

    def find_asset(self, path: str, asset_class: Optional[str] = None) -> SandboxAsset:
        asset = self.assets.get(self.package_of(path))
        if asset is None:
            raise HostError(f"Asset not found: '{path}'")
        if asset_class is not None and asset.asset_class != asset_class:
            raise HostError(f"Asset '{path}' is a {asset.asset_class}, not a {asset_class}")
        return asset

    def find_class_asset(self, reference: str, asset_class: str) -> SandboxAsset:
        """Resolve a class reference given as an asset path or a short name."""
        if reference.startswith("/"):
            return self.find_asset(reference, asset_class)
        short = reference[:-2] if reference.endswith("_C") else reference
        for asset in self.assets.values():
            if asset.asset_class == asset_class and asset.name == short:
                return asset
        raise HostError(f"{asset_class} class not found: '{reference}'")

    # =========================================================================
    # Actors
    # =========================================================================

    @property
    def actors(self) -> dict[str, SandboxActor]:
        if self.current_level is None:
            raise HostError("No level is loaded")
        return self.levels[self.current_level]

    def find_actor(self, reference: str) -> SandboxActor:
        for actor in self.actors.values():
            if actor.matches(reference):
                return actor
        raise HostError(f"Actor not found: '{reference}'")

    def find_component(self, reference: str, component: str) -> tuple[SandboxActor, dict[str, Any]]:
        actor = self.find_actor(reference)
        data = actor.components.get(component)
        if data is None:
            raise HostError(f"Actor '{actor.label}' does not have a {component}Component")
        return actor, data

    def find_component_object(self, reference: str, component: str) -> tuple[SandboxActor, SandboxComponent]:
        """Resolve a component by object name or class name, case-insensitively."""
        actor = self.find_actor(reference)
        needle = component.lower()
        for obj in actor.hierarchy.values():
            if needle in (obj.name.lower(), obj.component_class.lower()):
                return actor, obj
        raise HostError(
            f"Component '{component}' not found on actor '{actor.label}' "
            f"(available: {', '.join(actor.hierarchy)})"
        )

    def spawn(
        self,
        actor_class: str,
        label: Optional[str] = None,
        location: Optional[Vector3] = None,
        rotation: Optional[Rotator] = None,
        **components: dict[str, Any],
    ) -> SandboxActor:
        name = self.next_name(actor_class)
        actor = SandboxActor(
            name=name,
            label=label or name,
            actor_class=actor_class,
            level=self.current_level or "",
            location=location or Vector3.zero(),
            rotation=rotation or Rotator.zero(),
        )
        for component in COMPONENTS_BY_CLASS.get(actor_class, ()):
            actor.components[component] = _new_component(component)
        for component, data in components.items():
            actor.components.setdefault(component, _new_component(component)).update(data)

        root_name, root_class = ROOT_COMPONENTS.get(actor_class, ("DefaultSceneRoot", "SceneComponent"))
        actor.hierarchy[root_name] = _new_component_object(root_name, root_class, scene=True)
        for component in actor.components:
            obj_name, obj_class, scene = COMPONENT_OBJECTS.get(
                component, (component, f"{component}Component", False)
            )
            actor.hierarchy[obj_name] = _new_component_object(
                obj_name, obj_class, scene=scene, parent=root_name if scene else None
            )
        self.actors[name] = actor
        self.dirty_levels.add(actor.level)
        return actor

    # =========================================================================
    # Seed content
    # =========================================================================

    def seed(self) -> None:
        """Populate a small project: two maps, meshes, materials, a hero blueprint, PCG, VFX and an item table."""
        self.add_asset("/Game/Maps/Main", "World")
        self.add_asset("/Game/Maps/Arena", "World")
        for package in ("/Game/Maps/Main", "/Game/Maps/Arena"):
            self.levels[package] = {}
        self.current_level = "/Game/Maps/Main"

        self.add_asset(
            "/Game/Materials/M_Base",
            "Material",
            parameters={
                "BaseColor": {"type": "vector", "value": LinearColor().model_dump()},
                "Roughness": {"type": "scalar", "value": 0.5},
            },
        )
        self.add_asset(
            "/Game/Materials/M_Rock",
            "Material",
            parameters={"Roughness": {"type": "scalar", "value": 0.9}},
        )
        self.add_asset("/Game/Meshes/SM_Cube", "StaticMesh", ["/Game/Materials/M_Base"])
        self.add_asset("/Game/Meshes/SM_Rock", "StaticMesh", ["/Game/Materials/M_Rock"])

        hero = self.add_asset("/Game/Blueprints/BP_Hero", "Blueprint", ["/Game/Meshes/SM_Cube"])
        hero.data.update(_new_blueprint("Character"))
        begin_play = self.next_name("K2Node_Event")
        hero.data["graphs"]["EventGraph"]["nodes"][begin_play] = {
            "id": begin_play,
            "class": "K2Node_Event",
            "title": "Event BeginPlay",
            "pos_x": 0,
            "pos_y": 0,
        }

        self.add_asset("/Game/Abilities/GA_Fireball", "GameplayAbility")
        self.add_asset("/Game/Abilities/GA_Dash", "GameplayAbility")
        self.add_asset("/Game/Abilities/GE_Heal", "GameplayEffect", modifiers={"Health": 25.0})
        self.add_asset("/Game/Abilities/GE_Damage", "GameplayEffect", modifiers={"Health": -10.0})

        self.add_asset(
            "/Game/PCG/PCG_Forest",
            "PCGGraph",
            ["/Game/Meshes/SM_Rock"],
            **_new_pcg_graph(),
        )
        self.add_asset(
            "/Game/VFX/NS_Fire",
            "NiagaraSystem",
            emitters=["Flames", "Smoke", "Sparks"],
            parameters={"User.SpawnRate": 50.0, "User.Color": LinearColor(r=1.0, g=0.4, b=0.1).model_dump()},
        )

        self.add_asset(
            "/Game/Data/DT_Items",
            "DataTable",
            row_struct="ItemRow",
            columns={"DisplayName": "string", "Price": "integer", "Weight": "number", "Stackable": "boolean"},
            rows={
                "Sword": {"DisplayName": "Iron Sword", "Price": 120, "Weight": 3.5, "Stackable": False},
                "Potion": {"DisplayName": "Health Potion", "Price": 15, "Weight": 0.2, "Stackable": True},
            },
        )

        self.spawn("PlayerStart", location=Vector3(z=100.0))
        self.spawn("DirectionalLight", label="Sun", rotation=Rotator(pitch=-45.0))
        self.spawn("BP_Hero_C", label="Hero", location=Vector3(x=200.0))
        self.spawn("PCGVolume", label="ForestVolume", PCG={"graph": "/Game/PCG/PCG_Forest"})
        self.spawn("ProceduralMeshActor", label="Terrain")
        self.dirty_levels.clear()

        self.write_log(f"Sandbox project '{self.project_name}' loaded")


def _new_component(component: str) -> dict[str, Any]:
    if component == "ProceduralMesh":
        return {"sections": {}}
    if component == "PCG":
        return {"graph": None, "generated": 0}
    if component == "Niagara":
        return {"system": None, "active": False, "parameters": {}}
    if component == "AbilitySystem":
        return {
            "abilities": [],
            "effects": [],
            "attributes": {
                name: {"base": value, "current": value} for name, value in DEFAULT_ATTRIBUTES.items()
            },
        }
    return {}


def _new_component_object(
    name: str, component_class: str, scene: bool, parent: Optional[str] = None
) -> SandboxComponent:
    properties = dict(_SCENE_PROPERTIES if scene else _ACTOR_COMPONENT_PROPERTIES)
    properties.update(COMPONENT_PROPERTIES.get(component_class, {}))
    return SandboxComponent(name, component_class, scene, parent, properties)


def _new_blueprint(parent_class: str) -> dict[str, Any]:
    return {
        "parent_class": parent_class,
        "variables": [],
        "functions": [],
        "graphs": {"EventGraph": {"nodes": {}, "links": []}},
        "status": "Dirty",
    }


def _new_pcg_graph() -> dict[str, Any]:
    return {
        "nodes": {
            name: {"id": name, "type": name, "label": name, "parameters": {}}
            for name in _PCG_FIXED_NODES
        },
        "edges": [],
    }


# =============================================================================
# Providers
# =============================================================================


class _Provider:
    def __init__(self, state: SandboxState):
        self._state = state


class SandboxAssets(_Provider):
    """AssetProvider over the sandbox object graph."""

    def list_assets(self, path, class_name, recursive, limit):
        root = path.rstrip("/") or "/"
        results = []
        for package in sorted(self._state.assets):
            asset = self._state.assets[package]
            folder = package.rsplit("/", 1)[0]
            if recursive:
                if not (folder == root or folder.startswith(root + "/")):
                    continue
            elif folder != root:
                continue
            if class_name and asset.asset_class != class_name:
                continue
            results.append(asset.info())
        return results[:limit]

    def get_asset(self, asset_path):
        asset = self._state.find_asset(asset_path)
        info = asset.info()
        info["dependencies"] = sorted(asset.dependencies)
        info["referencers"] = self.get_referencers(asset_path)
        return info

    def search_assets(self, class_filter, path_filter, name_filter, recursive):
        results = []
        for package in sorted(self._state.assets):
            asset = self._state.assets[package]
            if class_filter and asset.asset_class.lower() != class_filter.lower():
                continue
            if path_filter:
                root = path_filter.rstrip("/")
                folder = package.rsplit("/", 1)[0]
                inside = folder == root or (recursive and folder.startswith(root + "/"))
                if not inside:
                    continue
            if name_filter and name_filter.lower() not in asset.name.lower():
                continue
            results.append(asset.info())
        return results

    def get_dependencies(self, asset_path):
        return sorted(self._state.find_asset(asset_path).dependencies)

    def get_referencers(self, asset_path):
        package = self._state.find_asset(asset_path).package
        return sorted(
            other.package
            for other in self._state.assets.values()
            if package in other.dependencies
        )

    def delete_asset(self, asset_path):
        asset = self._state.find_asset(asset_path)
        if asset.asset_class == "World" and asset.package == self._state.current_level:
            raise HostError(f"Cannot delete the currently loaded level '{asset.package}'")
        referencers = self.get_referencers(asset_path)
        if referencers:
            raise HostError(
                f"Asset '{asset.package}' is still referenced by {len(referencers)} asset(s): "
                f"{', '.join(referencers)}"
            )
        del self._state.assets[asset.package]
        self._state.levels.pop(asset.package, None)
        self._state.write_log(f"Deleted asset {asset.path}")


class SandboxWorld(_Provider):
    """WorldProvider: actors in the current level plus level management."""

    def list_actors(self, class_filter, name_filter):
        results = []
        for actor in self._state.actors.values():
            if class_filter and class_filter.lower() not in actor.actor_class.lower():
                continue
            if name_filter:
                needle = name_filter.lower()
                if needle not in actor.label.lower() and needle not in actor.name.lower():
                    continue
            results.append(actor.info())
        return results

    def spawn_actor(self, class_name, label, location, rotation):
        actor = self._state.spawn(class_name, label=label, location=location, rotation=rotation)
        self._state.write_log(f"Spawned {actor.actor_class} '{actor.label}'")
        return actor.info()

    def delete_actor(self, actor):
        found = self._state.find_actor(actor)
        del self._state.actors[found.name]
        self._state.dirty_levels.add(found.level)
        self._state.write_log(f"Destroyed actor '{found.label}'")

    def set_actor_transform(self, actor, location, rotation, scale):
        found = self._state.find_actor(actor)
        if location is not None:
            found.location = location
        if rotation is not None:
            found.rotation = rotation
        if scale is not None:
            found.scale = scale
        self._state.dirty_levels.add(found.level)
        return found.info()

    def _level_info(self, package: str) -> dict[str, Any]:
        asset = self._state.assets[package]
        return {
            "name": asset.name,
            "path": asset.path,
            "actor_count": len(self._state.levels.get(package, {})),
            "current": package == self._state.current_level,
            "dirty": package in self._state.dirty_levels,
        }

    def current_level(self):
        if self._state.current_level is None:
            raise HostError("No level is loaded")
        return self._level_info(self._state.current_level)

    def list_levels(self):
        return [
            self._level_info(package)
            for package, asset in sorted(self._state.assets.items())
            if asset.asset_class == "World"
        ]

    def load_level(self, level_path):
        asset = self._state.find_asset(level_path, "World")
        self._state.levels.setdefault(asset.package, {})
        self._state.current_level = asset.package
        self._state.write_log(f"Loaded level {asset.path}")
        return self._level_info(asset.package)

    def save_level(self):
        info = self.current_level()
        self._state.dirty_levels.discard(self._state.current_level)
        self._state.write_log(f"Saved level {info['path']}")
        return {"level": info["path"], "saved": True}

    def new_level(self, level_path):
        asset = self._state.add_asset(level_path, "World")
        self._state.levels[asset.package] = {}
        self._state.current_level = asset.package
        self._state.write_log(f"Created level {asset.path}")
        return self._level_info(asset.package)


class SandboxBlueprints(_Provider):
    """BlueprintProvider with per-graph nodes, pin links and compile status."""

    def _blueprint(self, blueprint_path: str) -> SandboxAsset:
        return self._state.find_asset(blueprint_path, "Blueprint")

    def _graph(self, blueprint: SandboxAsset, graph: str) -> dict[str, Any]:
        graphs = blueprint.data["graphs"]
        if graph not in graphs:
            raise HostError(
                f"Graph '{graph}' not found in {blueprint.name} "
                f"(available: {', '.join(sorted(graphs))})"
            )
        return graphs[graph]

    def list_blueprints(self):
        return [
            {**asset.info(), "parent_class": asset.data["parent_class"]}
            for package, asset in sorted(self._state.assets.items())
            if asset.asset_class == "Blueprint"
        ]

    def inspect(self, blueprint_path):
        bp = self._blueprint(blueprint_path)
        graphs = {
            name: {
                "nodes": [dict(node) for node in graph["nodes"].values()],
                "links": [dict(link) for link in graph["links"]],
            }
            for name, graph in bp.data["graphs"].items()
        }
        return {
            **bp.info(),
            "parent_class": bp.data["parent_class"],
            "variables": [dict(v) for v in bp.data["variables"]],
            "functions": list(bp.data["functions"]),
            "graphs": graphs,
            "status": bp.data["status"],
        }

    def create(self, package_path, name, parent_class):
        bp = self._state.add_asset(f"{package_path.rstrip('/')}/{name}", "Blueprint")
        bp.data.update(_new_blueprint(parent_class))
        self._state.write_log(f"Created blueprint {bp.path} (parent {parent_class})")
        return {**bp.info(), "parent_class": parent_class}

    def add_variable(self, blueprint_path, name, var_type, default_value):
        bp = self._blueprint(blueprint_path)
        if any(v["name"] == name for v in bp.data["variables"]):
            raise HostError(f"Variable '{name}' already exists in {bp.name}")
        variable = {"name": name, "type": var_type, "default": default_value}
        bp.data["variables"].append(variable)
        bp.data["status"] = "Dirty"
        return {"blueprint": bp.path, "variable": dict(variable)}

    def add_function(self, blueprint_path, name):
        bp = self._blueprint(blueprint_path)
        if name in bp.data["graphs"]:
            raise HostError(f"Graph '{name}' already exists in {bp.name}")
        bp.data["functions"].append(name)
        bp.data["graphs"][name] = {"nodes": {}, "links": []}
        bp.data["status"] = "Dirty"
        return {"blueprint": bp.path, "function": name, "graph": name}

    def add_node(self, blueprint_path, graph, node_class, pos_x, pos_y):
        bp = self._blueprint(blueprint_path)
        target = self._graph(bp, graph)
        node_id = self._state.next_name(node_class)
        node = {"id": node_id, "class": node_class, "title": node_class, "pos_x": pos_x, "pos_y": pos_y}
        target["nodes"][node_id] = node
        bp.data["status"] = "Dirty"
        return {"blueprint": bp.path, "graph": graph, "node": dict(node), "pins": _pins_for(node_class)}

    def connect_pins(self, blueprint_path, graph, source_node, source_pin, target_node, target_pin):
        bp = self._blueprint(blueprint_path)
        target = self._graph(bp, graph)
        nodes = target["nodes"]
        for node_id in (source_node, target_node):
            if node_id not in nodes:
                raise HostError(f"Node '{node_id}' not found in graph '{graph}'")

        if source_pin not in _pins_for(nodes[source_node]["class"])["outputs"]:
            raise HostError(f"Output pin '{source_pin}' not found on node '{source_node}'")
        if target_pin not in _pins_for(nodes[target_node]["class"])["inputs"]:
            raise HostError(f"Input pin '{target_pin}' not found on node '{target_node}'")

        link = {
            "source_node": source_node,
            "source_pin": source_pin,
            "target_node": target_node,
            "target_pin": target_pin,
        }
        if link in target["links"]:
            raise HostError(f"Pins are already connected: {source_node}.{source_pin} -> {target_node}.{target_pin}")
        target["links"].append(link)
        bp.data["status"] = "Dirty"
        return {"blueprint": bp.path, "graph": graph, "link": dict(link)}

    def compile(self, blueprint_path):
        bp = self._blueprint(blueprint_path)
        warnings = []
        for graph_name, graph in bp.data["graphs"].items():
            linked = set()
            for link in graph["links"]:
                linked.add(link["source_node"])
                linked.add(link["target_node"])
            for node_id, node in graph["nodes"].items():
                if node_id not in linked and node["class"] != "K2Node_Event":
                    warnings.append(f"{graph_name}: node '{node_id}' is not connected")
        bp.data["status"] = "UpToDateWithWarnings" if warnings else "UpToDate"
        self._state.write_log(f"Compiled blueprint {bp.path}: {bp.data['status']}", "LogBlueprint")
        return {"blueprint": bp.path, "status": bp.data["status"], "errors": [], "warnings": warnings}


def _pins_for(node_class: str) -> dict[str, tuple[str, ...]]:
    pins = _EVENT_PINS if node_class.startswith("K2Node_Event") else _NODE_PINS
    return {"inputs": pins["inputs"], "outputs": pins["outputs"]}


class SandboxMaterials(_Provider):
    """MaterialProvider storing scalar, vector and texture parameters."""

    def create_material(self, package_path, material_name):
        material = self._state.add_asset(
            f"{package_path.rstrip('/')}/{material_name}", "Material", parameters={}
        )
        self._state.write_log(f"Created material {material.path}")
        return material.info()

    def set_parameter(self, material_path, parameter, value):
        material = self._state.find_asset(material_path, "Material")
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            entry = {"type": "scalar", "value": float(value)}
        elif isinstance(value, str):
            entry = {"type": "texture", "value": value}
        else:
            entry = {"type": "vector", "value": LinearColor.model_validate(value).model_dump()}
        material.data["parameters"][parameter] = entry
        return {"material": material.path, "parameter": parameter, **entry}

    def get_parameters(self, material_path):
        material = self._state.find_asset(material_path, "Material")
        return {
            "material": material.path,
            "parameters": {name: dict(entry) for name, entry in material.data["parameters"].items()},
        }


class SandboxMesh(_Provider):
    """MeshProvider over ProceduralMesh components."""

    def create_section(self, actor, section_index, vertices, triangles, normals, uvs):
        found, mesh = self._state.find_component(actor, "ProceduralMesh")
        mesh["sections"][section_index] = {
            "vertices": [v.model_dump() for v in vertices],
            "triangles": list(triangles),
            "normals": [n.model_dump() for n in normals] if normals else None,
            "uvs": uvs,
        }
        return {
            "actor": found.path,
            "section_index": section_index,
            "vertex_count": len(vertices),
            "triangle_count": len(triangles) // 3,
            "section_count": len(mesh["sections"]),
        }

    def clear(self, actor, section_index):
        found, mesh = self._state.find_component(actor, "ProceduralMesh")
        if section_index is None:
            cleared = len(mesh["sections"])
            mesh["sections"].clear()
        else:
            cleared = 1 if mesh["sections"].pop(section_index, None) is not None else 0
        return {"actor": found.path, "cleared": cleared, "section_count": len(mesh["sections"])}


class SandboxPCG(_Provider):
    """PCGProvider: graph editing plus generation on PCG components."""

    def _graph(self, graph_path: str) -> SandboxAsset:
        return self._state.find_asset(graph_path, "PCGGraph")

    def _node(self, graph: SandboxAsset, node: str) -> dict[str, Any]:
        for entry in graph.data["nodes"].values():
            if node in (entry["id"], entry["label"]):
                return entry
        raise HostError(f"PCG node '{node}' not found in {graph.name}")

    def get_graph_info(self, graph_path):
        graph = self._graph(graph_path)
        return {
            **graph.info(),
            "nodes": [dict(node) for node in graph.data["nodes"].values()],
            "edges": [dict(edge) for edge in graph.data["edges"]],
        }

    def add_node(self, graph_path, node_type, label):
        graph = self._graph(graph_path)
        node_id = self._state.next_name(f"PCG{node_type}")
        node = {"id": node_id, "type": node_type, "label": label or node_id, "parameters": {}}
        graph.data["nodes"][node_id] = node
        return {"graph": graph.path, "node": dict(node)}

    def connect_nodes(self, graph_path, source_node, source_pin, target_node, target_pin):
        graph = self._graph(graph_path)
        source = self._node(graph, source_node)
        target = self._node(graph, target_node)
        if source["id"] == "Output":
            raise HostError("The Output node has no output pins")
        if target["id"] == "Input":
            raise HostError("The Input node has no input pins")
        edge = {
            "source": source["id"],
            "source_pin": source_pin,
            "target": target["id"],
            "target_pin": target_pin,
        }
        if edge in graph.data["edges"]:
            raise HostError(f"Edge already exists: {source['id']} -> {target['id']}")
        graph.data["edges"].append(edge)
        return {"graph": graph.path, "edge": dict(edge)}

    def remove_node(self, graph_path, node):
        graph = self._graph(graph_path)
        entry = self._node(graph, node)
        if entry["id"] in _PCG_FIXED_NODES:
            raise HostError(f"The {entry['id']} node cannot be removed")
        del graph.data["nodes"][entry["id"]]
        graph.data["edges"] = [
            edge
            for edge in graph.data["edges"]
            if entry["id"] not in (edge["source"], edge["target"])
        ]

    def set_parameter(self, graph_path, node, parameter, value):
        graph = self._graph(graph_path)
        entry = self._node(graph, node)
        entry["parameters"][parameter] = value
        return {"graph": graph.path, "node": entry["id"], "parameter": parameter, "value": value}

    def execute(self, actor):
        found, pcg = self._state.find_component(actor, "PCG")
        if not pcg["graph"]:
            raise HostError(f"PCG component on '{found.label}' has no graph assigned")
        graph = self._graph(pcg["graph"])
        # One generated element per non-fixed node reachable from the graph
        generated = sum(1 for node_id in graph.data["nodes"] if node_id not in _PCG_FIXED_NODES)
        pcg["generated"] = generated
        self._state.write_log(f"Generated {generated} PCG element(s) on '{found.label}'", "LogPCG")
        return {"actor": found.path, "graph": graph.path, "generated": generated}

    def cleanup(self, actor):
        found, pcg = self._state.find_component(actor, "PCG")
        removed = pcg["generated"]
        pcg["generated"] = 0
        return {"actor": found.path, "removed": removed}


class SandboxAbilities(_Provider):
    """AbilityProvider over AbilitySystem components."""

    def grant_ability(self, actor, ability_class, level):
        found, asc = self._state.find_component(actor, "AbilitySystem")
        ability = self._state.find_class_asset(ability_class, "GameplayAbility")
        spec = {"handle": self._state.next_name("AbilitySpec"), "class": ability.path, "level": level}
        asc["abilities"].append(spec)
        return {"actor": found.path, "ability_spec_handle": spec["handle"], **spec}

    def revoke_ability(self, actor, ability_class):
        _, asc = self._state.find_component(actor, "AbilitySystem")
        ability = self._state.find_class_asset(ability_class, "GameplayAbility")
        kept = [spec for spec in asc["abilities"] if spec["class"] != ability.path]
        revoked = len(asc["abilities"]) - len(kept)
        asc["abilities"] = kept
        return revoked

    def list_abilities(self, actor):
        _, asc = self._state.find_component(actor, "AbilitySystem")
        return [dict(spec) for spec in asc["abilities"]]

    def apply_effect(self, actor, effect_class, level):
        found, asc = self._state.find_component(actor, "AbilitySystem")
        effect = self._state.find_class_asset(effect_class, "GameplayEffect")
        modified = {}
        for attribute, magnitude in effect.data.get("modifiers", {}).items():
            values = asc["attributes"].get(attribute)
            if values is None:
                continue
            values["base"] += magnitude * level
            values["current"] = values["base"]
            modified[attribute] = values["current"]
        asc["effects"].append({"class": effect.path, "level": level})
        return {"actor": found.path, "effect": effect.path, "level": level, "modified": modified}

    def get_attributes(self, actor):
        _, asc = self._state.find_component(actor, "AbilitySystem")
        return {name: dict(values) for name, values in asc["attributes"].items()}

    def set_attribute(self, actor, attribute, value):
        found, asc = self._state.find_component(actor, "AbilitySystem")
        values = asc["attributes"].get(attribute)
        if values is None:
            raise HostError(f"Attribute '{attribute}' not found on '{found.label}'")
        values["base"] = float(value)
        values["current"] = float(value)
        return {"actor": found.path, "attribute": attribute, **values}


class SandboxNiagara(_Provider):
    """NiagaraProvider over Niagara components."""

    def spawn_system(self, system_path, location, label):
        system = self._state.find_asset(system_path, "NiagaraSystem")
        actor = self._state.spawn(
            "NiagaraActor",
            label=label,
            location=location,
            Niagara={
                "system": system.path,
                "active": True,
                "parameters": dict(system.data.get("parameters", {})),
            },
        )
        self._state.write_log(f"Spawned Niagara system {system.name} as '{actor.label}'", "LogNiagara")
        return {**actor.info(), "system": system.path, "active": True}

    def _set_active(self, actor: str, active: bool) -> dict[str, Any]:
        found, component = self._state.find_component(actor, "Niagara")
        component["active"] = active
        return {"actor": found.path, "system": component["system"], "active": active}

    def activate(self, actor):
        return self._set_active(actor, True)

    def deactivate(self, actor):
        return self._set_active(actor, False)

    def set_parameter(self, actor, parameter, value):
        found, component = self._state.find_component(actor, "Niagara")
        name = parameter if parameter.startswith("User.") else f"User.{parameter}"
        component["parameters"][name] = value
        return {"actor": found.path, "parameter": name, "value": value}

    def get_system_info(self, system_path):
        system = self._state.find_asset(system_path, "NiagaraSystem")
        return {
            **system.info(),
            "emitters": list(system.data.get("emitters", [])),
            "parameters": dict(system.data.get("parameters", {})),
        }


def _value_kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def _typed_value(expected: str, value: Any, what: str) -> Any:
    """Check a JSON value against a column or property type; integers widen to numbers."""
    got = _value_kind(value)
    if expected == "number" and got == "integer":
        return float(value)
    if got != expected:
        raise HostError(f"{what} expects {expected}, got {got}")
    if got == "number" and not math.isfinite(value):
        raise HostError(f"{what} expects a finite number")
    return value


def _parse_cell(kind: str, cell: str) -> Any:
    text = cell.strip()
    if kind == "string":
        return cell
    if kind == "boolean":
        if text.lower() in ("true", "1"):
            return True
        if text.lower() in ("false", "0"):
            return False
        raise ValueError(f"'{cell}' is not a boolean")
    if kind == "integer":
        return int(text)
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"'{cell}' is not a finite number")
    return value


class SandboxComponents(_Provider):
    """ComponentProvider over each actor's component objects."""

    def _transform(self, actor: SandboxActor, obj: SandboxComponent) -> dict[str, Any]:
        # Only the root carries the actor transform; children sit at its origin
        if obj.parent is None:
            return {
                "location": actor.location.model_dump(),
                "rotation": actor.rotation.model_dump(),
                "scale": actor.scale.model_dump(),
            }
        return {
            "location": Vector3.zero().model_dump(),
            "rotation": Rotator.zero().model_dump(),
            "scale": Vector3.one().model_dump(),
        }

    def _scene_node(
        self, actor: SandboxActor, obj: SandboxComponent, include_transforms: bool
    ) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "name": obj.name,
            "class": obj.component_class,
            "visible": obj.properties["visible"],
        }
        if obj.properties.get("static_mesh"):
            entry["mesh"] = obj.properties["static_mesh"]
        if include_transforms:
            entry["transform"] = self._transform(actor, obj)
        entry["children"] = [
            self._scene_node(actor, child, include_transforms)
            for child in actor.hierarchy.values()
            if child.scene and child.parent == obj.name
        ]
        return entry

    def list_components(self, actor, include_transforms):
        found = self._state.find_actor(actor)
        roots = [obj for obj in found.hierarchy.values() if obj.scene and obj.parent is None]
        return {
            "actor": found.label,
            "class": found.actor_class,
            "path": found.path,
            "components": [self._scene_node(found, obj, include_transforms) for obj in roots],
            "non_scene_components": [
                {"name": obj.name, "class": obj.component_class, "is_active": obj.properties["active"]}
                for obj in found.hierarchy.values()
                if not obj.scene
            ],
            "total_components": len(found.hierarchy),
        }

    def _property(self, obj: SandboxComponent, property: str) -> Any:
        if property not in obj.properties:
            raise HostError(
                f"Property '{property}' not found on {obj.name} "
                f"(available: {', '.join(sorted(obj.properties))})"
            )
        return obj.properties[property]

    def get_property(self, actor, component, property):
        found, obj = self._state.find_component_object(actor, component)
        return {
            "actor": found.label,
            "component": obj.name,
            "property": property,
            "value": self._property(obj, property),
        }

    def set_property(self, actor, component, property, value):
        found, obj = self._state.find_component_object(actor, component)
        previous = self._property(obj, property)
        if property == "static_mesh":
            value = self._state.find_asset(value, "StaticMesh").path
        else:
            expected = "string" if previous is None else _value_kind(previous)
            value = _typed_value(expected, value, f"Property '{property}' of {obj.name}")
        obj.properties[property] = value
        self._state.dirty_levels.add(found.level)
        self._state.write_log(f"Set {obj.name}.{property} on '{found.label}'")
        return {
            "actor": found.label,
            "component": obj.name,
            "property": property,
            "value": value,
            "previous": previous,
        }


class SandboxDataTables(_Provider):
    """DataTableProvider over DataTable assets with typed columns."""

    def _table(self, table_path: str) -> SandboxAsset:
        return self._state.find_asset(table_path, "DataTable")

    def _summary(self, table: SandboxAsset) -> dict[str, Any]:
        return {
            **table.info(),
            "row_struct": table.data["row_struct"],
            "row_count": len(table.data["rows"]),
        }

    def _merge(
        self, table: SandboxAsset, base: dict[str, Any], data: dict[str, Any]
    ) -> tuple[dict[str, Any], list[str]]:
        """Apply typed column values to a copy of base; unknown fields are reported, not stored."""
        columns = table.data["columns"]
        row = dict(base)
        ignored = []
        for column, value in data.items():
            kind = columns.get(column)
            if kind is None:
                ignored.append(column)
                continue
            row[column] = _typed_value(
                kind, value, f"Column '{column}' of {table.data['row_struct']}"
            )
        return row, sorted(ignored)

    def list_tables(self, path):
        root = path.rstrip("/")
        return [
            self._summary(asset)
            for package, asset in sorted(self._state.assets.items())
            if asset.asset_class == "DataTable" and package.startswith(root + "/")
        ]

    def get_table(self, table_path):
        table = self._table(table_path)
        return {
            **self._summary(table),
            "columns": dict(table.data["columns"]),
            "rows": [{"row_name": name, "data": dict(row)} for name, row in table.data["rows"].items()],
        }

    def add_row(self, table_path, row_name, data):
        table = self._table(table_path)
        rows = table.data["rows"]
        defaults = {column: COLUMN_DEFAULTS[kind] for column, kind in table.data["columns"].items()}
        row, ignored = self._merge(table, defaults, data)
        replaced = row_name in rows
        rows[row_name] = row
        verb = "Replaced" if replaced else "Added"
        self._state.write_log(f"{verb} row '{row_name}' in {table.path}", "LogDataTable")
        return {
            "table": table.path,
            "row_name": row_name,
            "row": dict(row),
            "replaced": replaced,
            "ignored_fields": ignored,
            "row_count": len(rows),
        }

    def update_row(self, table_path, row_name, data):
        table = self._table(table_path)
        rows = table.data["rows"]
        if row_name not in rows:
            raise HostError(f"Row '{row_name}' not found in {table.name}")
        row, ignored = self._merge(table, rows[row_name], data)
        rows[row_name] = row
        self._state.write_log(f"Updated row '{row_name}' in {table.path}", "LogDataTable")
        return {
            "table": table.path,
            "row_name": row_name,
            "row": dict(row),
            "ignored_fields": ignored,
            "row_count": len(rows),
        }

    def delete_row(self, table_path, row_name):
        table = self._table(table_path)
        rows = table.data["rows"]
        deleted = rows.pop(row_name, None) is not None
        if deleted:
            self._state.write_log(f"Deleted row '{row_name}' from {table.path}", "LogDataTable")
        return {"table": table.path, "row_name": row_name, "deleted": deleted, "row_count": len(rows)}

    def import_csv(self, table_path, source_path):
        table = self._table(table_path)
        try:
            with open(source_path, "r", encoding="utf-8-sig", newline="") as f:
                records = list(csv.reader(f))
        except OSError as e:
            raise HostError(f"Cannot read CSV file {source_path}: {e}") from e
        if not records:
            raise HostError(f"CSV file {source_path} is empty")

        # First column holds the row name whatever its header says
        header = [name.strip() for name in records[0]]
        columns = table.data["columns"]
        rows: dict[str, dict[str, Any]] = {}
        for line, record in enumerate(records[1:], start=2):
            if not any(cell.strip() for cell in record):
                continue
            row_name = record[0].strip()
            if not row_name:
                raise HostError(f"{source_path}:{line}: missing row name")
            if row_name in rows:
                raise HostError(f"{source_path}:{line}: duplicate row '{row_name}'")
            row = {column: COLUMN_DEFAULTS[kind] for column, kind in columns.items()}
            for name, cell in zip(header[1:], record[1:]):
                kind = columns.get(name)
                if kind is None:
                    continue
                try:
                    row[name] = _parse_cell(kind, cell)
                except ValueError as e:
                    raise HostError(f"{source_path}:{line}: column '{name}': {e}") from e
            rows[row_name] = row

        table.data["rows"] = rows
        self._state.write_log(
            f"Imported {len(rows)} row(s) into {table.path} from {source_path}", "LogDataTable"
        )
        return {
            "table": table.path,
            "source_path": source_path,
            "imported": len(rows),
            "ignored_fields": sorted(name for name in header[1:] if name not in columns),
            "row_count": len(rows),
        }


class SandboxEditor(_Provider):
    """EditorProvider: project info, console commands and the output log."""

    def info(self):
        return {
            "project": self._state.project_name,
            "engine_version": SANDBOX_ENGINE_VERSION,
            "host": "sandbox",
            "current_level": self._state.current_level,
        }

    def console_command(self, command):
        self._state.write_log(command, "Cmd")
        return {"command": command, "executed": True}

    def output_log(self, lines, filter):
        return self._state.read_log(lines, filter)


class SandboxEditorHost(EditorHost):
    """EditorHost with every provider backed by one SandboxState."""

    def __init__(self, project_name: str = "SandboxProject", seed: bool = True):
        """
        Initialize SandboxEditorHost.

        Args:
            project_name: Name reported by editor.info and system.status
            seed: Populate the sample project content
        """
        self.state = SandboxState(project_name)
        if seed:
            self.state.seed()
        super().__init__(
            kind="sandbox",
            project_name=project_name,
            engine_version=SANDBOX_ENGINE_VERSION,
            editor=SandboxEditor(self.state),
            assets=SandboxAssets(self.state),
            world=SandboxWorld(self.state),
            blueprints=SandboxBlueprints(self.state),
            materials=SandboxMaterials(self.state),
            mesh=SandboxMesh(self.state),
            pcg=SandboxPCG(self.state),
            abilities=SandboxAbilities(self.state),
            niagara=SandboxNiagara(self.state),
            components=SandboxComponents(self.state),
            data_tables=SandboxDataTables(self.state),
        )
        logger.debug(f"Sandbox host ready ({len(self.state.assets)} assets)")
