"""
Editor hosts.

- EditorHost: the set of capability providers a bridge talks to
- SandboxEditorHost: in-memory host for standalone use and tests
- UnrealEditorHost: adapter over the editor's ``unreal`` module
  (import from ``mcp_unreal.host.unreal_host`` inside the editor)
"""

from .interfaces import (
    AbilityProvider,
    AssetProvider,
    BlueprintProvider,
    EditorHost,
    EditorProvider,
    MaterialProvider,
    MeshProvider,
    NiagaraProvider,
    PCGProvider,
    WorldProvider,
)
from .sandbox import SandboxEditorHost

__all__ = [
    "AbilityProvider",
    "AssetProvider",
    "BlueprintProvider",
    "EditorHost",
    "EditorProvider",
    "MaterialProvider",
    "MeshProvider",
    "NiagaraProvider",
    "PCGProvider",
    "SandboxEditorHost",
    "WorldProvider",
]
