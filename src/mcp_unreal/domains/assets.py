"""Asset registry commands."""

import logging
from typing import TYPE_CHECKING, Any

from ..models.descriptors import ParamType, param
from ._helpers import listing, require_asset_path, require_folder_path, require_range

if TYPE_CHECKING:
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

DOMAIN = "asset"
PROVIDER = "assets"

MAX_LIST_LIMIT = 10000


def register_commands(registry: "CommandRegistry", host: "EditorHost") -> None:
    """Register asset commands."""
    assets = host.assets

    @registry.command(
        "asset.list",
        domain=DOMAIN,
        params=[
            param("path", default="/Game", description="Content folder to list"),
            param("class_name", required=False, description="Only assets of this class"),
            param("recursive", ParamType.BOOLEAN, default=True),
            param("limit", ParamType.INTEGER, default=100),
        ],
    )
    def list_assets(args: dict[str, Any]) -> dict[str, Any]:
        """List assets under a content folder."""
        path = require_folder_path("path", args["path"])
        limit = require_range("limit", args["limit"], 1, MAX_LIST_LIMIT)
        found = assets.list_assets(path, args["class_name"], args["recursive"], limit)
        return {"path": path, **listing("assets", found)}

    @registry.command(
        "asset.info",
        domain=DOMAIN,
        params=[param("asset_path", description="Package or object path of the asset")],
    )
    def asset_info(args: dict[str, Any]) -> dict[str, Any]:
        """Describe one asset."""
        return assets.get_asset(require_asset_path("asset_path", args["asset_path"]))

    @registry.command(
        "asset.search",
        domain=DOMAIN,
        params=[
            param("class_filter", required=False, description="Asset class, e.g. StaticMesh"),
            param("path_filter", required=False, description="Content folder to search in"),
            param("name_filter", required=False, description="Case-insensitive name substring"),
            param("recursive_path", ParamType.BOOLEAN, default=True),
        ],
    )
    def search_assets(args: dict[str, Any]) -> dict[str, Any]:
        """Search assets by class, folder and name."""
        path_filter = args["path_filter"]
        if path_filter is not None:
            path_filter = require_folder_path("path_filter", path_filter)
        found = assets.search_assets(
            args["class_filter"], path_filter, args["name_filter"], args["recursive_path"]
        )
        return listing("assets", found)

    @registry.command("asset.dependencies", domain=DOMAIN, params=[param("asset_path")])
    def dependencies(args: dict[str, Any]) -> dict[str, Any]:
        """List the packages an asset depends on."""
        path = require_asset_path("asset_path", args["asset_path"])
        return {"asset_path": path, **listing("dependencies", assets.get_dependencies(path))}

    @registry.command("asset.referencers", domain=DOMAIN, params=[param("asset_path")])
    def referencers(args: dict[str, Any]) -> dict[str, Any]:
        """List the packages that reference an asset."""
        path = require_asset_path("asset_path", args["asset_path"])
        return {"asset_path": path, **listing("referencers", assets.get_referencers(path))}

    @registry.command("asset.delete", domain=DOMAIN, params=[param("asset_path")])
    def delete_asset(args: dict[str, Any]) -> dict[str, Any]:
        """Delete an asset that nothing references."""
        path = require_asset_path("asset_path", args["asset_path"])
        assets.delete_asset(path)
        logger.info(f"Deleted asset {path}")
        return {"deleted": path}
