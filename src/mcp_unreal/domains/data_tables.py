"""DataTable commands."""

import logging
from typing import TYPE_CHECKING, Any

from ..core.errors import InvalidArgument
from ..models.descriptors import ParamType, param
from ._helpers import listing, require_asset_path, require_folder_path, require_non_empty

if TYPE_CHECKING:
    from ..host.interfaces import EditorHost
    from ..registry import CommandRegistry

logger = logging.getLogger(__name__)

DOMAIN = "data"
PROVIDER = "data_tables"


def _require_csv_file(field: str, value: str) -> str:
    path = require_non_empty(field, value)
    if not path.lower().endswith(".csv"):
        raise InvalidArgument(field, "must be a .csv file")
    return path


def register_commands(registry: "CommandRegistry", host: "EditorHost") -> None:
    """Register DataTable commands."""
    tables = host.data_tables

    @registry.command(
        "data.list_tables",
        domain=DOMAIN,
        params=[param("path", default="/Game", description="Content folder, searched recursively")],
    )
    def list_tables(args: dict[str, Any]) -> dict[str, Any]:
        """List DataTable assets with their row struct and row count."""
        return listing("tables", tables.list_tables(require_folder_path("path", args["path"])))

    @registry.command("data.get_table", domain=DOMAIN, params=[param("table_path")])
    def get_table(args: dict[str, Any]) -> dict[str, Any]:
        """Read every row of a DataTable."""
        return tables.get_table(require_asset_path("table_path", args["table_path"]))

    row_params = [
        param("table_path"),
        param("row_name"),
        param("data", ParamType.OBJECT, description="Column values by column name"),
    ]

    @registry.command("data.add_row", domain=DOMAIN, params=row_params)
    def add_row(args: dict[str, Any]) -> dict[str, Any]:
        """Add a row, replacing any row with the same name; unset columns get defaults."""
        return tables.add_row(
            require_asset_path("table_path", args["table_path"]),
            require_non_empty("row_name", args["row_name"]),
            args["data"],
        )

    @registry.command("data.update_row", domain=DOMAIN, params=row_params)
    def update_row(args: dict[str, Any]) -> dict[str, Any]:
        """Change some columns of an existing row."""
        if not args["data"]:
            raise InvalidArgument("data", "must set at least one column")
        return tables.update_row(
            require_asset_path("table_path", args["table_path"]),
            require_non_empty("row_name", args["row_name"]),
            args["data"],
        )

    @registry.command(
        "data.delete_row",
        domain=DOMAIN,
        params=[param("table_path"), param("row_name")],
    )
    def delete_row(args: dict[str, Any]) -> dict[str, Any]:
        """Remove a row; deleting a missing row reports deleted=false."""
        return tables.delete_row(
            require_asset_path("table_path", args["table_path"]),
            require_non_empty("row_name", args["row_name"]),
        )

    @registry.command(
        "data.import_csv",
        domain=DOMAIN,
        params=[
            param("table_path"),
            param("source_path", description="CSV file on the editor machine; first column is the row name"),
        ],
    )
    def import_csv(args: dict[str, Any]) -> dict[str, Any]:
        """Replace a DataTable's rows with the contents of a CSV file."""
        result = tables.import_csv(
            require_asset_path("table_path", args["table_path"]),
            _require_csv_file("source_path", args["source_path"]),
        )
        logger.info(f"Imported {result['imported']} row(s) into {result['table']}")
        return result
