"""Shared argument checks for capability domains.

The registry validates presence and JSON types; these helpers cover the
value rules individual commands add on top. They raise InvalidArgument so
the client sees the same error kind either way.
"""

from typing import Any, Optional

from ..core.errors import InvalidArgument


def require_asset_path(field: str, value: str) -> str:
    """Check that a value is a content path (``/Game/...``)."""
    if not value.startswith("/"):
        raise InvalidArgument(field, "asset path must start with '/'")
    if value.endswith("/") or "//" in value:
        raise InvalidArgument(field, "asset path must name an asset, not a folder")
    return value


def require_folder_path(field: str, value: str) -> str:
    """Check that a value is a content folder (``/Game/Blueprints``)."""
    if not value.startswith("/"):
        raise InvalidArgument(field, "folder path must start with '/'")
    return value.rstrip("/") or "/"


def require_name(field: str, value: str) -> str:
    """Check that a value is a usable object name (no path separators or spaces)."""
    name = value.strip()
    if not name:
        raise InvalidArgument(field, "must not be empty")
    if any(c in name for c in "/.: "):
        raise InvalidArgument(field, "must not contain '/', '.', ':' or spaces")
    return name


def require_non_empty(field: str, value: str) -> str:
    if not value.strip():
        raise InvalidArgument(field, "must not be empty")
    return value.strip()


def require_range(
    field: str,
    value: Any,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> Any:
    """Check that a number lies within [minimum, maximum]."""
    if minimum is not None and value < minimum:
        raise InvalidArgument(field, f"must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise InvalidArgument(field, f"must be <= {maximum}")
    return value


def listing(key: str, items: list[Any]) -> dict[str, Any]:
    """Wrap a list payload with its count."""
    return {key: items, "count": len(items)}
