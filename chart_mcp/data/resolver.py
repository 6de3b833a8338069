from pathlib import Path
from urllib.parse import unquote

from chart_mcp.core.errors import ValidationError

DATA_URI_SCHEME = "data://"


def parse_data_uri(value: str) -> str:
    """Return the filename part of a ``data://{filename}`` resource URI."""
    value = (value or "").strip()
    if not value.startswith(DATA_URI_SCHEME):
        raise ValidationError("Data resource must start with 'data://'")
    return unquote(value[len(DATA_URI_SCHEME):])


def resolve_data_path(identifier: str, root: str | Path) -> Path:
    """Map a filename or data:// URI to a file directly inside ``root``."""
    name = (identifier or "").strip()
    if name.startswith(DATA_URI_SCHEME):
        name = parse_data_uri(name)
    elif "://" in name:
        raise ValidationError("Invalid data resource protocol")

    if not name or ".." in name:
        raise ValidationError(f"Invalid filename: {identifier!r}")
    if "/" in name or "\\" in name:
        raise ValidationError(f"Filename must not contain path separators: {identifier!r}")

    root_path = Path(root).resolve()
    file_path = (root_path / name).resolve()
    if file_path.parent != root_path:
        raise ValidationError(f"Filename resolves outside the upload directory: {identifier!r}")
    return file_path
