import mimetypes
from typing import Optional


def get_mime_type(filename: str) -> Optional[str]:
    """
    Get the MIME type of a file based on its extension.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    return mime_type


def secure_relative_path(path: str) -> str:
    """
    Strip up-level references and leading/trailing separators so the path
    always stays inside the directory it is joined to.
    """
    path = path.replace("\\", "/")
    parts = [part for part in path.split("/") if part not in ("", ".", "..")]
    return "/".join(parts)
