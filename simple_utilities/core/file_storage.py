import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from simple_utilities.config import STORAGE_PATH
from simple_utilities.exceptions.common_exceptions import InvalidStoragePathException
from simple_utilities.utils.file_utils import get_mime_type, secure_relative_path

Content = Union[str, bytes]


class FileStorage:
    """Local file helper rooted at a base directory."""

    def __init__(self, path: Optional[str] = None):
        base = Path(path or STORAGE_PATH)
        if not base.is_dir():
            raise InvalidStoragePathException(str(base), "The path is not a directory or does not exist.")
        if not os.access(base, os.W_OK):
            raise InvalidStoragePathException(str(base), "The path is not writable.")
        self._base_path = base.resolve()

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _full(self, path: str) -> Path:
        return self._base_path / secure_relative_path(path)

    def dir(self, path: str) -> "FileStorage":
        """Create (if needed) a sub directory and return a storage rooted at it."""
        directory = self._full(path)
        directory.mkdir(mode=0o755, parents=True, exist_ok=True)
        return FileStorage(str(directory))

    def put(self, filename: str, content: Content) -> Path:
        file_path = self._prepare(filename)
        if isinstance(content, bytes):
            file_path.write_bytes(content)
        else:
            file_path.write_text(content, encoding="utf-8")
        logging.debug(f"[STORAGE] Wrote {file_path}")
        return file_path

    def append(self, filename: str, content: Content) -> Path:
        file_path = self._prepare(filename)
        data = content if isinstance(content, bytes) else content.encode("utf-8")
        with open(file_path, "ab") as f:
            f.write(data)
        return file_path

    def prepend(self, filename: str, content: Content) -> Path:
        file_path = self._prepare(filename)
        existing = file_path.read_bytes() if file_path.exists() else b""
        data = content if isinstance(content, bytes) else content.encode("utf-8")
        file_path.write_bytes(data + existing)
        return file_path

    def get(self, filename: str) -> bytes:
        """
        Raises:
            FileNotFoundError: If file does not exist
        """
        return self._existing(filename).read_bytes()

    def exists(self, filename: str) -> bool:
        return self._full(filename).exists()

    def delete(self, filename: str) -> bool:
        file_path = self._full(filename)
        if file_path.is_file():
            file_path.unlink()
            return True
        return False

    def all_files(self, path: Optional[str] = None) -> List[str]:
        """File names (not paths) under the base, or under `path`, recursively."""
        directory = self.dir(path).base_path if path is not None else self._base_path
        return sorted(item.name for item in directory.rglob("*") if item.is_file())

    def last_modified(self, filename: str) -> int:
        return int(self._existing(filename).stat().st_mtime)

    def size(self, filename: str) -> int:
        return self._existing(filename).stat().st_size

    def mime_type(self, filename: str) -> Optional[str]:
        return get_mime_type(str(self._existing(filename)))

    def _prepare(self, filename: str) -> Path:
        file_path = self._full(filename)
        file_path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
        return file_path

    def _existing(self, filename: str) -> Path:
        file_path = self._full(filename)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {filename}")
        return file_path
