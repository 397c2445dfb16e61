import hashlib
import logging
import os
import pickle
import shutil
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Union

from simple_utilities.config import CACHE_DIRECTORY_NAME, CACHE_PATH
from simple_utilities.core.arr import value_of
from simple_utilities.exceptions.common_exceptions import InvalidStoragePathException

Ttl = Union[int, float, datetime]


class FileCache:
    """
    File-per-key cache with expiry checked on read.

    Entries live at `<path>/cache/<h[0:2]>/<h[2:4]>/<h>` where `h` is the
    hex digest of the key. Each file holds the expiry timestamp on the first
    line followed by the pickled value.
    """

    def __init__(self, path: Optional[str] = None):
        base = Path(path or CACHE_PATH)
        if not base.is_dir():
            raise InvalidStoragePathException(str(base), "The path is not a directory or does not exist.")
        if not os.access(base, os.W_OK):
            raise InvalidStoragePathException(str(base), "The path is not writable.")

        cache_path = base / CACHE_DIRECTORY_NAME
        cache_path.mkdir(mode=0o755, parents=True, exist_ok=True)
        self._cache_path = cache_path.resolve()

    @property
    def cache_path(self) -> Path:
        return self._cache_path

    def put(self, key: str, value: Any, ttl: Ttl) -> None:
        """
        Store a value in the cache.
        :param key: The cache key.
        :param value: The value to store. None is never stored.
        :param ttl: Seconds to live, or the datetime the entry expires at.
        """
        if value is None:
            return

        file_path = self._file_path(key)
        expires_at = self._expiry_timestamp(ttl)
        file_path.write_bytes(f"{expires_at}\n".encode() + pickle.dumps(value))

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a value from the cache.
        :param key: The cache key.
        :param default: Default value (or callable producing it) if the key is missing or expired.
        :return: The cached value or default.
        """
        file_path = self._file_path(key, create=False)
        if not file_path.exists():
            return value_of(default)

        header, _, payload = file_path.read_bytes().partition(b"\n")
        try:
            expires_at = float(header)
        except ValueError as e:
            logging.warning(f"[CACHE] Dropping entry with unreadable expiry for `{key}`: {e}")
            file_path.unlink(missing_ok=True)
            return value_of(default)

        if time.time() > expires_at:
            file_path.unlink(missing_ok=True)
            return value_of(default)

        try:
            return pickle.loads(payload)
        except (pickle.UnpicklingError, EOFError) as e:
            logging.warning(f"[CACHE] Dropping unreadable entry for `{key}`: {e}")
            file_path.unlink(missing_ok=True)
            return value_of(default)

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def forget(self, key: str) -> bool:
        """
        Delete a value from the cache.
        :return: True if an entry was removed.
        """
        file_path = self._file_path(key, create=False)
        if file_path.exists():
            file_path.unlink()
            return True
        return False

    def remember(self, key: str, ttl: Ttl, callback: Callable[[], Any]) -> Any:
        """
        Get an item from the cache, or store the callback's result.
        :param key: The cache key.
        :param ttl: Seconds to live, or the datetime the entry expires at.
        :param callback: Function returning the value to cache.
        :return: The cached value.
        """
        value = self.get(key)
        if value is not None:
            return value

        value = callback()
        self.put(key, value, ttl)
        return value

    def flush(self) -> None:
        """
        Remove every entry. The cache directory itself is kept.
        """
        for item in self._cache_path.iterdir():
            if item.is_dir():
                shutil.rmtree(item)
            else:
                item.unlink()
        logging.debug(f"[CACHE] Flushed {self._cache_path}")

    @staticmethod
    def _hashed_key(key: str) -> str:
        return hashlib.blake2b(key.encode("utf-8"), digest_size=16).hexdigest()

    def _file_path(self, key: str, create: bool = True) -> Path:
        hashed = self._hashed_key(key)
        directory = self._cache_path / hashed[0:2] / hashed[2:4]
        if create:
            directory.mkdir(mode=0o755, parents=True, exist_ok=True)
        return directory / hashed

    @staticmethod
    def _expiry_timestamp(ttl: Ttl) -> float:
        if isinstance(ttl, datetime):
            return ttl.timestamp()
        return time.time() + ttl
