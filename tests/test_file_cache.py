import os
import time
from datetime import datetime, timedelta

import pytest

from simple_utilities import FileCache
from simple_utilities.exceptions import InvalidStoragePathException


def test_put_and_get(storage_dir, sample_data):
    cache = FileCache(str(storage_dir))
    cache.put("user", sample_data, 60)

    assert cache.get("user") == sample_data
    assert cache.has("user")


def test_entries_live_under_hashed_directories(storage_dir):
    cache = FileCache(str(storage_dir))
    cache.put("key", "value", 60)

    hashed = FileCache._hashed_key("key")
    assert cache.cache_path == (storage_dir / "cache").resolve()
    assert (cache.cache_path / hashed[0:2] / hashed[2:4] / hashed).is_file()


def test_missing_key_returns_default(storage_dir):
    cache = FileCache(str(storage_dir))

    assert cache.get("missing") is None
    assert cache.get("missing", "fallback") == "fallback"
    assert cache.get("missing", lambda: "computed") == "computed"
    assert not cache.has("missing")


def test_none_values_are_not_stored(storage_dir):
    cache = FileCache(str(storage_dir))
    cache.put("nothing", None, 60)

    assert not cache.has("nothing")


def test_expired_entry_is_deleted(storage_dir, monkeypatch):
    cache = FileCache(str(storage_dir))
    cache.put("short", "lived", 10)
    entry = cache._file_path("short", create=False)

    real_time = time.time
    monkeypatch.setattr(time, "time", lambda: real_time() + 11)

    assert cache.get("short", "expired") == "expired"
    assert not entry.exists()


def test_datetime_ttl(storage_dir):
    cache = FileCache(str(storage_dir))
    cache.put("future", 1, datetime.now() + timedelta(minutes=5))
    cache.put("past", 2, datetime.now() - timedelta(minutes=5))

    assert cache.get("future") == 1
    assert cache.get("past") is None


def test_forget(storage_dir):
    cache = FileCache(str(storage_dir))
    cache.put("key", "value", 60)

    assert cache.forget("key") is True
    assert cache.forget("key") is False
    assert cache.get("key") is None


def test_remember_calls_callback_once(storage_dir):
    cache = FileCache(str(storage_dir))
    calls = []

    def compute():
        calls.append(1)
        return {"expensive": True}

    assert cache.remember("report", 60, compute) == {"expensive": True}
    assert cache.remember("report", 60, compute) == {"expensive": True}
    assert len(calls) == 1


def test_flush_keeps_cache_directory(storage_dir):
    cache = FileCache(str(storage_dir))
    cache.put("a", 1, 60)
    cache.put("b", 2, 60)

    cache.flush()

    assert cache.cache_path.is_dir()
    assert list(cache.cache_path.iterdir()) == []
    assert cache.get("a") is None


def test_unreadable_entry_returns_default(storage_dir):
    cache = FileCache(str(storage_dir))
    cache.put("broken", "value", 60)
    entry = cache._file_path("broken", create=False)
    header = entry.read_bytes().partition(b"\n")[0]
    entry.write_bytes(header + b"\n")

    assert cache.get("broken", "default") == "default"
    assert not entry.exists()


def test_invalid_path_raises(tmp_path):
    with pytest.raises(InvalidStoragePathException):
        FileCache(str(tmp_path / "does-not-exist"))


@pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="permission bits are ignored for root")
def test_read_only_path_raises(tmp_path):
    read_only = tmp_path / "ro"
    read_only.mkdir(mode=0o500)

    with pytest.raises(InvalidStoragePathException):
        FileCache(str(read_only))


def test_entry_with_corrupt_expiry_returns_default(storage_dir, caplog):
    cache = FileCache(str(storage_dir))
    cache.put("garbled", "value", 60)
    entry = cache._file_path("garbled", create=False)
    payload = entry.read_bytes().partition(b"\n")[2]
    entry.write_bytes(b"not-a-timestamp\n" + payload)

    assert cache.get("garbled", "default") == "default"
    assert not entry.exists()
    assert "[CACHE] Dropping entry with unreadable expiry" in caplog.text
