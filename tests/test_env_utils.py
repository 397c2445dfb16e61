import importlib
from datetime import timezone

import pytest

from simple_utilities import config
from simple_utilities.exceptions import EnvMissingException
from simple_utilities.utils.datetime_utils import resolve_timezone
from simple_utilities.utils.env_utils import configure_env, env_str
from simple_utilities.utils.serialisation import get_exception_error_type


def test_configure_env_loads_environment_specific_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ENV", "testing")
    monkeypatch.delenv("SIMPLE_UTILS_SAMPLE", raising=False)
    (tmp_path / ".env.testing").write_text("SIMPLE_UTILS_SAMPLE=from-testing\n")
    (tmp_path / ".env").write_text("SIMPLE_UTILS_SAMPLE=from-default\n")

    configure_env()

    assert env_str("SIMPLE_UTILS_SAMPLE") == "from-testing"
    monkeypatch.delenv("SIMPLE_UTILS_SAMPLE")


def test_configure_env_with_explicit_file(tmp_path, monkeypatch):
    monkeypatch.delenv("SIMPLE_UTILS_EXPLICIT", raising=False)
    env_file = tmp_path / "custom.env"
    env_file.write_text("SIMPLE_UTILS_EXPLICIT=yes\n")

    configure_env(str(env_file))

    assert env_str("SIMPLE_UTILS_EXPLICIT") == "yes"
    monkeypatch.delenv("SIMPLE_UTILS_EXPLICIT")


def test_env_str(monkeypatch):
    monkeypatch.setenv("SIMPLE_UTILS_NAME", "value")
    monkeypatch.delenv("SIMPLE_UTILS_UNSET", raising=False)

    assert env_str("SIMPLE_UTILS_NAME") == "value"
    assert env_str("SIMPLE_UTILS_UNSET", "fallback") == "fallback"

    with pytest.raises(EnvMissingException):
        env_str("SIMPLE_UTILS_UNSET")


def test_config_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("CACHE_DIRECTORY_NAME", "entries")
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path))
    try:
        importlib.reload(config)
        assert config.CACHE_DIRECTORY_NAME == "entries"
        assert config.STORAGE_PATH == str(tmp_path)
    finally:
        monkeypatch.delenv("CACHE_DIRECTORY_NAME")
        monkeypatch.delenv("STORAGE_PATH")
        importlib.reload(config)

    assert config.CACHE_DIRECTORY_NAME == "cache"


def test_default_timezone_follows_config(monkeypatch):
    monkeypatch.setattr(config, "APP_TIMEZONE", "Europe/Prague")
    assert str(resolve_timezone()) == "Europe/Prague"

    monkeypatch.setattr(config, "APP_TIMEZONE", "UTC")
    assert resolve_timezone() is timezone.utc


def test_exception_error_type_is_inferred():
    assert get_exception_error_type(EnvMissingException("X")) == "env_missing"
