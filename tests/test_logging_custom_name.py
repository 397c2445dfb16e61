from __future__ import annotations

import logging
import sys
from pathlib import Path

from simple_utilities import app_provider
from simple_utilities.app_provider import boot, is_booted
from simple_utilities.utils.logging import get_log_file_path, setup_logging


def test_logging_uses_custom_file_name(tmp_path, monkeypatch):
    monkeypatch.delenv("LOG_FILE_NAME", raising=False)
    monkeypatch.setenv("PROJECT_ROOT", str(tmp_path))

    setup_logging("module_x.log")

    path = get_log_file_path()
    assert path is not None
    assert path.name == "module_x.log"
    assert path.parent == tmp_path / "log"
    assert path.exists()


def test_logging_writes_bracket_tagged_messages(tmp_path, monkeypatch):
    monkeypatch.setenv("PROJECT_ROOT", str(tmp_path))
    setup_logging("tagged.log")

    logging.debug("[CACHE] Flushed test")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "[CACHE] Flushed test" in (tmp_path / "log" / "tagged.log").read_text()


def test_logging_keeps_host_handlers(tmp_path, monkeypatch):
    monkeypatch.setenv("PROJECT_ROOT", str(tmp_path))
    host_handler = logging.NullHandler()
    root_logger = logging.getLogger()
    root_logger.addHandler(host_handler)
    try:
        setup_logging("first.log")
        setup_logging("second.log")

        file_handlers = [h for h in root_logger.handlers if isinstance(h, logging.FileHandler)]
        assert host_handler in root_logger.handlers
        assert [Path(h.baseFilename).name for h in file_handlers] == ["second.log"]
    finally:
        root_logger.removeHandler(host_handler)


def test_logging_leaves_excepthook_alone_unless_asked(tmp_path, monkeypatch):
    monkeypatch.setenv("PROJECT_ROOT", str(tmp_path))
    original_hook = sys.excepthook
    monkeypatch.setattr(sys, "excepthook", original_hook)

    setup_logging("hooks.log")
    assert sys.excepthook is original_hook

    setup_logging("hooks.log", capture_uncaught=True)
    assert sys.excepthook is not original_hook


def test_boot_is_idempotent(tmp_path, monkeypatch):
    monkeypatch.setenv("PROJECT_ROOT", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(app_provider, "_booted", False)
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)

    boot(log_file_name="boot.log")
    boot(log_file_name="other.log")

    assert is_booted()
    assert get_log_file_path().name == "boot.log"
