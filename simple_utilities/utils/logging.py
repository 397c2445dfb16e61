import logging
import os
import sys
from pathlib import Path

_handlers: list[logging.Handler] = []
_log_file_path: Path | None = None


def setup_logging(log_file_name: str | None = None, *, capture_uncaught: bool = False) -> None:
    """
    Send log records to `<PROJECT_ROOT>/log/<log_file_name>`.

    Only handlers installed by a previous call are replaced, so handlers set
    up by the host application stay in place. `LOG_LEVEL` (default DEBUG)
    sets the level of the added handlers; the root logger is lowered to it
    when needed. With `ENV=debug` records are echoed to the console too.

    Args:
        log_file_name: File name inside the log directory, defaults to
            `LOG_FILE_NAME` or `app.log`.
        capture_uncaught: Also log uncaught exceptions at CRITICAL via
            `sys.excepthook`.
    """
    global _log_file_path

    project_root = Path(os.getenv("PROJECT_ROOT") or os.getcwd())
    log_dir = project_root / "log"
    log_file = log_dir / (log_file_name or os.getenv("LOG_FILE_NAME", "app.log"))

    if capture_uncaught:
        sys.excepthook = _log_uncaught_exception

    if _handlers and _log_file_path == log_file:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "DEBUG").upper())

    root_logger = logging.getLogger()
    for handler in _handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    file_handler = logging.FileHandler(str(log_file), mode="a")
    file_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    _handlers.append(file_handler)

    if os.getenv("ENV") == "debug":
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("%(levelname)s - %(name)s - %(message)s"))
        _handlers.append(console_handler)

    for handler in _handlers:
        handler.setLevel(level)
        root_logger.addHandler(handler)

    if root_logger.getEffectiveLevel() > file_handler.level:
        root_logger.setLevel(file_handler.level)

    _log_file_path = log_file
    logging.info(f"[LOGGING] Writing logs to {log_file}")


def _log_uncaught_exception(exc_type, exc_value, exc_traceback):
    # Ctrl+C keeps the default behaviour
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    logging.critical(
        "Uncaught exception crashed the application",
        exc_info=(exc_type, exc_value, exc_traceback),
    )


def get_log_file_path() -> Path | None:
    return _log_file_path
