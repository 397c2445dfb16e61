import logging
from typing import Optional

from simple_utilities.utils.env_utils import configure_env
from simple_utilities.utils.logging import setup_logging

_booted = False


def boot(*, env_file_name: Optional[str] = None, log_file_name: Optional[str] = None) -> None:
    """
    Sets up the library for an application.
    - Loads environment variables from `.env.{ENV}` or `.env`
    - Sets up logging, including a hook for uncaught exceptions

    Calling it again is a no-op.
    """
    global _booted
    if _booted:
        return

    configure_env(env_file_name)
    setup_logging(log_file_name, capture_uncaught=True)
    _booted = True
    logging.debug("[BOOT] simple_utilities booted")


def is_booted() -> bool:
    return _booted
