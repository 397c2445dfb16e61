import logging
import os
from typing import Optional

from dotenv import load_dotenv

from simple_utilities.exceptions.common_exceptions import EnvMissingException


def configure_env(env_file_name: Optional[str] = None) -> None:
    """
    Configure the environment.

    Args:
        env_file_name: Optional environment file name. If None, tries to load from .env.<ENV> then .env.
    """
    if env_file_name is not None:
        load_dotenv(env_file_name, override=True)
        return

    environment = os.getenv("ENV", "debug")

    for env_file in [f".env.{environment}", ".env"]:
        if load_dotenv(env_file, override=True):
            logging.debug(f"☑️ Loaded {env_file} file successfully")
            break


def env_str(name: str, default: Optional[str] = None) -> str:
    """
    Read an environment variable.

    Raises:
        EnvMissingException: If it is unset and no default is given.
    """
    value = os.getenv(name, default)
    if value is None:
        raise EnvMissingException(name)
    return value
