import os

from simple_utilities.utils.env_utils import env_str

# Base directory for FileCache (a `cache` sub directory is created inside)
CACHE_PATH = env_str("CACHE_PATH", os.path.join(os.getcwd(), "storage"))

# Name of the sub directory FileCache keeps its entries in
CACHE_DIRECTORY_NAME = env_str("CACHE_DIRECTORY_NAME", "cache")

# Base directory for FileStorage
STORAGE_PATH = env_str("STORAGE_PATH", os.path.join(os.getcwd(), "storage"))

# Default timezone for Plastic and datetime_utils.now()
APP_TIMEZONE = env_str("APP_TIMEZONE", "UTC")
