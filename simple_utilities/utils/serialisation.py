import re
from datetime import datetime
from enum import Enum
from typing import Any


def serialise(val: Any) -> Any:
    """Recursively convert a value into plain dicts, lists and scalars."""
    if isinstance(val, Enum):
        return val.value
    if isinstance(val, datetime):
        return val.isoformat()
    if hasattr(val, "to_dict") and callable(val.to_dict):
        return serialise(val.to_dict())
    if hasattr(val, "all") and callable(val.all) and not isinstance(val, (dict, list, tuple)):
        return serialise(val.all())
    elif isinstance(val, (list, tuple)):
        return [serialise(item) for item in val]
    elif isinstance(val, dict):
        return {key: serialise(value) for key, value in val.items()}

    return val


def pascal_case_to_snake_case(pascal: type | str) -> str:
    """
    Convert a class name (CamelCase or PascalCase) to snake_case.

    Args:
        pascal: The class or class name as a string.

    Returns:
        str: The snake_case version of the class name.
    """
    if not isinstance(pascal, str):
        pascal = pascal.__name__
    # Insert underscores before capital letters, except at the start
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', pascal)
    snake = re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1).lower()
    return snake


def get_exception_error_type(exception: Exception) -> str:
    name = pascal_case_to_snake_case(exception.__class__.__name__)
    return remove_suffix(name, "_exception")


def remove_suffix(text: str, suffix: str) -> str:
    """
    Remove an exact suffix from the given text if present.

    Unlike str.rstrip, this removes only the provided suffix once,
    not any combination of its characters.
    """
    if text.endswith(suffix):
        return text[: -len(suffix)]
    return text
