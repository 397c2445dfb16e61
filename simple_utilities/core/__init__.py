"""Core utilities re-exported for convenient access."""

from .arr import Arr, value_of
from .collection import Collection
from .data import Built, Data, DataResult, MissingAttribute, TypeMismatch
from .events import EventDispatcher
from .file_cache import FileCache
from .file_storage import FileStorage
from .plastic import Plastic
from .validator import ParsedRule, ValidationState, Validator

__all__ = [
    "Arr",
    "value_of",
    "Collection",
    "Built",
    "Data",
    "DataResult",
    "MissingAttribute",
    "TypeMismatch",
    "EventDispatcher",
    "FileCache",
    "FileStorage",
    "Plastic",
    "ParsedRule",
    "ValidationState",
    "Validator",
]
