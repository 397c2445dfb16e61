"""Custom exceptions for simple_utilities."""

from .common_exceptions import (
    AppException,
    ValidationException,
    UnknownValidationRuleException,
    ValidatorNotPassedException,
    CollectionTypeException,
    InvalidStoragePathException,
    EnvMissingException,
)
from .data_exceptions import (
    DataException,
    MissingAttributeException,
    InvalidAttributeTypeException,
    ImmutableAttributeException,
)


__all__ = [
    # common
    "AppException",
    "ValidationException",
    "UnknownValidationRuleException",
    "ValidatorNotPassedException",
    "CollectionTypeException",
    "InvalidStoragePathException",
    "EnvMissingException",
    # data
    "DataException",
    "MissingAttributeException",
    "InvalidAttributeTypeException",
    "ImmutableAttributeException",
]
