from typing import Optional

from simple_utilities.utils.serialisation import get_exception_error_type, serialise


class AppException(Exception):
    def __init__(self,
        message: str,
        *,
        error_type: Optional[str] = None,
        data: Optional[dict] = None
    ):
        """
        Universal exception, which can be converted to a serialisable dict.

        Args:
            message: The error message.
            error_type: The error type (if not provided, it will be inferred from the exception class name).
            data: Extra data describing the error.
        """
        self.message = message
        self.error_type = error_type or get_exception_error_type(self)
        self.data = data
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error_type": self.error_type,
            "message": self.message,
            "data": serialise(self.data),
        }

class ValidationException(AppException):
    """
    Raised by `Validator.validate()` when one or more fields fail.

    The error bag is available both as `errors` and under `data["errors"]`.
    """

    def __init__(self, errors: dict[str, list[str]], message: Optional[str] = None):
        self.errors = errors
        if message is None:
            summary = "; ".join(f"{field}: {', '.join(messages)}" for field, messages in errors.items())
            message = f"Validation failed: {summary}"
        super().__init__(message, data={"errors": errors})

class UnknownValidationRuleException(ValueError):
    def __init__(self, rule_name: str):
        self.rule_name = rule_name
        super().__init__(f"Unknown validation rule: `{rule_name}`")

class ValidatorNotPassedException(RuntimeError):
    def __init__(self):
        super().__init__("Cannot get validated data - validation failed")

class CollectionTypeException(TypeError):
    def __init__(self, types: list[str]):
        self.types = types
        super().__init__(f"All elements must be of type: {', '.join(types)}")

class InvalidStoragePathException(ValueError):
    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"[STORAGE] {reason} (path: `{path}`)")

class EnvMissingException(ValueError):
    def __init__(self, env_name: str):
        super().__init__(f"[ENV MISSING] Missing required environment variable: `{env_name}`")
