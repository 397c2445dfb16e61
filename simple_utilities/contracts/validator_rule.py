from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence


class ValidatorRule(ABC):
    """
    Contract for class-based rules used by `core.Validator`.

    Set `name` (the token used in rule strings) and optionally `message`
    (the default template, placeholders like `:attribute` are substituted).

        class Uppercase(ValidatorRule):
            name = "uppercase"
            message = "The :attribute field must be uppercase."

            def validate(self, value, field, params, data):
                return isinstance(value, str) and value.isupper()

    Implementations must not raise for invalid input; return a result instead.
    """

    name: str = ""
    message: Optional[str] = None

    @abstractmethod
    def validate(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        """
        Validate a value within the context of the entire payload.

        Args:
            value: The value at the resolved field.
            field: The concrete field path (wildcards resolved).
            params: Rule parameters, e.g. `["3", "5"]` for `rule:3,5`.
            data: The full input data.

        Returns:
            True when valid, False to use the rule's message, or a message template.
        """
        raise NotImplementedError

    def __call__(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        return self.validate(value, field, params, data)
