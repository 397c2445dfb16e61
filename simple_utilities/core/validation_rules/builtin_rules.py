from __future__ import annotations

import re
from typing import Any, Callable, Collection, Mapping, Sequence

from simple_utilities.core.validation_rules.rule_registry import RuleRegistry
from simple_utilities.utils.path_resolver import get_nested_value, has_nested_value

DEFAULT_MESSAGES: dict[str, str] = {
    "required": "The :attribute field is required.",
    "required_if": "The :attribute field is required when :anotherField is :anotherValue.",
    "required_unless": "The :attribute field is required unless :anotherField is :anotherValue.",
    "string": "The :attribute field must be a string.",
    "numeric": "The :attribute field must be a numeric value.",
    "array": "The :attribute field must be an array.",
    "boolean": "The :attribute field must be a boolean value.",
    "min.string": "The :attribute field must be at least :min characters.",
    "min.numeric": "The :attribute field must be at least :min.",
    "max.string": "The :attribute field must not exceed :max characters.",
    "max.numeric": "The :attribute field must not exceed :max.",
    "between.numeric": "The :attribute field must be between :min and :max.",
    "between.string": "The :attribute field must be between :min and :max characters.",
    "in": "The selected :attribute is invalid.",
    "invalid": "The :attribute field is invalid.",
}

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_NUMERIC_PREFIX_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def is_empty(value: Any) -> bool:
    """None, "" and empty containers are empty. 0, False and whitespace are not."""
    if value is None or value == "":
        return True
    return isinstance(value, (list, tuple, dict)) and len(value) == 0


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return isinstance(value, str) and _NUMERIC_RE.match(value) is not None


def to_number(value: Any) -> float:
    """
    Numeric value of a number or string. Strings use their leading numeric
    part, so `"10px"` is 10 and `"abc"` is 0.
    """
    if not isinstance(value, str):
        return float(value)
    match = _NUMERIC_PREFIX_RE.match(value)
    return float(match.group(0)) if match else 0.0


def is_truthy(value: Any) -> bool:
    """Truthiness of a raw input value. The strings `""` and `"0"` are false."""
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


def stringify(value: Any) -> str:
    return "" if value is None else str(value)


def param(params: Sequence[str], index: int) -> str:
    """Rule parameter at `index`, or "" when the rule was declared without it."""
    return params[index] if index < len(params) else ""


def loosely_equals(left: Any, right: Any) -> bool:
    """Equality that treats `1`, `1.0` and `"1"` alike, mirroring rule parameters being strings."""
    if isinstance(left, bool) or isinstance(right, bool):
        return is_truthy(left) == is_truthy(right)
    if left == right:
        return True
    if is_numeric(left) and is_numeric(right):
        return to_number(left) == to_number(right)
    if isinstance(left, (list, tuple, dict)) or isinstance(right, (list, tuple, dict)):
        return False
    return stringify(left) == stringify(right)


class BuiltinRules:
    """
    The built-in rule set, bound to one validator.

    `messages` is the validator's template mapping (read at call time so
    overrides apply). `declared_rules` returns the rule names declared for the
    field currently being validated; `min`, `max` and `between` use it to pick
    between numeric and string comparison.
    """

    NAMES = (
        "nullable",
        "required",
        "required_if",
        "required_unless",
        "string",
        "numeric",
        "array",
        "boolean",
        "min",
        "max",
        "between",
        "in",
    )

    def __init__(self, messages: Mapping[str, str], declared_rules: Callable[[], Collection[str]]) -> None:
        self.messages = messages
        self.declared_rules = declared_rules

    def register(self, registry: RuleRegistry) -> None:
        for name in self.NAMES:
            registry.register(name, getattr(self, f"rule_{name}"))

    def rule_nullable(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        return True

    def rule_required(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        return self.messages["required"] if is_empty(value) else True

    def rule_required_if(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        other_field, other_value = param(params, 0), param(params, 1)
        other = get_nested_value(data, other_field)
        if other is not None and loosely_equals(other, other_value) and is_empty(value):
            return self.messages["required_if"]
        return True

    def rule_required_unless(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        other_field, other_value = param(params, 0), param(params, 1)
        other = get_nested_value(data, other_field)
        matches = has_nested_value(data, other_field) and other is not None and loosely_equals(other, other_value)
        if not matches and is_empty(value):
            return self.messages["required_unless"]
        return True

    def rule_string(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        return True if isinstance(value, str) else self.messages["string"]

    def rule_numeric(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        return True if is_numeric(value) else self.messages["numeric"]

    def rule_array(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        return True if isinstance(value, (list, tuple, dict)) else self.messages["array"]

    def rule_boolean(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        if isinstance(value, bool):
            return True
        if isinstance(value, int) and value in (0, 1):
            return True
        if isinstance(value, str) and value in ("0", "1"):
            return True
        return self.messages["boolean"]

    def rule_min(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        return self._sized("min", value, lambda size: size >= to_number(param(params, 0)))

    def rule_max(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        return self._sized("max", value, lambda size: size <= to_number(param(params, 0)))

    def rule_between(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        low, high = to_number(param(params, 0)), to_number(param(params, 1))
        return self._sized("between", value, lambda size: low <= size <= high)

    def rule_in(self, value: Any, field: str, params: Sequence[str], data: dict) -> bool | str:
        if any(loosely_equals(value, allowed) for allowed in params):
            return True
        return self.messages["in"]

    def _sized(self, rule: str, value: Any, check: Callable[[float], bool]) -> bool | str:
        """
        Compare either the numeric value or the string length.

        The branch depends on the field's other declared rules first
        (`string` wins over `numeric`), then on whether the value looks numeric.
        """
        declared = self.declared_rules()

        if "string" in declared:
            return True if check(len(stringify(value))) else self.messages[f"{rule}.string"]

        if "numeric" in declared:
            if is_numeric(value) and check(to_number(value)):
                return True
            return self.messages[f"{rule}.numeric"]

        if is_numeric(value):
            return True if check(to_number(value)) else self.messages[f"{rule}.numeric"]

        return True if check(len(stringify(value))) else self.messages[f"{rule}.string"]
