from __future__ import annotations

from typing import Any, Callable, Dict, List, Sequence, Union

from simple_utilities.contracts.validator_rule import ValidatorRule
from simple_utilities.exceptions.common_exceptions import UnknownValidationRuleException

RuleEvaluator = Callable[[Any, str, Sequence[str], dict], Union[bool, str]]


class RuleRegistry:
    """Name -> evaluator mapping. One registry per validator instance."""

    def __init__(self) -> None:
        self._rules: Dict[str, RuleEvaluator] = {}

    def register(self, name: str, evaluator: Union[RuleEvaluator, ValidatorRule]) -> None:
        """Add or overwrite a rule."""
        if not callable(evaluator):
            raise TypeError(f"Rule `{name}` must be callable or a ValidatorRule, got {type(evaluator).__name__}")
        self._rules[name] = evaluator

    def get(self, name: str) -> RuleEvaluator:
        """
        Raises:
            UnknownValidationRuleException: If no rule is registered under `name`.
        """
        try:
            return self._rules[name]
        except KeyError:
            raise UnknownValidationRuleException(name) from None

    def has(self, name: str) -> bool:
        return name in self._rules

    def names(self) -> List[str]:
        return list(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules
