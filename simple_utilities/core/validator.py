from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

from simple_utilities.contracts.validator_rule import ValidatorRule
from simple_utilities.core.validation_rules.builtin_rules import DEFAULT_MESSAGES, BuiltinRules, is_empty
from simple_utilities.core.validation_rules.rule_registry import RuleEvaluator, RuleRegistry
from simple_utilities.exceptions.common_exceptions import ValidationException, ValidatorNotPassedException
from simple_utilities.utils.path_resolver import resolve_field_values

RuleDefinition = Union[str, Sequence[Union[str, Sequence[Any], ValidatorRule]]]


class ParsedRule(NamedTuple):
    name: str
    params: Tuple[str, ...]


class ValidationState(Enum):
    NOT_RUN = "not_run"
    RUNNING = "running"
    COMPLETED = "completed"


class Validator:
    """
    Rule-string validator for nested dict data.

        validator = Validator(
            {"name": "John", "users": [{"email": ""}]},
            {"name": "required|string|min:3", "users.*.email": "required"},
        )
        validator.passes()   # False
        validator.errors()   # {"users.0.email": ["The users.0.email field is required."]}

    Rules run once, lazily, on the first call to `passes`, `fails`, `validate`,
    `validated`, `errors` or `failed`. Later calls reuse the result.
    """

    def __init__(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, RuleDefinition],
        messages: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.data = data
        self.messages: Dict[str, str] = {**DEFAULT_MESSAGES, **(messages or {})}
        self._registry = RuleRegistry()
        self._state = ValidationState.NOT_RUN
        self._errors: Dict[str, List[str]] = {}
        self._failed_rules: Dict[str, List[str]] = {}
        self._current_rules: Tuple[ParsedRule, ...] = ()

        BuiltinRules(self.messages, self._declared_rule_names).register(self._registry)
        self._rules: Dict[str, Tuple[ParsedRule, ...]] = {
            field: self._parse_rules(definition) for field, definition in rules.items()
        }

    @classmethod
    def make(
        cls,
        data: Mapping[str, Any],
        rules: Mapping[str, RuleDefinition],
        messages: Optional[Mapping[str, str]] = None,
    ) -> "Validator":
        return cls(data, rules, messages)

    def add_rule(
        self,
        name: str,
        evaluator: Union[RuleEvaluator, ValidatorRule],
        message: Optional[str] = None,
    ) -> "Validator":
        """
        Register (or overwrite) a rule for this validator.

        The evaluator is called as `evaluator(value, field, params, data)` and
        returns True, False (use `message`) or a message template.
        """
        self._registry.register(name, evaluator)
        if message is None and isinstance(evaluator, ValidatorRule):
            message = evaluator.message
        if message is not None:
            self.messages[name] = message
        return self

    def passes(self) -> bool:
        self._run()
        return not self._errors

    def fails(self) -> bool:
        return not self.passes()

    def validate(self) -> Dict[str, Any]:
        """
        Return the validated data.

        Raises:
            ValidationException: If any rule failed. Carries the error bag.
        """
        if self.fails():
            raise ValidationException(self.errors())
        return self.validated()

    def validated(self) -> Dict[str, Any]:
        """
        Top-level keys covered by the rules, taken from the original data.

        `users.*.name` and `users.count` both select `users`. Keys absent from
        the data, or holding None, are left out.

        Raises:
            ValidatorNotPassedException: If validation failed.
        """
        if self.fails():
            raise ValidatorNotPassedException()

        validated: Dict[str, Any] = {}
        for field in self._rules:
            key = field.split(".", 1)[0]
            if key in validated:
                continue
            if key in self.data and self.data[key] is not None:
                validated[key] = self.data[key]
        return validated

    def errors(self) -> Dict[str, List[str]]:
        self._run()
        return {field: list(messages) for field, messages in self._errors.items()}

    def failed(self) -> Dict[str, List[str]]:
        """Field -> names of the rules that produced its messages."""
        self._run()
        return {field: list(names) for field, names in self._failed_rules.items()}

    @property
    def state(self) -> ValidationState:
        return self._state

    def _run(self) -> None:
        if self._state is not ValidationState.NOT_RUN:
            return

        self._state = ValidationState.RUNNING
        try:
            for field, rules in self._rules.items():
                self._validate_field(field, rules)
        except Exception:
            # A configuration error leaves the validator re-runnable from scratch
            self._state = ValidationState.NOT_RUN
            self._errors, self._failed_rules = {}, {}
            raise
        finally:
            self._current_rules = ()

        self._state = ValidationState.COMPLETED
        logging.debug(f"[VALIDATOR] Validated {len(self._rules)} field rule(s), {len(self._errors)} field(s) failed")

    def _validate_field(self, field: str, rules: Tuple[ParsedRule, ...]) -> None:
        self._current_rules = rules
        is_nullable = any(rule.name == "nullable" for rule in rules)

        for concrete_field, value in resolve_field_values(self.data, field).items():
            skip_optional = is_nullable and is_empty(value)

            for rule in rules:
                # An empty nullable field only answers to `required`
                if skip_optional and rule.name != "required":
                    continue

                evaluator = self._registry.get(rule.name)
                result = evaluator(value, concrete_field, list(rule.params), self.data)
                if result is True:
                    continue

                template = result if isinstance(result, str) else self._fallback_message(rule.name)
                self._errors.setdefault(concrete_field, []).append(
                    self._format_message(template, concrete_field, rule.params)
                )
                self._failed_rules.setdefault(concrete_field, []).append(rule.name)

    def _declared_rule_names(self) -> List[str]:
        return [rule.name for rule in self._current_rules]

    def _fallback_message(self, rule_name: str) -> str:
        return self.messages.get(rule_name) or self.messages["invalid"]

    def _parse_rules(self, definition: RuleDefinition) -> Tuple[ParsedRule, ...]:
        if isinstance(definition, str):
            definition = [token for token in definition.split("|") if token]

        parsed: List[ParsedRule] = []
        for rule in definition:
            if isinstance(rule, ValidatorRule):
                if not self._registry.has(rule.name):
                    self.add_rule(rule.name, rule)
                parsed.append(ParsedRule(rule.name, ()))
            elif isinstance(rule, (list, tuple)):
                parsed.append(ParsedRule(str(rule[0]), tuple(str(param) for param in rule[1:])))
            else:
                name, _, params = str(rule).partition(":")
                parsed.append(ParsedRule(name, tuple(params.split(",")) if params else ()))
        return tuple(parsed)

    @staticmethod
    def _format_message(template: str, field: str, params: Sequence[str]) -> str:
        replacements = {
            ":attribute": field,
            ":anotherField": params[0] if params else "",
            ":anotherValue": params[1] if len(params) > 1 else "",
            ":values": ", ".join(params),
            ":min": params[0] if params else "",
            ":max": params[1] if len(params) > 1 else (params[0] if params else ""),
        }
        for placeholder, replacement in replacements.items():
            template = template.replace(placeholder, replacement)
        return template
