import pytest

from simple_utilities.core.validation_rules import DEFAULT_MESSAGES, BuiltinRules, RuleRegistry, is_empty, is_numeric
from simple_utilities.exceptions import UnknownValidationRuleException


def test_builtin_rules_are_registered():
    registry = RuleRegistry()
    BuiltinRules(DEFAULT_MESSAGES, lambda: []).register(registry)

    assert set(BuiltinRules.NAMES) <= set(registry.names())
    assert "required" in registry
    assert registry.get("required")("", "name", [], {}) == DEFAULT_MESSAGES["required"]
    assert registry.get("required")("x", "name", [], {}) is True


def test_register_overwrites_and_rejects_non_callables():
    registry = RuleRegistry()
    registry.register("always", lambda value, field, params, data: True)
    registry.register("always", lambda value, field, params, data: "nope")

    assert registry.get("always")(1, "f", [], {}) == "nope"

    with pytest.raises(TypeError):
        registry.register("broken", "not a rule")


def test_unknown_rule():
    with pytest.raises(UnknownValidationRuleException) as exc_info:
        RuleRegistry().get("missing")

    assert exc_info.value.rule_name == "missing"
    assert not RuleRegistry().has("missing")


@pytest.mark.parametrize("value,expected", [
    (None, True), ("", True), ([], True), ({}, True), ((), True),
    (0, False), (False, False), ("0", False), (" ", False),
])
def test_is_empty(value, expected):
    assert is_empty(value) is expected


def test_is_numeric():
    assert is_numeric("-1.5e3")
    assert is_numeric(".5")
    assert not is_numeric("")
    assert not is_numeric("1.2.3")
    assert not is_numeric(False)
