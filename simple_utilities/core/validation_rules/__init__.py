from .builtin_rules import DEFAULT_MESSAGES, BuiltinRules, is_empty, is_numeric
from .rule_registry import RuleEvaluator, RuleRegistry

__all__ = [
    "DEFAULT_MESSAGES",
    "BuiltinRules",
    "RuleEvaluator",
    "RuleRegistry",
    "is_empty",
    "is_numeric",
]
