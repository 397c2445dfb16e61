from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from simple_utilities.utils.path_resolver import get_nested_value

Items = Union[List[Any], Dict[Any, Any]]

_MISSING = object()


def value_of(value: Any) -> Any:
    """Return the value, or call it if it is a plain callable default."""
    return value() if callable(value) and not isinstance(value, type) else value


def _pairs(items: Items) -> Iterable[Tuple[Any, Any]]:
    return items.items() if isinstance(items, dict) else enumerate(items)


def _rebuild(items: Items, pairs: Iterable[Tuple[Any, Any]]) -> Items:
    """Dicts keep their keys, lists are re-indexed."""
    if isinstance(items, dict):
        return dict(pairs)
    return [value for _, value in pairs]


def _compare(retrieved: Any, operator: str, value: Any) -> bool:
    if operator in ("=", "=="):
        return retrieved == value
    if operator in ("!=", "<>"):
        return retrieved != value
    if operator == "===":
        return type(retrieved) is type(value) and retrieved == value
    if operator == "!==":
        return not (type(retrieved) is type(value) and retrieved == value)
    try:
        if operator == "<":
            return retrieved < value
        if operator == ">":
            return retrieved > value
        if operator == "<=":
            return retrieved <= value
        if operator == ">=":
            return retrieved >= value
    except TypeError:
        return False
    return False


class Arr:
    """
    Static helpers for lists and dicts.

    Callbacks receive `(value, key)`. Filtering a dict keeps its keys, filtering
    a list returns a new list.
    """

    @staticmethod
    def data_get(target: Any, key: str, default: Any = None) -> Any:
        """Get an item from nested dicts, lists or objects using dot notation."""
        if target is None:
            return value_of(default)
        result = get_nested_value(target, key, _MISSING)
        return value_of(default) if result is _MISSING else result

    @staticmethod
    def operator_for_where(key: str, operator: Any = None, value: Any = _MISSING) -> Callable[[Any, Any], bool]:
        if value is _MISSING:
            operator, value = "=", operator

        def check(item: Any, _key: Any = None) -> bool:
            retrieved = Arr.data_get(item, key)
            if retrieved is None:
                return False
            return _compare(retrieved, operator, value)

        return check

    @classmethod
    def where(cls, items: Items, key: Union[str, Callable], operator: Any = None, value: Any = _MISSING) -> Items:
        """
        Filter by a callback or by a key/operator/value triple.

            Arr.where(users, "age", ">=", 18)
            Arr.where(users, "role", "admin")      # equality
        """
        if callable(key):
            return _rebuild(items, ((k, v) for k, v in _pairs(items) if key(v, k)))

        check = cls.operator_for_where(key, operator, value)
        return _rebuild(items, ((k, v) for k, v in _pairs(items) if check(v, k)))

    @classmethod
    def contains(cls, items: Items, key: Any, value: Any = _MISSING) -> bool:
        """
        True if a callback matches, an item equals `key`, or (with `value`)
        an item's `key` equals `value`. Nested lists/dicts are searched one level deep.
        """
        if callable(key) and not isinstance(key, str):
            return any(key(v, k) for k, v in _pairs(items))

        if value is _MISSING:
            for _, item in _pairs(items):
                if isinstance(item, dict):
                    if key in item.values():
                        return True
                elif isinstance(item, (list, tuple)):
                    if key in item:
                        return True
                elif item == key:
                    return True
            return False

        return len(cls.where(items, key, "=", value)) > 0

    @classmethod
    def where_in(cls, items: Items, key: str, values: Iterable[Any]) -> Items:
        allowed = list(values)
        return cls.where(items, lambda item, _k: cls.data_get(item, key) in allowed)

    @classmethod
    def where_not(cls, items: Items, key: str, value: Any) -> Items:
        return cls.where(items, lambda item, _k: cls.data_get(item, key) != value)

    @staticmethod
    def first(items: Items, callback: Optional[Callable[[Any, Any], bool]] = None, default: Any = None) -> Any:
        for k, v in _pairs(items):
            if callback is None or callback(v, k):
                return v
        return value_of(default)

    @classmethod
    def first_where(cls, items: Items, key: Union[str, Callable], operator: Any = _MISSING, value: Any = _MISSING) -> Any:
        """First item matching a callback, a truthy key, or a key/operator/value triple."""
        if callable(key):
            return cls.first(items, key)

        if operator is _MISSING:
            return cls.first(items, lambda item, _k: bool(cls.data_get(item, key)))

        return cls.first(items, cls.operator_for_where(key, operator, value))

    @staticmethod
    def last(items: Items, callback: Optional[Callable[[Any, Any], bool]] = None, default: Any = None) -> Any:
        found = _MISSING
        for k, v in _pairs(items):
            if callback is None or callback(v, k):
                found = v
        return value_of(default) if found is _MISSING else found

    @staticmethod
    def filter(items: Items, callback: Optional[Callable[[Any, Any], bool]] = None) -> Items:
        if callback is None:
            return _rebuild(items, ((k, v) for k, v in _pairs(items) if v))
        return _rebuild(items, ((k, v) for k, v in _pairs(items) if callback(v, k)))

    @staticmethod
    def map(items: Items, callback: Callable[[Any, Any], Any]) -> Items:
        return _rebuild(items, ((k, callback(v, k)) for k, v in _pairs(items)))

    @staticmethod
    def each(items: Items, callback: Callable[[Any, Any], Any]) -> None:
        for k, v in _pairs(items):
            callback(v, k)
