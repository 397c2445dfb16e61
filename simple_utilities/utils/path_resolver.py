from __future__ import annotations

from typing import Any, Dict, Iterator, List, Tuple

WILDCARD = "*"

_MISSING = object()


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple))


def _items(value: Any) -> Iterator[Tuple[str, Any]]:
    if isinstance(value, dict):
        for key, item in value.items():
            yield str(key), item
    else:
        for idx, item in enumerate(value):
            yield str(idx), item


def _lookup(current: Any, segment: str) -> Any:
    """Single-segment lookup. Digit segments index lists, dicts try the str key then the int key."""
    if isinstance(current, dict):
        if segment in current:
            return current[segment]
        if segment.lstrip("-").isdigit() and int(segment) in current:
            return current[int(segment)]
        return _MISSING
    if isinstance(current, (list, tuple)):
        if segment.isdigit() and int(segment) < len(current):
            return current[int(segment)]
        return _MISSING
    if callable(getattr(current, "all", None)):
        # Collection
        return _lookup(current.all(), segment)
    if current is not None and not isinstance(current, (str, bytes, int, float)) and hasattr(current, segment):
        return getattr(current, segment)
    return _MISSING


def get_nested_value(data: Any, path: str, default: Any = None) -> Any:
    """
    Get a value using dot notation.

    A missing segment yields `default`.
    """
    current = data
    for segment in path.split("."):
        current = _lookup(current, segment)
        if current is _MISSING:
            return default
    return current


def has_nested_value(data: Any, path: str) -> bool:
    current = data
    for segment in path.split("."):
        current = _lookup(current, segment)
        if current is _MISSING:
            return False
    return True


def resolve_field_values(data: Any, path: str) -> Dict[str, Any]:
    """
    Resolve a dotted field path against nested data.

    Supported syntax:
      - name
      - address.city
      - users.*.name
      - Combinations like orders.*.items.*.sku

    Returns an ordered dict of concrete path -> value.
    Without a wildcard the path always resolves (missing -> None).
    A wildcard over something that is not a dict/list contributes nothing.
    """
    if WILDCARD not in path.split("."):
        return {path: get_nested_value(data, path)}

    results: Dict[str, Any] = {}
    _resolve(data, path.split("."), [], results)
    return results


def _resolve(current: Any, segments: List[str], prefix: List[str], results: Dict[str, Any]) -> None:
    if WILDCARD not in segments:
        rest = ".".join(segments)
        results[".".join(prefix + segments)] = get_nested_value(current, rest)
        return

    idx = segments.index(WILDCARD)
    base, rest = segments[:idx], segments[idx + 1:]

    collection = current
    for segment in base:
        collection = _lookup(collection, segment)
        if collection is _MISSING:
            return

    if not _is_container(collection):
        return

    for key, item in _items(collection):
        loc = prefix + base + [key]
        if rest:
            _resolve(item, rest, loc, results)
        else:
            results[".".join(loc)] = item
