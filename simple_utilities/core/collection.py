from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Union

from pydantic_core import core_schema

from simple_utilities.core.arr import Arr, value_of
from simple_utilities.exceptions.common_exceptions import CollectionTypeException
from simple_utilities.utils.serialisation import serialise

_MISSING = object()

_TYPE_NAMES: Dict[str, type] = {
    "string": str,
    "str": str,
    "integer": int,
    "int": int,
    "double": float,
    "float": float,
    "boolean": bool,
    "bool": bool,
    "array": list,
    "list": list,
    "dict": dict,
    "NULL": type(None),
    "None": type(None),
}


class Collection:
    """
    Fluent wrapper around a list or a dict.

        Collection.collect([1, 2, 3]).filter(lambda v, k: v > 1).sum()   # 5

    Methods that produce new items return a new Collection; `push`, `put`,
    `transform` and item assignment mutate in place and return self.
    Callbacks receive `(value, key)` unless stated otherwise.
    """

    def __init__(self, items: Optional[Union[List[Any], Dict[Any, Any], "Collection", Iterable[Any]]] = None):
        if items is None:
            items = []
        elif isinstance(items, Collection):
            items = items.all()
        elif not isinstance(items, (list, dict)):
            items = list(items)
        self._items: Union[List[Any], Dict[Any, Any]] = items

    @classmethod
    def collect(cls, items: Optional[Union[List[Any], Dict[Any, Any], Iterable[Any]]] = None) -> "Collection":
        return cls(items)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        """Lets `Data` fields typed as Collection accept lists and dicts."""
        return core_schema.no_info_plain_validator_function(cls._coerce)

    @classmethod
    def _coerce(cls, value: Any) -> "Collection":
        if isinstance(value, cls):
            return value
        if isinstance(value, (list, tuple, dict)):
            return cls(value)
        raise ValueError(f"Cannot build a {cls.__name__} from {type(value).__name__}")

    def _pairs(self):
        return self._items.items() if isinstance(self._items, dict) else enumerate(self._items)

    def _new(self, items: Union[List[Any], Dict[Any, Any]]) -> "Collection":
        return self.__class__(items)

    def all(self) -> Union[List[Any], Dict[Any, Any]]:
        return self._items

    def each(self, callback: Callable[[Any, Any], Any]) -> "Collection":
        """Run the callback per item. Returning False stops the iteration."""
        for key, item in self._pairs():
            if callback(item, key) is False:
                break
        return self

    def count(self) -> int:
        return len(self._items)

    def push(self, item: Any) -> "Collection":
        if isinstance(self._items, dict):
            self._items[self._next_index()] = item
        else:
            self._items.append(item)
        return self

    def put(self, key: Any, value: Any) -> "Collection":
        self[key] = value
        return self

    def get(self, key: Any, default: Any = None) -> Any:
        try:
            return self._items[key]
        except (KeyError, IndexError, TypeError):
            return value_of(default)

    def first(self, callback: Optional[Callable[[Any, Any], bool]] = None, default: Any = None) -> Any:
        return Arr.first(self._items, callback, default)

    def last(self, callback: Optional[Callable[[Any, Any], bool]] = None, default: Any = None) -> Any:
        return Arr.last(self._items, callback, default)

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def is_not_empty(self) -> bool:
        return not self.is_empty()

    def values(self) -> "Collection":
        return self._new([item for _, item in self._pairs()])

    def keys(self) -> "Collection":
        return self._new([key for key, _ in self._pairs()])

    def sum(self, callback: Optional[Union[Callable[[Any], Any], str]] = None) -> Any:
        if callback is None:
            return sum(item for _, item in self._pairs())
        if isinstance(callback, str):
            key = callback
            callback = lambda item: Arr.data_get(item, key, 0)  # noqa: E731
        return self.reduce(lambda carry, item, _key: carry + callback(item), 0)

    def take(self, count: int) -> "Collection":
        """Positive counts take from the start, negative from the end."""
        pairs = list(self._pairs())
        selected = pairs[count:] if count < 0 else pairs[:count]
        return self._new(self._rebuild(selected))

    def map(self, callback: Callable[[Any, Any], Any]) -> "Collection":
        return self._new([callback(item, key) for key, item in self._pairs()])

    def filter(self, callback: Optional[Callable[[Any, Any], bool]] = None) -> "Collection":
        return self._new(Arr.filter(self._items, callback))

    def reject(self, callback: Any) -> "Collection":
        """Remove items passing the callback, or equal to the given value."""
        if callable(callback):
            return self.filter(lambda item, key: not callback(item, key))
        return self.filter(lambda item, key: item != callback)

    def where(self, key: Union[str, Callable], operator: Any = None, value: Any = _MISSING) -> "Collection":
        if value is _MISSING:
            return self._new(Arr.where(self._items, key, operator))
        return self._new(Arr.where(self._items, key, operator, value))

    def transform(self, callback: Callable[[Any], Any]) -> "Collection":
        if isinstance(self._items, dict):
            self._items = {key: callback(item) for key, item in self._items.items()}
        else:
            self._items = [callback(item) for item in self._items]
        return self

    def reduce(self, callback: Callable[[Any, Any, Any], Any], initial: Any = None) -> Any:
        carry = initial
        for key, item in self._pairs():
            carry = callback(carry, item, key)
        return carry

    def pipe(self, callback: Callable[["Collection"], Any]) -> Any:
        return callback(self)

    def pipe_through(self, callbacks: Sequence[Callable[[Any], Any]]) -> Any:
        return Collection(list(callbacks)).reduce(lambda carry, callback, _key: callback(carry), self)

    def tap(self, callback: Callable[["Collection"], Any]) -> "Collection":
        callback(self)
        return self

    def chunk(self, size: int) -> "Collection":
        """Dict chunks keep the original keys."""
        if size <= 0:
            return self._new([])
        pairs = list(self._pairs())
        return self._new([self._new(self._rebuild(pairs[i:i + size])) for i in range(0, len(pairs), size)])

    def unique(self, key: Optional[Union[str, Callable[[Any], Any]]] = None, strict: bool = False) -> "Collection":
        """
        Drop repeated items, keeping the first occurrence.

        `key` may be a dot path or a callback producing the comparison value.
        Non-strict comparison treats `1` and `"1"` as equal.
        """
        seen: List[Any] = []
        kept = []
        for item_key, item in self._pairs():
            if key is None:
                marker = item
            elif callable(key):
                marker = key(item)
            else:
                marker = Arr.data_get(item, key)

            if not strict and isinstance(marker, (int, float)) and not isinstance(marker, bool):
                marker = str(marker)
            if not strict and isinstance(marker, str):
                marker = ("loose", marker)
            elif strict:
                marker = (type(marker), marker)

            if marker in seen:
                continue
            seen.append(marker)
            kept.append((item_key, item))
        return self._new(self._rebuild(kept))

    def flatten(self, depth: float = float("inf")) -> "Collection":
        """Flatten nested lists, dicts and collections into a list."""
        return self._new(self._flatten(self._items, depth))

    def pluck(self, value: str, key: Optional[str] = None) -> "Collection":
        if key is None:
            return self._new([Arr.data_get(item, value) for _, item in self._pairs()])
        return self._new({Arr.data_get(item, key): Arr.data_get(item, value) for _, item in self._pairs()})

    def dot(self) -> "Collection":
        """Flatten nested dicts/lists into a single level with dot-notation keys."""
        return self._new(self._flatten_dot(self._items, ""))

    def merge(self, items: Union["Collection", List[Any], Dict[Any, Any]]) -> "Collection":
        """
        String keys overwrite, integer keys (and list items) are appended.
        """
        if isinstance(items, Collection):
            items = items.all()

        if isinstance(self._items, list) and isinstance(items, list):
            return self._new(self._items + items)

        merged: Dict[Any, Any] = {}
        index = 0
        for source in (self._items, items):
            pairs = source.items() if isinstance(source, dict) else enumerate(source)
            for key, item in pairs:
                if isinstance(key, int):
                    merged[index] = item
                    index += 1
                else:
                    merged[key] = item
        return self._new(merged)

    def ensure(self, types: Union[str, type, Sequence[Union[str, type]]]) -> "Collection":
        """
        Raises:
            CollectionTypeException: If any item is not one of `types`.
        """
        if isinstance(types, (str, type)):
            types = [types]
        resolved = tuple(_TYPE_NAMES.get(t, t) if isinstance(t, str) else t for t in types)
        names = [t if isinstance(t, str) else t.__name__ for t in types]

        for _, item in self._pairs():
            if not any(isinstance(item, t) for t in resolved if isinstance(t, type)):
                raise CollectionTypeException(names)
        return self

    def to_array(self) -> Union[List[Any], Dict[Any, Any]]:
        """Recursively convert nested collections and Data objects into plain values."""
        return serialise(self._items)

    to_list = to_array

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_array(), **kwargs)

    def _rebuild(self, pairs):
        if isinstance(self._items, dict):
            return dict(pairs)
        return [item for _, item in pairs]

    def _next_index(self) -> int:
        int_keys = [key for key in self._items if isinstance(key, int)]
        return max(int_keys) + 1 if int_keys else 0

    def _flatten(self, items: Any, depth: float) -> List[Any]:
        result: List[Any] = []
        values = items.values() if isinstance(items, dict) else items
        for item in values:
            if isinstance(item, Collection):
                item = item.all()
            if not isinstance(item, (list, tuple, dict)):
                result.append(item)
            elif depth == 1:
                result.extend(item.values() if isinstance(item, dict) else item)
            else:
                result.extend(self._flatten(item, depth - 1))
        return result

    def _flatten_dot(self, items: Union[List[Any], Dict[Any, Any]], prepend: str) -> Dict[str, Any]:
        results: Dict[str, Any] = {}
        pairs = items.items() if isinstance(items, dict) else enumerate(items)
        for key, item in pairs:
            if isinstance(item, (dict, list)) and item:
                results.update(self._flatten_dot(item, f"{prepend}{key}."))
            else:
                results[f"{prepend}{key}"] = item
        return results

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(item for _, item in self._pairs())

    def __contains__(self, item: Any) -> bool:
        return any(value == item for _, value in self._pairs())

    def __getitem__(self, key: Any) -> Any:
        return self.get(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        if key is None:
            self.push(value)
        elif isinstance(self._items, list) and isinstance(key, int) and 0 <= key < len(self._items):
            self._items[key] = value
        elif isinstance(self._items, list) and key == len(self._items):
            self._items.append(value)
        else:
            if isinstance(self._items, list):
                self._items = dict(enumerate(self._items))
            self._items[key] = value

    def __delitem__(self, key: Any) -> None:
        if isinstance(self._items, dict):
            self._items.pop(key, None)
        elif isinstance(key, int) and -len(self._items) <= key < len(self._items):
            del self._items[key]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Collection):
            return self._items == other.all()
        return self._items == other

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._items!r})"
