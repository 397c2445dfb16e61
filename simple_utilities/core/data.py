from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union, get_args

from pydantic import BaseModel, ConfigDict, ValidationError

from simple_utilities.exceptions.data_exceptions import (
    DataException,
    ImmutableAttributeException,
    InvalidAttributeTypeException,
    MissingAttributeException,
)
from simple_utilities.utils.serialisation import serialise


@dataclass(frozen=True)
class Built:
    instance: "Data"


@dataclass(frozen=True)
class MissingAttribute:
    name: str


@dataclass(frozen=True)
class TypeMismatch:
    name: str
    message: str


DataResult = Union[Built, MissingAttribute, TypeMismatch]


def _allows_none(annotation: Any) -> bool:
    if annotation is None or annotation is type(None):
        return True
    return type(None) in get_args(annotation)


class Data(BaseModel):
    """
    Base class for typed data transfer objects.

        class AddressData(Data):
            street: str
            city: str

        class CustomerData(Data):
            name: str
            address: AddressData
            tags: Collection | None = None

        CustomerData.from_dict({"name": "Jane", "address": {"street": "Elm", "city": "Springfield"}})

    Primitive values are coerced (`"30"` -> `30`), enums are built from their
    values and nested `Data` fields from dicts. Optional fields default to None.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    @classmethod
    def build(cls, attributes: Mapping[str, Any]) -> DataResult:
        """Build an instance, reporting the first problem as a result instead of raising."""
        values = dict(attributes)
        for name, field in cls.model_fields.items():
            if name not in values and field.is_required() and _allows_none(field.annotation):
                values[name] = None

        try:
            return Built(cls.model_validate(values))
        except ValidationError as exc:
            error = exc.errors()[0]
            name = ".".join(str(part) for part in error["loc"]) or cls.__name__
            if error["type"] == "missing":
                return MissingAttribute(name)
            return TypeMismatch(name, error["msg"])

    @classmethod
    def from_dict(cls, attributes: Mapping[str, Any]):
        """
        Raises:
            MissingAttributeException: A required field is absent.
            InvalidAttributeTypeException: A value could not be cast to its field type.
        """
        result = cls.build(attributes)
        if isinstance(result, MissingAttribute):
            raise MissingAttributeException(result.name, cls.__name__)
        if isinstance(result, TypeMismatch):
            raise InvalidAttributeTypeException(result.name, cls.__name__, result.message)
        return result.instance

    from_ = from_dict

    @classmethod
    def from_json(cls, payload: Union[str, bytes]):
        return cls.from_dict(json.loads(payload))

    def to_dict(self) -> Dict[str, Any]:
        return {name: serialise(getattr(self, name)) for name in type(self).model_fields}

    to_array = to_dict

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    def __contains__(self, key: object) -> bool:
        return key in type(self).model_fields

    def __getitem__(self, key: str) -> Any:
        if key not in self:
            return None
        return getattr(self, key)

    def __setitem__(self, key: str, value: Any) -> None:
        if key not in self:
            raise DataException(f"Cannot set non-existent property '{key}' in {self.__class__.__name__}.")
        setattr(self, key, value)

    def __delitem__(self, key: str) -> None:
        raise ImmutableAttributeException(key, self.__class__.__name__)
