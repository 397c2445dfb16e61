from enum import Enum
from typing import Optional

import pytest

from simple_utilities import Collection, Data
from simple_utilities.core.data import Built, MissingAttribute, TypeMismatch
from simple_utilities.exceptions import (
    DataException,
    ImmutableAttributeException,
    InvalidAttributeTypeException,
    MissingAttributeException,
)


class Status(Enum):
    ACTIVE = "active"
    BLOCKED = "blocked"


class AddressData(Data):
    street: str
    city: str


class CustomerData(Data):
    name: str
    age: int
    status: Status
    address: AddressData
    nickname: Optional[str]
    tags: Optional[Collection] = None


def customer_payload(**overrides):
    payload = {
        "name": "Jane",
        "age": "30",
        "status": "active",
        "address": {"street": "Elm", "city": "Springfield"},
    }
    payload.update(overrides)
    return payload


def test_from_dict_casts_values():
    customer = CustomerData.from_dict(customer_payload())

    assert customer.age == 30
    assert customer.status is Status.ACTIVE
    assert isinstance(customer.address, AddressData)
    assert customer.address.city == "Springfield"
    assert customer.nickname is None
    assert customer.tags is None


def test_from_alias_and_collection_field():
    customer = CustomerData.from_(customer_payload(tags=Collection(["vip"])))

    assert customer.tags.all() == ["vip"]


def test_collection_field_built_from_list():
    customer = CustomerData.from_dict(customer_payload(tags=["vip", "new"]))

    assert isinstance(customer.tags, Collection)
    assert customer.tags.count() == 2


def test_collection_field_rejects_scalar():
    assert isinstance(CustomerData.build(customer_payload(tags=5)), TypeMismatch)


def test_build_reports_missing_attribute():
    payload = customer_payload()
    del payload["name"]

    assert CustomerData.build(payload) == MissingAttribute("name")


def test_build_reports_type_mismatch():
    result = CustomerData.build(customer_payload(age="thirty"))

    assert isinstance(result, TypeMismatch)
    assert result.name == "age"


def test_build_returns_instance():
    result = CustomerData.build(customer_payload())

    assert isinstance(result, Built)
    assert result.instance.name == "Jane"


def test_from_dict_raises_for_missing_and_invalid():
    with pytest.raises(MissingAttributeException) as exc_info:
        CustomerData.from_dict({"name": "Jane"})
    assert exc_info.value.attribute == "age"

    with pytest.raises(InvalidAttributeTypeException):
        CustomerData.from_dict(customer_payload(status="unknown"))


def test_nested_missing_attribute_uses_dotted_name():
    result = CustomerData.build(customer_payload(address={"street": "Elm"}))

    assert result == MissingAttribute("address.city")


def test_to_dict_and_json():
    customer = CustomerData.from_dict(customer_payload(tags=Collection(["vip"])))

    assert customer.to_dict() == {
        "name": "Jane",
        "age": 30,
        "status": "active",
        "address": {"street": "Elm", "city": "Springfield"},
        "nickname": None,
        "tags": ["vip"],
    }
    assert CustomerData.from_json(customer.to_json()).to_dict()["tags"] == ["vip"]


def test_mapping_access():
    customer = CustomerData.from_dict(customer_payload())

    assert "name" in customer
    assert "unknown" not in customer
    assert customer["name"] == "Jane"
    assert customer["unknown"] is None

    customer["age"] = "41"
    assert customer.age == 41


def test_setting_unknown_key_raises():
    customer = CustomerData.from_dict(customer_payload())

    with pytest.raises(DataException):
        customer["unknown"] = 1


def test_deleting_key_raises():
    customer = CustomerData.from_dict(customer_payload())

    with pytest.raises(ImmutableAttributeException):
        del customer["name"]
