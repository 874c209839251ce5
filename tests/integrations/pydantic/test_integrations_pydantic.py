"""Tests for Pydantic model integration."""

import pydantic
import pytest
from pydantic import BaseModel, ConfigDict

from objectmanager import ObjectManager, ObjectManagerUnresolvableParameterError
from tests.fixtures import Bob, PersonInterface


class DepService:
    pass


class ModelWithDep(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    dep: DepService


class ModelWithInterface(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    person: PersonInterface
    greeting: str = "Hello"


class PlainModel(BaseModel):
    count: int = 0


class TestPydanticModelResolution:
    def test_model_fields_are_injected(self, manager: ObjectManager) -> None:
        instance = manager.new(ModelWithDep)

        assert isinstance(instance.dep, DepService)

    def test_bound_interface_field(self, manager: ObjectManager) -> None:
        manager.bind(PersonInterface, Bob)

        instance = manager.new(ModelWithInterface, greeting="Hi")

        assert instance.person.name() == "Bob"
        assert instance.greeting == "Hi"

    def test_unbound_interface_field_fails(self, manager: ObjectManager) -> None:
        with pytest.raises(ObjectManagerUnresolvableParameterError):
            manager.new(ModelWithInterface)

    def test_named_arguments_are_validated_by_pydantic(self, manager: ObjectManager) -> None:
        assert manager.new(PlainModel, count="3").count == 3

        with pytest.raises(pydantic.ValidationError):
            manager.new(PlainModel, count="many")

    def test_service_receives_model(self, manager: ObjectManager) -> None:
        model = manager.save(PlainModel(count=7))

        def count_of(plain: PlainModel) -> int:
            return plain.count

        assert manager.call(count_of) == 7
        assert manager.get(PlainModel) is model
