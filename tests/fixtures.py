"""Classes exercised by the object manager tests."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Annotated, Any, Protocol

from objectmanager import ObjectManager, ParameterAttribute


class Simple:
    pass


class Complex:
    pass


class PersonInterface(ABC):
    @abstractmethod
    def name(self) -> str: ...


class CarInterface(ABC):
    @abstractmethod
    def get_chauffeur(self) -> PersonInterface: ...


class Car(CarInterface):
    def __init__(self, chauffeur: PersonInterface) -> None:
        self.chauffeur = chauffeur

    def get_chauffeur(self) -> PersonInterface:
        return self.chauffeur


class Toyota(Car):
    pass


class Mazda(Car):
    pass


class Bob(PersonInterface):
    def name(self) -> str:
        return "Bob"


class Alice(PersonInterface):
    def name(self) -> str:
        return "Alice"


class Garage:
    def __init__(self, car: CarInterface) -> None:
        self.car = car


class Greeter(Protocol):
    def greet(self) -> str: ...


class EnglishGreeter:
    def greet(self) -> str:
        return "Hello"


class Reception:
    def __init__(self, greeter: Greeter) -> None:
        self.greeter = greeter


class Settings:
    def __init__(self, retries: int, label: str = "default") -> None:
        self.retries = retries
        self.label = label


class Nobody(PersonInterface):
    def name(self) -> str:
        return ""


NOBODY = Nobody()


class Hitchhiker:
    def __init__(self, driver: PersonInterface = NOBODY) -> None:
        self.driver = driver


class Passenger:
    def __init__(self, driver: PersonInterface | None = None) -> None:
        self.driver = driver


class Tourist:
    def __init__(self, guide: PersonInterface | Simple) -> None:
        self.guide = guide


class Point:
    def __init__(self, x: int, /, y: int = 0) -> None:
        self.x = x
        self.y = y


class Options:
    def __init__(self, simple: Simple, **options: Any) -> None:
        self.simple = simple
        self.options = options


class Chicken:
    def __init__(self, egg: Egg) -> None:
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken) -> None:
        self.chicken = chicken


class Nest:
    def __init__(self, egg: Egg | None = None) -> None:
        self.egg = egg


class Workshop:
    def __init__(self, manager: ObjectManager) -> None:
        self.manager = manager


class Dealership:
    def __init__(self, garage: Garage) -> None:
        self.garage = garage


class Calculator:
    @staticmethod
    def add(first: int, second: int, simple: Simple) -> tuple[int, Simple]:
        return first + second, simple

    @classmethod
    def garage(cls, car: CarInterface) -> tuple[type[Calculator], CarInterface]:
        return cls, car


class Double(ParameterAttribute):
    def __init__(self, name: str | None = None) -> None:
        if name is not None:
            self.name = name

    def get_value(self) -> str:
        return f"{self.name}{self.name}"


class FromEnvironment(ParameterAttribute):
    def __init__(self, variable: str | None = None) -> None:
        self.variable = variable

    def _key(self) -> str:
        return self.variable or str(self.name).upper()

    def has_value(self) -> bool:
        return self._key() in os.environ

    def get_value(self) -> str:
        return os.environ[self._key()]


class ChauffeurName(ParameterAttribute):
    def __init__(self, person: PersonInterface) -> None:
        self.person = person

    def get_value(self) -> str:
        return self.person.name()


class SpareToyota(ParameterAttribute):
    def get_value(self) -> Toyota:
        return Toyota(Alice())


class WakaWaka:
    def __init__(self, eh: Annotated[Any, Double]) -> None:
        self.eh = eh

    def get(self) -> Any:
        return self.eh

    def zangalewa(self, eh: Annotated[Any, Double]) -> Any:
        return eh


class Service:
    def __init__(
        self,
        host: Annotated[
            str,
            FromEnvironment.declare(variable="OBJECTMANAGER_TEST_HOST"),
        ] = "localhost",
    ) -> None:
        self.host = host


class Fleet:
    def __init__(self, car: Annotated[CarInterface, SpareToyota]) -> None:
        self.car = car


class NotAnAttribute:
    pass
