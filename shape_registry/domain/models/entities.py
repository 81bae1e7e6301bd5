"""
Domain entities for the shape registry.
"""

from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from typing import Any, Generic, Iterable, Optional, Set, TypeVar
import random as _random

from shape_registry.domain.interfaces.base import ValueObject

T = TypeVar('T')

NULL_DISPLAY = "null"
INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


def describe(entity: Any, null_display: str = NULL_DISPLAY) -> str:
    """Render an entity as ``TypeName(field=value, ...)``.

    Fields follow declaration order. Values are rendered with ``str()``,
    nested records recursively, and absent values as ``null_display``.
    Strings are never quoted or escaped. A record reached again while it
    is still being rendered shows as ``TypeName(...)``.
    """
    return _describe(entity, null_display, set())


def _describe(entity: Any, null_display: str, active: Set[int]) -> str:
    if not is_dataclass(entity) or isinstance(entity, type):
        return str(entity)

    name = type(entity).__name__
    if id(entity) in active:
        return f"{name}(...)"

    active.add(id(entity))
    try:
        parts = [
            f"{f.name}={_render(getattr(entity, f.name), null_display, active)}"
            for f in fields(entity)
        ]
    finally:
        active.discard(id(entity))
    return f"{name}({', '.join(parts)})"


def _render(value: Any, null_display: str, active: Set[int]) -> str:
    if value is None:
        return null_display
    if is_dataclass(value) and not isinstance(value, type):
        return _describe(value, null_display, active)
    if isinstance(value, Enum):
        return value.name
    return str(value)


class StructuralStr:
    """Mixin giving records their structural string form.

    ``str()`` always uses the default ``null`` placeholder; render through
    ``ShapeRegistry.describe`` to honour a configured ``null_display``.
    """

    def describe(self, null_display: str = NULL_DISPLAY) -> str:
        return describe(self, null_display)

    def __str__(self) -> str:
        return describe(self)


class Color(Enum):
    """Named colors with their RGB components."""
    RED = (255, 0, 0)

    def __init__(self, r: int, g: int, b: int):
        self.r = r
        self.g = g
        self.b = b


@dataclass(frozen=True)
class Rectangle(StructuralStr, ValueObject):
    """Immutable rectangle. Dimensions are not validated."""

    width: int
    height: int

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    @classmethod
    def random(cls, rng: Optional[_random.Random] = None) -> 'Rectangle':
        """Create a rectangle with arbitrary 32-bit integer dimensions."""
        rng = rng or _random.Random()
        return cls(
            width=rng.randint(INT32_MIN, INT32_MAX),
            height=rng.randint(INT32_MIN, INT32_MAX)
        )


@dataclass(frozen=True)
class Person(StructuralStr, ValueObject):
    """Immutable person whose age may be unknown."""

    name: str
    age: Optional[int] = None


@dataclass
class Customer(StructuralStr):
    """Customer record. Names are fixed at construction, age is not."""

    _FIXED_FIELDS = ('first_name', 'last_name')

    first_name: str
    last_name: str
    age: int

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self._FIXED_FIELDS and name in self.__dict__:
            raise AttributeError(f"Cannot reassign '{name}' after construction")
        super().__setattr__(name, value)

    @classmethod
    def from_person(cls, person: Person, default_age: int = 12) -> 'Customer':
        """Create a customer from a person, splitting the name on its first space."""
        first_name, _, last_name = person.name.partition(" ")
        age = person.age if person.age is not None else default_age
        return cls(first_name=first_name, last_name=last_name, age=age)


@dataclass
class Student(StructuralStr):
    """Student whose ``is_old`` flag is backed by ``is_married``."""

    name: str
    is_married: bool

    @property
    def is_old(self) -> bool:
        return self.is_married

    @is_old.setter
    def is_old(self, value: bool) -> None:
        self.is_married = value


@dataclass
class Box(StructuralStr, Generic[T]):
    """Mutable holder for a single value."""

    value: T


def set_age(customer: Customer, new_age: int) -> None:
    """Overwrite the customer's age. No bounds checking."""
    customer.age = new_age


def oldest(people: Iterable[Person]) -> Optional[Person]:
    """Return the oldest person, counting an unknown age as 0.

    The first person wins on ties. Returns None for no people.
    """
    return max(people, key=lambda p: p.age if p.age is not None else 0, default=None)
