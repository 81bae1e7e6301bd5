"""
Shape registry service: builds records and keeps them for later lookup.
"""

from typing import List, Optional, Type, TypeVar

from shape_registry.domain.interfaces.base import DomainService, ILogger
from shape_registry.domain.models.configuration import RegistryConfiguration
from shape_registry.domain.models.entities import (
    Customer, Person, Rectangle, describe as describe_entity, oldest, set_age as set_customer_age
)

E = TypeVar('E')


class ShapeRegistry(DomainService):
    """Holds the rectangles, people and customers created through it.

    ``describe`` and ``customer_from_person`` read ``null_display`` and
    ``default_customer_age`` from the configuration in effect at call time.
    """

    component = 'shape_registry'

    def __init__(self, logger: ILogger, config: Optional[RegistryConfiguration] = None):
        super().__init__(logger, config or RegistryConfiguration())
        self._entities: List[object] = []

    def __len__(self) -> int:
        return len(self._entities)

    # ================================================================
    # Construction
    # ================================================================

    def make_rectangle(self, width: int, height: int) -> Rectangle:
        """Create and record a rectangle."""
        rectangle = Rectangle(width=width, height=height)
        self._record(rectangle)
        return rectangle

    def make_person(self, name: str, age: Optional[int] = None) -> Person:
        """Create and record a person."""
        person = Person(name=name, age=age)
        self._record(person)
        return person

    def make_customer(self, first_name: str, last_name: str, age: int) -> Customer:
        """Create and record a customer."""
        customer = Customer(first_name=first_name, last_name=last_name, age=age)
        self._record(customer)
        return customer

    def customer_from_person(self, person: Person) -> Customer:
        """Create and record a customer derived from a person."""
        customer = Customer.from_person(person, default_age=self.config.default_customer_age)
        self._record(customer)
        return customer

    def set_age(self, customer: Customer, new_age: int) -> None:
        """Overwrite a customer's age."""
        old_age = customer.age
        set_customer_age(customer, new_age)
        self.logger.debug(
            "Customer age updated",
            component=self.component,
            customer=customer,
            old_age=old_age,
            new_age=new_age
        )

    def describe(self, entity: object) -> str:
        """Structural string form of any record."""
        return describe_entity(entity, null_display=self.config.null_display)

    # ================================================================
    # Queries
    # ================================================================

    def entities(self) -> List[object]:
        """All recorded entities in creation order."""
        return list(self._entities)

    def rectangles(self) -> List[Rectangle]:
        return self._of_type(Rectangle)

    def people(self) -> List[Person]:
        return self._of_type(Person)

    def customers(self) -> List[Customer]:
        return self._of_type(Customer)

    def find_person(self, name: str) -> Optional[Person]:
        """First recorded person with this name, or None."""
        return next((p for p in self.people() if p.name == name), None)

    def find_customer(self, first_name: str, last_name: str) -> Optional[Customer]:
        """First recorded customer with these names, or None."""
        return next(
            (c for c in self.customers()
             if c.first_name == first_name and c.last_name == last_name),
            None
        )

    def oldest_person(self) -> Optional[Person]:
        return oldest(self.people())

    def clear(self) -> None:
        """Forget every recorded entity."""
        count = len(self._entities)
        self._entities.clear()
        self.logger.info(f"Registry cleared ({count} entities)", component=self.component)

    def _of_type(self, entity_type: Type[E]) -> List[E]:
        return [e for e in self._entities if isinstance(e, entity_type)]

    def _record(self, entity: object) -> None:
        self._entities.append(entity)
        self.logger.debug(
            f"{type(entity).__name__} created",
            component=self.component,
            entity=entity
        )
