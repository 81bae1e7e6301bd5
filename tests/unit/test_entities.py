"""
Unit tests for domain entities.
"""

import random
import pytest
from dataclasses import FrozenInstanceError

from shape_registry.domain.interfaces.base import Describable
from shape_registry.domain.models.entities import (
    Rectangle, Person, Customer, Student, Box, Color,
    describe, set_age, oldest, INT32_MIN, INT32_MAX
)


class TestRectangle:
    """Test Rectangle value object."""

    def test_square_rectangle(self):
        """Test equal sides make a square."""
        assert Rectangle(5, 5).is_square is True

    def test_non_square_rectangle(self):
        """Test different sides are not a square."""
        assert Rectangle(3, 5).is_square is False

    @pytest.mark.parametrize("width,height", [(0, 0), (-2, -2), (-2, 2), (7, 1), (10 ** 12, 10 ** 12)])
    def test_is_square_matches_equal_sides(self, width, height):
        """Test is_square is exactly width == height, without validation."""
        assert Rectangle(width, height).is_square == (width == height)

    def test_is_square_is_not_a_field(self):
        """Test is_square is derived and not stored."""
        assert 'is_square' not in describe(Rectangle(1, 1))

    def test_rectangle_is_immutable(self):
        """Test rectangle fields cannot be reassigned."""
        rectangle = Rectangle(1, 2)

        with pytest.raises(FrozenInstanceError):
            rectangle.width = 3

    def test_rectangle_equality_and_hash(self):
        """Test rectangles with the same fields are equal."""
        assert Rectangle(2, 3) == Rectangle(2, 3)
        assert Rectangle(2, 3) != Rectangle(3, 2)
        assert len({Rectangle(2, 3), Rectangle(2, 3)}) == 1

    def test_random_rectangle_uses_32_bit_range(self):
        """Test random rectangles stay within 32-bit integers."""
        rectangle = Rectangle.random(random.Random(42))

        assert INT32_MIN <= rectangle.width <= INT32_MAX
        assert INT32_MIN <= rectangle.height <= INT32_MAX

    def test_random_rectangle_is_reproducible_with_seed(self):
        """Test seeded generators give the same rectangle."""
        assert Rectangle.random(random.Random(7)) == Rectangle.random(random.Random(7))


class TestPerson:
    """Test Person value object."""

    def test_person_without_age(self):
        """Test age defaults to absent."""
        person = Person("alice")

        assert person.name == "alice"
        assert person.age is None

    def test_person_with_age(self):
        """Test creating person with age."""
        assert Person("zhenglai", age=12).age == 12

    def test_person_is_immutable(self):
        """Test person fields cannot be reassigned."""
        with pytest.raises(FrozenInstanceError):
            Person("alice").age = 3

    def test_person_str_is_structural(self):
        """Test str() renders fields with absent age as null."""
        assert str(Person("alice")) == "Person(name=alice, age=null)"


class TestCustomer:
    """Test Customer entity."""

    def test_customer_creation(self):
        """Test creating a customer."""
        customer = Customer("Jane", "Doe", 30)

        assert customer.first_name == "Jane"
        assert customer.last_name == "Doe"
        assert customer.age == 30

    def test_age_can_be_reassigned(self):
        """Test age is mutable."""
        customer = Customer("Jane", "Doe", 30)
        customer.age = 31

        assert customer.age == 31

    def test_names_are_fixed(self):
        """Test names cannot change after construction."""
        customer = Customer("Jane", "Doe", 30)

        with pytest.raises(AttributeError, match="Cannot reassign 'first_name'"):
            customer.first_name = "John"

        with pytest.raises(AttributeError, match="Cannot reassign 'last_name'"):
            customer.last_name = "Smith"

        assert describe(customer) == "Customer(first_name=Jane, last_name=Doe, age=30)"

    def test_customer_equality(self):
        """Test customers compare by field contents."""
        assert Customer("Jane", "Doe", 30) == Customer("Jane", "Doe", 30)
        assert Customer("Jane", "Doe", 30) != Customer("Jane", "Doe", 31)

    def test_from_person_splits_name(self):
        """Test creating a customer from a person."""
        customer = Customer.from_person(Person("Ada King Lovelace", age=36))

        assert customer.first_name == "Ada"
        assert customer.last_name == "King Lovelace"
        assert customer.age == 36

    def test_from_person_without_age_uses_default(self):
        """Test absent age falls back to the default."""
        assert Customer.from_person(Person("Plato")).age == 12
        assert Customer.from_person(Person("Plato"), default_age=80).age == 80
        assert Customer.from_person(Person("Plato")).last_name == ""


class TestStudent:
    """Test Student entity."""

    def test_is_old_reads_is_married(self):
        """Test is_old follows is_married."""
        assert Student("bob", True).is_old is True
        assert Student("bob", False).is_old is False

    def test_setting_is_old_writes_is_married(self):
        """Test is_old setter writes through."""
        student = Student("bob", False)
        student.is_old = True

        assert student.is_married is True
        assert describe(student) == "Student(name=bob, is_married=True)"


class TestBox:
    """Test Box generic holder."""

    def test_box_holds_value(self):
        """Test boxes hold and replace values."""
        box = Box(1)
        box.value = 2

        assert box.value == 2

    def test_box_describes_nested_record(self):
        """Test nested records are described recursively."""
        assert describe(Box(Rectangle(1, 2))) == "Box(value=Rectangle(width=1, height=2))"


class TestColor:
    """Test Color enum."""

    def test_red_components(self):
        """Test RGB components."""
        assert (Color.RED.r, Color.RED.g, Color.RED.b) == (255, 0, 0)

    def test_color_in_record_renders_name(self):
        """Test enum values render by name."""
        assert describe(Box(Color.RED)) == "Box(value=RED)"


class TestDescribe:
    """Test describe function."""

    def test_customer_names_appear_verbatim(self):
        """Test names with quotes and escapes are not mangled."""
        first, last = "O'Brien \"Jr\"", "back\\slash\nnewline"
        text = describe(Customer(first, last, 1))

        assert first in text
        assert last in text

    def test_custom_null_display(self):
        """Test absent values use the given placeholder."""
        assert describe(Person("x"), null_display="-") == "Person(name=x, age=-)"

    def test_non_record_falls_back_to_str(self):
        """Test plain values are rendered with str()."""
        assert describe(42) == "42"
        assert describe(Rectangle) == str(Rectangle)

    def test_self_referencing_box_terminates(self):
        """Test a record that contains itself renders the inner one elided."""
        box = Box(None)
        box.value = box

        assert describe(box) == "Box(value=Box(...))"
        assert str(box) == "Box(value=Box(...))"

    def test_nested_records_render_fully(self):
        """Test records nested inside records are expanded, not elided."""
        assert describe(Box(Box(Person("x")))) == "Box(value=Box(value=Person(name=x, age=null)))"

    def test_str_uses_default_null_display(self):
        """Test str() ignores custom placeholders while describe() honours them."""
        person = Person("x")

        assert str(person) == "Person(name=x, age=null)"
        assert person.describe("-") == describe(person, "-") == "Person(name=x, age=-)"

    def test_records_are_describable(self):
        """Test records satisfy the Describable protocol."""
        rectangle = Rectangle(2, 2)

        assert isinstance(rectangle, Describable)
        assert rectangle.describe() == "Rectangle(width=2, height=2)"


class TestSetAge:
    """Test set_age function."""

    @pytest.mark.parametrize("new_age", [31, 0, -5, 200])
    def test_set_age_overwrites(self, new_age):
        """Test any age is stored without bounds checking."""
        customer = Customer("Jane", "Doe", 30)
        set_age(customer, new_age)

        assert customer.age == new_age


class TestOldest:
    """Test oldest function."""

    def test_oldest_empty(self):
        """Test no people gives None."""
        assert oldest([]) is None

    def test_oldest_treats_missing_age_as_zero(self):
        """Test unknown ages rank as zero."""
        people = [Person("alice"), Person("zhenglai", age=12)]

        assert oldest(people) == Person("zhenglai", age=12)

    def test_oldest_first_wins_on_tie(self):
        """Test the first of equally old people is returned."""
        people = [Person("a"), Person("b", age=0), Person("c")]

        assert oldest(people).name == "a"
