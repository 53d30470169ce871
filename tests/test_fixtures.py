"""Tests for the object randomizer and objekt() fixture factories."""

import enum
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Literal, NamedTuple, Optional

import pytest
from pydantic import BaseModel

from objekt.config import FixtureDefaults, ObjektSettings, configure
from objekt.core.errors import InvalidRange, UnsupportedDomain
from objekt.core.models.pool import between, one_of, unique
from objekt.fixtures import ObjectRandomizer, RandomizerParameters, objekt
from objekt.randoms import random_uuid


class Color(enum.Enum):
    RED = "red"
    GREEN = "green"


@dataclass
class User:
    id: str
    name: str
    age: int
    email: str


@dataclass
class Address:
    street: str
    zip_code: int


@dataclass
class Customer:
    user: User
    addresses: list[Address]
    tags: set[str]
    scores: dict[str, float]
    nickname: Optional[str]
    color: Color
    tier: Literal["gold", "silver"]
    joined: date
    last_seen: datetime
    wake_up: time
    balance: Decimal
    token: uuid.UUID
    active: bool
    created: str = field(default="now", init=False)


@dataclass
class Node:
    value: int
    child: Optional["Node"]


class Point(NamedTuple):
    x: int
    y: int


class Order(BaseModel):
    order_id: str
    quantity: int
    lines: list[str]
    coords: tuple[int, int]


class Opaque:
    pass


@dataclass
class HasOpaque:
    thing: Opaque


@pytest.fixture
def params():
    return RandomizerParameters(seed=11)


@pytest.fixture
def randomizer(params):
    return ObjectRandomizer(params)


class TestRandomizerParameters:
    """Tests for randomizer options."""

    def test_defaults(self):
        """Default parameters match the documented values."""
        p = RandomizerParameters()
        assert p.collection_size_range == (1, 5)
        assert p.string_length_range == (5, 20)
        assert p.randomization_depth == 3
        assert p.overrides == {int: between(0, 100)}

    def test_inverted_range_rejected(self):
        """min > max is rejected."""
        with pytest.raises(InvalidRange):
            RandomizerParameters(collection_size_range=(5, 1))

    def test_negative_range_rejected(self):
        """Negative bounds are rejected."""
        with pytest.raises(InvalidRange):
            RandomizerParameters(string_length_range=(-1, 3))

    def test_from_settings(self):
        """Parameters are read from the global settings."""
        configure(
            ObjektSettings(
                seed=3,
                fixtures=FixtureDefaults(
                    collection_size_min=2,
                    collection_size_max=2,
                    randomization_depth=1,
                ),
            )
        )
        p = RandomizerParameters.from_settings()
        assert p.seed == 3
        assert p.collection_size_range == (2, 2)
        assert p.string_length_range == (5, 20)
        assert p.randomization_depth == 1


class TestObjectRandomizer:
    """Tests for populating annotated classes."""

    def test_flat_dataclass(self, randomizer):
        """A flat dataclass gets values in the default ranges."""
        user = randomizer.next_object(User)
        assert isinstance(user, User)
        assert 5 <= len(user.name) <= 20
        assert 0 <= user.age <= 100

    def test_overrides(self, randomizer):
        """Keyword overrides replace generated values."""
        user = randomizer.next_object(User, age=25, name="Alice")
        assert user.age == 25
        assert user.name == "Alice"

    def test_unknown_override(self, randomizer):
        """A misspelt field override is rejected."""
        with pytest.raises(TypeError, match="Unknown field"):
            randomizer.next_object(User, nmae="Alice")

    def test_nested_and_containers(self, randomizer):
        """Nested records, containers and scalar types are all populated."""
        customer = randomizer.next_object(Customer)
        assert isinstance(customer.user, User)
        assert 1 <= len(customer.addresses) <= 5
        assert all(isinstance(a, Address) for a in customer.addresses)
        assert isinstance(customer.tags, set)
        assert all(isinstance(v, float) for v in customer.scores.values())
        assert customer.nickname is None or isinstance(customer.nickname, str)
        assert isinstance(customer.color, Color)
        assert customer.tier in ("gold", "silver")
        assert isinstance(customer.joined, date)
        assert isinstance(customer.last_seen, datetime)
        assert isinstance(customer.wake_up, time)
        assert isinstance(customer.balance, Decimal)
        assert isinstance(customer.token, uuid.UUID)
        assert isinstance(customer.active, bool)
        assert customer.created == "now"

    def test_depth_limit(self):
        """Recursion stops at randomization_depth."""
        randomizer = ObjectRandomizer(
            RandomizerParameters(seed=1, randomization_depth=2)
        )
        node = randomizer.next_object(Node)
        depth = 0
        while node is not None:
            depth += 1
            node = node.child
        assert depth <= 3

    def test_depth_zero_leaves_nested_empty(self):
        """Depth 0 leaves nested and optional records as None."""
        randomizer = ObjectRandomizer(
            RandomizerParameters(seed=1, randomization_depth=0)
        )
        customer = randomizer.next_object(Customer)
        assert customer.user is None
        assert customer.nickname is None

    def test_named_tuple(self, randomizer):
        """NamedTuples are populated from their annotations."""
        point = randomizer.next_object(Point)
        assert isinstance(point, Point)
        assert 0 <= point.x <= 100

    def test_pydantic_model(self, randomizer):
        """Pydantic models are populated from their fields."""
        order = randomizer.next_object(Order)
        assert isinstance(order, Order)
        assert isinstance(order.order_id, str)
        assert 1 <= len(order.lines) <= 5
        assert len(order.coords) == 2

    def test_type_overrides(self):
        """Per-type override pools win over defaults."""
        params = RandomizerParameters(
            seed=2,
            overrides={int: unique(7), str: one_of("a", "b")},
        )
        user = ObjectRandomizer(params).next_object(User)
        assert user.age == 7
        assert user.name in ("a", "b")

    def test_collection_size(self):
        """Collection sizes follow collection_size_range."""
        params = RandomizerParameters(seed=2, collection_size_range=(3, 3))
        order = ObjectRandomizer(params).next_object(Order)
        assert len(order.lines) == 3

    def test_unsupported_field(self, randomizer):
        """An unsupported field type raises UnsupportedDomain."""
        with pytest.raises(UnsupportedDomain):
            randomizer.next_object(HasOpaque)

    def test_not_a_record(self, randomizer):
        """Classes without fields are rejected."""
        with pytest.raises(UnsupportedDomain):
            randomizer.next_object(Opaque)

    def test_next_value(self, randomizer):
        """next_value generates bare type hints."""
        values = randomizer.next_value(list[int])
        assert all(0 <= v <= 100 for v in values)
        assert isinstance(randomizer.next_value(frozenset[str]), frozenset)
        assert isinstance(randomizer.next_value(bytes), bytes)

    def test_seeded_reproducible(self):
        """Equal seeds give equal objects."""
        a = ObjectRandomizer(RandomizerParameters(seed=5)).next_object(User)
        b = ObjectRandomizer(RandomizerParameters(seed=5)).next_object(User)
        assert a == b


class TestObjektFactory:
    """Tests for objekt() fixture factories."""

    def test_defaults_and_overrides(self, params):
        """Factory defaults apply and call-time values override them."""
        a_user = objekt(User, params, age=25)
        assert a_user().age == 25
        assert a_user(name="Alice").name == "Alice"
        assert a_user(name="Alice").age == 25

    def test_fresh_instances(self, params):
        """Each call builds a new instance."""
        a_user = objekt(User, params)
        assert a_user() is not a_user()

    def test_callable_defaults_called_per_instance(self, params):
        """Callable defaults are evaluated on every call."""
        a_user = objekt(User, params, id=random_uuid)
        first, second = a_user(), a_user()
        assert uuid.UUID(first.id).version == 4
        assert first.id != second.id

    def test_parameters_from_settings(self):
        """A factory without parameters uses the global settings."""
        configure(ObjektSettings(seed=4))
        a_user = objekt(User)
        assert isinstance(a_user(), User)
