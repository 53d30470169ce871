"""Object randomizer: populate whole objects from their type hints.

Walks dataclasses, pydantic models and NamedTuples, generating each field
from its annotation with the sampling engine:

    @dataclass
    class User:
        id: str
        name: str
        age: int
        email: str

    a_user = objekt(User, age=25)
    a_user()                 # User(id='Xq3...', name='...', age=25, email='...')
    a_user(name="Alice")     # per-call override

Per-type overrides map a type to a Pool; by default ints are drawn from
0..100. Objects nested deeper than `randomization_depth` are left as None.
"""

import dataclasses
import enum
import logging
import types
import typing
from collections.abc import Mapping, Sequence
from collections.abc import Set as AbstractSet
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Literal, TypeVar, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .core.errors import InvalidRange, UnsupportedDomain
from .core.models.pool import Pool, between
from .randoms import ObjektRandom

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomizerParameters(BaseModel):
    """Options for ObjectRandomizer.

    Attributes:
        seed: Seed for the randomizer's generators (None = unseeded)
        collection_size_range: Inclusive (min, max) size of generated containers
        string_length_range: Inclusive (min, max) length of generated strings
        randomization_depth: Deepest nesting level that still gets populated
        overrides: Pool to draw from for specific types
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    seed: int | None = None
    collection_size_range: tuple[int, int] = (1, 5)
    string_length_range: tuple[int, int] = (5, 20)
    randomization_depth: int = Field(default=3, ge=0)
    overrides: dict[type, Pool] = Field(
        default_factory=lambda: {int: between(0, 100)}
    )

    @model_validator(mode="after")
    def check_ranges(self) -> "RandomizerParameters":
        for name in ("collection_size_range", "string_length_range"):
            low, high = getattr(self, name)
            if low < 0 or low > high:
                raise InvalidRange(
                    f"Invalid {name}: ({low}, {high}) must satisfy 0 <= min <= max"
                )
        return self

    @classmethod
    def from_settings(cls) -> "RandomizerParameters":
        """Parameters from the global objekt settings."""
        from .config import get_config

        settings = get_config()
        fixtures = settings.fixtures
        return cls(
            seed=settings.seed,
            collection_size_range=(
                fixtures.collection_size_min,
                fixtures.collection_size_max,
            ),
            string_length_range=(
                fixtures.string_length_min,
                fixtures.string_length_max,
            ),
            randomization_depth=fixtures.randomization_depth,
        )


class ObjectRandomizer:
    """Generates populated instances of annotated classes."""

    def __init__(self, parameters: RandomizerParameters | None = None) -> None:
        self.parameters = parameters or RandomizerParameters.from_settings()
        self._random = ObjektRandom(seed=self.parameters.seed)
        self._collection_size = between(*self.parameters.collection_size_range)
        self._string_length = between(*self.parameters.string_length_range)

    def next_object(self, cls: type[T], **overrides: Any) -> T:
        """Build a randomized instance of `cls`.

        Keyword overrides replace generated field values.

        Raises:
            UnsupportedDomain: If a field annotation cannot be generated
            TypeError: If an override names an unknown field
        """
        return self._build(cls, 0, overrides)

    def next_value(self, hint: Any) -> Any:
        """Generate a value for any supported type hint."""
        return self._generate(hint, 0)

    # ── Objects ──

    def _build(self, cls: type, depth: int, overrides: dict[str, Any]) -> Any:
        hints = _field_hints(cls)
        if hints is None:
            raise UnsupportedDomain(f"Cannot randomize {cls!r}: not a dataclass, model or NamedTuple")

        unknown = set(overrides) - set(hints)
        if unknown:
            raise TypeError(
                f"Unknown field(s) for {cls.__name__}: {', '.join(sorted(unknown))}"
            )

        values = {
            name: overrides[name] if name in overrides else self._generate(hint, depth + 1)
            for name, hint in hints.items()
        }
        if isinstance(cls, type) and issubclass(cls, BaseModel):
            return cls.model_construct(**values)
        return cls(**values)

    # ── Dispatch ──

    def _generate(self, hint: Any, depth: int) -> Any:
        rng = self._random.rng
        pool = self.parameters.overrides.get(hint) if isinstance(hint, type) else None
        if pool is not None:
            return pool.random(rng)

        if hint is Any:
            return self._random.string(self._string_length)
        if hint is None or hint is type(None):
            return None

        origin = typing.get_origin(hint)
        args = typing.get_args(hint)

        if origin is typing.Annotated:
            return self._generate(args[0], depth)
        if origin is Literal:
            return self._random.pick(args)
        if origin is Union or origin is types.UnionType:
            return self._generate_union(args, depth)
        if origin is not None:
            return self._generate_container(origin, args, depth)

        if not isinstance(hint, type):
            raise UnsupportedDomain(f"Cannot randomize type hint {hint!r}")
        return self._generate_type(hint, depth)

    def _generate_union(self, args: tuple, depth: int) -> Any:
        options = [arg for arg in args if arg is not type(None)]
        optional = len(options) < len(args)
        if optional and depth > self.parameters.randomization_depth:
            return None
        return self._generate(self._random.pick(options), depth)

    def _generate_container(self, origin: type, args: tuple, depth: int) -> Any:
        size = self._collection_size

        if origin is tuple:
            if not args:
                args = (str, Ellipsis)
            if len(args) == 2 and args[1] is Ellipsis:
                return tuple(
                    self._random.list_of(lambda: self._generate(args[0], depth), size)
                )
            return tuple(self._generate(arg, depth) for arg in args)

        if issubclass(origin, Mapping):
            key_hint, value_hint = args or (str, str)
            return self._random.dict_of(
                lambda: self._generate(key_hint, depth),
                lambda: self._generate(value_hint, depth),
                size,
            )

        item_hint = args[0] if args else str
        if issubclass(origin, AbstractSet):
            items = self._random.set_of(lambda: self._generate(item_hint, depth), size)
            return frozenset(items) if origin is frozenset else items
        if issubclass(origin, Sequence):
            return self._random.list_of(lambda: self._generate(item_hint, depth), size)

        raise UnsupportedDomain(f"Cannot randomize container {origin!r}")

    def _generate_type(self, cls: type, depth: int) -> Any:
        rand = self._random

        if _field_hints(cls) is not None:
            if depth > self.parameters.randomization_depth:
                return None
            return self._build(cls, depth, {})

        if issubclass(cls, enum.Enum):
            return rand.pick(list(cls))
        if cls is bool:
            return rand.chance()
        if cls is int:
            return rand.integer()
        if cls is float:
            return rand.double()
        if cls is str:
            return rand.string(self._string_length)
        if cls is bytes:
            length = self._string_length.random(rand.rng)
            return rand.rng.randbytes(length)
        if cls is Decimal:
            return Decimal(str(round(rand.double(), 2)))
        if cls is UUID:
            return UUID(rand.uuid())
        if cls is datetime:
            return rand.datetime()
        if cls is date:
            return rand.date()
        if cls is time:
            return rand.time()
        if cls in (list, tuple, set, frozenset, dict):
            return self._generate_container(cls, (), depth)

        raise UnsupportedDomain(f"Cannot randomize type {cls.__name__}")


def _field_hints(cls: Any) -> dict[str, Any] | None:
    """Constructor field names and annotations, or None for non-record types."""
    if not isinstance(cls, type):
        return None
    if issubclass(cls, BaseModel):
        return {name: info.annotation for name, info in cls.model_fields.items()}
    if dataclasses.is_dataclass(cls):
        hints = typing.get_type_hints(cls, include_extras=True)
        return {f.name: hints[f.name] for f in dataclasses.fields(cls) if f.init}
    if issubclass(cls, tuple) and hasattr(cls, "_fields"):
        return typing.get_type_hints(cls, include_extras=True)
    return None


def objekt(
    cls: type[T],
    parameters: RandomizerParameters | None = None,
    **defaults: Any,
) -> Callable[..., T]:
    """Create a fixture factory for `cls`.

    Default and per-call keyword values replace generated fields; callable
    values are called once per instance, so `id=random_uuid` yields a fresh
    id every time.

    Args:
        cls: Dataclass, pydantic model or NamedTuple to build
        parameters: Randomizer options (defaults from objekt settings)
        **defaults: Field values applied to every instance

    Returns:
        A function taking keyword overrides and returning a new instance
    """
    randomizer = ObjectRandomizer(parameters)

    def create(**overrides: Any) -> T:
        values = {**defaults, **overrides}
        resolved = {
            name: value() if callable(value) else value
            for name, value in values.items()
        }
        return randomizer.next_object(cls, **resolved)

    return create
