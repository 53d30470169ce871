"""Pool models: immutable, validated sampling strategies.

A pool is one of three variants, discriminated by `type`:
- unique: always yields the same value
- range: uniform between lower and upper (see core.sampling)
- set: uniform choice among members, duplicates weigh more

Pools are frozen after construction and safe to share across threads.
"""

import random
from itertools import chain
from typing import Any, Iterable, Literal

from pydantic import BaseModel, ConfigDict, model_validator

from ..errors import EmptyDomain, InvalidRange
from ..rng import default_rng
from ..sampling import sample_range


class UniquePool(BaseModel):
    """Pool that always yields one fixed value."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: Literal["unique"] = "unique"
    value: Any

    def random(self, rng: random.Random | None = None) -> Any:
        return self.value


class RangePool(BaseModel):
    """Pool sampling uniformly between two bounds.

    Inclusivity of the upper bound depends on the domain: inclusive for
    integers, characters, dates and times; exclusive for floats and
    datetimes.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: Literal["range"] = "range"
    lower: Any
    upper: Any

    @model_validator(mode="after")
    def check_order(self) -> "RangePool":
        try:
            inverted = self.lower > self.upper
        except TypeError as e:
            raise InvalidRange(
                f"Invalid range: bounds {self.lower!r} and {self.upper!r} "
                f"are not comparable"
            ) from e
        if inverted:
            raise InvalidRange(
                f"Invalid range: start ({self.lower}) must be less than or "
                f"equal to end ({self.upper})"
            )
        return self

    def random(self, rng: random.Random | None = None) -> Any:
        return sample_range(self.lower, self.upper, rng)


class SetPool(BaseModel):
    """Pool choosing uniformly among a non-empty sequence of members."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: Literal["set"] = "set"
    members: tuple[Any, ...]

    @model_validator(mode="after")
    def check_not_empty(self) -> "SetPool":
        if not self.members:
            raise EmptyDomain("Pool of iterables must contain at least one value")
        return self

    def random(self, rng: random.Random | None = None) -> Any:
        rng = rng or default_rng()
        return self.members[rng.randrange(len(self.members))]


Pool = UniquePool | RangePool | SetPool


# =============================================================================
# Factories
# =============================================================================


def unique(value: Any) -> UniquePool:
    """Pool that always yields `value`."""
    return UniquePool(value=value)


def between(lower: Any, upper: Any) -> RangePool:
    """Pool sampling between `lower` and `upper`."""
    return RangePool(lower=lower, upper=upper)


def one_of(*values: Any) -> SetPool:
    """Pool choosing among values.

    Accepts either several values or a single iterable:
        one_of(1, 2, 3)
        one_of([1, 2, 3])
        one_of("abc")  # characters
    """
    if len(values) == 1 and _is_collection(values[0]):
        return SetPool(members=tuple(values[0]))
    return SetPool(members=values)


def one_of_multiple(*iterables: Iterable[Any]) -> SetPool:
    """Pool choosing among the flattened union of several iterables."""
    return SetPool(members=tuple(chain.from_iterable(iterables)))


def _is_collection(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray))
