"""Default pools for every value domain.

RandomConfig maps each of the twelve domains to the pool a facade falls back
to when a call does not specify its own. It is frozen once built and may be
shared freely across threads.

Build one with RandomConfigBuilder (programmatic) or RandomConfig.from_dict
(plain data, e.g. from a JSON settings file).
"""

import logging
import string
from datetime import date, datetime, time, timezone
from enum import Enum
from functools import lru_cache
from typing import Any

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, NaiveDatetime, TypeAdapter

from .builder import DIRECTIVES, PoolBuilder, resolve_pool
from .pool import Pool, between, one_of, one_of_multiple

logger = logging.getLogger(__name__)


class Domain(str, Enum):
    """Semantic categories of generated values."""

    STRING_LENGTH = "string_length"
    CHAR = "char"
    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    TIME = "time"
    DATE = "date"
    DATETIME = "datetime"
    INSTANT = "instant"
    ZONED_DATETIME = "zoned_datetime"


# =============================================================================
# Default bounds
# =============================================================================

INSTANT_RANGE = (
    datetime(1970, 1, 1, 0, 0, 0, tzinfo=timezone.utc),
    datetime(2100, 12, 31, 23, 59, 59, tzinfo=timezone.utc),
)
DATE_TIME_RANGE = tuple(value.replace(tzinfo=None) for value in INSTANT_RANGE)
DATE_RANGE = tuple(value.date() for value in INSTANT_RANGE)
TIME_RANGE = (time(0, 0, 0), time(23, 59, 59))
ALPHANUMERIC = (string.ascii_lowercase, string.ascii_uppercase, string.digits)


class RandomConfig(BaseModel):
    """Immutable registry of default pools, one per domain.

    Examples:
        config = RandomConfig()  # all defaults

        config = (
            RandomConfig.builder()
            .string_length(between=(2, 3))
            .char(one_of="abcde")
            .build()
        )
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    string_length: Pool = Field(default_factory=lambda: between(1, 10))
    char: Pool = Field(default_factory=lambda: one_of_multiple(*ALPHANUMERIC))
    integer: Pool = Field(default_factory=lambda: between(0, 100))
    long: Pool = Field(default_factory=lambda: between(0, 100))
    float: Pool = Field(default_factory=lambda: between(0.0, 100.0))
    double: Pool = Field(default_factory=lambda: between(0.0, 100.0))
    boolean: Pool = Field(default_factory=lambda: one_of(True, False))
    time: Pool = Field(default_factory=lambda: between(*TIME_RANGE))
    date: Pool = Field(default_factory=lambda: between(*DATE_RANGE))
    datetime: Pool = Field(default_factory=lambda: between(*DATE_TIME_RANGE))
    instant: Pool = Field(default_factory=lambda: between(*INSTANT_RANGE))
    zoned_datetime: Pool = Field(default_factory=lambda: between(*INSTANT_RANGE))

    def pool_for(self, domain: Domain | str) -> Pool:
        """Return the configured pool for a domain."""
        return getattr(self, Domain(domain).value)

    @classmethod
    def builder(cls) -> "RandomConfigBuilder":
        return RandomConfigBuilder()

    @classmethod
    def from_dict(cls, data: dict[str, dict[str, Any]]) -> "RandomConfig":
        """Build a config from plain data.

        Keys are domain names, values are directive dicts whose raw values
        are coerced to the domain's type (ISO strings become dates, etc.):

            {"integer": {"between": [1, 6]}, "date": {"exactly": "2024-02-29"}}

        Raises:
            ValueError: If a key is not a known domain
            pydantic.ValidationError: If a value cannot be coerced
            ObjektError: If the directives do not form a valid pool
        """
        builder = RandomConfigBuilder()
        for key, raw in data.items():
            domain = Domain(key)
            builder.set(domain, coerce_directives(domain, raw))
        return builder.build()


class RandomConfigBuilder:
    """Collects per-domain pool specs and resolves them in build().

    Each domain method takes a Pool, a PoolBuilder, or the four directive
    keywords. Unspecified domains keep their defaults.
    """

    def __init__(self) -> None:
        self._specs: dict[Domain, PoolBuilder | Pool | None] = {}
        self._directives: dict[Domain, dict[str, Any]] = {}

    def set(
        self,
        domain: Domain | str,
        pool: PoolBuilder | Pool | None = None,
        **directives: Any,
    ) -> "RandomConfigBuilder":
        domain = Domain(domain)
        self._specs[domain] = pool
        self._directives[domain] = directives
        return self

    def string_length(self, pool=None, **directives) -> "RandomConfigBuilder":
        return self.set(Domain.STRING_LENGTH, pool, **directives)

    def char(self, pool=None, **directives) -> "RandomConfigBuilder":
        return self.set(Domain.CHAR, pool, **directives)

    def integer(self, pool=None, **directives) -> "RandomConfigBuilder":
        return self.set(Domain.INTEGER, pool, **directives)

    def long(self, pool=None, **directives) -> "RandomConfigBuilder":
        return self.set(Domain.LONG, pool, **directives)

    def float(self, pool=None, **directives) -> "RandomConfigBuilder":
        return self.set(Domain.FLOAT, pool, **directives)

    def double(self, pool=None, **directives) -> "RandomConfigBuilder":
        return self.set(Domain.DOUBLE, pool, **directives)

    def boolean(self, pool=None, **directives) -> "RandomConfigBuilder":
        return self.set(Domain.BOOLEAN, pool, **directives)

    def time(self, pool=None, **directives) -> "RandomConfigBuilder":
        return self.set(Domain.TIME, pool, **directives)

    def date(self, pool=None, **directives) -> "RandomConfigBuilder":
        return self.set(Domain.DATE, pool, **directives)

    def datetime(self, pool=None, **directives) -> "RandomConfigBuilder":
        return self.set(Domain.DATETIME, pool, **directives)

    def instant(self, pool=None, **directives) -> "RandomConfigBuilder":
        return self.set(Domain.INSTANT, pool, **directives)

    def zoned_datetime(self, pool=None, **directives) -> "RandomConfigBuilder":
        return self.set(Domain.ZONED_DATETIME, pool, **directives)

    def build(self) -> RandomConfig:
        """Resolve every spec; unresolved domains fall back to defaults.

        Raises:
            ObjektError: If any domain spec is invalid or conflicting
        """
        resolved: dict[str, Pool] = {}
        for domain, spec in self._specs.items():
            pool = resolve_pool(spec, **self._directives[domain])
            if pool is not None:
                resolved[domain.value] = pool
        logger.debug("Built RandomConfig overriding %s", sorted(resolved) or "nothing")
        return RandomConfig(**resolved)


# =============================================================================
# Coercion of plain data
# =============================================================================

_VALUE_TYPES: dict[Domain, Any] = {
    Domain.STRING_LENGTH: int,
    Domain.CHAR: str,
    Domain.INTEGER: int,
    Domain.LONG: int,
    Domain.FLOAT: float,
    Domain.DOUBLE: float,
    Domain.BOOLEAN: bool,
    Domain.TIME: time,
    Domain.DATE: date,
    Domain.DATETIME: NaiveDatetime,
    Domain.INSTANT: AwareDatetime,
    Domain.ZONED_DATETIME: AwareDatetime,
}


@lru_cache(maxsize=None)
def _adapter(domain: Domain, directive: str) -> TypeAdapter:
    value_type = _VALUE_TYPES[domain]
    shapes = {
        "exactly": value_type,
        "between": tuple[value_type, value_type],
        "one_of": list[value_type],
        "one_of_multiple": list[list[value_type]],
    }
    return TypeAdapter(shapes[directive])


def coerce_value(domain: Domain | str, raw: Any) -> Any:
    """Coerce one raw value (e.g. a CLI string) to the domain's type."""
    return _adapter(Domain(domain), "exactly").validate_python(raw)


def coerce_directives(domain: Domain | str, raw: dict[str, Any]) -> PoolBuilder:
    """Turn a raw directive dict into a PoolBuilder with typed values.

    Character sets may be given as plain strings ("abc") in one_of and
    one_of_multiple.
    """
    domain = Domain(domain)
    unknown = set(raw) - set(DIRECTIVES)
    if unknown:
        raise ValueError(
            f"Unknown directive(s) for '{domain.value}': {', '.join(sorted(unknown))}"
        )

    values: dict[str, Any] = {}
    for directive, value in raw.items():
        if value is None:
            continue
        if domain is Domain.CHAR and directive == "one_of" and isinstance(value, str):
            value = list(value)
        if domain is Domain.CHAR and directive == "one_of_multiple":
            value = [list(part) if isinstance(part, str) else part for part in value]
        values[directive] = _adapter(domain, directive).validate_python(value)
    return PoolBuilder(**values)
