"""Pydantic models for the sampling engine.

- pool.py: Pool variants (unique, range, set) and factories
- builder.py: PoolBuilder, the sparse four-directive spec
- random_config.py: Domain tags and the RandomConfig registry of default pools
"""

from .pool import (
    Pool,
    UniquePool,
    RangePool,
    SetPool,
    unique,
    between,
    one_of,
    one_of_multiple,
)
from .builder import DIRECTIVES, PoolBuilder, resolve_pool
from .random_config import (
    Domain,
    RandomConfig,
    RandomConfigBuilder,
    coerce_directives,
    coerce_value,
    INSTANT_RANGE,
    DATE_TIME_RANGE,
    DATE_RANGE,
    TIME_RANGE,
)

__all__ = [
    "Pool",
    "UniquePool",
    "RangePool",
    "SetPool",
    "unique",
    "between",
    "one_of",
    "one_of_multiple",
    "DIRECTIVES",
    "PoolBuilder",
    "resolve_pool",
    "Domain",
    "RandomConfig",
    "RandomConfigBuilder",
    "coerce_directives",
    "coerce_value",
    "INSTANT_RANGE",
    "DATE_TIME_RANGE",
    "DATE_RANGE",
    "TIME_RANGE",
]
