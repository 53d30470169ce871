"""objekt: random values for test fixtures.

Scalars, temporal values, collections and whole objects, drawn from
reusable, validated sampling strategies (pools):

    from objekt import ObjektRandom, between

    rand = ObjektRandom()
    rand.integer(between=(1, 6))
    rand.string(length=between(2, 3), chars="abcde")
"""

__version__ = "0.1.0"

from .core.errors import (
    ObjektError,
    ConflictingSpecification,
    InvalidRange,
    EmptyDomain,
    UnsupportedDomain,
    InvalidProbability,
)
from .core.models import (
    Pool,
    UniquePool,
    RangePool,
    SetPool,
    unique,
    between,
    one_of,
    one_of_multiple,
    PoolBuilder,
    Domain,
    RandomConfig,
    RandomConfigBuilder,
)
from .core.sampling import sample_range, sample_boolean
from .randoms import (
    ObjektRandom,
    get_default,
    reset_default,
    random_uuid,
    random_string,
)
from .fixtures import ObjectRandomizer, RandomizerParameters, objekt

__all__ = [
    "__version__",
    "ObjektError",
    "ConflictingSpecification",
    "InvalidRange",
    "EmptyDomain",
    "UnsupportedDomain",
    "InvalidProbability",
    "Pool",
    "UniquePool",
    "RangePool",
    "SetPool",
    "unique",
    "between",
    "one_of",
    "one_of_multiple",
    "PoolBuilder",
    "Domain",
    "RandomConfig",
    "RandomConfigBuilder",
    "sample_range",
    "sample_boolean",
    "ObjektRandom",
    "get_default",
    "reset_default",
    "random_uuid",
    "random_string",
    "ObjectRandomizer",
    "RandomizerParameters",
    "objekt",
]
