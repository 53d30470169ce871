"""Sampling engine: pools, range sampling, builder resolution."""

from .errors import (
    ObjektError,
    ConflictingSpecification,
    InvalidRange,
    EmptyDomain,
    UnsupportedDomain,
    InvalidProbability,
)
from .rng import ThreadLocalRandom, default_rng
from .sampling import RangeDomain, classify, sample_range, sample_boolean

__all__ = [
    "ObjektError",
    "ConflictingSpecification",
    "InvalidRange",
    "EmptyDomain",
    "UnsupportedDomain",
    "InvalidProbability",
    "ThreadLocalRandom",
    "default_rng",
    "RangeDomain",
    "classify",
    "sample_range",
    "sample_boolean",
]
