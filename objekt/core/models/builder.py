"""Sparse pool specification resolved into exactly one pool.

A PoolBuilder holds four mutually exclusive directives:
- exactly: a fixed value -> UniquePool
- between: a (lower, upper) pair -> RangePool
- one_of: an iterable of members -> SetPool
- one_of_multiple: several iterables, flattened -> SetPool

Conflicts are only detected in resolve(), never at assignment, so a builder
can be filled in any order.
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..errors import ConflictingSpecification, InvalidRange
from .pool import Pool, between, one_of, one_of_multiple, unique

logger = logging.getLogger(__name__)

DIRECTIVES = ("exactly", "between", "one_of", "one_of_multiple")


class PoolBuilder(BaseModel):
    """Four optional directives, at most one of which may be set.

    Only None means unset: exactly=0 and exactly=False are valid directives.
    Unknown directive names are rejected with a ValidationError.

    Examples:
        PoolBuilder(exactly=5).resolve()            # UniquePool(value=5)
        PoolBuilder(between=(1, 10)).resolve()      # RangePool(lower=1, upper=10)
        PoolBuilder(one_of="abc").resolve()         # SetPool of 'a', 'b', 'c'
        PoolBuilder().resolve()                     # None
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    exactly: Any = None
    between: Any = None
    one_of: Any = None
    one_of_multiple: Any = None

    @property
    def populated(self) -> list[str]:
        """Names of the directives that are set, in declaration order."""
        return [name for name in DIRECTIVES if getattr(self, name) is not None]

    def resolve(self) -> Pool | None:
        """Resolve to a pool, or None when nothing was specified.

        Raises:
            ConflictingSpecification: If more than one directive is set
            InvalidRange: If `between` is not a valid (lower, upper) pair
            EmptyDomain: If `one_of`/`one_of_multiple` contain no values
        """
        populated = self.populated
        if len(populated) > 1:
            raise ConflictingSpecification(populated)
        if not populated:
            return None

        directive = populated[0]
        logger.debug("Resolving pool from '%s'", directive)

        if directive == "exactly":
            return unique(self.exactly)
        if directive == "between":
            lower, upper = _unpack_bounds(self.between)
            return between(lower, upper)
        if directive == "one_of":
            return one_of(self.one_of)
        return one_of_multiple(*self.one_of_multiple)


def _unpack_bounds(bounds: Any) -> tuple[Any, Any]:
    """Split a between directive into (lower, upper)."""
    if isinstance(bounds, range):
        if bounds.step != 1 or len(bounds) == 0:
            raise InvalidRange(f"Invalid range: {bounds!r} must be non-empty with step 1")
        return bounds.start, bounds.stop - 1
    try:
        lower, upper = bounds
    except (TypeError, ValueError) as e:
        raise InvalidRange(
            f"Invalid range: expected a (lower, upper) pair, got {bounds!r}"
        ) from e
    return lower, upper


def resolve_pool(
    pool: "Pool | PoolBuilder | None" = None,
    **directives: Any,
) -> Pool | None:
    """Resolve an inline pool spec given either as a pool/builder or as directives.

    Raises:
        ConflictingSpecification: If both a pool and directives are given,
            or if more than one directive is set
    """
    given = {name: value for name, value in directives.items() if value is not None}
    unknown = set(given) - set(DIRECTIVES)
    if unknown:
        raise TypeError(f"Unknown pool directive(s): {', '.join(sorted(unknown))}")

    if pool is None:
        return PoolBuilder(**given).resolve()
    if given:
        raise ConflictingSpecification(["pool", *given])
    if isinstance(pool, PoolBuilder):
        return pool.resolve()
    return pool
