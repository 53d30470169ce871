"""Error taxonomy for the sampling engine.

Every error is a local, synchronous validation failure. None are retried or
recovered internally; they propagate to the caller.

ObjektError is not a ValueError, so pydantic validators re-raise it unwrapped.
"""


class ObjektError(Exception):
    """Base class for all objekt errors."""


class ConflictingSpecification(ObjektError):
    """A builder had more than one mutually exclusive directive set."""

    def __init__(self, fields: list[str]):
        self.fields = fields
        pairs = ", ".join(
            f"'{a}' with '{b}'"
            for i, a in enumerate(fields)
            for b in fields[i + 1 :]
        )
        super().__init__(f"Cannot specify {pairs}")


class InvalidRange(ObjektError):
    """A range lower bound exceeds its upper bound, or the bounds are malformed."""


class EmptyDomain(ObjektError):
    """A set pool was constructed from zero members."""


class UnsupportedDomain(ObjektError):
    """No range conversion exists for the observed bound type."""


class InvalidProbability(ObjektError):
    """A probability fell outside [0, 1]."""
