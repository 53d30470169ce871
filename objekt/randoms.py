"""ObjektRandom: one generation method per value domain.

Every method resolves an inline pool spec first (a Pool, a PoolBuilder, or
directive keywords) and falls back to the RandomConfig pool for its domain:

    rand = ObjektRandom()
    rand.integer()                       # config default, 0..100
    rand.integer(between=(1, 6))         # inline directive
    rand.integer(pool=one_of(2, 3, 5))   # inline pool
    rand.string(length=3, chars="ab")    # 'aba', 'bbb', ...

Instances are safe to share across threads unless built around an explicit
`rng`, which is then used as-is.
"""

from __future__ import annotations

import logging
import math
import random
import string
import threading
import uuid
from collections.abc import Mapping, Sequence
from datetime import tzinfo
from typing import Any, Callable, Hashable, TypeVar

from .core.models.builder import DIRECTIVES, PoolBuilder, resolve_pool
from .core.models.pool import Pool, between, one_of, unique
from .core.models.random_config import Domain, RandomConfig, RandomConfigBuilder
from .core.rng import ThreadLocalRandom
from .core.sampling import sample_boolean

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_COLLECTION_SIZE = between(1, 10)
_ALPHABETIC = string.ascii_lowercase + string.ascii_uppercase
_ALPHANUMERIC = _ALPHABETIC + string.digits


def _as_spec(value: Any) -> Pool | PoolBuilder | None:
    """Accept a directive mapping wherever a pool or builder is accepted."""
    if isinstance(value, Mapping):
        unknown = set(value) - set(DIRECTIVES)
        if unknown:
            raise TypeError(
                f"Unknown pool directive(s): {', '.join(sorted(map(str, unknown)))}"
            )
        return PoolBuilder(**value)
    return value


class ObjektRandom:
    """Random value facade over a RandomConfig.

    Args:
        config: Default pools (RandomConfig or an unbuilt RandomConfigBuilder)
        seed: Seed for this instance's per-thread generators
        rng: Explicit generator, used for every call from every thread
    """

    def __init__(
        self,
        config: RandomConfig | RandomConfigBuilder | None = None,
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if seed is not None and rng is not None:
            raise TypeError("Pass either seed or rng, not both")
        if isinstance(config, RandomConfigBuilder):
            config = config.build()
        self._config = config or RandomConfig()
        self._rng = rng
        self._rng_source = ThreadLocalRandom(seed) if rng is None else None

    @property
    def config(self) -> RandomConfig:
        return self._config

    @property
    def rng(self) -> random.Random:
        """Generator for the calling thread."""
        if self._rng is not None:
            return self._rng
        return self._rng_source.get()

    def sample(self, domain: Domain | str, pool: Any = None, **directives: Any) -> Any:
        """Sample once for a domain, resolving the inline spec first.

        Raises:
            ConflictingSpecification: If more than one spec is given
        """
        resolved = resolve_pool(_as_spec(pool), **directives)
        if resolved is None:
            resolved = self._config.pool_for(domain)
        return resolved.random(self.rng)

    # ── Strings ──

    def string(self, length: Any = None, chars: Any = None) -> str:
        """Random string; length and characters resolve independently.

        `length` may be an int (exact length) and `chars` a str (character
        set), besides a Pool, PoolBuilder or directive mapping.
        """
        if isinstance(length, int):
            length = unique(length)
        if isinstance(chars, str):
            chars = one_of(chars)
        size = self.sample(Domain.STRING_LENGTH, length)
        char_pool = resolve_pool(_as_spec(chars)) or self._config.char
        rng = self.rng
        return "".join(char_pool.random(rng) for _ in range(size))

    def char(self, pool: Any = None, **directives: Any) -> str:
        return self.sample(Domain.CHAR, pool, **directives)

    def alphabetic_string(self, min_length: int = 5, max_length: int = 20) -> str:
        """Random string of a-z and A-Z."""
        return self.string(between(min_length, max_length), _ALPHABETIC)

    def alphanumeric_string(self, min_length: int = 5, max_length: int = 20) -> str:
        """Random string of a-z, A-Z and 0-9."""
        return self.string(between(min_length, max_length), _ALPHANUMERIC)

    def numeric_string(self, min_length: int = 5, max_length: int = 10) -> str:
        """Random string of digits."""
        return self.string(between(min_length, max_length), string.digits)

    def uuid(self) -> str:
        """Random version-4 UUID string drawn from this instance's generator."""
        return str(uuid.UUID(int=self.rng.getrandbits(128), version=4))

    # ── Numbers and booleans ──

    def integer(self, pool: Any = None, **directives: Any) -> int:
        return self.sample(Domain.INTEGER, pool, **directives)

    def long(self, pool: Any = None, **directives: Any) -> int:
        return self.sample(Domain.LONG, pool, **directives)

    def boolean(self, pool: Any = None, **directives: Any) -> bool:
        return self.sample(Domain.BOOLEAN, pool, **directives)

    def chance(self, probability: float = 0.5) -> bool:
        """True with the given probability.

        Raises:
            InvalidProbability: If probability is outside [0, 1]
        """
        return sample_boolean(self.rng, probability)

    # ── Temporal values ──

    def time(self, pool: Any = None, **directives: Any) -> Any:
        return self.sample(Domain.TIME, pool, **directives)

    def date(self, pool: Any = None, **directives: Any) -> Any:
        return self.sample(Domain.DATE, pool, **directives)

    def datetime(self, pool: Any = None, **directives: Any) -> Any:
        """Naive (local) datetime."""
        return self.sample(Domain.DATETIME, pool, **directives)

    def instant(self, pool: Any = None, **directives: Any) -> Any:
        """UTC-aware datetime."""
        return self.sample(Domain.INSTANT, pool, **directives)

    def zoned_datetime(
        self,
        pool: Any = None,
        *,
        zone: tzinfo | None = None,
        **directives: Any,
    ) -> Any:
        """Aware datetime, converted into `zone` when one is given."""
        value = self.sample(Domain.ZONED_DATETIME, pool, **directives)
        if zone is not None:
            value = value.astimezone(zone)
        return value

    # ── Collections ──

    def _size(self, size: Any, directives: dict[str, Any]) -> int:
        if isinstance(size, int):
            size = unique(size)
        pool = resolve_pool(_as_spec(size), **directives) or DEFAULT_COLLECTION_SIZE
        return max(0, pool.random(self.rng))

    def list_of(self, generator: Callable[[], T], size: Any = None, **directives: Any) -> list[T]:
        """List of generated items; size defaults to 1..10."""
        return [generator() for _ in range(self._size(size, directives))]

    def set_of(self, generator: Callable[[], K], size: Any = None, **directives: Any) -> set[K]:
        """Set of distinct generated items.

        Generation stops after size * 3 attempts, so a generator with few
        distinct values yields a smaller set rather than looping forever.
        """
        target = self._size(size, directives)
        result: set[K] = set()
        attempts = 0
        while len(result) < target and attempts < target * 3:
            result.add(generator())
            attempts += 1
        if len(result) < target:
            logger.debug(
                "set_of stopped at %d of %d items after %d attempts",
                len(result),
                target,
                attempts,
            )
        return result

    def dict_of(
        self,
        key_generator: Callable[[], K],
        value_generator: Callable[[], V],
        size: Any = None,
        **directives: Any,
    ) -> dict[K, V]:
        """Dict with distinct generated keys; same attempt cap as set_of."""
        target = self._size(size, directives)
        result: dict[K, V] = {}
        attempts = 0
        while len(result) < target and attempts < target * 3:
            result[key_generator()] = value_generator()
            attempts += 1
        if len(result) < target:
            logger.debug(
                "dict_of stopped at %d of %d keys after %d attempts",
                len(result),
                target,
                attempts,
            )
        return result

    def pick(self, values: Sequence[T]) -> T | None:
        """Uniform element of a sequence, or None when it is empty."""
        if not values:
            return None
        return values[self.rng.randrange(len(values))]

    def float(
        self,
        pool: Any = None,
        *,
        precision: int | None = None,
        **directives: Any,
    ) -> float:
        """Float in [lower, upper) for range pools.

        With `precision`, the value is rounded half up to that many decimal
        places, so the upper bound itself becomes reachable.
        """
        return _round_half_up(self.sample(Domain.FLOAT, pool, **directives), precision)

    def double(
        self,
        pool: Any = None,
        *,
        precision: int | None = None,
        **directives: Any,
    ) -> float:
        """Float in [lower, upper) for range pools, see float()."""
        return _round_half_up(self.sample(Domain.DOUBLE, pool, **directives), precision)


def _round_half_up(value: float, precision: int | None) -> float:
    """Round to `precision` decimal places; halves round up."""
    if precision is None:
        return value
    scale = 10**precision
    return math.floor(value * scale + 0.5) / scale


# =============================================================================
# Process-wide default instance
# =============================================================================

_default: ObjektRandom | None = None
_default_lock = threading.Lock()


def get_default() -> ObjektRandom:
    """Get the shared ObjektRandom, building it from settings on first use.

    Thread-safe: construction is guarded by a lock and the instance hands
    each thread its own generator.
    """
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                from .config import get_config

                settings = get_config()
                _default = ObjektRandom(settings.random_config(), seed=settings.seed)
                logger.debug("Built default ObjektRandom (seed=%s)", settings.seed)
    return _default


def reset_default() -> None:
    """Drop the shared instance (rebuilt from settings on next use)."""
    global _default
    with _default_lock:
        _default = None


def random_uuid() -> str:
    """Random UUID string from the default instance."""
    return get_default().uuid()


def random_string(min_length: int = 5, max_length: int = 10) -> str:
    """Random alphanumeric string from the default instance."""
    return get_default().alphanumeric_string(min_length, max_length)
