"""Per-thread random generators.

ThreadLocalRandom gives every thread its own random.Random, so a shared facade
needs no caller-side locking.
"""

import itertools
import logging
import random
import threading

logger = logging.getLogger(__name__)


class ThreadLocalRandom:
    """Hands out one random.Random per thread.

    With a seed, the first generator created uses the seed itself and later
    ones use seed + n. Which thread gets which offset depends on scheduling,
    so sequences are only reproducible for single-threaded use.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._local = threading.local()
        self._counter = itertools.count()
        self._lock = threading.Lock()

    @property
    def seed(self) -> int | None:
        return self._seed

    def get(self) -> random.Random:
        """Return the calling thread's generator, creating it on first use."""
        rng = getattr(self._local, "rng", None)
        if rng is None:
            rng = self._local.rng = self._create()
        return rng

    def _create(self) -> random.Random:
        if self._seed is None:
            rng = random.Random()
        else:
            with self._lock:
                offset = next(self._counter)
            rng = random.Random(self._seed + offset)
        logger.debug(
            "Created generator for thread %s (seed=%s)",
            threading.current_thread().name,
            self._seed,
        )
        return rng


_shared = ThreadLocalRandom()


def default_rng() -> random.Random:
    """Generator used when a pool is sampled without an explicit rng."""
    return _shared.get()
