"""Uniform sampling inside a pair of bounds.

Handles every ordered domain a RangePool can hold:
- integer: inclusive [lo, hi]
- character: single-character strings, sampled by codepoint, inclusive
- float: [lo, hi), upper bound exclusive
- time: seconds since midnight, inclusive, sub-second part zero
- date: epoch-day index, inclusive
- instant / zoned datetime: aware datetimes, epoch second in [lo, hi)
- local datetime: naive datetimes read as UTC, sampled as instants

The domain is picked from the runtime type of the bounds, not from any
declared type parameter, through an explicit registry keyed on RangeDomain.
"""

import math
import random
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from enum import Enum
from typing import Any, Callable

from .errors import InvalidProbability, UnsupportedDomain
from .rng import default_rng

EPOCH_DATE = date(1970, 1, 1)
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_SECOND = timedelta(seconds=1)


class RangeDomain(str, Enum):
    """Closed set of domains the range sampler knows how to convert."""

    INTEGER = "integer"
    CHARACTER = "character"
    FLOAT = "float"
    TIME = "time"
    DATE = "date"
    DATETIME = "datetime"
    INSTANT = "instant"
    ZONED_DATETIME = "zoned_datetime"


@dataclass(frozen=True)
class IntegralConversion:
    """Maps a domain onto integer keys and back.

    from_integral receives the lower bound as a template so that tzinfo
    survives the round trip.
    """

    to_integral: Callable[[Any], int]
    from_integral: Callable[[int, Any], Any]
    inclusive: bool = True


# =============================================================================
# Conversions
# =============================================================================


def _seconds_of_day(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def _time_of_seconds(key: int, template: time) -> time:
    return time(key // 3600, key % 3600 // 60, key % 60, tzinfo=template.tzinfo)


def _epoch_second(value: datetime) -> int:
    return (value - EPOCH) // _SECOND


def _instant_of(key: int, template: datetime) -> datetime:
    return (EPOCH + timedelta(seconds=key)).astimezone(template.tzinfo)


def _local_epoch_second(value: datetime) -> int:
    return _epoch_second(value.replace(tzinfo=timezone.utc))


def _local_of(key: int, template: datetime) -> datetime:
    return (EPOCH + timedelta(seconds=key)).replace(tzinfo=None)


_CONVERSIONS: dict[RangeDomain, IntegralConversion] = {
    RangeDomain.INTEGER: IntegralConversion(int, lambda key, _: key),
    RangeDomain.CHARACTER: IntegralConversion(ord, lambda key, _: chr(key)),
    RangeDomain.TIME: IntegralConversion(_seconds_of_day, _time_of_seconds),
    RangeDomain.DATE: IntegralConversion(
        lambda value: (value - EPOCH_DATE).days,
        lambda key, _: EPOCH_DATE + timedelta(days=key),
    ),
    RangeDomain.DATETIME: IntegralConversion(
        _local_epoch_second, _local_of, inclusive=False
    ),
    RangeDomain.INSTANT: IntegralConversion(
        _epoch_second, _instant_of, inclusive=False
    ),
    RangeDomain.ZONED_DATETIME: IntegralConversion(
        _epoch_second, _instant_of, inclusive=False
    ),
}

# Looked up along the MRO of the bounds' common type; bool is unsupported.
_TYPE_DOMAINS: dict[type, RangeDomain | None] = {
    bool: None,
    int: RangeDomain.INTEGER,
    float: RangeDomain.FLOAT,
    str: RangeDomain.CHARACTER,
    time: RangeDomain.TIME,
    datetime: RangeDomain.DATETIME,
    date: RangeDomain.DATE,
}


# =============================================================================
# Dispatch
# =============================================================================


def _common_type(a: Any, b: Any) -> type:
    ta, tb = type(a), type(b)
    if ta is tb:
        return ta
    if issubclass(tb, ta):
        return ta
    if issubclass(ta, tb):
        return tb
    if {ta, tb} == {int, float}:
        return float
    return object


def classify(lower: Any, upper: Any) -> RangeDomain:
    """Return the range domain for a pair of bounds.

    Raises:
        UnsupportedDomain: If no conversion is registered for the bound type
    """
    common = _common_type(lower, upper)
    domain = next(
        (_TYPE_DOMAINS[cls] for cls in common.__mro__ if cls in _TYPE_DOMAINS),
        None,
    )
    if domain is None:
        raise UnsupportedDomain(f"Unsupported range type: {common.__name__}")

    if domain is RangeDomain.CHARACTER and (len(lower) != 1 or len(upper) != 1):
        raise UnsupportedDomain(
            f"String bounds must be single characters, got {lower!r}..{upper!r}"
        )

    if domain is RangeDomain.DATETIME:
        lower_offset, upper_offset = lower.utcoffset(), upper.utcoffset()
        if (lower_offset is None) != (upper_offset is None):
            raise UnsupportedDomain(
                "Cannot mix naive and timezone-aware datetime bounds"
            )
        if lower_offset is None:
            return RangeDomain.DATETIME
        if lower_offset == upper_offset == timedelta(0):
            return RangeDomain.INSTANT
        return RangeDomain.ZONED_DATETIME

    return domain


def sample_range(
    lower: Any,
    upper: Any,
    rng: random.Random | None = None,
    *,
    zone: tzinfo | None = None,
) -> Any:
    """
    Sample a value uniformly between two bounds.

    Args:
        lower: Lower bound (always reachable)
        upper: Upper bound (inclusive or exclusive depending on the domain)
        rng: Random number generator (defaults to the per-thread generator)
        zone: Zone to attach to sampled instants and zoned datetimes;
            defaults to the zone of the lower bound

    Returns:
        A value of the bounds' domain

    Raises:
        UnsupportedDomain: If the bounds have no registered conversion
    """
    rng = rng or default_rng()
    domain = classify(lower, upper)

    if domain is RangeDomain.FLOAT:
        return _sample_continuous(lower, upper, rng)

    value = _sample_integral(_CONVERSIONS[domain], lower, upper, rng)
    if zone is not None and domain in (
        RangeDomain.INSTANT,
        RangeDomain.ZONED_DATETIME,
    ):
        value = value.astimezone(zone)
    return value


def _sample_continuous(lower: float, upper: float, rng: random.Random) -> float:
    """Sample from [lower, upper); degenerate bounds return lower."""
    value = lower + rng.random() * (upper - lower)
    # Rounding in the multiply-add can land exactly on upper
    if value >= upper and upper > lower:
        value = math.nextafter(upper, lower)
    return float(value)


def _sample_integral(
    conversion: IntegralConversion,
    lower: Any,
    upper: Any,
    rng: random.Random,
) -> Any:
    """Sample an integer key between the bounds' keys and convert it back.

    Keys are tightened so that the reconstructed value never falls outside
    the bounds when they carry sub-second parts. When no whole key fits,
    the lower bound is returned.
    """
    low = conversion.to_integral(lower)
    if conversion.from_integral(low, lower) < lower:
        low += 1
    high = conversion.to_integral(upper)

    if conversion.inclusive:
        if low > high:
            return lower
        return conversion.from_integral(rng.randint(low, high), lower)

    if conversion.from_integral(high, lower) < upper:
        high += 1
    if low >= high:
        return lower
    return conversion.from_integral(rng.randrange(low, high), lower)


def sample_boolean(rng: random.Random | None = None, probability: float = 0.5) -> bool:
    """Bernoulli trial: True with the given probability.

    Raises:
        InvalidProbability: If probability is outside [0, 1]
    """
    if not 0.0 <= probability <= 1.0:
        raise InvalidProbability(
            f"Probability must be between 0.0 and 1.0, got {probability}"
        )
    rng = rng or default_rng()
    return rng.random() < probability
