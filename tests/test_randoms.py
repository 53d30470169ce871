"""Tests for the ObjektRandom facade and module-level helpers."""

import random
import string
import threading
import uuid
from datetime import date, datetime, time, timedelta, timezone

import pytest

from objekt.config import ObjektSettings, configure
from objekt.core.errors import ConflictingSpecification, InvalidProbability
from objekt.core.models.builder import PoolBuilder
from objekt.core.models.pool import between, one_of, unique
from objekt.core.models.random_config import RandomConfig
from objekt.randoms import (
    ObjektRandom,
    get_default,
    random_string,
    random_uuid,
    reset_default,
)


@pytest.fixture
def rand():
    return ObjektRandom(seed=1234)


class TestConstruction:
    """Tests for building a facade."""

    def test_default_config(self):
        """With no config the defaults are used."""
        assert ObjektRandom().config == RandomConfig()

    def test_accepts_unbuilt_builder(self):
        """A RandomConfigBuilder is built on construction."""
        rand = ObjektRandom(RandomConfig.builder().integer(exactly=9))
        assert rand.config.integer == unique(9)
        assert rand.integer() == 9

    def test_seed_and_rng_exclusive(self):
        """seed and rng cannot both be given."""
        with pytest.raises(TypeError):
            ObjektRandom(seed=1, rng=random.Random(1))

    def test_explicit_rng_used(self):
        """An explicit generator is used as-is."""
        rng = random.Random(5)
        assert ObjektRandom(rng=rng).rng is rng

    def test_same_seed_same_values(self):
        """Equal seeds give equal sequences."""
        a = ObjektRandom(seed=99)
        b = ObjektRandom(seed=99)
        assert [a.integer() for _ in range(20)] == [b.integer() for _ in range(20)]


class TestScalars:
    """Tests for per-domain scalar methods."""

    def test_integer_default_range(self, rand):
        """Integers default to 0..100."""
        assert all(0 <= rand.integer() <= 100 for _ in range(500))

    def test_integer_directive(self, rand):
        """A between directive covers its whole range."""
        values = {rand.integer(between=(1, 6)) for _ in range(500)}
        assert values == {1, 2, 3, 4, 5, 6}

    def test_integer_pool(self, rand):
        """A pool argument restricts the values."""
        assert {rand.integer(one_of(2, 3, 5)) for _ in range(200)} <= {2, 3, 5}

    def test_integer_mapping_spec(self, rand):
        """A directive mapping works like keywords."""
        assert rand.integer({"exactly": 12}) == 12

    def test_long(self, rand):
        """Longs take the same directives."""
        assert rand.long(exactly=2**40) == 2**40

    def test_float_and_double_half_open(self, rand):
        """Floats and doubles exclude the upper bound."""
        assert all(0.0 <= rand.float() < 100.0 for _ in range(500))
        assert all(1.0 <= rand.double(between=(1.0, 2.0)) < 2.0 for _ in range(500))

    def test_boolean_sees_both(self, rand):
        """Booleans produce both values."""
        assert {rand.boolean() for _ in range(200)} == {True, False}

    def test_boolean_exactly_false(self, rand):
        """exactly=False is honored."""
        assert rand.boolean(exactly=False) is False

    def test_char_default(self, rand):
        """Default characters are alphanumeric."""
        allowed = set(string.ascii_letters + string.digits)
        assert all(rand.char() in allowed for _ in range(500))

    def test_char_range(self, rand):
        """Character ranges are inclusive."""
        assert all("a" <= rand.char(between=("a", "f")) <= "f" for _ in range(200))

    def test_conflicting_directives(self, rand):
        """Two directives in one call conflict."""
        with pytest.raises(ConflictingSpecification):
            rand.integer(exactly=1, between=(1, 2))

    def test_pool_and_directive_conflict(self, rand):
        """A pool together with a directive conflicts."""
        with pytest.raises(ConflictingSpecification):
            rand.integer(unique(1), exactly=2)

    def test_sample_by_domain_name(self, rand):
        """sample() dispatches on a domain name."""
        assert rand.sample("long", exactly=3) == 3

    def test_misspelt_mapping_directive(self, rand):
        """Unknown keys in a directive mapping are rejected."""
        with pytest.raises(TypeError, match="Unknown pool directive"):
            rand.integer({"bewteen": (500, 600)})

    def test_misspelt_keyword_directive(self, rand):
        """Unknown keyword directives are rejected."""
        with pytest.raises(TypeError, match="Unknown pool directive"):
            rand.integer(bewteen=(500, 600))

    def test_double_precision(self, rand):
        """Rounded doubles keep two decimals and stay within the closed range."""
        values = [rand.double(between=(0.0, 1.0), precision=2) for _ in range(1000)]
        assert all(0.0 <= v <= 1.0 for v in values)
        assert all(round(v, 2) == v for v in values)

    def test_float_precision_zero(self, rand):
        """precision=0 gives whole numbers."""
        values = [rand.float(between=(0.0, 10.0), precision=0) for _ in range(200)]
        assert all(v.is_integer() and 0.0 <= v <= 10.0 for v in values)

    def test_precision_with_exact_value(self, rand):
        """Exact values are rounded too."""
        assert rand.double(exactly=2.345, precision=1) == 2.3


class TestChance:
    """Tests for probability-based booleans."""

    def test_extremes(self, rand):
        """Probabilities 0 and 1 are never and always true."""
        assert not any(rand.chance(0.0) for _ in range(100))
        assert all(rand.chance(1.0) for _ in range(100))

    def test_invalid_probability(self, rand):
        """Probabilities above 1 are rejected."""
        with pytest.raises(InvalidProbability):
            rand.chance(1.01)


class TestTemporal:
    """Tests for temporal domains."""

    def test_time_default(self, rand):
        """Times are whole seconds."""
        value = rand.time()
        assert isinstance(value, time)
        assert value.microsecond == 0

    def test_date_range(self, rand):
        """Dates stay inside the given range."""
        lo, hi = date(2024, 1, 1), date(2024, 1, 31)
        assert all(lo <= rand.date(between=(lo, hi)) <= hi for _ in range(200))

    def test_datetime_is_naive(self, rand):
        """Local datetimes carry no zone."""
        assert rand.datetime().tzinfo is None

    def test_instant_is_utc(self, rand):
        """Instants are UTC."""
        value = rand.instant()
        assert value.utcoffset() == timedelta(0)
        assert datetime(1970, 1, 1, tzinfo=timezone.utc) <= value

    def test_zoned_datetime_zone(self, rand):
        """zone= sets the result's offset."""
        zone = timezone(timedelta(hours=-5))
        value = rand.zoned_datetime(zone=zone)
        assert value.utcoffset() == timedelta(hours=-5)


class TestStrings:
    """Tests for string helpers."""

    def test_length_zero_is_empty(self, rand):
        """Length 0 gives an empty string."""
        assert all(rand.string(unique(0), "abc") == "" for _ in range(50))
        assert rand.string(0, "abc") == ""

    def test_length_and_chars(self, rand):
        """Length and characters follow their pools."""
        values = [rand.string(between(2, 3), "abcde") for _ in range(200)]
        assert all(2 <= len(v) <= 3 for v in values)
        assert all(set(v) <= set("abcde") for v in values)

    def test_default_length(self, rand):
        """Default lengths come from the config."""
        assert all(1 <= len(rand.string()) <= 10 for _ in range(200))

    def test_config_driven(self):
        """Config pools drive string length and characters."""
        config = (
            RandomConfig.builder()
            .string_length(between=(2, 3))
            .char(one_of="abcde")
            .build()
        )
        rand = ObjektRandom(config, seed=3)
        for _ in range(20):
            value = rand.string()
            assert 2 <= len(value) <= 3
            assert set(value) <= set("abcde")

    def test_chars_as_builder(self, rand):
        """A PoolBuilder can supply the characters."""
        value = rand.string(5, PoolBuilder(one_of="x"))
        assert value == "xxxxx"

    def test_alphabetic(self, rand):
        """alphabetic_string uses letters only."""
        value = rand.alphabetic_string(8, 8)
        assert len(value) == 8
        assert value.isalpha()

    def test_alphanumeric(self, rand):
        """alphanumeric_string uses letters and digits."""
        value = rand.alphanumeric_string()
        assert 5 <= len(value) <= 20
        assert value.isalnum()

    def test_numeric(self, rand):
        """numeric_string uses digits only."""
        value = rand.numeric_string()
        assert 5 <= len(value) <= 10
        assert value.isdigit()

    def test_uuid(self, rand):
        """uuid() returns a version-4 UUID."""
        value = uuid.UUID(rand.uuid())
        assert value.version == 4

    def test_uuid_reproducible(self):
        """Seeded facades give the same UUID."""
        assert ObjektRandom(seed=8).uuid() == ObjektRandom(seed=8).uuid()


class TestCollections:
    """Tests for list/set/dict generation."""

    def test_list_default_size(self, rand):
        """Lists default to 1..10 items."""
        for _ in range(50):
            assert 1 <= len(rand.list_of(rand.integer)) <= 10

    def test_list_exact_size(self, rand):
        """An int size is exact, including 0."""
        assert len(rand.list_of(rand.integer, 4)) == 4
        assert rand.list_of(rand.integer, 0) == []

    def test_list_size_directive(self, rand):
        """Size directives are accepted as keywords."""
        assert all(2 <= len(rand.list_of(rand.char, between=(2, 3))) <= 3 for _ in range(50))

    def test_set_distinct(self, rand):
        """Sets fill up when values are distinct."""
        values = rand.set_of(lambda: rand.integer(between=(0, 10**6)), 5)
        assert len(values) == 5

    def test_set_retry_cap(self, rand):
        """set_of stops after three attempts per item."""
        calls = []

        def constant():
            calls.append(1)
            return "same"

        assert rand.set_of(constant, 4) == {"same"}
        assert len(calls) == 12

    def test_dict_of(self, rand):
        """dict_of pairs generated keys and values."""
        result = rand.dict_of(rand.uuid, rand.integer, 3)
        assert len(result) == 3
        assert all(0 <= v <= 100 for v in result.values())

    def test_dict_retry_cap(self, rand):
        """Repeated keys collapse under the retry cap."""
        result = rand.dict_of(lambda: "k", rand.integer, 5)
        assert list(result) == ["k"]

    def test_pick(self, rand):
        """pick handles empty, single and multi-element sequences."""
        assert rand.pick([]) is None
        assert rand.pick(["only"]) == "only"
        assert {rand.pick("abc") for _ in range(100)} == {"a", "b", "c"}


class TestThreadSafety:
    """A shared facade hands each thread its own generator."""

    def test_concurrent_sampling(self):
        """Eight threads share one facade without errors."""
        rand = ObjektRandom(seed=10)
        results: list[int] = []
        errors: list[Exception] = []
        lock = threading.Lock()
        generators = []

        def worker():
            try:
                values = [rand.integer(between=(1, 6)) for _ in range(500)]
                with lock:
                    results.extend(values)
                    generators.append(rand.rng)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(results) == 4000
        assert all(1 <= v <= 6 for v in results)
        assert len({id(g) for g in generators}) == 8


class TestDefaultInstance:
    """Tests for the lazily built process-wide facade."""

    def test_singleton(self):
        """get_default returns one instance."""
        assert get_default() is get_default()

    def test_reset(self):
        """reset_default forces a rebuild."""
        first = get_default()
        reset_default()
        assert get_default() is not first

    def test_built_from_settings(self):
        """The default facade reads pools from settings."""
        configure(ObjektSettings(seed=21, pools={"integer": {"exactly": 7}}))
        reset_default()
        assert get_default().integer() == 7

    def test_seeded_settings_reproducible(self):
        """A configured seed makes helpers reproducible."""
        configure(ObjektSettings(seed=5))
        reset_default()
        first = random_string()
        reset_default()
        assert random_string() == first

    def test_random_string_defaults(self):
        """random_string gives 5..10 alphanumerics."""
        value = random_string()
        assert 5 <= len(value) <= 10
        assert value.isalnum()

    def test_random_uuid(self):
        """random_uuid gives a version-4 UUID."""
        assert uuid.UUID(random_uuid()).version == 4
