"""
Tests for the packed primality cache.

The cache must agree with independent computations on every index, stay
read-only after construction, and reject malformed sizes.
"""

from math import isqrt

import numpy as np
import pytest

from src.prime_cache import (
    CACHE_SIZE,
    PrimeCache,
    get_default_cache,
    prime_flags_upto,
    resolve_cache,
    validate_cache_size,
)


def trial_division(n: int) -> bool:
    """Independent reference: n has no divisor in [2, isqrt(n)]."""
    if n < 2:
        return False
    return all(n % d for d in range(2, isqrt(n) + 1))


class TestCacheContents:
    """Cache bits match independent primality computations."""

    def test_default_size(self, default_cache):
        assert CACHE_SIZE == 524288
        assert len(default_cache) == CACHE_SIZE
        assert default_cache.bits.nbytes == CACHE_SIZE // 8

    def test_matches_sieve_everywhere(self, default_cache):
        """Every bit in [0, CACHE_SIZE) agrees with the Eratosthenes sieve."""
        reference = prime_flags_upto(CACHE_SIZE - 1)
        assert np.array_equal(default_cache.flags(), reference)

    def test_matches_trial_division_low_range(self, default_cache):
        for n in range(20000):
            assert default_cache[n] == trial_division(n), f"cache[{n}] disagrees"

    def test_matches_trial_division_top_of_range(self, default_cache):
        for n in range(CACHE_SIZE - 2000, CACHE_SIZE):
            assert default_cache[n] == trial_division(n), f"cache[{n}] disagrees"

    def test_zero_and_one_not_prime(self, default_cache):
        assert not default_cache[0]
        assert not default_cache[1]

    def test_two_is_only_even_prime(self, default_cache):
        flags = default_cache.flags()
        assert flags[2]
        assert not flags[4::2].any()

    def test_prime_count(self, default_cache):
        # pi(2^19) = 43390
        assert default_cache.count == 43390

    @pytest.mark.parametrize("size", [4, 6, 10, 64, 1000, 4096])
    def test_small_sizes_match_sieve(self, size):
        cache = PrimeCache(size)
        assert np.array_equal(cache.flags(), prime_flags_upto(size - 1))


class TestPrimesBelow:
    """The cached primes used as trial divisors."""

    def test_primes_below_small_limit(self, default_cache):
        assert default_cache.primes_below(30).tolist() == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]

    def test_limit_is_exclusive(self, default_cache):
        assert default_cache.primes_below(29).tolist()[-1] == 23

    def test_limit_beyond_cache_returns_all(self, small_cache):
        assert len(small_cache.primes_below(10**30)) == small_cache.count == 18

    def test_read_only(self, default_cache):
        with pytest.raises(ValueError):
            default_cache.primes_below(100)[0] = 4
        with pytest.raises(ValueError):
            default_cache.bits[0] = 0


class TestCacheSizeValidation:
    """Malformed sizes abort construction."""

    @pytest.mark.parametrize("size", [0, -2, 3, 101, 2])
    def test_rejects_bad_sizes(self, size):
        with pytest.raises(ValueError):
            PrimeCache(size)

    @pytest.mark.parametrize("size", [64.0, "64", None, True])
    def test_rejects_non_integers(self, size):
        with pytest.raises(ValueError):
            validate_cache_size(size)

    def test_accepts_numpy_integer(self):
        assert validate_cache_size(np.int64(128)) == 128


class TestDefaultCache:
    """The shared cache is built once and reused."""

    def test_singleton(self):
        assert get_default_cache() is get_default_cache()

    def test_resolve_cache(self, small_cache):
        assert resolve_cache(None) is get_default_cache()
        assert resolve_cache(small_cache) is small_cache

    def test_verbose_build_prints_summary(self, capsys):
        PrimeCache(1024, verbose=True)
        out = capsys.readouterr().out
        assert "Built prime cache" in out
        assert "172 primes" in out


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
