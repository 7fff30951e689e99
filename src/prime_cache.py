"""
Bit-packed primality cache.

Responsibility: build and query the prime cache. No trial division beyond
the cache range lives here.

Bit layout (little bit order, as np.packbits(..., bitorder="little")):
- bit i lives in byte i >> 3, at position i & 7
- bit i == 1  iff  i is prime, for all 0 <= i < size

Memory: 2^19 entries -> 64KB packed (vs 512KB as a bool array).
"""

import time
from math import isqrt
from numbers import Integral

import numpy as np

CACHE_SIZE = 1 << 19  # 524288

_default_cache = None


def validate_cache_size(size) -> int:
    """Return size as an int, or raise ValueError if it is not a positive even integer."""
    if isinstance(size, bool) or not isinstance(size, Integral):
        raise ValueError(f"cache size must be an integer, got {size!r}")
    size = int(size)
    if size <= 0 or size % 2 != 0:
        raise ValueError(f"cache size must be a positive even integer, got {size}")
    # 2 must be answered from the cache, see primes._is_prime_internal
    if size < 4:
        raise ValueError(f"cache size must be at least 4, got {size}")
    return size


def _odd_trial_division_flags(size: int) -> np.ndarray:
    """
    Boolean primality flags for [0, size) by odd trial division.

    Odd n >= 3 is prime iff no odd d in [3, isqrt(n)] divides it.
    Clearing d*d, d*d + 2d, ... removes exactly the odd multiples n of d
    with d <= isqrt(n), so every odd d (prime or not) is applied.
    """
    flags = np.zeros(size, dtype=bool)
    flags[2] = True
    flags[3::2] = True
    for d in range(3, isqrt(size - 1) + 1, 2):
        flags[d*d::2*d] = False
    return flags


def prime_flags_upto(N: int) -> np.ndarray:
    """
    Return boolean array where flags[i] is True iff i is prime.

    Uses Sieve of Eratosthenes. Independent of the cache construction,
    used to cross-check it.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        Boolean array of length N+1.
    """
    flags = np.ones(N + 1, dtype=bool)
    flags[:2] = False
    for p in range(2, isqrt(N) + 1):
        if flags[p]:
            flags[p*p::p] = False
    return flags


class PrimeCache:
    """
    Immutable packed bit set marking the primes below ``size``.

    Parameters
    ----------
    size : int
        Number of cached integers. Must be an even integer >= 4.
    verbose : bool
        Print a one-line build summary.
    """

    def __init__(self, size: int = CACHE_SIZE, verbose: bool = False):
        self.size = validate_cache_size(size)

        t0 = time.time()
        flags = _odd_trial_division_flags(self.size)
        self._bits = np.packbits(flags, bitorder="little")
        self._bits.flags.writeable = False

        # Cached primes double as the small trial divisors beyond the cache
        self._primes = np.flatnonzero(flags).astype(np.int64)
        self._primes.flags.writeable = False

        if verbose:
            print(f"    Built prime cache: {len(self._primes):,} primes below "
                  f"{self.size:,} ({self._bits.nbytes / 1e3:.1f}KB) "
                  f"in {time.time() - t0:.2f}s")

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, i: int) -> bool:
        """Bit lookup. Caller guarantees 0 <= i < size."""
        return bool((self._bits[i >> 3] >> (i & 7)) & 1)

    def __repr__(self) -> str:
        return f"PrimeCache(size={self.size}, count={self.count})"

    @property
    def count(self) -> int:
        """Number of primes below size."""
        return len(self._primes)

    @property
    def bits(self) -> np.ndarray:
        """Read-only packed bit array."""
        return self._bits

    def primes_below(self, limit: int) -> np.ndarray:
        """Ascending read-only array of cached primes p < limit."""
        limit = min(limit, self.size)
        return self._primes[:np.searchsorted(self._primes, limit)]

    def flags(self) -> np.ndarray:
        """Unpack to a boolean array of length size."""
        return np.unpackbits(self._bits, count=self.size, bitorder="little").astype(bool)


def get_default_cache() -> PrimeCache:
    """Shared default cache of CACHE_SIZE entries, built on first use."""
    global _default_cache
    if _default_cache is None:
        _default_cache = PrimeCache(CACHE_SIZE)
    return _default_cache


def resolve_cache(cache: PrimeCache = None) -> PrimeCache:
    """Return cache, or the shared default cache when None."""
    if cache is None:
        return get_default_cache()
    return cache
