"""
Primality queries.

Responsibility: primality testing and prime enumeration. No factorization.

Every public function validates its arguments once and returns None
(or an empty list) when there is no answer. Invalid input is not an error.
"""

from math import isqrt
from numbers import Integral
from typing import List, Optional

from .prime_cache import PrimeCache, resolve_cache


def to_int(n) -> Optional[int]:
    """Return n as a Python int, or None if it is not integral."""
    if isinstance(n, bool) or not isinstance(n, Integral):
        return None
    return int(n)


def _is_prime_internal(n: int, cache: PrimeCache) -> Optional[int]:
    """
    Return n if it is prime, else None.

    n must be a non-negative int. Even n >= cache.size is never prime;
    this relies on 2 being answered by the cache branch first.
    """
    if n < cache.size:
        return n if cache[n] else None

    if n % 2 == 0:
        return None

    root = isqrt(n)

    # Small divisors: only the primes the cache knows about (skipping 2)
    for d in cache.primes_below(min(root, cache.size) + 1)[1:].tolist():
        if n % d == 0:
            return None

    # Above the cache every odd candidate is tried
    for d in range(cache.size + 1, root + 1, 2):
        if n % d == 0:
            return None

    return n


def is_prime(n, cache: PrimeCache = None) -> Optional[int]:
    """
    Return n if n is a prime, else None.

    Parameters
    ----------
    n : int
        Value to test. Non-integers and n <= 1 give None.
    cache : PrimeCache, optional
        Defaults to the shared cache.

    Returns
    -------
    int or None
    """
    n = to_int(n)
    if n is None or n <= 1:
        return None
    return _is_prime_internal(n, resolve_cache(cache))


def _next_prime(n: int, cache: PrimeCache) -> int:
    if n <= 1:
        return 2
    candidate = n + 2 if n % 2 else n + 1
    while _is_prime_internal(candidate, cache) is None:
        candidate += 2
    return candidate


def _previous_prime(n: int, cache: PrimeCache) -> Optional[int]:
    if n == 3:
        return 2
    if n < 3:
        return None
    candidate = n - 2 if n % 2 else n - 1
    while _is_prime_internal(candidate, cache) is None:
        candidate -= 2
    return candidate


def next_prime(n, cache: PrimeCache = None) -> Optional[int]:
    """
    Smallest prime strictly greater than n.

    Search is unbounded. Returns None only for non-integer n.
    """
    n = to_int(n)
    if n is None:
        return None
    return _next_prime(n, resolve_cache(cache))


def next_prime_or_equal(n, cache: PrimeCache = None) -> Optional[int]:
    """Smallest prime >= n (2 for any n < 2)."""
    n = to_int(n)
    if n is None:
        return None
    if n < 2:
        return 2
    cache = resolve_cache(cache)
    if _is_prime_internal(n, cache) is not None:
        return n
    return _next_prime(n, cache)


def previous_prime(n, cache: PrimeCache = None) -> Optional[int]:
    """Largest prime strictly less than n, or None when n <= 2."""
    n = to_int(n)
    if n is None:
        return None
    return _previous_prime(n, resolve_cache(cache))


def previous_prime_or_equal(n, cache: PrimeCache = None) -> Optional[int]:
    """Largest prime <= n, or None when n < 2."""
    n = to_int(n)
    if n is None:
        return None
    cache = resolve_cache(cache)
    if n >= 2 and _is_prime_internal(n, cache) is not None:
        return n
    return _previous_prime(n, cache)


def primes_between(lo, hi, cache: PrimeCache = None) -> List[int]:
    """
    Return all primes p with lo <= p <= hi, ascending.

    Parameters
    ----------
    lo, hi : int
        Inclusive bounds. lo > hi (or a non-integer bound) gives [].
    cache : PrimeCache, optional
        Defaults to the shared cache.

    Returns
    -------
    list of int
    """
    lo, hi = to_int(lo), to_int(hi)
    if lo is None or hi is None:
        return []
    cache = resolve_cache(cache)

    result = []
    lo = max(lo, 2)
    if lo == 2 and hi >= 2:
        result.append(2)
        lo = 3
    if lo % 2 == 0:
        lo += 1

    for candidate in range(lo, hi + 1, 2):
        if _is_prime_internal(candidate, cache) is not None:
            result.append(candidate)
    return result


def nth_prime(n, cache: PrimeCache = None) -> Optional[int]:
    """
    Return the n-th prime, one-based (nth_prime(1) == 2).

    Returns None for n < 1 or non-integer n. Search is unbounded.
    """
    n = to_int(n)
    if n is None or n < 1:
        return None
    if n == 1:
        return 2
    cache = resolve_cache(cache)

    remaining = n
    candidate = 3
    while True:
        if _is_prime_internal(candidate, cache) is not None:
            remaining -= 1
            if remaining == 1:
                return candidate
        candidate += 2
