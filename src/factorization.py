"""
Factorization utilities.

Responsibility: factor information, cleanly separated.
This file must not know about prime enumeration or indexing.
"""

from collections import Counter
from math import isqrt
from typing import Dict, List, Optional, Set

from .prime_cache import PrimeCache, resolve_cache
from .primes import to_int


def _next_divisor(d: int, cache: PrimeCache) -> int:
    """Next trial divisor after d, skipping composites the cache knows about."""
    if d == 2:
        return 3
    d += 2
    while d < cache.size and not cache[d]:
        d += 2
    return d


def prime_factors(n, cache: PrimeCache = None) -> Optional[List[int]]:
    """
    Factor n into primes by trial division.

    Parameters
    ----------
    n : int
        Integer to factor. Non-integers and n <= 1 give None.
    cache : PrimeCache, optional
        Defaults to the shared cache.

    Returns
    -------
    list of int or None
        Prime factors with multiplicity, ascending. Their product is n.
    """
    n = to_int(n)
    if n is None or n <= 1:
        return None
    cache = resolve_cache(cache)

    factors = []
    m = n
    d = 2
    max_d = isqrt(m)
    while True:
        if d > max_d:
            # Nothing up to sqrt(m) divides it
            factors.append(m)
            return factors
        if m % d == 0:
            factors.append(d)
            m //= d
            max_d = isqrt(m)
        else:
            d = _next_divisor(d, cache)


def factor_multiplicities(n, cache: PrimeCache = None) -> Dict[int, int]:
    """
    Return {prime: exponent} for n, in ascending prime order.

    Empty dict when n has no factorization (n <= 1 or not an integer).
    """
    factors = prime_factors(n, cache)
    if factors is None:
        return {}
    return dict(Counter(factors))


def omega(n, cache: PrimeCache = None) -> int:
    """
    Count distinct prime factors of n (small omega).

    Parameters
    ----------
    n : int
        Integer to factor.
    cache : PrimeCache, optional
        Defaults to the shared cache.

    Returns
    -------
    int
        Number of distinct prime factors, 0 for n <= 1.
    """
    return len(factor_multiplicities(n, cache))


def omega_leq_P(n, P: int, cache: PrimeCache = None) -> int:
    """
    Count distinct prime factors of n that are <= P.

    Parameters
    ----------
    n : int
        Integer to factor.
    P : int
        Upper bound on primes to count.
    cache : PrimeCache, optional
        Defaults to the shared cache.

    Returns
    -------
    int
        Number of distinct prime factors <= P.
    """
    return sum(1 for p in factor_multiplicities(n, cache) if p <= P)


def distinct_prime_factors(n, cache: PrimeCache = None) -> Set[int]:
    """Return set of distinct prime factors of n (empty for n <= 1)."""
    return set(factor_multiplicities(n, cache))


def Omega(n, cache: PrimeCache = None) -> int:
    """
    Count prime factors of n with multiplicity (big Omega).

    Returns
    -------
    int
        Total count of prime factors with multiplicity, 0 for n <= 1.
    """
    factors = prime_factors(n, cache)
    if factors is None:
        return 0
    return len(factors)
