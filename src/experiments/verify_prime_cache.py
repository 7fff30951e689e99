#!/usr/bin/env python3
"""
Verify the prime cache and the beyond-cache trial division.

Compares:
1. Every cache bit against an independent Sieve of Eratosthenes
2. is_prime beyond the cache against the sieve, using a small cache
3. prime_factors products and primality on a sample of integers

Run at a small cache size first, then at the default.
"""

import argparse
import sys
import time
from math import prod
from pathlib import Path

import numpy as np

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from src.prime_cache import CACHE_SIZE, PrimeCache, prime_flags_upto
from src.primes import is_prime, primes_between
from src.factorization import prime_factors


def verify_cache_bits(size: int, verbose: bool = True) -> bool:
    """Verify every cache bit matches the sieve."""
    if verbose:
        print(f"\n=== Verifying cache bits for size={size:,} ===")

    t0 = time.time()
    cache = PrimeCache(size, verbose=verbose)
    t_cache = time.time() - t0

    t0 = time.time()
    reference = prime_flags_upto(size - 1)
    t_sieve = time.time() - t0

    if verbose:
        print(f"  Cache build: {t_cache:.2f}s, size={cache.bits.nbytes/1e3:.1f}KB")
        print(f"  Reference sieve: {t_sieve:.2f}s, size={reference.nbytes/1e3:.1f}KB")

    mismatches = np.flatnonzero(cache.flags() != reference)
    for i in mismatches[:10]:
        print(f"  MISMATCH at n={i}: cache={cache[int(i)]}, sieve={bool(reference[i])}")

    if verbose:
        if len(mismatches) == 0:
            print(f"  ✓ All {size:,} bits match ({cache.count:,} primes)")
        else:
            print(f"  ✗ {len(mismatches):,} mismatches found")

    return len(mismatches) == 0


def verify_beyond_cache(size: int, limit: int, verbose: bool = True) -> bool:
    """Verify is_prime on [size, limit] with a cache of the given size."""
    if verbose:
        print(f"\n=== Verifying trial division on [{size:,}, {limit:,}] ===")

    cache = PrimeCache(size)
    reference = prime_flags_upto(limit)

    errors = 0
    for n in range(size, limit + 1):
        got = is_prime(n, cache=cache) is not None
        if got != reference[n]:
            errors += 1
            if errors <= 10:
                print(f"  MISMATCH at n={n}: is_prime={got}, sieve={bool(reference[n])}")

    expected = np.flatnonzero(reference[size:]) + size
    listed = primes_between(size, limit, cache=cache)
    if listed != expected.tolist():
        errors += 1
        print(f"  MISMATCH primes_between: {len(listed):,} listed, {len(expected):,} expected")

    if verbose:
        if errors == 0:
            print(f"  ✓ All {limit - size + 1:,} values match")
        else:
            print(f"  ✗ {errors:,} errors")

    return errors == 0


def verify_factorizations(size: int, count: int, seed: int = 0, verbose: bool = True) -> bool:
    """Verify prime_factors on random integers, some above size**2."""
    if verbose:
        print(f"\n=== Verifying {count:,} factorizations (cache size={size:,}) ===")

    cache = PrimeCache(size)
    rng = np.random.default_rng(seed)
    samples = rng.integers(2, 4 * size * size, size=count).tolist()

    errors = 0
    for n in samples:
        factors = prime_factors(n, cache=cache)
        ok = (
            factors is not None
            and prod(factors) == n
            and factors == sorted(factors)
            and all(is_prime(p, cache=cache) == p for p in factors)
        )
        if not ok:
            errors += 1
            if errors <= 10:
                print(f"  MISMATCH at n={n}: factors={factors}")

    if verbose:
        if errors == 0:
            print(f"  ✓ All {count:,} factorizations check out")
        else:
            print(f"  ✗ {errors:,} errors")

    return errors == 0


def main():
    parser = argparse.ArgumentParser(description='Verify prime cache correctness')
    parser.add_argument('--size', type=int, default=CACHE_SIZE,
                        help='Cache size for the bit comparison')
    parser.add_argument('--small-size', type=int, default=1024,
                        help='Cache size for the beyond-cache checks')
    parser.add_argument('--samples', type=int, default=2000,
                        help='Number of random factorizations')
    args = parser.parse_args()

    results = [
        verify_cache_bits(args.size),
        verify_beyond_cache(args.small_size, args.small_size ** 2 // 4),
        verify_factorizations(args.small_size, args.samples),
    ]

    print()
    if all(results):
        print("✓ All checks passed")
        return 0
    print("✗ Some checks failed")
    return 1


if __name__ == '__main__':
    sys.exit(main())
