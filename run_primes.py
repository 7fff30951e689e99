#!/usr/bin/env python3
"""
Command-line front end for the prime cache queries.

Usage:
    python run_primes.py is-prime 97
    python run_primes.py next 10 [--or-equal]
    python run_primes.py previous 10 [--or-equal]
    python run_primes.py between 10 30 [--csv primes.csv]
    python run_primes.py nth 5
    python run_primes.py factor 360 97 [--csv factors.csv]
    python run_primes.py --config config/custom.yaml factor 1000003

Queries with no answer print "none" and exit with status 1.
"""

import argparse
import sys
import time

import pandas as pd

from src.config import load_config, cache_from_config
from src.primes import (
    is_prime,
    next_prime,
    next_prime_or_equal,
    previous_prime,
    previous_prime_or_equal,
    primes_between,
    nth_prime,
)
from src.factorization import prime_factors, omega, Omega


def _print_value(value) -> int:
    if value is None:
        print("none")
        return 1
    print(value)
    return 0


def _emit_table(df: pd.DataFrame, csv_path) -> None:
    if csv_path:
        df.to_csv(csv_path, index=False)
        print(f"Saved {len(df):,} rows to {csv_path}")
    else:
        print(df.to_string(index=False))


def cmd_is_prime(args, cache) -> int:
    return _print_value(is_prime(args.n, cache=cache))


def cmd_next(args, cache) -> int:
    fn = next_prime_or_equal if args.or_equal else next_prime
    return _print_value(fn(args.n, cache=cache))


def cmd_previous(args, cache) -> int:
    fn = previous_prime_or_equal if args.or_equal else previous_prime
    return _print_value(fn(args.n, cache=cache))


def cmd_nth(args, cache) -> int:
    return _print_value(nth_prime(args.n, cache=cache))


def cmd_between(args, cache) -> int:
    primes = primes_between(args.lo, args.hi, cache=cache)
    df = pd.DataFrame({'prime': pd.Series(primes, dtype='int64')})
    df['gap'] = df['prime'].diff().fillna(0).astype(int)
    _emit_table(df, args.csv)
    print(f"\n{len(primes):,} primes in [{args.lo:,}, {args.hi:,}]")
    return 0


def cmd_factor(args, cache) -> int:
    rows = []
    status = 0
    for n in args.numbers:
        factors = prime_factors(n, cache=cache)
        if factors is None:
            status = 1
        rows.append({
            'n': n,
            'factors': ' '.join(map(str, factors)) if factors else 'none',
            'omega': omega(n, cache=cache),
            'Omega': Omega(n, cache=cache),
        })
    _emit_table(pd.DataFrame(rows), args.csv)
    return status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Primality, prime enumeration and factorization')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to config file (default: config/default.yaml)')
    parser.add_argument('--verbose', action='store_true',
                        help='Print cache build and timing information')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('is-prime', help='Print n if it is prime')
    p.add_argument('n', type=int)
    p.set_defaults(func=cmd_is_prime)

    p = sub.add_parser('next', help='Smallest prime above n')
    p.add_argument('n', type=int)
    p.add_argument('--or-equal', action='store_true', help='Accept n itself')
    p.set_defaults(func=cmd_next)

    p = sub.add_parser('previous', help='Largest prime below n')
    p.add_argument('n', type=int)
    p.add_argument('--or-equal', action='store_true', help='Accept n itself')
    p.set_defaults(func=cmd_previous)

    p = sub.add_parser('between', help='All primes in [lo, hi]')
    p.add_argument('lo', type=int)
    p.add_argument('hi', type=int)
    p.add_argument('--csv', type=str, default=None, help='Write the table to CSV')
    p.set_defaults(func=cmd_between)

    p = sub.add_parser('nth', help='The n-th prime (1-based)')
    p.add_argument('n', type=int)
    p.set_defaults(func=cmd_nth)

    p = sub.add_parser('factor', help='Prime factors with multiplicity')
    p.add_argument('numbers', type=int, nargs='+')
    p.add_argument('--csv', type=str, default=None, help='Write the table to CSV')
    p.set_defaults(func=cmd_factor)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    if args.verbose:
        config['verbose'] = True

    cache = cache_from_config(config)

    start = time.time()
    status = args.func(args, cache)
    if config['verbose']:
        print(f"    Query completed in {time.time() - start:.3f}s")
    return status


if __name__ == '__main__':
    sys.exit(main())
