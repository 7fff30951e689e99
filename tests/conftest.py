"""Shared fixtures: small caches so the beyond-cache paths run on small numbers."""

import pytest

from src.prime_cache import PrimeCache, get_default_cache


@pytest.fixture(scope="session")
def default_cache():
    return get_default_cache()


@pytest.fixture(scope="session")
def small_cache():
    """Cache of 64 entries: 67 and above go through trial division."""
    return PrimeCache(64)
