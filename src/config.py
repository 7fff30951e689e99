"""
Configuration loading.

Responsibility: read YAML config, fill defaults, validate. Nothing here
builds a cache.
"""

from pathlib import Path
from typing import Any, Dict

import yaml

from .prime_cache import CACHE_SIZE, PrimeCache, validate_cache_size

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "default.yaml"

DEFAULTS = {
    'cache_size': CACHE_SIZE,
    'verbose': False,
}


def load_config(path=None) -> Dict[str, Any]:
    """
    Load a YAML config file merged over DEFAULTS.

    Parameters
    ----------
    path : str or Path, optional
        Config file. When None, config/default.yaml is used if present.

    Returns
    -------
    dict
        Config with 'cache_size' validated.

    Raises
    ------
    FileNotFoundError
        An explicit path does not exist.
    ValueError
        The config is not a mapping, or cache_size is malformed.
    """
    config = dict(DEFAULTS)

    if path is None:
        path = DEFAULT_CONFIG_PATH
        if not path.exists():
            return config

    with open(path) as f:
        loaded = yaml.safe_load(f)

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(loaded).__name__}")

    config.update(loaded)
    config['cache_size'] = validate_cache_size(config['cache_size'])
    config['verbose'] = bool(config['verbose'])
    return config


def cache_from_config(config: Dict[str, Any]) -> PrimeCache:
    """Build the PrimeCache a config describes."""
    return PrimeCache(config['cache_size'], verbose=config.get('verbose', False))
