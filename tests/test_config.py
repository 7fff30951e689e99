"""Tests for YAML config loading and cache construction from config."""

import pytest

from src.config import DEFAULTS, DEFAULT_CONFIG_PATH, load_config, cache_from_config
from src.prime_cache import CACHE_SIZE


class TestLoadConfig:

    def test_default_file(self):
        assert DEFAULT_CONFIG_PATH.exists()
        config = load_config()
        assert config['cache_size'] == CACHE_SIZE
        assert config['verbose'] is False

    def test_custom_file(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("cache_size: 1024\nverbose: true\n")
        config = load_config(path)
        assert config['cache_size'] == 1024
        assert config['verbose'] is True

    def test_missing_keys_use_defaults(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("verbose: true\n")
        assert load_config(path)['cache_size'] == DEFAULTS['cache_size']

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == DEFAULTS

    @pytest.mark.parametrize("text", [
        "cache_size: 1023\n",
        "cache_size: -8\n",
        "cache_size: 0\n",
        "cache_size: big\n",
        "cache_size: 1024.0\n",
    ])
    def test_malformed_cache_size(self, tmp_path, text):
        path = tmp_path / "bad.yaml"
        path.write_text(text)
        with pytest.raises(ValueError):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")


class TestCacheFromConfig:

    def test_builds_requested_size(self):
        cache = cache_from_config({'cache_size': 1024, 'verbose': False})
        assert len(cache) == 1024
        assert cache.count == 172

    def test_verbose(self, capsys):
        cache_from_config({'cache_size': 64, 'verbose': True})
        assert "Built prime cache" in capsys.readouterr().out


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
