"""Tests for configuration loading"""

import pytest

from rediscache.config import (
    CacheConfig,
    _ConfigStore,
    find_config_file,
    get_config,
    load_config,
    set_config,
)


def test_cache_config_defaults():
    """Test default configuration values"""
    config = CacheConfig()
    assert config.backend == "redis"
    assert config.redis_url == "redis://localhost:6379"
    assert config.redis_db == 0
    assert config.key_prefix == "cache"
    assert config.default_ttl == 604800
    assert config.serializer == "pickle"


@pytest.mark.parametrize(
    ("field", "value", "message"),
    [
        ("backend", "memcached", "Backend must be one of"),
        ("serializer", "yaml", "Serializer must be one of"),
        ("key_prefix", "", "Key prefix must not be empty"),
        ("default_ttl", 0, "Default TTL must be a positive"),
        ("default_ttl", -5, "Default TTL must be a positive"),
    ],
)
def test_cache_config_validation(field, value, message):
    """Test invalid values are rejected"""
    with pytest.raises(ValueError, match=message):
        CacheConfig(**{field: value})


def test_resolve_url(monkeypatch):
    """Test Redis URL resolution from environment"""
    config = CacheConfig(redis_url="redis://default:6379", redis_url_env="TEST_REDIS_URL")

    monkeypatch.delenv("TEST_REDIS_URL", raising=False)
    with pytest.raises(ValueError, match="Environment variable TEST_REDIS_URL not set"):
        config.resolve_url()

    monkeypatch.setenv("TEST_REDIS_URL", "redis://from-env:6380")
    assert config.resolve_url() == "redis://from-env:6380"

    assert CacheConfig(redis_url="redis://plain:6379").resolve_url() == "redis://plain:6379"


def test_load_config_from_file(tmp_path):
    """Test loading config from YAML file"""
    config_file = tmp_path / ".rcache.yaml"
    config_file.write_text(
        """
redis_url: redis://cache-host:6379
redis_db: 2
key_prefix: sessions
default_ttl: 3600
serializer: json
"""
    )

    config = load_config(config_file)
    assert config.redis_url == "redis://cache-host:6379"
    assert config.redis_db == 2
    assert config.key_prefix == "sessions"
    assert config.default_ttl == 3600
    assert config.serializer == "json"


def test_load_config_cache_section(tmp_path):
    """Test settings nested under a cache: key"""
    config_file = tmp_path / "settings.yaml"
    config_file.write_text("cache:\n  key_prefix: nested\n  backend: fakeredis\n")

    config = load_config(config_file)
    assert config.key_prefix == "nested"
    assert config.backend == "fakeredis"


def test_load_config_errors(tmp_path):
    """Test config loading errors"""
    invalid_yaml = tmp_path / "invalid.yaml"
    invalid_yaml.write_text("key_prefix: [unclosed")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_config(invalid_yaml)

    not_mapping = tmp_path / "list.yaml"
    not_mapping.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="must contain a YAML object"):
        load_config(not_mapping)

    invalid_value = tmp_path / "bad.yaml"
    invalid_value.write_text("default_ttl: -1\n")
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(invalid_value)

    with pytest.raises(FileNotFoundError, match="Cannot read config file"):
        load_config(tmp_path / "missing.yaml")


def test_find_config_file(tmp_path, monkeypatch):
    """Test config discovery in parent directories"""
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    config_file = tmp_path / ".rcache.yaml"
    config_file.write_text("key_prefix: found\n")

    monkeypatch.chdir(nested)
    assert find_config_file().resolve() == config_file.resolve()
    assert load_config().key_prefix == "found"


def test_load_config_not_found(tmp_path, monkeypatch):
    """Test missing config file"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("rediscache.config.find_config_file", lambda: None)
    with pytest.raises(FileNotFoundError, match="No .rcache.yaml file found"):
        load_config()


def test_config_store():
    """Test global config instance"""
    config = CacheConfig(key_prefix="global")
    try:
        set_config(config)
        assert get_config() is config
    finally:
        _ConfigStore.clear()
