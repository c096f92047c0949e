"""Configuration loading and management for rediscache"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from rediscache.cache import DEFAULT_PREFIX, DEFAULT_TTL
from rediscache.serializers import SERIALIZERS

CONFIG_FILENAME = ".rcache.yaml"

BACKENDS = ["redis", "fakeredis"]


class CacheConfig(BaseModel):
    """Cache configuration"""

    backend: str = Field(default="redis", description="Store backend (redis, fakeredis)")
    redis_url: str = Field(default="redis://localhost:6379", description="Redis URL")
    redis_url_env: str | None = Field(
        default=None, description="Environment variable overriding the Redis URL"
    )
    redis_db: int = Field(default=0, description="Redis database number")
    key_prefix: str = Field(default=DEFAULT_PREFIX, description="Cache key prefix")
    default_ttl: int = Field(default=DEFAULT_TTL, description="Default TTL in seconds")
    serializer: str = Field(default="pickle", description="Value serializer (pickle, json)")

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Validate store backend"""
        if v not in BACKENDS:
            msg = f"Backend must be one of {BACKENDS}"
            raise ValueError(msg)
        return v

    @field_validator("serializer")
    @classmethod
    def validate_serializer(cls, v: str) -> str:
        """Validate serializer name"""
        if v not in SERIALIZERS:
            msg = f"Serializer must be one of {list(SERIALIZERS)}"
            raise ValueError(msg)
        return v

    @field_validator("key_prefix")
    @classmethod
    def validate_key_prefix(cls, v: str) -> str:
        if not v:
            msg = "Key prefix must not be empty"
            raise ValueError(msg)
        return v

    @field_validator("default_ttl")
    @classmethod
    def validate_default_ttl(cls, v: int) -> int:
        if v <= 0:
            msg = "Default TTL must be a positive number of seconds"
            raise ValueError(msg)
        return v

    def resolve_url(self) -> str:
        """Resolve the Redis URL, preferring redis_url_env when configured"""
        if self.redis_url_env:
            url = os.getenv(self.redis_url_env)
            if not url:
                msg = (
                    f"Environment variable {self.redis_url_env} not set. "
                    f"Please set it or remove redis_url_env."
                )
                raise ValueError(msg)
            return url
        return self.redis_url


def find_config_file() -> Path | None:
    """Find .rcache.yaml config file in current or parent directories"""
    current = Path.cwd()

    # Check current directory and up to 5 parent directories
    for _ in range(6):
        config_path = current / CONFIG_FILENAME
        if config_path.exists():
            return config_path

        # Stop at root directory
        if current.parent == current:
            break
        current = current.parent

    return None


def load_config(config_path: Path | None = None) -> CacheConfig:
    """Load configuration from YAML file

    The file holds the cache settings either at the top level or under
    a ``cache:`` key.

    Args:
        config_path: Path to config file. If None, searches for .rcache.yaml

    Returns:
        Loaded configuration object

    Raises:
        FileNotFoundError: If config file not found
        ValueError: If config is invalid
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            msg = (
                f"No {CONFIG_FILENAME} file found in current or parent directories."
            )
            raise FileNotFoundError(msg)

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in config file: {e}"
        raise ValueError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file: {e}"
        raise FileNotFoundError(msg) from e

    if not isinstance(data, dict):
        msg = "Config file must contain a YAML object"
        raise ValueError(msg)

    if isinstance(data.get("cache"), dict):
        data = data["cache"]

    try:
        return CacheConfig(**data)
    except ValidationError as e:
        msg = f"Invalid configuration: {e}"
        raise ValueError(msg) from e


class _ConfigStore:
    """Singleton store for configuration"""

    _instance: CacheConfig | None = None

    @classmethod
    def get(cls) -> CacheConfig:
        """Get the configuration instance (loads on first call)"""
        if cls._instance is None:
            cls._instance = load_config()
        return cls._instance

    @classmethod
    def set_instance(cls, config: CacheConfig) -> None:
        """Set the configuration instance (mainly for testing)"""
        cls._instance = config

    @classmethod
    def clear(cls) -> None:
        """Clear the configuration instance (mainly for testing)"""
        cls._instance = None


def get_config() -> CacheConfig:
    """Get the global configuration instance

    Returns:
        Global config object (loads on first call)
    """
    return _ConfigStore.get()


def set_config(config: CacheConfig) -> None:
    """Set the global configuration instance (mainly for testing)"""
    _ConfigStore.set_instance(config)
