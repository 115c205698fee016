"""Configuration for the toolbox MCP servers.

This module provides configuration dataclasses for both server instances.
Values come from the environment, with hard-coded defaults for everything,
and may be overridden by command-line options.
"""

import logging
import os
from dataclasses import asdict, dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_MONGODB_URI = "mongodb://localhost:27017"
DEFAULT_MONGODB_DB = "dbname"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """
    Shared server configuration.

    All fields have sensible defaults - servers work without any configuration.
    """

    server_name: str = "file-system"
    log_level: str = "INFO"

    def is_valid(self) -> tuple[bool, str]:
        """
        Check if config values are usable.

        Returns:
            Tuple of (is_valid, error_message). If valid, error_message is empty string.

        Examples:
            >>> Config(log_level="debug").is_valid()
            (True, '')

            >>> Config(log_level="LOUD").is_valid()
            (False, 'Unknown log level: LOUD')
        """
        if self.log_level.upper() not in _LOG_LEVELS:
            return False, f"Unknown log level: {self.log_level}"
        return True, ""

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level.upper(), logging.INFO)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """
        Create from dict, using defaults for missing keys.

        Only includes keys that are actual dataclass fields, ignoring
        any extra keys in the input dict.

        Examples:
            >>> Config.from_dict({"log_level": "DEBUG", "unknown_field": 1})
            Config(server_name='file-system', log_level='DEBUG')
        """
        return cls(
            **{k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        env = os.environ if environ is None else environ
        return cls.from_dict(_shared_env(env))


@dataclass
class DocumentStoreConfig(Config):
    """
    Document-store server configuration.

    Environment:
        MONGODB_URI: which store to connect to
        MONGODB_DB: which logical database to bind
        MONGODB_CONNECT_TIMEOUT_MS: how long startup waits for the store
    """

    server_name: str = "mongodb-connector"
    uri: str = DEFAULT_MONGODB_URI
    database: str = DEFAULT_MONGODB_DB
    connect_timeout_ms: int = 5000

    def is_valid(self) -> tuple[bool, str]:
        valid, error = super().is_valid()
        if not valid:
            return valid, error
        if not self.uri:
            return False, "Connection URI must not be empty"
        if not self.database:
            return False, "Database name must not be empty"
        if self.connect_timeout_ms <= 0:
            return False, "Connect timeout must be positive"
        return True, ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DocumentStoreConfig":
        env = os.environ if environ is None else environ
        data: dict = _shared_env(env)
        if env.get("MONGODB_URI"):
            data["uri"] = env["MONGODB_URI"]
        if env.get("MONGODB_DB"):
            data["database"] = env["MONGODB_DB"]
        timeout = env.get("MONGODB_CONNECT_TIMEOUT_MS")
        if timeout:
            try:
                data["connect_timeout_ms"] = int(timeout)
            except ValueError:
                logger.warning("Ignoring non-integer MONGODB_CONNECT_TIMEOUT_MS=%r", timeout)
        return cls.from_dict(data)


def _shared_env(env: Mapping[str, str]) -> dict:
    data = {}
    if env.get("TOOLBOX_LOG_LEVEL"):
        data["log_level"] = env["TOOLBOX_LOG_LEVEL"]
    return data
