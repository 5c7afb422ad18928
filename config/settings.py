"""
Application configuration for arb-config-api.

Values are resolved in three layers, later layers winning:
  1. built-in defaults (class attributes below)
  2. a TOML file (CONFIG_FILE, default "config/config.toml")
  3. environment variables (python-dotenv loads .env first)

Note:
- The API key is read once here and handed to the HTTP layer; nothing mutates it afterwards.
- An empty API key means "no key configured" (open access, development only).
- Empty environment variables are ignored with a warning; they never override the file.
"""

from __future__ import annotations

import logging
import os
import tomllib
from typing import Any, Dict, List, Mapping, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config/config.toml"

# (section, key in file) -> settings attribute
_FILE_KEYS: Dict[tuple[str, str], str] = {
    ("server", "host"): "SERVER_HOST",
    ("server", "port"): "SERVER_PORT",
    ("server", "log_level"): "LOG_LEVEL",
    ("server", "api_key"): "API_KEY",
    ("database", "uri"): "MONGODB_URL",
    ("database", "database"): "MONGODB_DB_NAME",
    ("database", "connection_timeout_ms"): "MONGODB_TIMEOUT_MS",
    ("database", "max_pool_size"): "MONGODB_MAX_POOL_SIZE",
    ("cors", "allowed_origins"): "CORS_ORIGINS",
    ("bootstrap", "max_amount_usd"): "BOOTSTRAP_MAX_AMOUNT_USD",
    ("bootstrap", "recheck_interval"): "BOOTSTRAP_RECHECK_INTERVAL",
}

# env var -> settings attribute
_ENV_KEYS: Dict[str, str] = {
    "SERVER_HOST": "SERVER_HOST",
    "SERVER_PORT": "SERVER_PORT",
    "LOG_LEVEL": "LOG_LEVEL",
    "API_KEY": "API_KEY",
    "MONGODB_URI": "MONGODB_URL",
    "MONGODB_DATABASE": "MONGODB_DB_NAME",
    "MONGODB_TIMEOUT_MS": "MONGODB_TIMEOUT_MS",
    "MONGODB_MAX_POOL_SIZE": "MONGODB_MAX_POOL_SIZE",
    "CORS_ORIGINS": "CORS_ORIGINS",
    "BOOTSTRAP_MAX_AMOUNT_USD": "BOOTSTRAP_MAX_AMOUNT_USD",
    "BOOTSTRAP_RECHECK_INTERVAL": "BOOTSTRAP_RECHECK_INTERVAL",
}

_INT_KEYS = {"SERVER_PORT", "MONGODB_TIMEOUT_MS", "MONGODB_MAX_POOL_SIZE", "BOOTSTRAP_RECHECK_INTERVAL"}
_FLOAT_KEYS = {"BOOTSTRAP_MAX_AMOUNT_USD"}


class Settings:
    """
    Configuration settings for the arb-config-api service.
    """

    APP_NAME: str = "arb-config-api"
    LOG_LEVEL: str = "INFO"

    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8081

    # Mongo
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "arbitrage_bot"
    MONGODB_TIMEOUT_MS: int = 5000
    MONGODB_MAX_POOL_SIZE: int = 10

    # Auth (None -> open access)
    API_KEY: Optional[str] = None

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Used only if Mongo has no config document yet
    BOOTSTRAP_MAX_AMOUNT_USD: float = 1000.0
    BOOTSTRAP_RECHECK_INTERVAL: int = 60

    def __init__(self, **values: Any) -> None:
        for name, value in values.items():
            if not hasattr(type(self), name):
                raise ValueError(f"unknown setting: {name}")
            setattr(self, name, _coerce(name, value))
        self.LOG_LEVEL = str(self.LOG_LEVEL).upper()
        self.API_KEY = _normalize_api_key(self.API_KEY)
        self.CORS_ORIGINS = list(self.CORS_ORIGINS)

    @property
    def api_key_configured(self) -> bool:
        return self.API_KEY is not None

    @classmethod
    def load(
        cls,
        config_file: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """
        Build settings from the TOML file, then apply environment overrides.

        Args:
            config_file: Path to the TOML file. Defaults to $CONFIG_FILE or config/config.toml.
            environ: Environment mapping (defaults to os.environ).

        Returns:
            A fully resolved Settings instance.
        """
        env = os.environ if environ is None else environ
        path = config_file or env.get("CONFIG_FILE") or DEFAULT_CONFIG_FILE

        values: Dict[str, Any] = {}
        values.update(_read_file(path))
        for env_name, attr in _ENV_KEYS.items():
            if env_name not in env:
                continue
            if not str(env[env_name]).strip():
                # empty values never override the file (a blank API_KEY would open access)
                logger.warning("Ignoring empty environment variable %s", env_name)
                continue
            values[attr] = env[env_name]
        return cls(**values)


def _read_file(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        logger.info("Config file %s not found, using defaults and environment", path)
        return {}

    with open(path, "rb") as fh:
        try:
            raw = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"invalid config file {path}: {exc}") from exc

    out: Dict[str, Any] = {}
    for (section, key), attr in _FILE_KEYS.items():
        block = raw.get(section) or {}
        if key in block:
            out[attr] = block[key]
    logger.info("Config loaded from %s", path)
    return out


def _coerce(name: str, value: Any) -> Any:
    if value is None:
        return None
    if name in _INT_KEYS:
        return int(value)
    if name in _FLOAT_KEYS:
        return float(value)
    if name == "CORS_ORIGINS" and isinstance(value, str):
        return [s.strip() for s in value.split(",") if s.strip()]
    return value


def _normalize_api_key(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


settings = Settings.load()
