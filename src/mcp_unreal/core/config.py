"""
Bridge configuration.

Configuration is read from, in increasing order of precedence:
1. Built-in defaults
2. A YAML file (``MCP_UNREAL_CONFIG`` or an explicit path)
3. Environment variables (``MCP_UNREAL_*``)
4. Explicit keyword overrides (e.g. CLI flags)

Nothing here is required: an empty environment yields a working localhost
bridge with every capability domain enabled.
"""

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import (
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ENV_CONFIG_FILE,
    ENV_DISABLED_DOMAINS,
    ENV_ENABLED_DOMAINS,
    ENV_HOST,
    ENV_LOG_FILE,
    ENV_LOG_LEVEL,
    ENV_PORT,
    ENV_TIMEOUT,
)
from .errors import ConfigError

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _split_list(value: Any) -> Any:
    """Accept comma-separated strings wherever a list of names is expected."""
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class BridgeConfig(BaseModel):
    """Runtime configuration consumed by the bridge."""

    host: str = DEFAULT_HOST
    port: int = Field(DEFAULT_PORT, ge=1, le=65535)
    command_timeout: float = Field(
        DEFAULT_COMMAND_TIMEOUT,
        gt=0,
        description="Seconds a caller waits for a host-thread command",
    )
    enabled_domains: Optional[frozenset[str]] = Field(
        None, description="If set, only these capability domains are registered"
    )
    disabled_domains: frozenset[str] = Field(
        default_factory=frozenset, description="Capability domains never registered"
    )
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    model_config = {"frozen": True}

    @field_validator("enabled_domains", "disabled_domains", mode="before")
    @classmethod
    def _parse_domains(cls, v: Any) -> Any:
        return _split_list(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: Any) -> str:
        level = str(v).strip().upper()
        if level == "WARN":
            level = "WARNING"
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    def domain_enabled(self, domain: str) -> bool:
        """Check whether a capability domain should be registered."""
        if domain in self.disabled_domains:
            return False
        if self.enabled_domains is not None and domain not in self.enabled_domains:
            return False
        return True

    # =========================================================================
    # Loading
    # =========================================================================

    @classmethod
    def load(
        cls,
        config_file: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "BridgeConfig":
        """
        Build a configuration from file, environment and explicit overrides.

        Args:
            config_file: YAML file path (defaults to $MCP_UNREAL_CONFIG)
            environ: Environment mapping (defaults to os.environ)
            **overrides: Field values that win over everything else;
                ``None`` values are ignored

        Returns:
            Validated BridgeConfig

        Raises:
            ConfigError: If the file cannot be read or a value is invalid
        """
        env = os.environ if environ is None else environ

        data: dict[str, Any] = {}
        path = config_file or env.get(ENV_CONFIG_FILE)
        if path:
            data.update(_read_config_file(Path(path)))

        data.update(_read_environment(env))
        data.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid bridge configuration: {e}") from e


def _read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML configuration file into a plain dict."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file {path} is not valid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    logger.info(f"Loaded bridge config from {path}")
    return data


def _read_environment(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect configuration values from MCP_UNREAL_* variables."""
    mapping = {
        ENV_HOST: "host",
        ENV_PORT: "port",
        ENV_TIMEOUT: "command_timeout",
        ENV_ENABLED_DOMAINS: "enabled_domains",
        ENV_DISABLED_DOMAINS: "disabled_domains",
        ENV_LOG_LEVEL: "log_level",
        ENV_LOG_FILE: "log_file",
    }
    data: dict[str, Any] = {}
    for var, field_name in mapping.items():
        value = env.get(var)
        if value:
            data[field_name] = value
    return data
