"""Configuration management for view mailer."""

import os
from pathlib import Path
from typing import Optional, Dict, Any
from functools import lru_cache

from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings
import yaml
import json
from dotenv import load_dotenv

from .exceptions import ConfigurationError

ENV_PREFIX = "VIEW_MAILER_"


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Logging level")
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string"
    )
    file_path: Optional[str] = Field(None, description="Path to log file")
    max_file_size: int = Field(10 * 1024 * 1024, description="Maximum log file size in bytes")
    backup_count: int = Field(5, description="Number of backup log files to keep")
    console_output: bool = Field(True, description="Enable console logging")

    model_config = ConfigDict(env_prefix=f"{ENV_PREFIX}LOGGING_", case_sensitive=False)


class MailerSettings(BaseSettings):
    """Main mailer settings."""

    default_from: Optional[str] = Field(None, description="Sender used when a mailer sets none")
    message_encoding: str = Field("utf-8", description="Character set for rendered bodies")
    views_dir: Optional[str] = Field(None, description="Directory containing view templates")
    trim_body: bool = Field(True, description="Strip surrounding whitespace from rendered bodies")
    sender: str = Field("memory", description="Mail sender: memory or console")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        case_sensitive=False
    )


def _load_env_config() -> Dict[str, Any]:
    """Collect VIEW_MAILER_ environment variables as a nested dictionary."""
    config: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.upper().startswith(ENV_PREFIX):
            continue
        path = key[len(ENV_PREFIX):].lower().split("__")
        if path[0] not in MailerSettings.model_fields:
            continue
        target = config
        for part in path[:-1]:
            target = target.setdefault(part, {})
        target[path[-1]] = value
    return config


def _load_config_file(config_file: Path) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file."""
    if not config_file.exists():
        return {}

    with open(config_file, 'r') as f:
        if config_file.suffix.lower() in ['.yaml', '.yml']:
            return yaml.safe_load(f) or {}
        elif config_file.suffix.lower() == '.json':
            return json.load(f)
        else:
            raise ConfigurationError(f"Unsupported config file format: {config_file.suffix}")


def _merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """Merge multiple configuration dictionaries."""
    result = {}
    for config in configs:
        if config:
            for key, value in config.items():
                if isinstance(value, dict) and key in result and isinstance(result[key], dict):
                    result[key] = _merge_configs(result[key], value)
                else:
                    result[key] = value
    return result


@lru_cache()
def load_settings(
    config_dir: Optional[Path] = None,
    env_file: Optional[str] = None,
    config_file: Optional[str] = None
) -> MailerSettings:
    """
    Load mailer settings from multiple sources.

    Sources are loaded in order of precedence (later sources override earlier):
    1. Default values
    2. Configuration file (YAML/JSON)
    3. Environment file (.env) and environment variables

    Args:
        config_dir: Directory containing config files (default: current directory)
        env_file: Path to environment file (default: .env in config_dir)
        config_file: Path to configuration file (default: config.yaml in config_dir)

    Returns:
        Loaded settings instance

    Raises:
        ConfigurationError: If the merged configuration is invalid
    """
    if config_dir is None:
        config_dir = Path.cwd()
    config_dir = Path(config_dir)

    # Default paths
    if env_file is None:
        env_file = config_dir / ".env"
    else:
        env_file = Path(env_file)

    if config_file is None:
        config_file = config_dir / "config.yaml"
    else:
        config_file = Path(config_file)

    if env_file.exists():
        load_dotenv(env_file)

    file_config = _load_config_file(config_file)
    env_config = _load_env_config()

    merged_config = _merge_configs(file_config, env_config)

    try:
        return MailerSettings(**merged_config)
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}") from e
