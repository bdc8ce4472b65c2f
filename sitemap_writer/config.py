"""
Configuration loader for the sitemap writer.
Handles YAML defaults configuration; every option can still be
overridden per writer instance.
"""

import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass
import yaml
from dateutil import tz

from sitemap_writer.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "sitemap.yaml"


@dataclass
class WriterConfig:
    """Default options for sitemap writers."""
    # Rotation and buffering
    max_urls_per_file: int = 50000
    buffer_size: int = 1000  # in URL items

    # Output
    use_indentation: bool = True
    timezone: str = "UTC"  # used to render <lastmod> timestamps

    # Logging
    log_level: str = "INFO"

    def __post_init__(self):
        self.max_urls_per_file = positive_int(self.max_urls_per_file, "max_urls_per_file")
        self.buffer_size = positive_int(self.buffer_size, "buffer_size")
        self.use_indentation = bool(self.use_indentation)
        if tz.gettz(self.timezone) is None:
            raise ConfigError(
                f"Unknown timezone: {self.timezone}",
                context={"timezone": self.timezone},
            )
        if not isinstance(getattr(logging, str(self.log_level).upper(), None), int):
            raise ConfigError(
                f"Unknown log level: {self.log_level}",
                context={"log_level": self.log_level},
            )

    @property
    def tzinfo(self):
        """Resolved timezone used for <lastmod> rendering."""
        return tz.gettz(self.timezone)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WriterConfig":
        return cls(
            max_urls_per_file=data.get("max_urls_per_file", 50000),
            buffer_size=data.get("buffer_size", 1000),
            use_indentation=data.get("use_indentation", True),
            timezone=data.get("timezone", "UTC"),
            log_level=data.get("log_level", "INFO"),
        )

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> "WriterConfig":
        """Load configuration from YAML file (defaults section only)."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        else:
            config_path = Path(config_path)

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML in config file {config_path}: {e}",
                context={"config_path": str(config_path)},
            ) from e

        if not isinstance(yaml_config, dict):
            raise ConfigError(
                f"Config file {config_path} must contain a mapping",
                context={"config_path": str(config_path)},
            )

        return cls.from_dict(yaml_config.get("defaults") or {})


def positive_int(value: Any, name: str) -> int:
    """Coerce an option to int, rejecting anything below 1."""
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}", context={name: value})
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}", context={name: value}) from e
    if number < 1:
        raise ConfigError(f"{name} must be at least 1, got {number}", context={name: value})
    return number


# Global config instance
_config: Optional[WriterConfig] = None


def get_config(config_path: Optional[str] = None) -> WriterConfig:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = WriterConfig.load(config_path)
    return _config


def reload_config(config_path: Optional[str] = None) -> WriterConfig:
    """Force reload the configuration."""
    global _config
    _config = WriterConfig.load(config_path)
    return _config
