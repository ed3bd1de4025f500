"""Configuration management for dashlist."""

import codecs
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional
import yaml

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("table", "json", "tree")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ConfigModel:
    """Global configuration model for dashlist."""

    # Parsing
    encoding: str = "utf-8"
    strict: bool = False  # Raise on the first bad block instead of dropping it

    # Output
    output_format: str = "table"  # table, json, tree
    show_failures: bool = True

    # Diagnostics
    log_level: str = "WARNING"

    # File paths
    config_dir: str = "~/.dashlist"

    def __post_init__(self):
        """Normalize values loaded from disk."""
        self.config_dir = os.path.expanduser(self.config_dir)

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            logger.warning(f"Unknown encoding '{self.encoding}', using 'utf-8'")
            self.encoding = "utf-8"

        if self.output_format not in OUTPUT_FORMATS:
            logger.warning(f"Unknown output format '{self.output_format}', using 'table'")
            self.output_format = "table"

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            logger.warning(f"Unknown log level '{self.log_level}', using 'WARNING'")
            self.log_level = "WARNING"

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "encoding": self.encoding,
            "strict": self.strict,
            "output_format": self.output_format,
            "show_failures": self.show_failures,
            "log_level": self.log_level,
            "config_dir": self.config_dir,
        }
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping")

        known = {f.name for f in fields(cls)}
        for key in sorted(set(data) - known):
            logger.warning(f"Ignoring unknown config key '{key}'")

        return cls(**{k: v for k, v in data.items() if k in known})

    def get_config_path(self) -> Path:
        """Get the config file path."""
        return Path(self.config_dir) / "config.yaml"


class Config:
    """Configuration manager for dashlist."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file, or defaults when there is none.

        An explicit path always reloads; otherwise the cached instance wins.
        """
        if config_path is None and cls._instance is not None:
            return cls._instance

        config = ConfigModel()
        if config_path is None:
            config_path = config.get_config_path()

        if config_path.exists():
            config = ConfigModel.from_yaml(config_path.read_text(encoding="utf-8"))
            logger.debug(f"Loaded configuration from {config_path}")
        else:
            logger.debug(f"No configuration at {config_path}, using defaults")

        cls._instance = config
        return config

    @classmethod
    def save(cls, config: ConfigModel, config_path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = config.get_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(config.to_yaml(), encoding="utf-8")
        logger.info(f"Configuration saved to {config_path}")

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reload(cls) -> ConfigModel:
        """Reload configuration from file."""
        cls._instance = None
        return cls.load()


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> None:
    """Save configuration to file."""
    Config.save(config, config_path)
