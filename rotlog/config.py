"""Configuration module — frozen dataclass loaded from env vars and an optional YAML file."""

import logging
import os
from dataclasses import dataclass, fields

import yaml

from rotlog.errors import ConfigError
from rotlog.levels import Output, parse_level, parse_output
from rotlog.rotator import RotationPolicy

logger = logging.getLogger(__name__)

ENV_VARS = {
    "level": "LOG_LEVEL",
    "output": "LOG_OUTPUT",
    "path": "LOG_DIR",
    "filename_format": "LOG_FILENAME_FORMAT",
    "max_size_kb": "LOG_MAX_SIZE_KB",
    "max_backups": "LOG_MAX_BACKUPS",
}


@dataclass(frozen=True)
class Config:
    level: str = "INFO"              # ERROR, WARN, INFO, DEBUG, TRACE
    output: str = "STDOUT"           # STDOUT or FILE
    # the options below are ignored for STDOUT output
    path: str = "./logs"
    filename_format: str = "%Y-%m-%dT%H-%M-%S.%f.log"
    max_size_kb: int = 1024
    max_backups: int = 10

    def policy(self) -> RotationPolicy:
        return RotationPolicy(
            path=self.path,
            filename_format=self.filename_format,
            max_size_kb=self.max_size_kb,
            max_backups=self.max_backups,
        )


def _parse_int(name: str, value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(yaml_data: dict | None = None) -> Config:
    """Build Config from env vars, then YAML data, then defaults."""
    yaml_data = yaml_data or {}
    known = {f.name for f in fields(Config)}
    unknown = sorted(set(yaml_data) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

    values = {}
    for name in known:
        env_name = ENV_VARS[name]
        if env_name in os.environ:
            values[name] = os.environ[env_name]
        elif name in yaml_data:
            values[name] = yaml_data[name]

    for name in ("max_size_kb", "max_backups"):
        if name in values:
            values[name] = _parse_int(name, values[name])
    for name in ("level", "output", "path", "filename_format"):
        if name in values:
            values[name] = str(values[name])

    config = Config(**values)
    validate(config)
    return config


def validate(config: Config) -> None:
    """Raise ConfigError if *config* can't be used to build a logger."""
    parse_level(config.level)
    output = parse_output(config.output)
    if output is not Output.FILE:
        return
    if not config.path:
        raise ConfigError("path must be set for FILE output")
    if not config.filename_format:
        raise ConfigError("filename_format must be set for FILE output")
    if config.max_size_kb < 1:
        raise ConfigError(f"max_size_kb must be at least 1, got {config.max_size_kb}")
    if config.max_backups < 1:
        raise ConfigError(f"max_backups must be at least 1, got {config.max_backups}")
