"""Configuration for svg2tvgt.

Settings come from, in increasing priority: built-in defaults, a YAML
config file, and ``SVG2TVGT_*`` environment variables. Command-line options
override all of them.

Example config file (``~/.config/svg2tvgt/config.yaml``)::

    dpi: 96
    quiet: false
    log_level: WARNING
    jobs: 4
    suffix: .tvgt
    languages: [en, ru]
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from svg2tvgt.exceptions import ConfigError

CONFIG_ENV_VAR = "SVG2TVGT_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/svg2tvgt/config.yaml")

DPI_RANGE = (10, 4000)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_languages(value: str) -> list[str]:
    """Split a comma-separated language list such as ``"en-US, ru-RU"``."""
    return [lang.strip() for lang in value.split(",") if lang.strip()]


@dataclass
class Config:
    """Runtime settings shared by the API and the CLI."""

    dpi: int = 96
    quiet: bool = False
    log_level: str = "WARNING"
    jobs: int = 4
    suffix: str = ".tvgt"
    languages: list[str] = field(default_factory=lambda: ["en"])

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check every field, raising ConfigError on the first bad value."""
        if isinstance(self.dpi, bool) or not isinstance(self.dpi, int):
            raise ConfigError(f"dpi must be an integer, got {self.dpi!r}")
        if not DPI_RANGE[0] <= self.dpi <= DPI_RANGE[1]:
            raise ConfigError(f"dpi must be in {DPI_RANGE[0]}..{DPI_RANGE[1]}, got {self.dpi}")
        if not isinstance(self.quiet, bool):
            raise ConfigError(f"quiet must be a boolean, got {self.quiet!r}")
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        self.log_level = self.log_level.upper()
        if isinstance(self.jobs, bool) or not isinstance(self.jobs, int) or self.jobs < 1:
            raise ConfigError(f"jobs must be a positive integer, got {self.jobs!r}")
        if not isinstance(self.suffix, str) or not self.suffix:
            raise ConfigError("suffix must be a non-empty string")
        if isinstance(self.languages, str):
            self.languages = parse_languages(self.languages)
        if (
            not isinstance(self.languages, list)
            or not self.languages
            or not all(isinstance(lang, str) and lang.strip() for lang in self.languages)
        ):
            raise ConfigError(f"languages must be a non-empty list of language tags, got {self.languages!r}")
        self.languages = [lang.strip() for lang in self.languages]

    @property
    def level(self) -> int:
        """Effective logging level; quiet mode only lets errors through."""
        if self.quiet:
            return logging.ERROR
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def load(cls, path: str | Path | None = None) -> Config:
        """Load configuration.

        Args:
            path: Explicit YAML file. Falls back to ``$SVG2TVGT_CONFIG`` and
                then to ``~/.config/svg2tvgt/config.yaml`` if it exists.

        Raises:
            ConfigError: If the file is unreadable or holds invalid values.
        """
        data: dict[str, Any] = {}

        config_path: Path | None = None
        if path is not None:
            config_path = Path(path)
        elif os.environ.get(CONFIG_ENV_VAR):
            config_path = Path(os.environ[CONFIG_ENV_VAR])
        elif DEFAULT_CONFIG_PATH.expanduser().is_file():
            config_path = DEFAULT_CONFIG_PATH.expanduser()

        if config_path is not None:
            try:
                with open(config_path, encoding="utf-8") as f:
                    loaded = yaml.safe_load(f)
            except OSError as e:
                raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
            if loaded is not None:
                if not isinstance(loaded, dict):
                    raise ConfigError(f"Config file {config_path} must contain a mapping")
                data.update(loaded)

        env_dpi = os.environ.get("SVG2TVGT_DPI")
        if env_dpi:
            try:
                data["dpi"] = int(env_dpi)
            except ValueError as e:
                raise ConfigError(f"SVG2TVGT_DPI must be an integer, got {env_dpi!r}") from e
        env_level = os.environ.get("SVG2TVGT_LOG_LEVEL")
        if env_level:
            data["log_level"] = env_level
        env_languages = os.environ.get("SVG2TVGT_LANGUAGES")
        if env_languages:
            data["languages"] = parse_languages(env_languages)

        return cls.from_dict(data)
