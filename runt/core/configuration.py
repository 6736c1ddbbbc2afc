"""
Configuration for runt.

A small YAML mapping, every key optional:

    max_parallel: 4
    source: "Runt Demo"
    tags: []
    chunk_size: 4096
    log_level: WARNING
    log_file: null

Lookup order is an explicit path, then the RUNT_CONFIG environment variable,
then built-in defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .errors import ConfigurationError
from .events import DEFAULT_SOURCE
from .launcher import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_PARALLEL

logger = logging.getLogger(__name__)

CONFIG_ENV = "RUNT_CONFIG"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RuntConfig:
    max_parallel: int = DEFAULT_MAX_PARALLEL
    source: str = DEFAULT_SOURCE
    tags: List[str] = field(default_factory=list)
    chunk_size: int = DEFAULT_CHUNK_SIZE
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RuntConfig":
        """Create RuntConfig from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
        cfg = cls(**data)
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if not isinstance(self.max_parallel, int) or isinstance(self.max_parallel, bool) or self.max_parallel < 1:
            raise ConfigurationError(f"max_parallel must be a positive integer, got {self.max_parallel!r}")
        if not isinstance(self.chunk_size, int) or isinstance(self.chunk_size, bool) or self.chunk_size < 1:
            raise ConfigurationError(f"chunk_size must be a positive integer, got {self.chunk_size!r}")
        if not isinstance(self.source, str) or not self.source:
            raise ConfigurationError("source must be a non-empty string")
        if not isinstance(self.tags, list) or not all(isinstance(t, str) for t in self.tags):
            raise ConfigurationError("tags must be a list of strings")
        if str(self.log_level).upper() not in _LOG_LEVELS:
            raise ConfigurationError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        self.log_level = str(self.log_level).upper()
        if self.log_file is not None and (not isinstance(self.log_file, str) or not self.log_file):
            raise ConfigurationError("log_file must be a string path")

    def override(self, **changes: Any) -> "RuntConfig":
        """Copy with the given non-None values applied (used for CLI flags)."""
        cfg = replace(self, **{k: v for k, v in changes.items() if v is not None})
        cfg.validate()
        return cfg


def load_config(path: Optional[Union[str, Path]] = None) -> RuntConfig:
    if path is None:
        env = os.environ.get(CONFIG_ENV)
        if not env:
            return RuntConfig()
        path = env
    p = Path(path)
    try:
        raw = yaml.safe_load(p.read_text())
    except OSError as ex:
        raise ConfigurationError(f"Cannot read configuration {p}: {ex}") from ex
    except yaml.YAMLError as ex:
        raise ConfigurationError(f"Invalid YAML in {p}: {ex}") from ex
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration {p} must be a mapping")
    logger.debug("Loaded configuration from %s", p)
    return RuntConfig.from_dict(raw)
