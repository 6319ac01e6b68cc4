"""Errors raised before a scan starts: bad roots, options and config sources."""

from pathlib import Path
from typing import Any

from .base import DepmapError


class ConfigurationError(DepmapError):
    """Options, config files or arguments that cannot be used."""


class InvalidPathError(ConfigurationError):
    """A project root that is missing or not a directory."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Unusable project root: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """A single configuration value (e.g. a DEPMAP_* variable) that does not parse."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Cannot parse {key}={value!r}",
            details={"key": key, "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
