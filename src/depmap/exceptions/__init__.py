"""Exception hierarchy for depmap."""

from .analysis import AnalysisError, FileAccessError
from .base import DepmapError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "DepmapError",
    "AnalysisError",
    "FileAccessError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
