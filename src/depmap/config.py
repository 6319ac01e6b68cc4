"""Configuration loading and management for depmap.

Options are merged in priority order:
    1. Defaults (defined in AnalysisOptions)
    2. Project config (./depmap.toml)
    3. Explicit config file
    4. Environment variables (DEPMAP_* prefix)
    5. Keyword overrides (CLI flags, API callers)

Example:
    >>> options = load_options(max_depth=4, resolve_aliases=False)
    >>> options.max_depth
    4
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

DEFAULT_EXTENSIONS = [".js", ".ts", ".jsx", ".tsx", ".mjs", ".cjs"]

DEFAULT_EXCLUDE_PATTERNS = [
    "node_modules",
    ".git",
    "dist",
    "build",
    "coverage",
    "__pycache__",
    ".venv",
    "venv",
    "target",
    "bin",
    "obj",
]

PROJECT_CONFIG_NAME = "depmap.toml"
ENV_PREFIX = "DEPMAP_"


@dataclass(frozen=True)
class AnalysisOptions:
    """Options for a single dependency analysis run.

    All fields have defaults; callers typically override only a few.

    Attributes:
        File collection:
            include_extensions: Lowercased file extensions to analyze
            exclude_patterns: Substrings; any path containing one is skipped
            max_depth: Maximum directory depth below the root (root = 0)
            follow_symlinks: Resolve symlinks one level and include targets

        Resolution:
            resolve_aliases: Apply tsconfig/jsconfig path aliases
            include_package_probe: Probe the packages directory for bare specifiers
            packages_dir: Directory (relative to root) holding installed packages

        Graph passes:
            detect_circular_dependencies: Run cycle detection
            detect_clusters: Run cluster detection
            calculate_metrics: Compute aggregate metrics
            analyze_type_imports: Let type-only imports produce edges
            cluster_strength_threshold: Edge strength an edge must exceed to join a cluster

        Module system:
            module_system_sample_size: Number of files sampled by detect_module_system
    """

    include_extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    max_depth: int = 10
    follow_symlinks: bool = False

    resolve_aliases: bool = True
    include_package_probe: bool = False
    packages_dir: str = "node_modules"

    detect_circular_dependencies: bool = True
    detect_clusters: bool = True
    calculate_metrics: bool = True
    analyze_type_imports: bool = True
    cluster_strength_threshold: float = 0.7

    module_system_sample_size: int = 50

    def __post_init__(self) -> None:
        """Validate options after initialization."""
        if self.max_depth < 0:
            raise ValueError("max_depth must be non-negative")
        if not self.include_extensions:
            raise ValueError("include_extensions must not be empty")
        for ext in self.include_extensions:
            if not ext.startswith("."):
                raise ValueError(f"extension '{ext}' must start with '.'")
        if not 0.0 <= self.cluster_strength_threshold <= 1.0:
            raise ValueError("cluster_strength_threshold must be between 0.0 and 1.0")
        if self.module_system_sample_size < 1:
            raise ValueError("module_system_sample_size must be at least 1")
        if not self.packages_dir:
            raise ValueError("packages_dir must not be empty")

    @property
    def extension_set(self) -> frozenset[str]:
        """Lowercased include extensions for membership checks."""
        return frozenset(ext.lower() for ext in self.include_extensions)


DEFAULT_OPTIONS = AnalysisOptions()


def load_options(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisOptions:
    """Merge every configuration source into one validated AnalysisOptions.

    Args:
        config_file: Optional explicit TOML file path
        **overrides: Field values from CLI flags or API callers; None
            means "not given" and leaves lower layers in place

    Raises:
        ConfigurationError: If a config file is missing or invalid, or the
            merged values fail validation
        InvalidConfigError: If an environment variable cannot be parsed
    """
    merged: dict[str, Any] = {}

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.is_file():
        merged.update(_load_toml_section(project_config))

    if config_file is not None:
        if not config_file.is_file():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_section(config_file))

    merged.update(_load_env_vars())
    merged.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return AnalysisOptions(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Read DEPMAP_<FIELD> variables for every scalar option.

    E.g. DEPMAP_MAX_DEPTH=4, DEPMAP_FOLLOW_SYMLINKS=yes,
    DEPMAP_CLUSTER_STRENGTH_THRESHOLD=0.5, DEPMAP_PACKAGES_DIR=web_modules.
    List options can only be set from TOML or keyword overrides.
    """
    type_hints = get_type_hints(AnalysisOptions)
    result: dict[str, Any] = {}

    for field_name in AnalysisOptions.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        raw = os.environ.get(env_key)
        if raw is None:
            continue

        parser = _ENV_PARSERS.get(type_hints.get(field_name))
        if parser is None:
            continue

        try:
            result[field_name] = parser(raw.strip())
        except ValueError as e:
            raise InvalidConfigError(env_key, raw, str(e))

    return result


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise ValueError(f"expected one of {', '.join(_TRUE_WORDS + _FALSE_WORDS)}, got '{value}'")


_TRUE_WORDS = ("true", "1", "yes", "on")
_FALSE_WORDS = ("false", "0", "no", "off")

_ENV_PARSERS: dict[Any, Callable[[str], Any]] = {
    bool: _parse_bool,
    int: int,
    float: float,
    str: str,
}


def _load_toml_section(path: Path) -> dict[str, Any]:
    """Parse ``path`` and return its option table.

    Options may sit at the top level or under a [depmap] table.

    Raises:
        ConfigurationError: If the file is unreadable, not valid TOML, or
            [depmap] is not a table
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file '{path}': {e}")
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in '{path}': {e}")

    section = data.get("depmap", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"[depmap] in '{path}' must be a table")
    return dict(section)
