"""Path alias configuration (tsconfig/jsconfig ``compilerOptions.paths``).

The table is built once per analyzer and never mutated afterwards.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from ..logging_config import get_logger

logger = get_logger(__name__)

_WILDCARD_SUFFIX = "/*"

DEFAULT_ALIAS_CONFIG_FILES = ("tsconfig.json", "jsconfig.json")


@dataclass(frozen=True)
class AliasEntry:
    """One alias prefix and the absolute path prefix it stands for."""

    alias: str
    target: str


@dataclass(frozen=True)
class AliasTable:
    """Immutable alias lookup.

    Entries are kept longest-alias-first so that ``@app/core`` wins over
    ``@app`` when both are configured.
    """

    entries: tuple[AliasEntry, ...] = field(default_factory=tuple)
    base_url: str = ""

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def resolve(self, specifier: str) -> Optional[str]:
        """Substitute the matching alias prefix with its target path.

        The specifier must equal an alias or continue it with ``/``; the
        remainder after the prefix is appended to the target.
        """
        for entry in self.entries:
            if specifier == entry.alias:
                return entry.target
            if specifier.startswith(entry.alias + "/"):
                remainder = specifier[len(entry.alias) + 1 :]
                return os.path.normpath(os.path.join(entry.target, remainder))
        return None


def _strip_wildcard(value: str) -> str:
    if value.endswith(_WILDCARD_SUFFIX):
        return value[: -len(_WILDCARD_SUFFIX)]
    return value


def build_alias_table(root: Union[str, Path], compiler_options: dict) -> AliasTable:
    """Build an AliasTable from a ``compilerOptions`` mapping.

    Malformed pieces are skipped rather than reported.
    """
    base_url = compiler_options.get("baseUrl") or ""
    if not isinstance(base_url, str):
        base_url = ""

    paths = compiler_options.get("paths") or {}
    if not isinstance(paths, dict):
        return AliasTable(base_url=base_url)

    base_dir = os.path.join(str(root), base_url)
    entries: list[AliasEntry] = []
    for alias, targets in paths.items():
        if not isinstance(targets, list) or not targets or not isinstance(targets[0], str):
            continue
        key = _strip_wildcard(alias)
        if not key:
            continue
        target = os.path.normpath(os.path.abspath(os.path.join(base_dir, _strip_wildcard(targets[0]))))
        entries.append(AliasEntry(alias=key, target=target))

    entries.sort(key=lambda e: len(e.alias), reverse=True)
    return AliasTable(entries=tuple(entries), base_url=base_url)


def load_alias_table(
    root: Union[str, Path],
    config_files: Iterable[str] = DEFAULT_ALIAS_CONFIG_FILES,
) -> AliasTable:
    """Load path aliases from the first config file found under ``root``.

    A missing or malformed file yields an empty table, never an error.
    """
    for name in config_files:
        config_path = Path(root) / name
        if not config_path.is_file():
            continue
        try:
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.debug(f"Ignoring unreadable alias config {config_path}: {e}")
            return AliasTable()

        compiler_options = data.get("compilerOptions") if isinstance(data, dict) else None
        if not isinstance(compiler_options, dict):
            logger.debug(f"No compilerOptions in {config_path}")
            return AliasTable()

        table = build_alias_table(root, compiler_options)
        logger.debug(f"Loaded {len(table)} path aliases from {config_path}")
        return table

    return AliasTable()
