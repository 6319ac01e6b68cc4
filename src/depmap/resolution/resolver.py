"""Module specifier resolution.

Turns a raw specifier plus the importing file's location into a concrete
file path. Resolution order:
  1. Relative (./, ../) against the importing file's directory
  2. Absolute paths, existence check only
  3. Path aliases, then probed like a relative path
  4. Package directory probe (optional)

Targets under an excluded directory resolve to None, except through the
package probe, which exists to reach such a directory. None means "no
edge", never an error. Hits are canonical paths with symlinks resolved.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from ..config import AnalysisOptions
from ..file_ops import is_excluded
from .aliases import AliasTable


def _is_relative(specifier: str) -> bool:
    return specifier.startswith("./") or specifier.startswith("../")


class ModuleResolver:
    """Resolves import specifiers to absolute file paths."""

    def __init__(
        self,
        root: Union[str, Path],
        options: AnalysisOptions,
        aliases: Optional[AliasTable] = None,
    ):
        self.root = str(Path(root).resolve())
        self.options = options
        self.aliases = aliases or AliasTable()

    def resolve(self, specifier: str, importing_file: str) -> Optional[str]:
        """Resolve ``specifier`` as written in ``importing_file``."""
        if _is_relative(specifier):
            base = os.path.join(os.path.dirname(importing_file), specifier)
            return self._admit(self._probe(base))

        if os.path.isabs(specifier):
            if not os.path.isfile(specifier):
                return None
            return self._admit(os.path.realpath(specifier))

        if self.options.resolve_aliases and self.aliases:
            substituted = self.aliases.resolve(specifier)
            if substituted is not None:
                return self._admit(self._probe(substituted))

        if self.options.include_package_probe:
            entry = os.path.join(self.root, self.options.packages_dir, specifier)
            found = self._probe(entry)
            if found is not None:
                return found
            if os.path.exists(entry):
                return os.path.realpath(entry)

        return None

    def _admit(self, path: Optional[str]) -> Optional[str]:
        if path is None or is_excluded(path, self.root, self.options.exclude_patterns):
            return None
        return path

    def _probe(self, base: str) -> Optional[str]:
        """Try the bare path, then each extension, then each index file.

        Hits are returned as canonical paths (symlinks resolved), the form
        collect_files uses for node keys.
        """
        base = os.path.normpath(os.path.abspath(base))

        candidates = [base]
        candidates += [base + ext for ext in self.options.include_extensions]
        candidates += [os.path.join(base, f"index{ext}") for ext in self.options.include_extensions]

        for candidate in candidates:
            if os.path.isfile(candidate):
                return os.path.realpath(candidate)

        return None
