"""Module system detection from substring indicators in sampled files."""

from __future__ import annotations

from collections import Counter

from .exceptions import FileAccessError
from .file_ops import safe_read_file
from .graph.models import ModuleSystem
from .logging_config import get_logger

logger = get_logger(__name__)

# Share of files above which a second system makes the tree "mixed"
SIGNIFICANT_SHARE = 0.2

MAX_EXAMPLES = 3

# Tie-break order when two systems have the same count
_PRIORITY = ("esmodule", "commonjs", "amd", "umd")


def _indicators(content: str) -> list[tuple[str, str]]:
    """Return (system, label) pairs for every system the content shows."""
    found = []
    if "require(" in content or "module.exports" in content or "exports." in content:
        found.append(("commonjs", "require/module.exports"))
    if "import " in content or "export " in content:
        found.append(("esmodule", "import/export"))
    if "define(" in content or "require.config" in content:
        found.append(("amd", "AMD define"))
    if "typeof exports" in content and "typeof module" in content and "define.amd" in content:
        found.append(("umd", "UMD pattern"))
    return found


def detect_module_system(files: list[str], sample_size: int = 50) -> ModuleSystem:
    """Classify the module system used by the first ``sample_size`` files.

    The most common system wins with confidence count/total, where total
    counts one hit per (file, system). If more than one system holds a
    share above 20%, the result is "mixed" with confidence 1 - max_share.
    """
    counts: Counter[str] = Counter({system: 0 for system in _PRIORITY})
    examples: list[str] = []

    for path in files[:sample_size]:
        try:
            content = safe_read_file(path)
        except FileAccessError as e:
            logger.warning(f"Skipping {path} for module system detection: {e.reason}")
            continue

        for system, label in _indicators(content):
            counts[system] += 1
            if len(examples) < MAX_EXAMPLES:
                examples.append(f"{path}: {label}")

    total = sum(counts.values())
    if total == 0:
        return ModuleSystem(type="mixed", confidence=0.0, examples=examples)

    max_count = max(counts.values())
    dominant = next(system for system in _PRIORITY if counts[system] == max_count)
    confidence = max_count / total

    significant = [system for system in _PRIORITY if counts[system] / total > SIGNIFICANT_SHARE]
    if len(significant) > 1:
        return ModuleSystem(type="mixed", confidence=1 - confidence, examples=examples)

    return ModuleSystem(type=dominant, confidence=confidence, examples=examples)
