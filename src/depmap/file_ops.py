"""
File operations for depmap.

Reading source files and collecting the file set for a scan.
"""

import os
from pathlib import Path
from typing import Callable, Optional, Union

from .config import AnalysisOptions
from .exceptions import FileAccessError
from .logging_config import get_logger

logger = get_logger(__name__)

ErrorCallback = Callable[[str, Exception], None]


def safe_read_file(
    filepath: Union[str, Path],
    encoding: str = "utf-8",
    errors: str = "replace",
) -> str:
    """
    Read a text file, normalizing every failure to FileAccessError.

    Args:
        filepath: File to read
        encoding: Text encoding
        errors: How to handle encoding errors

    Returns:
        File contents as string

    Raises:
        FileAccessError: If file cannot be read
    """
    try:
        with open(filepath, encoding=encoding, errors=errors) as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FileAccessError(Path(filepath), f"Encoding error: {e}")
    except OSError as e:
        raise FileAccessError(Path(filepath), f"OS error: {e}")


def should_exclude(path: str, exclude_patterns: list[str]) -> bool:
    """
    Check if a path should be skipped based on exclusion patterns.

    A pattern excludes a path when it occurs anywhere in the path string,
    or as a whole segment bracketed by separators.

    Args:
        path: Full path to check
        exclude_patterns: Substrings to exclude

    Returns:
        True if the path should be skipped
    """
    for pattern in exclude_patterns:
        if pattern in path or f"{os.sep}{pattern}{os.sep}" in path:
            return True
    return False


def is_excluded(path: str, root: str, exclude_patterns: list[str]) -> bool:
    """
    Apply should_exclude to the part of ``path`` below ``root``.

    The location of the root itself never excludes anything; paths outside
    the root are matched whole.
    """
    rel = os.path.relpath(path, root)
    if rel == os.pardir or rel.startswith(os.pardir + os.sep):
        return should_exclude(path, exclude_patterns)
    return should_exclude(os.sep + rel, exclude_patterns)


def _log_traversal_error(path: str, error: Exception) -> None:
    logger.warning(f"Skipping unreadable directory {path}: {error}")


def collect_files(
    root: Union[str, Path],
    options: AnalysisOptions,
    on_error: Optional[ErrorCallback] = None,
) -> list[str]:
    """
    Walk ``root`` and return the absolute paths of every analyzable file.

    Entries are visited in sorted name order so repeated scans over an
    unchanged tree return the same list. A directory that cannot be listed
    is reported through ``on_error`` and its subtree skipped; the walk
    itself never raises for I/O problems.

    Args:
        root: Directory to scan
        options: Extension, exclusion, depth and symlink rules
        on_error: Callback receiving (path, exception) for traversal failures.
            Defaults to logging a warning.

    Returns:
        Canonical absolute file paths in traversal order, each listed once
        (a file reached directly and through a followed link is kept once)
    """
    report = on_error or _log_traversal_error
    extensions = options.extension_set
    root_path = str(Path(root).resolve())
    files: list[str] = []
    seen: set[str] = set()

    def excluded(path: str) -> bool:
        return is_excluded(path, root_path, options.exclude_patterns)

    def keep_file(path: str) -> None:
        if path not in seen and os.path.splitext(path)[1].lower() in extensions:
            seen.add(path)
            files.append(path)

    def traverse(directory: str, depth: int) -> None:
        if depth > options.max_depth:
            return

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            report(directory, FileAccessError(Path(directory), f"Directory scan failed: {e}"))
            return

        for entry in entries:
            full_path = entry.path
            if excluded(full_path):
                continue

            try:
                if entry.is_symlink():
                    if options.follow_symlinks:
                        follow_link(full_path, depth)
                elif entry.is_dir(follow_symlinks=False):
                    traverse(full_path, depth + 1)
                elif entry.is_file(follow_symlinks=False):
                    keep_file(full_path)
            except OSError as e:
                report(full_path, FileAccessError(Path(full_path), str(e)))

    def follow_link(link_path: str, depth: int) -> None:
        # Targets are kept under their canonical path, the same form the
        # resolver returns, so imports through the link land on the node.
        target = os.path.realpath(link_path)

        if not os.path.exists(target):
            logger.debug(f"Dangling symlink {link_path} -> {target}")
            return
        if excluded(target):
            return
        if os.path.isdir(target):
            traverse(target, depth + 1)
        elif os.path.isfile(target):
            keep_file(target)

    traverse(root_path, 0)
    logger.debug(f"Collected {len(files)} files under {root_path}")
    return files
