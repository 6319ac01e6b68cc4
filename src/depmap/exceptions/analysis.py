"""Errors met while scanning a tree. They are logged and skipped, never fatal to a build."""

from pathlib import Path

from .base import DepmapError


class AnalysisError(DepmapError):
    """Base class for errors raised during scanning and extraction."""


class FileAccessError(AnalysisError):
    """A source file or directory that could not be read or listed."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(f"Cannot read {filepath}", details={"filepath": str(filepath), "reason": reason})
        self.filepath = filepath
        self.reason = reason
