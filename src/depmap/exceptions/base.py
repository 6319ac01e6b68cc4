"""Root of the depmap exception hierarchy."""

from typing import Any, Dict, Optional


class DepmapError(Exception):
    """Base exception for all depmap errors.

    ``details`` carries the structured context (paths, keys, reasons) that
    the CLI prints after the message or emits as JSON.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"error": type(self).__name__, "message": self.message, "details": dict(self.details)}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
