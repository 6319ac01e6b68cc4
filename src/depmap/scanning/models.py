"""Statement models produced by the scanning layer.

Both are immutable once extracted; each belongs to the FileRelationship
of the file it was found in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ImportType(Enum):
    """How a dependency was pulled in."""

    IMPORT = "import"
    REQUIRE = "require"
    DYNAMIC = "dynamic"


class ExportType(Enum):
    """Which export syntax produced a statement."""

    EXPORT = "export"
    MODULE_EXPORTS = "module.exports"  # module-style default
    EXPORTS = "exports"  # module-style named


@dataclass(frozen=True)
class ImportStatement:
    """One import, require or dynamic import occurrence.

    Attributes:
        source: Module specifier exactly as written
        imported: Bound names in source order; ["*"] for namespace imports,
            empty for side-effect-only and dynamic imports
        type: Import syntax family
        is_type_only: True for `import type` forms
        is_default: True when a default binding is created
        alias: Namespace binding name (`import * as alias`)
        line: 1-based line number
    """

    source: str
    imported: list[str] = field(default_factory=list)
    type: ImportType = ImportType.IMPORT
    is_type_only: bool = False
    is_default: bool = False
    alias: Optional[str] = None
    line: int = 1

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "source": self.source,
            "imported": list(self.imported),
            "type": self.type.value,
            "is_type_only": self.is_type_only,
            "is_default": self.is_default,
            "line": self.line,
        }
        if self.alias is not None:
            data["alias"] = self.alias
        return data


@dataclass(frozen=True)
class ExportStatement:
    """One export occurrence.

    Attributes:
        exported: Exported names, ["default"] or ["*"]
        type: Export syntax family
        is_default: True for default exports
        source: Module specifier for re-exports
        line: 1-based line number
    """

    exported: list[str] = field(default_factory=list)
    type: ExportType = ExportType.EXPORT
    is_default: bool = False
    source: Optional[str] = None
    line: int = 1

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "exported": list(self.exported),
            "type": self.type.value,
            "is_default": self.is_default,
            "line": self.line,
        }
        if self.source is not None:
            data["source"] = self.source
        return data
