"""Pattern-based import/export extraction.

Scans file content line by line with the rules from rules.py. This is a
best-effort extractor, not a parser: statements spanning several physical
lines are not recognized, and matches inside comments or strings are
reported like any other. Lines are split on "\n" only, so line numbers
count newlines and not other Unicode line breaks.
"""

from __future__ import annotations

import re
from typing import Optional

from .models import ExportStatement, ExportType, ImportStatement, ImportType
from .rules import ExportRuleKind, ImportRuleKind, get_rules


def _split_names(raw: Optional[str]) -> list[str]:
    """Split a brace list like ``a, b as c,`` into trimmed entries."""
    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]


class StatementExtractor:
    """Extracts ImportStatement and ExportStatement lists from source text."""

    def extract_imports(self, content: str, extension: Optional[str] = None) -> list[ImportStatement]:
        """Return every import in ``content`` ordered by line, then column."""
        rules = get_rules(extension)
        imports: list[ImportStatement] = []

        for line_no, line in enumerate(content.split("\n"), start=1):
            found: list[tuple[int, ImportStatement]] = []
            for rule in rules.import_rules:
                for match in rule.pattern.finditer(line):
                    found.append((match.start(), self._build_import(rule.kind, match, line_no)))
            found.sort(key=lambda item: item[0])
            imports.extend(stmt for _, stmt in found)

        return imports

    def extract_exports(self, content: str, extension: Optional[str] = None) -> list[ExportStatement]:
        """Return every export in ``content`` ordered by line, then column."""
        rules = get_rules(extension)
        exports: list[ExportStatement] = []

        for line_no, line in enumerate(content.split("\n"), start=1):
            found: list[tuple[int, ExportStatement]] = []
            for rule in rules.export_rules:
                for match in rule.pattern.finditer(line):
                    found.append((match.start(), self._build_export(rule.kind, match, line_no)))
            found.sort(key=lambda item: item[0])
            exports.extend(stmt for _, stmt in found)

        return exports

    # ── Rule dispatch ──────────────────────────────────────────

    @staticmethod
    def _build_import(kind: ImportRuleKind, match: re.Match, line: int) -> ImportStatement:
        if kind is ImportRuleKind.NAMED:
            return ImportStatement(source=match.group(2), imported=_split_names(match.group(1)), line=line)

        if kind is ImportRuleKind.DEFAULT_AND_NAMED:
            imported = [match.group(1)] + _split_names(match.group(2))
            return ImportStatement(source=match.group(3), imported=imported, is_default=True, line=line)

        if kind is ImportRuleKind.DEFAULT:
            return ImportStatement(
                source=match.group(2), imported=[match.group(1)], is_default=True, line=line
            )

        if kind is ImportRuleKind.NAMESPACE:
            return ImportStatement(source=match.group(2), imported=["*"], alias=match.group(1), line=line)

        if kind is ImportRuleKind.SIDE_EFFECT:
            return ImportStatement(source=match.group(1), line=line)

        if kind is ImportRuleKind.TYPE_NAMED:
            return ImportStatement(
                source=match.group(2),
                imported=_split_names(match.group(1)),
                is_type_only=True,
                line=line,
            )

        if kind is ImportRuleKind.TYPE_DEFAULT:
            return ImportStatement(
                source=match.group(2),
                imported=[match.group(1)],
                is_type_only=True,
                is_default=True,
                line=line,
            )

        if kind is ImportRuleKind.REQUIRE:
            destructured = match.group(1)
            if destructured is not None:
                return ImportStatement(
                    source=match.group(3),
                    imported=_split_names(destructured),
                    type=ImportType.REQUIRE,
                    line=line,
                )
            return ImportStatement(
                source=match.group(3),
                imported=[match.group(2)],
                type=ImportType.REQUIRE,
                is_default=True,
                line=line,
            )

        if kind is ImportRuleKind.DYNAMIC:
            return ImportStatement(source=match.group(1), type=ImportType.DYNAMIC, line=line)

        raise ValueError(f"Unhandled import rule kind: {kind}")

    @staticmethod
    def _build_export(kind: ExportRuleKind, match: re.Match, line: int) -> ExportStatement:
        if kind is ExportRuleKind.NAMED:
            return ExportStatement(exported=_split_names(match.group(1)), source=match.group(2), line=line)

        if kind is ExportRuleKind.DEFAULT:
            return ExportStatement(exported=["default"], is_default=True, line=line)

        if kind is ExportRuleKind.DECLARATION:
            return ExportStatement(exported=[match.group(1)], line=line)

        if kind is ExportRuleKind.REEXPORT_ALL:
            namespace = match.group(1)
            return ExportStatement(
                exported=[namespace] if namespace else ["*"], source=match.group(2), line=line
            )

        if kind is ExportRuleKind.MODULE_EXPORTS:
            return ExportStatement(
                exported=["default"], type=ExportType.MODULE_EXPORTS, is_default=True, line=line
            )

        if kind is ExportRuleKind.EXPORTS_PROPERTY:
            return ExportStatement(exported=[match.group(1)], type=ExportType.EXPORTS, line=line)

        raise ValueError(f"Unhandled export rule kind: {kind}")
