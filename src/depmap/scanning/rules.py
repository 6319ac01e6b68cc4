"""Statement rules: the single source of truth for import/export patterns.

Each extension maps to a SyntaxRules value holding ordered, tagged rules.
The extractor dispatches on the rule kind, so a different extraction
strategy for a language only has to produce the same statement models.

Adding a language:
  1. Build a SyntaxRules with its import and export rules.
  2. Register its extensions in RULES_BY_EXTENSION.
"""

import re as _re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Pattern


class ImportRuleKind(Enum):
    NAMED = "named"
    DEFAULT_AND_NAMED = "default_and_named"
    DEFAULT = "default"
    NAMESPACE = "namespace"
    SIDE_EFFECT = "side_effect"
    TYPE_NAMED = "type_named"
    TYPE_DEFAULT = "type_default"
    REQUIRE = "require"
    DYNAMIC = "dynamic"


class ExportRuleKind(Enum):
    NAMED = "named"
    DEFAULT = "default"
    DECLARATION = "declaration"
    REEXPORT_ALL = "reexport_all"
    MODULE_EXPORTS = "module_exports"
    EXPORTS_PROPERTY = "exports_property"


@dataclass(frozen=True)
class ImportRule:
    kind: ImportRuleKind
    pattern: Pattern[str]


@dataclass(frozen=True)
class ExportRule:
    kind: ExportRuleKind
    pattern: Pattern[str]


@dataclass(frozen=True)
class SyntaxRules:
    """Everything the extractor needs to know about one syntax family."""

    name: str
    extensions: tuple[str, ...]
    import_rules: tuple[ImportRule, ...] = field(default_factory=tuple)
    export_rules: tuple[ExportRule, ...] = field(default_factory=tuple)


# ── Re-usable building blocks ──────────────────────────────────────

_IDENT = r"[A-Za-z_$][\w$]*"
_SOURCE = r"""['"]([^'"]+)['"]"""
_BRACES = r"\{\s*([^}]*?)\s*\}"

ECMASCRIPT_RULES = SyntaxRules(
    name="ecmascript",
    extensions=(".js", ".ts", ".jsx", ".tsx", ".mjs", ".cjs", ".mts", ".cts"),
    import_rules=(
        # import { a, b } from 'm'
        ImportRule(ImportRuleKind.NAMED, _re.compile(rf"\bimport\s*{_BRACES}\s*from\s*{_SOURCE}")),
        # import d, { a } from 'm'
        ImportRule(
            ImportRuleKind.DEFAULT_AND_NAMED,
            _re.compile(rf"\bimport\s+({_IDENT})\s*,\s*{_BRACES}\s*from\s*{_SOURCE}"),
        ),
        # import d from 'm'
        ImportRule(ImportRuleKind.DEFAULT, _re.compile(rf"\bimport\s+({_IDENT})\s+from\s*{_SOURCE}")),
        # import * as ns from 'm'
        ImportRule(
            ImportRuleKind.NAMESPACE,
            _re.compile(rf"\bimport\s*\*\s*as\s+({_IDENT})\s+from\s*{_SOURCE}"),
        ),
        # import 'm'
        ImportRule(ImportRuleKind.SIDE_EFFECT, _re.compile(rf"\bimport\s*{_SOURCE}")),
        # import type { T } from 'm'
        ImportRule(
            ImportRuleKind.TYPE_NAMED,
            _re.compile(rf"\bimport\s+type\s*{_BRACES}\s*from\s*{_SOURCE}"),
        ),
        # import type T from 'm'
        ImportRule(
            ImportRuleKind.TYPE_DEFAULT,
            _re.compile(rf"\bimport\s+type\s+({_IDENT})\s+from\s*{_SOURCE}"),
        ),
        # const { a } = require('m') / const x = require('m')
        ImportRule(
            ImportRuleKind.REQUIRE,
            _re.compile(
                rf"\b(?:const|let|var)\s+(?:\{{([^}}]*)\}}|({_IDENT}))\s*=\s*require\s*\(\s*{_SOURCE}\s*\)"
            ),
        ),
        # import('m')
        ImportRule(ImportRuleKind.DYNAMIC, _re.compile(rf"\bimport\s*\(\s*{_SOURCE}\s*\)")),
    ),
    export_rules=(
        # export { a, b } and export { a } from 'm'
        ExportRule(
            ExportRuleKind.NAMED,
            _re.compile(rf"\bexport\s*(?:type\s*)?{_BRACES}(?:\s*from\s*{_SOURCE})?"),
        ),
        # export default ...
        ExportRule(ExportRuleKind.DEFAULT, _re.compile(r"\bexport\s+default\b")),
        # export const x / export function f / export class C ...
        ExportRule(
            ExportRuleKind.DECLARATION,
            _re.compile(
                r"\bexport\s+(?:declare\s+)?(?:abstract\s+)?(?:async\s+)?"
                rf"(?:const|let|var|function\s*\*?|class|interface|type|enum)\s+({_IDENT})"
            ),
        ),
        # export * from 'm' / export * as ns from 'm'
        ExportRule(
            ExportRuleKind.REEXPORT_ALL,
            _re.compile(rf"\bexport\s*\*\s*(?:as\s+({_IDENT})\s+)?from\s*{_SOURCE}"),
        ),
        # module.exports = ...
        ExportRule(ExportRuleKind.MODULE_EXPORTS, _re.compile(r"\bmodule\.exports\s*=(?!=)")),
        # exports.name = ...
        ExportRule(
            ExportRuleKind.EXPORTS_PROPERTY,
            _re.compile(rf"\bexports\.({_IDENT})\s*=(?!=)"),
        ),
    ),
)

RULES_BY_EXTENSION: dict[str, SyntaxRules] = {
    ext: ECMASCRIPT_RULES for ext in ECMASCRIPT_RULES.extensions
}


def get_rules(extension: Optional[str] = None) -> SyntaxRules:
    """Return the rule set for an extension, defaulting to ECMAScript."""
    if extension is None:
        return ECMASCRIPT_RULES
    return RULES_BY_EXTENSION.get(extension.lower(), ECMASCRIPT_RULES)
