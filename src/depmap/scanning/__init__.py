"""Scanning layer: statement models, rule table and extractor."""

from .extractor import StatementExtractor
from .models import ExportStatement, ExportType, ImportStatement, ImportType
from .rules import ECMASCRIPT_RULES, RULES_BY_EXTENSION, SyntaxRules, get_rules

__all__ = [
    "StatementExtractor",
    "ImportStatement",
    "ExportStatement",
    "ImportType",
    "ExportType",
    "SyntaxRules",
    "ECMASCRIPT_RULES",
    "RULES_BY_EXTENSION",
    "get_rules",
]
