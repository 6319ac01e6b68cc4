"""
depmap - Source Dependency Analysis

Extracts import/export statements from JavaScript and TypeScript trees,
resolves them to files, and builds a dependency graph with entry points,
leaf nodes, cycles, strong-edge clusters and cohesion/coupling metrics.
"""

__version__ = "0.1.0"

from .api import DependencyAnalyzer
from .config import AnalysisOptions, load_options
from .graph.models import (
    DependencyGraph,
    DependencyRelationship,
    FileRelationship,
    GraphMetrics,
    ModuleSystem,
)
from .scanning.models import ExportStatement, ExportType, ImportStatement, ImportType

__all__ = [
    "DependencyAnalyzer",  # Main entry point
    "AnalysisOptions",
    "load_options",
    "DependencyGraph",
    "DependencyRelationship",
    "FileRelationship",
    "GraphMetrics",
    "ModuleSystem",
    "ImportStatement",
    "ExportStatement",
    "ImportType",
    "ExportType",
]
