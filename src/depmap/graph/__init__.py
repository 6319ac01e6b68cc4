"""Dependency graph: models, construction, algorithms and metrics."""

from .builder import GraphBuilder, dependency_strength
from .models import (
    DependencyGraph,
    DependencyRelationship,
    FileRelationship,
    GraphMetrics,
    ModuleSystem,
)

__all__ = [
    "GraphBuilder",
    "dependency_strength",
    "DependencyGraph",
    "DependencyRelationship",
    "FileRelationship",
    "GraphMetrics",
    "ModuleSystem",
]
