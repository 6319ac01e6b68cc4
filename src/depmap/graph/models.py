"""Data models for the dependency graph.

Levels:
  Nodes: FileRelationship, one per collected source file
  Edges: DependencyRelationship, one per resolved import
  Derived: cycles, clusters, entry points, leaf nodes
  Measurements: GraphMetrics
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..scanning.models import ExportStatement, ImportStatement, ImportType

# ── Nodes ──────────────────────────────────────────────────────────


@dataclass
class FileRelationship:
    """A source file and its position in the graph.

    Edges are directed: dependencies holds the files this file imports,
    dependents the files importing it.
    """

    file_path: str
    dependencies: list[str] = field(default_factory=list)
    dependents: list[str] = field(default_factory=list)
    imports: list[ImportStatement] = field(default_factory=list)
    exports: list[ExportStatement] = field(default_factory=list)
    cyclic_dependencies: list[str] = field(default_factory=list)
    relationship_strength: float = 0.0
    is_entry_point: bool = False
    is_leaf_node: bool = False

    def classify(self) -> None:
        """Derive entry/leaf flags and strength from the current edges."""
        self.is_entry_point = not self.dependents and bool(self.dependencies)
        self.is_leaf_node = not self.dependencies and bool(self.dependents)
        self.relationship_strength = relationship_strength(
            len(self.dependencies), len(self.dependents)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": self.file_path,
            "dependencies": list(self.dependencies),
            "dependents": list(self.dependents),
            "imports": [imp.to_dict() for imp in self.imports],
            "exports": [exp.to_dict() for exp in self.exports],
            "cyclic_dependencies": list(self.cyclic_dependencies),
            "relationship_strength": self.relationship_strength,
            "is_entry_point": self.is_entry_point,
            "is_leaf_node": self.is_leaf_node,
        }


def relationship_strength(dependency_count: int, dependent_count: int) -> float:
    """Connection density of a node: total connections / 10, capped at 1."""
    total = dependency_count + dependent_count
    if total == 0:
        return 0.0
    return min(1.0, total / 10)


# ── Edges ──────────────────────────────────────────────────────────


@dataclass
class DependencyRelationship:
    """A resolved import from ``source`` to ``target``."""

    source: str
    target: str
    type: ImportType
    strength: float
    imports: list[str] = field(default_factory=list)
    line: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.source,
            "to": self.target,
            "type": self.type.value,
            "strength": round(self.strength, 4),
            "imports": list(self.imports),
            "line": self.line,
        }


# ── Measurements ───────────────────────────────────────────────────


@dataclass
class GraphMetrics:
    """Aggregate statistics over a built graph."""

    total_files: int = 0
    total_dependencies: int = 0
    average_dependencies: float = 0.0
    max_dependencies: int = 0
    cyclic_dependency_count: int = 0
    cohesion: float = 0.0  # mean reciprocal-edge fraction over connected nodes
    coupling: float = 0.0  # average out-degree / 10, capped at 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files,
            "total_dependencies": self.total_dependencies,
            "average_dependencies": round(self.average_dependencies, 4),
            "max_dependencies": self.max_dependencies,
            "cyclic_dependency_count": self.cyclic_dependency_count,
            "cohesion": round(self.cohesion, 4),
            "coupling": round(self.coupling, 4),
        }


# ── Full result ────────────────────────────────────────────────────


@dataclass
class DependencyGraph:
    """Complete result of one build_dependency_graph call.

    Built fresh per call and not mutated after it is returned.
    """

    nodes: dict[str, FileRelationship] = field(default_factory=dict)
    edges: list[DependencyRelationship] = field(default_factory=list)
    entry_points: list[str] = field(default_factory=list)
    leaf_nodes: list[str] = field(default_factory=list)
    cyclic_dependencies: list[list[str]] = field(default_factory=list)
    clusters: list[list[str]] = field(default_factory=list)
    metrics: GraphMetrics = field(default_factory=GraphMetrics)

    # Relative specifiers that pointed at no file
    unresolved_imports: dict[str, list[str]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": {path: node.to_dict() for path, node in self.nodes.items()},
            "edges": [edge.to_dict() for edge in self.edges],
            "entry_points": list(self.entry_points),
            "leaf_nodes": list(self.leaf_nodes),
            "cyclic_dependencies": [list(c) for c in self.cyclic_dependencies],
            "clusters": [list(c) for c in self.clusters],
            "metrics": self.metrics.to_dict(),
            "unresolved_imports": {k: list(v) for k, v in self.unresolved_imports.items()},
        }


@dataclass
class ModuleSystem:
    """Dominant module system of a source tree."""

    type: str  # commonjs | esmodule | amd | umd | mixed
    confidence: float = 0.0
    examples: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "confidence": round(self.confidence, 4),
            "examples": list(self.examples),
        }
