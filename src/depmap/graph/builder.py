"""Dependency graph construction from extracted import statements."""

import os
from typing import Optional

from ..config import AnalysisOptions
from ..exceptions import FileAccessError
from ..file_ops import safe_read_file
from ..logging_config import get_logger
from ..resolution.resolver import ModuleResolver
from ..scanning.extractor import StatementExtractor
from ..scanning.models import ImportStatement, ImportType
from .algorithms import assign_cyclic_dependencies, detect_clusters, detect_cycles
from .metrics import calculate_metrics
from .models import DependencyGraph, DependencyRelationship, FileRelationship, GraphMetrics

logger = get_logger(__name__)


def dependency_strength(statement: ImportStatement) -> float:
    """Weight of the edge an import produces, in [0, 1].

    Base 0.5, halved for type-only imports, scaled by 0.7 for dynamic
    imports; each bound name adds 0.1 (capped at 0.3) and a default
    binding adds 0.1.
    """
    strength = 0.5

    if statement.is_type_only:
        strength *= 0.5

    if statement.type is ImportType.DYNAMIC:
        strength *= 0.7

    strength += min(0.3, len(statement.imported) * 0.1)

    if statement.is_default:
        strength += 0.1

    # Rounded so threshold comparisons (strength > 0.7) see 0.7, not 0.7000000000000001
    return min(1.0, round(strength, 10))


class GraphBuilder:
    """Builds a DependencyGraph over a collected file set."""

    def __init__(
        self,
        resolver: ModuleResolver,
        options: AnalysisOptions,
        extractor: Optional[StatementExtractor] = None,
    ):
        self.resolver = resolver
        self.options = options
        self.extractor = extractor or StatementExtractor()

    def build(self, files: list[str]) -> DependencyGraph:
        """Run all passes and return the finished graph."""
        graph = DependencyGraph()

        # Pass 1: one node per file with its statements
        for path in files:
            graph.nodes[path] = self._collect_node(path)

        # Pass 2: resolve imports into edges between known nodes
        for path, node in graph.nodes.items():
            self._link_imports(graph, path, node)

        # Pass 3: classification
        for node in graph.nodes.values():
            node.classify()

        # Pass 4: derived structures
        if self.options.detect_circular_dependencies:
            graph.cyclic_dependencies = detect_cycles(graph.nodes)
            assign_cyclic_dependencies(graph.nodes, graph.cyclic_dependencies)

        if self.options.detect_clusters:
            graph.clusters = detect_clusters(
                graph.nodes, graph.edges, self.options.cluster_strength_threshold
            )

        if self.options.calculate_metrics:
            graph.metrics = calculate_metrics(graph.nodes, graph.edges, graph.cyclic_dependencies)
        else:
            graph.metrics = GraphMetrics()

        graph.entry_points = [p for p, n in graph.nodes.items() if n.is_entry_point]
        graph.leaf_nodes = [p for p, n in graph.nodes.items() if n.is_leaf_node]

        logger.info(
            f"Dependency graph: {len(graph.nodes)} files, {len(graph.edges)} edges, "
            f"{len(graph.cyclic_dependencies)} cycles, {len(graph.clusters)} clusters"
        )
        return graph

    def _collect_node(self, path: str) -> FileRelationship:
        node = FileRelationship(file_path=path)
        try:
            content = safe_read_file(path)
        except FileAccessError as e:
            logger.warning(f"Skipping statements of {path}: {e.reason}")
            return node

        extension = os.path.splitext(path)[1]
        node.imports = self.extractor.extract_imports(content, extension)
        node.exports = self.extractor.extract_exports(content, extension)
        logger.debug(f"{path}: {len(node.imports)} imports, {len(node.exports)} exports")
        return node

    def _link_imports(self, graph: DependencyGraph, path: str, node: FileRelationship) -> None:
        for statement in node.imports:
            if statement.is_type_only and not self.options.analyze_type_imports:
                continue

            resolved = self.resolver.resolve(statement.source, path)
            if resolved is None:
                if statement.source.startswith("."):
                    graph.unresolved_imports.setdefault(path, []).append(statement.source)
                continue

            target = graph.nodes.get(resolved)
            if target is None:
                continue

            node.dependencies.append(resolved)
            target.dependents.append(path)
            graph.edges.append(
                DependencyRelationship(
                    source=path,
                    target=resolved,
                    type=statement.type,
                    strength=dependency_strength(statement),
                    imports=list(statement.imported),
                    line=statement.line,
                )
            )
