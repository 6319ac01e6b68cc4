"""Aggregate cohesion, coupling and degree statistics."""

import numpy as np

from .models import DependencyRelationship, FileRelationship, GraphMetrics

# Average out-degree treated as maximal coupling
_COUPLING_SCALE = 10.0


def calculate_cohesion(nodes: dict[str, FileRelationship]) -> float:
    """Mean fraction of reciprocal dependencies over connected nodes.

    For each node with at least one connection: the number of its
    dependencies that also depend back on it, divided by its total
    connection count (dependencies + dependents).
    """
    fractions = []
    for path, node in nodes.items():
        total = len(node.dependencies) + len(node.dependents)
        if total == 0:
            continue
        reciprocal = sum(
            1 for dep in node.dependencies if dep in nodes and path in nodes[dep].dependencies
        )
        fractions.append(reciprocal / total)

    if not fractions:
        return 0.0
    return float(np.mean(fractions))


def calculate_coupling(total_files: int, total_dependencies: int) -> float:
    """Average out-degree normalized to [0, 1]."""
    if total_files == 0:
        return 0.0
    return min(1.0, (total_dependencies / total_files) / _COUPLING_SCALE)


def calculate_metrics(
    nodes: dict[str, FileRelationship],
    edges: list[DependencyRelationship],
    cycles: list[list[str]],
) -> GraphMetrics:
    """Compute GraphMetrics for a fully built node/edge set."""
    total_files = len(nodes)
    total_dependencies = len(edges)

    out_degrees = np.array([len(n.dependencies) for n in nodes.values()], dtype=int)
    max_dependencies = int(out_degrees.max()) if out_degrees.size else 0

    return GraphMetrics(
        total_files=total_files,
        total_dependencies=total_dependencies,
        average_dependencies=total_dependencies / total_files if total_files else 0.0,
        max_dependencies=max_dependencies,
        cyclic_dependency_count=len(cycles),
        cohesion=calculate_cohesion(nodes),
        coupling=calculate_coupling(total_files, total_dependencies),
    )
