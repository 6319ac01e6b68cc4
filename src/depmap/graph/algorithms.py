"""Graph algorithms: cycle detection and strong-edge clustering."""

from collections import deque

from .models import DependencyRelationship, FileRelationship


def detect_cycles(nodes: dict[str, FileRelationship]) -> list[list[str]]:
    """Depth-first cycle search (iterative).

    Roots are taken in node order. Reaching a node that is on the active
    path emits the path from that node through the current node as one
    cycle. A node is marked visited the first time it is entered and is
    never entered again from any root, so a cycle whose only entry is
    through an already-visited node is not reported.

    Dependencies are walked as recorded, one entry per import, so a file
    importing an on-path file twice (e.g. `import type` plus a value
    import) emits that cycle twice.
    """
    cycles: list[list[str]] = []
    visited: set[str] = set()

    for root in nodes:
        if root in visited:
            continue

        visited.add(root)
        path: list[str] = [root]
        on_path: set[str] = {root}
        call_stack = [iter(nodes[root].dependencies)]

        while call_stack:
            pushed = False
            for dep in call_stack[-1]:
                if dep in on_path:
                    cycles.append(path[path.index(dep) :])
                    continue
                if dep in visited or dep not in nodes:
                    continue
                visited.add(dep)
                path.append(dep)
                on_path.add(dep)
                call_stack.append(iter(nodes[dep].dependencies))
                pushed = True
                break

            if not pushed:
                call_stack.pop()
                on_path.discard(path.pop())

    return cycles


def assign_cyclic_dependencies(
    nodes: dict[str, FileRelationship], cycles: list[list[str]]
) -> None:
    """Give every cycle member the other members of each cycle it is in."""
    for cycle in cycles:
        for member in cycle:
            node = nodes.get(member)
            if node is None:
                continue
            for other in cycle:
                if other != member and other not in node.cyclic_dependencies:
                    node.cyclic_dependencies.append(other)


def detect_clusters(
    nodes: dict[str, FileRelationship],
    edges: list[DependencyRelationship],
    threshold: float = 0.7,
) -> list[list[str]]:
    """Group nodes joined by edges stronger than ``threshold``.

    Breadth-first from each unvisited node, following dependencies and
    dependents alike. Single-node groups are dropped; every node lands in
    at most one cluster.
    """
    edge_index: dict[tuple[str, str], DependencyRelationship] = {}
    for edge in edges:
        edge_index.setdefault((edge.source, edge.target), edge)

    def strong(source: str, target: str) -> bool:
        edge = edge_index.get((source, target))
        return edge is not None and edge.strength > threshold

    clusters: list[list[str]] = []
    visited: set[str] = set()

    for start in nodes:
        if start in visited:
            continue

        cluster: list[str] = [start]
        members: set[str] = {start}
        queue: deque[str] = deque([start])

        while queue:
            current = queue.popleft()
            visited.add(current)
            node = nodes.get(current)
            if node is None:
                continue

            neighbors = [(dep, strong(current, dep)) for dep in node.dependencies]
            neighbors += [(dependent, strong(dependent, current)) for dependent in node.dependents]
            for neighbor, is_strong in neighbors:
                if neighbor in visited or neighbor in members or not is_strong:
                    continue
                cluster.append(neighbor)
                members.add(neighbor)
                queue.append(neighbor)

        if len(cluster) > 1:
            clusters.append(cluster)

    return clusters
