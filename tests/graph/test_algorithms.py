"""Unit tests for graph/algorithms.py."""

from depmap.graph.algorithms import assign_cyclic_dependencies, detect_clusters, detect_cycles
from depmap.graph.models import DependencyRelationship, FileRelationship
from depmap.scanning.models import ImportType


def _nodes(adjacency: dict[str, list[str]]) -> dict[str, FileRelationship]:
    """Build linked FileRelationship nodes from an adjacency mapping."""
    nodes = {path: FileRelationship(file_path=path) for path in adjacency}
    for path, deps in adjacency.items():
        for dep in deps:
            nodes[path].dependencies.append(dep)
            if dep in nodes:
                nodes[dep].dependents.append(path)
    return nodes


def _edge(source: str, target: str, strength: float) -> DependencyRelationship:
    return DependencyRelationship(source=source, target=target, type=ImportType.IMPORT, strength=strength)


# ── detect_cycles ─────────────────────────────────────────────────


class TestDetectCycles:
    def test_acyclic(self):
        assert detect_cycles(_nodes({"a": ["b"], "b": ["c"], "c": []})) == []

    def test_two_node_cycle(self):
        assert detect_cycles(_nodes({"a": ["b"], "b": ["a"]})) == [["a", "b"]]

    def test_self_import(self):
        assert detect_cycles(_nodes({"a": ["a"]})) == [["a"]]

    def test_cycle_starts_at_reentered_node(self):
        nodes = _nodes({"a": ["b"], "b": ["c"], "c": ["b"]})
        assert detect_cycles(nodes) == [["b", "c"]]

    def test_independent_cycles(self):
        nodes = _nodes({"a": ["b"], "b": ["a"], "c": ["d"], "d": ["c"]})
        assert detect_cycles(nodes) == [["a", "b"], ["c", "d"]]

    def test_each_import_closing_a_cycle_reports_it(self):
        # b imports a twice, both while a is on the active path
        nodes = _nodes({"a": ["b"], "b": ["a", "a"]})
        assert detect_cycles(nodes) == [["a", "b"], ["a", "b"]]

    def test_repeated_import_of_visited_node_is_not_reentered(self):
        nodes = _nodes({"a": ["b", "b"], "b": ["a"]})
        assert detect_cycles(nodes) == [["a", "b"]]

    def test_visited_nodes_are_not_reentered(self):
        # b->c->b is found from a; a second root never re-enters b or c
        nodes = _nodes({"a": ["b"], "b": ["c"], "c": ["b"], "d": ["c"]})
        assert detect_cycles(nodes) == [["b", "c"]]

    def test_unknown_dependency_is_ignored(self):
        assert detect_cycles(_nodes({"a": ["/outside.js"]})) == []

    def test_deep_chain_does_not_recurse(self):
        size = 5000
        adjacency = {f"n{i}": [f"n{i + 1}"] for i in range(size)}
        adjacency[f"n{size}"] = ["n0"]
        [cycle] = detect_cycles(_nodes(adjacency))
        assert len(cycle) == size + 1


class TestAssignCyclicDependencies:
    def test_members_get_each_other(self):
        nodes = _nodes({"a": ["b"], "b": ["c"], "c": ["a"]})
        assign_cyclic_dependencies(nodes, [["a", "b", "c"]])
        assert nodes["a"].cyclic_dependencies == ["b", "c"]
        assert nodes["c"].cyclic_dependencies == ["a", "b"]

    def test_union_across_cycles_without_duplicates(self):
        nodes = _nodes({"a": ["b", "c"], "b": ["a"], "c": ["a"]})
        assign_cyclic_dependencies(nodes, [["a", "b"], ["a", "c"]])
        assert nodes["a"].cyclic_dependencies == ["b", "c"]
        assert nodes["b"].cyclic_dependencies == ["a"]


# ── detect_clusters ───────────────────────────────────────────────


class TestDetectClusters:
    def test_strong_pair(self):
        nodes = _nodes({"a": ["b"], "b": []})
        assert detect_clusters(nodes, [_edge("a", "b", 0.9)]) == [["a", "b"]]

    def test_weak_pair(self):
        nodes = _nodes({"a": ["b"], "b": []})
        assert detect_clusters(nodes, [_edge("a", "b", 0.4)]) == []

    def test_threshold_is_exclusive(self):
        nodes = _nodes({"a": ["b"], "b": []})
        assert detect_clusters(nodes, [_edge("a", "b", 0.7)], threshold=0.7) == []

    def test_custom_threshold(self):
        nodes = _nodes({"a": ["b"], "b": []})
        assert detect_clusters(nodes, [_edge("a", "b", 0.4)], threshold=0.3) == [["a", "b"]]

    def test_follows_dependents(self):
        # c is reached from b through the edge c->b
        nodes = _nodes({"a": ["b"], "b": [], "c": ["b"]})
        edges = [_edge("a", "b", 0.9), _edge("c", "b", 0.9)]
        assert detect_clusters(nodes, edges) == [["a", "b", "c"]]

    def test_weak_link_splits_clusters(self):
        nodes = _nodes({"a": ["b"], "b": ["c"], "c": ["d"], "d": []})
        edges = [_edge("a", "b", 0.9), _edge("b", "c", 0.5), _edge("c", "d", 0.9)]
        assert detect_clusters(nodes, edges) == [["a", "b"], ["c", "d"]]

    def test_every_node_in_at_most_one_cluster(self):
        nodes = _nodes({"a": ["b", "c"], "b": ["c"], "c": []})
        edges = [_edge("a", "b", 0.9), _edge("a", "c", 0.9), _edge("b", "c", 0.9)]
        clusters = detect_clusters(nodes, edges)
        members = [m for cluster in clusters for m in cluster]
        assert sorted(members) == ["a", "b", "c"]
        assert len(members) == len(set(members))

    def test_first_edge_between_a_pair_decides(self):
        nodes = _nodes({"a": ["b", "b"], "b": []})
        edges = [_edge("a", "b", 0.5), _edge("a", "b", 0.9)]
        assert detect_clusters(nodes, edges) == []
