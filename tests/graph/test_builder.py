"""Tests for graph/builder.py: edges, classification and derived structures."""

import os

import pytest

from depmap.config import AnalysisOptions
from depmap.file_ops import collect_files
from depmap.graph.builder import GraphBuilder, dependency_strength
from depmap.resolution.resolver import ModuleResolver
from depmap.scanning.models import ImportStatement, ImportType


def _build(root, **option_overrides):
    options = AnalysisOptions(**option_overrides)
    files = collect_files(root, options)
    return GraphBuilder(ModuleResolver(root, options), options).build(files)


def _p(root, rel):
    return os.path.join(str(root), *rel.split("/"))


# ── dependency_strength ───────────────────────────────────────────


class TestDependencyStrength:
    def test_side_effect_import(self):
        assert dependency_strength(ImportStatement(source="./a")) == 0.5

    def test_single_default_import(self):
        stmt = ImportStatement(source="./a", imported=["A"], is_default=True)
        assert dependency_strength(stmt) == 0.7

    def test_named_imports_are_capped(self):
        stmt = ImportStatement(source="./a", imported=["a", "b", "c", "d", "e"])
        assert dependency_strength(stmt) == pytest.approx(0.8)

    def test_type_only_is_halved(self):
        stmt = ImportStatement(source="./a", imported=["T"], is_type_only=True)
        assert dependency_strength(stmt) == pytest.approx(0.35)

    def test_dynamic_is_scaled(self):
        stmt = ImportStatement(source="./a", type=ImportType.DYNAMIC)
        assert dependency_strength(stmt) == pytest.approx(0.35)

    def test_never_exceeds_one(self):
        stmt = ImportStatement(source="./a", imported=["a"] * 10, is_default=True)
        assert dependency_strength(stmt) <= 1.0


# ── GraphBuilder ──────────────────────────────────────────────────


class TestGraphStructure:
    def test_chain_classification(self, chain_project):
        graph = _build(chain_project)
        a, b, c = (_p(chain_project, n) for n in ("a.js", "b.js", "c.js"))

        assert list(graph.nodes) == [a, b, c]
        assert graph.entry_points == [a]
        assert graph.leaf_nodes == [c]
        assert graph.nodes[b].dependencies == [c]
        assert graph.nodes[b].dependents == [a]
        assert not graph.nodes[b].is_entry_point
        assert not graph.nodes[b].is_leaf_node

    def test_edges_carry_statement_details(self, chain_project):
        graph = _build(chain_project)
        edge = graph.edges[0]
        assert edge.source == _p(chain_project, "a.js")
        assert edge.target == _p(chain_project, "b.js")
        assert edge.type is ImportType.IMPORT
        assert edge.strength == 0.7
        assert edge.imports == ["b"]
        assert edge.line == 1

    def test_edge_and_adjacency_agree(self, chain_project):
        graph = _build(chain_project)
        for edge in graph.edges:
            assert edge.target in graph.nodes[edge.source].dependencies
            assert edge.source in graph.nodes[edge.target].dependents

    def test_relationship_strength(self, chain_project):
        graph = _build(chain_project)
        assert graph.nodes[_p(chain_project, "b.js")].relationship_strength == pytest.approx(0.2)
        assert graph.nodes[_p(chain_project, "a.js")].relationship_strength == pytest.approx(0.1)

    def test_isolated_file_is_neither_entry_nor_leaf(self, write_tree):
        root = write_tree({"alone.js": "export const x = 1;\n"})
        graph = _build(root)
        node = graph.nodes[_p(root, "alone.js")]
        assert not node.is_entry_point
        assert not node.is_leaf_node
        assert node.relationship_strength == 0.0

    def test_imports_and_exports_recorded_on_nodes(self, chain_project):
        graph = _build(chain_project)
        node = graph.nodes[_p(chain_project, "b.js")]
        assert [i.source for i in node.imports] == ["./c"]
        assert [e.exported for e in node.exports] == [["default"]]

    def test_side_effect_edge_strength(self, write_tree):
        root = write_tree({"main.js": "import './setup';\n", "setup.js": "window.x = 1;\n"})
        [edge] = _build(root).edges
        assert edge.strength == 0.5
        assert edge.imports == []

    def test_require_and_dynamic_edges(self, write_tree):
        root = write_tree(
            {
                "main.js": "const cfg = require('./cfg');\nconst lazy = import('./lazy');\n",
                "cfg.js": "module.exports = {};\n",
                "lazy.js": "export default 1;\n",
            }
        )
        graph = _build(root)
        assert [e.type for e in graph.edges] == [ImportType.REQUIRE, ImportType.DYNAMIC]


class TestResolutionInGraph:
    def test_bare_specifiers_produce_no_edges(self, write_tree):
        root = write_tree({"app.js": "import React from 'react';\n"})
        graph = _build(root)
        assert graph.edges == []
        assert graph.unresolved_imports == {}

    def test_unresolved_relative_imports_are_recorded(self, write_tree):
        root = write_tree({"app.js": "import x from './missing';\n"})
        graph = _build(root)
        assert graph.unresolved_imports == {_p(root, "app.js"): ["./missing"]}

    def test_excluded_directory_has_no_nodes_or_edges(self, write_tree):
        root = write_tree(
            {
                "app.js": "import lib from './node_modules/lib';\n",
                "node_modules/lib/index.js": "export default 1;\n",
            }
        )
        graph = _build(root)
        assert list(graph.nodes) == [_p(root, "app.js")]
        assert graph.edges == []
        assert graph.unresolved_imports == {_p(root, "app.js"): ["./node_modules/lib"]}

    def test_type_imports_skipped_when_disabled(self, write_tree):
        root = write_tree(
            {
                "main.ts": "import type { Props } from './types';\n",
                "types.ts": "export interface Props {}\n",
            }
        )
        assert len(_build(root).edges) == 1
        assert _build(root, analyze_type_imports=False).edges == []

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_import_through_followed_link(self, write_tree):
        root = write_tree(
            {
                "main.js": "import { t } from './link';\n",
                "real/t.js": "export const t = 1;\n",
            }
        )
        os.symlink(root / "real" / "t.js", root / "link.js")

        graph = _build(root, follow_symlinks=True)
        target = _p(root, "real/t.js")
        assert list(graph.nodes) == [_p(root, "main.js"), target]
        [edge] = graph.edges
        assert edge.source == _p(root, "main.js")
        assert edge.target == target
        assert graph.unresolved_imports == {}

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_import_through_link_lands_on_target_without_following(self, write_tree):
        root = write_tree(
            {
                "main.js": "import { t } from './link';\n",
                "real/t.js": "export const t = 1;\n",
            }
        )
        os.symlink(root / "real" / "t.js", root / "link.js")

        [edge] = _build(root).edges
        assert edge.target == _p(root, "real/t.js")


class TestDerivedStructures:
    def test_mutual_import_is_one_cycle(self, mutual_project):
        graph = _build(mutual_project)
        a, b = _p(mutual_project, "a.ts"), _p(mutual_project, "b.ts")
        assert graph.cyclic_dependencies == [[a, b]]
        assert graph.metrics.cyclic_dependency_count == 1
        assert graph.nodes[a].cyclic_dependencies == [b]
        assert graph.nodes[b].cyclic_dependencies == [a]

    def test_type_and_value_import_report_cycle_per_import(self, write_tree):
        root = write_tree(
            {
                "a.ts": "import { b } from './b';\nexport interface A {}\nexport const a = 1;\n",
                "b.ts": "import type { A } from './a';\nimport { a } from './a';\nexport const b = 2;\n",
            }
        )
        graph = _build(root)
        a, b = _p(root, "a.ts"), _p(root, "b.ts")
        assert graph.cyclic_dependencies == [[a, b], [a, b]]
        assert graph.metrics.cyclic_dependency_count == 2
        assert graph.nodes[a].cyclic_dependencies == [b]

    def test_cycle_detection_disabled(self, mutual_project):
        graph = _build(mutual_project, detect_circular_dependencies=False)
        assert graph.cyclic_dependencies == []
        assert graph.metrics.cyclic_dependency_count == 0

    def test_strong_edge_forms_cluster(self, write_tree):
        root = write_tree(
            {
                "a.js": "import B, { x, y } from './b';\n",
                "b.js": "export const x = 1, y = 2;\nexport default 3;\n",
            }
        )
        graph = _build(root)
        assert graph.edges[0].strength == pytest.approx(0.9)
        assert graph.clusters == [[_p(root, "a.js"), _p(root, "b.js")]]

    def test_weak_edges_form_no_cluster(self, write_tree):
        root = write_tree({"a.js": "import './b';\n", "b.js": "\n"})
        assert _build(root).clusters == []

    def test_threshold_edge_is_not_strong(self, chain_project):
        # Every edge here has strength exactly 0.7
        assert _build(chain_project).clusters == []

    def test_metrics_disabled(self, chain_project):
        graph = _build(chain_project, calculate_metrics=False)
        assert graph.metrics.total_files == 0

    def test_chain_metrics(self, chain_project):
        metrics = _build(chain_project).metrics
        assert metrics.total_files == 3
        assert metrics.total_dependencies == 2
        assert metrics.average_dependencies == pytest.approx(2 / 3)
        assert metrics.max_dependencies == 1
        assert metrics.cohesion == 0.0


class TestDeterminism:
    def test_repeated_builds_are_identical(self, write_tree):
        root = write_tree(
            {
                "src/index.ts": "import { a } from './a';\nimport b from './b';\n",
                "src/a.ts": "import b from './b';\nexport const a = 1;\n",
                "src/b.ts": "import { a } from './a';\nexport default 2;\n",
                "src/views/page.tsx": "import * as lib from '../a';\n",
            }
        )
        first = _build(root).to_dict()
        second = _build(root).to_dict()
        assert first == second

    @pytest.mark.slow
    def test_large_generated_tree(self, write_tree):
        # 40 packages of 25 modules, each importing its predecessor; the
        # first module of every package imports the last one of the previous,
        # so the final module is the only entry point and the first the only leaf
        files = {}
        for pkg in range(40):
            for mod in range(25):
                lines = []
                if mod > 0:
                    lines.append(f"import prev from './m{mod - 1:02d}';")
                elif pkg > 0:
                    lines.append(f"import {{ tail }} from '../p{pkg - 1:02d}/m24';")
                lines.append(f"export const tail = {mod};")
                files[f"p{pkg:02d}/m{mod:02d}.ts"] = "\n".join(lines) + "\n"
        root = write_tree(files)

        graph = _build(root)
        assert graph.metrics.total_files == 1000
        assert graph.metrics.total_dependencies == 999
        assert graph.entry_points == [_p(root, "p39/m24.ts")]
        assert graph.leaf_nodes == [_p(root, "p00/m00.ts")]
        assert graph.cyclic_dependencies == []
        assert _build(root).to_dict() == graph.to_dict()
