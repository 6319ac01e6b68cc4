"""Public API for depmap.

DependencyAnalyzer is the single entry point for callers. One instance is
bound to a project root; its alias table is loaded once at construction and
shared read-only by every call.

Example:
    >>> from depmap import DependencyAnalyzer
    >>>
    >>> analyzer = DependencyAnalyzer("/path/to/project")
    >>> graph = analyzer.build_dependency_graph()
    >>> graph.metrics.total_files
    42
    >>> analyzer.map_file_relationships("/path/to/project/src/index.ts").dependents
    []
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from .config import DEFAULT_OPTIONS, AnalysisOptions
from .exceptions import FileAccessError, InvalidPathError
from .file_ops import collect_files, safe_read_file
from .graph.builder import GraphBuilder
from .graph.models import DependencyGraph, FileRelationship, ModuleSystem, relationship_strength
from .logging_config import get_logger
from .module_system import detect_module_system
from .resolution.aliases import DEFAULT_ALIAS_CONFIG_FILES, AliasTable, load_alias_table
from .resolution.resolver import ModuleResolver
from .scanning.extractor import StatementExtractor
from .scanning.models import ExportStatement, ImportStatement

logger = get_logger(__name__)

PathLike = Union[str, Path]


def _canonical(path: PathLike) -> str:
    return str(Path(path).resolve())


class DependencyAnalyzer:
    """Dependency analysis engine bound to one project root."""

    def __init__(
        self,
        root: PathLike = ".",
        alias_config_files: Optional[tuple[str, ...]] = None,
    ):
        """Initialize the analyzer.

        Args:
            root: Project root directory
            alias_config_files: Config files searched for path aliases
                (defaults to tsconfig.json, then jsconfig.json)

        Raises:
            InvalidPathError: If root is not a directory
        """
        root_path = Path(root)
        if not root_path.is_dir():
            raise InvalidPathError(root_path, "Not a directory")

        self.root = str(root_path.resolve())
        self.extractor = StatementExtractor()
        self.aliases: AliasTable = load_alias_table(
            self.root, alias_config_files or DEFAULT_ALIAS_CONFIG_FILES
        )

    # ── Per-file statements ────────────────────────────────────

    def analyze_imports(self, file: PathLike) -> list[ImportStatement]:
        """Return the import statements of one file ([] if unreadable)."""
        try:
            content = safe_read_file(file)
        except FileAccessError as e:
            logger.warning(f"Error analyzing imports in {file}: {e.reason}")
            return []
        return self.extractor.extract_imports(content, os.path.splitext(str(file))[1])

    def analyze_exports(self, file: PathLike) -> list[ExportStatement]:
        """Return the export statements of one file ([] if unreadable)."""
        try:
            content = safe_read_file(file)
        except FileAccessError as e:
            logger.warning(f"Error analyzing exports in {file}: {e.reason}")
            return []
        return self.extractor.extract_exports(content, os.path.splitext(str(file))[1])

    # ── Whole-tree operations ──────────────────────────────────

    def build_dependency_graph(self, options: Optional[AnalysisOptions] = None) -> DependencyGraph:
        """Scan the tree and build the full dependency graph.

        I/O problems on individual files or directories are logged and
        skipped; the worst outcome is an incomplete graph.
        """
        options = options or DEFAULT_OPTIONS
        files = collect_files(self.root, options)
        builder = GraphBuilder(self._resolver(options), options, self.extractor)
        return builder.build(files)

    def map_file_relationships(
        self, file: PathLike, options: Optional[AnalysisOptions] = None
    ) -> FileRelationship:
        """Describe one file's dependencies and dependents.

        Re-scans the imports of every file in the tree to find dependents;
        callers asking about many files should build one graph instead.
        Dependencies include every import that resolves, whether or not
        the target is part of the scanned file set.
        """
        options = options or DEFAULT_OPTIONS
        file_path = _canonical(file)
        resolver = self._resolver(options)

        imports = self.analyze_imports(file_path)
        exports = self.analyze_exports(file_path)

        dependencies: list[str] = []
        for statement in imports:
            resolved = resolver.resolve(statement.source, file_path)
            if resolved is not None:
                dependencies.append(resolved)

        dependents: list[str] = []
        for other in collect_files(self.root, options):
            if other == file_path:
                continue
            for statement in self.analyze_imports(other):
                if resolver.resolve(statement.source, other) == file_path:
                    dependents.append(other)
                    break

        return FileRelationship(
            file_path=file_path,
            dependencies=dependencies,
            dependents=dependents,
            imports=imports,
            exports=exports,
            cyclic_dependencies=[],
            relationship_strength=relationship_strength(len(dependencies), len(dependents)),
            is_entry_point=not dependents and bool(dependencies),
            is_leaf_node=not dependencies and bool(dependents),
        )

    def detect_module_system(self, options: Optional[AnalysisOptions] = None) -> ModuleSystem:
        """Classify the tree as commonjs, esmodule, amd, umd or mixed."""
        options = options or DEFAULT_OPTIONS
        files = collect_files(self.root, options)
        return detect_module_system(files, sample_size=options.module_system_sample_size)

    def _resolver(self, options: AnalysisOptions) -> ModuleResolver:
        return ModuleResolver(self.root, options, self.aliases)
