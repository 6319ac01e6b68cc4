"""Shared test fixtures for depmap."""

from pathlib import Path
from typing import Callable

import pytest


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write a {relative_path: content} mapping under a fresh project root.

    Returns the resolved project root so paths compare equal to the
    analyzer's node keys.
    """
    root = tmp_path / "project"
    root.mkdir()

    def _write(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            p = root / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(content)
        return root.resolve()

    return _write


@pytest.fixture
def chain_project(write_tree):
    """a.js -> b.js -> c.js."""
    return write_tree(
        {
            "a.js": "import b from './b';\n",
            "b.js": "import c from './c';\nexport default 1;\n",
            "c.js": "export const value = 42;\n",
        }
    )


@pytest.fixture
def mutual_project(write_tree):
    """a.ts <-> b.ts."""
    return write_tree(
        {
            "a.ts": "import { b } from './b';\nexport const a = 1;\n",
            "b.ts": "import { a } from './a';\nexport const b = 2;\n",
        }
    )
