from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An in-memory directory lister for filesystem-free matcher tests.
3. The sample structure definition and on-disk repository builders.
"""

import fnmatch
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from repostruct.domain.errors import PathNotFound  # noqa: E402

SAMPLE_SCHEMA_XML = """\
<repoRoot>
    <directory name="Module description" allowotherfiles="no">
        <file name="Description.*" />
        <file name="Readme.txt" />
    </directory>
    <directory name="Exercises">
        <directory name="Solutions"></directory>
        <directory name="Data"></directory>
    </directory>
</repoRoot>
"""

# A tree is a dict: directory name -> sub-dict, file name -> None
FakeTree = Dict[str, Any]


# -----------------------------------------------------------------------------
# In-Memory Lister
# -----------------------------------------------------------------------------
class InMemoryLister:
    """
    DirectoryLister over a nested dict, with '/'-separated paths.

    Records every listed path so tests can assert on what was visited.
    """

    def __init__(self, tree: FakeTree) -> None:
        self.tree = tree
        self.visited: List[str] = []

    def list_files(self, path: str, pattern: str) -> List[str]:
        node = self._resolve(path)
        return sorted(k for k, v in node.items() if v is None and fnmatch.fnmatchcase(k, pattern))

    def list_directories(self, path: str, pattern: str) -> List[str]:
        node = self._resolve(path)
        return sorted(k for k, v in node.items() if v is not None and fnmatch.fnmatchcase(k, pattern))

    def join(self, path: str, name: str) -> str:
        return f"{path.rstrip('/')}/{name}"

    def _resolve(self, path: str) -> FakeTree:
        self.visited.append(path)
        node: Optional[FakeTree] = self.tree
        for part in [p for p in path.split("/") if p]:
            if not isinstance(node, dict) or not isinstance(node.get(part), dict):
                raise PathNotFound(path)
            node = node[part]
        assert node is not None
        return node


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_schema_xml() -> str:
    """A course repository structure definition."""
    return SAMPLE_SCHEMA_XML


@pytest.fixture
def make_lister() -> Callable[[FakeTree], InMemoryLister]:
    return InMemoryLister


def build_tree(base: Path, tree: FakeTree) -> Path:
    """Materialize a nested dict under 'base' (dirs for dicts, empty files for None)."""
    base.mkdir(parents=True, exist_ok=True)
    for name, sub in tree.items():
        if sub is None:
            (base / name).write_text("", encoding="utf-8")
        else:
            build_tree(base / name, sub)
    return base


@pytest.fixture
def compliant_tree() -> FakeTree:
    """A repository satisfying SAMPLE_SCHEMA_XML."""
    return {
        "Module description": {
            "Readme.txt": None,
            "Description.docx": None,
            "Description.pdf": None,
        },
        "Exercises": {
            "Solutions": {},
            "Data": {},
        },
    }


@pytest.fixture
def repos_root(tmp_path: Path, sample_schema_xml: str, compliant_tree: FakeTree) -> Path:
    """
    Repositories root on disk with the schema and two repositories.

    Structure:
    /repos
      repository_structure.xml
      /good      (compliant)
      /bad       (missing Exercises/Data, extra file in Module description)
    """
    root = tmp_path / "repos"
    root.mkdir()
    (root / "repository_structure.xml").write_text(sample_schema_xml, encoding="utf-8")

    build_tree(root / "good", compliant_tree)
    build_tree(root / "bad", {
        "Module description": {
            "Readme.txt": None,
            "Description.pdf": None,
            "extra.txt": None,
        },
        "Exercises": {"Solutions": {}},
    })
    return root
