from __future__ import annotations

"""
Structure Schema Data Models.

Provides the immutable recursive node type describing the expected content
of a repository. A schema tree is built once per run and shared read-only
between repository checks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Tuple

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class NodeKind(str, Enum):
    """Kind of filesystem entry a schema node expects."""
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class SchemaNode:
    """
    One expected entry in the structure tree.

    Attributes:
        kind: Directory or file.
        name_pattern: Entry name, wildcards ('*', '?') allowed.
        allow_other_entries: Whether unmatched entries are tolerated inside
            this directory. Only meaningful for directories and never
            inherited by descendants.
        children: Ordered expected entries (directories only).
    """
    kind: NodeKind
    name_pattern: str
    allow_other_entries: bool = True
    children: Tuple["SchemaNode", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.kind is NodeKind.FILE and self.children:
            raise ValueError(f"File node '{self.name_pattern}' cannot have children.")

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is NodeKind.FILE

    def walk(self) -> Iterator["SchemaNode"]:
        """Yield this node and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()


def directory(
        name_pattern: str,
        *children: SchemaNode,
        allow_other_entries: bool = True,
) -> SchemaNode:
    """Shorthand constructor for a directory node."""
    return SchemaNode(
        kind=NodeKind.DIRECTORY,
        name_pattern=name_pattern,
        allow_other_entries=allow_other_entries,
        children=tuple(children),
    )


def file(name_pattern: str) -> SchemaNode:
    """Shorthand constructor for a file node."""
    return SchemaNode(kind=NodeKind.FILE, name_pattern=name_pattern)
