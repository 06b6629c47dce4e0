from __future__ import annotations

"""
Structural Matcher.

Walks a schema tree against real directories and collects every
discrepancy instead of stopping at the first one. Each level works on its
own leftover lists and returns a MatchResult; the caller combines child
results with its own in schema document order.
"""

import logging
from typing import List, Optional

from repostruct.domain.constants import (
    MSG_EXCESS_DIRECTORY,
    MSG_EXCESS_FILE,
    MSG_MISSING_DIRECTORY,
    MSG_MISSING_FILE,
)
from repostruct.domain.errors import PathInaccessible, PathNotFound
from repostruct.domain.report_models import MatchResult
from repostruct.domain.schema_models import SchemaNode
from repostruct.infra.fs import DirectoryLister, LocalDirectoryLister

logger = logging.getLogger(__name__)

ALL_ENTRIES = "*"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def match_directory(
        node: SchemaNode,
        path: str,
        allow_other_entries: bool,
        is_root: bool = False,
        lister: Optional[DirectoryLister] = None,
) -> MatchResult:
    """
    Check that the directory at 'path' satisfies the children of 'node'.

    Missing and excess entries are recorded and matching goes on, so the
    result lists every discrepancy of the subtree. A directory that cannot
    be listed yields a single failure message and is not descended into.

    Args:
        node: Directory schema node whose children describe 'path'.
        path: Directory to check.
        allow_other_entries: Whether entries not matched by any child of
            'node' are tolerated at this level.
        is_root: True for the top-level call on a repository root.
        lister: Directory listing capability. Defaults to the local filesystem.

    Returns:
        MatchResult: Combined verdict and messages for this level and below.
    """
    lister = lister or LocalDirectoryLister()

    try:
        leftover_files = lister.list_files(path, ALL_ENTRIES)
        leftover_dirs = lister.list_directories(path, ALL_ENTRIES)
    except (PathNotFound, PathInaccessible) as e:
        if is_root:
            logger.info(f"Repository root unavailable: {e}")
        else:
            logger.warning(f"Matched directory vanished or is unreadable: {e}")
        return MatchResult.failure(str(e))

    logger.debug(
        f"Matching '{path}' ({len(leftover_files)} files, {len(leftover_dirs)} dirs, "
        f"{'open' if allow_other_entries else 'closed'})"
    )

    result = MatchResult.success()

    try:
        for child in node.children:
            if child.is_directory:
                result = result.combine(
                    _match_child_directory(child, path, allow_other_entries, leftover_dirs, lister)
                )
            else:
                result = result.combine(
                    _match_child_file(child, path, allow_other_entries, leftover_files, lister)
                )
    except (PathNotFound, PathInaccessible) as e:
        # The directory changed after the initial scan; its leftovers are stale
        logger.warning(f"Directory changed while matching: {e}")
        return result.combine(MatchResult.failure(str(e)))

    if not allow_other_entries:
        result = result.combine(_excess_entries(path, leftover_files, leftover_dirs, lister))

    return result

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _match_child_directory(
        child: SchemaNode,
        path: str,
        allow_other_entries: bool,
        leftover_dirs: List[str],
        lister: DirectoryLister,
) -> MatchResult:
    """Match a directory schema node against every subdirectory it names."""
    matches = lister.list_directories(path, child.name_pattern)
    if not matches:
        return MatchResult.failure(MSG_MISSING_DIRECTORY.format(pattern=child.name_pattern))

    result = MatchResult.success()
    for name in matches:
        # Each match must satisfy the child's sub-schema on its own
        result = result.combine(match_directory(
            child,
            lister.join(path, name),
            child.allow_other_entries,
            is_root=False,
            lister=lister,
        ))
        if not allow_other_entries:
            _consume(leftover_dirs, name)
    return result


def _match_child_file(
        child: SchemaNode,
        path: str,
        allow_other_entries: bool,
        leftover_files: List[str],
        lister: DirectoryLister,
) -> MatchResult:
    """Match a file schema node; any number of matching files satisfies it."""
    matches = lister.list_files(path, child.name_pattern)
    if not matches:
        return MatchResult.failure(MSG_MISSING_FILE.format(pattern=child.name_pattern))

    # A wildcard file entry covers all of its matches
    if not allow_other_entries:
        for name in matches:
            _consume(leftover_files, name)
    return MatchResult.success()


def _excess_entries(
        path: str,
        leftover_files: List[str],
        leftover_dirs: List[str],
        lister: DirectoryLister,
) -> MatchResult:
    """Report what no schema child claimed inside a closed directory."""
    messages = [MSG_EXCESS_FILE.format(path=lister.join(path, f)) for f in leftover_files]
    messages += [MSG_EXCESS_DIRECTORY.format(path=lister.join(path, d)) for d in leftover_dirs]
    if not messages:
        return MatchResult.success()
    return MatchResult.failure(*messages)


def _consume(leftovers: List[str], name: str) -> None:
    # Overlapping patterns may consume the same name twice
    if name in leftovers:
        leftovers.remove(name)
