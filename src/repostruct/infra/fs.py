from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the directory lister used by the structural matcher, plus
cross-platform path helpers for the user data directory and path
normalization. The matcher only depends on the DirectoryLister protocol so
it can run against an in-memory tree in tests.
"""

import fnmatch
import os
from typing import List, Optional, Protocol, Tuple

from repostruct.domain.errors import PathInaccessible, PathNotFound

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "RepoStruct"
UNIX_APP_DIR_NAME = ".repostruct"

# -----------------------------------------------------------------------------
# DIRECTORY LISTER API
# -----------------------------------------------------------------------------

class DirectoryLister(Protocol):
    """Capability to enumerate the immediate entries of a directory."""

    def list_files(self, path: str, pattern: str) -> List[str]:
        """Names of immediate files of 'path' matching 'pattern'."""
        ...

    def list_directories(self, path: str, pattern: str) -> List[str]:
        """Names of immediate subdirectories of 'path' matching 'pattern'."""
        ...

    def join(self, path: str, name: str) -> str:
        """Path of the entry 'name' inside 'path'."""
        ...


class LocalDirectoryLister:
    """
    DirectoryLister backed by the local filesystem.

    Name matching uses fnmatch, which applies the host case convention
    (case-insensitive on Windows). Hidden entries are included. Symbolic
    links are classified by their target.
    """

    def list_files(self, path: str, pattern: str) -> List[str]:
        files, _ = self._scan(path)
        return _filter_names(files, pattern)

    def list_directories(self, path: str, pattern: str) -> List[str]:
        _, dirs = self._scan(path)
        return _filter_names(dirs, pattern)

    def join(self, path: str, name: str) -> str:
        return os.path.join(path, name)

    def _scan(self, path: str) -> Tuple[List[str], List[str]]:
        """Split the entries of 'path' into (files, directories)."""
        if not os.path.isdir(path):
            raise PathNotFound(path)

        files: List[str] = []
        dirs: List[str] = []
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    try:
                        is_dir = entry.is_dir()
                    except OSError:
                        is_dir = False
                    (dirs if is_dir else files).append(entry.name)
        except FileNotFoundError:
            raise PathNotFound(path)
        except NotADirectoryError:
            raise PathNotFound(path)
        except OSError as e:
            raise PathInaccessible(path, e.strerror or str(e))

        return files, dirs


def _filter_names(names: List[str], pattern: str) -> List[str]:
    """Return the sorted names matching the wildcard pattern."""
    return sorted(n for n in names if fnmatch.fnmatch(n, pattern))

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/RepoStruct
    - Linux/Mac: ~/.repostruct

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def resolve_in_root(root: str, path: str) -> str:
    """Resolve a possibly relative path against 'root'."""
    expanded = os.path.expandvars(os.path.expanduser(path))
    if os.path.isabs(expanded):
        return expanded
    return os.path.join(root, expanded)

