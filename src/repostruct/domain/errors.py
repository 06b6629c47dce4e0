from __future__ import annotations

"""
Domain Error Taxonomy.

Only schema problems abort a run. Listing errors are raised by directory
listers and folded into per-repository reports by the matcher.
"""

from repostruct.domain.constants import MSG_DIR_INACCESSIBLE, MSG_DIR_NOT_FOUND


class RepoStructError(Exception):
    """Base class for all application-level errors."""


class SchemaError(RepoStructError):
    """The structure definition is missing, unreadable or malformed."""


class PathNotFound(RepoStructError):
    """
    A path to be listed does not exist or is not a directory.

    Attributes:
        path: The offending path.
    """

    def __init__(self, path: str) -> None:
        super().__init__(MSG_DIR_NOT_FOUND.format(path=path))
        self.path = path


class PathInaccessible(RepoStructError):
    """
    A directory exists but its entries cannot be listed.

    Attributes:
        path: The offending path.
        reason: Underlying OS error text.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(MSG_DIR_INACCESSIBLE.format(path=path, reason=reason))
        self.path = path
        self.reason = reason
