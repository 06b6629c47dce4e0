from __future__ import annotations

"""
Repository List Reader.

Reads repository identifiers from a plain text file (one per line) or a CSV
file (one column). Like a spreadsheet column, the list ends at the first
empty value.
"""

import csv
import logging
import os
from typing import List

logger = logging.getLogger(__name__)


def read_repository_names(path: str, column: int = 0, start: int = 0) -> List[str]:
    """
    Read repository identifiers from a list file.

    Args:
        path: Text file, or '.csv' file.
        column: Zero-based CSV column holding the identifiers.
        start: Number of leading rows to skip (e.g. a header row).

    Returns:
        List[str]: Identifiers up to the first empty value.

    Raises:
        OSError: If the list file cannot be opened.
        UnicodeDecodeError: If the list file is not valid UTF-8.
        ValueError: If 'column' or 'start' is negative.
    """
    if column < 0 or start < 0:
        raise ValueError("column and start must be non-negative.")

    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        if os.path.splitext(path)[1].lower() == ".csv":
            rows = [row[column] if column < len(row) else "" for row in csv.reader(f)]
        else:
            rows = [line.rstrip("\r\n") for line in f]

    names: List[str] = []
    for value in rows[start:]:
        value = value.strip()
        if not value:
            break
        names.append(value)

    logger.debug(f"Read {len(names)} repository names from {path}")
    return names
