from __future__ import annotations

"""
Domain Constants.

Centralizes the schema vocabulary, default file names and discrepancy
message templates shared by the parser, the matcher and the report surface.
"""

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# SCHEMA VOCABULARY
# -----------------------------------------------------------------------------
ROOT_ELEMENT = "repoRoot"
DIRECTORY_ELEMENT = "directory"
FILE_ELEMENT = "file"
NAME_ATTRIBUTE = "name"
ALLOW_OTHER_ATTRIBUTE = "allowotherfiles"
CLOSED_VALUE = "no"

DEFAULT_SCHEMA_FILENAME = "repository_structure.xml"
REPORT_FILE_SUFFIX = ".report.txt"

# -----------------------------------------------------------------------------
# DISCREPANCY MESSAGES
# -----------------------------------------------------------------------------
MSG_DIR_NOT_FOUND = "{path}: directory does not exist"
MSG_DIR_INACCESSIBLE = "{path}: directory is not accessible ({reason})"
MSG_MISSING_DIRECTORY = "Missing directory: {pattern}"
MSG_MISSING_FILE = "Missing file: {pattern}"
MSG_EXCESS_FILE = "Excess file: {path}"
MSG_EXCESS_DIRECTORY = "Excess directory: {path}"

REPORT_FAILURE_BANNER = "### Repository not OK ###"
REPORT_DATE_FORMAT = "%Y-%m-%d"
