from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the RepoStruct CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="repostruct",
        description="Check that repository directories comply with an XML structure definition.",
    )

    # --- Repository Selection ---
    p.add_argument(
        "names",
        nargs="*",
        help="Repository names to check (directories under the repositories root).",
    )
    p.add_argument(
        "-r", "--repos-root",
        dest="repos_root",
        default=None,
        help="Directory containing all repositories (default: current directory).",
    )
    p.add_argument(
        "-l", "--list",
        dest="list_file",
        default=None,
        help="File listing repository names, one per line, or a .csv file.",
    )
    p.add_argument(
        "--column",
        dest="list_column",
        type=int,
        default=None,
        help="Zero-based CSV column holding repository names.",
    )
    p.add_argument(
        "--start",
        dest="list_start",
        type=int,
        default=None,
        help="Number of leading rows of the list file to skip.",
    )

    # --- Structure Definition ---
    p.add_argument(
        "-s", "--schema",
        dest="schema_file",
        default=None,
        help="XML structure definition (relative paths resolve against the repositories root).",
    )

    # --- Reporting ---
    p.add_argument(
        "--report-dir",
        dest="report_dir",
        default=None,
        help="Write one report file per failing repository into this directory.",
    )
    p.add_argument(
        "--save-reports",
        action="store_true",
        help="Write report files (into the repositories root unless --report-dir is given).",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print results as JSON.",
    )
    p.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only print failing repositories and the summary.",
    )

    # --- Execution ---
    p.add_argument(
        "-j", "--jobs",
        dest="max_workers",
        type=int,
        default=None,
        help="Number of repositories checked in parallel.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore saved settings.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective settings for later runs.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Options the user did not give map to None and are skipped on merge.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "repos_root": args.repos_root,
        "schema_file": args.schema_file,
        "list_file": args.list_file,
        "list_column": args.list_column,
        "list_start": args.list_start,
        "report_dir": args.report_dir,
        "max_workers": args.max_workers,
    }

    if args.save_reports:
        overrides["save_reports"] = True

    return overrides
