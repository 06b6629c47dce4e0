from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration layering
(defaults, persisted settings, CLI overrides), schema loading, the batch
check and result rendering.

Exit codes: 0 all repositories passed, 1 at least one failed, 2 the run
could not start (bad structure definition, missing list), 130 interrupted.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from repostruct.core.schema.parser import load_schema
from repostruct.core.services.batch import check_repositories
from repostruct.core.services.repo_list import read_repository_names
from repostruct.core.services.report_writer import (
    batch_to_dict,
    render_report,
    write_report_files,
)
from repostruct.core.stages.validator import validate_config
from repostruct.domain.config import get_default_config, load_config, save_config
from repostruct.domain.errors import SchemaError
from repostruct.domain.report_models import BatchResult, ValidationReport
from repostruct.infra.logging import LoggingConfig, configure_logging, get_logger
from repostruct.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Logging bootstrap
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 2. Configuration layering
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.save_config:
        save_config(_persistable_config(raw_conf, conf))

    # 3. Repository list resolution
    names: List[str] = list(args.names)
    if not names and conf["list_file"]:
        try:
            names = read_repository_names(
                conf["list_file"], column=conf["list_column"], start=conf["list_start"]
            )
        except (OSError, UnicodeDecodeError) as e:
            return _fail_config(f"Cannot read repository list '{conf['list_file']}': {e}")

    if not names:
        return _fail_config("No repositories to check. Pass names or use --list.")

    # 4. Structure definition (fatal for the whole run)
    try:
        schema = load_schema(conf["schema_file"])
    except SchemaError as e:
        return _fail_config(f"Invalid structure definition: {e}")

    # 5. Batch execution
    on_report = None if args.json_output else (lambda r: _print_report(r, args.quiet))
    try:
        batch = check_repositories(
            schema,
            conf["repos_root"],
            names,
            on_report=on_report,
            max_workers=conf["max_workers"],
        )
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

    # 6. Report persistence
    if conf["report_dir"]:
        try:
            write_report_files(batch, conf["report_dir"])
        except OSError as e:
            logger.error(f"Failed to write report files to '{conf['report_dir']}': {e}")

    # 7. Output rendering
    if args.json_output:
        print(json.dumps(batch_to_dict(batch), ensure_ascii=False, indent=2))
    else:
        _print_summary(batch)

    return EXIT_OK if batch.all_ok else EXIT_FAILED

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of override values into the base configuration.

    Only known keys with a value are merged.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out


def _persistable_config(raw: Dict[str, Any], validated: Dict[str, Any]) -> Dict[str, Any]:
    """
    Settings to persist: validated values with locations kept as entered.

    Relative schema, list and report paths are resolved against the
    repositories root of each later run, not the root of this one.
    """
    out = dict(validated)
    for k in ("schema_file", "list_file", "report_dir"):
        value = raw.get(k)
        if isinstance(value, str):
            out[k] = value.strip()
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_report(report: ValidationReport, quiet: bool) -> None:
    if report.ok and quiet:
        return
    if report.ok:
        print(render_report(report))
    else:
        print(f"{report.repository}:")
        for line in render_report(report).splitlines():
            print(f"  {line}")


def _print_summary(batch: BatchResult) -> None:
    print()
    print(f"Checked: {len(batch.reports)}  Failed: {len(batch.failed)}")
    print(batch.summary_message)


def _fail_config(msg: str) -> int:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return EXIT_CONFIG_ERROR

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
