from __future__ import annotations

"""
Report Rendering and Persistence.

Turns validation reports into the text shown to users (console, report
files) and into JSON-ready dictionaries.
"""

import logging
import os
from typing import Any, Dict, List

from repostruct.domain.constants import (
    REPORT_DATE_FORMAT,
    REPORT_FAILURE_BANNER,
    REPORT_FILE_SUFFIX,
)
from repostruct.domain.report_models import BatchResult, ValidationReport

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# RENDERING
# -----------------------------------------------------------------------------

def render_report(report: ValidationReport) -> str:
    """
    Render one report as text.

    Failing reports start with the check date and a failure banner, followed
    by one discrepancy per line.
    """
    if report.ok:
        return f"{report.repository}: OK"

    header = f"{report.checked_at.strftime(REPORT_DATE_FORMAT)}: {REPORT_FAILURE_BANNER}"
    return "\n".join([header, *report.messages])


def report_to_dict(report: ValidationReport) -> Dict[str, Any]:
    return {
        "repository": report.repository,
        "root_path": report.root_path,
        "checked_at": report.checked_at.isoformat(),
        "ok": report.ok,
        "messages": list(report.messages),
    }


def batch_to_dict(batch: BatchResult) -> Dict[str, Any]:
    return {
        "ok": batch.all_ok,
        "summary": batch.summary_message,
        "checked": len(batch.reports),
        "failed": len(batch.failed),
        "reports": [report_to_dict(r) for r in batch.reports],
    }

# -----------------------------------------------------------------------------
# PERSISTENCE
# -----------------------------------------------------------------------------

def report_file_path(report_dir: str, repository: str) -> str:
    return os.path.join(report_dir, f"{repository}{REPORT_FILE_SUFFIX}")


def write_report_files(batch: BatchResult, report_dir: str) -> List[str]:
    """
    Persist one report file per failing repository.

    A previous report file of a repository that now passes is removed, so
    the directory always reflects the latest run. A repository whose report
    file cannot be written or removed is logged and skipped.

    Args:
        batch: Result of a batch run.
        report_dir: Destination directory (created if missing).

    Returns:
        List[str]: Paths of the written report files.

    Raises:
        OSError: If the report directory cannot be created.
    """
    os.makedirs(report_dir, exist_ok=True)
    written: List[str] = []

    for report in batch.reports:
        target = report_file_path(report_dir, report.repository)
        try:
            if report.ok:
                if os.path.exists(target):
                    os.remove(target)
                    logger.debug(f"Removed stale report: {target}")
                continue

            with open(target, "w", encoding="utf-8") as f:
                f.write(render_report(report) + "\n")
        except OSError as e:
            logger.error(f"[{report.repository}] Failed to update report file '{target}': {e}")
            continue

        written.append(target)
        logger.info(f"Report saved to file: {target}")

    return written
