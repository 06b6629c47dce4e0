from __future__ import annotations

"""
Repository Batch Checking Service.

Resolves repository identifiers to root directories, runs the structural
matcher once per repository and hands each report to an optional
presentation callback. Repository roots are always closed: only the
top-level entries declared by the schema are permitted.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from repostruct.core.matching.matcher import match_directory
from repostruct.domain.report_models import BatchResult, ValidationReport, create_report
from repostruct.domain.schema_models import SchemaNode
from repostruct.infra.fs import DirectoryLister, LocalDirectoryLister

logger = logging.getLogger(__name__)

ReportSink = Callable[[ValidationReport], None]
Clock = Callable[[], datetime]


def _local_now() -> datetime:
    """Aware timestamp in the local timezone."""
    return datetime.now().astimezone()

# ==============================================================================
# PUBLIC API
# ==============================================================================

def check_repository(
        schema: SchemaNode,
        repos_root: str,
        name: str,
        lister: Optional[DirectoryLister] = None,
        clock: Optional[Clock] = None,
) -> ValidationReport:
    """
    Validate one repository against the schema.

    Args:
        schema: Root node of the structure definition.
        repos_root: Directory containing all repositories.
        name: Repository identifier, a directory name under 'repos_root'.
        lister: Directory listing capability. Defaults to the local filesystem.
        clock: Timestamp source for the report.

    Returns:
        ValidationReport: Fresh report for this repository.
    """
    root_path = os.path.join(repos_root, name)
    result = match_directory(
        schema,
        root_path,
        allow_other_entries=False,
        is_root=True,
        lister=lister or LocalDirectoryLister(),
    )
    report = create_report(name, root_path, result, (clock or _local_now)())

    if report.ok:
        logger.info(f"[{name}] OK")
    else:
        logger.info(f"[{name}] {len(report.messages)} discrepancies")
    return report


def check_repositories(
        schema: SchemaNode,
        repos_root: str,
        names: Iterable[Optional[str]],
        *,
        lister: Optional[DirectoryLister] = None,
        on_report: Optional[ReportSink] = None,
        max_workers: int = 1,
        clock: Optional[Clock] = None,
) -> BatchResult:
    """
    Validate a list of repositories in order.

    Iteration ends at the first empty identifier, which marks the end of the
    list. With several workers the checks run on a thread pool; reports are
    still delivered and returned in list order.

    Args:
        schema: Root node of the structure definition (shared read-only).
        repos_root: Directory containing all repositories.
        names: Repository identifiers, possibly terminated by None or ''.
        lister: Directory listing capability.
        on_report: Callback receiving each report.
        max_workers: Number of repositories checked concurrently.
        clock: Timestamp source for reports.

    Returns:
        BatchResult: Reports of all checked repositories.
    """
    batch = _take_until_blank(names)
    logger.info(f"Checking {len(batch)} repositories under {repos_root}")

    def _check(name: str) -> ValidationReport:
        return check_repository(schema, repos_root, name, lister=lister, clock=clock)

    reports: List[ValidationReport] = []
    if max_workers > 1 and len(batch) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            for report in executor.map(_check, batch):
                _deliver(report, reports, on_report)
    else:
        for name in batch:
            _deliver(_check(name), reports, on_report)

    result = BatchResult(reports=tuple(reports))
    logger.info(result.summary_message)
    return result

# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _take_until_blank(names: Iterable[Optional[str]]) -> List[str]:
    """Collect identifiers up to, excluding, the first empty one."""
    out: List[str] = []
    for raw in names:
        name = (raw or "").strip()
        if not name:
            break
        out.append(name)
    return out


def _deliver(
        report: ValidationReport,
        reports: List[ValidationReport],
        on_report: Optional[ReportSink],
) -> None:
    reports.append(report)
    if on_report is not None:
        on_report(report)
