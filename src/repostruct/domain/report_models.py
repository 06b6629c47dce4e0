from __future__ import annotations

"""
Validation Report Data Models.

Defines the value objects returned by the structural matcher and the batch
driver. Results are combined by returning new values at every recursion
level; nothing here is shared or mutated across checks.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Tuple

SUMMARY_ALL_OK = "All repositories are OK."
SUMMARY_SOME_FAILED = "Some repositories failed, see reports."

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of matching one schema node against one directory.

    Attributes:
        ok: True iff the node and all its descendants matched.
        messages: Ordered discrepancy descriptions.
    """
    ok: bool = True
    messages: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls) -> "MatchResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, *messages: str) -> "MatchResult":
        return cls(ok=False, messages=tuple(messages))

    def combine(self, other: "MatchResult") -> "MatchResult":
        """Logical AND of both verdicts, messages concatenated in order."""
        return MatchResult(
            ok=self.ok and other.ok,
            messages=self.messages + other.messages,
        )


@dataclass(frozen=True)
class ValidationReport:
    """
    Aggregate outcome of one repository check.

    Attributes:
        repository: Identifier of the repository as listed by the caller.
        root_path: Absolute path that was checked.
        checked_at: Moment the check completed.
        ok: Overall verdict.
        messages: Every discrepancy found, in schema order.
    """
    repository: str
    root_path: str
    checked_at: datetime
    ok: bool
    messages: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class BatchResult:
    """
    Ordered reports of a batch run.

    Attributes:
        reports: One report per checked repository, in list order.
    """
    reports: Tuple[ValidationReport, ...] = field(default_factory=tuple)

    @property
    def all_ok(self) -> bool:
        return all(r.ok for r in self.reports)

    @property
    def failed(self) -> Tuple[ValidationReport, ...]:
        return tuple(r for r in self.reports if not r.ok)

    @property
    def summary_message(self) -> str:
        return SUMMARY_ALL_OK if self.all_ok else SUMMARY_SOME_FAILED

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_report(
        repository: str,
        root_path: str,
        result: MatchResult,
        checked_at: datetime,
) -> ValidationReport:
    """
    Wrap the root match result of a repository into a report.

    Args:
        repository: Repository identifier.
        root_path: Path the identifier resolved to.
        result: Root-level match result.
        checked_at: Timestamp of the check.

    Returns:
        ValidationReport: An immutable report.
    """
    return ValidationReport(
        repository=repository,
        root_path=root_path,
        checked_at=checked_at,
        ok=result.ok,
        messages=result.messages,
    )
