"""
Folding of per-file validation results into a grouped report.

The fold is a pure function of its input: results are visited in a
canonical order so that the report does not depend on the order in
which they were produced (e.g. by a worker pool).
"""

import logging
from typing import Iterable, List, Sequence, Tuple

from specrepo.core.models import (
    GroupedReport,
    LintRunSummary,
    Outcome,
    Severity,
    ValidationResult,
)

logger = logging.getLogger(__name__)


def _fold_key(result: ValidationResult) -> Tuple[str, str, str]:
    return (
        result.entity_name,
        result.entity_version,
        result.path.as_posix() if result.path is not None else "",
    )


def canonical_order(results: Iterable[ValidationResult]) -> List[ValidationResult]:
    """Sort results by entity name, version and source path."""
    return sorted(results, key=_fold_key)


def summarize(results: Sequence[ValidationResult]) -> LintRunSummary:
    """Count analyzed and failed files."""
    failed = sum(1 for r in results if r.outcome is Outcome.HAS_ERRORS)
    return LintRunSummary(total_files_analyzed=len(results), failed_count=failed)


def fold(
    results: Sequence[ValidationResult],
    only_errors: bool = False,
) -> Tuple[GroupedReport, LintRunSummary]:
    """
    Group validation messages by severity, message text and entity.

    Args:
        results: One ValidationResult per analyzed file.
        only_errors: Drop warning messages. A result with only warnings
            then contributes nothing. Failure accounting is unaffected.

    Returns:
        Tuple of (GroupedReport, LintRunSummary).
    """
    report = GroupedReport()
    duplicates = 0

    for result in canonical_order(results):
        if result.outcome is Outcome.PASSED:
            continue
        for message in result.messages:
            if only_errors and message.severity is not Severity.ERROR:
                continue
            added = report.add(
                message.severity,
                message.text,
                result.entity_name,
                result.entity_version,
            )
            if not added:
                duplicates += 1

    if duplicates:
        logger.debug("Suppressed %d duplicate diagnostics", duplicates)

    return report, summarize(results)
