"""
Data structures shared by the validator, aggregator and reporter.

A ValidationResult is produced per spec file and consumed immediately by
the aggregator; a GroupedReport is rebuilt for every linted directory;
a LintRunSummary carries the counts used for the pass/fail verdict.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple


UNKNOWN_VERSION = "unknown"


class Severity(str, Enum):
    """Severity of a validation message."""

    ERROR = "error"
    WARNING = "warning"


#: Fixed render order for severities.
SEVERITY_ORDER: Tuple[Severity, ...] = (Severity.ERROR, Severity.WARNING)


class Outcome(str, Enum):
    """Overall outcome of validating one spec file."""

    PASSED = "passed"
    HAS_WARNINGS = "has_warnings"
    HAS_ERRORS = "has_errors"


@dataclass(frozen=True)
class Message:
    """A single validation finding."""

    severity: Severity
    text: str
    code: Optional[str] = None  # Diagnostic code, e.g. "MISSING_NAME"

    @classmethod
    def error(cls, text: str, code: Optional[str] = None) -> "Message":
        return cls(Severity.ERROR, text, code)

    @classmethod
    def warning(cls, text: str, code: Optional[str] = None) -> "Message":
        return cls(Severity.WARNING, text, code)


@dataclass
class ValidationResult:
    """
    Validation outcome for one spec file.

    The outcome is derived from the messages so it can never disagree
    with them.
    """

    entity_name: str
    entity_version: str = UNKNOWN_VERSION
    messages: List[Message] = field(default_factory=list)
    path: Optional[Path] = None

    @property
    def outcome(self) -> Outcome:
        if any(m.severity is Severity.ERROR for m in self.messages):
            return Outcome.HAS_ERRORS
        if self.messages:
            return Outcome.HAS_WARNINGS
        return Outcome.PASSED

    @property
    def error_count(self) -> int:
        return sum(1 for m in self.messages if m.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for m in self.messages if m.severity is Severity.WARNING)


# severity -> message text -> entity name -> versions (insertion ordered, unique)
GroupedMessages = Dict[Severity, Dict[str, Dict[str, List[str]]]]


@dataclass
class GroupedReport:
    """Diagnostics grouped by severity, message and entity."""

    groups: GroupedMessages = field(default_factory=dict)

    def add(self, severity: Severity, text: str, entity: str, version: str) -> bool:
        """Record a tuple; returns False when it was already present."""
        versions = (
            self.groups.setdefault(severity, {})
            .setdefault(text, {})
            .setdefault(entity, [])
        )
        if version in versions:
            return False
        versions.append(version)
        return True

    def messages_for(self, severity: Severity) -> Dict[str, Dict[str, List[str]]]:
        return self.groups.get(severity, {})

    def is_empty(self) -> bool:
        return not any(self.groups.values())

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, List[str]]]]:
        return {
            severity.value: {
                text: {name: list(versions) for name, versions in entities.items()}
                for text, entities in messages.items()
            }
            for severity, messages in self.groups.items()
        }


@dataclass(frozen=True)
class LintRunSummary:
    """Counts for one linted directory."""

    total_files_analyzed: int = 0
    failed_count: int = 0

    @property
    def passed(self) -> bool:
        return self.failed_count == 0
