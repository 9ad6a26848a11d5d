"""Core linting, validation and repository primitives."""

from specrepo.core.aggregation import fold
from specrepo.core.errors import (
    AggregateFailure,
    GitCommandError,
    InputError,
    RepoIncompatibleError,
    SpecReadError,
    SpecRepoError,
)
from specrepo.core.lint import DirectoryLint, LintRun, RepoLinter
from specrepo.core.models import (
    GroupedReport,
    LintRunSummary,
    Message,
    Outcome,
    Severity,
    ValidationResult,
)
from specrepo.core.reporting import render
from specrepo.core.repos import ReposManager
from specrepo.core.sources import VersionInfoChecker
from specrepo.core.validation import JsonSpecValidator, SpecValidator

__all__ = [
    # Models
    "GroupedReport",
    "LintRunSummary",
    "Message",
    "Outcome",
    "Severity",
    "ValidationResult",
    # Operations
    "fold",
    "render",
    "DirectoryLint",
    "LintRun",
    "RepoLinter",
    # Collaborators
    "JsonSpecValidator",
    "SpecValidator",
    "ReposManager",
    "VersionInfoChecker",
    # Errors
    "AggregateFailure",
    "GitCommandError",
    "InputError",
    "RepoIncompatibleError",
    "SpecReadError",
    "SpecRepoError",
]
