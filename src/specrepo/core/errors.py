"""
Exception hierarchy for spec repository operations.

Per-file validation problems never raise; they are recorded as messages
on a ValidationResult. The exceptions here cover user input errors,
collaborator failures and the run-level failure verdict.
"""

from pathlib import Path
from typing import Optional, Sequence


class SpecRepoError(Exception):
    """Base class for all specrepo errors."""


class InputError(SpecRepoError):
    """A NAME or DIRECTORY argument resolved to nothing."""

    def __init__(self, name: str, repos_dir: Optional[Path] = None):
        message = f"Unable to find a spec repo or directory named `{name}`."
        super().__init__(message)
        self.name = name
        self.repos_dir = repos_dir


class SpecReadError(SpecRepoError):
    """A spec file could not be read from disk."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Unable to read `{path}`: {reason}")
        self.path = path
        self.reason = reason


class RepoIncompatibleError(SpecRepoError):
    """The repository declares that it needs a different tool version."""

    def __init__(self, message: str, repo_dir: Optional[Path] = None):
        super().__init__(message)
        self.repo_dir = repo_dir


class GitCommandError(SpecRepoError):
    """A git invocation exited with a non-zero status."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str = ""):
        command = " ".join(args)
        detail = stderr.strip()
        message = f"`{command}` failed with exit code {returncode}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr


class AggregateFailure(SpecRepoError):
    """One or more linted directories contained failing specs."""

    def __init__(self, failed_count: int, failed_dirs: Sequence[Path] = ()):
        super().__init__(f"{failed_count} items failed validation.")
        self.failed_count = failed_count
        self.failed_dirs = list(failed_dirs)
