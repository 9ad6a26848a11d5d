"""
Repository linting orchestration.

Resolves which directories to lint, validates every spec file in each of
them, folds the results into a grouped report, renders it and decides the
overall verdict. All console output goes through a single ``echo``
callable supplied by the caller.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import click

from specrepo.config import LintConfig
from specrepo.core.aggregation import fold
from specrepo.core.errors import AggregateFailure, SpecReadError
from specrepo.core.models import GroupedReport, LintRunSummary, ValidationResult
from specrepo.core.reporting import render, render_header
from specrepo.core.repos import ReposManager
from specrepo.core.sources import FreshnessChecker, VersionInfoChecker
from specrepo.core.validation import JsonSpecValidator, SpecValidator, find_spec_files

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]
ValidatorFactory = Callable[[Path], SpecValidator]


def _discard(text: str) -> None:
    pass


@dataclass
class DirectoryLint:
    """Outcome of linting one directory."""

    directory: Path
    report: GroupedReport
    summary: LintRunSummary
    notices: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "directory": str(self.directory),
            "total_files_analyzed": self.summary.total_files_analyzed,
            "failed_count": self.summary.failed_count,
            "passed": self.summary.passed,
            "messages": self.report.to_dict(),
            "notices": list(self.notices),
        }


@dataclass
class LintRun:
    """Outcome of a whole lint invocation across directories."""

    directories: List[DirectoryLint] = field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return sum(d.summary.failed_count for d in self.directories)

    @property
    def total_files_analyzed(self) -> int:
        return sum(d.summary.total_files_analyzed for d in self.directories)

    @property
    def failed_dirs(self) -> List[Path]:
        return [d.directory for d in self.directories if not d.summary.passed]

    @property
    def passed(self) -> bool:
        return self.failed_count == 0

    def raise_for_failure(self) -> None:
        """
        Raises:
            AggregateFailure: If any directory had failing specs.
        """
        if not self.passed:
            raise AggregateFailure(self.failed_count, self.failed_dirs)


class RepoLinter:
    """
    Lints spec repositories.

    Args:
        config: Explicit configuration (repos root, workers, colour, ...).
        validator_factory: Builds the validator for a directory; defaults
            to JsonSpecValidator rooted at that directory.
        freshness_checker: Version information check run before each
            directory; defaults to VersionInfoChecker.
        repos: Repository locator; defaults to one over ``config.repos_dir``.
        echo: Console writer. Output is discarded when omitted.
        color: Style the output; defaults to the configured colour mode.
    """

    def __init__(
        self,
        config: LintConfig,
        validator_factory: Optional[ValidatorFactory] = None,
        freshness_checker: Optional[FreshnessChecker] = None,
        repos: Optional[ReposManager] = None,
        echo: Optional[Echo] = None,
        color: Optional[bool] = None,
    ):
        self.config = config
        self.validator_factory = validator_factory or JsonSpecValidator
        self.freshness_checker = freshness_checker or VersionInfoChecker.from_config(config)
        self.repos = repos or ReposManager(config.repos_dir)
        self.echo = echo or _discard
        self.color = color if color is not None else config.color != "never"

    def resolve_targets(self, name: Optional[str] = None) -> List[Path]:
        """
        Determine the directories to lint.

        An existing path wins over a repository of the same name; without a
        name every repository under the root is linted.

        Raises:
            InputError: If ``name`` is neither a path nor a known repository.
        """
        if name:
            candidate = Path(name).expanduser()
            if candidate.exists():
                return [candidate]
            return [self.repos.require_repo(name)]

        dirs = self.repos.list_repos()
        if not dirs:
            logger.warning("No spec repos found in %s", self.repos.repos_dir)
        return dirs

    def _check_freshness(self, directory: Path) -> List[str]:
        try:
            return list(self.freshness_checker.check(directory))
        except (OSError, ValueError) as e:
            logger.warning("Version check failed for %s: %s", directory, e)
            return [f"Version check failed for `{directory.name}`: {e}"]

    def validate_files(
        self,
        files: Sequence[Path],
        validator: SpecValidator,
        notices: List[str],
    ) -> List[ValidationResult]:
        """Validate files, recording unreadable ones in ``notices`` in file order."""

        def _validate(path: Path) -> Tuple[Optional[ValidationResult], Optional[str]]:
            try:
                return validator.validate(path), None
            except SpecReadError as e:
                logger.warning("Skipping unreadable spec file: %s", e)
                return None, f"{e} (excluded from the analyzed count)"

        workers = max(1, self.config.workers)
        if workers > 1 and len(files) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                outcomes = list(executor.map(_validate, files))
        else:
            outcomes = [_validate(path) for path in files]

        results: List[ValidationResult] = []
        for result, notice in outcomes:
            if notice is not None:
                notices.append(notice)
            if result is not None:
                results.append(result)
        return results

    def lint_directory(self, directory: Path, only_errors: bool = False) -> DirectoryLint:
        """
        Lint every spec file under ``directory`` and print the report.

        Raises:
            RepoIncompatibleError: If the version check reports a fatal condition.
        """
        directory = Path(directory)
        notices = self._check_freshness(directory)

        self.echo(render_header(directory, color=self.color))

        if directory.is_file():
            files = [directory]
            root = directory.parent
        else:
            files = find_spec_files(directory)
            root = directory

        results = self.validate_files(files, self.validator_factory(root), notices)
        report, summary = fold(results, only_errors=only_errors)

        for notice in notices:
            self.echo(click.style(f"[!] {notice}", fg="yellow") if self.color else f"[!] {notice}")
        self.echo(render(report, summary, color=self.color))
        self.echo("")

        logger.info(
            "Linted %s: %d files analyzed, %d failed",
            directory,
            summary.total_files_analyzed,
            summary.failed_count,
        )
        return DirectoryLint(directory=directory, report=report, summary=summary, notices=notices)

    def lint(self, name: Optional[str] = None, only_errors: bool = False) -> LintRun:
        """Lint every resolved directory without raising on failing specs."""
        targets = self.resolve_targets(name)
        run = LintRun()
        for directory in targets:
            run.directories.append(self.lint_directory(directory, only_errors=only_errors))
        return run

    def run(self, name: Optional[str] = None, only_errors: bool = False) -> LintRun:
        """
        Lint and raise when anything failed.

        Every directory is linted and reported before the failure is raised.

        Raises:
            InputError: If ``name`` resolves to nothing.
            AggregateFailure: If any directory had failing specs.
        """
        run = self.lint(name, only_errors=only_errors)
        run.raise_for_failure()
        return run
