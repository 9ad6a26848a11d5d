"""Spec repository commands.

Provides ``repo lint``, ``repo add``, ``repo update`` and ``repo list``.
"""

from typing import Optional

import click

from specrepo.cli.logging import cli_command, get_cli_logger
from specrepo.cli.output import emit_error, emit_success, emit_text
from specrepo.cli.registry import get_context
from specrepo.cli.resilience import handle_keyboard_interrupt
from specrepo.core.errors import (
    AggregateFailure,
    GitCommandError,
    InputError,
    RepoIncompatibleError,
)
from specrepo.core.lint import RepoLinter
from specrepo.core.repos import ReposManager
from specrepo.core.responses import ErrorCode, ErrorType
from specrepo.core.sources import VersionInfoChecker

logger = get_cli_logger()


@click.group("repo")
def repo_group() -> None:
    """Manage spec repositories."""
    pass


@repo_group.command("lint")
@click.argument("name", required=False)
@click.option("--only-errors", is_flag=True, help="Lint presents only the errors.")
@click.option("--json", "json_output", is_flag=True, help="Emit a JSON envelope.")
@click.option("--no-color", is_flag=True, help="Disable coloured output.")
@click.pass_context
@cli_command("lint")
@handle_keyboard_interrupt()
def repo_lint_cmd(
    ctx: click.Context,
    name: Optional[str],
    only_errors: bool,
    json_output: bool,
    no_color: bool,
) -> None:
    """Validate all specs in a repo.

    Lints the spec repo NAME. If a directory is given it is assumed to be
    the root of a repo. Without NAME every spec repo is linted.
    """
    cli_ctx = get_context(ctx)
    config = cli_ctx.config
    only_errors = only_errors or config.only_errors
    color = False if no_color else config.use_color

    echo = None if json_output else (lambda text: emit_text(text, color=color))
    linter = RepoLinter(config, echo=echo, color=False if no_color else None)

    logger.info("Linting spec repos", name=name, only_errors=only_errors)
    try:
        run = linter.lint(name, only_errors=only_errors)
    except InputError as e:
        emit_error(
            str(e),
            code=ErrorCode.REPO_NOT_FOUND.value,
            error_type=ErrorType.NOT_FOUND.value,
            remediation="List the known repos with: specrepo repo list",
            details={"name": e.name, "repos_dir": str(e.repos_dir)},
            json_output=json_output,
            color=color,
        )
    except RepoIncompatibleError as e:
        emit_error(
            str(e),
            code=ErrorCode.REPO_INCOMPATIBLE.value,
            error_type=ErrorType.CONFLICT.value,
            remediation="Install a compatible specrepo release",
            json_output=json_output,
            color=color,
        )

    if not run.directories and not json_output:
        emit_text(f"No spec repos found in {cli_ctx.repos_dir}.", color=color)

    payload = {
        "directories": [d.to_dict() for d in run.directories],
        "total_files_analyzed": run.total_files_analyzed,
        "failed_count": run.failed_count,
        "passed": run.passed,
    }

    try:
        run.raise_for_failure()
    except AggregateFailure as e:
        emit_error(
            str(e),
            code=ErrorCode.LINT_FAILED.value,
            error_type=ErrorType.VALIDATION.value,
            details=payload if json_output else None,
            json_output=json_output,
            color=color,
        )

    if json_output:
        notices = [n for d in run.directories for n in d.notices]
        emit_success(payload, warnings=notices)


@repo_group.command("add")
@click.argument("name")
@click.argument("url")
@click.argument("branch", required=False)
@click.pass_context
@cli_command("add")
@handle_keyboard_interrupt()
def repo_add_cmd(ctx: click.Context, name: str, url: str, branch: Optional[str]) -> None:
    """Add a spec repo.

    Clones URL into the spec repos directory; the repo can later be
    referred to by NAME.
    """
    cli_ctx = get_context(ctx)
    config = cli_ctx.config
    manager = ReposManager(config.repos_dir)

    if manager.has_repo(name):
        emit_error(
            f"A spec repo named `{name}` already exists.",
            code=ErrorCode.VALIDATION_ERROR.value,
            error_type=ErrorType.CONFLICT.value,
            remediation=f"Update it with: specrepo repo update {name}",
        )

    suffix = f" (branch `{branch}`)" if branch else ""
    emit_text(f"Cloning spec repo `{name}` from `{url}`{suffix}", color=config.use_color)
    try:
        target = manager.add(name, url, branch)
        for warning in VersionInfoChecker.from_config(config).check(target):
            emit_text(f"[!] {warning}", color=config.use_color)
    except GitCommandError as e:
        emit_error(str(e), code=ErrorCode.GIT_ERROR.value, error_type=ErrorType.UNAVAILABLE.value)
    except RepoIncompatibleError as e:
        emit_error(
            str(e),
            code=ErrorCode.REPO_INCOMPATIBLE.value,
            error_type=ErrorType.CONFLICT.value,
        )


@repo_group.command("update")
@click.argument("name", required=False)
@click.pass_context
@cli_command("update")
@handle_keyboard_interrupt()
def repo_update_cmd(ctx: click.Context, name: Optional[str]) -> None:
    """Update a spec repo.

    Pulls the spec repo NAME, or every spec repo when NAME is omitted.
    """
    cli_ctx = get_context(ctx)
    manager = ReposManager(cli_ctx.config.repos_dir)
    try:
        updated = manager.update(name)
    except InputError as e:
        emit_error(
            str(e),
            code=ErrorCode.REPO_NOT_FOUND.value,
            error_type=ErrorType.NOT_FOUND.value,
            remediation="List the known repos with: specrepo repo list",
        )
    except GitCommandError as e:
        emit_error(str(e), code=ErrorCode.GIT_ERROR.value, error_type=ErrorType.UNAVAILABLE.value)

    for repo in updated:
        emit_text(f"Updated spec repo `{repo.name}`", color=cli_ctx.config.use_color)


@repo_group.command("list")
@click.option("--json", "json_output", is_flag=True, help="Emit a JSON envelope.")
@click.pass_context
@cli_command("list")
def repo_list_cmd(ctx: click.Context, json_output: bool) -> None:
    """List the known spec repos."""
    cli_ctx = get_context(ctx)
    repos = ReposManager(cli_ctx.config.repos_dir).list_repos()

    if json_output:
        emit_success(
            {
                "repos_dir": str(cli_ctx.repos_dir),
                "repos": [{"name": r.name, "path": str(r)} for r in repos],
                "count": len(repos),
            }
        )
        return

    for repo in repos:
        emit_text(f"{repo.name} - {repo}")
    emit_text(f"{len(repos)} repos")
