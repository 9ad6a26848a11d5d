"""Command registry for the specrepo CLI.

Centralized registration of all command groups.
"""

from typing import Optional

import click

from specrepo.cli.config import CLIContext

# Module-level storage for CLI context (for testing)
_cli_context: Optional[CLIContext] = None


def set_context(ctx: Optional[CLIContext]) -> None:
    """Set the CLI context at module level.

    Primarily used for testing when not using Click's context.
    """
    global _cli_context
    _cli_context = ctx


def get_context(ctx: Optional[click.Context] = None) -> CLIContext:
    """Get CLI context from Click context or module-level storage.

    Raises:
        RuntimeError: If no context is available.
    """
    if ctx is not None:
        obj = ctx.find_object(dict)
        if obj and "cli_context" in obj:
            return obj["cli_context"]

    if _cli_context is not None:
        return _cli_context

    raise RuntimeError("No CLI context available. Call set_context() first.")


def register_all_commands(cli: click.Group) -> None:
    """Register all command groups with the CLI.

    Command groups are imported lazily to avoid circular imports.
    """
    from specrepo.cli.commands import repo_group

    cli.add_command(repo_group)

    @cli.command("version")
    @click.pass_context
    def version(ctx: click.Context) -> None:
        """Show CLI version information."""
        from specrepo.cli.output import emit

        cli_ctx = get_context(ctx)
        emit(
            {
                "version": cli_ctx.config.tool_version,
                "name": "specrepo",
                "repos_dir": str(cli_ctx.repos_dir),
            }
        )
