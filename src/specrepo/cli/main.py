"""specrepo CLI entry point."""

from typing import Optional

import click

from specrepo.cli.config import create_context
from specrepo.cli.registry import register_all_commands


@click.group()
@click.option(
    "--repos-dir",
    envvar="SPECREPO_REPOS_DIR",
    type=click.Path(file_okay=False),
    help="Override the spec repositories root.",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="Path to a specrepo.toml configuration file.",
)
@click.pass_context
def cli(ctx: click.Context, repos_dir: Optional[str], config_file: Optional[str]) -> None:
    """specrepo - manage and lint repositories of spec files."""
    ctx.ensure_object(dict)
    cli_ctx = create_context(repos_dir=repos_dir, config_file=config_file)
    cli_ctx.config.setup_logging()
    ctx.obj["cli_context"] = cli_ctx


# Register all command groups
register_all_commands(cli)


if __name__ == "__main__":
    cli()
