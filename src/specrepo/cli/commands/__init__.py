"""CLI command groups."""

from specrepo.cli.commands.repo import repo_group

__all__ = [
    "repo_group",
]
