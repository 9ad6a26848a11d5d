"""specrepo CLI module entry point.

Enables running the CLI via: python -m specrepo.cli
"""

from specrepo.cli.main import cli

if __name__ == "__main__":
    cli()
