"""CLI configuration context.

Resolves the effective configuration for a CLI invocation from the shared
specrepo.config module plus command-line overrides.
"""

from dataclasses import replace
from pathlib import Path
from typing import Optional

from specrepo.config import LintConfig, get_config


class CLIContext:
    """CLI execution context with resolved configuration.

    Holds the effective configuration for a CLI command, including
    any overrides from command-line options.
    """

    def __init__(
        self,
        repos_dir: Optional[str] = None,
        config_file: Optional[str] = None,
        lint_config: Optional[LintConfig] = None,
    ):
        """Initialize CLI context.

        Args:
            repos_dir: Explicit repositories root override from --repos-dir.
            config_file: Explicit TOML config path from --config.
            lint_config: Pre-built configuration (loaded from env/TOML if not given).
        """
        if lint_config is None:
            lint_config = LintConfig.from_env(config_file) if config_file else get_config()
        if repos_dir:
            lint_config = replace(lint_config, repos_dir=Path(repos_dir).expanduser().resolve())
        self._config = lint_config

    @property
    def config(self) -> LintConfig:
        """Get the underlying configuration."""
        return self._config

    @property
    def repos_dir(self) -> Path:
        """Repositories root.

        Resolution order:
        1. CLI --repos-dir option (highest priority)
        2. SPECREPO_REPOS_DIR environment variable
        3. [repos] dir in the TOML config
        4. ~/.specrepo/repos
        """
        return self._config.repos_dir


def create_context(
    repos_dir: Optional[str] = None,
    config_file: Optional[str] = None,
) -> CLIContext:
    """Create a CLI context with optional overrides."""
    return CLIContext(repos_dir=repos_dir, config_file=config_file)
