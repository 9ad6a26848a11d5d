"""
Configuration for specrepo.

Supports configuration via:
1. Environment variables (highest priority)
2. TOML config file (specrepo.toml)
3. Default values (lowest priority)

Environment variables:
- SPECREPO_REPOS_DIR: Directory holding the spec repositories
- SPECREPO_WORKERS: Number of threads used to validate files (1 = sequential)
- SPECREPO_FRESHNESS_TIMEOUT: Timeout in seconds for the version information fetch
- SPECREPO_FRESHNESS_RETRIES: Retries for transport errors on the version information fetch
- SPECREPO_VERSION_URL: URL of a remote version information document
- SPECREPO_COLOR: Colour mode (auto, always, never)
- SPECREPO_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
- SPECREPO_CONFIG_FILE: Path to TOML config file

Example specrepo.toml:

    [repos]
    dir = "~/.specrepo/repos"

    [lint]
    workers = 4
    only_errors = false
    freshness_timeout = 5.0
    freshness_retries = 1

    [ui]
    color = "auto"

    [logging]
    level = "WARNING"
    structured = false
"""

import logging
import os
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version as get_package_version
from pathlib import Path
from typing import Any, Optional

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback


logger = logging.getLogger(__name__)

DEFAULT_REPOS_DIR = Path("~/.specrepo/repos")
COLOR_MODES = ("auto", "always", "never")


def _get_version() -> str:
    """Get package version from metadata (single source of truth: pyproject.toml)."""
    try:
        return get_package_version("specrepo")
    except PackageNotFoundError:
        return "0.3.0"  # Fallback for dev without install


PACKAGE_VERSION = _get_version()


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "on")


def _normalize_color(value: Any) -> str:
    if isinstance(value, bool):
        return "always" if value else "never"
    mode = str(value).strip().lower()
    if mode not in COLOR_MODES:
        logger.warning(f"Unknown color mode '{value}', using 'auto'")
        return "auto"
    return mode


@dataclass
class LintConfig:
    """Configuration for repository linting and management."""

    # Repositories root
    repos_dir: Path = field(default_factory=lambda: DEFAULT_REPOS_DIR.expanduser())

    # Lint settings
    workers: int = 1
    only_errors: bool = False
    freshness_timeout: float = 5.0
    freshness_retries: int = 0
    version_url: Optional[str] = None

    # UI settings
    color: str = "auto"

    # Logging configuration
    log_level: str = "WARNING"
    structured_logging: bool = False

    tool_version: str = field(default_factory=lambda: PACKAGE_VERSION)

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "LintConfig":
        """
        Create configuration from environment variables and optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. TOML config file
        3. Default values
        """
        config = cls()

        toml_path = config_file or os.environ.get("SPECREPO_CONFIG_FILE")
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            for default_path in ["specrepo.toml", ".specrepo.toml"]:
                if Path(default_path).exists():
                    config._load_toml(Path(default_path))
                    break

        config._load_env()

        return config

    def _load_toml(self, path: Path) -> None:
        """Load configuration from TOML file."""
        if not path.exists():
            logger.warning(f"Config file not found: {path}")
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error(f"Error loading config file {path}: {e}")
            return

        if "repos" in data:
            repos = data["repos"]
            if "dir" in repos:
                self.repos_dir = Path(repos["dir"]).expanduser()

        if "lint" in data:
            lint = data["lint"]
            if "workers" in lint:
                self.workers = max(1, int(lint["workers"]))
            if "only_errors" in lint:
                self.only_errors = _parse_bool(lint["only_errors"])
            if "freshness_timeout" in lint:
                self.freshness_timeout = float(lint["freshness_timeout"])
            if "freshness_retries" in lint:
                self.freshness_retries = max(0, int(lint["freshness_retries"]))
            if "version_url" in lint:
                self.version_url = str(lint["version_url"]) or None

        if "ui" in data:
            ui = data["ui"]
            if "color" in ui:
                self.color = _normalize_color(ui["color"])

        if "logging" in data:
            log = data["logging"]
            if "level" in log:
                self.log_level = str(log["level"]).upper()
            if "structured" in log:
                self.structured_logging = _parse_bool(log["structured"])

    def _load_env(self) -> None:
        """Load configuration from environment variables."""
        if repos := os.environ.get("SPECREPO_REPOS_DIR"):
            self.repos_dir = Path(repos).expanduser()

        if workers := os.environ.get("SPECREPO_WORKERS"):
            try:
                self.workers = max(1, int(workers))
            except ValueError:
                logger.warning(f"Invalid SPECREPO_WORKERS value: {workers}")

        if timeout := os.environ.get("SPECREPO_FRESHNESS_TIMEOUT"):
            try:
                self.freshness_timeout = float(timeout)
            except ValueError:
                logger.warning(f"Invalid SPECREPO_FRESHNESS_TIMEOUT value: {timeout}")

        if retries := os.environ.get("SPECREPO_FRESHNESS_RETRIES"):
            try:
                self.freshness_retries = max(0, int(retries))
            except ValueError:
                logger.warning(f"Invalid SPECREPO_FRESHNESS_RETRIES value: {retries}")

        if url := os.environ.get("SPECREPO_VERSION_URL"):
            self.version_url = url

        if color := os.environ.get("SPECREPO_COLOR"):
            self.color = _normalize_color(color)

        if level := os.environ.get("SPECREPO_LOG_LEVEL"):
            self.log_level = level.upper()

    @property
    def use_color(self) -> Optional[bool]:
        """Colour override for click.echo (None lets click detect a TTY)."""
        if self.color == "always":
            return True
        if self.color == "never":
            return False
        return None

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        level = getattr(logging, self.log_level, logging.WARNING)

        if self.structured_logging:
            formatter = logging.Formatter(
                '{"timestamp":"%(asctime)s","level":"%(levelname)s",'
                '"logger":"%(name)s","message":"%(message)s"}'
            )
        else:
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        root_logger = logging.getLogger("specrepo")
        root_logger.setLevel(level)
        for existing in list(root_logger.handlers):
            root_logger.removeHandler(existing)
        root_logger.addHandler(handler)


# Global configuration instance, used by the CLI entry point only
_config: Optional[LintConfig] = None


def get_config() -> LintConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = LintConfig.from_env()
    return _config


def set_config(config: Optional[LintConfig]) -> None:
    """Set (or reset with None) the global configuration instance."""
    global _config
    _config = config
