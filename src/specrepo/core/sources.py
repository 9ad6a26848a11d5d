"""
Version information checks for spec repositories.

A repository may ship a ``repo-version.json`` document at its root:

    {"min": "0.2.0", "max": "1.0.0", "last": "0.4.1"}

``min``/``max`` bound the tool versions able to read the repository;
``last`` advertises the newest tool release. When a ``version_url`` is
configured the same document is fetched over HTTP and its ``last`` takes
precedence.

The check returns human-readable warnings for degraded conditions (corrupt
metadata, unreachable URL, newer release available) and raises
``RepoIncompatibleError`` only when the repository can't be used at all.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, Tuple

import httpx

from specrepo.core.errors import RepoIncompatibleError
from specrepo.core.resilience import FAST_TIMEOUT, retry_with_backoff

if TYPE_CHECKING:
    from specrepo.config import LintConfig

logger = logging.getLogger(__name__)

VERSION_FILE_NAME = "repo-version.json"


class FreshnessChecker(Protocol):
    """Anything that can check a repository before it is linted."""

    def check(self, repo_dir: Path) -> List[str]:
        ...


def _parse_version(value: str) -> Tuple[Tuple[int, ...], int, str]:
    base = value.split("+")[0]
    prerelease = ""
    if "-" in base:
        base, prerelease = base.split("-", 1)
    numbers = tuple(int(part) for part in base.split("."))
    # A release sorts after any of its prereleases
    return numbers, 0 if prerelease else 1, prerelease


def compare_versions(v1: str, v2: str) -> int:
    """
    Compare two dotted versions.

    Returns:
        -1 if v1 < v2, 0 if v1 == v2, 1 if v1 > v2

    Raises:
        ValueError: If either version is not dotted numeric.
    """
    (n1, r1, p1), (n2, r2, p2) = _parse_version(v1), _parse_version(v2)
    width = max(len(n1), len(n2))
    n1 = n1 + (0,) * (width - len(n1))
    n2 = n2 + (0,) * (width - len(n2))
    k1, k2 = (n1, r1, p1), (n2, r2, p2)
    return (k1 > k2) - (k1 < k2)


@dataclass
class VersionInfo:
    """Parsed contents of a repo-version document."""

    min: Optional[str] = None
    max: Optional[str] = None
    last: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VersionInfo":
        if not isinstance(data, dict):
            raise ValueError("version information must be a JSON object")
        values = {}
        for key in ("min", "max", "last"):
            value = data.get(key)
            if value is None:
                values[key] = None
                continue
            value = str(value)
            _parse_version(value)  # raises ValueError when malformed
            values[key] = value
        return cls(**values)


class VersionInfoChecker:
    """
    Checks a repository's declared version requirements.

    Args:
        current_version: Version of the running tool.
        version_url: Optional URL of a remote version document.
        timeout: HTTP timeout in seconds for the remote fetch.
        max_retries: Retries for transport errors on the remote fetch.
    """

    def __init__(
        self,
        current_version: str,
        version_url: Optional[str] = None,
        timeout: float = FAST_TIMEOUT,
        max_retries: int = 0,
    ):
        self.current_version = current_version
        self.version_url = version_url
        self.timeout = timeout
        self.max_retries = max_retries

    @classmethod
    def from_config(cls, config: "LintConfig") -> "VersionInfoChecker":
        """Build a checker from the lint settings."""
        return cls(
            current_version=config.tool_version,
            version_url=config.version_url,
            timeout=config.freshness_timeout,
            max_retries=config.freshness_retries,
        )

    def _load_local(self, repo_dir: Path) -> Optional[VersionInfo]:
        path = repo_dir / VERSION_FILE_NAME
        if not path.exists():
            return None
        with open(path, encoding="utf-8") as f:
            return VersionInfo.from_dict(json.load(f))

    def _fetch_remote(self) -> VersionInfo:
        def _get() -> Dict[str, Any]:
            response = httpx.get(self.version_url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

        data = retry_with_backoff(
            _get,
            max_retries=self.max_retries,
            base_delay=0.5,
            retryable_exceptions=[httpx.TransportError],
            operation="version fetch",
        )
        return VersionInfo.from_dict(data)

    def check(self, repo_dir: Path) -> List[str]:
        """
        Check the version information of a repository.

        Returns:
            Warnings to surface for this repository (possibly empty).

        Raises:
            RepoIncompatibleError: If the repository needs a different version.
        """
        repo_dir = Path(repo_dir)
        warnings: List[str] = []

        try:
            info = self._load_local(repo_dir)
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("Corrupt version information in %s: %s", repo_dir, e)
            warnings.append(f"Unable to read `{VERSION_FILE_NAME}` in `{repo_dir.name}`: {e}")
            info = None

        if self.version_url:
            try:
                remote = self._fetch_remote()
            except httpx.TimeoutException:
                logger.warning("Timed out fetching version information from %s", self.version_url)
                warnings.append(
                    f"Timed out after {self.timeout}s fetching version information "
                    f"from {self.version_url}"
                )
            except (httpx.HTTPError, ValueError) as e:
                logger.warning("Unable to fetch version information: %s", e)
                warnings.append(f"Unable to fetch version information from {self.version_url}: {e}")
            else:
                if info is None:
                    info = remote
                elif remote.last:
                    info.last = remote.last

        if info is None:
            return warnings

        if info.min and compare_versions(self.current_version, info.min) < 0:
            raise RepoIncompatibleError(
                f"The `{repo_dir.name}` repo requires specrepo version {info.min} "
                f"or later (running {self.current_version}).",
                repo_dir=repo_dir,
            )
        if info.max and compare_versions(self.current_version, info.max) > 0:
            raise RepoIncompatibleError(
                f"The `{repo_dir.name}` repo is not compatible with specrepo "
                f"{self.current_version} (requires at most {info.max}).",
                repo_dir=repo_dir,
            )
        if info.last and compare_versions(info.last, self.current_version) > 0:
            warnings.append(f"specrepo {info.last} is available (running {self.current_version}).")

        return warnings
