"""
Spec repository management.

Repositories are plain directories under the repositories root, usually
git clones. Clone and pull are thin wrappers around the ``git`` binary.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from specrepo.core.errors import GitCommandError, InputError
from specrepo.core.resilience import MEDIUM_TIMEOUT, SLOW_TIMEOUT

logger = logging.getLogger(__name__)


def run_git(
    args: Sequence[str],
    cwd: Path,
    timeout: float = MEDIUM_TIMEOUT,
) -> str:
    """
    Run a git command and return its stdout.

    Raises:
        GitCommandError: If git exits non-zero, is missing or times out.
    """
    cmd = ["git", *args]
    logger.debug("Running %s in %s", " ".join(cmd), cwd)
    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise GitCommandError(cmd, 127, "git executable not found") from e
    except subprocess.TimeoutExpired as e:
        raise GitCommandError(cmd, -1, f"timed out after {timeout}s") from e

    if result.returncode != 0:
        raise GitCommandError(cmd, result.returncode, result.stderr)
    return result.stdout


class ReposManager:
    """
    Locates and maintains the spec repositories under a root directory.

    Args:
        repos_dir: Directory holding one subdirectory per repository.
    """

    def __init__(self, repos_dir: Path):
        self.repos_dir = Path(repos_dir).expanduser()

    def list_repos(self) -> List[Path]:
        """Every repository directory, sorted by name."""
        if not self.repos_dir.is_dir():
            return []
        return sorted(
            (c for c in self.repos_dir.iterdir() if c.is_dir() and not c.name.startswith(".")),
            key=lambda p: p.name,
        )

    def repo_dir(self, name: str) -> Path:
        return self.repos_dir / name

    def has_repo(self, name: str) -> bool:
        return self.repo_dir(name).is_dir()

    def require_repo(self, name: str) -> Path:
        """
        Directory of a registered repository.

        Raises:
            InputError: If no repository has that name.
        """
        if not self.has_repo(name):
            raise InputError(name, self.repos_dir)
        return self.repo_dir(name)

    def add(self, name: str, url: str, branch: Optional[str] = None) -> Path:
        """Clone ``url`` as repository ``name`` and optionally check out ``branch``."""
        self.repos_dir.mkdir(parents=True, exist_ok=True)
        run_git(["clone", url, name], cwd=self.repos_dir, timeout=SLOW_TIMEOUT)
        target = self.repo_dir(name)
        if branch:
            run_git(["checkout", branch], cwd=target)
        logger.info("Added spec repo %s from %s", name, url)
        return target

    def update(self, name: Optional[str] = None) -> List[Path]:
        """
        Pull one repository, or every git repository when ``name`` is None.

        Returns:
            The directories that were updated.
        """
        if name:
            dirs = [self.require_repo(name)]
        else:
            dirs = [d for d in self.list_repos() if (d / ".git").exists()]

        for repo in dirs:
            run_git(["pull", "--ff-only"], cwd=repo, timeout=SLOW_TIMEOUT)
            logger.info("Updated spec repo %s", repo.name)
        return dirs
