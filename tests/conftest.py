"""
Root pytest configuration and shared fixtures.

Provides spec repository builders and fake collaborators for the linter.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pytest

from specrepo.config import LintConfig, set_config
from specrepo.core.models import Message, ValidationResult


VALID_SPEC: Dict[str, Any] = {
    "name": "Alpha",
    "version": "1.0.0",
    "summary": "A well formed spec.",
    "license": "MIT",
    "source": {"git": "https://example.com/alpha.git", "tag": "1.0.0"},
}


def write_spec(directory: Path, name: str, data: Any, filename: Optional[str] = None) -> Path:
    """Write ``data`` as ``<filename or name>.spec.json`` under ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / (filename or f"{name}.spec.json")
    if isinstance(data, str):
        path.write_text(data, encoding="utf-8")
    else:
        path.write_text(json.dumps(data), encoding="utf-8")
    return path


def make_spec(spec_name: str, version: str = "1.0.0", **overrides: Any) -> Dict[str, Any]:
    spec = dict(VALID_SPEC, name=spec_name, version=version)
    spec["source"] = {"git": f"https://example.com/{spec_name.lower()}.git", "tag": version}
    for key, value in overrides.items():
        if value is None:
            spec.pop(key, None)
        else:
            spec[key] = value
    return spec


class FakeValidator:
    """Validator returning canned results keyed by file name."""

    def __init__(self, results: Dict[str, ValidationResult]):
        self.results = results
        self.seen: List[Path] = []

    def validate(self, path: Path) -> ValidationResult:
        self.seen.append(path)
        result = self.results.get(path.name)
        if result is None:
            return ValidationResult(entity_name=path.name, path=path)
        return result


class FakeFreshnessChecker:
    """Freshness checker returning fixed warnings or raising."""

    def __init__(self, warnings: Iterable[str] = (), error: Optional[Exception] = None):
        self.warnings = list(warnings)
        self.error = error
        self.checked: List[Path] = []

    def check(self, repo_dir: Path) -> List[str]:
        self.checked.append(repo_dir)
        if self.error is not None:
            raise self.error
        return list(self.warnings)


def make_result(
    name: str, version: str = "1.0", *messages: Message, path: Optional[str] = None
) -> ValidationResult:
    return ValidationResult(
        entity_name=name,
        entity_version=version,
        messages=list(messages),
        path=Path(path) if path else None,
    )


@pytest.fixture
def lint_config(tmp_path) -> LintConfig:
    """Configuration rooted in a temporary repos directory, colour disabled."""
    repos_dir = tmp_path / "repos"
    repos_dir.mkdir()
    return LintConfig(repos_dir=repos_dir, color="never", tool_version="1.0.0")


@pytest.fixture
def scenario_repo(tmp_path) -> Path:
    """A repo with a valid spec (A), an erroring spec (B) and a warning spec (C)."""
    repo = tmp_path / "scenario"
    write_spec(repo, "A", make_spec("A"))
    write_spec(repo, "B", make_spec("B", name=None))
    write_spec(repo / "nested", "C", make_spec("C", license=None))
    return repo


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Keep the user's environment and config files out of the tests."""
    for var in (
        "SPECREPO_REPOS_DIR",
        "SPECREPO_WORKERS",
        "SPECREPO_FRESHNESS_TIMEOUT",
        "SPECREPO_VERSION_URL",
        "SPECREPO_COLOR",
        "SPECREPO_LOG_LEVEL",
        "SPECREPO_CONFIG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    set_config(None)
    yield
    set_config(None)
