"""
Validation of individual spec files.

The linter only depends on the ``SpecValidator`` protocol; any object with a
``validate(path)`` method returning a ValidationResult can be plugged in.
``JsonSpecValidator`` is the default implementation for ``*.spec.json``
files.

Malformed input never raises: it is reported as error messages on the
result. Only I/O failure while reading the file raises ``SpecReadError``.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from specrepo.core.errors import SpecReadError
from specrepo.core.models import UNKNOWN_VERSION, Message, ValidationResult


SPEC_FILE_SUFFIX = ".spec.json"
SPEC_FILE_GLOB = f"**/*{SPEC_FILE_SUFFIX}"

# Maximum accepted spec file size (10 MB)
MAX_INPUT_SIZE = 10 * 1024 * 1024
MAX_SUMMARY_LENGTH = 140

REQUIRED_ATTRIBUTES = ("name", "version", "source")
DEPRECATED_ATTRIBUTES = ("clean_paths", "documentation_url_legacy", "preferred_dependency")

_VERSION_PATTERN = re.compile(r"^\d+(\.\d+)*([-+][0-9A-Za-z.\-]+)?$")


class SpecValidator(Protocol):
    """Anything that can validate a single spec file."""

    def validate(self, path: Path) -> ValidationResult:
        ...


def _read_spec_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SpecReadError(path, "file disappeared during the scan") from e
    except UnicodeDecodeError as e:
        raise SpecReadError(path, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise SpecReadError(path, e.strerror or str(e)) from e


def _string_attribute(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class JsonSpecValidator:
    """
    Default validator for JSON spec files.

    Args:
        root: Directory the spec paths are reported relative to when the
            spec's own name can't be read. Defaults to the file's parent.
    """

    def __init__(self, root: Optional[Path] = None):
        self.root = root

    def _fallback_name(self, path: Path) -> str:
        if self.root is not None:
            try:
                return path.relative_to(self.root).as_posix()
            except ValueError:
                pass
        return path.name

    def validate(self, path: Path) -> ValidationResult:
        """
        Validate one spec file.

        Raises:
            SpecReadError: If the file cannot be read.
        """
        path = Path(path)
        result = ValidationResult(entity_name=self._fallback_name(path), path=path)

        raw = _read_spec_text(path)
        if len(raw.encode("utf-8")) > MAX_INPUT_SIZE:
            result.messages.append(
                Message.error(
                    f"Spec file exceeds the maximum size of {MAX_INPUT_SIZE:,} bytes",
                    code="INPUT_TOO_LARGE",
                )
            )
            return result

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            result.messages.append(
                Message.error(f"Unable to parse spec file: {e.msg}", code="INVALID_JSON")
            )
            return result
        except RecursionError:
            result.messages.append(
                Message.error("Unable to parse spec file: nesting too deep", code="INVALID_JSON")
            )
            return result

        if not isinstance(data, dict):
            result.messages.append(
                Message.error("Spec file must contain a JSON object", code="INVALID_SPEC_TYPE")
            )
            return result

        name = _string_attribute(data, "name")
        version = _string_attribute(data, "version")
        if name:
            result.entity_name = name
        if version:
            result.entity_version = version

        result.messages.extend(validate_spec_data(data))
        result.messages.extend(_check_file_name(path, name))
        return result


def validate_spec_data(data: Dict[str, Any]) -> List[Message]:
    """Run the attribute rules against an already parsed spec document."""
    messages: List[Message] = []

    for key in REQUIRED_ATTRIBUTES:
        if key == "source":
            if not data.get("source"):
                messages.append(
                    Message.error(f"Missing required attribute `{key}`", code="MISSING_SOURCE")
                )
        elif _string_attribute(data, key) is None:
            messages.append(
                Message.error(
                    f"Missing required attribute `{key}`", code=f"MISSING_{key.upper()}"
                )
            )

    version = _string_attribute(data, "version")
    if version and not _VERSION_PATTERN.match(version):
        messages.append(Message.error(f"Invalid version `{version}`", code="INVALID_VERSION"))

    summary = data.get("summary")
    if not summary:
        messages.append(
            Message.warning("Missing recommended attribute `summary`", code="MISSING_SUMMARY")
        )
    elif isinstance(summary, str) and len(summary) > MAX_SUMMARY_LENGTH:
        messages.append(
            Message.warning(
                f"The summary should be short ({MAX_SUMMARY_LENGTH} characters max)",
                code="SUMMARY_TOO_LONG",
            )
        )

    if not data.get("license"):
        messages.append(Message.warning("Missing license information", code="MISSING_LICENSE"))

    for key in DEPRECATED_ATTRIBUTES:
        if key in data:
            messages.append(
                Message.warning(f"Deprecated attribute `{key}`", code="DEPRECATED_ATTRIBUTE")
            )

    return messages


def _check_file_name(path: Path, name: Optional[str]) -> List[Message]:
    if not name or not path.name.endswith(SPEC_FILE_SUFFIX):
        return []
    stem = path.name[: -len(SPEC_FILE_SUFFIX)]
    if stem != name:
        return [
            Message.warning(
                "The name of the spec file should match the name of the spec",
                code="FILE_NAME_MISMATCH",
            )
        ]
    return []


def find_spec_files(directory: Path) -> List[Path]:
    """Return every spec file below ``directory`` in sorted order."""
    return sorted(p for p in Path(directory).glob(SPEC_FILE_GLOB) if p.is_file())
