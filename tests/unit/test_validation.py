"""Unit tests for the default JSON spec validator."""

from unittest.mock import patch

import pytest

from specrepo.core.errors import SpecReadError
from specrepo.core.models import Outcome, Severity
from specrepo.core.validation import (
    MAX_SUMMARY_LENGTH,
    JsonSpecValidator,
    find_spec_files,
    validate_spec_data,
)
from tests.conftest import make_spec, write_spec


def _texts(result, severity=None):
    return [m.text for m in result.messages if severity is None or m.severity is severity]


class TestJsonSpecValidator:
    """Tests for JsonSpecValidator.validate()."""

    def test_valid_spec_passes(self, tmp_path):
        path = write_spec(tmp_path, "Alpha", make_spec("Alpha", "2.1.0"))
        result = JsonSpecValidator(tmp_path).validate(path)
        assert result.outcome is Outcome.PASSED
        assert result.entity_name == "Alpha"
        assert result.entity_version == "2.1.0"
        assert result.path == path

    def test_invalid_json_is_an_error_not_an_exception(self, tmp_path):
        """Malformed files are reported, never raised."""
        path = write_spec(tmp_path, "Broken", "{ not json")
        result = JsonSpecValidator(tmp_path).validate(path)
        assert result.outcome is Outcome.HAS_ERRORS
        assert _texts(result)[0].startswith("Unable to parse spec file:")
        assert result.entity_name == "Broken.spec.json"
        assert result.entity_version == "unknown"

    def test_deeply_nested_json_is_an_error(self, tmp_path):
        """Nesting beyond the parser recursion limit is reported as invalid JSON."""
        path = write_spec(tmp_path, "Deep", "[" * 200000 + "]" * 200000)
        result = JsonSpecValidator(tmp_path).validate(path)
        assert result.outcome is Outcome.HAS_ERRORS
        assert _texts(result) == ["Unable to parse spec file: nesting too deep"]
        assert result.messages[0].code == "INVALID_JSON"

    def test_non_object_document(self, tmp_path):
        path = write_spec(tmp_path, "List", [1, 2, 3])
        result = JsonSpecValidator(tmp_path).validate(path)
        assert _texts(result) == ["Spec file must contain a JSON object"]

    def test_missing_name_falls_back_to_relative_path(self, tmp_path):
        path = write_spec(tmp_path / "sub", "B", make_spec("B", name=None))
        result = JsonSpecValidator(tmp_path).validate(path)
        assert result.entity_name == "sub/B.spec.json"
        assert "Missing required attribute `name`" in _texts(result, Severity.ERROR)

    def test_file_name_mismatch_warns(self, tmp_path):
        path = write_spec(tmp_path, "Other", make_spec("Alpha"))
        result = JsonSpecValidator(tmp_path).validate(path)
        assert result.outcome is Outcome.HAS_WARNINGS
        assert _texts(result) == ["The name of the spec file should match the name of the spec"]

    def test_numeric_version_is_accepted(self, tmp_path):
        path = write_spec(tmp_path, "Alpha", dict(make_spec("Alpha"), version=2))
        result = JsonSpecValidator(tmp_path).validate(path)
        assert result.entity_version == "2"
        assert result.outcome is Outcome.PASSED

    def test_unreadable_file_raises(self, tmp_path):
        """Only I/O failures propagate."""
        path = write_spec(tmp_path, "Alpha", make_spec("Alpha"))
        with patch("pathlib.Path.read_text", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(SpecReadError) as exc_info:
                JsonSpecValidator(tmp_path).validate(path)
        assert "Permission denied" in str(exc_info.value)

    def test_vanished_file_raises(self, tmp_path):
        with pytest.raises(SpecReadError, match="disappeared"):
            JsonSpecValidator(tmp_path).validate(tmp_path / "Gone.spec.json")

    def test_non_utf8_file_raises(self, tmp_path):
        path = tmp_path / "Bin.spec.json"
        path.write_bytes(b"\xff\xfe\x00")
        with pytest.raises(SpecReadError):
            JsonSpecValidator(tmp_path).validate(path)


class TestValidateSpecData:
    """Tests for the attribute rules."""

    def test_required_attributes(self):
        texts = [m.text for m in validate_spec_data({"summary": "s", "license": "MIT"})]
        assert texts == [
            "Missing required attribute `name`",
            "Missing required attribute `version`",
            "Missing required attribute `source`",
        ]

    def test_invalid_version(self):
        messages = validate_spec_data(make_spec("A", version="one.two"))
        assert [m.text for m in messages] == ["Invalid version `one.two`"]
        assert messages[0].severity is Severity.ERROR

    @pytest.mark.parametrize("version", ["1", "1.2.3", "1.0.0-beta.1", "2.0+build.5"])
    def test_valid_versions(self, version):
        assert validate_spec_data(make_spec("A", version=version)) == []

    def test_long_summary_warns(self):
        messages = validate_spec_data(make_spec("A", summary="x" * (MAX_SUMMARY_LENGTH + 1)))
        assert [m.code for m in messages] == ["SUMMARY_TOO_LONG"]

    def test_missing_recommended_attributes_warn(self):
        messages = validate_spec_data(make_spec("A", summary=None, license=None))
        assert {m.severity for m in messages} == {Severity.WARNING}
        assert [m.code for m in messages] == ["MISSING_SUMMARY", "MISSING_LICENSE"]

    def test_deprecated_attribute(self):
        messages = validate_spec_data(make_spec("A", clean_paths=["tmp"]))
        assert [m.text for m in messages] == ["Deprecated attribute `clean_paths`"]


class TestFindSpecFiles:
    def test_recursive_and_sorted(self, tmp_path):
        write_spec(tmp_path / "b", "B", {})
        write_spec(tmp_path / "a" / "deep", "A", {})
        (tmp_path / "README.md").write_text("ignored")
        (tmp_path / "C.json").write_text("{}")
        files = find_spec_files(tmp_path)
        assert [p.relative_to(tmp_path).as_posix() for p in files] == [
            "a/deep/A.spec.json",
            "b/B.spec.json",
        ]

    def test_empty_directory(self, tmp_path):
        assert find_spec_files(tmp_path) == []
