"""Unit tests for CLI output, logging and context helpers."""

import json

import click
import pytest
from click.testing import CliRunner

from specrepo.cli.config import CLIContext
from specrepo.cli.logging import CLILogContext, cli_command, get_request_id
from specrepo.cli.output import emit_error, emit_success
from specrepo.cli.registry import get_context, set_context
from specrepo.cli.resilience import handle_keyboard_interrupt


class TestRequestContext:
    def test_log_context_sets_and_resets_request_id(self):
        before = get_request_id()
        with CLILogContext(request_id="cli_test") as ctx:
            assert ctx.request_id == "cli_test"
            assert get_request_id() == "cli_test"
        assert get_request_id() == before

    def test_cli_command_provides_request_id(self):
        seen = []

        @cli_command("probe")
        def probe():
            seen.append(get_request_id())

        probe()
        assert seen[0].startswith("cli_")


class TestOutput:
    """Tests for emit_success() and emit_error()."""

    def test_emit_success_envelope(self, capsys):
        emit_success({"count": 2}, warnings=["stale"])
        response = json.loads(capsys.readouterr().out)
        assert response["success"] is True
        assert response["data"] == {"count": 2}
        assert response["meta"]["warnings"] == ["stale"]
        assert response["meta"]["request_id"].startswith("cli_")

    def test_emit_success_wraps_non_dict(self, capsys):
        emit_success(["a", "b"])
        assert json.loads(capsys.readouterr().out)["data"] == {"result": ["a", "b"]}

    def test_emit_error_text(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            emit_error("boom", remediation="try again", color=False)
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "[!] boom" in err
        assert "try again" in err

    def test_emit_error_json(self, capsys):
        with pytest.raises(SystemExit):
            emit_error("boom", "REPO_NOT_FOUND", error_type="not_found", json_output=True)
        response = json.loads(capsys.readouterr().err)
        assert response["success"] is False
        assert response["error"] == "boom"
        assert response["data"]["error_code"] == "REPO_NOT_FOUND"
        assert response["data"]["error_type"] == "not_found"


class TestKeyboardInterrupt:
    def test_exits_130_and_runs_cleanup(self):
        cleaned = []

        @handle_keyboard_interrupt(cleanup=lambda: cleaned.append(True))
        def interrupted():
            raise KeyboardInterrupt

        with pytest.raises(SystemExit) as exc_info:
            interrupted()
        assert exc_info.value.code == 130
        assert cleaned == [True]


class TestContext:
    def test_repos_dir_override(self, tmp_path):
        ctx = CLIContext(repos_dir=str(tmp_path / "custom"))
        assert ctx.repos_dir == (tmp_path / "custom").resolve()

    def test_module_level_context(self, tmp_path):
        ctx = CLIContext(repos_dir=str(tmp_path))
        set_context(ctx)
        try:
            assert get_context() is ctx
        finally:
            set_context(None)

    def test_missing_context_raises(self):
        with pytest.raises(RuntimeError):
            get_context()

    def test_click_context_wins(self, tmp_path):
        ctx = CLIContext(repos_dir=str(tmp_path))

        @click.command()
        @click.pass_context
        def probe(click_ctx):
            click.echo(str(get_context(click_ctx) is ctx))

        result = CliRunner().invoke(probe, obj={"cli_context": ctx})
        assert result.output.strip() == "True"
