"""Output helpers for the specrepo CLI.

Human-readable text is the default; commands given ``--json`` emit the
response-v2 envelope from specrepo.core.responses instead. Reports go to
stdout, errors go to stderr.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Mapping, NoReturn, Optional, Sequence

import click

from specrepo.cli.logging import generate_request_id, get_request_id, set_request_id
from specrepo.core.responses import error_response, success_response


def _ensure_request_id() -> str:
    request_id = get_request_id()
    if request_id:
        return request_id
    request_id = generate_request_id()
    set_request_id(request_id)
    return request_id


def emit(data: Any) -> None:
    """Emit minified JSON to stdout."""
    click.echo(json.dumps(data, separators=(",", ":"), default=str))


def emit_text(text: str, *, color: Optional[bool] = None, err: bool = False) -> None:
    """Write human-readable text; ANSI styling is stripped when not on a TTY."""
    click.echo(text, color=color, err=err)


def emit_error(
    message: str,
    code: str = "INTERNAL_ERROR",
    *,
    error_type: str = "internal",
    remediation: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
    json_output: bool = False,
    color: Optional[bool] = None,
) -> NoReturn:
    """Emit an error to stderr and exit with code 1.

    Args:
        message: Human-readable error description.
        code: Error code in SCREAMING_SNAKE_CASE (e.g., REPO_NOT_FOUND).
        error_type: Error category for routing (validation, not_found, ...).
        remediation: Actionable guidance for resolving the error.
        details: Optional additional error context.
        json_output: Emit the response-v2 envelope instead of plain text.
        color: Colour override for plain text output.

    Raises:
        SystemExit: Always exits with code 1.
    """
    if json_output:
        response = error_response(
            message=message,
            error_code=code,
            error_type=error_type,
            remediation=remediation,
            details=details,
            request_id=_ensure_request_id(),
        )
        click.echo(json.dumps(asdict(response), separators=(",", ":"), default=str), err=True)
    else:
        click.echo(click.style(f"[!] {message}", fg="red"), color=color, err=True)
        if remediation:
            click.echo(remediation, err=True)
    sys.exit(1)


def emit_success(
    data: Any,
    *,
    warnings: Optional[Sequence[str]] = None,
    meta: Optional[Mapping[str, Any]] = None,
) -> None:
    """Emit a response-v2 success envelope to stdout.

    Args:
        data: The operation-specific payload (non-dicts are wrapped in ``result``).
        warnings: Non-fatal issues to surface in meta.warnings.
        meta: Additional metadata to merge into meta object.
    """
    payload = data if isinstance(data, dict) else {"result": data}
    response = success_response(
        data=payload,
        warnings=warnings,
        meta=meta,
        request_id=_ensure_request_id(),
    )
    emit(asdict(response))
