"""specrepo CLI - spec repository management and linting."""

from specrepo.cli.config import CLIContext, create_context
from specrepo.cli.logging import (
    CLILogContext,
    cli_command,
    get_cli_logger,
    get_request_id,
    set_request_id,
)
from specrepo.cli.main import cli
from specrepo.cli.output import emit, emit_error, emit_success, emit_text
from specrepo.cli.registry import get_context, set_context
from specrepo.cli.resilience import handle_keyboard_interrupt

__all__ = [
    # Entry point
    "cli",
    # Context
    "CLIContext",
    "create_context",
    "get_context",
    "set_context",
    # Output
    "emit",
    "emit_error",
    "emit_success",
    "emit_text",
    # Logging
    "CLILogContext",
    "cli_command",
    "get_cli_logger",
    "get_request_id",
    "set_request_id",
    # Resilience
    "handle_keyboard_interrupt",
]
