"""Main CLI entry point for the confluence-page command.

This module provides the Typer application that drives the content lifecycle
client from a terminal. It is a caller of the core: the core raises typed
errors, and this module decides how they map onto process exit codes.
"""

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

import typer

from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.content_lifecycle.api_wrapper import APIWrapper
from src.content_lifecycle.auth import Authenticator
from src.content_lifecycle.client import ContentLifecycleClient
from src.content_lifecycle.errors import (
    InvalidCredentialsError,
    LifecycleError,
    RemoteRejectionError,
    TransportError,
)
from src.markup_validator.errors import ValidationError
from src.markup_validator.validator import MarkupValidator

VERSION = "0.1.0"

app = typer.Typer(
    name="confluence-page",
    help="""Manage a single Confluence page: create, read, update, delete.

Every update prunes the page history back to one version.

QUICK START:
  confluence-page get 123456
  confluence-page create --parent-id 33296 --title "Runbook" --body-file runbook.html
  confluence-page update 123456 --body-file runbook.html
  confluence-page validate runbook.html

Credentials come from --base-url/--username/--api-key or from the
CONFLUENCE_BASE_URL, CONFLUENCE_USERNAME and CONFLUENCE_API_KEY variables.""",
    add_completion=False,
    rich_markup_mode=None,  # Disable Rich markup to avoid compatibility issues
)

logger = logging.getLogger(__name__)


@dataclass
class CliState:
    """Options shared by every subcommand."""
    base_url: Optional[str]
    username: Optional[str]
    api_key: Optional[str]
    output: OutputHandler


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"confluence-page_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(file_format, datefmt=date_format))
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _exit_code_for_status(status_code: int) -> ExitCode:
    if status_code in (401, 403):
        return ExitCode.AUTH_ERROR
    if status_code == 404:
        return ExitCode.NOT_FOUND
    return ExitCode.REMOTE_REJECTED


def _exit_code_for(error: Exception) -> ExitCode:
    """Map a lifecycle error onto the exit code reported for it."""
    if isinstance(error, ValidationError):
        return ExitCode.INVALID_MARKUP
    if isinstance(error, InvalidCredentialsError):
        return ExitCode.AUTH_ERROR
    if isinstance(error, TransportError):
        return ExitCode.NETWORK_ERROR
    if isinstance(error, RemoteRejectionError):
        return _exit_code_for_status(error.status_code)
    return ExitCode.GENERAL_ERROR


@contextmanager
def _reporting_errors(output: OutputHandler) -> Iterator[None]:
    """Turn errors raised by the core into a message and an exit code."""
    try:
        yield
    except LifecycleError as e:
        logger.debug("Operation failed", exc_info=True)
        output.error(str(e))
        raise typer.Exit(_exit_code_for(e))
    except ValueError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _build_client(state: CliState) -> ContentLifecycleClient:
    authenticator = Authenticator(
        base_url=state.base_url,
        username=state.username,
        api_key=state.api_key,
    )
    return ContentLifecycleClient(api=APIWrapper(authenticator))


def _read_body(body_file: Path) -> str:
    return body_file.read_text(encoding="utf-8")


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="Confluence site URL (default: CONFLUENCE_BASE_URL)",
        metavar="URL",
    ),
    username: Optional[str] = typer.Option(
        None,
        "--username",
        help="Account email (default: CONFLUENCE_USERNAME)",
    ),
    api_key: Optional[str] = typer.Option(
        None,
        "--api-key",
        help="API token (default: CONFLUENCE_API_KEY)",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Manage a single Confluence page."""
    if version:
        typer.echo(f"confluence-page version {VERSION}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    _configure_logging(verbosity, logdir)
    ctx.obj = CliState(
        base_url=base_url,
        username=username,
        api_key=api_key,
        output=OutputHandler(verbosity=verbosity, no_color=no_color),
    )


@app.command("get")
def get_command(
    ctx: typer.Context,
    page_id: int = typer.Argument(..., help="Page ID"),
    no_body: bool = typer.Option(False, "--no-body", help="Do not print the page body"),
) -> None:
    """Show the canonical record of a page."""
    state: CliState = ctx.obj
    output = state.output

    with _reporting_errors(output):
        client = _build_client(state)
        with output.spinner(f"Fetching page {page_id}..."):
            result = client.fetch_by_id(page_id)

    if result.not_found:
        output.error(f"Page {page_id} not found")
        raise typer.Exit(ExitCode.NOT_FOUND)
    if not result.found:
        output.error(
            f"Unexpected HTTP status for page {page_id}: {result.status_code} {result.reason}"
        )
        raise typer.Exit(_exit_code_for_status(result.status_code))

    output.print_record(result.record, show_body=not no_body)


@app.command("create")
def create_command(
    ctx: typer.Context,
    parent_id: int = typer.Option(..., "--parent-id", help="ID of the parent page"),
    title: str = typer.Option(..., "--title", help="Title of the new page"),
    body_file: Path = typer.Option(
        ...,
        "--body-file",
        exists=True,
        dir_okay=False,
        readable=True,
        help="File holding the page body in storage format",
    ),
) -> None:
    """Create a page under a parent page."""
    state: CliState = ctx.obj
    output = state.output
    body = _read_body(body_file)

    with _reporting_errors(output):
        client = _build_client(state)
        with output.spinner(f"Creating page '{title}'..."):
            record = client.create(parent_id, title, body)

    output.success(f"Created page {record.id} (v{record.version_number})")
    output.print_record(record, show_body=False)


@app.command("update")
def update_command(
    ctx: typer.Context,
    page_id: int = typer.Argument(..., help="Page ID"),
    body_file: Path = typer.Option(
        ...,
        "--body-file",
        exists=True,
        dir_okay=False,
        readable=True,
        help="File holding the new page body in storage format",
    ),
    keep_history: bool = typer.Option(
        False,
        "--keep-history",
        help="Do not prune previous versions after the update",
    ),
) -> None:
    """Replace the body of a page and prune its history."""
    state: CliState = ctx.obj
    output = state.output
    body = _read_body(body_file)

    if keep_history:
        output.info(f"Previous versions of page {page_id} will be kept")

    with _reporting_errors(output):
        client = _build_client(state)
        with output.spinner(f"Updating page {page_id}..."):
            record = client.update(page_id, body, remove_previous_versions=not keep_history)

    output.success(f"Updated page {record.id} to v{record.version_number}")
    output.print_record(record, show_body=False)


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    page_id: int = typer.Argument(..., help="Page ID"),
) -> None:
    """Delete a page."""
    state: CliState = ctx.obj
    output = state.output

    with _reporting_errors(output):
        client = _build_client(state)
        with output.spinner(f"Deleting page {page_id}..."):
            client.delete(page_id)

    output.success(f"Deleted page {page_id}")


@app.command("prune")
def prune_command(
    ctx: typer.Context,
    page_id: int = typer.Argument(..., help="Page ID"),
    keep: int = typer.Option(1, "--keep", help="Number of versions to retain (at least 1)"),
) -> None:
    """Delete old versions of a page."""
    state: CliState = ctx.obj
    output = state.output

    output.info(f"Keeping {keep} version(s) of page {page_id}")

    with _reporting_errors(output):
        client = _build_client(state)
        with output.spinner(f"Pruning page {page_id}..."):
            result = client.prune(page_id, keep=keep)

    output.print_prune_summary(result)


@app.command("validate")
def validate_command(
    ctx: typer.Context,
    body_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="File holding a page body in storage format",
    ),
) -> None:
    """Check a page body without contacting Confluence."""
    state: CliState = ctx.obj
    output = state.output
    body = _read_body(body_file)

    with _reporting_errors(output):
        MarkupValidator().check(body)

    output.success(f"{body_file} is valid storage format")


def main() -> None:
    """Main entry point for the CLI application."""
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
