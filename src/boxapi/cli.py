"""Command-line interface for interacting with Box folders and files."""
from __future__ import annotations

import json
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import typer

try:  # pragma: no cover - exercised in runtime environments
    from rich import box
    from rich.console import Console
    from rich.table import Table
except ImportError as exc:  # pragma: no cover - optional dependency guard
    raise RuntimeError(
        "The CLI requires Rich for table rendering. Install the CLI extras via "
        "'pip install boxapi-client[cli]' to enable this command."
    ) from exc

from .auth.box import BoxAuth
from .cli_schema import CLI_TABLE_VIEWS, TableView
from .client import BoxClient
from .config import DEFAULT_BASE_URL
from .exceptions import ApiError, BoxError

app = typer.Typer(help="Box folder and file management CLI.", no_args_is_help=True)

folders_app = typer.Typer(help="Folder operations.")
files_app = typer.Typer(help="File operations.")
comments_app = typer.Typer(help="Comment operations.")
auth_app = typer.Typer(help="Ticket and auth token operations.")
app.add_typer(folders_app, name="folders")
app.add_typer(files_app, name="files")
app.add_typer(comments_app, name="comments")
app.add_typer(auth_app, name="auth")


def _build_client(
    base_url: str,
    api_key: str | None,
    auth_token: str | None,
    verify_ssl: bool,
    timeout: float,
) -> BoxClient:
    if not api_key:
        raise typer.BadParameter("--api-key is required (or set BOX_API_KEY).")
    return BoxClient(
        base_url=base_url,
        auth_strategy=BoxAuth(api_key=api_key, auth_token=auth_token),
        verify_ssl=verify_ssl,
        timeout=timeout,
    )


def _print_payload(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


stdout = Console(force_terminal=False, color_system=None, highlight=False)


def _entries_table(view: TableView, entries: Sequence[Mapping[str, Any]], total: Any) -> Table:
    rows = sorted(entries, key=view.sort_key) if view.sort_key else list(entries)
    table = Table(
        title=view.title,
        caption=f"{len(rows)} of {total if total is not None else len(rows)} entries",
        box=box.MINIMAL,
        header_style="bold",
    )
    for column in view.columns:
        table.add_column(column.header, justify=column.justify, no_wrap=column.header == "ID")
    for row in rows:
        table.add_row(*(column.render(row) for column in view.columns))
    return table


def _present_output(payload: Any, *, view_id: str | None, json_output: bool) -> None:
    view = None if json_output or view_id is None else CLI_TABLE_VIEWS.get(view_id)
    entries = payload.get("entries") if isinstance(payload, Mapping) else None
    if view is None or not isinstance(entries, list):
        _print_payload(payload)
        return
    rows = [item for item in entries if isinstance(item, Mapping)]
    if not rows:
        typer.echo("No entries.")
        return
    stdout.print(_entries_table(view, rows, payload.get("total_count")))


def _handle_error(exc: BoxError) -> None:
    message = f"Request failed (status {exc.status_code}): {exc}"
    if isinstance(exc, ApiError) and exc.error and exc.error.code:
        message += f"\nError code: {exc.error.code}"
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _shared_options() -> dict[str, Any]:  # pragma: no cover - helper indirection
    # Accept common truthy/falsey representations of BOX_VERIFY_SSL.
    env_verify = os.getenv("BOX_VERIFY_SSL")
    default_verify = True
    if env_verify is not None and env_verify.strip().lower() in {"0", "false", "no", "off"}:
        default_verify = False

    return {
        "base_url": typer.Option(
            DEFAULT_BASE_URL, "--base-url", envvar="BOX_BASE_URL", help="Box API base URL."
        ),
        "api_key": typer.Option(
            None, "--api-key", "-k", envvar="BOX_API_KEY", help="Box application API key."
        ),
        "auth_token": typer.Option(
            None,
            "--auth-token",
            "-t",
            envvar="BOX_AUTH_TOKEN",
            help="Auth token obtained with 'auth token'.",
        ),
        "verify_ssl": typer.Option(
            default_verify,
            "--verify/--no-verify",
            help="Enable or disable TLS certificate verification.",
            show_default=True,
        ),
        "timeout": typer.Option(30.0, help="Request timeout (seconds).", show_default=True),
        "output_json": typer.Option(
            False,
            "--json",
            "-j",
            help="Return raw JSON instead of rendering a table.",
        ),
    }


_SHARED_OPTIONS = _shared_options()


@folders_app.command("items")
def folders_items(
    folder_id: str = typer.Argument("0", help="Folder identifier (0 is the root)."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    api_key: str | None = _SHARED_OPTIONS["api_key"],
    auth_token: str | None = _SHARED_OPTIONS["auth_token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List the items contained in a folder."""

    with _build_client(base_url, api_key, auth_token, verify_ssl, timeout) as client:
        try:
            payload = client.folders.items(folder_id)
        except BoxError as exc:
            _handle_error(exc)
            return
    _present_output(payload, view_id="folders.items", json_output=output_json)


@folders_app.command("get")
def folders_get(
    folder_id: str = typer.Argument(..., help="Folder identifier."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    api_key: str | None = _SHARED_OPTIONS["api_key"],
    auth_token: str | None = _SHARED_OPTIONS["auth_token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Show folder metadata."""

    with _build_client(base_url, api_key, auth_token, verify_ssl, timeout) as client:
        try:
            payload = client.folders.get(folder_id)
        except BoxError as exc:
            _handle_error(exc)
            return
    _print_payload(payload)


@folders_app.command("create")
def folders_create(
    parent_id: str = typer.Argument(..., help="Parent folder identifier."),
    name: str = typer.Argument(..., help="New folder name."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    api_key: str | None = _SHARED_OPTIONS["api_key"],
    auth_token: str | None = _SHARED_OPTIONS["auth_token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Create a folder under PARENT_ID."""

    with _build_client(base_url, api_key, auth_token, verify_ssl, timeout) as client:
        try:
            payload = client.folders.create(parent_id, name)
        except BoxError as exc:
            _handle_error(exc)
            return
    _print_payload(payload)


@folders_app.command("delete")
def folders_delete(
    folder_id: str = typer.Argument(..., help="Folder identifier."),
    recursive: bool = typer.Option(
        False, "--recursive/--no-recursive", help="Delete non-empty folders with their content."
    ),
    base_url: str = _SHARED_OPTIONS["base_url"],
    api_key: str | None = _SHARED_OPTIONS["api_key"],
    auth_token: str | None = _SHARED_OPTIONS["auth_token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Delete a folder."""

    with _build_client(base_url, api_key, auth_token, verify_ssl, timeout) as client:
        try:
            client.folders.delete(folder_id, recursive=recursive)
        except BoxError as exc:
            _handle_error(exc)
            return
    typer.secho(f"Deleted folder {folder_id}.", fg=typer.colors.GREEN)


@files_app.command("get")
def files_get(
    file_id: str = typer.Argument(..., help="File identifier."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    api_key: str | None = _SHARED_OPTIONS["api_key"],
    auth_token: str | None = _SHARED_OPTIONS["auth_token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Show file metadata."""

    with _build_client(base_url, api_key, auth_token, verify_ssl, timeout) as client:
        try:
            payload = client.files.get(file_id)
        except BoxError as exc:
            _handle_error(exc)
            return
    _print_payload(payload)


@files_app.command("download")
def files_download(
    file_id: str = typer.Argument(..., help="File identifier."),
    output: Path = typer.Option(..., "--output", "-o", help="Destination path."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    api_key: str | None = _SHARED_OPTIONS["api_key"],
    auth_token: str | None = _SHARED_OPTIONS["auth_token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Download file content to a local path."""

    with _build_client(base_url, api_key, auth_token, verify_ssl, timeout) as client:
        try:
            content = client.files.read(file_id)
        except BoxError as exc:
            _handle_error(exc)
            return
    destination = output.expanduser()
    destination.write_bytes(content)
    typer.secho(f"Wrote {len(content)} bytes to {destination}.", fg=typer.colors.GREEN)


@files_app.command("upload")
def files_upload(
    parent_id: str = typer.Argument(..., help="Destination folder identifier."),
    source: Path = typer.Argument(..., help="Local file to upload."),
    name: str | None = typer.Option(None, "--name", help="Override the stored file name."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    api_key: str | None = _SHARED_OPTIONS["api_key"],
    auth_token: str | None = _SHARED_OPTIONS["auth_token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Upload a local file into a folder."""

    path = source.expanduser()
    if not path.is_file():
        raise typer.BadParameter(f"File not found: {source}")
    with _build_client(base_url, api_key, auth_token, verify_ssl, timeout) as client:
        try:
            payload = client.files.upload(parent_id, name or path.name, path.read_bytes())
        except BoxError as exc:
            _handle_error(exc)
            return
    _print_payload(payload)


@files_app.command("delete")
def files_delete(
    file_id: str = typer.Argument(..., help="File identifier."),
    etag: str | None = typer.Option(None, "--etag", help="Only delete if the etag matches."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    api_key: str | None = _SHARED_OPTIONS["api_key"],
    auth_token: str | None = _SHARED_OPTIONS["auth_token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Delete a file."""

    with _build_client(base_url, api_key, auth_token, verify_ssl, timeout) as client:
        try:
            client.files.delete(file_id, etag=etag)
        except BoxError as exc:
            _handle_error(exc)
            return
    typer.secho(f"Deleted file {file_id}.", fg=typer.colors.GREEN)


@comments_app.command("list")
def comments_list(
    file_id: str = typer.Argument(..., help="File identifier."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    api_key: str | None = _SHARED_OPTIONS["api_key"],
    auth_token: str | None = _SHARED_OPTIONS["auth_token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List comments on a file."""

    with _build_client(base_url, api_key, auth_token, verify_ssl, timeout) as client:
        try:
            payload = client.files.comments(file_id)
        except BoxError as exc:
            _handle_error(exc)
            return
    _present_output(payload, view_id="comments.list", json_output=output_json)


@comments_app.command("add")
def comments_add(
    file_id: str = typer.Argument(..., help="File identifier."),
    message: str = typer.Argument(..., help="Comment text."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    api_key: str | None = _SHARED_OPTIONS["api_key"],
    auth_token: str | None = _SHARED_OPTIONS["auth_token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Comment on a file."""

    with _build_client(base_url, api_key, auth_token, verify_ssl, timeout) as client:
        try:
            payload = client.files.add_comment(file_id, message)
        except BoxError as exc:
            _handle_error(exc)
            return
    _print_payload(payload)


@comments_app.command("delete")
def comments_delete(
    comment_id: str = typer.Argument(..., help="Comment identifier."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    api_key: str | None = _SHARED_OPTIONS["api_key"],
    auth_token: str | None = _SHARED_OPTIONS["auth_token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Delete a comment."""

    with _build_client(base_url, api_key, auth_token, verify_ssl, timeout) as client:
        try:
            client.comments.delete(comment_id)
        except BoxError as exc:
            _handle_error(exc)
            return
    typer.secho(f"Deleted comment {comment_id}.", fg=typer.colors.GREEN)


@auth_app.command("ticket")
def auth_ticket(
    base_url: str = _SHARED_OPTIONS["base_url"],
    api_key: str | None = _SHARED_OPTIONS["api_key"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Request a new authentication ticket."""

    with _build_client(base_url, api_key, None, verify_ssl, timeout) as client:
        try:
            ticket = client.tickets.get_ticket(api_key or "")
        except BoxError as exc:
            _handle_error(exc)
            return
    typer.echo(ticket)


@auth_app.command("token")
def auth_token_command(
    ticket: str = typer.Option(..., "--ticket", help="Ticket authorized by the user."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    api_key: str | None = _SHARED_OPTIONS["api_key"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Exchange an authorized ticket for an auth token."""

    with _build_client(base_url, api_key, None, verify_ssl, timeout) as client:
        try:
            token = client.tickets.swap_ticket_for_token(api_key or "", ticket)
        except BoxError as exc:
            _handle_error(exc)
            return
    typer.echo(token)
