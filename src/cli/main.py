"""`messagemedia` command line.

Thin layer over `MessageMediaClient`: every command makes one blocking call and
renders the result with Rich (or raw JSON with `--json`).
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

import httpx
import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console

from adapters.json_exporter import export_model_json
from cli import doctor
from cli.ui_components import (
    build_delivery_reports_table,
    build_dynamic_response_panel,
    build_messages_table,
    build_replies_table,
    print_api_error,
)
from core.config import AppSettings, LogLevel
from core.domain.errors import APIException, ConfigurationError, DeserializationError
from core.domain.models import (
    ConfirmDeliveryReportsAsReceivedRequest,
    ConfirmRepliesAsReceivedRequest,
    GetMessageStatusResponse,
    Message,
    MessageFormat,
    SendMessagesRequest,
)
from core.logging_config import configure_logging
from core.services.client import MessageMediaClient

app = typer.Typer(no_args_is_help=True, help="MessageMedia Messages API client.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

ACCOUNT_OPTION = typer.Option(None, "--account", help="Account header override for this call.")
JSON_OPTION = typer.Option(False, "--json", help="Print the raw JSON result.")
OUTPUT_OPTION = typer.Option(None, "--output", "-o", help="Also write the JSON result to this file.")


def build_client(settings: AppSettings | None = None) -> MessageMediaClient:
    return MessageMediaClient(settings or AppSettings())


@app.callback()
def main(
    log_level: LogLevel | None = typer.Option(
        None,
        "--log-level",
        case_sensitive=False,
        help="Override MESSAGEMEDIA_LOG_LEVEL.",
    ),
) -> None:
    configure_logging((log_level or AppSettings().log_level).value)


@contextmanager
def _client_session() -> Iterator[MessageMediaClient]:
    """Open a client and turn client errors into CLI output and exit codes."""

    try:
        with build_client() as client:
            yield client
    except APIException as exc:
        print_api_error(_console, exc)
        raise typer.Exit(code=1) from exc
    except DeserializationError as exc:
        _console.print(f"[red]Unexpected response body (HTTP {exc.status_code}):[/red] {exc}")
        raise typer.Exit(code=1) from exc
    except ConfigurationError as exc:
        _console.print(f"[red]Configuration error:[/red] {exc}")
        _console.print("Run `messagemedia doctor setup-auth` to store credentials.")
        raise typer.Exit(code=2) from exc
    except httpx.HTTPError as exc:
        _console.print(f"[red]Transport error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _emit(
    result: BaseModel,
    *,
    as_json: bool,
    output: Path | None,
    render: Callable[[], object],
) -> None:
    if output is not None:
        path = export_model_json(model=result, output_path=output)
        _console.print(f"[green]Saved JSON to:[/green] {path}")
    if as_json:
        typer.echo(result.model_dump_json(by_alias=True, exclude_none=True, indent=2))
        return
    _console.print(render())


def _validated(build: Callable[[], BaseModel]) -> BaseModel:
    try:
        return build()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("check-reports")
def check_reports(
    account: str | None = ACCOUNT_OPTION,
    as_json: bool = JSON_OPTION,
    output: Path | None = OUTPUT_OPTION,
) -> None:
    """List delivery reports that have not been confirmed yet."""

    with _client_session() as client:
        result = client.delivery_reports.check_delivery_reports_sync(account)
    _emit(result, as_json=as_json, output=output, render=lambda: build_delivery_reports_table(result))


@app.command("confirm-reports")
def confirm_reports(
    ids: list[str] = typer.Argument(..., help="Delivery report ids (up to 100)."),
    account: str | None = ACCOUNT_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Confirm delivery reports so they are no longer returned."""

    body = _validated(lambda: ConfirmDeliveryReportsAsReceivedRequest(delivery_report_ids=ids))
    with _client_session() as client:
        result = client.delivery_reports.confirm_delivery_reports_as_received_sync(body, account)
    _emit(
        result,
        as_json=as_json,
        output=None,
        render=lambda: build_dynamic_response_panel(result, action=f"Confirmed {len(ids)} report(s)"),
    )


@app.command("check-replies")
def check_replies(
    account: str | None = ACCOUNT_OPTION,
    as_json: bool = JSON_OPTION,
    output: Path | None = OUTPUT_OPTION,
) -> None:
    """List replies that have not been confirmed yet."""

    with _client_session() as client:
        result = client.replies.check_replies_sync(account)
    _emit(result, as_json=as_json, output=output, render=lambda: build_replies_table(result))


@app.command("confirm-replies")
def confirm_replies(
    ids: list[str] = typer.Argument(..., help="Reply ids (up to 100)."),
    account: str | None = ACCOUNT_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Confirm replies so they are no longer returned."""

    body = _validated(lambda: ConfirmRepliesAsReceivedRequest(reply_ids=ids))
    with _client_session() as client:
        result = client.replies.confirm_replies_as_received_sync(body, account)
    _emit(
        result,
        as_json=as_json,
        output=None,
        render=lambda: build_dynamic_response_panel(result, action=f"Confirmed {len(ids)} reply(ies)"),
    )


@app.command()
def send(
    to: list[str] = typer.Option(..., "--to", help="Destination number; repeat for several recipients."),
    content: str = typer.Option(..., "--content", help="Message text."),
    source: str | None = typer.Option(None, "--from", help="Source number or sender id."),
    message_format: MessageFormat = typer.Option(MessageFormat.SMS, "--format", case_sensitive=False),
    callback_url: str | None = typer.Option(None, "--callback-url"),
    delivery_report: bool = typer.Option(False, "--delivery-report", help="Request delivery reports."),
    account: str | None = ACCOUNT_OPTION,
    as_json: bool = JSON_OPTION,
    output: Path | None = OUTPUT_OPTION,
) -> None:
    """Send the same message to one or more recipients."""

    body = _validated(
        lambda: SendMessagesRequest(
            messages=[
                Message(
                    content=content,
                    destination_number=number,
                    source_number=source,
                    format=message_format,
                    callback_url=callback_url,
                    delivery_report=delivery_report or None,
                )
                for number in to
            ]
        )
    )
    with _client_session() as client:
        result = client.messages.send_messages_sync(body, account)
    _emit(
        result,
        as_json=as_json,
        output=output,
        render=lambda: build_messages_table(result.messages, title="Submitted Messages"),
    )


@app.command()
def status(
    message_id: str = typer.Argument(..., help="Id returned when the message was sent."),
    account: str | None = ACCOUNT_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Show the current status of a message."""

    with _client_session() as client:
        result: GetMessageStatusResponse = client.messages.get_message_status_sync(message_id, account)
    _emit(result, as_json=as_json, output=None, render=lambda: build_messages_table([result], title="Message"))


@app.command()
def cancel(
    message_id: str = typer.Argument(..., help="Id of a scheduled message."),
    account: str | None = ACCOUNT_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Cancel a scheduled message."""

    with _client_session() as client:
        result = client.messages.update_cancel_scheduled_message_sync(message_id, None, account)
    _emit(
        result,
        as_json=as_json,
        output=None,
        render=lambda: build_dynamic_response_panel(result, action=f"Cancelled {message_id}"),
    )


def run() -> None:
    app()
