"""CLI UI components (Rich).

Tables and panels are built here so that command functions only deal with
calling the client and choosing what to print.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import APIException, SendMessages400ResponseException
from core.domain.models import (
    CheckDeliveryReportsResponse,
    CheckRepliesResponse,
    DynamicResponse,
    Message,
    MessageStatus,
)


def _status_text(status: MessageStatus | str | None) -> str:
    if status is None:
        return "-"
    if isinstance(status, MessageStatus):
        return status.value
    return str(status)


def _ts(value: object) -> str:
    if value is None:
        return "-"
    isoformat = getattr(value, "isoformat", None)
    return isoformat() if callable(isoformat) else str(value)


def build_delivery_reports_table(result: CheckDeliveryReportsResponse) -> Table:
    table = Table(title=f"Delivery Reports ({len(result.delivery_reports)})")
    table.add_column("Report ID", style="cyan", no_wrap=True)
    table.add_column("Message ID", style="white")
    table.add_column("Status", style="green")
    table.add_column("Source", style="magenta")
    table.add_column("Received", style="dim")
    for report in result.delivery_reports:
        table.add_row(
            report.delivery_report_id,
            report.message_id or "-",
            _status_text(report.status),
            report.source_number or "-",
            _ts(report.date_received),
        )
    return table


def build_replies_table(result: CheckRepliesResponse) -> Table:
    table = Table(title=f"Replies ({len(result.replies)})")
    table.add_column("Reply ID", style="cyan", no_wrap=True)
    table.add_column("From", style="magenta")
    table.add_column("To", style="magenta")
    table.add_column("Content", style="white")
    table.add_column("Received", style="dim")
    for reply in result.replies:
        table.add_row(
            reply.reply_id,
            reply.source_number or "-",
            reply.destination_number or "-",
            reply.content or "",
            _ts(reply.date_received),
        )
    return table


def build_messages_table(messages: list[Message], *, title: str = "Messages") -> Table:
    table = Table(title=title)
    table.add_column("Message ID", style="cyan", no_wrap=True)
    table.add_column("To", style="magenta")
    table.add_column("Status", style="green")
    table.add_column("Content", style="white")
    for message in messages:
        table.add_row(
            message.message_id or "-",
            message.destination_number or "-",
            _status_text(message.status),
            message.content or "",
        )
    return table


def build_dynamic_response_panel(response: DynamicResponse, *, action: str) -> Panel:
    body = Text()
    body.append(f"HTTP {response.status_code}\n", style="bold green")
    if response.body.strip():
        body.append(response.body.strip(), style="dim")
    return Panel(body, title=Text(action, style="bold"), border_style="green")


def print_api_error(console: Console, error: APIException) -> None:
    """Render an API error: status, server message and any validation details."""

    body = Text()
    if error.status_code is not None:
        body.append(f"HTTP {error.status_code}\n", style="bold red")
    body.append(error.api_message or str(error) or "No error details")
    if isinstance(error, SendMessages400ResponseException):
        for detail in error.details:
            body.append(f"\n- {detail}")
    console.print(Panel(body, title=Text("API error", style="bold red"), border_style="red"))
