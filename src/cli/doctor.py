"""Doctor command for configuration diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.api_helper import clean_url
from adapters.auth import build_auth_provider
from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import ConfigurationError

app = typer.Typer(no_args_is_help=True, help="Configuration and connectivity checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(settings.base_uri)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


def _check_credentials(settings: AppSettings) -> tuple[bool, str]:
    """Sign a dummy request to detect missing credentials without sending it."""

    probe = httpx.Request("GET", clean_url(f"{settings.base_uri}/v1/replies"))
    try:
        build_auth_provider(settings).apply(probe)
    except ConfigurationError as exc:
        return False, str(exc)
    scheme = "HMAC" if settings.use_hmac_authentication else "Basic"
    return True, f"{scheme} credentials present"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="MessageMedia Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    try:
        clean_url(settings.base_uri)
        table.add_row("Base URI", "OK", settings.base_uri)
        base_ok = True
    except ConfigurationError as exc:
        table.add_row("Base URI", "FAIL", str(exc))
        base_ok = False

    ok_auth, detail_auth = _check_credentials(settings) if base_ok else (False, "skipped")
    table.add_row("Credentials", "OK" if ok_auth else "FAIL", detail_auth)

    if base_ok:
        ok_http, detail_http = asyncio.run(_check_http(settings))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    table.add_row("User-Agent", "OK", settings.user_agent)
    _console.print(table)

    if not ok_auth:
        _console.print(
            "\n[yellow]Note:[/yellow] run `messagemedia doctor setup-auth` to store API credentials."
        )
        raise typer.Exit(code=1)


@app.command(name="setup-auth")
def setup_auth() -> None:
    """Interactive credential setup (stored in the user config .env)."""

    scheme = typer.prompt("Authentication scheme (basic/hmac)", default="basic", show_default=True)
    scheme = scheme.strip().lower()
    if scheme not in ("basic", "hmac"):
        raise typer.BadParameter("scheme must be 'basic' or 'hmac'")

    api_key = typer.prompt("API key").strip()
    api_secret = typer.prompt("API secret", hide_input=True, confirmation_prompt=False).strip()
    base_uri = typer.prompt("Base URI", default=AppSettings().base_uri, show_default=True).strip()

    if not api_key or not api_secret:
        raise typer.BadParameter("API key and secret are required")

    prefix = "MESSAGEMEDIA_HMAC_AUTH" if scheme == "hmac" else "MESSAGEMEDIA_BASIC_AUTH"
    env_path = write_user_env_vars(
        {
            f"{prefix}_USER_NAME": api_key,
            f"{prefix}_PASSWORD": api_secret,
            "MESSAGEMEDIA_USE_HMAC_AUTHENTICATION": "true" if scheme == "hmac" else "false",
            "MESSAGEMEDIA_BASE_URI": base_uri,
        }
    )

    _console.print(f"[green]Saved credentials to:[/green] {env_path}")
