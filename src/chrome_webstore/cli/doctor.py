"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from chrome_webstore.adapters.http_client import HttpxTransport
from chrome_webstore.core.config import AppSettings, get_user_env_file
from chrome_webstore.core.errors import WebStoreError
from chrome_webstore.core.services.request_builder import DEFAULT_API_VERSION
from chrome_webstore.core.services.store_client import StoreClient

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_version(settings: AppSettings) -> tuple[bool, str]:
    client = StoreClient(HttpxTransport(settings), settings)
    try:
        return True, await client.version()
    except WebStoreError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Show the effective configuration and check the store is reachable."""

    settings = AppSettings()

    table = Table(title="chrome-webstore Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Locale", "OK", f"{settings.default_locale}-{settings.default_country}")
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Proxy", "OK" if settings.proxy_url else "NONE", settings.proxy_url or "direct")
    user_env = get_user_env_file()
    table.add_row("User config", "OK" if user_env.exists() else "NONE", str(user_env))

    ok, detail = asyncio.run(_check_version(settings))
    table.add_row("Store version", "OK" if ok else "FAIL", detail)

    pinned = settings.api_version or DEFAULT_API_VERSION
    if ok and detail != pinned:
        table.add_row("API version", "STALE", f"requests use {pinned}, store reports {detail}")
    else:
        table.add_row("API version", "OK", pinned)

    _console.print(table)

    if not ok:
        _console.print(
            "\n[yellow]Note:[/yellow] requests still use the pinned API version; "
            "set CHROME_WEBSTORE_PROXY_URL if the store is not reachable directly."
        )
        raise typer.Exit(code=1)
