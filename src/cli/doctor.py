"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import TransportClient
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import HttpError, TransportError
from core.interfaces.transport import RequestDescriptor

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_backend(settings: AppSettings) -> tuple[bool, str]:
    """Any HTTP answer (even 401/404) proves the backend is reachable."""

    async with TransportClient(settings) as client:
        try:
            await client.request(RequestDescriptor.get("/"))
        except HttpError as exc:
            return True, f"HTTP {exc.status}"
        except TransportError as exc:
            return False, str(exc.descriptor.message)
    return True, "HTTP 2xx"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Bizdesk Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("API base URL", "OK", settings.api_base_url)
    table.add_row("User config", "OK" if get_user_env_file().exists() else "MISSING", str(get_user_env_file()))
    if settings.access_token:
        table.add_row("Session", "OK", "Token stored")
    else:
        table.add_row("Session", "OPTIONAL", "No token -> run `bizdesk login`")
    if settings.supplier_lookup_path:
        table.add_row("Supplier lookup", "OK", settings.supplier_lookup_path)
    else:
        table.add_row("Supplier lookup", "NOT WIRED", "Supplier filter options unavailable")

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_backend(settings))
    table.add_row("Backend connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print("\n[yellow]Note:[/yellow] run `bizdesk doctor setup` to change the API URL.")


@app.command()
def setup() -> None:
    """Interactive backend setup (stores config in the user config .env)."""

    settings = AppSettings()
    base_url = typer.prompt("API base URL", default=settings.api_base_url, show_default=True).strip()
    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base URL must start with http:// or https://")

    supplier_path = typer.prompt(
        "Supplier lookup path (empty = not wired)",
        default=settings.supplier_lookup_path or "",
        show_default=True,
    ).strip()

    env_path = write_user_env_vars(
        {
            "BIZDESK_API_BASE_URL": base_url.rstrip("/"),
            "BIZDESK_SUPPLIER_LOOKUP_PATH": supplier_path,
        }
    )

    _console.print(f"[green]Saved backend config to:[/green] {env_path}")
