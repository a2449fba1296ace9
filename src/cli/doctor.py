"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import HttpxTransport
from core.config import AppSettings, resolve_credentials, write_user_env_vars
from core.domain.errors import TronNodeError
from core.services.request_builder import build

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_node(settings: AppSettings) -> tuple[bool, str]:
    """Same request the credential test uses: POST /wallet/getnowblock."""

    try:
        credentials = resolve_credentials(settings)
        request = build("blocks", "getCurrentBlock", {}, credentials)
        block = await HttpxTransport(settings).send(request)
    except TronNodeError as exc:
        return False, str(exc)

    header = block.get("block_header", {}) if isinstance(block, dict) else {}
    number = header.get("raw_data", {}).get("number")
    return True, f"latest block {number}" if number is not None else "OK"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="tron-node Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    try:
        credentials = resolve_credentials(settings)
        table.add_row("Base URL", "OK", credentials.base_url)
    except TronNodeError as exc:
        table.add_row("Base URL", "FAIL", str(exc))

    if settings.api_key:
        table.add_row("API key", "OK", "TRON-PRO-API-KEY set")
    else:
        table.add_row("API key", "OPTIONAL", "No key set -> public rate limits")

    ok_node, detail_node = asyncio.run(_check_node(settings))
    table.add_row("Node connectivity", "OK" if ok_node else "FAIL", detail_node)

    _console.print(table)
    if not ok_node:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    network = typer.prompt("Network (mainnet/shasta/nile/custom)", default="mainnet").strip().lower()
    if network not in ("mainnet", "shasta", "nile", "custom"):
        raise typer.BadParameter(f"Unknown network: {network}")

    values = {"TRON_NODE_NETWORK": network}
    if network == "custom":
        full_node = typer.prompt("Custom full node URL").strip()
        if not full_node:
            raise typer.BadParameter("custom full node URL is required")
        values["TRON_NODE_CUSTOM_FULL_NODE"] = full_node

    api_key = typer.prompt("TronGrid API key", default="", hide_input=True, show_default=False).strip()
    values["TRON_NODE_API_KEY"] = api_key

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
