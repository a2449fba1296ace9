"""CLI de tron-node (Typer + Rich).

Por qué una CLI:
- Permite ejecutar batches del nodo fuera del host de automatización
  (scripts, CI, depuración de parámetros).
- Toda la lógica vive en el Core; aquí solo hay parsing y presentación.
"""

from __future__ import annotations

import asyncio
import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.batch_loader import load_batch
from adapters.json_exporter import dump_results, export_results_json
from cli import doctor
from cli.ui_components import build_operations_table, build_results_table, print_notice_once
from core.config import AppSettings, resolve_credentials
from core.domain.address import address_format
from core.domain.errors import TronNodeError
from core.domain.models import ResourceKind
from core.domain.units import from_sun, to_sun
from core.logging_config import setup_logging
from core.services.dispatcher import supported_operations
from core.services.node import TronNode
from core.services.request_builder import build

app = typer.Typer(no_args_is_help=True, help="Call the TRON HTTP API from batch files.")
convert_app = typer.Typer(no_args_is_help=True, help="TRX <-> Sun conversions.")
app.add_typer(doctor.app, name="doctor")
app.add_typer(convert_app, name="convert")

_console = Console()
_err_console = Console(stderr=True)


def _fail(message: str) -> typer.Exit:
    _err_console.print(f"[red]Error:[/red] {message}")
    return typer.Exit(code=1)


def _parse_param(raw: str) -> tuple[str, Any]:
    if "=" not in raw:
        raise typer.BadParameter(f"expected key=value, got {raw!r}")
    key, value = raw.split("=", 1)
    key = key.strip()
    if not key:
        raise typer.BadParameter(f"empty parameter name in {raw!r}")
    try:
        return key, json.loads(value)
    except json.JSONDecodeError:
        return key, value


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    settings = AppSettings()
    setup_logging(level="DEBUG" if verbose else settings.log_level, fmt=settings.log_format)
    if settings.show_notice:
        print_notice_once(_err_console)


@app.command(name="run")
def run_batch(
    batch_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Batch JSON file."),
    resource: Optional[str] = typer.Option(None, "--resource", "-r", help="Override the batch resource."),
    operation: Optional[str] = typer.Option(None, "--operation", "-o", help="Override the batch operation."),
    continue_on_fail: Optional[bool] = typer.Option(
        None,
        "--continue-on-fail/--abort-on-fail",
        help="Record per-item failures instead of aborting the batch.",
    ),
    output: Optional[Path] = typer.Option(None, "--output", help="Write results to this JSON file."),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON instead of a table."),
) -> None:
    """Execute a batch file against the configured node."""

    try:
        batch = load_batch(batch_file)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise _fail(f"invalid batch file {batch_file}: {exc}")

    request = batch.to_request(resource=resource, operation=operation, continue_on_fail=continue_on_fail)
    try:
        results = asyncio.run(TronNode(AppSettings()).execute(request))
    except TronNodeError as exc:
        raise _fail(str(exc))

    if output is not None:
        path = export_results_json(results=results, output_path=output)
        _err_console.print(f"[green]Saved results to:[/green] {path}")
    if as_json:
        typer.echo(dump_results(results), nl=False)
    elif output is None:
        _console.print(build_results_table(results))


@app.command(name="build")
def build_request(
    resource: str = typer.Argument(..., help="Resource (accounts, transactions, trc20Tokens, blocks, smartContracts)."),
    operation: str = typer.Argument(..., help="Operation name within the resource."),
    param: list[str] = typer.Option([], "--param", "-p", help="Parameter as key=value (JSON values allowed)."),
) -> None:
    """Print the request an operation would send, without sending it."""

    params = dict(_parse_param(raw) for raw in param)
    try:
        request = build(resource, operation, params, resolve_credentials(AppSettings()))
    except TronNodeError as exc:
        raise _fail(str(exc))
    typer.echo(json.dumps(request.redacted(), indent=2, ensure_ascii=False))


@app.command()
def operations(
    resource: Optional[str] = typer.Argument(None, help="Only list this resource."),
) -> None:
    """List the supported resource/operation pairs."""

    try:
        kinds = [ResourceKind.parse(resource)] if resource else list(ResourceKind)
    except TronNodeError as exc:
        raise _fail(str(exc))
    entries = [entry for kind in kinds for entry in supported_operations(kind)]
    _console.print(build_operations_table(entries))


@convert_app.command(name="to-sun")
def convert_to_sun(amount: str = typer.Argument(..., help="Amount in TRX.")) -> None:
    try:
        typer.echo(str(to_sun(amount)))
    except ValueError as exc:
        raise _fail(str(exc))


@convert_app.command(name="from-sun")
def convert_from_sun(amount: str = typer.Argument(..., help="Amount in Sun.")) -> None:
    try:
        trx: Decimal = from_sun(amount)
    except ValueError as exc:
        raise _fail(str(exc))
    typer.echo(format(trx.normalize(), "f"))


@app.command(name="validate-address")
def validate_address(address: str = typer.Argument(..., help="Base58 (T...) or hex (41...) address.")) -> None:
    fmt = address_format(address)
    typer.echo(json.dumps({"address": address, "isValid": fmt != "invalid", "format": fmt}))
    if fmt == "invalid":
        raise typer.Exit(code=1)


def run() -> None:
    app()
