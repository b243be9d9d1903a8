import json
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError

from receipt_points.config import configure_logging, get_settings
from receipt_points.engine.scoring import score_breakdown
from receipt_points.engine.validation import validate_receipt
from receipt_points.errors import InvalidReceiptError
from receipt_points.service import parse_receipt

load_dotenv()

app = typer.Typer(no_args_is_help=True)


@app.callback(invoke_without_command=True)
def callback(ctx: typer.Context):
    """Receipt points CLI tool."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def _load_settings():
    try:
        return get_settings()
    except ValidationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=1) from e


@app.command()
def serve(
    host: str | None = typer.Option(
        None, "--host", "-H", help="Interface to bind (default from settings)"
    ),
    port: int | None = typer.Option(
        None, "--port", "-p", help="Port to listen on (default from settings)"
    ),
):
    """Run the receipt points HTTP service."""
    import uvicorn

    from receipt_points.api import create_app

    settings = _load_settings()
    configure_logging(settings.log_level)

    bind_host = host or settings.host
    bind_port = port or settings.port
    typer.echo(f"Serving receipt points on {bind_host}:{bind_port}")

    uvicorn.run(
        create_app(settings=settings),
        host=bind_host,
        port=bind_port,
        log_level=settings.log_level.lower(),
    )


@app.command()
def score(
    receipt_file: Path = typer.Argument(..., help="Path to a receipt JSON file"),
    bonus: int = typer.Option(
        0, "--bonus", "-b", min=0, help="Submitter bonus to add to the score"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Print the points awarded by each rule"
    ),
):
    """Score a receipt JSON file without storing it."""
    settings = _load_settings()
    configure_logging(settings.log_level)

    try:
        payload = json.loads(receipt_file.read_text(encoding="utf-8"))
    except OSError as e:
        typer.echo(f"Error reading {receipt_file}: {e}", err=True)
        raise typer.Exit(code=1) from e
    except json.JSONDecodeError as e:
        typer.echo(f"Error: {receipt_file} is not valid JSON: {e}", err=True)
        raise typer.Exit(code=1) from e

    try:
        if not isinstance(payload, dict):
            raise InvalidReceiptError("receipt file must hold a JSON object")
        receipt = parse_receipt(payload)
        validate_receipt(receipt)
    except InvalidReceiptError as e:
        typer.echo(f"{e} ({e.reason})", err=True)
        raise typer.Exit(code=1) from e

    breakdown = score_breakdown(receipt, bonus, window=settings.afternoon_window)

    if verbose:
        for contribution in breakdown.contributions:
            typer.echo(f"+{contribution.points:<5} {contribution.detail}")

    typer.echo(f"Points: {breakdown.total}")


def main():
    app()


if __name__ == "__main__":
    main()
