"""
LumiDB ingest: CLI entry point.

Uploads local files as assets, imports them into a table and waits until
the table is ready::

    export LUMIDB_API_KEY=...
    lumidb-ingest https://lumidb.example.com my_table my_proj a.laz b.laz
"""

from __future__ import annotations

from typing import List, Optional

import typer

from lumidb_sdk.client import LumiDBClient
from lumidb_sdk.config import LogLevel, Settings, get_settings
from lumidb_sdk.errors import ConfigurationError
from lumidb_sdk.log import configure_logging
from lumidb_sdk.result import Err
from lumidb_sdk.workflow import ingest_files

app = typer.Typer(
    name="lumidb-ingest",
    help="Upload files to LumiDB and import them into a table.",
    add_completion=False,
)


def _load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except ConfigurationError as exc:
        typer.echo(f"[ERROR] {exc.message}", err=True)
        raise typer.Exit(code=1)


@app.command()
def ingest(
    url: str = typer.Argument(..., help="Base URL of the LumiDB service."),
    table_name: str = typer.Argument(..., help="Name of the table to import into."),
    table_proj: str = typer.Argument(..., help="Project of the table and its assets."),
    files: List[str] = typer.Argument(..., help="Files to upload, in import order."),
    poll_interval: Optional[float] = typer.Option(
        None,
        "--poll-interval",
        min=0.0,
        help="Seconds between import status checks (default from LUMIDB_POLL_INTERVAL or 5).",
    ),
    log_level: Optional[LogLevel] = typer.Option(None, "--log-level", help="Override LUMIDB_LOG_LEVEL."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit log records as JSON lines."),
) -> None:
    """Upload FILES and import them into TABLE_NAME, waiting until the table is ready."""
    settings = _load_settings_or_exit()
    configure_logging((log_level or settings.log_level).value, serialize=json_logs or settings.log_json)

    if settings.api_key is None:
        typer.echo("[ERROR] LUMIDB_API_KEY environment variable not set", err=True)
        raise typer.Exit(code=1)

    try:
        client = LumiDBClient.from_settings(settings, base_url=url)
    except ConfigurationError as exc:
        typer.echo(f"[ERROR] {exc.message}", err=True)
        raise typer.Exit(code=1)

    with client:
        outcome = ingest_files(
            client,
            table_name,
            table_proj,
            files,
            poll_interval=settings.poll_interval if poll_interval is None else poll_interval,
        )

    if isinstance(outcome, Err):
        typer.echo(f"[ERROR] {outcome.error.describe()}", err=True)
        raise typer.Exit(code=1)

    report = outcome.value
    for i, asset in enumerate(report.assets, start=1):
        typer.echo(f"asset {i}/{len(report.assets)}: {asset.asset_id}")
    typer.echo(f"table_version: {report.table_version} ready after {report.polls} status checks")


if __name__ == "__main__":
    app()
