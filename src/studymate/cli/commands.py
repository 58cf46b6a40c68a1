"""CLI commands for the StudyMate database.

Commands:
- tables: List tables with record counts
- describe: Show a table's fields
- select / insert / update / delete: Record operations
- clear: Reset to demo data
- export: Write the CSV export
- stats: Profile summary
- sql: Run a demo-console command
- serve: Run the Web API
"""

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from studymate.config.app_config import DATA_DIR_ENV, load_app_config
from studymate.core.export import export_csv_file
from studymate.core.sql_console import ConsoleError, execute
from studymate.core.stats import compute_profile_stats
from studymate.db.commands import SqlCommands, open_database
from studymate.db.store import DuplicateIdError
from studymate.db.validators import ValidationError
from studymate.utils.logging import setup_logging
from studymate.utils.parsing import parse_value

app = typer.Typer(
    name="studymate",
    help="Demo record store for the StudyMate student-productivity app.",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: str | None = typer.Option(
        None,
        "--data-dir",
        "-d",
        envvar=DATA_DIR_ENV,
        help="Directory holding the storage file",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Configure logging and remember where the store lives."""
    config = load_app_config()
    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        fmt=config.logging.format,
    )
    ctx.obj = {"data_dir": Path(data_dir).expanduser() if data_dir else None}


def _open_db(ctx: typer.Context) -> SqlCommands:
    data_dir = (ctx.obj or {}).get("data_dir")
    return open_database(data_dir=data_dir)


def _parse_assignments(items: list[str], option: str) -> dict[str, Any]:
    """Parse repeated key=value options into a dict, or exit."""
    result: dict[str, Any] = {}
    for item in items:
        key, sep, raw = item.partition("=")
        if not sep or not key.strip():
            console.print(f"[red]✗ {option} expects key=value, got '{item}'[/red]")
            raise typer.Exit(code=1)
        result[key.strip()] = parse_value(raw)
    return result


def _print_records(records: list[dict[str, Any]], title: str) -> None:
    if not records:
        console.print(f"[yellow]No records in {title}[/yellow]")
        return

    columns: list[str] = []
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)

    table = Table(title=f"{title} ({len(records)})")
    for column in columns:
        table.add_column(column)
    for record in records:
        table.add_row(*[_format_cell(record.get(column)) for column in columns])
    console.print(table)


def _format_cell(value: Any) -> str:
    if value is None:
        return ""
    return escape(str(value))


def _print_store_error(error: Exception) -> None:
    console.print(f"[red]✗ {error}[/red]")


@app.command()
def tables(ctx: typer.Context) -> None:
    """List all tables (SHOW TABLES)."""
    db = _open_db(ctx)

    table = Table(title="Tables")
    table.add_column("table")
    table.add_column("records", justify="right")
    table.add_column("fields")
    for name in db.show_tables():
        table.add_row(name, str(len(db.select(name))), ", ".join(db.describe(name)) or "None")
    console.print(table)


@app.command()
def describe(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Table name"),
) -> None:
    """Show the fields of a table (DESCRIBE)."""
    db = _open_db(ctx)
    fields = db.describe(table)

    if not fields:
        console.print(f"[yellow]Table '{table}' has no records[/yellow]")
        return

    console.print(f"[bold]{table}[/bold]")
    for name in fields:
        console.print(f"  - {name}")


@app.command()
def select(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Table name"),
    where: list[str] = typer.Option([], "--where", "-w", help="Filter as field=value"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """Select records from a table (SELECT)."""
    criteria = _parse_assignments(where, "--where")
    db = _open_db(ctx)
    records = db.select(table, criteria or None)

    if as_json:
        typer.echo(json.dumps(records, indent=2, ensure_ascii=False))
        return

    _print_records(records, table)


@app.command()
def insert(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Table name"),
    values: list[str] = typer.Option([], "--set", "-s", help="Field as field=value"),
) -> None:
    """Insert a record (INSERT)."""
    record = _parse_assignments(values, "--set")
    db = _open_db(ctx)

    try:
        stored = db.insert(table, record)
    except (ValidationError, DuplicateIdError) as e:
        _print_store_error(e)
        raise typer.Exit(code=1)

    console.print(f"[green]✓ Inserted record with ID: {stored['id']}[/green]")


@app.command()
def update(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Table name"),
    where: list[str] = typer.Option([], "--where", "-w", help="Filter as field=value"),
    values: list[str] = typer.Option([], "--set", "-s", help="Field as field=value"),
) -> None:
    """Update matching records (UPDATE)."""
    criteria = _parse_assignments(where, "--where")
    patch = _parse_assignments(values, "--set")
    if not patch:
        console.print("[red]✗ Nothing to update: pass at least one --set[/red]")
        raise typer.Exit(code=1)

    db = _open_db(ctx)
    try:
        count = db.update(table, criteria or None, patch)
    except (ValidationError, DuplicateIdError) as e:
        _print_store_error(e)
        raise typer.Exit(code=1)

    if count == 0:
        console.print("[yellow]⚠ No records matched[/yellow]")
        return
    console.print(f"[green]✓ Updated {count} record(s)[/green]")


@app.command()
def delete(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Table name"),
    where: list[str] = typer.Option([], "--where", "-w", help="Filter as field=value"),
    delete_all: bool = typer.Option(False, "--all", help="Delete every record"),
) -> None:
    """Delete matching records (DELETE)."""
    criteria = _parse_assignments(where, "--where")
    if not criteria and not delete_all:
        console.print("[red]✗ Pass --where field=value or --all[/red]")
        raise typer.Exit(code=1)

    db = _open_db(ctx)
    count = db.delete(table, criteria or None)

    if count == 0:
        console.print("[yellow]⚠ No records matched[/yellow]")
        return
    console.print(f"[green]✓ Deleted {count} record(s)[/green]")


@app.command()
def clear(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset every table to the demo data."""
    if not yes and not typer.confirm("Reset the database to demo data?", default=False):
        console.print("[dim]Cancelled[/dim]")
        raise typer.Exit(code=0)

    db = _open_db(ctx)
    db.clear()
    console.print("[green]✓ Database reset to demo data[/green]")


@app.command()
def export(
    ctx: typer.Context,
    path: str | None = typer.Argument(None, help="Output CSV file"),
) -> None:
    """Export every table to a CSV file."""
    config = load_app_config()
    out_path = Path(path or config.export.filename).expanduser()

    db = _open_db(ctx)
    written = export_csv_file(db.get_all_data(), out_path)
    console.print(f"[green]✓ Exported to {written}[/green]")


@app.command()
def stats(ctx: typer.Context) -> None:
    """Show profile statistics."""
    db = _open_db(ctx)
    summary = compute_profile_stats(db)

    if summary.user_name:
        console.print(f"[bold]{summary.user_name}[/bold] [dim]{summary.user_email or ''}[/dim]")
    console.print(f"  [dim]sessions:[/dim]        {summary.sessions}")
    console.print(f"  [dim]minutes studied:[/dim] {summary.minutes_studied}")
    console.print(f"  [dim]notes:[/dim]           {summary.notes}")
    console.print(f"  [dim]goals:[/dim]           {summary.goals_completed}/{summary.goals} completed")


@app.command()
def sql(
    ctx: typer.Context,
    command: str = typer.Argument(..., help="e.g. 'SELECT * FROM notes'"),
    table: str = typer.Option("notes", "--table", "-t", help="Default table"),
) -> None:
    """Run a demo-console command."""
    db = _open_db(ctx)

    try:
        result = execute(db, command, default_table=table)
    except (ConsoleError, ValidationError, DuplicateIdError) as e:
        _print_store_error(e)
        raise typer.Exit(code=1)

    if result.message:
        console.print(f"[green]✓ {result.message}[/green]")
    if result.command == "select":
        _print_records(result.output, result.table or table)
    elif result.command != "clear":
        console.print_json(json.dumps(result.output, ensure_ascii=False))


@app.command()
def serve(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
) -> None:
    """Run the Web API."""
    import uvicorn

    from studymate.web.api import create_app

    console.print(f"[dim]Serving on http://{host}:{port}[/dim]")
    uvicorn.run(create_app(_open_db(ctx)), host=host, port=port)


if __name__ == "__main__":
    app()
