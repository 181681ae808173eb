"""Typer-based CLI for Gallon Logger."""

import logging
from datetime import datetime
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from .catalog import WIND_DIRECTIONS, search_chemicals, search_roads
from .config import GallonLoggerConfig
from .errors import ConfigError, GallonLoggerError, TransportError, TransportKind, ValidationError
from .ledger import Ledger
from .models.event import WeatherConditions
from .paths import DataPaths
from .report import format_conditions_summary, partition_events, report_filename
from .store import SqliteEventStore, StoreError

app = typer.Typer(
    name="gallon-logger",
    help="Gallon Logger - tank inventory and chemical application tracking",
    add_completion=False,
)

console = Console()
logger = logging.getLogger(__name__)

DATA_OPTION_HELP = "Path to data directory (default: GALLON_LOGGER_DATA_PATH env or ./gallon_data)"
OPERATOR_OPTION_HELP = "Operator id (default: GALLON_LOGGER_OPERATOR env)"


def _load_config(data_path: Optional[str], operator: Optional[str]) -> GallonLoggerConfig:
    try:
        return GallonLoggerConfig.from_env(cli_data_path=data_path, cli_operator_id=operator)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def _open_store(paths: DataPaths) -> SqliteEventStore:
    """Open the log database, creating it if needed.

    Raises:
        TransportError: If the database cannot be opened
    """
    try:
        return SqliteEventStore(paths.db_file)
    except StoreError as e:
        logger.error(f"Cannot open store: {e}")
        raise TransportError(TransportKind.UNAVAILABLE) from e


def _open_ledger(data_path: Optional[str], operator: Optional[str]) -> Ledger:
    """Load config, open the store and complete the operator handshake."""
    config = _load_config(data_path, operator)
    paths = DataPaths.from_config(config)

    if not paths.db_file.exists():
        console.print(f"[red]Error: Data directory not initialized at {config.data_path}[/red]")
        console.print("[yellow]Run 'gallon-logger init' first[/yellow]")
        raise typer.Exit(code=1)

    if not config.operator_id:
        console.print("[red]Error: No operator set. Use --operator or GALLON_LOGGER_OPERATOR[/red]")
        raise typer.Exit(code=1)

    try:
        ledger = Ledger(_open_store(paths), config)
        return ledger.open(config.operator_id)
    except GallonLoggerError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        raise typer.Exit(code=1)


def _fail(error: GallonLoggerError) -> NoReturn:
    if isinstance(error, ValidationError):
        console.print(f"[red]{error}[/red]")
    else:
        console.print(f"[red]ERROR: {error}[/red]")
    raise typer.Exit(code=1)


def _parse_chemical(value: str) -> tuple[str, float]:
    """Parse NAME=OZ into (name, ounces)."""
    name, sep, oz = value.rpartition("=")
    if not sep:
        raise typer.BadParameter(f"Expected NAME=OZ, got: {value}")
    try:
        return name.strip(), float(oz)
    except ValueError:
        raise typer.BadParameter(f"Ounces must be a number in: {value}")


@app.callback()
def main_callback(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def init(
    data_path: str = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
    operator: str = typer.Option(None, "--operator", "-o", help=OPERATOR_OPTION_HELP),
):
    """Create the data directory, log database and a starter config.

    This command is idempotent - it will not overwrite existing data.
    """
    config = _load_config(data_path, operator)
    paths = DataPaths.from_config(config)

    directories_created = []
    for directory in paths.get_all_directories():
        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)
            directories_created.append(directory)

    if directories_created:
        console.print(f"[green]+[/green] Created {len(directories_created)} directories")
    else:
        console.print("[dim]All directories already exist[/dim]")

    if not paths.db_file.exists():
        try:
            _open_store(paths)
        except GallonLoggerError as e:
            _fail(e)
        console.print(f"[green]+[/green] Created log database: {paths.db_file}")
    else:
        console.print(f"[dim]Log database already exists: {paths.db_file}[/dim]")

    config_file = paths.root / "config.toml"
    if not config_file.exists():
        config_file.write_text(config.to_toml_str(), encoding="utf-8")
        console.print(f"[green]+[/green] Created config: {config_file}")
        console.print("[dim]Copy it to .gallon_logger/config.toml in your project to use it[/dim]")

    console.print()
    console.print("[bold green]System Ready. Load current inventory.[/bold green]")


@app.command()
def status(
    data_path: str = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
    operator: str = typer.Option(None, "--operator", "-o", help=OPERATOR_OPTION_HELP),
):
    """Show current tank inventory and the last logged conditions."""
    ledger = _open_ledger(data_path, operator)
    state = ledger.get_current_state()
    applications, refills = partition_events(ledger.events)

    level_style = "green" if state.fill_ratio > 0.2 else "red"

    table = Table(title=f"Current Inventory ({ledger.operator_id})")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_row("Gallons Left", f"[{level_style}]{max(0.0, state.gallons_left):.0f} gal[/{level_style}]")
    table.add_row("Capacity", f"{state.capacity:g} gal")
    table.add_row("Fill", f"{state.fill_ratio:.0%}")
    table.add_row("Road Applications", str(len(applications)))
    table.add_row("Refills", str(len(refills)))
    table.add_row("Last Conditions", format_conditions_summary(ledger.last_conditions))
    console.print(table)


@app.command()
def apply(
    road: str = typer.Option(..., "--road", "-r", help="Road name"),
    gallons: float = typer.Option(..., "--gallons", "-g", help="Gallons used on the road"),
    chemical: Optional[list[str]] = typer.Option(
        None,
        "--chemical",
        "-c",
        help="Chemical in the tank mix as NAME=TOTAL_OZ (repeatable)",
    ),
    weather: str = typer.Option(None, "--weather", help="Weather description"),
    temperature: float = typer.Option(None, "--temperature", help="Temperature (°F)"),
    wind_direction: str = typer.Option(None, "--wind-direction", help="Wind direction"),
    wind_speed: float = typer.Option(None, "--wind-speed", help="Wind speed (MPH)"),
    capacity: float = typer.Option(None, "--capacity", help="Tank capacity for this and later entries"),
    data_path: str = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
    operator: str = typer.Option(None, "--operator", "-o", help=OPERATOR_OPTION_HELP),
):
    """Log chemical applied to a road.

    Conditions not given on the command line are taken from the last
    logged application, then from config defaults.
    """
    ledger = _open_ledger(data_path, operator)
    config = ledger.config

    if wind_direction and wind_direction not in WIND_DIRECTIONS:
        console.print(f"[yellow]Warning: '{wind_direction}' is not one of: {', '.join(WIND_DIRECTIONS)}[/yellow]")

    last = ledger.last_conditions
    conditions = WeatherConditions(
        weather=weather if weather is not None else (last.weather if last else ""),
        temperature=temperature if temperature is not None else (last.temperature if last else config.default_temperature),
        wind_direction=wind_direction or (last.wind_direction if last else config.default_wind_direction),
        wind_speed=wind_speed if wind_speed is not None else (last.wind_speed if last else config.default_wind_speed),
    )

    try:
        if capacity is not None:
            ledger.set_capacity(capacity)
        for value in chemical or []:
            name, total_oz = _parse_chemical(value)
            ledger.mix.add(name, total_oz)
        entry = ledger.log_application(road, gallons, ledger.mix.chemicals, conditions)
    except GallonLoggerError as e:
        _fail(e)

    console.print(f"[blue]Logged {entry.gallons_used:.2f} gallons for {entry.road_name}.[/blue]")
    for chem in entry.chemical_mix:
        console.print(f"  [dim]{chem.name}:[/dim] {chem.oz_per_gal} oz/gal")
    console.print(f"[dim]Gallons left:[/dim] {entry.gallons_left:.2f}")


@app.command()
def refill(
    gallons: float = typer.Option(..., "--gallons", "-g", help="Gallons to add"),
    capacity: float = typer.Option(None, "--capacity", help="Tank capacity for this and later entries"),
    data_path: str = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
    operator: str = typer.Option(None, "--operator", "-o", help=OPERATOR_OPTION_HELP),
):
    """Log liquid added to the tank (capped at capacity)."""
    ledger = _open_ledger(data_path, operator)

    try:
        if capacity is not None:
            ledger.set_capacity(capacity)
        result = ledger.log_refill(gallons)
    except GallonLoggerError as e:
        _fail(e)

    if result.capped:
        console.print(
            f"[magenta]Refilled tank by {result.actual_added:.2f} gallons "
            f"(capped from {result.requested:.2f}).[/magenta]"
        )
    else:
        console.print(f"[magenta]Refilled tank by {result.actual_added:.2f} gallons.[/magenta]")
    console.print(f"[dim]Gallons left:[/dim] {result.entry.gallons_left:.2f}")


@app.command()
def history(
    n: int = typer.Option(20, "--limit", "-n", help="Number of events to show"),
    data_path: str = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
    operator: str = typer.Option(None, "--operator", "-o", help=OPERATOR_OPTION_HELP),
):
    """Show the most recent log entries, newest first."""
    ledger = _open_ledger(data_path, operator)
    events = ledger.events[-n:] if n > 0 else []

    if not events:
        console.print("[dim]No history logs[/dim]")
        return

    table = Table(title=f"Last {len(events)} Log Entr{'y' if len(events) == 1 else 'ies'}")
    table.add_column("Timestamp", style="cyan", no_wrap=True)
    table.add_column("Road", style="magenta")
    table.add_column("Used", justify="right")
    table.add_column("Left", justify="right")
    table.add_column("Mix", style="dim")

    for entry in reversed(events):
        ts_str = entry.timestamp.strftime("%Y-%m-%d %H:%M:%S") if entry.timestamp else "N/A"
        if entry.is_refill:
            used = f"[magenta]+{entry.gallons_added:.2f}[/magenta]"
        else:
            used = f"{entry.gallons_used:.2f}"
        mix_str = ", ".join(chem.name for chem in entry.chemical_mix) or "-"
        if len(mix_str) > 60:
            mix_str = mix_str[:57] + "..."
        table.add_row(ts_str, entry.road_name, used, f"{entry.gallons_left:.2f}", mix_str)

    console.print(table)


@app.command()
def report(
    out: str = typer.Option(None, "--out", help="File or directory to write the report to"),
    data_path: str = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
    operator: str = typer.Option(None, "--operator", "-o", help=OPERATOR_OPTION_HELP),
):
    """Print the application history report or write it to a file."""
    ledger = _open_ledger(data_path, operator)

    if not ledger.events:
        console.print("[yellow]No history logs to export.[/yellow]")
        return

    as_of = datetime.now().astimezone()
    text = ledger.build_report(as_of)

    if out is None:
        console.print(text, markup=False, highlight=False, soft_wrap=True)
        return

    out_path = Path(out)
    if out_path.is_dir():
        out_path = out_path / report_filename(as_of)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding="utf-8")
    console.print(f"[blue]History written to {out_path}[/blue]")


@app.command()
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    data_path: str = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
    operator: str = typer.Option(None, "--operator", "-o", help=OPERATOR_OPTION_HELP),
):
    """Permanently delete all history logs and restore the default tank."""
    ledger = _open_ledger(data_path, operator)

    if not yes:
        console.print("[red]This will permanently delete all history logs for this job. This action cannot be undone.[/red]")
        if not typer.confirm("Yes, delete all?"):
            console.print("[dim]Cancelled[/dim]")
            raise typer.Exit(code=0)

    try:
        deleted = ledger.reset()
    except GallonLoggerError as e:
        _fail(e)

    console.print(f"[green]History cleared ({deleted} entries). Ready for new job![/green]")


@app.command()
def roads(prefix: Optional[str] = typer.Argument(None, help="Road name prefix")):
    """List known roads, optionally filtered by prefix."""
    matches = search_roads(prefix)
    if not matches:
        console.print("[dim]No matching roads[/dim]")
        return
    for road in matches:
        console.print(road, markup=False, highlight=False)


@app.command()
def chemicals(prefix: Optional[str] = typer.Argument(None, help="Chemical name prefix")):
    """List known chemicals, optionally filtered by prefix."""
    matches = search_chemicals(prefix)
    if not matches:
        console.print("[dim]No matching chemicals[/dim]")
        return
    for name in matches:
        console.print(name, markup=False, highlight=False)


@app.command()
def version():
    """Show Gallon Logger version."""
    from . import __version__
    console.print(f"Gallon Logger v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
