"""
Main CLI application for the route planner
Provides commands for routing, address lookup and settings management
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from routeplanner.config.models import Settings
from routeplanner.config.parser import API_KEY_ENV, SettingsParser, load_settings
from routeplanner.core.exceptions import ConfigError, RoutePlannerError
from routeplanner.core.models import LOCATION_OPTION, IncidentType, Suggestion
from routeplanner.ors.client import OpenRouteServiceClient
from routeplanner.planner.geolocation import StaticLocator, parse_position
from routeplanner.planner.service import RoutePlannerService
from routeplanner.render.map import MapRenderer

app = typer.Typer(
    name="routeplanner",
    help="Route planner - driving directions with incident annotations",
    add_completion=False,
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load(config: Optional[Path]) -> Settings:
    try:
        return load_settings(config)
    except ConfigError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)


def _client(settings: Settings) -> OpenRouteServiceClient:
    try:
        return OpenRouteServiceClient(settings=settings)
    except ValueError as e:
        console.print(f"[red]OpenRouteService error: {e}[/red]")
        console.print(f"Please set the {API_KEY_ENV} environment variable")
        raise typer.Exit(1)


@app.command()
def route(
    destination: str = typer.Argument(..., help="Destination address"),
    start: Optional[str] = typer.Option(None, "--from", help="Start address (defaults to your location)"),
    position: Optional[str] = typer.Option(None, "--position", help="Your position as 'lat,lon'"),
    avoid_tolls: bool = typer.Option(False, "--avoid-tolls", help="Avoid toll roads"),
    incidents: Optional[List[str]] = typer.Option(
        None, "--incident", help="Report an incident at your position (accident/traffic/police/closure)"
    ),
    output: Path = typer.Option(Path("route.html"), "--output", help="Map HTML file"),
    config: Optional[Path] = typer.Option(None, "--config", help="Settings file (YAML/JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Calculate a driving route and save it as an interactive map

    Examples:
        routeplanner route "Lyon" --position 48.8566,2.3522
        routeplanner route "Marseille" --from "Lyon" --avoid-tolls
        routeplanner route "Lille" --incident traffic --output trip.html
    """
    _configure_logging(verbose)
    settings = _load(config)

    user_position = None
    if position:
        try:
            user_position = parse_position(position)
        except ValueError as e:
            console.print(f"[red]Invalid position: {e}[/red]")
            raise typer.Exit(1)

    incident_types = []
    for name in incidents or []:
        try:
            incident_types.append(IncidentType(name.lower()))
        except ValueError:
            console.print(f"[red]Invalid incident type: {name}[/red]")
            console.print(f"Valid types: {', '.join(t.value for t in IncidentType)}")
            raise typer.Exit(1)

    service = RoutePlannerService(_client(settings), settings)

    async def plan():
        located = await service.bootstrap(StaticLocator(user_position))
        if not located:
            console.print(
                f"[yellow]Position unavailable, using fallback "
                f"{settings.fallback_position.lat}, {settings.fallback_position.lon}[/yellow]"
            )

        if start:
            await service.select_start(Suggestion(label=start, key=start))
        elif not located:
            await service.select_start(LOCATION_OPTION)

        service.select_destination(Suggestion(label=destination, key=destination))
        service.set_avoid_tolls(avoid_tolls)
        return await service.calculate_route()

    try:
        calculated = asyncio.run(plan())
    except KeyboardInterrupt:
        console.print("\n[yellow]Route calculation cancelled by user[/yellow]")
        raise typer.Exit(0)

    for incident_type in incident_types:
        service.open_incident_dialog()
        service.select_incident(incident_type)
        service.report_incident()

    state = service.state
    if calculated and state.route:
        summary = state.route.summary
        console.print(f"\n[bold]Distance:[/bold] {summary.distance_text}")
        console.print(f"[bold]Duration:[/bold] {summary.duration_text}")
    else:
        console.print(f"[red]No route calculated: {state.notice or 'missing start or destination'}[/red]")

    if state.incidents:
        console.print(f"[cyan]{len(state.incidents)} incident(s) reported[/cyan]")

    saved = MapRenderer(settings.map).save(state, output)
    console.print(f"[green]✓ Map saved to {saved}[/green]")

    if not calculated:
        raise typer.Exit(1)


@app.command()
def suggest(
    text: str = typer.Argument(..., help="Partial address"),
    config: Optional[Path] = typer.Option(None, "--config", help="Settings file (YAML/JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Show address suggestions for partial input"""
    _configure_logging(verbose)
    settings = _load(config)
    client = _client(settings)

    try:
        suggestions = asyncio.run(client.suggest(text))
    except RoutePlannerError as e:
        console.print(f"[red]Autocomplete failed: {e}[/red]")
        raise typer.Exit(1)

    if not suggestions:
        console.print(f"[yellow]No suggestions (queries need at least {settings.min_query_length} characters)[/yellow]")
        return

    table = Table(title=f"\nSuggestions for '{text}'")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Label")
    table.add_column("Key", style="dim")
    for i, suggestion in enumerate(suggestions, 1):
        table.add_row(str(i), suggestion.label, suggestion.key)
    console.print(table)


@app.command()
def geocode(
    address: str = typer.Argument(..., help="Address to resolve"),
    config: Optional[Path] = typer.Option(None, "--config", help="Settings file (YAML/JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Resolve an address to coordinates"""
    _configure_logging(verbose)
    settings = _load(config)
    client = _client(settings)

    try:
        result = asyncio.run(client.resolve_address(address))
    except (RoutePlannerError, ValueError) as e:
        console.print(f"[red]Geocoding failed: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]{result.label or address}[/bold]")
    console.print(f"  Latitude:  {result.position.lat}")
    console.print(f"  Longitude: {result.position.lon}")


@app.command(name="init-config")
def init_config(
    path: Path = typer.Argument(Path("routeplanner.yaml"), help="Settings file to create"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing file"),
):
    """Write a settings template with every default"""
    try:
        created = SettingsParser.create_template(path, overwrite=overwrite)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓ Settings template written to {created}[/green]")


@app.callback()
def callback():
    """
    Route planner - driving directions with incident annotations

    Geocodes addresses, requests driving routes from OpenRouteService
    and renders them on an interactive map.
    """
    pass


def main():
    """Main entry point for CLI"""
    from dotenv import load_dotenv
    load_dotenv()

    app()


if __name__ == "__main__":
    main()
