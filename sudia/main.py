#!/usr/bin/env python3
"""
SUDIA - Historical Map of Vietnam - Command Line Entry Point

Browse the reconciled backend data from a terminal.

Usage:
    python -m sudia.main sites --type "Di tích"
    python -m sudia.main person 12
    python -m sudia.main route 21.0285 105.8542 16.4637 107.5909
"""

import asyncio
from pathlib import Path

import click
from loguru import logger
from rich.console import Console
from rich.table import Table

from sudia.connectors import NominatimConnector, OSRMConnector
from sudia.filters import filter_persons, filter_sites, global_search
from sudia.services import MapDataService
from sudia.timeline import build_timeline, related_persons, split_media


console = Console()


def _truncate(text: str | None, length: int = 60) -> str:
    if not text:
        return "-"
    return text[:length] + "..." if len(text) > length else text


async def _with_service(action):
    async with MapDataService() as service:
        return await action(service)


def _sites_table(sites) -> Table:
    table = Table()
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Lat")
    table.add_column("Lon")
    table.add_column("City")

    for site in sites:
        table.add_row(
            str(site.site_id),
            site.site_name,
            site.site_type,
            f"{site.latitude:.4f}",
            f"{site.longitude:.4f}",
            str(site.city_id) if site.city_id is not None else "-",
        )
    return table


def _persons_table(persons) -> Table:
    table = Table()
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Born")
    table.add_column("Died")
    table.add_column("Cities")
    table.add_column("Location")

    for person in persons:
        table.add_row(
            str(person.person_id),
            person.full_name,
            str(person.birth_year) if person.birth_year is not None else "?",
            str(person.death_year) if person.death_year is not None else "?",
            ", ".join(person.related_city_ids) or "-",
            person.location_name or "[dim]not located[/dim]",
        )
    return table


def _events_table(events) -> Table:
    table = Table()
    table.add_column("Date")
    table.add_column("Event")
    table.add_column("Description")
    table.add_column("Media")
    table.add_column("Persons")

    for event in events:
        name = f"[italic]{event.event_name}[/italic]" if event.is_extracted else event.event_name
        table.add_row(
            event.start_date or "-",
            name,
            _truncate(event.description),
            str(len(event.media)),
            ", ".join(p.full_name for p in event.persons) or "-",
        )
    return table


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write logs to this file (overrides LOG_FILE)",
)
def cli(debug: bool, log_file: Path | None):
    """SUDIA - Historical Map of Vietnam data client"""
    if debug or log_file:
        from sudia.utils.logging import setup_logging
        setup_logging(level="DEBUG" if debug else None, log_file=log_file)


@cli.command()
@click.option("--type", "site_type", default=None, help="Only sites of this type")
@click.option("--city", "city_id", default=None, help="Only sites in this city")
@click.option("--search", default="", help="Name contains")
def sites(site_type: str | None, city_id: str | None, search: str):
    """List mapped sites and cities."""
    console.print("\n[bold blue]SUDIA - Sites[/bold blue]\n")

    all_sites = asyncio.run(_with_service(lambda service: service.fetch_sites()))
    if not all_sites:
        console.print("[yellow]No sites available (backend unreachable?)[/yellow]")
        return

    matches = filter_sites(all_sites, search, site_type, city_id)
    console.print(_sites_table(matches))
    console.print(f"\n[dim]Showing {len(matches)} of {len(all_sites)} sites[/dim]")


@cli.command()
@click.option("--city", "city_id", default=None, help="Only persons related to this city")
@click.option("--search", default="", help="Name contains")
def persons(city_id: str | None, search: str):
    """List persons with their inferred cities and location."""
    console.print("\n[bold blue]SUDIA - Persons[/bold blue]\n")

    async def load(service: MapDataService):
        await service.fetch_sites()
        return await service.fetch_persons()

    all_persons = asyncio.run(_with_service(load))
    if not all_persons:
        console.print("[yellow]No persons available (backend unreachable?)[/yellow]")
        return

    matches = filter_persons(all_persons, search, city_id)
    console.print(_persons_table(matches))
    located = sum(1 for p in matches if p.has_location)
    console.print(f"\n[dim]Showing {len(matches)} of {len(all_persons)} persons, {located} on the map[/dim]")


@cli.command()
@click.argument("site_id")
def site(site_id: str):
    """Show a site with its timeline."""
    async def load(service: MapDataService):
        await service.fetch_sites()
        return await service.fetch_site_detail(site_id)

    detail = asyncio.run(_with_service(load))
    if detail is None:
        console.print(f"[red]Unknown site: {site_id}[/red]")
        return

    info = detail.site
    console.print(f"\n[bold blue]{info.site_name}[/bold blue] [dim]({info.site_type})[/dim]")
    if info.address:
        console.print(f"Address: {info.address}")
    console.print(f"Coordinates: {info.latitude:.4f}, {info.longitude:.4f}")
    if info.description:
        console.print(f"\n{info.description}")

    timeline = build_timeline(detail)
    if timeline:
        console.print("\n[bold]Timeline[/bold]")
        console.print(_events_table(timeline))

    persons_at_site = related_persons(detail.events)
    if persons_at_site:
        console.print("\n[bold]Related persons[/bold]")
        console.print(_persons_table(persons_at_site))


@cli.command()
@click.argument("person_id")
def person(person_id: str):
    """Show a person with biography, events and media."""
    async def load(service: MapDataService):
        await service.fetch_sites()
        await service.fetch_persons()
        return await service.fetch_person_detail(person_id)

    detail = asyncio.run(_with_service(load))
    if detail is None:
        console.print(f"[red]Unknown person: {person_id}[/red]")
        return

    info = detail.person
    console.print(f"\n[bold blue]{info.full_name}[/bold blue]")
    console.print(f"Years: {info.birth_year or '?'} - {info.death_year or '?'}")
    if info.location_name:
        console.print(f"Location: {info.location_name} ({info.latitude:.4f}, {info.longitude:.4f})")
    for key, value in detail.additional_info.items():
        console.print(f"{key}: {value}")
    if detail.biography:
        console.print(f"\n{detail.biography}")

    if detail.events:
        console.print("\n[bold]Events[/bold]")
        console.print(_events_table(detail.events))

    images, videos = split_media(detail.media)
    console.print(f"\n[dim]{len(images)} images, {len(videos)} videos[/dim]")


@cli.command()
@click.argument("query")
def search(query: str):
    """Search sites and persons by name."""
    async def load(service: MapDataService):
        found_sites = await service.fetch_sites()
        found_persons = await service.fetch_persons()
        return global_search(found_sites, found_persons, query)

    results = asyncio.run(_with_service(load))
    if not results.sites and not results.persons:
        console.print(f"[yellow]Nothing matches {query!r}[/yellow]")
        return

    if results.sites:
        console.print("\n[bold]Sites[/bold]")
        console.print(_sites_table(results.sites))
    if results.persons:
        console.print("\n[bold]Persons[/bold]")
        console.print(_persons_table(results.persons))


@cli.command()
@click.argument("from_lat", type=float)
@click.argument("from_lon", type=float)
@click.argument("to_lat", type=float)
@click.argument("to_lon", type=float)
def route(from_lat: float, from_lon: float, to_lat: float, to_lon: float):
    """Driving directions between two points."""
    async def load():
        async with OSRMConnector() as connector:
            return await connector.fetch_directions((from_lat, from_lon), (to_lat, to_lon))

    directions = asyncio.run(load())

    if not directions.available:
        console.print("[yellow]Routing unavailable, showing a straight line[/yellow]")

    console.print(
        f"\n[bold]Distance:[/bold] {directions.summary.total_distance}  "
        f"[bold]Duration:[/bold] {directions.summary.total_duration}\n"
    )

    table = Table()
    table.add_column("#")
    table.add_column("Instruction")
    table.add_column("Distance")
    for index, step in enumerate(directions.steps, 1):
        table.add_row(str(index), step.instruction, step.distance or "-")
    console.print(table)


@cli.command()
@click.argument("query")
def geocode(query: str):
    """Search an address in Vietnam."""
    async def load():
        async with NominatimConnector() as connector:
            return await connector.search_address(query)

    results = asyncio.run(load())
    if not results:
        console.print(f"[yellow]No addresses found for {query!r}[/yellow]")
        return

    table = Table()
    table.add_column("Name")
    table.add_column("Address")
    table.add_column("Lat")
    table.add_column("Lon")
    for result in results:
        lat, lon = result.coordinates
        table.add_row(result.name, _truncate(result.address), f"{lat:.4f}", f"{lon:.4f}")
    console.print(table)


@cli.command()
@click.argument("lat", type=float)
@click.argument("lon", type=float)
def reverse(lat: float, lon: float):
    """Name the place at a point."""
    async def load():
        async with NominatimConnector() as connector:
            return await connector.reverse_geocode(lat, lon)

    label = asyncio.run(load())
    logger.debug(f"Reverse geocoded {lat}, {lon} -> {label}")
    console.print(label)


if __name__ == "__main__":
    cli()
