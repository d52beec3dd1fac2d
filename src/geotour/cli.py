"""CLI entrypoint for geotour."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from geotour.cache import haversine_formula, vincenty_formula
from geotour.config import ELLIPSOIDS, OptimizerSettings, get_ellipsoid
from geotour.driver import solve
from geotour.errors import GeotourError, VincentyError
from geotour.geo import haversine_distance
from geotour.gpx import read_points, timestamp_tour, write_points
from geotour.models import Point
from geotour.samples import ALBANY_WALK
from geotour.vincenty import vincenty_distance

console = Console()


def _points_table(title: str, points: list[Point]) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right", width=4)
    table.add_column("Name")
    table.add_column("Lat", justify="right")
    table.add_column("Lon", justify="right")

    for i, p in enumerate(points, start=1):
        table.add_row(str(i), p.name, f"{p.latitude:.5f}", f"{p.longitude:.5f}")

    return table


def _points_json(points: list[Point]) -> str:
    return json.dumps([p.to_dict() for p in points], indent=2)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log optimizer progress.")
def cli(verbose: bool):
    """geotour: short closed tours over geographic points by simulated annealing."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


@cli.command()
@click.argument("gpx_file", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write the route as GPX.")
@click.option("--start-temp", type=float, default=None, help="Starting temperature.")
@click.option("--final-temp", type=float, default=None, help="Final temperature.")
@click.option("--cooling-rate", type=float, default=None, help="Cooling rate in (0, 1).")
@click.option("--timeout", type=float, default=None, help="Wall-clock limit in seconds.")
@click.option("--attempts", type=int, default=None, help="Max annealing attempts.")
@click.option("--seed", type=int, default=None, help="Random seed for reproducible runs.")
@click.option("--formula", default="haversine", type=click.Choice(["haversine", "vincenty"]))
@click.option("--ellipsoid", default=None, type=click.Choice(sorted(ELLIPSOIDS)))
@click.option("--json", "as_json", is_flag=True, help="Print the route as JSON instead of a table.")
def optimize(
    gpx_file: Path | None,
    output: Path | None,
    start_temp: float | None,
    final_temp: float | None,
    cooling_rate: float | None,
    timeout: float | None,
    attempts: int | None,
    seed: int | None,
    formula: str,
    ellipsoid: str | None,
    as_json: bool,
):
    """Optimize the visiting order of a GPX file's waypoints (or the bundled sample)."""
    try:
        settings = OptimizerSettings.from_env()
        if start_temp is not None:
            settings.starting_temperature = start_temp
        if final_temp is not None:
            settings.final_temperature = final_temp
        if cooling_rate is not None:
            settings.cooling_rate = cooling_rate
        if timeout is not None:
            settings.timeout_seconds = timeout
        if attempts is not None:
            settings.max_attempts = attempts
        if seed is not None:
            settings.seed = seed
        if ellipsoid is not None:
            settings.ellipsoid = ellipsoid

        points = read_points(gpx_file) if gpx_file else list(ALBANY_WALK)
        if formula == "vincenty":
            distance_formula = vincenty_formula(get_ellipsoid(settings.ellipsoid))
        else:
            distance_formula = haversine_formula()

        report = solve(points, settings, formula=distance_formula)
    except GeotourError as exc:
        raise click.ClickException(str(exc)) from exc

    if output is not None:
        write_points(timestamp_tour(report.route), output)

    if as_json:
        click.echo(_points_json(report.route))
        return

    console.print(_points_table(f"Optimized route ({len(report.route)} points)", report.route))
    console.print(f"Original energy: [bold]{report.original_energy:.9g}[/]")
    console.print(f"Final energy:    [bold green]{report.energy:.9g}[/]")
    console.print(f"Improved:        {'yes' if report.improved else 'no'}")
    console.print(f"Attempts:        {report.attempts}")
    console.print(f"Cached pairs:    {report.cache_size}")
    if report.timed_out:
        console.print("[yellow]Deadline reached; best route so far shown.[/]")

    if output is not None:
        console.print(f"Saved: {output.resolve()}")


@cli.command()
@click.argument("lat1", type=float)
@click.argument("lon1", type=float)
@click.argument("lat2", type=float)
@click.argument("lon2", type=float)
@click.option("--ellipsoid", default="wgs84", type=click.Choice(sorted(ELLIPSOIDS)))
def distance(lat1: float, lon1: float, lat2: float, lon2: float, ellipsoid: str):
    """Distance in km between two points (use -- before negative coordinates)."""
    e = get_ellipsoid(ellipsoid)
    p1 = Point("from", lat1, lon1)
    p2 = Point("to", lat2, lon2)

    table = Table(title=f"Distance ({e.name})")
    table.add_column("Formula")
    table.add_column("Distance (km)", justify="right")

    table.add_row("haversine", f"{haversine_distance(e.mean_radius, p1, p2):.6f}")
    try:
        table.add_row("vincenty", f"{vincenty_distance(e.semi_major_axis, e.semi_minor_axis, p1, p2):.6f}")
    except VincentyError as exc:
        table.add_row("vincenty", f"[red]{type(exc).__name__}[/]: {exc}")

    console.print(table)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the points as JSON instead of a table.")
def sample(as_json: bool):
    """Show the bundled sample points."""
    if as_json:
        click.echo(_points_json(ALBANY_WALK))
    else:
        console.print(_points_table("Albany walk", ALBANY_WALK))
