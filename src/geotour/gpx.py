"""Read and write tour waypoints as GPX 1.1 documents."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import IO, Sequence, Union

from geotour.errors import GpxError
from geotour.models import Point, TimestampedPoint

GPX_NAMESPACE = "http://www.topografix.com/GPX/1/1"
CREATOR = "geotour"

Source = Union[str, Path, IO[bytes], IO[str]]


def _local_name(tag: str) -> str:
    # "{namespace}wpt" -> "wpt"
    return tag.rsplit("}", 1)[-1]


def _child_text(element: ET.Element, name: str) -> str | None:
    for child in element:
        if _local_name(child.tag) == name:
            return (child.text or "").strip()
    return None


def _parse_root(root: ET.Element) -> list[Point]:
    if _local_name(root.tag) != "gpx":
        raise GpxError(f"root element is <{_local_name(root.tag)}>, expected <gpx>")

    points: list[Point] = []
    for index, element in enumerate(e for e in root if _local_name(e.tag) == "wpt"):
        try:
            lat = float(element.attrib["lat"])
            lon = float(element.attrib["lon"])
        except KeyError as exc:
            raise GpxError(f"waypoint {index} is missing attribute {exc.args[0]!r}") from None
        except ValueError as exc:
            raise GpxError(f"waypoint {index} has a non-numeric coordinate: {exc}") from None

        name = _child_text(element, "name") or f"wpt-{index}"
        points.append(Point(name, lat, lon))

    return points


def parse_points(text: str) -> list[Point]:
    """Parse a GPX document held in a string into ordered points."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise GpxError(f"malformed GPX: {exc}") from exc
    return _parse_root(root)


def read_points(source: Source) -> list[Point]:
    """Read the ``<wpt>`` elements of a GPX file (path or file object) in document order."""
    try:
        tree = ET.parse(source)
    except ET.ParseError as exc:
        raise GpxError(f"malformed GPX: {exc}") from exc
    return _parse_root(tree.getroot())


def timestamp_tour(
    tour: Sequence[Point],
    start: datetime | None = None,
    interval: timedelta = timedelta(minutes=1),
) -> list[TimestampedPoint]:
    """Attach evenly spaced visit times to the points of a tour."""
    if start is None:
        start = datetime.now(timezone.utc).replace(microsecond=0)
    return [TimestampedPoint(p, start + i * interval) for i, p in enumerate(tour)]


def _format_degrees(value: float) -> str:
    return f"{value:.9f}".rstrip("0").rstrip(".")


def _format_time(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _build_tree(points: Sequence[TimestampedPoint]) -> ET.ElementTree:
    ET.register_namespace("", GPX_NAMESPACE)
    root = ET.Element(f"{{{GPX_NAMESPACE}}}gpx", {"version": "1.1", "creator": CREATOR})
    for wp in points:
        element = ET.SubElement(root, f"{{{GPX_NAMESPACE}}}wpt", {
            "lat": _format_degrees(wp.point.latitude),
            "lon": _format_degrees(wp.point.longitude),
        })
        ET.SubElement(element, f"{{{GPX_NAMESPACE}}}name").text = wp.name
        ET.SubElement(element, f"{{{GPX_NAMESPACE}}}time").text = _format_time(wp.timestamp)
    ET.indent(root)
    return ET.ElementTree(root)


def render_points(points: Sequence[TimestampedPoint]) -> str:
    """Serialize timestamped points into a GPX document string."""
    return ET.tostring(_build_tree(points).getroot(), encoding="unicode", xml_declaration=True)


def write_points(points: Sequence[TimestampedPoint], dest: Union[str, Path]) -> None:
    """Write timestamped points to a GPX file."""
    path = Path(dest)
    path.parent.mkdir(parents=True, exist_ok=True)
    _build_tree(points).write(path, encoding="utf-8", xml_declaration=True)
