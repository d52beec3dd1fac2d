"""Tests for GPX track files, settings and the command line."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from click.testing import CliRunner

from geotour.cli import cli
from geotour.config import ELLIPSOIDS, OptimizerSettings, get_ellipsoid
from geotour.errors import GpxError, InvalidConfiguration
from geotour.gpx import parse_points, read_points, render_points, timestamp_tour, write_points
from geotour.models import Point
from geotour.samples import ALBANY_WALK

DATA_DIR = Path(__file__).parent / "data"
EXAMPLE_GPX = DATA_DIR / "example.gpx"


# ── GPX tests ────────────────────────────────────────────────────────────


class TestReadGpx:
    def test_example_file(self):
        points = read_points(EXAMPLE_GPX)
        assert len(points) == 5

        first = points[0]
        assert first.name == "Hagatna Pillbox"
        assert first.latitude_degrees == 13.47852
        assert first.longitude_degrees == 144.7516

        last = points[-1]
        assert last.name == "Chief Quipuha Statue"
        assert last.latitude_degrees == 13.47725
        assert last.longitude_degrees == 144.7538

    def test_file_object(self):
        with EXAMPLE_GPX.open("rb") as fh:
            assert len(read_points(fh)) == 5

    def test_without_namespace(self):
        text = '<gpx><wpt lat="1.5" lon="-2.5"><name>A</name></wpt></gpx>'
        points = parse_points(text)
        assert points == [Point("A", 1.5, -2.5)]

    def test_unnamed_waypoint(self):
        text = '<gpx><wpt lat="1" lon="2"/><wpt lat="3" lon="4"/></gpx>'
        points = parse_points(text)
        assert [p.name for p in points] == ["wpt-0", "wpt-1"]

    def test_ignores_tracks_and_routes(self):
        text = (
            '<gpx><rte><rtept lat="9" lon="9"/></rte>'
            '<wpt lat="1" lon="2"><name>A</name></wpt></gpx>'
        )
        assert [p.name for p in parse_points(text)] == ["A"]

    def test_empty_document(self):
        assert parse_points("<gpx/>") == []

    def test_malformed_xml(self):
        with pytest.raises(GpxError):
            parse_points("<gpx><wpt></gpx>")

    def test_wrong_root(self):
        with pytest.raises(GpxError, match="expected <gpx>"):
            parse_points("<kml/>")

    def test_missing_latitude(self):
        with pytest.raises(GpxError, match="waypoint 1"):
            parse_points('<gpx><wpt lat="1" lon="2"/><wpt lon="2"/></gpx>')

    def test_non_numeric_longitude(self):
        with pytest.raises(GpxError, match="non-numeric"):
            parse_points('<gpx><wpt lat="1" lon="east"/></gpx>')


class TestWriteGpx:
    def test_timestamps_are_spaced(self):
        start = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        stamped = timestamp_tour([Point("A", 0, 0), Point("B", 1, 1)], start, timedelta(minutes=5))
        assert stamped[0].timestamp == start
        assert stamped[1].timestamp == start + timedelta(minutes=5)

    def test_render_contains_waypoints(self):
        start = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        text = render_points(timestamp_tour([Point("South", -36.7331, 174.7011)], start))
        assert "<name>South</name>" in text
        assert "<time>2024-01-15T12:00:00Z</time>" in text
        # written in the signed range, not the normalized one
        assert 'lat="-36.7331"' in text

    def test_written_file_reads_back(self, tmp_path):
        tour = read_points(EXAMPLE_GPX)
        dest = tmp_path / "out" / "route.gpx"
        write_points(timestamp_tour(tour), dest)
        assert read_points(dest) == tour


# ── Configuration tests ──────────────────────────────────────────────────


class TestEllipsoids:
    def test_wgs84(self):
        wgs84 = get_ellipsoid("WGS84")
        assert wgs84.semi_major_axis == 6378.1370
        assert wgs84.flattening == pytest.approx(1 / 298.257223563, rel=1e-6)

    def test_sphere_has_no_flattening(self):
        assert ELLIPSOIDS["sphere"].flattening == 0.0
        assert ELLIPSOIDS["sphere"].mean_radius == 6371.0

    def test_unknown(self):
        with pytest.raises(InvalidConfiguration, match="unknown ellipsoid"):
            get_ellipsoid("mars")


class TestSettingsFromEnv:
    def test_defaults(self, monkeypatch):
        for var in ("GEOTOUR_COOLING_RATE", "GEOTOUR_SEED", "GEOTOUR_MAX_ATTEMPTS"):
            monkeypatch.delenv(var, raising=False)
        settings = OptimizerSettings.from_env()
        assert settings.cooling_rate == 0.01
        assert settings.seed is None
        assert settings.max_attempts == 50

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("GEOTOUR_COOLING_RATE", "0.05")
        monkeypatch.setenv("GEOTOUR_SEED", "42")
        monkeypatch.setenv("GEOTOUR_ELLIPSOID", "grs80")
        settings = OptimizerSettings.from_env()
        assert settings.cooling_rate == 0.05
        assert settings.seed == 42
        assert settings.ellipsoid == "grs80"

    def test_invalid_number(self, monkeypatch):
        monkeypatch.setenv("GEOTOUR_MAX_ATTEMPTS", "many")
        with pytest.raises(InvalidConfiguration) as info:
            OptimizerSettings.from_env()
        assert any("GEOTOUR_MAX_ATTEMPTS" in e for e in info.value.errors)


# ── CLI tests ────────────────────────────────────────────────────────────


class TestCli:
    QUICK_ARGS = [
        "--start-temp", "1e-4", "--final-temp", "1e-9", "--cooling-rate", "0.05",
        "--attempts", "3", "--timeout", "30", "--seed", "1",
    ]

    def test_optimize_gpx(self, tmp_path):
        out = tmp_path / "route.gpx"
        result = CliRunner().invoke(
            cli, ["optimize", str(EXAMPLE_GPX), "--output", str(out), *self.QUICK_ARGS]
        )
        assert result.exit_code == 0, result.output
        assert "Final energy" in result.output
        assert "Improved" in result.output
        assert {p.name for p in read_points(out)} == {p.name for p in read_points(EXAMPLE_GPX)}

    def test_optimize_sample_with_vincenty(self):
        result = CliRunner().invoke(
            cli, ["optimize", "--formula", "vincenty", "--ellipsoid", "wgs84", *self.QUICK_ARGS]
        )
        assert result.exit_code == 0, result.output
        assert "Attempts" in result.output

    def test_optimize_invalid_schedule(self):
        result = CliRunner().invoke(
            cli, ["optimize", str(EXAMPLE_GPX), "--start-temp", "1", "--final-temp", "2"]
        )
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_optimize_malformed_gpx(self, tmp_path):
        bad = tmp_path / "bad.gpx"
        bad.write_text("<gpx><wpt>", encoding="utf-8")
        result = CliRunner().invoke(cli, ["optimize", str(bad)])
        assert result.exit_code == 1
        assert "malformed GPX" in result.output

    def test_distance(self):
        result = CliRunner().invoke(cli, ["distance", "90", "0", "0", "0"])
        assert result.exit_code == 0, result.output
        assert "10001.965729" in result.output

    def test_distance_reports_vincenty_failure(self):
        result = CliRunner().invoke(cli, ["distance", "0", "0", "0", "180"])
        assert result.exit_code == 0, result.output
        assert "NoSolution" in result.output

    def test_sample(self):
        result = CliRunner().invoke(cli, ["sample"])
        assert result.exit_code == 0
        assert "Kawai Purapura" in result.output

    def test_sample_json(self):
        result = CliRunner().invoke(cli, ["sample", "--json"])
        assert result.exit_code == 0, result.output
        points = [Point.from_dict(d) for d in json.loads(result.output)]
        assert points == ALBANY_WALK
        assert json.loads(result.output)[0]["lat"] == pytest.approx(-36.7331)

    def test_optimize_json(self):
        result = CliRunner().invoke(cli, ["optimize", str(EXAMPLE_GPX), "--json", *self.QUICK_ARGS])
        assert result.exit_code == 0, result.output
        route = json.loads(result.output)
        assert sorted(d["name"] for d in route) == sorted(p.name for p in read_points(EXAMPLE_GPX))
        assert set(route[0]) == {"name", "lat", "lon"}
