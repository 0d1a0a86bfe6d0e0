from pathlib import Path
from typing import Callable, Sequence

import pytest

from climbcue.analyze.models import Point


def make_points(elevations: Sequence[float], spacing: float = 50.0) -> list[Point]:
    """Points on a straight line, `spacing` meters apart."""
    return [
        Point(
            index=i,
            latitude=45.0 + i * 0.0001,
            longitude=6.0,
            elevation=float(e),
            cumulative_distance=i * spacing,
        )
        for i, e in enumerate(elevations)
    ]


@pytest.fixture
def points_factory() -> Callable[..., list[Point]]:
    return make_points


@pytest.fixture
def single_climb_elevations() -> list[float]:
    """20 flat points at 1000 m, 20 points rising linearly to 1100 m, 20 flat at 1100 m."""
    flat_before = [1000.0] * 20
    climb = [1000.0 + 100.0 * k / 19 for k in range(20)]
    flat_after = [1100.0] * 20
    return flat_before + climb + flat_after


@pytest.fixture
def sample_gpx_path() -> Path:
    return Path(__file__).parent / "data" / "sample.gpx"


@pytest.fixture
def write_gpx(tmp_path: Path) -> Callable[..., Path]:
    """Write a GPX 1.1 track going due north, one point every ~49 m."""

    def _write(elevations: Sequence[float], name: str = "track.gpx") -> Path:
        # 0.00044 deg of latitude is ~49 m, so a 200 m window spans 5 points
        trkpts = "\n".join(
            f'      <trkpt lat="{45.0 + i * 0.00044:.6f}" lon="6.000000"><ele>{e:.2f}</ele></trkpt>'
            for i, e in enumerate(elevations)
        )
        doc = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">\n'
            "  <trk>\n    <name>test</name>\n    <trkseg>\n"
            f"{trkpts}\n"
            "    </trkseg>\n  </trk>\n</gpx>\n"
        )
        path = tmp_path / name
        path.write_text(doc, encoding="utf-8")
        return path

    return _write
