# climbcue/analyze/track.py
"""
Track parsing: raw readings -> distance-annotated points + D+
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from climbcue.analyze.models import ParsedTrack, Point, RawPoint, TrackSummary
from climbcue.errors import NotEnoughPointsError
from climbcue.formats.gpx import extract_raw_points, read_gpx
from climbcue.util.geomath import distance_meters


def parse_track(raw_points: Sequence[RawPoint]) -> ParsedTrack:
    """
    Build the normalized point sequence and total elevation gain.

    Each positive elevation step is truncated to whole meters before it is
    added to the gain, so 0.9 m steps never count.

    Raises:
      NotEnoughPointsError if fewer than 2 raw points are given.
    """
    if len(raw_points) < 2:
        raise NotEnoughPointsError("track must contain at least 2 points")

    points: list[Point] = []
    cumulative_distance = 0.0
    elevation_gain = 0
    prev = None

    for index, raw in enumerate(raw_points):
        if prev is not None:
            cumulative_distance += distance_meters(
                (prev.latitude, prev.longitude), (raw.latitude, raw.longitude)
            )
            delta = raw.elevation - prev.elevation
            if delta > 0:
                elevation_gain += int(delta)

        points.append(Point(
            index=index,
            latitude=raw.latitude,
            longitude=raw.longitude,
            elevation=raw.elevation,
            cumulative_distance=cumulative_distance,
        ))
        prev = raw

    return ParsedTrack(points=tuple(points), total_elevation_gain=elevation_gain)


def load_track(gpx_path: Path) -> ParsedTrack:
    """Read a GPX file and parse its track points."""
    tree = read_gpx(gpx_path)
    return parse_track(extract_raw_points(tree))


def summarize_track(track: ParsedTrack) -> TrackSummary:
    elevations = [p.elevation for p in track.points]
    return TrackSummary(
        points=len(track.points),
        distance_m=track.points[-1].cumulative_distance if track.points else 0.0,
        elevation_gain_m=track.total_elevation_gain,
        min_elevation_m=min(elevations) if elevations else 0.0,
        max_elevation_m=max(elevations) if elevations else 0.0,
    )
