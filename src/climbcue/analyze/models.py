# climbcue/analyze/models.py
"""
Value records flowing through the milestone pipeline.

Everything here is frozen: points are built once by the track parser and
milestones are produced once by the generator. Display concerns (icons,
colours, labels) live with whoever renders them, not here.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class RawPoint:
    """A reading as it comes out of a track file."""
    latitude: float
    longitude: float
    elevation: float


@dataclass(frozen=True)
class Point:
    """
    A normalized track point.

    cumulative_distance is measured along the path from the first point and
    never decreases.
    """
    index: int
    latitude: float
    longitude: float
    elevation: float
    cumulative_distance: float


@dataclass(frozen=True)
class ParsedTrack:
    points: tuple[Point, ...]
    total_elevation_gain: int  # meters


@dataclass(frozen=True)
class TrackSummary:
    points: int
    distance_m: float
    elevation_gain_m: int
    min_elevation_m: float
    max_elevation_m: float


class Trend(Enum):
    CLIMBING = "climbing"
    DESCENDING = "descending"
    FLAT = "flat"


@dataclass(frozen=True)
class Segment:
    """A stretch of the smoothed profile with a single direction."""
    start_index: int
    end_index: int
    trend: Trend
    start_distance: float
    end_distance: float
    start_elevation: float
    end_elevation: float

    @property
    def distance(self) -> float:
        return self.end_distance - self.start_distance

    @property
    def elevation_change(self) -> float:
        return abs(self.end_elevation - self.start_elevation)

    @property
    def average_slope(self) -> float:
        if self.distance <= 0:
            return 0.0
        return (self.end_elevation - self.start_elevation) / self.distance


class MilestoneType(Enum):
    CLIMB = "climb"
    DESCENT = "descent"
    FLAT = "flat"
    SUPPLY = "supply"
    DANGER = "danger"
    INFO = "info"


@dataclass(frozen=True)
class Milestone:
    """
    A waypoint carrying a voice-guidance message, anchored to one track point.

    id stays None until an external store persists the milestone.
    """
    trail_id: int
    point_index: int
    latitude: float
    longitude: float
    elevation: float
    distance: float
    type: MilestoneType
    message: str
    name: Optional[str] = None
    id: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["type"] = self.type.value
        return d
