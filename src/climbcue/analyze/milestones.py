# climbcue/analyze/milestones.py
"""
Milestone generation and the detection pipeline.

    points -> smooth_elevations -> detect_segments -> generate_milestones
           -> filter_by_minimum_distance

Every step is a pure function of its arguments; thresholds arrive through an
explicit DetectorConfig, so concurrent calls on different tracks need no
coordination.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from climbcue.analyze.messages import DEFAULT_TEMPLATES, MessageTemplates, format_climb, format_descent
from climbcue.analyze.models import Milestone, MilestoneType, Point, Segment, Trend
from climbcue.analyze.segments import detect_segments
from climbcue.analyze.smoothing import smooth_elevations
from climbcue.config import DetectorConfig

# Below this many points there is not enough signal to segment a profile.
MIN_POINTS_FOR_DETECTION = 10


def _milestone_at(point: Point, trail_id: int, kind: MilestoneType, message: str) -> Milestone:
    return Milestone(
        trail_id=trail_id,
        point_index=point.index,
        latitude=point.latitude,
        longitude=point.longitude,
        elevation=point.elevation,
        distance=point.cumulative_distance,
        type=kind,
        message=message,
    )


def generate_milestones(
        segments: Sequence[Segment],
        points: Sequence[Point],
        trail_id: int,
        templates: MessageTemplates = DEFAULT_TEMPLATES,
) -> list[Milestone]:
    """
    One milestone per climbing or descending segment, anchored at its first point.

    Returned in ascending distance; the sort is stable, so milestones at the
    same distance keep segment order.
    """
    milestones: list[Milestone] = []

    for seg in segments:
        if seg.start_index >= len(points):
            continue
        anchor = points[seg.start_index]
        distance_km = seg.distance / 1000

        if seg.trend is Trend.CLIMBING:
            gain = int(max(0.0, seg.end_elevation - seg.start_elevation))
            slope_percent = int(abs(seg.average_slope * 100))
            message = format_climb(gain, distance_km, slope_percent, templates)
            milestones.append(_milestone_at(anchor, trail_id, MilestoneType.CLIMB, message))

        elif seg.trend is Trend.DESCENDING:
            loss = int(abs(seg.end_elevation - seg.start_elevation))
            message = format_descent(loss, distance_km, templates)
            milestones.append(_milestone_at(anchor, trail_id, MilestoneType.DESCENT, message))

    return sorted(milestones, key=lambda m: m.distance)


def filter_by_minimum_distance(milestones: Sequence[Milestone], min_spacing: float) -> list[Milestone]:
    """
    Drop milestones closer than min_spacing to the previously kept one.

    Input must already be sorted by distance. Greedy: the earlier milestone of
    a close pair always wins, and the first milestone is always kept.
    """
    kept: list[Milestone] = []
    last_kept = -min_spacing

    for m in milestones:
        if m.distance - last_kept >= min_spacing:
            kept.append(m)
            last_kept = m.distance

    return kept


@dataclass(frozen=True)
class DetectionResult:
    """Intermediate products of one pipeline run (for reports and plots)."""
    smoothed: list[float]
    segments: list[Segment]
    milestones: list[Milestone]


def run_pipeline(
        points: Sequence[Point],
        trail_id: int = 0,
        config: Optional[DetectorConfig] = None,
        templates: MessageTemplates = DEFAULT_TEMPLATES,
) -> DetectionResult:
    if config is None:
        config = DetectorConfig()

    if len(points) < MIN_POINTS_FOR_DETECTION:
        return DetectionResult(smoothed=[], segments=[], milestones=[])

    smoothed = smooth_elevations(points, config.smoothing_window)
    segments = detect_segments(
        points, smoothed, config.min_climb, config.min_descent,
        noise_threshold=config.step_noise_threshold,
    )
    milestones = generate_milestones(segments, points, trail_id, templates)
    return DetectionResult(
        smoothed=smoothed,
        segments=segments,
        milestones=filter_by_minimum_distance(milestones, config.min_spacing),
    )


def detect(
        points: Sequence[Point],
        trail_id: int = 0,
        config: Optional[DetectorConfig] = None,
        templates: MessageTemplates = DEFAULT_TEMPLATES,
) -> list[Milestone]:
    """
    Detect climb/descent milestones along a track.

    Tracks with fewer than 10 points return [] rather than raising.
    The result is sorted by distance and consecutive milestones are at least
    config.min_spacing apart.
    """
    return run_pipeline(points, trail_id, config, templates).milestones
