# climbcue/analyze/segments.py
"""
Segment detection on a smoothed elevation profile.
"""

from __future__ import annotations

from typing import Sequence

from climbcue.analyze.models import Point, Segment, Trend
from climbcue.config import DetectorConfig

DEFAULT_STEP_NOISE_THRESHOLD_M = DetectorConfig.step_noise_threshold


def _step_trend(delta: float, noise_threshold: float) -> Trend:
    if delta > noise_threshold:
        return Trend.CLIMBING
    if delta < -noise_threshold:
        return Trend.DESCENDING
    return Trend.FLAT


def _make_segment(
        points: Sequence[Point],
        smoothed: Sequence[float],
        start: int,
        end: int,
        trend: Trend,
) -> Segment:
    return Segment(
        start_index=start,
        end_index=end,
        trend=trend,
        start_distance=points[start].cumulative_distance,
        end_distance=points[end].cumulative_distance,
        start_elevation=smoothed[start],
        end_elevation=smoothed[end],
    )


def _is_significant(trend: Trend, change: float, min_climb: float, min_descent: float) -> bool:
    threshold = min_climb if trend is Trend.CLIMBING else min_descent
    return abs(change) >= threshold


def detect_segments(
        points: Sequence[Point],
        smoothed: Sequence[float],
        min_climb: float,
        min_descent: float,
        *,
        noise_threshold: float = DEFAULT_STEP_NOISE_THRESHOLD_M,
) -> list[Segment]:
    """
    Split the profile into climbing/descending runs and keep the significant ones.

    One left-to-right pass. A step whose elevation change stays within
    +/- noise_threshold counts as flat: it neither accumulates nor ends a run.
    A run only ends on a reversal, i.e. a non-flat step against an already
    established direction. The run that ends at i-1 is kept when its
    accumulated change reaches min_climb (climbs) or min_descent (descents);
    the next run then starts at i-1, so adjacent segments share that sample.

    Flat stretches and runs below threshold are not represented at all. A
    track that never leaves the noise band yields no segments.
    """
    n = len(smoothed)
    if n < 2:
        return []

    segments: list[Segment] = []
    start = 0
    trend = Trend.FLAT
    change = 0.0
    last = smoothed[0]

    for i in range(1, n):
        delta = smoothed[i] - last
        step = _step_trend(delta, noise_threshold)

        reversed_ = step is not Trend.FLAT and step is not trend and trend is not Trend.FLAT
        if reversed_:
            if _is_significant(trend, change, min_climb, min_descent):
                segments.append(_make_segment(points, smoothed, start, i - 1, trend))
            start = i - 1
            trend = step
            change = delta
        elif step is not Trend.FLAT:
            if trend is Trend.FLAT:
                trend = step
                start = i - 1
            change += delta

        last = smoothed[i]

    # the last run is still open
    if trend is not Trend.FLAT and _is_significant(trend, change, min_climb, min_descent):
        segments.append(_make_segment(points, smoothed, start, n - 1, trend))

    return segments
