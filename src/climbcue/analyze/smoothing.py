# climbcue/analyze/smoothing.py
"""
Distance-windowed elevation smoothing.
"""

from __future__ import annotations

from typing import Sequence

from climbcue.analyze.models import Point
from climbcue.config import DetectorConfig

DEFAULT_SMOOTHING_WINDOW_M = DetectorConfig.smoothing_window


def smooth_elevations(points: Sequence[Point], window_m: float = DEFAULT_SMOOTHING_WINDOW_M) -> list[float]:
    """
    Centered moving average of elevation over a physical distance window.

    For each point, average every point whose cumulative distance lies within
    window_m / 2 of its own (both ends inclusive). The window is measured in
    meters, not in samples, so dense stretches of a track are not weighted
    more than sparse ones.

    Because cumulative distance never decreases, the qualifying points form a
    contiguous run; the run's bounds only move forward, so they are tracked
    with two indices. Each average is accumulated one value at a time in track
    order, giving the same floats as comparing every pair of points. The
    built-in sum() is not used: from Python 3.12 it compensates rounding error.
    """
    n = len(points)
    half = window_m / 2
    distances = [p.cumulative_distance for p in points]
    elevations = [p.elevation for p in points]

    smoothed: list[float] = []
    lo = 0
    hi = 0  # exclusive

    for i, target in enumerate(distances):
        while lo < i and abs(distances[lo] - target) > half:
            lo += 1
        if hi < lo:
            hi = lo
        while hi < n and abs(distances[hi] - target) <= half:
            hi += 1

        count = hi - lo
        if count > 0:
            total = 0.0
            for j in range(lo, hi):
                total += elevations[j]
            smoothed.append(total / count)
        else:
            smoothed.append(elevations[i])

    return smoothed
