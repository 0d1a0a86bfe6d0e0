# climbcue/visualize/plot.py
"""
Plotting routines for climbcue
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt

from climbcue.analyze.models import Milestone, MilestoneType, Point

_MARKERS = {
    MilestoneType.CLIMB: ("^", "tab:red", "Climb"),
    MilestoneType.DESCENT: ("v", "tab:blue", "Descent"),
}


def plot_profile(
        points: Sequence[Point],
        milestones: Sequence[Milestone],
        smoothed: Optional[Sequence[float]] = None,
        *,
        title: Optional[str] = None,
        out_path: Optional[Path] = None,
):
    """Elevation profile with a marker at every milestone."""
    km = [p.cumulative_distance / 1000 for p in points]

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.plot(km, [p.elevation for p in points], color="0.6", linewidth=1, label="Elevation")
    if smoothed:
        ax.plot(km, smoothed, color="black", linewidth=1.5, label="Smoothed")

    labelled = set()
    for m in milestones:
        marker, color, label = _MARKERS.get(m.type, ("o", "tab:gray", m.type.value.capitalize()))
        ax.scatter(
            [m.distance / 1000], [m.elevation], marker=marker, color=color, s=60, zorder=3,
            label=None if label in labelled else label,
        )
        labelled.add(label)

    ax.set_xlabel("Distance (km)")
    ax.set_ylabel("Elevation (m)")
    ax.set_title(title or "Elevation profile")
    ax.legend(loc="best")
    fig.tight_layout()

    if out_path is not None:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out_path)
        plt.close(fig)
    else:
        plt.show()
    return fig
