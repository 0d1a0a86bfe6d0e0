#!/usr/bin/env python3
"""
climbcue-analyze: detect climb/descent milestones in GPX file(s).

Files are given on the command line, or picked with fzf from the configured
tracks root. Output is a human report (default), one TSV row per milestone
(--tsv), or a single JSON document (--json).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from climbcue.analyze.messages import climb_category
from climbcue.analyze.milestones import DetectionResult, run_pipeline
from climbcue.analyze.models import Milestone, ParsedTrack, Segment, TrackSummary
from climbcue.analyze.track import load_track, summarize_track
from climbcue.config import DetectorConfig, load_config
from climbcue.errors import ClimbcueError
from climbcue.util.fzf import fzf_select_paths, list_gpx_candidates
from climbcue.util.logging import log, utc_now_iso
from climbcue.util.paths import ensure_dir, slugify, trail_name_from_path


def category_for(milestone: Milestone, segments: list[Segment]) -> str:
    """Short climb category of the segment a milestone was generated from."""
    for seg in segments:
        if seg.start_index == milestone.point_index:
            return climb_category(int(seg.elevation_change)).short_name
    return ""


def print_report(path: Path, summary: TrackSummary, result: DetectionResult) -> None:
    print(f"\n{path}")
    print(f"  points         : {summary.points}")
    print(f"  distance (km)  : {summary.distance_m / 1000:.1f}")
    print(f"  D+ (m)         : {summary.elevation_gain_m}")
    print(f"  elevation (m)  : {int(summary.min_elevation_m)} -> {int(summary.max_elevation_m)}")
    print(f"  milestones     : {len(result.milestones)}")
    for i, m in enumerate(result.milestones, start=1):
        cat = category_for(m, result.segments)
        print(f"  {i:>3}. km {m.distance / 1000:5.1f}  {m.type.value:<8} {cat:<5}  {m.message}")


def print_tsv_rows(path: Path, result: DetectionResult) -> None:
    for m in result.milestones:
        print(
            f"{path}\t"
            f"{m.point_index}\t"
            f"{m.distance:.1f}\t"
            f"{m.elevation:.1f}\t"
            f"{m.type.value}\t"
            f"{category_for(m, result.segments)}\t"
            f"{m.message}"
        )


def track_document(path: Path, summary: TrackSummary, result: DetectionResult) -> dict[str, Any]:
    return {
        "file": str(path),
        "trail_name": trail_name_from_path(path),
        "summary": {
            "points": summary.points,
            "distance_m": round(summary.distance_m, 1),
            "elevation_gain_m": summary.elevation_gain_m,
            "min_elevation_m": summary.min_elevation_m,
            "max_elevation_m": summary.max_elevation_m,
        },
        "milestones": [m.to_dict() for m in result.milestones],
    }


def analyze_file(path: Path, config: DetectorConfig, trail_id: int) -> tuple[ParsedTrack, TrackSummary, DetectionResult]:
    track = load_track(path)
    result = run_pipeline(track.points, trail_id, config)
    return track, summarize_track(track), result


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="climbcue: detect climb/descent milestones in GPX file(s).")
    ap.add_argument("gpx", nargs="*",
                    help="One or more GPX files. If omitted, use fzf selection.")
    ap.add_argument("--tracks-root", default=None,
                    help="Where to look for GPX files (default: from climbcue config or ~/GPS/tracks)")
    ap.add_argument("--trail-id", type=int, default=0,
                    help="Trail id stamped on generated milestones.")
    ap.add_argument("--min-climb", type=float, default=None, help="Minimum climb in meters.")
    ap.add_argument("--min-descent", type=float, default=None, help="Minimum descent in meters.")
    ap.add_argument("--min-spacing", type=float, default=None, help="Minimum meters between milestones.")
    ap.add_argument("--smoothing-window", type=float, default=None, help="Smoothing window in meters.")
    fmt = ap.add_mutually_exclusive_group()
    fmt.add_argument("--tsv", action="store_true",
                     help="Print tab-separated milestone rows (good for piping).")
    fmt.add_argument("--json", action="store_true",
                     help="Print a JSON document with summaries and milestones.")
    ap.add_argument("--plot-dir", default=None,
                    help="Write an elevation profile PNG per track into this directory.")
    ap.add_argument("--verbose", action="store_true", help="More logging.")
    return ap


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config()
        detector = cfg.detector.with_overrides(
            min_climb=args.min_climb,
            min_descent=args.min_descent,
            min_spacing=args.min_spacing,
            smoothing_window=args.smoothing_window,
        )
    except ClimbcueError as e:
        log(f"Configuration error: {e}")
        return 2

    if args.verbose:
        for key, origin in sorted(cfg.source.items()):
            log(f"config {key} <- {origin}")
        log(f"Detector: {detector}")

    if args.gpx:
        selected = [Path(p).expanduser() for p in args.gpx]
    else:
        tracks_root = Path(args.tracks_root).expanduser() if args.tracks_root else cfg.paths.tracks_root
        candidates = list_gpx_candidates(tracks_root)
        if not candidates:
            log(f"No GPX files found under {tracks_root}")
            return 2
        try:
            selected = fzf_select_paths(candidates, header="Select GPX file(s) to analyze:", multi=True)
        except ClimbcueError as e:
            log(str(e))
            return 2
        if not selected:
            log("No selection made. Exiting.")
            return 0

    if args.tsv:
        print("file\tpoint_index\tdistance_m\televation_m\ttype\tcategory\tmessage")

    documents: list[dict[str, Any]] = []
    failures = 0

    for path in selected:
        try:
            track, summary, result = analyze_file(path, detector, args.trail_id)
        except ClimbcueError as e:
            log(f"Skipping {path}: {e}")
            failures += 1
            continue

        if args.verbose:
            log(f"{path.name}: {summary.points} points, {len(result.segments)} segments, "
                f"{len(result.milestones)} milestones")

        if args.json:
            documents.append(track_document(path, summary, result))
        elif args.tsv:
            print_tsv_rows(path, result)
        else:
            print_report(path, summary, result)

        if args.plot_dir:
            from climbcue.visualize.plot import plot_profile

            plot_dir = Path(args.plot_dir).expanduser()
            ensure_dir(plot_dir)
            out_path = plot_dir / f"{slugify(path.stem)}.png"
            plot_profile(track.points, result.milestones, result.smoothed,
                         title=trail_name_from_path(path), out_path=out_path)
            if args.verbose:
                log(f"Wrote profile plot: {out_path}")

    if args.json:
        json.dump({"generated_utc": utc_now_iso(), "tracks": documents}, sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
