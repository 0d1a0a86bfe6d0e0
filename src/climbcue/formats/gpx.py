# climbcue/formats/gpx.py
"""
GPX helpers for climbcue

This module is intentionally format-focused:
- reading a GPX file into an ElementTree with clear errors
- extracting ordered lat/lon/ele readings from <trkpt> (or <rtept>) nodes

Key design principle:
  Everything past raw readings (distances, D+, milestones) belongs to
  climbcue.analyze; nothing here knows about it.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

from climbcue.analyze.models import RawPoint
from climbcue.errors import GpxFileNotFoundError, InvalidGpxError


def _local(tag: str) -> str:
    """
    Strip the namespace from an ElementTree tag.

    ElementTree represents namespaced tags internally as
      "{namespace-uri}tag"
    Matching on the local name lets GPX 1.0, 1.1 and namespace-less files
    share one code path.
    """
    return tag.rsplit("}", 1)[-1]


def _parse_float(text: Optional[str]) -> Optional[float]:
    if text is None:
        return None
    s = text.strip()
    if not s:
        return None
    try:
        v = float(s)
    except ValueError:
        return None
    # "nan" and "inf" parse as floats but are not usable readings
    return v if math.isfinite(v) else None


def read_gpx(path: Path) -> ET.ElementTree:
    """
    Read a GPX file into an ElementTree.

    Raises:
      GpxFileNotFoundError, InvalidGpxError
    """
    path = Path(path)
    if not path.is_file():
        raise GpxFileNotFoundError(f"GPX file not found: {path}")
    try:
        tree = ET.parse(path)
    except ET.ParseError as e:
        raise InvalidGpxError(f"Invalid GPX format: {path} ({e})") from e

    if _local(tree.getroot().tag) != "gpx":
        raise InvalidGpxError(f"Not a GPX document (root <{_local(tree.getroot().tag)}>): {path}")
    return tree


def _extract(root: ET.Element, point_tag: str) -> list[RawPoint]:
    pts: list[RawPoint] = []
    for el in root.iter():
        if _local(el.tag) != point_tag:
            continue

        lat = _parse_float(el.get("lat"))
        lon = _parse_float(el.get("lon"))
        if lat is None or lon is None:
            continue   # skip points without usable coordinates

        ele = None
        for child in el:
            if _local(child.tag) == "ele":
                ele = _parse_float(child.text)
                break

        pts.append(RawPoint(latitude=lat, longitude=lon, elevation=ele if ele is not None else 0.0))
    return pts


def extract_raw_points(tree: ET.ElementTree) -> list[RawPoint]:
    """
    Extract ordered readings from a GPX tree.

    Track points are preferred; a file with no <trkpt> at all (a planned
    route) falls back to its <rtept> nodes. Missing elevation reads as 0.0.
    """
    root = tree.getroot()
    pts = _extract(root, "trkpt")
    if not pts:
        pts = _extract(root, "rtept")
    return pts
