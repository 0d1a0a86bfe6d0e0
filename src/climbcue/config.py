"""
climbcue configuration loader

This module centralizes *all* configuration handling for climbcue.

Design goals:
- CLI flags override everything.
- Sensible defaults if no config exists (the detector thresholds below).
- Per-machine config without committing personal paths:
    ~/.config/climbcue/config.toml
- Repo-local config:
    <repo_root>/config/config.toml
- Environment variable overrides for automation.

Precedence (highest to lowest) for any given value:
1) CLI argument (handled by the CLI, via DetectorConfig.with_overrides)
2) Environment variables (CLIMBCUE_*)
3) User config: ~/.config/climbcue/config.toml
4) Repo config: <repo_root>/config/config.toml
5) Hard defaults

This module uses Python's built-in tomllib on Python 3.11+, or `tomli` if installed.

The detector thresholds are load-time constants: the pipeline receives a
DetectorConfig value explicitly and never reads configuration on its own.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from climbcue.errors import ConfigError

# ---------------------------------------------------------------------------
# TOML loading helpers
# ---------------------------------------------------------------------------
def _load_toml(path: Path) -> dict[str, Any]:
    """
    Parse a TOML file at `path`.

    Behavior:
    - If the file does not exist, return an empty dict (non-fatal).
    - If the file exists but is invalid TOML, raise ConfigError
      with a clear, user-facing message.
    """
    if not path.is_file():
        return {}

    try:
        try:
            # Python 3.11+ standard library
            import tomllib
            return tomllib.loads(path.read_text(encoding="utf-8")) or {}
        except ModuleNotFoundError:
            import tomli
            return tomli.loads(path.read_text(encoding="utf-8")) or {}
    except (OSError, ValueError) as e:
        # TOMLDecodeError is a ValueError in both tomllib and tomli
        raise ConfigError(f"Failed to parse TOML config: {path} ({e})") from e


# ---------------------------------------------------------------------------
# Generic coercion helpers
# ---------------------------------------------------------------------------
def _deep_get(d: dict[str, Any], dotted_key: str) -> Any:
    """
    Fetch nested dictionary values using dot-separated keys.

    Example:
        _deep_get(cfg, "detector.min_climb")

    Returns None if any part of the path is missing.
    """
    cur: Any = d
    for part in dotted_key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _as_path(v: Any) -> Optional[Path]:
    """
    Coerce a config value into a pathlib.Path if possible.

    Returns None if value cannot be interpreted as a path.
    """
    if v is None:
        return None
    if isinstance(v, Path):
        return v.expanduser()
    if isinstance(v, str):
        return Path(v).expanduser()
    return None


def _as_float(v: Any, origin: str) -> float:
    """
    Coerce a threshold value into a float.

    TOML numbers arrive as int/float; environment values arrive as strings.
    Anything else (including booleans) is a configuration mistake and fails
    loudly, naming where the value came from.
    """
    if isinstance(v, bool):
        raise ConfigError(f"Expected a number, got boolean {v!r} ({origin})")
    if isinstance(v, (int, float)):
        return float(v)
    if isinstance(v, str):
        try:
            return float(v.strip())
        except ValueError:
            pass
    raise ConfigError(f"Expected a number, got {v!r} ({origin})")


# ---------------------------------------------------------------------------
# Repo discovery + defaults
# ---------------------------------------------------------------------------
def find_repo_root(start: Path) -> Optional[Path]:
    """
    Walk upward from `start` looking for the climbcue repo root.

    Heuristic:
    - The presence of a `config/` directory marks the repo root
    """
    start = start.resolve()
    for p in [start] + list(start.parents):
        if (p / "config").is_dir():
            return p
    return None


def default_tracks_root() -> Path:
    """Where the CLI looks for GPX files when none are given."""
    return Path.home() / "GPS" / "tracks"


# ---------------------------------------------------------------------------
# Typed config dataclasses
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DetectorConfig:
    """
    Thresholds for milestone detection, all in meters.

    step_noise_threshold is the per-sample change needed before a step counts
    as climbing or descending; min_climb / min_descent apply to whole
    segments. The two are independent knobs.
    """

    min_climb: float = 75.0
    min_descent: float = 75.0
    min_spacing: float = 1000.0
    smoothing_window: float = 200.0
    step_noise_threshold: float = 5.0

    def __post_init__(self) -> None:
        for f in fields(self):
            v = getattr(self, f.name)
            if not isinstance(v, (int, float)) or isinstance(v, bool) or not math.isfinite(v):
                raise ConfigError(f"{f.name} must be a finite number, got {v!r}")
        if self.min_climb <= 0 or self.min_descent <= 0:
            raise ConfigError("min_climb and min_descent must be > 0")
        if self.min_spacing < 0 or self.smoothing_window < 0 or self.step_noise_threshold < 0:
            raise ConfigError("min_spacing, smoothing_window and step_noise_threshold must be >= 0")

    def with_overrides(self, **overrides: Optional[float]) -> "DetectorConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


DETECTOR_KEYS = tuple(f.name for f in fields(DetectorConfig))


@dataclass(frozen=True)
class ClimbcuePaths:
    tracks_root: Path


@dataclass(frozen=True)
class ClimbcueConfig:
    """
    Fully merged climbcue configuration.

    Attributes:
    - paths: resolved filesystem layout
    - detector: milestone detection thresholds
    - source: provenance map showing where each value came from
    """

    paths: ClimbcuePaths
    detector: DetectorConfig
    source: dict[str, str]


# ---------------------------------------------------------------------------
# Main config loader
# ---------------------------------------------------------------------------
def load_config(
    repo_root: Optional[Path] = None,
    repo_config_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
) -> ClimbcueConfig:
    """
    Load, merge, and validate all climbcue configuration.

    This function is the single authoritative entry point
    for configuration access.
    """

    # Locate repo and config files
    if repo_root is None:
        repo_root = find_repo_root(Path(__file__).resolve())
    if repo_config_path is None and repo_root is not None:
        repo_config_path = repo_root / "config" / "config.toml"
    if user_config_path is None:
        user_config_path = Path.home() / ".config" / "climbcue" / "config.toml"

    # Load raw TOML dicts
    repo_cfg = _load_toml(repo_config_path) if repo_config_path else {}
    user_cfg = _load_toml(user_config_path) if user_config_path else {}

    tracks_root = default_tracks_root()
    detector: dict[str, float] = {}

    # Track provenance for debugging and audits
    src = {"paths.tracks_root": "default"}
    src.update({f"detector.{k}": "default" for k in DETECTOR_KEYS})

    # ------------------------------------------------------------------
    # Repo + user overrides (user wins)
    # ------------------------------------------------------------------
    for cfg, label, cfg_path in ((repo_cfg, "repo", repo_config_path), (user_cfg, "user", user_config_path)):
        v = _as_path(_deep_get(cfg, "paths.tracks_root"))
        if v is not None:
            tracks_root = v
            src["paths.tracks_root"] = f"{label}:{cfg_path}"

        for k in DETECTOR_KEYS:
            raw = _deep_get(cfg, f"detector.{k}")
            if raw is None:
                continue
            detector[k] = _as_float(raw, f"detector.{k} in {cfg_path}")
            src[f"detector.{k}"] = f"{label}:{cfg_path}"

    # Environment variable overrides (highest non-CLI precedence)
    val = os.environ.get("CLIMBCUE_TRACKS_ROOT")
    if val:
        tracks_root = Path(val).expanduser()
        src["paths.tracks_root"] = "env:CLIMBCUE_TRACKS_ROOT"

    for k in DETECTOR_KEYS:
        env = f"CLIMBCUE_{k.upper()}"
        val = os.environ.get(env)
        if not val:
            continue
        detector[k] = _as_float(val, f"environment variable {env}")
        src[f"detector.{k}"] = f"env:{env}"

    return ClimbcueConfig(
        paths=ClimbcuePaths(tracks_root=tracks_root.expanduser()),
        detector=DetectorConfig(**detector),
        source=src,
    )
