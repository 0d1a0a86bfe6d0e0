# climbcue/util/fzf.py
"""
Helper functions for track file selection using `fzf`
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from shutil import which

from climbcue.errors import FzfNotFoundError, SelectionError


def list_gpx_candidates(root: Path) -> list[Path]:
    """All *.gpx files under `root`, sorted. Empty if `root` is not a directory."""
    if not root.is_dir():
        return []
    return sorted(p for p in root.rglob("*.gpx") if p.is_file())


def fzf_select_paths(
        paths: list[Path], *,
        header: str,
        multi: bool = True,
) -> list[Path]:

    if not which("fzf"):
        raise FzfNotFoundError("fzf not found on PATH. Install fzf or pass GPX files explicitly.")

    lines = [f"{p.name}\t{p}" for p in paths]
    input_text = "\n".join(lines) + "\n"
    selected: list[Path] = []

    cmd = [
        "fzf",
        "--ansi",
        "--delimiter=\t",
        "--nth=1",
        "--with-nth=1",
        "--height=60%",
        "--layout=reverse",
        "--border",
        "--header", header,
    ]

    if multi:
        cmd.append("--multi")

    proc = subprocess.run(
        cmd,
        input=input_text.encode(),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )

    # 130: user aborted with Esc / Ctrl-C
    if proc.returncode not in (0, 130):
        raise SelectionError(f"fzf failed: {proc.stderr.decode(errors='replace')}")

    out = proc.stdout.decode().strip()
    if not out:
        return []

    for line in out.splitlines():
        line = line.strip()
        if not line:
            continue
        # line is: "name<TAB>fullpath"
        path_str = line.split("\t", 1)[1] if "\t" in line else line
        selected.append(Path(path_str).expanduser().resolve())
    return selected
