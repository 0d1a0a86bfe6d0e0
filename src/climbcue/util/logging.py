# climbcue/util/logging.py
from __future__ import annotations

import datetime
import sys

def utc_now_iso() -> str:
    """Return current UTC timestamp as ISO-8601 string."""
    return datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="seconds")

def log(msg: str) -> None:
    """Print a timestamped log line (local time with timezone) to stderr.

    stdout is reserved for reports and JSON documents.
    """
    ts = datetime.datetime.now().astimezone().isoformat(timespec="seconds")
    print(f"{ts}  {msg}", file=sys.stderr)
