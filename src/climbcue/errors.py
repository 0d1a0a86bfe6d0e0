# climbcue/errors

"""
climbcue.errors

Central exception hierarchy for climbcue.

Rationale:
  - The pipeline raises specific, meaningful errors and never recovers them itself.
  - Callers can catch ClimbcueError (broad) or specific subclasses (narrow).
"""


class ClimbcueError(RuntimeError):
    """Base class for all climbcue runtime errors."""


# ---- Track / pipeline errors -------------------

class TrackError(ClimbcueError):
    """Errors raised while turning raw points into a usable track."""

class NotEnoughPointsError(TrackError):
    """The track holds fewer than 2 points."""


# ---- Format errors -----------------------------

class FormatError(ClimbcueError):
    """Errors reading a raw track format."""

class GpxFileNotFoundError(FormatError):
    """The GPX file does not exist."""

class InvalidGpxError(FormatError):
    """GPX file could not be parsed or is not a GPX document."""


# ---- Configuration errors ----------------------

class ConfigError(ClimbcueError):
    """Invalid configuration file or value."""


# ---- Selection errors --------------------------

class SelectionError(ClimbcueError):
    """Errors in interactive file selection."""

class FzfNotFoundError(SelectionError):
    """fzf is required but not available on PATH."""
