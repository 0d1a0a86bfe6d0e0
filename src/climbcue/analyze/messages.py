# climbcue/analyze/messages.py
"""
Voice-guidance message templates and climb categories.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class MessageTemplates:
    """
    Format strings for generated milestone messages.

    Placeholders:
      {gain}     whole meters climbed or descended
      {km}       segment length in kilometers (float)
      {meters}   segment length in whole meters
      {slope}    whole-percent average slope (climbs only)
    """
    climb_km: str
    climb_m: str
    descent_km: str
    descent_m: str


FRENCH = MessageTemplates(
    climb_km="Montée de {gain} mètres sur {km:.1f} kilomètres — {slope}% moyen",
    climb_m="Montée de {gain} mètres sur {meters} mètres — {slope}% moyen",
    descent_km="Descente de {gain} mètres sur {km:.1f} kilomètres",
    descent_m="Descente de {gain} mètres sur {meters} mètres",
)

DEFAULT_TEMPLATES = FRENCH


def format_climb(gain: int, distance_km: float, slope_percent: int,
                 templates: MessageTemplates = DEFAULT_TEMPLATES) -> str:
    if distance_km >= 1:
        return templates.climb_km.format(gain=gain, km=distance_km, slope=slope_percent)
    return templates.climb_m.format(gain=gain, meters=int(distance_km * 1000), slope=slope_percent)


def format_descent(loss: int, distance_km: float,
                   templates: MessageTemplates = DEFAULT_TEMPLATES) -> str:
    if distance_km >= 1:
        return templates.descent_km.format(gain=loss, km=distance_km)
    return templates.descent_m.format(gain=loss, meters=int(distance_km * 1000))


class ClimbCategory(Enum):
    HC = "Hors Catégorie"
    CAT1 = "Catégorie 1"
    CAT2 = "Catégorie 2"
    CAT3 = "Catégorie 3"
    CAT4 = "Catégorie 4"

    @property
    def short_name(self) -> str:
        return _SHORT_NAMES[self]


_SHORT_NAMES = {
    ClimbCategory.HC: "HC",
    ClimbCategory.CAT1: "Cat 1",
    ClimbCategory.CAT2: "Cat 2",
    ClimbCategory.CAT3: "Cat 3",
    ClimbCategory.CAT4: "Cat 4",
}


def climb_category(elevation_gain: int) -> ClimbCategory:
    """Categorize a climb (or descent) by its elevation change in meters."""
    if elevation_gain >= 1000:
        return ClimbCategory.HC
    if elevation_gain >= 600:
        return ClimbCategory.CAT1
    if elevation_gain >= 300:
        return ClimbCategory.CAT2
    if elevation_gain >= 150:
        return ClimbCategory.CAT3
    return ClimbCategory.CAT4
