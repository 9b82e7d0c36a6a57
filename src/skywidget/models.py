"""
Value types shared across the widget.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Tuple


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"{self.latitude:.4f},{self.longitude:.4f}"


# Seattle, WA
FALLBACK_COORDINATES = Coordinates(47.6062, -122.3321)


@dataclass(frozen=True)
class CurrentConditions:
    """
    Point-in-time weather snapshot as reported by the weather API.

    Values are kept in the units requested from the API; the unit labels
    travel with them so rendering needs no configuration.
    """

    temperature: float
    wind_speed: float
    weather_code: int
    observed_at: datetime
    temperature_unit: str = "°F"
    wind_speed_unit: str = "mph"


class WidgetState:
    """Base class for the three widget states."""

    name: str = ""


@dataclass(frozen=True)
class Loading(WidgetState):
    name = "loading"


@dataclass(frozen=True)
class Ready(WidgetState):
    conditions: CurrentConditions
    name = "ready"


@dataclass(frozen=True)
class Failed(WidgetState):
    reason: str = ""
    name = "failed"


@dataclass(frozen=True)
class WidgetView:
    """Presentation-neutral text for a surface to draw."""

    state: str
    lines: Tuple[str, ...]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)
