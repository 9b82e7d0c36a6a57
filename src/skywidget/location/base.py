"""
Base location provider abstraction
"""

import logging
from abc import ABC, abstractmethod

from ..models import Coordinates
from ..utils.errors import LocationUnavailable

logger = logging.getLogger(__name__)


class LocationProvider(ABC):
    """Base class for sources of the widget's position"""

    name: str = "base"

    @abstractmethod
    def locate(self, timeout: float) -> Coordinates:
        """
        Determine the current position

        Args:
            timeout: Maximum seconds to spend on the lookup

        Returns:
            Coordinates of the current position

        Raises:
            LocationUnavailable: If the position cannot be determined
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name})>"


def validate_coordinates(latitude, longitude) -> Coordinates:
    """
    Build Coordinates from raw values, checking type and range.

    Raises:
        LocationUnavailable: If either value is missing, non-numeric or out of range
    """
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        raise LocationUnavailable(f"Invalid coordinates: {latitude!r}, {longitude!r}")

    if not -90.0 <= lat <= 90.0 or not -180.0 <= lon <= 180.0:
        raise LocationUnavailable(f"Coordinates out of range: {lat}, {lon}")

    return Coordinates(lat, lon)
