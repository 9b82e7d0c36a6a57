"""
Fixed, configured location
"""

import logging

from ..models import Coordinates
from .base import LocationProvider, validate_coordinates

logger = logging.getLogger(__name__)


class StaticLocationProvider(LocationProvider):
    """Always reports the coordinates given in configuration"""

    name = "static"

    def __init__(self, latitude, longitude):
        self.coordinates = validate_coordinates(latitude, longitude)

    def locate(self, timeout: float) -> Coordinates:
        logger.debug(f"Using configured location {self.coordinates}")
        return self.coordinates
