"""
IP address based geolocation over a key-less HTTP service
"""

import logging
from typing import Optional

from ..models import Coordinates
from ..utils.errors import LocationUnavailable, WeatherFetchFailed
from ..utils.http import get_json
from .base import LocationProvider, validate_coordinates

logger = logging.getLogger(__name__)


class IPLocationProvider(LocationProvider):
    """
    Approximate the position from the public IP address.

    The service must answer with a JSON object carrying ``latitude`` and
    ``longitude``; ipapi.co does, and reports refusals as ``{"error": true}``.
    """

    name = "ip"
    DEFAULT_ENDPOINT = "https://ipapi.co/json/"

    def __init__(self, endpoint: Optional[str] = None):
        self.endpoint = endpoint or self.DEFAULT_ENDPOINT

    def locate(self, timeout: float) -> Coordinates:
        try:
            data = get_json(self.endpoint, timeout=timeout)
        except WeatherFetchFailed as e:
            raise LocationUnavailable(f"IP geolocation failed: {e}") from e

        if not isinstance(data, dict):
            raise LocationUnavailable("IP geolocation returned an unexpected payload")

        if data.get("error"):
            reason = data.get("reason") or data.get("message") or "request refused"
            raise LocationUnavailable(f"IP geolocation refused: {reason}")

        coordinates = validate_coordinates(data.get("latitude"), data.get("longitude"))
        logger.debug(f"IP geolocation resolved to {coordinates}")
        return coordinates
