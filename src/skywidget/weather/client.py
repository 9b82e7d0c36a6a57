"""
Open-Meteo current-conditions client.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..models import Coordinates, CurrentConditions
from ..utils.errors import ConfigurationError, ParseError
from ..utils.http import get_json

logger = logging.getLogger(__name__)


class OpenMeteoClient:
    """
    Fetch current weather from the key-less Open-Meteo forecast API.

    Configuration:
        endpoint: API URL (default: Open-Meteo forecast endpoint)
        temperature_unit: "fahrenheit" or "celsius" (default: "fahrenheit")
        windspeed_unit: "mph", "kmh", "ms" or "kn" (default: "mph")
        timeout: Request timeout in seconds (default: 10)

    Example:
        weather:
          temperature_unit: celsius
          windspeed_unit: kmh
    """

    DEFAULT_ENDPOINT = "https://api.open-meteo.com/v1/forecast"
    DEFAULT_TIMEOUT = 10.0

    TEMPERATURE_UNITS = {"fahrenheit": "°F", "celsius": "°C"}
    WINDSPEED_UNITS = {"mph": "mph", "kmh": "km/h", "ms": "m/s", "kn": "kn"}

    def __init__(
        self,
        endpoint: Optional[str] = None,
        temperature_unit: str = "fahrenheit",
        windspeed_unit: str = "mph",
        timeout: Optional[float] = None,
    ):
        if temperature_unit not in self.TEMPERATURE_UNITS:
            raise ConfigurationError(f"Unsupported temperature_unit: {temperature_unit}")
        if windspeed_unit not in self.WINDSPEED_UNITS:
            raise ConfigurationError(f"Unsupported windspeed_unit: {windspeed_unit}")

        self.endpoint = endpoint or self.DEFAULT_ENDPOINT
        self.temperature_unit = temperature_unit
        self.windspeed_unit = windspeed_unit
        self.timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "OpenMeteoClient":
        """Build a client from the ``weather`` configuration section."""
        return cls(
            endpoint=config.get("endpoint"),
            temperature_unit=config.get("temperature_unit", "fahrenheit"),
            windspeed_unit=config.get("windspeed_unit", "mph"),
            timeout=config.get("timeout"),
        )

    def build_params(self, coordinates: Coordinates) -> Dict[str, Any]:
        """Query parameters for a current-conditions request."""
        return {
            "latitude": coordinates.latitude,
            "longitude": coordinates.longitude,
            "current_weather": True,
            "temperature_unit": self.temperature_unit,
            "windspeed_unit": self.windspeed_unit,
        }

    def current(self, coordinates: Coordinates) -> CurrentConditions:
        """
        Fetch current conditions for a location.

        Raises:
            NetworkError: Transport failure or non-success status
            ParseError: Malformed body or missing fields
        """
        data = get_json(self.endpoint, self.build_params(coordinates), timeout=self.timeout)
        conditions = self.parse(data)
        logger.debug(
            f"Current conditions at {coordinates}: {conditions.temperature}"
            f"{conditions.temperature_unit}, code {conditions.weather_code}"
        )
        return conditions

    def parse(self, data: Any) -> CurrentConditions:
        """Convert an API response document into CurrentConditions."""
        if not isinstance(data, dict):
            raise ParseError("Unexpected weather API response format (not an object)")

        current = data.get("current_weather")
        if not isinstance(current, dict):
            raise ParseError("Unexpected weather API response format (missing key 'current_weather')")

        temperature = _require_number(current, "temperature")
        wind_speed = _require_number(current, "windspeed")
        code = current.get("weathercode")
        if (
            isinstance(code, bool)
            or not isinstance(code, (int, float))
            or (isinstance(code, float) and not code.is_integer())
        ):
            raise ParseError(f"Unexpected weather API response format (bad 'weathercode': {code!r})")

        return CurrentConditions(
            temperature=float(temperature),
            wind_speed=float(wind_speed),
            weather_code=int(code),
            observed_at=_parse_time(current.get("time")),
            temperature_unit=self.TEMPERATURE_UNITS[self.temperature_unit],
            wind_speed_unit=self.WINDSPEED_UNITS[self.windspeed_unit],
        )


def _require_number(current: Dict[str, Any], key: str) -> float:
    value = current.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ParseError(f"Unexpected weather API response format (bad '{key}': {value!r})")
    return value


def _parse_time(value: Any) -> datetime:
    # Open-Meteo reports GMT unless a timezone parameter is sent
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Unparseable observation time '{value}', using fetch time")
        else:
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
    return datetime.now(timezone.utc)
