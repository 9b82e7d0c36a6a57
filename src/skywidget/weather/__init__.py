"""
Weather data access and code tables.
"""

from .client import OpenMeteoClient
from .codes import DEFAULT_GLYPH, WEATHER_CODES, describe_weather_code, map_weather_code

__all__ = [
    "OpenMeteoClient",
    "DEFAULT_GLYPH",
    "WEATHER_CODES",
    "describe_weather_code",
    "map_weather_code",
]
