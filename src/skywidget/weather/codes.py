"""
WMO weather interpretation codes as used by Open-Meteo.
"""

from typing import Dict, Tuple

DEFAULT_GLYPH = "🌡️"
DEFAULT_DESCRIPTION = "Unknown"

# code -> (glyph, description)
WEATHER_CODES: Dict[int, Tuple[str, str]] = {
    0: ("☀️", "Clear sky"),
    1: ("🌤️", "Mainly clear"),
    2: ("⛅", "Partly cloudy"),
    3: ("☁️", "Overcast"),
    45: ("🌫️", "Fog"),
    48: ("🌫️", "Rime fog"),
    51: ("🌦️", "Light drizzle"),
    53: ("🌦️", "Drizzle"),
    55: ("🌦️", "Dense drizzle"),
    56: ("🌧️", "Freezing drizzle"),
    57: ("🌧️", "Dense freezing drizzle"),
    61: ("🌧️", "Slight rain"),
    63: ("🌧️", "Rain"),
    65: ("🌧️", "Heavy rain"),
    66: ("🌧️", "Freezing rain"),
    67: ("🌧️", "Heavy freezing rain"),
    71: ("🌨️", "Slight snow"),
    73: ("🌨️", "Snow"),
    75: ("❄️", "Heavy snow"),
    77: ("❄️", "Snow grains"),
    80: ("🌦️", "Rain showers"),
    81: ("🌧️", "Heavy rain showers"),
    82: ("⛈️", "Violent rain showers"),
    85: ("🌨️", "Snow showers"),
    86: ("❄️", "Heavy snow showers"),
    95: ("⛈️", "Thunderstorm"),
    96: ("⛈️", "Thunderstorm with hail"),
    99: ("⛈️", "Severe thunderstorm with hail"),
}


def map_weather_code(code: int) -> str:
    """Return the display glyph for a weather code, or the default glyph."""
    entry = WEATHER_CODES.get(code)
    return entry[0] if entry else DEFAULT_GLYPH


def describe_weather_code(code: int) -> str:
    """Return a short human-readable condition for a weather code."""
    entry = WEATHER_CODES.get(code)
    return entry[1] if entry else DEFAULT_DESCRIPTION
