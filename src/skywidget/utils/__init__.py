"""
Utility modules for skywidget.
"""

from .errors import (
    ConfigurationError,
    LocationUnavailable,
    NetworkError,
    ParseError,
    SkyWidgetError,
    SurfaceError,
    WeatherFetchFailed,
    error_boundary,
)

__all__ = [
    "SkyWidgetError",
    "ConfigurationError",
    "LocationUnavailable",
    "WeatherFetchFailed",
    "NetworkError",
    "ParseError",
    "SurfaceError",
    "error_boundary",
]
