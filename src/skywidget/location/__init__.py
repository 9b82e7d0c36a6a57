"""
Location providers for the widget
"""

import logging
from typing import Any, Dict, Optional

from ..utils.errors import ConfigurationError, LocationUnavailable
from .base import LocationProvider, validate_coordinates
from .ip import IPLocationProvider
from .static import StaticLocationProvider

logger = logging.getLogger(__name__)

PROVIDER_TYPES = ["ip", "static", "none"]


def build_location_provider(config: Dict[str, Any]) -> Optional[LocationProvider]:
    """
    Create the location provider named in the ``location`` config section.

    Returns:
        Provider instance, or None when location lookup is disabled

    Raises:
        ConfigurationError: Unknown provider type or bad static coordinates
    """
    provider_type = config.get("provider", "ip")

    if provider_type == "none":
        return None

    if provider_type == "ip":
        return IPLocationProvider(config.get("endpoint"))

    if provider_type == "static":
        try:
            return StaticLocationProvider(config.get("latitude"), config.get("longitude"))
        except LocationUnavailable as e:
            raise ConfigurationError(f"Static location provider: {e}") from e

    raise ConfigurationError(f"Unknown location provider: {provider_type}")


__all__ = [
    "LocationProvider",
    "IPLocationProvider",
    "StaticLocationProvider",
    "build_location_provider",
    "validate_coordinates",
]
