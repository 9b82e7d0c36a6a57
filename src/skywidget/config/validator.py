"""
Configuration validator for skywidget YAML files
"""

from typing import Any, Dict, List, Tuple


class ConfigValidator:
    """Validate a skywidget configuration dictionary"""

    VALID_SECTIONS = ["location", "weather", "refresh", "surface"]
    VALID_LOCATION_PROVIDERS = ["ip", "static", "none"]
    VALID_TEMPERATURE_UNITS = ["fahrenheit", "celsius"]
    VALID_WINDSPEED_UNITS = ["mph", "kmh", "ms", "kn"]
    VALID_SURFACE_TYPES = ["console", "html", "image"]
    VALID_STYLE_KEYS = ["font", "font_size", "text_color", "background_color", "text_align", "text_offset"]
    VALID_TEXT_ALIGN = ["top", "center", "bottom"]

    # Open-Meteo refreshes current conditions every 15 minutes
    MIN_REFRESH_INTERVAL = 60

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate(self) -> Tuple[bool, List[str], List[str]]:
        """Validate configuration"""
        if not isinstance(self.config, dict):
            self.errors.append("Configuration must be a dictionary")
            return False, self.errors, self.warnings

        for key in self.config:
            if key not in self.VALID_SECTIONS:
                self.warnings.append(f"Unknown configuration section: {key}")

        sections = {}
        for name in self.VALID_SECTIONS:
            section = self.config.get(name) or {}
            if not isinstance(section, dict):
                self.errors.append(f"Section '{name}' must be a dictionary")
                section = {}
            sections[name] = section

        self._validate_location(sections["location"])
        self._validate_weather(sections["weather"])
        self._validate_refresh(sections["refresh"])
        self._validate_surface(sections["surface"])

        return len(self.errors) == 0, self.errors, self.warnings

    def _validate_location(self, location: Dict):
        """Validate location configuration"""
        provider = location.get("provider", "ip")
        if provider not in self.VALID_LOCATION_PROVIDERS:
            self.errors.append(f"Invalid location provider: {provider}")

        if provider == "static":
            if "latitude" not in location or "longitude" not in location:
                self.errors.append("Static location provider requires 'latitude' and 'longitude'")
            else:
                self._check_coordinates("location", location["latitude"], location["longitude"])

        if "timeout" in location:
            self._check_positive("location.timeout", location["timeout"])

        fallback = location.get("fallback")
        if fallback is not None:
            if not isinstance(fallback, dict):
                self.errors.append("'location.fallback' must be a dictionary")
            else:
                self._check_coordinates(
                    "location.fallback", fallback.get("latitude"), fallback.get("longitude")
                )

    def _validate_weather(self, weather: Dict):
        """Validate weather API configuration"""
        temperature_unit = weather.get("temperature_unit", "fahrenheit")
        if temperature_unit not in self.VALID_TEMPERATURE_UNITS:
            self.errors.append(f"Invalid temperature_unit: {temperature_unit}")

        windspeed_unit = weather.get("windspeed_unit", "mph")
        if windspeed_unit not in self.VALID_WINDSPEED_UNITS:
            self.errors.append(f"Invalid windspeed_unit: {windspeed_unit}")

        endpoint = weather.get("endpoint")
        if endpoint is not None and not str(endpoint).startswith(("http://", "https://")):
            self.errors.append(f"Weather endpoint must be an http(s) URL: {endpoint}")

        if "timeout" in weather:
            self._check_positive("weather.timeout", weather["timeout"])

    def _validate_refresh(self, refresh: Dict):
        """Validate auto-refresh configuration"""
        if "enabled" in refresh and not isinstance(refresh["enabled"], bool):
            self.errors.append(f"'refresh.enabled' must be true or false: {refresh['enabled']}")

        if "interval" in refresh:
            interval = refresh["interval"]
            if self._check_positive("refresh.interval", interval) and interval < self.MIN_REFRESH_INTERVAL:
                self.warnings.append(
                    f"Refresh interval {interval}s is shorter than {self.MIN_REFRESH_INTERVAL}s; "
                    f"current conditions change at most every 15 minutes"
                )

    def _validate_surface(self, surface: Dict):
        """Validate rendered surface configuration"""
        surface_type = surface.get("type", "console")
        if surface_type not in self.VALID_SURFACE_TYPES:
            self.errors.append(f"Invalid surface type: {surface_type}")
            return

        if surface_type in ("html", "image") and not surface.get("path"):
            self.errors.append(f"Surface type '{surface_type}' requires 'path'")

        if surface_type == "image":
            size = surface.get("size")
            if size is not None:
                if (
                    not isinstance(size, (list, tuple))
                    or len(size) != 2
                    or not all(isinstance(v, int) and not isinstance(v, bool) and v > 0 for v in size)
                ):
                    self.errors.append(f"Invalid image size: {size} (expected [width, height])")

            style = surface.get("style") or {}
            if not isinstance(style, dict):
                self.errors.append("'surface.style' must be a dictionary")
            else:
                self._validate_style(style)

    def _validate_style(self, style: Dict):
        """Validate image style keys"""
        for key in style:
            if key not in self.VALID_STYLE_KEYS:
                self.warnings.append(f"Unknown style key: {key}")

        for color_key in ["text_color", "background_color"]:
            if color_key in style and not self._is_valid_color(style[color_key]):
                self.errors.append(f"Invalid color format for '{color_key}': {style[color_key]}")

        if "text_align" in style and style["text_align"] not in self.VALID_TEXT_ALIGN:
            self.errors.append(f"Invalid text_align: {style['text_align']}")

        if "font_size" in style:
            self._check_positive("style.font_size", style["font_size"])

        if "text_offset" in style and not self._is_number(style["text_offset"]):
            self.errors.append(f"'style.text_offset' must be a number: {style['text_offset']}")

    def _check_coordinates(self, where: str, latitude, longitude) -> None:
        if not self._is_number(latitude) or not -90 <= latitude <= 90:
            self.errors.append(f"Invalid latitude in '{where}': {latitude} (must be -90 to 90)")
        if not self._is_number(longitude) or not -180 <= longitude <= 180:
            self.errors.append(f"Invalid longitude in '{where}': {longitude} (must be -180 to 180)")

    def _check_positive(self, where: str, value) -> bool:
        if not self._is_number(value) or value <= 0:
            self.errors.append(f"'{where}' must be a positive number: {value}")
            return False
        return True

    def _is_number(self, value) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    def _is_valid_color(self, color: str) -> bool:
        """Check if color is valid hex format"""
        if not isinstance(color, str):
            return False
        if not color.startswith("#"):
            return False
        if len(color) not in [4, 7]:  # #RGB or #RRGGBB
            return False
        try:
            int(color[1:], 16)
            return True
        except ValueError:
            return False
