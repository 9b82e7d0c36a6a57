"""
Main controller for the weather widget.
"""

import concurrent.futures
import logging
import math
import threading
from typing import Any, Dict, Optional

from .location import LocationProvider, build_location_provider
from .managers import RefreshScheduler
from .models import (
    FALLBACK_COORDINATES,
    Coordinates,
    CurrentConditions,
    Failed,
    Loading,
    Ready,
    WidgetState,
    WidgetView,
)
from .surfaces import Surface, build_surface
from .utils.errors import LocationUnavailable, SurfaceError, WeatherFetchFailed
from .weather import OpenMeteoClient, describe_weather_code, map_weather_code

logger = logging.getLogger(__name__)

LOADING_MESSAGE = "Loading weather…"
FAILED_MESSAGE = "Weather unavailable"


class WidgetController:
    """
    Orchestrates location lookup, weather fetch, rendering and refresh.

    One cycle (run) is: acquire_location -> fetch_conditions -> render.
    Every failure ends in a rendered state; nothing in a cycle raises.
    """

    LOCATION_TIMEOUT = 5.0

    def __init__(
        self,
        surface: Surface,
        client: Optional[OpenMeteoClient] = None,
        location_provider: Optional[LocationProvider] = None,
        fallback: Coordinates = FALLBACK_COORDINATES,
        location_timeout: float = LOCATION_TIMEOUT,
        auto_refresh: bool = True,
        refresh_interval: float = RefreshScheduler.DEFAULT_INTERVAL,
    ) -> None:
        """
        Initialize the controller.

        Args:
            surface: Surface whose contents are replaced on every render
            client: Weather API client (default: Open-Meteo with US units)
            location_provider: Position source, or None when unsupported
            fallback: Coordinates used whenever the provider fails
            location_timeout: Seconds allowed for the location lookup
            auto_refresh: Re-run on a timer after start()
            refresh_interval: Seconds between refresh cycles
        """
        self.surface = surface
        self.client = client or OpenMeteoClient()
        self.location_provider = location_provider
        self.fallback = fallback
        self.location_timeout = location_timeout
        self.auto_refresh = auto_refresh

        self.scheduler = RefreshScheduler(self.run, refresh_interval)
        self._state: Optional[WidgetState] = None
        self._started = False
        self._lifecycle_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Dict[str, Any], surface: Optional[Surface] = None) -> "WidgetController":
        """
        Build a controller from a loaded configuration dictionary.

        Raises:
            ConfigurationError: If a section names an unknown type
        """
        location_config = config.get("location", {})
        fallback_config = location_config.get("fallback") or {}
        fallback = Coordinates(
            float(fallback_config.get("latitude", FALLBACK_COORDINATES.latitude)),
            float(fallback_config.get("longitude", FALLBACK_COORDINATES.longitude)),
        )
        refresh_config = config.get("refresh", {})

        return cls(
            surface=surface or build_surface(config.get("surface", {})),
            client=OpenMeteoClient.from_config(config.get("weather", {})),
            location_provider=build_location_provider(location_config),
            fallback=fallback,
            location_timeout=float(location_config.get("timeout", cls.LOCATION_TIMEOUT)),
            auto_refresh=bool(refresh_config.get("enabled", True)),
            refresh_interval=float(refresh_config.get("interval", RefreshScheduler.DEFAULT_INTERVAL)),
        )

    @property
    def state(self) -> Optional[WidgetState]:
        """Last rendered state, or None before the first render."""
        return self._state

    @property
    def running(self) -> bool:
        """True between start() and stop()."""
        return self._started

    # Cycle steps ---------------------------------------------------------

    def acquire_location(self) -> Coordinates:
        """
        Determine where to fetch weather for.

        Returns:
            Provider coordinates, or the fallback when no provider is
            configured or the lookup fails for any reason
        """
        if self.location_provider is None:
            logger.debug(f"No location provider, using fallback {self.fallback}")
            return self.fallback

        try:
            coordinates = self._locate_with_deadline()
        except concurrent.futures.TimeoutError:
            logger.warning(
                f"Location lookup exceeded {self.location_timeout}s, using fallback {self.fallback}"
            )
            return self.fallback
        except LocationUnavailable as e:
            logger.warning(f"Location unavailable ({e}), using fallback {self.fallback}")
            return self.fallback
        except Exception as e:
            logger.error(f"Unexpected error from {self.location_provider.name} location provider: {e}", exc_info=True)
            return self.fallback

        logger.info(f"Location from {self.location_provider.name}: {coordinates}")
        return coordinates

    def _locate_with_deadline(self) -> Coordinates:
        """
        Call the provider on a daemon thread, waiting at most location_timeout.

        A provider that overruns is abandoned; its eventual result is dropped.

        Raises:
            concurrent.futures.TimeoutError: If the deadline passes first
        """
        future: concurrent.futures.Future = concurrent.futures.Future()
        provider = self.location_provider
        timeout = self.location_timeout

        def lookup():
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(provider.locate(timeout))
            except BaseException as e:
                future.set_exception(e)

        threading.Thread(target=lookup, name="LocationLookup", daemon=True).start()
        return future.result(timeout=timeout)

    def fetch_conditions(self, coordinates: Coordinates) -> CurrentConditions:
        """
        Fetch current conditions for a location.

        Raises:
            NetworkError: Transport failure or non-success HTTP status
            ParseError: Malformed or incomplete response body
        """
        return self.client.current(coordinates)

    @staticmethod
    def map_weather_code(code: int) -> str:
        """Display glyph for a weather code; unknown codes get the default glyph."""
        return map_weather_code(code)

    def render(self, state: WidgetState) -> None:
        """
        Replace the surface contents with a rendering of ``state``.

        Rendering the same state twice writes identical output.
        """
        view = self.view_for(state)
        try:
            self.surface.show(view)
        except SurfaceError as e:
            logger.error(f"Render failed: {e}")
        self._state = state

    def view_for(self, state: WidgetState) -> WidgetView:
        """Convert a widget state into the text lines a surface draws."""
        if isinstance(state, Ready):
            return WidgetView("ready", self._ready_lines(state.conditions))
        if isinstance(state, Failed):
            return WidgetView("failed", (FAILED_MESSAGE,))
        if isinstance(state, Loading):
            return WidgetView("loading", (LOADING_MESSAGE,))
        raise TypeError(f"Unknown widget state: {state!r}")

    def _ready_lines(self, conditions: CurrentConditions) -> tuple:
        glyph = self.map_weather_code(conditions.weather_code)
        temperature = round_half_up(conditions.temperature)
        observed = conditions.observed_at.astimezone().strftime("%H:%M")
        return (
            f"{glyph} {temperature}{conditions.temperature_unit}",
            describe_weather_code(conditions.weather_code),
            f"Wind {conditions.wind_speed:g} {conditions.wind_speed_unit}",
            f"Updated {observed}",
        )

    def run(self) -> WidgetState:
        """
        Run one full cycle and render its outcome.

        Returns:
            The state that was rendered (Ready or Failed)
        """
        coordinates = self.acquire_location()

        try:
            conditions = self.fetch_conditions(coordinates)
        except WeatherFetchFailed as e:
            logger.error(f"Weather fetch failed: {e}")
            state = Failed(str(e))
        except Exception as e:
            logger.error(f"Unexpected error fetching weather: {e}", exc_info=True)
            state = Failed(str(e))
        else:
            logger.info(
                f"Weather at {coordinates}: {conditions.temperature}{conditions.temperature_unit}, "
                f"code {conditions.weather_code}"
            )
            state = Ready(conditions)

        try:
            self.render(state)
        except Exception as e:
            if isinstance(state, Failed):
                logger.error(f"Unexpected error rendering failure state: {e}", exc_info=True)
                self._state = state
                return state
            logger.error(f"Unexpected error rendering weather: {e}", exc_info=True)
            state = Failed(str(e))
            try:
                self.render(state)
            except Exception as e2:
                logger.error(f"Unexpected error rendering failure state: {e2}", exc_info=True)
                self._state = state
        return state

    # Lifecycle -----------------------------------------------------------

    def start(self) -> None:
        """
        Show the loading state, run the first cycle and start auto-refresh.

        Calling start() on a running controller does nothing.
        """
        with self._lifecycle_lock:
            if self._started:
                logger.warning("Widget controller already started")
                return
            self._started = True

        self.render(Loading())
        self.run()

        if self.auto_refresh:
            self.scheduler.start()
            logger.info(f"Auto-refresh every {self.scheduler.interval:.0f}s")

    def stop(self) -> None:
        """Stop auto-refresh and release the surface. Safe to call repeatedly."""
        with self._lifecycle_lock:
            if not self._started:
                return
            self._started = False

        self.scheduler.stop()
        self.surface.close()
        logger.info("Widget controller stopped")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the refresh scheduler is stopped; returns True if it was."""
        return self.scheduler.wait(timeout)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (68.5 -> 69, -0.5 -> 0)."""
    return int(math.floor(value + 0.5))
