"""
Tests for WidgetController.
"""

import io
import threading
import time
from unittest.mock import Mock

import pytest

from skywidget.controller import (
    FAILED_MESSAGE,
    LOADING_MESSAGE,
    WidgetController,
    round_half_up,
)
from skywidget.location import StaticLocationProvider
from skywidget.models import (
    FALLBACK_COORDINATES,
    Coordinates,
    Failed,
    Loading,
    Ready,
    WidgetState,
)
from skywidget.surfaces import ConsoleSurface
from skywidget.utils.errors import LocationUnavailable, NetworkError, ParseError, SurfaceError
from skywidget.weather.codes import DEFAULT_GLYPH


@pytest.fixture
def surface():
    return ConsoleSurface(io.StringIO())


@pytest.fixture
def client(conditions):
    client = Mock()
    client.current.return_value = conditions
    return client


@pytest.fixture
def controller(surface, client):
    return WidgetController(surface, client=client, location_provider=None, auto_refresh=False)


class TestAcquireLocation:
    """Test location acquisition and fallback"""

    def test_no_provider_uses_fallback(self, controller):
        assert controller.acquire_location() == FALLBACK_COORDINATES

    def test_provider_coordinates(self, controller):
        controller.location_provider = StaticLocationProvider(40.7128, -74.006)
        assert controller.acquire_location() == Coordinates(40.7128, -74.006)

    def test_provider_failure_uses_fallback(self, controller):
        provider = Mock()
        provider.name = "ip"
        provider.locate.side_effect = LocationUnavailable("permission denied")
        controller.location_provider = provider
        assert controller.acquire_location() == FALLBACK_COORDINATES

    def test_unexpected_provider_error_uses_fallback(self, controller):
        provider = Mock()
        provider.name = "ip"
        provider.locate.side_effect = RuntimeError("boom")
        controller.location_provider = provider
        assert controller.acquire_location() == FALLBACK_COORDINATES

    def test_timeout_passed_to_provider(self, surface, client):
        provider = Mock()
        provider.locate.return_value = Coordinates(1.0, 2.0)
        controller = WidgetController(surface, client=client, location_provider=provider, location_timeout=5)
        controller.acquire_location()
        provider.locate.assert_called_once_with(5)

    def test_slow_provider_is_abandoned_at_deadline(self, surface, client):
        release = threading.Event()

        class HangingProvider:
            name = "hanging"

            def locate(self, timeout):
                release.wait(5)
                return Coordinates(1.0, 2.0)

        controller = WidgetController(
            surface, client=client, location_provider=HangingProvider(), location_timeout=0.1
        )
        started = time.monotonic()
        try:
            assert controller.acquire_location() == FALLBACK_COORDINATES
            assert time.monotonic() - started < 2
        finally:
            release.set()

    def test_custom_fallback(self, surface, client):
        fallback = Coordinates(51.5, -0.12)
        controller = WidgetController(surface, client=client, fallback=fallback)
        assert controller.acquire_location() == fallback


class TestRender:
    """Test state rendering"""

    def test_loading(self, controller, surface):
        controller.render(Loading())
        assert surface.content == f"{LOADING_MESSAGE}\n".encode("utf-8")
        assert controller.state == Loading()

    def test_failed(self, controller, surface):
        controller.render(Failed("HTTP 500"))
        assert surface.content == f"{FAILED_MESSAGE}\n".encode("utf-8")

    def test_failed_hides_reason(self, controller, surface):
        controller.render(Failed("HTTP 500 from https://api.open-meteo.com"))
        assert b"500" not in surface.content

    def test_ready(self, controller, surface, conditions):
        controller.render(Ready(conditions))
        lines = surface.content.decode("utf-8").splitlines()
        assert lines[0] == "⛅ 68°F"
        assert lines[1] == "Partly cloudy"
        assert lines[2] == "Wind 5.2 mph"
        assert lines[3].startswith("Updated ")

    def test_ready_idempotent(self, controller, surface, conditions):
        controller.render(Ready(conditions))
        first = surface.content
        controller.render(Ready(conditions))
        assert surface.content == first

    def test_observed_time_in_local_zone(self, controller, conditions):
        view = controller.view_for(Ready(conditions))
        expected = conditions.observed_at.astimezone().strftime("%H:%M")
        assert view.lines[3] == f"Updated {expected}"

    def test_unknown_code_default_glyph(self, controller, conditions):
        odd = conditions.__class__(
            temperature=-3.6,
            wind_speed=12.0,
            weather_code=42,
            observed_at=conditions.observed_at,
            temperature_unit="°C",
            wind_speed_unit="km/h",
        )
        view = controller.view_for(Ready(odd))
        assert view.lines[0] == f"{DEFAULT_GLYPH} -4°C"
        assert view.lines[2] == "Wind 12 km/h"

    def test_unknown_state_type(self, controller):
        with pytest.raises(TypeError):
            controller.view_for(WidgetState())

    def test_surface_error_is_logged(self, controller):
        controller.surface = Mock()
        controller.surface.show.side_effect = SurfaceError("disk full")
        controller.render(Failed("x"))
        assert controller.state == Failed("x")

    def test_map_weather_code(self):
        assert WidgetController.map_weather_code(2) == "⛅"
        assert WidgetController.map_weather_code(1234) == DEFAULT_GLYPH


class TestRoundHalfUp:
    """Temperature rounding"""

    @pytest.mark.parametrize(
        "value,expected",
        [(68.4, 68), (68.5, 69), (68.6, 69), (67.5, 68), (-0.4, 0), (-0.5, 0), (-1.5, -1), (-1.6, -2)],
    )
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestRun:
    """Test the full cycle"""

    def test_success(self, controller, client, conditions):
        state = controller.run()
        assert state == Ready(conditions)
        assert controller.state == state
        client.current.assert_called_once_with(FALLBACK_COORDINATES)

    @pytest.mark.parametrize("error", [NetworkError("HTTP 500", status=500), ParseError("bad json")])
    def test_fetch_failure(self, controller, client, surface, error):
        client.current.side_effect = error
        state = controller.run()
        assert isinstance(state, Failed)
        assert surface.content == f"{FAILED_MESSAGE}\n".encode("utf-8")

    def test_unexpected_error_is_failed(self, controller, client):
        client.current.side_effect = ValueError("surprise")
        assert isinstance(controller.run(), Failed)

    def test_location_failure_then_success(self, controller, client, conditions):
        provider = Mock()
        provider.name = "ip"
        provider.locate.side_effect = LocationUnavailable("timeout")
        controller.location_provider = provider
        assert controller.run() == Ready(conditions)
        client.current.assert_called_once_with(FALLBACK_COORDINATES)

    def test_unexpected_render_error_renders_failed(self, controller):
        shown = []

        def show(view):
            if view.state == "ready":
                raise ValueError("cannot draw")
            shown.append(view.state)

        controller.surface = Mock()
        controller.surface.show.side_effect = show
        state = controller.run()
        assert isinstance(state, Failed)
        assert controller.state == state
        assert shown == ["failed"]

    def test_render_error_on_failed_state_does_not_raise(self, controller, client):
        client.current.side_effect = NetworkError("HTTP 500", status=500)
        controller.surface = Mock()
        controller.surface.show.side_effect = RuntimeError("broken surface")
        state = controller.run()
        assert isinstance(state, Failed)
        assert controller.state == state


class TestLifecycle:
    """Test start/stop hooks"""

    def test_start_renders_loading_then_runs(self, surface, client):
        controller = WidgetController(surface, client=client, auto_refresh=False)
        rendered = []
        original = controller.render

        def record(state):
            rendered.append(state)
            original(state)

        controller.render = record
        controller.start()
        assert isinstance(rendered[0], Loading)
        assert isinstance(rendered[1], Ready)
        assert controller.running is True
        assert controller.scheduler.running is False
        controller.stop()

    def test_start_twice(self, controller, client):
        controller.start()
        controller.start()
        assert client.current.call_count == 1
        controller.stop()

    def test_start_with_refresh_starts_scheduler(self, surface, client):
        controller = WidgetController(surface, client=client, auto_refresh=True, refresh_interval=3600)
        controller.start()
        try:
            assert controller.scheduler.running is True
        finally:
            controller.stop()
        assert controller.scheduler.running is False
        assert controller.running is False

    def test_stop_without_start(self, controller):
        controller.stop()
        assert controller.running is False

    def test_stop_twice_closes_surface_once(self, client):
        surface = Mock()
        controller = WidgetController(surface, client=client, auto_refresh=False)
        controller.start()
        controller.stop()
        controller.stop()
        surface.close.assert_called_once()

    def test_refresh_reruns_cycle(self, surface, client):
        controller = WidgetController(surface, client=client, auto_refresh=True, refresh_interval=0.05)
        controller.start()
        try:
            controller.wait(0.3)
        finally:
            controller.stop()
        assert client.current.call_count >= 2


class TestFromConfig:
    """Test construction from configuration"""

    def test_builds_components(self, sample_config):
        surface = ConsoleSurface(io.StringIO())
        controller = WidgetController.from_config(sample_config, surface=surface)
        assert controller.surface is surface
        assert isinstance(controller.location_provider, StaticLocationProvider)
        assert controller.location_timeout == 5.0
        assert controller.auto_refresh is True
        assert controller.scheduler.interval == 900.0
        assert controller.client.temperature_unit == "fahrenheit"

    def test_fallback_from_config(self):
        controller = WidgetController.from_config(
            {"location": {"provider": "none", "fallback": {"latitude": 51.5, "longitude": -0.12}}},
            surface=ConsoleSurface(io.StringIO()),
        )
        assert controller.location_provider is None
        assert controller.acquire_location() == Coordinates(51.5, -0.12)

    def test_defaults(self):
        controller = WidgetController.from_config({})
        assert isinstance(controller.surface, ConsoleSurface)
        assert controller.fallback == FALLBACK_COORDINATES
        assert controller.scheduler.interval == 900.0
