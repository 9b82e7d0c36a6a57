"""
Pytest configuration and fixtures
"""

import io
import json
import urllib.error
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import yaml

from skywidget.models import CurrentConditions


@pytest.fixture
def sample_config():
    """Sample configuration for testing"""
    return {
        "location": {
            "provider": "static",
            "latitude": 40.7128,
            "longitude": -74.006,
            "timeout": 5,
        },
        "weather": {
            "temperature_unit": "fahrenheit",
            "windspeed_unit": "mph",
        },
        "refresh": {
            "enabled": True,
            "interval": 900,
        },
        "surface": {
            "type": "console",
        },
    }


@pytest.fixture
def config_file(tmp_path, sample_config):
    """Create a temporary config file"""
    config_path = tmp_path / "test_config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture
def weather_payload():
    """A well-formed Open-Meteo current_weather response"""
    return {
        "latitude": 47.6,
        "longitude": -122.33,
        "current_weather": {
            "time": "2024-01-15T14:30",
            "temperature": 68.4,
            "windspeed": 5.2,
            "winddirection": 180,
            "weathercode": 2,
        },
    }


@pytest.fixture
def conditions():
    """CurrentConditions matching weather_payload"""
    return CurrentConditions(
        temperature=68.4,
        wind_speed=5.2,
        weather_code=2,
        observed_at=datetime(2024, 1, 15, 14, 30, tzinfo=timezone.utc),
    )


def _make_response(body, status=200):
    if not isinstance(body, (bytes, str)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    response = MagicMock()
    response.status = status
    response.read.return_value = body
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


def _make_http_error(url, code, reason="Error"):
    return urllib.error.HTTPError(url, code, reason, hdrs=None, fp=io.BytesIO(b""))


@pytest.fixture
def mock_urlopen(no_network):
    """Patch the HTTP opener used by all network calls"""
    with patch("skywidget.utils.http.urlopen") as opener:
        yield opener


@pytest.fixture(autouse=True)
def no_network(monkeypatch):
    """Fail loudly if a test reaches the real network"""

    def refuse(*args, **kwargs):
        raise urllib.error.URLError("network disabled in tests")

    monkeypatch.setattr("skywidget.utils.http.urlopen", refuse)


@pytest.fixture
def make_response():
    """Factory for mock urlopen() results usable as a context manager"""
    return _make_response


@pytest.fixture
def make_http_error():
    """Factory for HTTPError as raised by urlopen() for non-2xx statuses"""
    return _make_http_error
