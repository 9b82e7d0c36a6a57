"""
Minimal JSON-over-HTTP helper shared by the weather client and location providers.
"""

import json
import logging
import socket
import urllib.error
import urllib.parse
from typing import Any, Dict, Optional
from urllib.request import Request, urlopen

from .. import __version__
from .errors import NetworkError, ParseError

logger = logging.getLogger(__name__)

USER_AGENT = f"skywidget/{__version__}"


def build_url(base_url: str, params: Optional[Dict[str, Any]] = None) -> str:
    """Append URL-encoded query parameters to a base URL."""
    if not params:
        return base_url
    query = urllib.parse.urlencode(
        {key: _format_param(value) for key, value in params.items()}
    )
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{query}"


def get_json(
    base_url: str, params: Optional[Dict[str, Any]] = None, timeout: float = 10.0
) -> Any:
    """
    Issue a GET request and decode the JSON body.

    Args:
        base_url: Endpoint URL without query string
        params: Query parameters (booleans become "true"/"false")
        timeout: Socket timeout in seconds

    Returns:
        Decoded JSON document

    Raises:
        NetworkError: Transport failure, timeout or non-2xx status
        ParseError: Body is not valid UTF-8 JSON
    """
    url = build_url(base_url, params)
    request = Request(url, headers={"User-Agent": USER_AGENT, "Accept": "application/json"})
    logger.debug(f"GET {url}")

    try:
        with urlopen(request, timeout=timeout) as response:
            status = getattr(response, "status", 200)
            if not 200 <= status < 300:
                raise NetworkError(f"HTTP {status} from {base_url}", status=status)
            body = response.read()
    except urllib.error.HTTPError as e:
        raise NetworkError(f"HTTP {e.code} from {base_url}: {e.reason}", status=e.code) from e
    except urllib.error.URLError as e:
        raise NetworkError(f"Connection error for {base_url}: {e.reason}") from e
    except (socket.timeout, TimeoutError) as e:
        raise NetworkError(f"Request to {base_url} timed out after {timeout}s") from e
    except OSError as e:
        raise NetworkError(f"Request to {base_url} failed: {e}") from e

    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParseError(f"Invalid JSON response from {base_url}: {e}") from e


def _format_param(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
