"""
Error handling utilities and boundaries for skywidget.

Provides the exception hierarchy and a decorator for loop boundaries.
"""

import logging
from functools import wraps
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

# Type variable for generic function decoration
F = TypeVar("F", bound=Callable[..., Any])


def error_boundary(
    *,
    reraise: bool = False,
    default_return: Any = None,
    log_level: int = logging.ERROR,
) -> Callable[[F], F]:
    """
    Decorator to create consistent error boundaries around functions.

    Used where a failure must be logged but must not stop the caller,
    such as a scheduled refresh tick.

    Args:
        reraise: If True, re-raise the exception after logging
        default_return: Value to return if error occurs and not reraising
        log_level: Logging level for the error (default: ERROR)

    Returns:
        Decorated function with error handling

    Example:
        >>> @error_boundary(default_return=False)
        ... def refresh():
        ...     controller.run()
        ...     return True
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.log(
                    log_level,
                    f"Error in {func.__name__}: {e}",
                    exc_info=True,
                    extra={"function": func.__name__, "func_module": func.__module__},
                )

                if reraise:
                    raise

                return default_return

        return wrapper  # type: ignore

    return decorator


class SkyWidgetError(Exception):
    """Base exception for all skywidget errors."""

    pass


class ConfigurationError(SkyWidgetError):
    """Raised when there's an issue with configuration."""

    pass


class LocationUnavailable(SkyWidgetError):
    """Raised by location providers when no position can be determined."""

    pass


class WeatherFetchFailed(SkyWidgetError):
    """Raised when current conditions cannot be obtained."""

    pass


class NetworkError(WeatherFetchFailed):
    """Transport failure or non-success HTTP status."""

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class ParseError(WeatherFetchFailed):
    """Response body is not well-formed or lacks expected fields."""

    pass


class SurfaceError(SkyWidgetError):
    """Raised when a surface cannot be written."""

    pass
