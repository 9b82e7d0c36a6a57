"""
Configuration loading and validation
"""

from .loader import DEFAULT_CONFIG, ConfigLoader
from .validator import ConfigValidator

__all__ = ["ConfigLoader", "ConfigValidator", "DEFAULT_CONFIG"]
