"""
skywidget - A small weather widget fed by the key-less Open-Meteo API
"""

__version__ = "0.1.0"

from .controller import WidgetController

__all__ = ["WidgetController"]
