"""
Managers for lifecycle concerns of the widget.

- RefreshScheduler: periodic re-run with explicit start/stop
"""

from .refresh import RefreshScheduler

__all__ = ["RefreshScheduler"]
