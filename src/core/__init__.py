"""
Core functionality for the Departure Timetable Optimizer.

This package contains configuration and shared components used
throughout the application.
"""

from src.core.config import settings

__all__ = [
    "settings",
]
