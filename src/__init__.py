"""
Departure Timetable Optimizer - Source Package

This package contains all the core components of the optimizer including
the timetable domain model, the Darwin genetic algorithm framework, arrival
ingestion and the HTTP API.
"""

__version__ = "1.0.0"

# Package-level imports for convenience
from src.core.config import settings

__all__ = [
    "settings",
    "__version__",
]
