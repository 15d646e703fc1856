"""
Ingestion package for the Departure Timetable Optimizer.

This package handles the import of passenger arrival counts from CSV files
and uploads.
"""

from src.ingestion.base import (
    BaseIngestionHandler,
    IngestionResult,
    IngestionError,
    IngestionStatus
)

from src.ingestion.batch import ArrivalImporter, ArrivalImportConfig, parse_clock

__all__ = [
    # Base classes
    "BaseIngestionHandler",
    "IngestionResult",
    "IngestionError",
    "IngestionStatus",

    # Handlers
    "ArrivalImporter",
    "ArrivalImportConfig",
    "parse_clock",
]
