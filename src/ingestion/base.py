"""
Base classes and interfaces for the ingestion system.

An ingestion handler reads raw rows from one source, validates and converts
them, and keeps an ``IngestionResult`` describing how the import went.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Any, Optional
from enum import Enum
from dataclasses import dataclass, field

# Errors and warnings reported by IngestionResult.to_dict()
MAX_REPORTED_ISSUES = 10


class IngestionStatus(str, Enum):
    """Status of an ingestion operation."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class IngestionError(Exception):
    """
    Raised when input cannot be imported.

    ``error_code`` is a stable machine-readable reason such as
    ``MALFORMED_ROW``; ``details`` carries context like the row number.
    """

    def __init__(self, message: str, source: Optional[str] = None,
                 error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.source = source
        self.error_code = error_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": str(self),
            "error_code": self.error_code,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class IngestionResult:
    """Progress and outcome of one import."""

    status: IngestionStatus
    source: str
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None

    total_records: int = 0
    processed_records: int = 0
    skipped_records: int = 0

    errors: List[IngestionError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, error: IngestionError) -> None:
        self.errors.append(error)

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def complete(self) -> None:
        """Close the import; any recorded error marks it failed."""
        self.completed_at = datetime.now(timezone.utc)
        self.status = IngestionStatus.FAILED if self.errors else IngestionStatus.COMPLETED

    @property
    def duration(self) -> Optional[float]:
        """Seconds between start and completion."""
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        """Summary for logs and API responses."""
        return {
            "status": self.status.value,
            "source": self.source,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration": self.duration,
            "statistics": {
                "total": self.total_records,
                "processed": self.processed_records,
                "skipped": self.skipped_records,
                "failed": len(self.errors),
            },
            "errors": [e.to_dict() for e in self.errors[:MAX_REPORTED_ISSUES]],
            "warnings": self.warnings[:MAX_REPORTED_ISSUES],
        }


class BaseIngestionHandler(ABC):
    """
    Abstract base class for ingestion handlers.

    Subclasses implement ``ingest`` plus the per-record ``validate_data``
    and ``transform_data`` steps, and update ``self.result`` as they go.
    """

    def __init__(self, source: str):
        self.source = source
        self.result = IngestionResult(status=IngestionStatus.PENDING, source=source)

    @abstractmethod
    async def ingest(self, *args, **kwargs) -> Any:
        """Run the import."""
        pass

    @abstractmethod
    def validate_data(self, data: List[str]) -> Optional[IngestionError]:
        """
        Validate one raw record.

        Args:
            data: Raw record fields

        Returns:
            None if valid, otherwise the error describing why it is not
        """
        pass

    @abstractmethod
    def transform_data(self, data: List[str]) -> Any:
        """Convert a validated raw record to its domain object."""
        pass
