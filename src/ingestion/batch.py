"""
Batch import of passenger arrival counts.

Arrival files are headerless CSV with one row per station and minute:

    A,7:05,12
    B,7:05,3

i.e. station code, wall-clock time (``H:MM``) and the number of passengers
arriving at that station during that minute.
"""

import io
from pathlib import Path
from typing import List, Optional, Union
from dataclasses import dataclass

import aiofiles
import chardet
import logfire
import pandas as pd
# Routes receive this base class; fastapi.UploadFile subclasses it
from starlette.datastructures import UploadFile

from src.ingestion.base import BaseIngestionHandler, IngestionError, IngestionStatus
from src.timetable.arrivals import ArrivalModel
from src.timetable.models import ArrivalSample, Station, BOARDING_STATIONS, REFERENCE_HOUR

SUPPORTED_EXTENSIONS = {"", ".csv", ".txt"}


@dataclass
class ArrivalImportConfig:
    """Configuration for arrival import operations."""

    max_file_size_mb: int = 10
    encoding: Optional[str] = None
    delimiter: str = ","

    # Skip bad rows with a warning instead of failing the import
    skip_invalid_rows: bool = False


class ArrivalImporter(BaseIngestionHandler):
    """
    Parses arrival CSV data into an ArrivalModel.

    Accepts raw bytes, a file path or an uploaded file. Rows are validated
    one by one; by default the first bad row aborts the import.
    """

    def __init__(self, config: Optional[ArrivalImportConfig] = None, source: str = "csv"):
        super().__init__(source)
        self.config = config or ArrivalImportConfig()

    async def ingest(self, file: Union[UploadFile, Path, str, bytes]) -> ArrivalModel:
        """
        Import arrivals from a file.

        Args:
            file: Uploaded file, path, or raw file content

        Returns:
            ArrivalModel holding every imported sample
        """
        self.result.status = IngestionStatus.IN_PROGRESS

        with logfire.span("Arrival import", source=self.source):
            try:
                content = await self._read_content(file)
                samples = self.parse(content)
                self.result.complete()

                logfire.info(
                    "Arrival import completed",
                    source=self.source,
                    imported=self.result.processed_records,
                    skipped=self.result.skipped_records
                )
                return ArrivalModel(samples)

            except IngestionError as e:
                logfire.error(
                    "Arrival import failed",
                    source=self.source,
                    error=str(e),
                    error_code=e.error_code
                )
                self.result.status = IngestionStatus.FAILED
                self.result.add_error(e)
                raise

    def parse(self, content: bytes) -> List[ArrivalSample]:
        """Parse raw CSV content into arrival samples."""
        if not content.strip():
            raise IngestionError("Arrival file is empty", source=self.source, error_code="EMPTY_FILE")

        text = content.decode(self._detect_encoding(content))
        try:
            frame = pd.read_csv(
                io.StringIO(text),
                header=None,
                dtype=str,
                sep=self.config.delimiter,
                skipinitialspace=True,
                keep_default_na=False,
                skip_blank_lines=True,
            ).fillna("")
        except pd.errors.ParserError as e:
            raise IngestionError(
                f"Could not parse arrival file: {e}",
                source=self.source,
                error_code="MALFORMED_ROW"
            ) from e
        self.result.total_records = len(frame)

        samples = []
        for row_num, row in enumerate(frame.itertuples(index=False, name=None), start=1):
            fields = [str(v).strip() for v in row]
            error = self.validate_data(fields)
            if error is not None:
                if self.config.skip_invalid_rows:
                    self.result.skipped_records += 1
                    self.result.add_warning(f"Row {row_num}: {error.args[0]}")
                    continue
                error.details["row"] = row_num
                raise error

            samples.append(self.transform_data(fields))
            self.result.processed_records += 1

        return samples

    def validate_data(self, data: List[str]) -> Optional[IngestionError]:
        """Check one row; returns the error describing the first problem found."""
        fields = [f for f in data if f != ""]
        if len(fields) != 3:
            return IngestionError(
                f"Expected 3 fields (station, time, count), got {len(fields)}",
                source=self.source, error_code="MALFORMED_ROW", details={"fields": data}
            )

        station, clock, count = fields
        if station not in {s.name for s in BOARDING_STATIONS}:
            return IngestionError(
                f"Unknown station: {station!r}",
                source=self.source, error_code="UNKNOWN_STATION"
            )

        try:
            parse_clock(clock)
        except ValueError as e:
            return IngestionError(str(e), source=self.source, error_code="INVALID_TIME")

        if not count.isdecimal():
            return IngestionError(
                f"Invalid passenger count: {count!r}",
                source=self.source, error_code="INVALID_COUNT"
            )

        return None

    def transform_data(self, data: List[str]) -> ArrivalSample:
        """Convert a validated row to an ArrivalSample."""
        station, clock, count = [f for f in data if f != ""]
        return ArrivalSample(
            station=Station[station],
            minutes=parse_clock(clock),
            arrivals=int(count)
        )

    async def _read_content(self, file: Union[UploadFile, Path, str, bytes]) -> bytes:
        """Read the whole file, enforcing the type and size limits."""
        if isinstance(file, bytes):
            content = file
        elif isinstance(file, UploadFile):
            self._check_file_type(file.filename)
            await file.seek(0)
            content = await file.read()
        else:
            file_path = Path(file)
            self._check_file_type(file_path.name)
            if not file_path.exists():
                raise IngestionError(
                    f"File not found: {file_path}",
                    source=self.source,
                    error_code="FILE_NOT_FOUND"
                )
            async with aiofiles.open(file_path, mode='rb') as f:
                content = await f.read()

        size_mb = len(content) / (1024 * 1024)
        if size_mb > self.config.max_file_size_mb:
            raise IngestionError(
                f"File size {size_mb:.1f}MB exceeds maximum {self.config.max_file_size_mb}MB",
                source=self.source,
                error_code="FILE_TOO_LARGE"
            )

        return content

    def _check_file_type(self, filename: Optional[str]) -> None:
        suffix = Path(filename).suffix.lower() if filename else ""
        if suffix not in SUPPORTED_EXTENSIONS:
            raise IngestionError(
                f"Unsupported file type: {suffix}",
                source=self.source,
                error_code="UNSUPPORTED_FILE_TYPE"
            )

    def _detect_encoding(self, content: bytes) -> str:
        if self.config.encoding:
            return self.config.encoding
        detected = chardet.detect(content[:10000])
        return detected['encoding'] or 'utf-8'


def parse_clock(clock: str) -> int:
    """``H:MM`` wall-clock time to minutes from the reference start."""
    parts = clock.split(":")
    if len(parts) != 2 or not all(p.isdecimal() for p in parts):
        raise ValueError(f"Invalid time: {clock!r}, expected H:MM")
    hour, mins = int(parts[0]), int(parts[1])
    if mins >= 60:
        raise ValueError(f"Invalid time: {clock!r}, minutes must be below 60")
    return (hour - REFERENCE_HOUR) * 60 + mins
