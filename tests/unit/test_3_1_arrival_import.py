"""
Unit tests for arrival CSV import (Subtask 3.1).

Tests cover:
- Clock parsing
- Import from bytes, paths and uploaded files
- Row validation and error codes
- Size limits and skipping of invalid rows
"""

import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from src.ingestion import (
    ArrivalImporter,
    ArrivalImportConfig,
    IngestionError,
    IngestionStatus,
    parse_clock,
)
from src.timetable.models import ArrivalSample, Station


class TestParseClock:
    """Test suite for parse_clock()."""

    @pytest.mark.parametrize("clock,minutes", [
        ("7:00", 0),
        ("7:05", 5),
        ("8:05", 65),
        ("10:00", 180),
        ("07:30", 30),
        ("6:59", -1),
    ])
    def test_valid_times(self, clock, minutes):
        assert parse_clock(clock) == minutes

    @pytest.mark.parametrize("clock", ["7", "7:60", "a:bc", "7:00:00", "", "-1:00", "7:²0"])
    def test_invalid_times(self, clock):
        with pytest.raises(ValueError):
            parse_clock(clock)


class TestArrivalImport:
    """Test suite for ArrivalImporter."""

    @pytest.mark.asyncio
    async def test_import_from_bytes(self, sample_csv, sample_arrivals):
        importer = ArrivalImporter()
        model = await importer.ingest(sample_csv)

        assert model.samples == sample_arrivals.samples
        assert model.total_arrivals == 185
        assert importer.result.status == IngestionStatus.COMPLETED
        assert importer.result.processed_records == 8

    @pytest.mark.asyncio
    async def test_import_from_path(self, tmp_path, sample_csv):
        path = tmp_path / "arrivals.csv"
        path.write_bytes(sample_csv)

        model = await ArrivalImporter().ingest(path)
        assert len(model) == 8

    @pytest.mark.asyncio
    async def test_import_from_upload(self, sample_csv):
        upload = UploadFile(file=io.BytesIO(sample_csv), filename="arrivals.csv")

        model = await ArrivalImporter().ingest(upload)
        assert model.cumulative(Station.A, 5) == 55

    @pytest.mark.asyncio
    async def test_import_from_request_upload(self, sample_csv):
        """Routes hand over the starlette base class, not fastapi.UploadFile."""
        upload = StarletteUploadFile(file=io.BytesIO(sample_csv), filename="arrivals.csv")

        model = await ArrivalImporter().ingest(upload)
        assert model.total_arrivals == 185

    @pytest.mark.asyncio
    async def test_whitespace_is_tolerated(self):
        model = await ArrivalImporter().ingest(b"B, 7:15, 4\n\nC,7:20,6\n")
        assert model.samples == (
            ArrivalSample(Station.B, 15, 4),
            ArrivalSample(Station.C, 20, 6),
        )

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(IngestionError) as exc_info:
            await ArrivalImporter().ingest(tmp_path / "missing.csv")
        assert exc_info.value.error_code == "FILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_unsupported_file_type(self, sample_csv):
        upload = UploadFile(file=io.BytesIO(sample_csv), filename="arrivals.xlsx")
        with pytest.raises(IngestionError) as exc_info:
            await ArrivalImporter().ingest(upload)
        assert exc_info.value.error_code == "UNSUPPORTED_FILE_TYPE"

    @pytest.mark.asyncio
    async def test_file_too_large(self, sample_csv):
        importer = ArrivalImporter(ArrivalImportConfig(max_file_size_mb=0))
        with pytest.raises(IngestionError) as exc_info:
            await importer.ingest(sample_csv)

        assert exc_info.value.error_code == "FILE_TOO_LARGE"
        assert importer.result.status == IngestionStatus.FAILED
        assert importer.result.to_dict()["statistics"]["failed"] == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content,error_code", [
        (b"", "EMPTY_FILE"),
        (b"\n\n", "EMPTY_FILE"),
        (b"A,7:00\n", "MALFORMED_ROW"),
        (b"A,7:00,3\nB,7:01\n", "MALFORMED_ROW"),
        (b"A,7:00,3\nB,7:01,4,9\n", "MALFORMED_ROW"),
        (b"X,7:00,3\n", "UNKNOWN_STATION"),
        (b"U,7:00,3\n", "UNKNOWN_STATION"),
        (b"A,seven,3\n", "INVALID_TIME"),
        (b"A,7:75,3\n", "INVALID_TIME"),
        (b"A,7:00,-3\n", "INVALID_COUNT"),
        (b"A,7:00,2.5\n", "INVALID_COUNT"),
        ("A,7:00,²\n".encode(), "INVALID_COUNT"),
        ("A,7:²0,3\n".encode(), "INVALID_TIME"),
    ])
    async def test_invalid_content(self, content, error_code):
        with pytest.raises(IngestionError) as exc_info:
            await ArrivalImporter().ingest(content)
        assert exc_info.value.error_code == error_code

    @pytest.mark.asyncio
    async def test_error_reports_row_number(self):
        with pytest.raises(IngestionError) as exc_info:
            await ArrivalImporter().ingest(b"A,7:00,3\nQ,7:01,4\n")
        assert exc_info.value.details["row"] == 2

    @pytest.mark.asyncio
    async def test_skip_invalid_rows(self):
        importer = ArrivalImporter(ArrivalImportConfig(skip_invalid_rows=True))
        model = await importer.ingest(b"A,7:00,3\nQ,7:01,4\nB,7:02,5\n")

        assert model.total_arrivals == 8
        assert importer.result.skipped_records == 1
        assert importer.result.warnings[0].startswith("Row 2:")

    @pytest.mark.asyncio
    async def test_result_summary(self, sample_csv):
        importer = ArrivalImporter(source="arrivals.csv")
        await importer.ingest(sample_csv)

        summary = importer.result.to_dict()
        assert summary["status"] == "completed"
        assert summary["source"] == "arrivals.csv"
        assert summary["statistics"]["processed"] == 8
        assert summary["errors"] == []
