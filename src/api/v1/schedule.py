"""
API routes for timetable optimization.

Both endpoints take the arrival CSV as the multipart field ``input``, run
the optimizer and return the best schedule found.
"""

from typing import List

import logfire
from fastapi import APIRouter, File, HTTPException, UploadFile, status
from fastapi.responses import PlainTextResponse

from src.api.schemas import ScheduleEntryResponse, to_response
from src.core.config import settings
from src.ingestion.base import IngestionError
from src.ingestion.batch import ArrivalImporter, ArrivalImportConfig
from src.timetable.arrivals import ArrivalModel
from src.timetable.export import schedule_to_csv
from src.timetable.models import ScheduleEntry
from src.timetable.optimizer import optimize_schedule

router = APIRouter()


async def _import_arrivals(upload: UploadFile) -> ArrivalModel:
    importer = ArrivalImporter(
        ArrivalImportConfig(max_file_size_mb=settings.max_upload_size_mb),
        source=upload.filename or "upload"
    )
    try:
        return await importer.ingest(upload)
    except IngestionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


async def _optimize(upload: UploadFile) -> List[ScheduleEntry]:
    arrivals = await _import_arrivals(upload)
    schedule = await optimize_schedule(arrivals)
    logfire.info("Schedule published", trains=len(schedule), passengers=arrivals.total_arrivals)
    return schedule


@router.post("", response_model=List[ScheduleEntryResponse])
async def create_schedule(upload: UploadFile = File(..., alias="input", description="Arrival CSV")):
    """
    Optimize a departure timetable for the uploaded arrivals.

    Returns one entry per train with per-station arrival times,
    free capacity and boarding counts.
    """
    return to_response(await _optimize(upload))


@router.post("/csv", response_class=PlainTextResponse)
async def create_schedule_csv(upload: UploadFile = File(..., alias="input", description="Arrival CSV")):
    """Same as the JSON endpoint, rendered as a CSV file."""
    schedule = await _optimize(upload)
    return PlainTextResponse(
        schedule_to_csv(schedule),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="schedule.csv"'}
    )
