"""
Pydantic schemas for schedule API responses.

Field names on the wire follow the published schedule format
(``TrainNum``, ``AArrivalTime``, ...); arrival times are ``H:MM`` wall-clock
strings counted from 07:00.
"""

from typing import List

from pydantic import BaseModel, Field, ConfigDict

from src.timetable.export import entry_to_clock_dict
from src.timetable.models import ScheduleEntry


class ScheduleEntryResponse(BaseModel):
    """One train of the published schedule."""

    model_config = ConfigDict(populate_by_name=True)

    train_num: int = Field(..., serialization_alias="TrainNum", description="1-based train number")
    train_type: str = Field(..., serialization_alias="TrainType", description="L4 (small) or L8 (large)")
    a_arrival_time: str = Field(..., serialization_alias="AArrivalTime")
    a_avail_cap: int = Field(..., ge=0, serialization_alias="AAvailCap")
    a_boarding: int = Field(..., ge=0, serialization_alias="ABoarding")
    b_arrival_time: str = Field(..., serialization_alias="BArrivalTime")
    b_avail_cap: int = Field(..., ge=0, serialization_alias="BAvailCap")
    b_boarding: int = Field(..., ge=0, serialization_alias="BBoarding")
    c_arrival_time: str = Field(..., serialization_alias="CArrivalTime")
    c_avail_cap: int = Field(..., ge=0, serialization_alias="CAvailCap")
    c_boarding: int = Field(..., ge=0, serialization_alias="CBoarding")
    u_arrival_time: str = Field(..., serialization_alias="UArrivalTime")
    u_avail_cap: int = Field(..., ge=0, serialization_alias="UAvailCap")
    u_offloading: int = Field(..., ge=0, serialization_alias="UOffloading")

    @classmethod
    def from_entry(cls, entry: ScheduleEntry) -> "ScheduleEntryResponse":
        return cls(**entry_to_clock_dict(entry))


def to_response(entries: List[ScheduleEntry]) -> List[ScheduleEntryResponse]:
    return [ScheduleEntryResponse.from_entry(e) for e in entries]
