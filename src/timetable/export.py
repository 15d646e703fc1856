"""
Schedule serialization.

Renders simulated schedules as wall-clock rows for JSON responses and CSV
files. Times are shown as ``H:MM`` counted from the 07:00 reference start.
"""

import csv
import io
from pathlib import Path
from typing import Dict, List, Sequence, Union

from src.timetable.models import ScheduleEntry, REFERENCE_HOUR

CSV_HEADER = [
    "TrainNum",
    "TrainType",
    "A_ArrivalTime",
    "A_AvailCap",
    "A_Boarding",
    "B_ArrivalTime",
    "B_AvailCap",
    "B_Boarding",
    "C_ArrivalTime",
    "C_AvailCap",
    "C_Boarding",
    "U_ArrivalTime",
    "U_AvailCap",
    "U_Offloading",
]


def format_clock(minutes: int) -> str:
    """Minutes from the reference start as ``H:MM``, e.g. 65 -> ``8:05``."""
    hours, mins = divmod(minutes, 60)
    return f"{REFERENCE_HOUR + hours}:{mins:02d}"


def entry_to_row(entry: ScheduleEntry) -> List[str]:
    """One CSV row, in CSV_HEADER order."""
    return [
        str(entry.train_num),
        entry.train_type.value,
        format_clock(entry.a_arrival_time),
        str(entry.a_avail_cap),
        str(entry.a_boarding),
        format_clock(entry.b_arrival_time),
        str(entry.b_avail_cap),
        str(entry.b_boarding),
        format_clock(entry.c_arrival_time),
        str(entry.c_avail_cap),
        str(entry.c_boarding),
        format_clock(entry.u_arrival_time),
        str(entry.u_avail_cap),
        str(entry.u_offloading),
    ]


def entry_to_clock_dict(entry: ScheduleEntry) -> Dict[str, Union[int, str]]:
    """Entry as a dictionary with arrival times rendered as ``H:MM``."""
    data = entry.to_dict()
    for key in ("a_arrival_time", "b_arrival_time", "c_arrival_time", "u_arrival_time"):
        data[key] = format_clock(data[key])
    return data


def schedule_to_csv(entries: Sequence[ScheduleEntry]) -> str:
    """Render a schedule as CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerows(entry_to_row(e) for e in entries)
    return buffer.getvalue()


def write_schedule(entries: Sequence[ScheduleEntry], filepath: Union[str, Path]) -> None:
    """Save a schedule to a CSV file."""
    with open(filepath, 'w', newline='') as f:
        f.write(schedule_to_csv(entries))
