"""
Passenger wait scoring.

Replays the day minute by minute with one first-in-first-out queue per
station and measures how long each passenger stood on the platform before
a train took them.
"""

from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Dict, List, Sequence, Deque

from src.timetable.arrivals import ArrivalModel
from src.timetable.models import ScheduleEntry, BOARDING_STATIONS, PLANNING_HORIZON

# Average wait reported when nobody boarded at all.
NO_PASSENGER_SCORE = 0.0


@dataclass(frozen=True)
class WaitEvent:
    """One passenger joining a platform queue."""
    minute: int
    order: int


def _passenger_arrivals(arrivals: ArrivalModel) -> List[Dict[int, List[WaitEvent]]]:
    """Expand samples into unit passengers, grouped by station and minute."""
    per_station: List[Dict[int, List[WaitEvent]]] = [defaultdict(list) for _ in BOARDING_STATIONS]
    for order, sample in enumerate(arrivals.samples):
        events = per_station[sample.station][sample.minutes]
        events.extend(WaitEvent(sample.minutes, order) for _ in range(sample.arrivals))
    return per_station


def _boarding_events(schedule: Sequence[ScheduleEntry]) -> List[Dict[int, List[int]]]:
    """Boarding counts per station and minute, in train order."""
    per_station: List[Dict[int, List[int]]] = [defaultdict(list) for _ in BOARDING_STATIONS]
    for entry in schedule:
        for station in BOARDING_STATIONS:
            per_station[station][entry.boarding_time(station)].append(entry.boarding(station))
    return per_station


def score(arrivals: ArrivalModel, schedule: Sequence[ScheduleEntry]) -> float:
    """
    Average minutes waited per boarded passenger. Lower is better.

    Passengers board strictly in arrival order. Returns NO_PASSENGER_SCORE
    when no passenger boards.
    """
    passenger_arrivals = _passenger_arrivals(arrivals)
    boardings = _boarding_events(schedule)

    last_event = PLANNING_HORIZON
    for station in BOARDING_STATIONS:
        for minutes in (passenger_arrivals[station], boardings[station]):
            if minutes:
                last_event = max(last_event, max(minutes))

    queues: List[Deque[WaitEvent]] = [deque() for _ in BOARDING_STATIONS]
    total_wait = 0
    count = 0

    for minute in range(min(0, arrivals.earliest_minute), last_event + 1):
        for station in BOARDING_STATIONS:
            queue = queues[station]
            queue.extend(passenger_arrivals[station].get(minute, ()))

            for boarding in boardings[station].get(minute, ()):
                for _ in range(min(boarding, len(queue))):
                    passenger = queue.popleft()
                    total_wait += minute - passenger.minute
                    count += 1

    if count == 0:
        return NO_PASSENGER_SCORE
    return total_wait / count
