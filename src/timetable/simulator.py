"""
Schedule simulation.

Turns an ordered list of departures into the per-station schedule of every
train: when it reaches each station, how much room it has on arrival and
how many waiting passengers it takes on.
"""

from typing import List, Sequence, Tuple

from src.timetable.arrivals import ArrivalModel
from src.timetable.models import (
    Departure,
    ScheduleEntry,
    Station,
    BOARDING_STATIONS,
    BOARDING_DELAY,
    TRAVEL_TIME,
)


class PlatformLedger:
    """Passengers already taken off each platform, as (minute, count) events."""

    def __init__(self, arrivals: ArrivalModel):
        self.arrivals = arrivals
        self._removals: List[List[Tuple[int, int]]] = [[] for _ in BOARDING_STATIONS]

    def waiting(self, station: Station, t: int) -> int:
        """People on the platform at minute t."""
        removed = sum(count for minute, count in self._removals[station] if minute <= t)
        return self.arrivals.cumulative(station, t) - removed

    def board(self, station: Station, t: int, capacity: int) -> int:
        """Board as many waiting passengers as fit and record their removal."""
        boarded = min(capacity, max(self.waiting(station, t), 0))
        self._removals[station].append((t, boarded))
        return boarded


def simulate(arrivals: ArrivalModel, departures: Sequence[Departure]) -> List[ScheduleEntry]:
    """
    Simulate every departure along the line.

    Departures are processed in the order given; callers keep them sorted by
    timestamp. The result has one entry per departure, in the same order.
    """
    ledger = PlatformLedger(arrivals)
    entries = []

    for i, departure in enumerate(departures):
        times = {}
        caps = {}
        boarded = {}

        arrival_time = departure.timestamp
        capacity = departure.capacity
        for station in BOARDING_STATIONS:
            if station != Station.A:
                arrival_time += BOARDING_DELAY + TRAVEL_TIME[station]
            times[station] = arrival_time
            caps[station] = capacity
            boarded[station] = ledger.board(station, arrival_time + BOARDING_DELAY, capacity)
            capacity -= boarded[station]

        entries.append(ScheduleEntry(
            train_num=i + 1,
            train_type=departure.train_type,
            a_arrival_time=times[Station.A],
            a_avail_cap=caps[Station.A],
            a_boarding=boarded[Station.A],
            b_arrival_time=times[Station.B],
            b_avail_cap=caps[Station.B],
            b_boarding=boarded[Station.B],
            c_arrival_time=times[Station.C],
            c_avail_cap=caps[Station.C],
            c_boarding=boarded[Station.C],
            u_arrival_time=times[Station.C] + BOARDING_DELAY + TRAVEL_TIME[Station.U],
            u_avail_cap=capacity,
            u_offloading=sum(boarded.values()),
        ))

    return entries
