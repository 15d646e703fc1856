"""
Domain types for the departure timetable.

This module defines the closed station set, train types and capacities,
the line's timing constants, and the records that flow between the
simulator, the scorer and the export layer.
"""

from typing import Dict, Any
from dataclasses import dataclass, asdict
from enum import Enum, IntEnum


class Station(IntEnum):
    """Stations of the line, in travel order. U is the terminus."""
    A = 0
    B = 1
    C = 2
    U = 3


BOARDING_STATIONS = (Station.A, Station.B, Station.C)


class TrainType(str, Enum):
    """Train types, named by carriage count."""
    SMALL = "L4"
    LARGE = "L8"


SEATS_PER_CARRIAGE = 50

TRAIN_CAPACITY: Dict[TrainType, int] = {
    TrainType.SMALL: SEATS_PER_CARRIAGE * 4,
    TrainType.LARGE: SEATS_PER_CARRIAGE * 8,
}

# Minutes
BOARDING_DELAY = 3
TRAVEL_TIME: Dict[Station, int] = {
    Station.B: 8,   # A -> B
    Station.C: 9,   # B -> C
    Station.U: 11,  # C -> U
}

PLANNING_HORIZON = 60 * 3
MIN_HEADWAY = 3
NUM_DEPARTURES = 16

# Minutes are counted from 07:00
REFERENCE_HOUR = 7


@dataclass(frozen=True)
class ArrivalSample:
    """Passengers arriving at a station during one minute."""
    station: Station
    minutes: int
    arrivals: int


@dataclass
class Departure:
    """A scheduled train leaving station A."""
    train_type: TrainType
    timestamp: int

    @property
    def capacity(self) -> int:
        return TRAIN_CAPACITY[self.train_type]


@dataclass
class ScheduleEntry:
    """
    Simulated run of one train along the line.

    Times are minutes from the reference start. ``*_avail_cap`` is the free
    capacity on arrival at the station, ``*_boarding`` the passengers taken on.
    """
    train_num: int
    train_type: TrainType
    a_arrival_time: int
    a_avail_cap: int
    a_boarding: int
    b_arrival_time: int
    b_avail_cap: int
    b_boarding: int
    c_arrival_time: int
    c_avail_cap: int
    c_boarding: int
    u_arrival_time: int
    u_avail_cap: int
    u_offloading: int

    def arrival_time(self, station: Station) -> int:
        return getattr(self, f"{station.name.lower()}_arrival_time")

    def avail_cap(self, station: Station) -> int:
        return getattr(self, f"{station.name.lower()}_avail_cap")

    def boarding(self, station: Station) -> int:
        """Passengers boarded at a boarding station."""
        if station == Station.U:
            raise ValueError("No boarding at the terminus")
        return getattr(self, f"{station.name.lower()}_boarding")

    def boarding_time(self, station: Station) -> int:
        """Minute at which passengers are taken off the platform."""
        return self.arrival_time(station) + BOARDING_DELAY

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to dictionary representation."""
        data = asdict(self)
        data["train_type"] = self.train_type.value
        return data
