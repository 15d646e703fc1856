"""
Timetable domain model.

Passenger arrivals, the line simulator, the wait scorer and the departure
schedule genome that the Darwin engine evolves.
"""

from src.timetable.models import (
    Station,
    TrainType,
    ArrivalSample,
    Departure,
    ScheduleEntry,
    TRAIN_CAPACITY,
    BOARDING_DELAY,
    PLANNING_HORIZON,
    MIN_HEADWAY,
    NUM_DEPARTURES
)
from src.timetable.arrivals import ArrivalModel
from src.timetable.simulator import simulate
from src.timetable.scoring import score, NO_PASSENGER_SCORE
from src.timetable.genome import (
    DepartureSchedule,
    genome_factory,
    seed_departures,
    SEED_TIMETABLE,
    INFEASIBLE_SCORE
)

__all__ = [
    "Station",
    "TrainType",
    "ArrivalSample",
    "Departure",
    "ScheduleEntry",
    "TRAIN_CAPACITY",
    "BOARDING_DELAY",
    "PLANNING_HORIZON",
    "MIN_HEADWAY",
    "NUM_DEPARTURES",
    "ArrivalModel",
    "simulate",
    "score",
    "NO_PASSENGER_SCORE",
    "DepartureSchedule",
    "genome_factory",
    "seed_departures",
    "SEED_TIMETABLE",
    "INFEASIBLE_SCORE",
]
