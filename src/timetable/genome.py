"""
Departure schedule genome.

Adapts the simulator and the scorer to the Darwin genome contract and
encodes how timetables are perturbed and recombined during the search.
"""

from typing import List, Optional, Sequence, Tuple
from copy import deepcopy
import random
import sys

from src.darwin.core.genome import Genome, GenomeFactory
from src.timetable.arrivals import ArrivalModel
from src.timetable.models import (
    Departure,
    ScheduleEntry,
    TrainType,
    PLANNING_HORIZON,
    MIN_HEADWAY,
    NUM_DEPARTURES,
)
from src.timetable.scoring import score
from src.timetable.simulator import simulate

# Fitness of any timetable that breaks a hard constraint.
INFEASIBLE_SCORE = sys.float_info.max

# Shift applied to every departure by a timing mutation, inclusive.
TIME_SHIFT_RANGE = (-2, 1)

SEED_TIMETABLE: Tuple[Tuple[TrainType, int], ...] = (
    (TrainType.SMALL, 0),
    (TrainType.LARGE, 10),
    (TrainType.LARGE, 15),
    (TrainType.LARGE, 20),
    (TrainType.LARGE, 30),
    (TrainType.LARGE, 40),
    (TrainType.LARGE, 50),
    (TrainType.LARGE, 60),
    (TrainType.LARGE, 70),
    (TrainType.LARGE, 80),
    (TrainType.LARGE, 90),
    (TrainType.LARGE, 105),
    (TrainType.LARGE, 130),
    (TrainType.SMALL, 150),
    (TrainType.SMALL, 160),
    (TrainType.SMALL, 180),
)


def seed_departures() -> List[Departure]:
    """Fresh copy of the seed timetable."""
    return [Departure(train_type=t, timestamp=ts) for t, ts in SEED_TIMETABLE]


class DepartureSchedule(Genome):
    """
    A candidate timetable of departures from station A.

    Departures stay sorted by timestamp after every operation; the simulator
    and the feasibility checks rely on it. The arrival model is shared
    between all genomes of a run and is never copied.
    """

    def __init__(self, arrivals: ArrivalModel, departures: Optional[Sequence[Departure]] = None):
        self.arrivals = arrivals
        self.departures: List[Departure] = list(departures) if departures is not None else seed_departures()
        if len(self.departures) != NUM_DEPARTURES:
            raise ValueError(
                f"A timetable has exactly {NUM_DEPARTURES} departures, got {len(self.departures)}"
            )
        self._sort()

    def _sort(self) -> None:
        self.departures.sort(key=lambda d: d.timestamp)

    def _check_sorted(self) -> None:
        if __debug__:
            timestamps = self.timestamps
            assert timestamps == sorted(timestamps), f"Departures out of order: {timestamps}"

    @property
    def timestamps(self) -> List[int]:
        return [d.timestamp for d in self.departures]

    def schedule(self) -> List[ScheduleEntry]:
        """Simulate this timetable."""
        return simulate(self.arrivals, self.departures)

    def feasibility_violations(self, schedule: Optional[Sequence[ScheduleEntry]] = None) -> List[str]:
        """
        List the hard constraints this timetable breaks.

        Args:
            schedule: Simulated schedule, computed when not given

        Returns:
            Human-readable violations, empty when feasible
        """
        # Only simulate timetables that are otherwise valid
        violations = self._timing_violations()
        if violations:
            return violations

        if schedule is None:
            schedule = self.schedule()
        return self._capacity_violations(schedule)

    def _timing_violations(self) -> List[str]:
        violations = []
        first, last = self.departures[0].timestamp, self.departures[-1].timestamp
        if first < 0:
            violations.append(f"First departure at minute {first} is before the start of service")
        if last > PLANNING_HORIZON:
            violations.append(f"Last departure at minute {last} is after minute {PLANNING_HORIZON}")

        for prev, curr in zip(self.departures, self.departures[1:]):
            gap = curr.timestamp - prev.timestamp
            if gap < MIN_HEADWAY:
                violations.append(
                    f"Headway of {gap} min between departures at {prev.timestamp} and {curr.timestamp}"
                )
        return violations

    def _capacity_violations(self, schedule: Sequence[ScheduleEntry]) -> List[str]:
        offloaded = sum(e.u_offloading for e in schedule)
        if offloaded < self.arrivals.total_arrivals:
            return [f"Only {offloaded} of {self.arrivals.total_arrivals} passengers are carried"]
        return []

    def is_feasible(self) -> bool:
        return not self.feasibility_violations()

    def evaluate(self) -> float:
        """Average passenger wait, or INFEASIBLE_SCORE when a hard constraint is broken."""
        if self._timing_violations():
            return INFEASIBLE_SCORE

        schedule = self.schedule()
        if self._capacity_violations(schedule):
            return INFEASIBLE_SCORE

        return score(self.arrivals, schedule)

    def mutate(self, rng: random.Random) -> None:
        """
        Either swap the train types of two departures or nudge every departure time.

        Both branches are equally likely.
        """
        if rng.randrange(2) == 0:
            idx1, idx2 = rng.sample(range(len(self.departures)), 2)
            d1, d2 = self.departures[idx1], self.departures[idx2]
            d1.train_type, d2.train_type = d2.train_type, d1.train_type
        else:
            low, high = TIME_SHIFT_RANGE
            for departure in self.departures:
                departure.timestamp += rng.randint(low, high)

        self._sort()
        self._check_sorted()

    def crossover(self, other: Genome, rng: random.Random) -> None:
        """Move each departure time to the midpoint of both parents' times at that position."""
        if not isinstance(other, DepartureSchedule):
            raise TypeError(f"Cannot cross a departure schedule with {type(other).__name__}")
        if len(other.departures) != len(self.departures):
            raise ValueError(
                f"Departure count mismatch: {len(self.departures)} != {len(other.departures)}"
            )

        for mine, theirs in zip(self.departures, other.departures):
            # Truncate towards zero
            mine.timestamp = int((mine.timestamp + theirs.timestamp) / 2)

        self._sort()
        self._check_sorted()

    def clone(self) -> "DepartureSchedule":
        """Copy the departures; share the arrival model."""
        return DepartureSchedule(self.arrivals, deepcopy(self.departures))

    def to_dict(self) -> dict:
        return {
            "departures": [
                {"train_type": d.train_type.value, "timestamp": d.timestamp}
                for d in self.departures
            ]
        }

    def __repr__(self) -> str:
        return f"DepartureSchedule(timestamps={self.timestamps})"


def genome_factory(arrivals: ArrivalModel) -> GenomeFactory:
    """Build the factory the engine uses to seed its population."""
    def create(rng: random.Random) -> DepartureSchedule:
        return DepartureSchedule(arrivals)

    return create
