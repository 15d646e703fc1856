"""
Passenger arrival timeline shared by every candidate timetable.
"""

from typing import List, Iterable, Tuple

import numpy as np

from src.timetable.models import ArrivalSample, Station, BOARDING_STATIONS


class ArrivalModel:
    """
    Immutable per-station arrival timeline.

    Samples are kept in input order (the scorer breaks ties with it) and,
    per station, stably sorted by minute with a running cumulative total so
    that "how many people have arrived by minute t" is a binary search.
    """

    def __init__(self, samples: Iterable[ArrivalSample]):
        self._samples: Tuple[ArrivalSample, ...] = tuple(samples)

        for sample in self._samples:
            if sample.station not in BOARDING_STATIONS:
                raise ValueError(f"Passengers cannot arrive at station {sample.station.name}")
            if sample.arrivals < 0:
                raise ValueError(
                    f"Negative arrival count {sample.arrivals} at "
                    f"{sample.station.name}, minute {sample.minutes}"
                )

        self._by_station: List[Tuple[ArrivalSample, ...]] = []
        self._minutes: List[np.ndarray] = []
        self._cumulative: List[np.ndarray] = []
        for station in BOARDING_STATIONS:
            ordered = sorted(
                (s for s in self._samples if s.station == station),
                key=lambda s: s.minutes
            )
            minutes = np.array([s.minutes for s in ordered], dtype=np.int64)
            cumulative = np.cumsum([s.arrivals for s in ordered], dtype=np.int64)
            minutes.setflags(write=False)
            cumulative.setflags(write=False)
            self._by_station.append(tuple(ordered))
            self._minutes.append(minutes)
            self._cumulative.append(cumulative)

        self._total = int(sum(s.arrivals for s in self._samples))

    @property
    def samples(self) -> Tuple[ArrivalSample, ...]:
        """Samples in input order."""
        return self._samples

    @property
    def total_arrivals(self) -> int:
        return self._total

    def station_samples(self, station: Station) -> Tuple[ArrivalSample, ...]:
        """Samples for one station, ordered by minute."""
        return self._by_station[station]

    def timeline(self, station: Station) -> List[Tuple[int, int]]:
        """(minute, cumulative arrivals) pairs for one station."""
        return [
            (int(m), int(c))
            for m, c in zip(self._minutes[station], self._cumulative[station])
        ]

    def cumulative(self, station: Station, t: int) -> int:
        """Number of passengers that have arrived at a station by minute t (inclusive)."""
        minutes = self._minutes[station]
        idx = int(np.searchsorted(minutes, t, side="right"))
        if idx == 0:
            return 0
        return int(self._cumulative[station][idx - 1])

    @property
    def earliest_minute(self) -> int:
        if not self._samples:
            return 0
        return min(s.minutes for s in self._samples)

    @property
    def latest_minute(self) -> int:
        if not self._samples:
            return 0
        return max(s.minutes for s in self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __repr__(self) -> str:
        return f"ArrivalModel(samples={len(self._samples)}, passengers={self._total})"
