"""
Unit tests for the schedule optimizer (Subtask 4.3).

Tests cover:
- Engine configuration from application settings
- End-to-end optimization with the genetic algorithm and random search
"""

import pytest

from src.core.config import Settings
from src.darwin import GeneticAlgorithmEngine, RandomSearch, create_test_config
from src.timetable.arrivals import ArrivalModel
from src.timetable.genome import DepartureSchedule
from src.timetable.models import ArrivalSample, Station
from src.timetable.optimizer import build_engine_config, optimize_schedule


class TestEngineConfig:
    """Test suite for build_engine_config()."""

    def test_maps_optimizer_settings(self):
        app_settings = Settings(
            optimizer_generations=7,
            optimizer_population_size=12,
            optimizer_random_seed=3,
            optimizer_parallel=True
        )
        config = build_engine_config(app_settings)

        assert config.evolution.generations == 7
        assert config.evolution.population_size == 12
        assert config.random_seed == 3
        assert config.parallelization.enable_parallel is True

    def test_default_settings(self):
        config = build_engine_config(Settings())
        assert config.evolution.generations == 10
        assert config.evolution.population_size == 30


class TestOptimizeSchedule:
    """Test suite for optimize_schedule()."""

    @pytest.mark.asyncio
    async def test_genetic_algorithm(self, sample_arrivals):
        engine = GeneticAlgorithmEngine(create_test_config())
        schedule = await optimize_schedule(sample_arrivals, engine)

        assert len(schedule) == 16
        assert [e.train_num for e in schedule] == list(range(1, 17))
        times = [e.a_arrival_time for e in schedule]
        assert times == sorted(times)

    @pytest.mark.asyncio
    async def test_result_is_no_worse_than_seed(self, sample_arrivals):
        seed_fitness = DepartureSchedule(sample_arrivals).evaluate()
        search = RandomSearch(iterations=30, seed=11)

        schedule = await optimize_schedule(sample_arrivals, search)

        assert search.hall_of_fame.best.fitness <= seed_fitness
        assert sum(e.u_offloading for e in schedule) == sample_arrivals.total_arrivals

    @pytest.mark.asyncio
    async def test_default_strategy_uses_settings(self, sample_arrivals):
        """Runs the genetic algorithm configured in conftest."""
        schedule = await optimize_schedule(sample_arrivals)
        assert len(schedule) == 16

    @pytest.mark.asyncio
    async def test_infeasible_demand_still_returns_schedule(self):
        """The best of a hopeless run is still published."""
        arrivals = ArrivalModel([ArrivalSample(Station.A, 0, 10000)])
        schedule = await optimize_schedule(arrivals, RandomSearch(iterations=5, seed=1))

        assert len(schedule) == 16
        assert sum(e.u_offloading for e in schedule) < arrivals.total_arrivals
