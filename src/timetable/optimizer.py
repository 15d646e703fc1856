"""
Timetable optimization entry point.

Runs a search strategy over departure schedules and publishes the winning
timetable as a fully simulated schedule.
"""

from typing import List, Optional

import logfire

from src.core.config import Settings, settings as default_settings
from src.darwin.core.config import DarwinConfig, EvolutionParameters, ParallelizationConfig
from src.darwin.core.engine import GeneticAlgorithmEngine
from src.darwin.core.search import SearchStrategy
from src.timetable.arrivals import ArrivalModel
from src.timetable.genome import DepartureSchedule, genome_factory, INFEASIBLE_SCORE
from src.timetable.models import ScheduleEntry
from src.timetable.simulator import simulate


def build_engine_config(app_settings: Optional[Settings] = None) -> DarwinConfig:
    """Darwin configuration derived from the application settings."""
    app_settings = app_settings or default_settings
    return DarwinConfig(
        evolution=EvolutionParameters(
            population_size=app_settings.optimizer_population_size,
            generations=app_settings.optimizer_generations,
        ),
        parallelization=ParallelizationConfig(
            enable_parallel=app_settings.optimizer_parallel
        ),
        random_seed=app_settings.optimizer_random_seed,
    )


async def optimize_schedule(
    arrivals: ArrivalModel,
    strategy: Optional[SearchStrategy] = None
) -> List[ScheduleEntry]:
    """
    Search for the timetable with the lowest average wait.

    Args:
        arrivals: Passenger arrivals for the planning window
        strategy: Search strategy, the genetic algorithm engine by default

    Returns:
        Simulated schedule of the best timetable found
    """
    strategy = strategy or GeneticAlgorithmEngine(build_engine_config())

    with logfire.span("Optimize schedule", passengers=arrivals.total_arrivals,
                      strategy=type(strategy).__name__):
        hall_of_fame = await strategy.minimize(genome_factory(arrivals))
        best = hall_of_fame[0]
        genome: DepartureSchedule = best.genome

        if best.fitness == INFEASIBLE_SCORE:
            logfire.warning(
                "No feasible timetable found",
                violations=genome.feasibility_violations()
            )
        else:
            logfire.info("Best timetable found", average_wait=best.fitness,
                         timestamps=genome.timestamps)

        return simulate(arrivals, genome.departures)
