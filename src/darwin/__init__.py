"""
Darwin Genetic Algorithm Framework.

A small generational genetic algorithm that evolves opaque genomes. Domain
code implements the genome contract (evaluate, mutate, crossover, clone) and
hands the engine a factory; the engine returns a hall of fame of the best
genomes found.
"""

from src.darwin.core.config import (
    DarwinConfig,
    EvolutionParameters,
    LoggingConfig,
    ParallelizationConfig,
    create_default_config,
    create_test_config,
    create_production_config
)
from src.darwin.core.genome import Genome, GenomeFactory
from src.darwin.core.population import Population, Individual, HallOfFame
from src.darwin.core.search import SearchStrategy, RandomSearch
from src.darwin.core.engine import GeneticAlgorithmEngine

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "DarwinConfig",
    "EvolutionParameters",
    "LoggingConfig",
    "ParallelizationConfig",
    "create_default_config",
    "create_test_config",
    "create_production_config",
    # Genome contract
    "Genome",
    "GenomeFactory",
    # Population
    "Population",
    "Individual",
    "HallOfFame",
    # Search
    "SearchStrategy",
    "RandomSearch",
    "GeneticAlgorithmEngine",
]
