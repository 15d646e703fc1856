"""
Darwin Core Module - Genetic Algorithm Components.

This module contains the core components of the Darwin genetic algorithm framework,
including configuration, the genome contract, population management, and the
search strategies.
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

from src.darwin.core.genome import (
    Genome,
    GenomeFactory
)

from src.darwin.core.population import (
    Population,
    Individual,
    HallOfFame
)

from src.darwin.core.search import (
    SearchStrategy,
    RandomSearch
)

from src.darwin.core.engine import (
    GeneticAlgorithmEngine
)

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

    # Population management
    "Population",
    "Individual",
    "HallOfFame",

    # Search
    "SearchStrategy",
    "RandomSearch",
    "GeneticAlgorithmEngine"
]
