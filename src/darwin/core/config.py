"""
Darwin Configuration Module.

This module defines configuration classes for the Darwin genetic algorithm framework,
including evolution parameters, logging and parallel evaluation settings.
"""

from typing import Any, Callable, Dict, Literal, Optional, Tuple
from pydantic import BaseModel, Field, ConfigDict, field_validator
from pathlib import Path
from datetime import timedelta
import os

# Environment variable -> (section, field, type); an empty section is top level
ENV_OVERRIDES: Dict[str, Tuple[str, str, Callable[[str], Any]]] = {
    "DARWIN_POPULATION_SIZE": ("evolution", "population_size", int),
    "DARWIN_GENERATIONS": ("evolution", "generations", int),
    "DARWIN_MUTATION_RATE": ("evolution", "mutation_rate", float),
    "DARWIN_CROSSOVER_RATE": ("evolution", "crossover_rate", float),
    "DARWIN_ELITE_SIZE": ("evolution", "elite_size", int),
    "DARWIN_TOURNAMENT_SIZE": ("evolution", "tournament_size", int),
    "DARWIN_NUM_WORKERS": ("parallelization", "num_workers", int),
    "DARWIN_RANDOM_SEED": ("", "random_seed", int),
}


class EvolutionParameters(BaseModel):
    """Parameters controlling the genetic algorithm evolution process."""

    model_config = ConfigDict(validate_assignment=True)

    # Population parameters
    population_size: int = Field(
        default=30,
        ge=2,
        le=10000,
        description="Number of individuals in the population"
    )
    generations: int = Field(
        default=50,
        ge=1,
        le=10000,
        description="Number of generations to evolve"
    )

    # Genetic operators
    mutation_rate: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Probability of mutating an offspring"
    )
    crossover_rate: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Probability of crossover between parents"
    )

    # Selection parameters
    elite_size: int = Field(
        default=0,
        ge=0,
        description="Number of best individuals carried over unchanged"
    )
    tournament_size: int = Field(
        default=3,
        ge=2,
        description="Number of individuals in tournament selection"
    )
    hall_of_fame_size: int = Field(
        default=1,
        ge=1,
        description="Number of best genomes retained across all generations"
    )

    @field_validator('elite_size')
    def validate_elite_size(cls, v, info):
        """Ensure elite size is less than population size."""
        if 'population_size' in info.data and v >= info.data['population_size']:
            raise ValueError('Elite size must be less than population size')
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging and monitoring."""

    enable_logging: bool = Field(
        default=True,
        description="Enable detailed evolution logging"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )
    log_interval: int = Field(
        default=10,
        ge=1,
        description="Generations between detailed logs"
    )
    metrics_export: bool = Field(
        default=True,
        description="Export metrics to monitoring system"
    )


class ParallelizationConfig(BaseModel):
    """Configuration for parallel processing."""

    enable_parallel: bool = Field(
        default=False,
        description="Enable parallel fitness evaluation"
    )
    num_workers: Optional[int] = Field(
        default=None,
        ge=1,
        description="Number of parallel workers (None for auto)"
    )
    chunk_size: int = Field(
        default=10,
        ge=1,
        description="Individuals per parallel chunk"
    )


class DarwinConfig(BaseModel):
    """Main configuration class for Darwin framework."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid'
    )

    # Sub-configurations
    evolution: EvolutionParameters = Field(
        default_factory=EvolutionParameters,
        description="Evolution parameters"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging and monitoring configuration"
    )
    parallelization: ParallelizationConfig = Field(
        default_factory=ParallelizationConfig,
        description="Parallel processing configuration"
    )

    # General settings
    random_seed: Optional[int] = Field(
        default=None,
        description="Random seed for reproducibility"
    )
    max_runtime: Optional[timedelta] = Field(
        default=None,
        description="Maximum runtime for evolution"
    )

    @classmethod
    def from_env(cls) -> "DarwinConfig":
        """Create configuration from environment variables."""
        config_dict: Dict[str, Any] = {}
        for env_name, (section, key, cast) in ENV_OVERRIDES.items():
            raw = os.getenv(env_name)
            if not raw:
                continue
            target = config_dict.setdefault(section, {}) if section else config_dict
            target[key] = cast(raw)

        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    def save(self, filepath: str) -> None:
        """Write the configuration as JSON."""
        Path(filepath).write_text(self.model_dump_json(indent=2))

    @classmethod
    def load(cls, filepath: str) -> "DarwinConfig":
        """Read a configuration written by save()."""
        return cls.model_validate_json(Path(filepath).read_text())

    def validate_consistency(self) -> None:
        """
        Check the selection sizes against the population.

        The elite must leave room for offspring; tournaments and the hall of
        fame draw from a single generation.
        """
        evo = self.evolution
        if evo.elite_size >= evo.population_size:
            raise ValueError(
                f"Elite size ({evo.elite_size}) must be less than population size ({evo.population_size})"
            )

        for name, size in (("Tournament", evo.tournament_size), ("Hall of fame", evo.hall_of_fame_size)):
            if size > evo.population_size:
                raise ValueError(
                    f"{name} size ({size}) must not exceed population size ({evo.population_size})"
                )


# Convenience functions
def create_default_config() -> DarwinConfig:
    """Create a default configuration suitable for most use cases."""
    return DarwinConfig()


def create_test_config() -> DarwinConfig:
    """Create a configuration suitable for testing (smaller, faster)."""
    return DarwinConfig(
        evolution=EvolutionParameters(
            population_size=10,
            generations=3,
            elite_size=1
        ),
        logging=LoggingConfig(
            log_interval=1
        ),
        parallelization=ParallelizationConfig(
            enable_parallel=False  # Disable for deterministic tests
        ),
        random_seed=42
    )


def create_production_config() -> DarwinConfig:
    """Create a configuration suitable for production use."""
    return DarwinConfig(
        evolution=EvolutionParameters(
            population_size=100,
            generations=200,
            mutation_rate=0.5,
            crossover_rate=0.7,
            elite_size=2
        ),
        parallelization=ParallelizationConfig(
            enable_parallel=True
        ),
        logging=LoggingConfig(
            log_interval=20,
            metrics_export=True
        )
    )
