"""
Population Management for Darwin Genetic Algorithm.

This module manages populations of individuals (genomes) throughout the
evolution process, including initialization, tournament selection,
statistics and the hall of fame.
"""

from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field
import random
import statistics
from datetime import datetime

from src.darwin.core.config import DarwinConfig
from src.darwin.core.genome import Genome, GenomeFactory


@dataclass
class Individual:
    """
    Represents an individual in the population.

    An individual wraps a genome and tracks its fitness and age.
    Lower fitness is better.
    """

    genome: Genome
    fitness: Optional[float] = None
    age: int = 0
    created_at: datetime = field(default_factory=datetime.now)
    evaluated: bool = False

    def update_fitness(self, fitness: float) -> None:
        """Update the individual's fitness."""
        self.fitness = fitness
        self.evaluated = True

    def increment_age(self) -> None:
        """Increment the individual's age by one generation."""
        self.age += 1

    def clone(self) -> "Individual":
        """Copy the genome; the copy keeps the known fitness."""
        return Individual(
            genome=self.genome.clone(),
            fitness=self.fitness,
            evaluated=self.evaluated
        )

    def __lt__(self, other: "Individual") -> bool:
        """Compare individuals by fitness (for sorting). Unevaluated sort last."""
        if self.fitness is None:
            return False
        if other.fitness is None:
            return True
        return self.fitness < other.fitness


class HallOfFame:
    """Best individuals seen across all generations, best first."""

    def __init__(self, size: int = 1):
        if size < 1:
            raise ValueError("Hall of fame size must be at least 1")
        self.size = size
        self.members: List[Individual] = []

    def update(self, individuals: List[Individual]) -> None:
        """Offer evaluated individuals; keep copies of the best."""
        candidates = self.members + [ind.clone() for ind in individuals if ind.evaluated]
        self.members = sorted(candidates)[:self.size]

    @property
    def best(self) -> Optional[Individual]:
        return self.members[0] if self.members else None

    def __getitem__(self, idx: int) -> Individual:
        return self.members[idx]

    def __len__(self) -> int:
        return len(self.members)


class Population:
    """
    Manages a population of individuals in the genetic algorithm.

    Handles population initialization, selection, statistics
    and generation management.
    """

    def __init__(self, config: DarwinConfig, generation: int = 0):
        """Initialize population with configuration."""
        self.config = config
        self.individuals: List[Individual] = []
        self.generation = generation
        self.statistics: Dict[str, Any] = {}
        self.history: List[Dict[str, Any]] = []

    def initialize_from_factory(self, factory: GenomeFactory, rng: random.Random) -> None:
        """
        Fill the population from a genome factory.

        The first individual is the factory's genome as built; every other
        one is perturbed by a single mutation.
        """
        for i in range(self.config.evolution.population_size):
            genome = factory(rng)
            if i > 0:
                genome.mutate(rng)
            self.individuals.append(Individual(genome=genome))

    def select_parents(self, num_parents: int, rng: random.Random) -> List[Individual]:
        """Select parents using tournament selection."""
        parents = []
        tournament_size = min(self.config.evolution.tournament_size, len(self.individuals))

        for _ in range(num_parents):
            tournament = rng.sample(self.individuals, tournament_size)
            parents.append(min(tournament))

        return parents

    def get_elite(self) -> List[Individual]:
        """Get the elite individuals to preserve."""
        return sorted(self.individuals)[:self.config.evolution.elite_size]

    def replace_population(self, new_individuals: List[Individual]) -> None:
        """Replace current population with new individuals."""
        self.individuals = new_individuals

        # Update generation
        self.generation += 1
        for ind in self.individuals:
            ind.increment_age()

    def calculate_statistics(self) -> Dict[str, Any]:
        """Calculate population statistics."""
        fitnesses = [ind.fitness for ind in self.individuals if ind.fitness is not None]

        if not fitnesses:
            return {}

        stats = {
            "generation": self.generation,
            "population_size": len(self.individuals),
            "evaluated_count": len(fitnesses),
            "best_fitness": min(fitnesses),
            "worst_fitness": max(fitnesses),
            "median_fitness": statistics.median(fitnesses),
        }

        ages = [ind.age for ind in self.individuals]
        stats["avg_age"] = statistics.mean(ages)
        stats["max_age"] = max(ages)

        self.statistics = stats
        return stats

    def record_history(self) -> None:
        """Record current population state in history."""
        history_entry = {
            **self.calculate_statistics(),
            "timestamp": datetime.now().isoformat()
        }

        self.history.append(history_entry)

        # Limit history size
        max_history = 100
        if len(self.history) > max_history:
            self.history = self.history[-max_history:]
