"""
Genome contract for the Darwin framework.

The engine treats every candidate solution as an opaque genome: it can score
it, perturb it, recombine it with another genome of the same kind and copy
it. Everything domain-specific lives behind these four operations.
"""

from abc import ABC, abstractmethod
from typing import Callable
import random


class Genome(ABC):
    """
    Abstract base class for genomes evolved by the engine.

    Fitness is minimized. Mutation and crossover work in place and are never
    called concurrently on the same instance.
    """

    @abstractmethod
    def evaluate(self) -> float:
        """
        Score this genome.

        Returns:
            Fitness value, lower is better
        """
        pass

    @abstractmethod
    def mutate(self, rng: random.Random) -> None:
        """
        Perturb this genome in place.

        Args:
            rng: Random source owned by the caller
        """
        pass

    @abstractmethod
    def crossover(self, other: "Genome", rng: random.Random) -> None:
        """
        Recombine this genome in place with another genome of the same type.

        Args:
            other: Second parent, left unchanged
            rng: Random source owned by the caller
        """
        pass

    @abstractmethod
    def clone(self) -> "Genome":
        """Create an independent copy of this genome."""
        pass


# Builds a fresh genome for one population slot.
GenomeFactory = Callable[[random.Random], Genome]
