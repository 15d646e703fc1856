"""
Search strategies for the Darwin framework.

A search strategy takes a genome factory and returns the best genomes it
found. The genetic algorithm engine is one strategy; ``RandomSearch`` is a
trivial one that only mutates, useful as a baseline and in tests.
"""

from abc import ABC, abstractmethod
from typing import Optional
import asyncio
import random

import logfire

from src.darwin.core.genome import GenomeFactory
from src.darwin.core.population import HallOfFame, Individual


class SearchStrategy(ABC):
    """
    Minimizes genome fitness.

    Subclasses implement the blocking search(); callers on an event loop
    use minimize(), which runs it on a worker thread.
    """

    async def minimize(self, factory: GenomeFactory) -> HallOfFame:
        """Run search() on a worker thread."""
        return await asyncio.to_thread(self.search, factory)

    @abstractmethod
    def search(self, factory: GenomeFactory) -> HallOfFame:
        """
        Search for low-fitness genomes.

        Args:
            factory: Builds a fresh genome per call

        Returns:
            Hall of fame holding the best genomes found, best first
        """
        pass


class RandomSearch(SearchStrategy):
    """
    Repeatedly mutate a copy of the best genome so far.

    Every candidate is evaluated; a candidate replaces the incumbent when it
    scores strictly better.
    """

    def __init__(self, iterations: int = 100, seed: Optional[int] = None, hall_of_fame_size: int = 1):
        if iterations < 0:
            raise ValueError("iterations must be non-negative")
        self.iterations = iterations
        self.rng = random.Random(seed)
        self.hall_of_fame = HallOfFame(hall_of_fame_size)

    def search(self, factory: GenomeFactory) -> HallOfFame:
        with logfire.span("Random search", iterations=self.iterations):
            incumbent = Individual(genome=factory(self.rng))
            incumbent.update_fitness(incumbent.genome.evaluate())
            self.hall_of_fame.update([incumbent])

            for _ in range(self.iterations):
                candidate = Individual(genome=incumbent.genome.clone())
                candidate.genome.mutate(self.rng)
                candidate.update_fitness(candidate.genome.evaluate())
                self.hall_of_fame.update([candidate])
                if candidate < incumbent:
                    incumbent = candidate

            logfire.info("Random search finished", best_fitness=self.hall_of_fame.best.fitness)
            return self.hall_of_fame
