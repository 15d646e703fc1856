"""
Genetic Algorithm Engine for Darwin Framework.

This module implements the main genetic algorithm engine that orchestrates
the evolution process: population seeding, fitness evaluation, tournament
selection, crossover, mutation and hall-of-fame tracking.
"""

import random
import multiprocessing
from typing import List, Optional, Tuple
from datetime import datetime
from concurrent.futures import ThreadPoolExecutor, as_completed
import logging

import logfire

from src.darwin.core.config import DarwinConfig
from src.darwin.core.genome import GenomeFactory
from src.darwin.core.population import Population, Individual, HallOfFame
from src.darwin.core.search import SearchStrategy


class GeneticAlgorithmEngine(SearchStrategy):
    """
    Main engine for running genetic algorithm optimization.

    Generational model: each generation is replaced by offspring bred from
    tournament-selected parents, optionally keeping an elite. Fitness is
    minimized; the hall of fame keeps the best genomes over the whole run.
    """

    def __init__(
        self,
        config: DarwinConfig,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the genetic algorithm engine.

        Args:
            config: Darwin configuration
            logger: Optional logger instance
        """
        config.validate_consistency()
        self.config = config
        self.logger = logger or self._setup_logger()
        self.rng = random.Random(config.random_seed)

        # State tracking
        self.current_population: Optional[Population] = None
        self.hall_of_fame = HallOfFame(config.evolution.hall_of_fame_size)
        self.start_time: Optional[datetime] = None
        self.total_evaluations = 0

        self.executor: Optional[ThreadPoolExecutor] = None

    def _setup_logger(self) -> logging.Logger:
        """Setup default logger."""
        logger = logging.getLogger("darwin.engine")
        logger.setLevel(getattr(logging, self.config.logging.log_level))

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    def _info(self, message: str) -> None:
        if self.config.logging.enable_logging:
            self.logger.info(message)

    def search(self, factory: GenomeFactory) -> HallOfFame:
        """Run the evolution and return the hall of fame."""
        self.evolve(factory)
        return self.hall_of_fame

    def evolve(self, factory: GenomeFactory) -> Population:
        """
        Run the genetic algorithm evolution process.

        Args:
            factory: Genome factory used to seed the population

        Returns:
            Final evolved population
        """
        with logfire.span("GA Evolution",
                         population_size=self.config.evolution.population_size,
                         generations=self.config.evolution.generations):

            self.start_time = datetime.now()
            self._info(f"Starting evolution with population size {self.config.evolution.population_size}")

            if self.config.parallelization.enable_parallel:
                num_workers = self.config.parallelization.num_workers or multiprocessing.cpu_count()
                self.executor = ThreadPoolExecutor(max_workers=num_workers)

            try:
                self.current_population = Population(self.config, generation=0)
                self.current_population.initialize_from_factory(factory, self.rng)
                self._info(f"Initialized population with {len(self.current_population.individuals)} individuals")

                self._evaluate_population()
                self._record_generation(0)

                # Main evolution loop
                for generation in range(1, self.config.evolution.generations + 1):
                    with logfire.span("Generation", generation=generation):
                        if self._should_terminate():
                            self._info(f"Early termination at generation {generation}")
                            break

                        self._create_next_generation()
                        self._evaluate_population()
                        self._record_generation(generation)
            finally:
                if self.executor:
                    self.executor.shutdown(wait=True)
                    self.executor = None

            elapsed_time = datetime.now() - self.start_time
            self._info(f"Evolution completed in {elapsed_time}")
            logfire.info(
                "Evolution completed",
                total_evaluations=self.total_evaluations,
                best_fitness=self.hall_of_fame.best.fitness if self.hall_of_fame.best else None
            )

            return self.current_population

    def _record_generation(self, generation: int) -> None:
        """Update hall of fame, statistics and history for the current generation."""
        self.hall_of_fame.update(self.current_population.individuals)
        self.current_population.record_history()

        if generation % self.config.logging.log_interval == 0:
            self._log_progress(generation)

    def _evaluate_population(self) -> None:
        """Evaluate fitness for all individuals in the population."""
        with logfire.span("Evaluate Population", size=len(self.current_population.individuals)):
            unevaluated = [ind for ind in self.current_population.individuals if not ind.evaluated]

            if not unevaluated:
                return

            if self.executor:
                self._parallel_evaluation(unevaluated)
            else:
                self._sequential_evaluation(unevaluated)

            self.total_evaluations += len(unevaluated)

    def _sequential_evaluation(self, individuals: List[Individual]) -> None:
        """Evaluate individuals sequentially."""
        for individual in individuals:
            individual.update_fitness(individual.genome.evaluate())

    def _parallel_evaluation(self, individuals: List[Individual]) -> None:
        """Evaluate individuals in parallel. Each genome is owned by exactly one chunk."""
        chunk_size = self.config.parallelization.chunk_size
        chunks = [individuals[i:i + chunk_size] for i in range(0, len(individuals), chunk_size)]

        futures = [self.executor.submit(self._evaluate_chunk, chunk) for chunk in chunks]

        for future in as_completed(futures):
            for ind, fitness in future.result():
                ind.update_fitness(fitness)

    def _evaluate_chunk(self, individuals: List[Individual]) -> List[Tuple[Individual, float]]:
        """Evaluate a chunk of individuals (for parallel processing)."""
        return [(individual, individual.genome.evaluate()) for individual in individuals]

    def _create_next_generation(self) -> None:
        """Create the next generation of individuals."""
        new_individuals = [ind.clone() for ind in self.current_population.get_elite()]

        while len(new_individuals) < self.config.evolution.population_size:
            parents = self.current_population.select_parents(2, self.rng)

            if self.rng.random() < self.config.evolution.crossover_rate:
                offspring = self._crossover(parents[0], parents[1])
            else:
                offspring = [
                    Individual(genome=parents[0].genome.clone()),
                    Individual(genome=parents[1].genome.clone())
                ]

            for child in offspring:
                if self.rng.random() < self.config.evolution.mutation_rate:
                    child.genome.mutate(self.rng)

            new_individuals.extend(offspring)

        # Trim to exact population size
        new_individuals = new_individuals[:self.config.evolution.population_size]
        self.current_population.replace_population(new_individuals)

    def _crossover(self, parent1: Individual, parent2: Individual) -> List[Individual]:
        """Breed two children, each recombined in place from a copy of one parent."""
        child1 = parent1.genome.clone()
        child2 = parent2.genome.clone()
        child1.crossover(parent2.genome, self.rng)
        child2.crossover(parent1.genome, self.rng)
        return [Individual(genome=child1), Individual(genome=child2)]

    def _should_terminate(self) -> bool:
        """Check if evolution should terminate early."""
        if self.config.max_runtime is not None:
            elapsed = datetime.now() - self.start_time
            if elapsed >= self.config.max_runtime:
                self._info("Terminating due to runtime limit")
                return True
        return False

    def _log_progress(self, generation: int) -> None:
        """Log evolution progress."""
        stats = self.current_population.statistics
        best = self.hall_of_fame.best

        self._info(
            f"Generation {generation}: "
            f"Best: {stats.get('best_fitness', 0):.4g}, "
            f"Median: {stats.get('median_fitness', 0):.4g}, "
            f"Hall of fame: {best.fitness if best else None}"
        )

        if self.config.logging.metrics_export:
            metrics = {
                "evolution_generation": generation,
                **{k: v for k, v in stats.items() if k != "generation"}
            }
            logfire.info("Evolution Progress", **metrics)
