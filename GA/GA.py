import logging
import time
from typing import Iterable, List, TypeVar

import numpy as np

from Core.errors import ExecutionError
from Core.problem import GeneticCompatible, ProblemError
from Core.result import GeneticAlgorithmResult
from GA.config import GeneticAlgorithmConfig
from GA.population import Population

T = TypeVar("T", bound=GeneticCompatible)

logger = logging.getLogger(__name__)


class GeneticAlgorithm:
    """
    Elitist genetic algorithm.

    Each generation the top-ranked individuals are mated pairwise, the
    children are mutated, and the whole pool (previous population plus
    children) is sorted and cut back to `population_size`. Parents are never
    replaced directly: children only survive by outranking someone.

    Args:
        config (GeneticAlgorithmConfig): Validated run parameters.
    """

    def __init__(self, config: GeneticAlgorithmConfig):
        self.config = config

    def execute(self, initial_elements: Iterable[T], rng: np.random.Generator) -> GeneticAlgorithmResult[T]:
        """
        Evolves `initial_elements` and returns the best individual found.

        Raises:
            ExecutionError: if a crossover or mutation fails, or the
                population is too small to select parents from.
        """
        start_time = time.perf_counter()
        population: Population[T] = Population(initial_elements)
        if not population:
            raise ExecutionError("empty population")
        population.sort()
        logger.info(
            f"Starting genetic algorithm: {len(population)} initial individuals, "
            f"{self.config.number_generations} generations"
        )

        history: List[float] = []
        generation = 0
        while generation < self.config.number_generations:
            self._next_generation(population, rng)
            generation += 1

            best_objective = population.elements[0].objective()
            if self.config.record_history:
                history.append(best_objective)
            logger.debug(f"Generation {generation}, Best Objective: {best_objective}")

            if self.config.stop_threshold is not None and best_objective <= self.config.stop_threshold:
                logger.info(f"Stop threshold {self.config.stop_threshold} reached at generation {generation}")
                break

        best = population.best_individual()
        runtime = time.perf_counter() - start_time
        logger.info(f"Genetic algorithm finished after {generation} generations ({runtime:.3f}s), "
                    f"best objective: {best.objective()}")
        return GeneticAlgorithmResult(
            solution=best,
            runtime=runtime,
            number_generations=generation,
            history=tuple(history),
        )

    def _next_generation(self, population: Population[T], rng: np.random.Generator) -> None:
        offspring = population.generate_offspring(self.config.number_pairs_parents, rng)

        for individual in offspring:
            try:
                individual.mutate(self.config.mutation_rate, rng)
            except ProblemError as exc:
                logger.error(f"Mutation failed: {exc}")
                raise ExecutionError("could not mutate offspring") from exc

        # Offspring compete with the full previous population
        population.add_individuals(offspring)
        population.sort()
        population.truncate(self.config.population_size)
