from __future__ import annotations

import functools
import logging
from typing import Generic, Iterable, Iterator, List, TypeVar

import numpy as np

from Core.errors import ExecutionError
from Core.problem import GeneticCompatible, ProblemError

T = TypeVar("T", bound=GeneticCompatible)

logger = logging.getLogger(__name__)


def _compare(a, b) -> int:
    # Incomparable pairs (e.g. NaN objectives) are treated as equal.
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


class Population(Generic[T]):
    """
    Candidate set of one genetic algorithm run.

    Elements are kept in ascending objective order after each `sort()` call,
    so position 0 holds the best individual.
    """

    def __init__(self, individuals: Iterable[T] = ()):
        self.elements: List[T] = list(individuals)

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[T]:
        return iter(self.elements)

    def add_individuals(self, individuals: Iterable[T]) -> None:
        self.elements.extend(individuals)

    def sort(self) -> None:
        """Stable sort with minimal objective first."""
        self.elements.sort(key=functools.cmp_to_key(_compare))

    def truncate(self, size: int) -> None:
        """Keeps the `size` first elements."""
        del self.elements[size:]

    def generate_offspring(self, number_pairs_parents: int, rng: np.random.Generator) -> List[T]:
        """
        Mates elements (0, 1), (2, 3), ... for `number_pairs_parents` pairs.

        Args:
            number_pairs_parents: Number of consecutive pairs to mate.
            rng: Randomness source handed to the crossover.

        Returns:
            All children, flattened in pair order.

        Raises:
            ExecutionError: if the population holds fewer than
                `2 * number_pairs_parents` elements or a crossover fails.
        """
        if 2 * number_pairs_parents > len(self.elements):
            raise ExecutionError("not enough individuals to select the parents")

        offspring: List[T] = []
        for idx in range(number_pairs_parents):
            first, second = self.elements[2 * idx], self.elements[2 * idx + 1]
            try:
                children = first.generate_children_with(second, rng)
            except ProblemError as exc:
                logger.error(f"Crossover of pair {idx} failed: {exc}")
                raise ExecutionError("could not generate offsprings") from exc
            offspring.extend(children)
        return offspring

    def best_individual(self) -> T:
        """Returns a copy of the first element."""
        if not self.elements:
            raise ExecutionError("empty population")
        return self.elements[0].copy()
