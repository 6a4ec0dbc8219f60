from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class GeneticAlgorithmResult(Generic[T]):
    """Best individual of a GA run and its run statistics."""
    solution: T
    runtime: float
    number_generations: int
    # Best objective after each generation
    history: Tuple[float, ...] = field(default_factory=tuple)

    @property
    def objective(self) -> float:
        return self.solution.objective()


@dataclass(frozen=True)
class SimulationResult(Generic[T]):
    """Best solution seen during an SA run and its run statistics."""
    solution: T
    runtime: float
    number_iterations: int
    # Best objective after each iteration
    history: Tuple[float, ...] = field(default_factory=tuple)
    # Temperature after each cooling step
    temperatures: Tuple[float, ...] = field(default_factory=tuple)

    @property
    def objective(self) -> float:
        return self.solution.objective()
