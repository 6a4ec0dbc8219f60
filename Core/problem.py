"""
Capability contracts a candidate solution must satisfy to be optimized.

The algorithms never inspect a solution's representation: they only call the
methods below. Any class exposing them qualifies, no inheritance required.
"""

from __future__ import annotations

from typing import Protocol, Sequence, TypeVar, runtime_checkable

import numpy as np

S = TypeVar("S")


class ProblemError(RuntimeError):
    """Base class for failures raised by problem-side code."""

    prefix = "Problem error"

    def __init__(self, reason: str):
        super().__init__(f"{self.prefix}: {reason}")
        self.reason = reason


class ProblemInitializationError(ProblemError):
    prefix = "Error initializing the problem"


class NewSolutionError(ProblemError):
    prefix = "Error when creating a new solution to the problem"


@runtime_checkable
class Solution(Protocol):
    """A candidate whose objective value is minimized. Lower is better."""

    def objective(self) -> float:
        """
        Returns the value to minimize.

        Must be deterministic given the solution's internal state and must
        not raise for a valid solution.
        """
        ...


@runtime_checkable
class SimulatedAnnealingCompatible(Solution, Protocol):
    """Solutions that can propose a neighbor of themselves."""

    def new_solution(self: S, rng: np.random.Generator) -> S:
        """
        Generates one neighboring candidate.

        Raises:
            ProblemError: if no neighbor can be produced.
        """
        ...

    def copy(self: S) -> S: ...


@runtime_checkable
class GeneticCompatible(Solution, Protocol):
    """Solutions that can be mutated in place and recombined with a mate."""

    def mutate(self, mutation_rate: float, rng: np.random.Generator) -> None:
        """
        Perturbs the solution in place. How `mutation_rate` is interpreted is
        up to the solution.

        Raises:
            ProblemError: if the mutation cannot be applied.
        """
        ...

    def generate_children_with(self: S, other: S, rng: np.random.Generator) -> Sequence[S]:
        """
        Produces one or more offspring from `self` and `other`.

        Raises:
            ProblemError: if the parents cannot be recombined.
        """
        ...

    def copy(self: S) -> S: ...

    def __lt__(self, other) -> bool: ...
