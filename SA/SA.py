import logging
import math
import time
from typing import List, TypeVar

import numpy as np

from Core.errors import ExecutionError
from Core.problem import ProblemError, SimulatedAnnealingCompatible
from Core.result import SimulationResult
from SA.config import SimulatedAnnealingConfig, SimulatedAnnealingStatus

T = TypeVar("T", bound=SimulatedAnnealingCompatible)

logger = logging.getLogger(__name__)


class SimulatedAnnealingAlgorithm:
    """
    Simulated Annealing (SA) search algorithm.

    The search moves from a current solution to one of its neighbors at each
    iteration. Moves to better solutions are always accepted, while moves to
    worse solutions are accepted with probability exp(-delta / temperature)
    (Metropolis criterion). The temperature decays geometrically and is
    clipped at the configured minimum. The best solution seen is tracked
    separately from the current one.

    Args:
        config (SimulatedAnnealingConfig): Validated run parameters.
    """

    def __init__(self, config: SimulatedAnnealingConfig):
        self.config = config
        self.status = SimulatedAnnealingStatus.READY

    def cooldown(self, temperature: float) -> float:
        """Applies one step of the cooling schedule."""
        return max(temperature * self.config.cooling_rate, self.config.minimal_temperature)

    def execute(self, initial_solution: T, rng: np.random.Generator) -> SimulationResult[T]:
        """
        Searches for a solution with minimal objective starting from `initial_solution`.

        Raises:
            ExecutionError: if a neighbor cannot be generated.
        """
        start_time = time.perf_counter()
        current = initial_solution
        current_objective = current.objective()
        best = current.copy()
        best_objective = current_objective
        temperature = self.config.initial_temperature
        logger.info(
            f"Starting simulated annealing: initial objective {current_objective}, "
            f"temperature {temperature}, {self.config.max_iterations} iterations"
        )

        history: List[float] = []
        temperatures: List[float] = []
        iteration = 0
        while iteration < self.config.max_iterations:
            try:
                neighbor = current.new_solution(rng)
            except ProblemError as exc:
                self.status = SimulatedAnnealingStatus.FAILED
                logger.error(f"Neighbor generation failed at iteration {iteration}: {exc}")
                raise ExecutionError(
                    "error generating a new solution during the iteration process"
                ) from exc

            neighbor_objective = neighbor.objective()
            if self._accept(neighbor_objective - current_objective, temperature, rng):
                current, current_objective = neighbor, neighbor_objective
                if current_objective < best_objective:
                    best, best_objective = current.copy(), current_objective

            temperature = self.cooldown(temperature)
            iteration += 1
            if self.config.record_history:
                history.append(best_objective)
                temperatures.append(temperature)

            if self.config.stop_threshold is not None and best_objective <= self.config.stop_threshold:
                logger.info(f"Stop threshold {self.config.stop_threshold} reached at iteration {iteration}")
                break

        self.status = SimulatedAnnealingStatus.SUCCESS
        runtime = time.perf_counter() - start_time
        logger.info(f"Simulated annealing finished after {iteration} iterations ({runtime:.3f}s), "
                    f"best objective: {best_objective}")
        return SimulationResult(
            solution=best,
            runtime=runtime,
            number_iterations=iteration,
            history=tuple(history),
            temperatures=tuple(temperatures),
        )

    @staticmethod
    def _accept(delta: float, temperature: float, rng: np.random.Generator) -> bool:
        if delta <= 0:
            return True
        if temperature <= 0:
            return False
        return math.exp(-delta / temperature) > rng.random()
