import math
import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from Core.errors import ExecutionError
from Core.problem import NewSolutionError
from Core.result import SimulationResult
from Knapsack.knapsack import KnapsackProblem, KnapsackSolution
from SA.config import SimulatedAnnealingConfig, SimulatedAnnealingStatus
from SA.SA import SimulatedAnnealingAlgorithm

DATA_DIR = Path(__file__).parent.parent / "data" / "knapsack"


class Walker:
    """Integer position whose neighbor is always one step in a fixed direction."""

    def __init__(self, position, step=-1, fail_after=None):
        self.position = position
        self.step = step
        self.fail_after = fail_after

    def objective(self):
        return float(self.position)

    def copy(self):
        return Walker(self.position, self.step, self.fail_after)

    def new_solution(self, rng):
        if self.fail_after is not None and abs(self.position) >= self.fail_after:
            raise NewSolutionError("walked off the map")
        return Walker(self.position + self.step, self.step, self.fail_after)


class RandomWalker(Walker):
    """Moves one step left or right at random."""

    def copy(self):
        return RandomWalker(self.position)

    def new_solution(self, rng):
        return RandomWalker(self.position + (1 if rng.random() < 0.5 else -1))


class Ridge:
    """Three positions where the only way to the minimum climbs over a worse one."""

    OBJECTIVES = (0.0, 1.0, -10.0)

    def __init__(self, position=0):
        self.position = position

    def objective(self):
        return self.OBJECTIVES[self.position]

    def copy(self):
        return Ridge(self.position)

    def new_solution(self, rng):
        return Ridge(min(self.position + 1, len(self.OBJECTIVES) - 1))


@pytest.fixture
def small_problem():
    return KnapsackProblem([60, 100, 120], [10, 20, 30], 50, optimal_value=220)


class TestAcceptance:

    def test_improving_moves_always_accepted(self):
        config = SimulatedAnnealingConfig(10, 0.0, 0.0, 0.5)
        result = SimulatedAnnealingAlgorithm(config).execute(Walker(0), np.random.default_rng(0))
        assert isinstance(result, SimulationResult)
        assert result.objective == -10.0
        assert result.number_iterations == 10

    def test_worsening_moves_rejected_at_zero_temperature(self):
        config = SimulatedAnnealingConfig(25, 0.0, 0.0, 0.9)
        algorithm = SimulatedAnnealingAlgorithm(config)
        result = algorithm.execute(Walker(0, step=1), np.random.default_rng(0))
        assert result.objective == 0.0
        assert algorithm.status is SimulatedAnnealingStatus.SUCCESS

    def test_hot_search_wanders_but_keeps_best(self):
        config = SimulatedAnnealingConfig(200, 1e6, 1e6, 1.0)
        result = SimulatedAnnealingAlgorithm(config).execute(RandomWalker(0), np.random.default_rng(5))
        assert result.objective <= 0.0
        assert result.objective == min(result.history)

    def test_zero_iterations_returns_initial_solution(self):
        config = SimulatedAnnealingConfig(0, 1.0, 0.0, 0.9)
        initial = Walker(7)
        result = SimulatedAnnealingAlgorithm(config).execute(initial, np.random.default_rng(0))
        assert result.number_iterations == 0
        assert result.objective == 7.0
        assert result.solution is not initial

    @pytest.mark.parametrize("delta, temperature", [(1.0, 1.0), (2.0, 1.0), (5.0, 10.0)])
    def test_worsening_moves_accepted_at_metropolis_rate(self, delta, temperature):
        rng = np.random.default_rng(0)
        draws = 20_000
        accepted = sum(SimulatedAnnealingAlgorithm._accept(delta, temperature, rng) for _ in range(draws))
        assert accepted / draws == pytest.approx(math.exp(-delta / temperature), abs=0.02)

    def test_climbs_out_of_local_minimum_when_hot(self):
        # Position 0 is a local minimum: reaching -10 needs one uphill move
        config = SimulatedAnnealingConfig(50, 10.0, 0.0, 0.99)
        result = SimulatedAnnealingAlgorithm(config).execute(Ridge(0), np.random.default_rng(0))
        assert result.objective == -10.0

    def test_stays_in_local_minimum_when_frozen(self):
        config = SimulatedAnnealingConfig(50, 0.0, 0.0, 0.99)
        result = SimulatedAnnealingAlgorithm(config).execute(Ridge(0), np.random.default_rng(0))
        assert result.objective == 0.0

    def test_history_can_be_disabled(self):
        config = SimulatedAnnealingConfig(100, 1.0, 0.0, 0.9, record_history=False)
        result = SimulatedAnnealingAlgorithm(config).execute(Walker(0), np.random.default_rng(0))
        assert result.number_iterations == 100
        assert result.history == ()
        assert result.temperatures == ()


class TestTemperature:

    def test_cooldown_is_clamped_at_minimal_temperature(self):
        algorithm = SimulatedAnnealingAlgorithm(SimulatedAnnealingConfig(10, 1.0, 0.2, 0.5))
        temperatures = [1.0]
        for _ in range(4):
            temperatures.append(algorithm.cooldown(temperatures[-1]))
        assert temperatures == [1.0, 0.5, 0.25, 0.2, 0.2]

    @pytest.mark.parametrize("cooling_rate, minimal", [(0.9, 0.0), (0.5, 0.3), (1.0, 0.1), (0.0, 0.05)])
    def test_temperature_non_increasing_and_floored(self, cooling_rate, minimal):
        config = SimulatedAnnealingConfig(100, 2.0, minimal, cooling_rate)
        result = SimulatedAnnealingAlgorithm(config).execute(RandomWalker(0), np.random.default_rng(1))
        temperatures = (config.initial_temperature,) + result.temperatures
        assert len(result.temperatures) == 100
        assert all(b <= a for a, b in zip(temperatures, temperatures[1:]))
        assert all(t >= minimal for t in temperatures)

    def test_best_objective_non_increasing(self):
        config = SimulatedAnnealingConfig(500, 5.0, 0.0, 0.99)
        result = SimulatedAnnealingAlgorithm(config).execute(RandomWalker(0), np.random.default_rng(2))
        assert all(b <= a for a, b in zip(result.history, result.history[1:]))


class TestTermination:

    def test_stop_threshold_reached_counts_iteration(self):
        config = SimulatedAnnealingConfig(100, 1.0, 0.0, 0.9, stop_threshold=-5.0)
        result = SimulatedAnnealingAlgorithm(config).execute(Walker(0), np.random.default_rng(0))
        assert result.number_iterations == 5
        assert result.objective == -5.0

    def test_neighbor_failure_aborts_run(self):
        config = SimulatedAnnealingConfig(100, 1.0, 0.0, 0.9)
        algorithm = SimulatedAnnealingAlgorithm(config)
        assert algorithm.status is SimulatedAnnealingStatus.READY
        with pytest.raises(ExecutionError, match="new solution") as excinfo:
            algorithm.execute(Walker(0, fail_after=3), np.random.default_rng(0))
        assert algorithm.status is SimulatedAnnealingStatus.FAILED
        assert isinstance(excinfo.value.__cause__, NewSolutionError)


class TestKnapsack:

    def test_converges_on_reference_instance(self, small_problem):
        config = SimulatedAnnealingConfig(1_000, 10.0, 0.0, 0.999)
        rng = np.random.default_rng(654321)
        result = SimulatedAnnealingAlgorithm(config).execute(KnapsackSolution([], small_problem), rng)
        assert result.solution.value == 220
        assert result.solution.items == {1, 2}

    def test_finds_optimum_on_instance_files(self):
        problems = KnapsackProblem.load_from_file(DATA_DIR / "small_instances.txt")
        for problem in problems:
            rng = np.random.default_rng(654321)
            config = SimulatedAnnealingConfig(1_000, 10.0, 0.0, 0.999)
            result = SimulatedAnnealingAlgorithm(config).execute(KnapsackSolution([], problem), rng)
            assert result.solution.value == problem.optimal_value, (
                f"Expected {problem.optimal_value}, found {result.solution.value}."
            )

    def test_early_stop_once_threshold_reached(self, small_problem):
        config = SimulatedAnnealingConfig(1_000, 10.0, 0.0, 0.999, stop_threshold=-220.0)
        rng = np.random.default_rng(654321)
        result = SimulatedAnnealingAlgorithm(config).execute(KnapsackSolution([], small_problem), rng)
        assert result.solution.value == 220
        assert result.number_iterations < config.max_iterations
        assert len(result.history) == result.number_iterations

    def test_same_seed_gives_identical_runs(self, small_problem):
        config = SimulatedAnnealingConfig(300, 10.0, 0.0, 0.99)

        def run():
            rng = np.random.default_rng(99)
            return SimulatedAnnealingAlgorithm(config).execute(KnapsackSolution([0], small_problem), rng)

        first, second = run(), run()
        assert first.solution.items == second.solution.items
        assert first.history == second.history
        assert first.temperatures == second.temperatures
