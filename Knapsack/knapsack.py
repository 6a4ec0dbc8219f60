from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Union

import numpy as np

from Core.problem import NewSolutionError, ProblemInitializationError


class KnapsackProblem:
    """0/1 knapsack instance: a fixed table of item values and weights plus a capacity."""

    def __init__(
        self,
        values: Iterable[float],
        weights: Iterable[float],
        max_weight: float,
        optimal_value: Optional[float] = None,
        *,
        max_flips: int = 2,
    ) -> None:
        vals = np.asarray(list(values), dtype=float)
        wts = np.asarray(list(weights), dtype=float)
        if vals.shape != wts.shape:
            raise ProblemInitializationError("values and weights must have matching lengths")
        if max_flips < 1:
            raise ProblemInitializationError("a neighbor should flip at least one item")

        self.values = vals
        self.weights = wts
        self.max_weight = float(max_weight)
        self.optimal_value = None if optimal_value is None else float(optimal_value)
        # Upper bound on the items flipped to reach a neighbor
        self.max_flips = int(max_flips)

    @property
    def number_items(self) -> int:
        return int(self.values.size)

    def __repr__(self) -> str:
        return (f"KnapsackProblem(number_items={self.number_items}, max_weight={self.max_weight}, "
                f"optimal_value={self.optimal_value})")

    @classmethod
    def load_from_file(cls, file_path: Union[str, Path]) -> List["KnapsackProblem"]:
        """
        Loads every instance stored in `file_path`.

        Instances are separated by a line holding `---` and consist of four
        lines: max weight, comma-separated weights, comma-separated values and
        the optimal value.

        Raises:
            ProblemInitializationError: if an instance is malformed.
        """
        try:
            contents = Path(file_path).read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ProblemInitializationError(f"{file_path} is not valid UTF-8 text") from exc

        chunks: List[List[str]] = [[]]
        for line in contents.splitlines():
            if line.strip() == "---":
                chunks.append([])
            elif line.strip():
                chunks[-1].append(line.strip())

        problems = []
        for index, lines in enumerate(chunk for chunk in chunks if chunk):
            if len(lines) != 4:
                raise ProblemInitializationError(
                    f"instance {index} in {file_path} has {len(lines)} lines, expected 4"
                )
            try:
                max_weight = float(lines[0])
                weights = [float(x) for x in lines[1].split(",")]
                values = [float(x) for x in lines[2].split(",")]
                optimal_value = float(lines[3])
            except ValueError as exc:
                raise ProblemInitializationError(
                    f"instance {index} in {file_path} contains a non-numeric entry"
                ) from exc
            problems.append(cls(values, weights, max_weight, optimal_value))
        return problems


class KnapsackSolution:
    """
    Set of selected items for a knapsack problem.

    The objective is the negated total value, or 0.0 (the worst possible
    score) when the selection exceeds the capacity.
    """

    def __init__(self, items: Iterable[int], problem: KnapsackProblem):
        self.items = set(int(i) for i in items)
        if any(i < 0 or i >= problem.number_items for i in self.items):
            raise ProblemInitializationError("item index out of range")
        self.problem = problem
        self.value = float(sum(problem.values[i] for i in self.items))
        self.weight = float(sum(problem.weights[i] for i in self.items))

    @classmethod
    def new_random(
        cls,
        number_items_in_set: Optional[int],
        problem: KnapsackProblem,
        rng: np.random.Generator,
    ) -> "KnapsackSolution":
        """Draws `number_items_in_set` distinct items; None draws the set size too."""
        if number_items_in_set is None:
            number_items_in_set = int(rng.integers(0, problem.number_items + 1))
        if not 0 <= number_items_in_set <= problem.number_items:
            raise ProblemInitializationError(
                f"cannot select {number_items_in_set} items out of {problem.number_items}"
            )
        items = rng.choice(problem.number_items, size=number_items_in_set, replace=False)
        return cls(items.tolist(), problem)

    def objective(self) -> float:
        if self.weight > self.problem.max_weight:
            return 0.0  # Worst possible objective
        return -self.value

    def copy(self) -> "KnapsackSolution":
        clone = KnapsackSolution.__new__(KnapsackSolution)
        clone.items = set(self.items)
        clone.problem = self.problem
        clone.value = self.value
        clone.weight = self.weight
        return clone

    def __lt__(self, other: "KnapsackSolution") -> bool:
        return self.objective() < other.objective()

    def __repr__(self) -> str:
        return f"KnapsackSolution(items={sorted(self.items)}, value={self.value}, weight={self.weight})"

    # ---- Simulated annealing ----
    def new_solution(self, rng: np.random.Generator) -> "KnapsackSolution":
        """Returns a copy with the membership of 1 to `max_flips` distinct random items flipped."""
        number_items = self.problem.number_items
        if number_items == 0:
            raise NewSolutionError("the problem has no items")
        number_flips = int(rng.integers(1, min(self.problem.max_flips, number_items) + 1))
        neighbor = self.copy()
        for item in rng.choice(number_items, size=number_flips, replace=False):
            neighbor._flip(int(item))
        return neighbor

    # ---- Genetic algorithm ----
    def mutate(self, mutation_rate: float, rng: np.random.Generator) -> None:
        """Flips the membership of one random item with probability `mutation_rate`."""
        if rng.random() < mutation_rate:
            self._flip(self._random_item(rng))

    def generate_children_with(self, other: "KnapsackSolution", rng: np.random.Generator) -> List["KnapsackSolution"]:
        """Splits the union of both parents' items uniformly at random between two children."""
        if other.problem is not self.problem:
            raise NewSolutionError("parents belong to different problems")
        first: List[int] = []
        second: List[int] = []
        for item in sorted(self.items | other.items):
            (first if rng.random() < 0.5 else second).append(item)
        return [KnapsackSolution(first, self.problem), KnapsackSolution(second, self.problem)]

    # ---- internal helpers ----
    def _random_item(self, rng: np.random.Generator) -> int:
        if self.problem.number_items == 0:
            raise NewSolutionError("the problem has no items")
        return int(rng.integers(0, self.problem.number_items))

    def _flip(self, item: int) -> None:
        if item in self.items:
            self.items.remove(item)
            self.value -= float(self.problem.values[item])
            self.weight -= float(self.problem.weights[item])
        else:
            self.items.add(item)
            self.value += float(self.problem.values[item])
            self.weight += float(self.problem.weights[item])
