"""0/1 knapsack reference problem."""

from .knapsack import KnapsackProblem, KnapsackSolution

__all__ = ["KnapsackProblem", "KnapsackSolution"]
