"""Capability contracts, errors and result types shared by the algorithms."""

from .errors import AlgorithmError, ConfigurationError, ExecutionError
from .problem import (
    GeneticCompatible,
    NewSolutionError,
    ProblemError,
    ProblemInitializationError,
    SimulatedAnnealingCompatible,
    Solution,
)
from .result import GeneticAlgorithmResult, SimulationResult

__all__ = [
    "AlgorithmError",
    "ConfigurationError",
    "ExecutionError",
    "GeneticCompatible",
    "NewSolutionError",
    "ProblemError",
    "ProblemInitializationError",
    "SimulatedAnnealingCompatible",
    "Solution",
    "GeneticAlgorithmResult",
    "SimulationResult",
]
