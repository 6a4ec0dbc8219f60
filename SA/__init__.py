"""Simulated annealing."""

from .config import SimulatedAnnealingConfig, SimulatedAnnealingStatus
from .SA import SimulatedAnnealingAlgorithm

__all__ = ["SimulatedAnnealingAlgorithm", "SimulatedAnnealingConfig", "SimulatedAnnealingStatus"]
