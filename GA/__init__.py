"""Elitist genetic algorithm."""

from .config import GeneticAlgorithmConfig
from .GA import GeneticAlgorithm
from .population import Population

__all__ = ["GeneticAlgorithm", "GeneticAlgorithmConfig", "Population"]
