from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from Core.errors import ConfigurationError


@dataclass(frozen=True)
class GeneticAlgorithmConfig:
    """Parameters of a genetic algorithm run, validated on construction."""
    number_generations: int
    population_size: int
    mutation_rate: float
    # Pairs of top-ranked parents mated at each generation
    number_pairs_parents: int
    # Stop as soon as the best objective reaches this value
    stop_threshold: Optional[float] = None
    # Keep the best objective of every generation in the result
    record_history: bool = True

    def __post_init__(self) -> None:
        if self.number_generations <= 0:
            raise ConfigurationError("the number of generations should be positive.")
        if self.population_size <= 0:
            raise ConfigurationError("the population size should be positive.")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ConfigurationError("the mutation rate should be between 0 and 1.")
        if self.number_pairs_parents < 0:
            raise ConfigurationError("the number of pairs of parents cannot be negative.")
        if 2 * self.number_pairs_parents > self.population_size:
            raise ConfigurationError(
                "the population size should be higher than the number of parents selected at each generation."
            )

    @classmethod
    def default(cls) -> "GeneticAlgorithmConfig":
        return cls(
            number_generations=100,
            population_size=100,
            mutation_rate=0.1,
            number_pairs_parents=2,
            stop_threshold=None,
        )
