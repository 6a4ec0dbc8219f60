from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from Core.errors import ConfigurationError


class SimulatedAnnealingStatus(enum.Enum):
    READY = "ready"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class SimulatedAnnealingConfig:
    """Parameters of a simulated annealing run, validated on construction."""
    max_iterations: int
    initial_temperature: float
    # Floor below which the temperature gets clipped
    minimal_temperature: float
    cooling_rate: float
    stop_threshold: Optional[float] = None
    # Keep per-iteration best objectives and temperatures in the result
    record_history: bool = True

    def __post_init__(self) -> None:
        if self.max_iterations < 0:
            raise ConfigurationError("the maximum number of iterations cannot be negative.")
        if not 0.0 <= self.minimal_temperature:
            raise ConfigurationError("the minimal temperature should be non-negative.")
        if not self.minimal_temperature <= self.initial_temperature:
            raise ConfigurationError(
                "the initial temperature should be higher than the minimal temperature."
            )
        if not 0.0 <= self.cooling_rate <= 1.0:
            raise ConfigurationError("the cooling rate should be between 0 and 1.")

    @classmethod
    def default(cls) -> "SimulatedAnnealingConfig":
        return cls(
            max_iterations=1_000,
            initial_temperature=1.0,
            minimal_temperature=0.0,
            cooling_rate=0.99,
            stop_threshold=None,
        )
