class AlgorithmError(RuntimeError):
    """Base class for errors raised by the optimization algorithms."""

    prefix = "Algorithm error"

    def __init__(self, reason: str):
        super().__init__(f"{self.prefix}: {reason}")
        self.reason = reason


class ConfigurationError(AlgorithmError):
    """An algorithm configuration violates one of its invariants."""

    prefix = "Error generating the configuration object"


class ExecutionError(AlgorithmError):
    """A run could not complete."""

    prefix = "Error when running the algorithm"
