"""Error taxonomy shared by generation and scoring."""


class RccSimError(Exception):
    """Base class for all simulator and scoring failures."""


class ConfigurationError(RccSimError, ValueError):
    """Raised for invalid configuration values, before any random draws."""


class InvalidClusterSizeSpec(ConfigurationError):
    """Raised when cluster sizes are neither a single size nor one per cluster."""


class NumericalNonConvergence(RccSimError):
    """Raised when a positive-definite rejection loop exhausts its attempts."""

    def __init__(self, reason: str, attempts: int) -> None:
        super().__init__(
            f"No positive definite batch after {attempts} attempts: {reason}"
        )
        self.reason = reason
        self.attempts = attempts


class DegenerateDensity(RccSimError, ArithmeticError):
    """Raised when a density is evaluated at a non-positive-definite matrix."""
