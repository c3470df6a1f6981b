"""Closed-form Wishart density over symmetric positive definite matrices.

The distribution is parameterized by its mean M = nu * V rather than the
scale matrix V, which is how subject-level precision matrices relate to
their cluster-level mean in the random covariance clustering model.
"""

import math
import sys

import numpy as np
from scipy.special import gammaln

from rccsim.errors import DegenerateDensity

_MAX_LOG_FLOAT: float = math.log(sys.float_info.max)


def log_determinant(matrix: np.ndarray, name: str = "matrix") -> float:
    """log|matrix| via Cholesky, which also certifies positive definiteness.

    Raises:
        DegenerateDensity: If ``matrix`` is not strictly positive definite.
    """
    try:
        chol = np.linalg.cholesky(matrix)
    except np.linalg.LinAlgError as exc:
        raise DegenerateDensity(f"{name} is not positive definite") from exc
    return float(2.0 * np.log(np.diag(chol)).sum())


def wishart_density(
    x: np.ndarray, mean: np.ndarray, nu: float, log: bool = False
) -> float:
    """Wishart density at ``x`` with mean matrix ``mean`` and ``nu`` degrees of freedom.

    log f = (nu - p - 1)/2 log|x| - nu/2 tr(mean^-1 x)
            - [ (nu p / 2) log 2 + (nu / 2) log|mean / nu|
                + (p (p - 1) / 4) log pi
                + sum_{j=1..p} log Gamma(nu/2 + (1 - j)/2) ]

    Both ``x`` and ``mean`` are symmetrized (averaged with their transpose)
    before use.

    Args:
        x: Symmetric (p, p) point at which to evaluate the density.
        mean: Symmetric (p, p) mean matrix, nu times the scale matrix.
        nu: Degrees of freedom.
        log: Return the log-density instead of the density.

    Returns:
        The density, or its logarithm if ``log`` is True.

    Raises:
        DegenerateDensity: If ``x`` or ``mean / nu`` is not positive definite,
            if the natural-scale density overflows a float,
            or the density is not finite.
    """
    x = np.asarray(x, dtype=np.float64)
    mean = np.asarray(mean, dtype=np.float64)
    x = (x + x.T) / 2
    mean = (mean + mean.T) / 2
    if not nu > 0:
        raise DegenerateDensity(f"degrees of freedom must be positive, got {nu}")
    p = x.shape[0]

    logdet_x = log_determinant(x, "x")
    logdet_scale = log_determinant(mean / nu, "mean / nu")
    trace = float(np.trace(np.linalg.solve(mean, x)))

    j = np.arange(1, p + 1)
    log_norm = (
        nu * p / 2 * math.log(2)
        + nu / 2 * logdet_scale
        + p * (p - 1) / 4 * math.log(math.pi)
        + float(gammaln(nu / 2 + (1 - j) / 2).sum())
    )
    log_f = (nu - p - 1) / 2 * logdet_x - nu / 2 * trace - log_norm

    if not math.isfinite(log_f):
        raise DegenerateDensity(
            f"Wishart log-density is not finite ({log_f}) for nu={nu}, p={p}"
        )
    if log:
        return log_f
    if log_f > _MAX_LOG_FLOAT:
        raise DegenerateDensity(
            f"Wishart density overflows on the natural scale (log f = {log_f:.1f}); "
            "use log=True"
        )
    return math.exp(log_f)
