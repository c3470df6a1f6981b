"""Gaussian observations for each subject's precision matrix."""

import numpy as np

from rccsim.errors import DegenerateDensity


def center_columns(data: np.ndarray) -> np.ndarray:
    """Subtract each column's mean; the column variances are left as is."""
    return data - data.mean(axis=0, keepdims=True)


def sample_dataset(
    precision: np.ndarray, n: int, rng: np.random.Generator
) -> np.ndarray:
    """Draw n rows i.i.d. from N(0, precision^-1) and center the columns.

    Args:
        precision: Symmetric positive definite precision matrix (p, p).
        n: Number of observations.
        rng: numpy random Generator for reproducibility.

    Returns:
        Column-centered data of shape (n, p).

    Raises:
        DegenerateDensity: If ``precision`` is not strictly positive definite.
    """
    try:
        chol = np.linalg.cholesky(precision)
    except np.linalg.LinAlgError as exc:
        raise DegenerateDensity(
            "cannot sample from a precision matrix that is not positive definite"
        ) from exc

    # With precision = L L^T, x = L^-T z has covariance precision^-1.
    z = rng.standard_normal((n, precision.shape[0]))
    data = np.linalg.solve(chol.T, z.T).T
    return center_columns(data)
