"""Mixture log-likelihood and AIC for fitted random covariance clustering models.

A fitted model consists of K subject-level precision matrices, G cluster-level
precision matrices and a G x K matrix of cluster weights. Each subject
contributes a Gaussian term (its data under its own precision matrix) and a
cluster term (its precision matrix under a Wishart centered at the cluster
precision matrix, or a weighted mixture of such Wisharts).
"""

import logging
import math
from dataclasses import dataclass
from typing import Union

import numpy as np
from scipy.special import logsumexp

from rccsim.evaluation.support import ACTIVE_THRESHOLD, adjacency
from rccsim.evaluation.wishart import log_determinant, wishart_density

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Hard:
    """Subject assigned entirely to one cluster (0-based row of the weight matrix)."""

    cluster: int


@dataclass(frozen=True)
class Soft:
    """Subject spread over clusters with the given weights (summing to 1)."""

    weights: np.ndarray  # float array of length G


MembershipWeighting = Union[Hard, Soft]


def weighting_from_column(column: np.ndarray) -> MembershipWeighting:
    """Classify one weight-matrix column: Hard iff exactly one entry equals 1."""
    column = np.asarray(column, dtype=np.float64)
    ones = np.flatnonzero(column == 1.0)
    if ones.size == 1:
        return Hard(cluster=int(ones[0]))
    weights = column.copy()
    weights.flags.writeable = False
    return Soft(weights=weights)


def membership_weightings(ws: np.ndarray) -> tuple[MembershipWeighting, ...]:
    """Classify every column of a G x K weight matrix once.

    Raises:
        ValueError: If ``ws`` is not 2-D, has negative entries, or a
            column does not sum to 1.
    """
    ws = np.asarray(ws, dtype=np.float64)
    if ws.ndim != 2:
        raise ValueError(f"ws must be a G x K matrix, got shape {ws.shape}")
    if (ws < 0).any():
        raise ValueError("ws must not contain negative weights")
    sums = ws.sum(axis=0)
    bad = np.flatnonzero(~np.isclose(sums, 1.0))
    if bad.size:
        raise ValueError(
            f"ws columns must sum to 1; subjects {(bad + 1).tolist()} do not"
        )
    return tuple(weighting_from_column(ws[:, k]) for k in range(ws.shape[1]))


def gaussian_log_likelihood(data: np.ndarray, precision: np.ndarray) -> float:
    """Log-likelihood of the rows of ``data`` under N(0, precision^-1).

    Raises:
        DegenerateDensity: If ``precision`` is not positive definite.
    """
    data = np.asarray(data, dtype=np.float64)
    n, p = data.shape
    logdet = log_determinant(precision, "precision")
    quad = float(np.sum((data @ precision) * data))
    return 0.5 * n * logdet - 0.5 * quad - 0.5 * n * p * math.log(2 * math.pi)


def cluster_term(
    subject_precision: np.ndarray,
    cluster_precisions: np.ndarray,
    weighting: MembershipWeighting,
    nu: float,
) -> float:
    """Wishart contribution of one subject's precision matrix.

    Hard: the Wishart log-density centered at the assigned cluster. Soft:
    log(sum_g w_g f_g), the log of the natural-scale mixture, evaluated as
    a weighted logsumexp of the log-densities so it neither underflows nor
    degenerates into a weighted sum of logs. Clusters with zero weight are
    skipped.
    """
    if isinstance(weighting, Hard):
        return wishart_density(
            subject_precision, cluster_precisions[weighting.cluster], nu, log=True
        )

    active = np.flatnonzero(weighting.weights > 0)
    log_densities = np.array(
        [
            wishart_density(subject_precision, cluster_precisions[g], nu, log=True)
            for g in active
        ]
    )
    return float(logsumexp(log_densities, b=weighting.weights[active]))


def _check_shapes(
    subject_precisions: np.ndarray,
    cluster_precisions: np.ndarray,
    ws: np.ndarray,
    datasets,
) -> None:
    K = len(subject_precisions)
    G = len(cluster_precisions)
    if ws.shape != (G, K):
        raise ValueError(f"ws has shape {ws.shape}, expected (G, K) = ({G}, {K})")
    if len(datasets) != K:
        raise ValueError(f"got {len(datasets)} datasets for {K} subjects")


def mixture_log_likelihood(
    subject_precisions: np.ndarray,
    cluster_precisions: np.ndarray,
    ws: np.ndarray,
    datasets,
    nu: float,
) -> float:
    """Total log-likelihood of a fitted model.

    Args:
        subject_precisions: K subject precision matrices, shape (K, p, p).
        cluster_precisions: G cluster precision matrices, shape (G, p, p).
        ws: G x K cluster weights; each column sums to 1.
        datasets: K data matrices, each (n_k, p).
        nu: Wishart degrees of freedom (the model's lambda2).

    Returns:
        Sum over subjects of the Gaussian term plus the cluster term.

    Raises:
        DegenerateDensity: If any precision matrix is not positive definite.
    """
    subject_precisions = np.asarray(subject_precisions, dtype=np.float64)
    cluster_precisions = np.asarray(cluster_precisions, dtype=np.float64)
    ws = np.asarray(ws, dtype=np.float64)
    _check_shapes(subject_precisions, cluster_precisions, ws, datasets)

    total = 0.0
    for precision, data, weighting in zip(
        subject_precisions, datasets, membership_weightings(ws)
    ):
        total += gaussian_log_likelihood(data, precision)
        total += cluster_term(precision, cluster_precisions, weighting, nu)
    return total


def degrees_of_freedom(
    subject_precisions: np.ndarray,
    cluster_precisions: np.ndarray,
    threshold: float = ACTIVE_THRESHOLD,
) -> int:
    """Count active strictly-lower-triangular entries over all K + G matrices."""
    dof = 0
    for stack in (subject_precisions, cluster_precisions):
        stack = np.asarray(stack)
        rows, cols = np.tril_indices(stack.shape[-1], k=-1)
        dof += int(np.count_nonzero(adjacency(stack[:, rows, cols], threshold)))
    return dof


@dataclass(frozen=True, slots=True)
class ModelScore:
    """Log-likelihood, degrees of freedom and AIC of one fitted model."""

    log_likelihood: float
    dof: int
    aic: float


def score_model(
    subject_precisions: np.ndarray,
    cluster_precisions: np.ndarray,
    ws: np.ndarray,
    datasets,
    nu: float,
) -> ModelScore:
    """Score a fitted model: log-likelihood, dof and AIC = 2 dof - 2 logLik."""
    log_lik = mixture_log_likelihood(
        subject_precisions, cluster_precisions, ws, datasets, nu
    )
    dof = degrees_of_freedom(subject_precisions, cluster_precisions)
    score = ModelScore(log_likelihood=log_lik, dof=dof, aic=2 * dof - 2 * log_lik)
    log.debug("Model score: logLik=%.4f, dof=%d, AIC=%.4f", log_lik, dof, score.aic)
    return score


def aic(
    subject_precisions: np.ndarray,
    cluster_precisions: np.ndarray,
    ws: np.ndarray,
    datasets,
    nu: float,
) -> float:
    """Akaike information criterion, 2 dof - 2 logLik, of a fitted model."""
    return score_model(subject_precisions, cluster_precisions, ws, datasets, nu).aic
