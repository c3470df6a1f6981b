"""Cluster-level precision matrices with ridge repair to positive definiteness.

Nonzero entries follow the cluster graph and are drawn from
Uniform([-1, -0.5] U [0.5, 1]). Shared edges carry the exact value of the
previous cluster so the common subgraph is identically weighted across all
clusters. A matrix that is not positive definite gets a constant added to
its diagonal, which shifts every eigenvalue while leaving the edge values
untouched.
"""

import logging

import numpy as np

from rccsim.graph.retry import retry_until_valid, unwrap
from rccsim.graph.topology import cluster_graph, edge_count
from rccsim.graph.types import ClusterNetworks, SharedEdges, freeze
from rccsim.graph.validation import check_positive_definite

log = logging.getLogger(__name__)

MAGNITUDE_RANGE: tuple[float, float] = (0.5, 1.0)
RIDGE: float = 0.2


def signed_magnitudes(
    size: int | tuple[int, ...] | None,
    rng: np.random.Generator,
    low: float = MAGNITUDE_RANGE[0],
    high: float = MAGNITUDE_RANGE[1],
) -> np.ndarray | float:
    """Draw Uniform(low, high) magnitudes with independent random signs."""
    return rng.uniform(low, high, size) * rng.choice((-1.0, 1.0), size)


def min_eigenvalue(matrix: np.ndarray) -> float:
    """Smallest eigenvalue of a symmetric matrix."""
    return float(np.linalg.eigvalsh(matrix)[0])


def ridge_repair(matrix: np.ndarray, ridge: float = RIDGE) -> np.ndarray:
    """Shift a symmetric matrix to positive definiteness along its diagonal.

    If the smallest eigenvalue is <= 0, adds |lambda_min| + ridge to every
    diagonal entry, so the repaired smallest eigenvalue is ``ridge``.
    Off-diagonal entries are never changed.

    Returns:
        A new matrix; the input is not modified.
    """
    smallest = min_eigenvalue(matrix)
    if smallest <= 0:
        return matrix + (abs(smallest) + ridge) * np.eye(matrix.shape[0])
    return matrix.copy()


def cluster_precision(
    graph: np.ndarray,
    rng: np.random.Generator,
    previous: np.ndarray | None = None,
    shared: SharedEdges | None = None,
) -> np.ndarray:
    """Build one cluster precision matrix supported on ``graph``.

    Args:
        graph: Symmetric 0/1 adjacency matrix (p, p).
        rng: numpy random Generator for reproducibility.
        previous: Precision matrix of the previous cluster; its values are
            copied into the shared positions. None for the first cluster.
        shared: Shared node pairs (required when ``previous`` is given).

    Returns:
        Symmetric (p, p) precision matrix after ridge repair.
    """
    p = graph.shape[0]
    weights = np.tril(graph, k=-1) * signed_magnitudes((p, p), rng)
    if previous is not None and shared is not None:
        weights[shared.rows, shared.cols] = previous[shared.rows, shared.cols]
    return ridge_repair(weights + weights.T)


def generate_cluster_networks(
    p: int,
    G: int,
    topology: str,
    eprob: float,
    shared: SharedEdges,
    rng: np.random.Generator,
    max_attempts: int = 100,
) -> ClusterNetworks:
    """Generate all G cluster graphs and precision matrices jointly.

    The whole batch is regenerated from scratch until every matrix is
    strictly positive definite. The shared-edge choice is fixed by the
    caller and is not redrawn between attempts.

    Args:
        p: Number of nodes.
        G: Number of clusters.
        topology: "hub" or "random".
        eprob: Edge probability for random graphs.
        shared: Shared node pairs and their fixed status.
        rng: numpy random Generator for reproducibility.
        max_attempts: Maximum number of batch regenerations.

    Returns:
        ClusterNetworks with read-only (G, p, p) stacks.

    Raises:
        NumericalNonConvergence: If no valid batch after max_attempts.
    """

    def build() -> tuple[np.ndarray, np.ndarray]:
        graphs: list[np.ndarray] = []
        precisions: list[np.ndarray] = []
        previous = None
        for _ in range(G):
            graph = cluster_graph(p, topology, eprob, shared, rng)
            precision = cluster_precision(graph, rng, previous, shared)
            graphs.append(graph)
            precisions.append(precision)
            previous = precision
        return np.stack(graphs), np.stack(precisions)

    result = retry_until_valid(
        build,
        lambda batch: check_positive_definite(batch[1], "cluster"),
        max_attempts,
        label="Cluster network",
    )
    graphs, precisions = unwrap(result)

    log.info(
        "Cluster networks generated on attempt %d (G=%d, p=%d, edges=%s)",
        result.attempts,
        G,
        p,
        [edge_count(g) for g in graphs],
    )
    return ClusterNetworks(
        graphs=freeze(graphs),
        precisions=freeze(precisions),
        shared=shared,
        attempts=result.attempts,
    )
