"""Subject-level networks perturbed from their cluster's network.

Each subject starts from an exact copy of its cluster graph, with the
cluster's edge values plus N(0, esd^2) noise. Then floor(rho * E) node
pairs, chosen regardless of their current status, have their edge toggled:
new edges get a freshly drawn signed magnitude, removed edges are zeroed.
"""

import logging
import math

import numpy as np

from rccsim.graph.precision import ridge_repair, signed_magnitudes
from rccsim.graph.retry import retry_until_valid, unwrap
from rccsim.graph.topology import lower_pairs, symmetrize
from rccsim.graph.types import ClusterNetworks, SubjectNetworks, freeze
from rccsim.graph.validation import check_positive_definite
from rccsim.reproducibility.seed import spawn_generators

log = logging.getLogger(__name__)


def perturb_subject(
    cluster_graph: np.ndarray,
    cluster_precision: np.ndarray,
    rho: float,
    esd: float,
    rng: np.random.Generator,
) -> tuple[np.ndarray, np.ndarray]:
    """Derive one subject's graph and precision matrix from its cluster.

    Args:
        cluster_graph: Symmetric 0/1 cluster adjacency matrix (p, p).
        cluster_precision: Cluster precision matrix (p, p).
        rho: Proportion of the cluster's edge count to toggle.
        esd: Standard deviation of the noise added to retained edges.
        rng: numpy random Generator for reproducibility.

    Returns:
        (graph, precision) for the subject, both (p, p) and symmetric.
    """
    p = cluster_graph.shape[0]
    lower = np.tril(cluster_graph, k=-1)
    # Draw order per subject: noise, then swap positions, then new-edge values.
    values = lower * (cluster_precision + rng.normal(0.0, esd, size=(p, p)))

    n_swaps = math.floor(rho * int(lower.sum()))
    if n_swaps > 0:
        rows, cols = lower_pairs(p)
        picks = rng.choice(rows.size, size=n_swaps, replace=False)
        for r, c in zip(rows[picks], cols[picks]):
            lower[r, c] = 1 - lower[r, c]
            values[r, c] = signed_magnitudes(None, rng) if lower[r, c] else 0.0

    return symmetrize(lower), ridge_repair(values + values.T)


def generate_subject_networks(
    clusters: ClusterNetworks,
    membership: np.ndarray,
    rho: float,
    esd: float,
    rng: np.random.Generator,
    max_attempts: int = 100,
) -> SubjectNetworks:
    """Generate all K subject graphs and precision matrices jointly.

    Every subject draws from its own child stream of ``rng``; on each
    attempt the whole batch is regenerated until all K matrices are
    strictly positive definite.

    Args:
        clusters: Cluster-level networks.
        membership: Cluster label (1..G) for each of the K subjects.
        rho: Proportion of differential edges.
        esd: Standard deviation of edge-value noise.
        rng: Parent Generator; per-subject streams are spawned from it.
        max_attempts: Maximum number of batch regenerations.

    Returns:
        SubjectNetworks with read-only (K, p, p) stacks.

    Raises:
        NumericalNonConvergence: If no valid batch after max_attempts.
    """
    membership = np.asarray(membership, dtype=int)
    streams = spawn_generators(rng, membership.size)

    def build() -> tuple[np.ndarray, np.ndarray]:
        pairs = [
            perturb_subject(
                clusters.graphs[z - 1], clusters.precisions[z - 1], rho, esd, stream
            )
            for z, stream in zip(membership, streams)
        ]
        return (
            np.stack([graph for graph, _ in pairs]),
            np.stack([precision for _, precision in pairs]),
        )

    result = retry_until_valid(
        build,
        lambda batch: check_positive_definite(batch[1], "subject"),
        max_attempts,
        label="Subject network",
    )
    graphs, precisions = unwrap(result)

    log.info(
        "Subject networks generated on attempt %d (K=%d, rho=%.2f, esd=%.3g)",
        result.attempts,
        membership.size,
        rho,
        esd,
    )
    return SubjectNetworks(
        graphs=freeze(graphs),
        precisions=freeze(precisions),
        membership=freeze(membership.copy()),
        attempts=result.attempts,
    )
