"""End-to-end simulation of hierarchical Gaussian graphical-model data.

configuration -> membership -> shared edges -> cluster networks ->
subject networks -> one centered Gaussian dataset per subject.
"""

import logging
from dataclasses import dataclass

import numpy as np

from rccsim.config.defaults import ANCHOR_CONFIG
from rccsim.config.experiment import SimulationConfig
from rccsim.config.hashing import config_hash
from rccsim.graph.precision import generate_cluster_networks
from rccsim.graph.subject import generate_subject_networks
from rccsim.graph.topology import choose_shared_edges
from rccsim.graph.types import ClusterNetworks, SharedEdges, freeze
from rccsim.graph.validation import (
    check_positive_definite,
    check_shared_edges,
    check_support,
)
from rccsim.reproducibility.seed import spawn_generators, stage_streams
from rccsim.simulation.membership import assign_membership
from rccsim.simulation.sampler import sample_dataset

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationData:
    """Immutable container for one simulated RCCM data set and its ground truth.

    Stacks are index-first: entry g of ``cluster_graphs`` is the graph of
    cluster g + 1, entry k of ``datasets`` is the data of subject k + 1.
    """

    datasets: np.ndarray  # float (K, n, p), column-centered observations
    cluster_graphs: np.ndarray  # int 0/1 (G, p, p)
    cluster_precisions: np.ndarray  # float (G, p, p)
    subject_graphs: np.ndarray  # int 0/1 (K, p, p)
    subject_precisions: np.ndarray  # float (K, p, p)
    membership: np.ndarray  # int (K,), labels 1..G
    shared: SharedEdges
    cluster_attempts: int
    subject_attempts: int
    seed: int
    config_hash: str

    @property
    def K(self) -> int:
        return int(self.subject_precisions.shape[0])

    @property
    def G(self) -> int:
        return int(self.cluster_precisions.shape[0])

    @property
    def p(self) -> int:
        return int(self.cluster_precisions.shape[1])

    @property
    def n(self) -> int:
        return int(self.datasets.shape[1])


def simulate(config: SimulationConfig = ANCHOR_CONFIG) -> SimulationData:
    """Simulate cluster and subject networks and the subjects' data.

    All randomness comes from per-stage streams derived from config.seed,
    so the same config always reproduces the same SimulationData.

    Args:
        config: Full simulation configuration (validated on construction).

    Returns:
        SimulationData with data sets, networks and memberships.

    Raises:
        NumericalNonConvergence: If a positive-definite rejection loop
            exhausts config.max_attempts.
    """
    net = config.network
    subj = config.subjects
    membership = assign_membership(net.G, subj.clust_sizes)
    streams = stage_streams(config.seed)

    log.info(
        "Simulating G=%d clusters, K=%d subjects, p=%d, n=%d (%s, seed=%d)",
        net.G,
        membership.size,
        net.p,
        subj.n,
        net.topology,
        config.seed,
    )

    shared = choose_shared_edges(
        net.p, net.topology, net.eprob, net.overlap, streams["shared_edges"]
    )
    clusters = generate_cluster_networks(
        net.p,
        net.G,
        net.topology,
        net.eprob,
        shared,
        streams["clusters"],
        max_attempts=config.max_attempts,
    )
    subjects = generate_subject_networks(
        clusters,
        membership,
        subj.rho,
        subj.esd,
        streams["subjects"],
        max_attempts=config.max_attempts,
    )

    sampling = spawn_generators(streams["sampling"], subjects.K)
    datasets = np.stack(
        [
            sample_dataset(precision, subj.n, rng)
            for precision, rng in zip(subjects.precisions, sampling)
        ]
    )

    return SimulationData(
        datasets=freeze(datasets),
        cluster_graphs=clusters.graphs,
        cluster_precisions=clusters.precisions,
        subject_graphs=subjects.graphs,
        subject_precisions=subjects.precisions,
        membership=subjects.membership,
        shared=shared,
        cluster_attempts=clusters.attempts,
        subject_attempts=subjects.attempts,
        seed=config.seed,
        config_hash=config_hash(config),
    )


def validate_simulation(data: SimulationData, atol: float = 1e-8) -> list[str]:
    """Check a simulation against the model's structural invariants.

    Checks:
    1. Every cluster and subject precision matrix is positive definite
    2. Precision supports match their graphs
    3. Shared edges carry identical status and chained values
    4. Membership labels lie in 1..G and cover every cluster
    5. Data sets have K entries of shape (n, p) with column means ~0

    Returns:
        List of error strings (empty = valid simulation).
    """
    errors: list[str] = []

    errors += check_positive_definite(data.cluster_precisions, "cluster")
    errors += check_positive_definite(data.subject_precisions, "subject")
    errors += check_support(data.cluster_graphs, data.cluster_precisions, "cluster")
    errors += check_support(data.subject_graphs, data.subject_precisions, "subject")
    errors += check_shared_edges(
        ClusterNetworks(
            graphs=data.cluster_graphs,
            precisions=data.cluster_precisions,
            shared=data.shared,
            attempts=data.cluster_attempts,
        )
    )

    labels = data.membership
    if labels.size != data.K:
        errors.append(f"membership has {labels.size} labels for {data.K} subjects")
    if labels.size and (labels.min() < 1 or labels.max() > data.G):
        errors.append(f"membership labels outside 1..{data.G}")
    missing = set(range(1, data.G + 1)) - set(labels.tolist())
    if missing:
        errors.append(f"clusters without subjects: {sorted(missing)}")

    if data.datasets.shape[0] != data.K or data.datasets.shape[2] != data.p:
        errors.append(
            f"datasets shape {data.datasets.shape} does not match "
            f"K={data.K}, p={data.p}"
        )
    elif not np.allclose(data.datasets.mean(axis=1), 0.0, atol=atol):
        errors.append("datasets are not column-centered")

    return errors
