"""Cluster-level graph topologies with a fixed set of shared edges.

Hub graphs join every node to one of floor(sqrt(p)) hub nodes; random
graphs connect each node pair independently with probability eprob. In
both cases a subset of node pairs is fixed up front and its present/absent
status is forced into every cluster graph, so that the clusters overlap.
"""

import logging
import math

import numpy as np

from rccsim.graph.types import SharedEdges

log = logging.getLogger(__name__)


def lower_pairs(p: int) -> tuple[np.ndarray, np.ndarray]:
    """Row and column indices of the q = C(p, 2) strictly lower-triangular pairs."""
    return np.tril_indices(p, k=-1)


def n_hubs(p: int) -> int:
    """Number of hubs J = floor(sqrt(p))."""
    return math.isqrt(p)


def symmetrize(lower: np.ndarray) -> np.ndarray:
    """Mirror a strictly lower-triangular 0/1 matrix into a symmetric graph."""
    strict = np.tril(lower, k=-1)
    return strict + strict.T


def edge_count(graph: np.ndarray) -> int:
    """Number of undirected edges in a symmetric adjacency matrix."""
    return int(np.count_nonzero(np.tril(graph, k=-1)))


def choose_shared_edges(
    p: int,
    topology: str,
    eprob: float,
    overlap: float,
    rng: np.random.Generator,
) -> SharedEdges:
    """Pick the node pairs shared by all clusters and fix their status.

    The number of shared pairs is floor(overlap * E) where E is the hub
    edge count p - floor(sqrt(p)) for hub graphs, or the number of node
    pairs q for random graphs. Pairs are drawn uniformly without
    replacement from all q pairs, and each gets a Bernoulli(eprob)
    present/absent status.

    Args:
        p: Number of nodes.
        topology: "hub" or "random".
        eprob: Probability that a shared pair is an edge.
        overlap: Approximate proportion of shared edges.
        rng: numpy random Generator for reproducibility.

    Returns:
        SharedEdges with positions and their fixed status.
    """
    rows, cols = lower_pairs(p)
    q = rows.size
    if topology == "hub":
        n_share = math.floor(overlap * (p - n_hubs(p)))
    else:
        n_share = math.floor(overlap * q)

    picks = rng.choice(q, size=n_share, replace=False)
    present = rng.random(n_share) < eprob

    log.debug(
        "Shared edges: %d of %d pairs fixed, %d present",
        n_share,
        q,
        int(present.sum()),
    )
    return SharedEdges(rows=rows[picks], cols=cols[picks], present=present)


def hub_graph(p: int, rng: np.random.Generator) -> np.ndarray:
    """Star-shaped hub graph with floor(sqrt(p)) hubs and p - floor(sqrt(p)) edges.

    Nodes are randomly permuted and dealt round-robin into J near-equal
    groups; every member of a group is joined to the group's first node.
    """
    J = n_hubs(p)
    order = rng.permutation(p)
    groups = np.arange(p) % J

    lower = np.zeros((p, p), dtype=int)
    for h in range(J):
        members = order[groups == h]
        hub = members[0]
        for v in members[1:]:
            lower[max(hub, v), min(hub, v)] = 1
    return symmetrize(lower)


def random_graph(p: int, eprob: float, rng: np.random.Generator) -> np.ndarray:
    """Erdos-Renyi graph: each node pair is an edge with probability eprob."""
    rows, cols = lower_pairs(p)
    lower = np.zeros((p, p), dtype=int)
    lower[rows, cols] = rng.random(rows.size) < eprob
    return symmetrize(lower)


def cluster_graph(
    p: int,
    topology: str,
    eprob: float,
    shared: SharedEdges,
    rng: np.random.Generator,
) -> np.ndarray:
    """Draw one cluster graph and force the shared-edge status into it.

    Returns:
        Symmetric int 0/1 adjacency matrix of shape (p, p), zero diagonal.
    """
    if topology == "hub":
        graph = hub_graph(p, rng)
    elif topology == "random":
        graph = random_graph(p, eprob, rng)
    else:
        raise ValueError(f"Unknown topology {topology!r}")

    lower = np.tril(graph, k=-1)
    lower[shared.rows, shared.cols] = shared.present
    return symmetrize(lower)
