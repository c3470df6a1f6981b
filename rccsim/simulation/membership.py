"""Cluster membership labels and the matching hard weight matrix."""

from collections.abc import Sequence
from numbers import Integral

import numpy as np

from rccsim.errors import InvalidClusterSizeSpec


def expand_cluster_sizes(G: int, clust_sizes: int | Sequence[int]) -> tuple[int, ...]:
    """Return one cluster size per cluster.

    A single size (int or length-1 sequence) is shared by all G clusters;
    a length-G sequence is used as is.

    Raises:
        InvalidClusterSizeSpec: If the sequence length is neither 1 nor G.
    """
    if isinstance(clust_sizes, Integral):
        clust_sizes = (clust_sizes,)
    sizes = tuple(int(s) for s in clust_sizes)
    if len(sizes) == 1:
        return sizes * G
    if len(sizes) != G:
        raise InvalidClusterSizeSpec(
            f"clust_sizes must have length 1 or G ({G}), got length {len(sizes)}"
        )
    return sizes


def assign_membership(G: int, clust_sizes: int | Sequence[int]) -> np.ndarray:
    """Sorted cluster labels 1..G, each repeated by its cluster size.

    Example: G=2, clust_sizes=(3, 2) -> [1, 1, 1, 2, 2].
    """
    sizes = expand_cluster_sizes(G, clust_sizes)
    return np.repeat(np.arange(1, G + 1), sizes)


def hard_weights(membership: np.ndarray, G: int) -> np.ndarray:
    """G x K one-hot weight matrix for a vector of labels 1..G.

    Column k has a single 1 in row membership[k] - 1. Useful for scoring
    the ground-truth assignment of a simulation.
    """
    membership = np.asarray(membership, dtype=int)
    if membership.size and (membership.min() < 1 or membership.max() > G):
        raise ValueError(f"membership labels must lie in 1..{G}")
    ws = np.zeros((G, membership.size))
    ws[membership - 1, np.arange(membership.size)] = 1.0
    return ws
