"""Invariant checks for generated networks.

Each check returns a list of error strings (empty = valid) so that the
rejection loops and the end-to-end validation can report every problem
at once instead of stopping at the first.
"""

import numpy as np

from rccsim.graph.types import ClusterNetworks


def check_positive_definite(matrices: np.ndarray, label: str) -> list[str]:
    """Flag every matrix in a (N, p, p) stack whose smallest eigenvalue is <= 0."""
    smallest = np.linalg.eigvalsh(matrices)[:, 0]
    return [
        f"{label} {idx + 1} not positive definite "
        f"(min eigenvalue {smallest[idx]:.3g})"
        for idx in np.flatnonzero(~(smallest > 0))
    ]


def check_support(
    graphs: np.ndarray, precisions: np.ndarray, label: str
) -> list[str]:
    """Check that each precision matrix's off-diagonal nonzeros match its graph."""
    errors: list[str] = []
    off_diagonal = ~np.eye(graphs.shape[1], dtype=bool)
    for idx, (graph, precision) in enumerate(zip(graphs, precisions)):
        mismatch = ((precision != 0) != (graph != 0)) & off_diagonal
        if mismatch.any():
            errors.append(
                f"{label} {idx + 1} precision support differs from its graph "
                f"at {int(mismatch.sum()) // 2} node pairs"
            )
    return errors


def check_shared_edges(clusters: ClusterNetworks) -> list[str]:
    """Check shared pairs have the same status everywhere and chained values.

    Every cluster graph must carry the fixed status at each shared pair, and
    from the second cluster on, the precision value at a shared pair must
    equal the previous cluster's value.
    """
    errors: list[str] = []
    shared = clusters.shared
    if len(shared) == 0:
        return errors

    for g, graph in enumerate(clusters.graphs):
        status = graph[shared.rows, shared.cols].astype(bool)
        if not np.array_equal(status, shared.present):
            errors.append(f"cluster {g + 1} graph ignores the shared-edge status")

    for g in range(1, clusters.G):
        current = clusters.precisions[g][shared.rows, shared.cols]
        previous = clusters.precisions[g - 1][shared.rows, shared.cols]
        if not np.array_equal(current, previous):
            errors.append(
                f"cluster {g + 1} shared-edge values differ from cluster {g}"
            )
    return errors
