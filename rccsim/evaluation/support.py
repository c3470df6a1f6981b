"""Edge supports, co-membership matrices and the Rand index."""

import numpy as np

ACTIVE_THRESHOLD: float = 0.001


def adjacency(matrix: np.ndarray, threshold: float = ACTIVE_THRESHOLD) -> np.ndarray:
    """Boolean map of the entries whose magnitude exceeds ``threshold``."""
    return np.abs(np.asarray(matrix)) > threshold


def membership_to_comatrix(labels: np.ndarray) -> np.ndarray:
    """K x K 0/1 matrix with 1 where two subjects share a nonzero label.

    Label 0 marks an unassigned subject, which is co-clustered with nobody
    (its row and column are all 0).
    """
    labels = np.asarray(labels)
    assigned = labels != 0
    together = (labels[:, None] == labels[None, :]) & assigned[:, None] & assigned[None, :]
    return together.astype(int)


def rand_index(a: np.ndarray, b: np.ndarray) -> float:
    """Rand index between two label vectors.

    The fraction of the C(K, 2) subject pairs that are either together in
    both assignments or apart in both, read off the lower triangles of
    the two co-membership matrices.

    Raises:
        ValueError: If the vectors differ in length or have fewer than 2 labels.
    """
    a = np.asarray(a)
    b = np.asarray(b)
    if a.shape != b.shape or a.ndim != 1:
        raise ValueError(
            f"label vectors must be 1-D and equal length, got {a.shape} and {b.shape}"
        )
    if a.size < 2:
        raise ValueError("rand_index needs at least 2 subjects")

    rows, cols = np.tril_indices(a.size, k=-1)
    together_a = membership_to_comatrix(a)[rows, cols]
    together_b = membership_to_comatrix(b)[rows, cols]
    return float(np.mean(together_a == together_b))
