"""Network data structures for cluster- and subject-level generation."""

from dataclasses import dataclass

import numpy as np


def freeze(array: np.ndarray) -> np.ndarray:
    """Mark an array read-only and return it."""
    array.flags.writeable = False
    return array


@dataclass(frozen=True)
class SharedEdges:
    """Node pairs whose presence is forced identically into every cluster graph.

    Positions are strictly lower-triangular (row > col). Uses frozen=True
    but omits slots=True since numpy arrays don't interact well with
    __slots__.
    """

    rows: np.ndarray  # int array of length numShare
    cols: np.ndarray  # int array of length numShare
    present: np.ndarray  # bool array of length numShare, fixed edge status

    def __len__(self) -> int:
        return int(self.rows.size)


@dataclass(frozen=True)
class ClusterNetworks:
    """Immutable container for the G cluster-level graphs and precision matrices."""

    graphs: np.ndarray  # int 0/1 array (G, p, p), symmetric, zero diagonal
    precisions: np.ndarray  # float array (G, p, p), symmetric positive definite
    shared: SharedEdges
    attempts: int  # rejection-loop attempts used to obtain the batch

    @property
    def G(self) -> int:
        return int(self.graphs.shape[0])

    @property
    def p(self) -> int:
        return int(self.graphs.shape[1])


@dataclass(frozen=True)
class SubjectNetworks:
    """Immutable container for the K subject-level graphs and precision matrices."""

    graphs: np.ndarray  # int 0/1 array (K, p, p)
    precisions: np.ndarray  # float array (K, p, p), symmetric positive definite
    membership: np.ndarray  # int array of length K, cluster labels 1..G
    attempts: int

    @property
    def K(self) -> int:
        return int(self.graphs.shape[0])
