"""Cluster- and subject-level network generation with positive-definite repair."""

from rccsim.graph.precision import (
    cluster_precision,
    generate_cluster_networks,
    min_eigenvalue,
    ridge_repair,
    signed_magnitudes,
)
from rccsim.graph.retry import Attempt, Failed, Success, retry_until_valid, unwrap
from rccsim.graph.subject import generate_subject_networks, perturb_subject
from rccsim.graph.topology import (
    choose_shared_edges,
    cluster_graph,
    edge_count,
    hub_graph,
    lower_pairs,
    n_hubs,
    random_graph,
)
from rccsim.graph.types import ClusterNetworks, SharedEdges, SubjectNetworks
from rccsim.graph.validation import (
    check_positive_definite,
    check_shared_edges,
    check_support,
)

__all__ = [
    "Attempt",
    "ClusterNetworks",
    "Failed",
    "SharedEdges",
    "SubjectNetworks",
    "Success",
    "check_positive_definite",
    "check_shared_edges",
    "check_support",
    "choose_shared_edges",
    "cluster_graph",
    "cluster_precision",
    "edge_count",
    "generate_cluster_networks",
    "generate_subject_networks",
    "hub_graph",
    "lower_pairs",
    "min_eigenvalue",
    "n_hubs",
    "perturb_subject",
    "random_graph",
    "retry_until_valid",
    "ridge_repair",
    "signed_magnitudes",
    "unwrap",
]
