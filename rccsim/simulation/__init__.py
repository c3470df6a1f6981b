"""Simulation of RCCM data: memberships, Gaussian sampling and the full pipeline."""

from rccsim.simulation.membership import (
    assign_membership,
    expand_cluster_sizes,
    hard_weights,
)
from rccsim.simulation.pipeline import SimulationData, simulate, validate_simulation
from rccsim.simulation.sampler import center_columns, sample_dataset

__all__ = [
    "SimulationData",
    "assign_membership",
    "center_columns",
    "expand_cluster_sizes",
    "hard_weights",
    "sample_dataset",
    "simulate",
    "validate_simulation",
]
