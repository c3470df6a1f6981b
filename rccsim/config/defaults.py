"""Anchor configuration: single source of truth for default simulation parameters."""

from rccsim.config.experiment import SimulationConfig

# All-default values: G=2, clust_sizes=(67, 37), p=10, n=177, overlap=0.5,
# rho=0.1, esd=0.05, hub topology, eprob=0.5, seed=42.
ANCHOR_CONFIG = SimulationConfig()
