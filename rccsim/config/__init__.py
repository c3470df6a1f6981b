"""Simulation configuration system with frozen, hashable, serializable dataclasses."""

from rccsim.config.experiment import (
    TOPOLOGIES,
    NetworkConfig,
    SimulationConfig,
    SubjectConfig,
)
from rccsim.config.defaults import ANCHOR_CONFIG
from rccsim.config.hashing import config_hash
from rccsim.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "TOPOLOGIES",
    "NetworkConfig",
    "SimulationConfig",
    "SubjectConfig",
    "ANCHOR_CONFIG",
    "config_hash",
    "config_to_json",
    "config_from_json",
    "config_to_dict",
    "config_from_dict",
]
