"""Reproducibility infrastructure: seeded per-stage random streams."""

from rccsim.reproducibility.seed import (
    STAGES,
    set_seed,
    spawn_generators,
    stage_streams,
    verify_seed_determinism,
)

__all__ = [
    "STAGES",
    "set_seed",
    "spawn_generators",
    "stage_streams",
    "verify_seed_determinism",
]
