"""Centralized seed management for full reproducibility.

Every generation step receives an explicit numpy Generator; nothing reads
global random state. A master seed is split into independent per-stage
streams so that changing how many draws one stage makes never shifts the
draws of the stages after it.
"""

import random

import numpy as np

# Stage order is part of the reproducibility contract: reordering this
# tuple changes every simulated dataset for a given seed.
STAGES: tuple[str, ...] = ("shared_edges", "clusters", "subjects", "sampling")


def stage_streams(seed: int) -> dict[str, np.random.Generator]:
    """Spawn one independent Generator per simulation stage.

    Args:
        seed: Master seed value (e.g., 42).

    Returns:
        Dict mapping each name in STAGES to its own Generator.
    """
    children = np.random.SeedSequence(seed).spawn(len(STAGES))
    return {
        stage: np.random.default_rng(child)
        for stage, child in zip(STAGES, children)
    }


def spawn_generators(
    rng: np.random.Generator, count: int
) -> list[np.random.Generator]:
    """Derive ``count`` independent child Generators from a parent Generator.

    Used to give each subject its own stream so per-subject work can run in
    any order (or in parallel) without changing results.
    """
    return rng.spawn(count)


def set_seed(seed: int) -> None:
    """Seed the Python and NumPy legacy global RNGs.

    The simulator itself never touches global state; this is for callers
    (notebooks, external estimators) that do.
    """
    random.seed(seed)
    np.random.seed(seed)


def verify_seed_determinism(seed: int) -> bool:
    """Verify that re-deriving the stage streams reproduces identical draws.

    Draws 10 values from every stage stream, re-derives the streams from the
    same seed and draws again. Returns True if all sequences match.
    """
    first = {k: g.random(10).tolist() for k, g in stage_streams(seed).items()}
    second = {k: g.random(10).tolist() for k, g in stage_streams(seed).items()}
    return first == second
