"""Model scoring: Wishart density, mixture log-likelihood, AIC and support utilities."""

from rccsim.evaluation.likelihood import (
    Hard,
    MembershipWeighting,
    ModelScore,
    Soft,
    aic,
    cluster_term,
    degrees_of_freedom,
    gaussian_log_likelihood,
    membership_weightings,
    mixture_log_likelihood,
    score_model,
    weighting_from_column,
)
from rccsim.evaluation.support import (
    ACTIVE_THRESHOLD,
    adjacency,
    membership_to_comatrix,
    rand_index,
)
from rccsim.evaluation.wishart import log_determinant, wishart_density

__all__ = [
    "ACTIVE_THRESHOLD",
    "Hard",
    "MembershipWeighting",
    "ModelScore",
    "Soft",
    "adjacency",
    "aic",
    "cluster_term",
    "degrees_of_freedom",
    "gaussian_log_likelihood",
    "log_determinant",
    "membership_to_comatrix",
    "membership_weightings",
    "mixture_log_likelihood",
    "rand_index",
    "score_model",
    "wishart_density",
    "weighting_from_column",
]
