"""Simulation configuration dataclasses, all frozen and slotted for immutability."""

from dataclasses import dataclass, field
from numbers import Integral

from rccsim.errors import ConfigurationError, InvalidClusterSizeSpec

TOPOLOGIES: tuple[str, ...] = ("hub", "random")


def _check_unit_interval(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"{name} must be in [0, 1], got {value}")


def _check_positive_int(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral) or value < 1:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True, slots=True)
class NetworkConfig:
    """Cluster-level network generation parameters."""

    p: int = 10  # number of variables (nodes)
    G: int = 2  # number of clusters
    topology: str = "hub"  # "hub" or "random"
    eprob: float = 0.5  # edge probability (random graphs, shared-edge status)
    overlap: float = 0.5  # approximate share of edges common to all clusters

    def __post_init__(self) -> None:
        _check_positive_int("p", self.p)
        _check_positive_int("G", self.G)
        if self.topology not in TOPOLOGIES:
            raise ConfigurationError(
                f"topology must be one of {TOPOLOGIES}, got {self.topology!r}"
            )
        _check_unit_interval("eprob", self.eprob)
        _check_unit_interval("overlap", self.overlap)


@dataclass(frozen=True, slots=True)
class SubjectConfig:
    """Subject-level perturbation and sampling parameters."""

    clust_sizes: tuple[int, ...] = (67, 37)  # subjects per cluster, or one shared size
    n: int = 177  # observations per subject
    rho: float = 0.10  # share of differential edges relative to the cluster graph
    esd: float = 0.05  # sd of noise added to retained edge values

    def __post_init__(self) -> None:
        """Normalize a scalar cluster size (uses object.__setattr__ since frozen)."""
        sizes = self.clust_sizes
        if isinstance(sizes, Integral):
            sizes = (sizes,)
        object.__setattr__(self, "clust_sizes", tuple(sizes))
        if not self.clust_sizes:
            raise InvalidClusterSizeSpec("clust_sizes must not be empty")
        for size in self.clust_sizes:
            _check_positive_int("cluster size", size)
        _check_positive_int("n", self.n)
        _check_unit_interval("rho", self.rho)
        if not self.esd >= 0:
            raise ConfigurationError(f"esd must be >= 0, got {self.esd}")


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Top-level simulation configuration composing all sub-configs.

    All fields are frozen and typed. Cross-parameter validation runs
    in __post_init__ to reject invalid configurations before any
    random numbers are drawn.
    """

    network: NetworkConfig = field(default_factory=NetworkConfig)
    subjects: SubjectConfig = field(default_factory=SubjectConfig)
    seed: int = 42
    max_attempts: int = 100  # bound on each positive-definite rejection loop
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        n_sizes = len(self.subjects.clust_sizes)
        if n_sizes not in (1, self.network.G):
            raise InvalidClusterSizeSpec(
                f"clust_sizes must have length 1 or G ({self.network.G}), "
                f"got length {n_sizes}"
            )
        _check_positive_int("max_attempts", self.max_attempts)

    @property
    def cluster_sizes(self) -> tuple[int, ...]:
        """Subjects per cluster, one entry for each of the G clusters."""
        sizes = self.subjects.clust_sizes
        if len(sizes) == 1:
            return sizes * self.network.G
        return sizes

    @property
    def K(self) -> int:
        """Total number of subjects."""
        return sum(self.cluster_sizes)
