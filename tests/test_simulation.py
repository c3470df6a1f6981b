"""Tests for memberships, Gaussian sampling and the end-to-end simulation."""

from dataclasses import replace

import numpy as np
import pytest

from rccsim.config import ANCHOR_CONFIG, NetworkConfig, SimulationConfig, SubjectConfig
from rccsim.errors import DegenerateDensity, InvalidClusterSizeSpec
from rccsim.graph.precision import RIDGE
from rccsim.simulation import (
    SimulationData,
    assign_membership,
    center_columns,
    expand_cluster_sizes,
    hard_weights,
    sample_dataset,
    simulate,
    validate_simulation,
)

HUB_SCENARIO = SimulationConfig(
    network=NetworkConfig(p=4, G=2, topology="hub", overlap=0.5),
    subjects=SubjectConfig(clust_sizes=(3, 3), n=50, rho=0.1),
    seed=7,
)

EMPTY_SCENARIO = SimulationConfig(
    network=NetworkConfig(p=6, G=3, topology="random", eprob=0.0, overlap=0.0),
    subjects=SubjectConfig(clust_sizes=2, n=20, rho=0.1),
    seed=3,
)


@pytest.fixture(scope="module")
def hub_data() -> SimulationData:
    return simulate(HUB_SCENARIO)


class TestMembership:
    """Cluster labels from cluster sizes."""

    def test_per_cluster_sizes(self):
        np.testing.assert_array_equal(assign_membership(2, (3, 2)), [1, 1, 1, 2, 2])

    def test_scalar_size(self):
        np.testing.assert_array_equal(assign_membership(3, 2), [1, 1, 2, 2, 3, 3])

    def test_length_one_sequence(self):
        assert expand_cluster_sizes(4, [5]) == (5, 5, 5, 5)

    def test_bad_length(self):
        with pytest.raises(InvalidClusterSizeSpec):
            expand_cluster_sizes(3, (1, 2))

    def test_hard_weights(self):
        ws = hard_weights(np.array([1, 2, 2]), 2)
        np.testing.assert_array_equal(ws, [[1, 0, 0], [0, 1, 1]])
        np.testing.assert_array_equal(ws.sum(axis=0), [1, 1, 1])

    def test_hard_weights_label_range(self):
        with pytest.raises(ValueError, match="1..2"):
            hard_weights(np.array([1, 3]), 2)


class TestSampler:
    """Centered Gaussian data from a precision matrix."""

    def test_center_columns(self):
        data = np.array([[1.0, 10.0], [3.0, 30.0]])
        centered = center_columns(data)
        np.testing.assert_allclose(centered, [[-1.0, -10.0], [1.0, 10.0]])

    def test_shape_and_centering(self):
        data = sample_dataset(np.eye(3) * 2.0, 40, np.random.default_rng(0))
        assert data.shape == (40, 3)
        np.testing.assert_allclose(data.mean(axis=0), 0.0, atol=1e-12)

    def test_covariance_matches_inverse_precision(self):
        precision = np.array([[2.0, 0.6, 0.0], [0.6, 1.5, -0.4], [0.0, -0.4, 1.0]])
        data = sample_dataset(precision, 20_000, np.random.default_rng(1))
        empirical = data.T @ data / data.shape[0]
        np.testing.assert_allclose(empirical, np.linalg.inv(precision), atol=0.05)

    def test_not_positive_definite_raises(self):
        with pytest.raises(DegenerateDensity):
            sample_dataset(np.array([[0.0, 1.0], [1.0, 0.0]]), 10, np.random.default_rng(0))


class TestHubScenario:
    """G=2, clust_sizes=(3, 3), p=4, n=50, overlap=0.5, rho=0.1, hub topology."""

    def test_counts(self, hub_data):
        assert hub_data.K == 6
        assert hub_data.G == 2
        np.testing.assert_array_equal(hub_data.membership, [1, 1, 1, 2, 2, 2])

    def test_cluster_matrices(self, hub_data):
        assert hub_data.cluster_precisions.shape == (2, 4, 4)
        assert np.linalg.eigvalsh(hub_data.cluster_precisions)[:, 0].min() > 0

    def test_two_hubs(self, hub_data):
        """floor(sqrt(4)) = 2 hubs give p - 2 = 2 edges outside the shared pair."""
        for graph in hub_data.cluster_graphs:
            n_edges = int(np.tril(graph, k=-1).sum())
            assert 1 <= n_edges <= 3

    def test_datasets(self, hub_data):
        assert hub_data.datasets.shape == (6, 50, 4)
        np.testing.assert_allclose(hub_data.datasets.mean(axis=1), 0.0, atol=1e-12)

    def test_validates(self, hub_data):
        assert validate_simulation(hub_data) == []


class TestEmptyScenario:
    """Random topology with eprob=0 and overlap=0 gives edgeless networks."""

    def test_no_cluster_edges(self):
        data = simulate(EMPTY_SCENARIO)
        assert data.cluster_graphs.sum() == 0
        assert data.subject_graphs.sum() == 0

    def test_diagonal_positive_definite(self):
        data = simulate(EMPTY_SCENARIO)
        for precision in np.concatenate([data.cluster_precisions, data.subject_precisions]):
            np.testing.assert_allclose(precision, RIDGE * np.eye(6))
        assert validate_simulation(data) == []


class TestSimulate:
    """End-to-end properties of simulate()."""

    def test_anchor_config(self):
        data = simulate(ANCHOR_CONFIG)
        assert data.K == ANCHOR_CONFIG.K == len(data.membership)
        assert data.p == 10 and data.n == 177
        assert set(np.unique(data.membership)) == {1, 2}
        assert validate_simulation(data) == []

    def test_random_topology(self):
        cfg = SimulationConfig(
            network=NetworkConfig(p=15, G=3, topology="random", eprob=0.2, overlap=0.5),
            subjects=SubjectConfig(clust_sizes=(4, 3, 2), n=30, rho=0.2, esd=0.1),
        )
        data = simulate(cfg)
        assert data.K == 9
        assert validate_simulation(data) == []

    def test_same_seed_reproduces(self):
        a = simulate(HUB_SCENARIO)
        b = simulate(HUB_SCENARIO)
        np.testing.assert_array_equal(a.datasets, b.datasets)
        np.testing.assert_array_equal(a.subject_precisions, b.subject_precisions)
        assert a.config_hash == b.config_hash

    def test_different_seed_differs(self):
        a = simulate(HUB_SCENARIO)
        b = simulate(replace(HUB_SCENARIO, seed=8))
        assert not np.array_equal(a.datasets, b.datasets)

    def test_outputs_read_only(self, hub_data):
        with pytest.raises(ValueError):
            hub_data.datasets[0, 0, 0] = 1.0

    def test_validate_flags_bad_membership(self, hub_data):
        broken = replace(hub_data, membership=np.array([1, 1, 1, 2, 2, 5]))
        errors = validate_simulation(broken)
        assert any("outside 1..2" in e for e in errors)

    def test_validate_flags_uncentered_data(self, hub_data):
        broken = replace(hub_data, datasets=hub_data.datasets + 1.0)
        assert "datasets are not column-centered" in validate_simulation(broken)
