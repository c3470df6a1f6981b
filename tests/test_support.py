"""Tests for adjacency thresholding, co-membership and the Rand index."""

import numpy as np
import pytest
from sklearn.metrics import rand_score

from rccsim.evaluation.support import adjacency, membership_to_comatrix, rand_index


class TestAdjacency:
    def test_threshold(self):
        m = np.array([[1.0, 0.0005], [-0.002, 0.0]])
        np.testing.assert_array_equal(adjacency(m), [[True, False], [True, False]])

    def test_custom_threshold(self):
        m = np.array([[0.3, -0.6]])
        np.testing.assert_array_equal(adjacency(m, threshold=0.5), [[False, True]])


class TestComatrix:
    def test_shared_labels(self):
        co = membership_to_comatrix(np.array([1, 1, 2]))
        np.testing.assert_array_equal(co, [[1, 1, 0], [1, 1, 0], [0, 0, 1]])

    def test_unassigned_label_contributes_nothing(self):
        co = membership_to_comatrix(np.array([0, 0, 1]))
        np.testing.assert_array_equal(co, [[0, 0, 0], [0, 0, 0], [0, 0, 1]])

    def test_symmetric(self):
        co = membership_to_comatrix(np.array([3, 1, 3, 2, 1]))
        np.testing.assert_array_equal(co, co.T)


class TestRandIndex:
    def test_identical_labels(self):
        x = np.array([1, 2, 2, 3, 1])
        assert rand_index(x, x) == 1.0

    def test_symmetric(self):
        x = np.array([1, 1, 2, 2, 3])
        y = np.array([1, 2, 2, 3, 3])
        assert rand_index(x, y) == rand_index(y, x)

    def test_label_permutation_invariant(self):
        assert rand_index(np.array([1, 1, 2]), np.array([2, 2, 1])) == 1.0

    def test_known_value(self):
        # pairs (1,0):T/F (2,0):F/F (2,1):F/T -> 1 of 3 agree
        assert rand_index(np.array([1, 1, 2]), np.array([1, 2, 2])) == pytest.approx(1 / 3)

    def test_matches_sklearn(self):
        rng = np.random.default_rng(0)
        x = rng.integers(1, 4, size=30)
        y = rng.integers(1, 4, size=30)
        assert rand_index(x, y) == pytest.approx(rand_score(x, y))

    def test_unassigned_subjects_never_together(self):
        # both vectors put subjects 0 and 1 "apart" (label 0 is unassigned)
        assert rand_index(np.array([0, 0]), np.array([1, 2])) == 1.0

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="equal length"):
            rand_index(np.array([1, 2]), np.array([1, 2, 3]))

    def test_too_few_subjects(self):
        with pytest.raises(ValueError, match="at least 2"):
            rand_index(np.array([1]), np.array([1]))
