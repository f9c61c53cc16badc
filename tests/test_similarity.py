"""
Tests for cosine similarity and its degrade-to-zero conventions.
"""

import numpy as np
import pytest

from annsearch import cosine_similarity


class TestCosineSimilarityBounds:
    """Test the value range of cosine similarity."""

    def test_random_pairs_in_range(self):
        """Test that similarity stays within [-1, 1]."""
        rng = np.random.default_rng(7)
        for _ in range(50):
            a = rng.standard_normal(16)
            b = rng.standard_normal(16)
            assert -1.0 <= cosine_similarity(a, b) <= 1.0

    def test_self_similarity_is_one(self):
        """Test that a non-zero vector is fully similar to itself."""
        a = np.array([0.3, 0.9, 0.1, 0.4, 0.7])
        assert cosine_similarity(a, a) == pytest.approx(1.0)

    def test_opposite_vectors(self):
        """Test that opposite vectors score -1."""
        a = np.array([1.0, -2.0, 3.0])
        assert cosine_similarity(a, -a) == pytest.approx(-1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == 0.0

    def test_scale_invariance(self):
        """Test that vector length does not affect the score."""
        a = [0.3, 0.8, 0.1]
        b = [0.5, 0.8, 0.3]
        scaled = [10 * x for x in b]
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(a, scaled))

    def test_accepts_lists(self):
        assert cosine_similarity([1, 2, 3], [1, 2, 3]) == pytest.approx(1.0)


class TestCosineSimilarityDegenerateInputs:
    """Test inputs that degrade to a similarity of zero."""

    def test_zero_vector(self):
        """Test that a zero vector is dissimilar to everything."""
        assert cosine_similarity([0.3, 0.9, 0.1], [0.0, 0.0, 0.0]) == 0.0
        assert cosine_similarity([0.0, 0.0, 0.0], [0.3, 0.9, 0.1]) == 0.0

    def test_two_zero_vectors(self):
        assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0

    def test_dimension_mismatch(self):
        """Test that vectors of different lengths score zero."""
        assert cosine_similarity([1.0, 0.0, 0.0], [1.0, 0.0]) == 0.0

    def test_empty_vectors(self):
        assert cosine_similarity([], []) == 0.0


class TestCosineSimilarityLargeMagnitudes:
    """Test vectors whose squared norms would overflow."""

    def test_huge_self_similarity(self):
        a = [1e200, 1e200]
        assert cosine_similarity(a, a) == pytest.approx(1.0)

    def test_huge_opposite_vectors(self):
        assert cosine_similarity([1e200, -1e200], [-1e200, 1e200]) == pytest.approx(-1.0)

    def test_huge_against_small(self):
        """Test that magnitude differences do not change the angle."""
        assert cosine_similarity([1e200, 0.0], [3.0, 0.0]) == pytest.approx(1.0)

    def test_tiny_vectors_are_not_zero(self):
        a = [1e-200, 1e-200]
        assert cosine_similarity(a, a) == pytest.approx(1.0)

    def test_non_finite_component(self):
        """Test that infinities degrade to zero instead of -1."""
        assert cosine_similarity([np.inf, 1.0], [np.inf, 1.0]) == 0.0
