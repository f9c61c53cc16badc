"""
PCAReducer - Approximate principal component projection via power iteration.

Each component is found by running a fixed number of power-iteration steps on
the sample covariance matrix from a random start. By default components are
computed independently of each other, without deflation, so they are not
guaranteed to be orthogonal; with a dominant direction in the data several
components will converge to it. Set ``deflate=True`` to remove each found
component from the covariance matrix before searching for the next one.
"""

import logging
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)


def power_iteration(
    matrix: np.ndarray,
    n_iter: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Approximate the dominant eigenvector of a square matrix.

    Starts from a random vector with entries in [0, 1) and repeats
    multiply-then-normalize exactly ``n_iter`` times.

    Args:
        matrix: Square array of shape (dim, dim).
        n_iter: Number of iterations.
        rng: Random generator for the starting vector.

    Returns:
        Unit vector of shape (dim,), or all zeros if the iterate collapsed
        to the zero vector.
    """
    direction = rng.random(matrix.shape[0])

    for _ in range(n_iter):
        product = matrix @ direction
        norm = np.linalg.norm(product)
        if norm == 0:
            logger.warning("Power iteration collapsed to the zero vector")
            return np.zeros(matrix.shape[0], dtype=np.float64)
        direction = product / norm

    return direction


class PCAReducer:
    """
    Reduce a batch of vectors to fewer dimensions.

    Example:
        >>> reducer = PCAReducer(seed=0)
        >>> vectors = np.random.rand(4, 5)
        >>> reducer.reduce(vectors, 3).shape
        (4, 3)
    """

    def __init__(
        self,
        n_iter: int = 100,
        deflate: bool = False,
        seed: Optional[int] = None,
    ):
        """
        Initialize the PCAReducer.

        Args:
            n_iter: Power-iteration steps per component.
            deflate: If True, deflate the covariance matrix after each
                component so the components come out orthogonal.
            seed: Seed for the random starting directions.
        """
        if n_iter <= 0:
            raise ValueError("n_iter must be > 0")

        self.n_iter = n_iter
        self.deflate = deflate
        self.seed = seed

    def principal_components(
        self,
        vectors,
        target_dim: int,
    ) -> tuple[np.ndarray, np.ndarray]:
        """
        Estimate the mean and the top principal directions of a batch.

        Args:
            vectors: 2D array of shape (n_vectors, dimension), n_vectors >= 2.
            target_dim: Number of directions to estimate.

        Returns:
            Tuple of the per-dimension mean, shape (dimension,), and the
            components, shape (target_dim, dimension).

        Raises:
            ValueError: If the batch is not 2D, has fewer than two rows, or
                target_dim is negative.
        """
        vectors = self._as_batch(vectors)
        if target_dim < 0:
            raise ValueError(f"target_dim must be >= 0, got {target_dim}")

        n_vectors, dimension = vectors.shape
        if n_vectors < 2:
            raise ValueError(
                "At least two vectors are needed to estimate the covariance matrix"
            )

        mean = vectors.mean(axis=0)
        centered = vectors - mean
        covariance = (centered.T @ centered) / (n_vectors - 1)

        rng = np.random.default_rng(self.seed)
        components = np.zeros((target_dim, dimension), dtype=np.float64)
        for i in range(target_dim):
            component = power_iteration(covariance, self.n_iter, rng)
            components[i] = component
            if self.deflate:
                eigenvalue = component @ covariance @ component
                covariance = covariance - eigenvalue * np.outer(component, component)

        return mean, components

    def reduce(self, vectors, target_dim: int) -> np.ndarray:
        """
        Project a batch of vectors onto its top principal components.

        An empty batch, or a target_dim that would not shrink the vectors,
        returns the input unchanged.

        Args:
            vectors: 2D array-like of shape (n_vectors, dimension).
            target_dim: Output dimensionality.

        Returns:
            Array of shape (n_vectors, target_dim), in input order.
        """
        vectors = self._as_batch(vectors)
        if vectors.shape[0] == 0 or target_dim >= vectors.shape[1]:
            return vectors

        mean, components = self.principal_components(vectors, target_dim)
        logger.debug(
            "Reducing %d vectors from %d to %d dimensions",
            vectors.shape[0], vectors.shape[1], target_dim,
        )
        return (vectors - mean) @ components.T

    @staticmethod
    def _as_batch(vectors) -> np.ndarray:
        vectors = np.asarray(vectors, dtype=np.float64)
        if vectors.ndim == 1 and vectors.size == 0:
            return vectors.reshape(0, 0)
        if vectors.ndim != 2:
            raise ValueError(f"Vectors must be 2D array, got shape {vectors.shape}")
        return vectors
