"""
RandomHyperplaneHasher - Banded random-threshold hashing for LSH tables.

Each table compares vector components against its own sequence of uniform
random thresholds. The comparisons are grouped into bands, every band becomes
a small integer, and the band integers are joined into the bucket key.
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)


class RandomHyperplaneHasher:
    """
    Deterministic per-table hash function for the LSH index.

    The thresholds of table ``t`` come from ``numpy.random.default_rng(t)``.
    They are drawn once, the first time the table is hashed against, and
    cached, so every later insert or query against the same table compares
    against exactly the same values.

    Example:
        >>> hasher = RandomHyperplaneHasher(n_bands=4, band_size=2)
        >>> hasher.hash([0.3, 0.9, 0.1, 0.4, 0.7], table_index=0)
        '_1_3_0_0'
    """

    def __init__(self, n_bands: int, band_size: int):
        """
        Initialize the hasher.

        Args:
            n_bands: Number of bands per bucket key.
            band_size: Number of threshold comparisons per band.
        """
        if n_bands <= 0:
            raise ValueError("n_bands must be > 0")
        if band_size <= 0:
            raise ValueError("band_size must be > 0")

        self.n_bands = n_bands
        self.band_size = band_size
        self._thresholds: dict[int, np.ndarray] = {}

    @property
    def n_positions(self) -> int:
        """Number of vector components a key can cover."""
        return self.n_bands * self.band_size

    def thresholds(self, table_index: int) -> np.ndarray:
        """Return the cached threshold sequence for a table."""
        if table_index < 0:
            raise ValueError(f"table_index must be >= 0, got {table_index}")

        thresholds = self._thresholds.get(table_index)
        if thresholds is None:
            rng = np.random.default_rng(table_index)
            thresholds = rng.random(self.n_positions)
            self._thresholds[table_index] = thresholds
            logger.debug("Drew %d thresholds for table %d", self.n_positions, table_index)
        return thresholds

    def hash(self, vector, table_index: int) -> str:
        """
        Compute the bucket key of a vector for one table.

        Vectors shorter than ``n_bands * band_size`` are allowed: the missing
        positions contribute no bits, so trailing bands encode as 0.

        Args:
            vector: 1D array-like.
            table_index: Which table's thresholds to use.

        Returns:
            Bucket key such as ``"_2_0_3_1"``.
        """
        thresholds = self.thresholds(table_index)
        vector = np.asarray(vector, dtype=np.float64).ravel()

        n_compared = min(vector.shape[0], self.n_positions)
        bits = vector[:n_compared] > thresholds[:n_compared]

        key = ""
        for band in range(self.n_bands):
            band_hash = 0
            for bit in bits[band * self.band_size:(band + 1) * self.band_size]:
                band_hash = band_hash * 2 + int(bit)
            key += f"_{band_hash}"
        return key
