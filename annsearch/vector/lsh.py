"""
LSHIndex - Multi-table locality-sensitive hashing over item positions.

The index only knows item positions (insertion order in the owning store).
Every position lives in exactly one bucket per table; a query collects the
union of the buckets it hashes to.
"""

import logging

from annsearch.vector.hasher import RandomHyperplaneHasher

logger = logging.getLogger(__name__)


class LSHIndex:
    """
    A set of independent LSH hash tables.

    API:
    - __init__(n_tables, n_bands, band_size)
    - insert(item_index, vector) - Put a position into one bucket per table
    - candidates(query_vector) - Union of the buckets the query hashes to
    - bucket_keys(vector) - Per-table bucket keys of a vector

    Example:
        >>> index = LSHIndex(n_tables=5, n_bands=4, band_size=2)
        >>> index.insert(0, [0.3, 0.9, 0.1, 0.4, 0.7])
        >>> 0 in index.candidates([0.3, 0.9, 0.1, 0.4, 0.7])
        True
    """

    def __init__(self, n_tables: int, n_bands: int, band_size: int):
        """
        Initialize the LSHIndex.

        Args:
            n_tables: Number of hash tables (more = better recall, slower).
            n_bands: Number of bands per bucket key.
            band_size: Number of threshold comparisons per band.
        """
        if n_tables <= 0:
            raise ValueError("n_tables must be > 0")

        self.n_tables = n_tables
        self.n_bands = n_bands
        self.band_size = band_size
        self.hasher = RandomHyperplaneHasher(n_bands=n_bands, band_size=band_size)
        self.tables: list[dict[str, list[int]]] = [{} for _ in range(n_tables)]
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def bucket_keys(self, vector) -> list[str]:
        """Return the bucket key of a vector in every table."""
        return [self.hasher.hash(vector, table_id) for table_id in range(self.n_tables)]

    def insert(self, item_index: int, vector) -> None:
        """
        Add an item position to the index.

        Args:
            item_index: Position of the item in the owning store.
            vector: The item's vector.
        """
        for table_id, hash_key in enumerate(self.bucket_keys(vector)):
            table = self.tables[table_id]
            if hash_key not in table:
                table[hash_key] = []
            table[hash_key].append(item_index)
        self._size += 1

    def candidates(self, query_vector) -> set[int]:
        """
        Find candidate item positions for a query.

        Args:
            query_vector: 1D array-like.

        Returns:
            Set of positions found in any matching bucket. May be empty.
        """
        candidate_ids = set()

        for table_id, hash_key in enumerate(self.bucket_keys(query_vector)):
            bucket = self.tables[table_id].get(hash_key)
            if bucket:
                candidate_ids.update(bucket)

        logger.debug("LSH lookup matched %d candidates", len(candidate_ids))
        return candidate_ids
