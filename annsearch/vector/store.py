"""
VectorStore - Append-only in-memory vector collection with LSH search.

Search gathers candidates from the LSH index and reranks them with exact
cosine similarity. When no bucket matches, every stored item is scored
instead, so a query against a non-empty store always returns something.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

import numpy as np

from annsearch.reduction.pca import PCAReducer
from annsearch.similarity import cosine_similarity
from annsearch.vector.lsh import LSHIndex

logger = logging.getLogger(__name__)


def _as_vector(vector, name: str = "Vector") -> np.ndarray:
    # Own copy, frozen so bucket keys stay valid for the store's lifetime
    vector = np.array(vector, dtype=np.float64)
    if vector.ndim != 1:
        raise ValueError(f"{name} must be 1D array, got shape {vector.shape}")
    vector.flags.writeable = False
    return vector


@dataclass(frozen=True, eq=False)
class Item:
    """An indexed entry: caller-facing id, feature vector and opaque payload."""

    id: int
    vector: np.ndarray
    metadata: Any = None

    def __post_init__(self):
        object.__setattr__(self, "vector", _as_vector(self.vector))


@dataclass(frozen=True)
class SearchResult:
    """A stored item paired with its similarity to the query."""

    item: Item
    similarity: float


class VectorStore:
    """
    Append-only vector store served by an LSH index.

    API:
    - __init__(n_tables=5, n_bands=4, band_size=2)
    - fit(items) - Index items (only if the store is empty)
    - add(item) - Append a single item
    - search(query, top_k=10) - Approximate top-k by cosine similarity
    - brute_force_search(query, top_k=10) - Exact top-k over every item
    - reduce(target_dim) - PCA projection of all stored vectors

    Example:
        >>> store = VectorStore()
        >>> store.add(Item(id=1, vector=[0.3, 0.9, 0.1, 0.4, 0.7], metadata={"name": "tee"}))
        >>> store.add(Item(id=2, vector=[0.7, 0.1, 0.9, 0.1, 0.5], metadata={"name": "shirt"}))
        >>> results = store.search([0.3, 0.8, 0.1, 0.3, 0.8], top_k=1)
        >>> results[0].item.id
        1
    """

    def __init__(self, n_tables: int = 5, n_bands: int = 4, band_size: int = 2):
        """
        Initialize the VectorStore.

        Args:
            n_tables: Number of LSH hash tables.
            n_bands: Number of bands per bucket key.
            band_size: Number of threshold comparisons per band.
        """
        self.index = LSHIndex(n_tables=n_tables, n_bands=n_bands, band_size=band_size)
        self._items: list[Item] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __getitem__(self, position: int) -> Item:
        return self._items[position]

    def fit(self, items: Iterable[Item]) -> "VectorStore":
        """
        Index the provided items.

        Only works if the store is empty. Use add() to append items.

        Returns:
            self for method chaining.

        Raises:
            ValueError: If the store already contains items.
        """
        if self._items:
            raise ValueError(
                "Store already contains items. Use add() to append items."
            )

        for item in items:
            self.add(item)
        return self

    def add(self, item: Item) -> None:
        """
        Append an item and index it under its position.

        Identical vectors are not deduplicated; each add creates a new entry.
        """
        position = len(self._items)
        self._items.append(item)
        self.index.insert(position, item.vector)
        logger.debug("Added item %r at position %d", item.id, position)

    def search(self, query, top_k: int = 10) -> list[SearchResult]:
        """
        Search the store with the given query vector.

        Args:
            query: 1D array-like.
            top_k: Maximum number of results to return.

        Returns:
            Results ranked by cosine similarity, highest first. Equal scores
            come back in no particular order.
        """
        if top_k <= 0:
            return []

        query = _as_vector(query, name="Query vector")

        # Step 1: Find candidates using LSH
        candidate_ids = self.index.candidates(query)

        # Step 2: Exact reranking, or a full scan when nothing matched
        if candidate_ids:
            items = [self._items[idx] for idx in sorted(candidate_ids)]
        else:
            logger.debug("No LSH candidates, scanning all %d items", len(self._items))
            items = self._items

        return self._rerank(query, items, top_k)

    def brute_force_search(self, query, top_k: int = 10) -> list[SearchResult]:
        """Rank every stored item against the query, ignoring the index."""
        if top_k <= 0:
            return []

        query = _as_vector(query, name="Query vector")
        return self._rerank(query, self._items, top_k)

    def _rerank(
        self,
        query: np.ndarray,
        items: Iterable[Item],
        top_k: int,
    ) -> list[SearchResult]:
        """Score items with exact cosine similarity and keep the top_k."""
        results = [
            SearchResult(item=item, similarity=cosine_similarity(query, item.vector))
            for item in items
        ]

        # Sort by similarity (descending)
        results.sort(key=lambda result: result.similarity, reverse=True)

        return results[:top_k]

    def vectors(self) -> np.ndarray:
        """
        Stack all stored vectors in insertion order.

        Returns:
            Array of shape (n_items, dimension).

        Raises:
            ValueError: If the stored vectors have different lengths.
        """
        if not self._items:
            return np.empty((0, 0), dtype=np.float64)

        lengths = {item.vector.shape[0] for item in self._items}
        if len(lengths) > 1:
            raise ValueError(
                f"Stored vectors have mixed dimensions {sorted(lengths)}"
            )
        return np.vstack([item.vector for item in self._items])

    def reduce(self, target_dim: int, reducer: Optional[PCAReducer] = None) -> np.ndarray:
        """
        Project every stored vector onto target_dim principal components.

        The index is not touched; the reduced batch belongs to the caller.
        """
        if reducer is None:
            reducer = PCAReducer()
        return reducer.reduce(self.vectors(), target_dim)
