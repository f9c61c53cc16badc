"""
annsearch - A tiny in-memory approximate nearest-neighbor search library.

annsearch provides vector search using banded random-threshold LSH with
exact cosine reranking and a brute-force fallback, plus approximate PCA
via power iteration.
"""

from annsearch.__version__ import __version__
from annsearch.reduction import PCAReducer
from annsearch.similarity import cosine_similarity
from annsearch.vector import Item, LSHIndex, SearchResult, VectorStore

__all__ = [
    "Item",
    "LSHIndex",
    "PCAReducer",
    "SearchResult",
    "VectorStore",
    "cosine_similarity",
    "__version__",
]
