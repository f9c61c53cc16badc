"""
Vector search module using LSH (Locality-Sensitive Hashing).

This module provides in-memory vector search with LSH-based approximate
nearest neighbor search, followed by exact cosine similarity reranking.
"""

from annsearch.vector.hasher import RandomHyperplaneHasher
from annsearch.vector.lsh import LSHIndex
from annsearch.vector.store import Item, SearchResult, VectorStore

__all__ = [
    "Item",
    "LSHIndex",
    "RandomHyperplaneHasher",
    "SearchResult",
    "VectorStore",
]
