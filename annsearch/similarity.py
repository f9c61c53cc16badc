"""
Cosine similarity between two feature vectors.

Malformed numeric input degrades to a similarity of 0.0 instead of raising:
vectors of different lengths and zero-magnitude vectors are treated as
unrelated to everything.
"""

import numpy as np


def cosine_similarity(a, b) -> float:
    """
    Compute the cosine similarity of two vectors.

    Args:
        a: 1D array-like.
        b: 1D array-like.

    Returns:
        Similarity in [-1, 1]. Returns 0.0 when the lengths differ or when
        either vector has zero norm, and 0.0 for non-finite components.
    """
    a = np.asarray(a, dtype=np.float64).ravel()
    b = np.asarray(b, dtype=np.float64).ravel()

    if a.shape[0] != b.shape[0]:
        return 0.0

    scale_a = float(np.max(np.abs(a))) if a.size else 0.0
    scale_b = float(np.max(np.abs(b))) if b.size else 0.0
    if scale_a == 0 or scale_b == 0:
        return 0.0

    # Scaling by the largest component keeps the squared norms finite
    a = a / scale_a
    b = b / scale_b

    dot_product = float(np.dot(a, b))
    norm_a = float(np.dot(a, a))
    norm_b = float(np.dot(b, b))

    similarity = dot_product / (np.sqrt(norm_a) * np.sqrt(norm_b))
    if np.isnan(similarity):
        return 0.0
    # Rounding can push |similarity| slightly past 1
    return float(min(1.0, max(-1.0, similarity)))
