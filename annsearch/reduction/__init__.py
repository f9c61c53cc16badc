"""
Dimensionality reduction module.

This module provides approximate PCA built on power iteration.
"""

from annsearch.reduction.pca import PCAReducer, power_iteration

__all__ = ["PCAReducer", "power_iteration"]
