"""Vector helpers: fixed-dimension float vectors backed by numpy arrays."""

from typing import Iterable

import numpy as np


def zero_vec(dim: int) -> np.ndarray:
    """Return a zero vector with ``dim`` components."""
    return np.zeros(dim, dtype=float)


def as_vec(values: Iterable[float]) -> np.ndarray:
    """Copy ``values`` into a new one-dimensional float vector."""
    vec = np.array(values, dtype=float)
    if vec.ndim != 1:
        raise ValueError(f"vector must be one-dimensional, got shape {vec.shape}")
    return vec
