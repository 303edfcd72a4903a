"""Validation and marshalling of caller coordinates.

The clipper works on a flat coordinate sequence plus 0-based hole start
offsets expressed in vertex units. ``normalize_input`` checks that contract and
``flatten`` builds it from nested rings.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from .errors import TriangulationInputError


def normalize_input(coords, hole_indices: Optional[Sequence[int]] = None,
                    dim: int = 2) -> Tuple[List[float], List[float], List[int]]:
    """Validate caller data and split it into x list, y list and hole offsets.

    coords may be flat ``[x0, y0, x1, y1, ...]`` (stride ``dim``) or an
    ``(N, dim)`` array. Only the first two components of each vertex are used.
    """
    if int(dim) != dim or dim < 2:
        raise TriangulationInputError(f"dim must be an integer >= 2, got {dim!r}")
    dim = int(dim)
    try:
        arr = np.asarray(coords, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise TriangulationInputError(f"coordinates are not numeric: {exc}") from exc
    if arr.ndim == 2:
        if arr.shape[1] != dim:
            raise TriangulationInputError(
                f"coordinate array has {arr.shape[1]} columns but dim={dim}")
        arr = arr.reshape(-1)
    elif arr.ndim != 1:
        raise TriangulationInputError(f"coordinates must be 1-D or 2-D, got shape {arr.shape}")
    if arr.size % dim:
        raise TriangulationInputError(
            f"coordinate length {arr.size} is not a multiple of dim={dim}")
    if not np.all(np.isfinite(arr)):
        raise TriangulationInputError("coordinates contain NaN or infinite values")
    n = arr.size // dim
    pts = arr.reshape(n, dim)

    holes = []
    prev = 0
    for h in (hole_indices if hole_indices is not None else []):
        if int(h) != h:
            raise TriangulationInputError(f"hole offset {h!r} is not an integer")
        h = int(h)
        if h <= prev or h >= n:
            raise TriangulationInputError(
                f"hole offset {h} must be strictly increasing and inside (0, {n})")
        holes.append(h)
        prev = h
    return pts[:, 0].tolist(), pts[:, 1].tolist(), holes


def flatten(rings) -> Tuple[np.ndarray, List[int], int]:
    """Turn ``[outer, hole1, hole2, ...]`` point rings into the flat contract.

    Each ring is a sequence of points (all with the same dimension). Returns
    ``(coords, hole_indices, dim)`` ready for ``triangulate``.
    """
    rings = [np.asarray(r, dtype=np.float64) for r in rings]
    if not rings:
        return np.empty((0,), dtype=np.float64), [], 2
    dim = rings[0].shape[1] if rings[0].ndim == 2 else 2
    holes = []
    count = 0
    for i, ring in enumerate(rings):
        if ring.size and (ring.ndim != 2 or ring.shape[1] != dim):
            raise TriangulationInputError(
                f"ring {i} has shape {ring.shape}, expected (k, {dim})")
        if i > 0:
            holes.append(count)
        count += len(ring)
    coords = np.concatenate([r.reshape(-1) for r in rings]) if count else np.empty((0,), dtype=np.float64)
    return coords, holes, dim


__all__ = ['normalize_input', 'flatten']
