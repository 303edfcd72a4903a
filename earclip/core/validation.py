"""Checks for triangulation output.

Vectorized with numpy; these are meant for tests and for callers that want
to audit a result, not for the clipping hot loop.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from .constants import EPS_AREA
from .inputs import normalize_input

__all__ = [
    'polygon_signed_area', 'triangle_signed_areas', 'deviation', 'check_triangulation',
]


def polygon_signed_area(polygon) -> float:
    """Return signed area of polygon (sequence of (x, y)); positive if CCW."""
    arr = np.asarray(polygon, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] < 3:
        return 0.0
    x = arr[:, 0]; y = arr[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))


def triangle_signed_areas(points, triangles) -> np.ndarray:
    """Vectorized signed area for a batch of triangles.

    points: (N, 2) array; triangles: flat index array or (M, 3) array.
    Returns (M,) float64 array (positive for CCW).
    """
    pts = np.asarray(points, dtype=np.float64)
    T = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    if T.size == 0:
        return np.empty((0,), dtype=np.float64)
    p0 = pts[T[:, 0]]; p1 = pts[T[:, 1]]; p2 = pts[T[:, 2]]
    d1 = p1 - p0; d2 = p2 - p0
    return 0.5 * (d1[:, 0] * d2[:, 1] - d1[:, 1] * d2[:, 0])


def _longest_edge_sq(points, triangles) -> np.ndarray:
    """Squared length of the longest edge of each triangle."""
    T = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    if T.size == 0:
        return np.empty((0,), dtype=np.float64)
    p = points[T]
    e = p - np.roll(p, 1, axis=1)
    return np.max(np.einsum('ijk,ijk->ij', e, e), axis=1)


def _rings(coords, hole_indices, dim):
    xs, ys, holes = normalize_input(coords, hole_indices, dim)
    pts = np.column_stack((xs, ys)) if xs else np.empty((0, 2), dtype=np.float64)
    bounds = [0] + list(holes) + [len(xs)]
    return pts, [pts[bounds[i]:bounds[i + 1]] for i in range(len(bounds) - 1)]


def deviation(coords, hole_indices: Optional[Sequence[int]], triangles, dim: int = 2) -> float:
    """Relative difference between polygon area (outer minus holes) and triangle area.

    0.0 means the triangles cover exactly the polygon area.
    """
    pts, rings = _rings(coords, hole_indices, dim)
    polygon_area = abs(polygon_signed_area(rings[0]))
    for hole in rings[1:]:
        polygon_area -= abs(polygon_signed_area(hole))
    triangles_area = float(np.sum(np.abs(triangle_signed_areas(pts, triangles))))
    if polygon_area == 0 and triangles_area == 0:
        return 0.0
    if polygon_area == 0:
        return float('inf')
    return abs((triangles_area - polygon_area) / polygon_area)


def check_triangulation(coords, hole_indices: Optional[Sequence[int]], triangles,
                        dim: int = 2, forced=None, area_tol: float = 1e-9) -> Tuple[bool, List[str]]:
    """Audit a flat triangle array against its input.

    Checks index range, orientation of non-forced triangles and area
    coverage. Returns (ok, messages).
    """
    msgs: List[str] = []
    pts, _ = _rings(coords, hole_indices, dim)
    tris = np.asarray(triangles, dtype=np.int64)
    if tris.size % 3:
        return False, [f"triangle array length {tris.size} is not a multiple of 3"]
    if tris.size and (tris.min() < 0 or tris.max() >= len(pts)):
        return False, [f"triangle indices outside [0, {len(pts)})"]
    areas = triangle_signed_areas(pts, tris)
    mask = np.ones(areas.shape, dtype=bool)
    if forced is not None:
        mask &= ~np.asarray(forced, dtype=bool)
    tol = EPS_AREA * _longest_edge_sq(pts, tris)
    inverted = np.nonzero(mask & (2.0 * areas < -tol))[0]
    if inverted.size:
        msgs.append(f"{inverted.size} non-forced triangles are clockwise: {inverted[:10].tolist()}")
    dev = deviation(coords, hole_indices, tris, dim)
    if dev > area_tol:
        msgs.append(f"area deviation {dev:.3e} exceeds {area_tol:.1e}")
    return (not msgs), msgs
