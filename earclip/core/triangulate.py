"""Public triangulation entry points.

``triangulate`` returns the flat index array; ``triangulate_with_report``
also returns forced-triangle flags and clipping statistics.
"""
from __future__ import annotations

import time
from typing import Optional, Sequence

import numpy as np

from .arena import NIL, NodeArena
from .assembler import ResultAssembler, TriangulationResult
from .clipper import EarClipper
from .config import TriangulationConfig
from .inputs import normalize_input
from .linker import RingLinker
from .logging_utils import get_logger
from .stats import ClipStats
from .zorder import ZOrderIndex

logger = get_logger('earclip.triangulate')


def triangulate_with_report(coords, hole_indices: Optional[Sequence[int]] = None,
                            dim: int = 2,
                            config: Optional[TriangulationConfig] = None) -> TriangulationResult:
    """Triangulate a polygon with holes by ear clipping.

    Parameters
    ----------
    coords : sequence of float or array_like
        Flat ``[x0, y0, x1, y1, ...]`` coordinates (stride ``dim``) or an
        ``(N, dim)`` array. Rings are open.
    hole_indices : sequence of int, optional
        0-based vertex offsets where each hole ring starts. The outer ring
        spans ``[0, hole_indices[0])``.
    dim : int
        Coordinate stride; components past the second are ignored.
    config : TriangulationConfig, optional

    Returns
    -------
    TriangulationResult
        ``triangles`` holds 0-based vertex indices, three per CCW triangle.

    Raises
    ------
    TriangulationInputError
        Malformed coordinates or hole offsets.
    TriangulationStepLimitError
        ``config.max_steps`` was exceeded.
    """
    cfg = config or TriangulationConfig()
    xs, ys, holes = normalize_input(coords, hole_indices, dim)
    stats = ClipStats(vertices=len(xs))
    assembler = ResultAssembler()
    t0 = time.perf_counter()

    arena = NodeArena()
    linker = RingLinker(arena, stats, cfg)
    outer = linker.link(xs, ys, holes)
    if outer != NIL:
        index = None
        if len(xs) >= cfg.index_threshold:
            index = ZOrderIndex.from_coords(arena, xs, ys)
            stats.indexed = True
        EarClipper(arena, assembler, index, stats, cfg, linker).run(outer)
    else:
        logger.debug("outer ring has fewer than 3 distinct points; nothing to triangulate")

    stats.time_total = time.perf_counter() - t0
    logger.debug("triangulated %d vertices (%d holes) into %d triangles: %s",
                 len(xs), len(holes), assembler.count, stats.to_dict())
    return assembler.result(stats)


def triangulate(coords, hole_indices: Optional[Sequence[int]] = None, dim: int = 2,
                config: Optional[TriangulationConfig] = None) -> np.ndarray:
    """Flat array of vertex indices, three per counter-clockwise triangle."""
    return triangulate_with_report(coords, hole_indices, dim, config).triangles


__all__ = ['triangulate', 'triangulate_with_report']
