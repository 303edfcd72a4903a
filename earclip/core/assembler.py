"""Collects emitted triangles and builds the caller-facing result.

Triangles arrive in clip order as original vertex ordinals; bridge and split
duplicates already carry the ordinal of the vertex they copy, so every output
index points into the caller's coordinate sequence.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .stats import ClipStats


@dataclass
class TriangulationResult:
    """Flat triangle indices plus per-triangle forced flags and run statistics."""
    triangles: np.ndarray
    forced: np.ndarray
    stats: ClipStats = field(default_factory=ClipStats)

    @property
    def triangle_count(self) -> int:
        return int(self.triangles.size // 3)

    @property
    def forced_count(self) -> int:
        return int(np.count_nonzero(self.forced))

    def as_triples(self) -> np.ndarray:
        """Triangles as an (M, 3) array."""
        return self.triangles.reshape(-1, 3)

    def __len__(self):
        return self.triangle_count


class ResultAssembler:

    def __init__(self):
        self._indices: List[int] = []
        self._forced: List[bool] = []

    @property
    def count(self) -> int:
        return len(self._forced)

    def emit(self, a: int, b: int, c: int, forced: bool = False) -> None:
        self._indices.extend((a, b, c))
        self._forced.append(forced)

    def result(self, stats: ClipStats) -> TriangulationResult:
        return TriangulationResult(
            triangles=np.asarray(self._indices, dtype=np.int64),
            forced=np.asarray(self._forced, dtype=bool),
            stats=stats,
        )


__all__ = ['TriangulationResult', 'ResultAssembler']
