"""Configuration object for polygon triangulation runs."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .constants import INDEX_THRESHOLD


@dataclass
class TriangulationConfig:
    """Tunables for one triangulation call.

    Attributes
    ----------
    index_threshold : int
        Vertex count from which the z-order spatial index is built. Smaller
        polygons scan the live ring directly.
    filter_points : bool
        Drop duplicate and exactly collinear points around hole bridges and
        diagonal splits. A bridge copy that ends up collinear with its
        neighbours is removed, so the result can hold fewer than
        ``n + 2 * holes - 2`` triangles while still covering every vertex.
    allow_forced : bool
        When the recovery ladder runs out of options, force-clip the current
        ear (flagged in the result). If False the remaining sub-ring is
        abandoned instead.
    max_steps : int or None
        Upper bound on clipper iterations; exceeding it raises
        TriangulationStepLimitError. None means unbounded.
    """
    index_threshold: int = INDEX_THRESHOLD
    filter_points: bool = True
    allow_forced: bool = True
    max_steps: Optional[int] = None

    def __post_init__(self):
        if self.index_threshold < 0:
            raise ValueError("index_threshold must be >= 0")
        if self.max_steps is not None and self.max_steps <= 0:
            raise ValueError("max_steps must be a positive integer or None")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ['TriangulationConfig']
