"""Exception types raised by the triangulation front door.

Bad geometry never raises: it goes through the clipper's recovery ladder.
These errors are reserved for malformed call arguments and for the optional
caller-imposed step bound.
"""
from __future__ import annotations


class TriangulationError(Exception):
    """Base class for earclip errors."""


class TriangulationInputError(TriangulationError, ValueError):
    """Coordinates, stride or hole offsets do not describe a valid input."""


class TriangulationStepLimitError(TriangulationError, RuntimeError):
    """The clipper exceeded TriangulationConfig.max_steps."""

    def __init__(self, max_steps: int, triangles_emitted: int):
        super().__init__(
            f"clipper exceeded max_steps={max_steps} after emitting {triangles_emitted} triangles")
        self.max_steps = max_steps
        self.triangles_emitted = triangles_emitted


__all__ = ['TriangulationError', 'TriangulationInputError', 'TriangulationStepLimitError']
