"""Central numerical tolerances and small geometry constants.

Tiny numeric thresholds used by the linker and the clipper live here so they
can be tuned consistently and referenced without scattering literals.
"""
from __future__ import annotations

# Geometry tolerances
EPS_AREA: float = 1e-12           # relative: scaled by the longest squared edge of the triangle

# Spatial index
Z_ORDER_SCALE: int = 32767        # quantized coordinates fit in 15 bits
INDEX_THRESHOLD: int = 80         # vertex count from which the z-order index is built

__all__ = [
    'EPS_AREA',
    'Z_ORDER_SCALE',
    'INDEX_THRESHOLD',
]
