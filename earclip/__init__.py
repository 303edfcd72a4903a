"""Public package API for earclip, an ear-clipping polygon triangulator.

This facade provides a flat import surface on top of the implementation
package ``earclip.core``.

Example
-------
    from earclip import triangulate
    tris = triangulate([0, 0, 1, 0, 1, 1, 0, 1])   # -> array of 6 indices

The deeper modules (``earclip.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound
    __version__ = _pkg_version("earclip")  # populated when installed
except _NotFound:  # pragma: no cover - editable / unknown state
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

_tri = _imp('earclip.core.triangulate')
_cfg = _imp('earclip.core.config')
_err = _imp('earclip.core.errors')
_inp = _imp('earclip.core.inputs')
_val = _imp('earclip.core.validation')
_asm = _imp('earclip.core.assembler')
_stats = _imp('earclip.core.stats')
_log = _imp('earclip.core.logging_utils')

# Entry points
triangulate = _tri.triangulate
triangulate_with_report = _tri.triangulate_with_report
flatten = _inp.flatten

# Configuration / results
TriangulationConfig = _cfg.TriangulationConfig
TriangulationResult = _asm.TriangulationResult
ClipStats = _stats.ClipStats
format_stats = _stats.format_stats

# Errors
TriangulationError = _err.TriangulationError
TriangulationInputError = _err.TriangulationInputError
TriangulationStepLimitError = _err.TriangulationStepLimitError

# Audit helpers
deviation = _val.deviation
check_triangulation = _val.check_triangulation
polygon_signed_area = _val.polygon_signed_area
triangle_signed_areas = _val.triangle_signed_areas

configure_logging = _log.configure_logging

__all__ = [
    '__version__',
    'triangulate', 'triangulate_with_report', 'flatten',
    'TriangulationConfig', 'TriangulationResult', 'ClipStats', 'format_stats',
    'TriangulationError', 'TriangulationInputError', 'TriangulationStepLimitError',
    'deviation', 'check_triangulation', 'polygon_signed_area', 'triangle_signed_areas',
    'configure_logging',
]
