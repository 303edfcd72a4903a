"""Logging utilities for earclip.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All earclip code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _ensure_earclip_root() -> logging.Logger:
    """Ensure the 'earclip' logger has a single stream handler and is isolated
    from the process root logger. Returns the 'earclip' logger.
    """
    root = logging.getLogger('earclip')
    # Only NullHandlers (added by package __init__): replace with a StreamHandler
    has_non_null = any(not isinstance(h, logging.NullHandler) for h in root.handlers)
    if not has_non_null:
        for h in list(root.handlers):
            if isinstance(h, logging.NullHandler):
                root.removeHandler(h)
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.propagate = False
    return root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else default


def configure_logging(level: Union[str, int] = 'INFO') -> logging.Logger:
    """Attach a stdout handler to the 'earclip' logger family and set its level.

    This does NOT modify the process root logger.
    """
    root = _ensure_earclip_root()
    root.setLevel(_to_level(level))
    return root


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'earclip' namespace.

    Unlike configure_logging() this never attaches handlers, so library code
    stays silent until the application opts in. Without a level the logger is
    NOTSET and inherits from its 'earclip' parent.
    """
    if name != 'earclip' and not name.startswith('earclip.'):
        name = 'earclip.' + name
    log = logging.getLogger(name)
    log.setLevel(_to_level(level) if level is not None else logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
