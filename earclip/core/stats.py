"""Clipping statistics data structures and presentation utilities.

One ClipStats instance is filled per triangulation call; it travels back to
the caller inside TriangulationResult.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any


@dataclass
class ClipStats:
    vertices: int = 0
    ears: int = 0
    ear_tests: int = 0
    duplicates_removed: int = 0
    splits: int = 0
    forced: int = 0
    abandoned: int = 0
    degenerate_dropped: int = 0
    holes_merged: int = 0
    holes_skipped: int = 0
    bridge_nodes: int = 0
    filtered_points: int = 0
    indexed: bool = False
    # Timing (seconds)
    time_total: float = 0.0

    @property
    def recoveries(self) -> int:
        return self.duplicates_removed + self.splits + self.forced + self.abandoned

    def to_dict(self) -> Dict[str, Any]:
        return {
            'vertices': self.vertices,
            'ears': self.ears,
            'ear_tests': self.ear_tests,
            'duplicates_removed': self.duplicates_removed,
            'splits': self.splits,
            'forced': self.forced,
            'abandoned': self.abandoned,
            'degenerate_dropped': self.degenerate_dropped,
            'holes_merged': self.holes_merged,
            'holes_skipped': self.holes_skipped,
            'bridge_nodes': self.bridge_nodes,
            'filtered_points': self.filtered_points,
            'indexed': self.indexed,
            'recoveries': self.recoveries,
            'ear_hit_rate': (self.ears / self.ear_tests) if self.ear_tests else 0.0,
            'time_total': self.time_total,
        }


def format_stats(stats) -> str:
    """Return a human readable two-column table for a ClipStats or its dict."""
    d = stats.to_dict() if isinstance(stats, ClipStats) else dict(stats or {})
    if not d:
        return "<no stats>"
    rows = []
    for key, value in d.items():
        if isinstance(value, float):
            txt = f"{value * 1000.0:.3f} ms" if key.startswith('time') else f"{value:.4f}"
        else:
            txt = str(value)
        rows.append((key, txt))
    w0 = max(len(k) for k, _ in rows)
    w1 = max(len(v) for _, v in rows)
    lines = [f"{'stat'.ljust(w0)} {'value'.rjust(w1)}", "-" * (w0 + w1 + 1)]
    lines += [f"{k.ljust(w0)} {v.rjust(w1)}" for k, v in rows]
    return "\n".join(lines)


__all__ = ["ClipStats", "format_stats"]
