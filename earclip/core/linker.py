"""Ring linker: turns the outer boundary and its holes into one simple ring.

The outer ring is linked counter-clockwise, every hole clockwise. Holes are
processed left to right (by their leftmost vertex, ties by original ordinal)
and each is spliced into the ring-so-far with a bridge pair found by casting a
ray to the left from the hole's leftmost vertex (Eberly's construction).
Processing in that order keeps bridges from crossing one another.
"""
from __future__ import annotations

import math
from typing import List, Optional, Sequence

from .arena import NIL, NodeArena, ring_signed_area
from .config import TriangulationConfig
from .geometry import locally_inside, point_in_triangle, sector_contains_sector
from .logging_utils import get_logger
from .stats import ClipStats

logger = get_logger('earclip.linker')


class RingLinker:
    """Builder phase run once per call, before any clipping."""

    def __init__(self, arena: NodeArena, stats: Optional[ClipStats] = None,
                 config: Optional[TriangulationConfig] = None):
        self.arena = arena
        self.stats = stats if stats is not None else ClipStats()
        self.config = config or TriangulationConfig()

    def link(self, xs: Sequence[float], ys: Sequence[float], holes: Sequence[int]) -> int:
        """Link the outer ring and merge every hole; return a slot of the merged ring.

        Returns NIL when the outer ring has fewer than three distinct points.
        """
        outer_end = holes[0] if holes else len(xs)
        outer = self.link_ring(xs, ys, 0, outer_end, ccw=True)
        if outer == NIL or self.arena.next[outer] == self.arena.prev[outer]:
            return NIL
        if holes:
            outer = self.eliminate_holes(xs, ys, holes, outer)
        return outer

    def link_ring(self, xs, ys, start: int, end: int, ccw: bool) -> int:
        """Create the circular list for vertices ``[start, end)`` with the requested winding.

        Consecutive exact duplicates are dropped. Returns the last linked slot
        or NIL for an empty range.
        """
        arena = self.arena
        last = NIL
        if ccw == (ring_signed_area(xs, ys, start, end) > 0):
            order = range(start, end)
        else:
            order = range(end - 1, start - 1, -1)
        for i in order:
            last = arena.insert_after(i, xs[i], ys[i], last)
        if last == NIL:
            return NIL
        return self.drop_duplicates(last)

    def drop_duplicates(self, start: int) -> int:
        """Remove nodes that coincide with their ring successor; return a live slot."""
        arena = self.arena
        live = start
        for k in list(arena.ring(start)):
            n = arena.next[k]
            if n != k and arena.equals(k, n):
                arena.remove(k)
                self.stats.filtered_points += 1
            else:
                live = k
        return live

    def filter_points(self, start: int, end: int = NIL) -> int:
        """Drop duplicate and exactly collinear nodes between ``start`` and ``end``.

        Removal steps back one node so newly created collinear runs are also
        caught. Returns a live slot of the ring.
        """
        if start == NIL:
            return start
        arena = self.arena
        if end == NIL:
            end = start
        p = start
        while True:
            again = False
            if arena.equals(p, arena.next[p]) or arena.cross(arena.prev[p], p, arena.next[p]) == 0:
                arena.remove(p)
                self.stats.filtered_points += 1
                p = end = arena.prev[p]
                if p == arena.next[p]:
                    break
                again = True
            else:
                p = arena.next[p]
            if not again and p == end:
                break
        return end

    def leftmost(self, start: int) -> int:
        x, y = self.arena.x, self.arena.y
        best = start
        for p in self.arena.ring(start):
            if x[p] < x[best] or (x[p] == x[best] and y[p] < y[best]):
                best = p
        return best

    def eliminate_holes(self, xs, ys, holes: Sequence[int], outer: int) -> int:
        arena = self.arena
        queue: List[int] = []
        for i, start in enumerate(holes):
            end = holes[i + 1] if i + 1 < len(holes) else len(xs)
            h = self.link_ring(xs, ys, start, end, ccw=False)
            if h == NIL or arena.next[h] == h:
                self.stats.holes_skipped += 1
                logger.warning("hole starting at vertex %d collapses to a point; skipped", start)
                continue
            queue.append(self.leftmost(h))
        queue.sort(key=lambda k: (arena.x[k], arena.index[k]))
        for h in queue:
            outer = self.eliminate_hole(h, outer)
        return outer

    def eliminate_hole(self, hole: int, outer: int) -> int:
        """Splice the hole ring containing ``hole`` into the ring of ``outer``."""
        arena = self.arena
        bridge = self.find_hole_bridge(hole, outer)
        if bridge == NIL:
            self.stats.holes_skipped += 1
            logger.warning("no bridge found for hole vertex %d at (%g, %g); hole skipped",
                           arena.index[hole], arena.x[hole], arena.y[hole])
            return outer
        bridge_reverse = arena.split(bridge, hole)
        self.stats.bridge_nodes += 2
        self.stats.holes_merged += 1
        logger.debug("hole vertex %d bridged to vertex %d", arena.index[hole], arena.index[bridge])
        if not self.config.filter_points:
            return bridge
        live = self.filter_points(bridge_reverse, arena.next[bridge_reverse])
        start = bridge if arena.alive[bridge] else live
        return self.filter_points(start, arena.next[start])

    def find_hole_bridge(self, hole: int, outer: int) -> int:
        """Return the ring slot the hole's leftmost vertex can see, or NIL."""
        arena = self.arena
        x, y, nxt = arena.x, arena.y, arena.next
        hx, hy = x[hole], y[hole]
        qx = -math.inf
        m = NIL

        # nearest edge hit by a ray from the hole point towards -x; its
        # endpoint with smaller x is the candidate
        p = outer
        while True:
            q = nxt[p]
            if hy <= y[p] and hy >= y[q] and y[q] != y[p]:
                hit = x[p] + (hy - y[p]) * (x[q] - x[p]) / (y[q] - y[p])
                if hit <= hx and hit > qx:
                    qx = hit
                    m = p if x[p] < x[q] else q
                    if hit == hx:
                        # hole touches the edge
                        return m
            p = q
            if p == outer:
                break

        if m == NIL:
            return NIL

        # reflex vertices inside (hole point, hit point, candidate) may block the
        # view; the visible one with the smallest angle to the ray wins
        stop = m
        mx, my = x[m], y[m]
        tan_min = math.inf
        p = m
        while True:
            px, py = x[p], y[p]
            if (hx >= px >= mx and hx != px
                    and point_in_triangle(hx if hy < my else qx, hy, mx, my,
                                          qx if hy < my else hx, hy, px, py)):
                tan = abs(hy - py) / (hx - px)
                if locally_inside(arena, p, hole) and (
                        tan < tan_min
                        or (tan == tan_min
                            and (px > x[m] or (px == x[m] and sector_contains_sector(arena, m, p))))):
                    m = p
                    tan_min = tan
            p = nxt[p]
            if p == stop:
                break
        return m


__all__ = ['RingLinker']
