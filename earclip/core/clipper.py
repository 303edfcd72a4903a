"""Ear clipper: the triangulation state machine.

The clipper walks the live ring with a traversal pointer. A node is an ear
when its triangle with the two ring neighbours is not reflex and no other live
node blocks it (one strictly inside, or a reflex vertex on its boundary);
ears are emitted and spliced out. A stall counter tracks consecutive failed
tests. Once it reaches the live node count (a full pass without progress) the
recovery ladder runs:

1. splice out a node that coincides with its ring successor (no triangle);
2. cut the ring along a valid interior diagonal and queue both halves;
3. force-clip the current node; the triangle is flagged as forced.

Sub-rings produced by step 2 go onto an explicit work stack rather than
being processed recursively.
"""
from __future__ import annotations

from typing import List, Optional

from .arena import NIL, NodeArena
from .assembler import ResultAssembler
from .config import TriangulationConfig
from .errors import TriangulationStepLimitError
from .geometry import area_tolerance, blocks_ear, is_valid_diagonal
from .linker import RingLinker
from .logging_utils import get_logger
from .stats import ClipStats
from .zorder import ZOrderIndex

logger = get_logger('earclip.clipper')


class EarClipper:

    def __init__(self, arena: NodeArena, assembler: ResultAssembler,
                 index: Optional[ZOrderIndex] = None,
                 stats: Optional[ClipStats] = None,
                 config: Optional[TriangulationConfig] = None,
                 linker: Optional[RingLinker] = None):
        self.arena = arena
        self.assembler = assembler
        self.index = index
        self.stats = stats if stats is not None else ClipStats()
        self.config = config or TriangulationConfig()
        # cleanup around split diagonals reuses the linker's filter pass
        self.linker = linker or RingLinker(arena, self.stats, self.config)
        self.steps = 0

    # ------------------------------------------------------------------
    # ear predicate
    # ------------------------------------------------------------------
    def is_ear(self, ear: int) -> bool:
        arena = self.arena
        a = arena.prev[ear]
        c = arena.next[ear]
        if arena.equals(ear, a) or arena.equals(ear, c) or arena.equals(a, c):
            return False
        area = arena.cross(a, ear, c)
        if area < -area_tolerance(arena, a, ear, c):
            return False  # reflex
        if area <= 0:
            # flat: nothing can lie strictly inside
            return True
        if self.index is not None:
            return not self.index.has_point_inside(a, ear, c)
        return not self._scan_point_inside(a, ear, c)

    def _scan_point_inside(self, a: int, b: int, c: int) -> bool:
        arena = self.arena
        x, y, nxt = arena.x, arena.y, arena.next
        ax, ay, bx, by, cx, cy = x[a], y[a], x[b], y[b], x[c], y[c]
        x0 = min(ax, bx, cx); y0 = min(ay, by, cy)
        x1 = max(ax, bx, cx); y1 = max(ay, by, cy)
        p = nxt[c]
        while p != a:
            if (x0 <= x[p] <= x1 and y0 <= y[p] <= y1
                    and blocks_ear(arena, p, a, b, c)):
                return True
            p = nxt[p]
        return False

    # ------------------------------------------------------------------
    # driver
    # ------------------------------------------------------------------
    def run(self, start: int) -> None:
        """Clip the ring containing ``start`` and every sub-ring split off it."""
        stack: List[int] = [start]
        while stack:
            self._clip_ring(stack.pop(), stack)

    def _clip_ring(self, ear: int, stack: List[int]) -> None:
        arena = self.arena
        if self.index is not None:
            self.index.index_ring(ear)
        live = arena.ring_size(ear)
        stall = 0
        max_steps = self.config.max_steps

        while live > 3:
            self.steps += 1
            if max_steps is not None and self.steps > max_steps:
                raise TriangulationStepLimitError(max_steps, self.assembler.count)
            a = arena.prev[ear]
            c = arena.next[ear]
            self.stats.ear_tests += 1
            if self.is_ear(ear):
                self.assembler.emit(arena.index[a], arena.index[ear], arena.index[c])
                self.stats.ears += 1
                arena.remove(ear)
                live -= 1
                stall = 0
                ear = c
                continue

            ear = c
            stall += 1
            if stall < live:
                continue

            # full pass without an ear: recovery ladder
            stall = 0
            dup = self._find_duplicate(ear)
            if dup != NIL:
                logger.debug("stall: dropping duplicate vertex %d", arena.index[dup])
                if dup == ear:
                    ear = arena.next[dup]
                arena.remove(dup)
                self.stats.duplicates_removed += 1
                live -= 1
                continue

            halves = self._split(ear)
            if halves is not None:
                logger.debug("stall: split ring of %d nodes along diagonal %d-%d",
                             live, arena.index[halves[0]], arena.index[halves[1]])
                self.stats.splits += 1
                stack.append(halves[1])
                stack.append(halves[0])
                return

            if not self.config.allow_forced:
                self.stats.abandoned += 1
                logger.warning("stall: abandoning sub-ring of %d nodes without a valid ear", live)
                return

            a = arena.prev[ear]
            c = arena.next[ear]
            logger.warning("stall: forcing ear at vertex %d (%d live nodes)", arena.index[ear], live)
            self.assembler.emit(arena.index[a], arena.index[ear], arena.index[c], forced=True)
            self.stats.forced += 1
            arena.remove(ear)
            live -= 1
            ear = c

        if live == 3:
            self._emit_last(ear)

    def _emit_last(self, b: int) -> None:
        arena = self.arena
        a = arena.prev[b]
        c = arena.next[b]
        ia, ib, ic = arena.index[a], arena.index[b], arena.index[c]
        if ia == ib or ib == ic or ia == ic:
            # a collapsed bridge or split: all three corners sit on two vertices
            self.stats.degenerate_dropped += 1
            return
        forced = arena.cross(a, b, c) < -area_tolerance(arena, a, b, c)
        if forced and not self.config.allow_forced:
            self.stats.abandoned += 1
            logger.warning("final triangle (%d, %d, %d) is inverted; dropped", ia, ib, ic)
            return
        if forced:
            self.stats.forced += 1
            logger.warning("final triangle (%d, %d, %d) is inverted", ia, ib, ic)
        else:
            self.stats.ears += 1
        self.assembler.emit(ia, ib, ic, forced=forced)
        for k in (a, b, c):
            arena.remove(k)

    # ------------------------------------------------------------------
    # recovery helpers
    # ------------------------------------------------------------------
    def _find_duplicate(self, start: int) -> int:
        arena = self.arena
        for p in arena.ring(start):
            if arena.equals(p, arena.next[p]):
                return p
        return NIL

    def _split(self, start: int):
        """Cut the ring along the first valid diagonal found; return both halves or None."""
        arena = self.arena
        a = start
        while True:
            b = arena.next[arena.next[a]]
            while b != arena.prev[a]:
                if arena.index[a] != arena.index[b] and is_valid_diagonal(arena, a, b):
                    c = arena.split(a, b)
                    if self.config.filter_points:
                        a = self.linker.filter_points(a, arena.next[a])
                        c = self.linker.filter_points(c, arena.next[c])
                    return a, c
                b = arena.next[b]
            a = arena.next[a]
            if a == start:
                return None


__all__ = ['EarClipper']
