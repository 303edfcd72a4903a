"""Z-order (Morton) spatial index over ring nodes.

Coordinates are quantized into the bounding box of the input and the bits of
the two 15-bit integers are interleaved into one key. Live nodes are kept in a
second doubly linked list sorted by key, so the emptiness test of an ear only
visits nodes whose key falls between the keys of the ear's bounding-box
corners. Removing a node from the arena also unlinks it from this list.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np

from .arena import NIL, NodeArena
from .constants import Z_ORDER_SCALE
from .geometry import blocks_ear

__all__ = ['morton_key', 'ZOrderIndex']


def morton_key(qx: int, qy: int) -> int:
    """Interleave the low 16 bits of qx (even bits) and qy (odd bits)."""
    qx = (qx | (qx << 8)) & 0x00FF00FF
    qx = (qx | (qx << 4)) & 0x0F0F0F0F
    qx = (qx | (qx << 2)) & 0x33333333
    qx = (qx | (qx << 1)) & 0x55555555

    qy = (qy | (qy << 8)) & 0x00FF00FF
    qy = (qy | (qy << 4)) & 0x0F0F0F0F
    qy = (qy | (qy << 2)) & 0x33333333
    qy = (qy | (qy << 1)) & 0x55555555
    return qx | (qy << 1)


class ZOrderIndex:
    """Quantization frame plus the z-order linked list stored in the arena."""

    def __init__(self, arena: NodeArena, min_x: float, min_y: float, inv_size: float):
        self.arena = arena
        self.min_x = min_x
        self.min_y = min_y
        self.inv_size = inv_size

    @classmethod
    def from_coords(cls, arena: NodeArena, xs: Sequence[float], ys: Sequence[float]) -> 'ZOrderIndex':
        """Frame the index on the bounding box of all input coordinates."""
        xa = np.asarray(xs, dtype=np.float64)
        ya = np.asarray(ys, dtype=np.float64)
        min_x, max_x = float(xa.min()), float(xa.max())
        min_y, max_y = float(ya.min()), float(ya.max())
        size = max(max_x - min_x, max_y - min_y)
        inv_size = Z_ORDER_SCALE / size if size != 0 else 0.0
        return cls(arena, min_x, min_y, inv_size)

    def key(self, x: float, y: float) -> int:
        qx = int((x - self.min_x) * self.inv_size)
        qy = int((y - self.min_y) * self.inv_size)
        return morton_key(qx, qy)

    def index_ring(self, start: int) -> int:
        """(Re)build the z-order list over the ring containing ``start``.

        Keys are computed once per slot; links are reset from ring order and
        merge-sorted. Returns the head of the sorted list.
        """
        arena = self.arena
        z, prev_z, next_z = arena.z, arena.prev_z, arena.next_z
        for p in arena.ring(start):
            if z[p] == NIL:
                z[p] = self.key(arena.x[p], arena.y[p])
            prev_z[p] = arena.prev[p]
            next_z[p] = arena.next[p]
        tail = prev_z[start]
        next_z[tail] = NIL
        prev_z[start] = NIL
        return self._sort(start)

    def _sort(self, head: int) -> int:
        """Stable bottom-up merge sort of the z-order list (Simon Tatham's listsort)."""
        z, prev_z, next_z = self.arena.z, self.arena.prev_z, self.arena.next_z
        in_size = 1
        while True:
            p = head
            head = NIL
            tail = NIL
            merges = 0
            while p != NIL:
                merges += 1
                q = p
                p_size = 0
                for _ in range(in_size):
                    p_size += 1
                    q = next_z[q]
                    if q == NIL:
                        break
                q_size = in_size
                while p_size > 0 or (q_size > 0 and q != NIL):
                    if p_size != 0 and (q_size == 0 or q == NIL or z[p] <= z[q]):
                        e = p
                        p = next_z[p]
                        p_size -= 1
                    else:
                        e = q
                        q = next_z[q]
                        q_size -= 1
                    if tail != NIL:
                        next_z[tail] = e
                    else:
                        head = e
                    prev_z[e] = tail
                    tail = e
                p = q
            next_z[tail] = NIL
            in_size *= 2
            if merges <= 1:
                return head

    def has_point_inside(self, a: int, b: int, c: int) -> bool:
        """Any live node blocking the ear (a, b, c), searching b's z-neighbourhood."""
        arena = self.arena
        x, y, z = arena.x, arena.y, arena.z
        prev_z, next_z = arena.prev_z, arena.next_z
        ax, ay, bx, by, cx, cy = x[a], y[a], x[b], y[b], x[c], y[c]
        x0 = min(ax, bx, cx); y0 = min(ay, by, cy)
        x1 = max(ax, bx, cx); y1 = max(ay, by, cy)
        min_z = self.key(x0, y0)
        max_z = self.key(x1, y1)

        p = prev_z[b]
        n = next_z[b]
        while p != NIL and z[p] >= min_z and n != NIL and z[n] <= max_z:
            if (p != a and p != c and x0 <= x[p] <= x1 and y0 <= y[p] <= y1
                    and blocks_ear(arena, p, a, b, c)):
                return True
            p = prev_z[p]
            if (n != a and n != c and x0 <= x[n] <= x1 and y0 <= y[n] <= y1
                    and blocks_ear(arena, n, a, b, c)):
                return True
            n = next_z[n]

        while p != NIL and z[p] >= min_z:
            if (p != a and p != c
                    and blocks_ear(arena, p, a, b, c)):
                return True
            p = prev_z[p]

        while n != NIL and z[n] <= max_z:
            if (n != a and n != c
                    and blocks_ear(arena, n, a, b, c)):
                return True
            n = next_z[n]
        return False
