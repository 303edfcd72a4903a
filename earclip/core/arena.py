"""Index-addressed vertex nodes for the ring linker and the ear clipper.

Every node is a slot in a set of parallel lists. A slot keeps the original
vertex ordinal, its coordinates, a z-order key and two independent circular
adjacencies: the ring (``prev``/``next``) and the z-order list
(``prev_z``/``next_z``, ``-1`` terminated). Removing a node only splices it
out of both adjacencies; the slot stays addressable until the arena is dropped.
"""
from __future__ import annotations

from typing import Iterator, List

NIL = -1


class NodeArena:
    __slots__ = ('index', 'x', 'y', 'z', 'prev', 'next', 'prev_z', 'next_z', 'alive')

    def __init__(self):
        self.index: List[int] = []
        self.x: List[float] = []
        self.y: List[float] = []
        self.z: List[int] = []
        self.prev: List[int] = []
        self.next: List[int] = []
        self.prev_z: List[int] = []
        self.next_z: List[int] = []
        self.alive: List[bool] = []

    def __len__(self):
        return len(self.index)

    def new_node(self, index: int, x: float, y: float) -> int:
        """Allocate an unlinked slot (its ring adjacency points to itself)."""
        k = len(self.index)
        self.index.append(index)
        self.x.append(x)
        self.y.append(y)
        self.z.append(NIL)
        self.prev.append(k)
        self.next.append(k)
        self.prev_z.append(NIL)
        self.next_z.append(NIL)
        self.alive.append(True)
        return k

    def insert_after(self, index: int, x: float, y: float, last: int) -> int:
        """Create a node and link it after ``last`` (or alone when last is NIL)."""
        k = self.new_node(index, x, y)
        if last != NIL:
            nxt = self.next[last]
            self.next[k] = nxt
            self.prev[k] = last
            self.prev[nxt] = k
            self.next[last] = k
        return k

    def remove(self, k: int) -> None:
        """Splice ``k`` out of the ring and the z-order list.

        ``prev[k]``/``next[k]`` keep their old values so callers can keep
        walking from a removed node.
        """
        p, n = self.prev[k], self.next[k]
        self.next[p] = n
        self.prev[n] = p
        pz, nz = self.prev_z[k], self.next_z[k]
        if pz != NIL:
            self.next_z[pz] = nz
        if nz != NIL:
            self.prev_z[nz] = pz
        self.alive[k] = False

    def split(self, a: int, b: int) -> int:
        """Link ``a`` and ``b`` with a pair of duplicate nodes.

        When a and b lie on the same ring the ring is cut in two along the
        diagonal a-b; when b lies on a separate ring (a hole) both rings merge
        into one. The duplicates carry the ordinals of the nodes they copy.
        Returns the duplicate of ``b``, which sits on the ring not containing a.
        """
        a2 = self.new_node(self.index[a], self.x[a], self.y[a])
        b2 = self.new_node(self.index[b], self.x[b], self.y[b])
        an = self.next[a]
        bp = self.prev[b]

        self.next[a] = b
        self.prev[b] = a

        self.next[a2] = an
        self.prev[an] = a2

        self.next[b2] = a2
        self.prev[a2] = b2

        self.next[bp] = b2
        self.prev[b2] = bp
        return b2

    # --- geometry on slots ---

    def equals(self, a: int, b: int) -> bool:
        return self.x[a] == self.x[b] and self.y[a] == self.y[b]

    def cross(self, a: int, b: int, c: int) -> float:
        """Twice the signed area of (a, b, c); positive for a left (CCW) turn."""
        x, y = self.x, self.y
        return (x[b] - x[a]) * (y[c] - y[a]) - (y[b] - y[a]) * (x[c] - x[a])

    # --- traversal ---

    def ring(self, start: int) -> Iterator[int]:
        """Yield the slots of the ring containing ``start``, once each."""
        p = start
        while True:
            yield p
            p = self.next[p]
            if p == start:
                break

    def ring_size(self, start: int) -> int:
        return sum(1 for _ in self.ring(start))

    def ring_indices(self, start: int) -> List[int]:
        return [self.index[k] for k in self.ring(start)]


def ring_signed_area(xs, ys, start: int, end: int) -> float:
    """Twice the signed (shoelace) area of vertices ``[start, end)``; CCW positive."""
    total = 0.0
    j = end - 1
    for i in range(start, end):
        total += xs[j] * ys[i] - xs[i] * ys[j]
        j = i
    return total


__all__ = ['NIL', 'NodeArena', 'ring_signed_area']
