"""Geometric predicates used by the ring linker and the ear clipper.

Plain-coordinate predicates take floats; the ring predicates take a
``NodeArena`` and slot numbers. All orientation tests use ``NodeArena.cross``
(positive for a counter-clockwise turn).
"""
from __future__ import annotations

from .arena import NodeArena
from .constants import EPS_AREA

__all__ = [
    'point_in_triangle', 'blocks_ear', 'area_tolerance',
    'intersects', 'locally_inside', 'sector_contains_sector',
    'intersects_polygon', 'middle_inside', 'is_valid_diagonal',
]


def point_in_triangle(ax, ay, bx, by, cx, cy, px, py) -> bool:
    """Closed containment of p in the CCW triangle (a, b, c)."""
    pax = ax - px; pay = ay - py
    pbx = bx - px; pby = by - py
    pcx = cx - px; pcy = cy - py
    return (pcx * pay - pax * pcy >= 0
            and pax * pby - pbx * pay >= 0
            and pbx * pcy - pcx * pby >= 0)


def area_tolerance(arena: NodeArena, a: int, b: int, c: int) -> float:
    """Cross-product tolerance for triangle (a, b, c), scaled to its size."""
    x, y = arena.x, arena.y
    ab = (x[b] - x[a]) ** 2 + (y[b] - y[a]) ** 2
    bc = (x[c] - x[b]) ** 2 + (y[c] - y[b]) ** 2
    ca = (x[a] - x[c]) ** 2 + (y[a] - y[c]) ** 2
    return EPS_AREA * max(ab, bc, ca)


def blocks_ear(arena: NodeArena, p: int, a: int, b: int, c: int) -> bool:
    """Whether live node ``p`` prevents the CCW ear (a, b, c) from being clipped.

    Points strictly inside always block. A point on the triangle boundary
    blocks only when it is a reflex ring vertex away from the three corners;
    nodes sitting exactly on a corner (bridge duplicates) never block.
    """
    x, y = arena.x, arena.y
    px, py = x[p], y[p]
    pax = x[a] - px; pay = y[a] - py
    pbx = x[b] - px; pby = y[b] - py
    pcx = x[c] - px; pcy = y[c] - py
    d1 = pcx * pay - pax * pcy
    d2 = pax * pby - pbx * pay
    d3 = pbx * pcy - pcx * pby
    if d1 < 0 or d2 < 0 or d3 < 0:
        return False
    if d1 > 0 and d2 > 0 and d3 > 0:
        return True
    if (pax == 0 and pay == 0) or (pbx == 0 and pby == 0) or (pcx == 0 and pcy == 0):
        return False
    return arena.cross(arena.prev[p], p, arena.next[p]) < 0


def _sign(v: float) -> int:
    return (v > 0) - (v < 0)


def _on_segment(arena: NodeArena, p: int, q: int, r: int) -> bool:
    """For collinear p, q, r: does q lie on segment p-r."""
    x, y = arena.x, arena.y
    return (min(x[p], x[r]) <= x[q] <= max(x[p], x[r])
            and min(y[p], y[r]) <= y[q] <= max(y[p], y[r]))


def intersects(arena: NodeArena, p1: int, q1: int, p2: int, q2: int) -> bool:
    """Segments p1-q1 and p2-q2 intersect (touching counts)."""
    o1 = _sign(arena.cross(p1, q1, p2))
    o2 = _sign(arena.cross(p1, q1, q2))
    o3 = _sign(arena.cross(p2, q2, p1))
    o4 = _sign(arena.cross(p2, q2, q1))
    if o1 != o2 and o3 != o4:
        return True
    if o1 == 0 and _on_segment(arena, p1, p2, q1):
        return True
    if o2 == 0 and _on_segment(arena, p1, q2, q1):
        return True
    if o3 == 0 and _on_segment(arena, p2, p1, q2):
        return True
    if o4 == 0 and _on_segment(arena, p2, q1, q2):
        return True
    return False


def locally_inside(arena: NodeArena, a: int, b: int) -> bool:
    """The diagonal a-b leaves ``a`` into the polygon interior."""
    ap, an = arena.prev[a], arena.next[a]
    if arena.cross(ap, a, an) > 0:
        return arena.cross(a, b, an) <= 0 and arena.cross(a, ap, b) <= 0
    return arena.cross(a, b, ap) > 0 or arena.cross(a, an, b) > 0


def sector_contains_sector(arena: NodeArena, m: int, p: int) -> bool:
    """Sector at ``m`` contains the sector at ``p`` (m and p coincide)."""
    return (arena.cross(arena.prev[m], m, arena.prev[p]) > 0
            and arena.cross(arena.next[p], m, arena.next[m]) > 0)


def intersects_polygon(arena: NodeArena, a: int, b: int) -> bool:
    """The segment a-b crosses a ring edge not incident to a or b."""
    ia, ib = arena.index[a], arena.index[b]
    index, nxt = arena.index, arena.next
    p = a
    while True:
        q = nxt[p]
        if (index[p] != ia and index[q] != ia and index[p] != ib and index[q] != ib
                and intersects(arena, p, q, a, b)):
            return True
        p = q
        if p == a:
            return False


def middle_inside(arena: NodeArena, a: int, b: int) -> bool:
    """Even-odd test of the midpoint of a-b against the ring of ``a``."""
    x, y, nxt = arena.x, arena.y, arena.next
    px = (x[a] + x[b]) / 2
    py = (y[a] + y[b]) / 2
    inside = False
    p = a
    while True:
        q = nxt[p]
        if ((y[p] > py) != (y[q] > py) and y[q] != y[p]
                and px < (x[q] - x[p]) * (py - y[p]) / (y[q] - y[p]) + x[p]):
            inside = not inside
        p = q
        if p == a:
            return inside


def is_valid_diagonal(arena: NodeArena, a: int, b: int) -> bool:
    """a-b is a diagonal through the ring interior that crosses no edge."""
    index, prev, nxt = arena.index, arena.prev, arena.next
    if index[nxt[a]] == index[b] or index[prev[a]] == index[b]:
        return False
    if intersects_polygon(arena, a, b):
        return False
    if (locally_inside(arena, a, b) and locally_inside(arena, b, a)
            and middle_inside(arena, a, b)
            and (arena.cross(prev[a], a, prev[b]) != 0 or arena.cross(a, prev[b], b) != 0)):
        return True
    # zero-length diagonal between coincident reflex nodes
    return (arena.equals(a, b)
            and arena.cross(prev[a], a, nxt[a]) < 0
            and arena.cross(prev[b], b, nxt[b]) < 0)
