import math

import pytest

from earclip.core.arena import NIL, NodeArena
from earclip.core.assembler import ResultAssembler
from earclip.core.clipper import EarClipper
from earclip.core.zorder import ZOrderIndex, morton_key


@pytest.mark.parametrize("qx,qy,key", [
    (0, 0, 0), (1, 0, 1), (0, 1, 2), (1, 1, 3), (2, 0, 4), (3, 5, 39),
    (32767, 32767, (1 << 30) - 1),
])
def test_morton_key_interleaves_bits(qx, qy, key):
    assert morton_key(qx, qy) == key


def test_morton_key_monotonic_per_axis():
    for q in range(0, 300, 7):
        assert morton_key(q, 11) <= morton_key(q + 1, 11)
        assert morton_key(11, q) <= morton_key(11, q + 1)


def build(points):
    arena = NodeArena()
    last = NIL
    for i, (x, y) in enumerate(points):
        last = arena.insert_after(i, float(x), float(y), last)
    xs = [float(p[0]) for p in points]
    ys = [float(p[1]) for p in points]
    return arena, arena.next[last], xs, ys


def test_index_ring_sorts_every_node():
    pts = [(math.cos(t) * 5, math.sin(t) * 3) for t in [i * 0.37 for i in range(40)]]
    arena, start, xs, ys = build(pts)
    index = ZOrderIndex.from_coords(arena, xs, ys)
    head = index.index_ring(start)
    seen = []
    p = head
    while p != NIL:
        seen.append(p)
        p = arena.next_z[p]
    assert sorted(seen) == list(range(40))
    keys = [arena.z[p] for p in seen]
    assert keys == sorted(keys)
    assert arena.prev_z[head] == NIL


def test_quantization_frame_covers_all_coordinates():
    arena, start, xs, ys = build([(-3, 2), (7, 2), (7, 4), (-3, 4)])
    index = ZOrderIndex.from_coords(arena, xs, ys)
    assert index.min_x == -3 and index.min_y == 2
    assert index.key(7, 4) == morton_key(int(10 * index.inv_size), int(2 * index.inv_size))


def test_degenerate_frame_has_zero_scale():
    arena, start, xs, ys = build([(1, 1), (1, 1), (1, 1)])
    index = ZOrderIndex.from_coords(arena, xs, ys)
    assert index.inv_size == 0.0
    assert index.key(1, 1) == 0


def test_query_matches_scan():
    # (5, 1) is a reflex vertex strictly inside the ear at (10, 0)
    pts = [(0, 0), (10, 0), (10, 10), (5, 1), (0, 10)]
    arena, start, xs, ys = build(pts)
    index = ZOrderIndex.from_coords(arena, xs, ys)
    index.index_ring(start)
    assert index.has_point_inside(0, 1, 2)
    scan = EarClipper(arena, ResultAssembler())
    indexed = EarClipper(arena, ResultAssembler(), index=index)
    for k in arena.ring(start):
        assert scan.is_ear(k) == indexed.is_ear(k)
    assert not scan.is_ear(1)


def test_removed_nodes_leave_the_index():
    pts = [(0, 0), (10, 0), (10, 10), (5, 1), (0, 10)]
    arena, start, xs, ys = build(pts)
    index = ZOrderIndex.from_coords(arena, xs, ys)
    index.index_ring(start)
    arena.remove(3)
    assert not index.has_point_inside(0, 1, 2)
