import logging

import pytest

from earclip.core.arena import NIL, NodeArena
from earclip.core.config import TriangulationConfig
from earclip.core.linker import RingLinker
from earclip.core.stats import ClipStats


def xy(points):
    return [float(p[0]) for p in points], [float(p[1]) for p in points]


def ring_area(arena, start):
    total = 0.0
    for k in arena.ring(start):
        n = arena.next[k]
        total += arena.x[k] * arena.y[n] - arena.x[n] * arena.y[k]
    return 0.5 * total


def test_outer_ring_forced_ccw():
    xs, ys = xy([(0, 0), (0, 1), (1, 1), (1, 0)])  # clockwise input
    arena = NodeArena()
    start = RingLinker(arena).link_ring(xs, ys, 0, 4, ccw=True)
    assert ring_area(arena, start) == pytest.approx(1.0)


def test_hole_ring_forced_cw():
    xs, ys = xy([(0, 0), (1, 0), (1, 1), (0, 1)])  # counter-clockwise input
    arena = NodeArena()
    start = RingLinker(arena).link_ring(xs, ys, 0, 4, ccw=False)
    assert ring_area(arena, start) == pytest.approx(-1.0)


def test_consecutive_duplicates_dropped_on_link():
    xs, ys = xy([(0, 0), (1, 0), (1, 0), (1, 0), (1, 1), (0, 1), (0, 0)])
    arena = NodeArena()
    stats = ClipStats()
    start = RingLinker(arena, stats).link_ring(xs, ys, 0, 7, ccw=True)
    assert arena.ring_size(start) == 4
    assert stats.filtered_points == 3


def test_outer_ring_too_small_returns_nil():
    xs, ys = xy([(0, 0), (1, 1)])
    assert RingLinker(NodeArena()).link(xs, ys, []) == NIL
    xs, ys = xy([(0, 0), (0, 0), (0, 0)])
    assert RingLinker(NodeArena()).link(xs, ys, []) == NIL


def test_hole_bridge_targets_visible_vertex(heptagon):
    points = heptagon + [(1, 1), (2, 1), (2, 2), (1, 2)]
    xs, ys = xy(points)
    arena = NodeArena()
    linker = RingLinker(arena)
    outer = linker.link_ring(xs, ys, 0, 7, ccw=True)
    hole = linker.link_ring(xs, ys, 7, 11, ccw=False)
    left = linker.leftmost(hole)
    assert arena.index[left] == 7
    bridge = linker.find_hole_bridge(left, outer)
    assert arena.index[bridge] == 6


def test_merged_ring_contains_every_vertex_plus_bridge_pair(heptagon_with_hole):
    coords, holes = heptagon_with_hole
    xs, ys = coords[0::2], coords[1::2]
    arena = NodeArena()
    stats = ClipStats()
    start = RingLinker(arena, stats).link(xs, ys, holes)
    indices = arena.ring_indices(start)
    assert len(indices) == 13
    assert set(indices) == set(range(11))
    # the two bridge ends each appear twice
    doubled = sorted(i for i in set(indices) if indices.count(i) == 2)
    assert doubled == [6, 7]
    assert stats.holes_merged == 1 and stats.bridge_nodes == 2
    assert ring_area(arena, start) == pytest.approx(18.0 - 1.0)


def test_holes_merged_left_to_right():
    outer = [(0, 0), (10, 0), (10, 10), (0, 10)]
    right = [(6, 6), (8, 6), (8, 8), (6, 8)]
    left = [(2, 2), (4, 2), (4, 4), (2, 4)]
    xs, ys = xy(outer + right + left)
    arena = NodeArena()
    stats = ClipStats()
    start = RingLinker(arena, stats).link(xs, ys, [4, 8])
    assert stats.holes_merged == 2
    assert arena.ring_size(start) == 12 + 4
    assert ring_area(arena, start) == pytest.approx(100.0 - 8.0)


def test_hole_outside_outer_is_skipped_with_warning():
    xs, ys = xy([(0, 0), (1, 0), (1, 1), (0, 1), (5, 5), (6, 5), (6, 6), (5, 6)])
    arena = NodeArena()
    stats = ClipStats()
    records = []
    handler = logging.Handler()
    handler.emit = records.append
    log = logging.getLogger('earclip.linker')
    log.addHandler(handler)
    try:
        start = RingLinker(arena, stats).link(xs, ys, [4])
    finally:
        log.removeHandler(handler)
    assert stats.holes_skipped == 1 and stats.holes_merged == 0
    assert sorted(arena.ring_indices(start)) == [0, 1, 2, 3]
    assert any(r.levelno == logging.WARNING for r in records)


def test_filter_points_removes_collinear_and_duplicates():
    xs, ys = xy([(0, 0), (1, 0), (2, 0), (2, 2), (2, 2), (0, 2)])
    arena = NodeArena()
    linker = RingLinker(arena, config=TriangulationConfig())
    last = NIL
    for i in range(len(xs)):
        last = arena.insert_after(i, xs[i], ys[i], last)
    start = linker.filter_points(last)
    assert sorted(arena.ring_indices(start)) == [0, 2, 4, 5]
