import numpy as np
import pytest

from earclip import check_triangulation, deviation, polygon_signed_area, triangle_signed_areas

from conftest import HEPTAGON, SQUARE_HOLE, flat

SQUARE = [0, 0, 1, 0, 1, 1, 0, 1]


def test_polygon_signed_area_orientation():
    assert polygon_signed_area([(0, 0), (1, 0), (1, 1), (0, 1)]) == pytest.approx(1.0)
    assert polygon_signed_area([(0, 0), (0, 1), (1, 1), (1, 0)]) == pytest.approx(-1.0)
    assert polygon_signed_area([(0, 0), (1, 1)]) == 0.0


def test_heptagon_area():
    assert polygon_signed_area(HEPTAGON) == pytest.approx(18.0)


def test_triangle_signed_areas_flat_and_triples():
    pts = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)
    flat_tris = [0, 1, 2, 0, 2, 3]
    areas = triangle_signed_areas(pts, flat_tris)
    np.testing.assert_allclose(areas, [0.5, 0.5])
    np.testing.assert_allclose(triangle_signed_areas(pts, np.array([[0, 2, 1]])), [-0.5])
    assert triangle_signed_areas(pts, []).shape == (0,)


def test_deviation_zero_for_exact_cover():
    assert deviation(SQUARE, None, [0, 1, 2, 0, 2, 3]) == 0.0


def test_deviation_reports_missing_area():
    assert deviation(SQUARE, None, [0, 1, 2]) == pytest.approx(0.5)


def test_deviation_subtracts_holes():
    coords = flat(HEPTAGON, SQUARE_HOLE)
    # heptagon triangles alone overshoot by the hole area
    assert deviation(coords, [7], [0, 1, 2]) > 0
    assert deviation(coords, [7], []) == pytest.approx(1.0)


def test_deviation_of_flat_polygon():
    line = [0, 0, 1, 0, 2, 0]
    assert deviation(line, None, []) == 0.0
    assert deviation(line, None, [0, 1, 2]) == 0.0


def test_check_passes_good_triangulation():
    ok, msgs = check_triangulation(SQUARE, None, [0, 1, 2, 0, 2, 3])
    assert ok and msgs == []


def test_check_flags_clockwise_triangle():
    ok, msgs = check_triangulation(SQUARE, None, [0, 2, 1, 0, 3, 2])
    assert not ok
    assert any("clockwise" in m for m in msgs)


def test_check_ignores_forced_orientation():
    ok, msgs = check_triangulation(SQUARE, None, [0, 1, 2, 0, 3, 2], forced=[False, True])
    assert all("clockwise" not in m for m in msgs)


def test_check_rejects_bad_length_and_range():
    ok, msgs = check_triangulation(SQUARE, None, [0, 1])
    assert not ok and "multiple of 3" in msgs[0]
    ok, msgs = check_triangulation(SQUARE, None, [0, 1, 7])
    assert not ok and "outside" in msgs[0]


def test_check_flags_clockwise_triangle_at_small_scale():
    tiny = [c * 1e-7 for c in SQUARE]
    ok, msgs = check_triangulation(tiny, None, [0, 2, 1, 0, 3, 2])
    assert not ok
    assert any("clockwise" in m for m in msgs)
