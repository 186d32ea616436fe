import math

import pytest

from cosmovol.geometry import (
    distance,
    distance_eps,
    ngb_periodic,
    periodic_distance,
    periodic_image,
    sort_by_key,
)


def test_distance_pythagorean_triple():
    assert distance((0.0, 0.0, 0.0), (3.0, 4.0, 0.0)) == pytest.approx(5.0)


def test_distance_is_symmetric_and_zero_on_self():
    a, b = (1.5, -2.0, 7.0), (-3.0, 4.25, 0.5)
    assert distance(a, b) == pytest.approx(distance(b, a))
    assert distance(a, a) == 0.0


def test_distance_eps_reduces_to_distance():
    a, b = (1.0, 2.0, 3.0), (4.0, -1.0, 0.5)
    assert distance_eps(a, b, 0.0) == pytest.approx(distance(a, b))


def test_distance_eps_on_same_point_is_eps():
    a = (2.0, 2.0, 2.0)
    assert distance_eps(a, a, 0.3) == pytest.approx(0.3)


@pytest.mark.parametrize("x", [-250.0, -60.0, -10.0, 0.0, 10.0, 60.0, 149.0, 420.0])
def test_ngb_periodic_range_and_periodicity(x):
    box = 100.0
    wrapped = ngb_periodic(x, box)
    assert -0.5 * box <= wrapped <= 0.5 * box
    assert ngb_periodic(x + box, box) == pytest.approx(wrapped)


def test_ngb_periodic_rejects_bad_box():
    with pytest.raises(ValueError):
        ngb_periodic(1.0, 0.0)


def test_periodic_image_shifts_far_coordinates():
    box = 100.0
    pos = (1.0, 50.0, 99.0)
    center = (99.0, 50.0, 1.0)
    assert periodic_image(pos, center, box) == (pos[0] + box, pos[1], pos[2] - box)


def test_periodic_image_leaves_near_point_unchanged():
    pos = (10.0, 20.0, 30.0)
    assert periodic_image(pos, (15.0, 25.0, 35.0), 100.0) == pos


def test_periodic_distance_matches_direct_when_close():
    a, b = (10.0, 10.0, 10.0), (12.0, 11.0, 9.0)
    assert periodic_distance(a, b, 100.0) == pytest.approx(distance(a, b))


def test_periodic_distance_wraps_across_boundary():
    box = 100.0
    a, b = (1.0, 0.0, 0.0), (99.0, 0.0, 0.0)
    assert periodic_distance(a, b, box) == pytest.approx(distance(a, (-1.0, 0.0, 0.0)))
    assert periodic_distance(a, b, box) == pytest.approx(periodic_distance(b, a, box))


def test_periodic_distance_bounded_by_half_diagonal():
    box = 10.0
    points = [(0.1, 0.2, 9.9), (9.8, 5.0, 0.3), (5.0, 5.0, 5.0), (0.0, 9.9, 4.0)]
    for a in points:
        for b in points:
            assert periodic_distance(a, b, box) <= 0.5 * box * math.sqrt(3) + 1e-9


def test_sort_by_key_orders_and_keeps_pairs():
    keys = [5, 1, 4, 1, 3]
    values = ["a", "b", "c", "d", "e"]
    sorted_keys, sorted_values = sort_by_key(keys, values)
    assert sorted_keys == sorted(keys)
    assert sorted(zip(sorted_keys, sorted_values)) == sorted(zip(keys, values))


def test_sort_by_key_length_mismatch():
    with pytest.raises(ValueError):
        sort_by_key([1, 2], [1])