import pytest

from mandelband.escape import IN_SET_INTENSITY, escape_time, intensity


@pytest.mark.parametrize("limit", [1, 2, 10, 255, 5000])
def test_origin_never_escapes(limit):
    assert escape_time(0j, limit) is None


@pytest.mark.parametrize("point", [complex(-1.0, 0.0), complex(-2.0, 0.0), complex(0.25, 0.0), complex(-0.1, 0.1)])
def test_points_in_set_do_not_escape(point):
    # -2 sits exactly on the radius-2 circle and must not count as escaped
    assert escape_time(point, 1000) is None


@pytest.mark.parametrize("limit", [1, 5, 255, 10000])
def test_far_point_escapes_immediately(limit):
    assert escape_time(complex(2.0, 2.0), limit) in (0, 1)


def test_escape_counts_are_zero_based():
    assert escape_time(complex(1.0, 0.0), 50) == 2
    assert escape_time(complex(-1.0, 1.0), 50) == 2


def test_limit_reached_before_escape():
    assert escape_time(complex(1.0, 0.0), 2) is None
    assert escape_time(complex(1.0, 0.0), 3) == 2


def test_escape_time_is_deterministic():
    point = complex(-0.743643887037151, 0.13182590420533)
    results = {escape_time(point, 2000) for _ in range(20)}
    assert len(results) == 1


def test_in_set_intensity_is_black():
    assert intensity(None, 255) == IN_SET_INTENSITY == 0


def test_intensity_matches_255_minus_count_at_limit_255():
    for k in range(255):
        assert intensity(k, 255) == 255 - k


@pytest.mark.parametrize("limit", [1, 3, 50, 255, 1000])
def test_intensity_monotonic_and_distinct_from_in_set(limit):
    values = [intensity(k, limit) for k in range(limit)]
    assert values[0] == 255
    assert all(1 <= v <= 255 for v in values)
    assert all(a >= b for a, b in zip(values, values[1:]))
