import pytest

from mandelband.mapping import pixel_to_point
from mandelband.model import ImageDimensions, PlaneRegion

REGIONS = [
    PlaneRegion(complex(-1.0, 1.0), complex(1.0, -1.0)),
    PlaneRegion(complex(-2.5, 1.25), complex(1.0, -1.25)),
    PlaneRegion(complex(-1.20, 0.35), complex(-1.0, 0.20)),
    PlaneRegion(complex(-0.7436, 0.1319), complex(-0.7435, 0.1318)),
]
DIMENSIONS = [ImageDimensions(100, 100), ImageDimensions(1000, 750), ImageDimensions(7, 3), ImageDimensions(1, 1)]


def test_pixel_to_point_known_value():
    dims = ImageDimensions(100, 100)
    region = PlaneRegion(complex(-1.0, 1.0), complex(1.0, -1.0))
    assert pixel_to_point(dims, 75, 25, region) == complex(-0.5, -0.5)


@pytest.mark.parametrize("region", REGIONS)
@pytest.mark.parametrize("dims", DIMENSIONS)
def test_top_left_pixel_is_upper_left(dims, region):
    assert pixel_to_point(dims, 0, 0, region) == region.upper_left


@pytest.mark.parametrize("region", REGIONS)
@pytest.mark.parametrize("dims", DIMENSIONS)
def test_bottom_right_pixel_within_one_step_of_lower_right(dims, region):
    step_re = (region.lower_right.real - region.upper_left.real) / dims.width
    step_im = (region.upper_left.imag - region.lower_right.imag) / dims.height
    p = pixel_to_point(dims, dims.height - 1, dims.width - 1, region)
    assert abs(p.real - region.lower_right.real) <= step_re + 1e-12
    assert abs(p.imag - region.lower_right.imag) <= step_im + 1e-12


@pytest.mark.parametrize("region", REGIONS)
def test_moving_right_increases_real_and_down_decreases_imag(region):
    dims = ImageDimensions(64, 48)
    for row in range(0, dims.height - 1, 5):
        for col in range(0, dims.width - 1, 7):
            here = pixel_to_point(dims, row, col, region)
            right = pixel_to_point(dims, row, col + 1, region)
            below = pixel_to_point(dims, row + 1, col, region)
            assert right.real > here.real
            assert right.imag == here.imag
            assert below.imag < here.imag
            assert below.real == here.real


def test_returns_builtin_complex():
    dims = ImageDimensions(10, 10)
    p = pixel_to_point(dims, 3, 4, REGIONS[0])
    assert type(p) is complex
