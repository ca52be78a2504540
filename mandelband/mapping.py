from __future__ import annotations

from mandelband.kernels import map_pixel
from mandelband.model import ImageDimensions, PlaneRegion


def pixel_to_point(dimensions: ImageDimensions, pixel_row: int, pixel_col: int, region: PlaneRegion) -> complex:
    """
    Return the point of the complex plane under pixel (pixel_row, pixel_col).

    Columns interpolate linearly from region.upper_left.real towards
    region.lower_right.real and rows from region.upper_left.imag down towards
    region.lower_right.imag, one pixel step being span / dimension. This is
    the same compiled routine the band workers run, so results match the
    rendered buffer bit for bit.
    """
    ul = region.upper_left
    lr = region.lower_right
    return complex(map_pixel(dimensions.width, dimensions.height, pixel_row, pixel_col,
                             ul.real, ul.imag, lr.real, lr.imag))
