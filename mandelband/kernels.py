from __future__ import annotations

import numpy as np
from numba import njit

# Escape radius is 2, compared squared.
ESCAPE_NORM_SQR = 4.0
NOT_ESCAPED = -1


@njit(nogil=True)
def map_pixel(width, height, row, col, ul_re, ul_im, lr_re, lr_im):
    """
    Map pixel (row, col) of a width x height image onto the plane rectangle
    spanned by (ul_re, ul_im) .. (lr_re, lr_im). Row 0 is the top edge, i.e.
    the largest imaginary part.
    """
    span_re = lr_re - ul_re
    span_im = ul_im - lr_im
    re = ul_re + col * span_re / width
    im = ul_im - row * span_im / height
    return complex(re, im)


@njit(nogil=True)
def escape_count(point, limit):
    """
    Iterations taken by z <- z*z + point (from z = 0) to leave the radius-2
    circle, or NOT_ESCAPED if it is still inside after `limit` iterations.
    """
    c_re = point.real
    c_im = point.imag
    z_re = 0.0
    z_im = 0.0
    for i in range(limit):
        z_re, z_im = z_re * z_re - z_im * z_im + c_re, z_re * z_im + z_im * z_re + c_im
        if z_re * z_re + z_im * z_im > ESCAPE_NORM_SQR:
            return i
    return NOT_ESCAPED


@njit(nogil=True)
def shade(count, limit):
    if count == NOT_ESCAPED:
        return 0
    return 255 - (count * 255) // limit


@njit(nogil=True)
def fill_band(pixels, start_row, width, height, ul_re, ul_im, lr_re, lr_im, limit):
    # pixels is the (rows, width) view owned by this band only
    for local_row in range(pixels.shape[0]):
        row = start_row + local_row
        for col in range(width):
            point = map_pixel(width, height, row, col, ul_re, ul_im, lr_re, lr_im)
            pixels[local_row, col] = np.uint8(shade(escape_count(point, limit), limit))
