from __future__ import annotations

from typing import Optional

from mandelband.kernels import NOT_ESCAPED, escape_count, shade

IN_SET_INTENSITY = 0


def escape_time(point: complex, max_iterations: int) -> Optional[int]:
    """
    Try to determine if `point` is in the Mandelbrot set using at most
    `max_iterations` iterations.

    Returns the zero-based iteration at which z left the circle of radius two,
    or None if it never did (the point is treated as a member of the set).
    max_iterations must fit in a signed 64-bit integer.
    """
    count = escape_count(complex(point), max_iterations)
    if count == NOT_ESCAPED:
        return None
    return int(count)


def intensity(escape: Optional[int], max_iterations: int) -> int:
    """Grayscale value for an escape result: black inside the set, brighter for faster escapes."""
    if escape is None:
        return IN_SET_INTENSITY
    return int(shade(escape, max_iterations))
