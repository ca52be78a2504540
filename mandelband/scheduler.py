from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from mandelband.kernels import fill_band
from mandelband.model import RenderConfig
from mandelband.util.logging_setup import get_logger


class RenderError(RuntimeError):
    """A band worker failed; the render produced no image."""


@dataclass(frozen=True, eq=False)
class Band:
    """Rows [start_row, end_row) of the image and the buffer view that holds them."""

    start_row: int
    end_row: int
    pixels: np.ndarray

    @property
    def rows(self) -> int:
        return self.end_row - self.start_row


def partition_rows(height: int, worker_count: int) -> List[Tuple[int, int]]:
    """
    Split [0, height) into `worker_count` contiguous [start, end) ranges.

    The first height % worker_count ranges get one extra row, so band sizes
    differ by at most one. Ranges are empty when there are more workers than
    rows.
    """
    if worker_count <= 0:
        raise ValueError("worker_count must be positive.")
    base, extra = divmod(height, worker_count)
    ranges: List[Tuple[int, int]] = []
    start = 0
    for i in range(worker_count):
        end = start + base + (1 if i < extra else 0)
        ranges.append((start, end))
        start = end
    return ranges


def split_bands(buffer: np.ndarray, worker_count: int) -> List[Band]:
    # basic slicing gives views, never copies
    return [Band(start, end, buffer[start:end]) for start, end in partition_rows(buffer.shape[0], worker_count)]


def _render_band(band: Band, config: RenderConfig) -> Band:
    dims = config.dimensions
    ul = config.region.upper_left
    lr = config.region.lower_right
    fill_band(band.pixels, band.start_row, dims.width, dims.height,
              ul.real, ul.imag, lr.real, lr.imag, config.max_iterations)
    return band


def render(config: RenderConfig, *, on_band_done: Optional[Callable[[Band], None]] = None) -> np.ndarray:
    """
    Render the Mandelbrot set described by `config` into a (height, width)
    uint8 buffer.

    Each worker thread owns one band view of the buffer and nothing else, so
    no locking is needed. Returns only after every band is written. If any
    worker raises, bands not yet started are cancelled and a RenderError is
    raised instead of returning a partial image.
    """
    logger = get_logger("scheduler")
    dims = config.dimensions
    buffer = np.zeros((dims.height, dims.width), dtype=np.uint8)
    bands = [b for b in split_bands(buffer, config.worker_count) if b.rows > 0]

    logger.info("Render start size=%sx%s bands=%s workers=%s limit=%s",
                dims.width, dims.height, len(bands), config.worker_count, config.max_iterations)

    with ThreadPoolExecutor(max_workers=config.worker_count, thread_name_prefix="band") as pool:
        pending = set()
        owners = {}
        for band in bands:
            logger.debug("Dispatch band rows=[%s, %s)", band.start_row, band.end_row)
            fut = pool.submit(_render_band, band, config)
            owners[fut] = band
            pending.add(fut)

        while pending:
            done, pending = wait(pending, return_when=FIRST_EXCEPTION)
            for fut in done:
                band = owners[fut]
                exc = fut.exception()
                if exc is not None:
                    for other in pending:
                        other.cancel()
                    logger.error("Band rows=[%s, %s) failed: %s", band.start_row, band.end_row, exc)
                    raise RenderError(f"worker for rows [{band.start_row}, {band.end_row}) failed: {exc}") from exc
                if on_band_done is not None:
                    on_band_done(band)

    logger.info("Render done size=%sx%s", dims.width, dims.height)
    return buffer
