from __future__ import annotations

import os
import time
from typing import Any, Dict

import numpy as np
from tqdm import tqdm

from mandelband.image.png_writer import image_format, write_image
from mandelband.model import RenderConfig
from mandelband.scheduler import partition_rows, render
from mandelband.util.logging_setup import get_logger

def _band_count(config: RenderConfig) -> int:
    # the scheduler skips empty bands
    return sum(1 for start, end in partition_rows(config.dimensions.height, config.worker_count) if end > start)

def render_to_file(config: RenderConfig, output: str, *, progress: bool = False) -> Dict[str, Any]:
    logger = get_logger("pipeline")
    dims = config.dimensions
    ul = config.region.upper_left
    lr = config.region.lower_right

    logger.info("Rendering %sx%s upper_left=%s lower_right=%s limit=%s threads=%s -> %s",
                dims.width, dims.height, ul, lr, config.max_iterations, config.worker_count, output)

    # fail on an unwritable format before spending time on the render
    image_format(output)

    start = time.perf_counter()
    if progress:
        with tqdm(total=_band_count(config), unit="band", desc=os.path.basename(output)) as bar:
            pixels = render(config, on_band_done=lambda band: bar.update(1))
    else:
        pixels = render(config)
    elapsed = time.perf_counter() - start

    write_image(output, pixels)

    in_set = int(np.count_nonzero(pixels == 0))
    logger.info("Render complete in %.3fs (%s of %s pixels in set)", elapsed, in_set, pixels.size)
    return {
        "output": output,
        "width": dims.width,
        "height": dims.height,
        "max_iterations": config.max_iterations,
        "worker_count": config.worker_count,
        "elapsed_s": round(elapsed, 6),
        "in_set_pixels": in_set,
    }
