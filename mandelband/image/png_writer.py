from __future__ import annotations

import os
import tempfile

import numpy as np
from PIL import Image

from mandelband.util.logging_setup import get_logger


def image_format(path: str) -> str:
    """
    Pillow format name for `path`, from its extension (PNG if Pillow does not
    know the extension). Raises ValueError for formats Pillow can only read.
    """
    ext = os.path.splitext(path)[1].lower()
    fmt = Image.registered_extensions().get(ext, "PNG")
    if fmt not in Image.SAVE:
        raise ValueError(f"cannot write {fmt} images ({ext}); use e.g. .png")
    return fmt


def write_image(path: str, pixels: np.ndarray) -> None:
    """
    Write the (height, width) uint8 buffer `pixels` to `path` as an 8-bit
    grayscale image. The file only appears once it has been encoded completely.
    """
    logger = get_logger("image")
    if pixels.ndim != 2 or pixels.dtype != np.uint8:
        raise ValueError(f"expected a 2-D uint8 buffer, got shape={pixels.shape} dtype={pixels.dtype}")

    fmt = image_format(path)
    img = Image.fromarray(np.ascontiguousarray(pixels))

    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=".mandelband-", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "wb") as f:
            try:
                img.save(f, format=fmt)
            except KeyError as e:
                raise ValueError(f"cannot write {fmt} images: {e}") from e
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    logger.info("Image written: %s (%sx%s %s)", path, pixels.shape[1], pixels.shape[0], fmt)
