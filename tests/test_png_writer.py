import numpy as np
import pytest
from PIL import Image

from mandelband.image.png_writer import image_format, write_image


def _gradient(height=12, width=20):
    return (np.arange(height * width) % 256).astype(np.uint8).reshape(height, width)


def test_writes_grayscale_png(tmp_path):
    pixels = _gradient()
    path = tmp_path / "out.png"
    write_image(str(path), pixels)

    with Image.open(path) as img:
        assert img.format == "PNG"
        assert img.mode == "L"
        assert img.size == (20, 12)
        assert np.array_equal(np.asarray(img), pixels)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["out.png"]


def test_unknown_extension_falls_back_to_png(tmp_path):
    path = tmp_path / "out.mandel"
    write_image(str(path), _gradient())
    with Image.open(path) as img:
        assert img.format == "PNG"


def test_rejects_non_grayscale_buffer(tmp_path):
    with pytest.raises(ValueError):
        write_image(str(tmp_path / "out.png"), np.zeros((4, 4, 3), dtype=np.uint8))
    with pytest.raises(ValueError):
        write_image(str(tmp_path / "out.png"), np.zeros((4, 4), dtype=np.int32))
    assert list(tmp_path.iterdir()) == []


def test_failed_encode_leaves_no_file(tmp_path, monkeypatch):
    def broken_save(self, fp, format=None, **params):
        fp.write(b"\x89PNG partial")
        raise OSError("disk full")

    monkeypatch.setattr(Image.Image, "save", broken_save)
    with pytest.raises(OSError):
        write_image(str(tmp_path / "out.png"), _gradient())
    assert list(tmp_path.iterdir()) == []


def test_image_format_from_extension():
    assert image_format("mandel.png") == "PNG"
    assert image_format("MANDEL.TIF") == "TIFF"
    assert image_format("mandel") == "PNG"


def test_read_only_format_rejected_before_writing(tmp_path):
    path = tmp_path / "out.psd"
    with pytest.raises(ValueError, match="cannot write PSD"):
        write_image(str(path), _gradient())
    assert list(tmp_path.iterdir()) == []
