import os

import numpy as np
import pytest
from PIL import Image

from backend.io_backend import load_pixel_grid, resolve_output_path, save_packed_texture
from backend.texture_classes import Pixel, PixelGrid


def test_load_pixel_grid_rgba(tmp_path):
    path = str(tmp_path / "rgba.png")
    image = Image.new("RGBA", (3, 2), (10, 20, 30, 40))
    image.putpixel((2, 1), (1, 2, 3, 4))
    image.save(path)

    grid = load_pixel_grid(path)

    assert grid.readable
    assert grid.size == (3, 2)
    assert len(grid) == 6
    assert grid[0] == Pixel(10, 20, 30, 40)
    assert grid[5] == Pixel(1, 2, 3, 4)  # Last pixel of the second row.


def test_load_pixel_grid_grayscale_is_expanded_to_rgba(tmp_path):
    path = str(tmp_path / "gray.png")
    Image.new("L", (2, 2), 77).save(path)

    grid = load_pixel_grid(path)

    assert grid.readable
    assert all(grid[i] == Pixel(77, 77, 77, 255) for i in range(len(grid)))


def test_load_pixel_grid_truncated_file_is_unreadable(tmp_path):
    path = str(tmp_path / "noise.png")
    noise = np.random.default_rng(7).integers(0, 256, size=(64, 64, 4), dtype=np.uint8)
    Image.fromarray(noise).save(path)
    with open(path, "rb") as f:
        data = f.read()
    with open(path, "wb") as f:
        f.write(data[: len(data) // 2])

    grid = load_pixel_grid(path)

    assert not grid.readable
    assert grid.size == (64, 64)
    assert len(grid) == 0


def test_load_pixel_grid_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_pixel_grid(str(tmp_path / "missing.png"))


@pytest.mark.parametrize("chosen_path", [None, "", "   "])
def test_resolve_output_path_cancelled(chosen_path):
    assert resolve_output_path(chosen_path) is None


def test_resolve_output_path_appends_png(tmp_path):
    assert resolve_output_path(str(tmp_path / "Mask")) == str(tmp_path / "Mask.png")
    assert resolve_output_path(str(tmp_path / "Mask.PNG")) == str(tmp_path / "Mask.PNG")


def test_save_packed_texture_writes_png(tmp_path):
    pixels = [(i, 255 - i, i * 2, 128) for i in range(6)]
    grid = PixelGrid(width=3, height=2, pixels=pixels)
    path = str(tmp_path / "nested" / "out.png")

    assert save_packed_texture(grid, path) == path
    assert os.path.isfile(path)

    with Image.open(path) as written:
        assert written.format == "PNG"
        assert written.mode == "RGBA"
        assert written.size == (3, 2)
        assert written.getpixel((0, 1)) == (3, 252, 6, 128)


def test_load_pixel_grid_scales_16bit_grayscale(tmp_path):
    path = str(tmp_path / "height16.png")
    Image.fromarray(np.full((2, 2), 32768, dtype=np.uint16)).save(path)

    grid = load_pixel_grid(path)

    assert grid.readable
    assert grid.size == (2, 2)
    assert all(grid[i] == Pixel(128, 128, 128, 255) for i in range(len(grid)))
