""" Input/output backend: decodes source textures into pixel grids and writes the packed texture, so the main channel_packer logic stays file-agnostic. """

import os
from typing import Optional

from backend.image_lib import (ImageObject, encode_png, from_array_u8, get_size, load_pixels, open_image, to_array_u8, to_rgba)
from backend.texture_classes import PixelGrid

from settings import FILE_TYPE
from utils import (close_image_files, ensure_extension, log)




#                                     === Channel Packer core interface ===


def load_pixel_grid(file_path: str) -> PixelGrid:
# Decodes an image file into an RGBA pixel grid.
# The header is read on open; if the pixel data itself cannot be decoded (e.g., a truncated file), returns an unreadable grid of the header size.
# Missing or unrecognized files raise OSError from Pillow.

    image: Optional[ImageObject] = None
    rgba_image: Optional[ImageObject] = None
    try:
        image = open_image(file_path)
        width, height = get_size(image)
        try:
            load_pixels(image)
        except OSError as error:
            log(f"Cannot read pixel data of '{file_path}': {error}", "warn")
            return PixelGrid(width=width, height=height, pixels=[], readable=False)

        rgba_image = to_rgba(image)
        return PixelGrid(width=width, height=height, pixels=to_array_u8(rgba_image), readable=True)

    finally:
        close_image_files([image, rgba_image])


def grid_to_image(grid: PixelGrid) -> ImageObject:
# Builds an RGBA image from a pixel grid; rows are laid out in the same order they were decoded.
    return from_array_u8(grid.pixels.reshape(grid.height, grid.width, 4), "RGBA")


def resolve_output_path(file_path: Optional[str]) -> Optional[str]:
# Returns None when the save prompt was cancelled (None or a blank path), otherwise an absolute path with the .png extension.

    if file_path is None or not str(file_path).strip():
        return None
    output_path: str = ensure_extension(str(file_path).strip(), FILE_TYPE)
    return os.path.abspath(output_path)


def save_packed_texture(grid: PixelGrid, file_path: str) -> str:
# Encodes the packed grid as PNG and writes the bytes to file_path, creating missing folders.

    output_directory: str = os.path.dirname(os.path.abspath(file_path))
    os.makedirs(output_directory, exist_ok=True)

    image: Optional[ImageObject] = None
    try:
        image = grid_to_image(grid)
        png_bytes: bytes = encode_png(image)
    finally:
        close_image_files([image])

    with open(file_path, "wb") as f:
        f.write(png_bytes)
    return file_path
