""" Image processing backend. Currently implemented using Pillow (PIL) and NumPy. PIL exports 8bit images only."""



#                                           === Backend ===

from array import array
from io import BytesIO
from typing import Any, Tuple, TypeAlias

import numpy as np
from numpy.typing import NDArray

from PIL import Image as _PIL
from PIL.Image import Image as PILImage
from PIL import Image as PILImageModule

ImageObject: TypeAlias = PILImage


def close_image(image: object) -> None:
    close = getattr(image, "close", None)
    if callable(close):
        close()


def from_array_u8(data: Any, mode: str) -> ImageObject:
# Creates an image from a uint8 numpy array.
    image = PILImageModule.fromarray(np.ascontiguousarray(data, dtype=np.uint8))
    return image if image.mode == mode else image.convert(mode)
    # Mode is inferred from the array shape, (H, W, 4) gives RGBA.


def get_image_mode(image: Any) -> str:
# Return the Pillow image mode: "RGB", "RGBA", "L"
    return image.mode


def get_size(image: ImageObject) -> Tuple[int, int]:
# Returns the image size as (width, height)
    return image.size


def load_pixels(image: ImageObject) -> None:
# Forces decoding of the pixel data; Pillow opens files lazily and only reads the header on open.
    image.load()


def open_image(path: str) -> ImageObject:
    return _PIL.open(path)


def to_rgba(image: ImageObject) -> ImageObject:
# Converts any mode (L, LA, RGB, P, 16bit grayscale...) to 8bit RGBA. Missing alpha is filled with 255, grayscale is copied into R, G and B.
    mode = get_image_mode(image)
    if mode == "RGBA":
        return image
    if mode in ("I", "I;16", "I;16L", "I;16B"):
        image = _16_to_8bit(image)
    # Pillow clamps 16bit values on convert instead of scaling them, so they are scaled down first.
    return image.convert("RGBA")


def _16_to_8bit(image: ImageObject) -> ImageObject:
# Scales down 16bit range to a 8bit, so values are properly maintained instead of being clipped.

# Preparing the image:
    if image.mode == "I":
        img16 = image.convert("I;16")
    elif image.mode in ("I;16", "I;16L", "I;16B"):
        img16 = image if image.mode == "I;16" else image.convert("I;16")
    # Normalizes the image type to 16bit LE.
    else:
        return image.convert("L")

    raw = img16.tobytes("raw", "I;16")  # LE 16bit
    data16 = array("H")
    data16.frombytes(raw)

# Scaling:
    data8 = bytearray((v >> 8) & 0xFF for v in data16)
    return PILImageModule.frombytes("L", img16.size, bytes(data8))


def to_array_u8(image: ImageObject) -> NDArray[np.uint8]:
# Returns the image pixels as a flat (width*height, channels) uint8 array in row-major order.
    data = np.asarray(image, dtype=np.uint8)
    return data.reshape(-1, len(image.getbands()))


def encode_png(image: ImageObject) -> bytes:
# Encodes an image to PNG bytes in memory.
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
