from typing import NamedTuple, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum, IntEnum

import numpy as np
from numpy.typing import NDArray


class Channel(IntEnum):
    RED = 0
    GREEN = 1
    BLUE = 2
    ALPHA = 3

    @classmethod
    def from_name(cls, name: str) -> "Channel":
    # Accepts both short and full channel names, e.g., "R", "red", "Red".
        normalized_name: str = (name or "").strip().lower()
        for channel in cls:
            if normalized_name in (channel.name.lower(), channel.name[0].lower()):
                return channel
        raise ValueError(f"Unknown channel '{name}'. Supported: R, G, B, A")


class Pixel(NamedTuple):
    r: int
    g: int
    b: int
    a: int


@dataclass(frozen=True, eq=False)
class PixelGrid:
    width: int # Image width read from the source.
    height: int # Image height read from the source.
    pixels: NDArray[np.uint8] = field(repr=False) # Ordered RGBA pixels, shape (length, 4); length is not forced to match width*height.
    readable: bool = True # Set by the decoder; False when the header was parsed but the pixel data could not be read.

    def __post_init__(self) -> None:
        pixels = np.array(self.pixels, dtype=np.uint8).reshape(-1, 4)
        pixels.flags.writeable = False
        object.__setattr__(self, "pixels", pixels)
        # Stores a private read-only copy, so neither the caller nor packing can mutate a source grid.

    def __len__(self) -> int:
        return int(self.pixels.shape[0])

    def __getitem__(self, index: int) -> Pixel:
        r, g, b, a = (int(value) for value in self.pixels[index])
        return Pixel(r, g, b, a)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height


@dataclass(frozen=True)
class ChannelSource:
    grid: Optional[PixelGrid] # Texture to read from; None when the slot was left empty.
    selector: Channel # Channel of the source pixels that ends up in the output channel.


@dataclass(frozen=True)
class PackRequest:
    red: ChannelSource
    green: ChannelSource
    blue: ChannelSource
    alpha: ChannelSource

    def sources(self) -> Tuple[ChannelSource, ChannelSource, ChannelSource, ChannelSource]:
        return self.red, self.green, self.blue, self.alpha


@dataclass(frozen=True)
class ValidatedRequest:
    grids: Tuple[PixelGrid, PixelGrid, PixelGrid, PixelGrid] # Source grids in output channel order (R, G, B, A).
    selectors: Tuple[Channel, Channel, Channel, Channel] # Source channel read for each output channel.
    width: int # Shared width of all sources.
    height: int # Shared height of all sources.


class ValidationErrorKind(Enum):
    MISSING_SOURCE = "missing_source"
    NOT_READABLE = "not_readable"
    DIMENSION_MISMATCH = "dimension_mismatch"
    LENGTH_MISMATCH = "length_mismatch"


class PackValidationError(Exception):
    """Raised when a pack request fails one of the input checks."""

    def __init__(self, kind: ValidationErrorKind, message: str = "") -> None:
        super().__init__(message or kind.value)
        self.kind = kind


class InvalidSelectorError(ValueError):
    """Raised when a channel selector is not one of the Channel members."""
