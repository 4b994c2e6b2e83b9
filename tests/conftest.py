from typing import Callable, Optional

import pytest

from backend.texture_classes import Channel, ChannelSource, PackRequest, PixelGrid


def make_grid(width: int, height: int, seed: int = 0, readable: bool = True) -> PixelGrid:
# Grid whose every channel value is distinct per pixel and per seed, so a wrong channel shows up in asserts.
    pixels = [
        ((seed * 40 + i * 4 + 0) % 256, (seed * 40 + i * 4 + 1) % 256, (seed * 40 + i * 4 + 2) % 256, (seed * 40 + i * 4 + 3) % 256)
        for i in range(width * height)
    ]
    return PixelGrid(width=width, height=height, pixels=pixels, readable=readable)


def make_request(
    red: Optional[PixelGrid],
    green: Optional[PixelGrid],
    blue: Optional[PixelGrid],
    alpha: Optional[PixelGrid],
    selectors=(Channel.RED, Channel.GREEN, Channel.BLUE, Channel.ALPHA),
) -> PackRequest:
    red_selector, green_selector, blue_selector, alpha_selector = selectors
    return PackRequest(
        red=ChannelSource(red, red_selector),
        green=ChannelSource(green, green_selector),
        blue=ChannelSource(blue, blue_selector),
        alpha=ChannelSource(alpha, alpha_selector),
    )


@pytest.fixture
def grids_2x2():
    return [make_grid(2, 2, seed) for seed in range(4)]


@pytest.fixture
def grid_factory() -> Callable[..., PixelGrid]:
    return make_grid


@pytest.fixture
def request_factory() -> Callable[..., PackRequest]:
    return make_request
