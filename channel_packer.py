""" Packs four source textures into a single RGBA texture, reading one chosen channel from each source. """

from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from backend.io_backend import (load_pixel_grid, resolve_output_path, save_packed_texture)

from backend.texture_classes import (Channel, ChannelSource, InvalidSelectorError, PackRequest, PackValidationError,
                                     Pixel, PixelGrid, ValidatedRequest, ValidationErrorKind)

from settings import (CHANNEL_SOURCES, DEFAULT_FILE_NAME, FILE_TYPE, SAVE_DIALOG_TITLE, SHOW_DETAILS, WINDOW_TITLE)

from utils import (format_resolution, log)


PromptOutputPath = Callable[..., Optional[str]] # Called as prompt(title=, default_name=, extension=); returns the chosen path or None/"" when cancelled.
Notify = Callable[[str, str], None] # Called as notify(title, message) for each failed validation.


VALIDATION_MESSAGES: Dict[ValidationErrorKind, str] = {
    ValidationErrorKind.MISSING_SOURCE: "All texture channels need to be set.",
    ValidationErrorKind.NOT_READABLE: "One or more of the textures are not marked as readable. "
                                      "Please make sure all textures are marked as readable in the import settings.",
    ValidationErrorKind.DIMENSION_MISMATCH: "The size of the textures are not equal",
    ValidationErrorKind.LENGTH_MISMATCH: "The size of the textures are not equal",
}
# One message per failure kind, shown by the front end.




#                                       === Validation ===

def validate(request: PackRequest) -> ValidatedRequest:
# Runs the input checks in order and stops at the first failure:
# missing source > not readable > different width/height > pixel count.
# The pixel count check repeats the size check against a decoder returning a pixel count other than width*height.

    sources: Tuple[ChannelSource, ...] = request.sources()
    grids: List[Optional[PixelGrid]] = [source.grid for source in sources]

    if any(grid is None for grid in grids):
        raise PackValidationError(ValidationErrorKind.MISSING_SOURCE)

    if not all(grid.readable for grid in grids):
        raise PackValidationError(ValidationErrorKind.NOT_READABLE)

    if len({grid.width for grid in grids}) != 1 or len({grid.height for grid in grids}) != 1:
        raise PackValidationError(ValidationErrorKind.DIMENSION_MISMATCH)

    if len({len(grid) for grid in grids}) != 1 or any(len(grid) != grid.width * grid.height for grid in grids):
        raise PackValidationError(ValidationErrorKind.LENGTH_MISMATCH)

    red_grid, green_grid, blue_grid, alpha_grid = grids
    return ValidatedRequest(
        grids=(red_grid, green_grid, blue_grid, alpha_grid),
        selectors=(request.red.selector, request.green.selector, request.blue.selector, request.alpha.selector),
        width=red_grid.width,
        height=red_grid.height,
    )




#                                        === Generation ===

def _check_selector(selector: Channel) -> int:
# Returns the channel index of a selector; anything outside the Channel enum is a caller bug.
    if not isinstance(selector, Channel):
        raise InvalidSelectorError(f"Invalid channel selector: {selector!r}")
    return int(selector)


def select(pixel: Pixel, selector: Channel) -> int:
# Returns the R, G, B or A value of a single pixel according to the selector.
    return int(pixel[_check_selector(selector)])


def select_channel(grid: PixelGrid, selector: Channel) -> NDArray[np.uint8]:
# Same as select, applied to every pixel of the grid at once; returns one value per pixel.
    return grid.pixels[:, _check_selector(selector)]


def pack(validated_request: ValidatedRequest) -> PixelGrid:
# Builds the packed grid: output[i] = (select(R[i], sR), select(G[i], sG), select(B[i], sB), select(A[i], sA)).
# Each output pixel depends only on the same index of the sources, so whole columns are copied in one pass.

    output_channels: List[NDArray[np.uint8]] = [
        select_channel(grid, selector)
        for grid, selector in zip(validated_request.grids, validated_request.selectors)
    ]
    packed_pixels: NDArray[np.uint8] = np.stack(output_channels, axis=-1)

    return PixelGrid(
        width=validated_request.width,
        height=validated_request.height,
        pixels=packed_pixels,
        readable=True,
    )




#                                        === Request setup ===

def default_selectors() -> Tuple[Channel, Channel, Channel, Channel]:
# Resolves the default source channel for each output channel from the config.
# Aborts on a misspelled channel name in config.json.

    selectors: List[Channel] = []
    for output_channel in ("R", "G", "B", "A"):
        configured_name: str = CHANNEL_SOURCES[output_channel]
        try:
            selectors.append(Channel.from_name(configured_name))
        except ValueError:
            log(f"Aborted: Invalid source channel '{configured_name}' for output channel {output_channel}. Supported: R, G, B, A", "error")
            raise SystemExit(1)
    red, green, blue, alpha = selectors
    return red, green, blue, alpha


def build_pack_request(
    red: Optional[str],
    green: Optional[str],
    blue: Optional[str],
    alpha: Optional[str],
    *,
    red_source: Optional[Channel] = None,
    green_source: Optional[Channel] = None,
    blue_source: Optional[Channel] = None,
    alpha_source: Optional[Channel] = None,
) -> PackRequest:
# Decodes the four texture files into a pack request. An empty slot (None or "") becomes a missing source.
# Unset selectors fall back to the configured defaults (R reads R, G reads G...).

    default_red, default_green, default_blue, default_alpha = default_selectors()

    def _source(file_path: Optional[str], selector: Optional[Channel], default: Channel) -> ChannelSource:
        grid: Optional[PixelGrid] = load_pixel_grid(file_path) if file_path else None
        return ChannelSource(grid=grid, selector=selector if selector is not None else default)

    return PackRequest(
        red=_source(red, red_source, default_red),
        green=_source(green, green_source, default_green),
        blue=_source(blue, blue_source, default_blue),
        alpha=_source(alpha, alpha_source, default_alpha),
    )




#                                           === Pipeline ===

def _log_notify(title: str, message: str) -> None:
    log(f"{title}: {message}", "error")


def create_packed_texture(
    request: PackRequest,
    prompt_output_path: PromptOutputPath,
    *,
    on_saved: Optional[Callable[[str], None]] = None,
    notify: Optional[Notify] = None,
) -> Optional[str]:
# Handles the "Create" action: validates, packs, asks for the output path and writes the PNG.
# Returns the written path, or None when validation failed or the save prompt was cancelled.

    notify = notify or _log_notify

    try:
        validated_request: ValidatedRequest = validate(request)
    except PackValidationError as error:
        notify(WINDOW_TITLE, VALIDATION_MESSAGES[error.kind])
        return None
    # Invalid input is reported to the user, who can fix the inputs and press Create again.

    packed_grid: PixelGrid = pack(validated_request)

    chosen_path: Optional[str] = prompt_output_path(title=SAVE_DIALOG_TITLE, default_name=DEFAULT_FILE_NAME, extension=FILE_TYPE)
    output_path: Optional[str] = resolve_output_path(chosen_path)
    if output_path is None:
        log("Save cancelled, no texture written.", "info")
        return None

    save_packed_texture(packed_grid, output_path)

    if on_saved is not None:
        on_saved(output_path)
    # Lets the host refresh its asset view.

    if SHOW_DETAILS:
        log(f"Created: {output_path} ({format_resolution(packed_grid.size)})", "complete")
    else:
        log(f"Created: {output_path}", "complete")
    return output_path
