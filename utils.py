""" Texture Packer utilities: logging and small helpers shared by the packer and the IO backend. """

import os
from typing import Iterable, Optional, Set, Tuple

from backend.image_lib import close_image


LOG_TYPES: list[str] = ["info", "warn", "error", "skip", "complete"]
# Defines log types; the front end decides where the console output ends up.

def log(message: str, message_kind: LOG_TYPES = "info") -> None:
# Maps different log types.

    if message == "":
        print("")
        return

    if message_kind not in LOG_TYPES:
        message_kind = "info"

    if message_kind == "info":
        print(f"   {message}")
    elif message_kind == "warn":
        print(f"⚠️ {message}")
    elif message_kind == "error":
        print(f"⛔ {message}")
    elif message_kind == "skip":
        print(f"❌ {message}")
    elif message_kind == "complete":
        print(f"✅ {message}")

    # Print styles:
    # info: 3 whitespaces + message
    # warn: ⚠️ + message
    # error: ⛔ + message
    # skip: ❌ + message
    # complete: ✅ + message


def close_image_files(images: Iterable[Optional[object]]) -> None:
# Safely closes all opened images even if there is an error during image processing.

    processed_ids: Set[int] = set()
    for image in images:
        if image is None:
            continue
        image_id = id(image)
        if image_id in processed_ids:
            continue
        processed_ids.add(image_id)
        try:
            close_image(image) # Function from image_lib
        except (OSError, ValueError):
            pass


def ensure_extension(file_path: str, file_extension: str) -> str:
# Appends the extension (without the dot) unless the path already ends with it; case-insensitive.

    extension: str = f".{file_extension.lstrip('.').lower()}"
    _, current_extension = os.path.splitext(file_path)
    if current_extension.lower() == extension:
        return file_path
    return f"{file_path}{extension}"


def format_resolution(size: Tuple[int, int]) -> str:
# Formats (width, height) for logs, e.g., "2048x2048".
    width, height = size
    return f"{width}x{height}"
