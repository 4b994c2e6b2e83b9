""" Texture Packer settings. """

import json
import os
from typing import Any, Dict


def _as_bool(v) -> bool:
# Converts .json input (bool/int/str/None) to a real bool;
# Avoids the case where a non-empty string like "False" is treated as True.

    if isinstance(v, bool): return v
    if isinstance(v, str):
        input_str = v.strip().lower()
        if input_str == "": return False
        return input_str in ("1","true","yes","on")
    return bool(v)



#                                           === Loading JSON file ===

def _load_config(config_path: str) -> Dict[str, Any]:
# Reads config.json; an install without the file (e.g., a wheel, which ships modules only) runs on the defaults below.

    if not os.path.isfile(config_path):
        return {}
    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


_config_path = os.path.join(os.path.dirname(__file__), "config.json")
_config_data: Dict[str, Any] = _load_config(_config_path)


# Assigning config values:
DEFAULT_FILE_NAME: str = (_config_data.get("DEFAULT_FILE_NAME", "") or "New Texture.png").strip() # File name suggested by the save prompt.
CHANNEL_SOURCES: Dict[str, str] = {
    "R": str(_config_data.get("RED_CHANNEL_SOURCE", "R")),
    "G": str(_config_data.get("GREEN_CHANNEL_SOURCE", "G")),
    "B": str(_config_data.get("BLUE_CHANNEL_SOURCE", "B")),
    "A": str(_config_data.get("ALPHA_CHANNEL_SOURCE", "A")),
} # Default source channel read from each input texture, keyed by the output channel.

SHOW_DETAILS: bool = _as_bool(_config_data.get("SHOW_DETAILS", False)) # Shows details like exact resolution when printing logs.




#                                           === Constants ===

WINDOW_TITLE: str = "Texture Packer"
SAVE_DIALOG_TITLE: str = "Save Texture"
FILE_TYPE: str = "png" # The only supported output format.
